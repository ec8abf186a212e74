"""
Synthetic laser scans for exercising the line extraction pipeline.
"""

import numpy as np
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .geometry import Line


@dataclass
class SyntheticScan:
    """Minimal stand-in for a LaserScan message."""
    angle_min: float
    angle_max: float
    angle_increment: float
    range_min: float
    range_max: float
    ranges: List[float] = field(default_factory=list)
    walls: List[Tuple[float, float]] = field(default_factory=list)  # (normal angle, distance)

    def wall_lines(self) -> List[Line]:
        """Walls of the scanned room as slope-intercept lines."""
        lines = []
        for phi, d in self.walls:
            # cos(phi) x + sin(phi) y = d
            lines.append(Line(
                slope=float(-np.cos(phi) / np.sin(phi)),
                intercept=float(d / np.sin(phi))
            ))
        return lines


def room_scan(
    num_readings: int = 360,
    walls: Tuple[float, float, float, float] = (3.0, 2.0, 3.0, 4.0),
    yaw: float = 0.3,
    noise_level: float = 0.005,
    dropout_ratio: float = 0.05,
    range_min: float = 0.1,
    range_max: float = 10.0,
    rng: Optional[np.random.Generator] = None
) -> SyntheticScan:
    """
    Simulate a 360 degree scan taken inside a rectangular room.

    Args:
        num_readings: Number of beams over the full circle
        walls: Distances to the front, left, back and right walls
        yaw: Rotation of the room; non-zero keeps every wall non-vertical
        noise_level: Standard deviation of range noise
        dropout_ratio: Fraction of beams returning an invalid reading
        range_min: Minimum valid range
        range_max: Maximum valid range
        rng: Random generator, a fixed seed is used when omitted

    Returns:
        SyntheticScan with one range per beam
    """
    if rng is None:
        rng = np.random.default_rng(42)

    increment = 2 * np.pi / num_readings
    angle_min = -np.pi
    angle_max = np.pi - increment
    angles = np.linspace(angle_min, angle_max, num_readings)

    # Wall normals point away from the sensor
    wall_params = [(yaw + k * np.pi / 2, d) for k, d in enumerate(walls)]

    ranges = np.full(num_readings, np.inf)
    for phi, d in wall_params:
        cos_incidence = np.cos(angles - phi)
        facing = cos_incidence > 1e-6
        wall_ranges = np.full(num_readings, np.inf)
        wall_ranges[facing] = d / cos_incidence[facing]
        ranges = np.minimum(ranges, wall_ranges)

    # Add noise
    ranges = ranges + rng.normal(0, noise_level, num_readings)
    ranges = np.clip(ranges, range_min, range_max)

    # Add some invalid readings
    n_dropped = int(num_readings * dropout_ratio)
    dropped = rng.choice(num_readings, n_dropped, replace=False)
    ranges[dropped] = rng.uniform(0, range_min, n_dropped)

    return SyntheticScan(
        angle_min=angle_min,
        angle_max=angle_max,
        angle_increment=increment,
        range_min=range_min,
        range_max=range_max,
        ranges=ranges.tolist(),
        walls=[(float(phi), float(d)) for phi, d in wall_params]
    )
