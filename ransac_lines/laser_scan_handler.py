"""
LaserScan conversion.

This module converts raw (range, angle) readings into the angle-ordered
point arrays the fitter consumes. Any object exposing the LaserScan fields
(ranges, angle_min, angle_max, range_min, range_max) can be converted.
"""

import numpy as np
from typing import Tuple

from .geometry import POINT_DTYPE, Point


def get_cartesian(range_: float, angle: float) -> Tuple[float, float]:
    """Polar reading to Cartesian coordinates."""
    return range_ * np.cos(angle), range_ * np.sin(angle)


class LaserScanHandler:
    """
    Handler for converting laser scan readings to point arrays.
    """

    @staticmethod
    def raw_sample_to_point(range_: float, angle: float) -> Point:
        """
        Convert a single raw reading to a Point.

        Args:
            range_: Measured distance
            angle: Beam angle in radians

        Returns:
            Point at working precision
        """
        x, y = get_cartesian(range_, angle)
        return Point(
            x=float(np.float32(x)),
            y=float(np.float32(y)),
            angle=float(np.float32(angle))
        )

    @staticmethod
    def polar_to_points(
        ranges: np.ndarray,
        angles: np.ndarray,
        range_min: float = 0.0,
        range_max: float = float('inf')
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Convert polar readings to a point array sorted by ascending angle.

        Readings outside [range_min, range_max] or not finite are dropped.

        Args:
            ranges: Measured distances
            angles: Beam angles in radians, same length as ranges
            range_min: Minimum valid range
            range_max: Maximum valid range

        Returns:
            Tuple of (points, valid_indices) where valid_indices maps each
            point back to its reading
        """
        ranges = np.asarray(ranges, dtype=np.float32)
        angles = np.asarray(angles, dtype=np.float32)
        if ranges.shape != angles.shape:
            raise ValueError(
                f'ranges and angles differ in shape: {ranges.shape} vs {angles.shape}'
            )

        # Filter valid ranges
        valid_mask = (
            np.isfinite(ranges) & np.isfinite(angles)
            & (ranges >= range_min) & (ranges <= range_max)
        )
        valid_indices = np.flatnonzero(valid_mask)

        # Fitter expects ascending angle order
        order = np.argsort(angles[valid_indices], kind='stable')
        valid_indices = valid_indices[order]

        valid_ranges = ranges[valid_indices]
        valid_angles = angles[valid_indices]

        points = np.empty(len(valid_indices), dtype=POINT_DTYPE)
        points['x'] = valid_ranges * np.cos(valid_angles)
        points['y'] = valid_ranges * np.sin(valid_angles)
        points['angle'] = valid_angles

        return points, valid_indices

    @staticmethod
    def laserscan_to_points(msg) -> Tuple[np.ndarray, np.ndarray]:
        """
        Convert a LaserScan-like message to a point array.

        Args:
            msg: Object with ranges, angle_min, angle_max, range_min and range_max

        Returns:
            Tuple of (points, valid_indices)
        """
        # Generate angles for each range measurement
        num_readings = len(msg.ranges)
        angles = np.linspace(msg.angle_min, msg.angle_max, num_readings)

        return LaserScanHandler.polar_to_points(
            msg.ranges,
            angles,
            range_min=msg.range_min,
            range_max=msg.range_max
        )
