"""
Geometric primitives for 2D line extraction.

This module provides:
- POINT_DTYPE: numpy record layout of a scan point (x, y, angle)
- Point: scalar, immutable view of one record
- Line: infinite line y = slope * x + intercept
- dst2_to_line: squared distance measure used for inlier association
"""

import numpy as np
from dataclasses import dataclass, field
from typing import Iterable, Tuple


# Working precision of scan points
POINT_DTYPE = np.dtype([
    ('x', np.float32),
    ('y', np.float32),
    ('angle', np.float32),
])


@dataclass(frozen=True)
class Point:
    """A Cartesian scan point together with the angle it was measured at."""
    x: float
    y: float
    angle: float

    @classmethod
    def from_record(cls, record) -> 'Point':
        return cls(float(record['x']), float(record['y']), float(record['angle']))


@dataclass
class Line:
    """
    Infinite 2D line in slope-intercept form.

    Vertical lines cannot be represented; the regression reports them
    as degenerate fits instead.
    """
    slope: float
    intercept: float
    support: int = field(default=0, compare=False)  # Points consumed to commit the line

    def get_y(self, x: float) -> float:
        return self.slope * x + self.intercept

    def get_x(self, y: float) -> float:
        """
        Solve for x at the given y.

        A horizontal line has no unique answer; 0.0 is returned in that case.
        """
        if self.slope == 0:
            return 0.0
        return (y - self.intercept) / self.slope


def make_points(coords: Iterable[Tuple[float, float, float]]) -> np.ndarray:
    """
    Build a point array from (x, y, angle) triples.

    Args:
        coords: Iterable of (x, y, angle) tuples

    Returns:
        Structured array with POINT_DTYPE
    """
    return np.array([tuple(c) for c in coords], dtype=POINT_DTYPE)


def dst2_to_line(line: Line, x, y, dtype=None):
    """
    Squared distance measure from point(s) to a line.

    Computes |-m*x + y - b|^2 / (m^2 + 1). Works on scalars and on numpy
    arrays of coordinates. When dtype is given, every term is evaluated in
    that precision.
    """
    m, b = line.slope, line.intercept
    one = 1
    if dtype is not None:
        m, b, one = dtype(m), dtype(b), dtype(1)
        x = np.asarray(x, dtype=dtype)
        y = np.asarray(y, dtype=dtype)
    numerator = np.abs(-m * x + y - b)
    return (numerator * numerator) / (m * m + one)
