"""
Least-squares line estimation over a span of points.
"""

import enum
import numpy as np
from dataclasses import dataclass
from typing import Optional

from .geometry import Line, POINT_DTYPE


# Precision lines are narrowed to once the sums are computed
WORKING_DTYPE = POINT_DTYPE['x'].type


class FitFailure(enum.Enum):
    """Reasons a trial can fail."""
    INSUFFICIENT_POINTS = 'insufficient_points'  # Fewer than 2 points in the span
    DEGENERATE_FIT = 'degenerate_fit'  # Zero denominator or non-finite result
    CONSENSUS_NOT_MET = 'consensus_not_met'  # Fit succeeded, too few supporters


@dataclass
class LineEstimate:
    """Outcome of a regression: either a line or the reason there is none."""
    line: Optional[Line] = None
    failure: Optional[FitFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def failed(cls, failure: FitFailure) -> 'LineEstimate':
        return cls(line=None, failure=failure)


def fit_line(points: np.ndarray, start: int = 0, end: Optional[int] = None) -> LineEstimate:
    """
    Fit y = m*x + b to points[start:end] by ordinary least squares.

    Sums are accumulated in float64 regardless of the point precision and
    the resulting slope and intercept are narrowed afterwards.

    Args:
        points: Structured array with x and y fields
        start: First index of the span (inclusive)
        end: Last index of the span (exclusive), defaults to len(points)

    Returns:
        LineEstimate holding the line, or INSUFFICIENT_POINTS for a span
        shorter than 2 points and DEGENERATE_FIT when the system has no unique solution
    """
    if end is None:
        end = len(points)
    n = end - start
    if n < 2:
        return LineEstimate.failed(FitFailure.INSUFFICIENT_POINTS)

    span = points[start:end]
    x = span['x'].astype(np.float64)
    y = span['y'].astype(np.float64)

    x_sum = x.sum()
    y_sum = y.sum()
    x2_sum = np.dot(x, x)
    xy_sum = np.dot(x, y)

    denom = n * x2_sum - x_sum * x_sum
    if denom == 0.0:
        return LineEstimate.failed(FitFailure.DEGENERATE_FIT)

    with np.errstate(over='ignore', invalid='ignore'):
        m = (n * xy_sum - x_sum * y_sum) / denom
        b = (y_sum * x2_sum - x_sum * xy_sum) / denom
        m = WORKING_DTYPE(m)
        b = WORKING_DTYPE(b)
    if not (np.isfinite(m) and np.isfinite(b)):
        return LineEstimate.failed(FitFailure.DEGENERATE_FIT)

    return LineEstimate(line=Line(slope=float(m), intercept=float(b)))
