"""
RANSAC Lines - multi-line extraction from 2D laser scans.

This package provides a sequential RANSAC fitter that extracts several
lines (slope, intercept) from an angle-ordered set of scan points, along
with helpers to turn raw range readings into such points.
"""

import logging

__version__ = '1.0.0'

from .config import ConfigurationError, FitterConfig
from .geometry import POINT_DTYPE, Point, Line, make_points
from .buffer import PointBuffer
from .regression import FitFailure, LineEstimate, fit_line
from .ransac_core import Fitter
from .laser_scan_handler import LaserScanHandler

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'ConfigurationError',
    'FitterConfig',
    'POINT_DTYPE',
    'Point',
    'Line',
    'make_points',
    'PointBuffer',
    'FitFailure',
    'LineEstimate',
    'fit_line',
    'Fitter',
    'LaserScanHandler',
]
