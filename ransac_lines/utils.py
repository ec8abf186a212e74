"""
Utility functions for RANSAC line extraction.
"""

import numpy as np
from typing import List, Optional

from .buffer import PointBuffer


def format_points(points: np.ndarray) -> List[str]:
    """
    Render points as one text row each.

    Args:
        points: Structured array with x, y and angle fields

    Returns:
        List of formatted rows
    """
    return [
        f'Point [x: {p["x"]:7.2f} y: {p["y"]:7.2f} theta: {p["angle"]:7.2f}]'
        for p in points
    ]


def format_buffer(buffer: PointBuffer, end: Optional[int] = None) -> str:
    """
    Render the active region and the consumed region up to end.

    Args:
        buffer: Buffer to dump
        end: Exclusive end of the consumed rows to include, defaults to capacity

    Returns:
        Multi-line string suitable for a debug log
    """
    if end is None:
        end = buffer.capacity
    lines = ['---[Active points]---']
    lines.extend(format_points(buffer.points[:buffer.size]))
    lines.append('---[Consumed points]---')
    lines.extend(format_points(buffer.points[buffer.size:end]))
    return '\n'.join(lines)
