"""
Fixed-capacity point buffer split into an active and a consumed region.

Indices [0, size) hold active points, still available for sampling and
association. Indices [size, capacity) hold consumed points, either assigned
to an accepted line or displaced by the trial in progress.
"""

import numpy as np
from typing import Optional

from .geometry import POINT_DTYPE, Point


class PointBuffer:
    """
    Owned array of points with a live size cursor.

    Points are only ever moved, never copied or dropped, so the multiset of
    records in [0, capacity) is invariant under remove() and restore().
    """

    def __init__(self, capacity: int, points: Optional[np.ndarray] = None):
        """
        Initialize buffer.

        Args:
            capacity: Number of records the buffer owns
            points: Optional initial contents; becomes the active region
        """
        if capacity < 0:
            raise ValueError(f'capacity must be non-negative, got {capacity}')
        self.capacity = capacity
        self.points = np.zeros(capacity, dtype=POINT_DTYPE)
        self.size = 0
        if points is not None:
            self.load(points)

    def load(self, points: np.ndarray, size: Optional[int] = None):
        """Copy points into the front of the buffer and make them active."""
        if size is None:
            size = len(points)
        if size > self.capacity:
            raise ValueError(
                f'{size} points do not fit in a buffer of capacity {self.capacity}'
            )
        self.points[:size] = points[:size]
        self.size = size

    @property
    def active(self) -> np.ndarray:
        """View of the active region."""
        return self.points[:self.size]

    @property
    def consumed(self) -> np.ndarray:
        """View of the consumed region."""
        return self.points[self.size:]

    def __len__(self) -> int:
        return self.size

    def __getitem__(self, index: int) -> Point:
        return Point.from_record(self.points[index])

    def remove(self, index: int):
        """
        Move the point at index to the tail of the active region and hide it.

        The points in (index, size) shift one slot left, so the relative
        order of the remaining active points is kept. The consumed region is
        only ever extended at its front.
        """
        if not 0 <= index < self.size:
            raise IndexError(f'index {index} outside active region [0, {self.size})')
        span = self.points[index:self.size]
        span[:] = np.roll(span, -1)
        self.size -= 1

    def restore(self, original_size: int):
        """
        Bring the points displaced since a trial began back into the active region.

        Runs a maximum-selection pass over [0, original_size): for each tail
        position from the back, the largest angle in the unprocessed prefix
        (the first one seen, on ties) is swapped into it. The pass places
        maxima at the tail, so the range ends up ordered by ascending angle,
        and equal angles may trade places. Historically this step has been
        described as a descending re-sort; the exact procedure is kept as is.
        """
        if not self.size <= original_size <= self.capacity:
            raise IndexError(
                f'cannot restore to size {original_size} '
                f'(size {self.size}, capacity {self.capacity})'
            )
        angles = self.points['angle']
        for i in range(original_size - 1, 0, -1):
            select = int(np.argmax(angles[:i + 1]))
            self.points[[i, select]] = self.points[[select, i]]
        self.size = original_size
