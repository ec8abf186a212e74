"""
Core multi-line RANSAC implementation.

This module provides Fitter, which extracts several lines from an
angle-ordered set of 2D points. Each trial:
- samples a random reference point and its angular neighbours
- fits a least-squares line to that seed group
- associates every remaining point close to the line
- commits the line (refit on all associated points) when enough points
  support it, or rolls the buffer back otherwise
"""

import logging
import numpy as np
from typing import List, Optional

from .buffer import PointBuffer
from .config import ConfigurationError, FitterConfig
from .geometry import Line, POINT_DTYPE, dst2_to_line
from .regression import FitFailure, LineEstimate, WORKING_DTYPE, fit_line
from .utils import format_buffer


class Fitter:
    """
    Sequential RANSAC for detecting multiple lines in a laser scan.

    Points consumed by an accepted line are never offered to later trials,
    so every point supports at most one line.
    """

    def __init__(
        self,
        capacity: int,
        max_trials: int,
        sample_size: int,
        sample_deviation: float,
        proximity_epsilon: float,
        line_consensus: int,
        rng: Optional[np.random.Generator] = None,
        random_seed: Optional[int] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize fitter.

        Args:
            capacity: Maximum number of points passed to compute()
            max_trials: Number of trials per compute()
            sample_size: Neighbour candidates examined around each reference
            sample_deviation: Max angle difference for a neighbour to be sampled
            proximity_epsilon: Max distance for a point to join a candidate line
            line_consensus: Minimum points consumed for a line to be accepted
            rng: Random generator for reference selection
            random_seed: Seed for a new generator, used when rng is not given
            logger: Logger for trial diagnostics, defaults to this module's logger

        Raises:
            ConfigurationError: if a parameter is out of range
        """
        config = FitterConfig(
            capacity=capacity,
            max_trials=max_trials,
            sample_size=sample_size,
            sample_deviation=sample_deviation,
            proximity_epsilon=proximity_epsilon,
            line_consensus=line_consensus
        ).validate()

        self.config = config
        self.capacity = config.capacity
        self.max_trials = config.max_trials
        self.sample_size = config.sample_size
        self.sample_deviation = config.sample_deviation
        self.proximity_epsilon = config.proximity_epsilon
        self.line_consensus = config.line_consensus

        self.rng = rng if rng is not None else np.random.default_rng(random_seed)
        self.logger = logger if logger is not None else logging.getLogger(__name__)

        self.buffer = PointBuffer(self.capacity)
        self.lines: List[Line] = []
        self.size = 0
        self.trial_count = 0

    @classmethod
    def from_config(
        cls,
        config: FitterConfig,
        rng: Optional[np.random.Generator] = None,
        random_seed: Optional[int] = None,
        logger: Optional[logging.Logger] = None
    ) -> 'Fitter':
        """Build a fitter from a FitterConfig."""
        return cls(
            capacity=config.capacity,
            max_trials=config.max_trials,
            sample_size=config.sample_size,
            sample_deviation=config.sample_deviation,
            proximity_epsilon=config.proximity_epsilon,
            line_consensus=config.line_consensus,
            rng=rng,
            random_seed=random_seed,
            logger=logger
        )

    def compute(self, points: np.ndarray, size: Optional[int] = None):
        """
        Extract lines from points.

        Points must be sorted by ascending angle. The array is reordered in
        place: points supporting accepted lines end up at its tail, the
        first accepted line's points last. Results are read from self.lines.

        Args:
            points: Structured array with POINT_DTYPE
            size: Number of leading points to use, defaults to len(points)

        Raises:
            ConfigurationError: if size exceeds the fitter capacity or the array
        """
        if points.dtype != POINT_DTYPE:
            raise ConfigurationError(
                f'points must have dtype {POINT_DTYPE}, got {points.dtype}'
            )
        if size is None:
            size = len(points)
        if not 0 <= size <= len(points):
            raise ConfigurationError(f'size {size} outside [0, {len(points)}]')
        if size > self.capacity:
            raise ConfigurationError(
                f'{size} points exceed fitter capacity {self.capacity}'
            )

        self.lines = []
        self.trial_count = 0

        buffer = self.buffer
        buffer.load(points, size)
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug('Input points:\n%s', format_buffer(buffer, size))

        self.logger.debug('Starting %d trials on %d points', self.max_trials, size)
        while buffer.size > 0 and self.trial_count < self.max_trials:
            estimate = self._run_trial(buffer, size)
            if not estimate.ok:
                self.logger.debug('Trial %d failed: %s', self.trial_count, estimate.failure.value)
            self.trial_count += 1

        points[:size] = buffer.points[:size]
        self.size = buffer.size
        self.logger.debug(
            'Finished %d trials: %d lines, %d points left unassigned',
            self.trial_count, len(self.lines), self.size
        )

    def _run_trial(self, buffer: PointBuffer, input_size: int) -> LineEstimate:
        """
        Run one sample, estimate, associate, confirm cycle.

        Args:
            buffer: Scratch buffer holding the points of the current compute()
            input_size: Number of points compute() received

        Returns:
            Estimate of the committed line, or the failure that rolled it back
        """
        trial_size = buffer.size

        self._sample(buffer)

        seed_count = trial_size - buffer.size
        if seed_count >= 2:
            estimate = fit_line(buffer.points, buffer.size, trial_size)
        else:
            estimate = LineEstimate.failed(FitFailure.INSUFFICIENT_POINTS)

        if estimate.ok:
            self._associate(buffer, estimate.line)

        support = trial_size - buffer.size
        self.logger.debug('%d points associated with the raw line', support)
        if estimate.ok:
            if support >= self.line_consensus:
                estimate = fit_line(buffer.points, buffer.size, trial_size)
            else:
                estimate = LineEstimate.failed(FitFailure.CONSENSUS_NOT_MET)

        if estimate.ok:
            line = estimate.line
            line.support = support
            self.lines.append(line)
            self.logger.info(
                'Line accepted: slope=%.3f, intercept=%.3f, support=%d',
                line.slope, line.intercept, support
            )
            if self.logger.isEnabledFor(logging.DEBUG):
                self.logger.debug('Buffer after commit:\n%s', format_buffer(buffer, input_size))
        else:
            buffer.restore(trial_size)

        return estimate

    def _sample(self, buffer: PointBuffer):
        """
        Move a reference point and its accepted neighbours out of the active region.

        Neighbours are tried alternately on the left and on the right of the
        reference, wrapping around the active region, and are taken when their
        angle is within sample_deviation of the reference angle.
        """
        angles = buffer.points['angle']
        ref_index = int(self.rng.integers(buffer.size))
        ref_angle = angles[ref_index]
        self.logger.debug('Reference index %d (angle %.3f)', ref_index, ref_angle)

        for i in range(self.sample_size):
            if i % 2 == 0:
                pick = (ref_index - 1 + buffer.size) % buffer.size
            else:
                pick = (ref_index + 1) % buffer.size

            if pick != ref_index and abs(angles[pick] - ref_angle) <= self.sample_deviation:
                buffer.remove(pick)
                if pick < ref_index:
                    ref_index -= 1

        buffer.remove(ref_index)

    def _associate(self, buffer: PointBuffer, line: Line):
        """
        Move every active point within proximity_epsilon of line out of the active region.

        Distances and the squared threshold are both evaluated at working
        precision, so a point right on the boundary is classified the same
        way as by a float32 implementation.
        """
        active = buffer.active
        dst2 = dst2_to_line(line, active['x'], active['y'], dtype=WORKING_DTYPE)
        epsilon = WORKING_DTYPE(self.proximity_epsilon)
        close = np.flatnonzero(dst2 <= epsilon * epsilon)
        # Highest index first so lower indices stay valid
        for index in close[::-1]:
            buffer.remove(int(index))
