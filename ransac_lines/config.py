"""
Fitter configuration.

Parameters mirror the fitter constructor. Values are validated once, when
a fitter is built, so a bad configuration never surfaces mid-computation.
"""

import math
import numbers
from dataclasses import dataclass, fields, asdict
from typing import Any, Dict, Mapping


class ConfigurationError(ValueError):
    """Raised for fitter parameters that violate the fitter's contract."""


@dataclass
class FitterConfig:
    """Parameters of a multi-line RANSAC fitter."""
    capacity: int = 720  # Largest number of points a single compute() may receive
    max_trials: int = 500  # Trial budget per compute()
    sample_size: int = 10  # Neighbour candidates examined around the reference
    sample_deviation: float = 0.1  # Max angular distance (rad) of a sampled neighbour
    proximity_epsilon: float = 0.05  # Max distance of an inlier to a candidate line
    line_consensus: int = 8  # Points required to accept a line

    def validate(self) -> 'FitterConfig':
        """
        Check the parameters.

        Returns:
            self, for chaining

        Raises:
            ConfigurationError: on the first invalid parameter
        """
        for name in ('capacity', 'max_trials', 'sample_size', 'line_consensus'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ConfigurationError(f'{name} must be an integer, got {value!r}')
            setattr(self, name, int(value))

        if self.capacity < 1:
            raise ConfigurationError(f'capacity must be at least 1, got {self.capacity}')
        if self.max_trials < 0:
            raise ConfigurationError(f'max_trials must be non-negative, got {self.max_trials}')
        if self.sample_size < 0:
            raise ConfigurationError(f'sample_size must be non-negative, got {self.sample_size}')
        if self.line_consensus < 1:
            raise ConfigurationError(
                f'line_consensus must be at least 1, got {self.line_consensus}'
            )

        for name in ('sample_deviation', 'proximity_epsilon'):
            value = getattr(self, name)
            try:
                value = float(value)
            except (TypeError, ValueError):
                raise ConfigurationError(f'{name} must be a number, got {value!r}') from None
            if not math.isfinite(value) or value < 0:
                raise ConfigurationError(
                    f'{name} must be a finite non-negative number, got {value}'
                )
            setattr(self, name, value)

        return self

    @classmethod
    def from_dict(cls, params: Mapping[str, Any]) -> 'FitterConfig':
        """
        Build a validated configuration from a flat parameter mapping.

        Missing parameters take their defaults; unknown ones are rejected.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(params) - known)
        if unknown:
            raise ConfigurationError(f'Unknown fitter parameters: {", ".join(unknown)}')
        return cls(**dict(params)).validate()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
