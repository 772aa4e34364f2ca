# src/one_euro/config.py
"""
Configuration defaults and the parameter dataclass for the One Euro filter.
"""

from __future__ import annotations

import dataclasses
import logging
import math
from dataclasses import dataclass

from one_euro.errors import InvalidParameterError

logger = logging.getLogger(__name__)

# =============================================================================
# DEFAULT PARAMETERS
# =============================================================================

DEFAULT_RATE = 1.0  # Hz
DEFAULT_MINCUTOFF = 1.0  # Hz
DEFAULT_BETA = 0.0  # no derivative driven adaptation
DEFAULT_DCUTOFF = 1.0  # Hz


def check_positive(value: float, name: str) -> float:
    """Return ``value`` as a float, raising if it is not strictly positive."""
    value = float(value)
    if not value > 0.0:
        raise InvalidParameterError(f"{name} should be greater than zero, got {value}")
    return value


def check_non_negative(value: float, name: str) -> float:
    """Return ``value`` as a float, raising if it is negative or NaN."""
    value = float(value)
    if not value >= 0.0:
        raise InvalidParameterError(f"{name} should be zero or positive, got {value}")
    return value


@dataclass
class FilterConfig:
    """Tunable parameters of a One Euro filter.

    Attributes:
        rate: Sampling frequency in Hz, the reciprocal of the sample spacing.
        mincutoff: Minimum cutoff frequency, reached when the signal is at rest.
        beta: Cutoff slope, how fast the cutoff grows with the signal speed.
        dcutoff: Cutoff frequency of the derivative low-pass stage.
    """

    rate: float = DEFAULT_RATE
    mincutoff: float = DEFAULT_MINCUTOFF
    beta: float = DEFAULT_BETA
    dcutoff: float = DEFAULT_DCUTOFF

    def validate(self) -> None:
        """Validate all parameters together, coercing them to floats."""
        self.rate = check_positive(self.rate, "rate")
        self.mincutoff = check_positive(self.mincutoff, "mincutoff")
        self.beta = check_non_negative(self.beta, "beta")
        self.dcutoff = check_positive(self.dcutoff, "dcutoff")
        if math.isinf(self.rate):
            raise InvalidParameterError("rate should be finite")

    def replace(self, **changes: float) -> FilterConfig:
        """Return a validated copy with ``changes`` applied."""
        new = dataclasses.replace(self, **changes)
        new.validate()
        logger.debug(f"Derived filter config {new} from {self}")
        return new
