"""Single-stream smoother driven by timestamps instead of rates."""

from __future__ import annotations

import logging
import math

import numpy as np

from one_euro.config import FilterConfig
from one_euro.errors import InvalidParameterError
from one_euro.filter import OneEuroFilter
from one_euro.state import OneEuroState

LOGGER = logging.getLogger(__name__)


class OneEuroSmoother:
    """
    One Euro filter bundled with the state of a single stream.

    The first sample seeds the state and is returned unchanged. Later samples
    are filtered at ``1 / (timestamp - previous_timestamp)`` when both samples
    carry timestamps, or at the filter's configured rate otherwise.

    Usage:
        smoother = OneEuroSmoother(FilterConfig(rate=60.0, beta=0.007))
        for t, xy in samples:
            xy_smooth = smoother(xy, t)
    """

    def __init__(self, config: FilterConfig | OneEuroFilter | None = None):
        if isinstance(config, OneEuroFilter):
            self._filter = config
        else:
            self._filter = OneEuroFilter.from_config(config or FilterConfig())
        self._state: OneEuroState | None = None
        self._timestamp: float | None = None

    @property
    def filter(self) -> OneEuroFilter:
        return self._filter

    @property
    def state(self) -> OneEuroState | None:
        """State of the stream, ``None`` until the first sample."""
        return self._state

    def reset(self) -> None:
        """Forget the stream; the next sample seeds a fresh state."""
        LOGGER.debug("Resetting smoother state")
        self._state = None
        self._timestamp = None

    def _rate_for(self, timestamp: float | None) -> float | None:
        if timestamp is None or self._timestamp is None:
            return None
        elapsed = timestamp - self._timestamp
        if not elapsed > 0.0:
            raise InvalidParameterError(
                f"timestamps should be strictly increasing, got {timestamp} after {self._timestamp}"
            )
        return 1.0 / elapsed

    def smooth(
        self, sample: np.ndarray | list[float] | float, timestamp: float | None = None
    ) -> np.ndarray:
        """
        Filter one sample.

        Args:
            sample: New unfiltered sample.
            timestamp: Time of the sample in seconds.

        Returns:
            The filtered sample.

        Raises:
            InvalidParameterError: If ``timestamp`` does not increase, or the
                sample does not match the stream's dimension.
        """
        if timestamp is not None:
            timestamp = float(timestamp)
            if not math.isfinite(timestamp):
                raise InvalidParameterError(f"timestamp should be finite, got {timestamp}")

        if self._state is None:
            self._state = self._filter.new_state(sample)
            self._timestamp = timestamp
            return self._state.data.copy()

        filtered = self._filter.filter(self._state, sample, self._rate_for(timestamp))
        # an untimestamped sample breaks the timestamp chain
        self._timestamp = timestamp
        return filtered

    __call__ = smooth
