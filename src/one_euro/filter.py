"""Parameter holder driving :class:`~one_euro.state.OneEuroState` updates."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

import numpy as np

from one_euro.alpha import get_alpha_unchecked
from one_euro.config import (
    DEFAULT_BETA,
    DEFAULT_DCUTOFF,
    DEFAULT_MINCUTOFF,
    DEFAULT_RATE,
    FilterConfig,
    check_positive,
)
from one_euro.errors import InvalidParameterError
from one_euro.state import OneEuroState

if TYPE_CHECKING:
    from collections.abc import Sequence

LOGGER = logging.getLogger(__name__)


class OneEuroFilter:
    """
    One Euro filter parameters.

    The filter owns the tunable parameters and the smoothing factor of the
    derivative stage, which only depends on ``(rate, dcutoff)`` and is
    recomputed eagerly whenever either changes. The per-stream data lives in
    :class:`OneEuroState`, so one filter can drive any number of streams.

    Usage:
        filt = OneEuroFilter(rate=60.0, mincutoff=1.0, beta=0.007)
        state = filt.new_state(first_sample)
        for sample, rate in stream:
            smoothed = filt.filter(state, sample, rate)
    """

    def __init__(
        self,
        rate: float = DEFAULT_RATE,
        mincutoff: float = DEFAULT_MINCUTOFF,
        beta: float = DEFAULT_BETA,
        dcutoff: float = DEFAULT_DCUTOFF,
        dim: int | None = None,
    ):
        """
        Initialise the filter, validating all parameters as a unit.

        Args:
            rate: Sampling frequency used when a call supplies none.
            mincutoff: Minimum cutoff frequency.
            beta: Cutoff slope.
            dcutoff: Cutoff frequency of the derivative stage.
            dim: If given, only states of this dimension are accepted.

        Raises:
            InvalidParameterError: If any parameter violates its constraint.
        """
        config = FilterConfig(rate=rate, mincutoff=mincutoff, beta=beta, dcutoff=dcutoff)
        config.validate()
        if dim is not None and int(dim) < 1:
            raise InvalidParameterError(f"dim should be at least one, got {dim}")

        self._config = config
        self._dim = None if dim is None else int(dim)
        self._derivative_alpha = get_alpha_unchecked(config.rate, config.dcutoff)

        LOGGER.debug(
            f"Initialising One Euro filter with rate={config.rate}, mincutoff={config.mincutoff}, "
            f"beta={config.beta}, dcutoff={config.dcutoff}, dim={self._dim}"
        )

    @classmethod
    def from_config(cls, config: FilterConfig, dim: int | None = None) -> OneEuroFilter:
        """Create a filter from a :class:`FilterConfig`."""
        return cls(
            rate=config.rate,
            mincutoff=config.mincutoff,
            beta=config.beta,
            dcutoff=config.dcutoff,
            dim=dim,
        )

    # ------------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------------

    @property
    def config(self) -> FilterConfig:
        """Copy of the current parameters."""
        return FilterConfig(
            rate=self.rate, mincutoff=self.mincutoff, beta=self.beta, dcutoff=self.dcutoff
        )

    @property
    def rate(self) -> float:
        """Sampling frequency."""
        return self._config.rate

    @property
    def mincutoff(self) -> float:
        """Minimum value for frequency cutoff."""
        return self._config.mincutoff

    @property
    def beta(self) -> float:
        """Slope for frequency cutoff."""
        return self._config.beta

    @property
    def dcutoff(self) -> float:
        """Derivative frequency cutoff."""
        return self._config.dcutoff

    @property
    def dim(self) -> int | None:
        return self._dim

    @property
    def derivative_alpha(self) -> float:
        """Smoothing factor of the derivative stage at the configured rate."""
        return self._derivative_alpha

    def set_rate(self, value: float) -> None:
        """Set sampling frequency."""
        self._config = self._config.replace(rate=value)
        self._derivative_alpha = get_alpha_unchecked(self.rate, self.dcutoff)
        LOGGER.debug(f"Rate set to {self.rate}, derivative alpha {self._derivative_alpha}")

    def set_mincutoff(self, value: float) -> None:
        """Set minimum value for frequency cutoff."""
        self._config = self._config.replace(mincutoff=value)

    def set_beta(self, value: float) -> None:
        """Set slope for frequency cutoff."""
        self._config = self._config.replace(beta=value)

    def set_dcutoff(self, value: float) -> None:
        """Set derivative frequency cutoff."""
        self._config = self._config.replace(dcutoff=value)
        self._derivative_alpha = get_alpha_unchecked(self.rate, self.dcutoff)
        LOGGER.debug(
            f"Derivative cutoff set to {self.dcutoff}, derivative alpha {self._derivative_alpha}"
        )

    def get_alpha(self, rate: float | None = None) -> float:
        """
        Smoothing factor of the derivative stage.

        Args:
            rate: Sampling frequency. Defaults to the configured rate, whose
                smoothing factor is cached.
        """
        if rate is None:
            return self._derivative_alpha
        rate = check_positive(rate, "rate")
        if math.isinf(rate):
            raise InvalidParameterError("rate should be finite")
        return get_alpha_unchecked(rate, self.dcutoff)

    # ------------------------------------------------------------------
    # Filtering
    # ------------------------------------------------------------------

    def new_state(self, sample: np.ndarray | list[float] | float) -> OneEuroState:
        """Create a state seeded with ``sample``, checking the bound dimension."""
        state = OneEuroState(sample)
        self._check_dim(state)
        return state

    def _check_dim(self, state: OneEuroState) -> None:
        if self._dim is not None and state.dim != self._dim:
            raise InvalidParameterError(
                f"filter is configured for dimension {self._dim}, got a state of dimension {state.dim}"
            )

    def filter(
        self,
        state: OneEuroState,
        raw: np.ndarray | list[float] | float,
        rate: float | None = None,
    ) -> np.ndarray:
        """
        Filter one sample into ``state`` using the current parameters.

        Args:
            state: Stream state, updated in place.
            raw: New unfiltered sample.
            rate: Sampling frequency of this step. Defaults to the configured
                rate; passing it does not change the configured rate.

        Returns:
            Copy of the new filtered value.
        """
        self._check_dim(state)
        alpha = self._derivative_alpha if rate is None else self.get_alpha(rate)
        if rate is None:
            rate = self.rate
        # parameters are validated on assignment, alpha above
        return state.update_unchecked(raw, alpha, rate, self.mincutoff, self.beta)

    def filter_batch(
        self,
        states: Sequence[OneEuroState],
        raws: Sequence[np.ndarray] | np.ndarray,
        rate: float | None = None,
    ) -> np.ndarray:
        """
        Filter many independent states with the same parameters.

        Every sample is checked against its state before any state is
        updated, so a bad sample leaves the whole batch untouched.

        Args:
            states: Stream states, updated in place.
            raws: One sample per state.
            rate: Sampling frequency shared by all states for this step.

        Returns:
            Array of shape (N, D) with the new filtered values.
        """
        if len(states) != len(raws):
            raise InvalidParameterError(
                f"got {len(states)} states but {len(raws)} samples"
            )
        alpha = self._derivative_alpha if rate is None else self.get_alpha(rate)
        if rate is None:
            rate = self.rate

        # samples may alias other states in the batch
        samples = []
        for state, raw in zip(states, raws):
            self._check_dim(state)
            if state.dim != states[0].dim:
                raise InvalidParameterError(
                    f"batch mixes dimensions {states[0].dim} and {state.dim}"
                )
            samples.append(np.array(state.coerce_sample(raw)))

        LOGGER.debug(f"Filtering batch of {len(states)} states at rate={rate}")
        for state, sample in zip(states, samples):
            state.update_unchecked(sample, alpha, rate, self.mincutoff, self.beta)

        if not states:
            return np.empty((0, self._dim or 0))
        return np.array([state.data for state in states])

    def __repr__(self) -> str:
        return (
            f"OneEuroFilter(rate={self.rate}, mincutoff={self.mincutoff}, "
            f"beta={self.beta}, dcutoff={self.dcutoff}, dim={self._dim})"
        )
