"""Per-stream state of the One Euro filter."""

from __future__ import annotations

import numpy as np

from one_euro.config import check_non_negative, check_positive
from one_euro.errors import InvalidParameterError
from one_euro.kernels import _update_jit
from one_euro.alpha import get_alpha
from one_euro.lowpass import LowPassState, check_alpha, readonly


class OneEuroState:
    """
    Mutable state of one filtered stream (x, y, ... of a single tracked point).

    It couples two low-pass stages, one for the signal and one for its
    estimated derivative, with the last raw sample. Construction seeds it with
    the first sample: ``raw = data = sample`` and ``derivative = 0``.

    A state is updated by one caller at a time; many states may share a
    single :class:`~one_euro.filter.OneEuroFilter`.
    """

    def __init__(self, sample: np.ndarray | list[float] | float):
        initial = np.array(sample, dtype=float, ndmin=1)
        if initial.ndim != 1:
            raise InvalidParameterError(
                f"sample should be one dimensional, got shape {initial.shape}"
            )
        self._raw = initial.copy()
        self._filtered = LowPassState(initial)
        self._derivative = LowPassState(np.zeros_like(initial))

    @classmethod
    def zeros(cls, dim: int) -> OneEuroState:
        """State of dimension ``dim`` seeded at the origin."""
        return cls(np.zeros(dim))

    @property
    def dim(self) -> int:
        return self._raw.shape[0]

    @property
    def data(self) -> np.ndarray:
        """Current filtered value (read-only view)."""
        return self._filtered.data

    @property
    def raw(self) -> np.ndarray:
        """Current raw (not filtered) value (read-only view)."""
        return readonly(self._raw)

    @property
    def derivative(self) -> np.ndarray:
        """Current smoothed derivative (read-only view)."""
        return self._derivative.data

    def get_cutoff(self, mincutoff: float, beta: float) -> np.ndarray:
        """
        Calculate the frequency cutoff ``mincutoff + beta * |derivative|``.

        Args:
            mincutoff: Minimal cutoff, used when the signal is at rest.
            beta: Slope of the cutoff with respect to the signal speed.
        """
        return np.abs(self.derivative) * beta + mincutoff

    def coerce_sample(self, sample: np.ndarray | list[float] | float) -> np.ndarray:
        """Return ``sample`` as a contiguous float vector of this state's dimension."""
        arr = np.ascontiguousarray(sample, dtype=float)
        if arr.ndim == 0:
            arr = arr.reshape(1)
        if arr.shape != self._raw.shape:
            raise InvalidParameterError(
                f"sample of shape {arr.shape} does not match state dimension {self.dim}"
            )
        return arr

    def _coerce_alpha(self, alpha: float | np.ndarray) -> np.ndarray:
        arr = np.asarray(alpha, dtype=float)
        if arr.ndim == 0:
            return np.full(self.dim, float(arr))
        if arr.shape != self._raw.shape:
            raise InvalidParameterError(
                f"alpha of shape {arr.shape} does not match state dimension {self.dim}"
            )
        return np.ascontiguousarray(arr)

    def update(
        self,
        raw: np.ndarray | list[float] | float,
        alpha: float | np.ndarray,
        rate: float,
        mincutoff: float,
        beta: float,
    ) -> np.ndarray:
        """
        Advance the state by one sample.

        Args:
            raw: New unfiltered sample.
            alpha: Smoothing factor for the raw signal derivative, scalar or
                per dimension.
            rate: Sampling frequency of this step, the reciprocal of the time
                elapsed since the previous sample.
            mincutoff: Minimal value for the frequency cutoff.
            beta: Slope for the frequency cutoff.

        Returns:
            Copy of the new filtered value.

        Raises:
            InvalidParameterError: If any value of ``alpha`` is not in (0, 1],
                ``rate`` is not positive, ``mincutoff`` or ``beta`` is
                negative, or the smoothing factor of the signal stage is not
                in (0, 1] (e.g. a NaN sample, or a zero cutoff at rest). The
                state is left untouched.
        """
        check_alpha(alpha, allow_zero=False)
        rate = check_positive(rate, "rate")
        mincutoff = check_non_negative(mincutoff, "mincutoff")
        beta = check_non_negative(beta, "beta")

        sample = self.coerce_sample(raw)
        d_alpha = self._coerce_alpha(alpha)
        derivative = (sample - self._raw) * rate * d_alpha + self.derivative * (1.0 - d_alpha)
        sample_alpha = get_alpha(rate, np.abs(derivative) * beta + mincutoff)
        check_alpha(sample_alpha, allow_zero=False)

        return self.update_unchecked(sample, d_alpha, rate, mincutoff, beta)

    def update_unchecked(
        self,
        raw: np.ndarray | list[float] | float,
        alpha: float | np.ndarray,
        rate: float,
        mincutoff: float,
        beta: float,
    ) -> np.ndarray:
        """Same as :meth:`update` but without checking the numeric parameters.

        The result is only meaningful when every value in ``alpha`` is in
        (0, 1], ``rate`` is positive and ``mincutoff`` and ``beta`` are not
        negative. Sample and alpha shapes are still checked.
        """
        sample = self.coerce_sample(raw)
        # the kernel advances both low-pass stages in place
        _update_jit(
            sample,
            self._raw,
            self._filtered._value,
            self._derivative._value,
            self._coerce_alpha(alpha),
            float(rate),
            float(mincutoff),
            float(beta),
        )
        return self._filtered._value.copy()

    def copy(self) -> OneEuroState:
        """Independent copy of this state."""
        new = OneEuroState(self._raw)
        new._filtered = self._filtered.copy()
        new._derivative = self._derivative.copy()
        return new

    def __array__(self, dtype=None, copy=None) -> np.ndarray:
        return np.array(self.data, dtype=dtype)

    def __repr__(self) -> str:
        return (
            f"OneEuroState(raw={self._raw!r}, data={self.data!r}, "
            f"derivative={self.derivative!r})"
        )
