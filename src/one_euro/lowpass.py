"""Exponential low-pass stage: ``current * alpha + previous * (1 - alpha)``."""

from __future__ import annotations

import logging

import numpy as np

from one_euro.errors import InvalidParameterError

LOGGER = logging.getLogger(__name__)


def readonly(arr: np.ndarray) -> np.ndarray:
    """Read-only view of ``arr``; the owner keeps writing through ``arr`` itself."""
    view = arr.view()
    view.flags.writeable = False
    return view


def check_alpha(alpha: float | np.ndarray, *, allow_zero: bool = True) -> None:
    """
    Validate a scalar or per-dimension smoothing factor.

    Args:
        alpha: Smoothing factor(s) to check.
        allow_zero: Whether zero is accepted. The low-pass primitive accepts
            the closed range [0, 1]; computed smoothing factors live in (0, 1].

    Raises:
        InvalidParameterError: If any component is outside the accepted range.
    """
    alpha_arr = np.asarray(alpha, dtype=float)
    lower_ok = alpha_arr >= 0.0 if allow_zero else alpha_arr > 0.0
    if not np.all(lower_ok & (alpha_arr <= 1.0)):
        bounds = "[0, 1]" if allow_zero else "(0, 1]"
        raise InvalidParameterError(f"alpha should be in {bounds} range, got {alpha}")


def low_pass(
    current: np.ndarray, previous: np.ndarray, alpha: float | np.ndarray
) -> np.ndarray:
    """
    Blend ``current`` into ``previous`` with weight ``alpha``.

    Args:
        current: Newest sample.
        previous: Previous smoothed value, same shape as ``current``.
        alpha: Scalar or per-dimension weight on ``current``, in [0, 1].

    Returns:
        ``current * alpha + previous * (1 - alpha)`` as a new array.

    Raises:
        InvalidParameterError: If any component of ``alpha`` is outside [0, 1].
    """
    check_alpha(alpha)
    return low_pass_unchecked(current, previous, alpha)


def low_pass_unchecked(
    current: np.ndarray, previous: np.ndarray, alpha: float | np.ndarray
) -> np.ndarray:
    """Same as :func:`low_pass` without checking ``alpha``."""
    alpha = np.asarray(alpha, dtype=float)
    return np.asarray(current, dtype=float) * alpha + np.asarray(
        previous, dtype=float
    ) * (1.0 - alpha)


class LowPassState:
    """
    Low-pass stage that folds its last output into the next call.

    The state is seeded with an initial value; there is no empty state, so
    the first ``update`` already blends against the seed.
    """

    def __init__(self, initial: np.ndarray):
        self._value = np.array(initial, dtype=float, ndmin=1)
        LOGGER.debug(f"Initialised low-pass state with shape={self._value.shape}")

    @property
    def data(self) -> np.ndarray:
        """Last smoothed value, as a read-only view."""
        return readonly(self._value)

    def update(self, sample: np.ndarray, alpha: float | np.ndarray) -> np.ndarray:
        """Replace the state with ``low_pass(sample, state, alpha)`` and return a copy of it."""
        check_alpha(alpha)
        return self.update_unchecked(sample, alpha)

    def update_unchecked(
        self, sample: np.ndarray, alpha: float | np.ndarray
    ) -> np.ndarray:
        """Same as :meth:`update` without checking ``alpha``."""
        if np.shape(sample) != self._value.shape:
            raise InvalidParameterError(
                f"sample shape {np.shape(sample)} does not match state shape {self._value.shape}"
            )
        if np.ndim(alpha) and np.shape(alpha) != self._value.shape:
            raise InvalidParameterError(
                f"alpha shape {np.shape(alpha)} does not match state shape {self._value.shape}"
            )
        self._value[:] = low_pass_unchecked(sample, self._value, alpha)
        return self._value.copy()

    def copy(self) -> LowPassState:
        return LowPassState(self._value)

    def __repr__(self) -> str:
        return f"LowPassState({self._value!r})"
