"""Smoothing factors of the exponential low-pass filter.

The smoothing factor of a first order low-pass filter sampled at ``rate`` with
cutoff frequency ``cutoff`` is

    alpha = 1 / (1 + rate / (2 * pi * cutoff))

It is the weight put on the newest sample: ``alpha -> 1`` as the cutoff grows
(no smoothing) and ``alpha -> 0`` as the cutoff vanishes (infinite smoothing).
"""

from __future__ import annotations

import numpy as np

from one_euro.errors import InvalidParameterError

TWO_PI = 2.0 * np.pi


def get_alpha(rate: float | np.ndarray, cutoff: float | np.ndarray) -> float | np.ndarray:
    """
    Calculate the smoothing factor ``(1 + rate / (2 * pi * cutoff)) ** -1``.

    Args:
        rate: Sampling frequency. Scalar or array, broadcast against ``cutoff``.
        cutoff: Cutoff frequency. Scalar or array.

    Returns:
        The smoothing factor, a float for scalar input and an array otherwise.

    Raises:
        InvalidParameterError: If any ``rate`` or ``cutoff`` is zero, negative or
            NaN, or if the result is not finite.
    """
    rate_arr = np.asarray(rate, dtype=float)
    cutoff_arr = np.asarray(cutoff, dtype=float)
    if not np.all(rate_arr > 0.0):
        raise InvalidParameterError(f"rate should be greater than zero, got {rate}")
    if not np.all(cutoff_arr > 0.0):
        raise InvalidParameterError(f"cutoff should be greater than zero, got {cutoff}")

    alpha = get_alpha_unchecked(rate_arr, cutoff_arr)
    if not np.all(np.isfinite(alpha)):
        raise InvalidParameterError(
            f"smoothing factor is not finite for rate={rate}, cutoff={cutoff}"
        )
    return alpha


def get_alpha_unchecked(
    rate: float | np.ndarray, cutoff: float | np.ndarray
) -> float | np.ndarray:
    """Same as :func:`get_alpha` but without argument checks.

    The caller guarantees ``rate > 0`` and ``cutoff > 0``. Floating point
    warnings are silenced, so a violated precondition shows up as ``nan`` or
    ``inf`` in the result.
    """
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        alpha = 1.0 / (1.0 + np.divide(rate, np.multiply(TWO_PI, cutoff)))
    if np.ndim(alpha) == 0:
        return float(alpha)
    return alpha
