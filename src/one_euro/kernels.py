"""Numba-compiled cores of the One Euro update.

These kernels do no validation at all. Callers guarantee float64, contiguous
1-D (or 2-D for whole signals) arrays of matching length and parameters that
satisfy the filter invariants.
"""

from __future__ import annotations

import numpy as np
from numba import njit

TWO_PI = 2.0 * np.pi


@njit(cache=True, error_model="numpy")
def _alpha_jit(rate: float, cutoff: float) -> float:
    return 1.0 / (1.0 + rate / (TWO_PI * cutoff))


@njit(cache=True, nogil=True, error_model="numpy")
def _update_jit(
    raw: np.ndarray,  # (D,) new sample
    prev_raw: np.ndarray,  # (D,) last sample, overwritten
    filtered: np.ndarray,  # (D,) signal stage, overwritten
    derivative: np.ndarray,  # (D,) derivative stage, overwritten
    derivative_alpha: np.ndarray,  # (D,)
    rate: float,
    mincutoff: float,
    beta: float,
) -> None:
    """
    Advance one stream by one sample, in place.

    For every dimension:
      - finite-difference velocity ``(raw - prev_raw) * rate``
      - low-pass it with ``derivative_alpha``
      - cutoff ``mincutoff + beta * |derivative|``
      - low-pass ``raw`` with the smoothing factor of that cutoff
    """
    for i in range(raw.shape[0]):
        d_raw = (raw[i] - prev_raw[i]) * rate
        d_alpha = derivative_alpha[i]
        derivative[i] = d_raw * d_alpha + derivative[i] * (1.0 - d_alpha)

        cutoff = mincutoff + beta * abs(derivative[i])
        alpha = _alpha_jit(rate, cutoff)
        filtered[i] = raw[i] * alpha + filtered[i] * (1.0 - alpha)

        prev_raw[i] = raw[i]


@njit(cache=True, nogil=True, error_model="numpy")
def _filter_signal_jit(
    samples: np.ndarray,  # (T, D)
    rates: np.ndarray,  # (T,), rates[0] unused
    mincutoff: float,
    beta: float,
    dcutoff: float,
) -> np.ndarray:
    """
    Filter a whole recorded signal, seeding the state with the first row.

    Returns:
        filtered: smoothed signal (T, D)
    """
    n_steps, dim = samples.shape
    filtered = np.empty((n_steps, dim))
    if n_steps == 0:
        return filtered

    prev_raw = samples[0].copy()
    filt = samples[0].copy()
    deriv = np.zeros(dim)
    d_alpha = np.empty(dim)

    filtered[0] = filt

    for k in range(1, n_steps):
        rate = rates[k]
        d_alpha[:] = _alpha_jit(rate, dcutoff)
        _update_jit(samples[k], prev_raw, filt, deriv, d_alpha, rate, mincutoff, beta)
        filtered[k] = filt

    return filtered
