"""Offline filtering of whole recorded signals."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from one_euro.config import FilterConfig
from one_euro.errors import InvalidParameterError
from one_euro.kernels import _filter_signal_jit

if TYPE_CHECKING:
    import pandas as pd

LOGGER = logging.getLogger(__name__)


def _rates_from_timestamps(timestamps: np.ndarray, n_steps: int) -> np.ndarray:
    if timestamps.shape != (n_steps,):
        raise InvalidParameterError(
            f"expected {n_steps} timestamps, got array of shape {timestamps.shape}"
        )
    if not np.all(np.isfinite(timestamps)):
        raise InvalidParameterError("timestamps should be finite")
    elapsed = np.diff(timestamps)
    if not np.all(elapsed > 0.0):
        first_bad = int(np.argmax(~(elapsed > 0.0))) + 1
        raise InvalidParameterError(
            f"timestamps should be strictly increasing, index {first_bad} is not"
        )
    rates = np.empty(n_steps)
    if n_steps:
        rates[0] = np.nan
        rates[1:] = 1.0 / elapsed
    return rates


def filter_signal(
    samples: np.ndarray,
    timestamps: np.ndarray | None = None,
    config: FilterConfig | None = None,
) -> np.ndarray:
    """
    Filter a recorded signal in a single compiled pass.

    The first row seeds the filter and is returned unchanged, so the output
    matches feeding the rows one by one through a
    :class:`~one_euro.smoother.OneEuroSmoother`.

    Args:
        samples: Signal of shape (T, D), or (T,) for a one dimensional signal.
        timestamps: Sample times in seconds, strictly increasing, shape (T,).
            Without them every step uses ``config.rate``.
        config: Filter parameters, defaults to :class:`FilterConfig` defaults.

    Returns:
        Filtered signal with the shape of ``samples``.
    """
    config = FilterConfig() if config is None else config.replace()
    data = np.asarray(samples, dtype=float)
    one_dimensional = data.ndim == 1
    if one_dimensional:
        data = data[:, np.newaxis]
    if data.ndim != 2:
        raise InvalidParameterError(
            f"samples should have shape (T,) or (T, D), got {np.shape(samples)}"
        )
    data = np.ascontiguousarray(data)
    n_steps = data.shape[0]

    if timestamps is None:
        rates = np.full(n_steps, config.rate)
    else:
        rates = _rates_from_timestamps(np.asarray(timestamps, dtype=float), n_steps)
    if n_steps > 1 and not np.all(np.isfinite(rates[1:])):
        raise InvalidParameterError("timestamps are too close to give a finite rate")

    LOGGER.info(
        f"Filtering signal of {n_steps} samples x {data.shape[1]} dimensions "
        f"with mincutoff={config.mincutoff}, beta={config.beta}, dcutoff={config.dcutoff}"
    )
    filtered = _filter_signal_jit(
        data, rates, config.mincutoff, config.beta, config.dcutoff
    )
    return filtered[:, 0] if one_dimensional else filtered


def filter_frame(
    frame: pd.DataFrame,
    columns: list[str],
    time_column: str | None = None,
    config: FilterConfig | None = None,
    suffix: str = "_filtered",
) -> pd.DataFrame:
    """
    Filter columns of a DataFrame as one multi-dimensional signal.

    Args:
        frame: Table with one row per sample, in time order.
        columns: Columns forming the signal, one per dimension.
        time_column: Column with sample times in seconds. Without it every
            step uses ``config.rate``.
        config: Filter parameters.
        suffix: Appended to each column name for the filtered output.

    Returns:
        A copy of ``frame`` with the filtered columns added.
    """
    missing = [col for col in [*columns, *([time_column] if time_column else [])] if col not in frame]
    if missing:
        raise KeyError(f"Columns not found in frame: {missing}")

    timestamps = None if time_column is None else frame[time_column].to_numpy(dtype=float)
    filtered = filter_signal(frame[columns].to_numpy(dtype=float), timestamps, config)

    result = frame.copy()
    for idx, col in enumerate(columns):
        result[f"{col}{suffix}"] = filtered[:, idx]
    LOGGER.debug(f"Added filtered columns for {columns}")
    return result
