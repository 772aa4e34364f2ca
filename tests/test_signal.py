"""
Tests for one_euro.signal module and the end-to-end reference signal.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import pandas as pd
import pytest

from one_euro.config import FilterConfig
from one_euro.errors import InvalidParameterError
from one_euro.filter import OneEuroFilter
from one_euro.signal import filter_frame, filter_signal
from one_euro.smoother import OneEuroSmoother

if TYPE_CHECKING:
    from pathlib import Path

REFERENCE_CONFIG = FilterConfig(rate=60.0, mincutoff=1.0, beta=0.007, dcutoff=1.0)
TOLERANCE = 1e-6


class TestReferenceSignal:
    """The filter reproduces the recorded reference output."""

    def test_fixture_present(self, signal_file: Path, signal_table: pd.DataFrame) -> None:
        assert signal_file.exists()
        assert len(signal_table) > 100
        assert np.all(np.diff(signal_table["timestamp"]) > 0)

    def test_filter_with_set_rate(self, signal_table: pd.DataFrame) -> None:
        """Rate is updated on the filter from every timestamp difference."""
        filt = OneEuroFilter.from_config(REFERENCE_CONFIG, dim=2)
        state = None
        timestamp = None

        for row in signal_table.itertuples(index=False):
            noisy = np.array([row.noisy_x, row.noisy_y])
            if timestamp is not None:
                filt.set_rate(1.0 / (row.timestamp - timestamp))
            if state is None:
                state = filt.new_state(noisy)
                filtered = state.data
            else:
                filtered = filt.filter(state, noisy)
            timestamp = row.timestamp

            np.testing.assert_allclose(
                filtered, [row.filtered_x, row.filtered_y], rtol=0, atol=TOLERANCE
            )

    def test_literal_rate_matches_timestamp_rate(self, signal_table: pd.DataFrame) -> None:
        """Per-call rates and rates derived from timestamps give identical output."""
        timestamps = signal_table["timestamp"].to_numpy()
        noisy = signal_table[["noisy_x", "noisy_y"]].to_numpy()
        rates = 1.0 / np.diff(timestamps)

        filt = OneEuroFilter.from_config(REFERENCE_CONFIG)
        state = filt.new_state(noisy[0])
        smoother = OneEuroSmoother(REFERENCE_CONFIG)
        smoother.smooth(noisy[0], timestamps[0])

        for sample, t, rate in zip(noisy[1:], timestamps[1:], rates):
            np.testing.assert_array_equal(
                filt.filter(state, sample, float(rate)), smoother.smooth(sample, t)
            )

    def test_filter_signal(self, signal_table: pd.DataFrame) -> None:
        filtered = filter_signal(
            signal_table[["noisy_x", "noisy_y"]].to_numpy(),
            signal_table["timestamp"].to_numpy(),
            REFERENCE_CONFIG,
        )
        np.testing.assert_allclose(
            filtered,
            signal_table[["filtered_x", "filtered_y"]].to_numpy(),
            rtol=0,
            atol=TOLERANCE,
        )

    def test_filter_frame(self, signal_table: pd.DataFrame) -> None:
        result = filter_frame(
            signal_table, ["noisy_x", "noisy_y"], time_column="timestamp", config=REFERENCE_CONFIG
        )
        assert "noisy_x_filtered" not in signal_table
        np.testing.assert_allclose(
            result["noisy_x_filtered"], signal_table["filtered_x"], rtol=0, atol=TOLERANCE
        )
        np.testing.assert_allclose(
            result["noisy_y_filtered"], signal_table["filtered_y"], rtol=0, atol=TOLERANCE
        )

    def test_filtering_reduces_noise(self, signal_table: pd.DataFrame) -> None:
        """Sanity check that the reference output is smoother than its input."""
        noisy = signal_table[["noisy_x", "noisy_y"]].to_numpy()
        filtered = signal_table[["filtered_x", "filtered_y"]].to_numpy()
        roughness = lambda arr: np.abs(np.diff(arr, n=2, axis=0)).mean()  # noqa: E731
        assert roughness(filtered) < roughness(noisy)


class TestFilterSignal:
    """Tests for filter_signal function."""

    def test_matches_smoother(self) -> None:
        rng = np.random.default_rng(3)
        samples = np.cumsum(rng.normal(size=(40, 3)), axis=0)
        timestamps = np.cumsum(rng.uniform(0.01, 0.03, size=40))
        config = FilterConfig(rate=60.0, mincutoff=0.5, beta=0.1, dcutoff=1.0)

        smoother = OneEuroSmoother(config)
        expected = np.array([smoother(sample, t) for sample, t in zip(samples, timestamps)])

        np.testing.assert_allclose(filter_signal(samples, timestamps, config), expected, rtol=1e-12)

    def test_one_dimensional_with_configured_rate(self) -> None:
        samples = np.array([0.0, 1.0, 1.0, 0.5, 2.0])
        config = FilterConfig(rate=30.0, beta=0.2)
        filt = OneEuroFilter.from_config(config)
        state = filt.new_state(samples[:1])
        expected = [samples[0]] + [filt.filter(state, [value])[0] for value in samples[1:]]

        result = filter_signal(samples, config=config)
        assert result.shape == (5,)
        np.testing.assert_allclose(result, expected, rtol=1e-12)

    def test_empty_signal(self) -> None:
        assert filter_signal(np.empty((0, 2))).shape == (0, 2)

    def test_does_not_modify_input(self) -> None:
        samples = np.array([[0.0], [1.0], [2.0]])
        filter_signal(samples)
        np.testing.assert_array_equal(samples, [[0.0], [1.0], [2.0]])

    @pytest.mark.parametrize(
        "timestamps,message",
        [
            (np.array([0.0, 0.1, 0.1]), "increasing"),
            (np.array([0.0, 0.2, 0.1]), "increasing"),
            (np.array([0.0, 0.1]), "timestamps"),
            (np.array([0.0, np.inf, 0.3]), "finite"),
        ],
    )
    def test_invalid_timestamps(self, timestamps: np.ndarray, message: str) -> None:
        with pytest.raises(InvalidParameterError, match=message):
            filter_signal(np.zeros((3, 2)), timestamps)

    def test_invalid_shape(self) -> None:
        with pytest.raises(InvalidParameterError, match="shape"):
            filter_signal(np.zeros((3, 2, 2)))

    def test_invalid_config(self) -> None:
        with pytest.raises(InvalidParameterError):
            filter_signal(np.zeros((3, 2)), config=FilterConfig(beta=-1.0))


class TestFilterFrame:
    """Tests for filter_frame function."""

    def test_missing_column(self) -> None:
        frame = pd.DataFrame({"x": [0.0, 1.0]})
        with pytest.raises(KeyError, match="y"):
            filter_frame(frame, ["x", "y"])

    def test_custom_suffix(self) -> None:
        frame = pd.DataFrame({"x": [0.0, 1.0, 2.0]})
        result = filter_frame(frame, ["x"], suffix="_smooth")
        assert list(result.columns) == ["x", "x_smooth"]
        assert result["x_smooth"].iloc[0] == 0.0
