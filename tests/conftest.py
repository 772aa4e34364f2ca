"""
Common pytest fixtures for the One Euro filter tests.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd
import pytest

# Configure logging for tests
logging.getLogger("numba").setLevel(logging.WARNING)


@pytest.fixture(scope="module")
def data_dir() -> Path:
    """Directory holding the recorded test signals."""
    return Path(__file__).parent / "data"


@pytest.fixture(scope="module")
def signal_file(data_dir: Path) -> Path:
    """Noisy 2-D signal with the reference output of the filter.

    Filtered with rate taken from the timestamps, beta=0.007, mincutoff=1.0
    and dcutoff=1.0.
    """
    return data_dir / "signal.csv"


@pytest.fixture(scope="module")
def signal_table(signal_file: Path) -> pd.DataFrame:
    """Load the reference signal table."""
    return pd.read_csv(signal_file, dtype=float)
