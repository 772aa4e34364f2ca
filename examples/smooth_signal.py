"""
Example script for smoothing a recorded pointer trajectory.

This script reads a CSV file with a timestamp column and one column per
coordinate, filters the coordinates with the One Euro filter and writes the
table back out with ``<column>_filtered`` columns added.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import pandas as pd

from one_euro.config import FilterConfig
from one_euro.signal import filter_frame

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("input", type=Path, help="CSV file with the noisy signal")
    parser.add_argument("output", type=Path, help="Where to write the filtered table")
    parser.add_argument(
        "--columns", nargs="+", default=["noisy_x", "noisy_y"], help="Signal columns"
    )
    parser.add_argument("--time-column", default="timestamp")
    parser.add_argument("--mincutoff", type=float, default=1.0)
    parser.add_argument("--beta", type=float, default=0.007)
    parser.add_argument("--dcutoff", type=float, default=1.0)
    return parser.parse_args()


def main() -> None:
    """Filter the signal and save the result."""
    args = parse_args()
    config = FilterConfig(mincutoff=args.mincutoff, beta=args.beta, dcutoff=args.dcutoff)

    logger.info(f"Reading signal from {args.input}")
    frame = pd.read_csv(args.input)

    result = filter_frame(frame, args.columns, time_column=args.time_column, config=config)

    for col in args.columns:
        residual = result[col] - result[f"{col}_filtered"]
        logger.info(f"{col}: mean |raw - filtered| = {residual.abs().mean():.6e}")

    result.to_csv(args.output, index=False)
    logger.info(f"Saved filtered signal to {args.output}")


if __name__ == "__main__":
    main()
