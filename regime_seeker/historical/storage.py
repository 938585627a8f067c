"""
CSV storage for candle windows.

Columns: time, open, high, low, close, volume (time in unix seconds).
"""

import csv
import logging
from collections.abc import Sequence
from pathlib import Path

from regime_seeker.core.models import Candle

logger = logging.getLogger(__name__)

CSV_FIELDS = ["time", "open", "high", "low", "close", "volume"]


def load_candles_csv(filepath: str | Path) -> list[Candle]:
    """
    Load candles from a CSV file.

    Args:
        filepath: Path to CSV file with a header row

    Returns:
        Candles sorted by time ascending

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file holds no rows
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"Candle data file not found: {filepath}")

    with filepath.open(newline="") as f:
        candles = [Candle.from_dict(row) for row in csv.DictReader(f)]

    if not candles:
        raise ValueError(f"No data found in {filepath}")

    candles.sort(key=lambda c: c.time)

    invalid = sum(1 for c in candles if not c.is_valid())
    if invalid:
        logger.warning(f"{invalid} of {len(candles)} candles in {filepath} violate OHLC ordering")

    return candles


def save_candles_csv(candles: Sequence[Candle], filepath: str | Path) -> Path:
    """
    Save candles to a CSV file.

    Args:
        candles: Candles to save
        filepath: Output file path (parent directories are created)

    Returns:
        Path to saved file
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with filepath.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for candle in candles:
            writer.writerow({k: getattr(candle, k) for k in CSV_FIELDS})

    logger.info(f"Saved {len(candles)} candles to {filepath}")
    return filepath
