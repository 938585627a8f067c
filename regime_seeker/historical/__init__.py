"""
Historical data acquisition.

Fetches klines from public exchange APIs and loads/saves candle CSVs.
"""

from .errors import FetchError, RateLimitError, RegionUnavailableError, UnsupportedExchangeError
from .fetcher import (
    EXCHANGES,
    KRAKEN_INTERVALS,
    KlineFetcher,
    parse_binance_klines,
    parse_kraken_ohlc,
)
from .storage import load_candles_csv, save_candles_csv

__all__ = [
    "EXCHANGES",
    "KRAKEN_INTERVALS",
    "KlineFetcher",
    "parse_binance_klines",
    "parse_kraken_ohlc",
    "load_candles_csv",
    "save_candles_csv",
    "FetchError",
    "RateLimitError",
    "RegionUnavailableError",
    "UnsupportedExchangeError",
]
