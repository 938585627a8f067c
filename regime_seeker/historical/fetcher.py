"""
Exchange Kline Fetcher.

Downloads recent kline (candlestick) data from public exchange APIs and
normalizes it into Candle objects (time in unix seconds).

Supported exchanges:
- binance.us / binance.com: /api/v3/klines, {SYMBOL}USDT
- kraken: /0/public/OHLC, {SYMBOL}USD
"""

import logging
from dataclasses import dataclass

import httpx

from regime_seeker.core.models import Candle

from .errors import FetchError, RateLimitError, RegionUnavailableError, UnsupportedExchangeError

logger = logging.getLogger(__name__)

# Default number of candles requested from Binance
DEFAULT_LIMIT = 200

# Kraken interval mapping (in minutes)
KRAKEN_INTERVALS = {
    "1m": 1,
    "5m": 5,
    "15m": 15,
    "30m": 30,
    "1h": 60,
    "4h": 240,
    "1d": 1440,
    "1w": 10080,
    "1M": 43200,
}


@dataclass(frozen=True)
class ExchangeInfo:
    """Endpoint and payload format for an exchange."""

    name: str
    url: str
    format: str  # "binance" or "kraken"
    quote: str


EXCHANGES: dict[str, ExchangeInfo] = {
    "binance.us": ExchangeInfo(
        name="Binance.US",
        url="https://api.binance.us/api/v3/klines",
        format="binance",
        quote="USDT",
    ),
    "binance.com": ExchangeInfo(
        name="Binance.com",
        url="https://api.binance.com/api/v3/klines",
        format="binance",
        quote="USDT",
    ),
    "kraken": ExchangeInfo(
        name="Kraken",
        url="https://api.kraken.com/0/public/OHLC",
        format="kraken",
        quote="USD",
    ),
}


def parse_binance_klines(data: list) -> list[Candle]:
    """
    Convert a Binance klines response.

    Binance returns rows of [openTime(ms), open, high, low, close, volume, ...]
    with prices as strings.
    """
    return [
        Candle(
            time=row[0] / 1000,
            open=float(row[1]),
            high=float(row[2]),
            low=float(row[3]),
            close=float(row[4]),
            volume=float(row[5]),
        )
        for row in data
    ]


def parse_kraken_ohlc(data: dict) -> list[Candle]:
    """
    Convert a Kraken OHLC response.

    Kraken returns {"error": [...], "result": {<pair>: [[time(s), open, high,
    low, close, vwap, volume, count], ...], "last": ...}}.
    """
    errors = data.get("error") or []
    if errors:
        raise FetchError(f"Kraken API error: {', '.join(errors)}")

    result = data.get("result", {})
    pair_key = next((k for k in result if k != "last"), None)
    if pair_key is None:
        return []

    return [
        Candle(
            time=float(row[0]),
            open=float(row[1]),
            high=float(row[2]),
            low=float(row[3]),
            close=float(row[4]),
            volume=float(row[6]),
        )
        for row in result[pair_key]
    ]


class KlineFetcher:
    """
    Fetches recent klines from a public exchange API.

    Usage:
        with KlineFetcher("binance.us") as fetcher:
            candles = fetcher.fetch("BTC", "1h")
    """

    def __init__(self, exchange: str = "binance.us", client: httpx.Client | None = None):
        """
        Initialize the fetcher.

        Args:
            exchange: Key of EXCHANGES ("binance.us", "binance.com", "kraken")
            client: HTTP client to use (a new one with 30s timeout if None)
        """
        if exchange not in EXCHANGES:
            raise UnsupportedExchangeError(
                f"Unknown exchange '{exchange}'. Choose from: {', '.join(EXCHANGES)}"
            )

        self.exchange = EXCHANGES[exchange]
        self.client = client or httpx.Client(timeout=30.0)

    def fetch(self, symbol: str, interval: str = "1h", limit: int = DEFAULT_LIMIT) -> list[Candle]:
        """
        Fetch recent candles.

        Args:
            symbol: Base asset (e.g. "BTC"); the quote currency is appended
            interval: Candle interval ("1m", "5m", "1h", "1d", ...)
            limit: Number of candles (Binance only; Kraken returns its default window)

        Returns:
            Candles sorted by time ascending
        """
        pair = f"{symbol.upper()}{self.exchange.quote}"

        if self.exchange.format == "binance":
            params: dict[str, str | int] = {"symbol": pair, "interval": interval, "limit": limit}
        else:
            params = {"pair": pair, "interval": KRAKEN_INTERVALS.get(interval, 60)}

        logger.info(f"Fetching {pair} {interval} from {self.exchange.name}")

        try:
            response = self.client.get(self.exchange.url, params=params)
        except httpx.HTTPError as e:
            raise FetchError(f"{self.exchange.name} request failed: {e}") from e

        self._check_status(response)

        if self.exchange.format == "binance":
            candles = parse_binance_klines(response.json())
        else:
            candles = parse_kraken_ohlc(response.json())

        candles.sort(key=lambda c: c.time)
        logger.info(f"Received {len(candles)} candles for {pair}")

        return candles

    def _check_status(self, response: httpx.Response) -> None:
        if response.is_success:
            return
        if response.status_code == 429:
            raise RateLimitError("Rate limit exceeded. Increase update interval.")
        if response.status_code == 451:
            raise RegionUnavailableError(f"{self.exchange.name} not available in your region.")
        raise FetchError(f"HTTP {response.status_code}")

    def close(self):
        """Close the HTTP client."""
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
