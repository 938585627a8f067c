"""
Errors raised while acquiring candle data.
"""


class FetchError(RuntimeError):
    """Exchange request failed or returned an error payload."""


class RateLimitError(FetchError):
    """Exchange rejected the request with HTTP 429."""


class RegionUnavailableError(FetchError):
    """Exchange is not available from the caller's region (HTTP 451)."""


class UnsupportedExchangeError(FetchError):
    """Exchange name is not one of the configured exchanges."""
