"""
Moving Average Indicators - SMA, EMA and Wilder's RMA calculations.

Pure math functions. EMA and RMA follow the chart-script conventions:
EMA is null-padded during warmup, RMA emits a value from the first bar.
"""

from collections.abc import Sequence


def sma(prices: Sequence[float], period: int) -> float | None:
    """
    Calculate Simple Moving Average.

    Args:
        prices: List of prices (most recent last)
        period: Number of periods to average

    Returns:
        SMA value or None if insufficient data
    """
    if len(prices) < period or period <= 0:
        return None

    return sum(prices[-period:]) / period


def ema_series(values: Sequence[float], period: int) -> list[float | None]:
    """
    Calculate EMA aligned with the input.

    Uses multiplier = 2 / (period + 1), seeded with the SMA of the first
    `period` values. Indices 0..period-2 are None.

    Args:
        values: List of values (most recent last)
        period: Number of periods for EMA calculation

    Returns:
        List the same length as values; all None if len(values) < period
    """
    if len(values) < period or period <= 0:
        return [None] * len(values)

    multiplier = 2 / (period + 1)
    result: list[float | None] = [None] * (period - 1)

    # Seed with SMA for the first value
    previous = sum(values[:period]) / period
    result.append(previous)

    for value in values[period:]:
        previous = (value - previous) * multiplier + previous
        result.append(previous)

    return result


def ema(values: Sequence[float], period: int) -> float | None:
    """
    Calculate the current Exponential Moving Average.

    Returns:
        Last EMA value or None if insufficient data
    """
    series = ema_series(values, period)
    return series[-1] if series else None


def rma(values: Sequence[float], period: int) -> list[float]:
    """
    Wilder's running moving average (alpha = 1 / period).

    rma[0] = values[0]
    rma[i] = alpha * values[i] + (1 - alpha) * rma[i - 1]

    Unlike ema_series there is no warmup padding: the first value is
    emitted as-is. The ADX family depends on this.

    Args:
        values: List of values (most recent last)
        period: Smoothing period

    Returns:
        Smoothed values, same length as input
    """
    if not values:
        return []

    alpha = 1.0 / period
    result = [values[0]]

    for value in values[1:]:
        result.append(alpha * value + (1 - alpha) * result[-1])

    return result
