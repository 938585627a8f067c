"""
ADX Indicator - Average Directional Index with DI+ / DI-.

Measures trend strength (ADX) and direction (DI+ vs DI-). All smoothing
uses Wilder's RMA seeded from the first bar, matching the chart-script
implementation rather than the SMA-seeded textbook variant.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from .moving_averages import rma


class CandleLike(Protocol):
    """Protocol for candle-like objects with OHLC data."""

    high: float
    low: float
    close: float


@dataclass
class ADXResult:
    """Per-bar directional indicators, aligned with the input candles."""

    di_plus: list[float] = field(default_factory=list)
    di_minus: list[float] = field(default_factory=list)
    adx: list[float] = field(default_factory=list)
    dx: list[float] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.adx)


def true_range(current: CandleLike, previous_close: float | None = None) -> float:
    """
    Calculate True Range for a single candle.

    True Range is the greatest of:
    1. Current High - Current Low
    2. |Current High - Previous Close|
    3. |Current Low - Previous Close|

    Args:
        current: Current candle with high, low, close
        previous_close: Previous candle's close price (None for first candle)

    Returns:
        True Range value
    """
    high_low = current.high - current.low

    if previous_close is None:
        return high_low

    high_prev_close = abs(current.high - previous_close)
    low_prev_close = abs(current.low - previous_close)

    return max(high_low, high_prev_close, low_prev_close)


def directional_movement(
    current: CandleLike, previous: CandleLike | None = None
) -> tuple[float, float]:
    """
    Calculate +DM and -DM for a single candle.

    At most one of the two is non-zero. The first candle (no previous)
    has no movement.

    Returns:
        (plus_dm, minus_dm)
    """
    if previous is None:
        return 0.0, 0.0

    up_move = current.high - previous.high
    down_move = previous.low - current.low

    plus_dm = up_move if up_move > down_move and up_move > 0 else 0.0
    minus_dm = down_move if down_move > up_move and down_move > 0 else 0.0

    return plus_dm, minus_dm


def adx(candles: Sequence[CandleLike], period: int = 14) -> ADXResult:
    """
    Calculate DI+, DI-, DX and ADX series.

    Flat data (zero smoothed true range) yields zeros instead of dividing
    by zero. Never raises for well-formed input.

    Args:
        candles: Candles with high, low, close (most recent last)
        period: Wilder smoothing length (default 14)

    Returns:
        ADXResult with lists the same length as candles
    """
    if not candles:
        return ADXResult()

    true_ranges: list[float] = []
    plus_dms: list[float] = []
    minus_dms: list[float] = []

    previous: CandleLike | None = None
    for candle in candles:
        true_ranges.append(true_range(candle, previous.close if previous is not None else None))
        plus_dm, minus_dm = directional_movement(candle, previous)
        plus_dms.append(plus_dm)
        minus_dms.append(minus_dm)
        previous = candle

    tr_smooth = rma(true_ranges, period)
    plus_smooth = rma(plus_dms, period)
    minus_smooth = rma(minus_dms, period)

    result = ADXResult()
    for tr_s, plus_s, minus_s in zip(tr_smooth, plus_smooth, minus_smooth):
        if tr_s == 0:
            result.di_plus.append(0.0)
            result.di_minus.append(0.0)
            result.dx.append(0.0)
            continue

        di_plus = 100 * plus_s / tr_s
        di_minus = 100 * minus_s / tr_s
        di_sum = di_plus + di_minus

        result.di_plus.append(di_plus)
        result.di_minus.append(di_minus)
        result.dx.append(0.0 if di_sum == 0 else 100 * abs(di_plus - di_minus) / di_sum)

    result.adx = rma(result.dx, period)
    return result
