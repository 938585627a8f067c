"""
Position Size Calculator - Fixed-fractional risk sizing.

Sizes a position so that hitting the stop loses a fixed share of capital,
and attaches the regime's stop placement hint.
"""

from dataclasses import dataclass

from regime_seeker.core.models import RegimeState

# Multipliers applied to the standard size
CONSERVATIVE_MULTIPLIER = 0.67
AGGRESSIVE_MULTIPLIER = 1.5


@dataclass
class PositionSizeResult:
    """
    Position sizing for a planned trade.

    Size fields are None when entry/stop do not define a stop distance.
    """

    risk_amount: float
    regime: RegimeState
    stop_pct: float | None = None  # Signed % move from entry to stop
    conservative: float | None = None
    standard: float | None = None
    aggressive: float | None = None

    @property
    def tip(self) -> str:
        return self.regime.tip

    @property
    def is_sized(self) -> bool:
        return self.standard is not None


def calculate_position_size(
    capital: float,
    risk_pct: float,
    entry: float,
    stop: float,
    regime: RegimeState | str = RegimeState.RANGING,
) -> PositionSizeResult:
    """
    Calculate position size from account risk.

    position = (capital * risk_pct / 100) / |entry - stop|

    Args:
        capital: Account capital in quote currency
        risk_pct: Percent of capital to risk (2.0 = 2%)
        entry: Planned entry price
        stop: Stop-loss price
        regime: Current regime, for the stop placement hint

    Returns:
        PositionSizeResult (unsized if entry/stop are not positive or equal)
    """
    result = PositionSizeResult(
        risk_amount=(capital * risk_pct) / 100,
        regime=RegimeState.parse(regime),
    )

    if entry <= 0 or stop <= 0 or entry == stop:
        return result

    standard = result.risk_amount / abs(entry - stop)

    result.stop_pct = ((stop - entry) / entry) * 100
    result.standard = standard
    result.conservative = standard * CONSERVATIVE_MULTIPLIER
    result.aggressive = standard * AGGRESSIVE_MULTIPLIER

    return result
