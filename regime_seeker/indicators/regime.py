"""
Regime Classifier - ADX/EMA trend regime per bar.

Combines trend strength (ADX), direction (DI+ vs DI-) and the price side
of the EMA into one of five RegimeState labels. Each bar is classified
on its own values; there is no multi-bar confirmation.

Usage:
    enriched = compute_signals(candles)
    last_state = enriched[-1].state if enriched else RegimeState.RANGING
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from regime_seeker.core.config import DEFAULT_INDICATOR_CONFIG, IndicatorConfig
from regime_seeker.core.models import Candle, EnrichedCandle, RegimeState

from .adx import adx
from .moving_averages import ema_series

logger = logging.getLogger(__name__)


def classify_bar(
    close: float,
    ema: float | None,
    adx_value: float,
    di_plus: float,
    di_minus: float,
    adx_threshold: float = DEFAULT_INDICATOR_CONFIG.adx_threshold,
) -> RegimeState:
    """
    Classify a single bar.

    Precedence (first match wins):
    STRONG_UPTREND, WEAK_UPTREND, STRONG_DOWNTREND, WEAK_DOWNTREND, RANGING.

    close == ema is neither above nor below, and a missing EMA
    (warmup) always yields RANGING.
    """
    is_strong_trend = adx_value > adx_threshold
    is_price_above_ema = ema is not None and close > ema
    is_price_below_ema = ema is not None and close < ema
    is_uptrend = di_plus > di_minus and is_price_above_ema
    is_downtrend = di_minus > di_plus and is_price_below_ema

    if is_uptrend:
        return RegimeState.STRONG_UPTREND if is_strong_trend else RegimeState.WEAK_UPTREND
    if is_downtrend:
        return RegimeState.STRONG_DOWNTREND if is_strong_trend else RegimeState.WEAK_DOWNTREND
    return RegimeState.RANGING


class RegimeClassifier:
    """
    Computes indicators and regime labels over a full candle window.

    Every call recomputes from scratch. current_state mirrors the last
    bar of the most recent call and is only a convenience cache; hosts
    that track regime changes should use RegimeMonitor instead.
    """

    def __init__(self, config: IndicatorConfig | None = None):
        """
        Initialize the classifier.

        Args:
            config: Indicator lengths and thresholds
        """
        self.config = config or DEFAULT_INDICATOR_CONFIG
        self.current_state = RegimeState.RANGING

    def calculate_signals(self, candles: Sequence[Candle]) -> list[EnrichedCandle]:
        """
        Enrich every candle with EMA, DI+/DI-, ADX and its regime.

        Args:
            candles: Candles ordered by ascending time

        Returns:
            Enriched candles, same length as input ([] for empty input)
        """
        enriched = compute_signals(candles, self.config)
        if enriched:
            self.current_state = enriched[-1].state
        return enriched

    @staticmethod
    def get_regime_color(state: RegimeState | str) -> str:
        return get_regime_color(state)


def compute_signals(
    candles: Sequence[Candle],
    config: IndicatorConfig | None = None,
) -> list[EnrichedCandle]:
    """
    Run the full signal pipeline over a candle window.

    Args:
        candles: Candles ordered by ascending time
        config: Indicator configuration (defaults if None)

    Returns:
        Enriched candles, same length as input ([] for empty input)
    """
    if not candles:
        return []

    config = config or DEFAULT_INDICATOR_CONFIG

    ema_values = ema_series([c.close for c in candles], config.ema_length)
    directional = adx(candles, config.adx_length)

    result: list[EnrichedCandle] = []
    for i, candle in enumerate(candles):
        state = classify_bar(
            close=candle.close,
            ema=ema_values[i],
            adx_value=directional.adx[i],
            di_plus=directional.di_plus[i],
            di_minus=directional.di_minus[i],
            adx_threshold=config.adx_threshold,
        )
        result.append(
            EnrichedCandle(
                time=candle.time,
                open=candle.open,
                high=candle.high,
                low=candle.low,
                close=candle.close,
                volume=candle.volume,
                ema=ema_values[i],
                di_plus=directional.di_plus[i],
                di_minus=directional.di_minus[i],
                adx=directional.adx[i],
                state=state,
            )
        )

    if len(candles) < config.ema_length:
        logger.debug(
            f"Only {len(candles)} candles for EMA {config.ema_length}; all bars RANGING"
        )

    last = result[-1]
    logger.debug(
        f"Computed {len(result)} bars: state={last.state.value} "
        f"adx={last.adx:.2f} di+={last.di_plus:.2f} di-={last.di_minus:.2f}"
    )

    return result


def get_regime_color(state: RegimeState | str) -> str:
    """Hex color for a regime; unknown names fall back to the RANGING color."""
    return RegimeState.parse(state).color


def get_regime_short_name(state: RegimeState | str) -> str:
    """Compact label for a regime; unknown names are returned unchanged."""
    if isinstance(state, RegimeState):
        return state.short_name
    try:
        return RegimeState(state).short_name
    except ValueError:
        return state


@dataclass(frozen=True)
class RegimeZone:
    """A run of consecutive bars sharing the same regime."""

    state: RegimeState
    start_index: int
    end_index: int
    start_time: float
    end_time: float

    @property
    def bar_count(self) -> int:
        return self.end_index - self.start_index + 1


def regime_zones(enriched: Sequence[EnrichedCandle]) -> list[RegimeZone]:
    """
    Group consecutive bars with the same regime into zones.

    Used for shading chart backgrounds by regime.

    Args:
        enriched: Output of compute_signals

    Returns:
        Zones in chronological order ([] for empty input)
    """
    zones: list[RegimeZone] = []
    if not enriched:
        return zones

    start = 0
    for i in range(1, len(enriched) + 1):
        if i == len(enriched) or enriched[i].state != enriched[start].state:
            zones.append(
                RegimeZone(
                    state=enriched[start].state,
                    start_index=start,
                    end_index=i - 1,
                    start_time=enriched[start].time,
                    end_time=enriched[i - 1].time,
                )
            )
            start = i

    return zones
