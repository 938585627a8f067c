"""
Unit tests for the regime classifier.

Tests:
- Single-bar classification rule and precedence
- compute_signals pipeline over candle windows
- RegimeClassifier current_state cache
- Color / short name mapping and regime zones
"""

import random

import pytest

from regime_seeker.core.config import ConfigError, IndicatorConfig
from regime_seeker.core.models import Candle, EnrichedCandle, RegimeState
from regime_seeker.indicators import (
    RegimeClassifier,
    classify_bar,
    compute_signals,
    get_regime_color,
    get_regime_short_name,
    regime_zones,
)


def trending_candles(count: int, step: float = 1.0, start: float = 100.0) -> list[Candle]:
    """Monotonic trend with a constant 2-point daily range."""
    candles = []
    for i in range(count):
        close = start + i * step
        candles.append(
            Candle(
                time=1_700_000_000 + i * 86_400,
                open=close - step / 2,
                high=max(close, close - step / 2) + 1.0,
                low=min(close, close - step / 2) - 1.0,
                close=close,
                volume=1_000.0,
            )
        )
    return candles


def random_candles(count: int, seed: int) -> list[Candle]:
    rng = random.Random(seed)
    candles = []
    price = 100.0
    for i in range(count):
        open_ = price
        close = max(1.0, open_ + rng.gauss(0, 2))
        high = max(open_, close) + rng.uniform(0, 1.5)
        low = max(0.5, min(open_, close) - rng.uniform(0, 1.5))
        candles.append(Candle(time=float(i), open=open_, high=high, low=low, close=close, volume=10.0))
        price = close
    return candles


def enriched_with_states(states: list[RegimeState]) -> list[EnrichedCandle]:
    return [
        EnrichedCandle(
            time=float(i), open=1.0, high=1.0, low=1.0, close=1.0, volume=0.0, state=state
        )
        for i, state in enumerate(states)
    ]


# =============================================================================
# Single-bar rule
# =============================================================================


class TestClassifyBar:
    """Tests for the per-bar classification rule."""

    def test_strong_uptrend(self):
        state = classify_bar(close=110.0, ema=100.0, adx_value=30.0, di_plus=30.0, di_minus=10.0)
        assert state == RegimeState.STRONG_UPTREND

    def test_weak_uptrend(self):
        state = classify_bar(close=110.0, ema=100.0, adx_value=20.0, di_plus=30.0, di_minus=10.0)
        assert state == RegimeState.WEAK_UPTREND

    def test_strong_downtrend(self):
        state = classify_bar(close=90.0, ema=100.0, adx_value=40.0, di_plus=10.0, di_minus=30.0)
        assert state == RegimeState.STRONG_DOWNTREND

    def test_weak_downtrend(self):
        state = classify_bar(close=90.0, ema=100.0, adx_value=10.0, di_plus=10.0, di_minus=30.0)
        assert state == RegimeState.WEAK_DOWNTREND

    def test_threshold_is_strict(self):
        """ADX equal to the threshold is not a strong trend."""
        state = classify_bar(close=110.0, ema=100.0, adx_value=25.0, di_plus=30.0, di_minus=10.0)
        assert state == RegimeState.WEAK_UPTREND

    def test_missing_ema_is_ranging(self):
        state = classify_bar(close=110.0, ema=None, adx_value=60.0, di_plus=40.0, di_minus=5.0)
        assert state == RegimeState.RANGING

    def test_close_on_ema_is_ranging(self):
        state = classify_bar(close=100.0, ema=100.0, adx_value=60.0, di_plus=40.0, di_minus=5.0)
        assert state == RegimeState.RANGING

    def test_price_and_di_disagree_is_ranging(self):
        """Price above EMA but DI- dominant -> no trend."""
        state = classify_bar(close=110.0, ema=100.0, adx_value=60.0, di_plus=5.0, di_minus=40.0)
        assert state == RegimeState.RANGING

    def test_equal_di_is_ranging(self):
        state = classify_bar(close=110.0, ema=100.0, adx_value=60.0, di_plus=20.0, di_minus=20.0)
        assert state == RegimeState.RANGING

    def test_custom_threshold(self):
        state = classify_bar(
            close=110.0, ema=100.0, adx_value=22.0, di_plus=30.0, di_minus=10.0, adx_threshold=20.0
        )
        assert state == RegimeState.STRONG_UPTREND


# =============================================================================
# Pipeline
# =============================================================================


class TestComputeSignals:
    """Tests for the full signal pipeline."""

    def test_empty_input(self):
        assert compute_signals([]) == []

    def test_length_and_fields_preserved(self):
        candles = trending_candles(60)
        enriched = compute_signals(candles)

        assert len(enriched) == 60
        for raw, out in zip(candles, enriched):
            assert (out.time, out.open, out.high, out.low, out.close, out.volume) == (
                raw.time,
                raw.open,
                raw.high,
                raw.low,
                raw.close,
                raw.volume,
            )

    def test_ema_warmup_is_ranging(self):
        """Bars without an EMA are always RANGING."""
        enriched = compute_signals(trending_candles(60), IndicatorConfig(ema_length=50))

        assert all(c.ema is None for c in enriched[:49])
        assert all(c.state == RegimeState.RANGING for c in enriched[:49])
        assert enriched[49].ema is not None

    def test_short_window_all_ranging(self):
        enriched = compute_signals(trending_candles(30))
        assert all(c.ema is None and c.state == RegimeState.RANGING for c in enriched)

    def test_monotonic_uptrend_ends_in_uptrend(self):
        enriched = compute_signals(trending_candles(60), IndicatorConfig(ema_length=50))
        last = enriched[-1]

        assert last.ema is not None
        assert last.state in (RegimeState.STRONG_UPTREND, RegimeState.WEAK_UPTREND)
        assert last.state == RegimeState.STRONG_UPTREND

    def test_monotonic_downtrend_ends_in_downtrend(self):
        enriched = compute_signals(trending_candles(60, step=-1.0, start=200.0))
        assert enriched[-1].state == RegimeState.STRONG_DOWNTREND

    @pytest.mark.parametrize("seed", [3, 11, 99])
    def test_regime_invariants(self, seed):
        """STRONG_* implies ADX above threshold; no EMA implies RANGING."""
        config = IndicatorConfig(ema_length=20)
        enriched = compute_signals(random_candles(300, seed), config)

        for candle in enriched:
            assert isinstance(candle.state, RegimeState)
            if candle.state.is_strong:
                assert candle.adx > config.adx_threshold
            if candle.ema is None:
                assert candle.state == RegimeState.RANGING

    def test_recomputation_is_deterministic(self):
        candles = random_candles(150, seed=5)
        assert compute_signals(candles) == compute_signals(candles)


class TestRegimeClassifier:
    """Tests for the stateful classifier wrapper."""

    def test_initial_state_is_ranging(self):
        assert RegimeClassifier().current_state == RegimeState.RANGING

    def test_current_state_tracks_last_bar(self):
        classifier = RegimeClassifier()

        enriched = classifier.calculate_signals(trending_candles(60))
        assert classifier.current_state == enriched[-1].state

        enriched = classifier.calculate_signals(trending_candles(60, step=-1.0, start=200.0))
        assert classifier.current_state == RegimeState.STRONG_DOWNTREND

    def test_empty_input_keeps_state(self):
        classifier = RegimeClassifier()
        classifier.calculate_signals(trending_candles(60))
        classifier.calculate_signals([])
        assert classifier.current_state == RegimeState.STRONG_UPTREND

    def test_invalid_config(self):
        with pytest.raises(ConfigError):
            IndicatorConfig(adx_length=0)
        with pytest.raises(ConfigError):
            IndicatorConfig(ema_length=0)


# =============================================================================
# Presentation helpers
# =============================================================================


class TestRegimeColors:
    """Tests for regime color and name mapping."""

    def test_each_state_has_a_distinct_color(self):
        colors = {get_regime_color(state) for state in RegimeState}
        assert len(colors) == 5

    def test_color_by_name(self):
        assert get_regime_color("STRONG_UPTREND") == "#22c55e"
        assert RegimeClassifier.get_regime_color(RegimeState.STRONG_DOWNTREND) == "#f87171"

    def test_unknown_state_falls_back_to_ranging(self):
        assert get_regime_color("SIDEWAYS") == get_regime_color(RegimeState.RANGING)

    def test_short_names(self):
        assert get_regime_short_name(RegimeState.WEAK_UPTREND) == "WEAK ↑"
        assert get_regime_short_name("STRONG_DOWNTREND") == "STRONG ↓"
        assert get_regime_short_name("SIDEWAYS") == "SIDEWAYS"


class TestRegimeZones:
    """Tests for grouping bars into regime zones."""

    def test_empty(self):
        assert regime_zones([]) == []

    def test_zones(self):
        states = [
            RegimeState.RANGING,
            RegimeState.RANGING,
            RegimeState.WEAK_UPTREND,
            RegimeState.WEAK_UPTREND,
            RegimeState.WEAK_UPTREND,
            RegimeState.RANGING,
        ]
        zones = regime_zones(enriched_with_states(states))

        assert [(z.state, z.start_index, z.end_index) for z in zones] == [
            (RegimeState.RANGING, 0, 1),
            (RegimeState.WEAK_UPTREND, 2, 4),
            (RegimeState.RANGING, 5, 5),
        ]
        assert zones[1].bar_count == 3
        assert zones[1].start_time == 2.0
        assert zones[1].end_time == 4.0

    def test_single_zone(self):
        zones = regime_zones(enriched_with_states([RegimeState.STRONG_UPTREND] * 4))
        assert len(zones) == 1
        assert zones[0].bar_count == 4


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
