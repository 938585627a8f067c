"""
Unit tests for regime monitoring, confluence and position sizing.
"""

import pytest

from regime_seeker.core.models import EnrichedCandle, RegimeState
from regime_seeker.risk import calculate_position_size
from regime_seeker.signals import ConfluenceType, RegimeMonitor, calculate_confluence


def window(state: RegimeState, close: float = 100.0, adx: float = 30.0) -> list[EnrichedCandle]:
    """Two-bar enriched window whose last bar is in `state`."""
    return [
        EnrichedCandle(time=0.0, open=99.0, high=101.0, low=98.0, close=99.5, volume=1.0),
        EnrichedCandle(
            time=60.0, open=99.5, high=close + 1, low=99.0, close=close, volume=1.0, adx=adx, state=state
        ),
    ]


# =============================================================================
# Regime Monitor
# =============================================================================


class TestRegimeMonitor:
    """Tests for regime change detection."""

    def test_first_observation_records_only(self):
        changes = []
        monitor = RegimeMonitor(on_change=changes.append)

        assert monitor.update("BTC/1h", window(RegimeState.RANGING)) is None
        assert monitor.get_state("BTC/1h") == RegimeState.RANGING
        assert changes == []

    def test_same_state_is_not_a_change(self):
        changes = []
        monitor = RegimeMonitor(on_change=changes.append)

        monitor.update("BTC/1h", window(RegimeState.WEAK_UPTREND))
        assert monitor.update("BTC/1h", window(RegimeState.WEAK_UPTREND)) is None
        assert changes == []

    def test_change_fires_once(self):
        changes = []
        monitor = RegimeMonitor(on_change=changes.append)

        monitor.update("BTC/1h", window(RegimeState.RANGING))
        change = monitor.update("BTC/1h", window(RegimeState.STRONG_UPTREND, close=105.0, adx=31.0))
        monitor.update("BTC/1h", window(RegimeState.STRONG_UPTREND))

        assert change is not None
        assert changes == [change]
        assert change.previous == RegimeState.RANGING
        assert change.current == RegimeState.STRONG_UPTREND
        assert change.price == 105.0
        assert change.adx == 31.0
        assert change.bar_time == 60.0
        assert change.is_upgrade

    def test_downgrade(self):
        monitor = RegimeMonitor()
        monitor.update("ETH/4h", window(RegimeState.WEAK_UPTREND))
        change = monitor.update("ETH/4h", window(RegimeState.STRONG_DOWNTREND))

        assert change is not None
        assert not change.is_upgrade
        assert "WEAK_UPTREND -> STRONG_DOWNTREND" in str(change)

    def test_markets_are_independent(self):
        monitor = RegimeMonitor()
        monitor.update("BTC/1h", window(RegimeState.RANGING))

        assert monitor.update("ETH/1h", window(RegimeState.STRONG_UPTREND)) is None
        assert monitor.states == {
            "BTC/1h": RegimeState.RANGING,
            "ETH/1h": RegimeState.STRONG_UPTREND,
        }

    def test_empty_window_ignored(self):
        monitor = RegimeMonitor()
        assert monitor.update("BTC/1h", []) is None
        assert monitor.get_state("BTC/1h") is None

    def test_history_and_reset(self):
        monitor = RegimeMonitor(max_history=2)
        for state in (
            RegimeState.RANGING,
            RegimeState.WEAK_UPTREND,
            RegimeState.STRONG_UPTREND,
            RegimeState.WEAK_UPTREND,
        ):
            monitor.update("BTC/1h", window(state))

        assert len(monitor.history) == 2
        assert monitor.history[-1].current == RegimeState.WEAK_UPTREND

        monitor.reset("BTC/1h")
        assert monitor.get_state("BTC/1h") is None
        assert len(monitor.history) == 2

        monitor.reset()
        assert monitor.history == []


# =============================================================================
# Confluence
# =============================================================================


class TestConfluence:
    """Tests for multi-timeframe confluence."""

    def test_bullish(self):
        result = calculate_confluence(
            {
                "15m": RegimeState.WEAK_DOWNTREND,
                "1h": RegimeState.STRONG_UPTREND,
                "4h": RegimeState.WEAK_UPTREND,
                "1d": RegimeState.WEAK_UPTREND,
                "1w": RegimeState.RANGING,
            }
        )

        assert result.confluence_type == ConfluenceType.BULLISH
        assert result.percent == pytest.approx(60.0)
        assert result.text == "3/5 Bullish Aligned"
        assert result.is_high

    def test_bearish(self):
        result = calculate_confluence(
            {
                "1h": RegimeState.STRONG_DOWNTREND,
                "4h": RegimeState.WEAK_DOWNTREND,
                "1d": RegimeState.RANGING,
            }
        )

        assert result.confluence_type == ConfluenceType.BEARISH
        assert result.percent == pytest.approx(200 / 3)
        assert result.text == "2/3 Bearish Aligned"

    def test_split_is_neutral(self):
        result = calculate_confluence(
            {
                "1h": RegimeState.STRONG_UPTREND,
                "4h": RegimeState.WEAK_UPTREND,
                "1d": RegimeState.WEAK_DOWNTREND,
                "1w": RegimeState.STRONG_DOWNTREND,
            }
        )

        assert result.confluence_type == ConfluenceType.NEUTRAL
        assert result.percent == 0.0
        assert result.text == "No confluence"
        assert not result.is_high

    def test_empty(self):
        result = calculate_confluence({})
        assert result.confluence_type == ConfluenceType.NEUTRAL
        assert result.total == 0

    def test_accepts_state_names(self):
        result = calculate_confluence({"1h": "WEAK_UPTREND"})
        assert result.confluence_type == ConfluenceType.BULLISH
        assert result.percent == pytest.approx(100.0)


# =============================================================================
# Position sizing
# =============================================================================


class TestPositionSize:
    """Tests for the risk-based position size calculator."""

    def test_basic_sizing(self):
        result = calculate_position_size(
            capital=10_000.0, risk_pct=2.0, entry=100.0, stop=95.0, regime=RegimeState.WEAK_UPTREND
        )

        assert result.risk_amount == pytest.approx(200.0)
        assert result.standard == pytest.approx(40.0)
        assert result.conservative == pytest.approx(26.8)
        assert result.aggressive == pytest.approx(60.0)
        assert result.stop_pct == pytest.approx(-5.0)
        assert result.is_sized
        assert result.tip == RegimeState.WEAK_UPTREND.tip

    def test_short_side_stop(self):
        result = calculate_position_size(10_000.0, 1.0, entry=100.0, stop=110.0)
        assert result.standard == pytest.approx(10.0)
        assert result.stop_pct == pytest.approx(10.0)

    def test_unsized_when_stop_equals_entry(self):
        result = calculate_position_size(10_000.0, 2.0, entry=100.0, stop=100.0)

        assert result.risk_amount == pytest.approx(200.0)
        assert not result.is_sized
        assert result.standard is None

    def test_unsized_without_prices(self):
        assert not calculate_position_size(10_000.0, 2.0, entry=0.0, stop=95.0).is_sized

    def test_unknown_regime_defaults_to_ranging(self):
        result = calculate_position_size(10_000.0, 2.0, 100.0, 95.0, regime="SIDEWAYS")
        assert result.regime == RegimeState.RANGING


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
