"""
Regime Monitor - Detects regime changes between refreshes.

The signal pipeline is recomputed from scratch on every refresh, so the
host owns the last-known regime. RegimeMonitor keeps that value per
market (symbol + timeframe) and fires a callback when it changes.
"""

import logging
from collections import deque
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from regime_seeker.core.models import EnrichedCandle, RegimeState

logger = logging.getLogger(__name__)


@dataclass
class RegimeChange:
    """A transition from one regime to another on a market."""

    key: str
    previous: RegimeState
    current: RegimeState
    adx: float
    price: float
    bar_time: float
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def is_upgrade(self) -> bool:
        """True when the move is toward a more bullish regime."""
        return _REGIME_RANK[self.current] > _REGIME_RANK[self.previous]

    def __str__(self) -> str:
        return f"{self.key}: {self.previous.value} -> {self.current.value} (ADX {self.adx:.1f})"


# Bearish to bullish ordering
_REGIME_RANK: dict[RegimeState, int] = {
    RegimeState.STRONG_DOWNTREND: 0,
    RegimeState.WEAK_DOWNTREND: 1,
    RegimeState.RANGING: 2,
    RegimeState.WEAK_UPTREND: 3,
    RegimeState.STRONG_UPTREND: 4,
}


class RegimeMonitor:
    """
    Tracks the last-bar regime per market and reports changes.

    The first observation of a market only records its regime; a change
    is reported from the second observation on.

    Usage:
        monitor = RegimeMonitor(on_change=lambda c: print(c))
        monitor.update("BTC/1h", compute_signals(candles))
    """

    def __init__(
        self,
        on_change: Callable[[RegimeChange], None] | None = None,
        max_history: int = 100,
    ) -> None:
        """
        Initialize the monitor.

        Args:
            on_change: Called with each RegimeChange as it is detected
            max_history: Maximum number of changes kept in history
        """
        self.on_change = on_change
        self._states: dict[str, RegimeState] = {}
        self._history: deque[RegimeChange] = deque(maxlen=max_history)

    def update(self, key: str, enriched: Sequence[EnrichedCandle]) -> RegimeChange | None:
        """
        Record the latest computed window for a market.

        Args:
            key: Market identifier (e.g. "BTC/1h")
            enriched: Output of compute_signals for that market

        Returns:
            RegimeChange if the last-bar regime differs from the previous one
        """
        if not enriched:
            return None

        last = enriched[-1]
        previous = self._states.get(key)
        self._states[key] = last.state

        if previous is None or previous == last.state:
            return None

        change = RegimeChange(
            key=key,
            previous=previous,
            current=last.state,
            adx=last.adx,
            price=last.close,
            bar_time=last.time,
        )
        self._history.append(change)
        logger.info(f"Regime change {change}")

        if self.on_change is not None:
            self.on_change(change)

        return change

    def get_state(self, key: str) -> RegimeState | None:
        """Last recorded regime for a market, or None if never seen."""
        return self._states.get(key)

    @property
    def states(self) -> dict[str, RegimeState]:
        return dict(self._states)

    @property
    def history(self) -> list[RegimeChange]:
        return list(self._history)

    def reset(self, key: str | None = None) -> None:
        """
        Forget recorded regimes.

        Args:
            key: Market to reset, or None for all markets
        """
        if key is None:
            self._states.clear()
            self._history.clear()
        else:
            self._states.pop(key, None)
