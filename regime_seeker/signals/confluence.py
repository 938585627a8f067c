"""
Multi-Timeframe Confluence.

Aggregates the last-bar regime of several timeframes for the same market
into a single alignment reading: bullish when at least 60% of timeframes
are in an uptrend, bearish when at least 60% are in a downtrend.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from regime_seeker.core.models import RegimeState

# Minimum share of aligned timeframes for confluence
CONFLUENCE_THRESHOLD = 0.6


class ConfluenceType(Enum):
    """Direction of multi-timeframe alignment."""

    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"


@dataclass
class ConfluenceResult:
    """Alignment of regimes across timeframes."""

    confluence_type: ConfluenceType
    percent: float  # 0-100, share of aligned timeframes (0 when neutral)
    uptrends: int
    downtrends: int
    total: int

    @property
    def is_high(self) -> bool:
        return self.confluence_type != ConfluenceType.NEUTRAL

    @property
    def text(self) -> str:
        if self.confluence_type == ConfluenceType.BULLISH:
            return f"{self.uptrends}/{self.total} Bullish Aligned"
        if self.confluence_type == ConfluenceType.BEARISH:
            return f"{self.downtrends}/{self.total} Bearish Aligned"
        return "No confluence"


def calculate_confluence(
    regimes: Mapping[str, RegimeState | str],
    threshold: float = CONFLUENCE_THRESHOLD,
) -> ConfluenceResult:
    """
    Calculate confluence across timeframes.

    Args:
        regimes: Timeframe -> last-bar regime (e.g. {"1h": RegimeState.WEAK_UPTREND})
        threshold: Required share of aligned timeframes (default 0.6)

    Returns:
        ConfluenceResult (NEUTRAL with total 0 for an empty mapping)
    """
    states = [RegimeState.parse(r) for r in regimes.values()]
    total = len(states)
    uptrends = sum(1 for s in states if s.is_uptrend)
    downtrends = sum(1 for s in states if s.is_downtrend)

    if total == 0:
        return ConfluenceResult(ConfluenceType.NEUTRAL, 0.0, 0, 0, 0)

    required = math.ceil(total * threshold)

    if uptrends >= required:
        return ConfluenceResult(
            ConfluenceType.BULLISH, (uptrends / total) * 100, uptrends, downtrends, total
        )
    if downtrends >= required:
        return ConfluenceResult(
            ConfluenceType.BEARISH, (downtrends / total) * 100, uptrends, downtrends, total
        )
    return ConfluenceResult(ConfluenceType.NEUTRAL, 0.0, uptrends, downtrends, total)
