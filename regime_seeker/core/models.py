"""
Core data models for the regime seeker.

Contains dataclasses for:
- Raw OHLCV candles
- Candles enriched with indicator values and regime labels
- Regime state classification and its presentation metadata
"""

from dataclasses import asdict, dataclass
from enum import Enum


class RegimeState(Enum):
    """Market regime classification (trend direction x strength)."""

    STRONG_UPTREND = "STRONG_UPTREND"  # ADX > threshold, DI+ > DI-, close > EMA
    WEAK_UPTREND = "WEAK_UPTREND"  # DI+ > DI-, close > EMA
    RANGING = "RANGING"  # Everything else
    WEAK_DOWNTREND = "WEAK_DOWNTREND"  # DI- > DI+, close < EMA
    STRONG_DOWNTREND = "STRONG_DOWNTREND"  # ADX > threshold, DI- > DI+, close < EMA

    @classmethod
    def parse(cls, value: "RegimeState | str") -> "RegimeState":
        """Convert a state or state name, falling back to RANGING."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.RANGING

    @property
    def color(self) -> str:
        """Hex color used when painting bars in this regime."""
        return REGIME_COLORS[self]

    @property
    def short_name(self) -> str:
        """Compact label for narrow displays."""
        return REGIME_SHORT_NAMES[self]

    @property
    def tip(self) -> str:
        """Position management hint for this regime."""
        return REGIME_TIPS[self]

    @property
    def is_uptrend(self) -> bool:
        return self in (RegimeState.STRONG_UPTREND, RegimeState.WEAK_UPTREND)

    @property
    def is_downtrend(self) -> bool:
        return self in (RegimeState.STRONG_DOWNTREND, RegimeState.WEAK_DOWNTREND)

    @property
    def is_strong(self) -> bool:
        return self in (RegimeState.STRONG_UPTREND, RegimeState.STRONG_DOWNTREND)


REGIME_COLORS: dict[RegimeState, str] = {
    RegimeState.STRONG_UPTREND: "#22c55e",
    RegimeState.WEAK_UPTREND: "#065f46",
    RegimeState.RANGING: "#d4c5a9",
    RegimeState.WEAK_DOWNTREND: "#7f1d1d",
    RegimeState.STRONG_DOWNTREND: "#f87171",
}

REGIME_SHORT_NAMES: dict[RegimeState, str] = {
    RegimeState.STRONG_UPTREND: "STRONG ↑",
    RegimeState.WEAK_UPTREND: "WEAK ↑",
    RegimeState.RANGING: "RANGING",
    RegimeState.WEAK_DOWNTREND: "WEAK ↓",
    RegimeState.STRONG_DOWNTREND: "STRONG ↓",
}

REGIME_TIPS: dict[RegimeState, str] = {
    RegimeState.STRONG_UPTREND: "Strong trend: Use wider stops (1.5-2x ATR), standard sizing OK",
    RegimeState.WEAK_UPTREND: "Weak trend: Moderate stops (1-1.5x ATR), conservative sizing",
    RegimeState.RANGING: "Choppy conditions: Tight stops (0.5-1x ATR), smaller positions or wait",
    RegimeState.WEAK_DOWNTREND: "Weak downtrend: Be cautious, tight stops recommended",
    RegimeState.STRONG_DOWNTREND: "Strong downtrend: Protect capital, wait for regime change",
}


@dataclass(frozen=True)
class Candle:
    """A single OHLCV candle. Time is unix seconds."""

    time: float
    open: float
    high: float
    low: float
    close: float
    volume: float

    def is_valid(self) -> bool:
        """Check the OHLC ordering and non-negative volume."""
        return (
            self.low <= min(self.open, self.close)
            and max(self.open, self.close) <= self.high
            and self.volume >= 0
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for CSV/JSON export."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Candle":
        """Create from dictionary (values may be strings, e.g. from CSV)."""
        return cls(
            time=float(data["time"]),
            open=float(data["open"]),
            high=float(data["high"]),
            low=float(data["low"]),
            close=float(data["close"]),
            volume=float(data.get("volume", 0.0)),
        )


@dataclass(frozen=True)
class EnrichedCandle(Candle):
    """
    Candle plus the indicator values and regime computed for its bar.

    ema is None until the EMA has enough history (first ema_length - 1 bars).
    """

    ema: float | None = None
    di_plus: float = 0.0
    di_minus: float = 0.0
    adx: float = 0.0
    state: RegimeState = RegimeState.RANGING

    @property
    def color(self) -> str:
        return self.state.color

    def to_dict(self) -> dict:
        data = asdict(self)
        data["state"] = self.state.value
        return data
