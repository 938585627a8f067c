"""
Indicator and volume profile configuration.

Centralizes all magic numbers and adjustable parameters for easy tuning.
"""

from dataclasses import dataclass


class ConfigError(ValueError):
    """Raised when a configuration value is out of range."""


@dataclass(frozen=True)
class IndicatorConfig:
    """Configuration for the ADX/EMA regime classifier.

    Defaults match the reference chart script (ADX 14, threshold 25, EMA 50).

    RESERVED PARAMETERS (accepted, no effect on classification):
    - confirmation_bars, adx_decline_pct, di_convergence
    """

    # =========================================================
    # Trend Strength
    # =========================================================

    # Wilder smoothing length for TR, +DM, -DM and DX
    # Range: 7-28 | Lower = faster ADX, more noise
    adx_length: int = 14

    # ADX above this value counts as a strong trend (strict >)
    # Range: 20-30 | Higher = fewer STRONG_* labels
    adx_threshold: float = 25.0

    # =========================================================
    # Trend Direction
    # =========================================================

    # EMA length used as the price side filter
    # Range: 20-200 | Longer = slower direction changes, longer warmup
    ema_length: int = 50

    # =========================================================
    # Reserved (not wired into the single-bar rule)
    # =========================================================

    confirmation_bars: int = 3
    adx_decline_pct: float = 15.0
    di_convergence: float = 5.0

    def __post_init__(self) -> None:
        if self.adx_length < 1:
            raise ConfigError(f"adx_length must be >= 1, got {self.adx_length}")
        if self.ema_length < 1:
            raise ConfigError(f"ema_length must be >= 1, got {self.ema_length}")


@dataclass(frozen=True)
class VolumeProfileConfig:
    """Configuration for the candle-based volume profile.

    value_area_percent is expressed as a percentage (68.0 = 68%).
    """

    # Share of total volume the value area must cover
    # Range: 60-80 | 68 ~ one standard deviation
    value_area_percent: float = 68.0

    # Number of equal-width price bins between window low and high
    num_bins: int = 100

    # Histogram colors (3-tier scheme)
    value_area_high_color: str = "#a78bfa"  # In value area, at/above POC
    value_area_low_color: str = "#6b46c1"  # In value area, below POC
    outside_value_color: str = "#4c1d95"  # Outside value area

    def __post_init__(self) -> None:
        if self.num_bins < 1:
            raise ConfigError(f"num_bins must be >= 1, got {self.num_bins}")
        if not 0 < self.value_area_percent <= 100:
            raise ConfigError(
                f"value_area_percent must be in (0, 100], got {self.value_area_percent}"
            )


# Default configuration instances
DEFAULT_INDICATOR_CONFIG = IndicatorConfig()
DEFAULT_VOLUME_PROFILE_CONFIG = VolumeProfileConfig()
