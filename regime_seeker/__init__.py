"""
Regime Seeker - ADX/EMA market regime classification and volume profile.

Entry points:
- compute_signals: enrich candles with EMA, DI+/DI-, ADX and regime
- compute_volume_profile: POC / Value Area histogram over a candle window
"""

from regime_seeker.core import (
    Candle,
    ConfigError,
    EnrichedCandle,
    IndicatorConfig,
    RegimeState,
    VolumeProfileConfig,
)
from regime_seeker.indicators import (
    RegimeClassifier,
    VolumeProfileCalculator,
    VolumeProfileResult,
    compute_signals,
    compute_volume_profile,
)

__version__ = "0.1.0"

__all__ = [
    "Candle",
    "EnrichedCandle",
    "RegimeState",
    "ConfigError",
    "IndicatorConfig",
    "VolumeProfileConfig",
    "RegimeClassifier",
    "VolumeProfileCalculator",
    "VolumeProfileResult",
    "compute_signals",
    "compute_volume_profile",
]
