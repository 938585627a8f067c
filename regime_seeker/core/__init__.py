"""Core models and configuration."""

from .config import (
    DEFAULT_INDICATOR_CONFIG,
    DEFAULT_VOLUME_PROFILE_CONFIG,
    ConfigError,
    IndicatorConfig,
    VolumeProfileConfig,
)
from .models import Candle, EnrichedCandle, RegimeState

__all__ = [
    "Candle",
    "EnrichedCandle",
    "RegimeState",
    "ConfigError",
    "IndicatorConfig",
    "VolumeProfileConfig",
    "DEFAULT_INDICATOR_CONFIG",
    "DEFAULT_VOLUME_PROFILE_CONFIG",
]
