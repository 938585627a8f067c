"""
Technical Indicators Module - Pure math functions for regime analysis.

All functions are stateless and operate on price/candle data.
"""

from .adx import ADXResult, adx, directional_movement, true_range
from .moving_averages import ema, ema_series, rma, sma
from .regime import (
    RegimeClassifier,
    RegimeZone,
    classify_bar,
    compute_signals,
    get_regime_color,
    get_regime_short_name,
    regime_zones,
)
from .volume_profile import (
    HistogramBin,
    PriceRange,
    VolumeProfileCalculator,
    VolumeProfileResult,
    compute_volume_profile,
    get_color_for_price,
)

__all__ = [
    # Moving Averages
    "sma",
    "ema",
    "ema_series",
    "rma",
    # ADX
    "adx",
    "true_range",
    "directional_movement",
    "ADXResult",
    # Regime
    "classify_bar",
    "compute_signals",
    "RegimeClassifier",
    "RegimeZone",
    "regime_zones",
    "get_regime_color",
    "get_regime_short_name",
    # Volume Profile
    "HistogramBin",
    "PriceRange",
    "VolumeProfileResult",
    "VolumeProfileCalculator",
    "compute_volume_profile",
    "get_color_for_price",
]
