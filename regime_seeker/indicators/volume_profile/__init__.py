"""
Volume Profile Module.

Provides candle-based Volume Profile analysis:
- Data models (HistogramBin, PriceRange, VolumeProfileResult)
- Calculator for binning candle volume by price
- POC and Value Area around it
"""

from .calculator import VolumeProfileCalculator, compute_volume_profile, get_color_for_price
from .models import HistogramBin, PriceRange, VolumeProfileResult

__all__ = [
    # Data models
    "HistogramBin",
    "PriceRange",
    "VolumeProfileResult",
    # Calculator
    "VolumeProfileCalculator",
    # Functions
    "compute_volume_profile",
    "get_color_for_price",
]
