"""
Signals Module - Host-side consumers of computed regimes.

- RegimeMonitor: last-known regime per market and change notifications
- calculate_confluence: multi-timeframe alignment
"""

from .confluence import (
    CONFLUENCE_THRESHOLD,
    ConfluenceResult,
    ConfluenceType,
    calculate_confluence,
)
from .monitor import RegimeChange, RegimeMonitor

__all__ = [
    "RegimeChange",
    "RegimeMonitor",
    "ConfluenceType",
    "ConfluenceResult",
    "CONFLUENCE_THRESHOLD",
    "calculate_confluence",
]
