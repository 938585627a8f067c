"""Risk Module - Regime-aware position sizing."""

from .position_size import PositionSizeResult, calculate_position_size

__all__ = ["PositionSizeResult", "calculate_position_size"]
