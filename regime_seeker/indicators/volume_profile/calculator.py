"""
Volume Profile Calculator.

Builds a fixed-bin Volume Profile from OHLCV candles.

Each candle's volume is spread across the bins its [low, high] range
covers, weighted by overlap, which approximates where volume actually
traded better than assigning it all to the close.

Usage:
    calculator = VolumeProfileCalculator(VolumeProfileConfig(num_bins=50))
    profile = calculator.calculate(candles)
    if profile is not None:
        print(f"POC: {profile.poc}  VA: {profile.val} - {profile.vah}")
"""

import logging
import math
from collections.abc import Sequence

from regime_seeker.core.config import DEFAULT_VOLUME_PROFILE_CONFIG, VolumeProfileConfig
from regime_seeker.core.models import Candle

from .models import HistogramBin, PriceRange, VolumeProfileResult

logger = logging.getLogger(__name__)


class VolumeProfileCalculator:
    """
    Computes POC, Value Area and histogram over a candle window.

    Stateless apart from its configuration; every call recomputes the
    whole profile from the candles passed in.
    """

    def __init__(self, config: VolumeProfileConfig | None = None):
        """
        Initialize the calculator.

        Args:
            config: Bin count, value area percentage and colors
        """
        self.config = config or DEFAULT_VOLUME_PROFILE_CONFIG

    def calculate(self, candles: Sequence[Candle]) -> VolumeProfileResult | None:
        """
        Calculate the volume profile.

        Args:
            candles: OHLCV candles (any order)

        Returns:
            VolumeProfileResult, or None if candles is empty or the price
            range has zero width
        """
        if not candles:
            return None

        min_price = min(c.low for c in candles)
        max_price = max(c.high for c in candles)

        if max_price == min_price:
            logger.warning(
                f"Zero-width price range at {min_price} over {len(candles)} candles; "
                "no volume profile"
            )
            return None

        num_bins = self.config.num_bins
        price_step = (max_price - min_price) / num_bins
        price_levels = [min_price + i * price_step for i in range(num_bins)]

        volume_by_bin = self._distribute_volume(
            candles, price_levels, min_price, max_price, price_step
        )

        # First maximum wins, so ties favour the lower price bin
        poc_index = 0
        max_volume = 0.0
        for i, volume in enumerate(volume_by_bin):
            if volume > max_volume:
                max_volume = volume
                poc_index = i

        total_volume = sum(volume_by_bin)
        val_index, vah_index, value_area_volume = self._expand_value_area(
            volume_by_bin, poc_index, total_volume
        )

        histogram = self._build_histogram(
            volume_by_bin, price_levels, poc_index, val_index, vah_index, max_volume
        )

        logger.debug(
            f"Volume profile: {len(candles)} candles, {len(histogram)} bins, "
            f"POC={price_levels[poc_index]:.4f} "
            f"VA={price_levels[val_index]:.4f}-{price_levels[vah_index]:.4f}"
        )

        return VolumeProfileResult(
            poc=price_levels[poc_index],
            vah=price_levels[vah_index],
            val=price_levels[val_index],
            total_volume=total_volume,
            value_area_volume=value_area_volume,
            max_volume=max_volume,
            price_range=PriceRange(min=min_price, max=max_price),
            poc_index=poc_index,
            vah_index=vah_index,
            val_index=val_index,
            histogram_data=histogram,
        )

    def _distribute_volume(
        self,
        candles: Sequence[Candle],
        price_levels: list[float],
        min_price: float,
        max_price: float,
        price_step: float,
    ) -> list[float]:
        """Spread each candle's volume over the bins it overlaps."""
        num_bins = len(price_levels)
        volume_by_bin = [0.0] * num_bins

        for candle in candles:
            candle_range = candle.high - candle.low

            if candle_range == 0:
                # No range: all volume goes to the bin holding the close
                bin_index = math.floor((candle.close - min_price) / price_step)
                bin_index = max(0, min(num_bins - 1, bin_index))
                volume_by_bin[bin_index] += candle.volume
                continue

            low_bin = max(0, math.floor((candle.low - min_price) / price_step))
            high_bin = min(num_bins - 1, math.floor((candle.high - min_price) / price_step))

            for i in range(low_bin, high_bin + 1):
                bin_low = price_levels[i]
                bin_high = price_levels[i + 1] if i < num_bins - 1 else max_price

                overlap = min(bin_high, candle.high) - max(bin_low, candle.low)
                if overlap > 0:
                    volume_by_bin[i] += candle.volume * overlap / candle_range

        return volume_by_bin

    def _expand_value_area(
        self,
        volume_by_bin: list[float],
        poc_index: int,
        total_volume: float,
    ) -> tuple[int, int, float]:
        """
        Grow the value area outward from the POC.

        Algorithm:
        1. Start at POC
        2. Compare the next bin above and the next bin below
        3. Add the larger one (ties go up) until target % is reached
           or both edges of the grid are hit

        Returns:
            (val_index, vah_index, value_area_volume)
        """
        top = len(volume_by_bin) - 1
        target_volume = total_volume * (self.config.value_area_percent / 100)

        val_index = poc_index
        vah_index = poc_index
        value_area_volume = volume_by_bin[poc_index]

        while value_area_volume < target_volume and (vah_index < top or val_index > 0):
            volume_above = volume_by_bin[vah_index + 1] if vah_index < top else 0.0
            volume_below = volume_by_bin[val_index - 1] if val_index > 0 else 0.0

            if volume_above >= volume_below and vah_index < top:
                vah_index += 1
                value_area_volume += volume_above
            elif val_index > 0:
                val_index -= 1
                value_area_volume += volume_below
            else:
                vah_index += 1
                value_area_volume += volume_above

        return val_index, vah_index, value_area_volume

    def _build_histogram(
        self,
        volume_by_bin: list[float],
        price_levels: list[float],
        poc_index: int,
        val_index: int,
        vah_index: int,
        max_volume: float,
    ) -> list[HistogramBin]:
        """Tag and color every non-empty bin."""
        histogram: list[HistogramBin] = []

        for i, volume in enumerate(volume_by_bin):
            if volume == 0:
                continue

            in_value_area = val_index <= i <= vah_index
            if not in_value_area:
                color = self.config.outside_value_color
            elif i >= poc_index:
                color = self.config.value_area_high_color
            else:
                color = self.config.value_area_low_color

            histogram.append(
                HistogramBin(
                    price=price_levels[i],
                    volume=volume,
                    normalized_volume=volume / max_volume,
                    color=color,
                    is_poc=i == poc_index,
                    is_value_area=in_value_area,
                )
            )

        return histogram


def compute_volume_profile(
    candles: Sequence[Candle],
    config: VolumeProfileConfig | None = None,
) -> VolumeProfileResult | None:
    """
    Calculate a volume profile over a candle window.

    Args:
        candles: OHLCV candles
        config: Profile configuration (defaults if None)

    Returns:
        VolumeProfileResult, or None when there is no usable profile
    """
    return VolumeProfileCalculator(config).calculate(candles)


def get_color_for_price(
    price: float,
    profile: VolumeProfileResult | None,
    config: VolumeProfileConfig | None = None,
) -> str:
    """
    Get the histogram tier color for an arbitrary price.

    Args:
        price: Price to color
        profile: Profile to compare against (None -> outside color)
        config: Color scheme (defaults if None)

    Returns:
        Hex color string
    """
    config = config or DEFAULT_VOLUME_PROFILE_CONFIG
    if profile is None or not profile.is_price_in_value_area(price):
        return config.outside_value_color

    if price >= profile.poc:
        return config.value_area_high_color
    return config.value_area_low_color
