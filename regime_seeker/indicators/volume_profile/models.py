"""
Volume Profile Data Models.

Core data structures for the candle-based Volume Profile:
- HistogramBin: Volume accumulated in one price bin
- PriceRange: Low/high of the analysed window
- VolumeProfileResult: Complete profile with POC and Value Area
"""

from dataclasses import dataclass, field


@dataclass
class HistogramBin:
    """
    Volume in a single price bin.

    price is the lower edge of the bin. normalized_volume is volume
    relative to the largest bin (0-1].
    """

    price: float
    volume: float
    normalized_volume: float
    color: str
    is_poc: bool = False
    is_value_area: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "price": self.price,
            "volume": self.volume,
            "normalized_volume": self.normalized_volume,
            "color": self.color,
            "is_poc": self.is_poc,
            "is_value_area": self.is_value_area,
        }


@dataclass(frozen=True)
class PriceRange:
    """Price range of the analysed window."""

    min: float
    max: float

    @property
    def width(self) -> float:
        return self.max - self.min


@dataclass
class VolumeProfileResult:
    """
    Volume profile over a candle window.

    histogram_data only holds bins with non-zero volume, ordered by price.
    The *_index fields refer to the full bin grid, not to histogram_data.
    """

    poc: float
    vah: float
    val: float
    total_volume: float
    value_area_volume: float
    max_volume: float
    price_range: PriceRange
    poc_index: int = 0
    vah_index: int = 0
    val_index: int = 0
    histogram_data: list[HistogramBin] = field(default_factory=list)

    @property
    def value_area_pct(self) -> float:
        """Share of total volume actually covered by the value area (0-100)."""
        if self.total_volume == 0:
            return 0.0
        return (self.value_area_volume / self.total_volume) * 100

    def is_price_in_value_area(self, price: float) -> bool:
        return self.val <= price <= self.vah

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "histogram_data": [b.to_dict() for b in self.histogram_data],
            "poc": self.poc,
            "vah": self.vah,
            "val": self.val,
            "total_volume": self.total_volume,
            "value_area_volume": self.value_area_volume,
            "max_volume": self.max_volume,
            "price_range": {"min": self.price_range.min, "max": self.price_range.max},
        }
