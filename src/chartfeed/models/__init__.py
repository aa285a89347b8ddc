"""Chart feed models."""

from chartfeed.models.bar import Bar
from chartfeed.models.heikin_ashi import HeikinAshiBar
from chartfeed.models.series import LogicalRange, VolumePoint, VwapPoint
from chartfeed.models.short_volume import ShortVolume

__all__ = [
    "Bar",
    "HeikinAshiBar",
    "VwapPoint",
    "VolumePoint",
    "LogicalRange",
    "ShortVolume",
]
