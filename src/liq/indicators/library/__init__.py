"""Concrete indicators built on the cached indicator base."""

from liq.indicators.library.constant import ConstantIndicator
from liq.indicators.library.price import ClosePriceIndicator, VolumeIndicator
from liq.indicators.library.sma import SMAIndicator

__all__ = [
    "ClosePriceIndicator",
    "ConstantIndicator",
    "SMAIndicator",
    "VolumeIndicator",
]
