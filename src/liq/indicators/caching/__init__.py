"""Indicator value caches and the provider that hands them out."""

from liq.indicators.caching.key import CacheKey
from liq.indicators.caching.mapped import MappedIndicatorValueCache
from liq.indicators.caching.native import NativeIndicatorValueCache
from liq.indicators.caching.passthrough import PassthroughIndicatorValueCache
from liq.indicators.caching.policy import below_range_index
from liq.indicators.caching.provider import CacheProvider, available_strategies

__all__ = [
    "CacheKey",
    "CacheProvider",
    "MappedIndicatorValueCache",
    "NativeIndicatorValueCache",
    "PassthroughIndicatorValueCache",
    "available_strategies",
    "below_range_index",
]
