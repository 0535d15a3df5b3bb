"""
liq-indicators: Memoized technical indicators for the LIQ Stack.

Indicators are pure functions of a logical bar index.  This package caches
their values per index over append-only, size-bounded bar series, never
caching the still-open last bar and collapsing indices the series has
already evicted.
"""

from liq.indicators.base import CachedIndicator, collect
from liq.indicators.caching import (
    CacheKey,
    CacheProvider,
    MappedIndicatorValueCache,
    NativeIndicatorValueCache,
    PassthroughIndicatorValueCache,
    available_strategies,
    below_range_index,
)
from liq.indicators.config import CacheConfig, SeriesConfig
from liq.indicators.errors import (
    BarIndexError,
    CacheError,
    ConfigurationError,
    ContractViolationError,
    LiqIndicatorsError,
    SeriesError,
    UnsupportedCacheOperationError,
)
from liq.indicators.library import (
    ClosePriceIndicator,
    ConstantIndicator,
    SMAIndicator,
    VolumeIndicator,
)
from liq.indicators.protocols import (
    UNBOUNDED_BAR_COUNT,
    BarSeriesPort,
    CacheProviderPort,
    Indicator,
    IndicatorValueCache,
    Observer,
)
from liq.indicators.series import Bar, BaseBarSeries

__all__ = [
    # Configuration
    "CacheConfig",
    "SeriesConfig",
    # Protocols
    "BarSeriesPort",
    "CacheProviderPort",
    "Observer",
    "Indicator",
    "IndicatorValueCache",
    "UNBOUNDED_BAR_COUNT",
    # Caching
    "CacheKey",
    "CacheProvider",
    "MappedIndicatorValueCache",
    "NativeIndicatorValueCache",
    "PassthroughIndicatorValueCache",
    "available_strategies",
    "below_range_index",
    # Indicators
    "CachedIndicator",
    "collect",
    "ClosePriceIndicator",
    "ConstantIndicator",
    "SMAIndicator",
    "VolumeIndicator",
    # Series
    "Bar",
    "BaseBarSeries",
    # Errors
    "LiqIndicatorsError",
    "CacheError",
    "ContractViolationError",
    "UnsupportedCacheOperationError",
    "SeriesError",
    "BarIndexError",
    "ConfigurationError",
]

__version__ = "0.1.0"
