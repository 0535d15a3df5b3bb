"""Base class for indicators whose values are memoized per bar index."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Generic, TypeVar

import numpy as np

from liq.indicators.caching.key import CacheKey
from liq.indicators.caching.policy import below_range_index
from liq.indicators.caching.provider import CacheProvider
from liq.indicators.protocols import BarSeriesPort, Indicator

if TYPE_CHECKING:
    from liq.indicators.protocols import CacheProviderPort, IndicatorValueCache

T = TypeVar("T")


class CachedIndicator(ABC, Generic[T]):
    """Indicator that delegates memoization of :meth:`calculate` to a cache.

    Subclasses only implement :meth:`calculate`, a pure function of the
    logical bar index.  :meth:`value` takes care of the special cases:

    * no series, or an index at/after the end index (open bar): computed
      every time, never cached;
    * an index before the series' begin index: computed for index 0;
    * anything else: served through the cache.

    Args:
        source: The bar series to compute over, another indicator whose
            series is borrowed, or ``None`` for series-less indicators.
        cache_provider: Where the cache comes from.  Defaults to the
            series' ``cache_provider`` attribute, then to a sliding-window
            :class:`CacheProvider`.
    """

    def __init__(
        self,
        source: BarSeriesPort | Indicator[Any] | None,
        *,
        cache_provider: CacheProviderPort | None = None,
    ) -> None:
        if isinstance(source, Indicator):
            series = source.series
        else:
            series = source
        self._series = series
        if cache_provider is None:
            cache_provider = getattr(series, "cache_provider", None) or CacheProvider()
        self._cache: IndicatorValueCache[T] = cache_provider.get_cache()

    @property
    def series(self) -> BarSeriesPort | None:
        return self._series

    @property
    def cache(self) -> IndicatorValueCache[T]:
        return self._cache

    @abstractmethod
    def calculate(self, index: int) -> T:
        """Compute the indicator value at logical ``index``."""

    def value(self, index: int) -> T:
        series = self._series
        if series is None or index >= series.end_index:
            return self.calculate(index)

        begin = series.begin_index
        if index < begin:
            return self.calculate(below_range_index(index, begin))

        key = CacheKey(index=index, bar=series.get_bar(index), series=series)
        return self._cache.get(key, self.calculate)

    def __repr__(self) -> str:
        return type(self).__name__


def collect(
    indicator: Indicator[Any],
    start: int | None = None,
    stop: int | None = None,
) -> np.ndarray:
    """Evaluate ``indicator`` over ``range(start, stop + 1)`` into an array.

    ``start`` defaults to the first retained index of the indicator's series
    and ``stop`` to its end index (inclusive).

    Raises:
        ValueError: If a bound is omitted and the indicator has no series.
    """
    series = indicator.series
    if start is None or stop is None:
        if series is None:
            raise ValueError("start and stop are required for series-less indicators")
        if start is None:
            start = max(series.begin_index, series.removed_bars_count)
        if stop is None:
            stop = series.end_index
    return np.array([indicator.value(i) for i in range(start, stop + 1)])
