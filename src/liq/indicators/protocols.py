"""Protocols (extension points) for liq-indicators.

Protocols define structural interfaces that consumers implement.
They use ``typing.Protocol`` (not ABCs) so consumers never need to
inherit from liq-indicators classes.
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from liq.indicators.caching.key import CacheKey

T = TypeVar("T")

#: ``observer(index, value)`` callback invoked after each cache computation.
Observer = Callable[[int, Any], None]

#: Sentinel returned by ``maximum_bar_count`` when a series keeps every bar.
UNBOUNDED_BAR_COUNT = sys.maxsize


@runtime_checkable
class BarSeriesPort(Protocol):
    """Read-only view of a bar series as seen by indicators and caches.

    Indices are logical: they keep increasing as bars are appended and are
    never reused after the series evicts its oldest bars.

    Example::

        class MySeries:
            begin_index = 0
            end_index = 99
            removed_bars_count = 0
            maximum_bar_count = UNBOUNDED_BAR_COUNT

            def get_bar(self, index):
                return self._bars[index]
    """

    @property
    def begin_index(self) -> int: ...

    @property
    def end_index(self) -> int: ...

    @property
    def removed_bars_count(self) -> int: ...

    @property
    def maximum_bar_count(self) -> int: ...

    def get_bar(self, index: int) -> Any: ...


@runtime_checkable
class IndicatorValueCache(Protocol[T]):
    """Memoization strategy used by :class:`~liq.indicators.base.CachedIndicator`.

    ``compute`` maps a logical index to a value.  It must be free of side
    effects from the cache's point of view: the cache may call it any number
    of times, but only stores one result per index.
    """

    def get(self, key: CacheKey, compute: Callable[[int], T]) -> T: ...

    def put(self, key: CacheKey, value: T) -> None: ...

    def clear(self) -> None: ...

    def snapshot(self) -> Mapping[int, T]: ...


@runtime_checkable
class CacheProviderPort(Protocol):
    """Hands out one fresh cache per indicator."""

    def get_cache(self) -> IndicatorValueCache[Any]: ...


@runtime_checkable
class Indicator(Protocol[T]):
    """Anything that yields a value per logical bar index."""

    @property
    def series(self) -> BarSeriesPort | None: ...

    def value(self, index: int) -> T: ...
