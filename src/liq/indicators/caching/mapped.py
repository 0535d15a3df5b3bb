"""Dictionary-backed indicator value cache."""

from __future__ import annotations

import logging
from collections import OrderedDict
from collections.abc import Callable, Hashable
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from liq.indicators.caching.policy import below_range_index

if TYPE_CHECKING:
    from liq.indicators.caching.key import CacheKey

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING: Any = object()


class MappedIndicatorValueCache(Generic[T]):
    """Caches values keyed by bar handle.

    Indices the series already evicted resolve to the first retained bar, so
    they are never stored under a bar key.  Like the sliding-window cache,
    they share one placeholder computed through :func:`below_range_index`.
    The indicator base keeps the open bar away from this cache.

    Cache key: ``key.bar`` (falls back to ``key.index`` when no bar is given)
    Cache value: ``(logical index, value)``
    """

    def __init__(self, maximum_size: int | None = None) -> None:
        self._maximum_size = maximum_size
        self._entries: OrderedDict[Hashable, tuple[int, T]] = OrderedDict()
        self._below_range: Any = _MISSING

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: CacheKey, compute: Callable[[int], T]) -> T:
        series = key.series
        if series is not None:
            removed = series.removed_bars_count
            if key.index < removed:
                if self._below_range is _MISSING:
                    self._below_range = compute(below_range_index(key.index, removed))
                return self._below_range

        entry_key = _entry_key(key)
        entry = self._entries.get(entry_key)
        if entry is not None:
            return entry[1]
        value = compute(key.index)
        self.put(key, value)
        return value

    def put(self, key: CacheKey, value: T) -> None:
        entry_key = _entry_key(key)
        self._entries[entry_key] = (key.index, value)
        self._entries.move_to_end(entry_key)
        if self._maximum_size is not None:
            while len(self._entries) > self._maximum_size:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("evicted cache entry %r", evicted)

    def clear(self) -> None:
        self._entries.clear()
        self._below_range = _MISSING

    def snapshot(self) -> dict[int, T]:
        return {index: value for index, value in self._entries.values()}


def _entry_key(key: CacheKey) -> Any:
    return key.index if key.bar is None else key.bar
