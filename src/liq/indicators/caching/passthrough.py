"""Cache strategy that never stores anything."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from liq.indicators.caching.key import CacheKey

T = TypeVar("T")


class PassthroughIndicatorValueCache(Generic[T]):
    """Recomputes on every call.  Useful for cheap indicators and debugging."""

    def get(self, key: CacheKey, compute: Callable[[int], T]) -> T:
        return compute(key.index)

    def put(self, key: CacheKey, value: T) -> None:
        pass

    def clear(self) -> None:
        pass

    def snapshot(self) -> dict[int, T]:
        return {}
