"""Sliding-window indicator value cache.

Maps the ever-increasing logical index space of a bar series onto a bounded
buffer.  The buffer always represents the contiguous logical window
``[highest_result_index - len + 1, highest_result_index]``; slots inside it
stay unresolved until their index is first requested.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from liq.indicators.caching.policy import below_range_index
from liq.indicators.errors import ContractViolationError, UnsupportedCacheOperationError

if TYPE_CHECKING:
    from liq.indicators.caching.key import CacheKey
    from liq.indicators.protocols import BarSeriesPort, Observer

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _Unresolved:
    __slots__ = ()

    def __repr__(self) -> str:
        return "<unresolved>"


_UNRESOLVED: Any = _Unresolved()


class NativeIndicatorValueCache(Generic[T]):
    """Lazy, window-bounded memoization of one indicator's values.

    Rules applied by :meth:`get`, in order:

    * no series on the key: compute, never store;
    * index below the series' removed count: every such index shares one
      placeholder kept in the lowest slot, computed once for index 0;
    * index at (or past) the series' end index: the bar may still be open,
      compute, never store;
    * otherwise: grow the window if needed and compute each index at most
      once.

    The buffer never holds more than ``series.maximum_bar_count`` slots.

    Args:
        observer: Optional ``observer(index, value)`` callback invoked after
            every computation, cached or not.
    """

    def __init__(self, observer: Observer | None = None) -> None:
        self._results: list[Any] = []
        self._highest_result_index = -1
        self._observer = observer

    @property
    def highest_result_index(self) -> int:
        """Greatest logical index stored so far, ``-1`` before the first store."""
        return self._highest_result_index

    def __len__(self) -> int:
        return len(self._results)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(highest_result_index="
            f"{self._highest_result_index}, slots={len(self._results)})"
        )

    def get(self, key: CacheKey, compute: Callable[[int], T]) -> T:
        """Return the value for ``key.index``, computing it when needed.

        Args:
            key: Cache key carrying the logical index and its series.
            compute: Pure function from logical index to value.

        Returns:
            The stored or freshly computed value.

        Raises:
            ContractViolationError: If the series context is malformed or the
                index maps to a slot before the start of the buffer.
        """
        series = key.series
        index = key.index
        if series is None:
            return self._compute(compute, index)

        removed, maximum, end = _read_context(series)

        if index < removed:
            logger.debug(
                "%s: bar %d already removed from series, using placeholder "
                "for indices below %d",
                type(self).__name__,
                index,
                removed,
            )
            self._increase_length_to(removed, maximum)
            self._highest_result_index = max(self._highest_result_index, removed)
            result = self._results[0]
            if result is _UNRESOLVED:
                result = self._compute(compute, below_range_index(index, removed))
                self._results[0] = result
            return result

        if index >= end:
            # Last bar may still be open
            return self._compute(compute, index)

        self._increase_length_to(index, maximum)
        if index > self._highest_result_index:
            self._highest_result_index = index
            result = self._compute(compute, index)
            self._results[-1] = result
            return result

        slot = self._slot_of(index)
        result = self._results[slot]
        if result is _UNRESOLVED:
            result = self._compute(compute, index)
            self._results[slot] = result
        return result

    def put(self, key: CacheKey, value: T) -> None:
        raise UnsupportedCacheOperationError(
            "Cannot manually put values in a sliding-window cache"
        )

    def clear(self) -> None:
        """Do nothing; the window maintains itself as the series advances."""

    def snapshot(self) -> dict[int, T]:
        """Return resolved values keyed by the logical index of their slot."""
        first = self._highest_result_index - len(self._results) + 1
        return {
            first + slot: value
            for slot, value in enumerate(self._results)
            if value is not _UNRESOLVED
        }

    def _compute(self, compute: Callable[[int], T], index: int) -> T:
        result = compute(index)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%r(%d): %r", self, index, result)
        if self._observer is not None:
            self._observer(index, result)
        return result

    def _slot_of(self, index: int) -> int:
        slot = len(self._results) - 1 - (self._highest_result_index - index)
        if slot < 0:
            raise ContractViolationError(
                f"index {index} maps to negative slot {slot} "
                f"(highest_result_index={self._highest_result_index}, "
                f"slots={len(self._results)})"
            )
        return slot

    def _increase_length_to(self, index: int, max_length: int) -> None:
        """Extend the buffer so its newest slot is logical ``index``.

        Args:
            index: Logical index the newest slot must reach.
            max_length: Maximum number of slots to keep.
        """
        if self._highest_result_index < 0:
            # First use
            self._results.extend([_UNRESOLVED] * min(index + 1, max_length))
            return

        new_results_count = min(index - self._highest_result_index, max_length)
        if new_results_count == max_length:
            # No overlap left with the current window
            self._results = [_UNRESOLVED] * max_length
            return
        if new_results_count > 0:
            self._results.extend([_UNRESOLVED] * new_results_count)
        self._remove_exceeding_results(max_length)

    def _remove_exceeding_results(self, max_length: int) -> None:
        excess = len(self._results) - max_length
        if excess > 0:
            del self._results[:excess]


def _read_context(series: BarSeriesPort) -> tuple[int, int, int]:
    """Return ``(removed, maximum, end)`` after validating them."""
    maximum = series.maximum_bar_count
    if maximum <= 0:
        raise ContractViolationError(
            f"maximum_bar_count must be > 0, got {maximum}"
        )
    removed = series.removed_bars_count
    if removed < 0:
        raise ContractViolationError(
            f"removed_bars_count must be >= 0, got {removed}"
        )
    end = series.end_index
    if end >= 0 and removed > end:
        raise ContractViolationError(
            f"removed_bars_count {removed} exceeds end_index {end}"
        )
    return removed, maximum, end
