"""Tests for the sliding-window NativeIndicatorValueCache."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from unittest.mock import MagicMock

import pytest

from liq.indicators.caching.key import CacheKey
from liq.indicators.caching.native import NativeIndicatorValueCache
from liq.indicators.errors import (
    CacheError,
    ContractViolationError,
    UnsupportedCacheOperationError,
)
from liq.indicators.protocols import UNBOUNDED_BAR_COUNT, IndicatorValueCache

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


@dataclass
class FakeSeries:
    """Mutable series context; bars are just their own index."""

    end_index: int
    removed_bars_count: int = 0
    maximum_bar_count: int = UNBOUNDED_BAR_COUNT
    begin_index: int = 0

    def get_bar(self, index: int) -> int:
        return index

    def advance_to(self, end_index: int) -> None:
        """Append bars up to ``end_index``, evicting past the maximum."""
        self.end_index = end_index
        self.removed_bars_count = max(0, end_index + 1 - self.maximum_bar_count)


def _compute() -> MagicMock:
    return MagicMock(side_effect=lambda i: f"v{i}")


def _key(series: FakeSeries | None, index: int) -> CacheKey:
    return CacheKey(index=index, bar=index, series=series)


@pytest.fixture
def evicted_series() -> FakeSeries:
    """Indices 0..9 seen, oldest five evicted, bar 9 still open."""
    return FakeSeries(end_index=9, removed_bars_count=5, maximum_bar_count=5)


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestWithinWindow:
    """Indices between the removed count and the end index."""

    def test_computes_once_then_serves_stored_value(
        self, evicted_series: FakeSeries
    ) -> None:
        cache: NativeIndicatorValueCache[str] = NativeIndicatorValueCache()
        compute = _compute()

        first = cache.get(_key(evicted_series, 5), compute)
        second = cache.get(_key(evicted_series, 5), compute)

        assert first == second == "v5"
        compute.assert_called_once_with(5)

    def test_back_fills_older_index_inside_window(
        self, evicted_series: FakeSeries
    ) -> None:
        cache: NativeIndicatorValueCache[str] = NativeIndicatorValueCache()
        compute = _compute()

        cache.get(_key(evicted_series, 8), compute)
        assert cache.get(_key(evicted_series, 6), compute) == "v6"
        assert cache.get(_key(evicted_series, 6), compute) == "v6"

        assert compute.call_count == 2
        assert cache.snapshot() == {6: "v6", 8: "v8"}

    def test_sequential_fill_unbounded(self) -> None:
        series = FakeSeries(end_index=1000)
        cache: NativeIndicatorValueCache[str] = NativeIndicatorValueCache()
        compute = _compute()

        for i in range(1000):
            assert cache.get(_key(series, i), compute) == f"v{i}"
        assert len(cache) == 1000
        assert compute.call_count == 1000

        for i in range(1000):
            assert cache.get(_key(series, i), compute) == f"v{i}"
        assert compute.call_count == 1000

    def test_none_is_a_storable_value(self) -> None:
        series = FakeSeries(end_index=10)
        cache: NativeIndicatorValueCache[None] = NativeIndicatorValueCache()
        compute = MagicMock(return_value=None)

        assert cache.get(_key(series, 3), compute) is None
        assert cache.get(_key(series, 3), compute) is None

        compute.assert_called_once_with(3)


class TestFrontier:
    """The end index may be an open bar and is never cached."""

    def test_end_index_recomputed_every_call(self, evicted_series: FakeSeries) -> None:
        cache: NativeIndicatorValueCache[float] = NativeIndicatorValueCache()
        compute = MagicMock(side_effect=[1.0, 2.0])

        assert cache.get(_key(evicted_series, 9), compute) == 1.0
        assert cache.get(_key(evicted_series, 9), compute) == 2.0

        assert compute.call_count == 2
        assert cache.snapshot() == {}

    def test_open_bar_becomes_cacheable_once_closed(
        self, evicted_series: FakeSeries
    ) -> None:
        cache: NativeIndicatorValueCache[str] = NativeIndicatorValueCache()
        compute = _compute()

        cache.get(_key(evicted_series, 9), compute)
        cache.get(_key(evicted_series, 9), compute)
        assert compute.call_count == 2

        evicted_series.advance_to(10)
        cache.get(_key(evicted_series, 9), compute)
        cache.get(_key(evicted_series, 9), compute)

        assert compute.call_count == 3
        assert cache.snapshot()[9] == "v9"

    def test_index_past_end_not_stored(self, evicted_series: FakeSeries) -> None:
        cache: NativeIndicatorValueCache[str] = NativeIndicatorValueCache()
        compute = _compute()

        cache.get(_key(evicted_series, 42), compute)

        assert cache.highest_result_index == -1
        assert len(cache) == 0


class TestBelowWindow:
    """Indices the series already evicted collapse to one placeholder."""

    def test_placeholder_computed_for_index_zero_once(
        self, evicted_series: FakeSeries
    ) -> None:
        cache: NativeIndicatorValueCache[str] = NativeIndicatorValueCache()
        compute = _compute()
        cache.get(_key(evicted_series, 5), compute)

        assert cache.get(_key(evicted_series, 3), compute) == "v0"
        assert cache.get(_key(evicted_series, 2), compute) == "v0"

        assert [c.args for c in compute.call_args_list] == [(5,), (0,)]

    def test_below_window_on_empty_cache(self, evicted_series: FakeSeries) -> None:
        cache: NativeIndicatorValueCache[str] = NativeIndicatorValueCache()
        compute = _compute()

        assert cache.get(_key(evicted_series, 1), compute) == "v0"

        assert cache.highest_result_index == 5
        assert len(cache) == 5
        # Index 5 itself is still unresolved and computed on demand
        assert cache.get(_key(evicted_series, 5), compute) == "v5"

    def test_oldest_retained_index_keeps_its_own_value(self) -> None:
        series = FakeSeries(end_index=0, maximum_bar_count=5)
        cache: NativeIndicatorValueCache[str] = NativeIndicatorValueCache()
        compute = _compute()

        for end in range(1, 21):
            series.advance_to(end)
            cache.get(_key(series, end - 1), compute)
        assert series.removed_bars_count == 16
        assert compute.call_count == 20

        assert cache.get(_key(series, 16), compute) == "v16"
        placeholder = cache.get(_key(series, 10), compute)
        assert cache.get(_key(series, 3), compute) == placeholder
        assert compute.call_count == 20


class TestWindowBound:
    """Buffer length never exceeds the series' maximum bar count."""

    def test_length_bounded_while_series_advances(self) -> None:
        series = FakeSeries(end_index=0, maximum_bar_count=5)
        cache: NativeIndicatorValueCache[str] = NativeIndicatorValueCache()
        compute = _compute()

        for end in range(1, 60):
            series.advance_to(end)
            cache.get(_key(series, end - 1), compute)
            cache.get(_key(series, max(0, end - 3)), compute)
            cache.get(_key(series, 0), compute)
            assert len(cache) <= 5

    def test_large_jump_resets_buffer(self) -> None:
        series = FakeSeries(end_index=0, maximum_bar_count=5)
        series.advance_to(100)
        cache: NativeIndicatorValueCache[str] = NativeIndicatorValueCache()
        compute = _compute()
        cache.get(_key(series, 98), compute)

        series.advance_to(200)
        assert cache.get(_key(series, 199), compute) == "v199"

        assert len(cache) == 5
        assert cache.snapshot() == {199: "v199"}

    def test_small_step_truncates_front(self) -> None:
        series = FakeSeries(end_index=0, maximum_bar_count=5)
        series.advance_to(10)
        cache: NativeIndicatorValueCache[str] = NativeIndicatorValueCache()
        compute = _compute()
        cache.get(_key(series, 7), compute)
        cache.get(_key(series, 9), compute)

        series.advance_to(12)
        cache.get(_key(series, 11), compute)

        assert len(cache) == 5
        assert cache.snapshot() == {7: "v7", 9: "v9", 11: "v11"}


class TestHighWaterMark:
    def test_never_decreases(self, evicted_series: FakeSeries) -> None:
        cache: NativeIndicatorValueCache[str] = NativeIndicatorValueCache()
        compute = _compute()
        seen = []

        for index in (5, 8, 2, 6, 9, 0, 7):
            cache.get(_key(evicted_series, index), compute)
            seen.append(cache.highest_result_index)

        assert seen == sorted(seen)
        assert seen[-1] == 8


class TestWithoutSeries:
    def test_always_computes(self) -> None:
        cache: NativeIndicatorValueCache[str] = NativeIndicatorValueCache()
        compute = _compute()

        cache.get(_key(None, 3), compute)
        cache.get(_key(None, 3), compute)

        assert compute.call_count == 2
        assert cache.snapshot() == {}


class TestContract:
    def test_put_unsupported(self, evicted_series: FakeSeries) -> None:
        cache: NativeIndicatorValueCache[str] = NativeIndicatorValueCache()

        with pytest.raises(UnsupportedCacheOperationError):
            cache.put(_key(evicted_series, 5), "x")

    def test_put_error_is_not_implemented_error(
        self, evicted_series: FakeSeries
    ) -> None:
        cache: NativeIndicatorValueCache[str] = NativeIndicatorValueCache()

        with pytest.raises(NotImplementedError):
            cache.put(_key(evicted_series, 5), "x")

    def test_clear_keeps_values(self, evicted_series: FakeSeries) -> None:
        cache: NativeIndicatorValueCache[str] = NativeIndicatorValueCache()
        compute = _compute()
        cache.get(_key(evicted_series, 6), compute)

        cache.clear()

        assert cache.snapshot() == {6: "v6"}
        cache.get(_key(evicted_series, 6), compute)
        compute.assert_called_once_with(6)

    def test_non_positive_maximum_rejected(self) -> None:
        series = FakeSeries(end_index=10, maximum_bar_count=0)
        cache: NativeIndicatorValueCache[str] = NativeIndicatorValueCache()

        with pytest.raises(ContractViolationError, match="maximum_bar_count"):
            cache.get(_key(series, 3), _compute())

    def test_removed_beyond_end_rejected(self) -> None:
        series = FakeSeries(end_index=4, removed_bars_count=7, maximum_bar_count=5)
        cache: NativeIndicatorValueCache[str] = NativeIndicatorValueCache()

        with pytest.raises(ContractViolationError, match="exceeds end_index"):
            cache.get(_key(series, 2), _compute())

    def test_negative_removed_count_rejected(self) -> None:
        series = FakeSeries(end_index=4, removed_bars_count=-1)
        cache: NativeIndicatorValueCache[str] = NativeIndicatorValueCache()

        with pytest.raises(ContractViolationError):
            cache.get(_key(series, 2), _compute())

    def test_negative_slot_rejected(self) -> None:
        # Claims no eviction although it holds more bars than its maximum
        series = FakeSeries(end_index=100, maximum_bar_count=5)
        cache: NativeIndicatorValueCache[str] = NativeIndicatorValueCache()
        cache.get(_key(series, 50), _compute())

        with pytest.raises(ContractViolationError, match="negative slot"):
            cache.get(_key(series, 10), _compute())

    def test_contract_violation_is_cache_error(self) -> None:
        assert issubclass(ContractViolationError, CacheError)

    def test_implements_value_cache_protocol(self) -> None:
        assert isinstance(NativeIndicatorValueCache(), IndicatorValueCache)


class TestObservability:
    def test_observer_sees_every_computation(
        self, evicted_series: FakeSeries
    ) -> None:
        observer = MagicMock()
        cache: NativeIndicatorValueCache[str] = NativeIndicatorValueCache(
            observer=observer
        )
        compute = _compute()

        cache.get(_key(evicted_series, 6), compute)
        cache.get(_key(evicted_series, 6), compute)
        cache.get(_key(evicted_series, 9), compute)
        cache.get(_key(evicted_series, 1), compute)

        assert [c.args for c in observer.call_args_list] == [
            (6, "v6"),
            (9, "v9"),
            (0, "v0"),
        ]

    def test_below_window_logged_at_debug(
        self, evicted_series: FakeSeries, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.DEBUG, logger="liq.indicators.caching.native")
        cache: NativeIndicatorValueCache[str] = NativeIndicatorValueCache()

        cache.get(_key(evicted_series, 2), _compute())

        assert "already removed" in caplog.text
