"""In-memory, optionally bounded bar series."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import numpy as np

from liq.indicators.caching.provider import CacheProvider
from liq.indicators.config import SeriesConfig
from liq.indicators.errors import BarIndexError, ConfigurationError, SeriesError
from liq.indicators.protocols import UNBOUNDED_BAR_COUNT, Observer
from liq.indicators.series.bar import Bar

logger = logging.getLogger(__name__)


class BaseBarSeries:
    """Append-only bar series with logical indices and front eviction.

    Logical indices start at 0 with the first bar and never get reused.  Once
    more than ``maximum_bar_count`` bars are held, the oldest are dropped and
    ``removed_bars_count`` grows accordingly; ``begin_index`` stays put.

    The last bar is considered open: it can be replaced until a newer bar is
    appended.
    """

    def __init__(
        self,
        name: str = "unnamed",
        bars: Iterable[Bar] | None = None,
        *,
        maximum_bar_count: int | None = None,
        cache_provider: CacheProvider | None = None,
    ) -> None:
        self.name = name
        self.cache_provider = cache_provider or CacheProvider()
        self._bars: list[Bar] = []
        self._removed_bars_count = 0
        self._begin_index = -1
        self._end_index = -1
        self._maximum_bar_count = UNBOUNDED_BAR_COUNT
        if maximum_bar_count is not None:
            self.set_maximum_bar_count(maximum_bar_count)
        for bar in bars or ():
            self.add_bar(bar)

    @classmethod
    def from_config(
        cls,
        config: SeriesConfig,
        bars: Iterable[Bar] | None = None,
        *,
        observer: Observer | None = None,
    ) -> BaseBarSeries:
        """Build a series (and its cache provider) from a :class:`SeriesConfig`."""
        return cls(
            config.name,
            bars,
            maximum_bar_count=config.maximum_bar_count,
            cache_provider=CacheProvider(config.cache, observer=observer),
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self.name!r}, "
            f"begin={self._begin_index}, end={self._end_index}, "
            f"removed={self._removed_bars_count})"
        )

    @property
    def begin_index(self) -> int:
        return self._begin_index

    @property
    def end_index(self) -> int:
        return self._end_index

    @property
    def removed_bars_count(self) -> int:
        return self._removed_bars_count

    @property
    def maximum_bar_count(self) -> int:
        return self._maximum_bar_count

    @property
    def bar_count(self) -> int:
        """Number of bars currently retained."""
        return len(self._bars)

    @property
    def is_empty(self) -> bool:
        return not self._bars

    @property
    def first_bar(self) -> Bar:
        if not self._bars:
            raise BarIndexError("series is empty")
        return self._bars[0]

    @property
    def last_bar(self) -> Bar:
        if not self._bars:
            raise BarIndexError("series is empty")
        return self._bars[-1]

    def set_maximum_bar_count(self, maximum_bar_count: int) -> None:
        """Bound the number of retained bars, evicting immediately if needed.

        Raises:
            ConfigurationError: If ``maximum_bar_count < 1``.
        """
        if maximum_bar_count < 1:
            raise ConfigurationError("maximum_bar_count must be >= 1")
        self._maximum_bar_count = maximum_bar_count
        self._remove_exceeding_bars()

    def get_bar(self, index: int) -> Bar:
        """Return the bar at logical ``index``.

        Indices that were already evicted resolve to the first retained bar.

        Raises:
            BarIndexError: If ``index`` is negative, beyond the end index, or
                the series is empty.
        """
        if index < 0 or index > self._end_index or not self._bars:
            raise BarIndexError(
                f"bar index {index} out of range [{self._begin_index}, {self._end_index}]"
            )
        inner_index = index - self._removed_bars_count
        if inner_index < 0:
            logger.debug(
                "bar %d already removed from %s, using %d-th instead",
                index,
                self.name,
                self._removed_bars_count,
            )
            inner_index = 0
        return self._bars[inner_index]

    def add_bar(self, bar: Bar, replace: bool = False) -> None:
        """Append ``bar``, or swap it in for the open bar when ``replace``.

        Raises:
            SeriesError: If ``replace`` is requested on an empty series, a
                new bar does not end after the current last bar, or a
                replacement does not end after the bar before it.
        """
        if replace:
            if not self._bars:
                raise SeriesError("cannot replace a bar in an empty series")
            if len(self._bars) > 1 and bar.end_time <= self._bars[-2].end_time:
                raise SeriesError(
                    f"cannot replace the open bar with one ending at {bar.end_time}, "
                    f"before or at the previous bar's end time {self._bars[-2].end_time}"
                )
            self._bars[-1] = bar
            return

        if self._bars and bar.end_time <= self._bars[-1].end_time:
            raise SeriesError(
                f"cannot add a bar ending at {bar.end_time} before or at the "
                f"series end time {self._bars[-1].end_time}"
            )
        self._bars.append(bar)
        if self._begin_index == -1:
            self._begin_index = 0
        self._end_index += 1
        self._remove_exceeding_bars()

    def add_trade(self, price: float, volume: float) -> None:
        """Fold a trade into the open (last) bar."""
        self.add_bar(self.last_bar.with_trade(price, volume), replace=True)

    def to_numpy(self) -> dict[str, np.ndarray]:
        """Return the retained OHLCV columns as ``float64`` arrays."""
        return {
            "open": np.array([b.open_price for b in self._bars], dtype=np.float64),
            "high": np.array([b.high_price for b in self._bars], dtype=np.float64),
            "low": np.array([b.low_price for b in self._bars], dtype=np.float64),
            "close": np.array([b.close_price for b in self._bars], dtype=np.float64),
            "volume": np.array([b.volume for b in self._bars], dtype=np.float64),
        }

    def _remove_exceeding_bars(self) -> None:
        excess = len(self._bars) - self._maximum_bar_count
        if excess > 0:
            del self._bars[:excess]
            self._removed_bars_count += excess
