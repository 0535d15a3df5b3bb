"""Simple moving average."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import numpy as np

from liq.indicators.base import CachedIndicator

if TYPE_CHECKING:
    from liq.indicators.protocols import CacheProviderPort, Indicator


class SMAIndicator(CachedIndicator[float]):
    """Arithmetic mean of the last ``bar_count`` values of ``indicator``.

    Near the start of the series the window shrinks to the available bars.
    """

    def __init__(
        self,
        indicator: Indicator[Any],
        bar_count: int,
        *,
        cache_provider: CacheProviderPort | None = None,
    ) -> None:
        if bar_count < 1:
            raise ValueError("bar_count must be >= 1")
        super().__init__(indicator, cache_provider=cache_provider)
        self._indicator = indicator
        self._bar_count = bar_count

    def calculate(self, index: int) -> float:
        start = max(0, index - self._bar_count + 1)
        window = np.fromiter(
            (self._indicator.value(i) for i in range(start, index + 1)),
            dtype=np.float64,
        )
        return float(window.mean())

    def __repr__(self) -> str:
        return f"SMAIndicator(bar_count={self._bar_count})"
