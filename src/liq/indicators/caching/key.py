"""Cache key passed from indicators to value caches."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from liq.indicators.protocols import BarSeriesPort


@dataclass(frozen=True, slots=True)
class CacheKey:
    """Logical index plus the bar and series it was resolved against.

    ``bar`` is opaque to the caches: the sliding-window cache ignores it and
    the mapped cache only hashes it.
    """

    index: int
    bar: Any = None
    series: BarSeriesPort | None = None
