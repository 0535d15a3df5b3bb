"""Plain readers of bar fields.

Reading a field off a bar is cheaper than any cache lookup, so these do not
extend :class:`~liq.indicators.base.CachedIndicator`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from liq.indicators.protocols import BarSeriesPort


class _BarFieldIndicator:
    _field: str

    def __init__(self, series: BarSeriesPort) -> None:
        self._series = series

    @property
    def series(self) -> BarSeriesPort:
        return self._series

    def value(self, index: int) -> float:
        return getattr(self._series.get_bar(index), self._field)

    def __repr__(self) -> str:
        return type(self).__name__


class ClosePriceIndicator(_BarFieldIndicator):
    _field = "close_price"


class VolumeIndicator(_BarFieldIndicator):
    _field = "volume"
