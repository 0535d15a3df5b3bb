"""Immutable OHLCV bar."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Bar:
    """One closed (or still forming) OHLCV observation.

    Bars are immutable: updating the open bar means building a new one
    (see :meth:`with_trade`) and swapping it in with
    ``series.add_bar(bar, replace=True)``.
    """

    end_time: datetime
    open_price: float
    high_price: float
    low_price: float
    close_price: float
    volume: float = 0.0
    amount: float = 0.0
    trades: int = 0

    def with_trade(self, price: float, volume: float) -> Bar:
        """Return a copy of this bar updated with one more trade."""
        return replace(
            self,
            high_price=max(self.high_price, price),
            low_price=min(self.low_price, price),
            close_price=price,
            volume=self.volume + volume,
            amount=self.amount + price * volume,
            trades=self.trades + 1,
        )
