"""Shared test fixtures for liq-indicators."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta

import numpy as np
import pytest

from liq.indicators.series import Bar, BaseBarSeries

_START = datetime(2024, 1, 1)


@pytest.fixture
def make_bars() -> Callable[[int], list[Bar]]:
    """Factory for ``n`` consecutive one-minute bars with close = 1, 2, 3, ..."""

    def _make(n: int) -> list[Bar]:
        return [
            Bar(
                end_time=_START + timedelta(minutes=i + 1),
                open_price=float(i + 1),
                high_price=float(i + 1) + 0.5,
                low_price=float(i + 1) - 0.5,
                close_price=float(i + 1),
                volume=100.0 * (i + 1),
            )
            for i in range(n)
        ]

    return _make


@pytest.fixture
def sample_series() -> BaseBarSeries:
    """Deterministic 50-bar random-walk series."""
    rng = np.random.default_rng(42)
    n = 50
    close = 100.0 + np.cumsum(rng.standard_normal(n) * 0.5)
    bars = [
        Bar(
            end_time=_START + timedelta(minutes=i + 1),
            open_price=float(close[i] + rng.standard_normal() * 0.1),
            high_price=float(close[i] + abs(rng.standard_normal() * 0.3)),
            low_price=float(close[i] - abs(rng.standard_normal() * 0.3)),
            close_price=float(close[i]),
            volume=float(abs(rng.standard_normal() * 1000) + 1000),
        )
        for i in range(n)
    ]
    return BaseBarSeries("sample", bars)
