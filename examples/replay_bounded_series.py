#!/usr/bin/env python3
"""Replay a bar stream through a bounded series with cached indicators.

This example demonstrates the full workflow:
  1. Build a bounded bar series from a SeriesConfig
  2. Stream synthetic bars in, updating the open bar with trades
  3. Query a cached SMA on every closed bar, as a back-test loop would
  4. Count how often the SMA was actually computed

Run:
    cd liq-indicators
    uv run python examples/replay_bounded_series.py
"""

from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime, timedelta

import numpy as np

from liq.indicators import (
    Bar,
    BaseBarSeries,
    ClosePriceIndicator,
    SeriesConfig,
    SMAIndicator,
    collect,
)

logger = logging.getLogger("replay")

# ---------------------------------------------------------------------------
# 1. Series with computation counting
# ---------------------------------------------------------------------------

computations: Counter[int] = Counter()

config = SeriesConfig(name="synthetic", maximum_bar_count=200)
series = BaseBarSeries.from_config(
    config, observer=lambda index, value: computations.update([index])
)
sma = SMAIndicator(ClosePriceIndicator(series), 20)

# ---------------------------------------------------------------------------
# 2. Stream bars
# ---------------------------------------------------------------------------


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    rng = np.random.default_rng(7)
    start = datetime(2024, 1, 1)
    price = 100.0

    for i in range(1_000):
        price += float(rng.standard_normal())
        series.add_bar(
            Bar(
                end_time=start + timedelta(minutes=i + 1),
                open_price=price,
                high_price=price,
                low_price=price,
                close_price=price,
            )
        )
        for _ in range(3):
            series.add_trade(price + float(rng.standard_normal()) * 0.1, 1.0)

        # 3. Strategy looks back over the last few closed bars
        for lag in range(1, 6):
            index = series.end_index - lag
            if index >= 0:
                sma.value(index)

    # 4. Report
    closed = collect(sma, stop=series.end_index - 1)
    logger.info("bars seen: %d, retained: %d", series.end_index + 1, series.bar_count)
    logger.info("distinct indices computed: %d", len(computations))
    logger.info("max computations for one index: %d", max(computations.values()))
    logger.info("latest closed SMA: %.4f", closed[-1])


if __name__ == "__main__":
    main()
