"""Bar and bar series implementations."""

from liq.indicators.series.bar import Bar
from liq.indicators.series.base_series import BaseBarSeries

__all__ = ["Bar", "BaseBarSeries"]
