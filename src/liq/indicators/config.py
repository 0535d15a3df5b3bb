"""Configuration models for liq-indicators (Pydantic v2).

Provides frozen Pydantic models that validate all parameters at construction
time (fail-fast).  Invalid values raise
:class:`~liq.indicators.errors.ConfigurationError`.
"""

from __future__ import annotations

from typing import Literal, Self

from pydantic import BaseModel, model_validator

from liq.indicators.errors import ConfigurationError

CacheStrategy = Literal["native", "mapped", "passthrough"]


class CacheConfig(BaseModel, frozen=True):
    """Configuration for the indicator value caches handed out by a provider.

    Attributes:
        strategy: Memoization strategy.  ``"native"`` is the sliding-window
            cache bounded by the series' maximum bar count, ``"mapped"`` a
            dictionary keyed by bar, ``"passthrough"`` disables caching.
        maximum_size: Upper bound on entries for the ``"mapped"`` strategy.
            ``None`` means unbounded.  Ignored by the other strategies.
    """

    strategy: CacheStrategy = "native"
    maximum_size: int | None = None

    @model_validator(mode="after")
    def _validate_cache(self) -> Self:
        if self.maximum_size is not None and self.maximum_size < 1:
            raise ConfigurationError("maximum_size must be >= 1 when set")
        return self


class SeriesConfig(BaseModel, frozen=True):
    """Configuration for an in-memory bar series.

    Attributes:
        name: Human readable series name.
        maximum_bar_count: Number of bars retained before the oldest ones
            are evicted.  ``None`` means unbounded.
        cache: Cache configuration for indicators built on the series.
    """

    name: str = "unnamed"
    maximum_bar_count: int | None = None
    cache: CacheConfig = CacheConfig()

    @model_validator(mode="after")
    def _validate_series(self) -> Self:
        if self.maximum_bar_count is not None and self.maximum_bar_count < 1:
            raise ConfigurationError("maximum_bar_count must be >= 1 when set")
        return self
