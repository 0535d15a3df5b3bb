"""Cache provider: one fresh value cache per indicator."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from liq.indicators.caching.mapped import MappedIndicatorValueCache
from liq.indicators.caching.native import NativeIndicatorValueCache
from liq.indicators.caching.passthrough import PassthroughIndicatorValueCache
from liq.indicators.config import CacheConfig
from liq.indicators.errors import ConfigurationError
from liq.indicators.protocols import IndicatorValueCache, Observer

CacheFactory = Callable[[CacheConfig, Observer | None], IndicatorValueCache[Any]]

_FACTORIES: dict[str, CacheFactory] = {
    "native": lambda config, observer: NativeIndicatorValueCache(observer=observer),
    "mapped": lambda config, observer: MappedIndicatorValueCache(config.maximum_size),
    "passthrough": lambda config, observer: PassthroughIndicatorValueCache(),
}


class CacheProvider:
    """Builds value caches according to a :class:`CacheConfig`.

    Indicators must never share a cache, so :meth:`get_cache` returns a new
    instance on every call.

    Args:
        config: Cache configuration.  Defaults to the sliding-window strategy.
        observer: Optional ``observer(index, value)`` callback forwarded to
            sliding-window caches.

    Raises:
        ConfigurationError: If the configured strategy is unknown.
    """

    def __init__(
        self,
        config: CacheConfig | None = None,
        *,
        observer: Observer | None = None,
    ) -> None:
        self.config = config or CacheConfig()
        if self.config.strategy not in _FACTORIES:
            raise ConfigurationError(f"unknown cache strategy: {self.config.strategy!r}")
        self._observer = observer

    def get_cache(self) -> IndicatorValueCache[Any]:
        return _FACTORIES[self.config.strategy](self.config, self._observer)


def available_strategies() -> list[str]:
    """Return the names accepted by ``CacheConfig.strategy``."""
    return sorted(_FACTORIES)
