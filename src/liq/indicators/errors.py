"""Exception hierarchy for liq-indicators.

All exceptions inherit from :class:`LiqIndicatorsError`.  Consumers can catch
``LiqIndicatorsError`` for a blanket handler or individual subclasses for
fine-grained control.

Contract violations signal caller bugs and are never recovered from inside
the library.  Redirecting queries below the retained window is defined
behaviour and raises nothing.
"""

from __future__ import annotations


class LiqIndicatorsError(Exception):
    """Base exception for all liq-indicators errors."""


class CacheError(LiqIndicatorsError):
    """Raised when an indicator value cache is misused."""


class ContractViolationError(CacheError, RuntimeError):
    """Raised when a cache detects a programming error.

    Trigger conditions:

    - A logical index translates to a negative physical slot.
    - The series context is malformed (``maximum_bar_count <= 0``,
      negative removed count, removed count beyond the end index).
    """


class UnsupportedCacheOperationError(CacheError, NotImplementedError):
    """Raised when a cache strategy does not support the requested operation.

    The sliding-window cache only accepts values through its lazy compute
    path, so ``put`` always raises this.
    """


class SeriesError(LiqIndicatorsError):
    """Raised on invalid bar series operations.

    Trigger conditions:

    - A bar is appended whose end time is not after the last bar's.
    - ``replace=True`` is used on an empty series.
    """


class BarIndexError(SeriesError, IndexError):
    """Raised when a bar is requested outside the series' index range."""


class ConfigurationError(LiqIndicatorsError):
    """Raised when liq-indicators configuration is invalid.

    Trigger conditions:

    - ``maximum_size < 1`` or ``maximum_bar_count < 1``.
    - An unknown cache strategy name.

    Raised at construction time (fail-fast).
    """
