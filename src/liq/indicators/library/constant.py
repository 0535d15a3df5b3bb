"""Indicator returning the same value at every index."""

from __future__ import annotations

from typing import TypeVar

from liq.indicators.base import CachedIndicator

T = TypeVar("T")


class ConstantIndicator(CachedIndicator[T]):
    """Series-less indicator; its values are never cached."""

    def __init__(self, constant: T) -> None:
        super().__init__(None)
        self._constant = constant

    def calculate(self, index: int) -> T:
        return self._constant

    def __repr__(self) -> str:
        return f"ConstantIndicator({self._constant!r})"
