"""Index redirection for queries that fall below the known range.

Both the sliding-window cache (indices already evicted from the series) and
the indicator base (indices before the series' begin index) route such
queries through :func:`below_range_index`, so the two layers cannot drift
apart.
"""

from __future__ import annotations

#: Logical index every below-range query is computed for.
LEGACY_BELOW_RANGE_INDEX = 0


def below_range_index(index: int, floor: int) -> int:
    """Return the index to compute instead of ``index`` when ``index < floor``.

    The natural answer would be ``floor`` (the earliest index still known).
    Historical behaviour computes index 0 instead and callers depend on the
    resulting values, so that is kept.

    Args:
        index: The requested logical index.
        floor: The lowest index that is still individually addressable.

    Returns:
        The logical index to pass to the compute function.
    """
    return LEGACY_BELOW_RANGE_INDEX
