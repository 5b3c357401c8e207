"""Overflow-free averaging and binary search over monotone functions."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any


def average(x: int, y: int) -> int:
    """The floor of the mean of two non-negative integers, computed by halves."""
    return (x >> 1) + (y >> 1) + (((x & 1) + (y & 1)) >> 1)


def binary_search_function(
    start: int, limit: int, value: Any, f: Callable[[int], Any]
) -> int | None:
    """Smallest ``d`` in ``range(start, limit)`` with ``f(d) >= value``.

    ``f`` must be non-decreasing; it is never called outside the range.
    Returns None if no such ``d`` exists.
    """
    if start >= limit:
        return None
    if f(start) >= value:
        return start

    # The answer is not ``start``, so ``mid - 1`` always stays in range.
    start += 1
    while start < limit:
        mid = average(start, limit)
        if f(mid) >= value:
            if f(mid - 1) < value:
                return mid
            limit = mid
        else:
            start = mid + 1
    return None