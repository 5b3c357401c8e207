"""Iteration over the equal-width elements stored in a ``VectorBase``."""

from __future__ import annotations

from collections.abc import Iterator

from .vector_base import VectorBase


class ElementIter(Iterator[int]):
    """A double-ended iterator over the elements of a ``VectorBase``.

    Elements are taken from the front with ``next()`` and from the back
    with ``next_back()``; the two ends meet in the middle.
    """

    def __init__(self, element_bits: int, data: VectorBase) -> None:
        if element_bits <= 0:
            raise ValueError("ElementIter: element size must be positive")
        self._element_bits = element_bits
        self._data = data
        self._start = 0
        self._limit = len(data)

    def _element(self, index: int) -> int:
        bits = self._element_bits
        return self._data.get_bits(bits, bits * index, bits)

    def __iter__(self) -> ElementIter:
        return self

    def __next__(self) -> int:
        if self._start >= self._limit:
            raise StopIteration
        result = self._element(self._start)
        self._start += 1
        return result

    def __len__(self) -> int:
        return self._limit - self._start

    def next_back(self) -> int | None:
        """Take the last remaining element, or return None when exhausted."""
        if self._start >= self._limit:
            return None
        self._limit -= 1
        return self._element(self._limit)

    def nth(self, n: int) -> int | None:
        """Skip ``n`` elements and take the next one, or return None."""
        if n < 0:
            raise ValueError("ElementIter.nth: negative count")
        self._start = min(self._start + n, self._limit)
        return next(self, None)