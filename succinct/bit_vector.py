"""Uncompressed, growable vectors of bits."""

from __future__ import annotations

from collections.abc import Iterator

from .bitvec import BitVecPush
from .elements import ElementIter
from .storage import USIZE, BlockType
from .vector_base import VectorBase

_MAX_BITS = (1 << 64) - 1


def _check_bit_length(length: int, who: str) -> None:
    if length < 0:
        raise ValueError(f"{who}: negative length")
    if length > _MAX_BITS:
        raise OverflowError(f"{who}: overflow")


class BitVector(BitVecPush):
    """A growable vector of bits packed into blocks, bit 0 least significant."""

    def __init__(self, block_type: BlockType = USIZE) -> None:
        self.block_type = block_type
        self._base = VectorBase(block_type)

    @classmethod
    def _from_base(cls, base: VectorBase) -> BitVector:
        result = cls(base.block_type)
        result._base = base
        return result

    # Construction.

    @classmethod
    def with_capacity(cls, capacity: int, block_type: BlockType = USIZE) -> BitVector:
        """An empty bit vector with room for ``capacity`` bits."""
        _check_bit_length(capacity, "BitVector.with_capacity")
        return cls._from_base(VectorBase.with_capacity(block_type, 1, capacity))

    @classmethod
    def block_with_capacity(cls, capacity: int, block_type: BlockType = USIZE) -> BitVector:
        """An empty bit vector with room for ``capacity`` blocks."""
        return cls._from_base(VectorBase.block_with_capacity(block_type, capacity))

    @classmethod
    def with_fill(cls, length: int, value: bool, block_type: BlockType = USIZE) -> BitVector:
        """A bit vector of ``length`` bits, each equal to ``value``."""
        _check_bit_length(length, "BitVector.with_fill")
        block_value = block_type.low_mask(block_type.nbits) if value else 0
        block_len = block_type.ceil_div_nbits(length)
        base = VectorBase.block_with_fill(block_type, 1, block_len, block_value)
        base.truncate(1, length)
        return cls._from_base(base)

    @classmethod
    def block_with_fill(
        cls, block_len: int, value: int, block_type: BlockType = USIZE
    ) -> BitVector:
        """A bit vector of ``block_len`` copies of the block ``value``."""
        return cls._from_base(VectorBase.block_with_fill(block_type, 1, block_len, value))

    # Capacity and size management.

    def capacity(self) -> int:
        """How many bits fit without reallocating."""
        return self._base.capacity(1)

    def block_capacity(self) -> int:
        """How many blocks fit without reallocating."""
        return self._base.block_capacity()

    def resize(self, new_len: int, value: bool) -> None:
        """Resize to ``new_len`` bits, filling new bits with ``value``."""
        _check_bit_length(new_len, "BitVector.resize")
        block_type = self.block_type
        new_block_len = block_type.ceil_div_nbits(new_len)

        if new_len < self.bit_len() or not value:
            self.block_resize(new_block_len, 0)
        else:
            trailing = block_type.last_block_bits(self.bit_len())
            for _ in range(block_type.nbits - trailing):
                self._base.push_bit(True)
            self.block_resize(new_block_len, block_type.low_mask(block_type.nbits))

        self._base.truncate(1, new_len)

    def block_resize(self, new_len: int, value: int) -> None:
        """Resize to ``new_len`` blocks, appending copies of the block ``value``."""
        self._base.block_resize(1, new_len, value)

    def reserve(self, additional: int) -> None:
        """Make room for at least ``additional`` more bits."""
        self._base.reserve(1, additional)

    def block_reserve(self, additional: int) -> None:
        """Make room for at least ``additional`` more blocks."""
        self._base.block_reserve(additional)

    def reserve_exact(self, additional: int) -> None:
        """Make room for ``additional`` more bits without over-allocating."""
        self._base.reserve_exact(1, additional)

    def block_reserve_exact(self, additional: int) -> None:
        """Make room for ``additional`` more blocks without over-allocating."""
        self._base.block_reserve_exact(additional)

    def shrink_to_fit(self) -> None:
        """Reduce the capacity to the blocks in use."""
        self._base.shrink_to_fit()

    def truncate(self, length: int) -> None:
        """Keep only the first ``length`` bits; does nothing if already shorter."""
        self._base.truncate(1, length)

    def block_truncate(self, block_len: int) -> None:
        """Keep only the first ``block_len`` blocks."""
        self._base.block_truncate(1, block_len)

    def clear(self) -> None:
        """Remove every bit, keeping the allocated capacity."""
        self._base.clear()

    # Bit vector operations.

    def bit_len(self) -> int:
        return len(self._base)

    def block_len(self) -> int:
        return self._base.block_len()

    def get_bit(self, index: int) -> bool:
        return self._base.get_bit(index)

    def get_block(self, index: int) -> int:
        return self._base.get_block(index)

    def set_bit(self, index: int, value: bool) -> None:
        self._base.set_bit(index, value)

    def set_block(self, index: int, value: int) -> None:
        self._base.set_block(1, index, value)

    def push_bit(self, value: bool) -> None:
        self._base.push_bit(value)

    def pop_bit(self) -> bool | None:
        return self._base.pop_bit()

    def push_block(self, value: int) -> None:
        self._base.push_block(1, value)

    # Python protocols.

    def __iter__(self) -> Iterator[bool]:
        return (bool(bit) for bit in ElementIter(1, self._base))

    def __reversed__(self) -> Iterator[bool]:
        elements = ElementIter(1, self._base)
        while (bit := elements.next_back()) is not None:
            yield bool(bit)

    def __len__(self) -> int:
        return self.bit_len()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitVector):
            return NotImplemented
        return self._base == other._base

    __hash__ = None  # type: ignore[assignment]

    def __format__(self, format_spec: str) -> str:
        spec = format_spec[:-1] if format_spec.endswith("b") else format_spec
        return format(str(self), spec)

    def __str__(self) -> str:
        return "".join("1" if bit else "0" for bit in self)

    def __repr__(self) -> str:
        return f"BitVector('{self}', block_type={self.block_type!r})"