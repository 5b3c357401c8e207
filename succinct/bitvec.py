"""Bit vector interfaces, plus adapters for block lists, bool lists and single words."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from .storage import U8, USIZE, BlockType, ceil_div


def _check_span(start: int, count: int, length: int, who: str) -> None:
    if start < 0 or count < 0 or start + count > length:
        raise IndexError(f"{who}: out of bounds")


def _check_block_value(block_type: BlockType, value: int, who: str) -> None:
    if not 0 <= value <= block_type.low_mask(block_type.nbits):
        raise ValueError(f"{who}: value does not fit in a {block_type.nbits}-bit block")


class BitVec(ABC):
    """Read-only bit vector operations.

    Subclasses must provide ``bit_len`` and at least one of ``get_bit`` or
    ``get_block``, since each default is written in terms of the other.
    """

    block_type: BlockType

    @abstractmethod
    def bit_len(self) -> int:
        """The length in bits."""

    def block_len(self) -> int:
        """The length in blocks."""
        return ceil_div(self.bit_len(), self.block_type.nbits)

    def get_bit(self, position: int) -> bool:
        """The bit at ``position``."""
        if not 0 <= position < self.bit_len():
            raise IndexError("BitVec.get_bit: out of bounds")
        address = self.block_type.address(position)
        block = self.get_block(address.block_index)
        return self.block_type.get_bit(block, address.bit_offset)

    def get_block(self, position: int) -> int:
        """The block at ``position``, bit 0 least significant.

        Bits past the end of the vector read as zero. This default reads bit
        by bit and is slow.
        """
        if not 0 <= position < self.block_len():
            raise IndexError("BitVec.get_block: out of bounds")
        nbits = self.block_type.nbits
        base = position * nbits
        end = min(base + nbits, self.bit_len())
        return sum(1 << (index - base) for index in range(base, end) if self.get_bit(index))

    def get_bits(self, start: int, count: int) -> int:
        """``count`` bits from ``start``, read as a little-endian integer."""
        _check_span(start, count, self.bit_len(), "BitVec.get_bits")
        block_type = self.block_type
        address = block_type.address(start)
        margin = block_type.nbits - address.bit_offset
        first = self.get_block(address.block_index)

        if margin >= count:
            return block_type.get_bits(first, address.bit_offset, count)

        second = self.get_block(address.block_index + 1)
        low_bits = block_type.get_bits(first, address.bit_offset, margin)
        high_bits = block_type.get_bits(second, 0, count - margin)
        return (high_bits << margin) | low_bits


class BitVecMut(BitVec):
    """Bit vector operations that modify bits without changing the length.

    Subclasses must override at least one of ``set_bit`` or ``set_block``.
    """

    def set_bit(self, position: int, value: bool) -> None:
        """Set the bit at ``position`` to ``value``."""
        if not 0 <= position < self.bit_len():
            raise IndexError("BitVecMut.set_bit: out of bounds")
        address = self.block_type.address(position)
        old_block = self.get_block(address.block_index)
        new_block = self.block_type.with_bit(old_block, address.bit_offset, value)
        self.set_block(address.block_index, new_block)

    def set_block(self, position: int, value: int) -> None:
        """Set the block at ``position``, leaving bits past the end untouched.

        This default writes bit by bit and is slow.
        """
        block_type = self.block_type
        if position + 1 == self.block_len():
            limit = block_type.last_block_bits(self.bit_len())
        else:
            limit = block_type.nbits
        start = block_type.mul_nbits(position)
        for offset in range(limit):
            self.set_bit(start + offset, bool(value >> offset & 1))

    def set_bits(self, start: int, count: int, value: int) -> None:
        """Write the low ``count`` bits of ``value`` starting at ``start``."""
        _check_span(start, count, self.bit_len(), "BitVecMut.set_bits")
        block_type = self.block_type
        address = block_type.address(start)
        margin = block_type.nbits - address.bit_offset
        old_first = self.get_block(address.block_index)

        if margin >= count:
            new_block = block_type.with_bits(old_first, address.bit_offset, count, value)
            self.set_block(address.block_index, new_block)
            return

        old_second = self.get_block(address.block_index + 1)
        new_first = block_type.with_bits(old_first, address.bit_offset, margin, value)
        new_second = block_type.with_bits(old_second, 0, count - margin, value >> margin)
        self.set_block(address.block_index, new_first)
        self.set_block(address.block_index + 1, new_second)


class BitVecPush(BitVecMut):
    """Bit vector operations that change the length."""

    @abstractmethod
    def push_bit(self, value: bool) -> None:
        """Append a bit."""

    @abstractmethod
    def pop_bit(self) -> bool | None:
        """Remove and return the last bit, or None when empty."""

    def align_block(self, value: bool) -> None:
        """Push ``value`` until the length is a whole number of blocks."""
        while self.block_type.mod_nbits(self.bit_len()):
            self.push_bit(value)

    def push_block(self, value: int) -> None:
        """Pad with zeros to a block boundary, then append a whole block."""
        self.align_block(False)
        for offset in range(self.block_type.nbits):
            self.push_bit(bool(value >> offset & 1))


class BlockArray(BitVecMut):
    """A fixed-length list of blocks viewed as a bit vector."""

    def __init__(self, blocks: Iterable[int] = (), block_type: BlockType = USIZE) -> None:
        self.block_type = block_type
        self._blocks = list(blocks)
        for block in self._blocks:
            _check_block_value(block_type, block, "BlockArray")

    def bit_len(self) -> int:
        return len(self._blocks) * self.block_type.nbits

    def block_len(self) -> int:
        return len(self._blocks)

    def get_block(self, position: int) -> int:
        if not 0 <= position < len(self._blocks):
            raise IndexError("BlockArray.get_block: out of bounds")
        return self._blocks[position]

    def set_block(self, position: int, value: int) -> None:
        if not 0 <= position < len(self._blocks):
            raise IndexError("BlockArray.set_block: out of bounds")
        _check_block_value(self.block_type, value, "BlockArray.set_block")
        self._blocks[position] = value

    def __iter__(self) -> Iterator[int]:
        return iter(self._blocks)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BlockArray):
            return NotImplemented
        return self.block_type == other.block_type and self._blocks == other._blocks

    def __repr__(self) -> str:
        return f"BlockArray({self._blocks!r}, block_type={self.block_type!r})"


class BoolVec(BitVecPush):
    """A growable list of booleans viewed as a bit vector with byte blocks."""

    block_type = U8

    def __init__(self, bits: Iterable[bool] = ()) -> None:
        self._bits = [bool(bit) for bit in bits]

    def bit_len(self) -> int:
        return len(self._bits)

    def get_bit(self, position: int) -> bool:
        if not 0 <= position < len(self._bits):
            raise IndexError("BoolVec.get_bit: out of bounds")
        return self._bits[position]

    def set_bit(self, position: int, value: bool) -> None:
        if not 0 <= position < len(self._bits):
            raise IndexError("BoolVec.set_bit: out of bounds")
        self._bits[position] = bool(value)

    def push_bit(self, value: bool) -> None:
        self._bits.append(bool(value))

    def pop_bit(self) -> bool | None:
        return self._bits.pop() if self._bits else None

    def __iter__(self) -> Iterator[bool]:
        return iter(self._bits)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoolVec):
            return NotImplemented
        return self._bits == other._bits

    def __repr__(self) -> str:
        return f"BoolVec({self._bits!r})"


@dataclass
class Word(BitVecMut):
    """A single block viewed as a bit vector of exactly one block."""

    value: int = 0
    block_type: BlockType = USIZE

    def __post_init__(self) -> None:
        _check_block_value(self.block_type, self.value, "Word")

    def bit_len(self) -> int:
        return self.block_type.nbits

    def block_len(self) -> int:
        return 1

    def get_bit(self, position: int) -> bool:
        if not 0 <= position < self.bit_len():
            raise IndexError("Word.get_bit: out of bounds")
        return self.block_type.get_bit(self.value, position)

    def get_block(self, position: int) -> int:
        if position != 0:
            raise IndexError("Word.get_block: out of bounds")
        return self.value

    def get_bits(self, start: int, count: int) -> int:
        _check_span(start, count, self.bit_len(), "Word.get_bits")
        return self.block_type.get_bits(self.value, start, count)

    def set_bit(self, position: int, value: bool) -> None:
        if not 0 <= position < self.bit_len():
            raise IndexError("Word.set_bit: out of bounds")
        self.value = self.block_type.with_bit(self.value, position, value)

    def set_block(self, position: int, value: int) -> None:
        if position != 0:
            raise IndexError("Word.set_block: out of bounds")
        _check_block_value(self.block_type, value, "Word.set_block")
        self.value = value

    def set_bits(self, start: int, count: int, value: int) -> None:
        _check_span(start, count, self.bit_len(), "Word.set_bits")
        self.value = self.block_type.with_bits(self.value, start, count, value)