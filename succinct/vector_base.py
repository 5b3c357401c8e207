"""Growable block storage shared by bit vectors and integer vectors."""

from __future__ import annotations

from .storage import USIZE, BlockType

_MAX_BITS = (1 << 64) - 1


def _len_to_block_len(block_type: BlockType, element_bits: int, length: int) -> int:
    total_bits = length * element_bits
    if total_bits > _MAX_BITS:
        raise OverflowError("VectorBase: bit length overflows a 64-bit index")
    return block_type.ceil_div_nbits(total_bits)


class VectorBase:
    """Blocks holding a sequence of equal-width elements.

    The element width is passed to each method rather than stored. Two
    invariants are kept:

    1. every block is in use storing elements, and
    2. bits past the last element are zero,

    so that equality can compare the blocks directly.
    """

    def __init__(self, block_type: BlockType = USIZE) -> None:
        self.block_type = block_type
        self._length = 0
        self._blocks: list[int] = []
        self._capacity = 0

    # Construction.

    @classmethod
    def block_with_capacity(cls, block_type: BlockType, block_capacity: int) -> VectorBase:
        """An empty vector with room for ``block_capacity`` blocks."""
        if block_capacity < 0:
            raise ValueError("VectorBase.block_with_capacity: negative capacity")
        result = cls(block_type)
        result._capacity = block_capacity
        return result

    @classmethod
    def with_capacity(
        cls, block_type: BlockType, element_bits: int, capacity: int
    ) -> VectorBase:
        """An empty vector with room for ``capacity`` elements."""
        blocks = _len_to_block_len(block_type, element_bits, capacity)
        return cls.block_with_capacity(block_type, blocks)

    @classmethod
    def block_with_fill(
        cls, block_type: BlockType, element_bits: int, block_len: int, fill: int
    ) -> VectorBase:
        """A vector of ``block_len`` copies of the block ``fill``."""
        result = cls(block_type)
        result._check_block(fill, "VectorBase.block_with_fill")
        result._blocks = [fill] * block_len
        result._capacity = block_len
        result._set_len_from_blocks(element_bits)
        return result

    @classmethod
    def with_fill(
        cls, block_type: BlockType, element_bits: int, length: int, value: int
    ) -> VectorBase:
        """A vector of ``length`` elements, each equal to ``value``."""
        block_len = _len_to_block_len(block_type, element_bits, length)
        result = cls(block_type)
        result._blocks = [0] * block_len
        result._capacity = block_len
        result._length = length
        for index in range(length):
            result.set_bits(element_bits, index * element_bits, element_bits, value)
        return result

    # Internal helpers.

    def _check_block(self, value: int, who: str) -> None:
        if not 0 <= value <= self.block_type.low_mask(self.block_type.nbits):
            raise ValueError(f"{who}: value does not fit in a block")

    def _min_capacity(self) -> int:
        return 8 if self.block_type.nbits == 8 else 4

    def _grow_to(self, required: int) -> None:
        if required > self._capacity:
            self._capacity = max(required, 2 * self._capacity, self._min_capacity())

    def _append_block(self, value: int) -> None:
        self._grow_to(len(self._blocks) + 1)
        self._blocks.append(value)

    def _resize_blocks(self, block_len: int, fill: int) -> None:
        current = len(self._blocks)
        if block_len > current:
            self._grow_to(block_len)
            self._blocks.extend([fill] * (block_len - current))
        else:
            del self._blocks[block_len:]

    def _clear_extra_bits(self, element_bits: int) -> None:
        if self._blocks:
            bit_len = self._length * element_bits
            mask = self.block_type.low_mask(self.block_type.last_block_bits(bit_len))
            self._blocks[-1] &= mask

    def _set_len_from_blocks(self, element_bits: int) -> None:
        self._length = self.block_type.mul_nbits(len(self._blocks)) // element_bits
        self._clear_extra_bits(element_bits)

    def _read_bits(self, index: int, count: int) -> int:
        block_type = self.block_type
        address = block_type.address(index)
        margin = block_type.nbits - address.bit_offset
        first = self._blocks[address.block_index]
        if margin >= count:
            return block_type.get_bits(first, address.bit_offset, count)
        second = self._blocks[address.block_index + 1]
        low_bits = block_type.get_bits(first, address.bit_offset, margin)
        high_bits = block_type.get_bits(second, 0, count - margin)
        return (high_bits << margin) | low_bits

    def _write_bits(self, index: int, count: int, value: int) -> None:
        block_type = self.block_type
        address = block_type.address(index)
        margin = block_type.nbits - address.bit_offset
        position = address.block_index
        if margin >= count:
            self._blocks[position] = block_type.with_bits(
                self._blocks[position], address.bit_offset, count, value
            )
            return
        self._blocks[position] = block_type.with_bits(
            self._blocks[position], address.bit_offset, margin, value
        )
        self._blocks[position + 1] = block_type.with_bits(
            self._blocks[position + 1], 0, count - margin, value >> margin
        )

    def _check_span(self, element_bits: int, index: int, count: int, who: str) -> None:
        if index < 0 or count < 0 or index + count > self._length * element_bits:
            raise IndexError(f"{who}: out of bounds")

    # Blocks.

    def get_block(self, block_index: int) -> int:
        """The block at ``block_index``."""
        if not 0 <= block_index < len(self._blocks):
            raise IndexError("VectorBase.get_block: out of bounds")
        return self._blocks[block_index]

    def set_block(self, element_bits: int, block_index: int, value: int) -> None:
        """Replace the block at ``block_index``, clearing bits past the end."""
        if not 0 <= block_index < len(self._blocks):
            raise IndexError("VectorBase.set_block: out of bounds")
        self._check_block(value, "VectorBase.set_block")
        self._blocks[block_index] = value
        if block_index + 1 == len(self._blocks):
            self._clear_extra_bits(element_bits)

    # Bits.

    def get_bits(self, element_bits: int, index: int, count: int) -> int:
        """``count`` bits from bit ``index``, as a little-endian integer."""
        self._check_span(element_bits, index, count, "VectorBase.get_bits")
        return self._read_bits(index, count)

    def set_bits(self, element_bits: int, index: int, count: int, value: int) -> None:
        """Write the low ``count`` bits of ``value`` at bit ``index``."""
        self._check_span(element_bits, index, count, "VectorBase.set_bits")
        self._write_bits(index, count, value)

    def get_bit(self, index: int) -> bool:
        """The bit at ``index``, for vectors of one-bit elements."""
        if not 0 <= index < self._length:
            raise IndexError("VectorBase.get_bit: out of bounds")
        return bool(self._read_bits(index, 1))

    def set_bit(self, index: int, value: bool) -> None:
        """Set the bit at ``index``, for vectors of one-bit elements."""
        if not 0 <= index < self._length:
            raise IndexError("VectorBase.set_bit: out of bounds")
        self._write_bits(index, 1, int(bool(value)))

    # Pushing and popping.

    def push_block(self, element_bits: int, value: int) -> None:
        """Append a whole block; the length becomes what fits in the blocks."""
        self._check_block(value, "VectorBase.push_block")
        self._append_block(value)
        self._set_len_from_blocks(element_bits)

    def pop_block(self, element_bits: int) -> int | None:
        """Remove and return the last block, or None when there are none."""
        result = self._blocks.pop() if self._blocks else None
        self._set_len_from_blocks(element_bits)
        return result

    def push_bits(self, element_bits: int, value: int) -> None:
        """Append one ``element_bits``-wide element."""
        if element_bits * (self._length + 1) > self.block_type.mul_nbits(len(self._blocks)):
            self._append_block(0)
        position = self._length
        self._length = position + 1
        self.set_bits(element_bits, position * element_bits, element_bits, value)

    def pop_bits(self, element_bits: int) -> int | None:
        """Remove and return the last element, or None when empty."""
        if self._length == 0:
            return None
        bit_len = element_bits * (self._length - 1)
        block_len = self.block_type.ceil_div_nbits(bit_len)
        result = self.get_bits(element_bits, bit_len, element_bits)
        self.set_bits(element_bits, bit_len, element_bits, 0)
        self._length -= 1
        if len(self._blocks) > block_len:
            self._blocks.pop()
        return result

    def push_bit(self, value: bool) -> None:
        """Append one bit, for vectors of one-bit elements."""
        if self._length + 1 > self.block_type.mul_nbits(len(self._blocks)):
            self._append_block(0)
        position = self._length
        self._length = position + 1
        self.set_bit(position, value)

    def pop_bit(self) -> bool | None:
        """Remove and return the last bit, or None when empty."""
        if self._length == 0:
            return None
        new_len = self._length - 1
        result = self.get_bit(new_len)
        self.set_bit(new_len, False)
        self._length = new_len
        if len(self._blocks) > self.block_type.ceil_div_nbits(new_len):
            self._blocks.pop()
        return result

    # Sizes.

    def block_len(self) -> int:
        """The number of blocks in use."""
        return len(self._blocks)

    def __len__(self) -> int:
        return self._length

    def is_empty(self) -> bool:
        """True when no blocks are in use."""
        return not self._blocks

    def block_capacity(self) -> int:
        """How many blocks fit without reallocating."""
        return self._capacity

    def capacity(self, element_bits: int) -> int:
        """How many elements fit without reallocating."""
        return self.block_type.mul_nbits(self._capacity) // element_bits

    # Shrinking.

    def block_truncate(self, element_bits: int, block_len: int) -> None:
        """Keep only the first ``block_len`` blocks."""
        if block_len < len(self._blocks):
            del self._blocks[block_len:]
            self._set_len_from_blocks(element_bits)

    def truncate(self, element_bits: int, length: int) -> None:
        """Keep only the first ``length`` elements."""
        if length < self._length:
            block_len = self.block_type.ceil_div_nbits(length * element_bits)
            del self._blocks[block_len:]
            self._length = length
            self._clear_extra_bits(element_bits)

    def clear(self) -> None:
        """Remove every element, keeping the allocated capacity."""
        self._blocks.clear()
        self._length = 0

    def shrink_to_fit(self) -> None:
        """Reduce the capacity to the blocks in use."""
        self._capacity = len(self._blocks)

    # Reserving.

    def block_reserve(self, additional: int) -> None:
        """Make room for ``additional`` more blocks, possibly more."""
        if self._capacity - len(self._blocks) < additional:
            self._grow_to(len(self._blocks) + additional)

    def block_reserve_exact(self, additional: int) -> None:
        """Make room for exactly ``additional`` more blocks."""
        self._capacity = max(self._capacity, len(self._blocks) + additional)

    def _additional_blocks(self, element_bits: int, additional: int) -> int:
        needed = _len_to_block_len(self.block_type, element_bits, self._length + additional)
        return max(0, needed - self._capacity)

    def reserve(self, element_bits: int, additional: int) -> None:
        """Make room for ``additional`` more elements, possibly more."""
        self.block_reserve(self._additional_blocks(element_bits, additional))

    def reserve_exact(self, element_bits: int, additional: int) -> None:
        """Make room for ``additional`` more elements."""
        self.block_reserve_exact(self._additional_blocks(element_bits, additional))

    # Resizing.

    def block_resize(self, element_bits: int, block_len: int, fill: int) -> None:
        """Resize to ``block_len`` blocks, appending copies of ``fill``."""
        self._check_block(fill, "VectorBase.block_resize")
        self._resize_blocks(block_len, fill)
        self._set_len_from_blocks(element_bits)

    def resize(self, element_bits: int, length: int, fill: int) -> None:
        """Resize to ``length`` elements, appending copies of ``fill``."""
        block_len = _len_to_block_len(self.block_type, element_bits, length)
        self._resize_blocks(block_len, 0)
        old_len = self._length
        self._length = length
        if length <= old_len:
            self._clear_extra_bits(element_bits)
        else:
            for index in range(old_len, length):
                self.set_bits(element_bits, index * element_bits, element_bits, fill)

    # Comparison.

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VectorBase):
            return NotImplemented
        return (
            self.block_type == other.block_type
            and self._length == other._length
            and self._blocks == other._blocks
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"VectorBase(block_type={self.block_type!r}, "
            f"len={self._length}, blocks={self._blocks!r})"
        )