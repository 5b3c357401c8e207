"""Block types: fixed-width unsigned words used to store bits."""

from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO


def floor_lg(value: int) -> int:
    """Return the largest ``n`` with ``2**n <= value`` (0 for values <= 1)."""
    if value <= 1:
        return 0
    return value.bit_length() - 1


def ceil_lg(value: int) -> int:
    """Return the smallest ``n`` with ``2**n >= value`` (0 for values <= 1)."""
    if value <= 1:
        return 0
    return (value - 1).bit_length()


def ceil_div(value: int, divisor: int) -> int:
    """Return the smallest ``n`` with ``n * divisor >= value``."""
    return -(-value // divisor)


@dataclass(frozen=True, order=True)
class Address:
    """A bit address split into a block index and an offset within the block."""

    block_index: int
    bit_offset: int

    def bit_index(self, block_type: BlockType) -> int:
        """Convert back into a raw bit index."""
        return block_type.mul_nbits(self.block_index) + self.bit_offset


@dataclass(frozen=True)
class BlockType:
    """An unsigned word of ``nbits`` bits, with bit 0 least significant."""

    nbits: int

    def __post_init__(self) -> None:
        if self.nbits < 8 or self.nbits & (self.nbits - 1):
            raise ValueError(f"invalid block size: {self.nbits} bits")

    # Sizes and offsets relative to the block size.

    def lg_nbits(self) -> int:
        """Log base 2 of the number of bits in a block."""
        return floor_lg(self.nbits)

    def div_nbits(self, index: int) -> int:
        """Return ``index // nbits``."""
        return index >> self.lg_nbits()

    def ceil_div_nbits(self, index: int) -> int:
        """Return ``index / nbits`` rounded up."""
        return self.div_nbits(index + self.nbits - 1)

    def mod_nbits(self, index: int) -> int:
        """Return ``index % nbits``."""
        return index & (self.nbits - 1)

    def mul_nbits(self, index: int) -> int:
        """Return ``index * nbits``."""
        return index << self.lg_nbits()

    def last_block_bits(self, length: int) -> int:
        """How many bits of ``length`` fall in the last block (``nbits`` if none spill)."""
        masked = self.mod_nbits(length)
        return masked if masked else self.nbits

    def address(self, bit_index: int) -> Address:
        """Split ``bit_index`` into block index and bit offset."""
        if bit_index < 0:
            raise ValueError("Address::new: negative index")
        return Address(self.div_nbits(bit_index), self.mod_nbits(bit_index))

    # Masks.

    def low_mask(self, element_bits: int) -> int:
        """A mask with the lowest ``element_bits`` bits set."""
        if not 0 <= element_bits <= self.nbits:
            raise ValueError("Block::low_mask: element size exceeds block size")
        return (1 << element_bits) - 1

    def nth_mask(self, bit_index: int) -> int:
        """A mask with only bit ``bit_index`` set."""
        if not 0 <= bit_index < self.nbits:
            raise IndexError("Block::nth_mask: out of bounds")
        return 1 << bit_index

    # Getting and setting bits.

    def get_bit(self, block: int, bit_index: int) -> bool:
        """Extract bit ``bit_index`` of ``block``."""
        if not 0 <= bit_index < self.nbits:
            raise IndexError("Block::get_bit: out of bounds")
        return bool(block >> bit_index & 1)

    def with_bit(self, block: int, bit_index: int, bit_value: bool) -> int:
        """Return ``block`` with bit ``bit_index`` set to ``bit_value``."""
        if not 0 <= bit_index < self.nbits:
            raise IndexError("Block::with_bit: out of bounds")
        mask = 1 << bit_index
        return block | mask if bit_value else block & ~mask

    def get_bits(self, block: int, start: int, length: int) -> int:
        """Extract ``length`` bits of ``block`` starting at ``start``."""
        if start < 0 or length < 0 or start + length > self.nbits:
            raise IndexError("Block::get_bits: out of bounds")
        if length == 0:
            return 0
        return (block >> start) & self.low_mask(length)

    def with_bits(self, block: int, start: int, length: int, value: int) -> int:
        """Return ``block`` with ``length`` bits at ``start`` replaced by ``value``."""
        if start < 0 or length < 0 or start + length > self.nbits:
            raise IndexError("Block::with_bits: out of bounds")
        if length == 0:
            return block
        mask = self.low_mask(length) << start
        return (block & ~mask) | ((value << start) & mask)

    # Rank within a single block.

    def count_ones(self, block: int) -> int:
        """Number of one bits in ``block``."""
        return (block & self.low_mask(self.nbits)).bit_count()

    def rank1(self, block: int, position: int) -> int:
        """Number of ones in bits ``0..=position`` of ``block``."""
        if not 0 <= position < self.nbits:
            raise IndexError("Block::rank1: out of bounds")
        return (block & self.low_mask(position + 1)).bit_count()

    def rank0(self, block: int, position: int) -> int:
        """Number of zeros in bits ``0..=position`` of ``block``."""
        return position + 1 - self.rank1(block, position)

    def rank(self, block: int, position: int, value: bool) -> int:
        """Number of bits equal to ``value`` in bits ``0..=position``."""
        return self.rank1(block, position) if value else self.rank0(block, position)

    # Endian-specified I/O.

    def read_block(self, source: BinaryIO, byteorder: str) -> int:
        """Read one block from a binary stream in the given byte order."""
        size = self.nbits // 8
        data = source.read(size)
        if len(data) < size:
            raise EOFError("failed to fill whole buffer")
        return int.from_bytes(data, byteorder)  # type: ignore[arg-type]

    def write_block(self, block: int, sink: BinaryIO, byteorder: str) -> None:
        """Write one block to a binary stream in the given byte order."""
        sink.write(block.to_bytes(self.nbits // 8, byteorder))  # type: ignore[arg-type]


U8 = BlockType(8)
U16 = BlockType(16)
U32 = BlockType(32)
U64 = BlockType(64)
USIZE = U64