# succinct

Building blocks for succinct data structures, in pure Python:

- `succinct.storage` — `BlockType`, a fixed-width unsigned word (8, 16,
  32 or 64 bits, with ready-made `U8`, `U16`, `U32`, `U64` and `USIZE`),
  with masks, bit extraction and update, rank within one block and
  endian-specified block I/O; `Address`; and the helpers `floor_lg`,
  `ceil_lg` and `ceil_div`.
- `succinct.bitvec` — the bit vector interfaces `BitVec`, `BitVecMut` and
  `BitVecPush`, with adapters that view a list of blocks (`BlockArray`),
  a list of booleans (`BoolVec`) or a single word (`Word`) as a bit vector.
- `succinct.bit_vector` — `BitVector`, a growable vector of bits packed
  into blocks.
- `succinct.vector_base` — `VectorBase`, growable block storage for
  equal-width elements, the storage behind `BitVector`.
- `succinct.elements` — `ElementIter`, a double-ended iterator over the
  elements held in a `VectorBase`.
- `succinct.search` — `average` and `binary_search_function`, a binary
  search over a non-decreasing function.

Bits are indexed little-endian: bit 0 of a vector is the least
significant bit of its first block.

## Installation

```
pip install .
```

Running the tests needs the `test` extra:

```
pip install ".[test]"
pytest
```

## Examples

Block types:

```python
from succinct.storage import U8, U16, ceil_lg

print(U16.get_bits(0b0100110001110000, 6, 6))   # 49  (0b110001)
print(U8.with_bit(0b10101010, 7, False))        # 42  (0b00101010)
print(U8.rank1(0b01010101, 2))                  # 2
print(ceil_lg(9))                               # 4
```

Blocks can be written to and read from binary streams:

```python
import io
from succinct.storage import U16

buffer = io.BytesIO()
U16.write_block(0x1234, buffer, "big")
buffer.seek(0)
print(hex(U16.read_block(buffer, "little")))    # 0x3412
```

A short read raises `EOFError`.

Bit vectors:

```python
from succinct.bit_vector import BitVector
from succinct.storage import U8

bits = BitVector()
bits.push_bit(True)
bits.push_bit(False)
bits.push_bit(False)
print(f"{bits:b}")            # 100
print(bits.pop_bit())         # False
print(list(bits))             # [True, False]

filled = BitVector.with_fill(20, True, U8)
print(filled.block_len())     # 3
print(filled)                 # 11111111111111111111
```

Out-of-range positions raise `IndexError`; `pop_bit` returns `None` on an
empty vector.

Other containers viewed as bit vectors:

```python
from succinct.bitvec import BlockArray, Word
from succinct.storage import U8

blocks = BlockArray([0b10101, 0], U8)
print(blocks.get_bit(2), blocks.bit_len())   # True 16

word = Word(0b1010, U8)
print(word.get_bits(1, 3))                   # 5
```

Packed elements of any width up to the block size:

```python
from succinct.elements import ElementIter
from succinct.storage import U8
from succinct.vector_base import VectorBase

base = VectorBase.with_fill(U8, 5, 5, 0b10110)   # five 5-bit elements
print(len(base), base.block_len())               # 5 4
print(list(ElementIter(5, base)))                # [22, 22, 22, 22, 22]
print(base.pop_bits(5))                          # 22
```

Binary search over a monotone function:

```python
from succinct.search import binary_search_function

values = [0, 0, 1, 3, 3, 7]
print(binary_search_function(0, len(values), 3, values.__getitem__))   # 3
print(binary_search_function(0, len(values), 8, values.__getitem__))   # None
```

## What this package does not do

The package supplies storage and low-level operations only. It has no
index structures that answer rank or select queries over a whole bit
vector (rank is available within a single block, through
`BlockType.rank1`, `rank0` and `rank`), no universal codes for
self-delimiting integers, no bit stream readers or writers, and no
dedicated integer-vector type; packed integers are handled through
`VectorBase` and `ElementIter` directly. It does not persist whole
vectors to disk beyond single-block reads and writes.