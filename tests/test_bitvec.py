import pytest
from hypothesis import given
from hypothesis import strategies as st

from succinct.bitvec import BlockArray, BoolVec, Word
from succinct.storage import U8, U16, U32


def test_bool_vec_default_get_block():
    bits = BoolVec([True, True, False, False, True])
    assert bits.get_block(0) == 19


def test_bool_vec_block_len_rounds_up():
    assert BoolVec([True] * 9).block_len() == 2


def test_bool_vec_set_block_keeps_length():
    bits = BoolVec()
    bits.push_bit(False)
    bits.set_block(0, 0b11)
    assert bits.get_block(0) == 0b01
    assert bits.bit_len() == 1

    bits.push_bit(False)
    bits.set_block(0, 0b11)
    assert bits.get_block(0) == 0b11


def test_bool_vec_push_pop():
    bits = BoolVec()
    bits.push_bit(True)
    bits.push_bit(False)
    bits.push_bit(False)
    assert bits.pop_bit() is False
    assert bits.pop_bit() is False
    assert bits.pop_bit() is True
    assert bits.pop_bit() is None


def test_bool_vec_get_bit_out_of_bounds():
    bits = BoolVec([True])
    with pytest.raises(IndexError):
        bits.get_bit(3)


def test_bool_vec_push_block_aligns_first():
    bits = BoolVec([True])
    bits.push_block(0b10101)
    assert bits.bit_len() == 2 * U8.nbits
    assert bits.get_block(0) == 1
    assert bits.get_block(1) == 0b10101


def test_bool_vec_align_block_fills_with_value():
    bits = BoolVec([False])
    bits.align_block(True)
    assert bits.bit_len() == U8.nbits
    assert list(bits)[1:] == [True] * (U8.nbits - 1)


def test_block_array_lengths():
    blocks = BlockArray([1, 2, 3], U32)
    assert blocks.bit_len() == 96
    assert blocks.block_len() == 3


def test_block_array_get_bit():
    blocks = BlockArray([0b10101])
    assert [blocks.get_bit(i) for i in range(6)] == [True, False, True, False, True, False]


def test_block_array_get_bits_across_blocks():
    blocks = BlockArray([0b01010101] * 5, U8)
    assert blocks.get_bits(0, 5) == 0b10101
    assert blocks.get_bits(0, 3) == 0b101
    assert blocks.get_bits(6, 6) == 0b010101


def test_block_array_set_bits():
    blocks = BlockArray([0] * 10, U8)
    assert blocks.get_bits(0, 5) == 0
    assert blocks.get_bits(5, 5) == 0
    assert blocks.get_bits(10, 5) == 0

    blocks.set_bits(0, 5, 17)
    blocks.set_bits(5, 5, 2)
    blocks.set_bits(10, 5, 8)

    assert blocks.get_bits(0, 5) == 17
    assert blocks.get_bits(5, 5) == 2
    assert blocks.get_bits(10, 5) == 8


def test_block_array_get_bits_out_of_bounds():
    blocks = BlockArray([0, 0], U8)
    with pytest.raises(IndexError):
        blocks.get_bits(12, 5)


def test_block_array_get_block_out_of_bounds():
    blocks = BlockArray([0], U8)
    with pytest.raises(IndexError):
        blocks.get_block(1)


def test_block_array_rejects_wide_value():
    blocks = BlockArray([0], U8)
    with pytest.raises(ValueError):
        blocks.set_block(0, 256)
    with pytest.raises(ValueError):
        BlockArray([300], U8)


@given(st.data())
def test_block_array_set_bits_agrees_with_bool_vec(data):
    raw = data.draw(st.lists(st.integers(0, 255), min_size=1, max_size=6))
    blocks = BlockArray(raw, U8)
    reference = BoolVec(blocks.get_bit(i) for i in range(blocks.bit_len()))

    count = data.draw(st.integers(0, U8.nbits))
    start = data.draw(st.integers(0, blocks.bit_len() - count))
    value = data.draw(st.integers(0, 255))

    blocks.set_bits(start, count, value)
    reference.set_bits(start, count, value)

    assert [blocks.get_bit(i) for i in range(blocks.bit_len())] == list(reference)
    assert blocks.get_bits(start, count) == value & U8.low_mask(count)
    assert reference.get_bits(start, count) == value & U8.low_mask(count)


@pytest.mark.parametrize(
    ("start", "count", "expected"),
    [(0, 0, 0b0), (13, 3, 0b010), (6, 6, 0b110001), (0, 5, 0b10000), (0, 16, 0b0100110001110000)],
)
def test_word_get_bits(start, count, expected):
    assert Word(0b0100110001110000, U16).get_bits(start, count) == expected


def test_word_get_bit():
    zero = Word(0b00000000, U8)
    assert [zero.get_bit(i) for i in (0, 1, 2, 3, 7)] == [False] * 5
    word = Word(0b10101010, U8)
    assert [word.get_bit(i) for i in (0, 1, 2, 3, 7)] == [False, True, False, True, True]


@pytest.mark.parametrize(
    ("start", "index", "value", "expected"),
    [
        (0b00000000, 5, True, 0b00100000),
        (0b00000000, 5, False, 0b00000000),
        (0b10101010, 7, True, 0b10101010),
        (0b10101010, 7, False, 0b00101010),
        (0b10101010, 0, True, 0b10101011),
        (0b10101010, 0, False, 0b10101010),
    ],
)
def test_word_set_bit(start, index, value, expected):
    word = Word(start, U8)
    word.set_bit(index, value)
    assert word.value == expected


def test_word_single_block():
    word = Word(0b10101010, U8)
    assert word.bit_len() == U8.nbits
    assert word.block_len() == 1
    assert word.get_block(0) == 0b10101010
    with pytest.raises(IndexError):
        word.get_block(1)
    with pytest.raises(IndexError):
        word.set_block(1, 0)
    with pytest.raises(IndexError):
        word.get_bit(8)


@given(
    st.integers(0, 2**16 - 1),
    st.integers(0, 16),
    st.integers(0, 2**16 - 1),
    st.data(),
)
def test_word_set_bits_round_trip(initial, count, value, data):
    start = data.draw(st.integers(0, 16 - count))
    word = Word(initial, U16)
    word.set_bits(start, count, value)
    assert word.get_bits(start, count) == value & U16.low_mask(count)
    outside = ~(U16.low_mask(count) << start) & U16.low_mask(16)
    assert word.value & outside == initial & outside