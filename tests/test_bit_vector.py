import pytest
from hypothesis import given
from hypothesis import strategies as st

from succinct.bit_vector import BitVector
from succinct.storage import U8, U32


def test_new():
    bit_vector = BitVector()
    assert bit_vector.bit_len() == 0
    assert bit_vector.block_len() == 0


def test_capacity():
    assert BitVector(U32).capacity() == 0
    assert BitVector.with_capacity(65, U32).capacity() == 96


def test_push_binary():
    bit_vector = BitVector()
    bit_vector.push_bit(True)
    bit_vector.push_bit(False)
    bit_vector.push_bit(False)
    assert f"{bit_vector:b}" == "100"


def test_block_with_fill():
    bit_vector = BitVector.block_with_fill(3, 0b101, U8)
    assert bit_vector.block_capacity() == 3
    assert f"{bit_vector:b}" == "101000001010000010100000"


def test_with_fill():
    bv0 = BitVector.with_fill(20, False)
    bv1 = BitVector.with_fill(20, True)
    assert bv0.get_bit(3) is False
    assert bv1.get_bit(3) is True
    assert f"{bv0:b}" == "0" * 20
    assert f"{bv1:b}" == "1" * 20


def test_push_pop():
    bit_vector = BitVector()
    bit_vector.push_bit(True)
    bit_vector.push_bit(False)
    bit_vector.push_bit(False)
    assert bit_vector.pop_bit() is False
    assert bit_vector.pop_bit() is False
    assert bit_vector.pop_bit() is True
    assert bit_vector.pop_bit() is None


def test_push_get():
    bit_vector = BitVector()
    bit_vector.push_bit(True)
    bit_vector.push_bit(False)
    bit_vector.push_bit(False)
    assert bit_vector.bit_len() == 3
    assert bit_vector.block_len() == 1
    assert bit_vector.get_bit(0) is True
    assert bit_vector.get_bit(1) is False
    assert bit_vector.get_bit(2) is False


def test_get_out_of_bounds():
    bit_vector = BitVector()
    bit_vector.push_bit(True)
    with pytest.raises(IndexError):
        bit_vector.get_bit(3)


def test_push_block():
    bit_vector = BitVector(U32)
    bit_vector.push_block(0)
    assert f"{bit_vector:b}" == "0" * 32


def test_push_bits_get_block():
    bit_vector = BitVector()
    for bit in (True, True, False, False, True):
        bit_vector.push_bit(bit)
    assert bit_vector.get_block(0) == 19


def test_push_block_get_block():
    bit_vector = BitVector()
    bit_vector.push_block(358)
    bit_vector.push_block((1 << 64) - 1)
    assert bit_vector.get_block(0) == 358
    assert bit_vector.get_block(1) == (1 << 64) - 1


def test_get_block_out_of_bounds():
    bit_vector = BitVector()
    bit_vector.push_bit(True)
    with pytest.raises(IndexError):
        bit_vector.get_block(3)


def test_push_block_get_bit():
    bit_vector = BitVector()
    bit_vector.push_block(0b10101)
    assert [bit_vector.get_bit(i) for i in range(6)] == [True, False, True, False, True, False]


def test_push_block_set_get():
    bit_vector = BitVector()
    bit_vector.push_block(0)
    bit_vector.set_bit(0, True)
    bit_vector.set_bit(1, True)
    bit_vector.set_bit(2, False)
    bit_vector.set_bit(3, True)
    bit_vector.set_bit(4, False)
    assert [bit_vector.get_bit(i) for i in range(5)] == [True, True, False, True, False]


def test_set_block_mask():
    bit_vector = BitVector()
    bit_vector.push_bit(False)
    bit_vector.set_block(0, 0b11)
    assert bit_vector.get_block(0) == 0b01

    bit_vector.push_bit(False)
    bit_vector.set_block(0, 0b11)
    assert bit_vector.get_block(0) == 0b11


def test_resize():
    bit_vector = BitVector(U8)
    bit_vector.push_bit(True)
    bit_vector.push_bit(False)
    bit_vector.push_bit(True)
    assert f"{bit_vector:b}" == "101"

    bit_vector.resize(21, False)
    assert f"{bit_vector:b}" == "101000000000000000000"

    bit_vector.resize(22, False)
    assert f"{bit_vector:b}" == "1010000000000000000000"

    bit_vector.resize(5, False)
    assert f"{bit_vector:b}" == "10100"

    bit_vector.resize(21, True)
    assert f"{bit_vector:b}" == "101001111111111111111"

    bit_vector.resize(4, True)
    assert f"{bit_vector:b}" == "1010"

    bit_vector.push_block(0b11111111)
    assert f"{bit_vector:b}" == "1010000011111111"


def test_block_resize():
    bit_vector = BitVector(U8)
    bit_vector.push_bit(True)
    bit_vector.push_bit(False)
    bit_vector.push_bit(True)
    assert f"{bit_vector:b}" == "101"

    bit_vector.block_resize(1, 0)
    assert f"{bit_vector:b}" == "10100000"

    bit_vector.block_resize(3, 0b01000101)
    assert f"{bit_vector:b}" == "10100000" + "10100010" + "10100010"

    bit_vector.block_resize(2, 0)
    assert f"{bit_vector:b}" == "10100000" + "10100010"


def test_truncate_and_block_truncate():
    bit_vector = BitVector.with_fill(20, True, U8)
    bit_vector.truncate(10)
    assert str(bit_vector) == "1" * 10
    bit_vector.truncate(30)
    assert len(bit_vector) == 10
    bit_vector.block_truncate(1)
    assert str(bit_vector) == "1" * 8


def test_clear_keeps_capacity():
    bit_vector = BitVector.with_fill(20, True, U8)
    capacity = bit_vector.block_capacity()
    bit_vector.clear()
    assert len(bit_vector) == 0
    assert bit_vector.block_capacity() == capacity


def test_reserve_and_shrink():
    bit_vector = BitVector(U8)
    bit_vector.reserve(100)
    assert bit_vector.capacity() >= 100
    bit_vector.push_bit(True)
    bit_vector.shrink_to_fit()
    assert bit_vector.block_capacity() == 1

    exact = BitVector(U8)
    exact.block_reserve_exact(5)
    assert exact.block_capacity() == 5
    exact.reserve_exact(8)
    assert exact.block_capacity() == 5


def test_block_with_capacity():
    bit_vector = BitVector.block_with_capacity(4, U8)
    assert bit_vector.block_capacity() == 4
    assert bit_vector.capacity() == 32
    assert len(bit_vector) == 0


def test_iteration_and_reversed():
    bit_vector = BitVector(U8)
    bits = [True, False, False, True, True, False, True, True, False, True]
    for bit in bits:
        bit_vector.push_bit(bit)
    assert list(bit_vector) == bits
    assert list(reversed(bit_vector)) == bits[::-1]


def test_equality():
    left = BitVector.with_fill(13, True, U8)
    right = BitVector(U8)
    for _ in range(13):
        right.push_bit(True)
    assert left == right
    right.set_bit(0, False)
    assert not left == right


def test_str_and_format_spec():
    bit_vector = BitVector.with_fill(3, True)
    assert str(bit_vector) == "111"
    assert f"{bit_vector:>5b}" == "  111"


def test_with_fill_negative_length():
    with pytest.raises(ValueError):
        BitVector.with_fill(-1, True)


@given(st.lists(st.booleans(), max_size=200))
def test_push_then_pop_round_trip(bits):
    bit_vector = BitVector(U8)
    for bit in bits:
        bit_vector.push_bit(bit)
    assert bit_vector.bit_len() == len(bits)
    assert list(bit_vector) == bits
    popped = [bit_vector.pop_bit() for _ in bits]
    assert popped == bits[::-1]
    assert bit_vector.pop_bit() is None
    assert bit_vector.block_len() == 0