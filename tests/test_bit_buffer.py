from __future__ import annotations

import random

import pytest

from qr_encoder.bit_buffer import BitBuffer


def test_append_bits_packs_msb_first() -> None:
    bb = BitBuffer()
    bb.append_bits(0b101, 3)
    bb.append_bits(0b11111, 5)
    assert len(bb) == 8
    assert bb.to_bytes() == b"\xbf"
    assert bb.to_bit_string() == "10111111"


def test_append_zero_length_is_noop() -> None:
    bb = BitBuffer()
    bb.append_bits(0, 0)
    assert len(bb) == 0
    assert bb.to_bytes() == b""


def test_append_bits_across_byte_boundaries() -> None:
    bb = BitBuffer()
    bb.append_bits(1, 1)
    bb.append_bits(0x7FFFFFFF, 31)
    assert len(bb) == 32
    assert bb.to_bytes() == b"\xff\xff\xff\xff"


@pytest.mark.parametrize("value,length", [(2, 1), (1 << 31, 31), (-1, 4), (0, 32), (0, -1)])
def test_append_bits_rejects_out_of_range(value: int, length: int) -> None:
    bb = BitBuffer()
    with pytest.raises(ValueError):
        bb.append_bits(value, length)


def test_get_bit_is_bounds_checked() -> None:
    bb = BitBuffer()
    bb.append_bits(0b10, 2)
    assert bb.get_bit(0) == 1
    assert bb.get_bit(1) == 0
    with pytest.raises(IndexError):
        bb.get_bit(2)
    with pytest.raises(IndexError):
        bb.get_bit(-1)


def test_to_bytes_requires_whole_bytes() -> None:
    bb = BitBuffer()
    bb.append_bits(1, 3)
    with pytest.raises(ValueError):
        bb.to_bytes()


def test_capacity_grows_past_initial_storage() -> None:
    bb = BitBuffer()
    for i in range(1000):
        bb.append_bits(i & 0xFF, 8)
    assert bb.to_bytes() == bytes(i & 0xFF for i in range(1000))


def test_from_bytes_round_trip() -> None:
    rng = random.Random(1234)
    for length in (0, 1, 7, 64, 333):
        data = bytes(rng.randrange(256) for _ in range(length))
        assert BitBuffer.from_bytes(data).to_bytes() == data


@pytest.mark.parametrize("prefix_bits", [0, 1, 3, 7, 8, 13])
def test_append_data_matches_bitwise_append(prefix_bits: int) -> None:
    rng = random.Random(prefix_bits)
    other = BitBuffer()
    bits = [rng.randrange(2) for _ in range(45)]
    for bit in bits:
        other.append_bits(bit, 1)

    bb = BitBuffer()
    bb.append_bits((1 << prefix_bits) - 1, prefix_bits)
    bb.append_data(other)

    assert len(bb) == prefix_bits + 45
    assert list(bb) == [1] * prefix_bits + bits


def test_append_data_leaves_source_untouched() -> None:
    other = BitBuffer.from_bytes(b"\xa5")
    bb = BitBuffer()
    bb.append_bits(1, 1)
    bb.append_data(other)
    bb.append_bits(0, 7)
    assert other.to_bytes() == b"\xa5"
    assert bb.to_bytes() == b"\xd2\x80"


def test_copy_is_independent() -> None:
    bb = BitBuffer.from_bytes(b"\x0f")
    dup = bb.copy()
    bb.append_bits(1, 1)
    assert len(dup) == 8
    assert dup.to_bytes() == b"\x0f"
