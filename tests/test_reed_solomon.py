from __future__ import annotations

import random

import pytest

from qr_encoder.reed_solomon import ReedSolomonGenerator, gf_multiply


def test_multiply_identities() -> None:
    for x in range(256):
        assert gf_multiply(x, 0) == 0
        assert gf_multiply(0, x) == 0
        assert gf_multiply(x, 1) == x
        assert gf_multiply(1, x) == x


def test_multiply_reduces_by_field_polynomial() -> None:
    assert gf_multiply(2, 2) == 4
    assert gf_multiply(2, 0x80) == 0x1D
    assert gf_multiply(0x80, 0x80) == gf_multiply(0x1D, 0x40)


def test_multiply_is_commutative() -> None:
    rng = random.Random(7)
    for _ in range(200):
        x, y = rng.randrange(256), rng.randrange(256)
        assert gf_multiply(x, y) == gf_multiply(y, x)


@pytest.mark.parametrize("x,y", [(256, 1), (1, 256), (-1, 1)])
def test_multiply_rejects_non_bytes(x: int, y: int) -> None:
    with pytest.raises(ValueError):
        gf_multiply(x, y)


def test_generator_coefficients() -> None:
    assert ReedSolomonGenerator(1).coefficients == (1,)
    assert ReedSolomonGenerator(2).coefficients == (3, 2)
    assert ReedSolomonGenerator(30).degree == 30


@pytest.mark.parametrize("degree", [0, 256, -3])
def test_generator_degree_range(degree: int) -> None:
    with pytest.raises(ValueError):
        ReedSolomonGenerator(degree)


def test_hello_world_version_1_m() -> None:
    data = bytes([32, 91, 11, 120, 209, 114, 220, 77, 67, 64, 236, 17, 236, 17, 236, 17])
    ecc = ReedSolomonGenerator(10).get_remainder(data)
    assert list(ecc) == [196, 35, 39, 119, 235, 215, 231, 226, 93, 23]


@pytest.mark.parametrize("degree", range(1, 31))
def test_codeword_is_divisible_by_generator(degree: int) -> None:
    rng = random.Random(degree)
    gen = ReedSolomonGenerator(degree)
    data = bytes(rng.randrange(256) for _ in range(rng.randrange(1, 60)))
    ecc = gen.get_remainder(data)
    assert len(ecc) == degree
    assert gen.get_remainder(data + ecc) == bytes(degree)


def test_remainder_of_empty_data() -> None:
    assert ReedSolomonGenerator(5).get_remainder(b"") == bytes(5)
