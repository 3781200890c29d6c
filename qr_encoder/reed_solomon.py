# -*- coding: utf-8 -*-
"""
Reed-Solomon Module

Error correction codewords for QR codes are the remainder of the data
polynomial divided by a generator polynomial over GF(2^8), using the field
polynomial x^8 + x^4 + x^3 + x^2 + 1 (0x11D) and generator element 0x02.

Functions:
    gf_multiply: Multiply two field elements

Classes:
    ReedSolomonGenerator: Divisor polynomial for a given number of ECC codewords
"""

from typing import Tuple

GF_POLYNOMIAL = 0x11D
GF_GENERATOR = 0x02


def gf_multiply(x: int, y: int) -> int:
    """
    Multiply two elements of GF(2^8/0x11D).

    Uses Russian peasant multiplication: shift the product left once per bit
    of ``y`` (reducing by the field polynomial on overflow) and add ``x``
    whenever that bit is set.

    Raises:
        ValueError: If either operand is outside 0-255
    """
    if x >> 8 != 0 or y >> 8 != 0 or x < 0 or y < 0:
        raise ValueError("Byte out of range")
    z = 0
    for i in reversed(range(8)):
        z = (z << 1) ^ ((z >> 7) * GF_POLYNOMIAL)
        z ^= ((y >> i) & 1) * x
    if z >> 8 != 0:
        raise AssertionError("Field product out of range")
    return z


class ReedSolomonGenerator:
    """
    Generator polynomial (x - r^0)(x - r^1)...(x - r^(degree-1)) with r = 0x02.

    Only the ``degree`` coefficients below the leading term are kept, highest
    power first; the leading coefficient is always 1. Instances are
    immutable and depend on nothing but the degree, so one generator can be
    shared by every block of a symbol.

    Args:
        degree (int): Number of ECC codewords per block, 1 to 255

    Raises:
        ValueError: If degree is out of range

    Example:
        >>> ReedSolomonGenerator(2).coefficients
        (3, 2)
    """

    def __init__(self, degree: int):
        if degree < 1 or degree > 255:
            raise ValueError("Degree out of range")

        # Start from the monomial x^0 and multiply in one (x - r^i) at a time
        coefficients = [0] * degree
        coefficients[-1] = 1
        root = 1
        for _ in range(degree):
            for j in range(degree):
                coefficients[j] = gf_multiply(coefficients[j], root)
                if j + 1 < degree:
                    coefficients[j] ^= coefficients[j + 1]
            root = gf_multiply(root, GF_GENERATOR)
        self._coefficients = tuple(coefficients)

    @property
    def degree(self) -> int:
        return len(self._coefficients)

    @property
    def coefficients(self) -> Tuple[int, ...]:
        return self._coefficients

    def get_remainder(self, data: bytes) -> bytes:
        """
        Compute the ECC codewords for a block of data codewords.

        The division runs as a shift register of ``degree`` bytes: for every
        input byte the register shifts left by one and is XORed with the
        coefficients scaled by the feedback byte.

        Args:
            data (bytes): Data codewords of one block

        Returns:
            bytes: ``degree`` error correction codewords
        """
        result = [0] * len(self._coefficients)
        for b in data:
            factor = b ^ result.pop(0)
            result.append(0)
            for i, coef in enumerate(self._coefficients):
                result[i] ^= gf_multiply(coef, factor)
        return bytes(result)
