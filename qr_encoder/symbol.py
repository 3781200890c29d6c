# -*- coding: utf-8 -*-
"""
QR Code Symbol Module

Builds the module matrix of a QR Code symbol from its data codewords:
function patterns, Reed-Solomon error correction with block interleaving,
zigzag codeword placement and masking. The resulting object is immutable.

Classes:
    QrCode: Finished QR Code symbol
"""

import logging
from typing import List, Tuple

from .functional_areas import data_module_coords, draw_format_bits, draw_function_patterns
from .masks import apply_mask
from .penalties import compute_mask_penalty
from .reed_solomon import ReedSolomonGenerator
from .tables import (
    AUTO_MASK,
    ECC_CODEWORDS_PER_BLOCK,
    NUM_ERROR_CORRECTION_BLOCKS,
    Ecc,
    get_num_data_codewords,
    get_num_raw_data_modules,
    is_mask_valid,
    is_version_valid,
)

logger = logging.getLogger(__name__)


class QrCode:
    """
    Square grid of dark and light modules for one QR Code symbol.

    This is the low-level constructor; ``qr_generator.encode_segments``
    chooses the version and assembles the data codewords before calling it.

    Args:
        version (int): QR code version (1-40)
        ecl (Ecc): Error correction level
        data_codewords (bytes): Exactly ``get_num_data_codewords(version, ecl)`` bytes
        mask (int): Mask pattern 0-7, or -1 to choose the lowest-penalty mask

    Raises:
        ValueError: If the version, mask or data length is invalid
    """

    def __init__(self, version: int, ecl: Ecc, data_codewords: bytes, mask: int = AUTO_MASK):
        if not is_version_valid(version):
            raise ValueError(f"Version value specified '{version}' is out of range.")
        if mask != AUTO_MASK and not is_mask_valid(mask):
            raise ValueError(f"Mask {mask} is out of range.")
        if len(data_codewords) != get_num_data_codewords(version, ecl):
            raise ValueError("Data length does not match the version and error correction level")

        self._version = version
        self._size = version * 4 + 17
        self._ecl = ecl
        self._modules = [[False] * self._size for _ in range(self._size)]
        self._is_function = [[False] * self._size for _ in range(self._size)]

        draw_function_patterns(self._modules, self._is_function, version, ecl)
        self._draw_codewords(self._append_error_correction(bytes(data_codewords)))
        self._mask = self._handle_masking(mask)

    @property
    def version(self) -> int:
        return self._version

    @property
    def size(self) -> int:
        """Width and height in modules: version * 4 + 17, from 21 to 177."""
        return self._size

    @property
    def error_correction_level(self) -> Ecc:
        return self._ecl

    @property
    def mask(self) -> int:
        """Applied mask pattern, always 0-7 even when chosen automatically."""
        return self._mask

    @property
    def matrix(self) -> Tuple[Tuple[bool, ...], ...]:
        """Rows of module colors (True=dark), without quiet zone."""
        return tuple(tuple(row) for row in self._modules)

    def get_module(self, x: int, y: int) -> bool:
        """
        Color of the module at column x, row y: True for dark, False for
        light. Coordinates outside the symbol are light.
        """
        return 0 <= x < self._size and 0 <= y < self._size and self._modules[y][x]

    def is_function_module(self, x: int, y: int) -> bool:
        return 0 <= x < self._size and 0 <= y < self._size and self._is_function[y][x]

    def __repr__(self) -> str:
        return (f"QrCode(version={self._version}, ecl={self._ecl.name}, "
                f"mask={self._mask}, size={self._size})")

    def _append_error_correction(self, data: bytes) -> bytes:
        """
        Split the data codewords into blocks, append the Reed-Solomon
        codewords of each block and interleave the blocks column by column.

        The first ``num_short_blocks`` blocks hold one data codeword less
        than the others; that missing position is skipped when interleaving.
        """
        version, ecl = self._version, self._ecl
        num_blocks = NUM_ERROR_CORRECTION_BLOCKS[ecl.ordinal][version]
        block_ecc_len = ECC_CODEWORDS_PER_BLOCK[ecl.ordinal][version]
        raw_codewords = get_num_raw_data_modules(version) // 8
        num_short_blocks = num_blocks - raw_codewords % num_blocks
        short_block_len = raw_codewords // num_blocks

        rs = ReedSolomonGenerator(block_ecc_len)
        blocks: List[bytes] = []
        k = 0
        for i in range(num_blocks):
            data_len = short_block_len - block_ecc_len + (0 if i < num_short_blocks else 1)
            dat = data[k:k + data_len]
            k += data_len
            ecc = rs.get_remainder(dat)
            if i < num_short_blocks:
                # placeholder keeps every block the same length
                dat += b'\x00'
            blocks.append(dat + ecc)

        result = bytearray()
        for i in range(short_block_len + 1):
            for j, block in enumerate(blocks):
                if i != short_block_len - block_ecc_len or j >= num_short_blocks:
                    result.append(block[i])
        if len(result) != raw_codewords:
            raise AssertionError("Interleaved codeword count mismatch")
        return bytes(result)

    def _draw_codewords(self, codewords: bytes) -> None:
        """
        Place the codewords MSB first along the zigzag path. Modules left
        over after the last codeword are remainder bits and stay light.
        """
        total_bits = len(codewords) * 8
        i = 0
        for x, y in data_module_coords(self._is_function):
            if i >= total_bits:
                break
            self._modules[y][x] = (codewords[i >> 3] >> (7 - (i & 7))) & 1 != 0
            i += 1
        if i != total_bits:
            raise AssertionError("Not every codeword bit was placed")

    def _handle_masking(self, mask: int) -> int:
        """
        Apply the requested mask, or try all eight and keep the one with the
        strictly lowest penalty (ties go to the lowest mask number). The
        grid must be unmasked on entry. Returns the mask applied.
        """
        if mask == AUTO_MASK:
            min_penalty = None
            for candidate in range(8):
                draw_format_bits(self._modules, self._is_function, self._ecl, candidate)
                apply_mask(self._modules, self._is_function, candidate)
                penalty = compute_mask_penalty(self._modules)
                logger.debug(f"Mask {candidate} penalty: {penalty}")
                if min_penalty is None or penalty < min_penalty:
                    mask = candidate
                    min_penalty = penalty
                apply_mask(self._modules, self._is_function, candidate)
            logger.debug(f"Selected mask {mask} (penalty {min_penalty})")

        draw_format_bits(self._modules, self._is_function, self._ecl, mask)
        apply_mask(self._modules, self._is_function, mask)
        return mask
