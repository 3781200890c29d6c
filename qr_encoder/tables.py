# -*- coding: utf-8 -*-
"""
QR Code Tables Module

Static characteristics of the QR Code Model 2 symbol family according to
ISO/IEC 18004: segment modes, error correction levels, the block structure
of every (version, level) pair and the derived data capacities.

Classes:
    Mode: Character encoding modes with their header widths
    Ecc: Error correction levels in ascending order of protection

Functions:
    get_num_raw_data_modules: Data modules available after function patterns
    get_num_data_codewords: Data codewords for a version and level
"""

from enum import Enum

MIN_VERSION = 1
MAX_VERSION = 40
AUTO_MASK = -1
MIN_MASK = 0
MAX_MASK = 7


class Mode(Enum):
    """
    Segment mode: the 4-bit mode indicator and the width of the character
    count field for versions 1-9, 10-26 and 27-40.
    """

    NUMERIC = (0x1, (10, 12, 14))
    ALPHANUMERIC = (0x2, (9, 11, 13))
    BYTE = (0x4, (8, 16, 16))
    KANJI = (0x8, (8, 10, 12))
    ECI = (0x7, (0, 0, 0))

    def __init__(self, mode_bits: int, char_count_bits: tuple):
        self.mode_bits = mode_bits
        self._char_count_bits = char_count_bits

    def char_count_bits(self, version: int) -> int:
        """
        Width of the character count field at the given version.

        Raises:
            ValueError: If the version is outside 1-40
        """
        if 1 <= version <= 9:
            return self._char_count_bits[0]
        if 10 <= version <= 26:
            return self._char_count_bits[1]
        if 27 <= version <= 40:
            return self._char_count_bits[2]
        raise ValueError(f"Version number {version} out of range")


class Ecc(Enum):
    """
    Error correction level. Members are declared in ascending order of
    protection; ``ordinal`` indexes the block tables and ``format_bits`` is
    the 2-bit value written into the format information.
    """

    LOW = (0, 1, 'L')
    MEDIUM = (1, 0, 'M')
    QUARTILE = (2, 3, 'Q')
    HIGH = (3, 2, 'H')

    def __init__(self, ordinal: int, format_bits: int, letter: str):
        self.ordinal = ordinal
        self.format_bits = format_bits
        self.letter = letter

    @classmethod
    def from_letter(cls, letter: str) -> "Ecc":
        """Map 'L', 'M', 'Q' or 'H' (any case) to a level."""
        key = (letter or '').strip().upper()
        for level in cls:
            if level.letter == key:
                return level
        raise ValueError(f"Unknown error correction level: {letter!r}")


# Index 0 is padding so the tables can be indexed by version directly.
ECC_CODEWORDS_PER_BLOCK = (
    # Version: 0,  1,  2,  3,  4,  5,  6,  7,  8,  9, 10, 11, 12, 13, 14, 15, 16, 17, 18, 19, 20, 21, 22, 23, 24, 25, 26, 27, 28, 29, 30, 31, 32, 33, 34, 35, 36, 37, 38, 39, 40
    (-1,  7, 10, 15, 20, 26, 18, 20, 24, 30, 18, 20, 24, 26, 30, 22, 24, 28, 30, 28, 28, 28, 28, 30, 30, 26, 28, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30),  # Low
    (-1, 10, 16, 26, 18, 24, 16, 18, 22, 22, 26, 30, 22, 22, 24, 24, 28, 28, 26, 26, 26, 26, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28),  # Medium
    (-1, 13, 22, 18, 26, 18, 24, 18, 22, 20, 24, 28, 26, 24, 20, 30, 24, 28, 28, 26, 30, 28, 30, 30, 30, 30, 28, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30),  # Quartile
    (-1, 17, 28, 22, 16, 22, 28, 26, 26, 24, 28, 24, 28, 22, 24, 24, 30, 28, 28, 26, 28, 30, 24, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30),  # High
)

NUM_ERROR_CORRECTION_BLOCKS = (
    # Version: 0, 1, 2, 3, 4, 5, 6, 7, 8, 9,10, 11, 12, 13, 14, 15, 16, 17, 18, 19, 20, 21, 22, 23, 24, 25, 26, 27, 28, 29, 30, 31, 32, 33, 34, 35, 36, 37, 38, 39, 40
    (-1, 1, 1, 1, 1, 1, 2, 2, 2, 2, 4,  4,  4,  4,  4,  6,  6,  6,  6,  7,  8,  8,  9,  9, 10, 12, 12, 12, 13, 14, 15, 16, 17, 18, 19, 19, 20, 21, 22, 24, 25),  # Low
    (-1, 1, 1, 1, 2, 2, 4, 4, 4, 5, 5,  5,  8,  9,  9, 10, 10, 11, 13, 14, 16, 17, 17, 18, 20, 21, 23, 25, 26, 28, 29, 31, 33, 35, 37, 38, 40, 43, 45, 47, 49),  # Medium
    (-1, 1, 1, 2, 2, 4, 4, 6, 6, 8, 8,  8, 10, 12, 16, 12, 17, 16, 18, 21, 20, 23, 23, 25, 27, 29, 34, 34, 35, 38, 40, 43, 45, 48, 51, 53, 56, 59, 62, 65, 68),  # Quartile
    (-1, 1, 1, 2, 4, 4, 4, 5, 6, 8, 8, 11, 11, 16, 16, 18, 16, 19, 21, 25, 25, 25, 34, 30, 32, 35, 37, 40, 42, 45, 48, 51, 54, 57, 60, 63, 66, 70, 74, 77, 81),  # High
)


def is_version_valid(version: int) -> bool:
    return MIN_VERSION <= version <= MAX_VERSION


def is_mask_valid(mask: int) -> bool:
    return MIN_MASK <= mask <= MAX_MASK


def _check_version(version: int) -> None:
    if not is_version_valid(version):
        raise ValueError(f"Version value specified '{version}' is out of range.")


def get_num_raw_data_modules(version: int) -> int:
    """
    Calculate the number of modules left for data and ECC codewords.

    Everything except the finder patterns with separators, the format
    information, the dark module, the timing patterns, the alignment
    patterns and (v7+) the version information. The result includes the
    remainder bits, so it is not always a multiple of 8.

    Args:
        version (int): QR code version (1-40)

    Returns:
        int: Raw data modules, in the range 208 to 29648

    Example:
        >>> get_num_raw_data_modules(1)
        208
    """
    _check_version(version)
    size = version * 4 + 17
    result = size * size
    result -= 64 * 3           # finders with separators
    result -= 15 * 2 + 1       # format information and dark module
    result -= (size - 16) * 2  # timing patterns
    if version >= 2:
        num_align = version // 7 + 2
        result -= (num_align - 1) * (num_align - 1) * 25
        # alignment patterns crossing a timing pattern share 5 modules with it
        result -= (num_align - 2) * 2 * 20
        if version >= 7:
            result -= 18 * 2
    return result


def get_num_data_codewords(version: int, ecl: Ecc) -> int:
    """
    Number of 8-bit data codewords (ECC excluded, remainder bits discarded)
    of a symbol with the given version and error correction level.
    """
    _check_version(version)
    return (get_num_raw_data_modules(version) // 8
            - ECC_CODEWORDS_PER_BLOCK[ecl.ordinal][version]
            * NUM_ERROR_CORRECTION_BLOCKS[ecl.ordinal][version])
