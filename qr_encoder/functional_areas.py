# -*- coding: utf-8 -*-
"""
QR Code Functional Areas Module

This module draws the function patterns of a QR code according to the
ISO/IEC 18004 standard: timing patterns, finder patterns with their
separators, alignment patterns, format information and version information.
It also provides the zigzag order in which data modules are filled, and a
zone map that labels every module of a symbol for analysis rendering.

All grids are lists of rows indexed as ``grid[y][x]``, with x the column
and y the row.

Functions:
    compute_alignment_centers: Calculate alignment pattern center positions
    compute_format_bits: 15-bit format information word
    compute_version_bits: 18-bit version information word
    draw_function_patterns: Draw every function pattern onto a grid
    draw_format_bits: Draw both copies of the format information
    data_module_coords: Non-functional modules in placement order
    build_function_mask: Function module grid for a version
    build_zone_map: Label every module with its zone
"""

from typing import List, Optional, Tuple

from .tables import Ecc, get_num_data_codewords, get_num_raw_data_modules

Grid = List[List[bool]]
ZoneGrid = List[List[Optional[str]]]

FORMAT_POLYNOMIAL = 0x537
FORMAT_MASK = 0x5412
VERSION_POLYNOMIAL = 0x1F25

ZONES = ('finder', 'separator', 'timing', 'alignment', 'format', 'version',
         'data', 'ecc', 'remainder')


def compute_alignment_centers(version: int) -> List[int]:
    """
    Calculate the center positions of alignment patterns for a given QR version.

    The same positions are used on both axes. The first is always 6 and
    the last is always size - 7; the ones in between are evenly spaced
    with an even step, rounded up, except for version 32 whose step is 26.
    Version 1 has no alignment patterns.

    Args:
        version (int): QR code version (1-40)

    Returns:
        List[int]: Ascending center coordinates

    Example:
        >>> compute_alignment_centers(7)
        [6, 22, 38]
        >>> compute_alignment_centers(32)
        [6, 34, 60, 86, 112, 138]
    """
    if version == 1:
        return []

    num = version // 7 + 2
    if version == 32:
        step = 26
    else:
        step = (version * 4 + num * 2 + 1) // (2 * num - 2) * 2

    centers = [6]
    for i in range(num - 1):
        centers.insert(1, version * 4 + 10 - i * step)
    return centers


def compute_format_bits(ecl: Ecc, mask: int) -> int:
    """
    Build the 15-bit format information word.

    Five data bits (level and mask) followed by a 10-bit BCH remainder,
    the whole word XORed with 0x5412.

    Example:
        >>> bin(compute_format_bits(Ecc.MEDIUM, 0))
        '0b101010000010010'
    """
    data = ecl.format_bits << 3 | mask
    rem = data
    for _ in range(10):
        rem = (rem << 1) ^ ((rem >> 9) * FORMAT_POLYNOMIAL)
    bits = (data << 10 | rem) ^ FORMAT_MASK
    if bits >> 15 != 0:
        raise AssertionError("Format information exceeds 15 bits")
    return bits


def compute_version_bits(version: int) -> int:
    """Build the 18-bit version information word (meaningful for v7+)."""
    rem = version
    for _ in range(12):
        rem = (rem << 1) ^ ((rem >> 11) * VERSION_POLYNOMIAL)
    bits = version << 12 | rem
    if bits >> 18 != 0:
        raise AssertionError("Version information exceeds 18 bits")
    return bits


def _setter(modules: Grid, is_function: Grid, zones: Optional[ZoneGrid]):
    def set_function_module(x: int, y: int, dark: bool, zone: str) -> None:
        modules[y][x] = dark
        is_function[y][x] = True
        if zones is not None:
            zones[y][x] = zone
    return set_function_module


def draw_format_bits(modules: Grid, is_function: Grid, ecl: Ecc, mask: int,
                     zones: Optional[ZoneGrid] = None) -> None:
    """
    Draw two copies of the format information for the given mask: one
    split around the top-left finder, one split between the top-right and
    bottom-left finders. Also sets the dark module.
    """
    size = len(modules)
    put = _setter(modules, is_function, zones)
    bits = compute_format_bits(ecl, mask)

    def bit(i: int) -> bool:
        return (bits >> i) & 1 != 0

    # First copy
    for i in range(6):
        put(8, i, bit(i), 'format')
    put(8, 7, bit(6), 'format')
    put(8, 8, bit(7), 'format')
    put(7, 8, bit(8), 'format')
    for i in range(9, 15):
        put(14 - i, 8, bit(i), 'format')

    # Second copy
    for i in range(8):
        put(size - 1 - i, 8, bit(i), 'format')
    for i in range(8, 15):
        put(8, size - 15 + i, bit(i), 'format')
    put(8, size - 8, True, 'format')


def _draw_version_bits(modules: Grid, is_function: Grid, version: int,
                       zones: Optional[ZoneGrid]) -> None:
    if version < 7:
        return
    size = len(modules)
    put = _setter(modules, is_function, zones)
    bits = compute_version_bits(version)
    for i in range(18):
        dark = (bits >> i) & 1 != 0
        a = size - 11 + i % 3
        b = i // 3
        put(a, b, dark, 'version')
        put(b, a, dark, 'version')


def draw_function_patterns(modules: Grid, is_function: Grid, version: int, ecl: Ecc,
                           zones: Optional[ZoneGrid] = None) -> None:
    """
    Draw every function pattern and mark the touched modules as functional.

    Order matters: finders and alignment patterns overwrite parts of the
    timing patterns. Format bits are drawn with a placeholder mask of 0.

    Args:
        modules (Grid): Module colors (True=dark), modified in place
        is_function (Grid): Function markers, modified in place
        version (int): QR code version (1-40)
        ecl (Ecc): Error correction level for the format bits
        zones (Optional[ZoneGrid]): If given, receives the zone of every module drawn
    """
    size = len(modules)
    put = _setter(modules, is_function, zones)

    # 1. TIMING PATTERNS (alternating pattern in row 6 and column 6)
    for i in range(size):
        put(6, i, i % 2 == 0, 'timing')
        put(i, 6, i % 2 == 0, 'timing')

    # 2. FINDER PATTERNS (7x7 plus the light separator ring, 3 corners)
    for cx, cy in ((3, 3), (size - 4, 3), (3, size - 4)):
        for dy in range(-4, 5):
            for dx in range(-4, 5):
                dist = max(abs(dx), abs(dy))
                x, y = cx + dx, cy + dy
                if 0 <= x < size and 0 <= y < size:
                    put(x, y, dist not in (2, 4), 'finder' if dist <= 3 else 'separator')

    # 3. ALIGNMENT PATTERNS (5x5, v2+), skipping the three finder corners
    centers = compute_alignment_centers(version)
    last = len(centers) - 1
    for i, cx in enumerate(centers):
        for j, cy in enumerate(centers):
            if (i, j) in ((0, 0), (0, last), (last, 0)):
                continue
            for dy in range(-2, 3):
                for dx in range(-2, 3):
                    put(cx + dx, cy + dy, max(abs(dx), abs(dy)) != 1, 'alignment')

    # 4. FORMAT AND VERSION INFORMATION
    draw_format_bits(modules, is_function, ecl, 0, zones)
    _draw_version_bits(modules, is_function, version, zones)


def data_module_coords(is_function: Grid) -> List[Tuple[int, int]]:
    """
    Get coordinates of non-functional modules in standard QR placement order.

    Data is placed in two-column strips from right to left, alternating
    upward and downward, and the vertical timing column 6 is skipped by
    moving the strip one column to the left.

    Args:
        is_function (Grid): Function module markers

    Returns:
        List[Tuple[int, int]]: (x, y) coordinates in placement order
    """
    size = len(is_function)
    coords = []
    upward = True
    right = size - 1

    while right >= 1:
        if right == 6:
            right = 5
        for vert in range(size):
            y = size - 1 - vert if upward else vert
            for x in (right, right - 1):
                if not is_function[y][x]:
                    coords.append((x, y))
        upward = not upward
        right -= 2

    return coords


def _blank_grids(version: int, ecl: Ecc, zones: Optional[ZoneGrid] = None) -> Tuple[Grid, Grid]:
    size = version * 4 + 17
    modules = [[False] * size for _ in range(size)]
    is_function = [[False] * size for _ in range(size)]
    draw_function_patterns(modules, is_function, version, ecl, zones)
    return modules, is_function


def build_function_mask(version: int) -> Grid:
    """
    Build the grid of function modules for a QR version.

    Returns:
        Grid: is_function[y][x] is True for finder, separator, timing,
        alignment, format, dark and version modules
    """
    return _blank_grids(version, Ecc.LOW)[1]


def build_zone_map(version: int, ecl: Ecc) -> ZoneGrid:
    """
    Label every module of a symbol with the zone it belongs to.

    Function modules get the pattern that drew them last. The data area is
    split exactly: after interleaving, every data codeword precedes every
    ECC codeword, so the first ``data_codewords * 8`` placed modules carry
    data, the following ones ECC, and the last 0-7 modules are remainder bits.

    Args:
        version (int): QR code version (1-40)
        ecl (Ecc): Error correction level

    Returns:
        ZoneGrid: zones[y][x], one of ``ZONES``

    Example:
        >>> zones = build_zone_map(1, Ecc.MEDIUM)
        >>> zones[0][0], zones[20][20]
        ('finder', 'data')
    """
    size = version * 4 + 17
    zones = [[None] * size for _ in range(size)]
    _, is_function = _blank_grids(version, ecl, zones)

    data_bits = get_num_data_codewords(version, ecl) * 8
    codeword_bits = get_num_raw_data_modules(version) // 8 * 8
    for i, (x, y) in enumerate(data_module_coords(is_function)):
        if i < data_bits:
            zones[y][x] = 'data'
        elif i < codeword_bits:
            zones[y][x] = 'ecc'
        else:
            zones[y][x] = 'remainder'
    return zones
