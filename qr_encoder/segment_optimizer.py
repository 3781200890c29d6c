# -*- coding: utf-8 -*-
"""
Optimal Segmentation Module

Splits a text into numeric, alphanumeric and byte segments so that the
total encoded bit length is minimal for the target version. Costs are
counted in sixths of a bit so that the fractional per-character costs of
numeric (10/3 bits) and alphanumeric (11/2 bits) modes stay exact.

The text is handled as its UTF-8 bytes: multi-byte characters always fall
into byte mode because the numeric and alphanumeric tests only accept ASCII.
Kanji mode is never produced.

Functions:
    make_segments_optimally: Minimal-length segment list for a version range
"""

import logging
from typing import List

from .exceptions import DataTooLongError
from .segments import (
    QrSegment,
    get_total_bits,
    make_alphanumeric,
    make_bytes,
    make_numeric,
)
from .tables import MAX_VERSION, MIN_VERSION, Ecc, Mode, get_num_data_codewords

logger = logging.getLogger(__name__)

# Modes in table order: index 0 byte, 1 alphanumeric, 2 numeric
_MODES = (Mode.BYTE, Mode.ALPHANUMERIC, Mode.NUMERIC)
_CHAR_COSTS = (48, 33, 20)
_UNREACHABLE = 1 << 40

_ALPHANUMERIC_BYTES = frozenset(b"0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ $%*+-./:")
_NUMERIC_BYTES = frozenset(b"0123456789")


def _accepts(mode_index: int, b: int) -> bool:
    if mode_index == 0:
        return True
    if mode_index == 1:
        return b in _ALPHANUMERIC_BYTES
    return b in _NUMERIC_BYTES


def _round_up(cost: int) -> int:
    """Round a cost in sixths of a bit up to a whole bit."""
    return (cost + 5) // 6 * 6


def _header_costs(version: int) -> List[int]:
    return [(4 + mode.char_count_bits(version)) * 6 for mode in _MODES]


def compute_bit_costs(data: bytes, version: int) -> List[List[int]]:
    """
    Forward pass of the dynamic program.

    ``costs[m][n]`` is the minimal cost, in sixths of a bit, of encoding the
    first ``n`` bytes with the last one in mode ``m`` (0 byte,
    1 alphanumeric, 2 numeric), segment headers included.
    """
    headers = _header_costs(version)
    costs = [[_UNREACHABLE] * (len(data) + 1) for _ in _MODES]
    for m in range(3):
        costs[m][0] = headers[m]

    for i, b in enumerate(data):
        j = i + 1
        # Extend the current segment by one character
        for m in range(3):
            if _accepts(m, b):
                costs[m][j] = costs[m][i] + _CHAR_COSTS[m]
        # Or end the segment of another mode and start a new one
        for m in range(3):
            others = min(costs[o][j] for o in range(3) if o != m)
            costs[m][j] = min(_round_up(others) + headers[m], costs[m][j])
    return costs


def compute_character_modes(data: bytes, version: int, costs: List[List[int]]) -> List[Mode]:
    """
    Backward pass: recover the mode of every byte from the cost table.

    At each step the previous byte keeps the current mode if it can, unless
    the forward table shows the current mode was entered by a switch from a
    cheaper mode, which is detected by reproducing the exact forward cost.
    """
    if not data:
        return []
    headers = _header_costs(version)
    end = len(data)

    if costs[0][end] <= min(costs[1][end], costs[2][end]):
        current = 0
    elif costs[1][end] <= costs[2][end]:
        current = 1
    else:
        current = 2

    def switched_from(m: int, i: int) -> bool:
        # True if costs[current][i + 1] came from a segment in mode m ending at byte i
        return (_accepts(m, data[i])
                and _round_up(costs[m][i] + _CHAR_COSTS[m]) + headers[current] == costs[current][i + 1])

    result = [Mode.BYTE] * end
    result[-1] = _MODES[current]
    for i in range(end - 2, -1, -1):
        b = data[i]
        if current == 2:
            if _accepts(2, b):
                current = 2
            elif switched_from(1, i):
                current = 1
            else:
                current = 0
        elif current == 1:
            if switched_from(2, i):
                current = 2
            elif _accepts(1, b):
                current = 1
            else:
                current = 0
        else:
            if switched_from(2, i):
                current = 2
            elif switched_from(1, i):
                current = 1
            else:
                current = 0
        result[i] = _MODES[current]
    return result


def _make_run_segment(mode: Mode, chunk: bytes) -> QrSegment:
    if mode is Mode.BYTE:
        return make_bytes(chunk)
    if mode is Mode.NUMERIC:
        return make_numeric(chunk.decode('ascii'))
    if mode is Mode.ALPHANUMERIC:
        return make_alphanumeric(chunk.decode('ascii'))
    raise AssertionError(f"Unexpected mode {mode}")


def split_into_segments(data: bytes, char_modes: List[Mode]) -> List[QrSegment]:
    """Coalesce consecutive bytes of the same mode into maximal segments."""
    result = []
    if not data:
        return result
    start = 0
    for i in range(1, len(data) + 1):
        if i == len(data) or char_modes[i] is not char_modes[start]:
            result.append(_make_run_segment(char_modes[start], data[start:i]))
            start = i
    return result


def _segments_for_version(data: bytes, version: int) -> List[QrSegment]:
    costs = compute_bit_costs(data, version)
    return split_into_segments(data, compute_character_modes(data, version, costs))


def make_segments_optimally(text: str, ecl: Ecc,
                            min_version: int = MIN_VERSION,
                            max_version: int = MAX_VERSION) -> List[QrSegment]:
    """
    Build the segment list with the smallest total bit length.

    The segmentation only changes where the character count fields change
    width, so it is recomputed at ``min_version`` and at versions 10 and 27.
    The first version in range whose capacity holds the segments wins.

    Args:
        text (str): Any Unicode text
        ecl (Ecc): Error correction level the capacity is checked against
        min_version (int): Smallest allowed version (at least 1)
        max_version (int): Largest allowed version (at most 40)

    Returns:
        List[QrSegment]: Segments minimizing the encoded length

    Raises:
        ValueError: If 1 <= min_version <= max_version <= 40 does not hold
        DataTooLongError: If the text fits no version in range

    Example:
        >>> segs = make_segments_optimally("ABC123456789abc", Ecc.MEDIUM)
        >>> [s.mode.name for s in segs]
        ['ALPHANUMERIC', 'NUMERIC', 'BYTE']
    """
    if not (MIN_VERSION <= min_version <= max_version <= MAX_VERSION):
        raise ValueError(f"Invalid version range {min_version}..{max_version}")

    data = text.encode('utf-8')
    segs: List[QrSegment] = []
    for version in range(min_version, max_version + 1):
        if version in (min_version, 10, 27):
            segs = _segments_for_version(data, version)

        capacity_bits = get_num_data_codewords(version, ecl) * 8
        used_bits = get_total_bits(segs, version)
        if used_bits is not None and used_bits <= capacity_bits:
            logger.debug(f"Optimal segmentation at version {version}: "
                         f"{[seg.mode.name for seg in segs]} ({used_bits} bits)")
            return segs
    raise DataTooLongError()
