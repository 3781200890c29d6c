# -*- coding: utf-8 -*-
"""
QR Segments Module

A segment is a run of input encoded under a single mode. This module holds
the immutable segment type, the builders for the numeric, alphanumeric,
byte and ECI modes, and the simple whole-text mode heuristic.

Functions:
    make_numeric: Digits, 3 per 10 bits
    make_alphanumeric: 45-character alphabet, 2 per 11 bits
    make_bytes: Raw bytes, 8 bits each
    make_eci: Extended Channel Interpretation designator
    make_segments: Pick a single segment mode for a whole text
    get_total_bits: Bits needed by a list of segments at a version
"""

import re
from typing import Iterable, List, Optional

from .bit_buffer import BitBuffer
from .tables import Mode

NUMERIC_REGEX = re.compile(r"[0-9]+")
ALPHANUMERIC_REGEX = re.compile(r"[A-Z0-9 $%*+./:-]*")

# Index of each character is its alphanumeric code value
ALPHANUMERIC_CHARSET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ $%*+-./:"
_ALPHANUMERIC_CODES = {c: i for i, c in enumerate(ALPHANUMERIC_CHARSET)}


def is_numeric(text: str) -> bool:
    return NUMERIC_REGEX.fullmatch(text) is not None


def is_alphanumeric(text: str) -> bool:
    return ALPHANUMERIC_REGEX.fullmatch(text) is not None


class QrSegment:
    """
    Immutable (mode, character count, payload bits) triple.

    The payload is copied on the way in and on the way out, so mutating the
    buffer used to build a segment never affects the segment.

    Args:
        mode (Mode): Segment mode
        num_chars (int): Length of the unencoded data in characters
        data (BitBuffer): Encoded payload bits

    Raises:
        ValueError: If num_chars is negative
    """

    __slots__ = ('_mode', '_num_chars', '_data')

    def __init__(self, mode: Mode, num_chars: int, data: BitBuffer):
        if num_chars < 0:
            raise ValueError("Character count must be non-negative")
        self._mode = mode
        self._num_chars = num_chars
        self._data = data.copy()

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def num_chars(self) -> int:
        return self._num_chars

    @property
    def data(self) -> BitBuffer:
        return self._data.copy()

    @property
    def bit_length(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return (f"QrSegment(mode={self._mode.name}, num_chars={self._num_chars}, "
                f"bits={len(self._data)})")


def make_bytes(data: bytes) -> QrSegment:
    """
    Encode binary data in byte mode.

    Example:
        >>> make_bytes(b"hi").bit_length
        16
    """
    bb = BitBuffer()
    for b in data:
        bb.append_bits(b, 8)
    return QrSegment(Mode.BYTE, len(data), bb)


def make_numeric(digits: str) -> QrSegment:
    """
    Encode a string of decimal digits in numeric mode.

    Groups of three digits take 10 bits; a trailing group of two digits
    takes 7 bits and a single trailing digit 4 bits.

    Args:
        digits (str): One or more characters 0-9

    Returns:
        QrSegment: NUMERIC segment

    Raises:
        ValueError: If the string contains non-digit characters
    """
    if not is_numeric(digits):
        raise ValueError("String contains non-numeric characters")
    bb = BitBuffer()
    i = 0
    while i + 3 <= len(digits):
        bb.append_bits(int(digits[i:i + 3]), 10)
        i += 3
    rem = len(digits) - i
    if rem > 0:
        bb.append_bits(int(digits[i:]), rem * 3 + 1)
    return QrSegment(Mode.NUMERIC, len(digits), bb)


def make_alphanumeric(text: str) -> QrSegment:
    """
    Encode text in alphanumeric mode.

    Allowed characters are 0-9, A-Z (uppercase only), space and
    ``$ % * + - . / :``. Pairs are packed as ``c1 * 45 + c2`` in 11 bits, a
    trailing single character in 6 bits.

    Raises:
        ValueError: If the text contains characters outside the alphabet
    """
    if not is_alphanumeric(text):
        raise ValueError("String contains unencodable characters in alphanumeric mode")
    bb = BitBuffer()
    i = 0
    while i + 2 <= len(text):
        bb.append_bits(_ALPHANUMERIC_CODES[text[i]] * 45 + _ALPHANUMERIC_CODES[text[i + 1]], 11)
        i += 2
    if i < len(text):
        bb.append_bits(_ALPHANUMERIC_CODES[text[i]], 6)
    return QrSegment(Mode.ALPHANUMERIC, len(text), bb)


def make_eci(assign_val: int) -> QrSegment:
    """
    Build an ECI designator segment for the given assignment number.

    Args:
        assign_val (int): ECI assignment value in [0, 10**6)

    Raises:
        ValueError: If the value is out of range
    """
    bb = BitBuffer()
    if 0 <= assign_val < (1 << 7):
        bb.append_bits(assign_val, 8)
    elif (1 << 7) <= assign_val < (1 << 14):
        bb.append_bits(0b10, 2)
        bb.append_bits(assign_val, 14)
    elif (1 << 14) <= assign_val < 1000000:
        bb.append_bits(0b110, 3)
        bb.append_bits(assign_val, 21)
    else:
        raise ValueError("ECI assignment value out of range")
    return QrSegment(Mode.ECI, 0, bb)


def make_segments(text: str) -> List[QrSegment]:
    """
    Encode a whole text with the single most compact mode that accepts it:
    numeric, then alphanumeric, then UTF-8 bytes. Empty text gives no
    segments at all.
    """
    if text == "":
        return []
    if is_numeric(text):
        return [make_numeric(text)]
    if is_alphanumeric(text):
        return [make_alphanumeric(text)]
    return [make_bytes(text.encode('utf-8'))]


def get_total_bits(segments: Iterable[QrSegment], version: int) -> Optional[int]:
    """
    Bits needed to encode the segments at the given version, headers
    included.

    Returns:
        Optional[int]: Total bit count, or None when a segment's character
        count does not fit its count field at this version
    """
    result = 0
    for seg in segments:
        cc_bits = seg.mode.char_count_bits(version)
        if seg.num_chars >= (1 << cc_bits):
            return None
        result += 4 + cc_bits + seg.bit_length
    return result
