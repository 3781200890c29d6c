# -*- coding: utf-8 -*-
"""
QR Code Generator Module

This module provides the entry points for generating QR codes: it selects
the smallest version that holds the segments, optionally boosts the error
correction level, assembles the padded data bitstream and hands it to the
symbol builder.

Functions:
    encode_text: Encode Unicode text with an automatically chosen mode
    encode_binary: Encode raw bytes in byte mode
    encode_segments: Encode a list of segments with full control
    assemble_data_codewords: Build the padded data codewords for a version
    build_segments: Segments for request-style content, mode and encoding
    make_qr: Generate QR code from request-style parameters
    evaluate_all_masks: Evaluate all mask patterns to find optimal one
"""

import codecs
import logging
from typing import Dict, List, Optional, Sequence, Tuple, Union

from .bit_buffer import BitBuffer
from .exceptions import DataTooLongError
from .penalties import compute_mask_penalty
from .segment_optimizer import make_segments_optimally
from .segments import (
    QrSegment,
    get_total_bits,
    make_alphanumeric,
    make_bytes,
    make_eci,
    make_numeric,
    make_segments,
)
from .symbol import QrCode
from .tables import (
    AUTO_MASK,
    MAX_VERSION,
    MIN_VERSION,
    Ecc,
    Mode,
    get_num_data_codewords,
    is_mask_valid,
    is_version_valid,
)

logger = logging.getLogger(__name__)

PAD_BYTES = (0xEC, 0x11)

# ECI assignment numbers keyed by normalized codec name
ECI_ASSIGNMENTS = {
    'iso8859-1': 3,
    'shift_jis': 20,
    'utf-8': 26,
    'ascii': 27,
}


def encode_text(text: str, ecl: Ecc) -> QrCode:
    """
    Encode Unicode text at the given error correction level or higher.

    The whole text becomes one numeric, alphanumeric or UTF-8 byte segment,
    whichever is the most compact mode that accepts it.

    Raises:
        DataTooLongError: If the text does not fit in a version 40 symbol
    """
    return encode_segments(make_segments(text), ecl)


def encode_binary(data: bytes, ecl: Ecc) -> QrCode:
    """
    Encode binary data as a single byte-mode segment. At most 2953 bytes
    fit (version 40, level L).
    """
    return encode_segments([make_bytes(data)], ecl)


def assemble_data_codewords(segments: Sequence[QrSegment], version: int, ecl: Ecc) -> bytes:
    """
    Concatenate the segments and pad them to the data capacity.

    Each segment contributes its mode indicator, character count and
    payload. A terminator of up to four zero bits follows, then zero bits up
    to a byte boundary, then the pad bytes 0xEC and 0x11 alternately.

    Args:
        segments (Sequence[QrSegment]): Segments known to fit
        version (int): QR code version (1-40)
        ecl (Ecc): Error correction level

    Returns:
        bytes: Exactly ``get_num_data_codewords(version, ecl)`` codewords

    Example:
        >>> assemble_data_codewords([], 1, Ecc.HIGH).hex()
        '00ec11ec11ec11ec11'
    """
    capacity_bits = get_num_data_codewords(version, ecl) * 8
    bb = BitBuffer()
    for seg in segments:
        bb.append_bits(seg.mode.mode_bits, 4)
        bb.append_bits(seg.num_chars, seg.mode.char_count_bits(version))
        bb.append_data(seg.data)
    if len(bb) > capacity_bits:
        raise DataTooLongError()

    bb.append_bits(0, min(4, capacity_bits - len(bb)))
    bb.append_bits(0, (8 - len(bb) % 8) % 8)
    pad = 0
    while len(bb) < capacity_bits:
        bb.append_bits(PAD_BYTES[pad], 8)
        pad ^= 1
    if len(bb) != capacity_bits:
        raise AssertionError("Padded bitstream does not match the capacity")
    return bb.to_bytes()


def encode_segments(segments: Sequence[QrSegment], ecl: Ecc,
                    min_version: int = MIN_VERSION, max_version: int = MAX_VERSION,
                    mask: int = AUTO_MASK, boost_ecl: bool = True) -> QrCode:
    """
    Encode segments into a QR code with the given encoding parameters.

    The smallest version in ``[min_version, max_version]`` that holds the
    segments is used. With ``boost_ecl`` the error correction level is then
    raised as far as the data still fits that same version.

    Args:
        segments (Sequence[QrSegment]): Segments to encode, in order
        ecl (Ecc): Minimum error correction level
        min_version (int): Smallest allowed version (1-40)
        max_version (int): Largest allowed version (1-40)
        mask (int): Mask pattern 0-7, or -1 for automatic choice
        boost_ecl (bool): Raise the level when it costs no extra version

    Returns:
        QrCode: Finished symbol

    Raises:
        ValueError: If the version range or mask is invalid
        DataTooLongError: If the segments fit no version in range

    Example:
        >>> qr = encode_segments([make_numeric("0123456789")], Ecc.LOW, mask=3)
        >>> qr.version, qr.mask
        (1, 3)
    """
    if not is_version_valid(min_version):
        raise ValueError(f"MinVersion value specified '{min_version}' is out of range.")
    if not is_version_valid(max_version):
        raise ValueError(f"MaxVersion value specified '{max_version}' is out of range.")
    if min_version > max_version:
        raise ValueError(f"MinVersion {min_version} is greater than MaxVersion {max_version}")
    if mask != AUTO_MASK and not is_mask_valid(mask):
        raise ValueError(f"Mask {mask} is out of range.")

    segments = list(segments)
    version = min_version
    while True:
        capacity_bits = get_num_data_codewords(version, ecl) * 8
        used_bits = get_total_bits(segments, version)
        if used_bits is not None and used_bits <= capacity_bits:
            break
        if version >= max_version:
            logger.debug(f"Segments need {used_bits} bits, more than version {max_version} holds")
            raise DataTooLongError()
        version += 1

    if boost_ecl:
        for new_ecl in Ecc:
            if used_bits <= get_num_data_codewords(version, new_ecl) * 8:
                ecl = new_ecl
    logger.debug(f"Encoding {len(segments)} segment(s), {used_bits} bits: "
                 f"version {version}, level {ecl.letter}")

    return QrCode(version, ecl, assemble_data_codewords(segments, version, ecl), mask)


def build_segments(text: Union[str, bytes], mode: str = 'auto', encoding: str = 'utf-8', eci: bool = False,
                   ecl: Ecc = Ecc.MEDIUM, min_version: int = MIN_VERSION,
                   max_version: int = MAX_VERSION) -> List[QrSegment]:
    """
    Turn request-style content into segments.

    Bytes always become one byte segment. Text follows ``mode`` (see
    ``make_qr``); byte-mode text is encoded with ``encoding``, and with
    ``eci`` an ECI designator for that encoding is put in front. The
    version range and level only matter for optimal segmentation.

    Raises:
        ValueError: On an unknown mode or encoding, text the mode cannot
            represent, or an encoding without ECI assignment
    """
    try:
        codec = codecs.lookup(encoding).name
    except LookupError:
        raise ValueError(f"Unknown encoding {encoding!r}") from None

    if isinstance(text, bytes):
        if mode not in ('auto', 'byte'):
            raise ValueError(f"Binary content can only be encoded in byte mode, not {mode!r}")
        segments = [make_bytes(text)]
    elif mode == 'auto':
        segments = make_segments(text)
        if segments and segments[0].mode is Mode.BYTE and codec != 'utf-8':
            segments = [make_bytes(text.encode(codec))]
    elif mode == 'optimal':
        if codec != 'utf-8':
            raise ValueError("Optimal segmentation only supports UTF-8")
        segments = make_segments_optimally(text, ecl, min_version, max_version)
    elif mode == 'numeric':
        segments = [make_numeric(text)]
    elif mode == 'alphanumeric':
        segments = [make_alphanumeric(text)]
    elif mode == 'byte':
        segments = [make_bytes(text.encode(codec))]
    else:
        raise ValueError(f"Unknown mode: {mode!r}")

    if eci:
        if codec not in ECI_ASSIGNMENTS:
            raise ValueError(f"No ECI assignment known for encoding {encoding!r}")
        segments.insert(0, make_eci(ECI_ASSIGNMENTS[codec]))
    return segments


def make_qr(
    text: Union[str, bytes],
    ecc: Union[str, Ecc] = 'M',
    version: Optional[Union[int, str]] = None,
    mode: str = 'auto',
    encoding: str = 'utf-8',
    eci: bool = False,
    mask: Union[str, int] = 'auto',
    boost_error: bool = True
) -> QrCode:
    """
    Generate a QR code symbol with specified parameters.

    This is the parameter-level front door used by the web application:
    every argument may come straight from a form field.

    Args:
        text (Union[str, bytes]): The data to encode in the QR code
        ecc (Union[str, Ecc]): Error correction level ('L', 'M', 'Q', 'H')
            - L: ~7% recovery capability
            - M: ~15% recovery capability
            - Q: ~25% recovery capability
            - H: ~30% recovery capability
        version (Optional[Union[int, str]]): QR code version (1-40) or 'auto'
            - 'auto': Select minimum version that fits the data
            - int: Force specific version (1=21x21, 40=177x177)
        mode (str): Encoding mode
            - 'auto': Numeric, alphanumeric or byte for the whole text
            - 'optimal': Mix modes for the shortest bitstream (UTF-8 only)
            - 'numeric', 'alphanumeric', 'byte': Force a single mode
        encoding (str): Character encoding for byte mode (e.g., 'utf-8', 'iso-8859-1')
        eci (bool): Extended Channel Interpretation
            - True: Add ECI header with encoding info (e.g., UTF-8)
            - False: No ECI header
        mask (Union[str, int]): Mask pattern
            - 'auto': Calculate optimal mask using ISO/IEC penalty rules
            - int: Use specific mask pattern (0-7)
        boost_error (bool): Automatically increase ECC level if space allows

    Returns:
        QrCode: Generated QR code object

    Raises:
        ValueError: If parameters are invalid
        DataTooLongError: If data doesn't fit in specified version

    Example:
        >>> qr = make_qr("https://example.com", ecc='M', version='auto', mask='auto')
        >>> qr.size
        25
    """
    ecl = ecc if isinstance(ecc, Ecc) else Ecc.from_letter(ecc)

    # Convert version parameter: 'auto' or None -> full range, otherwise fixed
    if version in (None, 'auto'):
        min_version, max_version = MIN_VERSION, MAX_VERSION
    else:
        min_version = max_version = int(version)

    # Convert mask parameter: 'auto' -> AUTO_MASK, otherwise int
    mask_arg = AUTO_MASK if mask in (None, 'auto') else int(mask)

    segments = build_segments(text, mode, encoding, eci, ecl, min_version, max_version)
    return encode_segments(segments, ecl, min_version, max_version, mask_arg, bool(boost_error))


def evaluate_all_masks(
    segments: Sequence[QrSegment],
    ecl: Ecc,
    version: int,
) -> Tuple[int, int, Dict[int, int]]:
    """
    Evaluate all mask patterns (0-7) to find the optimal one.

    Builds the symbol once per mask pattern at a fixed version and level
    (no boosting) and scores each with the ISO/IEC 18004 penalty rules.
    The mask with the lowest penalty score is considered optimal; ties go
    to the lower mask number, matching the automatic choice of QrCode.

    Args:
        segments (Sequence[QrSegment]): Segments to encode
        ecl (Ecc): Error correction level
        version (int): QR code version (1-40)

    Returns:
        Tuple[int, int, Dict[int, int]]: (best_mask, best_score, all_scores)
            - best_mask: Mask pattern with lowest penalty (0-7)
            - best_score: Penalty score of the best mask
            - all_scores: Dictionary mapping mask -> penalty score

    Example:
        >>> best_mask, best_score, scores = evaluate_all_masks(
        ...     make_segments("HELLO WORLD"), Ecc.QUARTILE, 1)
        >>> scores[best_mask] == min(scores.values())
        True
    """
    scores = {}
    best_mask = None
    best_score = None

    for mask_pattern in range(8):
        symbol = encode_segments(segments, ecl, version, version, mask_pattern, boost_ecl=False)
        penalty_score = compute_mask_penalty(symbol.matrix)
        scores[mask_pattern] = penalty_score

        # Track the best (lowest penalty) mask
        if best_score is None or penalty_score < best_score:
            best_score = penalty_score
            best_mask = mask_pattern

    return best_mask, best_score, scores
