from __future__ import annotations

import pytest

from qr_encoder.exceptions import DataTooLongError
from qr_encoder.qr_generator import (
    assemble_data_codewords,
    build_segments,
    encode_binary,
    encode_segments,
    encode_text,
    evaluate_all_masks,
    make_qr,
)
from qr_encoder.segments import make_alphanumeric, make_bytes, make_numeric, make_segments
from qr_encoder.tables import Ecc, Mode


def test_hello_world_is_boosted_to_quartile() -> None:
    qr = encode_text("HELLO WORLD", Ecc.LOW)
    assert qr.version == 1
    assert qr.size == 21
    assert qr.error_correction_level is Ecc.QUARTILE
    assert 0 <= qr.mask <= 7


def test_empty_text_gets_highest_level() -> None:
    qr = encode_text("", Ecc.MEDIUM)
    assert qr.version == 1
    assert qr.error_correction_level is Ecc.HIGH


def test_boost_can_be_disabled() -> None:
    qr = encode_segments(make_segments("HELLO WORLD"), Ecc.LOW, boost_ecl=False)
    assert qr.error_correction_level is Ecc.LOW


def test_data_codewords_for_hello_world() -> None:
    codewords = assemble_data_codewords([make_alphanumeric("HELLO WORLD")], 1, Ecc.MEDIUM)
    assert list(codewords) == [32, 91, 11, 120, 209, 114, 220, 77, 67, 64, 236, 17, 236, 17, 236, 17]


def test_byte_mode_data_codewords() -> None:
    codewords = assemble_data_codewords([make_bytes(b"hello, world")], 1, Ecc.LOW)
    # the 4-bit terminator lands on a byte boundary, so pad bytes follow directly
    assert codewords.hex() == "40c68656c6c6f2c20776f726c640" "ec11ec11ec"


def test_byte_mode_fills_capacity_exactly() -> None:
    codewords = assemble_data_codewords([make_bytes(b"\xff" * 17)], 1, Ecc.LOW)
    assert codewords == b"\x41\x1f" + b"\xff" * 16 + b"\xf0"


def test_byte_mode_multi_block_version() -> None:
    qr = encode_segments([make_bytes(bytes(range(200)))], Ecc.QUARTILE, mask=5, boost_ecl=False)
    assert qr.version == 12
    assert qr.size == 65


def test_padding_of_empty_data() -> None:
    assert assemble_data_codewords([], 1, Ecc.HIGH).hex() == "00ec11ec11ec11ec11"


def test_terminator_is_truncated_at_capacity() -> None:
    # 151 of 152 bits used: one terminator bit, no pad bytes
    codewords = assemble_data_codewords([make_numeric("1" * 41)], 1, Ecc.LOW)
    assert len(codewords) == 19
    assert codewords[-1] & 1 == 0


def test_assemble_rejects_overflow() -> None:
    with pytest.raises(DataTooLongError):
        assemble_data_codewords([make_bytes(bytes(20))], 1, Ecc.LOW)


@pytest.mark.parametrize("text,version", [
    ("1" * 41, 1),
    ("1" * 42, 2),
    ("A" * 25, 1),
    ("A" * 26, 2),
])
def test_version_boundaries(text: str, version: int) -> None:
    assert encode_segments(make_segments(text), Ecc.LOW, mask=0, boost_ecl=False).version == version


def test_largest_binary_payload() -> None:
    qr = encode_segments([make_bytes(bytes(2953))], Ecc.LOW, mask=0)
    assert qr.version == 40
    assert qr.size == 177
    with pytest.raises(DataTooLongError):
        encode_segments([make_bytes(bytes(2954))], Ecc.LOW, mask=0)


def test_too_long_is_a_value_error() -> None:
    with pytest.raises(ValueError, match="Data too long"):
        encode_binary(bytes(3000), Ecc.LOW)


def test_fixed_version_range() -> None:
    qr = encode_segments([make_numeric("1")], Ecc.LOW, min_version=5, max_version=5, mask=0)
    assert qr.version == 5
    with pytest.raises(DataTooLongError):
        encode_segments([make_bytes(bytes(100))], Ecc.HIGH, min_version=1, max_version=3)


@pytest.mark.parametrize("kwargs", [
    {"min_version": 0},
    {"max_version": 41},
    {"min_version": 5, "max_version": 4},
    {"mask": 8},
    {"mask": -2},
])
def test_encode_segments_rejects_invalid_arguments(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        encode_segments(make_segments("123"), Ecc.LOW, **kwargs)


@pytest.mark.parametrize("text", ["HELLO WORLD", "https://example.com", "0123456789"])
def test_auto_mask_matches_mask_evaluation(text: str) -> None:
    qr = encode_text(text, Ecc.MEDIUM)
    best_mask, best_score, scores = evaluate_all_masks(make_segments(text), qr.error_correction_level, qr.version)
    assert sorted(scores) == list(range(8))
    assert best_score == min(scores.values())
    assert qr.mask == best_mask


def test_encode_binary_uses_byte_mode() -> None:
    qr = encode_binary(b"\x00\x01\x02", Ecc.HIGH)
    assert qr.version == 1
    assert qr.error_correction_level is Ecc.HIGH


def test_build_segments_modes() -> None:
    assert [s.mode for s in build_segments("12345")] == [Mode.NUMERIC]
    assert [s.mode for s in build_segments("12345", mode="byte")] == [Mode.BYTE]
    assert [s.mode for s in build_segments("ABC123456789abc", mode="optimal")] \
        == [Mode.ALPHANUMERIC, Mode.NUMERIC, Mode.BYTE]
    assert [s.mode for s in build_segments(b"\xff\xfe")] == [Mode.BYTE]


def test_build_segments_encoding() -> None:
    segs = build_segments("café", mode="byte", encoding="latin-1")
    assert segs[0].num_chars == 4
    segs = build_segments("café", encoding="utf-8")
    assert segs[0].num_chars == 5


@pytest.mark.parametrize("encoding,assignment", [
    ("utf-8", 26),
    ("UTF8", 26),
    ("latin-1", 3),
    ("iso-8859-1", 3),
    ("shift_jis", 20),
    ("ascii", 27),
])
def test_build_segments_eci_header(encoding: str, assignment: int) -> None:
    segs = build_segments("abc", mode="byte", encoding=encoding, eci=True)
    assert [s.mode for s in segs] == [Mode.ECI, Mode.BYTE]
    assert int(segs[0].data.to_bit_string(), 2) == assignment


@pytest.mark.parametrize("text,kwargs", [
    ("12a", {"mode": "numeric"}),
    ("abc", {"mode": "alphanumeric"}),
    ("abc", {"mode": "kanji"}),
    ("abc", {"encoding": "no-such-codec"}),
    ("abc", {"mode": "optimal", "encoding": "latin-1"}),
    ("abc", {"encoding": "cp1252", "eci": True}),
    (b"abc", {"mode": "numeric"}),
])
def test_build_segments_rejects(text, kwargs: dict) -> None:
    with pytest.raises(ValueError):
        build_segments(text, **kwargs)


def test_make_qr_defaults() -> None:
    qr = make_qr("https://example.com")
    assert qr.version == 2
    assert qr.size == 25
    assert qr.error_correction_level is Ecc.QUARTILE


def test_make_qr_form_style_arguments() -> None:
    qr = make_qr("HELLO", ecc="h", version="3", mask="2", boost_error=False)
    assert qr.version == 3
    assert qr.mask == 2
    assert qr.error_correction_level is Ecc.HIGH


def test_make_qr_accepts_enum_level() -> None:
    qr = make_qr("HELLO", ecc=Ecc.LOW, version="auto", mask="auto", boost_error=False)
    assert qr.error_correction_level is Ecc.LOW


def test_make_qr_fixed_version_too_small() -> None:
    with pytest.raises(DataTooLongError):
        make_qr("a" * 100, ecc="H", version=1)


def test_make_qr_with_eci() -> None:
    plain = make_qr("héllo", ecc="L", boost_error=False, mask=0)
    with_eci = make_qr("héllo", ecc="L", eci=True, boost_error=False, mask=0)
    assert plain.version == with_eci.version == 1
    assert plain.matrix != with_eci.matrix
