"""Cross-checks against segno, an independent QR Code encoder."""
from __future__ import annotations

import pytest
import segno

from qr_encoder.qr_generator import encode_segments
from qr_encoder.segments import make_alphanumeric, make_numeric
from qr_encoder.tables import Ecc

_BUILDERS = {
    'numeric': make_numeric,
    'alphanumeric': make_alphanumeric,
}


def _reference_rows(content, mode: str, ecl: Ecc, mask: int) -> tuple:
    ref = segno.make_qr(content, error=ecl.letter.lower(), mode=mode, mask=mask, boost_error=False)
    return ref.version, [[bool(v) for v in row] for row in ref.matrix]


def _our_rows(content, mode: str, ecl: Ecc, mask: int) -> tuple:
    qr = encode_segments([_BUILDERS[mode](content)], ecl, mask=mask, boost_ecl=False)
    return qr.version, [list(row) for row in qr.matrix]


@pytest.mark.parametrize("mask", range(8))
def test_hello_world_every_mask(mask: int) -> None:
    assert _our_rows("HELLO WORLD", 'alphanumeric', Ecc.QUARTILE, mask) \
        == _reference_rows("HELLO WORLD", 'alphanumeric', Ecc.QUARTILE, mask)


@pytest.mark.parametrize("content,mode,ecl,mask", [
    ("01234567890123456789", 'numeric', Ecc.MEDIUM, 2),
    ("3141592653589793238462643383279502884197" * 3, 'numeric', Ecc.HIGH, 6),
    ("0123456789" * 30, 'numeric', Ecc.QUARTILE, 1),
    ("QR CODE MODEL 2 $%*+-./: " * 16, 'alphanumeric', Ecc.MEDIUM, 3),
])
def test_matches_reference(content, mode: str, ecl: Ecc, mask: int) -> None:
    assert _our_rows(content, mode, ecl, mask) == _reference_rows(content, mode, ecl, mask)


def test_large_symbol_has_version_information() -> None:
    version, rows = _our_rows("0123456789" * 30, 'numeric', Ecc.QUARTILE, 1)
    assert version >= 7
    assert len(rows) == version * 4 + 17
