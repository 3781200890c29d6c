from __future__ import annotations

import base64
import doctest
from io import BytesIO

import pytest
from PIL import Image

from qr_encoder.renderer import (
    PALETTE,
    render_colored_png,
    render_colored_svg,
    render_png,
    to_svg_string,
)
from qr_encoder.symbol import QrCode
from qr_encoder.tables import Ecc


@pytest.fixture
def qr() -> QrCode:
    return QrCode(1, Ecc.MEDIUM, bytes(16), mask=0)


def _dark_count(qr: QrCode) -> int:
    return sum(qr.get_module(x, y) for y in range(qr.size) for x in range(qr.size))


def test_svg_has_one_square_per_dark_module(qr: QrCode) -> None:
    svg = to_svg_string(qr, border=4)
    assert svg.startswith('<?xml version="1.0" encoding="UTF-8"?>\n')
    assert 'viewBox="0 0 29 29"' in svg
    assert svg.count("h1v1h-1z") == _dark_count(qr)
    assert 'd="M4,4h1v1h-1z ' in svg
    assert "\r" not in svg


def test_svg_without_border(qr: QrCode) -> None:
    svg = to_svg_string(qr, border=0)
    assert 'viewBox="0 0 21 21"' in svg
    assert 'd="M0,0h1v1h-1z ' in svg


def test_negative_border_is_rejected(qr: QrCode) -> None:
    with pytest.raises(ValueError):
        to_svg_string(qr, border=-1)
    with pytest.raises(ValueError):
        render_png(qr, border=-1)
    with pytest.raises(ValueError):
        render_colored_png(qr, border=-1)


def test_png_pixels(qr: QrCode) -> None:
    img = Image.open(BytesIO(render_png(qr, border=4, scale=10)))
    assert img.size == (290, 290)
    assert img.mode == "L"
    assert img.getpixel((0, 0)) == 255
    assert img.getpixel((40, 40)) == 0
    assert img.getpixel((49, 49)) == 0
    # light ring of the finder pattern at module (1, 1)
    assert img.getpixel((55, 55)) == 255


def test_png_rejects_zero_scale(qr: QrCode) -> None:
    with pytest.raises(ValueError):
        render_png(qr, scale=0)


def test_colored_png_and_metrics(qr: QrCode) -> None:
    b64, metrics = render_colored_png(qr, border=2, scale=6)
    img = Image.open(BytesIO(base64.b64decode(b64)))
    assert img.size == (150, 150)
    assert img.getpixel((0, 0)) == PALETTE['background']
    assert img.getpixel((12, 12)) == PALETTE['finder']
    assert metrics == {
        'size': 21,
        'modules': 441,
        'dark_modules': _dark_count(qr),
        'functional_modules': 441 - 208,
        'data_modules': 128,
        'ecc_modules': 80,
        'remainder_modules': 0,
        'border': 2,
    }


def test_colored_svg(qr: QrCode) -> None:
    svg = render_colored_svg(qr, border=4, scale=10).decode("utf-8")
    assert svg.startswith('<?xml')
    assert 'width="290" height="290"' in svg
    assert 'fill="rgb(128, 0, 128)"' in svg
    assert 'fill="rgb(230, 230, 230)"' in svg
    assert svg.rstrip().endswith("</svg>")


def test_docstring_examples_run() -> None:
    from qr_encoder import renderer

    result = doctest.testmod(renderer)
    assert result.attempted > 0
    assert result.failed == 0
