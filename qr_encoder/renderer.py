# -*- coding: utf-8 -*-
"""
QR Code Renderer Module

This module turns a finished QR code into images. The plain renderers emit
a black-on-white SVG or PNG; the colored renderers paint every dark module
with the color of its zone (finder, timing, data, ECC, ...) to help
understand QR code structure.

Renderers only use the query surface of the symbol (``size``, ``version``,
``error_correction_level`` and ``get_module``).

Functions:
    to_svg_string: SVG document with a single path of unit squares
    render_png: Black and white PNG bytes
    render_colored_png: Colored PNG with zone analysis
    render_colored_svg: Colored SVG with zone analysis
"""

import base64
from io import BytesIO
from typing import Any, Dict, Tuple

import numpy as np
from PIL import Image, ImageDraw

from .functional_areas import build_zone_map
from .symbol import QrCode

# Color palette for QR code zone visualization
PALETTE = {
    'background': (255, 255, 255),    # White background
    'finder': (128, 0, 128),          # Purple - Finder patterns (3 corners)
    'separator': (230, 230, 230),     # Light gray - Visual separators
    'timing': (255, 165, 0),          # Orange - Timing patterns (row/col 6)
    'alignment': (0, 128, 128),       # Teal - Alignment patterns
    'format': (255, 0, 0),            # Red - Format information bits
    'version': (180, 0, 0),           # Dark red - Version information (v>=7)
    'data': (35, 35, 35),             # Dark gray - Data payload
    'ecc': (20, 90, 160),             # Blue - Error correction codes
    'remainder': (120, 120, 120),     # Gray - Remainder bits
}


def _check_border(border: int) -> None:
    if border < 0:
        raise ValueError("Border must be non-negative")


def to_svg_string(qr: QrCode, border: int = 4) -> str:
    """
    Build an SVG document depicting the QR code.

    Every dark module becomes one ``M{x},{y}h1v1h-1z`` unit square of a
    single black path, on a white background covering the quiet zone.
    Unix newlines are used regardless of platform.

    Args:
        qr (QrCode): Symbol to render
        border (int): Quiet zone size in modules

    Returns:
        str: SVG 1.1 document

    Raises:
        ValueError: If border is negative
    """
    _check_border(border)
    dimension = qr.size + border * 2
    parts = []
    for y in range(-border, qr.size + border):
        for x in range(-border, qr.size + border):
            if qr.get_module(x, y):
                parts.append(f"M{x + border},{y + border}h1v1h-1z")
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.1//EN" '
        '"http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd">\n'
        f'<svg xmlns="http://www.w3.org/2000/svg" version="1.1" '
        f'viewBox="0 0 {dimension} {dimension}" stroke="none">\n'
        '\t<rect width="100%" height="100%" fill="#FFFFFF"/>\n'
        f'\t<path d="{" ".join(parts)}" fill="#000000"/>\n'
        '</svg>\n'
    )


def render_png(qr: QrCode, border: int = 4, scale: int = 10) -> bytes:
    """
    Render the QR code as a black and white PNG.

    Args:
        qr (QrCode): Symbol to render
        border (int): Quiet zone size in modules
        scale (int): Pixel size per module

    Returns:
        bytes: PNG file content
    """
    _check_border(border)
    if scale <= 0:
        raise ValueError("Scale must be positive")
    dark = np.array(qr.matrix, dtype=bool)
    dark = np.pad(dark, border, mode='constant', constant_values=False)
    pixels = np.where(np.kron(dark, np.ones((scale, scale), dtype=bool)), 0, 255).astype(np.uint8)

    buf = BytesIO()
    Image.fromarray(pixels).save(buf, format='PNG')
    return buf.getvalue()


def _zone_metrics(qr: QrCode, zones, border: int) -> Dict[str, Any]:
    size = qr.size
    counts = {}
    dark_modules = 0
    for y in range(size):
        for x in range(size):
            zone = zones[y][x]
            counts[zone] = counts.get(zone, 0) + 1
            if qr.get_module(x, y):
                dark_modules += 1
    data_area = counts.get('data', 0) + counts.get('ecc', 0) + counts.get('remainder', 0)
    return {
        'size': size,
        'modules': size * size,
        'dark_modules': dark_modules,
        'functional_modules': size * size - data_area,
        'data_modules': counts.get('data', 0),
        'ecc_modules': counts.get('ecc', 0),
        'remainder_modules': counts.get('remainder', 0),
        'border': border,
    }


def render_colored_png(qr: QrCode, border: int = 4, scale: int = 6) -> Tuple[str, Dict[str, Any]]:
    """
    Render QR code as colored PNG with zone-based analysis.

    Dark modules are painted with the color of their zone; light separator
    modules are shaded light gray so the finder boundaries stay visible.

    Args:
        qr (QrCode): Symbol to render
        border (int): Quiet zone size in modules (recommended: 4+)
        scale (int): Pixel size per module

    Returns:
        Tuple[str, Dict[str, Any]]: (base64_png, metrics_dict)
            - base64_png: Base64-encoded PNG image
            - metrics_dict: Contains size, module counts per zone, etc.

    Example:
        >>> from qr_encoder import Ecc, encode_text
        >>> b64, metrics = render_colored_png(encode_text("HELLO", Ecc.MEDIUM))
        >>> metrics['size']
        21
    """
    _check_border(border)
    size = qr.size
    zones = build_zone_map(qr.version, qr.error_correction_level)

    img_px = (size + 2 * border) * scale
    img = Image.new('RGB', (img_px, img_px), PALETTE['background'])
    draw = ImageDraw.Draw(img)

    for y in range(size):
        for x in range(size):
            zone = zones[y][x]
            if qr.get_module(x, y):
                fill = PALETTE[zone]
            elif zone == 'separator':
                fill = PALETTE['separator']
            else:
                continue
            x0 = (x + border) * scale
            y0 = (y + border) * scale
            draw.rectangle([x0, y0, x0 + scale - 1, y0 + scale - 1], fill=fill)

    buf = BytesIO()
    img.save(buf, format='PNG')
    b64 = base64.b64encode(buf.getvalue()).decode('ascii')
    return b64, _zone_metrics(qr, zones, border)


def render_colored_svg(qr: QrCode, border: int = 4, scale: int = 10) -> bytes:
    """
    Render QR code as colored SVG with zone-based analysis.

    Same coloring as ``render_colored_png`` in scalable form, one rect per
    painted module.

    Returns:
        bytes: UTF-8 encoded SVG content
    """
    _check_border(border)
    size = qr.size
    zones = build_zone_map(qr.version, qr.error_correction_level)

    px = (size + 2 * border) * scale
    out = ['<?xml version="1.0" encoding="UTF-8"?>',
           f'<svg xmlns="http://www.w3.org/2000/svg" width="{px}" height="{px}" viewBox="0 0 {px} {px}">',
           f'<rect width="{px}" height="{px}" fill="rgb{PALETTE["background"]}"/>']

    for y in range(size):
        for x in range(size):
            zone = zones[y][x]
            if qr.get_module(x, y):
                fill = PALETTE[zone]
            elif zone == 'separator':
                fill = PALETTE['separator']
            else:
                continue
            out.append(f'<rect x="{(x + border) * scale}" y="{(y + border) * scale}" '
                       f'width="{scale}" height="{scale}" fill="rgb{fill}"/>')

    out.append('</svg>')
    return "\n".join(out).encode("utf-8")
