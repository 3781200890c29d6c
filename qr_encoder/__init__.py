# -*- coding: utf-8 -*-
"""
QR Encoder - Core Module

This package encodes text and binary data into QR Code Model 2 symbols
(versions 1-40, error correction levels L, M, Q and H) and renders them.

Modules:
    qr_generator: Encoding entry points and version/level selection
    segments: Segment type and the numeric/alphanumeric/byte/ECI builders
    segment_optimizer: Bit-length optimal mixed-mode segmentation
    symbol: QR code symbol construction (ECC, placement, masking)
    reed_solomon: Reed-Solomon error correction over GF(256)
    functional_areas: QR code function patterns and zones
    masks: The eight data mask patterns
    penalties: Mask pattern evaluation algorithms
    renderer: SVG and PNG output, plain and zone-colored
    bit_buffer: Growable bit sequence
    tables: Modes, error correction levels and capacity tables
"""

__version__ = "2.0.0"
__author__ = "QR Generator Advanced Team"

from .bit_buffer import BitBuffer
from .exceptions import DataTooLongError
from .functional_areas import build_function_mask, build_zone_map, compute_alignment_centers
from .penalties import compute_mask_penalty
from .qr_generator import (
    assemble_data_codewords,
    encode_binary,
    encode_segments,
    encode_text,
    evaluate_all_masks,
    make_qr,
)
from .reed_solomon import ReedSolomonGenerator
from .renderer import render_colored_png, render_colored_svg, render_png, to_svg_string
from .segment_optimizer import make_segments_optimally
from .segments import (
    QrSegment,
    make_alphanumeric,
    make_bytes,
    make_eci,
    make_numeric,
    make_segments,
)
from .symbol import QrCode
from .tables import AUTO_MASK, Ecc, Mode

__all__ = [
    'AUTO_MASK',
    'BitBuffer',
    'DataTooLongError',
    'Ecc',
    'Mode',
    'QrCode',
    'QrSegment',
    'ReedSolomonGenerator',
    'assemble_data_codewords',
    'build_function_mask',
    'build_zone_map',
    'compute_alignment_centers',
    'compute_mask_penalty',
    'encode_binary',
    'encode_segments',
    'encode_text',
    'evaluate_all_masks',
    'make_alphanumeric',
    'make_bytes',
    'make_eci',
    'make_numeric',
    'make_qr',
    'make_segments',
    'make_segments_optimally',
    'render_colored_png',
    'render_colored_svg',
    'render_png',
    'to_svg_string',
]
