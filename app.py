#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
QR Encoder - Flask Web Application

Serves a small form that previews the zone-colored symbol, a JSON endpoint
with the symbol matrix and mask scores, and black and white / colored
downloads.
"""

import logging
from io import BytesIO
from typing import Tuple

from flask import Flask, jsonify, render_template_string, request, send_file

from qr_encoder import (
    DataTooLongError,
    make_qr,
    render_colored_png,
    render_colored_svg,
    render_png,
    to_svg_string,
)
from qr_encoder.qr_generator import build_segments, evaluate_all_masks

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

TEMPLATE = """
<!doctype html>
<html>
<head>
  <meta charset="utf-8">
  <title>QR Encoder</title>
  <style>
    body{font-family:Arial, sans-serif; padding:18px}
    .metrics{font-size:13px;color:#333}
    .error{color:#b00;font-weight:600}
  </style>
</head>
<body>
  <h1>QR Encoder</h1>
  <form method="post">
    Text: <input type="text" name="text" size="80" value="{{text|e}}">
    ECC:
    <select name="ecc">
      {% for level in ['L', 'M', 'Q', 'H'] %}
      <option value="{{level}}" {% if ecc == level %}selected{% endif %}>{{level}}</option>
      {% endfor %}
    </select>
    Mode:
    <select name="mode">
      {% for m in ['auto', 'optimal', 'numeric', 'alphanumeric', 'byte'] %}
      <option value="{{m}}" {% if mode == m %}selected{% endif %}>{{m}}</option>
      {% endfor %}
    </select>
    Mask: <input type="text" name="mask" size="4" value="{{mask}}">
    <button type="submit">Generate</button>
  </form>

  {% if error %}
    <p class="error">{{error}}</p>
  {% endif %}

  {% if qr %}
    <img src="data:image/png;base64,{{qr.img_b64}}" alt="QR v{{qr.version}}">
    <div class="metrics">
      Version: <strong>{{qr.version}}</strong> ({{qr.size}}x{{qr.size}})<br>
      ECC: <strong>{{qr.ecc}}</strong>, mask: <strong>{{qr.mask}}</strong><br>
      Dark modules: {{qr.dark_modules}} / {{qr.modules}}<br>
      Functional modules: {{qr.functional_modules}}<br>
      Data / ECC / remainder modules: {{qr.data_modules}} / {{qr.ecc_modules}} / {{qr.remainder_modules}}<br>
    </div>
  {% endif %}
</body>
</html>
"""


def _read_flag(req, name: str, default: bool) -> bool:
    value = req.values.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _read_int(req, name: str, default: int, low: int, high: int) -> int:
    try:
        value = int(req.values.get(name) or default)
    except (ValueError, TypeError):
        return default
    if value < low or value > high:
        return default
    return value


def _read_params(req) -> Tuple[str, str, str, str, str, bool, str, bool, int, int]:
    """Extract and validate QR generation parameters from Flask request."""
    text = (req.values.get('text') or "").strip()
    ecc = (req.values.get('ecc') or "M").strip().upper()
    version = (req.values.get('version') or "auto").strip()
    mode = (req.values.get('mode') or "auto").strip().lower()
    encoding = (req.values.get('encoding') or "utf-8").strip()
    eci = _read_flag(req, 'eci', False)
    mask = (req.values.get('mask') or "auto").strip()
    boost_error = _read_flag(req, 'boost_error', True)
    border = _read_int(req, 'border', 4, 0, 20)
    scale = _read_int(req, 'scale', 10, 1, 50)
    return text, ecc, version, mode, encoding, eci, mask, boost_error, border, scale


def _make_from_request(req):
    params = _read_params(req)
    text, ecc, version, mode, encoding, eci, mask, boost_error, _, _ = params
    if not text:
        raise ValueError("Missing text")
    logger.info(f"Generating QR code with parameters: ecc={ecc}, version={version}, mode={mode}, mask={mask}")
    qr = make_qr(text, ecc=ecc, version=version, mode=mode, encoding=encoding,
                 eci=eci, mask=mask, boost_error=boost_error)
    logger.info(f"Successfully generated QR code version {qr.version}")
    return qr, params


app = Flask(__name__)


@app.errorhandler(ValueError)
def handle_bad_request(ex):
    if isinstance(ex, DataTooLongError):
        logger.warning(f"QR generation rejected, data too long: {ex}")
    else:
        logger.warning(f"QR generation rejected: {ex}")
    return str(ex), 400


@app.route('/', methods=['GET', 'POST'])
def index():
    text = ""
    ecc = "M"
    mode = "auto"
    mask = "auto"
    qr_view = None
    error = None

    if request.method == 'POST':
        text, ecc, _, mode, _, _, mask, _, border, _ = _read_params(request)
        if not text:
            error = "Enter the text to encode."
        else:
            try:
                qr, _ = _make_from_request(request)
            except ValueError as ex:
                error = f"Could not generate the QR code with these parameters: {ex}"
                logger.error(f"QR generation failed: {ex}")
            else:
                b64, metrics = render_colored_png(qr, border=border, scale=6)
                qr_view = dict(metrics, version=qr.version, ecc=qr.error_correction_level.letter,
                               mask=qr.mask, img_b64=b64)

    return render_template_string(TEMPLATE, text=text, ecc=ecc, mode=mode, mask=mask,
                                  qr=qr_view, error=error)


@app.route('/api/qr', methods=['GET', 'POST'])
def api_qr():
    qr, params = _make_from_request(request)
    text, _, _, mode, encoding, eci, _, _, _, _ = params
    ecl = qr.error_correction_level

    logger.info("Evaluating all mask patterns for optimization")
    segments = build_segments(text, mode, encoding, eci, ecl, qr.version, qr.version)
    best_mask, best_score, scores = evaluate_all_masks(segments, ecl, qr.version)
    logger.info(f"Best mask: {best_mask} (score: {best_score})")

    return jsonify({
        'version': qr.version,
        'size': qr.size,
        'ecc': ecl.letter,
        'mask': qr.mask,
        'mode': mode,
        'segments': [seg.mode.name for seg in segments],
        'best_mask': best_mask,
        'best_score': best_score,
        'mask_scores': {str(k): v for k, v in sorted(scores.items())},
        'rows': ["".join('1' if dark else '0' for dark in row) for row in qr.matrix],
    })


@app.route('/export/png', methods=['GET'])
def export_png_bw():
    qr, params = _make_from_request(request)
    border, scale = params[-2:]
    buf = BytesIO(render_png(qr, border=border, scale=scale))
    return send_file(buf, as_attachment=True, download_name='qr_bw.png', mimetype='image/png')


@app.route('/export/svg', methods=['GET'])
def export_svg_bw():
    qr, params = _make_from_request(request)
    buf = BytesIO(to_svg_string(qr, border=params[-2]).encode('utf-8'))
    return send_file(buf, as_attachment=True, download_name='qr_bw.svg', mimetype='image/svg+xml')


@app.route('/export/svg-colored', methods=['GET'])
def export_svg_colored():
    qr, params = _make_from_request(request)
    border, scale = params[-2:]
    svg_bytes = render_colored_svg(qr, border=border, scale=scale)
    return send_file(BytesIO(svg_bytes), as_attachment=True,
                     download_name='qr_colored_zones.svg',
                     mimetype='image/svg+xml')


if __name__ == "__main__":
    app.run(debug=True)
