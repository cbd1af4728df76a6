"""
QR code rendering for short URLs.
"""

import io

import qrcode
from qrcode.constants import ERROR_CORRECT_M

from shortlink_app.config import settings


def render_qr_png(text: str, box_size: int = None, border: int = None) -> bytes:
    """Encode ``text`` as a QR code and return the PNG bytes"""
    qr = qrcode.QRCode(
        error_correction=ERROR_CORRECT_M,
        box_size=box_size or settings.qr_box_size,
        border=settings.qr_border if border is None else border,
    )
    qr.add_data(text)
    qr.make(fit=True)

    img = qr.make_image()
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()
