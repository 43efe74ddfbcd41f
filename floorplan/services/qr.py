"""
QR codes for guest ordering
"""

from io import BytesIO
import qrcode
import structlog

logger = structlog.get_logger(__name__)


def guest_order_url(base_url: str, restaurant_id: int, token: str) -> str:
    """URL a guest lands on after scanning the table QR code"""
    return f"{base_url.rstrip('/')}/guest/{restaurant_id}/{token}"


def render_qr_png(data: str, box_size: int = 10, border: int = 4) -> bytes:
    """
    Render data as a QR code PNG

    Args:
        data: Payload to encode, usually the guest order URL
        box_size: Pixels per QR module
        border: Quiet zone width in modules

    Returns:
        PNG image bytes
    """
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=box_size,
        border=border,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buffer = BytesIO()
    img.save(buffer, format="PNG")
    logger.debug("Rendered QR code", size=len(buffer.getvalue()))
    return buffer.getvalue()
