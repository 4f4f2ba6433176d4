import qrcode
from io import BytesIO
from PIL import Image as PILImage


def render_qr_png(data: str, size: int = 300) -> bytes:
    """Render a QR code for printing on an asset label (PNG bytes)."""
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=10,
        border=4,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")
    img = img.resize((size, size), PILImage.Resampling.NEAREST)

    buffer = BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()
