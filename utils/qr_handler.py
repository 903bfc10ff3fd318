# app/utils/qr_handler.py
import io
import qrcode
from PIL import Image


def render_qr_png(url: str, size: int, fg_color: str, bg_color: str) -> bytes:
    """URL을 QR코드 PNG 이미지로 변환합니다. (size x size 픽셀)"""
    qr = qrcode.QRCode(
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=10,
        border=2,
    )
    qr.add_data(url)
    qr.make(fit=True)

    image = qr.make_image(fill_color=fg_color, back_color=bg_color).get_image().convert("RGB")
    # 모듈 경계가 흐려지지 않도록 최근접 보간으로 크기를 맞춥니다.
    image = image.resize((size, size), Image.NEAREST)

    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()
