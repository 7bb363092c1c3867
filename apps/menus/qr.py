"""QR codes pointing at the public menu page, plus a printable table card."""

from __future__ import annotations

import base64
import io
import logging

import qrcode
from django.conf import settings
from PIL import Image, ImageColor, ImageDraw, ImageFont

logger = logging.getLogger(__name__)

QR_WIDTH = 512
QR_MARGIN = 2
CARD_SIZE = (800, 1100)


def public_menu_url(menu) -> str:
    return f"{settings.BASE_URL}/m/{menu.slug}"


def generate_qr_image(data: str, width: int = QR_WIDTH, margin: int = QR_MARGIN,
                      color: str = "#000000", background_color: str = "#FFFFFF") -> Image.Image:
    qr = qrcode.QRCode(
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=1,
        border=margin,
    )
    qr.add_data(data)
    qr.make(fit=True)
    # scale modules to the closest integer box size, then pin the final width
    qr.box_size = max(1, width // (qr.modules_count + 2 * margin))
    img = qr.make_image(fill_color=color, back_color=background_color).get_image().convert("RGB")
    if img.size != (width, width):
        img = img.resize((width, width), Image.Resampling.NEAREST)
    return img


def png_bytes(img: Image.Image) -> bytes:
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def qr_data_url(data: str) -> str:
    encoded = base64.b64encode(png_bytes(generate_qr_image(data))).decode("ascii")
    return f"data:image/png;base64,{encoded}"


def _rgb(value: str, fallback: str) -> tuple[int, int, int]:
    try:
        return ImageColor.getrgb(value)[:3]
    except ValueError:
        logger.warning("Invalid colour %r on QR card, using %s", value, fallback)
        return ImageColor.getrgb(fallback)[:3]


def _centered_text(draw: ImageDraw.ImageDraw, y: int, text: str, font, fill) -> int:
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    x = (CARD_SIZE[0] - (right - left)) // 2
    draw.text((x, y), text, font=font, fill=fill)
    return y + (bottom - top)


def render_qr_card(menu, restaurant_name: str = "") -> bytes:
    """Printable PNG: restaurant name, QR code and the short URL below it."""
    url = public_menu_url(menu)
    primary = _rgb(menu.primary_color, "#E85D2C")
    background = _rgb(menu.bg_color, "#FFFBF7")

    card = Image.new("RGB", CARD_SIZE, background)
    draw = ImageDraw.Draw(card)
    draw.rectangle((0, 0, CARD_SIZE[0], 24), fill=primary)

    title_font = ImageFont.load_default(size=48)
    body_font = ImageFont.load_default(size=26)
    small_font = ImageFont.load_default(size=20)

    y = _centered_text(draw, 90, restaurant_name or menu.name, title_font, primary)
    _centered_text(draw, y + 30, "Scan to view our menu", body_font, (60, 60, 60))

    qr_img = generate_qr_image(url, width=QR_WIDTH, margin=QR_MARGIN)
    qr_pos = ((CARD_SIZE[0] - QR_WIDTH) // 2, 260)
    draw.rounded_rectangle(
        (qr_pos[0] - 16, qr_pos[1] - 16, qr_pos[0] + QR_WIDTH + 16, qr_pos[1] + QR_WIDTH + 16),
        radius=24,
        fill=(255, 255, 255),
        outline=primary,
        width=4,
    )
    card.paste(qr_img, qr_pos)

    _centered_text(draw, qr_pos[1] + QR_WIDTH + 60, url, small_font, (90, 90, 90))
    return png_bytes(card)
