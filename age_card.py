"""
Age card rendering.

Draws the "Tendrás N años en el momento del impacto" card as a PNG so it
can be previewed on the page and attached to a native share.
"""

import io
import logging
from datetime import date
from typing import Tuple, Union

from PIL import Image, ImageDraw, ImageFont
from PIL.ImageFont import FreeTypeFont

from impact_dates import age_at_impact, age_breakdown

logger = logging.getLogger(__name__)

CARD_SIZE = (640, 400)
PADDING = 24
BOX_GAP = 12
BOX_HEIGHT = 88

# Colors (RGB)
BACKGROUND_COLOR = (0, 0, 64)
BORDER_COLOR = (234, 179, 8)
BOX_COLOR = (30, 58, 138)
AGE_COLOR = (253, 224, 71)
TEXT_COLOR = (147, 197, 253)
LABEL_COLOR = (255, 255, 255)

Font = Union[FreeTypeFont, ImageFont.ImageFont]


def _font(size: int, bold: bool = False) -> Font:
    name = "DejaVuSans-Bold.ttf" if bold else "DejaVuSans.ttf"
    try:
        return ImageFont.truetype(name, size)
    except OSError:
        return ImageFont.load_default(size)


def _centered(draw: ImageDraw.ImageDraw, center: Tuple[int, int], text: str, font: Font, fill) -> None:
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    x = center[0] - (right - left) // 2 - left
    y = center[1] - (bottom - top) // 2 - top
    draw.text((x, y), text, font=font, fill=fill)


def _draw_breakdown(draw: ImageDraw.ImageDraw, birth: date, top: int) -> None:
    breakdown = age_breakdown(birth)
    cells = [(breakdown.years, "AÑOS"), (breakdown.months, "MESES"), (breakdown.days, "DÍAS")]
    width = CARD_SIZE[0] - 2 * PADDING
    box_w = (width - BOX_GAP * (len(cells) - 1)) // len(cells)
    value_font, label_font = _font(30, bold=True), _font(14)

    for i, (value, label) in enumerate(cells):
        x0 = PADDING + i * (box_w + BOX_GAP)
        draw.rounded_rectangle([x0, top, x0 + box_w, top + BOX_HEIGHT], radius=10, fill=BOX_COLOR)
        cx = x0 + box_w // 2
        _centered(draw, (cx, top + 34), str(value), value_font, AGE_COLOR)
        _centered(draw, (cx, top + 68), label, label_font, LABEL_COLOR)


def render_age_card(birth: date) -> bytes:
    """Render the age card for ``birth`` and return PNG bytes.

    Raises:
        ValueError: if no birth date is given
    """
    if birth is None:
        raise ValueError("birth date is required to render the age card")

    image = Image.new("RGB", CARD_SIZE, BACKGROUND_COLOR)
    draw = ImageDraw.Draw(image)
    width, height = CARD_SIZE
    draw.rounded_rectangle([2, 2, width - 3, height - 3], radius=18, outline=BORDER_COLOR, width=3)

    cx = width // 2
    _centered(draw, (cx, 48), "Tendrás", _font(24), TEXT_COLOR)
    _centered(draw, (cx, 118), str(age_at_impact(birth)), _font(72, bold=True), AGE_COLOR)
    _centered(draw, (cx, 186), "años en el momento del impacto", _font(24), TEXT_COLOR)
    _draw_breakdown(draw, birth, top=height - PADDING - BOX_HEIGHT - 40)
    _centered(draw, (cx, height - PADDING - 14), "Asteroide 2024 YR4", _font(14), LABEL_COLOR)

    buffered = io.BytesIO()
    image.save(buffered, format="PNG")
    logger.debug("Rendered age card for %s (%d bytes)", birth.isoformat(), buffered.tell())
    return buffered.getvalue()
