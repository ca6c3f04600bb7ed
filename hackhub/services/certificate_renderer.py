"""
Certificate Renderer
Draws a certificate template onto a fixed A4 landscape page and returns PDF bytes
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from io import BytesIO
from pathlib import Path
from typing import Optional, Tuple, Union

import httpx
import img2pdf
from PIL import Image, ImageDraw, ImageFont

from hackhub.config import settings
from hackhub.schemas.event import CertificateTemplate

logger = logging.getLogger(__name__)

# A4 landscape in PDF points
PAGE_WIDTH_PT = 841.89
PAGE_HEIGHT_PT = 595.28

# Pixels per point of the raster the page is drawn on
SCALE = 2

# Width of the box aligned text is laid out in, starting at the element's x
ALIGN_BOX_WIDTH_PT = 400

FONT_CANDIDATES = (
    "DejaVuSans.ttf",
    "Arial.ttf",
    "Helvetica.ttf",
    "LiberationSans-Regular.ttf",
)


@dataclass
class CertificateVariables:
    """Values substituted into template placeholders"""
    recipient_name: Optional[str] = None
    event_title: Optional[str] = None
    role: Optional[str] = None
    date: Optional[str] = None

    def placeholders(self) -> dict:
        return {
            "{{RECIPIENT_NAME}}": self.recipient_name,
            "{{EVENT_TITLE}}": self.event_title,
            "{{ROLE}}": self.role,
            "{{DATE}}": self.date,
        }


def substitute(text: str, variables: CertificateVariables) -> str:
    """Replace every occurrence of each placeholder; unknown values become empty"""
    for token, value in variables.placeholders().items():
        text = text.replace(token, "" if value is None else str(value))
    return text


def _hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    if not hex_color:
        return (0, 0, 0)
    color = hex_color.strip().lstrip("#")
    if len(color) == 3:
        color = "".join(c * 2 for c in color)
    if len(color) != 6:
        return (0, 0, 0)
    try:
        return tuple(int(color[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        return (0, 0, 0)


@lru_cache(maxsize=32)
def _load_font(size_px: int) -> ImageFont.ImageFont:
    for candidate in FONT_CANDIDATES:
        try:
            return ImageFont.truetype(candidate, size_px)
        except OSError:
            continue
    return ImageFont.load_default(size=size_px)


def _px(points: float) -> int:
    return int(round(points * SCALE))


def _text_width(draw: ImageDraw.ImageDraw, text: str, font) -> int:
    if not text:
        return 0
    left, _, right, _ = draw.textbbox((0, 0), text, font=font)
    return right - left


def _as_template(template: Union[CertificateTemplate, dict, None]) -> Optional[CertificateTemplate]:
    if template is None or isinstance(template, CertificateTemplate):
        return template
    return CertificateTemplate.model_validate(template)


def _draw_element(draw: ImageDraw.ImageDraw, text: str, x: float, y: float,
                  font_size: float, color: str, align: str) -> None:
    font = _load_font(_px(font_size))
    left = _px(x)
    if align in ("center", "right"):
        box = _px(ALIGN_BOX_WIDTH_PT)
        width = _text_width(draw, text, font)
        offset = box - width if align == "right" else (box - width) // 2
        left += offset
    draw.text((left, _px(y)), text, fill=_hex_to_rgb(color), font=font)


def _draw_centered(draw: ImageDraw.ImageDraw, text: str, y: float, font_size: float) -> None:
    font = _load_font(_px(font_size))
    width = _text_width(draw, text, font)
    draw.text(((_px(PAGE_WIDTH_PT) - width) // 2, _px(y)), text, fill=(0, 0, 0), font=font)


def _draw_fallback(draw: ImageDraw.ImageDraw, variables: CertificateVariables) -> None:
    _draw_centered(draw, "Certificate of Participation", 150, 30)
    _draw_centered(draw, "This certificate is proudly presented to", 210, 18)
    _draw_centered(draw, variables.recipient_name or "", 255, 28)
    line = f"for participating in {variables.event_title or ''}"
    if variables.role:
        line += f" as {variables.role}"
    _draw_centered(draw, line, 315, 18)


def render_certificate(
    template: Union[CertificateTemplate, dict, None],
    variables: CertificateVariables,
    background: Optional[Image.Image] = None
) -> bytes:
    """
    Draw a certificate and return it as a single-page PDF

    The background (if any) is drawn first and stretched to the page, then
    each template element in order. Without elements the built-in layout is
    used, so this never depends on anything outside the process.
    """
    template = _as_template(template)
    size = (_px(PAGE_WIDTH_PT), _px(PAGE_HEIGHT_PT))

    if background is not None:
        page = background.convert("RGB").resize(size)
    else:
        page = Image.new("RGB", size, "white")

    draw = ImageDraw.Draw(page)
    if template is not None and template.elements:
        for element in template.elements:
            _draw_element(
                draw,
                substitute(element.content, variables),
                element.x,
                element.y,
                element.font_size,
                element.color,
                element.align,
            )
    else:
        _draw_fallback(draw, variables)

    buffer = BytesIO()
    page.save(buffer, format="PNG")
    layout = img2pdf.get_layout_fun((PAGE_WIDTH_PT, PAGE_HEIGHT_PT))
    return img2pdf.convert(buffer.getvalue(), layout_fun=layout)


def _local_background_path(reference: str) -> Optional[Path]:
    """Existing file under the public directory, or None"""
    try:
        root = settings.public_path.resolve()
        path = (root / reference.lstrip("/")).resolve()
        if root != path and root not in path.parents:
            return None
        return path if path.is_file() else None
    except (OSError, ValueError):
        # NUL bytes, overlong names and the like cannot name a file
        return None


async def load_background(reference: Optional[str]) -> Optional[Image.Image]:
    """
    Load a template background

    Remote URLs are fetched once; any failure is logged and the certificate
    is drawn without a background. Local references are read from the public
    directory only when the file exists.
    """
    if not reference:
        return None

    if reference.startswith(("http://", "https://")):
        try:
            async with httpx.AsyncClient(timeout=settings.BACKGROUND_FETCH_TIMEOUT, follow_redirects=True) as client:
                response = await client.get(reference)
                response.raise_for_status()
            image = Image.open(BytesIO(response.content))
            image.load()
            return image
        except Exception as exc:
            logger.warning("Could not load certificate background %s: %s", reference, exc)
            return None

    path = _local_background_path(reference)
    if path is None:
        return None
    try:
        image = Image.open(path)
        image.load()
        return image
    except Exception as exc:
        logger.warning("Could not read certificate background %s: %s", path, exc)
        return None


async def render(
    template: Union[CertificateTemplate, dict, None],
    variables: CertificateVariables
) -> bytes:
    """Resolve the template background and render the certificate"""
    template = _as_template(template)
    background = await load_background(template.background_url) if template else None
    return render_certificate(template, variables, background)
