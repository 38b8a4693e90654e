"""Multi-line text placement and drawing for the plain banner."""

from __future__ import annotations

from dataclasses import dataclass

from PIL import Image, ImageDraw

from .fills import Paint
from .fonts import FontLike
from .models import BannerSettings
from .surface import Surface

PADDING = 40
LINE_HEIGHT_FACTOR = 1.2

# Horizontal alignment -> Pillow anchor with a vertically centred baseline.
_ANCHORS = {"left": "lm", "center": "mm", "right": "rm"}


@dataclass(frozen=True)
class LinePlacement:
    text: str
    x: float
    y: float


@dataclass(frozen=True)
class TextLayout:
    lines: list[LinePlacement]
    line_height: float
    total_height: float
    anchor: str


def line_height(font_size: int) -> float:
    return font_size * LINE_HEIGHT_FACTOR


def anchor_x(settings: BannerSettings) -> float:
    if settings.text_align == "left":
        return PADDING + settings.outline_thickness
    if settings.text_align == "right":
        return settings.width - PADDING - settings.outline_thickness
    return settings.width / 2


def start_y(settings: BannerSettings, lh: float, total: float) -> float:
    """Vertical centre of the first line box."""
    if settings.vertical_align == "top":
        return PADDING + settings.outline_thickness + lh / 2
    if settings.vertical_align == "bottom":
        return settings.height - PADDING - settings.outline_thickness - total + lh / 2
    return settings.height / 2 - total / 2 + lh / 2


def compute_layout(settings: BannerSettings) -> TextLayout:
    lines = settings.text.split("\n") if settings.text else []
    lh = line_height(settings.font_size)
    total = len(lines) * lh
    x = anchor_x(settings)
    y0 = start_y(settings, lh, total)
    return TextLayout(
        lines=[LinePlacement(text=line, x=x, y=y0 + i * lh) for i, line in enumerate(lines)],
        line_height=lh,
        total_height=total,
        anchor=_ANCHORS.get(settings.text_align, "mm"),
    )


def text_mask(size: tuple[int, int], layout: TextLayout, font: FontLike) -> Image.Image:
    mask = Image.new("L", size, 0)
    draw = ImageDraw.Draw(mask)
    for line in layout.lines:
        if line.text:
            draw.text((line.x, line.y), line.text, font=font, fill=255, anchor=layout.anchor)
    return mask


def layout_and_draw(surface: Surface, settings: BannerSettings, paint: Paint, font: FontLike) -> TextLayout | None:
    if not settings.text:
        return None
    layout = compute_layout(settings)
    surface.fill(paint, text_mask(surface.size, layout, font))
    return layout
