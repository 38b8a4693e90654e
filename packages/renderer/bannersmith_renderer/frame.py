"""Rounded-rectangle background and inset outline."""

from __future__ import annotations

from PIL import Image, ImageChops, ImageDraw

from .fills import resolve
from .models import BannerSettings
from .surface import Surface


def clamp_radius(radius: float, width: float, height: float) -> int:
    return int(max(0, min(radius, width / 2, height / 2)))


def rounded_rect_mask(
    size: tuple[int, int],
    box: tuple[float, float, float, float],
    radius: float,
    corners: tuple[bool, bool, bool, bool] | None = None,
) -> Image.Image:
    """Coverage mask for a rounded rectangle given as (x0, y0, x1, y1), x1/y1 exclusive."""
    mask = Image.new("L", size, 0)
    x0, y0, x1, y1 = box
    if x1 <= x0 or y1 <= y0:
        return mask
    r = clamp_radius(radius, x1 - x0, y1 - y0)
    ImageDraw.Draw(mask).rounded_rectangle(
        (x0, y0, x1 - 1, y1 - 1),
        radius=r,
        fill=255,
        corners=corners,
    )
    return mask


def outline_mask(size: tuple[int, int], radius: float, thickness: int) -> Image.Image:
    """Inward half of a ``2 * thickness`` stroke along the banner edge."""
    width, height = size
    outer = rounded_rect_mask(size, (0, 0, width, height), radius)
    inner_radius = max(0, clamp_radius(radius, width, height) - thickness)
    inner = rounded_rect_mask(
        size,
        (thickness, thickness, width - thickness, height - thickness),
        inner_radius,
    )
    return ImageChops.subtract(outer, inner)


def draw_frame(surface: Surface, settings: BannerSettings) -> None:
    bounds = settings.bounds
    shape = rounded_rect_mask(surface.size, (0, 0, surface.width, surface.height), settings.corner_radius)
    surface.fill(resolve(settings.background_color, bounds), shape)

    if settings.outline_thickness <= 0:
        return
    stroke = outline_mask(surface.size, settings.corner_radius, settings.outline_thickness)
    with surface.clip(shape):
        surface.fill(resolve(settings.outline_color, bounds), stroke)
