"""Predefined icons and SVG icon compositing."""

from __future__ import annotations

import asyncio
from io import BytesIO

from PIL import Image

try:  # pragma: no cover - needs the system cairo library
    import cairosvg
except (ImportError, OSError):  # pragma: no cover
    cairosvg = None

from bannersmith_core.logging_setup import get_logger

from .models import NO_ICON, BannerSettings
from .surface import Surface

PREDEFINED_ICONS: dict[str, str] = {
    NO_ICON: "",
    "star": (
        '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24" fill="currentColor">'
        '<path d="M12 17.27L18.18 21l-1.64-7.03L22 9.24l-7.19-.61L12 2 9.19 8.63 2 9.24l5.46 4.73L5.82 21z"/>'
        "</svg>"
    ),
    "heart": (
        '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24" fill="currentColor">'
        '<path d="M12 21.35l-1.45-1.32C5.4 15.36 2 12.28 2 8.5 2 5.42 4.42 3 7.5 3c1.74 0 3.41.81 4.5 2.09'
        'C13.09 3.81 14.76 3 16.5 3 19.58 3 22 5.42 22 8.5c0 3.78-3.4 6.86-8.55 11.54L12 21.35z"/>'
        "</svg>"
    ),
    "circle": (
        '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24" fill="currentColor">'
        '<path d="M12 2C6.47 2 2 6.47 2 12s4.47 10 10 10 10-4.47 10-10S17.53 2 12 2z"/>'
        "</svg>"
    ),
    "react": (
        '<svg xmlns="http://www.w3.org/2000/svg" viewBox="-11.5 -10.23174 23 20.46348" fill="currentColor">'
        '<circle cx="0" cy="0" r="2.05" fill="#61dafb"/>'
        '<g stroke="#61dafb" stroke-width="1" fill="none">'
        '<ellipse rx="11" ry="4.2"/>'
        '<ellipse rx="11" ry="4.2" transform="rotate(60)"/>'
        '<ellipse rx="11" ry="4.2" transform="rotate(120)"/>'
        "</g></svg>"
    ),
}

logger = get_logger("icons")


def list_icons() -> list[str]:
    return list(PREDEFINED_ICONS.keys())


def icon_source(settings: BannerSettings) -> str | None:
    """Uploaded markup wins over the predefined key."""
    if settings.uploaded_icon_svg:
        return settings.uploaded_icon_svg
    return PREDEFINED_ICONS.get(settings.icon) or None


def icon_box(width: int, height: int) -> tuple[float, float, float]:
    """Return (x, y, side) of the centred icon square."""
    side = min(width, height) / 5
    return (width - side) / 2, (height - side) / 2, side


def decode_svg(markup: str, side: int) -> Image.Image:
    if cairosvg is None:
        raise RuntimeError("CairoSVG is required for icon decoding")
    png = cairosvg.svg2png(bytestring=markup.encode("utf-8"), output_width=side, output_height=side)
    image = Image.open(BytesIO(png))
    image.load()
    return image.convert("RGBA")


class IconCompositor:
    async def load(self, settings: BannerSettings) -> Image.Image | None:
        """Decode the selected icon; None when nothing is selected or decoding fails."""
        markup = icon_source(settings)
        if not markup:
            return None
        _, _, side = icon_box(settings.width, settings.height)
        try:
            return await asyncio.to_thread(decode_svg, markup, max(1, round(side)))
        except Exception as exc:
            logger.warning(f"icon decode failed: {exc}", extra={"event": "icon_decode_failed"})
            return None

    @staticmethod
    def draw(surface: Surface, image: Image.Image) -> None:
        x, y, side = icon_box(surface.width, surface.height)
        size = max(1, round(side))
        if image.size != (size, size):
            image = image.resize((size, size), Image.Resampling.LANCZOS)
        surface.paste(image, (round(x), round(y)))

    async def composite(self, surface: Surface, settings: BannerSettings) -> bool:
        image = await self.load(settings)
        if image is None:
            return False
        self.draw(surface, image)
        return True
