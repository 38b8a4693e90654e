"""Pillow-backed drawing surface with mask compositing and a clip stack."""

from __future__ import annotations

import base64
from contextlib import contextmanager
from io import BytesIO
from pathlib import Path
from typing import Iterator

from PIL import Image, ImageChops, ImageDraw

from .fills import Paint


class Surface:
    """RGBA pixel buffer that every renderer paints through.

    Shapes, strokes and glyphs are expressed as 8-bit coverage masks; ``fill``
    composites a paint layer through the mask and the active clip.
    """

    def __init__(self, width: int = 1, height: int = 1) -> None:
        self.image = Image.new("RGBA", (width, height), (0, 0, 0, 0))
        self._clips: list[Image.Image] = []

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    def reset(self, width: int, height: int) -> None:
        self.image = Image.new("RGBA", (width, height), (0, 0, 0, 0))
        self._clips = []

    def new_mask(self) -> tuple[Image.Image, ImageDraw.ImageDraw]:
        mask = Image.new("L", self.size, 0)
        return mask, ImageDraw.Draw(mask)

    def _effective_mask(self, mask: Image.Image) -> Image.Image:
        for clip in self._clips:
            mask = ImageChops.multiply(mask, clip)
        return mask

    def fill(self, paint: Paint, mask: Image.Image) -> None:
        layer = paint.layer(self.size)
        coverage = self._effective_mask(mask)
        layer.putalpha(ImageChops.multiply(layer.getchannel("A"), coverage))
        self.image.alpha_composite(layer)

    def paste(self, image: Image.Image, xy: tuple[int, int]) -> None:
        layer = Image.new("RGBA", self.size, (0, 0, 0, 0))
        layer.paste(image.convert("RGBA"), xy)
        if self._clips:
            layer.putalpha(self._effective_mask(layer.getchannel("A")))
        self.image.alpha_composite(layer)

    @contextmanager
    def clip(self, mask: Image.Image) -> Iterator[None]:
        self._clips.append(mask)
        try:
            yield
        finally:
            self._clips.pop()

    @property
    def clip_depth(self) -> int:
        return len(self._clips)


def to_png_bytes(surface: Surface) -> bytes:
    buf = BytesIO()
    surface.image.save(buf, format="PNG")
    return buf.getvalue()


def to_data_url(surface: Surface) -> str:
    b64 = base64.b64encode(to_png_bytes(surface)).decode("ascii")
    return f"data:image/png;base64,{b64}"


def save_png(surface: Surface, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    surface.image.save(path, format="PNG")
    return path
