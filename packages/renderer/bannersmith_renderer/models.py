"""Typed banner models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from PIL import Image

    from .fonts import FontLoader


TEXT_ALIGNS = ("left", "center", "right")
VERTICAL_ALIGNS = ("top", "middle", "bottom")
GRADIENT_TYPES = ("linear", "radial")
NO_ICON = "none"


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)


@dataclass(frozen=True)
class ColorStop:
    color: str
    position: float


@dataclass(frozen=True)
class SolidFill:
    color: str


@dataclass(frozen=True)
class GradientFill:
    type: str
    angle: float
    stops: tuple[ColorStop, ...]

    def sorted_stops(self) -> list[ColorStop]:
        # sorted() is stable, so equal positions keep their input order.
        return sorted(self.stops, key=lambda stop: stop.position)


Fill = Union[SolidFill, GradientFill]


@dataclass(frozen=True)
class BannerSettings:
    width: int = 1200
    height: int = 630
    background_color: Fill = field(default_factory=lambda: SolidFill("#161b22"))
    corner_radius: int = 12
    outline_color: Fill = field(default_factory=lambda: SolidFill("#58a6ff"))
    outline_thickness: int = 8
    font_family: str = "Roboto"
    font_size: int = 72
    font_color: Fill = field(default_factory=lambda: SolidFill("#e6edf3"))
    text: str = "Hello World!\nWelcome to the Banner Creator."
    text_align: str = "center"
    vertical_align: str = "middle"
    icon: str = NO_ICON
    uploaded_icon_svg: str | None = None
    theme: str = "default"
    window_title: str = "bash"

    @property
    def bounds(self) -> Rect:
        return Rect(0, 0, self.width, self.height)

    @property
    def has_icon(self) -> bool:
        return bool(self.uploaded_icon_svg) or bool(self.icon and self.icon != NO_ICON)


DEFAULT_BANNER_SETTINGS = BannerSettings()


@dataclass(frozen=True)
class RenderResources:
    """Everything a theme needs that had to be awaited before drawing."""

    fonts: FontLoader
    icon: Image.Image | None = None
