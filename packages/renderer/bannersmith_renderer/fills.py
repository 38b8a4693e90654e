"""Fill resolution: solid colours and multi-stop gradients into drawable paint."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np
from PIL import Image, ImageColor

from .models import ColorStop, Fill, GradientFill, Rect, SolidFill

RGBA = tuple[int, int, int, int]


def parse_color(value: str) -> RGBA:
    return ImageColor.getcolor(value, "RGBA")  # type: ignore[return-value]


@dataclass(frozen=True)
class SolidPaint:
    color: RGBA

    def layer(self, size: tuple[int, int]) -> Image.Image:
        return Image.new("RGBA", size, self.color)

    def color_at(self, x: float, y: float) -> RGBA:
        return self.color


@dataclass(frozen=True, eq=False)
class _GradientRamp:
    offsets: np.ndarray
    colors: np.ndarray

    @classmethod
    def from_stops(cls, stops: list[ColorStop]) -> "_GradientRamp":
        offsets = np.array([stop.position / 100.0 for stop in stops], dtype=np.float64)
        colors = np.array([parse_color(stop.color) for stop in stops], dtype=np.float64)
        return cls(offsets=offsets, colors=colors)

    def sample(self, t: np.ndarray) -> np.ndarray:
        """Piecewise-linear RGBA lookup, clamped to the end stops."""
        offsets, colors = self.offsets, self.colors
        # side="right" skips zero-length segments, so the later duplicate wins.
        idx = np.searchsorted(offsets, t, side="right")
        hi = np.clip(idx, 0, len(offsets) - 1)
        lo = np.clip(idx - 1, 0, len(offsets) - 1)
        span = offsets[hi] - offsets[lo]
        frac = np.where(span > 0, (t - offsets[lo]) / np.where(span > 0, span, 1.0), 0.0)
        frac = np.clip(frac, 0.0, 1.0)[..., None]
        return colors[lo] * (1.0 - frac) + colors[hi] * frac


class _GradientPaint(ABC):
    ramp: _GradientRamp

    @abstractmethod
    def _positions(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        """Gradient parameter t for each sample point; 0 and 1 are the end stops."""

    def layer(self, size: tuple[int, int]) -> Image.Image:
        width, height = size
        # Sample at pixel centres.
        ys, xs = np.mgrid[0:height, 0:width].astype(np.float64) + 0.5
        rgba = self.ramp.sample(self._positions(xs, ys))
        return Image.fromarray(np.rint(rgba).astype(np.uint8), "RGBA")

    def color_at(self, x: float, y: float) -> RGBA:
        t = self._positions(np.array([x], dtype=np.float64), np.array([y], dtype=np.float64))
        r, g, b, a = (int(round(c)) for c in self.ramp.sample(t)[0])
        return (r, g, b, a)


@dataclass(frozen=True)
class LinearGradientPaint(_GradientPaint):
    start: tuple[float, float]
    end: tuple[float, float]
    ramp: _GradientRamp

    def _positions(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        dx = self.end[0] - self.start[0]
        dy = self.end[1] - self.start[1]
        length_sq = dx * dx + dy * dy
        if length_sq == 0:
            return np.zeros_like(xs)
        return ((xs - self.start[0]) * dx + (ys - self.start[1]) * dy) / length_sq


@dataclass(frozen=True)
class RadialGradientPaint(_GradientPaint):
    center: tuple[float, float]
    radius: float
    ramp: _GradientRamp

    def _positions(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        if self.radius <= 0:
            return np.ones_like(xs)
        return np.hypot(xs - self.center[0], ys - self.center[1]) / self.radius


Paint = SolidPaint | LinearGradientPaint | RadialGradientPaint


def linear_gradient_line(angle: float, bounds: Rect) -> tuple[tuple[float, float], tuple[float, float]]:
    """Endpoints of the gradient line through the centre of ``bounds``.

    0 degrees points along +x and angles grow clockwise (screen y points down).
    The line is long enough for perpendiculars through the corners to touch
    its ends.
    """
    theta = math.radians(angle % 360.0)
    dx, dy = math.cos(theta), math.sin(theta)
    half = (abs(bounds.width * dx) + abs(bounds.height * dy)) / 2
    cx, cy = bounds.center
    return (cx - dx * half, cy - dy * half), (cx + dx * half, cy + dy * half)


def resolve(fill: Fill, bounds: Rect) -> Paint:
    if isinstance(fill, SolidFill):
        return SolidPaint(parse_color(fill.color))
    if isinstance(fill, GradientFill):
        stops = fill.sorted_stops()
        if not stops:
            raise ValueError("gradient has no stops")
        if len(stops) == 1:
            return SolidPaint(parse_color(stops[0].color))
        ramp = _GradientRamp.from_stops(stops)
        if fill.type == "radial":
            return RadialGradientPaint(
                center=bounds.center,
                radius=max(bounds.width, bounds.height) / 2,
                ramp=ramp,
            )
        if fill.type == "linear":
            start, end = linear_gradient_line(fill.angle, bounds)
            return LinearGradientPaint(start=start, end=end, ramp=ramp)
        raise ValueError(f"Unknown gradient type: {fill.type}")
    raise TypeError(f"Unsupported fill: {fill!r}")
