"""Conversion and validation of banner settings snapshots."""

from __future__ import annotations

import math
from dataclasses import fields
from typing import Any

from PIL import ImageColor

from .models import (
    GRADIENT_TYPES,
    TEXT_ALIGNS,
    VERTICAL_ALIGNS,
    BannerSettings,
    ColorStop,
    Fill,
    GradientFill,
    SolidFill,
)
from .themes import THEMES


class InvalidSettingsError(ValueError):
    """Raised when a settings snapshot cannot be rendered."""

    def __init__(self, problems: list[str]) -> None:
        super().__init__("; ".join(problems))
        self.problems = problems


# Editing-surface key -> dataclass attribute.
_JSON_KEYS = {
    "width": "width",
    "height": "height",
    "backgroundColor": "background_color",
    "cornerRadius": "corner_radius",
    "outlineColor": "outline_color",
    "outlineThickness": "outline_thickness",
    "fontFamily": "font_family",
    "fontSize": "font_size",
    "fontColor": "font_color",
    "text": "text",
    "textAlign": "text_align",
    "verticalAlign": "vertical_align",
    "icon": "icon",
    "uploadedIconSvg": "uploaded_icon_svg",
    "theme": "theme",
    "windowTitle": "window_title",
}
_FILL_ATTRS = ("background_color", "outline_color", "font_color")


def fill_from_value(value: Any) -> Fill:
    if isinstance(value, (SolidFill, GradientFill)):
        return value
    if isinstance(value, str):
        return SolidFill(value)
    if isinstance(value, dict):
        try:
            stops = tuple(
                ColorStop(color=str(stop["color"]), position=float(stop["position"]))
                for stop in value.get("stops", [])
            )
            return GradientFill(
                type=str(value.get("type", "linear")),
                angle=float(value.get("angle", 0.0)),
                stops=stops,
            )
        except KeyError as exc:
            raise InvalidSettingsError([f"gradient stop is missing {exc}"]) from exc
        except (TypeError, ValueError) as exc:
            raise InvalidSettingsError([f"malformed gradient: {exc}"]) from exc
    raise InvalidSettingsError([f"unsupported fill value: {value!r}"])


def fill_to_value(fill: Fill) -> Any:
    if isinstance(fill, SolidFill):
        return fill.color
    if isinstance(fill, GradientFill):
        return {
            "type": fill.type,
            "angle": fill.angle,
            "stops": [{"color": s.color, "position": s.position} for s in fill.stops],
        }
    raise TypeError(f"Unsupported fill: {fill!r}")


def settings_from_dict(raw: dict[str, Any], base: BannerSettings | None = None) -> BannerSettings:
    """Build a snapshot from the camelCase JSON shape.

    Keys missing from ``raw`` keep the value from ``base`` (defaults when
    omitted); unknown keys are ignored. Malformed fill values raise
    ``InvalidSettingsError``.
    """
    base = base or BannerSettings()
    values = {f.name: getattr(base, f.name) for f in fields(BannerSettings)}
    for key, attr in _JSON_KEYS.items():
        if key not in raw:
            continue
        value = raw[key]
        if attr in _FILL_ATTRS:
            value = fill_from_value(value)
        values[attr] = value
    return BannerSettings(**values)


def settings_to_dict(settings: BannerSettings) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key, attr in _JSON_KEYS.items():
        value = getattr(settings, attr)
        out[key] = fill_to_value(value) if attr in _FILL_ATTRS else value
    return out


def _is_color(value: str) -> bool:
    try:
        ImageColor.getrgb(value)
    except ValueError:
        return False
    return True


def _positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _fill_problems(name: str, fill: Fill) -> list[str]:
    if isinstance(fill, SolidFill):
        return [] if _is_color(fill.color) else [f"{name}: unknown color {fill.color!r}"]
    if isinstance(fill, GradientFill):
        problems = []
        if fill.type not in GRADIENT_TYPES:
            problems.append(f"{name}: gradient type must be one of {GRADIENT_TYPES}")
        if not math.isfinite(fill.angle):
            problems.append(f"{name}: gradient angle must be finite")
        if not fill.stops:
            problems.append(f"{name}: gradient needs at least one stop")
        for stop in fill.stops:
            if not (0.0 <= stop.position <= 100.0):
                problems.append(f"{name}: stop position {stop.position} outside [0, 100]")
            if not _is_color(stop.color):
                problems.append(f"{name}: unknown color {stop.color!r}")
        return problems
    return [f"{name}: unsupported fill {fill!r}"]


def validate_settings(settings: BannerSettings) -> BannerSettings:
    problems: list[str] = []
    for attr in ("width", "height", "font_size"):
        if not _positive_int(getattr(settings, attr)):
            problems.append(f"{attr} must be a positive integer")
    for attr in ("corner_radius", "outline_thickness"):
        value = getattr(settings, attr)
        if not isinstance(value, int) or value < 0:
            problems.append(f"{attr} must be a non-negative integer")
    for attr in ("text", "font_family", "icon", "theme", "window_title"):
        if not isinstance(getattr(settings, attr), str):
            problems.append(f"{attr} must be a string")
    if settings.uploaded_icon_svg is not None and not isinstance(settings.uploaded_icon_svg, str):
        problems.append("uploaded_icon_svg must be a string or null")
    if settings.text_align not in TEXT_ALIGNS:
        problems.append(f"text_align must be one of {TEXT_ALIGNS}")
    if settings.vertical_align not in VERTICAL_ALIGNS:
        problems.append(f"vertical_align must be one of {VERTICAL_ALIGNS}")

    if isinstance(settings.theme, str) and settings.theme not in THEMES:
        problems.append(f"theme must be one of {tuple(sorted(THEMES))}")
    for attr in _FILL_ATTRS:
        problems.extend(_fill_problems(attr, getattr(settings, attr)))

    if problems:
        raise InvalidSettingsError(problems)
    return settings
