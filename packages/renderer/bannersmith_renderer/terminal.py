"""Simulated terminal window theme ("os-window")."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Protocol

from PIL import Image, ImageDraw

from .fills import SolidPaint, parse_color
from .frame import rounded_rect_mask
from .models import BannerSettings, RenderResources
from .surface import Surface

HEADER_HEIGHT = 40
LOCAL_PADDING = 15
DOT_RADIUS = 6
DOT_GAP = 5
TITLE_SIZE = 14
TITLE_FAMILY = "monospace"
COMMAND_ADVANCE = 1.5
PROMPT = "$ "
COMMENT_PREFIX = "#"
ELLIPSIS = "…"

MAX_COLUMNS = 3
COLUMN_MIN_WIDTH = 240
COLUMN_GAP = 16
PANEL_RADIUS = 8
PANEL_PADDING = 10
LABEL_GAP = 8


@dataclass(frozen=True)
class TerminalPalette:
    header: str = "#30363d"
    body: str = "rgb(30, 30, 46)"
    title: str = "rgb(205, 214, 244)"
    text: str = "rgb(205, 214, 244)"
    comment: str = "rgb(108, 112, 134)"
    accent: str = "rgb(137, 180, 250)"
    panel: str = "rgb(49, 50, 68)"
    dots: tuple[str, str, str] = ("rgb(255, 95, 86)", "rgb(255, 189, 46)", "rgb(39, 201, 63)")


PALETTE = TerminalPalette()

# Sample content, not derived from settings.
ASCII_ART = (
    r" ____                              ",
    r"| __ )  __ _ _ __  _ __   ___ _ __ ",
    r"|  _ \ / _` | '_ \| '_ \ / _ \ '__|",
    r"| |_) | (_| | | | | | | |  __/ |   ",
    r"|____/ \__,_|_| |_|_| |_|\___|_|   ",
)

INFO_ROWS: tuple[tuple[str, str], ...] = (
    ("OS", "Arch Linux x86_64"),
    ("Host", "ThinkPad X1 Carbon Gen 11"),
    ("Kernel", "6.9.3-arch1-1"),
    ("Uptime", "4 days, 7 hours, 12 mins"),
    ("Packages", "1342 (pacman), 18 (flatpak)"),
    ("Shell", "zsh 5.9"),
    ("Resolution", "2880x1800 @ 90Hz"),
    ("WM", "Hyprland"),
    ("Terminal", "kitty 0.35.1"),
    ("CPU", "13th Gen Intel i7-1365U (12) @ 5.2GHz"),
    ("GPU", "Intel Iris Xe Graphics"),
    ("Memory", "9.1GiB / 31.1GiB (29%)"),
)


class Measurable(Protocol):
    def getlength(self, text: str) -> float: ...


@dataclass(frozen=True)
class TerminalFonts:
    title: Measurable
    command: Measurable
    detail: Measurable
    command_size: int
    detail_size: int


@dataclass(frozen=True)
class TextItem:
    text: str
    x: float
    y: float
    role: str
    color: str
    anchor: str = "la"


@dataclass(frozen=True)
class Dot:
    cx: float
    cy: float
    radius: float
    color: str


@dataclass
class TerminalLayout:
    width: int
    height: int
    dots: list[Dot] = field(default_factory=list)
    texts: list[TextItem] = field(default_factory=list)
    panels: list[tuple[float, float, float, float]] = field(default_factory=list)
    columns: int = 0
    cursor: tuple[float, float, float, float] | None = None

    def texts_for(self, role: str) -> list[TextItem]:
        return [t for t in self.texts if t.role == role]


def truncate(text: str, font: Measurable, max_width: float) -> str:
    """Shorten ``text`` one character at a time until it fits, ending in an ellipsis."""
    if font.getlength(text) <= max_width:
        return text
    for n in range(len(text) - 1, 0, -1):
        candidate = text[:n] + ELLIPSIS
        if font.getlength(candidate) <= max_width:
            return candidate
    return ELLIPSIS


def column_count(available_width: float) -> int:
    fit = int((available_width + COLUMN_GAP) // (COLUMN_MIN_WIDTH + COLUMN_GAP))
    return max(1, min(MAX_COLUMNS, fit))


def detail_size(font_size: int) -> int:
    return max(10, round(font_size * 0.6))


def _layout_title_bar(layout: TerminalLayout, settings: BannerSettings) -> None:
    cy = HEADER_HEIGHT / 2
    for i, color in enumerate(PALETTE.dots):
        cx = LOCAL_PADDING + i * (DOT_RADIUS * 2 + DOT_GAP)
        layout.dots.append(Dot(cx=cx, cy=cy, radius=DOT_RADIUS, color=color))
    layout.texts.append(
        TextItem(settings.window_title, settings.width / 2, cy, role="title", color=PALETTE.title, anchor="mm")
    )


def _layout_commands(layout: TerminalLayout, settings: BannerSettings, y: float) -> float:
    if not settings.text:
        return y
    advance = settings.font_size * COMMAND_ADVANCE
    for line in settings.text.split("\n"):
        if y > settings.height - LOCAL_PADDING:
            break
        is_comment = line.startswith(COMMENT_PREFIX)
        shown = PROMPT + line if line.strip() and not is_comment else line
        color = PALETTE.comment if is_comment else PALETTE.text
        layout.texts.append(TextItem(shown, LOCAL_PADDING, y, role="command", color=color))
        y += advance
    return y


def _layout_ascii_art(layout: TerminalLayout, settings: BannerSettings, fonts: TerminalFonts, y: float) -> float:
    row_height = fonts.detail_size * COMMAND_ADVANCE
    drawn = 0
    for line in ASCII_ART:
        if y + row_height > settings.height - LOCAL_PADDING:
            break
        layout.texts.append(TextItem(line, LOCAL_PADDING, y, role="art", color=PALETTE.accent))
        y += row_height
        drawn += 1
    return y + LOCAL_PADDING if drawn else y


def _layout_info_panel(
    layout: TerminalLayout,
    settings: BannerSettings,
    fonts: TerminalFonts,
    y: float,
    info_rows: tuple[tuple[str, str], ...] = INFO_ROWS,
) -> float:
    row_height = fonts.detail_size * COMMAND_ADVANCE
    available_width = settings.width - 2 * LOCAL_PADDING
    available_height = settings.height - LOCAL_PADDING - y
    fit = int((available_height - 2 * PANEL_PADDING) // row_height)
    if fit <= 0:
        return y

    columns = column_count(available_width)
    rows = list(info_rows[: fit * columns])
    if not rows:
        return y
    per_column = math.ceil(len(rows) / columns)
    chunks = [rows[i : i + per_column] for i in range(0, len(rows), per_column)]
    # Uneven splits can leave fewer filled columns than fit.
    columns = len(chunks)
    column_width = (available_width - (columns - 1) * COLUMN_GAP) / columns
    panel_height = 2 * PANEL_PADDING + per_column * row_height

    for index, chunk in enumerate(chunks):
        x0 = LOCAL_PADDING + index * (column_width + COLUMN_GAP)
        layout.panels.append((x0, y, x0 + column_width, y + panel_height))
        label_width = max(fonts.detail.getlength(f"{label}:") for label, _ in chunk) + LABEL_GAP
        value_x = x0 + PANEL_PADDING + label_width
        value_width = column_width - 2 * PANEL_PADDING - label_width
        for row, (label, value) in enumerate(chunk):
            ry = y + PANEL_PADDING + row * row_height
            layout.texts.append(TextItem(f"{label}:", x0 + PANEL_PADDING, ry, role="label", color=PALETTE.accent))
            shown = truncate(value, fonts.detail, value_width)
            layout.texts.append(TextItem(shown, value_x, ry, role="value", color=PALETTE.text))

    layout.columns = columns
    return y + panel_height + LOCAL_PADDING


def _layout_cursor(layout: TerminalLayout, settings: BannerSettings, fonts: TerminalFonts, y: float) -> None:
    if y + fonts.command_size > settings.height - LOCAL_PADDING:
        return
    layout.texts.append(TextItem(PROMPT.rstrip(), LOCAL_PADDING, y, role="prompt", color=PALETTE.text))
    x = LOCAL_PADDING + fonts.command.getlength(PROMPT)
    layout.cursor = (x, y, x + fonts.command_size * 0.6, y + fonts.command_size)


def layout_terminal(
    settings: BannerSettings,
    fonts: TerminalFonts,
    info_rows: tuple[tuple[str, str], ...] = INFO_ROWS,
) -> TerminalLayout:
    layout = TerminalLayout(width=settings.width, height=settings.height)
    _layout_title_bar(layout, settings)
    y = HEADER_HEIGHT + LOCAL_PADDING
    y = _layout_commands(layout, settings, y)
    y = _layout_ascii_art(layout, settings, fonts, y)
    y = _layout_info_panel(layout, settings, fonts, y, info_rows)
    _layout_cursor(layout, settings, fonts, y)
    return layout


class TerminalTheme:
    name = "os-window"
    label = "OS Window"

    def fonts(self, settings: BannerSettings, resources: RenderResources) -> TerminalFonts:
        size = detail_size(settings.font_size)
        return TerminalFonts(
            title=resources.fonts.font(TITLE_FAMILY, TITLE_SIZE, bold=True),
            command=resources.fonts.font(settings.font_family, settings.font_size),
            detail=resources.fonts.font(settings.font_family, size),
            command_size=settings.font_size,
            detail_size=size,
        )

    def render(self, surface: Surface, settings: BannerSettings, resources: RenderResources) -> TerminalLayout:
        fonts = self.fonts(settings, resources)
        layout = layout_terminal(settings, fonts)
        self.paint(surface, settings, layout, fonts)
        return layout

    def paint(self, surface: Surface, settings: BannerSettings, layout: TerminalLayout, fonts: TerminalFonts) -> None:
        size = surface.size
        w, h = size
        radius = settings.corner_radius
        surface.fill(_solid(PALETTE.header), rounded_rect_mask(size, (0, 0, w, h), radius))
        body = rounded_rect_mask(size, (0, HEADER_HEIGHT, w, h), radius, corners=(False, False, True, True))
        surface.fill(_solid(PALETTE.body), body)

        if layout.panels:
            mask, draw = surface.new_mask()
            for box in layout.panels:
                draw.rounded_rectangle(box, radius=PANEL_RADIUS, fill=255)
            surface.fill(_solid(PALETTE.panel), mask)

        for dot in layout.dots:
            mask, draw = surface.new_mask()
            draw.ellipse(
                (dot.cx - dot.radius, dot.cy - dot.radius, dot.cx + dot.radius, dot.cy + dot.radius),
                fill=255,
            )
            surface.fill(_solid(dot.color), mask)

        role_fonts = {
            "title": fonts.title,
            "command": fonts.command,
            "prompt": fonts.command,
            "art": fonts.detail,
            "label": fonts.detail,
            "value": fonts.detail,
        }
        by_color: dict[str, list[TextItem]] = {}
        for item in layout.texts:
            by_color.setdefault(item.color, []).append(item)
        for color, items in by_color.items():
            mask = Image.new("L", size, 0)
            draw = ImageDraw.Draw(mask)
            for item in items:
                if item.text:
                    draw.text((item.x, item.y), item.text, font=role_fonts[item.role], fill=255, anchor=item.anchor)
            if layout.cursor is not None and color == PALETTE.text:
                draw.rectangle(layout.cursor, fill=255)
            surface.fill(_solid(color), mask)


def _solid(color: str) -> SolidPaint:
    return SolidPaint(parse_color(color))
