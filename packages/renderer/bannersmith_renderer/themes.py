"""Built-in banner themes."""

from __future__ import annotations

from typing import Union

from .default_theme import DefaultTheme
from .terminal import TerminalTheme

DEFAULT_THEME_NAME = "default"

Theme = Union[DefaultTheme, TerminalTheme]

THEMES: dict[str, Theme] = {
    DefaultTheme.name: DefaultTheme(),
    TerminalTheme.name: TerminalTheme(),
}


def list_themes() -> list[str]:
    return sorted(THEMES.keys())


def get_theme(name: str | None) -> Theme:
    if not name:
        return THEMES[DEFAULT_THEME_NAME]
    try:
        return THEMES[name]
    except KeyError:
        raise ValueError(f"Unknown theme: {name}") from None
