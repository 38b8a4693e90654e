"""Renderer package for banner composition."""

from .fills import LinearGradientPaint, RadialGradientPaint, SolidPaint, resolve
from .fonts import LOADED_FONTS, FontLoader, FontLoadError
from .icons import PREDEFINED_ICONS, IconCompositor, list_icons
from .models import (
    DEFAULT_BANNER_SETTINGS,
    BannerSettings,
    ColorStop,
    GradientFill,
    Rect,
    SolidFill,
)
from .orchestrator import RenderOrchestrator, RenderResult, RenderState, render_banner
from .settings import InvalidSettingsError, settings_from_dict, settings_to_dict, validate_settings
from .surface import Surface, save_png, to_data_url, to_png_bytes
from .themes import DEFAULT_THEME_NAME, get_theme, list_themes

__all__ = [
    "BannerSettings",
    "ColorStop",
    "DEFAULT_BANNER_SETTINGS",
    "DEFAULT_THEME_NAME",
    "FontLoadError",
    "FontLoader",
    "GradientFill",
    "IconCompositor",
    "InvalidSettingsError",
    "LOADED_FONTS",
    "LinearGradientPaint",
    "PREDEFINED_ICONS",
    "RadialGradientPaint",
    "Rect",
    "RenderOrchestrator",
    "RenderResult",
    "RenderState",
    "SolidFill",
    "SolidPaint",
    "Surface",
    "get_theme",
    "list_icons",
    "list_themes",
    "render_banner",
    "resolve",
    "save_png",
    "settings_from_dict",
    "settings_to_dict",
    "to_data_url",
    "to_png_bytes",
    "validate_settings",
]
