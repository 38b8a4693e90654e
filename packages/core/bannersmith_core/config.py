"""Persistent app settings schema and load/save helpers."""

from __future__ import annotations

import json
import os
import platform
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any


CONFIG_VERSION = 1
GOOGLE_FONTS_CSS_URL = "https://fonts.googleapis.com/css2?family={name}:wght@400;700&display=swap"


@dataclass
class FontsConfig:
    cache_dir: str | None = None
    css_url_template: str = GOOGLE_FONTS_CSS_URL
    fetch_timeout_s: float = 15.0


@dataclass
class RenderConfig:
    resource_timeout_s: float = 10.0
    output_name: str = "banner.png"


@dataclass
class DiagnosticsConfig:
    keep_log_files: int = 7


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    fonts: FontsConfig = field(default_factory=FontsConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)


def config_root() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "Bannersmith"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "Bannersmith"
    return Path.home() / ".config" / "bannersmith"


def config_path() -> Path:
    return config_root() / "config.json"


def font_cache_dir(cfg: AppConfig) -> Path:
    if cfg.fonts.cache_dir:
        return Path(cfg.fonts.cache_dir).expanduser()
    return config_root() / "fonts"


def _merge(dataclass_type, raw: dict[str, Any]):
    defaults = dataclass_type()  # type: ignore[misc]
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _normalize_fonts(cfg: AppConfig) -> None:
    cfg.fonts.fetch_timeout_s = float(max(1.0, min(120.0, float(cfg.fonts.fetch_timeout_s))))
    if "{name}" not in str(cfg.fonts.css_url_template):
        cfg.fonts.css_url_template = GOOGLE_FONTS_CSS_URL


def _normalize_render(cfg: AppConfig) -> None:
    cfg.render.resource_timeout_s = float(max(0.1, min(300.0, float(cfg.render.resource_timeout_s))))
    if not str(cfg.render.output_name).lower().endswith(".png"):
        cfg.render.output_name = "banner.png"


def load_config(path: Path | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return AppConfig()

    cfg = AppConfig(
        config_version=int(raw.get("config_version", CONFIG_VERSION)),
        fonts=_merge(FontsConfig, raw.get("fonts", {})),
        render=_merge(RenderConfig, raw.get("render", {})),
        diagnostics=_merge(DiagnosticsConfig, raw.get("diagnostics", {})),
    )

    _normalize_fonts(cfg)
    _normalize_render(cfg)
    cfg.diagnostics.keep_log_files = max(2, int(cfg.diagnostics.keep_log_files))
    return cfg


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path
