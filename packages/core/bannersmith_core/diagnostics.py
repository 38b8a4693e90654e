"""Environment report for `bannersmith doctor`."""

from __future__ import annotations

import platform
import re
from dataclasses import asdict
from datetime import datetime, timezone
from importlib import metadata
from typing import Any, Iterable

from .config import AppConfig, config_path, font_cache_dir


_SECRET_RE = re.compile(r"(token|secret|password|apikey|api_key|auth)", re.IGNORECASE)


def redact(value: Any) -> Any:
    if isinstance(value, dict):
        out: dict[str, Any] = {}
        for k, v in value.items():
            if _SECRET_RE.search(k):
                out[k] = "***REDACTED***"
            else:
                out[k] = redact(v)
        return out
    if isinstance(value, list):
        return [redact(v) for v in value]
    return value


def _dist_version(name: str) -> str | None:
    try:
        return metadata.version(name)
    except metadata.PackageNotFoundError:
        return None


def build_doctor_payload(cfg: AppConfig, loaded_fonts: Iterable[str] = ()) -> dict[str, Any]:
    cache = font_cache_dir(cfg)
    cached_files = sorted(p.name for p in cache.glob("*.ttf")) if cache.exists() else []
    return {
        "ts_utc": datetime.now(timezone.utc).isoformat(),
        "platform": platform.platform(),
        "python": platform.python_version(),
        "libraries": {name: _dist_version(name) for name in ("Pillow", "numpy", "CairoSVG")},
        "config_path": str(config_path()),
        "config": redact(asdict(cfg)),
        "fonts": {
            "cache_dir": str(cache),
            "cached_files": cached_files,
            "loaded_families": sorted(loaded_fonts),
        },
    }
