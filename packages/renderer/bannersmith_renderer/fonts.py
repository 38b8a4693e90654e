"""Font availability: generic families, Google Fonts downloads, and a process-wide registry."""

from __future__ import annotations

import asyncio
import http.client
import re
import urllib.error
import urllib.parse
import urllib.request
from pathlib import Path
from typing import Callable

from PIL import ImageFont

from bannersmith_core.config import GOOGLE_FONTS_CSS_URL
from bannersmith_core.logging_setup import get_logger

SAMPLE_GLYPHS = "BESbswy"
REGULAR = 400
BOLD = 700

GENERIC_FAMILIES: dict[str, tuple[str, str]] = {
    "sans-serif": ("DejaVuSans.ttf", "DejaVuSans-Bold.ttf"),
    "serif": ("DejaVuSerif.ttf", "DejaVuSerif-Bold.ttf"),
    "monospace": ("DejaVuSansMono.ttf", "DejaVuSansMono-Bold.ttf"),
    "cursive": ("DejaVuSans-Oblique.ttf", "DejaVuSans-BoldOblique.ttf"),
}
_FALLBACK_FILES = (("DejaVuSans.ttf", "DejaVuSans-Bold.ttf"), ("Arial.ttf", "Arial Bold.ttf"))

_FONT_FACE_RE = re.compile(r"@font-face\s*\{(?P<body>[^}]*)\}", re.IGNORECASE)
_WEIGHT_RE = re.compile(r"font-weight:\s*(?P<weight>\d+)")
_SRC_RE = re.compile(r"src:\s*url\((?P<url>[^)]+)\)")

logger = get_logger("fonts")

Fetcher = Callable[[str, float], bytes]
FontLike = ImageFont.FreeTypeFont | ImageFont.ImageFont


class FontLoadError(RuntimeError):
    """A font family could not be fetched or opened."""


class FontRegistry:
    """Append-only map of loaded family -> weight -> font file.

    Lives for the whole process; there is no eviction.
    """

    def __init__(self) -> None:
        self._families: dict[str, dict[int, Path]] = {}

    def add(self, family: str, files: dict[int, Path]) -> None:
        self._families.setdefault(family, {}).update(files)

    def get(self, family: str) -> dict[int, Path] | None:
        return self._families.get(family)

    def __contains__(self, family: object) -> bool:
        return family in self._families

    def families(self) -> list[str]:
        return sorted(self._families)


LOADED_FONTS = FontRegistry()


def is_generic(family: str) -> bool:
    return family in GENERIC_FAMILIES


def family_slug(family: str) -> str:
    return re.sub(r"[^A-Za-z0-9]+", "-", family).strip("-").lower()


def css_url(family: str, template: str = GOOGLE_FONTS_CSS_URL) -> str:
    return template.format(name=urllib.parse.quote(family.strip()).replace("%20", "+"))


def parse_font_faces(css: str) -> dict[int, str]:
    """Return the first font file URL declared for each weight."""
    faces: dict[int, str] = {}
    for match in _FONT_FACE_RE.finditer(css):
        body = match.group("body")
        src = _SRC_RE.search(body)
        if not src:
            continue
        weight_match = _WEIGHT_RE.search(body)
        weight = int(weight_match.group("weight")) if weight_match else REGULAR
        faces.setdefault(weight, src.group("url").strip("'\""))
    return faces


def _http_get(url: str, timeout_s: float) -> bytes:
    req = urllib.request.Request(url)
    with urllib.request.urlopen(req, timeout=timeout_s) as resp:
        return resp.read()


class FontLoader:
    def __init__(
        self,
        cache_dir: Path,
        registry: FontRegistry | None = None,
        fetch: Fetcher | None = None,
        css_url_template: str = GOOGLE_FONTS_CSS_URL,
        timeout_s: float = 15.0,
    ) -> None:
        self.cache_dir = cache_dir
        self.registry = registry if registry is not None else LOADED_FONTS
        self._fetch = fetch or _http_get
        self.css_url_template = css_url_template
        self.timeout_s = timeout_s
        self._fonts: dict[tuple[str, int, bool, bool], FontLike] = {}

    def is_ready(self, family: str) -> bool:
        return not family or is_generic(family) or family in self.registry

    async def ensure(self, family: str) -> None:
        if self.is_ready(family):
            return
        files = await asyncio.to_thread(self._download, family)
        self.registry.add(family, files)
        logger.info(f"font loaded family={family}", extra={"event": "font_loaded"})

    async def confirm(self, family: str, size: int) -> None:
        await asyncio.to_thread(self._confirm_sync, family, size)

    def _cached_files(self, family: str) -> dict[int, Path]:
        slug = family_slug(family)
        found = {}
        for weight in (REGULAR, BOLD):
            path = self.cache_dir / f"{slug}-{weight}.ttf"
            if path.exists() and path.stat().st_size > 0:
                found[weight] = path
        return found

    def _download(self, family: str) -> dict[int, Path]:
        cached = self._cached_files(family)
        if REGULAR in cached:
            return cached

        url = css_url(family, self.css_url_template)
        try:
            css = self._fetch(url, self.timeout_s).decode("utf-8")
            faces = parse_font_faces(css)
            if not faces:
                raise FontLoadError(f"No font faces served for {family}")
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            files: dict[int, Path] = {}
            for weight, font_url in faces.items():
                path = self.cache_dir / f"{family_slug(family)}-{weight}.ttf"
                path.write_bytes(self._fetch(font_url, self.timeout_s))
                files[weight] = path
        except (urllib.error.URLError, http.client.HTTPException, OSError, ValueError) as exc:
            raise FontLoadError(f"Failed to load font: {family}: {exc}") from exc
        return files

    def _confirm_sync(self, family: str, size: int) -> None:
        if not family or is_generic(family):
            return
        files = self.registry.get(family)
        if not files:
            raise FontLoadError(f"Font not loaded: {family}")
        path = files.get(REGULAR) or next(iter(files.values()))
        try:
            ImageFont.truetype(str(path), size).getlength(SAMPLE_GLYPHS)
        except OSError as exc:
            raise FontLoadError(f"Font unusable: {family} at {size}px: {exc}") from exc

    def _candidates(self, family: str, bold: bool) -> list[str]:
        candidates: list[str] = []
        files = self.registry.get(family) if family else None
        if files:
            preferred = files.get(BOLD if bold else REGULAR) or files.get(REGULAR)
            if preferred is not None:
                candidates.append(str(preferred))
        if family in GENERIC_FAMILIES:
            candidates.append(GENERIC_FAMILIES[family][1 if bold else 0])
        candidates.extend(pair[1 if bold else 0] for pair in _FALLBACK_FILES)
        return candidates

    def font(self, family: str, size: int, bold: bool = False) -> FontLike:
        """Best available font; never fails (platform fallback last)."""
        key = (family, size, bold, family in self.registry)
        cached = self._fonts.get(key)
        if cached is not None:
            return cached
        font: FontLike | None = None
        for candidate in self._candidates(family, bold):
            try:
                font = ImageFont.truetype(candidate, size)
                break
            except OSError:
                continue
        if font is None:
            font = ImageFont.load_default(size=size)
        self._fonts[key] = font
        return font
