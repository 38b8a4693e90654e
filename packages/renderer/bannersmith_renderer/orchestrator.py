"""Render orchestration: await fonts and icons, then paint the newest snapshot only."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, TypeVar

from PIL import Image

from bannersmith_core.config import AppConfig, font_cache_dir, load_config
from bannersmith_core.logging_setup import get_logger

from .default_theme import DefaultTheme
from .fonts import FontLoader, FontLoadError
from .icons import IconCompositor
from .models import BannerSettings, RenderResources
from .settings import validate_settings
from .surface import Surface
from .themes import get_theme

T = TypeVar("T")

logger = get_logger("render")


class RenderState(str, Enum):
    IDLE = "idle"
    AWAITING_RESOURCES = "awaiting_resources"
    DRAWING = "drawing"
    COMMITTED = "committed"


@dataclass(frozen=True)
class RenderResult:
    generation: int
    committed: bool
    font_ready: bool = False
    icon_drawn: bool = False


class RenderOrchestrator:
    """Owns one surface and renders settings snapshots onto it.

    Every call to ``render`` takes a new generation token. A render whose
    token is no longer current once its resources are ready is discarded
    without touching the surface.
    """

    def __init__(
        self,
        surface: Surface,
        font_loader: FontLoader,
        icons: IconCompositor | None = None,
        resource_timeout_s: float | None = 10.0,
    ) -> None:
        self.surface = surface
        self.fonts = font_loader
        self.icons = icons or IconCompositor()
        self.resource_timeout_s = resource_timeout_s
        self.state = RenderState.IDLE
        self.committed_settings: BannerSettings | None = None
        self._generation = 0

    @classmethod
    def from_config(cls, cfg: AppConfig, surface: Surface | None = None) -> "RenderOrchestrator":
        loader = FontLoader(
            cache_dir=font_cache_dir(cfg),
            css_url_template=cfg.fonts.css_url_template,
            timeout_s=cfg.fonts.fetch_timeout_s,
        )
        return cls(surface or Surface(), loader, resource_timeout_s=cfg.render.resource_timeout_s)

    @property
    def generation(self) -> int:
        return self._generation

    async def _bounded(self, awaitable: Awaitable[T]) -> T:
        if self.resource_timeout_s is None:
            return await awaitable
        return await asyncio.wait_for(awaitable, timeout=self.resource_timeout_s)

    async def _await_font(self, settings: BannerSettings) -> bool:
        try:
            await self._bounded(self.fonts.ensure(settings.font_family))
            await self._bounded(self.fonts.confirm(settings.font_family, settings.font_size))
        except (FontLoadError, asyncio.TimeoutError) as exc:
            logger.warning(
                f"font unavailable family={settings.font_family}, using fallback: {exc!r}",
                extra={"event": "font_load_failed"},
            )
            return False
        return True

    async def _await_icon(self, settings: BannerSettings) -> Image.Image | None:
        # The terminal theme never shows an icon.
        if not settings.has_icon or settings.theme != DefaultTheme.name:
            return None
        try:
            return await self._bounded(self.icons.load(settings))
        except asyncio.TimeoutError:
            logger.warning("icon decode timed out, drawing without icon", extra={"event": "icon_timeout"})
            return None

    async def render(self, settings: BannerSettings) -> RenderResult:
        validate_settings(settings)
        self._generation += 1
        generation = self._generation

        self.state = RenderState.AWAITING_RESOURCES
        font_ready, icon = await asyncio.gather(self._await_font(settings), self._await_icon(settings))

        if generation != self._generation:
            logger.info(
                f"render superseded generation={generation} current={self._generation}",
                extra={"event": "render_superseded"},
            )
            return RenderResult(generation=generation, committed=False, font_ready=font_ready)

        self.state = RenderState.DRAWING
        self.surface.reset(settings.width, settings.height)
        get_theme(settings.theme).render(self.surface, settings, RenderResources(fonts=self.fonts, icon=icon))
        self.committed_settings = settings
        self.state = RenderState.COMMITTED
        logger.info(
            f"render committed generation={generation} theme={settings.theme} size={settings.width}x{settings.height}",
            extra={"event": "render_committed"},
        )
        return RenderResult(
            generation=generation,
            committed=True,
            font_ready=font_ready,
            icon_drawn=icon is not None,
        )


def render_banner(settings: BannerSettings, cfg: AppConfig | None = None) -> Image.Image:
    """One-shot synchronous render returning the committed image."""
    orchestrator = RenderOrchestrator.from_config(cfg or load_config())
    asyncio.run(orchestrator.render(settings))
    return orchestrator.surface.image
