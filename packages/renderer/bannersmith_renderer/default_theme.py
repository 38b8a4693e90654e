"""Plain banner: frame, optional centred icon, then text on top."""

from __future__ import annotations

from .fills import resolve
from .frame import draw_frame
from .icons import IconCompositor
from .models import BannerSettings, RenderResources
from .surface import Surface
from .text_layout import layout_and_draw


class DefaultTheme:
    name = "default"
    label = "Default"

    def render(self, surface: Surface, settings: BannerSettings, resources: RenderResources) -> None:
        draw_frame(surface, settings)
        # Icon strictly before text so text always stays on top.
        if settings.has_icon and resources.icon is not None:
            IconCompositor.draw(surface, resources.icon)
        font = resources.fonts.font(settings.font_family, settings.font_size)
        layout_and_draw(surface, settings, resolve(settings.font_color, settings.bounds), font)
