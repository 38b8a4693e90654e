"""CLI entrypoints for rendering banners, listing assets, and diagnostics."""

from __future__ import annotations

import argparse
import asyncio
import json
from pathlib import Path

from bannersmith_core import build_doctor_payload, load_config
from bannersmith_core.logging_setup import configure_logging, get_logger
from bannersmith_renderer import (
    DEFAULT_BANNER_SETTINGS,
    LOADED_FONTS,
    InvalidSettingsError,
    RenderOrchestrator,
    list_icons,
    list_themes,
    save_png,
    settings_from_dict,
    settings_to_dict,
)
from bannersmith_renderer.models import BannerSettings


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _overrides(args: argparse.Namespace) -> dict[str, object]:
    out: dict[str, object] = {}
    for attr, key in (
        ("width", "width"),
        ("height", "height"),
        ("theme", "theme"),
        ("text", "text"),
        ("icon", "icon"),
        ("font_family", "fontFamily"),
        ("font_size", "fontSize"),
        ("window_title", "windowTitle"),
    ):
        value = getattr(args, attr, None)
        if value is not None:
            out[key] = value
    if getattr(args, "icon_file", None):
        out["uploadedIconSvg"] = Path(args.icon_file).read_text(encoding="utf-8")
    return out


def load_settings(args: argparse.Namespace) -> BannerSettings:
    raw: dict[str, object] = {}
    if args.settings:
        raw = json.loads(Path(args.settings).read_text(encoding="utf-8"))
    raw.update(_overrides(args))
    return settings_from_dict(raw, base=DEFAULT_BANNER_SETTINGS)


def cmd_render(args: argparse.Namespace) -> int:
    cfg = load_config()
    orchestrator = RenderOrchestrator.from_config(cfg)
    try:
        settings = load_settings(args)
        result = asyncio.run(orchestrator.render(settings))
    except InvalidSettingsError as exc:
        _print_json({"success": False, "problems": exc.problems})
        return 2

    out = Path(args.out or cfg.render.output_name).expanduser().resolve()
    save_png(orchestrator.surface, out)
    _print_json(
        {
            "success": result.committed,
            "out": str(out),
            "theme": settings.theme,
            "size": [orchestrator.surface.width, orchestrator.surface.height],
            "font_ready": result.font_ready,
            "icon_drawn": result.icon_drawn,
        }
    )
    return 0


def cmd_defaults(_args: argparse.Namespace) -> int:
    _print_json(settings_to_dict(DEFAULT_BANNER_SETTINGS))
    return 0


def cmd_icons(_args: argparse.Namespace) -> int:
    _print_json(list_icons())
    return 0


def cmd_themes(_args: argparse.Namespace) -> int:
    _print_json(list_themes())
    return 0


def cmd_doctor(_args: argparse.Namespace) -> int:
    _print_json(build_doctor_payload(load_config(), loaded_fonts=LOADED_FONTS.families()))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bannersmith", description="Banner renderer and tools")
    sub = parser.add_subparsers(dest="command", required=True)

    render_cmd = sub.add_parser("render", help="Render a settings file to PNG")
    render_cmd.add_argument("--settings", default=None, help="Path to banner settings JSON")
    render_cmd.add_argument("--out", default=None, help="Output PNG path")
    render_cmd.add_argument("--theme", default=None, choices=list_themes())
    render_cmd.add_argument("--text", default=None)
    render_cmd.add_argument("--width", type=int, default=None)
    render_cmd.add_argument("--height", type=int, default=None)
    render_cmd.add_argument("--icon", default=None, choices=list_icons())
    render_cmd.add_argument("--icon-file", default=None, help="SVG file used instead of a predefined icon")
    render_cmd.add_argument("--font-family", default=None)
    render_cmd.add_argument("--font-size", type=int, default=None)
    render_cmd.add_argument("--window-title", default=None)
    render_cmd.set_defaults(func=cmd_render)

    defaults_cmd = sub.add_parser("defaults", help="Print default banner settings JSON")
    defaults_cmd.set_defaults(func=cmd_defaults)

    icons_cmd = sub.add_parser("icons", help="List predefined icons")
    icons_cmd.set_defaults(func=cmd_icons)

    themes_cmd = sub.add_parser("themes", help="List themes")
    themes_cmd.set_defaults(func=cmd_themes)

    doctor_cmd = sub.add_parser("doctor", help="Print environment and font cache diagnostics")
    doctor_cmd.set_defaults(func=cmd_doctor)

    return parser


def main(argv: list[str] | None = None) -> int:
    cfg = load_config()
    configure_logging(keep_files=cfg.diagnostics.keep_log_files, console=False)
    parser = build_parser()
    args = parser.parse_args(argv)
    get_logger("cli").info(f"command={args.command}", extra={"event": "cli_command"})
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
