import sys
import unittest
from dataclasses import replace
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "core"))

from bannersmith_renderer.models import DEFAULT_BANNER_SETTINGS, ColorStop, GradientFill, SolidFill
from bannersmith_renderer.settings import (
    InvalidSettingsError,
    settings_from_dict,
    settings_to_dict,
    validate_settings,
)


class SettingsConversionTests(unittest.TestCase):
    def test_defaults_match_editor(self):
        s = DEFAULT_BANNER_SETTINGS
        self.assertEqual((s.width, s.height), (1200, 630))
        self.assertEqual(s.background_color, SolidFill("#161b22"))
        self.assertEqual(s.outline_thickness, 8)
        self.assertEqual(s.font_family, "Roboto")
        self.assertEqual(s.theme, "default")
        self.assertFalse(s.has_icon)

    def test_from_dict_reads_camel_case_and_gradients(self):
        settings = settings_from_dict(
            {
                "width": 800,
                "backgroundColor": {
                    "type": "linear",
                    "angle": 90,
                    "stops": [{"color": "#000", "position": 0}, {"color": "#fff", "position": 100}],
                },
                "textAlign": "left",
                "uploadedIconSvg": "<svg/>",
                "somethingElse": True,
            }
        )
        self.assertEqual(settings.width, 800)
        self.assertEqual(settings.height, 630)
        self.assertEqual(settings.text_align, "left")
        self.assertIsInstance(settings.background_color, GradientFill)
        self.assertEqual(settings.background_color.stops[1], ColorStop("#fff", 100.0))
        self.assertTrue(settings.has_icon)

    def test_to_dict_round_trip(self):
        raw = settings_to_dict(DEFAULT_BANNER_SETTINGS)
        self.assertEqual(raw["backgroundColor"], "#161b22")
        self.assertEqual(raw["windowTitle"], "bash")
        self.assertEqual(settings_from_dict(raw), DEFAULT_BANNER_SETTINGS)

    def test_stops_sorted_stably(self):
        fill = GradientFill(
            type="linear",
            angle=0,
            stops=(ColorStop("#fff", 80), ColorStop("#f00", 20), ColorStop("#0f0", 20)),
        )
        self.assertEqual([s.color for s in fill.sorted_stops()], ["#f00", "#0f0", "#fff"])


class SettingsValidationTests(unittest.TestCase):
    def test_default_is_valid(self):
        self.assertIs(validate_settings(DEFAULT_BANNER_SETTINGS), DEFAULT_BANNER_SETTINGS)

    def test_rejects_non_positive_dimensions(self):
        bad = replace(DEFAULT_BANNER_SETTINGS, width=0, font_size=-3)
        with self.assertRaises(InvalidSettingsError) as ctx:
            validate_settings(bad)
        self.assertEqual(len(ctx.exception.problems), 2)

    def test_rejects_malformed_gradient(self):
        bad = replace(
            DEFAULT_BANNER_SETTINGS,
            font_color=GradientFill(type="linear", angle=float("nan"), stops=()),
        )
        with self.assertRaises(InvalidSettingsError) as ctx:
            validate_settings(bad)
        joined = " ".join(ctx.exception.problems)
        self.assertIn("finite", joined)
        self.assertIn("at least one stop", joined)

    def test_rejects_unknown_theme_and_alignment(self):
        bad = replace(DEFAULT_BANNER_SETTINGS, theme="neon", vertical_align="center")
        with self.assertRaises(InvalidSettingsError):
            validate_settings(bad)

    def test_rejects_unknown_color(self):
        bad = replace(DEFAULT_BANNER_SETTINGS, outline_color=SolidFill("not-a-color"))
        with self.assertRaises(ValueError):
            validate_settings(bad)

    def test_single_stop_gradient_is_allowed(self):
        ok = replace(
            DEFAULT_BANNER_SETTINGS,
            background_color=GradientFill(type="radial", angle=0, stops=(ColorStop("#333", 50),)),
        )
        validate_settings(ok)

    def test_rejects_non_string_text_fields(self):
        with self.assertRaises(InvalidSettingsError) as ctx:
            validate_settings(settings_from_dict({"text": 42, "windowTitle": None, "fontFamily": ["Roboto"]}))
        problems = " ".join(ctx.exception.problems)
        self.assertIn("text must be a string", problems)
        self.assertIn("window_title must be a string", problems)
        self.assertIn("font_family must be a string", problems)

    def test_uploaded_icon_may_be_null_but_not_other_types(self):
        validate_settings(settings_from_dict({"uploadedIconSvg": None}))
        with self.assertRaises(InvalidSettingsError):
            validate_settings(settings_from_dict({"uploadedIconSvg": 7}))

    def test_non_string_theme_reported_not_raised(self):
        with self.assertRaises(InvalidSettingsError):
            validate_settings(settings_from_dict({"theme": ["default"]}))


class FillParsingTests(unittest.TestCase):
    def test_stop_without_color(self):
        raw = {"backgroundColor": {"type": "linear", "stops": [{"position": 0}]}}
        with self.assertRaises(InvalidSettingsError) as ctx:
            settings_from_dict(raw)
        self.assertIn("color", ctx.exception.problems[0])

    def test_non_numeric_values(self):
        for fill in (
            {"type": "linear", "angle": "steep", "stops": []},
            {"type": "linear", "stops": [{"color": "#fff", "position": None}]},
            {"type": "linear", "stops": 5},
        ):
            with self.assertRaises(InvalidSettingsError):
                settings_from_dict({"fontColor": fill})

    def test_unsupported_fill_shape(self):
        with self.assertRaises(InvalidSettingsError):
            settings_from_dict({"outlineColor": 12})


if __name__ == "__main__":
    unittest.main()
