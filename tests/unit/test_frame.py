import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "core"))

from bannersmith_renderer.frame import clamp_radius, draw_frame, outline_mask, rounded_rect_mask
from bannersmith_renderer.models import BannerSettings, ColorStop, GradientFill, SolidFill
from bannersmith_renderer.surface import Surface

BG = (0x16, 0x1B, 0x22, 255)
OUTLINE = (0x58, 0xA6, 0xFF, 255)


def _draw(**kwargs):
    settings = BannerSettings(
        width=200,
        height=100,
        background_color=SolidFill("#161b22"),
        outline_color=SolidFill("#58a6ff"),
        **kwargs,
    )
    surface = Surface(settings.width, settings.height)
    draw_frame(surface, settings)
    return surface


class FrameTests(unittest.TestCase):
    def test_no_outline_when_thickness_zero(self):
        surface = _draw(corner_radius=0, outline_thickness=0)
        self.assertEqual(surface.image.getpixel((0, 50)), BG)
        self.assertEqual(surface.image.getpixel((199, 99)), BG)
        colors = {c for _, c in surface.image.getcolors(maxcolors=16)}
        self.assertEqual(colors, {BG})

    def test_outline_is_inset(self):
        surface = _draw(corner_radius=0, outline_thickness=8)
        self.assertEqual(surface.image.size, (200, 100))
        self.assertEqual(surface.image.getpixel((0, 50)), OUTLINE)
        self.assertEqual(surface.image.getpixel((7, 50)), OUTLINE)
        self.assertEqual(surface.image.getpixel((8, 50)), BG)
        self.assertEqual(surface.image.getpixel((199, 50)), OUTLINE)
        self.assertEqual(surface.image.getpixel((191, 50)), BG)
        self.assertEqual(surface.image.getpixel((100, 92)), OUTLINE)
        self.assertEqual(surface.image.getpixel((100, 91)), BG)

    def test_rounded_corners_stay_transparent(self):
        surface = _draw(corner_radius=20, outline_thickness=8)
        self.assertEqual(surface.image.getpixel((0, 0))[3], 0)
        self.assertEqual(surface.image.getpixel((199, 99))[3], 0)
        self.assertEqual(surface.image.getpixel((100, 50)), BG)

    def test_clip_restored_after_outline(self):
        surface = _draw(corner_radius=12, outline_thickness=4)
        self.assertEqual(surface.clip_depth, 0)

    def test_gradient_background(self):
        settings = BannerSettings(
            width=100,
            height=20,
            outline_thickness=0,
            corner_radius=0,
            background_color=GradientFill(
                type="linear",
                angle=0,
                stops=(ColorStop("#000000", 0), ColorStop("#ffffff", 100)),
            ),
        )
        surface = Surface(100, 20)
        draw_frame(surface, settings)
        left = surface.image.getpixel((0, 10))
        right = surface.image.getpixel((99, 10))
        self.assertLess(left[0], 10)
        self.assertGreater(right[0], 245)


class MaskTests(unittest.TestCase):
    def test_radius_clamped_to_half_smaller_side(self):
        self.assertEqual(clamp_radius(500, 200, 100), 50)
        self.assertEqual(clamp_radius(-3, 200, 100), 0)

    def test_outline_mask_covers_whole_shape_when_thick(self):
        mask = outline_mask((40, 20), radius=0, thickness=15)
        self.assertEqual(mask.getcolors(), [(800, 255)])

    def test_empty_box_gives_empty_mask(self):
        mask = rounded_rect_mask((10, 10), (5, 5, 5, 9), radius=2)
        self.assertIsNone(mask.getbbox())


if __name__ == "__main__":
    unittest.main()
