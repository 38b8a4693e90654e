import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "core"))

from bannersmith_renderer.fills import (
    LinearGradientPaint,
    RadialGradientPaint,
    SolidPaint,
    linear_gradient_line,
    resolve,
)
from bannersmith_renderer.models import ColorStop, GradientFill, Rect, SolidFill


def _linear(angle, *stops):
    return GradientFill(type="linear", angle=angle, stops=tuple(ColorStop(c, p) for p, c in stops))


class SolidFillTests(unittest.TestCase):
    def test_solid_ignores_bounds(self):
        small = resolve(SolidFill("#161b22"), Rect(0, 0, 10, 10))
        large = resolve(SolidFill("#161b22"), Rect(0, 0, 2000, 50))
        self.assertIsInstance(small, SolidPaint)
        self.assertEqual(small, large)
        self.assertEqual(small.color, (0x16, 0x1B, 0x22, 255))

    def test_rgb_function_color(self):
        paint = resolve(SolidFill("rgb(30, 30, 46)"), Rect(0, 0, 1, 1))
        self.assertEqual(paint.color_at(0, 0), (30, 30, 46, 255))


class LinearGradientTests(unittest.TestCase):
    def test_angle_zero_spans_width(self):
        start, end = linear_gradient_line(0, Rect(0, 0, 200, 50))
        self.assertAlmostEqual(start[0], 0.0)
        self.assertAlmostEqual(end[0], 200.0)
        self.assertAlmostEqual(start[1], 25.0)
        self.assertAlmostEqual(end[1], 25.0)

    def test_angle_ninety_points_down(self):
        start, end = linear_gradient_line(90, Rect(0, 0, 200, 50))
        self.assertAlmostEqual(start[0], 100.0)
        self.assertAlmostEqual(start[1], 0.0)
        self.assertAlmostEqual(end[1], 50.0)

    def test_two_stop_endpoints(self):
        paint = resolve(_linear(0, (0, "#ff0000"), (100, "#0000ff")), Rect(0, 0, 100, 10))
        self.assertIsInstance(paint, LinearGradientPaint)
        self.assertEqual(paint.color_at(0, 5), (255, 0, 0, 255))
        self.assertEqual(paint.color_at(100, 5), (0, 0, 255, 255))
        mid = paint.color_at(50, 5)
        self.assertAlmostEqual(mid[0], 128, delta=1)
        self.assertAlmostEqual(mid[2], 128, delta=1)

    def test_clamped_outside_stops(self):
        paint = resolve(_linear(0, (20, "#000000"), (80, "#ffffff")), Rect(0, 0, 100, 10))
        self.assertEqual(paint.color_at(5, 5), (0, 0, 0, 255))
        self.assertEqual(paint.color_at(95, 5), (255, 255, 255, 255))

    def test_stop_order_does_not_matter(self):
        bounds = Rect(0, 0, 64, 16)
        unsorted = resolve(_linear(0, (80, "#fff"), (20, "#000")), bounds)
        sorted_ = resolve(_linear(0, (20, "#000"), (80, "#fff")), bounds)
        self.assertEqual(unsorted.layer((64, 16)).tobytes(), sorted_.layer((64, 16)).tobytes())

    def test_duplicate_position_is_hard_edge(self):
        fill = _linear(0, (0, "#000000"), (50, "#ff0000"), (50, "#00ff00"), (100, "#00ff00"))
        paint = resolve(fill, Rect(0, 0, 100, 10))
        self.assertEqual(paint.color_at(50, 5), (0, 255, 0, 255))
        self.assertGreater(paint.color_at(49, 5)[0], 200)

    def test_single_stop_is_flat(self):
        fill = GradientFill(type="linear", angle=45, stops=(ColorStop("#123456", 30),))
        paint = resolve(fill, Rect(0, 0, 10, 10))
        self.assertEqual(paint, SolidPaint((0x12, 0x34, 0x56, 255)))

    def test_layer_size(self):
        paint = resolve(_linear(135, (0, "#000"), (100, "#fff")), Rect(0, 0, 30, 20))
        self.assertEqual(paint.layer((30, 20)).size, (30, 20))


class RadialGradientTests(unittest.TestCase):
    def test_center_and_outer_extent(self):
        fill = GradientFill(
            type="radial",
            angle=0,
            stops=(ColorStop("#ffffff", 0), ColorStop("#000000", 100)),
        )
        paint = resolve(fill, Rect(0, 0, 200, 100))
        self.assertIsInstance(paint, RadialGradientPaint)
        self.assertEqual(paint.radius, 100)
        self.assertEqual(paint.color_at(100, 50), (255, 255, 255, 255))
        # Corners lie beyond the radius and hold the outer stop.
        self.assertEqual(paint.color_at(0, 0), (0, 0, 0, 255))
        self.assertEqual(paint.color_at(200, 100), (0, 0, 0, 255))


if __name__ == "__main__":
    unittest.main()
