from __future__ import annotations

import unittest
from unittest import mock

import numpy as np

from easeviz_core.core.coordinates import Coordinate, Line
from easeviz_plot.accumulate import LineBuilder
from easeviz_plot.easings import ease_out_bounce
from easeviz_plot.options import AnimationOptions, RenderOptions
from easeviz_plot.renderer import HINT_COLOR, OPTIMAL_COLOR, GraphRenderer, highlight_hint_lines, readout_text
from easeviz_plot.screen import create_screen


def _has_color(canvas: np.ndarray, color: tuple[int, int, int, int]) -> bool:
    return bool(np.any(np.all(canvas == np.array(color, dtype=np.uint8), axis=-1)))


def _animation() -> AnimationOptions:
    return AnimationOptions(from_value=0.0, to_value=100.0, duration_ms=1000, easing_function=ease_out_bounce)


def _snapshot():
    builder = LineBuilder()
    for point in (Coordinate(0.0, 0.0), Coordinate(0.25, 0.47), Coordinate(0.5, 0.77), Coordinate(1.0, 1.0)):
        builder.push(point)
    return builder.latest


class HintLineTests(unittest.TestCase):
    def test_positive_highlight_hints_from_both_axes(self) -> None:
        lines = highlight_hint_lines(Coordinate(0.4, 0.6))
        self.assertEqual(
            lines,
            [
                Line(Coordinate(0.0, 0.6), Coordinate(0.4, 0.6)),
                Line(Coordinate(0.4, 0.0), Coordinate(0.4, 0.6)),
            ],
        )

    def test_negative_highlight_reflects_horizontal_hint(self) -> None:
        lines = highlight_hint_lines(Coordinate(0.4, -0.2))
        self.assertEqual(
            lines,
            [
                Line(Coordinate(0.0, 0.2), Coordinate(0.4, 0.2)),
                Line(Coordinate(0.4, 0.2), Coordinate(0.4, -0.2)),
            ],
        )

    def test_readout_floors_time_and_value(self) -> None:
        self.assertEqual(readout_text(Coordinate(0.5, 0.257), _animation()), "(500, 25)")
        self.assertEqual(readout_text(Coordinate(0.3, -0.014), _animation()), "(300, -2)")


class GraphRendererTests(unittest.TestCase):
    def setUp(self) -> None:
        self.screen = create_screen(120, 100)
        self.renderer = GraphRenderer(self.screen)

    def test_base_pass_commits_cache_and_front(self) -> None:
        self.assertTrue(self.renderer.base_pass(_snapshot(), (), RenderOptions()))
        self.assertEqual(self.renderer.base_passes, 1)
        self.assertEqual(self.screen.front.revision, 1)
        np.testing.assert_array_equal(self.screen.front.read_numpy(), self.screen.cache)
        self.assertFalse(np.all(self.screen.cache == 255))

    def test_stale_base_pass_is_discarded(self) -> None:
        cache = self.screen.cache
        self.assertFalse(self.renderer.base_pass(_snapshot(), (), RenderOptions(), is_current=lambda: False))
        self.assertIs(self.screen.cache, cache)
        self.assertEqual(self.screen.front.revision, 0)
        self.assertEqual(self.renderer.base_passes, 0)

    def test_failed_base_pass_keeps_previous_frame(self) -> None:
        self.renderer.base_pass(_snapshot(), (), RenderOptions())
        cache = self.screen.cache
        with mock.patch("easeviz_plot.renderer.draw_polyline", side_effect=RuntimeError("surface lost")):
            with self.assertRaises(RuntimeError):
                self.renderer.base_pass(_snapshot(), (), RenderOptions())
        self.assertIs(self.screen.cache, cache)
        self.assertEqual(self.screen.front.revision, 1)

    def test_optimal_toggle_draws_reference(self) -> None:
        optimal = (Line(Coordinate(0.0, 0.0), Coordinate(1.0, 0.0)),)
        self.renderer.base_pass(_snapshot(), optimal, RenderOptions(render_effective=False))
        self.assertFalse(_has_color(self.screen.cache, OPTIMAL_COLOR))
        self.renderer.base_pass(_snapshot(), optimal, RenderOptions(render_optimal=True, render_effective=False))
        self.assertTrue(_has_color(self.screen.cache, OPTIMAL_COLOR))

    def test_highlight_pass_draws_over_cache_copy(self) -> None:
        self.renderer.base_pass(_snapshot(), (), RenderOptions())
        cache_before = self.screen.cache.copy()
        self.assertTrue(self.renderer.highlight_pass(Coordinate(0.5, 0.77), _animation()))
        front = self.screen.front.read_numpy()
        self.assertTrue(_has_color(front, HINT_COLOR))
        np.testing.assert_array_equal(self.screen.cache, cache_before)
        self.assertEqual(self.renderer.base_passes, 1)
        self.assertEqual(self.renderer.highlight_passes, 1)

    def test_cleared_highlight_restores_cache(self) -> None:
        self.renderer.base_pass(_snapshot(), (), RenderOptions())
        self.renderer.highlight_pass(Coordinate(0.5, 0.77), _animation())
        self.renderer.highlight_pass(None, _animation())
        np.testing.assert_array_equal(self.screen.front.read_numpy(), self.screen.cache)

    def test_stale_highlight_pass_not_presented(self) -> None:
        self.renderer.base_pass(_snapshot(), (), RenderOptions())
        self.assertFalse(self.renderer.highlight_pass(Coordinate(0.5, 0.77), _animation(), is_current=lambda: False))
        self.assertEqual(self.screen.front.revision, 1)


if __name__ == "__main__":
    unittest.main()
