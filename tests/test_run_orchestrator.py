from __future__ import annotations

import unittest
from unittest import mock

import numpy as np

from easeviz_core.core.coordinates import Coordinate
from easeviz_core.core.events import pointer_enter, pointer_leave, pointer_move
from easeviz_core.core.refresh import RefreshSignal
from easeviz_plot.easings import ease_in_quad, ease_out_bounce
from easeviz_plot.instance import GraphControls, GraphInstance
from easeviz_plot.renderer import OPTIMAL_COLOR, readout_text
from easeviz_plot.screen import create_screen


class _FakeClock:
    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def _has_color(canvas: np.ndarray, color: tuple[int, int, int, int]) -> bool:
    return bool(np.any(np.all(canvas == np.array(color, dtype=np.uint8), axis=-1)))


class RunOrchestratorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = _FakeClock()
        self.signal = RefreshSignal(time_fn=self.clock)

    def _graph(self, controls: GraphControls, easing=ease_in_quad, name: str = "easeInQuad") -> GraphInstance:
        graph = GraphInstance(name, easing, create_screen(120, 100), controls, self.signal)
        graph.start()
        return graph

    def _assert_x_non_decreasing(self, points) -> None:
        for a, b in zip(points, points[1:]):
            self.assertLessEqual(a.x, b.x)

    def test_start_emits_synthetic_first_point(self) -> None:
        graph = self._graph(GraphControls(duration_ms=500))
        state = graph.state
        assert state is not None
        self.assertEqual(graph.status, "running")
        self.assertEqual(state.points, (Coordinate(0.0, 0.0),))
        self.assertEqual(state.lines, ())
        self.assertEqual(graph.renderer.base_passes, 1)

    def test_duration_change_resets_run(self) -> None:
        controls = GraphControls(duration_ms=500)
        graph = self._graph(controls)
        first = graph.state
        assert first is not None
        self.signal.tick(100.0)
        self.signal.tick(200.0)
        self.assertEqual(len(first.points), 3)

        self.clock.now = 0.3
        controls.set_duration(800)
        second = graph.state
        assert second is not None
        self.assertEqual(first.status, "cancelled")
        self.assertEqual(second.generation, first.generation + 1)
        self.assertEqual(second.points, (Coordinate(0.0, 0.0),))
        self.assertEqual(self.signal.subscriber_count, 1)

        self.signal.tick(700.0)
        self.assertAlmostEqual(second.points[-1].x, 0.5)
        self.assertAlmostEqual(second.points[-1].y, 0.25)
        self.assertEqual(len(first.points), 3)

        self.signal.tick(1200.0)
        self.assertEqual(graph.status, "completed")
        self.assertEqual(second.points[-1], Coordinate(1.0, 1.0))
        self._assert_x_non_decreasing(second.points)
        self.assertEqual(self.signal.subscriber_count, 0)

    def test_completed_run_ends_exactly_at_one(self) -> None:
        graph = self._graph(GraphControls(duration_ms=1000), easing=ease_out_bounce, name="easeOutBounce")
        for ts in (16.0, 33.0, 250.0, 640.0, 999.0, 1016.0):
            self.signal.tick(ts)
        state = graph.state
        assert state is not None
        self.assertEqual(state.status, "completed")
        self.assertEqual(state.points[0], Coordinate(0.0, 0.0))
        self.assertEqual(state.points[-1], Coordinate(1.0, 1.0))
        self.assertEqual(len(state.lines), len(state.points) - 1)
        self._assert_x_non_decreasing(state.points)
        self.assertTrue(state.snapshot.complete)

    def test_optimal_toggle_keeps_effective_points(self) -> None:
        controls = GraphControls(duration_ms=1000)
        graph = self._graph(controls, easing=ease_out_bounce, name="easeOutBounce")
        for offset in (250.0, 500.0, 750.0, 1000.0):
            self.signal.tick(offset)
        without = graph.state
        assert without is not None
        self.assertFalse(_has_color(graph.screen.cache, OPTIMAL_COLOR))

        self.clock.now = 2.0
        controls.set_render_options(render_optimal=True)
        for offset in (250.0, 500.0, 750.0, 1000.0):
            self.signal.tick(2000.0 + offset)
        with_optimal = graph.state
        assert with_optimal is not None
        self.assertIsNot(with_optimal, without)
        self.assertEqual(with_optimal.points, without.points)
        self.assertEqual(len(with_optimal.optimal), 1000)
        self.assertTrue(_has_color(graph.screen.cache, OPTIMAL_COLOR))

    def test_hover_after_completion_only_runs_highlight_passes(self) -> None:
        graph = self._graph(GraphControls(duration_ms=500))
        for ts in (100.0, 250.0, 400.0, 500.0):
            self.signal.tick(ts)
        state = graph.state
        assert state is not None
        base_passes = graph.renderer.base_passes
        highlight_passes = graph.renderer.highlight_passes

        target = state.points[2]
        graph.dispatch_pointer(pointer_enter())
        graph.dispatch_pointer(pointer_move(*graph.screen.graph.absolute(target)))
        self.assertEqual(graph.highlight, target)
        self.assertEqual(graph.readout, readout_text(target, state.animation))
        self.assertEqual(graph.renderer.base_passes, base_passes)
        self.assertEqual(graph.renderer.highlight_passes, highlight_passes + 1)
        self.assertFalse(np.array_equal(graph.front.read_numpy(), graph.screen.cache))

        graph.dispatch_pointer(pointer_leave())
        self.assertIsNone(graph.highlight)
        self.assertIsNone(graph.readout)
        np.testing.assert_array_equal(graph.front.read_numpy(), graph.screen.cache)

    def test_hover_follows_growing_curve(self) -> None:
        graph = self._graph(GraphControls(duration_ms=1000))
        graph.dispatch_pointer(pointer_enter())
        graph.dispatch_pointer(pointer_move(*graph.screen.graph.absolute(Coordinate(0.9, 0.8))))
        self.assertEqual(graph.highlight, Coordinate(0.0, 0.0))
        revision = graph.front.revision
        self.signal.tick(900.0)
        self.assertAlmostEqual(graph.highlight.x, 0.9)
        # One base pass plus one overlay for the new frame.
        self.assertEqual(graph.front.revision, revision + 2)

    def test_unchanged_highlight_overlaid_on_every_new_frame(self) -> None:
        graph = self._graph(GraphControls(duration_ms=1000))
        graph.dispatch_pointer(pointer_enter())
        graph.dispatch_pointer(pointer_move(*graph.screen.graph.absolute(Coordinate(0.0, 0.0))))
        state = graph.state
        assert state is not None
        highlights: list = []
        state.resolver.highlights.subscribe(highlights.append)
        for ts in (100.0, 200.0):
            base_passes = graph.renderer.base_passes
            highlight_passes = graph.renderer.highlight_passes
            self.signal.tick(ts)
            self.assertEqual(graph.highlight, Coordinate(0.0, 0.0))
            self.assertEqual(graph.renderer.base_passes, base_passes + 1)
            self.assertEqual(graph.renderer.highlight_passes, highlight_passes + 1)
            self.assertFalse(np.array_equal(graph.front.read_numpy(), graph.screen.cache))
        # Replay only; the resolver never re-emitted the unchanged highlight.
        self.assertEqual(highlights, [Coordinate(0.0, 0.0)])

    def test_coords_disabled_skips_overlay(self) -> None:
        controls = GraphControls(duration_ms=500)
        graph = self._graph(controls)
        controls.set_render_options(render_coords=False)
        revision = graph.front.revision
        graph.dispatch_pointer(pointer_enter())
        graph.dispatch_pointer(pointer_move(60.0, 50.0))
        self.assertEqual(graph.front.revision, revision)
        self.assertIsNone(graph.readout)
        self.assertIsNotNone(graph.highlight)

    def test_graphs_are_isolated(self) -> None:
        controls = GraphControls(duration_ms=500)
        left = self._graph(controls, name="left")
        right = self._graph(controls, easing=ease_out_bounce, name="right")
        right_revision = right.front.revision
        left.dispatch_pointer(pointer_enter())
        left.dispatch_pointer(pointer_move(60.0, 50.0))
        self.assertEqual(right.front.revision, right_revision)
        self.assertIsNone(right.highlight)

        right_generation = right.orchestrator.generation
        left.restart()
        self.assertEqual(right.orchestrator.generation, right_generation)
        self.assertEqual(right.status, "running")

    def test_render_failure_cancels_run_and_keeps_frame(self) -> None:
        graph = self._graph(GraphControls(duration_ms=500))
        self.signal.tick(100.0)
        revision = graph.front.revision
        cache = graph.screen.cache
        with mock.patch("easeviz_plot.renderer.draw_polyline", side_effect=RuntimeError("surface lost")):
            with self.assertLogs("easeviz_plot.run", level="ERROR"):
                self.signal.tick(200.0)
        self.assertEqual(graph.status, "cancelled")
        self.assertIsInstance(graph.orchestrator.last_error, RuntimeError)
        self.assertEqual(graph.front.revision, revision)
        self.assertIs(graph.screen.cache, cache)
        self.assertEqual(self.signal.subscriber_count, 0)

    def test_dispose_detaches_run(self) -> None:
        controls = GraphControls(duration_ms=500)
        graph = self._graph(controls)
        graph.dispose()
        self.assertEqual(graph.status, "cancelled")
        self.assertFalse(graph.mounted)
        self.assertEqual(self.signal.subscriber_count, 0)
        generation = graph.orchestrator.generation
        controls.set_duration(900)
        self.assertEqual(graph.orchestrator.generation, generation)


if __name__ == "__main__":
    unittest.main()
