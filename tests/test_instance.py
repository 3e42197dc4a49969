from __future__ import annotations

import unittest

from easeviz_core.core.refresh import RefreshSignal
from easeviz_plot.easings import EASING_FUNCTIONS
from easeviz_plot.errors import SurfaceUnavailableError
from easeviz_plot.instance import GraphControls, build_graphs
from easeviz_plot.screen import create_screen


class _FakeClock:
    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class GraphControlsTests(unittest.TestCase):
    def test_duration_label(self) -> None:
        controls = GraphControls()
        self.assertEqual(controls.duration_label, "1000ms")
        controls.set_duration(250)
        self.assertEqual(controls.duration_label, "250ms")

    def test_invalid_values_rejected(self) -> None:
        with self.assertRaises(ValueError):
            GraphControls(duration_ms=0)
        with self.assertRaises(ValueError):
            GraphControls(to_value=0.0)
        with self.assertRaises(ValueError):
            GraphControls().set_duration(-5)
        with self.assertRaises(ValueError):
            GraphControls().set_render_options(render_everything=True)

    def test_unchanged_render_options_not_emitted(self) -> None:
        controls = GraphControls()
        seen = []
        controls.render_options.subscribe(seen.append)
        controls.set_render_options(render_coords=True)
        controls.set_render_options(render_points=True)
        self.assertEqual(len(seen), 2)
        self.assertTrue(seen[-1].render_points)


class BuildGraphsTests(unittest.TestCase):
    def setUp(self) -> None:
        self.signal = RefreshSignal(time_fn=_FakeClock())
        self.easings = {name: EASING_FUNCTIONS[name] for name in ("easeInQuad", "easeOutBounce", "easeInOutBack")}

    def test_one_running_graph_per_easing(self) -> None:
        graphs = build_graphs(self.easings, GraphControls(), self.signal, width=80, height=60)
        self.assertEqual([g.name for g in graphs], list(self.easings))
        for graph in graphs:
            self.assertEqual(graph.status, "running")
            self.assertEqual(graph.orchestrator.generation, 1)
            self.assertTrue(graph.mounted)
        self.assertEqual(self.signal.subscriber_count, 3)
        self.assertIsNot(graphs[0].front, graphs[1].front)

    def test_duration_change_restarts_every_graph(self) -> None:
        controls = GraphControls()
        graphs = build_graphs(self.easings, controls, self.signal, width=80, height=60)
        controls.set_duration(600)
        for graph in graphs:
            self.assertEqual(graph.orchestrator.generation, 2)
            state = graph.state
            assert state is not None
            self.assertEqual(state.animation.duration_ms, 600)

    def test_failed_surface_skips_graph(self) -> None:
        calls = []

        def _factory(width: int, height: int):
            calls.append((width, height))
            if len(calls) == 2:
                raise SurfaceUnavailableError("no context")
            return create_screen(width, height)

        with self.assertLogs("easeviz_plot.instance", level="ERROR") as logs:
            graphs = build_graphs(self.easings, GraphControls(), self.signal, width=80, height=60, screen_factory=_factory)
        self.assertEqual([g.name for g in graphs], ["easeInQuad", "easeInOutBack"])
        self.assertIn("easeOutBounce", logs.output[0])

    def test_unstarted_graphs_stay_idle(self) -> None:
        graphs = build_graphs(self.easings, GraphControls(), self.signal, width=80, height=60, start=False)
        self.assertTrue(all(g.status == "idle" for g in graphs))
        self.assertEqual(self.signal.subscriber_count, 0)

    def test_invalid_surface_size(self) -> None:
        with self.assertRaises(SurfaceUnavailableError):
            create_screen(0, 10)


if __name__ == "__main__":
    unittest.main()
