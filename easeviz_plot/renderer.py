from __future__ import annotations

import math
from typing import Callable, Optional, Sequence

import numpy as np

from easeviz_core.core.coordinates import Coordinate, Line
from easeviz_plot.accumulate import CurveSnapshot
from easeviz_plot.options import AnimationOptions, RenderOptions
from easeviz_plot.raster import (
    draw_markers,
    draw_polyline,
    draw_segments,
    draw_text,
    draw_vline,
    hex_color,
    new_canvas,
    text_size,
)
from easeviz_plot.screen import BACKGROUND, Screen

AXIS_COLOR = hex_color("#000000")
FRAMELINE_COLOR = hex_color("#eaeaea")
OPTIMAL_COLOR = hex_color("blue")
EFFECTIVE_COLOR = hex_color("#5F021F")
POINT_COLOR = hex_color("#000000")
HINT_COLOR = hex_color("#bdbdbd")
HINT_DASH = (5, 5)
LABEL_FONT_SIZE_PX = 10.0


def highlight_hint_lines(highlight: Coordinate) -> list[Line]:
    """Dashed guides from both axes to `highlight`; below the x-axis the horizontal guide is reflected to -y."""
    if highlight.y < 0:
        mirrored = Coordinate(x=highlight.x, y=-highlight.y)
        return [
            Line(from_=Coordinate(x=0.0, y=-highlight.y), to=mirrored),
            Line(from_=mirrored, to=highlight),
        ]
    return [
        Line(from_=Coordinate(x=0.0, y=highlight.y), to=highlight),
        Line(from_=Coordinate(x=highlight.x, y=0.0), to=highlight),
    ]


def readout_text(highlight: Coordinate, options: AnimationOptions) -> str:
    return f"({math.floor(highlight.x * options.duration_ms)}, {math.floor(highlight.y * options.to_value)})"


class GraphRenderer:
    """Two-pass drawer for one graph.

    The base pass draws the full graph onto a staging canvas and only commits
    it (cache and front) once finished. The highlight pass starts from a copy
    of the cache, so pointer moves never redraw the curve.
    """

    def __init__(self, screen: Screen) -> None:
        self._screen = screen
        self.base_passes = 0
        self.highlight_passes = 0

    @property
    def screen(self) -> Screen:
        return self._screen

    def base_pass(
        self,
        snapshot: CurveSnapshot,
        optimal: Sequence[Line],
        options: RenderOptions,
        *,
        is_current: Callable[[], bool] = lambda: True,
    ) -> bool:
        screen = self._screen
        staged = new_canvas(screen.width, screen.height, BACKGROUND)
        self._draw_axis(staged)
        if options.render_framelines:
            self._draw_framelines(staged, [line.to.x for line in snapshot.lines])
        if options.render_optimal:
            self._draw_curve(staged, optimal, OPTIMAL_COLOR)
        if options.render_effective:
            self._draw_curve(staged, snapshot.lines, EFFECTIVE_COLOR)
        if options.render_points:
            self._draw_points(staged, [line.to for line in snapshot.lines])
        if not is_current():
            return False
        screen.commit_base(staged)
        self.base_passes += 1
        return True

    def highlight_pass(
        self,
        highlight: Optional[Coordinate],
        animation: AnimationOptions,
        *,
        is_current: Callable[[], bool] = lambda: True,
    ) -> bool:
        staged = self._screen.restore_cache()
        if highlight is not None:
            self._draw_segments(staged, highlight_hint_lines(highlight), HINT_COLOR, dash=HINT_DASH)
            self._draw_readout(staged, readout_text(highlight, animation))
        if not is_current():
            return False
        self._screen.commit_overlay(staged)
        self.highlight_passes += 1
        return True

    def _draw_axis(self, dst: np.ndarray) -> None:
        x_axis = self._screen.graph.x
        y_axis = self._screen.graph.y
        draw_segments(
            dst,
            [
                ((x_axis.min, y_axis.min), (x_axis.edge, y_axis.min)),
                ((x_axis.min, y_axis.edge), (x_axis.min, y_axis.min)),
            ],
            AXIS_COLOR,
        )
        labels = (
            ("0", x_axis.min, y_axis.min + 10),
            ("1", x_axis.max, y_axis.min + 10),
            ("t", x_axis.edge - 5, y_axis.min + 8),
            ("v", x_axis.min - 8, y_axis.edge + 5),
            ("1", x_axis.min - 8, y_axis.max),
        )
        for text, x, y in labels:
            draw_text(dst, int(round(x)), int(round(y)), text, AXIS_COLOR, font_size_px=LABEL_FONT_SIZE_PX)

    def _draw_framelines(self, dst: np.ndarray, xs: Sequence[float]) -> None:
        graph = self._screen.graph
        top = int(round(graph.y.absolute(1.0)))
        bottom = int(round(graph.y.absolute(0.0)))
        for x in xs:
            draw_vline(dst, int(round(graph.x.absolute(x))), top, bottom, FRAMELINE_COLOR)

    def _draw_curve(self, dst: np.ndarray, lines: Sequence[Line], color: tuple[int, int, int, int]) -> None:
        if not lines:
            return
        points = [lines[0].from_] + [line.to for line in lines]
        xs, ys = self._to_pixels(points)
        draw_polyline(dst, xs, ys, color=color)

    def _draw_points(self, dst: np.ndarray, points: Sequence[Coordinate]) -> None:
        if not points:
            return
        xs, ys = self._to_pixels(points)
        draw_markers(dst, xs, ys, color=POINT_COLOR, radius=1)

    def _draw_segments(
        self,
        dst: np.ndarray,
        lines: Sequence[Line],
        color: tuple[int, int, int, int],
        *,
        dash: Sequence[int] = (),
    ) -> None:
        graph = self._screen.graph
        draw_segments(
            dst,
            [(graph.absolute(line.from_), graph.absolute(line.to)) for line in lines],
            color,
            dash=dash,
        )

    def _draw_readout(self, dst: np.ndarray, text: str) -> None:
        width, _ = text_size(text, font_size_px=LABEL_FONT_SIZE_PX)
        draw_text(dst, self._screen.width - 10 - width, 20, text, HINT_COLOR, font_size_px=LABEL_FONT_SIZE_PX)

    def _to_pixels(self, points: Sequence[Coordinate]) -> tuple[np.ndarray, np.ndarray]:
        graph = self._screen.graph
        xs = np.fromiter((graph.x.absolute(p.x) for p in points), dtype=np.float64, count=len(points))
        ys = np.fromiter((graph.y.absolute(p.y) for p in points), dtype=np.float64, count=len(points))
        return np.rint(xs).astype(np.int32), np.rint(ys).astype(np.int32)
