from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

from easeviz_plot.raster.canvas import RGBA, draw_pixel


PixelSegment = tuple[tuple[float, float], tuple[float, float]]


def draw_polyline(dst: np.ndarray, xs: np.ndarray, ys: np.ndarray, color: RGBA, width: int = 1) -> None:
    if xs.size < 2:
        return
    for i in range(xs.size - 1):
        _draw_line_segment(dst, int(xs[i]), int(ys[i]), int(xs[i + 1]), int(ys[i + 1]), color=color, width=width)


def draw_segments(
    dst: np.ndarray,
    segments: Iterable[PixelSegment],
    color: RGBA,
    *,
    width: int = 1,
    dash: Sequence[int] = (),
) -> None:
    """Stroke independent segments; `dash` is an on/off pixel pattern restarted per segment."""
    pattern = _validate_dash(dash)
    for (x0, y0), (x1, y1) in segments:
        a = (int(round(x0)), int(round(y0)))
        b = (int(round(x1)), int(round(y1)))
        if pattern:
            _draw_dashed_segment(dst, a[0], a[1], b[0], b[1], color=color, width=width, pattern=pattern)
        else:
            _draw_line_segment(dst, a[0], a[1], b[0], b[1], color=color, width=width)


def _validate_dash(dash: Sequence[int]) -> tuple[int, ...]:
    pattern = tuple(int(v) for v in dash)
    if not pattern:
        return ()
    if any(v < 0 for v in pattern) or sum(pattern) <= 0:
        raise ValueError("dash pattern must be non-negative with a positive total")
    if len(pattern) % 2 == 1:
        pattern = pattern + pattern
    return pattern


def _line_pixels(x0: int, y0: int, x1: int, y1: int) -> list[tuple[int, int]]:
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    out: list[tuple[int, int]] = []
    while True:
        out.append((x0, y0))
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy
    return out


def _draw_line_segment(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, width: int) -> None:
    for x, y in _line_pixels(x0, y0, x1, y1):
        _draw_square_brush(dst, x, y, color=color, width=width)


def _draw_dashed_segment(
    dst: np.ndarray,
    x0: int,
    y0: int,
    x1: int,
    y1: int,
    color: RGBA,
    width: int,
    pattern: tuple[int, ...],
) -> None:
    period = sum(pattern)
    for step, (x, y) in enumerate(_line_pixels(x0, y0, x1, y1)):
        pos = step % period
        on = True
        for i, run in enumerate(pattern):
            if pos < run:
                on = i % 2 == 0
                break
            pos -= run
        if on:
            _draw_square_brush(dst, x, y, color=color, width=width)


def _draw_square_brush(dst: np.ndarray, x: int, y: int, color: RGBA, width: int) -> None:
    radius = max(0, width // 2)
    for yy in range(y - radius, y + radius + 1):
        for xx in range(x - radius, x + radius + 1):
            draw_pixel(dst, xx, yy, color)
