from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from easeviz_core.core.coordinates import GraphMapping, create_graph_mapping
from easeviz_core.core.window_matrix import CallBlitEvent, WindowMatrix
from easeviz_plot.errors import SurfaceUnavailableError
from easeviz_plot.raster import new_canvas

BACKGROUND = (255, 255, 255, 255)


@dataclass
class Screen:
    """Front/cache buffer pair of one graph plus its pixel mapping.

    `front` is the only buffer ever presented. `cache` holds the last
    completed base pass and is replaced wholesale, never drawn into.
    `presented` mirrors the front frame so overlays only upload the pixels
    that changed.
    """

    width: int
    height: int
    front: WindowMatrix
    cache: np.ndarray
    graph: GraphMapping
    presented: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.presented = self.front.read_numpy()

    def restore_cache(self) -> np.ndarray:
        return self.cache.copy()

    def commit_base(self, staged: np.ndarray) -> None:
        if staged.shape != self.cache.shape:
            raise ValueError(f"staged canvas has invalid shape: {staged.shape} expected {self.cache.shape}")
        self.front.submit_canvas(staged)
        self.cache = staged
        self.presented = staged

    def commit_overlay(self, staged: np.ndarray) -> CallBlitEvent | None:
        """Present `staged` by replacing the bounding rect of changed pixels; None when nothing changed."""
        if staged.shape != self.presented.shape:
            raise ValueError(f"staged canvas has invalid shape: {staged.shape} expected {self.presented.shape}")
        changed = np.any(staged != self.presented, axis=-1)
        rows = np.flatnonzero(np.any(changed, axis=1))
        if rows.size == 0:
            return None
        cols = np.flatnonzero(np.any(changed, axis=0))
        y0, y1 = int(rows[0]), int(rows[-1]) + 1
        x0, x1 = int(cols[0]), int(cols[-1]) + 1
        event = self.front.submit_rect(x0, y0, staged[y0:y1, x0:x1])
        self.presented = staged
        return event


def create_screen(width: int, height: int) -> Screen:
    try:
        front = WindowMatrix(height=height, width=width, background=BACKGROUND)
        cache = new_canvas(width, height, BACKGROUND)
        graph = create_graph_mapping(width, height)
    except (ValueError, RuntimeError, MemoryError) as exc:
        raise SurfaceUnavailableError(f"cannot create a {width}x{height} drawing surface: {exc}") from exc
    return Screen(width=width, height=height, front=front, cache=cache, graph=graph)
