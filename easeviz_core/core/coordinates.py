from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Coordinate:
    """Graph-normalized point: x is the time fraction, y the value fraction (may overshoot [0, 1])."""

    x: float
    y: float


@dataclass(frozen=True)
class Line:
    from_: Coordinate
    to: Coordinate


@dataclass(frozen=True)
class Axis:
    """Screen-space parameters for one dimension of a graph."""

    min: float
    max: float
    edge: float
    offset: float

    @property
    def delta(self) -> float:
        return self.max - self.min

    def normalize(self, pixel: float) -> float:
        return (float(pixel) - self.min) / self.delta

    def absolute(self, fraction: float) -> float:
        return self.min + float(fraction) * self.delta


@dataclass(frozen=True)
class GraphMapping:
    """Paired axes mapping pixels to graph-normalized coordinates and back."""

    x: Axis
    y: Axis

    def __post_init__(self) -> None:
        if abs(self.x.delta) < 1e-9 or abs(self.y.delta) < 1e-9:
            raise ValueError("graph axes are degenerate (delta == 0)")

    def normalize(self, px: float, py: float) -> Coordinate:
        return Coordinate(x=self.x.normalize(px), y=self.y.normalize(py))

    def absolute(self, coordinate: Coordinate) -> tuple[float, float]:
        return (self.x.absolute(coordinate.x), self.y.absolute(coordinate.y))


def create_graph_mapping(width: int, height: int) -> GraphMapping:
    """Derive the axes once from the canvas size; y grows upwards so its delta is negative."""
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be > 0")
    offset_x_left = 0.05 * width
    offset_x_right = 0.02 * width
    offset_y_top = 0.05 * height
    offset_y_bottom = 0.08 * height

    edge_x = width - offset_x_right
    min_x = offset_x_left
    max_x = edge_x - 20

    edge_y = offset_y_top
    min_y = height - offset_y_bottom
    max_y = edge_y + offset_y_top + 8

    return GraphMapping(
        x=Axis(min=min_x, max=max_x, edge=edge_x, offset=offset_x_left),
        y=Axis(min=min_y, max=max_y, edge=edge_y, offset=offset_y_bottom),
    )
