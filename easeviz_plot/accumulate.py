from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Optional, Sequence

from easeviz_core.core.coordinates import Coordinate, Line
from easeviz_core.core.observable import CompositeSubscription, ReplaySubject, Subscription


@dataclass(frozen=True)
class CurveSnapshot:
    """Accumulated live curve at one instant: every point observed so far and the segments between them."""

    points: tuple[Coordinate, ...]
    lines: tuple[Line, ...]

    @property
    def complete(self) -> bool:
        return bool(self.points) and self.points[-1] == Coordinate(1.0, 1.0)


EMPTY_SNAPSHOT = CurveSnapshot(points=(), lines=())


class LineBuilder:
    """Turns the live point stream into a growing, replayed list of consecutive-pair segments.

    Segments are computed once here and the resulting snapshot is shared by
    every subscriber; late subscribers get the latest snapshot on subscribe.
    """

    def __init__(self) -> None:
        self._points: list[Coordinate] = []
        self._lines: list[Line] = []
        self.snapshots: ReplaySubject[CurveSnapshot] = ReplaySubject()

    @property
    def latest(self) -> CurveSnapshot:
        if not self.snapshots.has_value:
            return EMPTY_SNAPSHOT
        return self.snapshots.value

    def push(self, point: Coordinate) -> CurveSnapshot:
        if self._points and point.x < self._points[-1].x:
            raise ValueError(f"point x must not decrease: {point.x} < {self._points[-1].x}")
        # Point first: a segment is only published once both endpoints are in the list.
        if self._points:
            self._points.append(point)
            self._lines.append(Line(from_=self._points[-2], to=point))
        else:
            self._points.append(point)
        snapshot = CurveSnapshot(points=tuple(self._points), lines=tuple(self._lines))
        self.snapshots.on_next(snapshot)
        return snapshot

    def complete(self) -> None:
        self.snapshots.on_complete()


def closest_coordinate(coordinates: Sequence[Coordinate], pivot: Optional[Coordinate]) -> Optional[Coordinate]:
    """Point of minimum Euclidean distance to `pivot`; the first one wins ties."""
    if pivot is None or not coordinates:
        return None
    best: Coordinate | None = None
    best_distance = math.inf
    for point in coordinates:
        distance = math.hypot(point.x - pivot.x, point.y - pivot.y)
        if distance < best_distance:
            best = point
            best_distance = distance
    return best


class NearestPointResolver:
    """Combines the latest curve snapshot with the latest pointer value into a de-duplicated highlight stream."""

    def __init__(
        self,
        snapshots: ReplaySubject[CurveSnapshot],
        pointer: ReplaySubject[Optional[Coordinate]],
    ) -> None:
        self._snapshots = snapshots
        self._pointer = pointer
        self._latest_snapshot: CurveSnapshot | None = None
        self._latest_pointer: Optional[Coordinate] = None
        self._pointer_seen = False
        self.highlights: ReplaySubject[Optional[Coordinate]] = ReplaySubject()

    @property
    def current(self) -> Optional[Coordinate]:
        return self.highlights.value if self.highlights.has_value else None

    def connect(self) -> Subscription:
        subscriptions = CompositeSubscription()
        subscriptions.add(self._snapshots.subscribe(self._on_snapshot))
        subscriptions.add(self._pointer.subscribe(self._on_pointer))
        return subscriptions

    def _on_snapshot(self, snapshot: CurveSnapshot) -> None:
        self._latest_snapshot = snapshot
        self._resolve()

    def _on_pointer(self, pointer: Optional[Coordinate]) -> None:
        self._latest_pointer = pointer
        self._pointer_seen = True
        self._resolve()

    def _resolve(self) -> None:
        if self._latest_snapshot is None or not self._pointer_seen:
            return
        resolved = closest_coordinate(self._latest_snapshot.points, self._latest_pointer)
        if self.highlights.has_value and self.highlights.value == resolved:
            return
        self.highlights.on_next(resolved)
