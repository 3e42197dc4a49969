from __future__ import annotations

from typing import Optional

from easeviz_core.core.coordinates import Coordinate, GraphMapping
from easeviz_core.core.events import PointerEvent
from easeviz_core.core.observable import ReplaySubject, Subject, Subscription


class PointerSurface:
    """Pointer event entry point of one graph surface; remembers whether the pointer is over it."""

    def __init__(self) -> None:
        self.events: Subject[PointerEvent] = Subject()
        self._inside = False

    @property
    def inside(self) -> bool:
        return self._inside

    def dispatch(self, event: PointerEvent) -> None:
        if event.event_type == "pointer_enter":
            self._inside = True
        elif event.event_type == "pointer_leave":
            self._inside = False
        self.events.on_next(event)


class PointerTracker:
    """Maps one surface's raw pointer events into graph-normalized coordinates.

    Emits None on connect and on leave. Moves only count while the pointer is
    over the surface. Positions are not clamped, so points outside the axes
    (negative values included) stay representable.
    """

    def __init__(self, surface: PointerSurface, mapping: GraphMapping) -> None:
        self._surface = surface
        self._mapping = mapping
        self._inside = False
        self.coordinates: ReplaySubject[Optional[Coordinate]] = ReplaySubject()

    @property
    def current(self) -> Optional[Coordinate]:
        return self.coordinates.value if self.coordinates.has_value else None

    def connect(self) -> Subscription:
        # A restart while hovering keeps tracking without waiting for a new enter.
        self._inside = self._surface.inside
        self._emit(None)
        return self._surface.events.subscribe(self._on_event)

    def _on_event(self, event: PointerEvent) -> None:
        if event.event_type == "pointer_enter":
            self._inside = True
            return
        if event.event_type == "pointer_leave":
            if self._inside:
                self._inside = False
                self._emit(None)
            return
        if event.event_type == "pointer_move":
            if not self._inside or event.x is None or event.y is None:
                return
            self._emit(self._mapping.normalize(event.x, event.y))
            return
        raise ValueError(f"unsupported pointer event type: {event.event_type}")

    def _emit(self, value: Optional[Coordinate]) -> None:
        if self.coordinates.has_value and self.coordinates.value == value:
            return
        self.coordinates.on_next(value)
