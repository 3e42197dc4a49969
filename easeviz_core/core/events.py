from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional


PointerEventType = Literal[
    "pointer_enter",
    "pointer_move",
    "pointer_leave",
]

POINTER_EVENT_TYPES: frozenset[str] = frozenset(("pointer_enter", "pointer_move", "pointer_leave"))


@dataclass(frozen=True)
class PointerEvent:
    """Raw pointer event on one graph surface, in surface pixel coordinates."""

    event_type: PointerEventType
    timestamp: float
    x: Optional[float] = None
    y: Optional[float] = None

    def __post_init__(self) -> None:
        if self.event_type not in POINTER_EVENT_TYPES:
            raise ValueError(f"unsupported pointer event type: {self.event_type}")
        if self.event_type == "pointer_move" and (self.x is None or self.y is None):
            raise ValueError("pointer_move requires x and y")


def pointer_enter(timestamp: float = 0.0) -> PointerEvent:
    return PointerEvent(event_type="pointer_enter", timestamp=timestamp)


def pointer_move(x: float, y: float, timestamp: float = 0.0) -> PointerEvent:
    return PointerEvent(event_type="pointer_move", timestamp=timestamp, x=x, y=y)


def pointer_leave(timestamp: float = 0.0) -> PointerEvent:
    return PointerEvent(event_type="pointer_leave", timestamp=timestamp)
