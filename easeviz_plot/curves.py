from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from easeviz_core.core.coordinates import Coordinate, Line
from easeviz_core.core.observable import Subscription
from easeviz_core.core.refresh import RefreshSignal
from easeviz_plot.options import AnimationOptions

TERMINAL_POINT = Coordinate(x=1.0, y=1.0)


@dataclass(frozen=True)
class FrameTick:
    elapsed_ms: float
    terminal: bool = False


def start_point(options: AnimationOptions) -> Coordinate:
    return Coordinate(x=0.0, y=options.from_value / options.to_value)


def curve_point(options: AnimationOptions, elapsed_ms: float) -> Coordinate:
    """Normalized (time, value) for `elapsed_ms`; overshoot is kept, the end is pinned to (1, 1)."""
    duration = options.duration_ms
    if elapsed_ms <= 0:
        return start_point(options)
    if elapsed_ms >= duration:
        return TERMINAL_POINT
    value = options.easing_function(float(elapsed_ms), options.from_value, options.value_delta, float(duration))
    return Coordinate(x=elapsed_ms / duration, y=value / options.to_value)


def tick_point(options: AnimationOptions, tick: FrameTick) -> Coordinate:
    if tick.terminal:
        return TERMINAL_POINT
    return curve_point(options, tick.elapsed_ms)


def optimal_reference(options: AnimationOptions) -> tuple[Line, ...]:
    """Dense polyline sampled at every integer millisecond, independent of frame timing."""
    points = [start_point(options)]
    for elapsed in range(1, options.duration_ms + 1):
        point = curve_point(options, elapsed)
        if point.x >= 1.0:
            break
        points.append(point)
    points.append(TERMINAL_POINT)
    return tuple(Line(from_=a, to=b) for a, b in zip(points, points[1:]))


class FrameSource:
    """Per-run elapsed-time ticks driven by a RefreshSignal.

    Every `subscribe` starts an independent zero-based timeline: a synthetic
    start tick is emitted immediately, then one tick per refresh while
    `elapsed < duration`, then a terminal tick, after which the source detaches
    itself from the refresh signal.
    """

    def __init__(self, signal: RefreshSignal, duration_ms: int) -> None:
        if duration_ms <= 0:
            raise ValueError("duration_ms must be > 0")
        self._signal = signal
        self._duration_ms = duration_ms

    def subscribe(
        self,
        on_tick: Callable[[FrameTick], None],
        on_complete: Callable[[], None] | None = None,
    ) -> Subscription:
        started_at = self._signal.now_ms()
        refresh: list[Subscription] = []
        done = [False]

        def _finish() -> None:
            done[0] = True
            if refresh:
                refresh[0].dispose()

        def _on_refresh(timestamp_ms: float) -> None:
            if done[0]:
                return
            elapsed = max(0.0, timestamp_ms - started_at)
            if elapsed < self._duration_ms:
                on_tick(FrameTick(elapsed_ms=elapsed))
                return
            _finish()
            on_tick(FrameTick(elapsed_ms=float(self._duration_ms), terminal=True))
            if on_complete is not None:
                on_complete()

        subscription = Subscription(_finish)
        on_tick(FrameTick(elapsed_ms=0.0))
        if not subscription.closed:
            refresh.append(self._signal.subscribe(_on_refresh))
        return subscription
