from __future__ import annotations

from dataclasses import dataclass
import logging
import time
from typing import Callable

from .observable import Observer, Subject, Subscription

LOGGER = logging.getLogger(__name__)


class RefreshSignal:
    """Host display-refresh signal: one `tick` per repaint, fanned out to every subscriber in order."""

    def __init__(self, time_fn: Callable[[], float] = time.perf_counter) -> None:
        self._time_fn = time_fn
        self._subject: Subject[float] = Subject()
        self._ticks = 0

    def now_ms(self) -> float:
        return float(self._time_fn()) * 1000.0

    @property
    def ticks(self) -> int:
        return self._ticks

    @property
    def subscriber_count(self) -> int:
        return self._subject.observer_count

    def subscribe(self, on_tick: Observer[float]) -> Subscription:
        return self._subject.subscribe(on_tick)

    def tick(self, timestamp_ms: float | None = None) -> float:
        ts = self.now_ms() if timestamp_ms is None else float(timestamp_ms)
        self._ticks += 1
        self._subject.on_next(ts)
        return ts


@dataclass
class FrameCadence:
    """Paces the refresh loop at a target fps."""

    target_fps: int

    def __post_init__(self) -> None:
        if self.target_fps <= 0:
            raise ValueError("target_fps must be > 0")

    @property
    def target_dt(self) -> float:
        return 1.0 / float(self.target_fps)

    def compute_sleep(self, loop_started_at: float, loop_finished_at: float) -> float:
        elapsed = max(0.0, loop_finished_at - loop_started_at)
        return max(0.0, self.target_dt - elapsed)


@dataclass(frozen=True)
class RefreshRunResult:
    ticks_run: int
    frames_presented: int
    stopped_by_completion: bool


class RefreshLoop:
    """Drives a RefreshSignal on the caller thread until `max_ticks` or until `is_done` reports true."""

    def __init__(
        self,
        signal: RefreshSignal,
        *,
        target_fps: int = 60,
        sleep_fn: Callable[[float], None] = time.sleep,
        clock_fn: Callable[[], float] = time.perf_counter,
    ) -> None:
        self._signal = signal
        self._cadence = FrameCadence(target_fps=target_fps)
        self._sleep_fn = sleep_fn
        self._clock_fn = clock_fn
        self._last_error: Exception | None = None

    @property
    def last_error(self) -> Exception | None:
        return self._last_error

    def run(
        self,
        *,
        max_ticks: int | None = None,
        is_done: Callable[[], bool] | None = None,
        on_tick: Callable[[], int] | None = None,
    ) -> RefreshRunResult:
        """`on_tick` runs after every tick and returns how many frames were presented by it."""
        if max_ticks is not None and max_ticks <= 0:
            raise ValueError("max_ticks must be > 0")
        if max_ticks is None and is_done is None:
            raise ValueError("one of max_ticks/is_done is required")
        ticks_run = 0
        frames_presented = 0
        stopped_by_completion = False
        try:
            while max_ticks is None or ticks_run < max_ticks:
                if is_done is not None and is_done():
                    stopped_by_completion = True
                    break
                started = self._clock_fn()
                self._signal.tick()
                ticks_run += 1
                if on_tick is not None:
                    frames_presented += on_tick()
                sleep_for = self._cadence.compute_sleep(started, self._clock_fn())
                if sleep_for > 0:
                    self._sleep_fn(sleep_for)
            else:
                stopped_by_completion = is_done is not None and is_done()
        except Exception as exc:  # noqa: BLE001
            self._last_error = exc
            LOGGER.exception("RefreshLoop failed after %d ticks: %s", ticks_run, exc)
            raise
        return RefreshRunResult(
            ticks_run=ticks_run,
            frames_presented=frames_presented,
            stopped_by_completion=stopped_by_completion,
        )
