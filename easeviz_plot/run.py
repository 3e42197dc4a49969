from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Literal, Optional

from easeviz_core.core.coordinates import Coordinate, Line
from easeviz_core.core.observable import CompositeSubscription
from easeviz_core.core.refresh import RefreshSignal
from easeviz_plot.accumulate import CurveSnapshot, LineBuilder, NearestPointResolver
from easeviz_plot.curves import FrameSource, FrameTick, optimal_reference, tick_point
from easeviz_plot.options import AnimationOptions, RenderOptions
from easeviz_plot.pointer import PointerSurface, PointerTracker
from easeviz_plot.renderer import GraphRenderer

LOGGER = logging.getLogger(__name__)

RunStatus = Literal["idle", "running", "cancelled", "completed"]


@dataclass
class RunToken:
    """Identity of one run; callbacks holding a cancelled token must not touch the screen."""

    generation: int
    cancelled: bool = False


@dataclass
class GraphRunState:
    generation: int
    animation: AnimationOptions
    render: RenderOptions
    optimal: tuple[Line, ...]
    builder: LineBuilder
    tracker: PointerTracker
    resolver: NearestPointResolver
    status: RunStatus = "running"
    rendered: CurveSnapshot | None = field(default=None, repr=False)
    last_overlay: tuple[int, Optional[Coordinate]] | None = field(default=None, repr=False)

    @property
    def snapshot(self) -> CurveSnapshot:
        return self.builder.latest

    @property
    def points(self) -> tuple[Coordinate, ...]:
        return self.builder.latest.points

    @property
    def lines(self) -> tuple[Line, ...]:
        return self.builder.latest.lines

    @property
    def highlight(self) -> Optional[Coordinate]:
        return self.resolver.current


class RunOrchestrator:
    """Owns the run lifecycle of one graph: idle -> running -> (cancelled | completed).

    `start` synchronously detaches the previous run (frame source, pointer
    tracking, resolver) and bumps the generation before the new run emits
    its first point.
    """

    def __init__(
        self,
        name: str,
        renderer: GraphRenderer,
        surface: PointerSurface,
        signal: RefreshSignal,
    ) -> None:
        self.name = name
        self._renderer = renderer
        self._surface = surface
        self._signal = signal
        self._generation = 0
        self._token: RunToken | None = None
        self._state: GraphRunState | None = None
        self._subscriptions: CompositeSubscription | None = None
        self._last_error: Exception | None = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def state(self) -> GraphRunState | None:
        return self._state

    @property
    def status(self) -> RunStatus:
        return "idle" if self._state is None else self._state.status

    @property
    def last_error(self) -> Exception | None:
        return self._last_error

    def start(self, animation: AnimationOptions, render: RenderOptions) -> GraphRunState:
        self.cancel()
        self._generation += 1
        token = RunToken(generation=self._generation)
        builder = LineBuilder()
        tracker = PointerTracker(self._surface, self._renderer.screen.graph)
        state = GraphRunState(
            generation=token.generation,
            animation=animation,
            render=render,
            optimal=optimal_reference(animation),
            builder=builder,
            tracker=tracker,
            resolver=NearestPointResolver(builder.snapshots, tracker.coordinates),
        )
        self._token = token
        self._state = state
        subscriptions = CompositeSubscription()
        self._subscriptions = subscriptions
        LOGGER.debug("graph %s: run %d started (duration=%dms)", self.name, token.generation, animation.duration_ms)

        # The resolver sees each snapshot before the base pass, so the pass can overlay its current highlight.
        subscriptions.add(state.resolver.highlights.subscribe(lambda highlight: self._on_highlight(token, state, highlight)))
        subscriptions.add(state.resolver.connect())
        subscriptions.add(builder.snapshots.subscribe(lambda snapshot: self._on_snapshot(token, state, snapshot)))
        subscriptions.add(tracker.connect())
        frames = FrameSource(self._signal, animation.duration_ms)
        subscriptions.add(
            frames.subscribe(
                lambda tick: self._on_tick(token, state, tick),
                lambda: self._on_frames_complete(token, state),
            )
        )
        return state

    def cancel(self) -> None:
        if self._token is not None:
            self._token.cancelled = True
        if self._subscriptions is not None:
            self._subscriptions.dispose()
            self._subscriptions = None
        state = self._state
        if state is not None and state.status == "running":
            state.status = "cancelled"
            LOGGER.debug("graph %s: run %d cancelled", self.name, state.generation)

    def _is_current(self, token: RunToken) -> bool:
        return not token.cancelled and self._token is token

    def _on_tick(self, token: RunToken, state: GraphRunState, tick: FrameTick) -> None:
        if not self._is_current(token):
            return
        state.builder.push(tick_point(state.animation, tick))

    def _on_frames_complete(self, token: RunToken, state: GraphRunState) -> None:
        if not self._is_current(token):
            return
        state.builder.complete()
        state.status = "completed"
        LOGGER.debug("graph %s: run %d completed with %d points", self.name, token.generation, len(state.points))

    def _on_snapshot(self, token: RunToken, state: GraphRunState, snapshot: CurveSnapshot) -> None:
        if not self._is_current(token):
            return
        try:
            committed = self._renderer.base_pass(
                snapshot,
                state.optimal,
                state.render,
                is_current=lambda: self._is_current(token),
            )
            if not committed:
                return
            state.rendered = snapshot
            if state.render.render_coords:
                self._render_overlay(token, state, state.resolver.current)
        except Exception as exc:  # noqa: BLE001
            self._fail(token, exc)

    def _on_highlight(self, token: RunToken, state: GraphRunState, highlight: Optional[Coordinate]) -> None:
        if not self._is_current(token) or not state.render.render_coords:
            return
        if state.rendered is None or state.rendered is not state.builder.latest:
            # The base pass for the newest snapshot has not run yet; it draws this highlight itself.
            return
        try:
            self._render_overlay(token, state, highlight)
        except Exception as exc:  # noqa: BLE001
            self._fail(token, exc)

    def _render_overlay(self, token: RunToken, state: GraphRunState, highlight: Optional[Coordinate]) -> None:
        key = (self._renderer.base_passes, highlight)
        if state.last_overlay == key:
            return
        if self._renderer.highlight_pass(highlight, state.animation, is_current=lambda: self._is_current(token)):
            state.last_overlay = key

    def _fail(self, token: RunToken, exc: Exception) -> None:
        self._last_error = exc
        LOGGER.exception("graph %s: run %d render failed; keeping last complete frame", self.name, token.generation)
        if self._token is token:
            self.cancel()
