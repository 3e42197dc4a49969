from __future__ import annotations

import logging
from typing import Callable, Mapping, Optional

from easeviz_core.core.coordinates import Coordinate
from easeviz_core.core.events import PointerEvent
from easeviz_core.core.observable import CompositeSubscription, ReplaySubject
from easeviz_core.core.refresh import RefreshSignal
from easeviz_core.core.window_matrix import WindowMatrix
from easeviz_plot.easings import EasingFunction
from easeviz_plot.errors import SurfaceUnavailableError
from easeviz_plot.options import AnimationOptions, RenderOptions
from easeviz_plot.pointer import PointerSurface
from easeviz_plot.renderer import GraphRenderer, readout_text
from easeviz_plot.run import GraphRunState, RunOrchestrator, RunStatus
from easeviz_plot.screen import Screen, create_screen

LOGGER = logging.getLogger(__name__)

DEFAULT_GRAPH_SIZE = 300


class GraphControls:
    """Shared, read-only inputs of every graph: one global duration and one set of render toggles."""

    def __init__(
        self,
        duration_ms: int = 1000,
        render: RenderOptions | None = None,
        *,
        from_value: float = 0.0,
        to_value: float = 100.0,
    ) -> None:
        _validate_duration(duration_ms)
        if to_value == 0:
            raise ValueError("to_value must be non-zero")
        self.from_value = float(from_value)
        self.to_value = float(to_value)
        self.duration: ReplaySubject[int] = ReplaySubject(int(duration_ms), has_initial=True)
        self.render_options: ReplaySubject[RenderOptions] = ReplaySubject(render or RenderOptions(), has_initial=True)

    @property
    def duration_label(self) -> str:
        return f"{self.duration.value}ms"

    def set_duration(self, duration_ms: int) -> None:
        _validate_duration(duration_ms)
        self.duration.on_next(int(duration_ms))

    def set_render_options(self, **changes: bool) -> None:
        updated = self.render_options.value.with_changes(**changes)
        if updated != self.render_options.value:
            self.render_options.on_next(updated)

    def animation_options(self, easing_function: EasingFunction) -> AnimationOptions:
        return AnimationOptions(
            from_value=self.from_value,
            to_value=self.to_value,
            duration_ms=self.duration.value,
            easing_function=easing_function,
        )


class GraphInstance:
    """One easing graph: its own buffers, pointer surface and run orchestrator.

    Nothing is shared with sibling graphs beyond the read-only controls and
    the refresh signal.
    """

    def __init__(
        self,
        name: str,
        easing_function: EasingFunction,
        screen: Screen,
        controls: GraphControls,
        signal: RefreshSignal,
    ) -> None:
        self.name = name
        self.easing_function = easing_function
        self.surface = PointerSurface()
        self._screen = screen
        self._controls = controls
        self._renderer = GraphRenderer(screen)
        self._orchestrator = RunOrchestrator(name, self._renderer, self.surface, signal)
        self._control_subscriptions: CompositeSubscription | None = None
        self._wiring = False

    @property
    def screen(self) -> Screen:
        return self._screen

    @property
    def front(self) -> WindowMatrix:
        return self._screen.front

    @property
    def renderer(self) -> GraphRenderer:
        return self._renderer

    @property
    def orchestrator(self) -> RunOrchestrator:
        return self._orchestrator

    @property
    def state(self) -> GraphRunState | None:
        return self._orchestrator.state

    @property
    def status(self) -> RunStatus:
        return self._orchestrator.status

    @property
    def mounted(self) -> bool:
        return self._control_subscriptions is not None

    @property
    def highlight(self) -> Optional[Coordinate]:
        state = self.state
        return None if state is None else state.highlight

    @property
    def readout(self) -> str | None:
        state = self.state
        if state is None or not state.render.render_coords or state.highlight is None:
            return None
        return readout_text(state.highlight, state.animation)

    def start(self) -> GraphRunState:
        """Mount: follow the shared controls and start the first run."""
        if self._control_subscriptions is None:
            subscriptions = CompositeSubscription()
            # Replayed initial values arrive during subscribe; only the explicit restart below runs.
            self._wiring = True
            try:
                subscriptions.add(self._controls.duration.subscribe(lambda _: self._on_controls_changed()))
                subscriptions.add(self._controls.render_options.subscribe(lambda _: self._on_controls_changed()))
            finally:
                self._wiring = False
            self._control_subscriptions = subscriptions
        return self.restart()

    def restart(self) -> GraphRunState:
        return self._orchestrator.start(
            self._controls.animation_options(self.easing_function),
            self._controls.render_options.value,
        )

    def dispose(self) -> None:
        if self._control_subscriptions is not None:
            self._control_subscriptions.dispose()
            self._control_subscriptions = None
        self._orchestrator.cancel()

    def dispatch_pointer(self, event: PointerEvent) -> None:
        self.surface.dispatch(event)

    def _on_controls_changed(self) -> None:
        if self._wiring:
            return
        self.restart()


def build_graphs(
    easings: Mapping[str, EasingFunction],
    controls: GraphControls,
    signal: RefreshSignal,
    *,
    width: int = DEFAULT_GRAPH_SIZE,
    height: int = DEFAULT_GRAPH_SIZE,
    screen_factory: Callable[[int, int], Screen] = create_screen,
    start: bool = True,
) -> list[GraphInstance]:
    """Create one isolated GraphInstance per easing; a graph whose surface fails is reported and skipped."""
    graphs: list[GraphInstance] = []
    for name, easing_function in easings.items():
        try:
            screen = screen_factory(width, height)
        except SurfaceUnavailableError as exc:
            LOGGER.error("graph %s: setup aborted: %s", name, exc)
            continue
        graph = GraphInstance(name, easing_function, screen, controls, signal)
        if start:
            graph.start()
        graphs.append(graph)
    return graphs


def _validate_duration(duration_ms: int) -> None:
    if int(duration_ms) <= 0:
        raise ValueError("duration_ms must be > 0")
