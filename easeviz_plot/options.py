from __future__ import annotations

from dataclasses import dataclass, replace

from easeviz_plot.easings import EasingFunction


@dataclass(frozen=True)
class AnimationOptions:
    from_value: float
    to_value: float
    duration_ms: int
    easing_function: EasingFunction

    def __post_init__(self) -> None:
        if isinstance(self.duration_ms, bool) or not isinstance(self.duration_ms, int):
            raise ValueError("duration_ms must be an integer number of milliseconds")
        if self.duration_ms <= 0:
            raise ValueError("duration_ms must be > 0")
        if self.to_value == 0:
            raise ValueError("to_value must be non-zero")
        if not callable(self.easing_function):
            raise ValueError("easing_function must be callable")

    @property
    def value_delta(self) -> float:
        return abs(self.to_value - self.from_value)


@dataclass(frozen=True)
class RenderOptions:
    render_points: bool = False
    render_coords: bool = True
    render_optimal: bool = False
    render_effective: bool = True
    render_framelines: bool = False

    def with_changes(self, **changes: bool) -> "RenderOptions":
        unknown = set(changes) - set(self.__dataclass_fields__)
        if unknown:
            raise ValueError(f"unknown render options: {sorted(unknown)}")
        return replace(self, **{k: bool(v) for k, v in changes.items()})
