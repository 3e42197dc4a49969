from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
import tomllib
from typing import Any

from easeviz_plot.easings import EASING_FUNCTIONS
from easeviz_plot.errors import ConfigError
from easeviz_plot.options import RenderOptions


@dataclass(frozen=True)
class VisualizerConfig:
    duration_ms: int = 1000
    from_value: float = 0.0
    to_value: float = 100.0
    render: RenderOptions = field(default_factory=RenderOptions)
    width: int = 300
    height: int = 300
    fps: int = 60
    max_ticks: int | None = None
    easings: tuple[str, ...] = tuple(EASING_FUNCTIONS)

    def __post_init__(self) -> None:
        if self.duration_ms <= 0:
            raise ConfigError("duration_ms must be > 0")
        if self.to_value == 0:
            raise ConfigError("to_value must be non-zero")
        if self.width <= 0 or self.height <= 0:
            raise ConfigError("width and height must be > 0")
        if self.fps <= 0:
            raise ConfigError("fps must be > 0")
        if self.max_ticks is not None and self.max_ticks <= 0:
            raise ConfigError("max_ticks must be > 0")
        if not self.easings:
            raise ConfigError("at least one easing is required")
        unknown = [name for name in self.easings if name not in EASING_FUNCTIONS]
        if unknown:
            raise ConfigError(f"unknown easing functions: {', '.join(unknown)}")


def load_config(path: str | Path | None = None) -> VisualizerConfig:
    """Load `easeviz.toml`-style settings; missing tables and keys keep their defaults."""
    if path is None:
        return VisualizerConfig()
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"config not found: {config_path}")
    with config_path.open("rb") as f:
        try:
            raw = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"invalid TOML in {config_path}: {exc}") from exc
    return config_from_mapping(raw)


def config_from_mapping(raw: dict[str, Any]) -> VisualizerConfig:
    animation = _table(raw, "animation")
    render = _table(raw, "render")
    screen = _table(raw, "screen")
    loop = _table(raw, "loop")
    defaults = VisualizerConfig()

    render_fields = {f.name for f in fields(RenderOptions)}
    unknown_render = set(render) - render_fields
    if unknown_render:
        raise ConfigError(f"unknown render options: {', '.join(sorted(unknown_render))}")
    render_options = RenderOptions(**{k: _coerce_bool(v, f"render.{k}") for k, v in render.items()})

    easings = raw.get("easings", list(defaults.easings))
    if not isinstance(easings, list) or not all(isinstance(x, str) for x in easings):
        raise ConfigError("easings must be a list of strings")

    max_ticks = loop.get("max_ticks")
    return VisualizerConfig(
        duration_ms=_coerce_int(animation.get("duration_ms", defaults.duration_ms), "animation.duration_ms"),
        from_value=_coerce_float(animation.get("from_value", defaults.from_value), "animation.from_value"),
        to_value=_coerce_float(animation.get("to_value", defaults.to_value), "animation.to_value"),
        render=render_options,
        width=_coerce_int(screen.get("width", defaults.width), "screen.width"),
        height=_coerce_int(screen.get("height", defaults.height), "screen.height"),
        fps=_coerce_int(loop.get("fps", defaults.fps), "loop.fps"),
        max_ticks=None if max_ticks is None else _coerce_int(max_ticks, "loop.max_ticks"),
        easings=tuple(easings),
    )


def _table(raw: dict[str, Any], name: str) -> dict[str, Any]:
    value = raw.get(name, {})
    if not isinstance(value, dict):
        raise ConfigError(f"[{name}] must be a table")
    return value


def _coerce_int(value: Any, label: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{label} must be an integer")
    return value


def _coerce_float(value: Any, label: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{label} must be a number")
    return float(value)


def _coerce_bool(value: Any, label: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"{label} must be a boolean")
    return value
