from easeviz_plot.accumulate import CurveSnapshot, LineBuilder, NearestPointResolver, closest_coordinate
from easeviz_plot.config import VisualizerConfig, load_config
from easeviz_plot.curves import FrameSource, FrameTick, curve_point, optimal_reference
from easeviz_plot.easings import EASING_FUNCTIONS, resolve_easing
from easeviz_plot.errors import ConfigError, EasevizError, SurfaceUnavailableError
from easeviz_plot.instance import GraphControls, GraphInstance, build_graphs
from easeviz_plot.options import AnimationOptions, RenderOptions
from easeviz_plot.pointer import PointerSurface, PointerTracker
from easeviz_plot.renderer import GraphRenderer
from easeviz_plot.run import GraphRunState, RunOrchestrator
from easeviz_plot.screen import Screen, create_screen

__all__ = [
    "AnimationOptions",
    "ConfigError",
    "CurveSnapshot",
    "EASING_FUNCTIONS",
    "EasevizError",
    "FrameSource",
    "FrameTick",
    "GraphControls",
    "GraphInstance",
    "GraphRenderer",
    "GraphRunState",
    "LineBuilder",
    "NearestPointResolver",
    "PointerSurface",
    "PointerTracker",
    "RenderOptions",
    "RunOrchestrator",
    "Screen",
    "SurfaceUnavailableError",
    "VisualizerConfig",
    "build_graphs",
    "closest_coordinate",
    "create_screen",
    "curve_point",
    "load_config",
    "optimal_reference",
    "resolve_easing",
]
