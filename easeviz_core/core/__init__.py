from .coordinates import Axis, Coordinate, GraphMapping, Line, create_graph_mapping
from .events import PointerEvent, pointer_enter, pointer_leave, pointer_move
from .observable import CompositeSubscription, ReplaySubject, Subject, Subscription
from .refresh import FrameCadence, RefreshLoop, RefreshRunResult, RefreshSignal
from .window_matrix import CallBlitEvent, FullRewrite, ReplaceRect, WindowMatrix, WriteBatch

__all__ = [
    "Axis",
    "CallBlitEvent",
    "CompositeSubscription",
    "Coordinate",
    "FrameCadence",
    "FullRewrite",
    "GraphMapping",
    "Line",
    "PointerEvent",
    "RefreshLoop",
    "RefreshRunResult",
    "RefreshSignal",
    "ReplaceRect",
    "ReplaySubject",
    "Subject",
    "Subscription",
    "WindowMatrix",
    "WriteBatch",
    "create_graph_mapping",
    "pointer_enter",
    "pointer_leave",
    "pointer_move",
]
