from __future__ import annotations

import argparse
from dataclasses import replace
import logging
from pathlib import Path

from easeviz_core.core import RefreshLoop, RefreshSignal, pointer_enter, pointer_move
from easeviz_plot import (
    EASING_FUNCTIONS,
    GraphControls,
    GraphInstance,
    VisualizerConfig,
    build_graphs,
    load_config,
)

RENDER_TOGGLES = (
    ("points", "render_points", "Draw a marker at every sampled point."),
    ("coords", "render_coords", "Show the hover readout and dashed hints."),
    ("optimal", "render_optimal", "Overlay the per-millisecond reference curve."),
    ("effective", "render_effective", "Draw the frame-driven curve."),
    ("framelines", "render_framelines", "Draw one vertical gridline per sampled frame."),
)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="easeviz")
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Animate every easing graph headlessly and print a per-graph summary.")
    run.add_argument("--config", type=Path, default=None, help="TOML file with [animation], [render], [screen], [loop].")
    run.add_argument("--duration", type=int, default=None, help="Animation duration in ms for every graph.")
    run.add_argument("--fps", type=int, default=None)
    run.add_argument(
        "--ticks",
        type=int,
        default=None,
        help="Max refresh ticks. Default: run until every graph completed.",
    )
    run.add_argument("--easing", action="append", default=None, help="Easing name; repeat to select several.")
    run.add_argument("--hover", type=_parse_point, default=None, help="Simulated pointer position X,Y in pixels.")
    run.add_argument("--log-level", default="WARNING")
    for flag, _, help_text in RENDER_TOGGLES:
        run.add_argument(f"--{flag}", dest=flag, action=argparse.BooleanOptionalAction, default=None, help=help_text)

    sub.add_parser("list", help="List the available easing functions.")
    args = parser.parse_args(argv)

    if args.command == "list":
        for name in EASING_FUNCTIONS:
            print(name)
        return

    if args.command == "run":
        logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
        config = _apply_overrides(load_config(args.config), args)
        graphs, result = run_headless(config, hover=args.hover)
        print(
            f"run complete: ticks={result.ticks_run} frames={result.frames_presented} "
            f"graphs={len(graphs)} stopped_by_completion={result.stopped_by_completion}"
        )
        for graph in graphs:
            state = graph.state
            points = 0 if state is None else len(state.points)
            readout = graph.readout or "-"
            print(f"{graph.name}: status={graph.status} points={points} readout={readout}")
        return

    raise RuntimeError(f"unsupported command: {args.command}")


def run_headless(config: VisualizerConfig, *, hover: tuple[float, float] | None = None):
    signal = RefreshSignal()
    controls = GraphControls(
        duration_ms=config.duration_ms,
        render=config.render,
        from_value=config.from_value,
        to_value=config.to_value,
    )
    easings = {name: EASING_FUNCTIONS[name] for name in config.easings}
    graphs = build_graphs(easings, controls, signal, width=config.width, height=config.height)
    if hover is not None:
        for graph in graphs:
            graph.dispatch_pointer(pointer_enter())
            graph.dispatch_pointer(pointer_move(hover[0], hover[1]))

    def _present() -> int:
        return sum(len(graph.front.drain_call_blits()) for graph in graphs)

    def _all_settled() -> bool:
        # A run cancelled by a render failure never completes.
        return all(graph.status in ("completed", "cancelled") for graph in graphs)

    loop = RefreshLoop(signal, target_fps=config.fps)
    try:
        result = loop.run(max_ticks=config.max_ticks, is_done=_all_settled, on_tick=_present)
    finally:
        _dispose(graphs)
    return graphs, result


def _dispose(graphs: list[GraphInstance]) -> None:
    for graph in graphs:
        graph.dispose()


def _apply_overrides(config: VisualizerConfig, args: argparse.Namespace) -> VisualizerConfig:
    changes: dict[str, object] = {}
    if args.duration is not None:
        changes["duration_ms"] = args.duration
    if args.fps is not None:
        changes["fps"] = args.fps
    if args.ticks is not None:
        changes["max_ticks"] = args.ticks
    if args.easing:
        changes["easings"] = tuple(args.easing)
    toggles = {field: getattr(args, flag) for flag, field, _ in RENDER_TOGGLES if getattr(args, flag) is not None}
    if toggles:
        changes["render"] = config.render.with_changes(**toggles)
    if not changes:
        return config
    return replace(config, **changes)


def _parse_point(value: str) -> tuple[float, float]:
    try:
        x_raw, y_raw = value.split(",", 1)
        return (float(x_raw), float(y_raw))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected X,Y but got {value!r}") from exc


if __name__ == "__main__":
    main()
