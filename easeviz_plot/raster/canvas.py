from __future__ import annotations

import numpy as np


RGBA = tuple[int, int, int, int]


def new_canvas(width: int, height: int, color: RGBA = (255, 255, 255, 255)) -> np.ndarray:
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be > 0")
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    fill(canvas, color)
    return canvas


def fill(dst: np.ndarray, color: RGBA) -> None:
    dst[:, :, 0] = color[0]
    dst[:, :, 1] = color[1]
    dst[:, :, 2] = color[2]
    dst[:, :, 3] = color[3]


def hex_color(value: str, alpha: int = 255) -> RGBA:
    """Parse `#rrggbb` (or a small set of named colors) into RGBA."""
    named = {
        "white": "#ffffff",
        "black": "#000000",
        "blue": "#0000ff",
    }
    raw = named.get(value.strip().lower(), value.strip())
    if not raw.startswith("#") or len(raw) != 7:
        raise ValueError(f"unsupported color: {value!r}")
    try:
        r = int(raw[1:3], 16)
        g = int(raw[3:5], 16)
        b = int(raw[5:7], 16)
    except ValueError as exc:
        raise ValueError(f"unsupported color: {value!r}") from exc
    return (r, g, b, alpha)


def draw_pixel(dst: np.ndarray, x: int, y: int, color: RGBA) -> None:
    if y < 0 or y >= dst.shape[0] or x < 0 or x >= dst.shape[1]:
        return
    if color[3] >= 255:
        dst[y, x, 0] = color[0]
        dst[y, x, 1] = color[1]
        dst[y, x, 2] = color[2]
        dst[y, x, 3] = 255
        return
    a = color[3] / 255.0
    inv = 1.0 - a
    current = dst[y, x, :3].astype(np.float32)
    dst[y, x, 0:3] = (np.asarray(color[0:3], dtype=np.float32) * a + current * inv).astype(np.uint8)
    dst[y, x, 3] = 255


def draw_vline(dst: np.ndarray, x: int, y0: int, y1: int, color: RGBA) -> None:
    if x < 0 or x >= dst.shape[1]:
        return
    ya = max(0, min(y0, y1))
    yb = min(dst.shape[0] - 1, max(y0, y1))
    if ya > yb:
        return
    segment = dst[ya : yb + 1, x]
    a = color[3] / 255.0
    inv = 1.0 - a
    segment[:, :3] = (np.asarray(color[0:3], dtype=np.float32) * a + segment[:, :3].astype(np.float32) * inv).astype(np.uint8)
    segment[:, 3] = 255
