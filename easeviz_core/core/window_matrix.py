from __future__ import annotations

from collections import deque
from dataclasses import dataclass
import logging
import time
from typing import TypeAlias

import numpy as np
import torch


LOGGER = logging.getLogger(__name__)
MAGENTA = torch.tensor([255, 0, 255, 255], dtype=torch.uint8)

TensorLike: TypeAlias = torch.Tensor


@dataclass(frozen=True)
class FullRewrite:
    tensor_h_w_4: TensorLike


@dataclass(frozen=True)
class ReplaceRect:
    x: int
    y: int
    width: int
    height: int
    rect_h_w_4: TensorLike


WriteOp: TypeAlias = FullRewrite | ReplaceRect


@dataclass(frozen=True)
class WriteBatch:
    operations: list[WriteOp]


@dataclass(frozen=True)
class CallBlitEvent:
    event_id: int
    revision: int
    ts_ns: int


class WindowMatrix:
    """Presented RGBA255 surface; a write batch is staged in full and committed atomically."""

    def __init__(self, height: int, width: int, background: tuple[int, int, int, int] = (255, 255, 255, 255)) -> None:
        if height <= 0 or width <= 0:
            raise ValueError("height and width must be > 0")
        self.height = height
        self.width = width
        self._events: deque[CallBlitEvent] = deque()
        self._next_event_id = 1
        self._revision = 0
        bg = torch.tensor(background, dtype=torch.uint8).view(1, 1, 4)
        self._matrix = bg.expand(height, width, 4).clone()

    @property
    def revision(self) -> int:
        return self._revision

    def read_snapshot(self) -> torch.Tensor:
        return self._matrix.clone()

    def read_numpy(self) -> np.ndarray:
        return self._matrix.numpy().copy()

    def submit_write_batch(self, batch: WriteBatch) -> CallBlitEvent:
        if not batch.operations:
            raise ValueError("write batch must include at least one operation")

        staged = self._matrix.clone()
        offending_pixels = 0
        for op in batch.operations:
            staged, op_offending = self._apply_operation(staged, op)
            offending_pixels += op_offending

        if offending_pixels > 0:
            LOGGER.warning(
                "WindowMatrix write batch sanitized invalid RGBA channels; offending_pixels=%d",
                offending_pixels,
            )

        self._matrix = staged
        self._revision += 1
        event = CallBlitEvent(
            event_id=self._next_event_id,
            revision=self._revision,
            ts_ns=time.time_ns(),
        )
        self._next_event_id += 1
        self._events.append(event)
        return event

    def submit_canvas(self, canvas_h_w_4: np.ndarray) -> CallBlitEvent:
        """Commit a full numpy RGBA canvas as the new presented frame."""
        return self.submit_write_batch(WriteBatch([FullRewrite(torch.from_numpy(np.ascontiguousarray(canvas_h_w_4)))]))

    def submit_rect(self, x: int, y: int, patch_h_w_4: np.ndarray) -> CallBlitEvent:
        """Commit a numpy RGBA patch over the rect at `(x, y)`; the rest of the frame is kept."""
        height, width = patch_h_w_4.shape[:2]
        rect = ReplaceRect(
            x=x,
            y=y,
            width=width,
            height=height,
            rect_h_w_4=torch.from_numpy(np.ascontiguousarray(patch_h_w_4)),
        )
        return self.submit_write_batch(WriteBatch([rect]))

    def drain_call_blits(self) -> list[CallBlitEvent]:
        out = list(self._events)
        self._events.clear()
        return out

    def pending_call_blit_count(self) -> int:
        return len(self._events)

    def _apply_operation(self, matrix: torch.Tensor, op: WriteOp) -> tuple[torch.Tensor, int]:
        if isinstance(op, FullRewrite):
            full, offending = _sanitize_rgba_tensor(op.tensor_h_w_4, (self.height, self.width, 4))
            return full, offending
        if isinstance(op, ReplaceRect):
            _validate_rect(op.x, op.y, op.width, op.height, self.width, self.height)
            patch, offending = _sanitize_rgba_tensor(op.rect_h_w_4, (op.height, op.width, 4))
            matrix[op.y : op.y + op.height, op.x : op.x + op.width, :] = patch
            return matrix, offending
        raise TypeError(f"Unsupported write op: {type(op)!r}")


def _validate_rect(x: int, y: int, width: int, height: int, matrix_width: int, matrix_height: int) -> None:
    if width <= 0 or height <= 0:
        raise ValueError("rect width/height must be > 0")
    if x < 0 or y < 0:
        raise ValueError("rect x/y must be >= 0")
    if x + width > matrix_width or y + height > matrix_height:
        raise ValueError("rect exceeds matrix bounds")


def _coerce_numeric(value: torch.Tensor, expected_shape: tuple[int, ...], label: str) -> torch.Tensor:
    if not torch.is_tensor(value):
        raise ValueError(f"{label} must be a torch.Tensor")
    if tuple(value.shape) != expected_shape:
        raise ValueError(f"{label} has invalid shape: {tuple(value.shape)} expected {expected_shape}")
    if value.dtype == torch.uint8:
        return value
    if value.dtype == torch.bool or value.is_floating_point() or value.dtype in (
        torch.int8,
        torch.int16,
        torch.int32,
        torch.int64,
    ):
        return value.to(torch.float32)
    raise ValueError(f"{label} must be a numeric tensor, got {value.dtype}")


def _sanitize_rgba_tensor(value: torch.Tensor, expected_shape: tuple[int, ...]) -> tuple[torch.Tensor, int]:
    raw = _coerce_numeric(value, expected_shape, "rgba tensor")
    if raw.dtype == torch.uint8:
        # Already in range; clone so the caller's buffer stays independent of the presented frame.
        return raw.clone(), 0
    invalid = ~torch.isfinite(raw) | (raw < 0) | (raw > 255)
    invalid_pixels = int(torch.any(invalid, dim=-1).sum().item())
    clamped = torch.clamp(torch.nan_to_num(raw, nan=0.0), 0, 255).to(torch.uint8)
    if invalid_pixels > 0:
        pixel_mask = torch.any(invalid, dim=-1)
        clamped[pixel_mask] = MAGENTA
    return clamped, invalid_pixels
