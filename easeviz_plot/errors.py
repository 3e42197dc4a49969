from __future__ import annotations


class EasevizError(Exception):
    """Base error for the easing visualizer."""


class SurfaceUnavailableError(EasevizError):
    """Raised when a graph's drawing surface cannot be set up; scoped to that one graph."""


class ConfigError(EasevizError, ValueError):
    """Raised for missing or malformed shared controls at bootstrap."""
