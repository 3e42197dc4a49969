"""Classic tweening curves.

Every function maps ``(elapsed, start, delta, duration)`` to the interpolated
value: ``start`` at ``elapsed == 0`` and ``start + delta`` at
``elapsed == duration``. Elastic and back easings overshoot that range.
"""
from __future__ import annotations

import math
from typing import Callable

EasingFunction = Callable[[float, float, float, float], float]

BACK_OVERSHOOT = 1.70158


def ease_in_quad(t: float, b: float, c: float, d: float) -> float:
    t /= d
    return c * t * t + b


def ease_out_quad(t: float, b: float, c: float, d: float) -> float:
    t /= d
    return -c * t * (t - 2) + b


def ease_in_out_quad(t: float, b: float, c: float, d: float) -> float:
    t /= d / 2
    if t < 1:
        return c / 2 * t * t + b
    t -= 1
    return -c / 2 * (t * (t - 2) - 1) + b


def ease_in_cubic(t: float, b: float, c: float, d: float) -> float:
    t /= d
    return c * t * t * t + b


def ease_out_cubic(t: float, b: float, c: float, d: float) -> float:
    t = t / d - 1
    return c * (t * t * t + 1) + b


def ease_in_out_cubic(t: float, b: float, c: float, d: float) -> float:
    t /= d / 2
    if t < 1:
        return c / 2 * t * t * t + b
    t -= 2
    return c / 2 * (t * t * t + 2) + b


def ease_in_quart(t: float, b: float, c: float, d: float) -> float:
    t /= d
    return c * t * t * t * t + b


def ease_out_quart(t: float, b: float, c: float, d: float) -> float:
    t = t / d - 1
    return -c * (t * t * t * t - 1) + b


def ease_in_out_quart(t: float, b: float, c: float, d: float) -> float:
    t /= d / 2
    if t < 1:
        return c / 2 * t * t * t * t + b
    t -= 2
    return -c / 2 * (t * t * t * t - 2) + b


def ease_in_quint(t: float, b: float, c: float, d: float) -> float:
    t /= d
    return c * t * t * t * t * t + b


def ease_out_quint(t: float, b: float, c: float, d: float) -> float:
    t = t / d - 1
    return c * (t * t * t * t * t + 1) + b


def ease_in_out_quint(t: float, b: float, c: float, d: float) -> float:
    t /= d / 2
    if t < 1:
        return c / 2 * t * t * t * t * t + b
    t -= 2
    return c / 2 * (t * t * t * t * t + 2) + b


def ease_in_sine(t: float, b: float, c: float, d: float) -> float:
    return -c * math.cos(t / d * (math.pi / 2)) + c + b


def ease_out_sine(t: float, b: float, c: float, d: float) -> float:
    return c * math.sin(t / d * (math.pi / 2)) + b


def ease_in_out_sine(t: float, b: float, c: float, d: float) -> float:
    return -c / 2 * (math.cos(math.pi * t / d) - 1) + b


def ease_in_expo(t: float, b: float, c: float, d: float) -> float:
    if t == 0:
        return b
    return c * math.pow(2, 10 * (t / d - 1)) + b


def ease_out_expo(t: float, b: float, c: float, d: float) -> float:
    if t == d:
        return b + c
    return c * (-math.pow(2, -10 * t / d) + 1) + b


def ease_in_out_expo(t: float, b: float, c: float, d: float) -> float:
    if t == 0:
        return b
    if t == d:
        return b + c
    t /= d / 2
    if t < 1:
        return c / 2 * math.pow(2, 10 * (t - 1)) + b
    t -= 1
    return c / 2 * (-math.pow(2, -10 * t) + 2) + b


def ease_in_circ(t: float, b: float, c: float, d: float) -> float:
    t /= d
    return -c * (math.sqrt(max(0.0, 1 - t * t)) - 1) + b


def ease_out_circ(t: float, b: float, c: float, d: float) -> float:
    t = t / d - 1
    return c * math.sqrt(max(0.0, 1 - t * t)) + b


def ease_in_out_circ(t: float, b: float, c: float, d: float) -> float:
    t /= d / 2
    if t < 1:
        return -c / 2 * (math.sqrt(max(0.0, 1 - t * t)) - 1) + b
    t -= 2
    return c / 2 * (math.sqrt(max(0.0, 1 - t * t)) + 1) + b


def _elastic_phase(c: float, period: float) -> tuple[float, float]:
    # Amplitude equals delta, so the phase shift reduces to period / 4 (asin(1) / 2pi).
    amplitude = c
    if amplitude == 0 or amplitude < abs(c):
        return c, period / 4
    return amplitude, period / (2 * math.pi) * math.asin(c / amplitude)


def ease_in_elastic(t: float, b: float, c: float, d: float) -> float:
    if t == 0:
        return b
    t /= d
    if t == 1:
        return b + c
    period = d * 0.3
    a, s = _elastic_phase(c, period)
    t -= 1
    return -(a * math.pow(2, 10 * t) * math.sin((t * d - s) * (2 * math.pi) / period)) + b


def ease_out_elastic(t: float, b: float, c: float, d: float) -> float:
    if t == 0:
        return b
    t /= d
    if t == 1:
        return b + c
    period = d * 0.3
    a, s = _elastic_phase(c, period)
    return a * math.pow(2, -10 * t) * math.sin((t * d - s) * (2 * math.pi) / period) + c + b


def ease_in_out_elastic(t: float, b: float, c: float, d: float) -> float:
    if t == 0:
        return b
    t /= d / 2
    if t == 2:
        return b + c
    period = d * (0.3 * 1.5)
    a, s = _elastic_phase(c, period)
    t -= 1
    if t < 0:
        return -0.5 * (a * math.pow(2, 10 * t) * math.sin((t * d - s) * (2 * math.pi) / period)) + b
    return a * math.pow(2, -10 * t) * math.sin((t * d - s) * (2 * math.pi) / period) * 0.5 + c + b


def ease_in_back(t: float, b: float, c: float, d: float, s: float = BACK_OVERSHOOT) -> float:
    t /= d
    return c * t * t * ((s + 1) * t - s) + b


def ease_out_back(t: float, b: float, c: float, d: float, s: float = BACK_OVERSHOOT) -> float:
    t = t / d - 1
    return c * (t * t * ((s + 1) * t + s) + 1) + b


def ease_in_out_back(t: float, b: float, c: float, d: float, s: float = BACK_OVERSHOOT) -> float:
    s *= 1.525
    t /= d / 2
    if t < 1:
        return c / 2 * (t * t * ((s + 1) * t - s)) + b
    t -= 2
    return c / 2 * (t * t * ((s + 1) * t + s) + 2) + b


def ease_out_bounce(t: float, b: float, c: float, d: float) -> float:
    t /= d
    if t < 1 / 2.75:
        return c * (7.5625 * t * t) + b
    if t < 2 / 2.75:
        t -= 1.5 / 2.75
        return c * (7.5625 * t * t + 0.75) + b
    if t < 2.5 / 2.75:
        t -= 2.25 / 2.75
        return c * (7.5625 * t * t + 0.9375) + b
    t -= 2.625 / 2.75
    return c * (7.5625 * t * t + 0.984375) + b


def ease_in_bounce(t: float, b: float, c: float, d: float) -> float:
    return c - ease_out_bounce(d - t, 0, c, d) + b


def ease_in_out_bounce(t: float, b: float, c: float, d: float) -> float:
    if t < d / 2:
        return ease_in_bounce(t * 2, 0, c, d) * 0.5 + b
    return ease_out_bounce(t * 2 - d, 0, c, d) * 0.5 + c * 0.5 + b


EASING_FUNCTIONS: dict[str, EasingFunction] = {
    "easeInQuad": ease_in_quad,
    "easeOutQuad": ease_out_quad,
    "easeInOutQuad": ease_in_out_quad,
    "easeInCubic": ease_in_cubic,
    "easeOutCubic": ease_out_cubic,
    "easeInOutCubic": ease_in_out_cubic,
    "easeInQuart": ease_in_quart,
    "easeOutQuart": ease_out_quart,
    "easeInOutQuart": ease_in_out_quart,
    "easeInQuint": ease_in_quint,
    "easeOutQuint": ease_out_quint,
    "easeInOutQuint": ease_in_out_quint,
    "easeInSine": ease_in_sine,
    "easeOutSine": ease_out_sine,
    "easeInOutSine": ease_in_out_sine,
    "easeInExpo": ease_in_expo,
    "easeOutExpo": ease_out_expo,
    "easeInOutExpo": ease_in_out_expo,
    "easeInCirc": ease_in_circ,
    "easeOutCirc": ease_out_circ,
    "easeInOutCirc": ease_in_out_circ,
    "easeInElastic": ease_in_elastic,
    "easeOutElastic": ease_out_elastic,
    "easeInOutElastic": ease_in_out_elastic,
    "easeInBack": ease_in_back,
    "easeOutBack": ease_out_back,
    "easeInOutBack": ease_in_out_back,
    "easeInBounce": ease_in_bounce,
    "easeOutBounce": ease_out_bounce,
    "easeInOutBounce": ease_in_out_bounce,
}


def resolve_easing(name: str) -> EasingFunction:
    try:
        return EASING_FUNCTIONS[name]
    except KeyError as exc:
        raise ValueError(f"unknown easing function: {name}") from exc
