"""Pure math utilities - no external dependencies."""

from __future__ import annotations
import math


def clamp(v: float, a: float, b: float) -> float:
    """Clamp value v to range [a, b]."""
    return a if v < a else b if v > b else v


def is_finite(v: float) -> bool:
    """True for real numbers that are neither NaN nor infinite."""
    try:
        return math.isfinite(v)
    except TypeError:
        return False


def wrap_index(i: int, n: int) -> int:
    """Wrap index i into [0, n). Callers guarantee n > 0."""
    return (i % n + n) % n
