"""Pure math utilities - no external dependencies."""

from __future__ import annotations
import math
from typing import Any, Tuple


def clamp(v: float, a: float, b: float) -> float:
    """Clamp value v to range [a, b]."""
    return a if v < a else b if v > b else v


def is_finite_number(v: Any) -> bool:
    """True for int/float values that are not NaN or infinite. bool is rejected."""
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return False
    return math.isfinite(v)


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two points."""
    return math.sqrt(distance_squared(x1, y1, x2, y2))


def distance_squared(x1: float, y1: float, x2: float, y2: float) -> float:
    """Squared distance between two points (avoids sqrt for comparisons)."""
    dx = x2 - x1
    dy = y2 - y1
    return dx * dx + dy * dy


def normalize(dx: float, dy: float) -> Tuple[float, float]:
    """Unit vector along (dx, dy). The zero vector is returned unchanged."""
    length = math.sqrt(dx * dx + dy * dy)
    if length == 0.0:
        return (0.0, 0.0)
    return (dx / length, dy / length)


def perpendicular(ux: float, uy: float) -> Tuple[float, float]:
    """Left-hand perpendicular of (ux, uy) in screen coordinates (y down)."""
    return (-uy, ux)


def offset(x: float, y: float, vx: float, vy: float, amount: float) -> Tuple[float, float]:
    """Move (x, y) by amount along vector (vx, vy)."""
    return (x + vx * amount, y + vy * amount)
