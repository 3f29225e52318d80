"""Geometry kernel - width clamping and arrow silhouette construction.

Pure functions, no state. Everything here works in image pixel space.
"""

from __future__ import annotations
from typing import Any, Optional

from .config import (
    DEFAULT_LINE_WIDTH, MIN_LINE_WIDTH, MAX_LINE_WIDTH,
    ARROW_MIN_LENGTH, ARROW_MIN_SIZE_MULTIPLIER,
    ARROW_BASE_WIDTH_FRAC, ARROW_BASE_WIDTH_MIN, ARROW_BASE_WIDTH_MAX,
    ARROW_SHAFT_WIDTH_FACTOR,
    ARROW_HEAD_LENGTH_FRAC, ARROW_HEAD_LENGTH_MIN, ARROW_HEAD_LENGTH_MAX,
    ARROW_HEAD_WIDTH_FACTOR,
    ARROW_OUTLINE_FRAC, ARROW_OUTLINE_MIN,
)
from .math_utils import clamp, is_finite_number, distance, normalize, perpendicular, offset
from .types import ArrowPolygon, Point


def clamp_line_width(value: Any) -> float:
    """Coerce any value to a usable line width.

    Finite numbers are clamped to [MIN_LINE_WIDTH, MAX_LINE_WIDTH]; anything
    else (NaN, infinity, strings, None) becomes DEFAULT_LINE_WIDTH.
    """
    if not is_finite_number(value):
        return DEFAULT_LINE_WIDTH
    return clamp(value, MIN_LINE_WIDTH, MAX_LINE_WIDTH)


def arrow_outline_width(line_width: Any) -> float:
    """Width of the edge-sharpening outline drawn around an arrow."""
    return max(ARROW_OUTLINE_MIN, clamp_line_width(line_width) * ARROW_OUTLINE_FRAC)


def arrow_polygon(start: Point, end: Point, line_width: Any) -> Optional[ArrowPolygon]:
    """Build the arrow silhouette for the segment start -> end.

    The shaft starts base_width wide at the tail, widens to shaft_width where
    the head begins, and the head flares to head_width before closing at the
    tip (end). Sizes scale with the segment length within fixed bounds, then
    with the line width.

    Args:
        start: Tail point.
        end: Tip point.
        line_width: Stroke width; clamped here.

    Returns:
        ArrowPolygon, or None when the segment is shorter than ARROW_MIN_LENGTH.
    """
    width = clamp_line_width(line_width)
    length = distance(start.x, start.y, end.x, end.y)
    if length < ARROW_MIN_LENGTH:
        return None

    ux, uy = normalize(end.x - start.x, end.y - start.y)
    px, py = perpendicular(ux, uy)

    size_multiplier = max(width / DEFAULT_LINE_WIDTH, ARROW_MIN_SIZE_MULTIPLIER)
    base_width = clamp(length * ARROW_BASE_WIDTH_FRAC,
                       ARROW_BASE_WIDTH_MIN, ARROW_BASE_WIDTH_MAX) * size_multiplier
    shaft_width = base_width * ARROW_SHAFT_WIDTH_FACTOR
    head_length = clamp(length * ARROW_HEAD_LENGTH_FRAC,
                        ARROW_HEAD_LENGTH_MIN, ARROW_HEAD_LENGTH_MAX) * size_multiplier
    head_width = shaft_width * ARROW_HEAD_WIDTH_FACTOR

    # Head base sits head_length back from the tip. For short arrows it can
    # fall behind the tail; the silhouette is still well formed.
    hbx, hby = offset(end.x, end.y, ux, uy, -head_length)

    def side(x: float, y: float, half: float) -> Point:
        return Point(*offset(x, y, px, py, half))

    return ArrowPolygon(
        tail_left=side(start.x, start.y, base_width / 2),
        tail_right=side(start.x, start.y, -base_width / 2),
        shaft_left=side(hbx, hby, shaft_width / 2),
        shaft_right=side(hbx, hby, -shaft_width / 2),
        head_left=side(hbx, hby, head_width / 2),
        head_right=side(hbx, hby, -head_width / 2),
        tip=Point(end.x, end.y),
    )
