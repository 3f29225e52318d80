"""Renderer - turns an annotation list into pixels.

Rendering only reads the annotation list and writes to a Pillow surface it is
handed. The output of render() with clear=True depends on nothing but the
list, so redrawing is idempotent.
"""

from __future__ import annotations
import base64
import io
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Tuple

from PIL import Image, ImageColor, ImageDraw

from .config import (
    DEFAULT_COLOR, STROKE_DOT_EPSILON, SURFACE_CLEAR_RGBA,
    EXPORT_FORMAT, EXPORT_MIME,
)
from .geometry import arrow_outline_width, arrow_polygon, clamp_line_width
from .logging import log
from .types import Annotation, AnnotationKind, Arrow, ImageSize, Stroke

RGBA = Tuple[int, int, int, int]


def parse_color(color: Any) -> RGBA:
    """Resolve a CSS-style color string to RGBA, falling back to the default."""
    try:
        return ImageColor.getcolor(color, "RGBA")
    except (ValueError, TypeError, AttributeError):
        log(f"[RENDER][WARN] Bad color {color!r}, using {DEFAULT_COLOR}")
        return ImageColor.getcolor(DEFAULT_COLOR, "RGBA")


def _pen_width(width: float) -> int:
    """Pillow draws integral line widths."""
    return max(1, int(round(width)))


def _draw_stroke(draw: ImageDraw.ImageDraw, stroke: Stroke) -> None:
    if not stroke.points:
        return
    width = clamp_line_width(stroke.line_width)
    color = parse_color(stroke.color)

    pts = [p.as_tuple() for p in stroke.points]
    if len(pts) == 1:
        x, y = pts[0]
        pts.append((x + STROKE_DOT_EPSILON, y + STROKE_DOT_EPSILON))

    draw.line(pts, fill=color, width=_pen_width(width), joint="curve")

    # Round caps
    r = width / 2.0
    for x, y in (pts[0], pts[-1]):
        draw.ellipse((x - r, y - r, x + r, y + r), fill=color)


def _arrow_fill(draw: ImageDraw.ImageDraw, arrow: Arrow) -> None:
    poly = arrow_polygon(arrow.start, arrow.end, arrow.line_width)
    if poly is not None:
        draw.polygon(poly.outline(), fill=parse_color(arrow.color))


def _arrow_edge(draw: ImageDraw.ImageDraw, arrow: Arrow) -> None:
    """Outline centred on the silhouette edge, so it widens the arrow."""
    poly = arrow_polygon(arrow.start, arrow.end, arrow.line_width)
    if poly is None:
        return
    pts = poly.outline()
    pts.append(pts[0])
    draw.line(pts, fill=parse_color(arrow.color),
              width=_pen_width(arrow_outline_width(arrow.line_width)), joint="curve")


def _passes(annotation: Annotation) -> List[Callable[[ImageDraw.ImageDraw, Any], None]]:
    """Paint passes for one entry; each is blended separately, in order."""
    if annotation.kind is AnnotationKind.STROKE:
        return [_draw_stroke]
    if annotation.kind is AnnotationKind.ARROW:
        return [_arrow_fill, _arrow_edge]
    return []


def _composite_pass(surface: Image.Image, paint, annotation: Annotation) -> None:
    layer = Image.new("RGBA", surface.size, SURFACE_CLEAR_RGBA)
    paint(ImageDraw.Draw(layer), annotation)
    box = layer.getbbox()
    if box is None:
        return
    surface.alpha_composite(layer.crop(box), dest=box[:2])


def render(surface: Image.Image, annotations: Sequence[Annotation], clear: bool = True) -> None:
    """Draw annotations onto an RGBA surface in list order.

    Each entry is painted on its own transparent layer and alpha-blended over
    everything drawn before it.

    Args:
        surface: RGBA image to draw on; modified in place.
        annotations: Entries to draw. Later entries land on top.
        clear: Wipe the whole surface to transparent first. With clear=False
            the annotations are composited over what is already there.
    """
    if clear:
        surface.paste(SURFACE_CLEAR_RGBA, (0, 0, surface.width, surface.height))

    for annotation in annotations:
        for paint in _passes(annotation):
            _composite_pass(surface, paint, annotation)


def encode_png_data_url(image: Image.Image) -> str:
    """Serialize to a PNG data URL. Returns "" if encoding fails."""
    try:
        buf = io.BytesIO()
        image.save(buf, format=EXPORT_FORMAT)
    except (OSError, ValueError) as e:
        log(f"[RENDER][ERR] PNG encoding failed: {e!r}")
        return ""
    encoded = base64.b64encode(buf.getvalue()).decode("ascii")
    return f"data:{EXPORT_MIME};base64,{encoded}"


def decode_png_data_url(data_url: str) -> Optional[Image.Image]:
    """Inverse of encode_png_data_url. None for empty or malformed input."""
    if not data_url or "," not in data_url:
        return None
    try:
        raw = base64.b64decode(data_url.split(",", 1)[1], validate=True)
        img = Image.open(io.BytesIO(raw))
        img.load()
        return img
    except (OSError, ValueError) as e:
        log(f"[RENDER][ERR] Bad data URL: {e!r}")
        return None


def compose_flattened(
    source: Optional[Image.Image],
    width: int,
    height: int,
    annotations: Sequence[Annotation]
) -> Optional[Image.Image]:
    """Source image with annotations drawn on top, at native size.

    Returns None when there is nothing to flatten: no source, unknown
    dimensions, or no annotations.
    """
    if source is None or width <= 0 or height <= 0:
        return None
    if not annotations:
        return None

    composite = Image.new("RGBA", (width, height), SURFACE_CLEAR_RGBA)
    base = source.convert("RGBA")
    if base.size != (width, height):
        base = base.resize((width, height))
    composite.paste(base, (0, 0))
    render(composite, annotations, clear=False)
    return composite


def render_flattened(
    source: Optional[Image.Image],
    width: int,
    height: int,
    annotations: Sequence[Annotation]
) -> str:
    """Flatten annotations over the source and encode as a PNG data URL.

    Returns "" when there is nothing to flatten or encoding fails.
    """
    composite = compose_flattened(source, width, height, annotations)
    if composite is None:
        return ""
    return encode_png_data_url(composite)


@dataclass
class Renderer:
    """
    Owns the live interaction surface for one editor.

    Usage:
        renderer = Renderer()
        renderer.resize(ImageSize(640, 480))
        renderer.redraw(annotations)
        renderer.surface  # RGBA overlay, same size as the image
    """
    surface: Optional[Image.Image] = None

    @property
    def size(self) -> ImageSize:
        if self.surface is None:
            return ImageSize()
        return ImageSize(self.surface.width, self.surface.height)

    def resize(self, size: ImageSize) -> None:
        """Allocate a fresh, cleared surface. Unknown sizes drop the surface."""
        if not size.is_known:
            self.surface = None
            return
        if self.surface is not None and self.size == size:
            self.surface.paste(SURFACE_CLEAR_RGBA, (0, 0, size.width, size.height))
            return
        self.surface = Image.new("RGBA", size.as_tuple(), SURFACE_CLEAR_RGBA)
        log(f"[RENDER] Surface {size.width}x{size.height}")

    def redraw(self, annotations: Sequence[Annotation]) -> bool:
        """Repaint the live surface. False when there is no surface yet."""
        if self.surface is None:
            return False
        render(self.surface, annotations, clear=True)
        return True
