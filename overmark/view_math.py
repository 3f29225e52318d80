"""Pure view calculation functions - no side effects, no state mutation."""

from __future__ import annotations

from .types import Point, PointerEvent, SurfaceRect


def axis_scale(native: float, displayed: float) -> float:
    """Native pixels per displayed unit along one axis (1.0 if not displayed)."""
    if not displayed:
        return 1.0
    return native / displayed


def map_pointer_to_image_space(
    event: PointerEvent,
    rect: SurfaceRect,
    native_w: float,
    native_h: float
) -> Point:
    """Convert a client-space pointer position to image pixel coordinates.

    The surface may be stretched differently along each axis, so X and Y get
    independent scale factors.

    Args:
        event: Pointer sample in client space.
        rect: On-screen bounding box of the interaction surface.
        native_w: Surface width in image pixels.
        native_h: Surface height in image pixels.

    Returns:
        Point in image pixel space. Positions outside the surface map outside
        the image; they are not clipped.
    """
    sx = axis_scale(native_w, rect.width)
    sy = axis_scale(native_h, rect.height)
    return Point(
        (event.client_x - rect.left) * sx,
        (event.client_y - rect.top) * sy,
    )


def compute_fit_scale(
    img_w: int,
    img_h: int,
    screen_w: int,
    screen_h: int,
    frac: float = 1.0
) -> float:
    """Compute scale to fit image within screen bounds.

    Args:
        img_w: Image width in pixels.
        img_h: Image height in pixels.
        screen_w: Screen width in pixels.
        screen_h: Screen height in pixels.
        frac: Fraction of screen to use (0.0-1.0).

    Returns:
        Scale factor to fit image.
    """
    if img_w == 0 or img_h == 0:
        return 1.0
    return min(screen_w * frac / img_w, screen_h * frac / img_h)


def fit_surface_rect(
    img_w: int,
    img_h: int,
    screen_w: int,
    screen_h: int,
    frac: float = 1.0
) -> SurfaceRect:
    """Centered on-screen rectangle for an image scaled to fit the screen."""
    scale = compute_fit_scale(img_w, img_h, screen_w, screen_h, frac)
    w = img_w * scale
    h = img_h * scale
    return SurfaceRect(
        left=(screen_w - w) / 2.0,
        top=(screen_h - h) / 2.0,
        width=w,
        height=h,
    )


def rect_contains(rect: SurfaceRect, x: float, y: float) -> bool:
    """Check whether a client-space position lies on the surface."""
    return (rect.left <= x < rect.left + rect.width and
            rect.top <= y < rect.top + rect.height)
