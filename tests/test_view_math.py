import pytest

from overmark.types import Point, PointerEvent, SurfaceRect
from overmark.view_math import (
    axis_scale, compute_fit_scale, fit_surface_rect, map_pointer_to_image_space, rect_contains,
)


def test_identity_mapping():
    rect = SurfaceRect(0, 0, 100, 80)
    assert map_pointer_to_image_space(PointerEvent(12.5, 40), rect, 100, 80) == Point(12.5, 40)


def test_uniform_scale_and_offset():
    # Displayed at half size: s = native / display = 2
    rect = SurfaceRect(10, 20, 50, 40)
    p = map_pointer_to_image_space(PointerEvent(35, 40), rect, 100, 80)
    assert p == Point(50, 40)


def test_independent_axis_scales():
    rect = SurfaceRect(0, 0, 100, 50)
    p = map_pointer_to_image_space(PointerEvent(10, 10), rect, 200, 50)
    assert p.x == pytest.approx(20)
    assert p.y == pytest.approx(10)


def test_zero_displayed_size_defaults_scale_to_one():
    rect = SurfaceRect(5, 5, 0, 0)
    assert map_pointer_to_image_space(PointerEvent(15, 25), rect, 100, 100) == Point(10, 20)
    assert axis_scale(100, 0) == 1.0


def test_outside_positions_are_not_clipped():
    rect = SurfaceRect(0, 0, 10, 10)
    assert map_pointer_to_image_space(PointerEvent(-5, 20), rect, 20, 20) == Point(-10, 40)


def test_fit_rect_centers_image():
    rect = fit_surface_rect(200, 100, 400, 400)
    assert rect == SurfaceRect(0, 100, 400, 200)


def test_fit_scale_handles_empty_image():
    assert compute_fit_scale(0, 0, 800, 600) == 1.0
    assert compute_fit_scale(100, 100, 800, 600, 0.5) == pytest.approx(3.0)


def test_rect_contains():
    rect = SurfaceRect(10, 10, 20, 20)
    assert rect_contains(rect, 10, 10)
    assert rect_contains(rect, 29.9, 29.9)
    assert not rect_contains(rect, 30, 15)
    assert not rect_contains(rect, 5, 15)
