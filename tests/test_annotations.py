import pytest

from overmark.annotations import (
    AnnotationList, clone_annotation, clone_annotations, with_end, with_point_appended,
)
from overmark.types import AnnotationKind, Arrow, Point, Stroke


def test_clone_stroke_is_independent():
    original = Stroke(color="#00ff00", line_width=4, points=[Point(1, 1), Point(2, 2)])
    copy = clone_annotation(original)
    assert copy == original

    original.points.append(Point(3, 3))
    original.points[0] = Point(9, 9)
    assert copy.points == [Point(1, 1), Point(2, 2)]

    copy.points.append(Point(7, 7))
    assert len(original.points) == 3


def test_clone_arrow_is_independent():
    original = Arrow(color="#0000ff", line_width=5, start=Point(0, 0), end=Point(10, 10))
    copy = clone_annotation(original)
    assert copy == original

    original.end = Point(50, 50)
    original.color = "#000000"
    assert copy.end == Point(10, 10)
    assert copy.color == "#0000ff"


def test_clone_reclamps_width():
    assert clone_annotation(Stroke(line_width=100, points=[Point(0, 0)])).line_width == 30
    assert clone_annotation(Arrow(line_width=float("nan"))).line_width == 3


def test_kind_tags():
    assert Stroke().kind is AnnotationKind.STROKE
    assert Arrow().kind is AnnotationKind.ARROW


def test_clone_annotations_preserves_order():
    items = [Stroke(points=[Point(0, 0)]), Arrow(start=Point(1, 1), end=Point(5, 5))]
    copies = clone_annotations(items)
    assert copies == items
    assert all(a is not b for a, b in zip(copies, items))


def test_functional_updates_leave_original():
    stroke = Stroke(points=[Point(0, 0)])
    longer = with_point_appended(stroke, Point(1, 1))
    assert stroke.points == [Point(0, 0)]
    assert longer.points == [Point(0, 0), Point(1, 1)]

    arrow = Arrow(start=Point(0, 0), end=Point(0, 0))
    moved = with_end(arrow, Point(4, 4))
    assert arrow.end == Point(0, 0)
    assert moved.start == Point(0, 0) and moved.end == Point(4, 4)


def test_undo_pops_exactly_one():
    a, b, c = (Stroke(points=[Point(i, i)]) for i in range(3))
    lst = AnnotationList([a, b, c])
    removed = lst.undo()
    assert removed is c
    assert lst.items() == [a, b]


def test_undo_on_empty_is_noop():
    lst = AnnotationList()
    assert lst.undo() is None
    assert len(lst) == 0
    assert lst.version == 0


def test_stale_index_access():
    lst = AnnotationList([Stroke(points=[Point(0, 0)])])
    assert lst.get(None) is None
    assert lst.get(1) is None
    assert lst.get(-1) is None
    assert lst.replace(3, Stroke()) is False
    assert lst.version == 0


def test_listeners_see_every_mutation():
    lst = AnnotationList()
    seen = []
    lst.subscribe(lambda l: seen.append(len(l)))
    lst.append(Stroke(points=[Point(0, 0)]))
    lst.append(Arrow())
    lst.replace(0, Stroke(points=[Point(1, 1)]))
    lst.undo()
    lst.clear()
    assert seen == [1, 2, 2, 1, 0]
    assert lst.version == 5


def test_unsubscribe():
    lst = AnnotationList()
    seen = []
    listener = seen.append
    lst.subscribe(listener)
    lst.unsubscribe(listener)
    lst.append(Stroke())
    assert seen == []


def test_reset_to_deep_copies():
    saved = [Stroke(points=[Point(0, 0)])]
    lst = AnnotationList()
    lst.reset_to(saved)
    saved[0].points.append(Point(5, 5))
    assert lst[0].points == [Point(0, 0)]


def test_snapshot_is_deep():
    lst = AnnotationList([Stroke(points=[Point(0, 0)])])
    snap = lst.snapshot()
    lst[0].points.append(Point(1, 1))
    assert snap[0].points == [Point(0, 0)]
