"""Annotation model - cloning and the ordered annotation list."""

from __future__ import annotations
from typing import Callable, Iterator, List, Optional, Sequence

from .geometry import clamp_line_width
from .types import Annotation, AnnotationKind, Arrow, Point, Stroke


def clone_annotation(annotation: Annotation) -> Annotation:
    """Deep-copy one annotation. Points are copied, widths re-clamped."""
    if annotation.kind is AnnotationKind.STROKE:
        return Stroke(
            color=annotation.color,
            line_width=clamp_line_width(annotation.line_width),
            points=[p.copy() for p in annotation.points],
        )
    if annotation.kind is AnnotationKind.ARROW:
        return Arrow(
            color=annotation.color,
            line_width=clamp_line_width(annotation.line_width),
            start=annotation.start.copy(),
            end=annotation.end.copy(),
        )
    raise TypeError(f"unknown annotation kind: {annotation.kind!r}")


def clone_annotations(annotations: Sequence[Annotation]) -> List[Annotation]:
    """Deep-copy a whole list, preserving order."""
    return [clone_annotation(a) for a in annotations]


def with_point_appended(stroke: Stroke, point: Point) -> Stroke:
    """New stroke equal to `stroke` plus one more point."""
    return Stroke(color=stroke.color, line_width=stroke.line_width,
                  points=[*stroke.points, point])


def with_end(arrow: Arrow, point: Point) -> Arrow:
    """New arrow equal to `arrow` with its end moved to `point`."""
    return Arrow(color=arrow.color, line_width=arrow.line_width,
                 start=arrow.start, end=point)


ChangeListener = Callable[["AnnotationList"], None]


class AnnotationList:
    """Ordered annotations for one displayed image.

    Entries are addressed by position only. The list grows by append, shrinks
    by undo (drop the last entry) or clear, and can be replaced wholesale when
    a saved snapshot is restored. Every mutation notifies the subscribers.
    """

    def __init__(self, annotations: Optional[Sequence[Annotation]] = None):
        self._items: List[Annotation] = list(annotations or [])
        self._listeners: List[ChangeListener] = []
        self._version: int = 0

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Annotation]:
        return iter(self._items)

    def __getitem__(self, index: int) -> Annotation:
        return self._items[index]

    @property
    def version(self) -> int:
        """Mutation counter."""
        return self._version

    @property
    def is_empty(self) -> bool:
        return not self._items

    def items(self) -> List[Annotation]:
        """Shallow copy of the entries in order."""
        return list(self._items)

    def is_valid_index(self, index: Optional[int]) -> bool:
        return index is not None and 0 <= index < len(self._items)

    def get(self, index: Optional[int]) -> Optional[Annotation]:
        """Entry at index, or None when the index is stale."""
        if not self.is_valid_index(index):
            return None
        return self._items[index]

    def subscribe(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def append(self, annotation: Annotation) -> int:
        """Add to the end. Returns the new entry's index."""
        self._items.append(annotation)
        self._changed()
        return len(self._items) - 1

    def replace(self, index: int, annotation: Annotation) -> bool:
        """Swap the entry at index. False (and no change) for a stale index."""
        if not self.is_valid_index(index):
            return False
        self._items[index] = annotation
        self._changed()
        return True

    def undo(self) -> Optional[Annotation]:
        """Remove and return the last entry; None when already empty."""
        if not self._items:
            return None
        removed = self._items.pop()
        self._changed()
        return removed

    def clear(self) -> None:
        self._items = []
        self._changed()

    def reset_to(self, annotations: Sequence[Annotation]) -> None:
        """Replace every entry with deep copies of `annotations`."""
        self._items = clone_annotations(annotations)
        self._changed()

    def snapshot(self) -> List[Annotation]:
        """Deep copy of the current entries."""
        return clone_annotations(self._items)

    def _changed(self) -> None:
        self._version += 1
        for listener in list(self._listeners):
            listener(self)
