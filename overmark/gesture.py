"""Gesture state machine - turns begin/move/end into annotation edits.

    IDLE --begin--> DRAWING --move--> DRAWING --end/cancel--> IDLE

Only one gesture runs at a time. The machine holds a position into the
annotation list, never a reference, and re-checks it on every move.
"""

from __future__ import annotations
from typing import Callable, Optional

from .annotations import with_end, with_point_appended
from .logging import log
from .state import EditorState
from .types import AnnotationKind, Arrow, Point, Stroke, ToolKind


class GestureMachine:
    """Drives one pointer gesture at a time against the editor state."""

    def __init__(self, state: EditorState,
                 release_capture: Optional[Callable[[int], None]] = None):
        self.state = state
        self._release_capture = release_capture

    @property
    def is_drawing(self) -> bool:
        return self.state.gesture.is_drawing

    @property
    def current_index(self) -> Optional[int]:
        return self.state.gesture.current_index

    def can_begin(self) -> bool:
        s = self.state
        return (s.tools.can_draw and
                s.image_ready and
                not s.gesture.is_drawing)

    def begin(self, point: Point, pointer_id: int = 1) -> bool:
        """Start a new annotation at point. Returns True if one was created."""
        if not self.can_begin():
            return False

        tools = self.state.tools
        if tools.tool is ToolKind.PEN:
            annotation = Stroke(color=tools.color, line_width=tools.line_width,
                                points=[point])
        else:
            annotation = Arrow(color=tools.color, line_width=tools.line_width,
                               start=point, end=point)

        # Gesture bookkeeping first so change listeners see the new index.
        self.state.gesture.start(len(self.state.annotations), pointer_id)
        index = self.state.annotations.append(annotation)
        log(f"[GESTURE] Begin {annotation.kind.value} #{index} at ({point.x:.1f}, {point.y:.1f})")
        return True

    def move(self, point: Point) -> bool:
        """Extend the current annotation. Stale indexes are ignored."""
        gesture = self.state.gesture
        if not gesture.is_drawing:
            return False

        annotations = self.state.annotations
        index = gesture.current_index
        current = annotations.get(index)
        if current is None:
            return False

        if current.kind is AnnotationKind.STROKE:
            updated = with_point_appended(current, point)
        elif current.kind is AnnotationKind.ARROW:
            updated = with_end(current, point)
        else:
            return False

        return annotations.replace(index, updated)

    def end(self) -> bool:
        """Finish the gesture on release. No point is added."""
        return self._stop("End")

    def cancel(self) -> bool:
        """Finish the gesture when the pointer leaves the surface.

        The annotation is kept at its last recorded position.
        """
        return self._stop("Cancel")

    def abandon_if_current(self, index: int) -> bool:
        """Stop drawing if `index` is the entry being drawn."""
        if self.is_drawing and self.current_index == index:
            return self._stop("Abandon")
        return False

    def _stop(self, reason: str) -> bool:
        gesture = self.state.gesture
        if not gesture.is_drawing:
            return False
        pointer_id = gesture.pointer_id
        index = gesture.current_index
        if gesture.captured and pointer_id is not None and self._release_capture:
            try:
                self._release_capture(pointer_id)
            except Exception as e:
                log(f"[GESTURE][WARN] Release capture failed: {e!r}")
        gesture.finish()
        log(f"[GESTURE] {reason} #{index}")
        return True
