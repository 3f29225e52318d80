"""Annotation editor - one displayed image plus its annotation layer.

Wires the pieces together:
    pointer event -> view_math -> GestureMachine -> AnnotationList
    AnnotationList change -> Renderer.redraw (live surface)
    save/delete/cancel/undo -> CommitController
"""

from __future__ import annotations
from typing import Any, Callable, List, Optional

from PIL import Image

from .annotations import AnnotationList
from .clipboard import copy_text_to_clipboard
from .commit import ClipboardSink, CommitController, CommitListener
from .gesture import GestureMachine
from .logging import log
from .renderer import Renderer
from .state import EditorState
from .types import Annotation, CommitEvent, Point, PointerEvent, SurfaceRect, ToolKind
from .view_math import map_pointer_to_image_space


class AnnotationEditor:
    """
    Annotation layer bound to one displayed image.

    Usage:
        editor = AnnotationEditor()
        editor.load_image(Image.open("photo.png"))
        editor.select_tool(ToolKind.PEN)          # enables editing
        editor.pointer_down(PointerEvent(10, 10), rect)
        editor.pointer_move(PointerEvent(40, 25), rect)
        editor.pointer_up()
        event = editor.save()                      # event.payload is a PNG data URL
    """

    def __init__(
        self,
        clipboard: Optional[ClipboardSink] = copy_text_to_clipboard,
        release_capture: Optional[Callable[[int], None]] = None,
    ):
        self.state = EditorState()
        self.renderer = Renderer()
        self.gesture = GestureMachine(self.state, release_capture=release_capture)
        self.commits = CommitController(self.state, gesture=self.gesture, clipboard=clipboard)
        self.state.annotations.subscribe(self._on_annotations_changed)

    # ═══════════════════════════════════════════════════════════════════════
    # Accessors
    # ═══════════════════════════════════════════════════════════════════════

    @property
    def annotations(self) -> AnnotationList:
        return self.state.annotations

    @property
    def surface(self) -> Optional[Image.Image]:
        """Live RGBA overlay, sized to the image."""
        return self.renderer.surface

    @property
    def last_event(self) -> Optional[CommitEvent]:
        return self.commits.last_event

    @property
    def is_drawing(self) -> bool:
        return self.gesture.is_drawing

    def subscribe(self, listener: CommitListener) -> None:
        """Register for save/delete/cancel notifications."""
        self.commits.subscribe(listener)

    # ═══════════════════════════════════════════════════════════════════════
    # Image source
    # ═══════════════════════════════════════════════════════════════════════

    def load_image(self, image: Optional[Image.Image], source: str = "") -> None:
        """Show a new image. All annotations and the snapshot are dropped."""
        self.gesture.cancel()
        self.state.image.set_image(image, source)
        self.commits.reset()
        self.renderer.resize(self.state.image.size)
        self.state.annotations.clear()
        size = self.state.image.size
        log(f"[EDITOR] Image {source or '<memory>'} {size.width}x{size.height}")

    def load_image_file(self, path: str) -> None:
        """Open an image file with Pillow and show it.

        Raises OSError if Pillow cannot read the file; nothing changes then.
        """
        with Image.open(path) as img:
            img.load()
            image = img.copy()
        self.load_image(image, source=path)

    def clear_image(self) -> None:
        self.load_image(None)

    # ═══════════════════════════════════════════════════════════════════════
    # Tools
    # ═══════════════════════════════════════════════════════════════════════

    def select_tool(self, tool: ToolKind) -> None:
        self.state.tools.select(tool)
        log(f"[EDITOR] Tool={self.state.tools.tool.value} enabled={self.state.tools.enabled}")

    def set_color(self, color: str) -> None:
        self.state.tools.set_color(color)

    def set_line_width(self, value: Any) -> float:
        return self.state.tools.set_line_width(value)

    # ═══════════════════════════════════════════════════════════════════════
    # Pointer input
    # ═══════════════════════════════════════════════════════════════════════

    def to_image_space(self, event: PointerEvent, rect: SurfaceRect) -> Point:
        """Map a client-space event through the live surface's native size."""
        size = self.renderer.size
        return map_pointer_to_image_space(event, rect, size.width, size.height)

    def pointer_down(self, event: PointerEvent, rect: SurfaceRect) -> bool:
        if not self.gesture.can_begin():
            return False
        return self.gesture.begin(self.to_image_space(event, rect), event.pointer_id)

    def pointer_move(self, event: PointerEvent, rect: SurfaceRect) -> bool:
        if not self._owns_pointer(event):
            return False
        return self.gesture.move(self.to_image_space(event, rect))

    def pointer_up(self, event: Optional[PointerEvent] = None) -> bool:
        if event is not None and not self._owns_pointer(event):
            return False
        return self.gesture.end()

    def pointer_leave(self, event: Optional[PointerEvent] = None) -> bool:
        if event is not None and not self._owns_pointer(event):
            return False
        return self.gesture.cancel()

    def _owns_pointer(self, event: PointerEvent) -> bool:
        gesture = self.state.gesture
        return gesture.is_drawing and gesture.pointer_id == event.pointer_id

    # ═══════════════════════════════════════════════════════════════════════
    # Commit actions
    # ═══════════════════════════════════════════════════════════════════════

    def save(self) -> CommitEvent:
        return self.commits.save()

    def delete(self) -> CommitEvent:
        return self.commits.delete()

    def cancel(self) -> CommitEvent:
        return self.commits.cancel()

    def undo(self) -> Optional[Annotation]:
        return self.commits.undo()

    def saved_annotations(self) -> List[Annotation]:
        return self.commits.saved

    def _on_annotations_changed(self, annotations: AnnotationList) -> None:
        self.renderer.redraw(annotations.items())
