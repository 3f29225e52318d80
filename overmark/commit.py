"""Commit controller - save, delete, cancel and undo.

The controller owns the saved snapshot: a deep copy of the annotation list as
it was at the last save. Save replaces it, delete empties it, cancel copies it
back into the live list without touching it, and undo never sees it.

No action fails. When flattening is impossible the payload is "" and the
notification still goes out.
"""

from __future__ import annotations
from typing import Callable, List, Optional

from .annotations import clone_annotations
from .clipboard import copy_text_to_clipboard
from .gesture import GestureMachine
from .logging import log, timestamp_ms
from .renderer import render_flattened
from .state import EditorState
from .types import Annotation, CommitAction, CommitEvent

CommitListener = Callable[[CommitEvent], None]
ClipboardSink = Callable[[str], object]


class CommitController:
    """Applies commit actions to one editor's annotation list."""

    def __init__(
        self,
        state: EditorState,
        gesture: Optional[GestureMachine] = None,
        clipboard: Optional[ClipboardSink] = copy_text_to_clipboard,
        clock: Callable[[], int] = timestamp_ms,
    ):
        self.state = state
        self.gesture = gesture
        self._clipboard = clipboard
        self._clock = clock
        self._saved: List[Annotation] = []
        self._listeners: List[CommitListener] = []
        self.last_event: Optional[CommitEvent] = None
        self.last_payload: str = ""

    @property
    def saved(self) -> List[Annotation]:
        """Deep copy of the saved snapshot."""
        return clone_annotations(self._saved)

    @property
    def saved_count(self) -> int:
        return len(self._saved)

    def subscribe(self, listener: CommitListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: CommitListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def reset(self) -> None:
        """Forget the snapshot and the last payload (new image)."""
        self._saved = []
        self.last_payload = ""

    def flatten(self, annotations: List[Annotation], warn_if_unavailable: bool = False) -> str:
        """Flatten annotations over the current image. "" if impossible."""
        image = self.state.image
        if not image.is_ready:
            if warn_if_unavailable:
                log("[COMMIT][WARN] Image not ready, unable to export annotations")
            return ""
        return render_flattened(image.image, image.size.width, image.size.height, annotations)

    # ═══════════════════════════════════════════════════════════════════════
    # Actions
    # ═══════════════════════════════════════════════════════════════════════

    def save(self) -> CommitEvent:
        """Snapshot the live list, flatten it, copy the payload, notify."""
        snapshot = self.state.annotations.snapshot()
        self._saved = snapshot
        payload = self.flatten(snapshot, warn_if_unavailable=True)
        if payload:
            self._copy_to_clipboard(payload)
        log(f"[COMMIT] Save: {len(snapshot)} annotation(s), payload={len(payload)} chars")
        return self._emit(CommitAction.SAVE, payload)

    def delete(self) -> CommitEvent:
        """Drop the snapshot and every live annotation, notify."""
        self._end_gesture()
        self._saved = []
        self.state.annotations.clear()
        log("[COMMIT] Delete")
        return self._emit(CommitAction.DELETE, "")

    def cancel(self) -> CommitEvent:
        """Restore the live list from the snapshot, flatten it, notify."""
        self._end_gesture()
        self.state.annotations.reset_to(self._saved)
        payload = self.flatten(self.state.annotations.items())
        log(f"[COMMIT] Cancel: restored {len(self._saved)} annotation(s)")
        return self._emit(CommitAction.CANCEL, payload)

    def undo(self) -> Optional[Annotation]:
        """Remove the last live annotation. No-op on an empty list."""
        annotations = self.state.annotations
        if annotations.is_empty:
            return None
        if self.gesture is not None:
            self.gesture.abandon_if_current(len(annotations) - 1)
        removed = annotations.undo()
        log(f"[COMMIT] Undo: {len(annotations)} left")
        return removed

    # ═══════════════════════════════════════════════════════════════════════
    # Helpers
    # ═══════════════════════════════════════════════════════════════════════

    def _end_gesture(self) -> None:
        if self.gesture is not None and self.gesture.is_drawing:
            self.gesture.cancel()

    def _copy_to_clipboard(self, payload: str) -> None:
        if self._clipboard is None:
            return
        try:
            self._clipboard(payload)
        except Exception as e:
            log(f"[COMMIT][WARN] Clipboard sink failed: {e!r}")

    def _emit(self, action: CommitAction, payload: str) -> CommitEvent:
        event = CommitEvent(action=action, payload=payload, timestamp=self._clock())
        self.last_event = event
        self.last_payload = payload
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                log(f"[COMMIT][ERR] Listener failed on {action.value}: {e!r}")
        return event
