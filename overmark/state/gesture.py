"""Gesture state - idle/drawing phase and the in-progress entry index."""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class GesturePhase(Enum):
    IDLE = auto()
    DRAWING = auto()


@dataclass
class GestureState:
    """State of the single active pointer gesture."""
    phase: GesturePhase = GesturePhase.IDLE
    current_index: Optional[int] = None
    pointer_id: Optional[int] = None
    captured: bool = False

    @property
    def is_drawing(self) -> bool:
        return self.phase is GesturePhase.DRAWING

    def start(self, index: int, pointer_id: int) -> None:
        self.phase = GesturePhase.DRAWING
        self.current_index = index
        self.pointer_id = pointer_id
        self.captured = True

    def finish(self) -> bool:
        """Back to idle. Returns True if a gesture was active."""
        was_drawing = self.is_drawing
        self.phase = GesturePhase.IDLE
        self.current_index = None
        self.pointer_id = None
        self.captured = False
        return was_drawing
