"""Command Pattern for editor input.

Commands encapsulate actions that can be triggered by various inputs
(viewer hotkeys, mouse polling, an embedding host). Each command has an
execute() method and optional can_execute() for guards.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, List

if TYPE_CHECKING:
    from .editor import AnnotationEditor

from .logging import log
from .types import PointerEvent, SurfaceRect, ToolKind


class Command(ABC):
    """Base class for all commands."""

    @abstractmethod
    def execute(self, editor: "AnnotationEditor") -> bool:
        """Execute the command. Returns True if action was taken."""
        pass

    def can_execute(self, editor: "AnnotationEditor") -> bool:
        """Check if command can be executed. Override for guards."""
        return True


# ═══════════════════════════════════════════════════════════════════════════
# Pointer Commands
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class PointerDown(Command):
    """Begin a gesture."""
    event: PointerEvent
    rect: SurfaceRect

    def can_execute(self, editor: "AnnotationEditor") -> bool:
        return editor.gesture.can_begin()

    def execute(self, editor: "AnnotationEditor") -> bool:
        if not self.can_execute(editor):
            return False
        return editor.pointer_down(self.event, self.rect)


@dataclass
class PointerMove(Command):
    """Extend the active gesture."""
    event: PointerEvent
    rect: SurfaceRect

    def can_execute(self, editor: "AnnotationEditor") -> bool:
        return editor.is_drawing

    def execute(self, editor: "AnnotationEditor") -> bool:
        if not self.can_execute(editor):
            return False
        return editor.pointer_move(self.event, self.rect)


@dataclass
class PointerUp(Command):
    """Release ends the gesture."""
    event: PointerEvent

    def can_execute(self, editor: "AnnotationEditor") -> bool:
        return editor.is_drawing

    def execute(self, editor: "AnnotationEditor") -> bool:
        if not self.can_execute(editor):
            return False
        return editor.pointer_up(self.event)


@dataclass
class PointerLeave(Command):
    """Pointer left the surface with the button still held."""
    event: PointerEvent

    def can_execute(self, editor: "AnnotationEditor") -> bool:
        return editor.is_drawing

    def execute(self, editor: "AnnotationEditor") -> bool:
        if not self.can_execute(editor):
            return False
        return editor.pointer_leave(self.event)


# ═══════════════════════════════════════════════════════════════════════════
# Tool Commands
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class SelectTool(Command):
    """Pick a tool; picking the active one toggles editing."""
    tool: ToolKind

    def execute(self, editor: "AnnotationEditor") -> bool:
        editor.select_tool(self.tool)
        return True


@dataclass
class SetColor(Command):
    color: str

    def execute(self, editor: "AnnotationEditor") -> bool:
        editor.set_color(self.color)
        log(f"[CMD] SetColor: {self.color}")
        return True


@dataclass
class SetLineWidth(Command):
    width: Any

    def execute(self, editor: "AnnotationEditor") -> bool:
        applied = editor.set_line_width(self.width)
        log(f"[CMD] SetLineWidth: {self.width!r} -> {applied}")
        return True


@dataclass
class StepLineWidth(Command):
    """Nudge the active width up or down."""
    delta: float

    def execute(self, editor: "AnnotationEditor") -> bool:
        before = editor.state.tools.line_width
        after = editor.state.tools.step_line_width(self.delta)
        log(f"[CMD] StepLineWidth: {before} -> {after}")
        return after != before


# ═══════════════════════════════════════════════════════════════════════════
# Commit Commands
# ═══════════════════════════════════════════════════════════════════════════

class Undo(Command):
    """Remove the most recent annotation."""

    def can_execute(self, editor: "AnnotationEditor") -> bool:
        return not editor.annotations.is_empty

    def execute(self, editor: "AnnotationEditor") -> bool:
        if not self.can_execute(editor):
            return False
        editor.undo()
        return True


class Save(Command):
    def execute(self, editor: "AnnotationEditor") -> bool:
        editor.save()
        return True


class Delete(Command):
    def execute(self, editor: "AnnotationEditor") -> bool:
        editor.delete()
        return True


class Cancel(Command):
    def execute(self, editor: "AnnotationEditor") -> bool:
        editor.cancel()
        return True


class CloseApp(Command):
    """Close the viewer."""

    def execute(self, editor: "AnnotationEditor") -> bool:
        log("[CMD] CloseApp")
        return True


# ═══════════════════════════════════════════════════════════════════════════
# Command Queue
# ═══════════════════════════════════════════════════════════════════════════

class CommandQueue:
    """Queue for executing commands with optional history tracking."""

    def __init__(self, max_history: int = 100):
        self._history: List[Command] = []
        self._max_history = max_history

    def execute(self, command: Command, editor: "AnnotationEditor") -> bool:
        """Execute a command and optionally track it."""
        if not command.can_execute(editor):
            return False

        result = command.execute(editor)
        if result and self._max_history > 0:
            self._history.append(command)
            if len(self._history) > self._max_history:
                self._history.pop(0)

        return result

    def execute_all(self, commands: List[Command], editor: "AnnotationEditor") -> int:
        """Run commands in order. Returns how many took effect."""
        return sum(1 for cmd in commands if self.execute(cmd, editor))

    @property
    def history(self) -> List[Command]:
        """Get command history."""
        return self._history.copy()

    def clear_history(self) -> None:
        """Clear command history."""
        self._history.clear()
