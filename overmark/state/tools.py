"""Tool state - active tool, editing toggle, color and width."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any

from ..config import DEFAULT_COLOR, DEFAULT_LINE_WIDTH
from ..geometry import clamp_line_width
from ..types import ToolKind


@dataclass
class ToolState:
    """Settings read when a gesture begins.

    Changing them never touches annotations that already exist.
    """
    tool: ToolKind = ToolKind.PEN
    enabled: bool = False
    color: str = DEFAULT_COLOR
    line_width: float = DEFAULT_LINE_WIDTH

    @property
    def can_draw(self) -> bool:
        return self.enabled and self.tool in (ToolKind.PEN, ToolKind.ARROW)

    def select(self, tool: ToolKind) -> None:
        """Pick a tool. Picking the active tool again toggles editing."""
        if tool == self.tool:
            self.enabled = not self.enabled
            return
        self.tool = tool
        self.enabled = True

    def set_color(self, color: str) -> None:
        self.color = color

    def set_line_width(self, value: Any) -> float:
        """Store a clamped width and return it."""
        self.line_width = clamp_line_width(value)
        return self.line_width

    def step_line_width(self, delta: float) -> float:
        return self.set_line_width(self.line_width + delta)
