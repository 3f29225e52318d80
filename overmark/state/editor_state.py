"""Composite editor state for one displayed file."""

from __future__ import annotations
from dataclasses import dataclass, field

from .tools import ToolState
from .image import ImageState
from .gesture import GestureState
from ..annotations import AnnotationList


@dataclass
class EditorState:
    """
    Everything the annotation editor tracks for the file on screen.

    Sub-states:
        state.tools        - active tool, color, width, editing toggle
        state.image        - source raster and natural size
        state.gesture      - idle/drawing and the current entry index
        state.annotations  - the live, possibly uncommitted annotation list
    """
    tools: ToolState = field(default_factory=ToolState)
    image: ImageState = field(default_factory=ImageState)
    gesture: GestureState = field(default_factory=GestureState)
    annotations: AnnotationList = field(default_factory=AnnotationList)

    @property
    def image_ready(self) -> bool:
        return self.image.is_ready
