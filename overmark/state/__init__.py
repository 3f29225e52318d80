"""State management submodules for overmark."""

from .tools import ToolState
from .image import ImageState
from .gesture import GesturePhase, GestureState
from .editor_state import EditorState

__all__ = [
    'ToolState',
    'ImageState',
    'GesturePhase',
    'GestureState',
    'EditorState',
]
