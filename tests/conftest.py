"""Shared fixtures: in-memory images, a quiet logger, a ready editor."""

from __future__ import annotations
from typing import List

import pytest
from PIL import Image

from overmark.editor import AnnotationEditor
from overmark.logging import set_enabled
from overmark.types import PointerEvent, SurfaceRect, ToolKind

IMG_W = 64
IMG_H = 48


@pytest.fixture(autouse=True)
def quiet_logger():
    set_enabled(False)
    yield
    set_enabled(True)


@pytest.fixture
def white_image() -> Image.Image:
    return Image.new("RGB", (IMG_W, IMG_H), "white")


@pytest.fixture
def identity_rect() -> SurfaceRect:
    """Surface displayed at exactly its native size."""
    return SurfaceRect(0, 0, IMG_W, IMG_H)


class ClipboardRecorder:
    def __init__(self):
        self.copied: List[str] = []

    def __call__(self, text: str) -> bool:
        self.copied.append(text)
        return True


@pytest.fixture
def clipboard() -> ClipboardRecorder:
    return ClipboardRecorder()


@pytest.fixture
def editor(white_image, clipboard) -> AnnotationEditor:
    """Editor with an image loaded and the pen enabled."""
    ed = AnnotationEditor(clipboard=clipboard)
    ed.load_image(white_image, source="white.png")
    ed.select_tool(ToolKind.PEN)
    return ed


def draw_stroke(editor: AnnotationEditor, rect: SurfaceRect, *points) -> None:
    """Press at the first point, move through the rest, release."""
    first, *rest = points
    editor.pointer_down(PointerEvent(*first), rect)
    for p in rest:
        editor.pointer_move(PointerEvent(*p), rect)
    editor.pointer_up()
