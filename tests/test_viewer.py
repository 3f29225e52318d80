import pytest

from overmark.editor import AnnotationEditor
from overmark.types import CommitAction, PointerEvent, ToolKind
from overmark.viewer import Viewer, is_supported_image


@pytest.mark.parametrize("name,expected", [
    ("photo.PNG", True),
    ("scan.jpeg", True),
    ("notes.txt", False),
    ("noext", False),
])
def test_is_supported_image(name, expected):
    assert is_supported_image(name) is expected


def test_surface_rect_is_centered_and_keeps_aspect(white_image):
    viewer = Viewer(editor=AnnotationEditor(clipboard=None))
    assert viewer.surface_rect is None

    viewer.editor.load_image(white_image)
    rect = viewer.surface_rect
    assert rect.width / rect.height == pytest.approx(64 / 48)
    assert rect.left * 2 + rect.width == pytest.approx(viewer.screen_w)
    assert rect.top * 2 + rect.height == pytest.approx(viewer.screen_h)


def test_fitted_rect_maps_back_to_image_pixels(white_image):
    viewer = Viewer(editor=AnnotationEditor(clipboard=None))
    viewer.editor.load_image(white_image)
    viewer.editor.select_tool(ToolKind.PEN)
    rect = viewer.surface_rect

    event = PointerEvent(rect.left + rect.width / 2, rect.top + rect.height / 2)
    viewer.editor.pointer_down(event, rect)
    (p,) = viewer.editor.annotations[0].points
    assert (p.x, p.y) == (pytest.approx(32), pytest.approx(24))


def test_viewer_tracks_commit_events(white_image):
    viewer = Viewer(editor=AnnotationEditor(clipboard=None))
    viewer.editor.load_image(white_image)
    viewer.editor.delete()
    assert viewer.last_event.action is CommitAction.DELETE
