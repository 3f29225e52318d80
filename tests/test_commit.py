import pytest
from PIL import Image

from overmark.commit import CommitController
from overmark.editor import AnnotationEditor
from overmark.renderer import render_flattened
from overmark.types import CommitAction, Point, PointerEvent, Stroke, ToolKind

from conftest import draw_stroke


def test_commit_lifecycle(editor, identity_rect):
    draw_stroke(editor, identity_rect, (10, 10), (20, 12), (30, 14))
    assert len(editor.annotations) == 1
    assert len(editor.annotations[0].points) == 3

    event = editor.save()
    assert event.action is CommitAction.SAVE
    assert event.payload.startswith("data:image/png;base64,")
    assert editor.saved_annotations() == editor.annotations.items()

    event = editor.delete()
    assert (event.action, event.payload) == (CommitAction.DELETE, "")
    assert len(editor.annotations) == 0
    assert editor.saved_annotations() == []

    event = editor.cancel()
    assert (event.action, event.payload) == (CommitAction.CANCEL, "")
    assert len(editor.annotations) == 0


def test_save_without_image_still_emits(clipboard, identity_rect):
    ed = AnnotationEditor(clipboard=clipboard)
    ed.state.annotations.append(Stroke(points=[Point(1, 1)]))
    event = ed.save()
    assert (event.action, event.payload) == (CommitAction.SAVE, "")
    assert ed.saved_annotations() == [Stroke(points=[Point(1, 1)])]
    assert clipboard.copied == []


def test_snapshot_is_independent_of_live_list(editor, identity_rect):
    draw_stroke(editor, identity_rect, (10, 10), (20, 20))
    editor.save()
    saved = editor.commits._saved
    assert saved[0] is not editor.annotations[0]

    editor.annotations[0].points.append(Point(60, 40))
    assert editor.saved_annotations()[0].points == [Point(10, 10), Point(20, 20)]


def test_cancel_after_save_restores_saved_state(editor, identity_rect, white_image):
    draw_stroke(editor, identity_rect, (10, 10), (20, 10))
    editor.save()
    l1 = editor.annotations.items()

    draw_stroke(editor, identity_rect, (5, 40), (50, 40))
    assert len(editor.annotations) == 2

    event = editor.cancel()
    assert editor.annotations.items() == l1
    assert event.payload == render_flattened(white_image, 64, 48, l1)
    assert event.payload != ""


def test_cancel_never_touches_snapshot(editor, identity_rect):
    draw_stroke(editor, identity_rect, (10, 10), (20, 10))
    editor.save()
    editor.cancel()
    editor.annotations.clear()
    assert len(editor.saved_annotations()) == 1


def test_undo_leaves_snapshot(editor, identity_rect):
    draw_stroke(editor, identity_rect, (10, 10), (20, 10))
    draw_stroke(editor, identity_rect, (10, 30), (20, 30))
    editor.save()
    first = editor.annotations[0]

    editor.undo()
    assert editor.annotations.items() == [first]
    assert len(editor.saved_annotations()) == 2

    editor.undo()
    assert editor.undo() is None
    assert len(editor.annotations) == 0


def test_undo_while_drawing_ends_gesture(editor, identity_rect):
    editor.pointer_down(PointerEvent(10, 10), identity_rect)
    editor.undo()
    assert not editor.is_drawing
    assert editor.pointer_move(PointerEvent(20, 20), identity_rect) is False
    assert len(editor.annotations) == 0


def test_delete_mid_gesture_does_not_resurrect(editor, identity_rect):
    editor.pointer_down(PointerEvent(10, 10), identity_rect)
    editor.delete()
    editor.pointer_move(PointerEvent(20, 20), identity_rect)
    editor.pointer_move(PointerEvent(30, 30), identity_rect)
    editor.pointer_up()
    assert len(editor.annotations) == 0


def test_cancel_mid_gesture_protects_restored_entries(editor, identity_rect):
    draw_stroke(editor, identity_rect, (10, 10), (20, 10))
    draw_stroke(editor, identity_rect, (10, 20), (20, 20))
    editor.save()
    editor.undo()
    editor.pointer_down(PointerEvent(5, 40), identity_rect)  # index 1
    editor.cancel()
    editor.pointer_move(PointerEvent(60, 45), identity_rect)
    assert editor.annotations.items() == editor.saved_annotations()


def test_clipboard_receives_payload(editor, identity_rect, clipboard):
    draw_stroke(editor, identity_rect, (10, 10), (20, 10))
    event = editor.save()
    assert clipboard.copied == [event.payload]


def test_clipboard_failure_is_ignored(white_image, identity_rect):
    def broken(text):
        raise RuntimeError("denied")

    ed = AnnotationEditor(clipboard=broken)
    ed.load_image(white_image)
    ed.select_tool(ToolKind.PEN)
    draw_stroke(ed, identity_rect, (10, 10), (20, 10))
    event = ed.save()
    assert event.payload != ""
    assert ed.last_event is event


def test_listeners_and_last_event(editor):
    received = []

    def failing(event):
        raise ValueError("listener bug")

    editor.subscribe(failing)
    editor.subscribe(received.append)
    event = editor.delete()
    assert received == [event]
    assert editor.last_event is event
    assert editor.commits.last_payload == ""
    assert event.widget == "FileDisplayer"


def test_clock_is_used_for_timestamps(editor):
    controller = CommitController(editor.state, clock=lambda: 1234, clipboard=None)
    assert controller.delete().timestamp == 1234


def test_new_image_resets_snapshot(editor, identity_rect):
    draw_stroke(editor, identity_rect, (10, 10), (20, 10))
    editor.save()
    editor.load_image(Image.new("RGB", (32, 32), "black"))
    assert editor.saved_annotations() == []
    assert len(editor.annotations) == 0
    assert editor.commits.last_payload == ""
    assert editor.cancel().payload == ""
