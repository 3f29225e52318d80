import sys

from overmark import clipboard
from overmark.clipboard import copy_text_to_clipboard


def test_empty_text_is_not_copied():
    assert copy_text_to_clipboard("") is False


def test_unsupported_platform_reports_failure(monkeypatch):
    monkeypatch.setattr(sys, "platform", "linux")
    assert copy_text_to_clipboard("data:image/png;base64,AAAA") is False


def test_backend_errors_are_contained(monkeypatch):
    def explode(text):
        raise RuntimeError("no clipboard")

    monkeypatch.setattr(sys, "platform", "win32")
    monkeypatch.setattr(clipboard, "_copy_to_clipboard_windows", explode)
    assert copy_text_to_clipboard("payload") is False
