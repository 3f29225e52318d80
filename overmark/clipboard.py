"""Clipboard sink for overmark.

Copies the encoded payload of a save to the system clipboard as text.
On Windows uses win32clipboard, falling back to the Win32 API via ctypes.
Other platforms report failure. Callers treat the copy as best effort.
"""

from __future__ import annotations
import sys

from .logging import log

CF_UNICODETEXT = 13
GMEM_MOVEABLE = 0x0002


def copy_text_to_clipboard(text: str) -> bool:
    """
    Copy text to the system clipboard.

    Args:
        text: Text to place on the clipboard. Empty text is not copied.

    Returns:
        True if successful, False otherwise. Never raises.
    """
    if not text:
        return False
    try:
        if sys.platform == 'win32':
            return _copy_to_clipboard_windows(text)
        log(f"[CLIPBOARD] Clipboard copy not supported on {sys.platform}")
        return False
    except Exception as e:
        log(f"[CLIPBOARD][ERR] Failed to copy text: {e!r}")
        return False


def _copy_to_clipboard_windows(text: str) -> bool:
    """Copy text with pywin32."""
    try:
        import win32clipboard
    except ImportError:
        log("[CLIPBOARD][WARN] pywin32 missing, using ctypes")
        return _copy_to_clipboard_windows_alternative(text)

    win32clipboard.OpenClipboard()
    try:
        win32clipboard.EmptyClipboard()
        win32clipboard.SetClipboardText(text, CF_UNICODETEXT)
    finally:
        win32clipboard.CloseClipboard()
    log(f"[CLIPBOARD] Copied {len(text)} chars")
    return True


def _copy_to_clipboard_windows_alternative(text: str) -> bool:
    """Copy text through user32/kernel32 with ctypes (no pywin32)."""
    import ctypes

    user32 = ctypes.windll.user32
    kernel32 = ctypes.windll.kernel32
    kernel32.GlobalAlloc.restype = ctypes.c_void_p
    kernel32.GlobalLock.restype = ctypes.c_void_p

    handle = _global_text_handle(ctypes, kernel32, text)
    if handle is None:
        return False
    if not user32.OpenClipboard(None):
        kernel32.GlobalFree(handle)
        return False
    try:
        user32.EmptyClipboard()
        if not user32.SetClipboardData(CF_UNICODETEXT, handle):
            # ownership stays with us when the clipboard refuses it
            kernel32.GlobalFree(handle)
            log("[CLIPBOARD][ERR] SetClipboardData rejected the text")
            return False
    finally:
        user32.CloseClipboard()

    log(f"[CLIPBOARD] Copied {len(text)} chars (ctypes)")
    return True


def _global_text_handle(ctypes, kernel32, text: str):
    """Movable global memory holding NUL-terminated UTF-16 text, or None."""
    data = text.encode('utf-16-le') + b'\x00\x00'
    handle = kernel32.GlobalAlloc(GMEM_MOVEABLE, len(data))
    if not handle:
        return None
    handle = ctypes.c_void_p(handle)
    ptr = kernel32.GlobalLock(handle)
    if not ptr:
        kernel32.GlobalFree(handle)
        return None
    ctypes.memmove(ptr, data, len(data))
    kernel32.GlobalUnlock(handle)
    return handle
