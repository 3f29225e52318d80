"""Process logger with elapsed-time and frame prefixes."""

from __future__ import annotations
import sys
import time
from typing import Optional, TextIO


class Logger:
    """Writes tagged lines to stdout, falling back to stderr.

    Every line carries seconds since the logger was created and the current
    frame number of the viewer loop (0 when no loop is running).
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self._start_time: float = time.perf_counter()
        self._frame: int = 0
        self._stream = stream
        self.enabled: bool = True

    @property
    def frame(self) -> int:
        return self._frame

    @frame.setter
    def frame(self, value: int) -> None:
        self._frame = value

    def increment_frame(self) -> None:
        self._frame += 1

    @property
    def elapsed(self) -> float:
        """Seconds since logger was created."""
        return time.perf_counter() - self._start_time

    def format(self, msg: str) -> str:
        return f"[{self.elapsed:7.3f}s F{self._frame:06d}] {msg}\n"

    def log(self, msg: str) -> None:
        """Write one line. Never raises."""
        if not self.enabled:
            return
        line = self.format(msg)
        try:
            out = self._stream or sys.stdout
            out.write(line)
            out.flush()
        except Exception:
            try:
                sys.stderr.write(line)
                sys.stderr.flush()
            except Exception:
                pass

    def __call__(self, msg: str) -> None:
        self.log(msg)


_logger: Optional[Logger] = None


def get_logger() -> Logger:
    """Get or create the global logger instance."""
    global _logger
    if _logger is None:
        _logger = Logger()
    return _logger


def log(msg: str) -> None:
    """Log a message using the global logger."""
    get_logger().log(msg)


def set_enabled(enabled: bool) -> None:
    """Turn the global logger on or off."""
    get_logger().enabled = enabled


def increment_frame() -> None:
    get_logger().increment_frame()


def get_frame() -> int:
    return get_logger().frame


def timestamp_ms() -> int:
    """Wall-clock milliseconds since the epoch, for event records."""
    return int(time.time() * 1000)
