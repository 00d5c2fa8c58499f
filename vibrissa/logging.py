"""Logging utilities with elapsed time and redraw-frame tracking."""

from __future__ import annotations
import sys
import time
from typing import Optional, TextIO


class Logger:
    """Site logger. Every line carries elapsed seconds and the frame counter."""

    def __init__(self, stream: Optional[TextIO] = None):
        self._start_time: float = time.perf_counter()
        self._frame: int = 0
        self._stream = stream

    @property
    def frame(self) -> int:
        """Current frame number."""
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
        """Write a line to the configured stream, falling back to stderr."""
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


def warn(tag: str, msg: str) -> None:
    """Log a degraded-but-recovered condition."""
    log(f"[{tag}][WARN] {msg}")


def error(tag: str, msg: str) -> None:
    """Log a failure that was caught and handled."""
    log(f"[{tag}][ERR] {msg}")


def get_frame() -> int:
    return get_logger().frame


def increment_frame() -> None:
    get_logger().increment_frame()


def now() -> float:
    """Get current time in seconds (high precision)."""
    return time.perf_counter()
