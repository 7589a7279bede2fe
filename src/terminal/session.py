"""Scoped unbuffered terminal mode with guaranteed restore on every exit path."""

from __future__ import annotations

import logging
import os
import sys
import termios
import tty
from typing import Any, Optional, TextIO

READ_CHUNK_BYTES = 32


class TerminalSetupError(Exception):
    """Raised when the terminal cannot be switched to unbuffered input."""


class TerminalSession:
    """Context manager that puts stdin in cbreak mode and restores it on exit.

    cbreak keeps ISIG enabled so Ctrl+C still raises KeyboardInterrupt in the
    main thread, which unwinds through ``__exit__``.
    """

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        *,
        logger: Optional[logging.Logger] = None,
    ):
        self._stream = stream or sys.stdin
        self._logger = logger or logging.getLogger("terminal")
        self._fd: Optional[int] = None
        self._saved_attrs: Optional[list[Any]] = None

    @property
    def active(self) -> bool:
        return self._saved_attrs is not None

    def __enter__(self) -> "TerminalSession":
        self.enable()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.disable()

    def enable(self) -> None:
        try:
            fd = self._stream.fileno()
        except (AttributeError, ValueError, OSError) as error:
            raise TerminalSetupError(f"stdin has no file descriptor: {error}") from error

        if not os.isatty(fd):
            raise TerminalSetupError("stdin is not a terminal")

        try:
            self._saved_attrs = termios.tcgetattr(fd)
            tty.setcbreak(fd)
        except termios.error as error:
            self._saved_attrs = None
            raise TerminalSetupError(f"Failed to enable cbreak mode: {error}") from error

        self._fd = fd
        self._logger.debug("Terminal cbreak mode enabled (fd=%d)", fd)

    def disable(self) -> None:
        if self._fd is None or self._saved_attrs is None:
            return
        try:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved_attrs)
            self._logger.debug("Terminal mode restored")
        except termios.error as error:
            self._logger.error("Failed to restore terminal mode: %s", error)
        finally:
            self._saved_attrs = None

    def read_chunk(self) -> bytes:
        if self._fd is None:
            raise TerminalSetupError("Terminal session is not active")
        return os.read(self._fd, READ_CHUNK_BYTES)
