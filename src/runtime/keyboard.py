"""Background keyboard reader that turns raw terminal input into key events."""

from __future__ import annotations

import codecs
import logging
import threading
from typing import Optional, Protocol

from pomodoro import ChannelClosedError

from .events import EventPublisher, InputClosedEvent, KeyboardInputEvent

ESCAPE = "\x1b"
CSI_INTRODUCER = "["
SS3_INTRODUCER = "O"
CSI_FINAL_FIRST = "@"
CSI_FINAL_LAST = "~"


class KeySource(Protocol):
    """Blocking byte source; returns b"" once input is closed."""

    def read_chunk(self) -> bytes: ...


class KeyboardReader:
    """Reads key presses and publishes only printable character keys.

    Escape sequences (arrow, function and alt keys) are dropped wherever
    they appear in a chunk; the keys around them are still published.
    """

    def __init__(
        self,
        *,
        source: KeySource,
        publisher: EventPublisher,
        logger: Optional[logging.Logger] = None,
    ):
        self._source = source
        self._publisher = publisher
        self._logger = logger or logging.getLogger("runtime.keyboard")
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.is_running:
            self._logger.warning("Keyboard reader is already running")
            return

        self._thread = threading.Thread(target=self.run, daemon=True, name="keyboard-reader")
        self._thread.start()

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout=timeout)

    def run(self) -> None:
        try:
            while True:
                try:
                    chunk = self._source.read_chunk()
                except OSError as error:
                    self._logger.error("Keyboard read failed: %s", error)
                    chunk = b""

                if not chunk:
                    self._logger.debug("Keyboard input closed")
                    self._publisher.publish(InputClosedEvent())
                    return

                for key in self.decode_keys(chunk):
                    self._publisher.publish(KeyboardInputEvent(key=key))
        except ChannelClosedError as error:
            self._logger.debug("Keyboard reader finished: %s", error)

    def decode_keys(self, chunk: bytes) -> list[str]:
        text = self._decoder.decode(chunk)
        keys: list[str] = []
        index = 0
        while index < len(text):
            char = text[index]
            if char == ESCAPE:
                index = _skip_escape(text, index)
                continue
            if char.isprintable():
                keys.append(char)
            index += 1
        return keys


def _skip_escape(text: str, start: int) -> int:
    """Return the index just past the escape sequence at ``start``."""
    index = start + 1
    if index >= len(text):
        return index
    introducer = text[index]
    index += 1
    if introducer == CSI_INTRODUCER:
        # Parameters run until a final byte in the @..~ range.
        while index < len(text) and not CSI_FINAL_FIRST <= text[index] <= CSI_FINAL_LAST:
            index += 1
        return index + 1
    if introducer == SS3_INTRODUCER:
        return index + 1
    # ESC followed by a single key is an alt chord.
    return index
