"""Event dataclasses and publisher contracts emitted by the ticker and keyboard reader."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime
from queue import Queue
from typing import Protocol

from pomodoro import ChannelClosedError


@dataclass(frozen=True)
class TickEvent:
    """Event emitted by the ticker once per elapsed second."""
    occurred_at: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class KeyboardInputEvent:
    """Event emitted for every character key pressed."""
    key: str


@dataclass(frozen=True)
class InputClosedEvent:
    """Event emitted once when the keyboard input source reaches end of file."""
    occurred_at: datetime = field(default_factory=datetime.now)


ClockEvent = TickEvent | KeyboardInputEvent | InputClosedEvent


class EventPublisher(Protocol):
    """Protocol for publishing clock events."""

    def publish(self, event: ClockEvent) -> None: ...


class QueueEventPublisher:
    """Event publisher that pushes events to a queue until closed."""

    def __init__(self, queue: Queue):
        self._queue = queue
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def publish(self, event: ClockEvent) -> None:
        if self._closed.is_set():
            raise ChannelClosedError("event queue is closed")
        self._queue.put(event)

    def close(self) -> None:
        self._closed.set()
