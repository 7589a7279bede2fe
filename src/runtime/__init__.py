"""Runtime engine exports."""

from .events import (
    ClockEvent,
    EventPublisher,
    InputClosedEvent,
    KeyboardInputEvent,
    QueueEventPublisher,
    TickEvent,
)
from .keyboard import KeyboardReader, KeySource
from .loop import RuntimeBootstrap, RuntimeEngine, RuntimeResources
from .ticker import ClockTicker

__all__ = [
    "ClockEvent",
    "ClockTicker",
    "EventPublisher",
    "InputClosedEvent",
    "KeyboardInputEvent",
    "KeyboardReader",
    "KeySource",
    "QueueEventPublisher",
    "RuntimeBootstrap",
    "RuntimeEngine",
    "RuntimeResources",
    "TickEvent",
]
