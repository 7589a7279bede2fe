from .actions import (
    Action,
    ActionKind,
    ActionRegistry,
    DuplicateShortcutError,
    build_default_actions,
)
from .clock import Clock, TimeValue
from .errors import BoundaryError, ClockError, InvalidTimeError
from .service import (
    PomodoroActionResult,
    PomodoroDirection,
    PomodoroPhase,
    PomodoroSnapshot,
    PomodoroTimer,
)
from .signals import ChannelClosedError, SignalChannel

__all__ = [
    "Action",
    "ActionKind",
    "ActionRegistry",
    "BoundaryError",
    "ChannelClosedError",
    "Clock",
    "ClockError",
    "DuplicateShortcutError",
    "InvalidTimeError",
    "PomodoroActionResult",
    "PomodoroDirection",
    "PomodoroPhase",
    "PomodoroSnapshot",
    "PomodoroTimer",
    "SignalChannel",
    "TimeValue",
    "build_default_actions",
]
