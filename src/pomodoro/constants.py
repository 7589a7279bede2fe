"""State, action, and reason constants used by pomodoro clock logic."""

from __future__ import annotations

DEFAULT_HOURS = 0
DEFAULT_MINUTES = 1
DEFAULT_SECONDS = 0

MAX_HOURS = 23
MAX_MINUTES = 59
MAX_SECONDS = 59
MAX_TOTAL_SECONDS = 24 * 3600 - 1

DIRECTION_COUNTDOWN = "countdown"
DIRECTION_COUNTUP = "countup"

DIRECTIONS: frozenset[str] = frozenset({DIRECTION_COUNTDOWN, DIRECTION_COUNTUP})

PHASE_RUNNING = "running"
PHASE_STOPPED = "stopped"

ACTION_STOP = "stop"
ACTION_RESUME = "resume"
ACTION_RESET = "reset"
ACTION_QUIT = "quit"
ACTION_TICK = "tick"

REASON_STOPPED = "stopped"
REASON_RESUMED = "resumed"
REASON_RESET = "reset"
REASON_QUIT = "quit"
REASON_TICK = "tick"
REASON_BOUNDARY = "boundary"
REASON_NOT_RUNNING = "not_running"
REASON_NOT_STOPPED = "not_stopped"
