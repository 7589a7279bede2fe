"""Single-owner pomodoro clock state machine driven by tick and key events."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Optional

from .actions import ActionKind, ActionRegistry, build_default_actions
from .clock import Clock
from .constants import (
    ACTION_QUIT,
    ACTION_RESET,
    ACTION_RESUME,
    ACTION_STOP,
    ACTION_TICK,
    DEFAULT_HOURS,
    DEFAULT_MINUTES,
    DEFAULT_SECONDS,
    DIRECTION_COUNTDOWN,
    DIRECTION_COUNTUP,
    DIRECTIONS,
    PHASE_RUNNING,
    PHASE_STOPPED,
    REASON_BOUNDARY,
    REASON_NOT_RUNNING,
    REASON_NOT_STOPPED,
    REASON_QUIT,
    REASON_RESET,
    REASON_RESUMED,
    REASON_STOPPED,
    REASON_TICK,
)
from .errors import BoundaryError
from .signals import ChannelClosedError, SignalChannel

PomodoroPhase = Literal["running", "stopped"]
PomodoroDirection = Literal["countdown", "countup"]


@dataclass(frozen=True)
class PomodoroSnapshot:
    """Immutable clock snapshot exposed to the runtime loop and renderer."""
    phase: PomodoroPhase
    direction: PomodoroDirection
    display: str
    total_seconds: int

    @property
    def is_running(self) -> bool:
        return self.phase == PHASE_RUNNING


@dataclass(frozen=True)
class PomodoroActionResult:
    """Result envelope returned after applying a tick or a keyboard action."""
    action: str
    accepted: bool
    reason: str
    snapshot: PomodoroSnapshot


class PomodoroTimer:
    """Pomodoro clock controller.

    Owns the Clock exclusively; it must only be driven from the consumer
    loop. Producers reach it through events, and it reaches the ticker
    through the stop and resume signal channels.
    """

    def __init__(
        self,
        *,
        stop_signal: SignalChannel,
        resume_signal: SignalChannel,
        direction: PomodoroDirection = DIRECTION_COUNTDOWN,
        actions: Optional[ActionRegistry] = None,
        logger: Optional[logging.Logger] = None,
    ):
        if direction not in DIRECTIONS:
            allowed = ", ".join(sorted(DIRECTIONS))
            raise ValueError(f"direction must be one of: {allowed}")

        self._stop_signal = stop_signal
        self._resume_signal = resume_signal
        self._direction: PomodoroDirection = direction
        self._actions = actions or build_default_actions()
        self._logger = logger or logging.getLogger("pomodoro")

        self._clock = _default_clock(direction)
        self._phase: PomodoroPhase = PHASE_RUNNING
        self._quit_requested = False

    @property
    def phase(self) -> PomodoroPhase:
        return self._phase

    @property
    def direction(self) -> PomodoroDirection:
        return self._direction

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def actions(self) -> ActionRegistry:
        return self._actions

    @property
    def quit_requested(self) -> bool:
        return self._quit_requested

    def snapshot(self) -> PomodoroSnapshot:
        return PomodoroSnapshot(
            phase=self._phase,
            direction=self._direction,
            display=self._clock.render(),
            total_seconds=self._clock.total_seconds,
        )

    def tick(self) -> PomodoroActionResult:
        """Advance the clock one second; reaching a boundary stops the clock."""
        if self._phase != PHASE_RUNNING:
            return self._result(ACTION_TICK, False, REASON_NOT_RUNNING)

        try:
            self._clock.tick(self._direction)
        except BoundaryError:
            self._stop_at_boundary()
            return self._result(ACTION_TICK, False, REASON_BOUNDARY)

        if self._at_boundary():
            self._stop_at_boundary()
            return self._result(ACTION_TICK, True, REASON_BOUNDARY)
        return self._result(ACTION_TICK, True, REASON_TICK)

    def apply(self, kind: ActionKind) -> PomodoroActionResult:
        if kind is ActionKind.STOP:
            if self._phase != PHASE_RUNNING:
                return self._result(ACTION_STOP, False, REASON_NOT_RUNNING)
            self._stop()
            self._logger.info("Clock stopped at %s", self._clock.render())
            return self._result(ACTION_STOP, True, REASON_STOPPED)

        if kind is ActionKind.RESUME:
            if self._phase != PHASE_STOPPED:
                return self._result(ACTION_RESUME, False, REASON_NOT_STOPPED)
            self._resume()
            self._logger.info("Clock resumed at %s", self._clock.render())
            return self._result(ACTION_RESUME, True, REASON_RESUMED)

        if kind is ActionKind.RESET:
            self._clock.reset()
            self._logger.info(
                "Clock reset to %s (phase=%s)", self._clock.render(), self._phase
            )
            return self._result(ACTION_RESET, True, REASON_RESET)

        if kind is ActionKind.QUIT:
            self._quit_requested = True
            self._logger.info("Quit requested")
            return self._result(ACTION_QUIT, True, REASON_QUIT)

        raise ValueError(f"Unsupported action kind: {kind!r}")

    def handle_key(self, key: str) -> Optional[PomodoroActionResult]:
        """Dispatch a keyboard character; unknown keys are ignored."""
        action = self._actions.find(key)
        if action is None:
            self._logger.debug("Ignoring unbound key: %r", key)
            return None
        return self.apply(action.kind)

    def render_lines(self) -> list[str]:
        return [self._clock.render(), *(action.label() for action in self._actions)]

    def _at_boundary(self) -> bool:
        if self._direction == DIRECTION_COUNTUP:
            return self._clock.value.at_ceiling
        return self._clock.value.at_floor

    def _stop_at_boundary(self) -> None:
        if self._phase != PHASE_RUNNING:
            return
        self._stop()
        self._logger.info("Clock reached %s; stopping", self._clock.render())

    def _stop(self) -> None:
        try:
            if not self._stop_signal.try_send():
                self._logger.debug("Stop signal already pending")
        except ChannelClosedError:
            self._logger.warning("Stop channel closed; ticker is no longer running")
        self._phase = PHASE_STOPPED

    def _resume(self) -> None:
        if self._stop_signal.try_receive():
            # The ticker never saw the stop, so it is still ticking.
            self._logger.debug("Withdrew pending stop signal")
            self._phase = PHASE_RUNNING
            return
        try:
            self._resume_signal.send()
        except ChannelClosedError:
            self._logger.warning("Resume channel closed; ticker is no longer running")
        self._phase = PHASE_RUNNING

    def _result(self, action: str, accepted: bool, reason: str) -> PomodoroActionResult:
        return PomodoroActionResult(
            action=action,
            accepted=accepted,
            reason=reason,
            snapshot=self.snapshot(),
        )


def _default_clock(direction: str) -> Clock:
    if direction == DIRECTION_COUNTUP:
        return Clock(hours=0, minutes=0, seconds=0)
    return Clock(hours=DEFAULT_HOURS, minutes=DEFAULT_MINUTES, seconds=DEFAULT_SECONDS)
