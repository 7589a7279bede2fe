"""Runtime orchestration loop for clock ticks and keyboard commands."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from queue import Queue
from typing import Any, Optional, Protocol, Sequence

from app_config import AppConfig
from pomodoro import PomodoroTimer, SignalChannel

from .events import InputClosedEvent, KeyboardInputEvent, QueueEventPublisher, TickEvent
from .keyboard import KeyboardReader, KeySource
from .ticker import DEFAULT_TICK_INTERVAL_SECONDS, ClockTicker

SHUTDOWN_JOIN_SECONDS = 1.0


class Renderer(Protocol):
    """Protocol for drawing the clock and action lines."""

    def draw(self, lines: Sequence[str], *, stopped: bool = False) -> None: ...


@dataclass(frozen=True)
class RuntimeBootstrap:
    """Dependency bundle required to construct the runtime engine."""
    logger: logging.Logger
    app_config: AppConfig
    renderer: Renderer
    key_source: KeySource
    tick_interval_seconds: float = DEFAULT_TICK_INTERVAL_SECONDS


@dataclass
class RuntimeResources:
    """Mutable runtime resources created for the event loop lifecycle."""
    event_queue: Queue[Any]
    publisher: QueueEventPublisher
    stop_signal: SignalChannel
    resume_signal: SignalChannel
    ticker: Optional[ClockTicker] = None
    keyboard: Optional[KeyboardReader] = None


class RuntimeEngine:
    """Consumer loop: one event, one transition, one redraw.

    This is the only place that touches the PomodoroTimer and the renderer.
    It blocks on nothing but the event queue.
    """

    def __init__(self, bootstrap: RuntimeBootstrap):
        self._bootstrap = bootstrap
        self._logger = bootstrap.logger
        self._renderer = bootstrap.renderer

        event_queue: Queue[Any] = Queue()
        self._resources = RuntimeResources(
            event_queue=event_queue,
            publisher=QueueEventPublisher(event_queue),
            stop_signal=SignalChannel(capacity=1, name="stop"),
            resume_signal=SignalChannel(name="resume"),
        )
        self._timer = PomodoroTimer(
            stop_signal=self._resources.stop_signal,
            resume_signal=self._resources.resume_signal,
            direction=bootstrap.app_config.timer.direction,
            logger=logging.getLogger("pomodoro"),
        )

    @property
    def timer(self) -> PomodoroTimer:
        return self._timer

    @property
    def resources(self) -> RuntimeResources:
        return self._resources

    def run(self) -> int:
        try:
            self._start_producers()
            self._redraw()
            self._logger.info(
                "Clock started at %s (%s)",
                self._timer.clock.render(),
                self._timer.direction,
            )

            while True:
                event = self._resources.event_queue.get()
                exit_code = self.handle_event(event)
                if exit_code is not None:
                    return exit_code
                self._redraw()
        finally:
            self._shutdown()

    def handle_event(self, event: Any) -> Optional[int]:
        """Apply a single event; returns an exit code when the loop must end."""
        if isinstance(event, TickEvent):
            self._timer.tick()
            return None

        if isinstance(event, KeyboardInputEvent):
            result = self._timer.handle_key(event.key)
            if result is not None:
                self._logger.debug(
                    "Key %r -> %s (accepted=%s, reason=%s)",
                    event.key,
                    result.action,
                    result.accepted,
                    result.reason,
                )
            if self._timer.quit_requested:
                return 0
            return None

        if isinstance(event, InputClosedEvent):
            self._logger.info("Keyboard input closed; exiting.")
            return 0

        self._logger.warning("Ignoring unknown event type: %s", type(event).__name__)
        return None

    def _start_producers(self) -> None:
        resources = self._resources
        resources.ticker = ClockTicker(
            publisher=resources.publisher,
            stop_signal=resources.stop_signal,
            resume_signal=resources.resume_signal,
            interval_seconds=self._bootstrap.tick_interval_seconds,
            logger=logging.getLogger("runtime.ticker"),
        )
        resources.keyboard = KeyboardReader(
            source=self._bootstrap.key_source,
            publisher=resources.publisher,
            logger=logging.getLogger("runtime.keyboard"),
        )
        resources.ticker.start()
        resources.keyboard.start()

    def _redraw(self) -> None:
        self._renderer.draw(
            self._timer.render_lines(),
            stopped=not self._timer.snapshot().is_running,
        )

    def _shutdown(self) -> None:
        resources = self._resources
        resources.publisher.close()
        resources.stop_signal.close()
        resources.resume_signal.close()

        ticker = resources.ticker
        if ticker is not None:
            ticker.join(timeout=SHUTDOWN_JOIN_SECONDS)
            if ticker.is_running:
                self._logger.warning("Ticker did not stop within %ss", SHUTDOWN_JOIN_SECONDS)
        # The keyboard reader stays blocked in read(); as a daemon it ends with the process.
