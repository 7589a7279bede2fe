"""Background ticker that emits one tick per second until suspended."""

from __future__ import annotations

import logging
import threading
from typing import Optional

from pomodoro import ChannelClosedError, SignalChannel

from .events import EventPublisher, TickEvent

DEFAULT_TICK_INTERVAL_SECONDS = 1.0


class ClockTicker:
    """Publishes TickEvents, suspending on a stop signal until resumed.

    The wait for the next tick doubles as the wait for a stop signal, so a
    stop is honoured immediately instead of after the remaining interval.
    A closed stop or resume channel ends the ticker for good.
    """

    def __init__(
        self,
        *,
        publisher: EventPublisher,
        stop_signal: SignalChannel,
        resume_signal: SignalChannel,
        interval_seconds: float = DEFAULT_TICK_INTERVAL_SECONDS,
        logger: Optional[logging.Logger] = None,
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be greater than zero")
        self._publisher = publisher
        self._stop_signal = stop_signal
        self._resume_signal = resume_signal
        self._interval_seconds = interval_seconds
        self._logger = logger or logging.getLogger("runtime.ticker")
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.is_running:
            self._logger.warning("Ticker is already running")
            return

        self._thread = threading.Thread(target=self.run, daemon=True, name="clock-ticker")
        self._thread.start()

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout=timeout)

    def run(self) -> None:
        self._logger.debug("Ticker started (interval=%ss)", self._interval_seconds)
        try:
            while True:
                if self._stop_signal.receive(timeout=self._interval_seconds):
                    self._logger.debug("Ticker suspended")
                    self._resume_signal.receive()
                    self._logger.debug("Ticker resumed")
                    continue
                self._publisher.publish(TickEvent())
        except ChannelClosedError as error:
            self._logger.debug("Ticker finished: %s", error)
