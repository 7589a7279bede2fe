"""Payload-free stop/resume signal channels shared by the controller and the ticker."""

from __future__ import annotations

import threading
from typing import Optional


class ChannelClosedError(Exception):
    """Raised when sending to, or draining, a closed channel."""


class SignalChannel:
    """Counting signal channel with optional capacity and explicit close.

    Bounded channels drop signals on `try_send` when full. Receivers still
    drain pending signals after close; only an empty closed channel raises.
    """

    def __init__(self, capacity: Optional[int] = None, *, name: str = "signal"):
        if capacity is not None and capacity < 1:
            raise ValueError("capacity must be at least 1 when set")
        self._capacity = capacity
        self._name = name
        self._pending = 0
        self._closed = False
        self._condition = threading.Condition()

    @property
    def name(self) -> str:
        return self._name

    @property
    def closed(self) -> bool:
        with self._condition:
            return self._closed

    @property
    def pending(self) -> int:
        with self._condition:
            return self._pending

    def try_send(self) -> bool:
        """Post a signal without blocking; returns False when it was dropped."""
        with self._condition:
            if self._closed:
                raise ChannelClosedError(f"{self._name} channel is closed")
            if self._full_locked():
                return False
            self._pending += 1
            self._condition.notify_all()
            return True

    def send(self) -> None:
        """Post a signal, waiting for room on a full bounded channel."""
        with self._condition:
            self._condition.wait_for(lambda: self._closed or not self._full_locked())
            if self._closed:
                raise ChannelClosedError(f"{self._name} channel is closed")
            self._pending += 1
            self._condition.notify_all()

    def try_receive(self) -> bool:
        """Take a pending signal without waiting; False when none is pending."""
        with self._condition:
            if self._pending == 0:
                return False
            self._pending -= 1
            self._condition.notify_all()
            return True

    def receive(self, timeout: Optional[float] = None) -> bool:
        """Wait for a signal; False on timeout, ChannelClosedError once closed and empty."""
        with self._condition:
            ready = self._condition.wait_for(
                lambda: self._pending > 0 or self._closed,
                timeout=timeout,
            )
            if not ready:
                return False
            if self._pending > 0:
                self._pending -= 1
                self._condition.notify_all()
                return True
            raise ChannelClosedError(f"{self._name} channel is closed")

    def close(self) -> None:
        with self._condition:
            self._closed = True
            self._condition.notify_all()

    def _full_locked(self) -> bool:
        return self._capacity is not None and self._pending >= self._capacity
