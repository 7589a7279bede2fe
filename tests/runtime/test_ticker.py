import time
import unittest
from queue import Empty, Queue

from pomodoro.actions import ActionKind
from pomodoro.service import PomodoroTimer
from pomodoro.signals import SignalChannel
from runtime.events import QueueEventPublisher, TickEvent
from runtime.ticker import ClockTicker

_FAST_INTERVAL = 0.01
_SLOW_INTERVAL = 5.0
_WAIT = 2.0


class ClockTickerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.queue: Queue = Queue()
        self.publisher = QueueEventPublisher(self.queue)
        self.stop_signal = SignalChannel(capacity=1, name="stop")
        self.resume_signal = SignalChannel(name="resume")
        self.ticker = ClockTicker(
            publisher=self.publisher,
            stop_signal=self.stop_signal,
            resume_signal=self.resume_signal,
            interval_seconds=_FAST_INTERVAL,
        )

    def tearDown(self) -> None:
        self.stop_signal.close()
        self.resume_signal.close()
        self.ticker.join(timeout=_WAIT)

    def test_publishes_ticks(self) -> None:
        self.ticker.start()

        self.assertIsInstance(self.queue.get(timeout=_WAIT), TickEvent)
        self.assertIsInstance(self.queue.get(timeout=_WAIT), TickEvent)

    def test_stop_suspends_until_resume(self) -> None:
        self.stop_signal.try_send()
        self.ticker.start()

        with self.assertRaises(Empty):
            self.queue.get(timeout=0.1)
        self.assertTrue(self.ticker.is_running)

        self.resume_signal.send()
        self.assertIsInstance(self.queue.get(timeout=_WAIT), TickEvent)

    def test_stop_is_taken_without_waiting_out_the_interval(self) -> None:
        ticker = ClockTicker(
            publisher=self.publisher,
            stop_signal=self.stop_signal,
            resume_signal=self.resume_signal,
            interval_seconds=_SLOW_INTERVAL,
        )
        ticker.start()
        time.sleep(0.05)

        started = time.monotonic()
        self.stop_signal.try_send()
        while self.stop_signal.pending and time.monotonic() - started < _WAIT:
            time.sleep(0.01)

        self.assertEqual(0, self.stop_signal.pending)
        self.assertLess(time.monotonic() - started, 1.0)
        self.assertTrue(ticker.is_running)
        self.assertTrue(self.queue.empty())

        self.stop_signal.close()
        self.resume_signal.close()
        ticker.join(timeout=_WAIT)
        self.assertFalse(ticker.is_running)

    def test_no_ticks_after_stop_resume_stop_before_ticker_runs(self) -> None:
        timer = PomodoroTimer(stop_signal=self.stop_signal, resume_signal=self.resume_signal)
        timer.apply(ActionKind.STOP)
        timer.apply(ActionKind.RESUME)
        timer.apply(ActionKind.STOP)

        self.ticker.start()

        with self.assertRaises(Empty):
            self.queue.get(timeout=0.3)
        self.assertEqual("stopped", timer.phase)
        self.assertTrue(self.ticker.is_running)

    def test_closing_resume_while_suspended_ends_ticker(self) -> None:
        self.stop_signal.try_send()
        self.ticker.start()

        self.resume_signal.close()
        self.ticker.join(timeout=_WAIT)

        self.assertFalse(self.ticker.is_running)

    def test_closing_stop_ends_ticker(self) -> None:
        self.ticker.start()
        self.stop_signal.close()
        self.ticker.join(timeout=_WAIT)

        self.assertFalse(self.ticker.is_running)

    def test_closed_publisher_ends_ticker(self) -> None:
        self.publisher.close()
        self.ticker.start()
        self.ticker.join(timeout=_WAIT)

        self.assertFalse(self.ticker.is_running)
        self.assertTrue(self.queue.empty())

    def test_rejects_non_positive_interval(self) -> None:
        with self.assertRaises(ValueError):
            ClockTicker(
                publisher=self.publisher,
                stop_signal=self.stop_signal,
                resume_signal=self.resume_signal,
                interval_seconds=0,
            )


if __name__ == "__main__":
    unittest.main()
