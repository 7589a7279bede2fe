import logging
import threading
import unittest

from app_config_schema import AppConfig, TimerSettings
from runtime.events import InputClosedEvent, KeyboardInputEvent, TickEvent
from runtime.loop import RuntimeBootstrap, RuntimeEngine


class _RendererStub:
    def __init__(self):
        self.frames: list[tuple[list[str], bool]] = []

    def draw(self, lines, *, stopped: bool = False) -> None:
        self.frames.append((list(lines), stopped))


class _ScriptedSource:
    """Serves chunks in order, then blocks until released like a real TTY."""

    def __init__(self, chunks: list[bytes]):
        self._chunks = list(chunks)
        self.release = threading.Event()

    def read_chunk(self) -> bytes:
        if self._chunks:
            return self._chunks.pop(0)
        self.release.wait(timeout=5.0)
        return b""


def _build_engine(
    chunks: list[bytes],
    *,
    direction: str = "countdown",
    tick_interval_seconds: float = 60.0,
) -> tuple[RuntimeEngine, _RendererStub, _ScriptedSource]:
    renderer = _RendererStub()
    source = _ScriptedSource(chunks)
    engine = RuntimeEngine(
        RuntimeBootstrap(
            logger=logging.getLogger("test"),
            app_config=AppConfig(timer=TimerSettings(direction=direction)),
            renderer=renderer,
            key_source=source,
            tick_interval_seconds=tick_interval_seconds,
        )
    )
    return engine, renderer, source


class RuntimeEventHandlingTests(unittest.TestCase):
    def test_tick_event_advances_clock(self) -> None:
        engine, _, _ = _build_engine([])

        self.assertIsNone(engine.handle_event(TickEvent()))
        self.assertEqual("00:00:59", engine.timer.snapshot().display)

    def test_stop_key_posts_stop_signal(self) -> None:
        engine, _, _ = _build_engine([])

        engine.handle_event(KeyboardInputEvent(key="s"))
        engine.handle_event(TickEvent())

        self.assertEqual("stopped", engine.timer.phase)
        self.assertEqual(1, engine.resources.stop_signal.pending)
        self.assertEqual("00:01:00", engine.timer.snapshot().display)

    def test_stop_key_and_in_flight_tick_in_either_order(self) -> None:
        engine, _, _ = _build_engine([])

        engine.handle_event(TickEvent())
        engine.handle_event(KeyboardInputEvent(key="s"))
        engine.handle_event(TickEvent())

        self.assertEqual("00:00:59", engine.timer.snapshot().display)

    def test_quit_key_returns_success(self) -> None:
        engine, _, _ = _build_engine([])
        self.assertEqual(0, engine.handle_event(KeyboardInputEvent(key="q")))

    def test_unknown_key_is_ignored(self) -> None:
        engine, _, _ = _build_engine([])
        before = engine.timer.snapshot()

        self.assertIsNone(engine.handle_event(KeyboardInputEvent(key="z")))
        self.assertEqual(before, engine.timer.snapshot())

    def test_input_closed_ends_loop(self) -> None:
        engine, _, _ = _build_engine([])
        self.assertEqual(0, engine.handle_event(InputClosedEvent()))

    def test_unknown_event_is_ignored(self) -> None:
        engine, _, _ = _build_engine([])
        self.assertIsNone(engine.handle_event(object()))

    def test_countup_direction_from_config(self) -> None:
        engine, _, _ = _build_engine([], direction="countup")
        engine.handle_event(TickEvent())
        self.assertEqual("00:00:01", engine.timer.snapshot().display)


class RuntimeLoopTests(unittest.TestCase):
    def test_run_redraws_after_each_event_until_quit(self) -> None:
        engine, renderer, source = _build_engine([b"s", b"x", b"r", b"q"])
        try:
            exit_code = engine.run()
        finally:
            source.release.set()

        self.assertEqual(0, exit_code)
        self.assertEqual(4, len(renderer.frames))
        first_lines, first_stopped = renderer.frames[0]
        self.assertEqual("00:01:00", first_lines[0])
        self.assertEqual("→ (s) stop", first_lines[1])
        self.assertFalse(first_stopped)
        self.assertTrue(renderer.frames[1][1])

    def test_run_closes_channels_on_exit(self) -> None:
        engine, _, source = _build_engine([b"q"])
        try:
            engine.run()
        finally:
            source.release.set()

        resources = engine.resources
        self.assertTrue(resources.publisher.closed)
        self.assertTrue(resources.stop_signal.closed)
        self.assertTrue(resources.resume_signal.closed)
        self.assertIsNotNone(resources.ticker)
        if resources.ticker is None:
            self.fail("Expected ticker to be created")
        self.assertFalse(resources.ticker.is_running)

    def test_run_exits_when_input_closes(self) -> None:
        engine, renderer, source = _build_engine([])
        source.release.set()

        self.assertEqual(0, engine.run())
        self.assertEqual(1, len(renderer.frames))

    def test_ticks_reach_the_clock(self) -> None:
        engine, renderer, source = _build_engine([], tick_interval_seconds=0.01)
        try:
            timer = threading.Timer(0.3, source.release.set)
            timer.start()
            exit_code = engine.run()
        finally:
            source.release.set()

        self.assertEqual(0, exit_code)
        self.assertLess(engine.timer.snapshot().total_seconds, 60)
        self.assertGreater(len(renderer.frames), 1)


if __name__ == "__main__":
    unittest.main()
