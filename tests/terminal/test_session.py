import os
import termios
import unittest
from unittest.mock import patch

from terminal.session import TerminalSession, TerminalSetupError


class _StreamStub:
    def __init__(self, fd: int = 0):
        self._fd = fd

    def fileno(self) -> int:
        return self._fd


class _NoFilenoStream:
    def fileno(self) -> int:
        raise ValueError("I/O operation on closed file")


class TerminalSessionTests(unittest.TestCase):
    def test_rejects_stream_without_descriptor(self) -> None:
        with self.assertRaises(TerminalSetupError):
            TerminalSession(_NoFilenoStream()).enable()

    def test_rejects_non_terminal(self) -> None:
        read_fd, write_fd = os.pipe()
        self.addCleanup(os.close, read_fd)
        self.addCleanup(os.close, write_fd)

        with self.assertRaises(TerminalSetupError):
            with TerminalSession(_StreamStub(read_fd)):
                self.fail("session must not be entered")

    def test_restores_saved_mode_on_exit(self) -> None:
        saved = ["saved-attrs"]
        with patch("terminal.session.os.isatty", return_value=True), patch(
            "terminal.session.termios.tcgetattr", return_value=saved
        ), patch("terminal.session.tty.setcbreak") as setcbreak, patch(
            "terminal.session.termios.tcsetattr"
        ) as tcsetattr:
            with TerminalSession(_StreamStub(7)) as session:
                self.assertTrue(session.active)
                setcbreak.assert_called_once_with(7)

        tcsetattr.assert_called_once_with(7, termios.TCSADRAIN, saved)
        self.assertFalse(session.active)

    def test_restores_mode_when_body_raises(self) -> None:
        with patch("terminal.session.os.isatty", return_value=True), patch(
            "terminal.session.termios.tcgetattr", return_value=["attrs"]
        ), patch("terminal.session.tty.setcbreak"), patch(
            "terminal.session.termios.tcsetattr"
        ) as tcsetattr:
            with self.assertRaises(RuntimeError):
                with TerminalSession(_StreamStub(3)):
                    raise RuntimeError("render failed")

        tcsetattr.assert_called_once()

    def test_setup_failure_is_reported(self) -> None:
        with patch("terminal.session.os.isatty", return_value=True), patch(
            "terminal.session.termios.tcgetattr",
            side_effect=termios.error(25, "Inappropriate ioctl for device"),
        ):
            with self.assertRaises(TerminalSetupError):
                TerminalSession(_StreamStub(3)).enable()

    def test_read_chunk_reads_from_descriptor(self) -> None:
        with patch("terminal.session.os.isatty", return_value=True), patch(
            "terminal.session.termios.tcgetattr", return_value=["attrs"]
        ), patch("terminal.session.tty.setcbreak"), patch(
            "terminal.session.termios.tcsetattr"
        ), patch("terminal.session.os.read", return_value=b"s") as read:
            with TerminalSession(_StreamStub(5)) as session:
                self.assertEqual(b"s", session.read_chunk())

        read.assert_called_once_with(5, 32)

    def test_read_chunk_requires_active_session(self) -> None:
        with self.assertRaises(TerminalSetupError):
            TerminalSession(_StreamStub()).read_chunk()


if __name__ == "__main__":
    unittest.main()
