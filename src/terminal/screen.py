"""Positioned clock and action rendering on top of a Rich console."""

from __future__ import annotations

from typing import Optional, Sequence

from rich.console import Console
from rich.control import Control
from rich.text import Text

CLOCK_COLUMN = 2
CLOCK_ROW = 0
ACTIONS_ROW = 2
DEFAULT_CLOCK_STYLE = "bold"
DEFAULT_STOPPED_STYLE = "dim"


class ScreenRenderer:
    """Draws the clock line and one line per action at fixed positions.

    The renderer is the only writer to the console; it is driven solely from
    the consumer loop.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        *,
        clock_style: str = DEFAULT_CLOCK_STYLE,
        stopped_style: str = DEFAULT_STOPPED_STYLE,
    ):
        self._console = console or Console(highlight=False)
        self._clock_style = clock_style
        self._stopped_style = stopped_style
        self._next_free_row = 0

    @property
    def console(self) -> Console:
        return self._console

    def clear(self) -> None:
        self._console.control(Control.clear(), Control.home())

    def show_cursor(self, show: bool) -> None:
        self._console.control(Control.show_cursor(show))

    def draw(self, lines: Sequence[str], *, stopped: bool = False) -> None:
        """Draw `lines[0]` as the clock and the rest as action entries."""
        if not lines:
            return

        clock_line, *action_lines = lines
        clock_style = self._stopped_style if stopped else self._clock_style
        with self._console:
            self._write_at(CLOCK_COLUMN, CLOCK_ROW, Text(clock_line, style=clock_style))
            for offset, line in enumerate(action_lines):
                self._write_at(0, ACTIONS_ROW + offset, Text(line))
        self._next_free_row = ACTIONS_ROW + len(action_lines)

    def finish(self) -> None:
        """Park the cursor below the drawn content so the shell prompt lands cleanly."""
        self._console.control(Control.move_to(0, self._next_free_row), Control.show_cursor(True))
        self._console.line()

    def _write_at(self, column: int, row: int, text: Text) -> None:
        self._console.control(Control.move_to(column, row))
        self._console.print(text, end="", soft_wrap=True)
