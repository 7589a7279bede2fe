"""Keyboard-bound commands and the ordered registry that dispatches them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Optional

from .constants import ACTION_QUIT, ACTION_RESET, ACTION_RESUME, ACTION_STOP

ACTION_ARROW = "→"


class ActionKind(str, Enum):
    STOP = ACTION_STOP
    RESUME = ACTION_RESUME
    RESET = ACTION_RESET
    QUIT = ACTION_QUIT


class DuplicateShortcutError(ValueError):
    """Raised when two actions claim the same shortcut."""


@dataclass(frozen=True)
class Action:
    """A named command selected by a single-character shortcut."""
    kind: ActionKind
    shortcut: str
    description: str

    def __post_init__(self) -> None:
        if len(self.shortcut) != 1:
            raise ValueError(
                f"shortcut must be a single character, got: {self.shortcut!r}"
            )

    def label(self) -> str:
        return f"{ACTION_ARROW} ({self.shortcut}) {self.description}"


class ActionRegistry:
    """Fixed, ordered set of actions with unique shortcuts."""

    def __init__(self, actions: Iterable[Action]):
        ordered = tuple(actions)
        seen: set[str] = set()
        for action in ordered:
            if action.shortcut in seen:
                raise DuplicateShortcutError(
                    f"shortcut {action.shortcut!r} is already bound"
                )
            seen.add(action.shortcut)
        self._actions = ordered

    def find(self, shortcut: str) -> Optional[Action]:
        for action in self._actions:
            if action.shortcut == shortcut:
                return action
        return None

    def __iter__(self) -> Iterator[Action]:
        return iter(self._actions)

    def __len__(self) -> int:
        return len(self._actions)


def build_default_actions() -> ActionRegistry:
    return ActionRegistry(
        [
            Action(ActionKind.STOP, "s", "stop"),
            Action(ActionKind.RESUME, "c", "continue"),
            Action(ActionKind.RESET, "r", "reset"),
            Action(ActionKind.QUIT, "q", "quit"),
        ]
    )
