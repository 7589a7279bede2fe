from .screen import ScreenRenderer
from .session import TerminalSession, TerminalSetupError

__all__ = ["ScreenRenderer", "TerminalSession", "TerminalSetupError"]
