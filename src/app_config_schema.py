"""Dataclass schema objects used by runtime configuration loading."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

DEFAULT_CONFIG_FILE = "config.toml"
CONFIG_FILE_ENV = "POMODORO_CONFIG_FILE"


class AppConfigurationError(Exception):
    """Raised when application configuration fails."""


@dataclass(frozen=True)
class LoggingSettings:
    """Log level and destination from `[logging]`; the screen belongs to the renderer."""
    level: str = "INFO"
    file: str = "pomodoro.log"


@dataclass(frozen=True)
class DisplaySettings:
    """Rich style strings used for the clock line from `[display]`."""
    clock_style: str = "bold"
    stopped_style: str = "dim"


@dataclass(frozen=True)
class TimerSettings:
    """Clock direction from `[timer]`; the start value itself is fixed."""
    direction: str = "countdown"


@dataclass(frozen=True)
class AppConfig:
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    display: DisplaySettings = field(default_factory=DisplaySettings)
    timer: TimerSettings = field(default_factory=TimerSettings)
    source_file: Optional[str] = None
