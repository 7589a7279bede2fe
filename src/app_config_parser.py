"""Typed parser for config.toml sections into immutable app settings."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from rich.errors import StyleSyntaxError
from rich.style import Style

from app_config_schema import (
    AppConfig,
    AppConfigurationError,
    DisplaySettings,
    LoggingSettings,
    TimerSettings,
)
from pomodoro.constants import DIRECTIONS

_ALLOWED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_FORBIDDEN_TIMER_FIELDS = ("hours", "minutes", "seconds", "duration", "duration_seconds")


def parse_app_config(
    raw: Mapping[str, Any],
    *,
    base_dir: Path,
    source_file: Optional[str],
) -> AppConfig:
    """Parse raw TOML mappings into strongly typed application settings."""
    return AppConfig(
        logging=_parse_logging_settings(_section(raw, "logging"), base_dir=base_dir),
        display=_parse_display_settings(_section(raw, "display")),
        timer=_parse_timer_settings(_section(raw, "timer")),
        source_file=source_file,
    )


def log_level_value(settings: LoggingSettings) -> int:
    return logging.getLevelName(settings.level)


def _parse_logging_settings(
    section: Mapping[str, Any],
    *,
    base_dir: Path,
) -> LoggingSettings:
    level = _as_str(section.get("level", "INFO"), "logging.level").upper()
    if level not in _ALLOWED_LOG_LEVELS:
        allowed = ", ".join(sorted(_ALLOWED_LOG_LEVELS))
        raise AppConfigurationError(f"logging.level must be one of: {allowed}")

    log_file = _as_str(section.get("file", "pomodoro.log"), "logging.file")
    return LoggingSettings(
        level=level,
        file=_resolve_path(base_dir, log_file),
    )


def _parse_display_settings(section: Mapping[str, Any]) -> DisplaySettings:
    return DisplaySettings(
        clock_style=_as_style(section.get("clock_style", "bold"), "display.clock_style"),
        stopped_style=_as_style(
            section.get("stopped_style", "dim"),
            "display.stopped_style",
        ),
    )


def _parse_timer_settings(section: Mapping[str, Any]) -> TimerSettings:
    present = [name for name in _FORBIDDEN_TIMER_FIELDS if name in section]
    if present:
        joined = ", ".join(f"timer.{name}" for name in present)
        raise AppConfigurationError(
            f"The clock duration is fixed and cannot be configured: {joined}"
        )

    direction = _as_str(section.get("direction", "countdown"), "timer.direction").lower()
    if direction not in DIRECTIONS:
        allowed = ", ".join(sorted(DIRECTIONS))
        raise AppConfigurationError(f"timer.direction must be one of: {allowed}")
    return TimerSettings(direction=direction)


def _section(root: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    raw = root.get(name, {})
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise AppConfigurationError(f"[{name}] must be a table.")
    return raw


def _as_str(value: Any, field: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    raise AppConfigurationError(f"{field} must be a string.")


def _as_style(value: Any, field: str) -> str:
    text = _as_str(value, field)
    if not text:
        return "none"
    try:
        Style.parse(text)
    except StyleSyntaxError as error:
        raise AppConfigurationError(f"{field} is not a valid style: {error}") from error
    return text


def _resolve_path(base_dir: Path, raw: str) -> str:
    if not raw:
        return ""
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (base_dir / path).resolve()
    return str(path)
