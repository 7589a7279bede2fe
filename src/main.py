import logging
import signal
import sys
from typing import Optional

from rich.console import Console

from app_config import AppConfig, AppConfigurationError, load_app_config, log_level_value
from runtime import RuntimeBootstrap, RuntimeEngine
from terminal import ScreenRenderer, TerminalSession, TerminalSetupError


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """Configure logging for the application.

    The terminal is owned by the renderer, so records go to `log_file` when
    one is configured and to stderr otherwise.
    """
    handlers: Optional[list[logging.Handler]] = None
    if log_file:
        handlers = [logging.FileHandler(log_file, encoding="utf-8")]
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )
    return logging.getLogger("pomodoro_clock")


def setup_signal_handlers() -> None:
    """Turn SIGTERM into a normal exit so the terminal mode is restored."""

    def signal_handler(signum: int, frame) -> None:
        sys.exit(0)

    signal.signal(signal.SIGTERM, signal_handler)


def main() -> int:
    """Run the terminal pomodoro clock."""
    try:
        app_config = load_app_config()
    except AppConfigurationError as error:
        print(f"Configuration error: {error}", file=sys.stderr)
        return 1

    try:
        logger = setup_logging(
            level=log_level_value(app_config.logging),
            log_file=app_config.logging.file,
        )
    except OSError as error:
        print(f"Cannot open log file {app_config.logging.file}: {error}", file=sys.stderr)
        return 1

    if app_config.source_file:
        logger.info("Loaded runtime config: %s", app_config.source_file)
    setup_signal_handlers()
    return run_clock(app_config, logger)


def run_clock(app_config: AppConfig, logger: logging.Logger) -> int:
    renderer = ScreenRenderer(
        Console(highlight=False),
        clock_style=app_config.display.clock_style,
        stopped_style=app_config.display.stopped_style,
    )

    try:
        with TerminalSession(logger=logging.getLogger("terminal")) as session:
            renderer.clear()
            renderer.show_cursor(False)
            try:
                engine = RuntimeEngine(
                    RuntimeBootstrap(
                        logger=logging.getLogger("runtime"),
                        app_config=app_config,
                        renderer=renderer,
                        key_source=session,
                    )
                )
                return engine.run()
            finally:
                renderer.finish()
    except TerminalSetupError as error:
        logger.error("Terminal setup failed: %s", error)
        print(f"Cannot start the clock: {error}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.info("Shutdown requested by keyboard interrupt.")
        return 0
    except OSError as error:
        logger.error("Terminal I/O failed: %s", error, exc_info=True)
        print(f"Terminal I/O failed: {error}", file=sys.stderr)
        return 1


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
