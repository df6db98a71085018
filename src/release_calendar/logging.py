"""Logging for the release calendar, built on loguru.

Every module logs through ``get_logger(__name__)``. Polling code binds the
schedule source (and, for GitHub, the organization) so that one poll cycle
can be followed across sources in the output:

    log = bind_source("jira")
    log.warning("Failed to poll release schedules")

Log records from httpx and uvicorn are routed through loguru as well, so
that the server, the upstream clients and the application share one
format and one level.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal

from loguru import logger

if TYPE_CHECKING:
    from loguru import Logger, Record

LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_CONSOLE_FORMAT = (
    "<dim>{{time:HH:mm:ss}}</dim> | "
    "<level>{{level: <8}}</level> | "
    "<cyan>{origin}</cyan> - "
    "<level>{{message}}</level>\n{{exception}}"
)

_FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
    "{extra[name]}:{function}:{line} | {extra} | {message}"
)

# Third-party stdlib loggers: (level when debugging, level otherwise)
_LIBRARY_LEVELS: dict[str, tuple[int, int]] = {
    "httpx": (logging.DEBUG, logging.WARNING),
    "httpcore": (logging.DEBUG, logging.WARNING),
    "uvicorn.access": (logging.INFO, logging.WARNING),
}

# Loggers that install their own handlers and must propagate to ours instead
_SELF_HANDLED_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

_configured = False


class InterceptHandler(logging.Handler):
    """Forward standard library log records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Report the frame that called the stdlib logger, not logging itself
        frame = logging.currentframe()
        depth = 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _console_format(record: Record) -> str:
    # Records from get_logger carry the module in extra; intercepted ones don't
    origin = "{extra[name]}" if "name" in record["extra"] else "{name}"
    return _CONSOLE_FORMAT.format(origin=origin)


def _effective_level(level: LogLevel, verbose: bool, quiet: bool) -> LogLevel:
    if verbose:
        return "DEBUG"
    if quiet:
        return "WARNING"
    return level


def setup_logging(
    level: LogLevel = "INFO",
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Path | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
    serialize: bool = False,
) -> Logger:
    """Configure console (and optionally file) logging.

    Args:
        level: Level from settings
        verbose: Log at DEBUG regardless of ``level``; wins over ``quiet``
        quiet: Log at WARNING regardless of ``level``
        log_file: Also write everything from DEBUG up to this rotating file
        rotation: When to rotate the file (e.g., "10 MB", "1 day")
        retention: How long rotated files are kept
        serialize: Write the file as JSON lines

    Returns:
        The configured loguru logger
    """
    global _configured

    effective_level = _effective_level(level, verbose, quiet)

    logger.remove()
    logger.add(
        sys.stderr,
        level=effective_level,
        format=_console_format,
        colorize=True,
        backtrace=True,
        diagnose=True,
    )
    if log_file:
        _add_file_sink(log_file, rotation, retention, serialize)

    _intercept_stdlib_logging(effective_level)

    _configured = True
    return logger


def _add_file_sink(log_file: Path, rotation: str, retention: str, serialize: bool) -> None:
    logger.add(
        log_file,
        level="DEBUG",
        format=_FILE_FORMAT,
        rotation=rotation,
        retention=retention,
        compression="gz",
        serialize=serialize,
        filter=lambda record: "name" in record["extra"],
    )


def _intercept_stdlib_logging(level: LogLevel) -> None:
    """Route every stdlib logger (httpx, uvicorn, ...) through loguru."""
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    for name in _SELF_HANDLED_LOGGERS:
        library_logger = logging.getLogger(name)
        library_logger.handlers = []
        library_logger.propagate = True

    debugging = level in ("TRACE", "DEBUG")
    for name, (debug_level, default_level) in _LIBRARY_LEVELS.items():
        logging.getLogger(name).setLevel(debug_level if debugging else default_level)


def get_logger(name: str) -> Logger:
    """Get a logger bound to a module name.

    Usage:
        logger = get_logger(__name__)
        logger.info("Polled {} schedule(s)", count)
    """
    return logger.bind(name=name)


def bind_source(source: str) -> Logger:
    """Get a logger bound to a schedule source ("github", "jira", "ical")."""
    return logger.bind(name="release", source=source)


def bind_organization(organization: str) -> Logger:
    """Get a logger bound to the GitHub source and one of its organizations."""
    return logger.bind(name="release", source="github", organization=organization)


class LogContext:
    """Adds context to every record logged inside a ``with`` block.

    Unlike ``bind``, the context also reaches records logged by callees
    through their own module loggers.

    Usage:
        with LogContext(update=3):
            await updater.update_releases()
    """

    def __init__(self, **context: Any) -> None:
        self._context = context
        self._contextualized: Any = None

    def __enter__(self) -> Logger:
        self._contextualized = logger.contextualize(**self._context)
        self._contextualized.__enter__()
        return logger

    def __exit__(self, *exc_info: Any) -> None:
        if self._contextualized is not None:
            self._contextualized.__exit__(*exc_info)
            self._contextualized = None


def is_configured() -> bool:
    """Whether ``setup_logging`` has run since the last reset."""
    return _configured


def reset_logging() -> None:
    """Remove every sink and forget the configuration (for tests)."""
    global _configured
    logger.remove()
    _configured = False
