"""Logging setup for the video-enhancer CLI.

configure_logging() installs up to two handlers on the root logger: a
rotating log file and stderr. When no file is configured, or the file
cannot be opened, stderr is used so planning warnings stay visible.
Calling it again replaces only the handlers it installed before.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from video_enhancer.logging.handlers import JSONFormatter, TextFormatter

if TYPE_CHECKING:
    from video_enhancer.config.models import LoggingConfig

LOG_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

# Handlers added by configure_logging(), removed again on the next call
_installed: list[logging.Handler] = []


def build_formatter(log_format: str) -> logging.Formatter:
    """Return the formatter for a log format name ("text" or "json")."""
    if log_format.casefold() == "json":
        return JSONFormatter()
    return TextFormatter(TEXT_FORMAT, datefmt=DATE_FORMAT)


def _open_log_file(config: LoggingConfig) -> RotatingFileHandler | None:
    """Open the rotating log file, creating its directory.

    Returns None, after a warning on stderr, if the file cannot be opened.
    """
    path = Path(config.file).expanduser()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return RotatingFileHandler(
            path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"Warning: Could not open log file {path}: {e}\n")
        return None


def configure_logging(config: LoggingConfig) -> list[logging.Handler]:
    """Install log handlers according to a LoggingConfig.

    Args:
        config: Validated logging configuration.

    Returns:
        The handlers now attached to the root logger by this module.
    """
    level = LOG_LEVELS[config.level.casefold()]
    formatter = build_formatter(config.format)

    handlers: list[logging.Handler] = []
    file_handler = _open_log_file(config) if config.file else None
    if file_handler is not None:
        handlers.append(file_handler)
    if config.include_stderr or file_handler is None:
        handlers.append(logging.StreamHandler(sys.stderr))

    root_logger = logging.getLogger()
    for old in _installed:
        root_logger.removeHandler(old)
        old.close()
    _installed.clear()

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
    _installed.extend(handlers)
    root_logger.setLevel(level)
    return handlers


def enable_debug_logging() -> None:
    """Lower the root logger and the installed handlers to DEBUG.

    Used by `enhance --verbose`, which also forwards ffmpeg's own output
    to the debug log.
    """
    logging.getLogger().setLevel(logging.DEBUG)
    for handler in _installed:
        handler.setLevel(logging.DEBUG)
