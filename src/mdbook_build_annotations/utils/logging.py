"""Diagnostics logging for the preprocessor.

mdBook reads the processed book from stdout, so every log line goes to
stderr. Two output modes:
- Human mode: [LEVEL] message (colored if stderr is a TTY)
- JSON mode: {"level":"...","ts":"...","msg":"..."}

The level follows mdBook's ``MDBOOK_LOG`` variable, e.g. ``MDBOOK_LOG=debug``
or ``MDBOOK_LOG=mdbook_build_annotations=debug,handlebars=warn``.
"""

import json
import logging
import os
import sys
from datetime import UTC, datetime
from enum import Enum
from typing import Any, TextIO

LOGGER_NAME = "mdbook_build_annotations"
LOG_ENV_VAR = "MDBOOK_LOG"


class LogMode(Enum):
    """Logging output mode."""

    HUMAN = "human"
    JSON = "json"


# ANSI color codes
class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    RED = "\033[31m"
    GRAY = "\033[90m"


LEVEL_COLORS = {
    logging.DEBUG: Colors.GRAY,
    logging.INFO: Colors.GREEN,
    logging.WARNING: Colors.YELLOW,
    logging.ERROR: Colors.RED,
    logging.CRITICAL: Colors.RED,
}

LEVEL_NAMES = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "off": logging.CRITICAL + 10,
}


def _is_tty(stream: TextIO | None = None) -> bool:
    """Check if the stream is a TTY (supports colors)."""
    if stream is None:
        stream = sys.stderr
    return hasattr(stream, "isatty") and stream.isatty()


class HumanFormatter(logging.Formatter):
    """Formatter for human-readable output.

    Format: [LEVEL] message, or [LEVEL] target: message when
    ``show_target`` is set.
    """

    def __init__(self, use_colors: bool = True, show_target: bool = False) -> None:
        super().__init__()
        self.use_colors = use_colors
        self.show_target = show_target

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record."""
        message = record.getMessage()
        if self.show_target:
            message = f"{record.name}: {message}"

        if self.use_colors:
            color = LEVEL_COLORS.get(record.levelno, Colors.RESET)
            return f"{color}[{record.levelname}]{Colors.RESET} {message}"
        return f"[{record.levelname}] {message}"


class JSONFormatter(logging.Formatter):
    """Formatter for JSON lines output (machine-readable).

    Format: {"level":"INFO","ts":"2026-01-31T19:45:23+00:00","msg":"..."}
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as JSON."""
        log_entry: dict[str, Any] = {
            "level": record.levelname,
            "ts": datetime.now(UTC).isoformat(),
            "target": record.name,
            "msg": record.getMessage(),
        }
        return json.dumps(log_entry)


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Get a logger below the package logger.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def level_from_directives(directives: str | None, default: int = logging.INFO) -> int:
    """Work out the package log level from an ``MDBOOK_LOG`` style value.

    A bare level (``debug``) applies to everything. A ``target=level``
    directive only counts when the target is this package, and then beats
    any bare level regardless of order. Among matching targets the longest
    wins, then the later one. Unknown levels are ignored.

    Args:
        directives: Comma-separated directives, or None
        default: Level used when nothing applies

    Returns:
        Logging level
    """
    if not directives:
        return default

    global_level: int | None = None
    target_level: int | None = None
    target_length = -1
    for directive in directives.split(","):
        directive = directive.strip()
        if not directive:
            continue
        target, _, value = directive.rpartition("=")
        level = LEVEL_NAMES.get(value.lower())
        if level is None:
            continue
        if not target:
            global_level = level
            continue
        target = target.replace("-", "_")
        if LOGGER_NAME.startswith(target) and len(target) >= target_length:
            target_level = level
            target_length = len(target)

    if target_level is not None:
        return target_level
    if global_level is not None:
        return global_level
    return default


def setup_logging(
    mode: LogMode = LogMode.HUMAN,
    level: int = logging.INFO,
    stream: TextIO | None = None,
    show_target: bool = False,
) -> None:
    """Configure the package logger.

    Args:
        mode: Output mode (human, json)
        level: Minimum log level
        stream: Output stream (default: stderr)
        show_target: Prefix human-mode lines with the logger name
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    logger.handlers.clear()

    stream = stream or sys.stderr
    if mode == LogMode.JSON:
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = HumanFormatter(use_colors=_is_tty(stream), show_target=show_target)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def configure_from_cli(
    verbose: bool = False,
    quiet: bool = False,
    json_output: bool = False,
) -> None:
    """Configure logging from CLI flags and the ``MDBOOK_LOG`` variable.

    Args:
        verbose: Force debug output
        quiet: Only warnings and errors
        json_output: Emit JSON lines instead of human output
    """
    log_env = os.environ.get(LOG_ENV_VAR)

    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = level_from_directives(log_env)

    mode = LogMode.JSON if json_output else LogMode.HUMAN

    # Targets are only interesting when someone is tuning levels per target.
    setup_logging(mode=mode, level=level, show_target=log_env is not None)
