"""
Logging Configuration for the Season Progression Engine

Sets up the stdlib logging tree used by every engine package:
- Rotating file handlers for the main, debug and error logs
- Colored console output for interactive runs
- Per-subsystem level overrides (calendar, playoffs, offseason)
- Quick presets for production, development and test runs

Usage Example:
    from logging_config import setup_logging, get_logger

    setup_logging(level="INFO", log_dir="logs", enable_file=False)

    logger = get_logger(__name__)
    logger.info("Season simulation started")

Log Files Created (when file output is enabled):
- logs/season_engine.log: Main log (INFO+)
- logs/season_engine_debug.log: Debug log (DEBUG+)
- logs/season_engine_error.log: Error log (ERROR+)

Each file rotates at 10MB with 5 backups.
"""

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Any, Dict, Optional


DETAILED_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"
)

SIMPLE_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

CONSOLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_FILE_PREFIX = "season_engine"


class ColoredFormatter(logging.Formatter):
    """Console formatter that wraps the level name in ANSI colors."""

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'
    }

    def format(self, record):
        # Color a copy so file handlers sharing the record keep plain names
        colored = logging.makeLogRecord(record.__dict__)
        levelname = colored.levelname
        if levelname in self.COLORS:
            colored.levelname = (
                f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"
            )
        return super().format(colored)


def _rotating_handler(
    log_dir: str,
    suffix: str,
    level: int,
    log_format: str,
    max_bytes: int,
    backup_count: int
) -> logging.Handler:
    filename = f"{LOG_FILE_PREFIX}{suffix}.log"
    handler = logging.handlers.RotatingFileHandler(
        filename=os.path.join(log_dir, filename),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding='utf-8'
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(log_format, datefmt=DATE_FORMAT))
    return handler


def setup_logging(
    level: str = "INFO",
    log_dir: str = "logs",
    enable_console: bool = True,
    enable_file: bool = True,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
    format_style: str = "detailed"
) -> None:
    """
    Configure application-wide logging. Call once at startup.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for log files
        enable_console: Whether to log to the console
        enable_file: Whether to write rotating log files
        max_bytes: Maximum size per log file before rotation
        backup_count: Number of rotated files to keep
        format_style: "detailed" or "simple" file format
    """
    numeric_level = getattr(logging, level.upper())

    if enable_file:
        Path(log_dir).mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    log_format = DETAILED_FORMAT if format_style == "detailed" else SIMPLE_FORMAT

    if enable_console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(ColoredFormatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(console_handler)

    if enable_file:
        root_logger.addHandler(
            _rotating_handler(log_dir, "", logging.INFO, log_format, max_bytes, backup_count)
        )
        root_logger.addHandler(
            _rotating_handler(log_dir, "_debug", logging.DEBUG, DETAILED_FORMAT, max_bytes, backup_count)
        )
        root_logger.addHandler(
            _rotating_handler(log_dir, "_error", logging.ERROR, DETAILED_FORMAT, max_bytes, backup_count)
        )

    root_logger.info(
        f"Logging initialized - Level: {level}, "
        f"Console: {enable_console}, File: {enable_file}"
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def log_exception(
    logger: logging.Logger,
    exception: Exception,
    context: Optional[Dict[str, Any]] = None,
    level: str = "ERROR"
) -> None:
    """
    Log an exception with traceback and context.

    Engine exceptions that carry a ``to_dict()`` payload have their error
    code folded into the message.

    Args:
        logger: Logger instance
        exception: Exception to log
        context: Additional context (season, week, phase, ...)
        level: Log level (default: ERROR)
    """
    log_level = getattr(logging, level.upper())

    context_items = dict(context or {})
    error_code = getattr(exception, "error_code", None)
    if error_code:
        context_items.setdefault("error_code", error_code)

    context_str = ""
    if context_items:
        context_str = " [" + ", ".join(f"{k}={v}" for k, v in context_items.items()) + "]"

    logger.log(
        log_level,
        f"Exception occurred{context_str}: {type(exception).__name__}: {getattr(exception, 'message', exception)}",
        exc_info=exception
    )


def configure_module_logger(
    module_name: str,
    level: Optional[str] = None,
    propagate: bool = True
) -> logging.Logger:
    """
    Configure logging for a specific package or module.

    Args:
        module_name: Logger name (e.g., "playoff_system.playoff_manager")
        level: Level for this logger (None = inherit from root)
        propagate: Whether records propagate to parent loggers

    Returns:
        Configured logger
    """
    logger = logging.getLogger(module_name)

    if level:
        logger.setLevel(getattr(logging, level.upper()))

    logger.propagate = propagate

    return logger


# Subsystem logger configurations

def setup_playoff_logging(level: str = "INFO") -> None:
    """Configure logging for seeding and bracket generation."""
    configure_module_logger("playoff_system", level=level)
    configure_module_logger("standings", level=level)


def setup_calendar_logging(level: str = "INFO") -> None:
    """Configure logging for calendar transitions and weekly simulation."""
    configure_module_logger("season_calendar", level=level)
    configure_module_logger("game_cycle", level=level)


def setup_offseason_logging(level: str = "INFO") -> None:
    """
    Configure logging for the offseason state machine.

    Action dispatch logs every rejected action at WARNING, so INFO is
    usually enough to audit a cycle.
    """
    configure_module_logger("offseason", level=level)
    configure_module_logger("salary_cap", level=level)


# Quick setup presets

def setup_production_logging(log_dir: str = "logs") -> None:
    """INFO level, file output only, simple format."""
    setup_logging(
        level="INFO",
        log_dir=log_dir,
        enable_console=False,
        enable_file=True,
        format_style="simple"
    )


def setup_development_logging(log_dir: str = "logs") -> None:
    """DEBUG level, colored console plus files, detailed format."""
    setup_logging(
        level="DEBUG",
        log_dir=log_dir,
        enable_console=True,
        enable_file=True,
        format_style="detailed"
    )


def setup_testing_logging() -> None:
    """WARNING level to the console, no files."""
    setup_logging(
        level="WARNING",
        log_dir="logs",
        enable_console=True,
        enable_file=False,
        format_style="simple"
    )
