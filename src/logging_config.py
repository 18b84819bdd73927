"""
Logging Configuration for the Season Engine

Every engine module logs through `logging.getLogger(__name__)`; this module
only decides where those records go. Call one of the setup functions once at
application startup.

Usage Example:
    from logging_config import setup_logging, get_logger

    setup_logging(level="INFO", log_dir="logs")

    logger = get_logger(__name__)
    logger.info("Season 2025 loaded")

Log Files Created:
- logs/season_engine.log: Main log (INFO+): transitions, firings, week summaries
- logs/season_engine_debug.log: Debug log (DEBUG+)
- logs/season_engine_error.log: Error log (ERROR+)

Each file rotates at 10MB with 5 backup files.
"""

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Optional


DETAILED_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"
)

SIMPLE_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

CONSOLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_FILE_PREFIX = "season_engine"

# Engine packages, used by the per-component presets
CAREER_MODULES = ("career", "career.patience_meter", "career.firing_mechanics", "career.tenure")
STANDINGS_MODULES = ("playoff_system", "game_cycle")
OFFSEASON_MODULES = ("offseason", "season")


class ColoredFormatter(logging.Formatter):
    """
    Console formatter that colors the level name.

    The record is restored afterwards so file handlers sharing it never
    receive escape codes.
    """

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'
    }

    def format(self, record):
        levelname = record.levelname
        if levelname not in self.COLORS:
            return super().format(record)

        record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def _level(name: str) -> int:
    return getattr(logging, name.upper())


def _rotating_handler(
    log_dir: str,
    suffix: str,
    level: int,
    log_format: str,
    max_bytes: int,
    backup_count: int
) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=os.path.join(log_dir, f"{LOG_FILE_PREFIX}{suffix}.log"),
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
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
    format_style: str = "detailed"
) -> None:
    """
    Configure the root logger.

    Replaces any handlers already on the root logger, so calling it twice
    does not duplicate output.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for log files
        enable_console: Whether to log to the console
        enable_file: Whether to write rotating log files
        max_bytes: Maximum size per log file before rotation
        backup_count: Rotated files kept per log
        format_style: "detailed" or "simple" main-log format
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(_level(level))
    root_logger.handlers.clear()

    if enable_console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(_level(level))
        console_handler.setFormatter(ColoredFormatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(console_handler)

    if enable_file:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        main_format = DETAILED_FORMAT if format_style == "detailed" else SIMPLE_FORMAT

        for suffix, file_level, file_format in (
            ("", logging.INFO, main_format),
            ("_debug", logging.DEBUG, DETAILED_FORMAT),
            ("_error", logging.ERROR, DETAILED_FORMAT),
        ):
            root_logger.addHandler(
                _rotating_handler(log_dir, suffix, file_level, file_format, max_bytes, backup_count)
            )

    root_logger.info(
        f"Logging initialized - Level: {level}, "
        f"Console: {enable_console}, File: {enable_file}"
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module (typically `__name__`)."""
    return logging.getLogger(name)


def log_exception(
    logger: logging.Logger,
    exception: Exception,
    context: Optional[dict] = None,
    level: str = "ERROR"
) -> None:
    """
    Log an exception with its traceback and season context.

    Exceptions that carry `to_dict()` (the season and career hierarchies)
    contribute their error code to the message.

    Example:
        >>> try:
        ...     controller.advance(state)
        ... except SeasonException as e:
        ...     log_exception(logger, e, context={"year": 2025, "week": 9})
    """
    context_str = ""
    if context:
        context_str = f" [{', '.join(f'{k}={v}' for k, v in context.items())}]"

    error_code = getattr(exception, 'error_code', None)
    code_str = f" ({error_code})" if error_code else ""

    logger.log(
        _level(level),
        f"Exception occurred{context_str}{code_str}: {type(exception).__name__}: {exception}",
        exc_info=True
    )


def configure_module_logger(
    module_name: str,
    level: Optional[str] = None,
    propagate: bool = True
) -> logging.Logger:
    """
    Set the level of one module's logger.

    Args:
        module_name: Logger name (e.g., "career.firing_mechanics")
        level: Log level for this module (None = inherit from root)
        propagate: Whether to propagate to parent loggers
    """
    logger = logging.getLogger(module_name)

    if level:
        logger.setLevel(_level(level))

    logger.propagate = propagate

    return logger


class LogContext:
    """
    Context manager for temporary log level changes.

    Example:
        >>> with LogContext(get_logger("playoff_system"), "DEBUG"):
        ...     analyzer.analyze(standings, week=15)
    """

    def __init__(self, logger: logging.Logger, level: str):
        self.logger = logger
        self.new_level = _level(level)
        self.original_level = logger.level

    def __enter__(self):
        self.logger.setLevel(self.new_level)
        return self.logger

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.logger.setLevel(self.original_level)


# Component presets

def setup_career_logging(level: str = "INFO") -> None:
    """Patience changes and firing decisions."""
    for module_name in CAREER_MODULES:
        configure_module_logger(module_name, level=level)


def setup_standings_logging(level: str = "INFO") -> None:
    """
    Week simulation, standings and playoff implications.

    Skipped games are logged at WARNING, so "WARNING" keeps only failures.
    """
    for module_name in STANDINGS_MODULES:
        configure_module_logger(module_name, level=level)


def setup_offseason_logging(level: str = "INFO") -> None:
    """Phase transitions and refused offseason advances."""
    for module_name in OFFSEASON_MODULES:
        configure_module_logger(module_name, level=level)


# Environment presets

def setup_production_logging(log_dir: str = "logs") -> None:
    """INFO to rotating files only, simple format."""
    setup_logging(
        level="INFO",
        log_dir=log_dir,
        enable_console=False,
        enable_file=True,
        format_style="simple"
    )


def setup_development_logging(log_dir: str = "logs") -> None:
    """DEBUG to colored console and files, detailed format."""
    setup_logging(
        level="DEBUG",
        log_dir=log_dir,
        enable_console=True,
        enable_file=True,
        format_style="detailed"
    )


def setup_testing_logging() -> None:
    """WARNING to console only, to keep test output readable."""
    setup_logging(
        level="WARNING",
        log_dir="logs",
        enable_console=True,
        enable_file=False,
        format_style="simple"
    )
