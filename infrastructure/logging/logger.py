"""Colored logging configuration for TickrShell.

Logging is configured globally when the module is imported. Records go to
stderr so they never interleave with the interactive prompt on stdout, and
the level is taken from the LOG_LEVEL environment variable unless a caller
configures it explicitly.
"""

import datetime
import logging
import os
import sys
from typing import ClassVar


class ColoredFormatter(logging.Formatter):
    """Logging formatter that adds ANSI color codes to log messages.

    Only the level column is colored; timestamps are grey and columns are
    separated by pipes so concurrent output from the input and receive
    threads stays aligned.

    Attributes:
        COLORS: Dictionary mapping log level names to ANSI color codes.
        GREY: ANSI color code for grey (timestamps).
        RESET: ANSI reset code.
    """

    COLORS: ClassVar[dict[str, str]] = {
        "DEBUG": "\033[90m",  # Grey
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    GREY: ClassVar[str] = "\033[90m"
    RESET: ClassVar[str] = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with color codes and aligned columns.

        Args:
            record: LogRecord instance containing log information.

        Returns:
            Colorized log line including the originating thread name.
        """
        if record.levelname == "DEBUG":
            timestamp = datetime.datetime.fromtimestamp(record.created).strftime("%H:%M:%S.%f")[:-3]
        else:
            timestamp = datetime.datetime.fromtimestamp(record.created).strftime("%H:%M:%S")

        level_padded = record.levelname.ljust(8)
        name_padded = record.name.ljust(24)
        thread_padded = record.threadName.ljust(10)
        level_color = self.COLORS.get(record.levelname, self.RESET)

        message = (
            f"{self.GREY}{timestamp}{self.RESET} | "
            f"{level_color}{level_padded}{self.RESET} | "
            f"{thread_padded} | "
            f"{name_padded} | "
            f"{record.getMessage()}"
        )

        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"

        return message


def _resolve_log_level(explicit_level: str | int | None = None) -> int:
    """Resolve a logging level from an explicit value or the environment.

    Explicit levels always win; environment is only consulted when no explicit
    level is provided. Falls back to INFO on invalid values.
    """
    if explicit_level is not None:
        if isinstance(explicit_level, int):
            return explicit_level

        level_name = str(explicit_level).upper()
        return getattr(logging, level_name, logging.INFO)

    env_level = os.getenv("LOG_LEVEL", "INFO").upper()
    return getattr(logging, env_level, logging.INFO)


def _install_handler(root_logger: logging.Logger) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ColoredFormatter())
    root_logger.addHandler(handler)


def _setup_global_logging() -> None:
    """Configure global logging with colored output.

    Idempotent; runs automatically when the module is imported.
    """
    root_logger = logging.getLogger()

    if not root_logger.handlers:
        _install_handler(root_logger)
        root_logger.setLevel(_resolve_log_level())


_setup_global_logging()


def get_logger(name: str) -> logging.Logger:
    """Get a named logger that inherits the globally configured level.

    Args:
        name: Name for the logger, typically the class name.

    Returns:
        Logger instance propagating to the colored root handler.
    """
    return logging.getLogger(name)


def configure_logging(level: str | int | None = None) -> None:
    """Explicitly configure global logging.

    - If ``level`` is provided, it is always honored.
    - Otherwise, the ``LOG_LEVEL`` environment variable is consulted.
    - On invalid values, the level falls back to ``logging.INFO``.

    The chosen level is applied to the root logger and every named logger
    that already exists, so loggers created at import time follow along.
    """
    root_logger = logging.getLogger()

    if not root_logger.handlers:
        _install_handler(root_logger)

    resolved_level = _resolve_log_level(level)
    root_logger.setLevel(resolved_level)

    for name in logging.root.manager.loggerDict:
        logging.getLogger(name).setLevel(resolved_level)
