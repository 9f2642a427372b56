# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Factory functions for creating loggers and error reporters."""

from typing import Any

from .config import LoggerConfig, load_logger_config
from .console_error_reporter import ConsoleErrorReporter
from .error_reporter import ErrorReporter
from .logger import Logger
from .silent_error_reporter import SilentErrorReporter

_default_logger: Logger | None = None


def create_error_reporter(reporter_type: str = "console", **kwargs: Any) -> ErrorReporter:
    """Factory function to create an error reporter.

    Args:
        reporter_type: "console" or "silent"
        **kwargs: Reporter-specific arguments (``logger_name`` for console)

    Returns:
        ErrorReporter instance

    Raises:
        ValueError: If reporter_type is not recognized
    """
    reporter_type = reporter_type.lower()
    if reporter_type == "console":
        return ConsoleErrorReporter(logger_name=kwargs.get("logger_name"))
    elif reporter_type == "silent":
        return SilentErrorReporter()
    else:
        raise ValueError(
            f"Unknown reporter type: {reporter_type}. "
            f"Must be one of: console, silent"
        )


def create_logger(
    config: LoggerConfig | None = None,
    writers: str | None = None,
    level: str | None = None,
    **kwargs: Any,
) -> Logger:
    """Factory function to create a logger instance.

    Args:
        config: Explicit configuration. When omitted, configuration is read
            from LOG_* environment variables, with ``writers`` and ``level``
            taking precedence over LOG_WRITERS and LOG_LEVEL.
        writers: Comma-separated writer names
        level: Threshold severity name
        **kwargs: Passed to Logger (log_store, stream, error_reporter)

    Returns:
        Logger instance

    Raises:
        ConfigError: If a writer or level is invalid

    Example:
        >>> logger = create_logger(writers="screen,file", level="INFO")
        >>> logger.info("Plugin %s activated", "Goals")
    """
    if config is None:
        config = load_logger_config(writers=writers, level=level)
    logger = Logger(config, **kwargs)
    logger.configure(config)
    return logger


def set_default_logger(logger: Logger) -> None:
    """Install the process-wide default logger returned by get_logger()."""
    global _default_logger
    _default_logger = logger


def get_logger() -> Logger:
    """Return the process-wide default logger.

    A logger configured from environment variables is created on first use
    when no default has been set.
    """
    global _default_logger
    if _default_logger is None:
        _default_logger = Logger()
    return _default_logger


def clear_default_logger() -> None:
    """Reset and forget the process-wide default logger (useful for testing)."""
    global _default_logger
    if _default_logger is not None:
        _default_logger.reset()
    _default_logger = None
