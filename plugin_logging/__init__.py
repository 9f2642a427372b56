# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Plugin Logging.

A pluggable logging library that formats log events of any shape (plain
strings, printf-style strings, error records, exceptions) into one canonical
message and routes it to screen, file and database writers.

Example:
    >>> from plugin_logging import LoggerConfig, create_logger
    >>>
    >>> logger = create_logger(
    ...     LoggerConfig(writers=["screen", "file"], file_path="tmp/logs/app.log")
    ... )
    >>> logger.warning("Archive %s is %d days old", "visits", 3)
    >>>
    >>> try:
    ...     1 / 0
    ... except ZeroDivisionError as e:
    ...     logger.error(e)  # errors are always shown on screen too
"""

__version__ = "0.1.0"

from .backtrace import Frame, render_backtrace, strip_paths
from .config import ConfigError, LoggerConfig, load_logger_config
from .console_error_reporter import ConsoleErrorReporter
from .database_sink import DatabaseSink
from .error_reporter import ErrorReporter
from .factory import (
    clear_default_logger,
    create_error_reporter,
    create_logger,
    get_logger,
    set_default_logger,
)
from .file_sink import FileSink
from .formatter import DEFAULT_MESSAGE_TEMPLATE, FormatError, MessageFormatter
from .log_store import (
    LogStore,
    LogStoreConnectionError,
    LogStoreError,
    LogStoreNotConnectedError,
    create_log_store,
)
from .logger import Logger
from .memory_log_store import InMemoryLogStore
from .memory_sink import MemorySink
from .payload import ErrorRecord, ExceptionRecord, LogEvent, PlainMessage
from .screen_sink import ScreenSink
from .severity import Severity, should_log
from .silent_error_reporter import ContainedFailure, SilentErrorReporter
from .sink import Sink, SinkError
from .stdlib_sink import StdlibLoggingSink

__all__ = [
    "__version__",
    # Coordinator
    "Logger",
    "LoggerConfig",
    "ConfigError",
    "load_logger_config",
    "create_logger",
    "get_logger",
    "set_default_logger",
    "clear_default_logger",
    # Events and formatting
    "Severity",
    "should_log",
    "PlainMessage",
    "ErrorRecord",
    "ExceptionRecord",
    "LogEvent",
    "Frame",
    "render_backtrace",
    "strip_paths",
    "MessageFormatter",
    "FormatError",
    "DEFAULT_MESSAGE_TEMPLATE",
    # Sinks
    "Sink",
    "SinkError",
    "ScreenSink",
    "FileSink",
    "DatabaseSink",
    "MemorySink",
    "StdlibLoggingSink",
    # Storage
    "LogStore",
    "LogStoreError",
    "LogStoreConnectionError",
    "LogStoreNotConnectedError",
    "InMemoryLogStore",
    "create_log_store",
    # Error reporting
    "ErrorReporter",
    "ConsoleErrorReporter",
    "SilentErrorReporter",
    "ContainedFailure",
    "create_error_reporter",
]
