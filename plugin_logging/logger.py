# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Logger coordinator: filtering, formatting and dispatch to sinks."""

import logging
import sys
from typing import Any, Callable, TextIO

from .config import ConfigError, LoggerConfig, load_logger_config
from .console_error_reporter import ConsoleErrorReporter
from .database_sink import DatabaseSink
from .error_reporter import ErrorReporter
from .file_sink import FileSink
from .formatter import MessageFormatter
from .log_store import LogStore, create_log_store
from .memory_sink import MemorySink
from .payload import ErrorRecord, ExceptionRecord, LogEvent, Payload, PlainMessage
from .plugin import infer_plugin_name
from .screen_sink import ScreenSink
from .severity import DEFAULT_THRESHOLD, Severity, parse_severity, should_log
from .sink import Sink
from .stdlib_sink import StdlibLoggingSink

logger = logging.getLogger(__name__)

SCREEN_WRITER = "screen"

SinkFactory = Callable[["Logger", LoggerConfig], Sink]


def _build_screen(owner: "Logger", config: LoggerConfig) -> Sink:
    return ScreenSink(
        product_name=config.product_name,
        product_version=config.product_version,
        support_url=config.support_url,
        stream=owner.stream,
    )


def _build_file(owner: "Logger", config: LoggerConfig) -> Sink:
    return FileSink(config.file_path)


def _build_database(owner: "Logger", config: LoggerConfig) -> Sink:
    return DatabaseSink(owner.get_log_store(), table=config.database_table)


def _build_memory(owner: "Logger", config: LoggerConfig) -> Sink:
    return MemorySink()


def _build_logging(owner: "Logger", config: LoggerConfig) -> Sink:
    return StdlibLoggingSink()


BUILTIN_WRITERS: dict[str, SinkFactory] = {
    "screen": _build_screen,
    "file": _build_file,
    "database": _build_database,
    "memory": _build_memory,
    "logging": _build_logging,
}


def to_payload(message: Any, args: tuple = ()) -> Payload:
    """Coerce a log call's message and arguments into a payload.

    Strings (and any other object, via str()) become PlainMessage with the
    given printf-style args; exceptions are captured as ExceptionRecord;
    records are used as they are.
    """
    if isinstance(message, (PlainMessage, ErrorRecord, ExceptionRecord)):
        return message
    if isinstance(message, BaseException):
        return ExceptionRecord.from_exception(message)
    if not isinstance(message, str):
        message = str(message)
    return PlainMessage(message, tuple(args))


class Logger:
    """Routes log events to the configured sinks.

    Each call is filtered against the configured threshold, rendered once
    into a canonical message and written to every configured writer. Error
    events are additionally written to the screen, once. A failing sink is
    reported to the error reporter and never stops the remaining sinks or
    raises to the caller.

    Calls are synchronous. Configuration is per-instance mutable state with
    no locking; callers that reconfigure from several threads must
    serialize those calls themselves.

    Example:
        >>> log = Logger(LoggerConfig(writers=["file"], file_path="/tmp/app.log"))
        >>> log.warning("Disk usage at %d%%", 91)
        >>> log.error(ValueError("bad input"))  # also shown on screen
    """

    def __init__(
        self,
        config: LoggerConfig | None = None,
        *,
        config_loader: Callable[[], LoggerConfig] | None = None,
        log_store: LogStore | None = None,
        stream: TextIO | None = None,
        error_reporter: ErrorReporter | None = None,
        formatter: MessageFormatter | None = None,
    ):
        """Initialize the logger.

        Args:
            config: Initial configuration. Also restored by reset() unless
                config_loader is given.
            config_loader: Callable producing the configuration on first use
                and after reset(). Defaults to reading environment variables.
            log_store: Store used by the database writer. An in-memory or
                LOG_STORE_TYPE-configured store is created on demand when omitted.
            stream: Output stream for the screen writer (sys.stdout at
                write time when omitted)
            error_reporter: Receives contained sink failures
                (defaults to ConsoleErrorReporter)
            formatter: Message formatter
        """
        self._fallback_loader: Callable[[], LoggerConfig] = LoggerConfig
        if config_loader is None:
            if config is not None:
                config_loader = lambda: config
            else:
                config_loader = load_logger_config
                self._fallback_loader = lambda: load_logger_config(level=DEFAULT_THRESHOLD.name)
        self._config_loader = config_loader
        self._config: LoggerConfig | None = None
        self._log_store = log_store
        self._owns_store = False
        self.stream = stream
        self.error_reporter = error_reporter or ConsoleErrorReporter()
        self.formatter = formatter or MessageFormatter()
        self._writer_factories: dict[str, SinkFactory] = dict(BUILTIN_WRITERS)
        self._sinks: dict[str, Sink] = {}

    # Configuration ---------------------------------------------------------

    @property
    def config(self) -> LoggerConfig:
        """Current configuration, loaded on first use."""
        if self._config is None:
            config = self._load_config()
            unknown = self._unknown_writers(config)
            if unknown:
                self._report_message(
                    f"Ignoring unknown log writers: {', '.join(unknown)}",
                    level="warning",
                )
                config = config.with_updates(writers=[w for w in config.writers if w not in unknown])
            self._config = config
        return self._config

    def _load_config(self) -> LoggerConfig:
        try:
            return self._config_loader()
        except ConfigError as e:
            self._report_message(f"Invalid log configuration ({e}); falling back to the default log level", level="warning")
            return self._fallback_loader()

    def _unknown_writers(self, config: LoggerConfig) -> list[str]:
        return [w for w in config.writers if w not in self._writer_factories]

    def configure(self, config: LoggerConfig) -> None:
        """Replace the configuration; takes effect on the next call.

        Args:
            config: New configuration

        Raises:
            ConfigError: If a writer name is not registered
        """
        unknown = self._unknown_writers(config)
        if unknown:
            supported = ", ".join(sorted(self._writer_factories))
            raise ConfigError(
                f"Unknown log writers: {', '.join(unknown)}. Supported writers: {supported}"
            )
        self._close_sinks()
        self._config = config

    def register_writer(self, name: str, factory: SinkFactory) -> None:
        """Register a custom writer kind.

        Args:
            name: Writer name used in ``LoggerConfig.writers``
            factory: Callable building the sink from this logger and its config
        """
        name = name.strip().lower()
        self._writer_factories[name] = factory
        sink = self._sinks.pop(name, None)
        if sink is not None:
            sink.close()

    def reset(self) -> None:
        """Discard cached sinks, in-memory state and the current configuration.

        The next call reloads configuration from the config loader.
        """
        self._close_sinks()
        self._config = None
        if self._owns_store and self._log_store is not None:
            self._log_store.disconnect()
            self._log_store = None
            self._owns_store = False

    def close(self) -> None:
        """Release sink resources."""
        self._close_sinks()

    def _close_sinks(self) -> None:
        sinks, self._sinks = self._sinks, {}
        for sink in sinks.values():
            sink.close()

    # Sinks -----------------------------------------------------------------

    def get_log_store(self) -> LogStore:
        """Return the store used by the database writer, creating it if needed."""
        if self._log_store is None:
            self._log_store = create_log_store()
            self._owns_store = True
            logger.debug("Logger: created %s for database writer", type(self._log_store).__name__)
        return self._log_store

    def get_sink(self, writer: str) -> Sink:
        """Return the sink for a writer name, building it on first use.

        Raises:
            ConfigError: If the writer is not registered
        """
        sink = self._sinks.get(writer)
        if sink is None:
            try:
                factory = self._writer_factories[writer]
            except KeyError:
                raise ConfigError(f"Unknown log writer: {writer}") from None
            sink = factory(self, self.config)
            self._sinks[writer] = sink
            logger.debug("Logger: created %s for writer %s", type(sink).__name__, writer)
        return sink

    def writers_for(self, severity: Severity) -> list[str]:
        """Writers an accepted event of ``severity`` is dispatched to."""
        writers = list(self.config.writers)
        if severity == Severity.ERROR and SCREEN_WRITER not in writers:
            writers.append(SCREEN_WRITER)
        return writers

    # Logging ---------------------------------------------------------------

    def log(self, severity: Severity | str | int, message: Any, *args: Any, plugin: str | None = None) -> None:
        """Log a message at the given severity.

        Args:
            severity: Severity of the event
            message: A string (printf-style when args are given), an
                exception, or an ErrorRecord/ExceptionRecord
            *args: printf-style substitution values for string messages
            plugin: Originating plugin; inferred from the caller when omitted
        """
        try:
            self._log(severity, message, args, plugin)
        except Exception as e:
            self._report(e, {"stage": "log"})

    def _log(self, severity: Any, message: Any, args: tuple, plugin: str | None) -> None:
        severity = parse_severity(severity)
        config = self.config
        if not should_log(severity, config.threshold):
            return

        if plugin is None:
            plugin = infer_plugin_name(config.plugin_namespace)

        payload = to_payload(message, args)
        event = LogEvent(severity=severity, payload=payload, plugin=plugin)
        text = self.formatter.format(payload, config.message_template, plugin, severity)
        self._dispatch(text, event)

    def _dispatch(self, text: str, event: LogEvent) -> None:
        for writer in self.writers_for(event.severity):
            try:
                self.get_sink(writer).write(text, event)
            except Exception as e:
                self._report(e, {"writer": writer, "plugin": event.plugin})

    def _report(self, error: Exception, context: dict[str, Any]) -> None:
        try:
            self.error_reporter.report(error, context=context)
        except Exception:
            logger.error("Logger: error reporter failed while reporting %r", error, exc_info=True)

    def _report_message(self, message: str, level: str = "error") -> None:
        try:
            self.error_reporter.capture_message(message, level=level)
        except Exception:
            logger.error("Logger: error reporter failed while capturing %r", message, exc_info=True)

    def error(self, message: Any, *args: Any, plugin: str | None = None) -> None:
        """Log an error-level message. Errors are always shown on screen."""
        self.log(Severity.ERROR, message, *args, plugin=plugin)

    def warning(self, message: Any, *args: Any, plugin: str | None = None) -> None:
        """Log a warning-level message."""
        self.log(Severity.WARNING, message, *args, plugin=plugin)

    def info(self, message: Any, *args: Any, plugin: str | None = None) -> None:
        """Log an info-level message."""
        self.log(Severity.INFO, message, *args, plugin=plugin)

    def debug(self, message: Any, *args: Any, plugin: str | None = None) -> None:
        """Log a debug-level message."""
        self.log(Severity.DEBUG, message, *args, plugin=plugin)

    def verbose(self, message: Any, *args: Any, plugin: str | None = None) -> None:
        """Log a verbose-level message."""
        self.log(Severity.VERBOSE, message, *args, plugin=plugin)

    def exception(self, exc: BaseException | None = None, *, plugin: str | None = None) -> None:
        """Log an exception at error level.

        Intended for use in an exception handler; when ``exc`` is omitted
        the exception currently being handled is logged.

        Args:
            exc: Exception to log
            plugin: Originating plugin; inferred from the caller when omitted
        """
        if exc is None:
            exc = sys.exc_info()[1]
            if exc is None:
                return
        self.log(Severity.ERROR, exc, plugin=plugin)
