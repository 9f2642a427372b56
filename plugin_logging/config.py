# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Logger configuration model and loaders."""

import dataclasses
import os
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

from . import __version__
from .formatter import DEFAULT_MESSAGE_TEMPLATE
from .severity import DEFAULT_THRESHOLD, Severity, parse_severity

DEFAULT_WRITERS = ("screen",)
DEFAULT_FILE_PATH = "tmp/logs/plugin-logging.log"
DEFAULT_DATABASE_TABLE = "logger_message"
DEFAULT_PLUGIN_NAMESPACE = "plugins"


class ConfigError(ValueError):
    """Raised when logger configuration is invalid."""
    pass


def _split_writers(value: Any) -> tuple[str, ...]:
    """Normalize a writer list or comma-separated string."""
    if value is None:
        return ()
    if isinstance(value, str):
        items: Iterable[Any] = value.split(",")
    else:
        items = value

    writers: list[str] = []
    for item in items:
        name = str(item).strip().lower()
        if name and name not in writers:
            writers.append(name)
    return tuple(writers)


@dataclass(frozen=True)
class LoggerConfig:
    """Configuration for a Logger.

    Instances are immutable; use with_updates() to derive a changed copy.

    Attributes:
        writers: Names of the sinks every accepted event is written to
        threshold: Least severe level that is still logged
        message_template: Template with ``%pluginName%`` and ``%message%``
        file_path: Log file used by the file writer
        database_table: Table used by the database writer
        plugin_namespace: Package segment under which plugins live
        product_name: Product name shown in the screen error panel
        product_version: Version shown in the screen error panel
        support_url: Link target for the screen error panel, if any
    """

    writers: tuple[str, ...] = DEFAULT_WRITERS
    threshold: Severity = DEFAULT_THRESHOLD
    message_template: str = DEFAULT_MESSAGE_TEMPLATE
    file_path: str = DEFAULT_FILE_PATH
    database_table: str = DEFAULT_DATABASE_TABLE
    plugin_namespace: str = DEFAULT_PLUGIN_NAMESPACE
    product_name: str = "Plugin Logging"
    product_version: str = __version__
    support_url: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "writers", _split_writers(self.writers))
        try:
            object.__setattr__(self, "threshold", parse_severity(self.threshold))
        except ValueError as e:
            raise ConfigError(str(e)) from e

    def with_updates(self, **updates: Any) -> "LoggerConfig":
        """Return a copy of this config with the given fields replaced.

        Raises:
            ConfigError: If a field name is unknown or a value is invalid
        """
        try:
            return dataclasses.replace(self, **updates)
        except TypeError as e:
            raise ConfigError(str(e)) from e

    @classmethod
    def from_mapping(cls, section: Mapping[str, Any]) -> "LoggerConfig":
        """Create a config from an ini-style ``[log]`` section.

        Recognized keys are ``log_writers``, ``log_level``,
        ``string_message_format``, ``logger_file_path``, ``database_table``
        and ``plugin_namespace``. Missing keys keep their defaults.

        Args:
            section: Mapping of option names to values

        Returns:
            LoggerConfig instance
        """
        key_map = {
            "log_writers": "writers",
            "log_level": "threshold",
            "string_message_format": "message_template",
            "logger_file_path": "file_path",
            "database_table": "database_table",
            "plugin_namespace": "plugin_namespace",
        }
        values = {field: section[key] for key, field in key_map.items() if section.get(key) not in (None, "")}
        return cls(**values)


def _default(value: Optional[str], env_var: str, fallback: str, environ: Mapping[str, str]) -> str:
    """Helper to pick an explicit value, then env var, then fallback."""
    return value or environ.get(env_var) or fallback


def load_logger_config(
    environ: Optional[Mapping[str, str]] = None,
    writers: Optional[str] = None,
    level: Optional[str] = None,
) -> LoggerConfig:
    """Load logger configuration from environment variables.

    Environment Variables:
    - LOG_WRITERS: Comma-separated writer names (default: screen)
    - LOG_LEVEL: Threshold severity name (default: WARNING)
    - LOG_MESSAGE_FORMAT: Message template
    - LOG_FILE_PATH: File used by the file writer
    - LOG_DATABASE_TABLE: Collection used by the database writer
    - LOG_PLUGIN_NAMESPACE: Package segment under which plugins live

    Args:
        environ: Environment mapping (defaults to os.environ)
        writers: Explicit writers, overriding LOG_WRITERS
        level: Explicit threshold, overriding LOG_LEVEL

    Returns:
        LoggerConfig instance

    Raises:
        ConfigError: If LOG_LEVEL does not name a severity
    """
    env = environ if environ is not None else os.environ
    return LoggerConfig(
        writers=_split_writers(_default(writers, "LOG_WRITERS", ",".join(DEFAULT_WRITERS), env)),
        threshold=_default(level, "LOG_LEVEL", DEFAULT_THRESHOLD.name, env),
        message_template=_default(None, "LOG_MESSAGE_FORMAT", DEFAULT_MESSAGE_TEMPLATE, env),
        file_path=_default(None, "LOG_FILE_PATH", DEFAULT_FILE_PATH, env),
        database_table=_default(None, "LOG_DATABASE_TABLE", DEFAULT_DATABASE_TABLE, env),
        plugin_namespace=_default(None, "LOG_PLUGIN_NAMESPACE", DEFAULT_PLUGIN_NAMESPACE, env),
    )
