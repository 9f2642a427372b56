# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Row storage behind the database writer."""

import os
from abc import ABC, abstractmethod
from typing import Any


class LogStoreError(Exception):
    """Base exception for log store errors."""
    pass


class LogStoreNotConnectedError(LogStoreError):
    """Raised when rows are read or written before connect()."""
    pass


class LogStoreConnectionError(LogStoreError):
    """Raised when the backing database cannot be reached."""
    pass


class LogStore(ABC):
    """A table-per-name store of log rows.

    A row is a flat mapping with the columns ``message``, ``plugin``,
    ``level`` and ``timestamp``. Rows are returned in the order they were
    written. ``connect`` must be safe to call on an already connected
    store.
    """

    @property
    @abstractmethod
    def connected(self) -> bool:
        """True between a successful connect() and disconnect()."""

    @abstractmethod
    def connect(self) -> None:
        """Open the store; a no-op when already connected.

        Raises:
            LogStoreConnectionError: If the backing database is unreachable
        """

    @abstractmethod
    def disconnect(self) -> None:
        """Release the connection; a no-op when not connected."""

    @abstractmethod
    def insert_row(self, table: str, row: dict[str, Any]) -> str:
        """Append one log row to ``table`` and return its id.

        Raises:
            LogStoreNotConnectedError: If called before connect()
            LogStoreError: If the row cannot be written
        """

    @abstractmethod
    def rows(
        self,
        table: str,
        plugin: str | None = None,
        level: str | None = None,
    ) -> list[dict[str, Any]]:
        """Return the rows of ``table``, oldest first.

        Args:
            table: Table name
            plugin: Only rows logged by this plugin
            level: Only rows of this severity name
        """


def _row_filter(plugin: str | None, level: str | None) -> dict[str, Any]:
    criteria: dict[str, Any] = {}
    if plugin is not None:
        criteria["plugin"] = plugin
    if level is not None:
        criteria["level"] = level.upper()
    return criteria


def create_log_store(store_type: str | None = None, **kwargs: Any) -> LogStore:
    """Factory function to create a log store.

    Args:
        store_type: "memory" or "mongodb". If None, reads LOG_STORE_TYPE
            (defaults to "memory")
        **kwargs: Store-specific arguments. For MongoDB, settings not given
            here are read from LOG_DATABASE_HOST, LOG_DATABASE_PORT,
            LOG_DATABASE_NAME, LOG_DATABASE_USER and LOG_DATABASE_PASSWORD.

    Returns:
        LogStore instance

    Raises:
        ValueError: If store_type is not recognized
    """
    if store_type is None:
        store_type = os.getenv("LOG_STORE_TYPE", "memory")
    store_type = store_type.lower()

    if store_type == "memory":
        from .memory_log_store import InMemoryLogStore
        return InMemoryLogStore()
    elif store_type == "mongodb":
        from .mongo_log_store import MongoLogStore

        settings: dict[str, Any] = {
            "host": os.getenv("LOG_DATABASE_HOST", "localhost"),
            "port": int(os.getenv("LOG_DATABASE_PORT", "27017")),
            "database": os.getenv("LOG_DATABASE_NAME", "plugin_logging"),
            "username": os.getenv("LOG_DATABASE_USER"),
            "password": os.getenv("LOG_DATABASE_PASSWORD"),
        }
        settings.update(kwargs)
        return MongoLogStore(**settings)
    else:
        raise ValueError(
            f"Unknown store_type: {store_type}. "
            f"Must be one of: memory, mongodb"
        )
