# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Database sink storing one row per log call in a log store."""

from datetime import datetime, timezone

from .log_store import LogStore, LogStoreError
from .payload import LogEvent
from .sink import Sink, SinkError


class DatabaseSink(Sink):
    """Sink that appends each message as a row to a log store table.

    Rows have the columns ``message`` (the canonical message, no trailing
    newline), ``plugin`` (None when no plugin was identified), ``level``
    and ``timestamp``. The store is connected on first write unless it
    already is; the sink never disconnects a store it was given.
    """

    def __init__(self, store: LogStore, table: str = "logger_message"):
        """Initialize database sink.

        Args:
            store: Log store rows are appended to
            table: Table name
        """
        self.store = store
        self.table = table

    def write(self, message: str, event: LogEvent) -> None:
        """Append the message as a new row.

        Raises:
            SinkError: If the store cannot be reached or the insert fails
        """
        row = {
            "message": message,
            "plugin": event.plugin or None,
            "level": event.severity.name,
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        }
        try:
            if not self.store.connected:
                self.store.connect()
            self.store.insert_row(self.table, row)
        except LogStoreError as e:
            raise SinkError(f"Failed to insert log message into {self.table}: {e}") from e
