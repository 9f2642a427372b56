# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Process-local log store, the default backend of the database writer."""

import logging
import uuid
from collections import defaultdict
from typing import Any

from .log_store import LogStore, LogStoreNotConnectedError, _row_filter

logger = logging.getLogger(__name__)


class InMemoryLogStore(LogStore):
    """Keeps log rows in per-table lists.

    Rows are copied on the way in and out, so neither the writer nor a
    reader can alter what is stored. Everything is lost with the process.
    """

    def __init__(self):
        self.tables: dict[str, list[dict[str, Any]]] = defaultdict(list)
        self._connected = False

    @property
    def connected(self) -> bool:
        return self._connected

    def connect(self) -> None:
        self._connected = True

    def disconnect(self) -> None:
        self._connected = False

    def insert_row(self, table: str, row: dict[str, Any]) -> str:
        if not self._connected:
            raise LogStoreNotConnectedError("In-memory log store is not connected")

        stored = dict(row)
        stored.setdefault("_id", uuid.uuid4().hex)
        self.tables[table].append(stored)
        logger.debug("InMemoryLogStore: row %s appended to %s", stored["_id"], table)
        return stored["_id"]

    def rows(
        self,
        table: str,
        plugin: str | None = None,
        level: str | None = None,
    ) -> list[dict[str, Any]]:
        criteria = _row_filter(plugin, level)
        return [
            dict(row)
            for row in self.tables.get(table, ())
            if all(row.get(column) == value for column, value in criteria.items())
        ]
