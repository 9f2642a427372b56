# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""MongoDB log store: one collection per log table."""

import logging
from typing import Any

from .log_store import (
    LogStore,
    LogStoreConnectionError,
    LogStoreError,
    LogStoreNotConnectedError,
    _row_filter,
)

logger = logging.getLogger(__name__)


class MongoLogStore(LogStore):
    """Stores log rows in MongoDB collections.

    pymongo is imported on connect(), so the package can be used without
    it as long as the database writer is backed by another store.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 27017,
        database: str = "plugin_logging",
        username: str | None = None,
        password: str | None = None,
        **client_options: Any,
    ):
        """Initialize MongoDB log store.

        Args:
            host: MongoDB host
            port: MongoDB port
            database: Database holding the log collections
            username: Optional username; used only together with password
            password: Optional password
            **client_options: Extra MongoClient options
        """
        if not host:
            raise ValueError("MongoDB host is required for the log store")
        if not database:
            raise ValueError("MongoDB database name is required for the log store")

        self.host = host
        self.port = port
        self.database_name = database
        self.username = username
        self.password = password
        self.client_options = client_options
        self.client = None
        self.database = None

    @property
    def connected(self) -> bool:
        return self.client is not None

    def connect(self) -> None:
        """Open a client and verify the server answers a ping.

        Calling connect() on a connected store keeps the existing client.

        Raises:
            LogStoreConnectionError: If pymongo is missing or the server is unreachable
        """
        if self.client is not None:
            return

        try:
            from pymongo import MongoClient
            from pymongo.errors import PyMongoError
        except ImportError as e:
            raise LogStoreConnectionError("pymongo is required for the mongodb log store") from e

        options = dict(self.client_options)
        if self.username and self.password:
            options.setdefault("username", self.username)
            options.setdefault("password", self.password)
            options.setdefault("authSource", "admin")

        client = None
        try:
            client = MongoClient(host=self.host, port=self.port, **options)
            client.admin.command("ping")
        except PyMongoError as e:
            if client is not None:
                client.close()
            logger.error("MongoLogStore: %s:%s did not answer ping - %s", self.host, self.port, e)
            raise LogStoreConnectionError(
                f"Cannot reach MongoDB log store at {self.host}:{self.port}"
            ) from e

        self.client = client
        self.database = client[self.database_name]
        logger.info("MongoLogStore: writing log rows to %s:%s/%s", self.host, self.port, self.database_name)

    def disconnect(self) -> None:
        if self.client is not None:
            self.client.close()
            self.client = None
            self.database = None
            logger.info("MongoLogStore: disconnected")

    def _table(self, table: str):
        if self.database is None:
            raise LogStoreNotConnectedError("MongoDB log store is not connected")
        return self.database[table]

    def insert_row(self, table: str, row: dict[str, Any]) -> str:
        collection = self._table(table)
        try:
            # insert_one adds _id to the mapping it is given
            result = collection.insert_one(dict(row))
        except Exception as e:
            raise LogStoreError(f"Failed to append log row to {table}: {e}") from e
        return str(result.inserted_id)

    def rows(
        self,
        table: str,
        plugin: str | None = None,
        level: str | None = None,
    ) -> list[dict[str, Any]]:
        collection = self._table(table)
        try:
            cursor = collection.find(_row_filter(plugin, level)).sort("_id", 1)
            return [{**row, "_id": str(row["_id"])} for row in cursor]
        except Exception as e:
            raise LogStoreError(f"Failed to read log rows from {table}: {e}") from e
