# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Tests for the log stores behind the database writer."""

from unittest.mock import MagicMock, patch

import pytest
from pymongo.errors import OperationFailure, ServerSelectionTimeoutError

from plugin_logging import (
    InMemoryLogStore,
    LogStore,
    LogStoreConnectionError,
    LogStoreError,
    LogStoreNotConnectedError,
    create_log_store,
)
from plugin_logging.mongo_log_store import MongoLogStore


def log_row(message, plugin=None, level="WARNING"):
    return {"message": message, "plugin": plugin, "level": level, "timestamp": "2025-01-01T00:00:00Z"}


class TestCreateLogStore:
    """Tests for create_log_store."""

    def test_memory_is_default(self, monkeypatch):
        """Test the store used when LOG_STORE_TYPE is unset."""
        monkeypatch.delenv("LOG_STORE_TYPE", raising=False)

        store = create_log_store()

        assert isinstance(store, InMemoryLogStore)
        assert isinstance(store, LogStore)

    def test_store_type_from_environment(self, monkeypatch):
        """Test that LOG_STORE_TYPE selects the backend, case-insensitively."""
        monkeypatch.setenv("LOG_STORE_TYPE", "MongoDB")

        assert isinstance(create_log_store(), MongoLogStore)

    def test_mongodb_settings_from_environment(self, monkeypatch):
        """Test that the LOG_DATABASE_* variables configure the MongoDB store."""
        monkeypatch.setenv("LOG_DATABASE_HOST", "logs.internal")
        monkeypatch.setenv("LOG_DATABASE_PORT", "27018")
        monkeypatch.setenv("LOG_DATABASE_NAME", "site_logs")
        monkeypatch.setenv("LOG_DATABASE_USER", "logwriter")
        monkeypatch.setenv("LOG_DATABASE_PASSWORD", "secret")

        store = create_log_store("mongodb")

        assert (store.host, store.port, store.database_name) == ("logs.internal", 27018, "site_logs")
        assert (store.username, store.password) == ("logwriter", "secret")

    def test_arguments_take_precedence(self, monkeypatch):
        """Test that keyword arguments override the environment."""
        monkeypatch.setenv("LOG_DATABASE_HOST", "logs.internal")
        monkeypatch.delenv("LOG_DATABASE_NAME", raising=False)

        store = create_log_store("mongodb", host="127.0.0.1")

        assert store.host == "127.0.0.1"
        assert store.database_name == "plugin_logging"

    def test_unknown_type(self):
        """Test that an unknown backend is rejected."""
        with pytest.raises(ValueError, match="Must be one of: memory, mongodb"):
            create_log_store("sqlite")


class TestInMemoryLogStore:
    """Tests for InMemoryLogStore."""

    @pytest.fixture
    def store(self):
        store = InMemoryLogStore()
        store.connect()
        return store

    def test_insert_requires_connect(self):
        """Test that rows cannot be written before connect()."""
        store = InMemoryLogStore()

        assert not store.connected
        with pytest.raises(LogStoreNotConnectedError):
            store.insert_row("logger_message", log_row("too early"))

    def test_rows_are_kept_in_write_order(self, store):
        """Test that rows come back oldest first with an id each."""
        first = store.insert_row("logger_message", log_row("started"))
        second = store.insert_row("logger_message", log_row("stopped"))

        rows = store.rows("logger_message")
        assert [row["message"] for row in rows] == ["started", "stopped"]
        assert [row["_id"] for row in rows] == [first, second]
        assert first != second

    def test_filter_by_plugin_and_level(self, store):
        """Test narrowing rows by plugin and severity name."""
        store.insert_row("logger_message", log_row("a", plugin="Goals", level="ERROR"))
        store.insert_row("logger_message", log_row("b", plugin="Goals", level="WARNING"))
        store.insert_row("logger_message", log_row("c", plugin=None, level="ERROR"))

        assert [r["message"] for r in store.rows("logger_message", plugin="Goals")] == ["a", "b"]
        assert [r["message"] for r in store.rows("logger_message", level="error")] == ["a", "c"]
        assert [r["message"] for r in store.rows("logger_message", plugin="Goals", level="ERROR")] == ["a"]

    def test_stored_rows_cannot_be_altered(self, store):
        """Test that neither the written row nor a returned row aliases storage."""
        row = log_row("original")
        store.insert_row("logger_message", row)
        row["message"] = "changed by writer"
        store.rows("logger_message")[0]["message"] = "changed by reader"

        assert store.rows("logger_message")[0]["message"] == "original"
        assert "_id" not in row

    def test_tables_are_separate(self, store):
        """Test that rows land only in their own table."""
        store.insert_row("app_log", log_row("x"))

        assert store.rows("logger_message") == []
        assert len(store.rows("app_log")) == 1
        assert "logger_message" not in store.tables

    def test_disconnect_keeps_rows_readable(self, store):
        """Test that stored rows survive disconnect()."""
        store.insert_row("logger_message", log_row("kept"))
        store.disconnect()

        assert not store.connected
        assert store.rows("logger_message")[0]["message"] == "kept"


class TestMongoLogStore:
    """Tests for MongoLogStore using a mocked MongoClient."""

    def test_requires_host_and_database(self):
        """Test that empty connection settings are rejected."""
        with pytest.raises(ValueError, match="host"):
            MongoLogStore(host="")
        with pytest.raises(ValueError, match="database"):
            MongoLogStore(database="")

    @patch("pymongo.MongoClient")
    def test_connect_pings_and_selects_database(self, mock_client_class):
        """Test a successful connect."""
        client = mock_client_class.return_value
        store = MongoLogStore(host="logs.internal", port=27018, database="site_logs")

        store.connect()

        mock_client_class.assert_called_once_with(host="logs.internal", port=27018)
        client.admin.command.assert_called_once_with("ping")
        client.__getitem__.assert_called_once_with("site_logs")
        assert store.connected

    @patch("pymongo.MongoClient")
    def test_credentials_are_passed_together(self, mock_client_class):
        """Test that a username is only sent along with a password."""
        MongoLogStore(username="logwriter", password="secret").connect()
        MongoLogStore(username="logwriter").connect()

        with_password, without_password = mock_client_class.call_args_list
        assert with_password.kwargs["username"] == "logwriter"
        assert with_password.kwargs["authSource"] == "admin"
        assert "username" not in without_password.kwargs

    @patch("pymongo.MongoClient")
    def test_second_connect_keeps_client(self, mock_client_class):
        """Test that connect() on a connected store opens no new client."""
        store = MongoLogStore()

        store.connect()
        store.connect()

        assert mock_client_class.call_count == 1
        mock_client_class.return_value.close.assert_not_called()

    @patch("pymongo.MongoClient")
    def test_unreachable_server_closes_client(self, mock_client_class):
        """Test that a failed ping releases the client and raises."""
        client = mock_client_class.return_value
        client.admin.command.side_effect = ServerSelectionTimeoutError("no servers")
        store = MongoLogStore(host="logs.internal")

        with pytest.raises(LogStoreConnectionError, match="logs.internal:27017"):
            store.connect()

        client.close.assert_called_once()
        assert not store.connected

    def test_use_before_connect(self):
        """Test that reads and writes need a connection."""
        store = MongoLogStore()

        with pytest.raises(LogStoreNotConnectedError):
            store.insert_row("logger_message", log_row("x"))
        with pytest.raises(LogStoreNotConnectedError):
            store.rows("logger_message")

    @patch("pymongo.MongoClient")
    def test_insert_row_returns_id(self, mock_client_class):
        """Test that the inserted id is returned as a string."""
        store = MongoLogStore()
        store.connect()
        collection = MagicMock()
        collection.insert_one.return_value.inserted_id = 42
        store.database = {"logger_message": collection}

        row = log_row("saved", plugin="Goals")
        assert store.insert_row("logger_message", row) == "42"
        collection.insert_one.assert_called_once_with(row)

    @patch("pymongo.MongoClient")
    def test_insert_failure_is_wrapped(self, mock_client_class):
        """Test that driver errors become LogStoreError."""
        store = MongoLogStore()
        store.connect()
        collection = MagicMock()
        collection.insert_one.side_effect = OperationFailure("not authorized")
        store.database = {"logger_message": collection}

        with pytest.raises(LogStoreError, match="Failed to append log row to logger_message"):
            store.insert_row("logger_message", log_row("lost"))

    @patch("pymongo.MongoClient")
    def test_rows_are_sorted_and_ids_stringified(self, mock_client_class):
        """Test the query sent for rows() and the returned ids."""
        store = MongoLogStore()
        store.connect()
        collection = MagicMock()
        collection.find.return_value.sort.return_value = [{"_id": 7, "message": "a", "level": "ERROR"}]
        store.database = {"logger_message": collection}

        rows = store.rows("logger_message", level="error")

        collection.find.assert_called_once_with({"level": "ERROR"})
        collection.find.return_value.sort.assert_called_once_with("_id", 1)
        assert rows == [{"_id": "7", "message": "a", "level": "ERROR"}]

    @patch("pymongo.MongoClient")
    def test_disconnect_closes_client(self, mock_client_class):
        """Test that disconnect releases the client once."""
        store = MongoLogStore()
        store.connect()

        store.disconnect()
        store.disconnect()

        mock_client_class.return_value.close.assert_called_once()
        assert not store.connected
        assert store.database is None
