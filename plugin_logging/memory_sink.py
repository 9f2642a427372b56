# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""In-memory sink for testing."""

from typing import Any

from .payload import LogEvent
from .sink import Sink


class MemorySink(Sink):
    """Sink that stores messages in memory without output.

    Useful for testing to verify logging behavior without cluttering test
    output. Entries are discarded when the owning Logger is reset.
    """

    def __init__(self):
        self.logs: list[dict[str, Any]] = []

    def write(self, message: str, event: LogEvent) -> None:
        self.logs.append({
            "level": event.severity.name,
            "message": message,
            "plugin": event.plugin,
        })

    def clear_logs(self) -> None:
        """Clear all stored log messages (useful for testing)."""
        self.logs.clear()

    def get_logs(self, level: str | None = None) -> list[dict[str, Any]]:
        """Get stored log messages, optionally filtered by level.

        Args:
            level: Optional log level to filter by (ERROR, WARNING, INFO, ...)

        Returns:
            List of log entries
        """
        if level is None:
            return self.logs
        return [log for log in self.logs if log["level"] == level.upper()]

    def has_log(self, message: str, level: str | None = None) -> bool:
        """Check if a specific log message exists.

        Args:
            message: Message to search for (substring match)
            level: Optional log level to filter by

        Returns:
            True if message is found, False otherwise
        """
        return any(message in log["message"] for log in self.get_logs(level))
