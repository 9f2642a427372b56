# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""File sink appending plain-text messages to a log file."""

from pathlib import Path

from .payload import LogEvent
from .sink import Sink, SinkError


class FileSink(Sink):
    """Sink that appends each message, newline-terminated, to a file.

    The file and its parent directories are created on first write. Text
    that is not valid UTF-8 (lone surrogates from undecodable file names)
    is written with backslash escapes. The file is opened and closed per
    message so every write is visible as soon as the call returns.
    """

    def __init__(self, file_path: str):
        """Initialize file sink.

        Args:
            file_path: Path of the log file
        """
        self.file_path = Path(file_path)

    def write(self, message: str, event: LogEvent) -> None:
        """Append the message to the log file.

        Raises:
            SinkError: If the directory or file cannot be written
        """
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.file_path, "a", newline="", encoding="utf-8", errors="backslashreplace") as f:
                f.write(message + "\n")
        except OSError as e:
            raise SinkError(f"Failed to write to log file {self.file_path}: {e}") from e
