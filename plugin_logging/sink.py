# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Abstract sink interface."""

from abc import ABC, abstractmethod

from .payload import LogEvent


class SinkError(Exception):
    """Raised when a sink cannot write a message."""
    pass


class Sink(ABC):
    """Abstract base class for log sinks."""

    @abstractmethod
    def write(self, message: str, event: LogEvent) -> None:
        """Write a canonical message.

        Args:
            message: The canonical message for the event
            event: The event the message was rendered from

        Raises:
            SinkError: If the message cannot be written
        """
        pass

    def close(self) -> None:
        """Release any resources held by the sink."""
        pass
