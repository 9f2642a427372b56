# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Sink forwarding messages to the standard library logging system."""

import logging

from .payload import LogEvent
from .severity import STDLIB_LEVELS
from .sink import Sink


class StdlibLoggingSink(Sink):
    """Sink that emits each message through a stdlib logger.

    Messages go to ``<name>.<plugin>`` when a plugin was identified and to
    ``<name>`` otherwise, so test harnesses (caplog) and stdlib handlers can
    capture them.
    """

    def __init__(self, name: str = "plugin_logging"):
        """Initialize stdlib logging sink.

        Args:
            name: Base logger name
        """
        self.name = name

    def write(self, message: str, event: LogEvent) -> None:
        logger_name = f"{self.name}.{event.plugin}" if event.plugin else self.name
        logging.getLogger(logger_name).log(
            STDLIB_LEVELS.get(event.severity, logging.INFO),
            message,
            extra={"plugin": event.plugin},
        )
