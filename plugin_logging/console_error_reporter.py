# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Default error reporter: contained failures go to stdlib logging."""

import logging
from typing import Any, Mapping

from .error_reporter import ErrorReporter, describe_context

logger = logging.getLogger(__name__)

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


class ConsoleErrorReporter(ErrorReporter):
    """Logs writer failures through Python's logging system.

    Output goes to the stdlib handlers (stderr unless configured
    otherwise), never to the screen writer's stream. The failure's
    traceback is attached at debug level.
    """

    def __init__(self, logger_name: str | None = None):
        """Initialize console error reporter.

        Args:
            logger_name: Logger to report through (defaults to this module's)
        """
        self.logger = logging.getLogger(logger_name) if logger_name else logger

    def report(self, error: Exception, context: Mapping[str, Any] | None = None) -> None:
        details = dict(context or {})
        writer = details.pop("writer", None)
        subject = f"Log writer '{writer}'" if writer else "Logging"

        self.logger.error(
            "%s failed: %s: %s%s", subject, type(error).__name__, error, describe_context(details)
        )
        self.logger.debug(
            "%s failure traceback", subject, exc_info=(type(error), error, error.__traceback__)
        )

    def capture_message(
        self,
        message: str,
        level: str = "error",
        context: Mapping[str, Any] | None = None,
    ) -> None:
        self.logger.log(_LEVELS.get(level.lower(), logging.ERROR), "%s%s", message, describe_context(context))
