# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Side channel for failures the Logger contains instead of raising."""

from abc import ABC, abstractmethod
from typing import Any, Mapping


class ErrorReporter(ABC):
    """Receives what the Logger could not log.

    ``report`` gets the exception of a writer that failed mid-dispatch;
    its context names the ``writer`` and ``plugin``, or the ``stage`` for
    failures before dispatch. ``capture_message`` gets configuration
    problems the Logger worked around, such as an unknown writer name.
    """

    @abstractmethod
    def report(self, error: Exception, context: Mapping[str, Any] | None = None) -> None:
        """Record a contained failure."""

    @abstractmethod
    def capture_message(
        self,
        message: str,
        level: str = "error",
        context: Mapping[str, Any] | None = None,
    ) -> None:
        """Record a problem that has no exception attached."""


def describe_context(context: Mapping[str, Any] | None) -> str:
    """Render context as `` (key=value, ...)``, skipping unset values."""
    pairs = [f"{key}={value}" for key, value in (context or {}).items() if value not in (None, "")]
    return f" ({', '.join(pairs)})" if pairs else ""
