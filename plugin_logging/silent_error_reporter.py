# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Error reporter that records contained failures for tests."""

from dataclasses import dataclass, field
from typing import Any, Mapping

from .error_reporter import ErrorReporter


@dataclass
class ContainedFailure:
    """One failure the Logger swallowed."""

    error: Exception
    context: dict[str, Any] = field(default_factory=dict)

    @property
    def writer(self) -> str | None:
        return self.context.get("writer")


class SilentErrorReporter(ErrorReporter):
    """Keeps failures and messages in memory without any output.

    Attributes:
        failures: Reported failures, oldest first
        messages: Captured ``(level, message)`` pairs, oldest first
    """

    def __init__(self):
        self.failures: list[ContainedFailure] = []
        self.messages: list[tuple[str, str]] = []

    def report(self, error: Exception, context: Mapping[str, Any] | None = None) -> None:
        self.failures.append(ContainedFailure(error, dict(context or {})))

    def capture_message(
        self,
        message: str,
        level: str = "error",
        context: Mapping[str, Any] | None = None,
    ) -> None:
        self.messages.append((level, message))

    def failures_of(self, error_type: type[BaseException]) -> list[ContainedFailure]:
        """Failures whose error is an instance of ``error_type``."""
        return [f for f in self.failures if isinstance(f.error, error_type)]

    def failed_writers(self) -> list[str]:
        """Names of the writers that failed, in failure order."""
        return [f.writer for f in self.failures if f.writer]

    def clear(self) -> None:
        self.failures.clear()
        self.messages.clear()
