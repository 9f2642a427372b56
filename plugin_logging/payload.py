# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Log event and payload data models."""

import os
import traceback
from dataclasses import dataclass
from typing import Union

from .backtrace import Frame, frames_from_stack, frames_from_traceback
from .severity import Severity

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))

# Names for well-known error codes; anything else renders as "Unknown error (N)"
ERROR_CODE_NAMES = {
    1: "Error",
    2: "Warning",
    4: "Parse Error",
    8: "Notice",
    16: "Core Error",
    32: "Core Warning",
    64: "Compile Error",
    128: "Compile Warning",
    256: "Error",
    512: "Warning",
    1024: "Notice",
    2048: "Strict Notice",
    4096: "Recoverable Error",
    8192: "Deprecated",
    16384: "User Deprecated",
}


def error_code_name(code: int) -> str:
    """Return the display name for an error code."""
    return ERROR_CODE_NAMES.get(code, f"Unknown error ({code})")


@dataclass(frozen=True)
class PlainMessage:
    """A text message with optional printf-style arguments."""

    text: str
    args: tuple = ()


@dataclass(frozen=True)
class ErrorRecord:
    """A captured error.

    Attributes:
        code: Numeric error code
        message: Error message
        file: File the error was raised in
        line: Line number the error was raised on
        backtrace: Either free-form backtrace text or frames, innermost
            first; frames are stored as a tuple
    """

    code: int
    message: str
    file: str
    line: int
    backtrace: Union[str, tuple[Frame, ...]] = ""

    def __post_init__(self) -> None:
        if not isinstance(self.backtrace, str):
            object.__setattr__(self, "backtrace", tuple(self.backtrace))

    @property
    def type_name(self) -> str:
        return error_code_name(self.code)


@dataclass(frozen=True)
class ExceptionRecord:
    """A captured exception with its stack."""

    message: str
    file: str
    line: int
    backtrace: tuple[Frame, ...] = ()
    type_name: str = "Exception"

    def __post_init__(self) -> None:
        object.__setattr__(self, "backtrace", tuple(self.backtrace))

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ExceptionRecord":
        """Capture an exception as a record.

        The file and line come from the innermost frame of the exception's
        traceback. An exception that was never raised has no traceback; the
        current stack outside this package is used instead.

        Args:
            exc: The exception to capture

        Returns:
            ExceptionRecord describing the exception
        """
        if exc.__traceback__ is not None:
            frames = frames_from_traceback(exc.__traceback__)
        else:
            stack = [
                entry for entry in traceback.extract_stack()
                if os.path.dirname(os.path.abspath(entry.filename)) != _PACKAGE_DIR
            ]
            frames = frames_from_stack(stack)

        if frames:
            file, line = frames[0].file, frames[0].line
        else:
            file, line = "", 0

        return cls(
            message=str(exc),
            file=file,
            line=line,
            backtrace=tuple(frames),
            type_name=type(exc).__name__,
        )


Payload = Union[PlainMessage, ErrorRecord, ExceptionRecord]


@dataclass(frozen=True)
class LogEvent:
    """A single log call: severity, payload and originating plugin."""

    severity: Severity
    payload: Payload
    plugin: str | None = None

    @property
    def is_error_record(self) -> bool:
        """True when the payload is an error or exception record."""
        return isinstance(self.payload, (ErrorRecord, ExceptionRecord))
