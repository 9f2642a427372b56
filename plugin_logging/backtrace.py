# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Backtrace rendering with install-path independent file references."""

import re
import traceback
from dataclasses import dataclass
from types import TracebackType
from typing import Iterable, Union

# An absolute directory prefix: "/a/b/" in "/a/b/file.py". It must start a
# token so relative paths such as "a/b/file.py" are left alone.
_PATH_PREFIX = re.compile(r"(?<![^\s(<>\[\"'=])(?:/[^\s(<>]+)*/")


def base_name(path: str) -> str:
    """Return the final segment of a POSIX or Windows path."""
    return path.replace("\\", "/").rsplit("/", 1)[-1]


def strip_paths(text: str) -> str:
    """Remove absolute directory prefixes from every path in ``text``.

    A match that is only a lone ``/`` is left untouched. Stripping is
    idempotent.

    Args:
        text: Free-form text such as a backtrace

    Returns:
        Text with directory prefixes removed
    """
    return _PATH_PREFIX.sub(
        lambda match: "/" if match.group(0) == "/" else "",
        text,
    )


@dataclass(frozen=True)
class Frame:
    """One entry of a captured call stack."""

    file: str
    line: int
    call: str

    def render(self) -> str:
        return f"{base_name(self.file)}({self.line}): {self.call}"


def render_backtrace(backtrace: Union[str, Iterable[Frame]]) -> str:
    """Render a backtrace as one line per frame.

    Args:
        backtrace: Frames in call-stack order (innermost first), or free-form
            backtrace text captured elsewhere

    Returns:
        Newline-joined frame lines, in the order given
    """
    if isinstance(backtrace, str):
        return strip_paths(backtrace)
    return "\n".join(frame.render() for frame in backtrace)


def frames_from_stack(stack: Iterable[traceback.FrameSummary]) -> list[Frame]:
    """Convert an outermost-first stack summary into innermost-first frames."""
    frames = [
        Frame(file=entry.filename, line=entry.lineno or 0, call=f"{entry.name}()")
        for entry in stack
    ]
    frames.reverse()
    return frames


def frames_from_traceback(tb: TracebackType) -> list[Frame]:
    """Capture the frames of a traceback, innermost first."""
    return frames_from_stack(traceback.extract_tb(tb))
