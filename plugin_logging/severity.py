# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Severity levels and threshold filtering."""

import logging
from enum import IntEnum


class Severity(IntEnum):
    """Log severity tiers.

    A lower value is more severe. NONE is only meaningful as a threshold
    and disables logging entirely.
    """

    NONE = 0
    ERROR = 1
    WARNING = 2
    INFO = 3
    DEBUG = 4
    VERBOSE = 5


DEFAULT_THRESHOLD = Severity.WARNING

_ALIASES = {
    "WARN": Severity.WARNING,
    "OFF": Severity.NONE,
}

# Map severities onto stdlib logging levels
STDLIB_LEVELS = {
    Severity.ERROR: logging.ERROR,
    Severity.WARNING: logging.WARNING,
    Severity.INFO: logging.INFO,
    Severity.DEBUG: logging.DEBUG,
    Severity.VERBOSE: logging.DEBUG - 5,
}


def should_log(severity: Severity, threshold: Severity) -> bool:
    """Return True if an event of ``severity`` passes ``threshold``.

    Args:
        severity: Severity of the event being logged
        threshold: Least severe level that is still accepted

    Returns:
        True when the event is at least as severe as the threshold
    """
    if threshold == Severity.NONE or severity == Severity.NONE:
        return False
    return severity <= threshold


def parse_severity(value: "Severity | int | str") -> Severity:
    """Coerce a severity name, number or member into a Severity.

    Args:
        value: A Severity, its integer value, or a case-insensitive name
            (``WARN`` and ``OFF`` are accepted as aliases)

    Returns:
        The matching Severity

    Raises:
        ValueError: If the value does not name a severity
    """
    if isinstance(value, Severity):
        return value

    if isinstance(value, int):
        return Severity(value)

    name = str(value).strip().upper()
    if name in _ALIASES:
        return _ALIASES[name]
    try:
        return Severity[name]
    except KeyError:
        raise ValueError(
            f"Invalid log level: {value}. "
            f"Must be one of {[s.name for s in Severity]}"
        ) from None
