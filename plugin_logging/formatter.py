# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Message formatting: payloads to canonical message text."""

import logging
from datetime import datetime, timezone

from .backtrace import base_name, render_backtrace
from .payload import ErrorRecord, ExceptionRecord, Payload, PlainMessage
from .severity import Severity

logger = logging.getLogger(__name__)

PLUGIN_PLACEHOLDER = "%pluginName%"
MESSAGE_PLACEHOLDER = "%message%"
LEVEL_PLACEHOLDER = "%level%"
DATETIME_PLACEHOLDER = "%datetime%"

DEFAULT_MESSAGE_TEMPLATE = f"[{PLUGIN_PLACEHOLDER}] {MESSAGE_PLACEHOLDER}"


class FormatError(Exception):
    """Raised when a template or payload cannot be rendered."""
    pass


def substitute_args(text: str, args: tuple) -> str:
    """Apply printf-style ``args`` to ``text``.

    Text without args is returned verbatim, so literal ``%`` sequences
    survive. When the args do not fit the text's placeholders, the args
    are appended to the text instead.
    """
    if not args:
        return text
    try:
        return text % tuple(args)
    except (TypeError, ValueError) as e:
        logger.debug("Message arguments do not match %r: %s", text, e)
        return " ".join([text, *(str(arg) for arg in args)])


def apply_template(
    template: str,
    message: str,
    plugin: str | None = None,
    severity: Severity | None = None,
) -> str:
    """Substitute plugin name and message text into a template.

    Args:
        template: Template containing ``%message%`` and optionally
            ``%pluginName%``, ``%level%`` and ``%datetime%``
        message: Message text for ``%message%``
        plugin: Plugin name; rendered as an empty string when absent
        severity: Severity name for ``%level%``

    Returns:
        The rendered message

    Raises:
        FormatError: If the template has no ``%message%`` placeholder
    """
    if MESSAGE_PLACEHOLDER not in template:
        raise FormatError(f"Message template has no {MESSAGE_PLACEHOLDER} placeholder: {template!r}")

    rendered = template.replace(PLUGIN_PLACEHOLDER, plugin or "")
    if LEVEL_PLACEHOLDER in rendered:
        rendered = rendered.replace(LEVEL_PLACEHOLDER, severity.name if severity is not None else "")
    if DATETIME_PLACEHOLDER in rendered:
        timestamp = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
        rendered = rendered.replace(DATETIME_PLACEHOLDER, timestamp)

    # Message last so placeholders inside the message text are left alone
    return rendered.replace(MESSAGE_PLACEHOLDER, message)


def render_record(record: ErrorRecord | ExceptionRecord) -> str:
    """Render an error or exception record and its backtrace."""
    location = f"{base_name(record.file)}({record.line})"
    if isinstance(record, ErrorRecord):
        head = f"{location}: {record.type_name} - {record.message}"
    else:
        head = f"{location}: {record.message}"

    backtrace = render_backtrace(record.backtrace)
    return f"{head}\n{backtrace}" if backtrace else head


class MessageFormatter:
    """Turns payloads into canonical messages."""

    def __init__(self, fallback_template: str = DEFAULT_MESSAGE_TEMPLATE):
        """Initialize the formatter.

        Args:
            fallback_template: Template used when the configured one
                cannot be applied
        """
        self.fallback_template = fallback_template

    def render_payload(self, payload: Payload) -> str:
        """Render a payload into the text substituted for ``%message%``."""
        if isinstance(payload, PlainMessage):
            return substitute_args(payload.text, payload.args)
        if isinstance(payload, (ErrorRecord, ExceptionRecord)):
            return render_record(payload)
        raise FormatError(f"Unsupported payload type: {type(payload).__name__}")

    def format(
        self,
        payload: Payload,
        template: str,
        plugin: str | None = None,
        severity: Severity | None = None,
    ) -> str:
        """Produce the canonical message for a payload.

        Never raises: an unusable template falls back to
        ``fallback_template`` and an unknown payload is rendered with str().

        Args:
            payload: The payload to render
            template: Configured message template
            plugin: Originating plugin name, if any
            severity: Severity of the event

        Returns:
            Canonical message text
        """
        try:
            message = self.render_payload(payload)
        except FormatError as e:
            logger.debug("Falling back to str() for payload: %s", e)
            message = str(payload)

        try:
            return apply_template(template, message, plugin, severity)
        except FormatError as e:
            logger.debug("Using fallback message template: %s", e)

        try:
            return apply_template(self.fallback_template, message, plugin, severity)
        except FormatError:
            return message
