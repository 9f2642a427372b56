# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Screen sink writing HTML fragments to the active output stream."""

import html
import sys
from typing import TextIO

from .backtrace import base_name, render_backtrace
from .payload import ErrorRecord, ExceptionRecord, LogEvent
from .sink import Sink, SinkError

ERROR_PANEL = """
<div style='word-wrap: break-word; border: 3px solid red; padding:4px; width:70%; background-color:#FFFF96;'>
        <strong>There is an error. Please report the message ({product} {version})
        and full backtrace{support}.<br /><br/>
        {error_type}:</strong> <em>{message}</em> in <strong>{file}</strong> on line <strong>{line}</strong>
<br /><br />Backtrace --&gt;<div style="font-family:Courier;font-size:10pt"><br />
{backtrace}</div><br />
</div><br />"""

SUPPORT_LINK = (
    " in the <a href='{url}' target='_blank'>{product} support forums</a>"
    " (please do a Search first as it might have been reported already!)"
)


def _escape(text: str) -> str:
    return html.escape(text, quote=False)


class ScreenSink(Sink):
    """Sink that writes HTML fragments to stdout (or a given stream).

    Error and exception records are shown in a highlighted panel with
    product version and support information; every other message is
    wrapped in a ``<pre>`` block. Each write ends with exactly one newline
    and is flushed before returning.
    """

    def __init__(
        self,
        product_name: str = "Plugin Logging",
        product_version: str = "",
        support_url: str = "",
        stream: TextIO | None = None,
    ):
        """Initialize screen sink.

        Args:
            product_name: Product name shown in the error panel
            product_version: Version shown in the error panel
            support_url: Link target for reporting errors, if any
            stream: Output stream; sys.stdout at write time when omitted
        """
        self.product_name = product_name
        self.product_version = product_version
        self.support_url = support_url
        self.stream = stream

    def render_error_panel(self, record: ErrorRecord | ExceptionRecord) -> str:
        """Render an error or exception record as an HTML panel."""
        support = ""
        if self.support_url:
            support = SUPPORT_LINK.format(url=_escape(self.support_url), product=_escape(self.product_name))

        return ERROR_PANEL.format(
            product=_escape(self.product_name),
            version=_escape(self.product_version),
            support=support,
            error_type=_escape(record.type_name),
            message=_escape(record.message),
            file=_escape(base_name(record.file)),
            line=record.line,
            backtrace=_escape(render_backtrace(record.backtrace)),
        )

    def render(self, message: str, event: LogEvent) -> str:
        """Render the screen form of a message, without the trailing newline."""
        if event.is_error_record:
            return self.render_error_panel(event.payload)  # type: ignore[arg-type]
        return f"<pre>{_escape(message)}</pre>"

    def write(self, message: str, event: LogEvent) -> None:
        """Write the rendered message to the output stream.

        Raises:
            SinkError: If the stream cannot be written to
        """
        stream = self.stream or sys.stdout
        try:
            print(self.render(message, event), file=stream, flush=True)
        except (OSError, ValueError) as e:
            raise SinkError(f"Failed to write to screen: {e}") from e
