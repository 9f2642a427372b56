# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Tests for error reporters."""

import logging

from plugin_logging import ConsoleErrorReporter, ErrorReporter, SilentErrorReporter, SinkError
from plugin_logging.error_reporter import describe_context


class TestDescribeContext:
    """Tests for describe_context."""

    def test_pairs_in_order(self):
        assert describe_context({"plugin": "Goals", "stage": "format"}) == " (plugin=Goals, stage=format)"

    def test_unset_values_are_skipped(self):
        """Test that None and empty values add nothing."""
        assert describe_context({"plugin": None, "writer": ""}) == ""
        assert describe_context(None) == ""


class TestConsoleErrorReporter:
    """Tests for ConsoleErrorReporter."""

    def test_is_error_reporter(self):
        """Test the reporter implements the interface."""
        assert isinstance(ConsoleErrorReporter(), ErrorReporter)

    def test_writer_failure_names_the_writer(self, caplog):
        """Test the message logged for a failing writer."""
        reporter = ConsoleErrorReporter(logger_name="test.reporter")

        with caplog.at_level(logging.DEBUG, logger="test.reporter"):
            try:
                raise ValueError("disk full")
            except ValueError as e:
                reporter.report(e, context={"writer": "file", "plugin": "Goals"})

        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert errors[0].getMessage() == "Log writer 'file' failed: ValueError: disk full (plugin=Goals)"

    def test_traceback_attached_at_debug(self, caplog):
        """Test that the failure traceback is only logged at debug level."""
        reporter = ConsoleErrorReporter(logger_name="test.reporter")

        with caplog.at_level(logging.DEBUG, logger="test.reporter"):
            try:
                raise ValueError("disk full")
            except ValueError as e:
                reporter.report(e, context={"writer": "file"})

        debug = [r for r in caplog.records if r.levelno == logging.DEBUG]
        assert debug[0].getMessage() == "Log writer 'file' failure traceback"
        assert debug[0].exc_info[0] is ValueError
        assert debug[0].exc_info[2] is not None

    def test_failure_outside_a_writer(self, caplog):
        """Test the wording when no writer is involved."""
        reporter = ConsoleErrorReporter(logger_name="test.reporter")

        with caplog.at_level(logging.ERROR, logger="test.reporter"):
            reporter.report(RuntimeError("boom"))

        assert caplog.records[0].getMessage() == "Logging failed: RuntimeError: boom"

    def test_capture_message_level(self, caplog):
        """Test that capture_message maps level names to logging levels."""
        reporter = ConsoleErrorReporter(logger_name="test.reporter")

        with caplog.at_level(logging.DEBUG, logger="test.reporter"):
            reporter.capture_message("Ignoring unknown log writers: syslog", level="WARNING")
            reporter.capture_message("odd level", level="loud", context={"stage": "configure"})

        assert caplog.records[0].levelno == logging.WARNING
        assert caplog.records[0].getMessage() == "Ignoring unknown log writers: syslog"
        assert caplog.records[1].levelno == logging.ERROR
        assert caplog.records[1].getMessage() == "odd level (stage=configure)"

    def test_default_logger_is_module_logger(self):
        """Test the logger used when no name is given."""
        assert ConsoleErrorReporter().logger.name == "plugin_logging.console_error_reporter"


class TestSilentErrorReporter:
    """Tests for SilentErrorReporter."""

    def test_failures_keep_error_and_context(self):
        """Test that reported failures are kept in memory."""
        reporter = SilentErrorReporter()
        error = SinkError("read-only file system")

        reporter.report(error, context={"writer": "file", "plugin": "Goals"})

        assert len(reporter.failures) == 1
        failure = reporter.failures[0]
        assert failure.error is error
        assert failure.writer == "file"
        assert failure.context == {"writer": "file", "plugin": "Goals"}

    def test_context_is_copied(self):
        """Test that later changes to the caller's context are not seen."""
        reporter = SilentErrorReporter()
        context = {"writer": "database"}
        reporter.report(SinkError("x"), context=context)
        context["writer"] = "file"

        assert reporter.failed_writers() == ["database"]

    def test_failures_of_type(self):
        """Test filtering failures by exception type, subclasses included."""
        reporter = SilentErrorReporter()
        reporter.report(SinkError("a"), context={"writer": "file"})
        reporter.report(KeyError("b"), context={"stage": "format"})

        assert [f.writer for f in reporter.failures_of(SinkError)] == ["file"]
        assert len(reporter.failures_of(Exception)) == 2

    def test_failed_writers_skips_other_failures(self):
        """Test that failures outside a writer are not listed as writers."""
        reporter = SilentErrorReporter()
        reporter.report(SinkError("a"), context={"writer": "screen"})
        reporter.report(RuntimeError("b"))
        reporter.report(SinkError("c"), context={"writer": "database"})

        assert reporter.failed_writers() == ["screen", "database"]

    def test_messages_and_clear(self):
        """Test capturing messages and clearing state."""
        reporter = SilentErrorReporter()
        reporter.capture_message("Ignoring unknown log writers: syslog", level="warning")
        reporter.report(RuntimeError("x"))

        assert reporter.messages == [("warning", "Ignoring unknown log writers: syslog")]

        reporter.clear()
        assert reporter.failures == []
        assert reporter.messages == []
