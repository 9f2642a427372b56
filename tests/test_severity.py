# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Tests for severity parsing and filtering."""

import pytest

from plugin_logging.severity import DEFAULT_THRESHOLD, Severity, parse_severity, should_log


class TestShouldLog:
    """Tests for should_log."""

    @pytest.mark.parametrize(
        "severity, expected",
        [
            (Severity.ERROR, True),
            (Severity.WARNING, True),
            (Severity.INFO, False),
            (Severity.DEBUG, False),
            (Severity.VERBOSE, False),
        ],
    )
    def test_default_threshold(self, severity, expected):
        """Test that the default threshold excludes info and below."""
        assert should_log(severity, DEFAULT_THRESHOLD) is expected

    def test_verbose_threshold_accepts_everything(self):
        """Test that the least severe threshold accepts every tier."""
        assert all(should_log(s, Severity.VERBOSE) for s in Severity if s != Severity.NONE)

    def test_none_threshold_rejects_everything(self):
        """Test that a NONE threshold disables logging."""
        assert not any(should_log(s, Severity.NONE) for s in Severity)

    def test_none_severity_is_never_logged(self):
        """Test that NONE is not a loggable severity."""
        assert not should_log(Severity.NONE, Severity.VERBOSE)

    def test_error_is_most_severe(self):
        """Test the severity ordering."""
        assert Severity.ERROR < Severity.WARNING < Severity.INFO < Severity.DEBUG < Severity.VERBOSE


class TestParseSeverity:
    """Tests for parse_severity."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("warning", Severity.WARNING),
            ("WARN", Severity.WARNING),
            (" Info ", Severity.INFO),
            ("off", Severity.NONE),
            (4, Severity.DEBUG),
            (Severity.ERROR, Severity.ERROR),
        ],
    )
    def test_valid_values(self, value, expected):
        """Test the accepted spellings."""
        assert parse_severity(value) is expected

    def test_invalid_name(self):
        """Test that unknown names raise ValueError."""
        with pytest.raises(ValueError, match="Invalid log level"):
            parse_severity("LOUD")

    def test_invalid_number(self):
        """Test that out-of-range numbers raise ValueError."""
        with pytest.raises(ValueError):
            parse_severity(42)
