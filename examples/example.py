#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Example usage of the plugin_logging module.

This script demonstrates how plugins log through one Logger whose
writers are chosen by configuration.
"""

import tempfile
from pathlib import Path

from plugin_logging import (
    ErrorRecord,
    InMemoryLogStore,
    LoggerConfig,
    SilentErrorReporter,
    create_logger,
)
from plugins.DemoPlugin.archiver import archive


def main():
    """Demonstrate logging functionality."""

    print("=" * 60)
    print("Plugin Logging Examples")
    print("=" * 60)
    print()

    # Example 1: Screen writer with the default WARNING threshold
    print("Example 1: Screen writer")
    print("-" * 60)
    logger = create_logger(LoggerConfig(writers="screen"))

    logger.warning("Disk usage at %d%%", 91)
    logger.info("This INFO message won't appear (below WARNING)")
    print()

    # Example 2: Plugin identification from the calling module
    print("Example 2: Plugin identification")
    print("-" * 60)
    archive(logger, "example.org")
    print()

    # Example 3: File and database writers; errors also reach the screen
    print("Example 3: File and database writers")
    print("-" * 60)
    log_file = Path(tempfile.mkdtemp()) / "logs" / "plugin-logging.log"
    store = InMemoryLogStore()
    multi_logger = create_logger(
        LoggerConfig(writers="file,database", threshold="INFO", file_path=str(log_file)),
        log_store=store,
    )

    multi_logger.info("Processing %d archived reports", 12, plugin="Referrers")
    multi_logger.error(ErrorRecord(2, "division by zero", "/srv/app/core/math.py", 7))

    print(f"File contents ({log_file.name}):")
    print(log_file.read_text(encoding="utf-8"))
    for row in store.rows("logger_message"):
        print(f"  row: level={row['level']} plugin={row['plugin']} message={row['message']!r}")
    print()

    # Example 4: Exceptions carry their backtrace
    print("Example 4: Exception logging")
    print("-" * 60)
    try:
        {}["missing"]
    except KeyError:
        multi_logger.exception()
    print(log_file.read_text(encoding="utf-8").splitlines()[-1])
    print()

    # Example 5: In-memory capture for tests
    print("Example 5: Memory writer for testing")
    print("-" * 60)
    reporter = SilentErrorReporter()
    test_logger = create_logger(
        LoggerConfig(writers="memory", threshold="DEBUG", message_template="%level%: %message%"),
        error_reporter=reporter,
    )

    test_logger.debug("Test message 1")
    test_logger.warning("Test warning")

    sink = test_logger.get_sink("memory")
    print(f"Total logs captured: {len(sink.logs)}")
    print(f"Has 'Test message 1': {sink.has_log('Test message 1')}")
    print(f"Contained sink failures: {len(reporter.failures)}")
    for log in sink.logs:
        print(f"  [{log['level']}] {log['message']}")
    print()

    print("=" * 60)
    print("Examples completed!")
    print("=" * 60)


if __name__ == "__main__":
    main()
