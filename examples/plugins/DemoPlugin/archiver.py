# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Archiving task of the demo plugin."""

from plugin_logging import Logger


def archive(logger: Logger, site: str) -> None:
    """Pretend to archive a site and log that it was slow."""
    logger.warning("Archiving %s took longer than expected", site)
