"""Logging configuration for Gantry with custom verbosity levels."""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

# Custom levels between the standard logging levels
CHANGES_LEVEL = 25  # Between INFO (20) and WARNING (30) - navigation state changes
CHECKS_LEVEL = 15  # Between DEBUG (10) and INFO (20) - skipped geometry, range checks

logging.addLevelName(CHANGES_LEVEL, "CHANGES")
logging.addLevelName(CHECKS_LEVEL, "CHECKS")

VERBOSITY_SILENT = 0  # Only errors and rejected transitions
VERBOSITY_CHANGES = 1  # Show navigation state changes
VERBOSITY_CHECKS = 2  # Show skipped tasks and range checks
VERBOSITY_DEBUG = 3  # Full routing and tier-selection details


class GantryLogger(logging.Logger):
    """Logger with semantic verbosity methods.

    - changes(): verbosity level 1 - zoom, pan and date-range transitions
    - checks(): verbosity level 2 - skipped task geometry, range growth checks
    - debug(): verbosity level 3 - arrow routing branches, tier selection
    """

    def changes(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log a state change (verbosity level 1)."""
        if self.isEnabledFor(CHANGES_LEVEL):
            self._log(CHANGES_LEVEL, msg, args, **kwargs)

    def checks(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log a check (verbosity level 2)."""
        if self.isEnabledFor(CHECKS_LEVEL):
            self._log(CHECKS_LEVEL, msg, args, **kwargs)


def get_logger() -> GantryLogger:
    """Get the gantry logger instance (singleton).

    Returns:
        The gantry logger singleton instance
    """
    logging.setLoggerClass(GantryLogger)
    logger = logging.getLogger("gantry")
    assert isinstance(logger, GantryLogger)
    return logger


def setup_logger(verbosity: int, stream: TextIO | None = None) -> None:
    """Configure the gantry logger with a verbosity level.

    Can be called multiple times to reconfigure the logger.

    Args:
        verbosity: 0=silent (warnings and errors), 1=changes, 2=checks, 3=debug
        stream: Optional output stream (defaults to sys.stderr, useful for testing)
    """
    logger = get_logger()
    logger.handlers.clear()

    level_map = {
        VERBOSITY_SILENT: logging.WARNING,
        VERBOSITY_CHANGES: CHANGES_LEVEL,
        VERBOSITY_CHECKS: CHECKS_LEVEL,
        VERBOSITY_DEBUG: logging.DEBUG,
    }
    logger.setLevel(level_map.get(verbosity, logging.WARNING))

    output_stream = stream if stream is not None else sys.stderr

    handler = logging.StreamHandler(output_stream)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def reset_logger() -> None:
    """Reset the logger to a clean state (used between tests)."""
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(logging.WARNING)
    logger.propagate = True


def changes_enabled() -> bool:
    """Check if changes-level logging is enabled (verbosity >= 1)."""
    return get_logger().isEnabledFor(CHANGES_LEVEL)


def checks_enabled() -> bool:
    """Check if checks-level logging is enabled (verbosity >= 2)."""
    return get_logger().isEnabledFor(CHECKS_LEVEL)


def debug_enabled() -> bool:
    """Check if debug-level logging is enabled (verbosity >= 3)."""
    return get_logger().isEnabledFor(logging.DEBUG)
