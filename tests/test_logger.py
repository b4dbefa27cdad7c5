"""Tests for verbosity-level logging."""

import io

from gantry.logger import (
    changes_enabled,
    checks_enabled,
    debug_enabled,
    get_logger,
    reset_logger,
    setup_logger,
)
from gantry.navigation import NavigationController


def test_silent_by_default():
    """Test verbosity 0 hides changes and checks."""
    stream = io.StringIO()
    setup_logger(0, stream=stream)

    logger = get_logger()
    logger.changes("zoom changed")
    logger.checks("task skipped")

    assert stream.getvalue() == ""
    assert not changes_enabled()


def test_changes_level():
    """Test verbosity 1 shows changes only."""
    stream = io.StringIO()
    setup_logger(1, stream=stream)

    logger = get_logger()
    logger.changes("zoom changed")
    logger.checks("task skipped")

    assert stream.getvalue() == "zoom changed\n"
    assert changes_enabled()
    assert not checks_enabled()


def test_checks_level():
    """Test verbosity 2 shows changes and checks."""
    stream = io.StringIO()
    setup_logger(2, stream=stream)

    logger = get_logger()
    logger.changes("zoom changed")
    logger.checks("task skipped")
    logger.debug("routing detail")

    assert stream.getvalue() == "zoom changed\ntask skipped\n"
    assert checks_enabled()
    assert not debug_enabled()


def test_debug_level():
    """Test verbosity 3 shows everything."""
    setup_logger(3, stream=io.StringIO())
    assert debug_enabled()


def test_reconfigure_replaces_handler():
    """Test repeated setup does not duplicate output."""
    first = io.StringIO()
    second = io.StringIO()
    setup_logger(1, stream=first)
    setup_logger(1, stream=second)

    get_logger().changes("once")

    assert first.getvalue() == ""
    assert second.getvalue() == "once\n"


def test_reset_logger():
    """Test reset removes handlers and restores the default level."""
    setup_logger(3, stream=io.StringIO())
    reset_logger()

    assert get_logger().handlers == []
    assert not debug_enabled()


def test_rejected_transition_is_a_warning():
    """Test rejected navigation changes are reported even when silent."""
    stream = io.StringIO()
    setup_logger(0, stream=stream)

    result = NavigationController().set_viewport_width(float("nan"))

    assert not result.accepted
    assert "Navigation change rejected" in stream.getvalue()
