"""Global application context for the command line."""

from __future__ import annotations

from pathlib import Path


class _Context:
    """Application context for managing global CLI state."""

    def __init__(self) -> None:
        self.config_path: Path | None = None


# Singleton instance
_context = _Context()


def get_config_path() -> Path | None:
    """Get the config path passed with --config."""
    return _context.config_path


def set_config_path(path: Path | None) -> None:
    """Set the config path passed with --config."""
    _context.config_path = path
