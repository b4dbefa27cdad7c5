"""Pytest configuration and fixtures for gantry tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from gantry import context
from gantry.config import DENSITY_PRESETS, DensityProfile
from gantry.logger import reset_logger
from gantry.models import Task, TaskType
from gantry.scale import TimelineScale, compute_scale


@pytest.fixture(autouse=True)
def reset_global_state() -> Iterator[None]:
    """Reset logger configuration and CLI context between tests."""
    reset_logger()
    context.set_config_path(None)
    yield
    reset_logger()
    context.set_config_path(None)


@pytest.fixture
def density() -> DensityProfile:
    """Normal density: row 36, bar 26, offset 5."""
    return DENSITY_PRESETS["normal"]


@pytest.fixture
def january_scale() -> TimelineScale:
    """2025-01-01..2025-01-31 at zoom 1.0 (25 px/day)."""
    return compute_scale("2025-01-01", "2025-01-31", 800, 1.0)


def task(
    task_id: str,
    start: str | None,
    end: str | None = None,
    *,
    type: TaskType = TaskType.TASK,  # noqa: A002 - mirrors Task.type
    order: int = 0,
    name: str = "",
) -> Task:
    """Create a Task with the end date defaulting to the start date."""
    if end is None and type != TaskType.SUMMARY:
        end = start
    return Task(
        id=task_id,
        start_date=start,
        end_date=end,
        type=type,
        order=order,
        name=name or task_id,
    )
