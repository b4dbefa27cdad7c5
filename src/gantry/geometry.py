"""Task geometry: where each task is drawn on the timeline."""

from __future__ import annotations

from .config import DensityProfile
from .datemath import duration, is_valid_date
from .logger import get_logger
from .models import Point, Rect, Task, TaskGeometry, TaskShape, TaskType
from .path import ClosePath, LineTo, MoveTo, PathSegment
from .scale import TimelineScale, date_to_pixel

# Milestone half-size bounds (px); the diamond spans twice this value
MILESTONE_MIN_SIZE = 6.0
MILESTONE_MAX_SIZE = 10.0
MILESTONE_SIZE_FACTOR = 0.5  # half-size grows with pixels_per_day / 2


def milestone_size(pixels_per_day: float) -> float:
    """Half-size of a milestone diamond, clamped so it stays legible."""
    return min(MILESTONE_MAX_SIZE, max(MILESTONE_MIN_SIZE, pixels_per_day * MILESTONE_SIZE_FACTOR))


def row_top(row_index: int, density: DensityProfile, header_height: float = 0.0) -> float:
    return header_height + row_index * density.row_height


def task_geometry(
    task: Task,
    scale: TimelineScale,
    row_index: int,
    density: DensityProfile,
    *,
    header_height: float = 0.0,
) -> TaskGeometry | None:
    """Compute the on-screen rectangle for a task.

    Bars span from the left edge of the start day to the right edge of the
    (inclusive) end day. Milestones produce a square bounding box centred on
    their day cell. The density profile is only read.

    Args:
        task: Task to place
        scale: Current timeline scale
        row_index: Zero-based row the task is drawn in
        density: Row height, bar height and bar offset
        header_height: Height of a header drawn above row 0 (exporters)

    Returns:
        The geometry, or None when the task has no usable dates and must not
        be drawn
    """
    logger = get_logger()

    if row_index < 0:
        logger.checks("Task %s skipped: negative row index %d", task.id, row_index)
        return None
    if not is_valid_date(task.start_date):
        logger.checks("Task %s skipped: missing or malformed start date", task.id)
        return None
    assert task.start_date is not None

    bar_top = row_top(row_index, density, header_height) + density.task_bar_offset
    x = date_to_pixel(task.start_date, scale)

    if task.type == TaskType.MILESTONE:
        half = milestone_size(scale.pixels_per_day)
        center_x = x + scale.pixels_per_day / 2
        center_y = bar_top + density.task_bar_height / 2
        return TaskGeometry(
            x=center_x - half,
            y=center_y - half,
            width=half * 2,
            height=half * 2,
            shape=TaskShape.MILESTONE,
            row_index=row_index,
        )

    end_date = task.end_date
    if not is_valid_date(end_date):
        logger.checks("Task %s skipped: missing or malformed end date", task.id)
        return None
    assert end_date is not None
    days = duration(task.start_date, end_date)
    if days <= 0:
        logger.checks("Task %s skipped: ends before it starts", task.id)
        return None

    return TaskGeometry(
        x=x,
        y=bar_top,
        width=days * scale.pixels_per_day,
        height=density.task_bar_height,
        shape=TaskShape.SUMMARY if task.type == TaskType.SUMMARY else TaskShape.BAR,
        row_index=row_index,
    )


def milestone_diamond(geometry: Rect) -> list[PathSegment]:
    """Diamond inscribed in a milestone's bounding box."""
    cx = geometry.x + geometry.width / 2
    cy = geometry.center_y
    half = geometry.width / 2
    return [
        MoveTo(Point(cx, cy - half)),
        LineTo(Point(cx + half, cy)),
        LineTo(Point(cx, cy + half)),
        LineTo(Point(cx - half, cy)),
        ClosePath(),
    ]


def anchor_points(geometry: Rect) -> tuple[Point, Point]:
    """Left-centre and right-centre of a task: where arrows enter and leave."""
    return (
        Point(geometry.x, geometry.center_y),
        Point(geometry.right, geometry.center_y),
    )
