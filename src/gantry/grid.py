"""Background grid planning: adaptive vertical lines, weekend bands, row lines."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum

from .config import DENSITY_PRESETS, DensityProfile, GridConfig, WeekStart
from .datemath import SATURDAY, add_days, format_date, parse_date
from .scale import TimelineScale, date_to_pixel

DEFAULT_GRID_CONFIG = GridConfig()


class GridInterval(str, Enum):
    """Spacing of vertical grid lines."""

    MONTHLY = "monthly"
    WEEKLY = "weekly"
    DAILY = "daily"


@dataclass(slots=True, frozen=True)
class VerticalLine:
    x: float
    date: str
    is_weekend: bool


@dataclass(slots=True, frozen=True)
class WeekendBand:
    """Shaded column covering one weekend day."""

    x: float
    width: float
    height: float
    date: str


@dataclass(slots=True, frozen=True)
class HorizontalLine:
    y: float


@dataclass(slots=True, frozen=True)
class GridPlan:
    interval: GridInterval
    width: float
    height: float
    vertical_lines: list[VerticalLine] = field(default_factory=list)
    weekend_bands: list[WeekendBand] = field(default_factory=list)
    horizontal_lines: list[HorizontalLine] = field(default_factory=list)


def grid_interval(pixels_per_day: float, config: GridConfig | None = None) -> GridInterval:
    """Pick the line spacing for a pixel density.

    The thresholds sit at or below the header tier thresholds, so the grid is
    never coarser than the finest header tier.
    """
    config = config or DEFAULT_GRID_CONFIG
    if pixels_per_day < config.monthly_below:
        return GridInterval.MONTHLY
    if pixels_per_day < config.weekly_below:
        return GridInterval.WEEKLY
    return GridInterval.DAILY


def _first_boundary(value: date, interval: GridInterval, week_start: WeekStart) -> date:
    """First interval boundary on or after value."""
    if interval == GridInterval.MONTHLY:
        if value.day == 1:
            return value
        month_index = value.month  # zero-based index of the following month
        return date(value.year + month_index // 12, month_index % 12 + 1, 1)
    if interval == GridInterval.WEEKLY:
        first_weekday = 0 if week_start == WeekStart.MONDAY else 6
        return value + timedelta(days=(first_weekday - value.weekday()) % 7)
    return value


def _next_boundary(value: date, interval: GridInterval) -> date:
    if interval == GridInterval.MONTHLY:
        month_index = value.month
        return date(value.year + month_index // 12, month_index % 12 + 1, 1)
    if interval == GridInterval.WEEKLY:
        return value + timedelta(weeks=1)
    return value + timedelta(days=1)


def plan_grid(
    scale: TimelineScale,
    row_count: int,
    show_weekends: bool,
    *,
    density: DensityProfile | None = None,
    width: float | None = None,
    week_start: WeekStart = WeekStart.MONDAY,
    config: GridConfig | None = None,
) -> GridPlan:
    """Plan the chart background for a scale and row count.

    Args:
        scale: Current timeline scale
        row_count: Number of task rows
        show_weekends: Whether to produce weekend bands
        density: Supplies the row height (normal preset when omitted)
        width: Grid width override; defaults to scale.total_width. Exporters
            pass a wider value to fill the page.
        week_start: Day weekly lines fall on
        config: Interval thresholds

    Returns:
        GridPlan with lines and bands in left-to-right / top-to-bottom order
    """
    density = density or DENSITY_PRESETS["normal"]
    grid_width = scale.total_width if width is None else width
    rows = max(0, row_count)
    height = rows * density.row_height
    interval = grid_interval(scale.pixels_per_day, config)

    range_start = parse_date(scale.min_date)
    last_day = parse_date(add_days(scale.min_date, math.ceil(grid_width / scale.pixels_per_day)))

    vertical_lines: list[VerticalLine] = []
    current = _first_boundary(range_start, interval, week_start)
    while current <= last_day:
        iso = format_date(current)
        x = date_to_pixel(iso, scale)
        if 0 <= x <= grid_width:
            vertical_lines.append(
                VerticalLine(x=x, date=iso, is_weekend=current.weekday() >= SATURDAY)
            )
        current = _next_boundary(current, interval)

    weekend_bands: list[WeekendBand] = []
    if show_weekends:
        current = range_start
        while current <= last_day:
            if current.weekday() >= SATURDAY:
                iso = format_date(current)
                x = date_to_pixel(iso, scale)
                if 0 <= x <= grid_width:
                    weekend_bands.append(
                        WeekendBand(x=x, width=scale.pixels_per_day, height=height, date=iso)
                    )
            current += timedelta(days=1)

    horizontal_lines = [HorizontalLine(y=i * density.row_height) for i in range(rows + 1)]

    return GridPlan(
        interval=interval,
        width=grid_width,
        height=height,
        vertical_lines=vertical_lines,
        weekend_bands=weekend_bands,
        horizontal_lines=horizontal_lines,
    )
