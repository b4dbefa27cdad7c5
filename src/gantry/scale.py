"""Timeline scale: date range + zoom -> pixel mapping and header tiers.

`date_to_pixel` is the one place a date becomes an x coordinate. Geometry,
grid, header and navigation code all call it instead of repeating the
formula, so the interactive view and the exporters cannot drift apart.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum

from .config import (
    BASE_PIXELS_PER_DAY,
    MAX_ZOOM,
    MIN_ZOOM,
    ZOOM_STEP_FACTOR,
    ScaleConfig,
    WeekNumbering,
    WeekStart,
)
from .datemath import add_days, day_count, format_date, parse_date
from .exceptions import InvalidRangeError
from .logger import get_logger
from .models import DateRange

__all__ = [
    "BASE_PIXELS_PER_DAY",
    "MAX_ZOOM",
    "MIN_ZOOM",
    "ZOOM_STEP_FACTOR",
    "HeaderCell",
    "ScaleTier",
    "TierUnit",
    "TimelineScale",
    "compute_scale",
    "date_to_pixel",
    "header_cells",
    "pixel_to_date",
    "select_tiers",
    "visible_date_range",
    "week_number",
]

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
WEEKDAY_LETTERS = ("M", "T", "W", "T", "F", "S", "S")  # indexed by date.weekday()


class TierUnit(str, Enum):
    """Calendar unit covered by one header cell."""

    QUARTER = "quarter"
    MONTH = "month"
    WEEK = "week"
    DAY = "day"


@dataclass(slots=True, frozen=True)
class ScaleTier:
    """One row of the timeline header.

    label names the label format: see _format_label for the choices.
    """

    unit: TierUnit
    step: int
    label: str


@dataclass(slots=True, frozen=True)
class HeaderCell:
    """One labelled cell of a header tier, clipped to the scale."""

    label: str
    start: str
    x: float
    width: float


@dataclass(slots=True, frozen=True)
class TimelineScale:
    """Immutable pixel mapping for a date range at a zoom level.

    total_days counts days inclusive-exclusive, so
    total_width == total_days * pixels_per_day.
    """

    min_date: str
    max_date: str
    pixels_per_day: float
    total_width: float
    total_days: int
    zoom: float
    tiers: tuple[ScaleTier, ...]


# (exclusive upper bound in pixels/day, header tiers top-to-bottom)
_TIER_TABLE: tuple[tuple[float, tuple[ScaleTier, ...]], ...] = (
    (
        3.0,
        (ScaleTier(TierUnit.QUARTER, 1, "quarter_year"), ScaleTier(TierUnit.MONTH, 1, "month_short")),
    ),
    (
        5.0,
        (ScaleTier(TierUnit.MONTH, 1, "month_year"), ScaleTier(TierUnit.WEEK, 1, "week_number")),
    ),
    (
        30.0,
        (ScaleTier(TierUnit.MONTH, 1, "month_year"), ScaleTier(TierUnit.WEEK, 1, "week_prefixed")),
    ),
    (
        60.0,
        (ScaleTier(TierUnit.MONTH, 1, "month_long_year"), ScaleTier(TierUnit.DAY, 1, "day_number")),
    ),
    (
        math.inf,
        (ScaleTier(TierUnit.WEEK, 1, "week_long"), ScaleTier(TierUnit.DAY, 1, "weekday_day")),
    ),
)


def select_tiers(pixels_per_day: float) -> tuple[ScaleTier, ...]:
    """Pick header tiers for a pixel density.

    Thresholds are fixed steps, never interpolated, so the header always shows
    whole tiers.
    """
    for upper_bound, tiers in _TIER_TABLE:
        if pixels_per_day < upper_bound:
            return tiers
    return _TIER_TABLE[-1][1]


def compute_scale(
    min_date: str,
    max_date: str,
    viewport_width: float,
    zoom: float,
    *,
    config: ScaleConfig | None = None,
) -> TimelineScale:
    """Compute the timeline scale for a date range.

    The base pixels-per-day is a constant, not derived from the viewport, so
    the same zoom gives identical geometry with or without a live viewport.
    viewport_width is accepted for call-site symmetry with the navigation
    state but does not influence the mapping.

    Zoom is not clamped here; callers clamp to [min_zoom, max_zoom] first.

    Args:
        min_date: Left edge of the timeline (ISO date)
        max_date: Right edge of the timeline (ISO date)
        viewport_width: Width of the visible area in pixels
        zoom: Dimensionless zoom multiplier

    Returns:
        A new TimelineScale

    Raises:
        MalformedDateError: If either date is malformed
        InvalidRangeError: If max_date is before min_date
        ValueError: If zoom is not a positive finite number
    """
    del viewport_width
    base = config.base_pixels_per_day if config else BASE_PIXELS_PER_DAY

    start = parse_date(min_date)
    end = parse_date(max_date)
    if end < start:
        raise InvalidRangeError(f"Date range ends before it starts: {min_date} > {max_date}")
    if not math.isfinite(zoom) or zoom <= 0:
        raise ValueError(f"Zoom must be a positive finite number, got {zoom!r}")

    pixels_per_day = base * zoom
    total_days = (end - start).days
    tiers = select_tiers(pixels_per_day)
    get_logger().debug(
        "Scale %s..%s zoom=%.4f ppd=%.4f tiers=%s",
        min_date,
        max_date,
        zoom,
        pixels_per_day,
        [t.unit.value for t in tiers],
    )

    return TimelineScale(
        min_date=min_date,
        max_date=max_date,
        pixels_per_day=pixels_per_day,
        total_width=total_days * pixels_per_day,
        total_days=total_days,
        zoom=zoom,
        tiers=tiers,
    )


def date_to_pixel(date_str: str, scale: TimelineScale) -> float:
    """X coordinate of the left edge of a day's column."""
    return day_count(scale.min_date, date_str) * scale.pixels_per_day


def pixel_to_date(x: float, scale: TimelineScale) -> str:
    """Date whose column edge is nearest to x (halves round up)."""
    days_from_start = math.floor(x / scale.pixels_per_day + 0.5)
    return add_days(scale.min_date, days_from_start)


def visible_date_range(
    scale: TimelineScale, scroll_left: float, viewport_width: float
) -> DateRange:
    """Dates at the left and right edge of a scrolled viewport."""
    return DateRange(
        min=pixel_to_date(scroll_left, scale),
        max=pixel_to_date(scroll_left + viewport_width, scale),
    )


def week_number(value: date, system: WeekNumbering = WeekNumbering.ISO) -> int:
    """Week-of-year number under ISO 8601 or US numbering."""
    if system == WeekNumbering.ISO:
        return value.isocalendar()[1]

    # US: weeks start on Sunday; week 1 is the week containing January 1st
    days_since_sunday = (value.weekday() + 1) % 7
    week_sunday = value - timedelta(days=days_since_sunday)
    if (week_sunday + timedelta(days=6)).year > value.year:
        return 1
    jan1 = date(value.year, 1, 1)
    jan1_offset = (jan1.weekday() + 1) % 7
    return (value.timetuple().tm_yday - 1 + jan1_offset) // 7 + 1


def _unit_start(value: date, unit: TierUnit, week_start: WeekStart) -> date:
    if unit == TierUnit.QUARTER:
        return date(value.year, (value.month - 1) // 3 * 3 + 1, 1)
    if unit == TierUnit.MONTH:
        return date(value.year, value.month, 1)
    if unit == TierUnit.WEEK:
        if week_start == WeekStart.SUNDAY:
            return value - timedelta(days=(value.weekday() + 1) % 7)
        return value - timedelta(days=value.weekday())
    return value


def _add_unit(value: date, unit: TierUnit, step: int) -> date:
    if unit in (TierUnit.QUARTER, TierUnit.MONTH):
        months = step * (3 if unit == TierUnit.QUARTER else 1)
        month_index = value.month - 1 + months
        return date(value.year + month_index // 12, month_index % 12 + 1, 1)
    if unit == TierUnit.WEEK:
        return value + timedelta(weeks=step)
    return value + timedelta(days=step)


def _format_label(value: date, label: str, week_numbering: WeekNumbering) -> str:  # noqa: PLR0911
    month = MONTH_NAMES[value.month - 1]
    if label == "quarter_year":
        return f"Q{(value.month - 1) // 3 + 1} {value.year}"
    if label == "month_short":
        return month[:3]
    if label == "month_year":
        return f"{month[:3]} {value.year}"
    if label == "month_long_year":
        return f"{month} {value.year}"
    if label == "week_number":
        return str(week_number(value, week_numbering))
    if label == "week_prefixed":
        return f"W{week_number(value, week_numbering)}"
    if label == "week_long":
        return f"Week {week_number(value, week_numbering)}"
    if label == "weekday_day":
        return f"{WEEKDAY_LETTERS[value.weekday()]} {value.day}"
    return str(value.day)


def header_cells(
    scale: TimelineScale,
    tier: ScaleTier,
    *,
    week_start: WeekStart = WeekStart.MONDAY,
    week_numbering: WeekNumbering = WeekNumbering.ISO,
) -> list[HeaderCell]:
    """Labelled cells for one header tier, clipped to [0, total_width].

    Cells are aligned to calendar boundaries (quarter/month starts, the
    configured first day of the week); the first and last cell may be partial.
    Labels are computed from the unit start so a partial week keeps its week
    number.
    """
    range_start = parse_date(scale.min_date)
    range_end = parse_date(scale.max_date)
    cells: list[HeaderCell] = []

    current = _unit_start(range_start, tier.unit, week_start)
    while current < range_end:
        following = _add_unit(current, tier.unit, tier.step)
        cell_start = max(current, range_start)
        cell_end = min(following, range_end)
        x = date_to_pixel(format_date(cell_start), scale)
        width = date_to_pixel(format_date(cell_end), scale) - x
        if width > 0:
            cells.append(
                HeaderCell(
                    label=_format_label(current, tier.label, week_numbering),
                    start=format_date(cell_start),
                    x=x,
                    width=width,
                )
            )
        current = following

    return cells
