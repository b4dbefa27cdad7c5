"""Calendar arithmetic on ISO YYYY-MM-DD date strings.

Dates cross the public boundary as fixed-width ISO strings (so they order
lexicographically); arithmetic is done on ordinal day numbers.
"""

from __future__ import annotations

import re
from collections.abc import Collection, Iterable
from datetime import date, timedelta

from .exceptions import MalformedDateError
from .models import DateRange, Task

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

SATURDAY = 5  # date.weekday()
SUNDAY = 6


def parse_date(date_str: str) -> date:
    """Parse a strict YYYY-MM-DD string.

    Raises:
        MalformedDateError: If the string is not a real calendar day
    """
    if not isinstance(date_str, str) or not _ISO_DATE_RE.match(date_str):
        raise MalformedDateError(f"Invalid calendar date: {date_str!r} (expected YYYY-MM-DD)")
    try:
        return date.fromisoformat(date_str)
    except ValueError:
        raise MalformedDateError(f"Invalid calendar date: {date_str!r}") from None


def is_valid_date(date_str: str | None) -> bool:
    """Return True when date_str is a real YYYY-MM-DD calendar day."""
    if not date_str:
        return False
    try:
        parse_date(date_str)
    except MalformedDateError:
        return False
    return True


def format_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def to_day_number(date_str: str) -> int:
    """Ordinal day number of an ISO date (proleptic Gregorian, 0001-01-01 == 1)."""
    return parse_date(date_str).toordinal()


def from_day_number(day_number: int) -> str:
    return format_date(date.fromordinal(day_number))


def day_count(start: str, end: str) -> int:
    """Days from start to end, inclusive-exclusive (negative when end < start).

    >>> day_count("2025-01-01", "2025-01-31")
    30
    """
    return to_day_number(end) - to_day_number(start)


def duration(start: str, end: str) -> int:
    """Inclusive calendar duration: a task from the 1st to the 5th lasts 5 days."""
    return day_count(start, end) + 1


def add_days(date_str: str, days: int) -> str:
    return format_date(parse_date(date_str) + timedelta(days=days))


def is_weekend(date_str: str) -> bool:
    return parse_date(date_str).weekday() >= SATURDAY


def iter_days(start: str, end: str) -> Iterable[str]:
    """Yield every date from start to end, both inclusive."""
    current = parse_date(start)
    last = parse_date(end)
    while current <= last:
        yield format_date(current)
        current += timedelta(days=1)


def business_days(start: str, end: str) -> int:
    """Number of weekdays between start and end, both inclusive.

    Returns 0 when end is before start.
    """
    total = duration(start, end)
    if total <= 0:
        return 0

    full_weeks, remainder = divmod(total, 7)
    count = full_weeks * 5
    first_weekday = parse_date(start).weekday()
    for offset in range(remainder):
        if (first_weekday + offset) % 7 < SATURDAY:
            count += 1
    return count


def is_working_day(
    date_str: str,
    *,
    exclude_saturday: bool = True,
    exclude_sunday: bool = True,
    holidays: Collection[str] = (),
) -> bool:
    """Check a day against the working-days rules.

    holidays is a collection of ISO dates supplied by the holiday calendar
    (not looked up here).
    """
    weekday = parse_date(date_str).weekday()
    if exclude_saturday and weekday == SATURDAY:
        return False
    if exclude_sunday and weekday == SUNDAY:
        return False
    return date_str not in holidays


def working_days(
    start: str,
    end: str,
    *,
    exclude_saturday: bool = True,
    exclude_sunday: bool = True,
    holidays: Collection[str] = (),
) -> int:
    """Count working days between start and end, both inclusive."""
    if not exclude_saturday and not exclude_sunday and not holidays:
        return max(0, duration(start, end))

    return sum(
        1
        for day in iter_days(start, end)
        if is_working_day(
            day,
            exclude_saturday=exclude_saturday,
            exclude_sunday=exclude_sunday,
            holidays=holidays,
        )
    )


def add_working_days(
    start: str,
    days: int,
    *,
    exclude_saturday: bool = True,
    exclude_sunday: bool = True,
    holidays: Collection[str] = (),
) -> str:
    """Date on which a task of `days` working days starting at start ends.

    The start date counts as day 1 when it is itself a working day.
    """
    if not exclude_saturday and not exclude_sunday and not holidays:
        return add_days(start, days - 1)

    def working(day: str) -> bool:
        return is_working_day(
            day,
            exclude_saturday=exclude_saturday,
            exclude_sunday=exclude_sunday,
            holidays=holidays,
        )

    current = start
    remaining = days
    if working(current):
        remaining -= 1
    while remaining > 0:
        current = add_days(current, 1)
        if working(current):
            remaining -= 1
    return current


def has_usable_dates(task: Task) -> bool:
    """Whether a task has valid start and end dates in order.

    Milestones end where they start. Tasks failing this check are never
    drawn, so they take no part in range or label calculations either.
    """
    start = task.start_date
    end = task.effective_end_date
    if not is_valid_date(start) or not is_valid_date(end):
        return False
    assert start is not None and end is not None
    return end >= start


def dated_tasks(tasks: Iterable[Task]) -> list[Task]:
    return [task for task in tasks if has_usable_dates(task)]


def task_span(tasks: Iterable[Task]) -> DateRange | None:
    """Tight date span of tasks with usable dates.

    Milestones contribute their start date only. Tasks whose dates are
    missing or malformed are ignored rather than defaulted.
    """
    span_min: str | None = None
    span_max: str | None = None
    for task in dated_tasks(tasks):
        start = task.start_date
        end = task.effective_end_date
        assert start is not None and end is not None
        if span_min is None or start < span_min:
            span_min = start
        if span_max is None or end > span_max:
            span_max = end

    if span_min is None or span_max is None:
        return None
    return DateRange(min=span_min, max=span_max)
