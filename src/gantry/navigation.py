"""Navigation state for the timeline: visible window, zoom and pan.

The controller owns a single frozen NavigationState. Every transition
builds a complete new state (scale included) and swaps it in with one
assignment, so readers never see a half-applied change. Transitions report
their outcome as a TransitionResult; invalid input is rejected and logged,
the previous state is kept, and nothing is raised for bad numbers.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, replace
from datetime import date

from .config import GantryConfig
from .datemath import add_days, dated_tasks, day_count, format_date, parse_date, task_span
from .exceptions import InvalidRangeError
from .labels import LabelPaddingFn
from .logger import get_logger
from .models import (
    DateRange,
    Direction,
    LabelPadding,
    PanOffset,
    Task,
    TransitionResult,
    ZoomAnchor,
)
from .scale import TimelineScale, compute_scale, date_to_pixel

DEFAULT_VIEWPORT_WIDTH = 800.0


@dataclass(slots=True, frozen=True)
class NavigationState:
    """Complete navigation state vector.

    scale is derived from (date_range, zoom, viewport_width) and is None
    until a date range has been established.
    """

    date_range: DateRange | None = None
    zoom: float = 1.0
    pan_offset: PanOffset = PanOffset()
    viewport_width: float = DEFAULT_VIEWPORT_WIDTH
    scale: TimelineScale | None = None


def _is_finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)


def _no_label_padding(tasks: Sequence[Task], pixels_per_day: float) -> LabelPadding:
    del tasks, pixels_per_day
    return LabelPadding()


class NavigationController:
    """Single-writer holder of the navigation state.

    Example:
        nav = NavigationController(viewport_width=1000)
        nav.update_scale(tasks)
        result = nav.zoom_in(ZoomAnchor("2025-03-01", 400))
        container.scroll_left = result.scroll_left
    """

    def __init__(
        self,
        config: GantryConfig | None = None,
        *,
        viewport_width: float = DEFAULT_VIEWPORT_WIDTH,
        today: date | None = None,
    ) -> None:
        self.config = config or GantryConfig()
        self._today = today
        self._state = NavigationState(viewport_width=viewport_width)
        self.logger = get_logger()

    @property
    def state(self) -> NavigationState:
        return self._state

    @property
    def zoom(self) -> float:
        return self._state.zoom

    @property
    def scale(self) -> TimelineScale | None:
        return self._state.scale

    @property
    def date_range(self) -> DateRange | None:
        return self._state.date_range

    # --- internals -------------------------------------------------------

    def _today_str(self) -> str:
        return format_date(self._today or date.today())

    def _derive_scale(
        self, date_range: DateRange | None, zoom: float, viewport_width: float
    ) -> TimelineScale | None:
        if date_range is None:
            return None
        return compute_scale(
            date_range.min, date_range.max, viewport_width, zoom, config=self.config.scale
        )

    def _commit(
        self,
        *,
        date_range: DateRange | None = None,
        zoom: float | None = None,
        pan_offset: PanOffset | None = None,
        viewport_width: float | None = None,
    ) -> NavigationState:
        """Build the next state, re-derive its scale and swap it in."""
        current = self._state
        next_range = current.date_range if date_range is None else date_range
        next_zoom = current.zoom if zoom is None else zoom
        next_width = current.viewport_width if viewport_width is None else viewport_width
        new_state = replace(
            current,
            date_range=next_range,
            zoom=next_zoom,
            pan_offset=current.pan_offset if pan_offset is None else pan_offset,
            viewport_width=next_width,
            scale=self._derive_scale(next_range, next_zoom, next_width),
        )
        self._state = new_state
        return new_state

    def _reject(self, reason: str) -> TransitionResult:
        self.logger.warning("Navigation change rejected: %s", reason)
        return TransitionResult.rejected(reason)

    def _fit_zoom(self, days: int, viewport_width: float) -> float:
        """Zoom at which `days` days exactly fill viewport_width (clamped)."""
        ideal = viewport_width / (max(days, 1) * self.config.scale.base_pixels_per_day)
        return self.config.scale.clamp_zoom(ideal)

    def _two_pass_fit(
        self,
        window: DateRange,
        tasks: Sequence[Task],
        viewport_width: float,
        estimator: LabelPaddingFn | None,
    ) -> tuple[DateRange, float]:
        """Fit a window plus its label footprint into the viewport.

        A provisional zoom sizes pixels-per-day, which sizes the label
        footprint in days, which widens the window before the final zoom.
        """
        estimator = estimator or _no_label_padding
        provisional = self._fit_zoom(day_count(window.min, window.max), viewport_width)
        pixels_per_day = self.config.scale.base_pixels_per_day * provisional
        # Only tasks that get drawn carry a label on the timeline
        padding = estimator(dated_tasks(tasks), pixels_per_day)
        fitted = DateRange(
            min=add_days(window.min, -padding.left_days),
            max=add_days(window.max, padding.right_days),
        )
        final = self._fit_zoom(day_count(fitted.min, fitted.max), viewport_width)
        self.logger.debug(
            "Fit %s..%s: provisional zoom %.4f, label padding %d/%d days, final zoom %.4f",
            fitted.min,
            fitted.max,
            provisional,
            padding.left_days,
            padding.right_days,
            final,
        )
        return fitted, final

    # --- zoom ------------------------------------------------------------

    def set_zoom(self, new_zoom: float, anchor: ZoomAnchor | None = None) -> TransitionResult:
        """Set the zoom, optionally keeping an anchor date fixed on screen.

        The anchor's pixel position is computed from the new scale.

        Args:
            new_zoom: Requested zoom; clamped to the configured bounds (zero and
                negative values clamp to min_zoom)
            anchor: Date to keep at a viewport pixel offset

        Returns:
            TransitionResult whose scroll_left keeps the anchor in place, or
            None when no anchor was given
        """
        if not _is_finite(new_zoom):
            return self._reject(f"zoom must be a finite number, got {new_zoom!r}")
        if anchor is not None:
            if not _is_finite(anchor.anchor_pixel_offset):
                return self._reject(
                    f"anchor offset must be finite, got {anchor.anchor_pixel_offset!r}"
                )
            parse_date(anchor.anchor_date)

        old_zoom = self._state.zoom
        zoom = self.config.scale.clamp_zoom(new_zoom)
        state = self._commit(zoom=zoom)
        if zoom != old_zoom:
            self.logger.changes("Zoom %.4f -> %.4f", old_zoom, zoom)

        if anchor is None or state.scale is None:
            return TransitionResult(scroll_left=None)
        scroll_left = date_to_pixel(anchor.anchor_date, state.scale) - anchor.anchor_pixel_offset
        return TransitionResult(scroll_left=scroll_left)

    def zoom_in(self, anchor: ZoomAnchor | None = None) -> TransitionResult:
        return self.set_zoom(self._state.zoom * self.config.scale.zoom_step_factor, anchor)

    def zoom_out(self, anchor: ZoomAnchor | None = None) -> TransitionResult:
        return self.set_zoom(self._state.zoom / self.config.scale.zoom_step_factor, anchor)

    def reset_zoom(self) -> TransitionResult:
        return self.set_zoom(1.0)

    # --- viewport and pan ------------------------------------------------

    def set_viewport_width(self, width: float) -> TransitionResult:
        if not _is_finite(width) or width <= 0:
            return self._reject(f"viewport width must be positive and finite, got {width!r}")
        self._commit(viewport_width=width)
        return TransitionResult()

    def set_pan_offset(self, x: float, y: float) -> TransitionResult:
        if not _is_finite(x, y):
            return self._reject(f"pan offset must be finite, got ({x!r}, {y!r})")
        self._commit(pan_offset=PanOffset(x, y))
        return TransitionResult()

    def pan_by(self, dx: float, dy: float) -> TransitionResult:
        current = self._state.pan_offset
        return self.set_pan_offset(current.x + dx, current.y + dy)

    def reset_pan(self) -> TransitionResult:
        self._commit(pan_offset=PanOffset())
        return TransitionResult()

    def reset_view(self) -> TransitionResult:
        """Zoom back to 1.0 and pan back to the origin; the range is kept."""
        self._commit(zoom=1.0, pan_offset=PanOffset())
        self.logger.changes("View reset")
        return TransitionResult()

    # --- date range ------------------------------------------------------

    def set_date_range(self, date_range: DateRange) -> TransitionResult:
        """Replace the date range outright (e.g. restoring a saved view).

        Raises:
            MalformedDateError: If either date is malformed
            InvalidRangeError: If the range ends before it starts
        """
        if parse_date(date_range.max) < parse_date(date_range.min):
            raise InvalidRangeError(
                f"Date range ends before it starts: {date_range.min} > {date_range.max}"
            )
        self._commit(date_range=date_range)
        self.logger.changes("Date range set to %s..%s", date_range.min, date_range.max)
        return TransitionResult()

    def extend_date_range(
        self,
        direction: Direction,
        days: int | None = None,
        *,
        scroll_left: float | None = None,
    ) -> TransitionResult:
        """Grow the date range on one side for infinite scroll; zoom is untouched.

        Args:
            direction: Side to grow
            days: Days to add (navigation.extend_days by default)
            scroll_left: Current scroll position. When extending into the past,
                the returned scroll_left compensates for the content shifting
                right so the view does not jump.

        Returns:
            TransitionResult; rejected when no range exists yet
        """
        current = self._state.date_range
        if current is None:
            return self._reject("cannot extend: no date range established")
        days = self.config.navigation.extend_days if days is None else days
        if days <= 0:
            return self._reject(f"extension must be a positive number of days, got {days}")
        if scroll_left is not None and not _is_finite(scroll_left):
            return self._reject(f"scroll position must be finite, got {scroll_left!r}")

        if direction == Direction.PAST:
            extended = DateRange(min=add_days(current.min, -days), max=current.max)
        else:
            extended = DateRange(min=current.min, max=add_days(current.max, days))
        state = self._commit(date_range=extended)
        self.logger.changes(
            "Extended date range %d days into the %s: %s..%s",
            days,
            direction.value,
            extended.min,
            extended.max,
        )

        if direction == Direction.PAST and scroll_left is not None and state.scale is not None:
            return TransitionResult(scroll_left=scroll_left + days * state.scale.pixels_per_day)
        return TransitionResult(scroll_left=scroll_left)

    def update_scale(self, tasks: Sequence[Task]) -> TransitionResult:
        """Re-derive the scale after a task change.

        The first call establishes the range from the padded task span (or a
        window around today when there are no tasks). Afterwards the range
        only grows, on the side a task pushes past; it never shrinks to fit.
        """
        nav = self.config.navigation
        span = task_span(tasks)
        current = self._state.date_range

        if current is None:
            if span is None:
                today = self._today_str()
                new_range = DateRange(
                    min=add_days(today, -nav.empty_past_days),
                    max=add_days(today, nav.empty_future_days),
                )
            else:
                new_range = DateRange(
                    min=add_days(span.min, -nav.range_padding_days),
                    max=add_days(span.max, nav.range_padding_days),
                )
            self._commit(date_range=new_range)
            self.logger.changes("Date range established: %s..%s", new_range.min, new_range.max)
            return TransitionResult()

        new_range = current
        if span is not None and not current.contains(span):
            new_range = DateRange(
                min=add_days(span.min, -nav.range_padding_days)
                if span.min < current.min
                else current.min,
                max=add_days(span.max, nav.range_padding_days)
                if span.max > current.max
                else current.max,
            )
            self.logger.changes("Date range grown to %s..%s", new_range.min, new_range.max)
        self._commit(date_range=new_range)
        return TransitionResult()

    # --- fitting ---------------------------------------------------------

    def fit_to_view(
        self,
        tasks: Sequence[Task],
        viewport_width: float | None = None,
        label_padding_estimator: LabelPaddingFn | None = None,
    ) -> TransitionResult:
        """Zoom so the padded task span plus label overflow fills the viewport.

        Falls back to reset_zoom and reset_pan when no task has usable dates.

        Returns:
            TransitionResult with scroll_left 0 (the fitted window starts at
            the left edge)
        """
        width = self._state.viewport_width if viewport_width is None else viewport_width
        if not _is_finite(width) or width <= 0:
            return self._reject(f"viewport width must be positive and finite, got {width!r}")

        span = task_span(tasks)
        if span is None:
            self._commit(zoom=1.0, pan_offset=PanOffset(), viewport_width=width)
            self.logger.changes("Fit to view: no dated tasks, zoom reset")
            return TransitionResult(scroll_left=0.0)

        padding_days = self.config.navigation.range_padding_days
        window = DateRange(
            min=add_days(span.min, -padding_days),
            max=add_days(span.max, padding_days),
        )
        fitted, zoom = self._two_pass_fit(window, tasks, width, label_padding_estimator)
        self._commit(
            date_range=fitted, zoom=zoom, pan_offset=PanOffset(), viewport_width=width
        )
        self.logger.changes("Fit to view: %s..%s at zoom %.4f", fitted.min, fitted.max, zoom)
        return TransitionResult(scroll_left=0.0)

    def zoom_to_date_range(
        self,
        start: str,
        end: str,
        tasks: Sequence[Task] = (),
        label_padding_estimator: LabelPaddingFn | None = None,
    ) -> TransitionResult:
        """Zoom so an explicit window (e.g. a clicked header cell) fills the viewport.

        The date range grows to include the window but is never shrunk.

        Returns:
            TransitionResult whose scroll_left puts the padded window start at
            the viewport's left edge

        Raises:
            MalformedDateError: If either date is malformed
            InvalidRangeError: If end is before start
        """
        if parse_date(end) < parse_date(start):
            raise InvalidRangeError(f"Zoom window ends before it starts: {start} > {end}")

        padding_days = self.config.navigation.zoom_range_padding_days
        window = DateRange(min=add_days(start, -padding_days), max=add_days(end, padding_days))
        width = self._state.viewport_width
        fitted, zoom = self._two_pass_fit(window, tasks, width, label_padding_estimator)

        current = self._state.date_range
        new_range = fitted if current is None else current.union(fitted)
        state = self._commit(date_range=new_range, zoom=zoom)
        self.logger.changes("Zoomed to %s..%s at zoom %.4f", fitted.min, fitted.max, zoom)

        assert state.scale is not None
        return TransitionResult(scroll_left=date_to_pixel(fitted.min, state.scale))
