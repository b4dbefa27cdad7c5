"""Value types shared across the geometry core."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TaskType(str, Enum):
    """Kind of row drawn on the timeline."""

    TASK = "task"
    MILESTONE = "milestone"
    SUMMARY = "summary"


class Direction(str, Enum):
    """Side of the date range to grow for infinite scroll."""

    PAST = "past"
    FUTURE = "future"


@dataclass(slots=True, frozen=True)
class Task:
    """The subset of a task record the geometry core reads.

    Dates are ISO YYYY-MM-DD strings. A milestone only needs start_date; an
    empty summary may have no dates at all.
    """

    id: str
    start_date: str | None = None
    end_date: str | None = None
    type: TaskType = TaskType.TASK
    order: int = 0
    parent: str | None = None
    name: str = ""

    @property
    def is_milestone(self) -> bool:
        return self.type == TaskType.MILESTONE

    @property
    def effective_end_date(self) -> str | None:
        """End date used for layout: milestones end where they start."""
        if self.is_milestone:
            return self.start_date
        return self.end_date or None


@dataclass(slots=True, frozen=True)
class Dependency:
    """A finish-to-start edge between two tasks."""

    from_task_id: str
    to_task_id: str


@dataclass(slots=True, frozen=True)
class DateRange:
    """Padded visible window; the source of truth for the timeline scale."""

    min: str
    max: str

    def contains(self, other: DateRange) -> bool:
        """Return True when other lies completely inside this range."""
        return self.min <= other.min and other.max <= self.max

    def union(self, other: DateRange) -> DateRange:
        """Smallest range covering both ranges."""
        return DateRange(min=min(self.min, other.min), max=max(self.max, other.max))


@dataclass(slots=True, frozen=True)
class ZoomAnchor:
    """Keep anchor_date at anchor_pixel_offset from the viewport's left edge."""

    anchor_date: str
    anchor_pixel_offset: float


@dataclass(slots=True, frozen=True)
class Point:
    x: float
    y: float


@dataclass(slots=True, frozen=True)
class Rect:
    """Axis-aligned pixel rectangle."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2


class TaskShape(str, Enum):
    """Shape a renderer should draw inside the task rectangle."""

    BAR = "bar"
    MILESTONE = "milestone"  # diamond inscribed in the bounding box
    SUMMARY = "summary"  # bracket spanning the children


@dataclass(slots=True, frozen=True)
class TaskGeometry(Rect):
    """On-screen rectangle (or diamond bounding box) for one task row."""

    shape: TaskShape = TaskShape.BAR
    row_index: int = 0


@dataclass(slots=True, frozen=True)
class LabelPadding:
    """Extra days needed on each side so labels are not clipped."""

    left_days: int = 0
    right_days: int = 0


@dataclass(slots=True, frozen=True)
class TransitionResult:
    """Outcome of a navigation transition.

    accepted is False when the transition was rejected and the previous state
    was kept; reason then says why. scroll_left is a hint for the caller's
    scroll container, None meaning "keep the current scroll position".
    """

    accepted: bool = True
    scroll_left: float | None = None
    reason: str | None = None

    @classmethod
    def rejected(cls, reason: str) -> TransitionResult:
        return cls(accepted=False, scroll_left=None, reason=reason)


@dataclass(slots=True, frozen=True)
class PanOffset:
    x: float = 0.0
    y: float = 0.0

