"""Task label footprint estimation.

Labels drawn before or after a bar extend past the bar's dates. Fit-to-view
and export widen the date window by the label footprint, converted to days
at the pixel density being fitted.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence

from .config import LabelPosition
from .models import LabelPadding, Task, TaskType

LABEL_GAP = 8  # px between bar edge and label
MAX_LABEL_PADDING_PX = 250  # cap for very long task names
CHAR_WIDTH_FACTOR = 0.6  # average sans-serif glyph width / font size

TextMeasurer = Callable[[str, float], float]
LabelPaddingFn = Callable[[Sequence[Task], float], LabelPadding]


def measure_text(text: str, font_size: float) -> float:
    """Estimate rendered text width without a font backend."""
    if not text:
        return 0.0
    return len(text) * font_size * CHAR_WIDTH_FACTOR


def effective_label_position(task: Task, position: LabelPosition) -> LabelPosition:
    """Summaries and milestones cannot hold an inside label; they draw it after."""
    if position == LabelPosition.INSIDE and task.type in (TaskType.SUMMARY, TaskType.MILESTONE):
        return LabelPosition.AFTER
    return position


class LabelPaddingEstimator:
    """Callable estimating label overflow, in whole days, for a pixel density.

    Instances are passed to NavigationController.fit_to_view and
    zoom_to_date_range; any callable with the same signature works.
    """

    def __init__(
        self,
        label_position: LabelPosition = LabelPosition.AFTER,
        font_size: float = 12,
        measure: TextMeasurer = measure_text,
    ) -> None:
        self.label_position = label_position
        self.font_size = font_size
        self.measure = measure

    def max_label_width(self, tasks: Sequence[Task]) -> float:
        return max((self.measure(task.name, self.font_size) for task in tasks), default=0.0)

    def __call__(self, tasks: Sequence[Task], pixels_per_day: float) -> LabelPadding:
        if not tasks or pixels_per_day <= 0 or not math.isfinite(pixels_per_day):
            return LabelPadding()

        before: list[Task] = []
        after: list[Task] = []
        for task in tasks:
            position = effective_label_position(task, self.label_position)
            if position == LabelPosition.AFTER:
                after.append(task)
            elif position == LabelPosition.BEFORE:
                before.append(task)
            # inside and none labels never overflow

        return LabelPadding(
            left_days=self._padding_days(before, pixels_per_day),
            right_days=self._padding_days(after, pixels_per_day),
        )

    def _padding_days(self, tasks: Sequence[Task], pixels_per_day: float) -> int:
        if not tasks:
            return 0
        padding_px = min(self.max_label_width(tasks) + LABEL_GAP, MAX_LABEL_PADDING_PX)
        return math.ceil(padding_px / pixels_per_day)
