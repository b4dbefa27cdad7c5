"""Whole-chart layout shared by the interactive view and the exporters.

`build_layout` runs the geometry, arrow and grid passes over one scale so
every consumer draws from the same numbers.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

from .arrows import ArrowPath, route_arrow, scaled_corner_radius
from .config import BASE_PIXELS_PER_DAY, ArrowStyle, DensityProfile, GridConfig, WeekStart
from .datemath import parse_date
from .geometry import task_geometry
from .grid import GridPlan, plan_grid
from .logger import checks_enabled, get_logger
from .models import Dependency, Task, TaskGeometry
from .scale import TimelineScale, date_to_pixel

MIN_TIMELINE_WIDTH = 100  # px left for the timeline when fitting an export


class ExportZoomMode(str, Enum):
    """How an export picks its zoom."""

    CURRENT_VIEW = "current_view"
    CUSTOM = "custom"
    FIT_TO_WIDTH = "fit_to_width"


@dataclass(slots=True, frozen=True)
class DependencyArrow:
    from_task_id: str
    to_task_id: str
    arrow: ArrowPath


@dataclass(slots=True)
class ChartLayout:
    """Everything a renderer needs to draw the chart body."""

    scale: TimelineScale
    rows: list[str] = field(default_factory=list)
    geometries: dict[str, TaskGeometry] = field(default_factory=dict)
    arrows: list[DependencyArrow] = field(default_factory=list)
    grid: GridPlan | None = None
    skipped: list[str] = field(default_factory=list)
    today_x: float | None = None

    def to_dict(self) -> dict[str, Any]:
        """Plain data for JSON output; arrow paths are SVG path strings."""
        return {
            "scale": asdict(self.scale),
            "rows": list(self.rows),
            "tasks": {task_id: asdict(geometry) for task_id, geometry in self.geometries.items()},
            "arrows": [
                {
                    "from": dep.from_task_id,
                    "to": dep.to_task_id,
                    "kind": dep.arrow.kind.value,
                    "path": dep.arrow.path,
                    "arrow_head": asdict(dep.arrow.arrow_head),
                }
                for dep in self.arrows
            ],
            "grid": asdict(self.grid) if self.grid else None,
            "skipped": list(self.skipped),
            "today_x": self.today_x,
        }


def build_layout(
    tasks: Sequence[Task],
    dependencies: Sequence[Dependency],
    scale: TimelineScale,
    density: DensityProfile,
    *,
    show_weekends: bool = True,
    header_height: float = 0.0,
    arrow_style: ArrowStyle | None = None,
    grid_config: GridConfig | None = None,
    week_start: WeekStart = WeekStart.MONDAY,
    today: str | None = None,
) -> ChartLayout:
    """Lay out tasks, dependency arrows and the background grid.

    Tasks are placed one per row in `order`. A task without usable dates keeps
    its row but gets no geometry; arrows touching it are omitted.

    Args:
        tasks: Tasks to place
        dependencies: Finish-to-start edges
        scale: Timeline scale shared by every pass
        density: Row and bar sizing
        show_weekends: Whether the grid includes weekend bands
        header_height: Offset of row 0 from the top of the drawing
        arrow_style: Arrow constants; by default the corner radius is scaled
            to the density's row height
        grid_config: Grid interval thresholds
        week_start: Day weekly grid lines fall on
        today: Date of the today marker; no marker when omitted or outside
            the scale

    Returns:
        ChartLayout for the whole chart
    """
    logger = get_logger()
    if arrow_style is None:
        arrow_style = ArrowStyle(corner_radius=scaled_corner_radius(density.row_height))

    ordered = sorted(tasks, key=lambda t: t.order)
    layout = ChartLayout(scale=scale)
    for row_index, task in enumerate(ordered):
        layout.rows.append(task.id)
        geometry = task_geometry(task, scale, row_index, density, header_height=header_height)
        if geometry is None:
            layout.skipped.append(task.id)
        else:
            layout.geometries[task.id] = geometry
    if layout.skipped and checks_enabled():
        logger.checks("Rows without geometry: %s", ", ".join(layout.skipped))

    for dep in dependencies:
        source = layout.geometries.get(dep.from_task_id)
        target = layout.geometries.get(dep.to_task_id)
        if source is None or target is None:
            logger.checks(
                "Dependency %s -> %s not drawn: endpoint has no geometry",
                dep.from_task_id,
                dep.to_task_id,
            )
            continue
        layout.arrows.append(
            DependencyArrow(dep.from_task_id, dep.to_task_id, route_arrow(source, target, arrow_style))
        )

    layout.grid = plan_grid(
        scale,
        len(ordered),
        show_weekends,
        density=density,
        week_start=week_start,
        config=grid_config,
    )
    if today is not None:
        layout.today_x = today_marker_x(scale, today)
    logger.debug(
        "Layout: %d rows, %d placed, %d skipped, %d arrows",
        len(layout.rows),
        len(layout.geometries),
        len(layout.skipped),
        len(layout.arrows),
    )
    return layout


def export_zoom(
    mode: ExportZoomMode,
    *,
    current_zoom: float = 1.0,
    custom_zoom: float = 1.0,
    fit_width: float = 1920,
    duration_days: int = 0,
    table_width: float = 0,
    base_pixels_per_day: float = BASE_PIXELS_PER_DAY,
) -> float:
    """Zoom an export renders at.

    fit_width is the total image width; the task table takes table_width of
    it and the timeline gets the rest (at least MIN_TIMELINE_WIDTH).
    """
    if mode == ExportZoomMode.CURRENT_VIEW:
        return current_zoom
    if mode == ExportZoomMode.CUSTOM:
        return custom_zoom
    if duration_days <= 0:
        return 1.0
    timeline_width = max(MIN_TIMELINE_WIDTH, fit_width - table_width)
    return timeline_width / (duration_days * base_pixels_per_day)


def today_marker_x(scale: TimelineScale, today: str) -> float | None:
    """X of the today line, or None when today lies outside the scale.

    Raises:
        MalformedDateError: If today is malformed
    """
    parse_date(today)
    if today < scale.min_date or today > scale.max_date:
        return None
    return date_to_pixel(today, scale)
