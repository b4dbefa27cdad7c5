"""Gantry - timeline geometry and navigation core for Gantt charts.

Turns a date range and a zoom factor into pixel coordinates, keeps that
mapping anchored under zoom, pan and infinite scroll, and routes dependency
arrows between task shapes.

Main entry points:
- compute_scale / date_to_pixel: the date <-> pixel mapping
- NavigationController: zoom, pan, fit-to-view and range growth
- task_geometry / route_arrow / plan_grid: per-element geometry
- build_layout: all of the above for a whole chart
"""

from .arrows import ArrowHead, ArrowPath, RouteKind, route_arrow
from .config import DensityProfile, GantryConfig, LabelPosition, load_config, resolve_density
from .exceptions import ConfigError, GantryError, InvalidRangeError, MalformedDateError, ParseError
from .geometry import task_geometry
from .grid import GridPlan, plan_grid
from .labels import LabelPaddingEstimator
from .layout import ChartLayout, build_layout
from .models import DateRange, Dependency, Task, TaskGeometry, TaskType, ZoomAnchor
from .navigation import NavigationController, NavigationState
from .scale import TimelineScale, compute_scale, date_to_pixel, pixel_to_date

__all__ = [
    "ArrowHead",
    "ArrowPath",
    "ChartLayout",
    "ConfigError",
    "DateRange",
    "Dependency",
    "DensityProfile",
    "GantryConfig",
    "GantryError",
    "GridPlan",
    "InvalidRangeError",
    "LabelPaddingEstimator",
    "LabelPosition",
    "MalformedDateError",
    "NavigationController",
    "NavigationState",
    "ParseError",
    "RouteKind",
    "Task",
    "TaskGeometry",
    "TaskType",
    "TimelineScale",
    "ZoomAnchor",
    "build_layout",
    "compute_scale",
    "date_to_pixel",
    "load_config",
    "pixel_to_date",
    "resolve_density",
    "plan_grid",
    "route_arrow",
    "task_geometry",
]
