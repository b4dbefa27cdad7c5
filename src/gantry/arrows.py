"""Dependency arrow routing.

Finish-to-start connectors leave the right-centre of the predecessor and
enter the left-centre of the successor horizontally, with rounded 90 degree
corners. Routes are a pure function of the two rectangles.

Branches:

* straight: both ends on the same row and enough room to the right
* elbow: out, turn toward the target row, vertical run, turn, in
* S-route: the target starts at, before, or just after the source end.
  Out a short stub, turn toward a corridor between the rows, run left
  along it, then mirror into the target.
* tight elbow: the S-route corridor would run rightward; a two-corner
  elbow with a shrunken radius is drawn instead
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .config import ArrowStyle
from .logger import debug_enabled, get_logger
from .models import Point, Rect
from .path import LineTo, MoveTo, PathSegment, QuadTo, end_points, to_svg_path

DEFAULT_ARROW_STYLE = ArrowStyle()
MIN_SCALED_RADIUS = 4


class RouteKind(str, Enum):
    """Which routing branch produced a path."""

    STRAIGHT = "straight"
    ELBOW = "elbow"
    S_CURVE = "s_curve"
    TIGHT_ELBOW = "tight_elbow"


@dataclass(slots=True, frozen=True)
class ArrowHead:
    """Arrowhead pose; angle is in degrees, 0 pointing right."""

    x: float
    y: float
    angle: float = 0.0

    def polygon(self, size: float = DEFAULT_ARROW_STYLE.arrowhead_size) -> list[Point]:
        """Arrowhead triangle translated to the tip position."""
        return [Point(self.x + p.x, self.y + p.y) for p in arrowhead_points(size)]


@dataclass(slots=True, frozen=True)
class ArrowPath:
    """Routed connector as typed segments plus the arrowhead pose."""

    segments: tuple[PathSegment, ...]
    arrow_head: ArrowHead
    kind: RouteKind
    corner_radius: float = 0.0

    @property
    def path(self) -> str:
        """SVG path data for vector renderers."""
        return to_svg_path(self.segments)

    def points(self) -> list[Point]:
        """Start point followed by the end point of every segment."""
        return end_points(self.segments)


def arrowhead_points(size: float = DEFAULT_ARROW_STYLE.arrowhead_size) -> list[Point]:
    """Triangle pointing right with its tip at the origin."""
    return [Point(-size, -size / 2), Point(0.0, 0.0), Point(-size, size / 2)]


def scaled_corner_radius(row_height: float, style: ArrowStyle | None = None) -> int:
    """Corner radius scaled to the row height of the current density."""
    style = style or DEFAULT_ARROW_STYLE
    return max(MIN_SCALED_RADIUS, round(style.corner_radius * row_height / style.base_row_height))


def route_arrow(from_rect: Rect, to_rect: Rect, style: ArrowStyle | None = None) -> ArrowPath:
    """Route a finish-to-start connector between two task rectangles.

    Never raises for finite rectangles, including overlapping ones.

    Args:
        from_rect: Predecessor geometry
        to_rect: Successor geometry
        style: Segment lengths and corner radius; defaults to ArrowStyle()

    Returns:
        The routed ArrowPath
    """
    style = style or DEFAULT_ARROW_STYLE
    start = Point(from_rect.right, from_rect.center_y)
    end = Point(to_rect.x, to_rect.center_y)
    gap = end.x - start.x

    if gap >= style.min_elbow_gap:
        arrow = _elbow(start, end, style)
    else:
        arrow = _s_route(start, end, style)

    if debug_enabled():
        get_logger().debug(
            "Arrow (%.1f, %.1f) -> (%.1f, %.1f) gap=%.1f routed as %s: %s",
            start.x,
            start.y,
            end.x,
            end.y,
            gap,
            arrow.kind.value,
            arrow.path,
        )
    return arrow


def drag_path(start: Point, end: Point, style: ArrowStyle | None = None) -> ArrowPath:
    """Preview connector while a dependency is being dragged.

    Uses the elbow when there is room for both stubs, a straight line
    otherwise.
    """
    style = style or DEFAULT_ARROW_STYLE
    if end.x - start.x > style.horizontal_segment * 2:
        return _elbow(start, end, style)
    return _straight(start, end)


def _straight(start: Point, end: Point) -> ArrowPath:
    return ArrowPath(
        segments=(MoveTo(start), LineTo(end)),
        arrow_head=ArrowHead(end.x, end.y),
        kind=RouteKind.STRAIGHT,
    )


def _two_corner(start: Point, end: Point, radius: float, kind: RouteKind) -> ArrowPath:
    """Horizontal, corner, vertical at mid x, corner, horizontal."""
    mid_x = (start.x + end.x) / 2
    direction = 1 if end.y > start.y else -1
    segments = (
        MoveTo(start),
        LineTo(Point(mid_x - radius, start.y)),
        QuadTo(Point(mid_x, start.y), Point(mid_x, start.y + direction * radius)),
        LineTo(Point(mid_x, end.y - direction * radius)),
        QuadTo(Point(mid_x, end.y), Point(mid_x + radius, end.y)),
        LineTo(end),
    )
    return ArrowPath(
        segments=segments,
        arrow_head=ArrowHead(end.x, end.y),
        kind=kind,
        corner_radius=radius,
    )


def _elbow(start: Point, end: Point, style: ArrowStyle) -> ArrowPath:
    vertical_gap = abs(end.y - start.y)
    if vertical_gap < style.same_row_tolerance:
        return _straight(start, end)
    # Corners may not exceed half of either gap
    radius = min(style.corner_radius, vertical_gap / 2, abs(end.x - start.x) / 2)
    return _two_corner(start, end, radius, RouteKind.ELBOW)


def _tight_elbow(start: Point, end: Point, style: ArrowStyle) -> ArrowPath:
    vertical_gap = abs(end.y - start.y)
    if vertical_gap < style.same_row_tolerance:
        return _straight(start, end)
    radius = min(style.corner_radius, (end.x - start.x) / 4, vertical_gap / 4)
    return _two_corner(start, end, radius, RouteKind.TIGHT_ELBOW)


def _s_route(start: Point, end: Point, style: ArrowStyle) -> ArrowPath:
    r = style.corner_radius
    first_x = start.x + style.horizontal_segment
    second_x = end.x - style.horizontal_segment

    # The corridor must run leftward
    if first_x - r <= second_x + r:
        return _tight_elbow(start, end, style)

    go_down = end.y >= start.y
    min_space = 4 * r
    if abs(end.y - start.y) < min_space:
        # Rows too close for four corners: route beyond them
        if go_down:
            corridor_y = max(start.y, end.y) + min_space / 2
        else:
            corridor_y = min(start.y, end.y) - min_space / 2
    else:
        corridor_y = (start.y + end.y) / 2

    # Each vertical leg turns toward its own destination
    first_dir = 1 if corridor_y > start.y else -1
    second_dir = 1 if end.y > corridor_y else -1

    segments = (
        MoveTo(start),
        LineTo(Point(first_x - r, start.y)),
        QuadTo(Point(first_x, start.y), Point(first_x, start.y + first_dir * r)),
        LineTo(Point(first_x, corridor_y - first_dir * r)),
        QuadTo(Point(first_x, corridor_y), Point(first_x - r, corridor_y)),
        LineTo(Point(second_x + r, corridor_y)),
        QuadTo(Point(second_x, corridor_y), Point(second_x, corridor_y + second_dir * r)),
        LineTo(Point(second_x, end.y - second_dir * r)),
        QuadTo(Point(second_x, end.y), Point(second_x + r, end.y)),
        LineTo(end),
    )
    return ArrowPath(
        segments=segments,
        arrow_head=ArrowHead(end.x, end.y),
        kind=RouteKind.S_CURVE,
        corner_radius=r,
    )
