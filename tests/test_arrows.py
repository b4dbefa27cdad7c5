"""Tests for dependency arrow routing."""

import math

import pytest

from gantry.arrows import (
    ArrowHead,
    ArrowPath,
    RouteKind,
    arrowhead_points,
    drag_path,
    route_arrow,
    scaled_corner_radius,
)
from gantry.config import ArrowStyle
from gantry.models import Point, Rect
from gantry.path import LineTo, QuadTo

BAR_HEIGHT = 26
ROW_HEIGHT = 36


def bar(x: float, width: float, row: int) -> Rect:
    """Bar in a given row with the normal density offsets."""
    return Rect(x=x, y=row * ROW_HEIGHT + 5, width=width, height=BAR_HEIGHT)


def non_decreasing(values: list[float]) -> bool:
    return all(a <= b + 1e-9 for a, b in zip(values, values[1:], strict=False))


def non_increasing(values: list[float]) -> bool:
    return all(a >= b - 1e-9 for a, b in zip(values, values[1:], strict=False))


def monotonic(values: list[float]) -> bool:
    return non_decreasing(values) or non_increasing(values)


def assert_no_self_intersection(arrow: ArrowPath) -> None:
    """Turn points move in the intended direction on every leg."""
    points = arrow.points()
    xs = [p.x for p in points]
    ys = [p.y for p in points]

    if arrow.kind == RouteKind.S_CURVE:
        assert len(points) == 10
        # out and down to the corridor, back left along it, out and into the target
        assert non_decreasing(xs[0:4])
        assert non_increasing(xs[3:7])
        assert non_decreasing(xs[6:])
        assert monotonic(ys[0:5])
        assert monotonic(ys[4:])
        assert xs[4] > xs[5], "corridor must run leftward"
    else:
        assert non_decreasing(xs)
        assert monotonic(ys)


class TestBranches:
    """Test which routing branch is chosen."""

    def test_gap_of_ten_uses_s_route(self) -> None:
        """Test a 10 px gap two rows down routes as an S-curve."""
        source = bar(100, 100, 0)  # right edge at 200
        target = bar(210, 50, 2)  # left edge at 210

        arrow = route_arrow(source, target)

        assert arrow.kind == RouteKind.S_CURVE
        assert arrow.kind != RouteKind.ELBOW
        assert arrow.points()[0] == Point(200, 18)
        assert arrow.points()[-1] == Point(210, 90)
        assert arrow.arrow_head == ArrowHead(210, 90, 0)

    def test_standard_elbow(self) -> None:
        """Test a wide gap produces the two-corner elbow at mid x."""
        arrow = route_arrow(bar(100, 100, 0), bar(300, 50, 2))

        assert arrow.kind == RouteKind.ELBOW
        assert arrow.corner_radius == 8
        assert arrow.path == (
            "M 200 18 L 242 18 Q 250 18, 250 26 L 250 82 Q 250 90, 258 90 L 300 90"
        )

    def test_upward_elbow(self) -> None:
        """Test the turn direction follows the sign of the vertical delta."""
        arrow = route_arrow(bar(100, 100, 2), bar(300, 50, 0))

        assert arrow.kind == RouteKind.ELBOW
        assert arrow.path == (
            "M 200 90 L 242 90 Q 250 90, 250 82 L 250 26 Q 250 18, 258 18 L 300 18"
        )

    def test_same_row_straight(self) -> None:
        """Test the same row with room to spare is a straight line."""
        arrow = route_arrow(bar(100, 100, 1), bar(300, 50, 1))

        assert arrow.kind == RouteKind.STRAIGHT
        assert arrow.path == "M 200 54 L 300 54"

    def test_near_same_row_is_straight(self) -> None:
        """Test a vertical delta under 2 px counts as the same row."""
        source = Rect(100, 10, 100, 20)
        target = Rect(300, 11.5, 50, 20)
        assert route_arrow(source, target).kind == RouteKind.STRAIGHT

    def test_elbow_threshold(self) -> None:
        """Test 46 px (2 * 15 + 2 * 8) is the smallest elbow gap."""
        assert route_arrow(bar(100, 100, 0), bar(246, 50, 2)).kind == RouteKind.ELBOW
        assert route_arrow(bar(100, 100, 0), bar(245.9, 50, 2)).kind == RouteKind.TIGHT_ELBOW

    def test_tight_elbow_radius_shrinks(self) -> None:
        """Test the fallback elbow scales its radius to a quarter of the gap."""
        arrow = route_arrow(bar(100, 100, 0), bar(220, 50, 2))

        assert arrow.kind == RouteKind.TIGHT_ELBOW
        assert arrow.corner_radius == 5

    def test_negative_gap_uses_s_route(self) -> None:
        """Test a successor starting before the predecessor ends."""
        arrow = route_arrow(bar(100, 200, 0), bar(150, 50, 3))

        assert arrow.kind == RouteKind.S_CURVE
        corridor = arrow.points()[4:6]
        assert corridor[0].y == corridor[1].y == (18 + 126) / 2
        assert corridor[0].x > corridor[1].x

    def test_close_rows_push_corridor_outside(self) -> None:
        """Test rows closer than four radii route the corridor beyond them."""
        source = Rect(100, 0, 100, 20)  # centre 10
        target = Rect(150, 20, 50, 20)  # centre 30

        arrow = route_arrow(source, target)

        assert arrow.kind == RouteKind.S_CURVE
        corridor_y = arrow.points()[4].y
        assert corridor_y == 30 + 16
        assert_no_self_intersection(arrow)

    def test_same_row_overlap_loops_below(self) -> None:
        """Test a backward dependency in one row loops under the bar."""
        arrow = route_arrow(bar(100, 100, 1), bar(150, 50, 1))

        assert arrow.kind == RouteKind.S_CURVE
        assert arrow.points()[4].y == 54 + 16
        assert_no_self_intersection(arrow)

    def test_identical_rectangles(self) -> None:
        """Test fully overlapping rectangles still route."""
        rect = bar(100, 100, 0)
        arrow = route_arrow(rect, rect)
        assert all(math.isfinite(p.x) and math.isfinite(p.y) for p in arrow.points())
        assert arrow.arrow_head == ArrowHead(100, 18, 0)

    def test_custom_padding_switches_earlier(self) -> None:
        """Test elbow_gap_padding raises the elbow threshold."""
        style = ArrowStyle(elbow_gap_padding=20)
        assert style.min_elbow_gap == 66
        assert route_arrow(bar(100, 100, 0), bar(250, 50, 2), style).kind != RouteKind.ELBOW


class TestProperties:
    """Property checks over a grid of gaps."""

    @pytest.mark.parametrize("vertical_gap", [0, 1, 4, 10, 25, 31, 32, 33, 75, 150, 300, 500])
    def test_no_self_intersection(self, vertical_gap: float) -> None:
        """Test monotonic legs for gaps in [-500, 500] in both directions."""
        for gap in range(-500, 501, 5):
            for direction in (1, -1):
                source = Rect(1000, 500, 100, 20)
                target = Rect(1100 + gap, 500 + direction * vertical_gap, 60, 20)

                arrow = route_arrow(source, target)

                points = arrow.points()
                assert points[0] == Point(1100, 510)
                assert points[-1] == Point(1100 + gap, 510 + direction * vertical_gap)
                assert all(math.isfinite(p.x) and math.isfinite(p.y) for p in points)
                assert_no_self_intersection(arrow)

    @pytest.mark.parametrize("vertical_gap", [2, 4, 10, 16, 40, 200])
    def test_elbow_radius_bound(self, vertical_gap: float) -> None:
        """Test elbow corners never exceed half of either gap."""
        for gap in range(-200, 301, 3):
            source = Rect(0, 0, 100, 20)
            target = Rect(100 + gap, vertical_gap, 60, 20)

            arrow = route_arrow(source, target)

            if arrow.kind in (RouteKind.ELBOW, RouteKind.TIGHT_ELBOW):
                assert arrow.corner_radius <= gap / 2
                assert arrow.corner_radius <= vertical_gap / 2

    def test_final_approach_is_horizontal(self) -> None:
        """Test every branch enters the target from the left."""
        for gap in (-100, 0, 10, 20, 60):
            for row in (0, 1, 3):
                arrow = route_arrow(bar(100, 100, 1), bar(200 + gap, 50, row))
                last = arrow.segments[-1]
                assert isinstance(last, LineTo)
                before = arrow.points()[-2]
                assert before.y == last.to.y
                assert before.x <= last.to.x
                assert arrow.arrow_head.angle == 0

    def test_corners_are_quadratic(self) -> None:
        """Test corners are emitted as quadratic curves."""
        arrow = route_arrow(bar(100, 100, 0), bar(150, 50, 3))
        assert sum(isinstance(s, QuadTo) for s in arrow.segments) == 4


class TestHelpers:
    """Test drag preview and arrowhead helpers."""

    def test_drag_path_elbow(self) -> None:
        """Test the drag preview uses the elbow when there is room."""
        arrow = drag_path(Point(0, 0), Point(100, 50))
        assert arrow.kind == RouteKind.ELBOW

    def test_drag_path_short_is_straight(self) -> None:
        """Test short or backward drags draw a straight line."""
        assert drag_path(Point(0, 0), Point(30, 50)).kind == RouteKind.STRAIGHT
        assert drag_path(Point(0, 0), Point(-50, 50)).path == "M 0 0 L -50 50"

    def test_arrowhead_points(self) -> None:
        """Test the triangle points right with its tip at the origin."""
        assert arrowhead_points(8) == [Point(-8, -4), Point(0, 0), Point(-8, 4)]

    def test_arrowhead_polygon(self) -> None:
        """Test the polygon is translated to the arrowhead tip."""
        head = ArrowHead(100, 50)
        assert head.polygon(8) == [Point(92, 46), Point(100, 50), Point(92, 54)]

    @pytest.mark.parametrize(
        ("row_height", "expected"),
        [(44, 8), (36, 7), (28, 5), (10, 4), (66, 12)],
    )
    def test_scaled_corner_radius(self, row_height: float, expected: int) -> None:
        """Test the radius tracks the row height with a floor of 4."""
        assert scaled_corner_radius(row_height) == expected
