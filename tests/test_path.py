"""Tests for path segment serialization."""

import pytest

from gantry.models import Point
from gantry.path import ClosePath, LineTo, MoveTo, QuadTo, end_points, format_number, to_svg_path


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (10, "10"),
        (100.0, "100"),
        (12.5, "12.5"),
        (1 / 3, "0.333"),
        (-0.0001, "0"),
        (-4.25, "-4.25"),
    ],
)
def test_format_number(value: float, expected: str):
    """Test numbers are compact with at most three decimals."""
    assert format_number(value) == expected


def test_to_svg_path():
    """Test every command type is serialized."""
    segments = [
        MoveTo(Point(0, 0)),
        LineTo(Point(10, 0)),
        QuadTo(Point(18, 0), Point(18, 8)),
        ClosePath(),
    ]
    assert to_svg_path(segments) == "M 0 0 L 10 0 Q 18 0, 18 8 Z"


def test_end_points_skip_close():
    """Test close commands contribute no point."""
    segments = [MoveTo(Point(0, 0)), QuadTo(Point(5, 0), Point(5, 5)), ClosePath()]
    assert end_points(segments) == [Point(0, 0), Point(5, 5)]
