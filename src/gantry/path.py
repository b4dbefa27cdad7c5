"""Typed path segments and their SVG serialization.

Routing and shape code produce segment lists; renderers that draw vector
markup call `to_svg_path` at the boundary, others walk the segments.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .models import Point


@dataclass(slots=True, frozen=True)
class MoveTo:
    to: Point


@dataclass(slots=True, frozen=True)
class LineTo:
    to: Point


@dataclass(slots=True, frozen=True)
class QuadTo:
    """Quadratic curve; used for the rounded 90 degree corners."""

    control: Point
    to: Point


@dataclass(slots=True, frozen=True)
class ClosePath:
    pass


PathSegment = MoveTo | LineTo | QuadTo | ClosePath


def format_number(value: float) -> str:
    """Compact, deterministic number formatting (at most 3 decimals)."""
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def _pt(point: Point) -> str:
    return f"{format_number(point.x)} {format_number(point.y)}"


def to_svg_path(segments: Iterable[PathSegment]) -> str:
    """Serialize segments to SVG path data (M / L / Q / Z commands)."""
    parts: list[str] = []
    for segment in segments:
        if isinstance(segment, MoveTo):
            parts.append(f"M {_pt(segment.to)}")
        elif isinstance(segment, LineTo):
            parts.append(f"L {_pt(segment.to)}")
        elif isinstance(segment, QuadTo):
            parts.append(f"Q {_pt(segment.control)}, {_pt(segment.to)}")
        else:
            parts.append("Z")
    return " ".join(parts)


def end_points(segments: Iterable[PathSegment]) -> list[Point]:
    """The point each drawing command ends at, in traversal order."""
    return [s.to for s in segments if not isinstance(s, ClosePath)]
