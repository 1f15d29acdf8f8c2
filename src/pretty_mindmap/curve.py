from __future__ import annotations

from .styles import CURVE_CAP, CURVE_RATIO
from .types import Point, PositionedEdge, PositionedNode

# ============================================================================
# Edge geometry — attachment points and Bezier control points for links.
# ============================================================================


def box_left(node: PositionedNode, connector_offset: float) -> float:
    """X of the label box's leading edge."""
    return node.x + connector_offset


def box_right(node: PositionedNode, connector_offset: float) -> float:
    """X of the label box's trailing edge."""
    return node.x + connector_offset + node.box_w


def source_anchor(node: PositionedNode, connector_offset: float) -> Point:
    """Midpoint of the parent's trailing edge."""
    return Point(x=box_right(node, connector_offset), y=node.y)


def target_anchor(
    node: PositionedNode, connector_offset: float, connector_radius: float
) -> Point:
    """Midpoint of the child's leading edge, pulled back to clear the connector dot."""
    return Point(x=box_left(node, connector_offset) - connector_radius, y=node.y)


def bezier_control_points(
    source: Point, target: Point, cap: float = CURVE_CAP
) -> tuple[Point, Point]:
    """Horizontal control points for a flattened S-curve.

    The pull shrinks with the horizontal distance, so nearly vertically
    aligned endpoints get a tight curve instead of a loop.
    """
    curve = min(cap, abs(target.x - source.x) * CURVE_RATIO)
    return (
        Point(x=source.x + curve, y=source.y),
        Point(x=target.x - curve, y=target.y),
    )


def edge_path(edge: PositionedEdge, cap: float = CURVE_CAP) -> str:
    """SVG path data for an edge."""
    s, t = edge.source, edge.target
    c1, c2 = edge.control_points or bezier_control_points(s, t, cap)
    return (
        f"M {_fmt(s.x)} {_fmt(s.y)} "
        f"C {_fmt(c1.x)} {_fmt(c1.y)}, {_fmt(c2.x)} {_fmt(c2.y)}, "
        f"{_fmt(t.x)} {_fmt(t.y)}"
    )


def _fmt(value: float) -> str:
    return f"{value:g}"
