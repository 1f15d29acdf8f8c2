from __future__ import annotations

from dataclasses import dataclass

from .curve import box_right
from .types import Point, PositionedNode, Viewport

# ============================================================================
# Bounds calculator — padded viewport and the shift that moves every node box
# to non-negative coordinates.
# ============================================================================


@dataclass(slots=True)
class Bounds:
    viewport: Viewport
    shift: Point


def compute_bounds(
    nodes: list[PositionedNode],
    padding: float,
    connector_offset: float,
) -> Bounds:
    """Measure the occupied area including full box extents.

    After applying ``shift`` the smallest occupied coordinate on each axis
    equals ``padding``, and the viewport spans from the origin to the
    largest occupied coordinate plus ``padding``.
    """
    if not nodes:
        return Bounds(
            viewport=Viewport(0, 0, padding * 2, padding * 2),
            shift=Point(0, 0),
        )

    min_x = min(n.x for n in nodes)
    min_y = min(n.y - n.box_h / 2 for n in nodes)
    max_x = max(box_right(n, connector_offset) for n in nodes)
    max_y = max(n.y + n.box_h / 2 for n in nodes)

    shift_x = padding - min_x
    shift_y = padding - min_y

    return Bounds(
        viewport=Viewport(
            min_x=0,
            min_y=0,
            max_x=max_x + shift_x + padding,
            max_y=max_y + shift_y + padding,
        ),
        shift=Point(x=shift_x, y=shift_y),
    )


def apply_shift(nodes: list[PositionedNode], shift: Point) -> None:
    for n in nodes:
        n.x += shift.x
        n.y += shift.y
