from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

# ============================================================================
# Canonical tree — normalized, immutable structure extracted from host input
# ============================================================================

NodeKind = Literal["root", "branch", "leaf"]


@dataclass(frozen=True, slots=True)
class TreeNode:
    id: str
    label: str
    children: tuple[TreeNode, ...] = ()


# ============================================================================
# Positioned mind map — after layout, ready for a drawing layer
# ============================================================================


@dataclass(slots=True)
class Point:
    x: float
    y: float


@dataclass(slots=True)
class PositionedNode:
    id: str
    label: str
    lines: tuple[str, ...]
    depth: int
    # True when the canonical node has children, even while collapsed
    has_children: bool
    # x is the leading edge (connector position), y the vertical centre
    x: float
    y: float
    box_w: float
    box_h: float
    expanded: bool = False

    @property
    def kind(self) -> NodeKind:
        if self.depth == 0:
            return "root"
        return "branch" if self.has_children else "leaf"


@dataclass(slots=True)
class PositionedEdge:
    id: str
    source_id: str
    target_id: str
    source: Point
    target: Point
    control_points: tuple[Point, Point] | None = None


@dataclass(slots=True)
class Viewport:
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


@dataclass(slots=True)
class PositionedMindMap:
    nodes: list[PositionedNode]
    edges: list[PositionedEdge]
    viewport: Viewport

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase shape expected by browser drawing layers."""
        return {
            "nodes": [
                {
                    "id": n.id,
                    "label": n.label,
                    "lines": list(n.lines),
                    "depth": n.depth,
                    "hasChildren": n.has_children,
                    "expanded": n.expanded,
                    "kind": n.kind,
                    "x": n.x,
                    "y": n.y,
                    "boxW": n.box_w,
                    "boxH": n.box_h,
                }
                for n in self.nodes
            ],
            "edges": [
                {
                    "id": e.id,
                    "sourceId": e.source_id,
                    "targetId": e.target_id,
                    "source": {"x": e.source.x, "y": e.source.y},
                    "target": {"x": e.target.x, "y": e.target.y},
                }
                for e in self.edges
            ],
            "viewport": {
                "minX": self.viewport.min_x,
                "minY": self.viewport.min_y,
                "maxX": self.viewport.max_x,
                "maxY": self.viewport.max_y,
            },
        }


# ============================================================================
# Layout options — user-facing configuration
# ============================================================================


@dataclass(frozen=True, slots=True)
class FontSpec:
    family: str
    size: float
    line_height: float


@dataclass(frozen=True, slots=True)
class LayoutOptions:
    level_gap: float | None = None
    sibling_gap: float | None = None
    node_gap: float | None = None
    padding: float | None = None
    max_text_width: float | None = None
    font_family: str | None = None
    font_size: float | None = None
    line_height: float | None = None
    box_padding_x: float | None = None
    box_padding_y: float | None = None
    connector_radius: float | None = None
    connector_overlap: float | None = None
    curve_cap: float | None = None
