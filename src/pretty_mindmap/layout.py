from __future__ import annotations

import math
from collections.abc import Set

from .bounds import apply_shift, compute_bounds
from .curve import bezier_control_points, source_anchor, target_anchor
from .styles import BOX_PADDING, CONNECTOR, CURVE_CAP, DEFAULT_FONT, estimate_text_width
from .text import TextMeasurer, TextMetrics
from .tidy import tidy_layout
from .types import (
    FontSpec,
    LayoutOptions,
    PositionedEdge,
    PositionedMindMap,
    PositionedNode,
    TreeNode,
)
from .visibility import collect_expandable_ids, iter_nodes, reduce_visible

# Layout defaults
LAYOUT_DEFAULTS = {
    "level_gap": 380,
    "sibling_gap": 140,
    "node_gap": 16,
    "padding": 80,
    "max_text_width": 260,
    "font_family": DEFAULT_FONT.family,
    "font_size": DEFAULT_FONT.size,
    "line_height": DEFAULT_FONT.line_height,
    "box_padding_x": BOX_PADDING["horizontal"],
    "box_padding_y": BOX_PADDING["vertical"],
    "connector_radius": CONNECTOR["radius"],
    "connector_overlap": CONNECTOR["overlap"],
    "curve_cap": CURVE_CAP,
}

# Options that must be strictly positive; every other numeric option must
# merely be non-negative
_POSITIVE_OPTIONS = ("level_gap", "max_text_width", "font_size", "line_height")


# ============================================================================
# Main layout functions
# ============================================================================


def layout_visible_tree(
    tree: TreeNode,
    expanded: Set[str] = frozenset(),
    options: LayoutOptions | None = None,
    metrics: TextMetrics = estimate_text_width,
) -> PositionedMindMap:
    """Lay out a canonical tree under the given expansion state.

    Returns nodes and edges shifted into a padded viewport, ready for a
    drawing layer.
    """
    opts = _merge_options(options)
    expanded = frozenset(expanded)
    visible = reduce_visible(tree, expanded)
    expandable = collect_expandable_ids(tree)

    nodes = position_nodes(visible, expandable, opts, expanded, metrics)

    connector_offset = _connector_offset(opts)
    bounds = compute_bounds(nodes, opts["padding"], connector_offset)
    apply_shift(nodes, bounds.shift)

    edges = build_edges(visible, nodes, opts)

    return PositionedMindMap(nodes=nodes, edges=edges, viewport=bounds.viewport)


def layout_tree(
    visible: TreeNode,
    expandable_ids: Set[str],
    options: LayoutOptions | None = None,
    expanded: Set[str] = frozenset(),
    metrics: TextMetrics = estimate_text_width,
) -> tuple[list[PositionedNode], list[PositionedEdge]]:
    """Position an already reduced visible tree, without viewport shifting."""
    opts = _merge_options(options)
    nodes = position_nodes(visible, expandable_ids, opts, expanded, metrics)
    return nodes, build_edges(visible, nodes, opts)


def position_nodes(
    visible: TreeNode,
    expandable_ids: Set[str],
    opts: dict,
    expanded: Set[str] = frozenset(),
    metrics: TextMetrics = estimate_text_width,
) -> list[PositionedNode]:
    """Size every box and place it with the tidy layout (pre-order output)."""
    measurer = TextMeasurer(_font(opts), metrics)

    sized: dict[str, tuple[tuple[str, ...], float, float]] = {}
    for node in iter_nodes(visible):
        lines = measurer.wrap(node.label, opts["max_text_width"])
        box_w, box_h = _box_size(measurer, lines, opts)
        sized[node.id] = (lines, box_w, box_h)

    extents = {node_id: box_h for node_id, (_, _, box_h) in sized.items()}
    positions = tidy_layout(visible, extents, opts["sibling_gap"], opts["node_gap"])

    nodes: list[PositionedNode] = []
    for node in iter_nodes(visible):
        lines, box_w, box_h = sized[node.id]
        pos = positions[node.id]
        # Left-to-right tree: depth runs along x, sibling order along y
        nodes.append(PositionedNode(
            id=node.id,
            label=node.label,
            lines=lines,
            depth=pos.depth,
            has_children=node.id in expandable_ids,
            x=pos.depth * opts["level_gap"],
            y=pos.order,
            box_w=box_w,
            box_h=box_h,
            expanded=node.id in expanded and node.id in expandable_ids,
        ))
    return nodes


def build_edges(
    visible: TreeNode,
    nodes: list[PositionedNode],
    opts: dict,
) -> list[PositionedEdge]:
    """Connect each parent's trailing edge to each child's leading edge."""
    by_id = {n.id: n for n in nodes}
    connector_offset = _connector_offset(opts)
    radius = opts["connector_radius"]

    edges: list[PositionedEdge] = []
    for parent in iter_nodes(visible):
        s = by_id[parent.id]
        for child in parent.children:
            t = by_id[child.id]
            source = source_anchor(s, connector_offset)
            target = target_anchor(t, connector_offset, radius)
            edges.append(PositionedEdge(
                id=f"{s.id}->{t.id}",
                source_id=s.id,
                target_id=t.id,
                source=source,
                target=target,
                control_points=bezier_control_points(source, target, opts["curve_cap"]),
            ))
    return edges


# ============================================================================
# Helpers
# ============================================================================


def _merge_options(options: LayoutOptions | None) -> dict:
    opts = dict(LAYOUT_DEFAULTS)
    if options:
        for key in LAYOUT_DEFAULTS:
            value = getattr(options, key)
            if value is not None:
                opts[key] = value
    _validate_options(opts)
    return opts


def _validate_options(opts: dict) -> None:
    for key, value in opts.items():
        if key == "font_family":
            continue
        if (
            isinstance(value, bool)
            or not isinstance(value, (int, float))
            or math.isnan(value)
            or math.isinf(value)
        ):
            raise ValueError(f"Layout option {key!r} must be a finite number, got {value!r}")
        if key in _POSITIVE_OPTIONS and value <= 0:
            raise ValueError(f"Layout option {key!r} must be positive, got {value!r}")
        if value < 0:
            raise ValueError(f"Layout option {key!r} must not be negative, got {value!r}")
    if opts["connector_overlap"] > opts["connector_radius"]:
        raise ValueError("connector_overlap cannot exceed connector_radius")


def _font(opts: dict) -> FontSpec:
    return FontSpec(
        family=opts["font_family"],
        size=opts["font_size"],
        line_height=opts["line_height"],
    )


def _connector_offset(opts: dict) -> float:
    return opts["connector_radius"] - opts["connector_overlap"]


def _box_size(
    measurer: TextMeasurer, lines: tuple[str, ...], opts: dict
) -> tuple[float, float]:
    width = measurer.max_line_width(lines) + opts["box_padding_x"] * 2
    height = len(lines) * opts["line_height"] + opts["box_padding_y"] * 2
    return width, height
