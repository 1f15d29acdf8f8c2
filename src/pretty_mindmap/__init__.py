"""pretty-mindmap — Lay out expandable trees as left-to-right mind map diagrams."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .types import (
    FontSpec,
    LayoutOptions,
    Point,
    PositionedEdge,
    PositionedMindMap,
    PositionedNode,
    TreeNode,
    Viewport,
)
from .normalize import normalize_tree
from .visibility import reduce_visible, collect_expandable_ids
from .text import TextMeasurer, measure_text, wrap_text
from .layout import layout_tree, layout_visible_tree
from .bounds import compute_bounds
from .curve import edge_path
from .controller import ExpansionController
from .styles import estimate_text_width

__all__ = [
    "layout_mindmap",
    "normalize_tree",
    "reduce_visible",
    "collect_expandable_ids",
    "layout_tree",
    "layout_visible_tree",
    "compute_bounds",
    "edge_path",
    "measure_text",
    "wrap_text",
    "TextMeasurer",
    "ExpansionController",
    "FontSpec",
    "LayoutOptions",
    "Point",
    "PositionedEdge",
    "PositionedMindMap",
    "PositionedNode",
    "TreeNode",
    "Viewport",
]


def layout_mindmap(
    data: Any,
    expanded: Iterable[str] = (),
    options: LayoutOptions | None = None,
) -> PositionedMindMap | None:
    """Normalize raw tree data and lay it out under the given expansion state.

    Returns None when ``data`` is not a mapping, so the host can show its own
    "no data" state.
    """
    tree = normalize_tree(data)
    if tree is None:
        return None
    return layout_visible_tree(tree, frozenset(expanded), options, estimate_text_width)
