from __future__ import annotations

import copy
import logging
from collections.abc import Iterable
from typing import Any, Callable

from .layout import layout_visible_tree
from .normalize import normalize_tree
from .styles import estimate_text_width
from .text import TextMetrics
from .types import LayoutOptions, PositionedMindMap, TreeNode
from .visibility import collect_expandable_ids

# ============================================================================
# Interaction controller — owns the expanded set and feeds immutable
# snapshots of it into the layout pipeline.
# ============================================================================

logger = logging.getLogger(__name__)

ActivateCallback = Callable[[str], None]
ExpansionCallback = Callable[[str, bool], None]


class ExpansionController:
    """Expand/collapse state for one mind map.

    Every node starts collapsed. Only nodes with children can be toggled;
    toggling anything else is a no-op. Layout results are cached for the
    last (tree, expanded set, options) combination.
    """

    def __init__(
        self,
        data: Any = None,
        *,
        expanded: Iterable[str] = (),
        options: LayoutOptions | None = None,
        metrics: TextMetrics = estimate_text_width,
        on_activate: ActivateCallback | None = None,
        on_expansion_change: ExpansionCallback | None = None,
    ) -> None:
        self.options = options
        self.metrics = metrics
        self.on_activate = on_activate
        self.on_expansion_change = on_expansion_change
        self._tree: TreeNode | None = None
        self._expandable: frozenset[str] = frozenset()
        self._expanded: frozenset[str] = frozenset()
        self._cache_tree: TreeNode | None = None
        self._cache_key: tuple | None = None
        self._cache: PositionedMindMap | None = None
        self.set_tree(data)
        self._expanded = frozenset(i for i in expanded if i in self._expandable)

    @property
    def tree(self) -> TreeNode | None:
        return self._tree

    @property
    def expandable_ids(self) -> frozenset[str]:
        return self._expandable

    @property
    def expanded(self) -> frozenset[str]:
        """Snapshot of the expanded ids."""
        return self._expanded

    def is_expanded(self, node_id: str) -> bool:
        return node_id in self._expanded

    def set_tree(self, data: Any) -> None:
        """Replace the input tree.

        Accepts raw host data or an already normalized TreeNode. Expanded ids
        that are still expandable in the new tree stay expanded.
        """
        tree = data if isinstance(data, TreeNode) else normalize_tree(data)
        self._tree = tree
        self._expandable = collect_expandable_ids(tree) if tree else frozenset()
        self._expanded = self._expanded & self._expandable
        self._cache_tree = None
        self._cache_key = None
        self._cache = None

    def toggle(self, node_id: str) -> bool | None:
        """Flip one node's state; returns the new state or None for a no-op."""
        if node_id not in self._expandable:
            return None

        now_expanded = node_id not in self._expanded
        if now_expanded:
            self._expanded = self._expanded | {node_id}
        else:
            self._expanded = self._expanded - {node_id}
        logger.debug("toggled %r -> %s", node_id, "expanded" if now_expanded else "collapsed")

        if self.on_expansion_change is not None:
            self.on_expansion_change(node_id, now_expanded)
        return now_expanded

    def activate(self, node_id: str) -> bool | None:
        """Handle a click on a node's connector."""
        if self.on_activate is not None:
            self.on_activate(node_id)
        return self.toggle(node_id)

    def expand_all(self) -> None:
        for node_id in sorted(self._expandable - self._expanded):
            self.toggle(node_id)

    def collapse_all(self) -> None:
        for node_id in sorted(self._expanded):
            self.toggle(node_id)

    def layout(self) -> PositionedMindMap | None:
        """Lay out the current tree; None when the input had no usable data.

        Each call returns its own copy, so a host may mutate the result
        without affecting later calls.
        """
        if self._tree is None:
            return None

        key = (self._expanded, self.options, self.metrics)
        if self._cache is None or self._cache_tree is not self._tree or key != self._cache_key:
            self._cache = layout_visible_tree(
                self._tree, self._expanded, self.options, self.metrics
            )
            self._cache_tree = self._tree
            self._cache_key = key
        else:
            logger.debug("layout cache hit")
        return copy.deepcopy(self._cache)
