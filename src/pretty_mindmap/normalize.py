from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .types import TreeNode

# ============================================================================
# Tree normalizer — converts loosely structured JSON-like input into an
# immutable TreeNode tree.
#
# Malformed input never raises: a non-mapping root yields None and malformed
# children are dropped together with their subtrees. Traversal uses explicit
# stacks so arbitrarily deep input cannot hit the recursion limit.
# ============================================================================

logger = logging.getLogger(__name__)

AUTO_ID_PREFIX = "auto_"


@dataclass(slots=True)
class _Draft:
    id: str
    label: str
    children: list[_Draft] = field(default_factory=list)


def normalize_tree(data: Any) -> TreeNode | None:
    """Normalize host data into a canonical tree.

    Ids are taken from ``id`` when present, otherwise synthesized as
    ``auto_<n>`` in pre-order. Labels fall back from ``label`` to ``name``
    to the id. A node whose id was already used earlier in the traversal is
    dropped along with its children.
    """
    if not isinstance(data, Mapping):
        return None

    counter = 0
    seen: set[str] = set()
    root: _Draft | None = None

    # Pre-order: resolve ids in traversal order
    stack: list[tuple[Mapping, _Draft | None]] = [(data, None)]
    while stack:
        raw, parent = stack.pop()

        raw_id = raw.get("id")
        if raw_id is None:
            node_id = f"{AUTO_ID_PREFIX}{counter}"
            counter += 1
        else:
            node_id = str(raw_id)

        if node_id in seen:
            logger.debug("dropping node with duplicate id %r", node_id)
            continue
        seen.add(node_id)

        label = raw.get("label")
        if label is None:
            label = raw.get("name")
        if label is None:
            label = node_id

        draft = _Draft(id=node_id, label=str(label))
        if parent is None:
            root = draft
        else:
            parent.children.append(draft)

        children = []
        for child in _raw_children(raw):
            if isinstance(child, Mapping):
                children.append(child)
            else:
                logger.debug("dropping non-mapping child of %r", node_id)
        stack.extend((child, draft) for child in reversed(children))

    return _freeze(root)


def _freeze(root: _Draft) -> TreeNode:
    """Post-order: build immutable nodes bottom-up."""
    built: dict[str, TreeNode] = {}
    stack: list[tuple[_Draft, bool]] = [(root, False)]
    while stack:
        draft, ready = stack.pop()
        if not ready and draft.children:
            stack.append((draft, True))
            stack.extend((c, False) for c in draft.children)
            continue
        built[draft.id] = TreeNode(
            id=draft.id,
            label=draft.label,
            children=tuple(built.pop(c.id) for c in draft.children),
        )
    return built[root.id]


def _raw_children(raw: Mapping) -> list[Any] | tuple[Any, ...]:
    children = raw.get("children")
    if isinstance(children, (list, tuple)):
        return children
    return ()
