from __future__ import annotations

from collections.abc import Iterator, Set

from .types import TreeNode

# ============================================================================
# Visibility reducer — derives the subtree that should currently be laid out
# from the canonical tree and the set of expanded node ids.
# ============================================================================


def reduce_visible(tree: TreeNode, expanded: Set[str]) -> TreeNode:
    """Return a fresh tree where only expanded nodes keep their children.

    The root is always present. Ids in ``expanded`` that belong to leaves
    (or to no node at all) have no effect.
    """
    built: dict[str, TreeNode] = {}
    stack: list[tuple[TreeNode, bool]] = [(tree, False)]
    while stack:
        node, ready = stack.pop()
        shown = node.id in expanded
        if shown and not ready and node.children:
            stack.append((node, True))
            stack.extend((c, False) for c in node.children)
            continue
        children = tuple(built.pop(c.id) for c in node.children) if shown else ()
        built[node.id] = TreeNode(id=node.id, label=node.label, children=children)
    return built[tree.id]


def collect_expandable_ids(tree: TreeNode) -> frozenset[str]:
    """Ids of every canonical node with at least one child."""
    return frozenset(n.id for n in iter_nodes(tree) if n.children)


def iter_nodes(tree: TreeNode) -> Iterator[TreeNode]:
    """Pre-order traversal."""
    stack = [tree]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))
