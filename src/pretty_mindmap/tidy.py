from __future__ import annotations

from dataclasses import dataclass

from .types import TreeNode

# ============================================================================
# Tidy tree positioning (Reingold–Tilford family).
#
# Assigns each node a (depth, order) pair. Depth is the level index from the
# root; order is a coordinate along the sibling axis. Subtrees are packed
# using per-depth contours so boxes of different sizes never overlap, and
# every parent sits at the midpoint of its first and last child.
# ============================================================================

# A contour holds (top, bottom) along the order axis for each level of a
# subtree, relative to the subtree root's centre. Levels are stored deepest
# first so the root level is always contour[-1].
Contour = list[tuple[float, float]]


@dataclass(slots=True)
class TidyPosition:
    depth: int
    order: float


def tidy_layout(
    tree: TreeNode,
    extents: dict[str, float],
    sibling_gap: float,
    node_gap: float = 0.0,
) -> dict[str, TidyPosition]:
    """Compute tidy-tree positions for every node of ``tree``.

    ``extents`` maps node id to the node's size along the order axis (box
    height for a left-to-right tree). Adjacent sibling centres end up at
    least ``sibling_gap`` apart and boxes sharing a depth keep at least
    ``node_gap`` of clear space between them. The root is placed at order 0.
    """
    # child id -> offset of the child's centre from its parent's centre
    offsets: dict[str, float] = {}
    contours: dict[str, Contour] = {}

    # Post-order: pack child subtrees and centre each parent over them
    stack: list[tuple[TreeNode, bool]] = [(tree, False)]
    while stack:
        node, ready = stack.pop()
        if not ready and node.children:
            stack.append((node, True))
            stack.extend((c, False) for c in node.children)
            continue
        children = [contours.pop(c.id) for c in node.children]
        contours[node.id] = _pack(node, children, extents, sibling_gap, node_gap, offsets)

    positions: dict[str, TidyPosition] = {}

    # Pre-order: accumulate relative offsets into absolute positions
    walk: list[tuple[TreeNode, int, float]] = [(tree, 0, 0.0)]
    while walk:
        node, depth, order = walk.pop()
        positions[node.id] = TidyPosition(depth=depth, order=order)
        for child in node.children:
            walk.append((child, depth + 1, order + offsets[child.id]))

    return positions


def _pack(
    node: TreeNode,
    children: list[Contour],
    extents: dict[str, float],
    sibling_gap: float,
    node_gap: float,
    offsets: dict[str, float],
) -> Contour:
    half = extents.get(node.id, 0.0) / 2
    if not children:
        return [(-half, half)]

    # Stack child subtrees along the order axis, first child at 0
    placed: list[float] = [0.0]
    merged = children[0]
    for sub in children[1:]:
        pos = placed[-1] + sibling_gap
        for depth in range(min(len(merged), len(sub))):
            top = sub[-1 - depth][0]
            pos = max(pos, merged[-1 - depth][1] - top + node_gap)
        placed.append(pos)
        merged = _merge_contours(merged, sub, pos)

    center = (placed[0] + placed[-1]) / 2
    for child, pos in zip(node.children, placed):
        offsets[child.id] = pos - center

    if center:
        merged = [(top - center, bottom - center) for top, bottom in merged]
    # A lone child's contour is extended in place so long chains stay linear
    merged.append((-half, half))
    return merged


def _merge_contours(acc: Contour, other: Contour, shift: float) -> Contour:
    levels = max(len(acc), len(other))
    result: Contour = []
    for depth in range(levels):
        if depth >= len(other):
            result.append(acc[-1 - depth])
            continue
        top, bottom = other[-1 - depth]
        top += shift
        bottom += shift
        if depth < len(acc):
            top = min(top, acc[-1 - depth][0])
            bottom = max(bottom, acc[-1 - depth][1])
        result.append((top, bottom))
    result.reverse()
    return result
