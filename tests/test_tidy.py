"""Tests for tidy-tree positioning -- sibling packing, parent centering and
contour-based separation of boxes with different sizes.
"""
from __future__ import annotations

import pytest

from pretty_mindmap.normalize import normalize_tree
from pretty_mindmap.tidy import TidyPosition, tidy_layout
from pretty_mindmap.visibility import iter_nodes


def uniform(tree, size: float = 56) -> dict[str, float]:
    return {n.id: size for n in iter_nodes(tree)}


class TestBasicPlacement:
    def test_single_node_sits_at_origin(self):
        tree = normalize_tree({"id": "r"})
        assert tidy_layout(tree, uniform(tree), 140) == {"r": TidyPosition(depth=0, order=0)}

    def test_two_children_are_centered_around_the_parent(self):
        tree = normalize_tree({"id": "r", "children": [{"id": "a"}, {"id": "b"}]})
        pos = tidy_layout(tree, uniform(tree), 140)

        assert pos["r"] == TidyPosition(depth=0, order=0)
        assert pos["a"] == TidyPosition(depth=1, order=-70)
        assert pos["b"] == TidyPosition(depth=1, order=70)

    def test_three_children_use_sibling_gap(self):
        tree = normalize_tree({"id": "r", "children": [{"id": c} for c in "abc"]})
        pos = tidy_layout(tree, uniform(tree), 140)
        assert [pos[c].order for c in "abc"] == [-140, 0, 140]

    def test_single_child_is_aligned_with_parent(self):
        tree = normalize_tree({"id": "r", "children": [{"id": "a", "children": [{"id": "b"}]}]})
        pos = tidy_layout(tree, uniform(tree), 140)
        assert pos["a"].order == pos["r"].order == pos["b"].order == 0
        assert [pos[i].depth for i in "rab"] == [0, 1, 2]

    def test_sibling_order_follows_input_order(self):
        tree = normalize_tree({"id": "r", "children": [{"id": c} for c in "dcba"]})
        pos = tidy_layout(tree, uniform(tree), 100)
        orders = [pos[c].order for c in "dcba"]
        assert orders == sorted(orders)


class TestContours:
    def test_tall_boxes_push_siblings_apart(self):
        tree = normalize_tree({"id": "r", "children": [{"id": "a"}, {"id": "b"}]})
        extents = {"r": 56, "a": 300, "b": 300}
        pos = tidy_layout(tree, extents, 140, node_gap=16)
        assert pos["a"].order == -158
        assert pos["b"].order == 158

    def test_cousins_keep_node_gap(self):
        tree = normalize_tree({
            "id": "r",
            "children": [
                {"id": "a", "children": [{"id": "a1"}, {"id": "a2"}]},
                {"id": "b", "children": [{"id": "b1"}, {"id": "b2"}]},
            ],
        })
        pos = tidy_layout(tree, uniform(tree), 140, node_gap=16)

        assert pos["a"].order == -106
        assert pos["b"].order == 106
        assert [pos[i].order for i in ("a1", "a2", "b1", "b2")] == [-176, -36, 36, 176]

    def test_parent_is_centered_between_first_and_last_child(self):
        tree = normalize_tree({
            "id": "r",
            "children": [
                {"id": "a", "children": [{"id": f"a{i}"} for i in range(4)]},
                {"id": "b"},
                {"id": "c"},
            ],
        })
        pos = tidy_layout(tree, uniform(tree), 100, node_gap=10)
        for node in iter_nodes(tree):
            if node.children:
                first = pos[node.children[0].id].order
                last = pos[node.children[-1].id].order
                assert pos[node.id].order == pytest.approx((first + last) / 2)

    def test_no_overlap_within_any_depth(self):
        tree = normalize_tree({
            "id": "r",
            "children": [
                {"id": "a", "children": [
                    {"id": "a1", "children": [{"id": "x1"}, {"id": "x2"}, {"id": "x3"}]},
                    {"id": "a2"},
                ]},
                {"id": "b"},
                {"id": "c", "children": [{"id": "c1"}, {"id": "c2", "children": [{"id": "y1"}]}]},
            ],
        })
        extents = {n.id: 40 + 30 * (i % 4) for i, n in enumerate(iter_nodes(tree))}
        pos = tidy_layout(tree, extents, 60, node_gap=8)

        by_depth: dict[int, list[tuple[float, float]]] = {}
        for node_id, p in pos.items():
            half = extents[node_id] / 2
            by_depth.setdefault(p.depth, []).append((p.order - half, p.order + half))

        for spans in by_depth.values():
            spans.sort()
            for (_, prev_bottom), (next_top, _) in zip(spans, spans[1:]):
                assert next_top - prev_bottom >= 8 - 1e-9

    def test_missing_extent_is_treated_as_zero(self):
        tree = normalize_tree({"id": "r", "children": [{"id": "a"}, {"id": "b"}]})
        pos = tidy_layout(tree, {}, 50)
        assert pos["a"].order == -25
        assert pos["b"].order == 25


class TestDeepTrees:
    def test_deep_chain_with_side_branches(self):
        data = {"id": "n0"}
        current = data
        for i in range(1, 1500):
            child = {"id": f"n{i}"}
            current["children"] = [child, {"id": f"leaf{i}"}]
            current = child
        tree = normalize_tree(data)

        pos = tidy_layout(tree, uniform(tree), 100, node_gap=10)
        assert len(pos) == 1500 + 1499
        assert pos["n1499"].depth == 1499
        assert pos["leaf1"].order - pos["n1"].order == 100
