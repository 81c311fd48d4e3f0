# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)

"""Tests for node and edge records."""

import pytest

from mindweave.model import (
    DEFAULT_FOOTPRINT,
    MindmapEdge,
    MindmapNode,
    centroid,
    expansion_override,
    resolve_expanded,
    translate,
)


class TestMindmapNode:
    """Tests for MindmapNode."""

    def test_defaults(self):
        node = MindmapNode(id="a")
        assert node.size == DEFAULT_FOOTPRINT
        assert node.is_expanded is True
        assert not node.is_placed

    def test_contains_uses_footprint(self):
        node = MindmapNode(id="a", position=(100.0, 100.0), footprint=(40.0, 20.0))
        assert node.contains((120.0, 110.0))
        assert not node.contains((121.0, 100.0))
        assert not node.contains((100.0, 89.0))

    def test_reset_motion(self):
        node = MindmapNode(id="a", position=(3.0, 4.0), velocity=(1.0, 1.0))
        node.reset_motion()
        assert node.position == (0.0, 0.0)
        assert node.velocity == (0.0, 0.0)

    def test_from_dict_name_fallback(self):
        node = MindmapNode.from_dict({"id": 7, "name": "Seven"})
        assert node.id == "7"
        assert node.label == "Seven"

    def test_from_dict_children_and_footprint(self):
        node = MindmapNode.from_dict({
            "id": "1",
            "label": "Root",
            "children": ["2", {"id": "3"}],
            "width": 120,
            "height": 40,
            "color": "#ff0000",
        })
        assert node.children_ids == ["2", "3"]
        assert node.footprint == (120.0, 40.0)
        assert node.color == "#ff0000"

    def test_to_dict(self):
        node = MindmapNode(id="1", label="Root", position=(5.0, 6.0), footprint=(10.0, 20.0))
        d = node.to_dict()
        assert d["x"] == 5.0
        assert d["y"] == 6.0
        assert d["width"] == 10.0
        assert d["height"] == 20.0
        assert "color" not in d


class TestExpansion:
    """Tests for per-node expansion overrides and their resolution."""

    @pytest.mark.parametrize("data, expected", [
        ({"isExpanded": False, "expanded": True}, False),
        ({"expanded": True}, True),
        ({"expanded": "yes"}, False),
        ({"collapsed": True}, False),
        ({"collapsed": False}, True),
        ({}, None),
    ])
    def test_override_keys(self, data, expected):
        assert expansion_override(data) is expected

    def test_from_dict_applies_override(self):
        node = MindmapNode.from_dict({"id": "1", "collapsed": True})
        assert node.initial_expanded is False
        assert node.is_expanded is False

    def test_precedence(self):
        node = MindmapNode(id="1")
        assert resolve_expanded(node) is True
        assert resolve_expanded(node, expand_all_by_default=False) is False
        assert resolve_expanded(node, False, ["1"]) is True

        node.initial_expanded = False
        assert resolve_expanded(node, True, ["1"]) is False


class TestMindmapEdge:
    """Tests for MindmapEdge."""

    def test_edge_id(self):
        assert MindmapEdge(from_id="a", to_id="b").edge_id == "a->b"

    def test_structural_equality(self):
        assert MindmapEdge("a", "b") == MindmapEdge.from_dict({"from": "a", "to": "b"})

    def test_from_dict_stringifies(self):
        edge = MindmapEdge.from_dict({"from": 1, "to": 2})
        assert edge.to_dict() == {"from": "1", "to": "2"}


def test_centroid_and_translate():
    nodes = [
        MindmapNode(id="a", position=(0.0, 0.0)),
        MindmapNode(id="b", position=(10.0, 20.0)),
    ]
    assert centroid(nodes) == (5.0, 10.0)
    translate(nodes, (1.0, -1.0))
    assert [n.position for n in nodes] == [(1.0, -1.0), (11.0, 19.0)]
    assert centroid([]) is None


class LookupOnly:
    """Membership test without iteration."""

    def __init__(self, ids):
        self._ids = frozenset(ids)

    def __contains__(self, item):
        return item in self._ids


def test_resolve_expanded_only_tests_membership():
    node = MindmapNode(id="1")
    assert resolve_expanded(node, False, LookupOnly(["1"])) is True
    assert resolve_expanded(MindmapNode(id="2"), False, LookupOnly(["1"])) is False
