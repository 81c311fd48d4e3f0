# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)

"""End-to-end tests for MindmapDocument."""

import pytest

from mindweave.config import LayoutConfig, LayoutType
from mindweave.document import MindmapDocument
from mindweave.model import MindmapEdge, MindmapNode, UNSET_POSITION
from mindweave.optimize import find_overlaps


def fixed_size(node, has_children):
    return (100.0, 60.0)


def make_graph(ids, pairs):
    nodes = [MindmapNode(id=i, label=i) for i in ids]
    edges = [MindmapEdge(from_id=a, to_id=b) for a, b in pairs]
    return nodes, edges


def make_doc(ids=("root", "a", "b"), pairs=(("root", "a"), ("root", "b")), **config):
    doc = MindmapDocument(LayoutConfig(**config), measurer=fixed_size)
    doc.load(*make_graph(list(ids), list(pairs)))
    return doc


class TestTreeScenario:
    """The root/a/b scenario under tree layout."""

    def test_layout_places_root_between_children(self):
        doc = make_doc()
        root, a, b = (doc.node(i) for i in ("root", "a", "b"))
        assert root.position[1] == pytest.approx((a.position[1] + b.position[1]) / 2)
        assert a.position[0] == b.position[0]
        assert a.position[0] > root.position[0]
        assert b.position[0] > root.position[0]

    def test_collapse_root_hides_everything_else(self):
        doc = make_doc()
        doc.set_expanded("root", False)
        assert {n.id for n in doc.visible_nodes} == {"root"}
        assert doc.visible_edges == []

    def test_toggle_round_trip(self):
        doc = make_doc()
        assert doc.toggle("root")
        assert len(doc.visible_nodes) == 1
        assert doc.toggle("root")
        assert len(doc.visible_nodes) == 3

    def test_unknown_toggle_is_ignored(self):
        doc = make_doc()
        assert doc.toggle("nope") is False
        assert len(doc.visible_nodes) == 3


class TestExpansionDefaults:
    """Expansion state resolved on load."""

    def test_initially_expanded_ids(self):
        nodes, edges = make_graph(
            ["1", "2", "3", "4", "5"],
            [("1", "2"), ("1", "3"), ("2", "4"), ("4", "5")],
        )
        config = LayoutConfig(expand_all_by_default=False, initially_expanded_ids=["1", "2"])
        doc = MindmapDocument(config, measurer=fixed_size)
        doc.load(nodes, edges)

        assert {n.id for n in doc.visible_nodes} == {"1", "2", "3", "4"}
        assert doc.node("4").is_expanded is False

    def test_node_override_wins(self):
        nodes, edges = make_graph(["1", "2", "3"], [("1", "2"), ("2", "3")])
        nodes[1].initial_expanded = False
        doc = MindmapDocument(LayoutConfig(expand_all_by_default=True), measurer=fixed_size)
        doc.load(nodes, edges)
        assert {n.id for n in doc.visible_nodes} == {"1", "2"}

    def test_collapse_all_and_expand_all(self):
        doc = make_doc(ids=("r", "a", "a1"), pairs=(("r", "a"), ("a", "a1")))
        doc.collapse_all()
        assert [n.id for n in doc.visible_nodes] == ["r"]
        doc.expand_all()
        assert len(doc.visible_nodes) == 3


class TestBidirectionalDocument:
    """Bidirectional layout through the document."""

    def test_root_at_origin_and_sides(self):
        doc = make_doc(layout=LayoutType.BIDIRECTIONAL, resolve_overlaps=False)
        assert doc.node("root").position == (0.0, 0.0)
        assert doc.node("a").position[0] > 0
        assert doc.node("b").position[0] < 0

    def test_centering_offset_targets_canvas_center(self):
        doc = make_doc(layout="bidirectional", resolve_overlaps=False)
        # Box spans x [-300, 300] and y [-30, 30]
        assert doc.centering_offset() == (400.0, 300.0)


class TestForceDocument:
    """Force-directed layout through the document."""

    def test_tick_places_and_moves_nodes(self):
        doc = make_doc(layout=LayoutType.FORCE_DIRECTED, seed=1)
        assert all(n.position == UNSET_POSITION for n in doc.visible_nodes)
        assert doc.tick() is True
        assert all(n.is_placed for n in doc.visible_nodes)

    def test_tick_is_noop_for_tree_layout(self):
        doc = make_doc()
        before = doc.positions()
        assert doc.tick() is False
        assert doc.positions() == before

    def test_collapse_keeps_remaining_positions(self):
        doc = make_doc(
            ids=("root", "a", "b", "a1"),
            pairs=(("root", "a"), ("root", "b"), ("a", "a1")),
            layout=LayoutType.FORCE_DIRECTED,
            resolve_overlaps=False,
            seed=5,
        )
        for _ in range(20):
            doc.tick()
        before = doc.positions()
        doc.set_expanded("a", False)
        after = doc.positions()
        assert set(after) == {"root", "a", "b"}
        for nid, pos in after.items():
            assert pos == before[nid]

    def test_reload_resets_positions(self):
        doc = make_doc(layout=LayoutType.FORCE_DIRECTED, seed=2)
        for _ in range(5):
            doc.tick()
        nodes = list(doc.nodes)
        doc.load(nodes, list(doc.edges))
        assert all(n.position == UNSET_POSITION for n in nodes)
        assert all(n.velocity == (0.0, 0.0) for n in nodes)

    def test_tick_applies_overlap_removal(self):
        doc = make_doc(ids=("a", "b"), pairs=(), layout=LayoutType.FORCE_DIRECTED)
        for node in doc.visible_nodes:
            node.position = (400.0, 300.0)
        doc.tick()
        assert find_overlaps(doc.visible_nodes) == []


class TestDocumentViewState:
    """Transitions, hit testing and layout switching."""

    def test_expand_records_transition_from_parent(self):
        doc = make_doc()
        doc.set_expanded("root", False)
        doc.set_expanded("root", True)
        transition = doc.transition
        root_pos = doc.node("root").position
        assert transition.start_positions == {"a": root_pos, "b": root_pos}
        assert transition.animated_edge_ids == {"root->a", "root->b"}
        assert transition.positions_at(0.0)["a"] == root_pos
        assert transition.positions_at(1.0)["a"] == doc.node("a").position

    def test_node_at(self):
        doc = make_doc()
        a = doc.node("a")
        assert doc.node_at(a.position) is a
        assert doc.node_at((-5000.0, -5000.0)) is None

    def test_set_layout_switches_algorithm(self):
        doc = make_doc(resolve_overlaps=False)
        doc.set_layout("bidirectional")
        assert doc.layout_type is LayoutType.BIDIRECTIONAL
        assert doc.node("root").position == (0.0, 0.0)

    def test_set_footprint_is_used_by_layout(self):
        doc = make_doc(resolve_overlaps=False)
        doc.set_footprint("a", 100.0, 200.0)
        a, b = doc.node("a"), doc.node("b")
        # Half of a (100) + gap (20) + half of b (30)
        assert b.position[1] - a.position[1] == pytest.approx(150.0)

    def test_footprints_measured_once(self):
        calls = []

        def measurer(node, has_children):
            calls.append(node.id)
            return (80.0, 40.0)

        doc = MindmapDocument(measurer=measurer)
        doc.load(*make_graph(["root", "a"], [("root", "a")]))
        doc.toggle("root")
        doc.toggle("root")
        assert sorted(calls) == ["a", "root"]
        assert doc.node("a").footprint == (80.0, 40.0)

    def test_canvas_resize_recenters_tree(self):
        doc = make_doc(resolve_overlaps=False)
        doc.set_canvas_size(1000, 1000)
        assert doc.node("root").position == (50.0, 500.0)

    def test_invalidate_footprints_keeps_source_sizes(self):
        calls = []

        def measurer(node, has_children):
            calls.append(node.id)
            return (80.0, 40.0)

        nodes, edges = make_graph(["root", "a"], [("root", "a")])
        nodes[1].footprint = (120.0, 40.0)
        doc = MindmapDocument(measurer=measurer)
        doc.load(nodes, edges)
        doc.invalidate_footprints()

        assert calls == ["root", "root"]
        assert doc.node("a").footprint == (120.0, 40.0)
        assert doc.node("root").footprint == (80.0, 40.0)

    def test_switch_to_force_keeps_bidirectional_arrangement(self):
        doc = make_doc(layout=LayoutType.BIDIRECTIONAL, resolve_overlaps=False)
        doc.set_layout(LayoutType.FORCE_DIRECTED)
        root, a = doc.node("root"), doc.node("a")

        assert root.is_placed
        assert root.position == (400.0, 300.0)
        assert (a.position[0] - root.position[0], a.position[1] - root.position[1]) == (250.0, 0.0)

        doc.tick()
        # Forces on the root cancel; it is not re-seeded
        assert abs(root.position[0] - 400.0) < 1.0
        assert abs(root.position[1] - 300.0) < 1.0


class TestLongLabels:
    """Default pipeline with wide, estimated footprints."""

    def test_same_depth_nodes_share_a_column(self):
        ids = ["r", "a", "b", "a1", "b1", "b2"]
        nodes = [MindmapNode(id=i, label=f"{i} " + "long label text " * 8) for i in ids]
        edges = [
            MindmapEdge(from_id=a, to_id=b)
            for a, b in [("r", "a"), ("r", "b"), ("a", "a1"), ("b", "b1"), ("b", "b2")]
        ]
        doc = MindmapDocument(LayoutConfig())
        doc.load(nodes, edges)
        xs = {nid: pos[0] for nid, pos in doc.positions().items()}

        assert max(n.width for n in nodes) > 250
        assert xs["a"] == xs["b"]
        assert xs["a1"] == xs["b1"] == xs["b2"]
        assert xs["r"] < xs["a"] < xs["a1"]
        assert find_overlaps(doc.visible_nodes, padding=10) == []

    def test_bidirectional_sides_keep_their_columns(self):
        ids = ["r", "a", "b", "c", "a1", "c1"]
        nodes = [MindmapNode(id=i, label=f"{i} " + "long label text " * 8) for i in ids]
        edges = [
            MindmapEdge(from_id=a, to_id=b)
            for a, b in [("r", "a"), ("r", "b"), ("r", "c"), ("a", "a1"), ("c", "c1")]
        ]
        doc = MindmapDocument(LayoutConfig(layout=LayoutType.BIDIRECTIONAL))
        doc.load(nodes, edges)
        xs = {nid: pos[0] for nid, pos in doc.positions().items()}

        assert xs["a"] == xs["c"] > 0
        assert xs["a1"] == xs["c1"] > xs["a"]
        assert xs["b"] < 0
        assert find_overlaps(doc.visible_nodes, padding=10) == []
