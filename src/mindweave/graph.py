# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Graph structure derivation and visibility resolution.

"""
Graph index and visible-subgraph resolution.

``GraphIndex`` is a pure function of the node and edge lists: lookup by
id, children by id (built from edges only) and the root set.
``resolve_visibility`` walks the index breadth-first from the roots and
only descends through expanded nodes.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set
import logging

from .model import MindmapEdge, MindmapNode

logger = logging.getLogger(__name__)


@dataclass
class GraphIndex:
    """Lookup structures derived from a flat node/edge list."""
    node_by_id: Dict[str, MindmapNode] = field(default_factory=dict)
    children_of: Dict[str, List[str]] = field(default_factory=dict)
    parent_of: Dict[str, str] = field(default_factory=dict)
    root_ids: List[str] = field(default_factory=list)
    ignored_edges: List[MindmapEdge] = field(default_factory=list)

    @classmethod
    def build(
        cls,
        nodes: Sequence[MindmapNode],
        edges: Sequence[MindmapEdge]
    ) -> 'GraphIndex':
        """Index nodes and edges in a single pass over the edges."""
        index = cls()
        for node in nodes:
            index.node_by_id.setdefault(node.id, node)

        has_incoming: Set[str] = set()
        for edge in edges:
            if edge.from_id not in index.node_by_id or edge.to_id not in index.node_by_id:
                index.ignored_edges.append(edge)
                continue
            siblings = index.children_of.setdefault(edge.from_id, [])
            if edge.to_id not in siblings:
                siblings.append(edge.to_id)
            index.parent_of.setdefault(edge.to_id, edge.from_id)
            has_incoming.add(edge.to_id)

        seen: Set[str] = set()
        for node in nodes:
            if node.id not in has_incoming and node.id not in seen:
                index.root_ids.append(node.id)
            seen.add(node.id)

        if not index.root_ids and nodes:
            logger.debug("No root found among %d nodes; using %r", len(nodes), nodes[0].id)
            index.root_ids = [nodes[0].id]

        if index.ignored_edges:
            logger.debug("Ignored %d edges with unknown endpoints", len(index.ignored_edges))
        return index

    def children(self, node_id: str) -> List[str]:
        return self.children_of.get(node_id, [])

    def descendants(self, node_id: str) -> Set[str]:
        """All ids reachable from ``node_id`` through edges, excluding itself."""
        found: Set[str] = set()
        stack = list(self.children(node_id))
        while stack:
            nid = stack.pop()
            if nid in found or nid == node_id:
                continue
            found.add(nid)
            stack.extend(self.children(nid))
        return found

    def __len__(self) -> int:
        return len(self.node_by_id)


@dataclass
class VisibleSubgraph:
    """Nodes and edges currently eligible for layout and rendering."""
    nodes: List[MindmapNode] = field(default_factory=list)
    edges: List[MindmapEdge] = field(default_factory=list)

    @property
    def node_ids(self) -> Set[str]:
        return {node.id for node in self.nodes}

    def __contains__(self, node_id: str) -> bool:
        return any(node.id == node_id for node in self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)


def resolve_visibility(
    index: GraphIndex,
    edges: Sequence[MindmapEdge],
    node_by_id: Optional[Dict[str, MindmapNode]] = None
) -> VisibleSubgraph:
    """
    Compute the visible subgraph by BFS from the roots.

    Args:
        index: Graph index for the current data.
        edges: Full edge list; visible edges are filtered from it.
        node_by_id: Node records to read ``is_expanded`` from
                    (default: the index's own records).

    Returns:
        VisibleSubgraph with nodes in traversal order. An edge is visible
        iff both of its endpoints are visible.
    """
    node_by_id = node_by_id if node_by_id is not None else index.node_by_id
    seeds = list(index.root_ids)
    if not seeds and node_by_id:
        seeds = [next(iter(node_by_id))]

    visible: List[MindmapNode] = []
    visited: Set[str] = set()
    queue = deque(seeds)

    while queue:
        nid = queue.popleft()
        if nid in visited:
            continue
        node = node_by_id.get(nid)
        if node is None:
            continue
        visited.add(nid)
        visible.append(node)
        if node.is_expanded:
            for child in index.children(nid):
                if child not in visited:
                    queue.append(child)

    visible_edges = [
        edge for edge in edges
        if edge.from_id in visited and edge.to_id in visited
    ]
    return VisibleSubgraph(nodes=visible, edges=visible_edges)
