# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Spanning forest and subtree measurement shared by the tree layouts.

"""
Tree structure for the deterministic layouts.

The tree layouts work on whatever node and edge lists they are handed
(usually the visible subgraph), so roots and children are recomputed
here rather than taken from the global index. Each node is claimed by
the first parent that reaches it, which turns shared descendants and
cycles into a proper forest.

Measurement uses an explicit stack so very deep hierarchies do not hit
the interpreter's recursion limit.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set
import logging
import math

from ..model import MindmapEdge, MindmapNode

logger = logging.getLogger(__name__)


@dataclass
class Forest:
    """Roots and claimed children of a node/edge list."""
    nodes: Dict[str, MindmapNode] = field(default_factory=dict)
    roots: List[str] = field(default_factory=list)
    children: Dict[str, List[str]] = field(default_factory=dict)

    def kids(self, node_id: str) -> List[str]:
        return self.children.get(node_id, [])


def build_forest(
    nodes: Sequence[MindmapNode],
    edges: Sequence[MindmapEdge]
) -> Forest:
    """
    Build a spanning forest over ``nodes`` from ``edges``.

    Roots are the nodes without an incoming edge, in node order, falling
    back to the first node. Nodes left unclaimed after walking every root
    (members of a rootless cycle) start trees of their own.
    """
    forest = Forest()
    for node in nodes:
        forest.nodes.setdefault(node.id, node)
    if not forest.nodes:
        return forest

    linked: Dict[str, List[str]] = {}
    has_incoming: Set[str] = set()
    for edge in edges:
        if edge.from_id == edge.to_id:
            continue
        if edge.from_id not in forest.nodes or edge.to_id not in forest.nodes:
            continue
        targets = linked.setdefault(edge.from_id, [])
        if edge.to_id not in targets:
            targets.append(edge.to_id)
        has_incoming.add(edge.to_id)

    for nid in forest.nodes:
        forest.children[nid] = []
        if nid not in has_incoming:
            forest.roots.append(nid)

    if not forest.roots:
        first = next(iter(forest.nodes))
        logger.debug("Every node has a parent; rooting layout at %r", first)
        forest.roots.append(first)

    claimed: Set[str] = set()

    def claim(root: str) -> None:
        claimed.add(root)
        stack = [root]
        while stack:
            nid = stack.pop()
            fresh = []
            for child in linked.get(nid, []):
                if child not in claimed:
                    claimed.add(child)
                    fresh.append(child)
            forest.children[nid].extend(fresh)
            # Earlier siblings are walked first and claim shared descendants
            stack.extend(reversed(fresh))

    for root in forest.roots:
        claim(root)

    for nid in forest.nodes:
        if nid not in claimed:
            forest.roots.append(nid)
            claim(nid)

    return forest


def measure_extents(forest: Forest, gap: float) -> Dict[str, float]:
    """
    Compute the cross-axis extent of every subtree.

    A leaf needs its own height; an internal node needs the larger of its
    own height and its children's extents plus the gaps between them.
    """
    extents: Dict[str, float] = {}

    for root in forest.roots:
        stack = [(root, False)]
        while stack:
            nid, children_done = stack.pop()
            kids = forest.kids(nid)
            own = forest.nodes[nid].height
            if not kids:
                extents[nid] = own
            elif children_done:
                extents[nid] = max(own, block_extent(kids, extents, gap))
            else:
                stack.append((nid, True))
                for child in reversed(kids):
                    stack.append((child, False))

    return extents


def depth_widths(
    forest: Forest,
    start: Sequence[str],
    depth: int = 0,
    widths: Optional[List[float]] = None
) -> List[float]:
    """Widest footprint per depth for the trees under ``start``."""
    widths = widths if widths is not None else []
    stack = [(nid, depth) for nid in start]
    while stack:
        nid, d = stack.pop()
        while len(widths) <= d:
            widths.append(0.0)
        widths[d] = max(widths[d], forest.nodes[nid].width)
        stack.extend((kid, d + 1) for kid in forest.kids(nid))
    return widths


def column_offsets(widths: Sequence[float], spacing: float, padding: float) -> List[float]:
    """
    Distance of each depth column from the first one.

    Columns are ``spacing`` apart, widened where the widest nodes of two
    neighbouring columns would otherwise come closer than ``padding``.
    The minimum is rounded up to a whole unit so later overlap checks on
    the same widths do not trip on float error.
    """
    offsets = [0.0]
    for prev, cur in zip(widths, widths[1:]):
        needed = math.ceil(prev / 2 + cur / 2 + padding)
        offsets.append(offsets[-1] + max(spacing, needed))
    return offsets


def block_extent(ids: Sequence[str], extents: Dict[str, float], gap: float) -> float:
    """Total extent of sibling subtrees stacked with ``gap`` between them."""
    if not ids:
        return 0.0
    return sum(extents[nid] for nid in ids) + gap * (len(ids) - 1)
