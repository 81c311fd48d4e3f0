# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Horizontal tree layout for mind maps.

"""
Horizontal tree layout: parents on the left, children to the right.

Each depth is one column along x, ``level_spacing`` past the previous
one or further when the widest nodes of the two columns need the room,
so every node of a depth shares one x. Along y each node
gets a span as tall as its subtree extent; siblings are stacked in
order with a minimum gap, and a parent sits at the midpoint of its
children's block, so sibling subtrees never share cross-axis space.
"""

from typing import Any, Dict, Optional, Sequence
import logging

from ..model import MindmapEdge, MindmapNode, Point, Size
from .forest import (
    block_extent, build_forest, column_offsets, depth_widths, measure_extents
)

logger = logging.getLogger(__name__)


def tree_layout(
    nodes: Sequence[MindmapNode],
    edges: Sequence[MindmapEdge],
    size: Size = (800.0, 600.0),
    options: Optional[Dict[str, Any]] = None
) -> Dict[str, Point]:
    """
    Place every node of a hierarchy, mutating ``position`` in place.

    Args:
        nodes: Nodes to place (normally the visible subgraph).
        edges: Edges among ``nodes``; roots are derived from these.
        size: Canvas (width, height); the forest is centered vertically.
        options: Optional parameters:
            - level_spacing: Distance between depth columns (default: 250)
            - sibling_gap: Minimum gap between sibling subtrees (default: 20)
            - margin_left: Distance of the root column from the canvas edge (default: 50)
            - column_padding: Minimum clearance between the widest nodes of
              neighbouring columns; widens a column step past level_spacing (default: 10)
            - direction: 'left-right' or 'right-left' (default: 'left-right')

    Returns:
        Dictionary mapping node IDs to (x, y) positions.
    """
    options = options or {}
    level_spacing = options.get('level_spacing', 250.0)
    sibling_gap = options.get('sibling_gap', 20.0)
    margin_left = options.get('margin_left', 50.0)
    column_padding = options.get('column_padding', 10.0)
    direction = options.get('direction', 'left-right')

    if not nodes:
        return {}

    if direction == 'right-left':
        origin_x = size[0] - margin_left
        sign = -1
    else:
        origin_x = margin_left
        sign = 1

    forest = build_forest(nodes, edges)
    extents = measure_extents(forest, sibling_gap)
    columns = column_offsets(depth_widths(forest, forest.roots), level_spacing, column_padding)

    # Each stack entry is (node id, depth, top of the node's span)
    stack = []
    cursor = size[1] / 2 - block_extent(forest.roots, extents, sibling_gap) / 2
    for root in forest.roots:
        stack.append((root, 0, cursor))
        cursor += extents[root] + sibling_gap

    while stack:
        nid, depth, span_top = stack.pop()
        center_y = span_top + extents[nid] / 2
        forest.nodes[nid].position = (origin_x + sign * columns[depth], center_y)

        kids = forest.kids(nid)
        child_top = center_y - block_extent(kids, extents, sibling_gap) / 2
        for child in kids:
            stack.append((child, depth + 1, child_top))
            child_top += extents[child] + sibling_gap

    logger.debug("Tree layout placed %d nodes in %d trees",
                 len(forest.nodes), len(forest.roots))
    return {nid: node.position for nid, node in forest.nodes.items()}

