# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Bidirectional (two-sided) tree layout for mind maps.

"""
Bidirectional tree layout with the root at the origin.

The root's direct children alternate between the right side (even
indices) and the left side (odd indices); each side is then laid out as
an ordinary tree growing away from the root. The split ignores subtree
size, so a lopsided root can produce an unbalanced picture.
Columns on each side are ``horizontal_spacing`` apart, widened where
the widest nodes of two neighbouring columns would crowd each other.

Subtree extents are measured in a separate pass before anything is
placed, so positions never feed back into sizes.
"""

from typing import Any, Dict, List, Optional, Sequence
import logging

from ..model import MindmapEdge, MindmapNode, Point, Size
from .forest import (
    Forest, block_extent, build_forest, column_offsets, depth_widths, measure_extents
)

logger = logging.getLogger(__name__)

RIGHT = 1
LEFT = -1


def split_sides(children: Sequence[str]):
    """Alternate children between (right, left) by position."""
    return list(children[0::2]), list(children[1::2])


def bidirectional_layout(
    nodes: Sequence[MindmapNode],
    edges: Sequence[MindmapEdge],
    size: Optional[Size] = None,
    options: Optional[Dict[str, Any]] = None
) -> Dict[str, Point]:
    """
    Compute a two-sided tree layout, mutating ``position`` in place.

    Args:
        nodes: Nodes to place (normally the visible subgraph).
        edges: Edges among ``nodes``.
        size: Canvas size; unused, the camera centers the result.
        options: Optional parameters:
            - horizontal_spacing: Distance between depth columns (default: 250)
            - sibling_gap: Minimum vertical gap between siblings (default: 20)
            - column_padding: Minimum clearance between the widest nodes of
              neighbouring columns on one side (default: 10)

    Returns:
        Dictionary mapping node IDs to (x, y) positions.
    """
    options = options or {}
    spacing = options.get('horizontal_spacing', 250.0)
    gap = options.get('sibling_gap', 20.0)
    padding = options.get('column_padding', 10.0)

    if not nodes:
        return {}

    forest = build_forest(nodes, edges)
    extents = measure_extents(forest, gap)

    root = forest.roots[0]
    forest.nodes[root].position = (0.0, 0.0)

    right, left = split_sides(forest.kids(root))

    # Extra roots start at x = 0 and grow right, so they share the right columns
    root_width = [forest.nodes[root].width]
    right_widths = depth_widths(forest, right, 1, list(root_width))
    depth_widths(forest, forest.roots[1:], 0, right_widths)
    right_columns = column_offsets(right_widths, spacing, padding)
    left_columns = column_offsets(depth_widths(forest, left, 1, list(root_width)), spacing, padding)

    _layout_side(forest, extents, right, 1, 0.0, RIGHT, right_columns, gap)
    _layout_side(forest, extents, left, 1, 0.0, LEFT, left_columns, gap)

    # Further roots (disconnected trees) hang below the main one, growing right
    if len(forest.roots) > 1:
        half = max(
            forest.nodes[root].height,
            block_extent(right, extents, gap),
            block_extent(left, extents, gap),
        ) / 2
        cursor = half + gap
        for extra in forest.roots[1:]:
            center_y = cursor + extents[extra] / 2
            forest.nodes[extra].position = (0.0, center_y)
            _layout_side(forest, extents, forest.kids(extra), 1,
                         center_y, RIGHT, right_columns, gap)
            cursor += extents[extra] + gap

    logger.debug("Bidirectional layout: %d right, %d left, %d extra roots",
                 len(right), len(left), len(forest.roots) - 1)
    return {nid: node.position for nid, node in forest.nodes.items()}


def _layout_side(
    forest: Forest,
    extents: Dict[str, float],
    siblings: List[str],
    depth: int,
    center_y: float,
    direction: int,
    columns: List[float],
    gap: float
) -> None:
    """Stack sibling columns centered on ``center_y``, moving outward."""
    stack = [(siblings, depth, center_y)]
    while stack:
        group, level, group_center = stack.pop()
        if not group:
            continue
        column_x = direction * columns[level]

        cursor = group_center - block_extent(group, extents, gap) / 2
        for nid in group:
            height = extents[nid]
            node_y = cursor + height / 2
            forest.nodes[nid].position = (column_x, node_y)

            kids = forest.kids(nid)
            if kids:
                stack.append((kids, level + 1, node_y))
            cursor += height + gap
