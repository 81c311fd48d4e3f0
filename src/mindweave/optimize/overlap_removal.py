# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Overlap removal pass for mind map layouts.

"""
Overlap removal for mind map layouts.

Runs after any layout. Overlapping pairs are pushed apart along the axis
that needs the smaller move, each node taking half of it. The pass then
translates everything back so the centroid does not move, and zeroes the
velocity of every node it touched so a running force simulation does not
immediately undo the separation.
"""

from typing import Any, Dict, List, Optional, Sequence, Set, Tuple
import logging

from ..model import (
    MindmapNode, Point, ZERO_VELOCITY, centroid, translate
)

logger = logging.getLogger(__name__)


def _overlap(a: MindmapNode, b: MindmapNode, padding: float) -> Tuple[float, float, float, float]:
    """Return (overlap_x, overlap_y, dx, dy) for a pair."""
    dx = a.position[0] - b.position[0]
    dy = a.position[1] - b.position[1]
    overlap_x = (a.width / 2 + b.width / 2 + padding) - abs(dx)
    overlap_y = (a.height / 2 + b.height / 2 + padding) - abs(dy)
    return overlap_x, overlap_y, dx, dy


def find_overlaps(
    nodes: Sequence[MindmapNode],
    padding: float = 0.0
) -> List[Tuple[str, str]]:
    """List id pairs whose footprints (grown by ``padding``) intersect."""
    pairs = []
    for i in range(len(nodes)):
        for j in range(i + 1, len(nodes)):
            overlap_x, overlap_y, _, _ = _overlap(nodes[i], nodes[j], padding)
            if overlap_x > 0 and overlap_y > 0:
                pairs.append((nodes[i].id, nodes[j].id))
    return pairs


def _shift(node: MindmapNode, axis: int, amount: float) -> None:
    x, y = node.position
    if axis == 0:
        node.position = (x + amount, y)
    else:
        node.position = (x, y + amount)


def resolve_overlaps(
    nodes: Sequence[MindmapNode],
    options: Optional[Dict[str, Any]] = None
) -> Dict[str, Point]:
    """
    Push overlapping nodes apart in place.

    Args:
        nodes: Nodes to separate (normally the visible subgraph).
        options: Optional parameters:
            - padding: Extra clearance required between footprints (default: 10)
            - max_passes: Maximum full passes over all pairs (default: 10)

    Returns:
        Dictionary mapping node IDs to adjusted (x, y) positions.
    """
    options = options or {}
    padding = options.get('padding', 10.0)
    max_passes = options.get('max_passes', 10)

    nodes = list(nodes)
    n = len(nodes)
    if n < 2:
        return {node.id: node.position for node in nodes}

    before = centroid(nodes)
    moved: Set[str] = set()
    passes = 0

    for passes in range(1, max_passes + 1):
        overlapped = False
        pair_index = 0
        for i in range(n):
            a = nodes[i]
            for j in range(i + 1, n):
                b = nodes[j]
                overlap_x, overlap_y, dx, dy = _overlap(a, b, padding)
                if overlap_x > 0 and overlap_y > 0:
                    overlapped = True
                    if overlap_x < overlap_y:
                        axis, amount, delta = 0, overlap_x, dx
                    else:
                        axis, amount, delta = 1, overlap_y, dy

                    if delta > 0:
                        sign = 1.0
                    elif delta < 0:
                        sign = -1.0
                    else:
                        # Coincident centers: alternate by pair parity
                        sign = 1.0 if pair_index % 2 == 0 else -1.0

                    _shift(a, axis, sign * amount / 2)
                    _shift(b, axis, -sign * amount / 2)
                    moved.add(a.id)
                    moved.add(b.id)
                pair_index += 1

        if not overlapped:
            break

    if moved:
        after = centroid(nodes)
        translate(nodes, (before[0] - after[0], before[1] - after[1]))
        for node in nodes:
            if node.id in moved:
                node.velocity = ZERO_VELOCITY
        remaining = find_overlaps(nodes, padding)
        if remaining:
            logger.debug("%d overlapping pairs remain after %d passes",
                         len(remaining), passes)

    return {node.id: node.position for node in nodes}
