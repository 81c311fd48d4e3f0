# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Expand/collapse transitions.

"""
Interpolation between the layout before and after an expand.

Newly revealed nodes grow out of their nearest ancestor that was already
on screen, and only the newly revealed edges fade in. The driver picks
the progress value each frame; this module only maps progress to
positions.
"""

from dataclasses import dataclass, field
from typing import Collection, Dict, Mapping, Optional, Set

from .graph import VisibleSubgraph
from .model import Point


def ease_in_out(t: float) -> float:
    """Cubic ease-in-out on [0, 1]."""
    t = min(1.0, max(0.0, t))
    if t < 0.5:
        return 4 * t * t * t
    return 1 - (-2 * t + 2) ** 3 / 2


def lerp(start: Point, end: Point, t: float) -> Point:
    return (start[0] + (end[0] - start[0]) * t,
            start[1] + (end[1] - start[1]) * t)


@dataclass
class ExpansionTransition:
    """Start and end positions for one expand/collapse animation."""
    start_positions: Dict[str, Point] = field(default_factory=dict)
    final_positions: Dict[str, Point] = field(default_factory=dict)
    animated_edge_ids: Set[str] = field(default_factory=set)

    @classmethod
    def between(
        cls,
        previous_ids: Collection[str],
        subgraph: VisibleSubgraph,
        parent_of: Mapping[str, str]
    ) -> 'ExpansionTransition':
        """
        Build the transition from the previously visible ids to ``subgraph``.

        Args:
            previous_ids: Ids visible before the change.
            subgraph: Visible subgraph after the change, already laid out.
            parent_of: Parent id per node id (first parent for shared nodes).
        """
        by_id = {node.id: node for node in subgraph.nodes}
        previous = set(previous_ids)
        start: Dict[str, Point] = {}

        for node in subgraph.nodes:
            if node.id in previous:
                continue
            ancestor: Optional[str] = parent_of.get(node.id)
            seen: Set[str] = set()
            while ancestor is not None and ancestor not in previous and ancestor not in seen:
                seen.add(ancestor)
                ancestor = parent_of.get(ancestor)
            if ancestor in previous and ancestor in by_id:
                start[node.id] = by_id[ancestor].position

        animated = {
            edge.edge_id for edge in subgraph.edges
            if edge.from_id not in previous or edge.to_id not in previous
        }
        return cls(
            start_positions=start,
            final_positions={node.id: node.position for node in subgraph.nodes},
            animated_edge_ids=animated,
        )

    @property
    def is_empty(self) -> bool:
        return not self.start_positions and not self.animated_edge_ids

    def positions_at(self, progress: float) -> Dict[str, Point]:
        """Positions at ``progress`` in [0, 1]; values outside are clamped."""
        t = min(1.0, max(0.0, progress))
        return {
            nid: lerp(self.start_positions.get(nid, end), end, t)
            for nid, end in self.final_positions.items()
        }

    def edge_opacity(self, edge_id: str, progress: float) -> float:
        """Opacity for an edge: new edges fade in, existing ones stay opaque."""
        if edge_id not in self.animated_edge_ids:
            return 1.0
        return min(1.0, max(0.0, progress))
