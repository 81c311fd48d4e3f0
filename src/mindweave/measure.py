# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Node footprint measurement.

"""
Footprint measurement for mind map nodes.

Layouts treat a node's footprint as read-only input. The real measurement
usually belongs to the renderer (it knows the font); ``FootprintCache``
takes any measuring callable and memoizes it per node id so footprints
are computed once and never recomputed in the middle of a layout.
``estimate_footprint`` is a deterministic text-metrics fallback.
"""

from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Sequence
import math

from .model import MindmapNode, Size

# Label box metrics
MAX_WIDTH = 250.0
PADDING = 16.0
FONT_SIZE = 14.0
LINE_HEIGHT = 1.3
CHAR_WIDTH = 0.6 * FONT_SIZE

# Expand/collapse indicator drawn beside nodes that have children
INDICATOR_RADIUS = 10.0
INDICATOR_PADDING = 12.0

Measurer = Callable[[MindmapNode, bool], Size]


def estimate_footprint(label: Any, has_children: bool = False) -> Size:
    """
    Estimate the footprint of a label box.

    Text wraps at ``MAX_WIDTH - 2 * PADDING``; explicit newlines start a
    new line. Nodes with children get room for the indicator.
    """
    text = "" if label is None else str(label)
    inner_width = MAX_WIDTH - PADDING * 2
    chars_per_line = max(1, int(inner_width // CHAR_WIDTH))

    lines = 0
    widest = 0.0
    for paragraph in text.split("\n"):
        wrapped = max(1, math.ceil(len(paragraph) / chars_per_line))
        lines += wrapped
        widest = max(widest, min(len(paragraph), chars_per_line) * CHAR_WIDTH)

    width = min(widest + PADDING * 2, MAX_WIDTH)
    height = lines * FONT_SIZE * LINE_HEIGHT + PADDING * 2

    if has_children:
        extra = INDICATOR_PADDING + INDICATOR_RADIUS
        width += extra
        height += extra

    return (width, height)


def _default_measurer(node: MindmapNode, has_children: bool) -> Size:
    return estimate_footprint(node.label, has_children)


class FootprintCache:
    """Memoized footprint measurement keyed by node id."""

    def __init__(self, measurer: Optional[Measurer] = None):
        self.measurer = measurer or _default_measurer
        self._cache: Dict[str, Size] = {}

    def measure(self, node: MindmapNode, has_children: bool = False) -> Size:
        """Return the cached footprint for a node, measuring on first use."""
        size = self._cache.get(node.id)
        if size is None:
            width, height = self.measurer(node, has_children)
            size = (float(width), float(height))
            self._cache[node.id] = size
        return size

    def apply(
        self,
        nodes: Iterable[MindmapNode],
        children_of: Optional[Mapping[str, Sequence[str]]] = None
    ) -> int:
        """
        Fill in footprints for nodes that do not have one yet.

        Returns:
            Number of nodes whose footprint was assigned.
        """
        children_of = children_of or {}
        assigned = 0
        for node in nodes:
            if node.footprint is None:
                node.footprint = self.measure(node, bool(children_of.get(node.id)))
                assigned += 1
        return assigned

    def invalidate(self, node_id: Optional[str] = None) -> None:
        """Drop one cached footprint, or all of them."""
        if node_id is None:
            self._cache.clear()
        else:
            self._cache.pop(node_id, None)

    def __contains__(self, node_id: str) -> bool:
        return node_id in self._cache

    def __len__(self) -> int:
        return len(self._cache)
