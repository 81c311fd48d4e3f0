# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Viewport centering for mind map layouts.

"""
Camera centering for mind map layouts.

The core only computes targets: how the camera gets there (jump or
smooth interpolation over frames) is up to the animation driver.
"""

from typing import Any, Dict, Optional, Sequence, Tuple
import math

from ..model import MindmapNode, Point, Size, translate

BoundingBox = Tuple[float, float, float, float]


def bounding_box(nodes: Sequence[MindmapNode]) -> Optional[BoundingBox]:
    """
    Axis-aligned box (min_x, min_y, max_x, max_y) around all footprints.

    Returns None for an empty set or any non-finite position or size.
    """
    if not nodes:
        return None

    min_x = min_y = math.inf
    max_x = max_y = -math.inf
    for node in nodes:
        x, y = node.position
        width, height = node.size
        if not all(math.isfinite(v) for v in (x, y, width, height)):
            return None
        min_x = min(min_x, x - width / 2)
        max_x = max(max_x, x + width / 2)
        min_y = min(min_y, y - height / 2)
        max_y = max(max_y, y + height / 2)

    return (min_x, min_y, max_x, max_y)


def compute_centering_offset(
    nodes: Sequence[MindmapNode],
    size: Size
) -> Optional[Point]:
    """
    Camera translation that centers the visible nodes on the canvas.

    Args:
        nodes: Visible nodes.
        size: Canvas (width, height).

    Returns:
        (dx, dy) offset, or None when there is nothing sensible to center.
    """
    box = bounding_box(nodes)
    if box is None:
        return None
    min_x, min_y, max_x, max_y = box
    return (size[0] / 2 - (min_x + max_x) / 2,
            size[1] / 2 - (min_y + max_y) / 2)


def center_nodes(
    nodes: Sequence[MindmapNode],
    size: Size
) -> Optional[Point]:
    """Move the nodes themselves by the centering offset; returns the offset."""
    offset = compute_centering_offset(nodes, size)
    if offset is not None:
        translate(nodes, offset)
    return offset


def fit_scale(
    nodes: Sequence[MindmapNode],
    size: Size,
    options: Optional[Dict[str, Any]] = None
) -> Optional[float]:
    """
    Zoom factor that fits the visible nodes inside the canvas.

    Args:
        nodes: Visible nodes.
        size: Canvas (width, height).
        options: Optional parameters:
            - padding: Padding from canvas edges (default: 50)
            - min_scale: Smallest zoom returned (default: 0.5)
            - max_scale: Largest zoom returned (default: 2.0)

    Returns:
        Scale factor, or None when the bounding box is undefined.
    """
    options = options or {}
    padding = options.get('padding', 50.0)
    min_scale = options.get('min_scale', 0.5)
    max_scale = options.get('max_scale', 2.0)

    box = bounding_box(nodes)
    if box is None:
        return None
    min_x, min_y, max_x, max_y = box
    graph_width = max(max_x - min_x, 1.0)
    graph_height = max(max_y - min_y, 1.0)

    available_width = max(size[0] - 2 * padding, 1.0)
    available_height = max(size[1] - 2 * padding, 1.0)

    scale = min(available_width / graph_width, available_height / graph_height)
    return max(min_scale, min(scale, max_scale))
