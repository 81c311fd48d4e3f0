# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Mind map layout optimization passes.

"""
Optimization passes run after a layout:
- Overlap removal (push apart overlapping nodes, centroid preserved)
- Centering (camera offset and zoom that frame the visible nodes)
"""

from .overlap_removal import find_overlaps, resolve_overlaps
from .centering import bounding_box, center_nodes, compute_centering_offset, fit_scale

__all__ = [
    'find_overlaps',
    'resolve_overlaps',
    'bounding_box',
    'center_nodes',
    'compute_centering_offset',
    'fit_scale',
]
