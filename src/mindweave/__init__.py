# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Mind map layout engine.

"""
Layout engine for interactive mind map viewers.

Derives the visible subgraph from per-node expand/collapse state, places
it with a tree, bidirectional or force-directed layout, removes overlaps
and computes the camera offset that centers the result.

The io module parses mind map JSON and writes JSON Lines positions.
"""

from . import layout
from . import optimize
from . import io
from .config import LayoutConfig, LayoutType, load_config
from .document import MindmapDocument
from .graph import GraphIndex, VisibleSubgraph, resolve_visibility
from .model import (
    DEFAULT_FOOTPRINT,
    UNSET_POSITION,
    MindmapEdge,
    MindmapNode,
    resolve_expanded,
)

__version__ = "0.1.0"

__all__ = [
    'layout',
    'optimize',
    'io',
    'LayoutConfig',
    'LayoutType',
    'load_config',
    'MindmapDocument',
    'GraphIndex',
    'VisibleSubgraph',
    'resolve_visibility',
    'DEFAULT_FOOTPRINT',
    'UNSET_POSITION',
    'MindmapEdge',
    'MindmapNode',
    'resolve_expanded',
]
