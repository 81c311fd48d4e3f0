# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Mind map layout algorithms.

"""
Layout algorithms for mind map visualization.

Provides:
- Tree layout (parent left, children right)
- Bidirectional layout (root centered, children split left and right)
- Force-directed layout (spring-electric model, one tick per call)
"""

from .tree import tree_layout
from .bidirectional import bidirectional_layout, split_sides
from .force_directed import (
    ForceSimulation,
    force_directed_tick,
    kinetic_energy,
    place_unset,
)
from .forest import Forest, build_forest, measure_extents

__all__ = [
    'tree_layout',
    'bidirectional_layout',
    'split_sides',
    'ForceSimulation',
    'force_directed_tick',
    'kinetic_energy',
    'place_unset',
    'Forest',
    'build_forest',
    'measure_extents',
]
