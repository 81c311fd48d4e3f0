# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Force-directed layout step with NumPy acceleration.

"""
Force-directed layout using a spring-electric model.

Unlike the tree layouts this is a single relaxation step meant to be
called once per animation frame: positions and velocities live on the
nodes and carry over between ticks. Every node repels every other node
with strength ``repulsion / d^2``; each edge acts as a spring pulling its
endpoints toward ``rest_length``. Forces for a tick are computed from
one snapshot of positions, so the result does not depend on node order.
"""

from typing import Any, Dict, Optional, Sequence
import logging

import numpy as np

from ..model import MindmapEdge, MindmapNode, Point, Size

logger = logging.getLogger(__name__)


def _options(options: Optional[Dict[str, Any]]) -> Dict[str, float]:
    options = options or {}
    return {
        'repulsion': options.get('repulsion', 5000.0),
        'spring_k': options.get('spring_k', 0.1),
        'damping': options.get('damping', 0.8),
        'rest_length': options.get('rest_length', 150.0),
        'min_distance': options.get('min_distance', 1.0),
    }


def place_unset(
    nodes: Sequence[MindmapNode],
    size: Size,
    rng: np.random.Generator
) -> int:
    """Give every never-placed node a uniform random spot on the canvas."""
    placed = 0
    for node in nodes:
        if not node.is_placed:
            node.position = (float(rng.uniform(0.0, size[0])),
                             float(rng.uniform(0.0, size[1])))
            placed += 1
    return placed


def force_directed_tick(
    nodes: Sequence[MindmapNode],
    edges: Sequence[MindmapEdge],
    size: Size = (800.0, 600.0),
    options: Optional[Dict[str, Any]] = None,
    rng: Optional[np.random.Generator] = None
) -> Dict[str, Point]:
    """
    Advance the simulation by one step, mutating positions and velocities.

    Args:
        nodes: Nodes taking part in the simulation.
        edges: Springs; edges with an endpoint outside ``nodes`` are skipped.
        size: Canvas (width, height) used to seed unplaced nodes.
        options: Optional parameters:
            - repulsion: Repulsion strength (default: 5000)
            - spring_k: Spring constant (default: 0.1)
            - damping: Velocity damping per tick (default: 0.8)
            - rest_length: Target edge length (default: 150)
            - min_distance: Distance floor before dividing (default: 1.0)
        rng: Random generator for initial placement.

    Returns:
        Dictionary mapping node IDs to (x, y) positions.
    """
    opts = _options(options)
    if not nodes:
        return {}
    if rng is None:
        rng = np.random.default_rng()

    place_unset(nodes, size, rng)

    n = len(nodes)
    id_to_idx = {node.id: i for i, node in enumerate(nodes)}
    positions = np.array([node.position for node in nodes], dtype=float)
    velocities = np.array([node.velocity for node in nodes], dtype=float)

    # Repulsion between all pairs
    diff = positions[:, np.newaxis, :] - positions[np.newaxis, :, :]  # (n, n, 2)
    dist = np.sqrt(np.sum(diff ** 2, axis=2))
    dist = np.maximum(dist, opts['min_distance'])
    strength = opts['repulsion'] / (dist ** 2)
    np.fill_diagonal(strength, 0.0)
    forces = np.sum(diff / dist[:, :, np.newaxis] * strength[:, :, np.newaxis], axis=1)

    # Springs along edges
    src = []
    dst = []
    for edge in edges:
        i = id_to_idx.get(edge.from_id)
        j = id_to_idx.get(edge.to_id)
        if i is None or j is None or i == j:
            continue
        src.append(i)
        dst.append(j)

    if src:
        src_idx = np.array(src)
        dst_idx = np.array(dst)
        delta = positions[dst_idx] - positions[src_idx]
        length = np.maximum(np.sqrt(np.sum(delta ** 2, axis=1)), opts['min_distance'])
        pull = (length - opts['rest_length']) * opts['spring_k']
        spring = delta / length[:, np.newaxis] * pull[:, np.newaxis]
        np.add.at(forces, src_idx, spring)
        np.add.at(forces, dst_idx, -spring)

    velocities = (velocities + forces) * opts['damping']
    positions = positions + velocities

    for i, node in enumerate(nodes):
        node.velocity = (float(velocities[i, 0]), float(velocities[i, 1]))
        node.position = (float(positions[i, 0]), float(positions[i, 1]))

    return {node.id: node.position for node in nodes}


def kinetic_energy(nodes: Sequence[MindmapNode]) -> float:
    """Sum of squared speeds; callers use it to decide when to stop ticking."""
    return float(sum(vx * vx + vy * vy for vx, vy in (n.velocity for n in nodes)))


class ForceSimulation:
    """
    Stateful driver for repeated ticks.

    Holds the options and the random generator so successive ticks are
    reproducible for a given seed. Ticks must be applied one at a time in
    order; there is no internal scheduler.
    """

    def __init__(
        self,
        options: Optional[Dict[str, Any]] = None,
        seed: Optional[int] = None
    ):
        self.options = dict(options or {})
        self.rng = np.random.default_rng(seed)
        self.ticks = 0

    def tick(
        self,
        nodes: Sequence[MindmapNode],
        edges: Sequence[MindmapEdge],
        size: Size = (800.0, 600.0)
    ) -> Dict[str, Point]:
        self.ticks += 1
        return force_directed_tick(nodes, edges, size, self.options, self.rng)

    def run(
        self,
        nodes: Sequence[MindmapNode],
        edges: Sequence[MindmapEdge],
        size: Size = (800.0, 600.0),
        ticks: int = 300,
        tolerance: Optional[float] = None
    ) -> int:
        """
        Apply up to ``ticks`` steps synchronously.

        Stops early once kinetic energy drops below ``tolerance``.

        Returns:
            Number of ticks applied.
        """
        for step in range(ticks):
            self.tick(nodes, edges, size)
            if tolerance is not None and kinetic_energy(nodes) < tolerance:
                logger.debug("Simulation settled after %d ticks", step + 1)
                return step + 1
        return ticks
