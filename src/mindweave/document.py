# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
"""
Mind map document: the single owner of node state.

Ties the pieces together in the order a viewer needs them:

    data change        -> GraphIndex rebuild, expansion resolution, reset
    expand / collapse  -> visibility -> footprints -> layout -> overlap removal
    animation frame    -> tick() (force-directed only)
    camera             -> centering_offset()

Every public method completes the whole pipeline before returning, so a
caller never observes a half-updated document. Calls are expected from a
single thread (a UI event loop); nothing here locks.

Usage:
    from mindweave import MindmapDocument, LayoutConfig, LayoutType
    from mindweave.io import load_mindmap

    doc = MindmapDocument(LayoutConfig(layout=LayoutType.BIDIRECTIONAL))
    doc.load(*load_mindmap('map.json'))
    doc.toggle('2')
    offset = doc.centering_offset()
"""

from typing import Any, Dict, Iterable, List, Optional, Sequence, Union
import logging

from .config import LayoutConfig, LayoutType, parse_layout_type
from .graph import GraphIndex, VisibleSubgraph, resolve_visibility
from .layout import ForceSimulation, bidirectional_layout, tree_layout
from .measure import FootprintCache, Measurer
from .model import (
    MindmapEdge, MindmapNode, Point, Size, UNSET_POSITION, ZERO_VELOCITY, resolve_expanded
)
from .optimize import center_nodes, compute_centering_offset, fit_scale, resolve_overlaps
from .transition import ExpansionTransition

logger = logging.getLogger(__name__)


class MindmapDocument:
    """Nodes, edges and derived view state for one mind map."""

    def __init__(
        self,
        config: Optional[LayoutConfig] = None,
        measurer: Optional[Measurer] = None
    ):
        self.config = config or LayoutConfig()
        self.footprints = FootprintCache(measurer)
        self.nodes: List[MindmapNode] = []
        self.edges: List[MindmapEdge] = []
        self.index = GraphIndex()
        self.visible = VisibleSubgraph()
        self.transition: Optional[ExpansionTransition] = None
        self.given_footprints: Dict[str, Size] = {}
        self.simulation = ForceSimulation(self.config.force, seed=self.config.seed)

    # ------------------------------------------------------------------
    # Data
    # ------------------------------------------------------------------

    def load(
        self,
        nodes: Iterable[MindmapNode],
        edges: Iterable[MindmapEdge]
    ) -> None:
        """Replace the data wholesale and lay it out from scratch."""
        self.nodes = list(nodes)
        self.edges = list(edges)

        expanded_ids = set(self.config.initially_expanded_ids)
        for node in self.nodes:
            node.reset_motion()
            node.is_expanded = resolve_expanded(
                node,
                self.config.expand_all_by_default,
                expanded_ids,
            )

        # Footprints present on load come from the source data (width/height)
        self.given_footprints = {
            node.id: node.footprint for node in self.nodes if node.footprint is not None
        }

        self.footprints.invalidate()
        self.index = GraphIndex.build(self.nodes, self.edges)
        self.simulation = ForceSimulation(self.config.force, seed=self.config.seed)
        self.transition = None

        logger.info("Loaded mind map: %d nodes, %d edges, %d roots",
                    len(self.nodes), len(self.edges), len(self.index.root_ids))
        self._refresh()

    @property
    def visible_nodes(self) -> List[MindmapNode]:
        return self.visible.nodes

    @property
    def visible_edges(self) -> List[MindmapEdge]:
        return self.visible.edges

    @property
    def layout_type(self) -> LayoutType:
        return self.config.layout

    @property
    def canvas_size(self):
        return self.config.canvas_size

    def node(self, node_id: str) -> Optional[MindmapNode]:
        return self.index.node_by_id.get(node_id)

    def positions(self) -> Dict[str, Point]:
        """Current positions of the visible nodes."""
        return {node.id: node.position for node in self.visible.nodes}

    # ------------------------------------------------------------------
    # Expand / collapse
    # ------------------------------------------------------------------

    def toggle(self, node_id: str) -> bool:
        """Flip a node's expansion state. Returns False for unknown ids."""
        node = self.node(node_id)
        if node is None:
            logger.debug("Toggle ignored for unknown node %r", node_id)
            return False
        self.set_expanded(node_id, not node.is_expanded)
        return True

    def set_expanded(self, node_id: str, expanded: bool) -> None:
        node = self.node(node_id)
        if node is None:
            logger.debug("Expansion change ignored for unknown node %r", node_id)
            return
        if node.is_expanded == expanded:
            return
        previous = self.visible.node_ids
        node.is_expanded = expanded
        self._refresh(previous)

    def expand_all(self) -> None:
        self._set_all(True)

    def collapse_all(self) -> None:
        self._set_all(False)

    def _set_all(self, expanded: bool) -> None:
        previous = self.visible.node_ids
        for node in self.nodes:
            node.is_expanded = expanded
        self._refresh(previous)

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def set_layout(self, layout: Union[str, LayoutType]) -> None:
        """
        Switch algorithm; velocities are cleared.

        Switching to force-directed keeps the current arrangement. When a
        visible node sits on the unplaced sentinel (the bidirectional root
        does), the whole arrangement is first moved to the canvas center so
        the simulation does not scatter that node.
        """
        self.config.layout = parse_layout_type(layout)
        for node in self.nodes:
            node.velocity = ZERO_VELOCITY
        if (self.config.layout is LayoutType.FORCE_DIRECTED and
                any(node.position == UNSET_POSITION for node in self.visible.nodes) and
                any(node.is_placed for node in self.visible.nodes)):
            center_nodes(self.visible.nodes, self.canvas_size)
        self.relayout()

    def set_canvas_size(self, width: float, height: float) -> None:
        self.config.canvas_width = width
        self.config.canvas_height = height
        self.relayout()

    def set_footprint(self, node_id: str, width: float, height: float) -> None:
        """Record an externally measured footprint and lay out again."""
        node = self.node(node_id)
        if node is None:
            return
        self.footprints.invalidate(node_id)
        node.footprint = (float(width), float(height))
        self.relayout()

    def invalidate_footprints(self, node_id: Optional[str] = None) -> None:
        """
        Forget measured footprints so they are measured again.

        Footprints that came with the source data are restored, not dropped.
        """
        self.footprints.invalidate(node_id)
        for node in self.nodes:
            if node_id is None or node.id == node_id:
                node.footprint = self.given_footprints.get(node.id)
        self.relayout()

    def relayout(self) -> None:
        """Run the active layout again on the current visible subgraph."""
        self._refresh()

    def tick(self) -> bool:
        """
        Advance the force simulation by one step.

        Returns:
            False when the active layout is not force-directed.
        """
        if self.config.layout is not LayoutType.FORCE_DIRECTED:
            return False
        self.simulation.tick(self.visible.nodes, self.visible.edges, self.canvas_size)
        if self.config.resolve_overlaps:
            resolve_overlaps(self.visible.nodes, self.config.overlap)
        return True

    def _refresh(self, previous_ids: Optional[Sequence[str]] = None) -> None:
        self.visible = resolve_visibility(self.index, self.edges)
        self.footprints.apply(self.visible.nodes, self.index.children_of)
        self._run_layout()
        if previous_ids is not None:
            self.transition = ExpansionTransition.between(
                previous_ids, self.visible, self.index.parent_of
            )

    def _run_layout(self) -> None:
        nodes, edges = self.visible.nodes, self.visible.edges
        layout = self.config.layout

        if layout is LayoutType.TREE:
            tree_layout(nodes, edges, self.canvas_size, self._layout_options(self.config.tree))
        elif layout is LayoutType.BIDIRECTIONAL:
            bidirectional_layout(nodes, edges, self.canvas_size,
                                 self._layout_options(self.config.bidirectional))
        else:
            # Advanced frame by frame through tick()
            return

        if self.config.resolve_overlaps:
            resolve_overlaps(nodes, self.config.overlap)

    def _layout_options(self, options: Dict[str, Any]) -> Dict[str, Any]:
        # Columns keep the clearance that overlap removal enforces
        merged = dict(options)
        merged.setdefault('column_padding', self.config.overlap.get('padding', 10.0))
        return merged

    # ------------------------------------------------------------------
    # Camera and hit testing
    # ------------------------------------------------------------------

    def centering_offset(self) -> Optional[Point]:
        return compute_centering_offset(self.visible.nodes, self.canvas_size)

    def fit_scale(self, **options) -> Optional[float]:
        return fit_scale(self.visible.nodes, self.canvas_size, options)

    def node_at(self, point: Point) -> Optional[MindmapNode]:
        """Topmost visible node whose footprint contains ``point``."""
        for node in reversed(self.visible.nodes):
            if node.contains(point):
                return node
        return None
