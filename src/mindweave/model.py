# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Mind map node and edge records.

"""
Node and edge records shared by every layout and optimization pass.

Nodes are plain mutable records: layouts write ``position`` (and the
force simulation ``velocity``) in place, overlap removal and centering
read them back. Edges are immutable and compare structurally.
"""

from dataclasses import dataclass, field
from typing import Any, Collection, Dict, Iterable, List, Optional, Tuple

Point = Tuple[float, float]
Size = Tuple[float, float]

# A node sitting exactly at the origin has never been placed.
UNSET_POSITION: Point = (0.0, 0.0)
ZERO_VELOCITY: Point = (0.0, 0.0)
DEFAULT_FOOTPRINT: Size = (100.0, 60.0)


@dataclass
class MindmapNode:
    """A mind map node."""
    id: str
    label: Any = ""
    children_ids: List[str] = field(default_factory=list)
    position: Point = UNSET_POSITION
    velocity: Point = ZERO_VELOCITY
    footprint: Optional[Size] = None
    is_expanded: bool = True
    initial_expanded: Optional[bool] = None
    color: Optional[str] = None

    @property
    def size(self) -> Size:
        """Measured footprint, or the default when not measured yet."""
        return self.footprint if self.footprint is not None else DEFAULT_FOOTPRINT

    @property
    def width(self) -> float:
        return self.size[0]

    @property
    def height(self) -> float:
        return self.size[1]

    @property
    def is_placed(self) -> bool:
        return self.position != UNSET_POSITION

    def contains(self, point: Point) -> bool:
        """Check whether a canvas point falls inside the node's footprint."""
        half_w, half_h = self.width / 2, self.height / 2
        return (abs(point[0] - self.position[0]) <= half_w and
                abs(point[1] - self.position[1]) <= half_h)

    def reset_motion(self) -> None:
        """Forget placement and velocity (used on data reload)."""
        self.position = UNSET_POSITION
        self.velocity = ZERO_VELOCITY

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        d = {
            "id": self.id,
            "label": self.label,
            "children": list(self.children_ids),
            "x": self.position[0],
            "y": self.position[1],
            "isExpanded": self.is_expanded,
        }
        if self.color is not None:
            d["color"] = self.color
        if self.footprint is not None:
            d["width"], d["height"] = self.footprint
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'MindmapNode':
        """Create from a source JSON dict.

        Accepts ``name`` as a fallback for ``label``; ``children`` may hold
        ids or nested node dicts. The expansion override is taken from
        ``isExpanded``, ``expanded`` or ``collapsed`` in that order.
        """
        label = d.get("label")
        if label is None:
            label = d.get("name", "")

        children_ids = []
        for child in d.get("children") or []:
            if isinstance(child, dict):
                children_ids.append(str(child.get("id", "")))
            else:
                children_ids.append(str(child))

        footprint = None
        if "width" in d and "height" in d:
            footprint = (float(d["width"]), float(d["height"]))

        override = expansion_override(d)
        return cls(
            id=str(d.get("id", "")),
            label=label,
            children_ids=children_ids,
            footprint=footprint,
            initial_expanded=override,
            is_expanded=True if override is None else override,
            color=d.get("color"),
        )


@dataclass(frozen=True)
class MindmapEdge:
    """A directed edge between two node ids."""
    from_id: str
    to_id: str

    @property
    def edge_id(self) -> str:
        return f"{self.from_id}->{self.to_id}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {"from": self.from_id, "to": self.to_id}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'MindmapEdge':
        """Create from JSON dict."""
        from_id = d.get("from")
        to_id = d.get("to")
        return cls(
            from_id="" if from_id is None else str(from_id),
            to_id="" if to_id is None else str(to_id),
        )


def expansion_override(d: Dict[str, Any]) -> Optional[bool]:
    """Read the per-node expansion flag from source JSON, if any."""
    if "isExpanded" in d:
        return d["isExpanded"] is True
    if "expanded" in d:
        return d["expanded"] is True
    if "collapsed" in d:
        return d["collapsed"] is not True
    return None


def resolve_expanded(
    node: MindmapNode,
    expand_all_by_default: Optional[bool] = None,
    initially_expanded_ids: Collection[str] = ()
) -> bool:
    """
    Resolve a node's initial expansion state.

    Precedence: the node's own override, then membership in
    ``initially_expanded_ids``, then the global default, then expanded.
    Callers resolving many nodes should pass the ids as a set.
    """
    if node.initial_expanded is not None:
        return node.initial_expanded
    if node.id in initially_expanded_ids:
        return True
    if expand_all_by_default is not None:
        return expand_all_by_default
    return True


def centroid(nodes: Iterable[MindmapNode]) -> Optional[Point]:
    """Arithmetic mean position of a node set."""
    xs = []
    ys = []
    for node in nodes:
        xs.append(node.position[0])
        ys.append(node.position[1])
    if not xs:
        return None
    return (sum(xs) / len(xs), sum(ys) / len(ys))


def translate(nodes: Iterable[MindmapNode], offset: Point) -> None:
    """Shift every node's position by ``offset`` in place."""
    dx, dy = offset
    for node in nodes:
        node.position = (node.position[0] + dx, node.position[1] + dy)
