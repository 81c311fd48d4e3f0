# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
#
# Mind map input parsing and JSON Lines output.

"""
Mind map input parsing and JSON Lines position output.

Two input shapes are accepted:

1. Object with nodes and edges arrays:
       {"nodes": [{"id": "1", "label": "Root"}], "edges": [{"from": "1", "to": "2"}]}
2. Nested array with children:
       [{"id": "1", "label": "Root", "children": [{"id": "2", "label": "Child"}]}]

Usage:
    from mindweave.io import load_mindmap, write_positions

    nodes, edges = load_mindmap('map.json')
    write_positions(positions, sys.stdout)
"""

import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, TextIO, Tuple, Union

from .model import MindmapEdge, MindmapNode


class MindmapFormatError(ValueError):
    """Input data does not describe a mind map."""


# ============================================================================
# PARSING
# ============================================================================

def parse_mindmap(data: Any) -> Tuple[List[MindmapNode], List[MindmapEdge]]:
    """
    Build node and edge records from decoded JSON data.

    Raises:
        MindmapFormatError: If ``data`` is in neither supported shape.
    """
    nodes: List[MindmapNode] = []
    edges: List[MindmapEdge] = []

    if isinstance(data, dict) and data.get("nodes") is not None:
        raw_nodes = data["nodes"]
        raw_edges = data.get("edges") or []
        if not isinstance(raw_nodes, list) or not isinstance(raw_edges, list):
            raise MindmapFormatError("'nodes' and 'edges' must be arrays")
        for item in raw_nodes:
            nodes.append(MindmapNode.from_dict(_require_object(item, "node")))
        for item in raw_edges:
            edges.append(MindmapEdge.from_dict(_require_object(item, "edge")))
    elif isinstance(data, list):
        _parse_nested(data, None, nodes, edges)
    else:
        raise MindmapFormatError(
            "Expected an object with a 'nodes' array or a nested list of nodes"
        )

    return nodes, edges


def _require_object(item: Any, kind: str) -> Dict[str, Any]:
    if not isinstance(item, dict):
        raise MindmapFormatError(f"Each {kind} must be an object, got {type(item).__name__}")
    return item


def _parse_nested(
    items: List[Any],
    parent_id: Optional[str],
    nodes: List[MindmapNode],
    edges: List[MindmapEdge]
) -> None:
    for item in items:
        node = MindmapNode.from_dict(_require_object(item, "node"))
        nodes.append(node)
        if parent_id is not None:
            edges.append(MindmapEdge(from_id=parent_id, to_id=node.id))
        children = item.get("children")
        if isinstance(children, list):
            _parse_nested([c for c in children if isinstance(c, dict)], node.id, nodes, edges)


def parse_mindmap_json(text: str) -> Tuple[List[MindmapNode], List[MindmapEdge]]:
    """Parse mind map JSON text."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MindmapFormatError(f"Invalid JSON: {e}") from e
    return parse_mindmap(data)


def load_mindmap(path: Union[str, Path]) -> Tuple[List[MindmapNode], List[MindmapEdge]]:
    """Read and parse a mind map JSON file."""
    return parse_mindmap_json(Path(path).read_text(encoding="utf-8"))


# ============================================================================
# JSON LINES OUTPUT
# ============================================================================

@dataclass
class MindmapPosition:
    """A node position."""
    id: str
    x: float
    y: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "type": "position",
            "id": self.id,
            "x": self.x,
            "y": self.y
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'MindmapPosition':
        """Create from JSON dict."""
        return cls(id=d["id"], x=d["x"], y=d["y"])


def write_jsonl(obj: Dict[str, Any], stream: TextIO = sys.stdout) -> None:
    """Write a JSON object as a single line."""
    print(json.dumps(obj, ensure_ascii=False), file=stream)


def write_positions(
    positions: Dict[str, Tuple[float, float]],
    stream: TextIO = sys.stdout
) -> None:
    """Write positions dict as JSON Lines."""
    for node_id, (x, y) in positions.items():
        write_jsonl(MindmapPosition(id=node_id, x=x, y=y).to_dict(), stream)


def read_positions(stream: TextIO = sys.stdin) -> Iterator[MindmapPosition]:
    """Read position records from a JSON Lines stream, skipping other lines."""
    for line in stream:
        line = line.strip()
        if not line:
            continue
        try:
            obj = json.loads(line)
        except json.JSONDecodeError:
            continue
        if not isinstance(obj, dict) or obj.get("type") != "position":
            continue
        try:
            position = MindmapPosition.from_dict(obj)
        except KeyError:
            continue
        yield position


def read_positions_dict(stream: TextIO = sys.stdin) -> Dict[str, Tuple[float, float]]:
    """Read positions as dict {id: (x, y)}."""
    return {pos.id: (pos.x, pos.y) for pos in read_positions(stream)}
