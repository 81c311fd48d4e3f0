# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
"""
Layout configuration.

Algorithms take plain ``options`` dicts; ``LayoutConfig`` groups the
document-level settings together with one options dict per algorithm
and can be read from YAML.

Usage:
    from mindweave.config import load_config

    config = load_config('mindmap.yaml')
    doc = MindmapDocument(config)

Example YAML:
    layout: bidirectional
    canvas_width: 1024
    canvas_height: 768
    expand_all_by_default: false
    initially_expanded_ids: ["1", "2"]
    force:
      rest_length: 180
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import logging

import yaml

from .model import Size

logger = logging.getLogger(__name__)


class LayoutType(Enum):
    """Available layout algorithms."""
    TREE = "tree"
    BIDIRECTIONAL = "bidirectional"
    FORCE_DIRECTED = "force_directed"


_ALIASES = {
    "force": LayoutType.FORCE_DIRECTED,
    "forcedirected": LayoutType.FORCE_DIRECTED,
}


def parse_layout_type(value: Union[str, LayoutType]) -> LayoutType:
    """Accept a LayoutType or its name ('tree', 'force-directed', ...)."""
    if isinstance(value, LayoutType):
        return value
    key = str(value).strip().lower().replace("-", "_")
    if key in _ALIASES:
        return _ALIASES[key]
    try:
        return LayoutType(key)
    except ValueError:
        raise ValueError(
            f"Unknown layout type: {value!r} "
            f"(expected one of {[t.value for t in LayoutType]})"
        ) from None


def _as_float(name: str, value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a number, got {value!r}") from None


@dataclass
class LayoutConfig:
    """Document-level layout settings."""
    layout: LayoutType = LayoutType.TREE
    canvas_width: float = 800.0
    canvas_height: float = 600.0
    resolve_overlaps: bool = True
    expand_all_by_default: Optional[bool] = None
    initially_expanded_ids: List[str] = field(default_factory=list)
    seed: Optional[int] = None

    # Per-algorithm options, passed straight through
    tree: Dict[str, Any] = field(default_factory=dict)
    bidirectional: Dict[str, Any] = field(default_factory=dict)
    force: Dict[str, Any] = field(default_factory=dict)
    overlap: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.layout = parse_layout_type(self.layout)
        self.canvas_width = _as_float("canvas_width", self.canvas_width)
        self.canvas_height = _as_float("canvas_height", self.canvas_height)

        if not isinstance(self.initially_expanded_ids, (list, tuple, set)):
            raise ValueError("initially_expanded_ids must be a list of node ids")
        self.initially_expanded_ids = [str(i) for i in self.initially_expanded_ids]

        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            raise ValueError(f"seed must be an integer, got {self.seed!r}")

        # An empty YAML block (`tree:`) loads as None
        for name in ("tree", "bidirectional", "force", "overlap"):
            options = getattr(self, name)
            if options is None:
                setattr(self, name, {})
            elif not isinstance(options, dict):
                raise ValueError(
                    f"'{name}' options must be a mapping, got {type(options).__name__}"
                )

    @property
    def canvas_size(self) -> Size:
        return (float(self.canvas_width), float(self.canvas_height))

    @classmethod
    def from_dict(cls, d: Optional[Dict[str, Any]]) -> 'LayoutConfig':
        """Create from a plain dict, ignoring unknown keys."""
        d = d or {}
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(d) - known)
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
        return cls(**{k: v for k, v in d.items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a YAML/JSON-serializable dict."""
        return {
            "layout": self.layout.value,
            "canvas_width": self.canvas_width,
            "canvas_height": self.canvas_height,
            "resolve_overlaps": self.resolve_overlaps,
            "expand_all_by_default": self.expand_all_by_default,
            "initially_expanded_ids": list(self.initially_expanded_ids),
            "seed": self.seed,
            "tree": dict(self.tree),
            "bidirectional": dict(self.bidirectional),
            "force": dict(self.force),
            "overlap": dict(self.overlap),
        }


def load_config(path: Union[str, Path]) -> LayoutConfig:
    """Read a LayoutConfig from a YAML file (an empty file gives defaults)."""
    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config {path}: {e}") from e
    if data is not None and not isinstance(data, dict):
        raise ValueError(f"Config {path} must be a mapping, got {type(data).__name__}")
    return LayoutConfig.from_dict(data)
