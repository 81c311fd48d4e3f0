# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)
"""
Command line entry point.

Lays out a mind map JSON file and writes positions as JSON Lines.

Usage:
    mindweave layout map.json --layout bidirectional --center
    mindweave layout map.json --layout force_directed --ticks 500 --seed 7
    python -m mindweave layout map.json --collapse 2 --collapse 5
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import LayoutConfig, LayoutType, load_config, parse_layout_type
from .document import MindmapDocument
from .io import load_mindmap, write_positions
from .optimize import center_nodes

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mindweave",
        description="Compute mind map layouts"
    )
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    layout = subparsers.add_parser("layout", help="Lay out a mind map JSON file")
    layout.add_argument("input", help="Mind map JSON file")
    layout.add_argument("--config", help="YAML layout configuration")
    layout.add_argument("--layout", type=parse_layout_type,
                        help="tree, bidirectional or force_directed")
    layout.add_argument("--width", type=float, help="Canvas width")
    layout.add_argument("--height", type=float, help="Canvas height")
    layout.add_argument("--ticks", type=int, default=300,
                        help="Simulation steps for force-directed layout (default: 300)")
    layout.add_argument("--seed", type=int, help="Random seed for force-directed layout")
    layout.add_argument("--no-overlap", action="store_true",
                        help="Skip the overlap removal pass")
    layout.add_argument("--collapse", action="append", default=[], metavar="ID",
                        help="Collapse a node before layout (repeatable)")
    layout.add_argument("--center", action="store_true",
                        help="Translate positions so the map is centered on the canvas")
    return parser


def _config_from_args(args: argparse.Namespace) -> LayoutConfig:
    config = load_config(args.config) if args.config else LayoutConfig()
    if args.layout is not None:
        config.layout = args.layout
    if args.width is not None:
        config.canvas_width = args.width
    if args.height is not None:
        config.canvas_height = args.height
    if args.seed is not None:
        config.seed = args.seed
    if args.no_overlap:
        config.resolve_overlaps = False
    return config


def run_layout(args: argparse.Namespace) -> int:
    try:
        config = _config_from_args(args)
        nodes, edges = load_mindmap(args.input)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    doc = MindmapDocument(config)
    doc.load(nodes, edges)
    for node_id in args.collapse:
        doc.set_expanded(node_id, False)

    if config.layout is LayoutType.FORCE_DIRECTED:
        for _ in range(args.ticks):
            doc.tick()

    if args.center:
        center_nodes(doc.visible_nodes, doc.canvas_size)

    logger.debug("Writing %d positions", len(doc.visible_nodes))
    write_positions(doc.positions(), sys.stdout)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s: %(message)s',
        stream=sys.stderr,
    )

    if args.command == "layout":
        return run_layout(args)
    parser.error(f"Unknown command: {args.command}")
    return 2


if __name__ == "__main__":
    sys.exit(main())
