# SPDX-License-Identifier: MIT OR Apache-2.0
# Copyright (c) 2025 John William Creighton (s243a)

"""
Tests for layout configuration.
"""

import logging
import unittest

import pytest

from mindweave.config import LayoutConfig, LayoutType, load_config, parse_layout_type


class TestParseLayoutType(unittest.TestCase):
    """Tests for parse_layout_type."""

    def test_names_and_aliases(self):
        self.assertIs(parse_layout_type("tree"), LayoutType.TREE)
        self.assertIs(parse_layout_type("Bidirectional"), LayoutType.BIDIRECTIONAL)
        self.assertIs(parse_layout_type("force-directed"), LayoutType.FORCE_DIRECTED)
        self.assertIs(parse_layout_type("force"), LayoutType.FORCE_DIRECTED)
        self.assertIs(parse_layout_type(LayoutType.TREE), LayoutType.TREE)

    def test_unknown(self):
        with self.assertRaises(ValueError):
            parse_layout_type("radial")


class TestLayoutConfig(unittest.TestCase):
    """Tests for LayoutConfig."""

    def test_defaults(self):
        config = LayoutConfig()
        self.assertIs(config.layout, LayoutType.TREE)
        self.assertEqual(config.canvas_size, (800.0, 600.0))
        self.assertTrue(config.resolve_overlaps)
        self.assertIsNone(config.expand_all_by_default)

    def test_from_dict(self):
        config = LayoutConfig.from_dict({
            "layout": "force_directed",
            "canvas_width": 1024,
            "initially_expanded_ids": [1, 2],
            "force": {"rest_length": 180},
        })
        self.assertIs(config.layout, LayoutType.FORCE_DIRECTED)
        self.assertEqual(config.canvas_size, (1024.0, 600.0))
        self.assertEqual(config.initially_expanded_ids, ["1", "2"])
        self.assertEqual(config.force, {"rest_length": 180})

    def test_unknown_keys_warn(self):
        with self.assertLogs("mindweave.config", level=logging.WARNING) as logs:
            config = LayoutConfig.from_dict({"layuot": "tree"})
        self.assertIs(config.layout, LayoutType.TREE)
        self.assertIn("layuot", logs.output[0])

    def test_to_dict_round_trips(self):
        config = LayoutConfig(layout=LayoutType.BIDIRECTIONAL, seed=3, overlap={"padding": 4})
        self.assertEqual(LayoutConfig.from_dict(config.to_dict()), config)


def test_load_config(tmp_path):
    path = tmp_path / "mindmap.yaml"
    path.write_text(
        "layout: bidirectional\n"
        "canvas_height: 768\n"
        "expand_all_by_default: false\n"
        "bidirectional:\n"
        "  horizontal_spacing: 300\n"
    )
    config = load_config(path)
    assert config.layout is LayoutType.BIDIRECTIONAL
    assert config.canvas_height == 768
    assert config.expand_all_by_default is False
    assert config.bidirectional == {"horizontal_spacing": 300}


def test_load_empty_config(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(path) == LayoutConfig()


def test_load_config_rejects_non_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- tree\n- force\n")
    with pytest.raises(ValueError):
        load_config(path)


def test_malformed_yaml_is_value_error(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("layout: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid YAML"):
        load_config(path)


class TestConfigValidation:
    """Bad values are rejected when the config is built."""

    @pytest.mark.parametrize("data", [
        {"tree": 5},
        {"force": ["repulsion", 10]},
        {"canvas_width": "wide"},
        {"canvas_height": None},
        {"seed": "abc"},
        {"seed": 1.5},
        {"initially_expanded_ids": 7},
    ])
    def test_rejects(self, data):
        with pytest.raises(ValueError):
            LayoutConfig.from_dict(data)

    def test_empty_option_block_means_defaults(self):
        config = LayoutConfig.from_dict({"tree": None, "canvas_width": "1024"})
        assert config.tree == {}
        assert config.canvas_width == 1024.0
