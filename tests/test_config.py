"""Tests for config loading and input sanitization.

Malformed or out-of-range values must fall back to defaults rather than
break startup; the file itself is only ever read.
"""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from gview import config
from gview.config import GviewConfig, config_from_data, load_config, load_config_data


class ConfigLoadTests(unittest.TestCase):
    def test_missing_file_gives_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            self.assertEqual(load_config_data(path), {})
            self.assertEqual(load_config(path), GviewConfig())
            self.assertFalse(path.exists())

    def test_default_path_is_patchable(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text(json.dumps({"theme": "ocean"}), encoding="utf-8")
            with mock.patch("gview.config.CONFIG_PATH", path):
                self.assertEqual(config.load_config().theme, "ocean")

    def test_malformed_json_gives_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text("{not json", encoding="utf-8")
            self.assertEqual(load_config(path), GviewConfig())
            path.write_text("[1, 2]", encoding="utf-8")
            self.assertEqual(load_config(path), GviewConfig())

    def test_values_are_read(self) -> None:
        data = {
            "left_pane_percent": 25,
            "left_pane_min_percent": 10,
            "left_pane_max_percent": 60,
            "left_pane_step_percent": 2,
            "tick_ms": 100,
            "status_message_seconds": 1.5,
            "theme": "plain",
            "style": "friendly",
            "log_file": "/tmp/gview.log",
        }
        self.assertEqual(
            config_from_data(data),
            GviewConfig(
                left_pane_percent=25,
                left_pane_min_percent=10,
                left_pane_max_percent=60,
                left_pane_step_percent=2,
                tick_ms=100,
                status_message_seconds=1.5,
                theme="plain",
                style="friendly",
                log_file="/tmp/gview.log",
            ),
        )

    def test_invalid_values_fall_back(self) -> None:
        cfg = config_from_data(
            {
                "left_pane_percent": True,
                "tick_ms": 0,
                "status_message_seconds": -1,
                "theme": "",
                "style": 42,
                "left_pane_step_percent": "5",
            }
        )
        self.assertEqual(cfg, GviewConfig())

    def test_inverted_bounds_fall_back_to_defaults(self) -> None:
        cfg = config_from_data({"left_pane_min_percent": 80, "left_pane_max_percent": 20})
        self.assertEqual((cfg.left_pane_min_percent, cfg.left_pane_max_percent), (15, 70))

    def test_initial_percent_is_clamped_into_bounds(self) -> None:
        self.assertEqual(config_from_data({"left_pane_percent": 90}).left_pane_percent, 70)
        self.assertEqual(config_from_data({"left_pane_percent": 5}).left_pane_percent, 15)

    def test_overrides_skip_none(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text(json.dumps({"theme": "ocean", "style": "friendly"}), encoding="utf-8")
            cfg = load_config(path, theme="plain", style=None, unknown="x")
        self.assertEqual((cfg.theme, cfg.style), ("plain", "friendly"))


if __name__ == "__main__":
    unittest.main()
