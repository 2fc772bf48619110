"""Tests for NavMeshConfig and the navigation settings file."""

import json
import os
import tempfile
import unittest

from trinav.errors import ConfigError
from trinav.settings import load_config, save_config, settings_path
from trinav.types import NavMeshConfig


class NavMeshConfigTest(unittest.TestCase):

    def test_defaults(self):
        config = NavMeshConfig()
        self.assertAlmostEqual(config.connection_threshold, 2.0)
        self.assertEqual(config.spatial_index_min_polygons, 256)
        self.assertEqual(config.debug_polygon_logs, 3)
        self.assertEqual(config.recast, {})

    def test_recast_parameters_collected(self):
        config = NavMeshConfig.from_dict({
            "cs": 0.3,
            "walkableSlopeAngle": 45,
            "connection_threshold": 1.5,
        })
        self.assertAlmostEqual(config.connection_threshold, 1.5)
        self.assertEqual(config.recast, {"cs": 0.3, "walkableSlopeAngle": 45})

    def test_round_trip(self):
        config = NavMeshConfig(connection_threshold=3.0, recast={"ch": 0.2})
        self.assertEqual(NavMeshConfig.from_dict(config.to_dict()), config)

    def test_invalid_values(self):
        for data in (
            {"connection_threshold": 0},
            {"connection_threshold": "far"},
            {"connection_threshold": float("inf")},
            {"spatial_index_min_polygons": -1},
            {"debug_polygon_logs": 1.5},
        ):
            with self.assertRaises(ConfigError):
                NavMeshConfig.from_dict(data)

    def test_not_a_mapping(self):
        with self.assertRaises(ConfigError):
            NavMeshConfig.coerce([1, 2, 3])

    def test_coerce(self):
        self.assertEqual(NavMeshConfig.coerce(None), NavMeshConfig())
        config = NavMeshConfig(debug_polygon_logs=0)
        self.assertIs(NavMeshConfig.coerce(config), config)


class SettingsFileTest(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.path = settings_path(self.tmpdir.name)

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_missing_file_gives_defaults(self):
        self.assertEqual(load_config(self.path), NavMeshConfig())

    def test_save_and_load(self):
        config = NavMeshConfig(connection_threshold=1.25, spatial_index_min_polygons=0)
        save_config(config, self.path)
        self.assertTrue(self.path.exists())
        self.assertEqual(load_config(self.path), config)

    def test_invalid_json(self):
        os.makedirs(self.path.parent)
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("{not json")
        with self.assertRaises(ConfigError):
            load_config(self.path)

    def test_invalid_value_in_file(self):
        os.makedirs(self.path.parent)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({"connection_threshold": -2}, f)
        with self.assertRaises(ConfigError):
            load_config(self.path)


if __name__ == "__main__":
    unittest.main()
