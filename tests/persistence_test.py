"""Tests for NavMesh persistence."""

import json
import os
import tempfile
import unittest
import numpy as np

from trinav.builder import MeshBuilder
from trinav.connectivity import ConnectivityGraph
from trinav.errors import PersistenceError
from trinav.persistence import NAVMESH_FILE_EXTENSION, NavMeshPersistence
from trinav.query import NavMeshQuery

from mesh_fixtures import buffers_for_centers


def connected(centers):
    vertices, indices = buffers_for_centers(centers)
    navmesh = MeshBuilder().build(vertices, indices)
    ConnectivityGraph().connect(navmesh)
    return navmesh


class SaveLoadTest(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmpdir.name, "level" + NAVMESH_FILE_EXTENSION)

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_round_trip(self):
        navmesh = connected([(0, 0), (1, 0), (2, 1), (9, 9)])
        navmesh.name = "kitchen"
        NavMeshPersistence.save(navmesh, self.path)
        loaded = NavMeshPersistence.load(self.path)

        self.assertEqual(loaded.name, "kitchen")
        self.assertTrue(loaded.frozen)
        self.assertEqual(loaded.polygon_count(), navmesh.polygon_count())
        for original, restored in zip(navmesh.polygons, loaded.polygons):
            self.assertEqual(original.id, restored.id)
            np.testing.assert_allclose(original.vertices, restored.vertices)
            np.testing.assert_allclose(original.center, restored.center)
            self.assertEqual(original.connections, restored.connections)

    def test_loaded_mesh_answers_queries(self):
        navmesh = connected([(0, 0), (1, 0), (2, 0)])
        NavMeshPersistence.save(navmesh, self.path)
        loaded = NavMeshPersistence.load(self.path)

        query = NavMeshQuery(loaded)
        start = query.find_nearest_poly([0, 0, 0])
        end = query.find_nearest_poly([2, 0, 0])
        result = query.find_path(start, end, [0, 0, 0], [2, 0, 0])
        self.assertEqual(result.polygons[0], 0)
        self.assertEqual(result.polygons[-1], 2)

    def test_get_info(self):
        navmesh = connected([(0, 0), (1, 0), (5, 5)])
        NavMeshPersistence.save(navmesh, self.path)
        info = NavMeshPersistence.get_info(self.path)
        self.assertEqual(info["polygon_count"], 3)
        self.assertEqual(info["connection_count"], 2)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            NavMeshPersistence.load(self.path)


class ValidationTest(unittest.TestCase):

    def setUp(self):
        self.data = NavMeshPersistence.to_dict(connected([(0, 0), (1, 0), (5, 5)]))

    def test_unsupported_version(self):
        self.data["version"] = "2.0"
        with self.assertRaises(PersistenceError):
            NavMeshPersistence.from_dict(self.data)

    def test_asymmetric_connection(self):
        self.data["polygons"][1]["connections"] = []
        with self.assertRaises(PersistenceError):
            NavMeshPersistence.from_dict(self.data)

    def test_unknown_connection(self):
        self.data["polygons"][0]["connections"] = [1, 7]
        with self.assertRaises(PersistenceError):
            NavMeshPersistence.from_dict(self.data)

    def test_self_connection(self):
        self.data["polygons"][2]["connections"] = [2]
        with self.assertRaises(PersistenceError):
            NavMeshPersistence.from_dict(self.data)

    def test_mismatched_id(self):
        self.data["polygons"][2]["id"] = 5
        with self.assertRaises(PersistenceError):
            NavMeshPersistence.from_dict(self.data)

    def test_malformed_vertices(self):
        self.data["polygons"][0]["vertices"] = [[0, 0, 0]]
        with self.assertRaises(PersistenceError):
            NavMeshPersistence.from_dict(self.data)

    def test_survives_json(self):
        restored = NavMeshPersistence.from_dict(json.loads(json.dumps(self.data)))
        self.assertEqual(restored.connection_count(), 2)


if __name__ == "__main__":
    unittest.main()
