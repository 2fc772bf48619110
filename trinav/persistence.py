"""
Saving and loading NavMesh files.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Union

import numpy as np

from trinav.errors import PersistenceError
from trinav.types import NavMesh, Polygon


NAVMESH_FILE_EXTENSION = ".navmesh"
NAVMESH_FORMAT_VERSION = "1.0"


class NavMeshPersistence:
    """
    Save and load a NavMesh as a .navmesh file.

    The format is JSON: per polygon its corners, center and connection ids.
    """

    @staticmethod
    def to_dict(navmesh: NavMesh) -> dict:
        return {
            "version": NAVMESH_FORMAT_VERSION,
            "name": navmesh.name,
            "frozen": navmesh.frozen,
            "polygons": [
                {
                    "id": polygon.id,
                    "vertices": polygon.vertices.tolist(),
                    "center": polygon.center.tolist(),
                    "connections": list(polygon.connections),
                }
                for polygon in navmesh.polygons
            ],
        }

    @staticmethod
    def from_dict(data: dict) -> NavMesh:
        """
        Rebuild a NavMesh from ``to_dict`` output.

        Raises:
            PersistenceError: Unsupported version, mismatched ids or
                inconsistent adjacency.
        """
        version = str(data.get("version", ""))
        if not version.startswith("1."):
            raise PersistenceError(f"Unsupported navmesh format version: {version}")

        navmesh = NavMesh(name=data.get("name", ""))
        records = data.get("polygons", [])

        for index, poly_data in enumerate(records):
            stored_id = poly_data.get("id", index)
            if stored_id != index:
                raise PersistenceError(f"Polygon at position {index} has id {stored_id}")
            try:
                polygon = Polygon(
                    id=index,
                    vertices=np.array(poly_data["vertices"], dtype=np.float64).reshape(3, 3),
                    center=np.array(poly_data["center"], dtype=np.float64).reshape(3),
                    connections=[int(c) for c in poly_data.get("connections", [])],
                )
            except (KeyError, TypeError, ValueError) as e:
                raise PersistenceError(f"Malformed polygon {index}: {e}") from e
            navmesh.polygons.append(polygon)

        count = len(navmesh.polygons)
        links = set()
        for polygon in navmesh.polygons:
            if len(set(polygon.connections)) != len(polygon.connections):
                raise PersistenceError(f"Polygon {polygon.id} lists a connection twice")
            for other in polygon.connections:
                if not 0 <= other < count:
                    raise PersistenceError(f"Polygon {polygon.id} connects to unknown polygon {other}")
                if other == polygon.id:
                    raise PersistenceError(f"Polygon {polygon.id} connects to itself")
                links.add((polygon.id, other))
            polygon.connections.sort()

        for a, b in links:
            if (b, a) not in links:
                raise PersistenceError(f"Connection {a} -> {b} has no reverse link")

        navmesh.frozen = bool(data.get("frozen", False))
        return navmesh

    @staticmethod
    def save(navmesh: NavMesh, path: Union[str, Path]) -> None:
        """
        Save NavMesh to a file.

        Args:
            navmesh: NavMesh to save.
            path: Target file (.navmesh).
        """
        path = Path(path)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(NavMeshPersistence.to_dict(navmesh), f, indent=2)

    @staticmethod
    def load(path: Union[str, Path]) -> NavMesh:
        """
        Load NavMesh from a file.

        Raises:
            PersistenceError: The stored data is unsupported or inconsistent.
            FileNotFoundError: The file does not exist.
        """
        path = Path(path)
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return NavMeshPersistence.from_dict(data)

    @staticmethod
    def get_info(path: Union[str, Path]) -> dict:
        """
        Summary of a navmesh file without building polygons.

        Returns:
            Dict with name, polygon_count and connection_count.
        """
        path = Path(path)
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)

        polygons = data.get("polygons", [])
        return {
            "name": data.get("name", ""),
            "polygon_count": len(polygons),
            "connection_count": sum(len(p.get("connections", [])) for p in polygons),
        }
