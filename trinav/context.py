"""
Caller owned entry point tying the builder, connectivity and queries together.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

from trinav.builder import MeshBuilder
from trinav.connectivity import ConnectivityGraph
from trinav.log import Log, SinkLike
from trinav.persistence import NavMeshPersistence
from trinav.query import NavMeshQuery
from trinav.types import NavMesh, NavMeshConfig, QueryFilter


class NavMeshContext:
    """
    Shared log sink and default config for building and querying meshes.

    Holds no meshes itself; several contexts can coexist.
    """

    def __init__(self, log_sink: SinkLike = None, config=None):
        self.log = Log(log_sink)
        self.config = NavMeshConfig.coerce(config)

    def build(self, vertices, indices, config=None) -> NavMesh:
        """Build polygons from triangle buffers and connect them. The result is frozen."""
        config = self.config if config is None else NavMeshConfig.coerce(config)
        navmesh = MeshBuilder(self.log.sink).build(vertices, indices, config)
        ConnectivityGraph(self.log.sink, config).connect(navmesh)
        return navmesh

    def create_query(self, navmesh: NavMesh) -> NavMeshQuery:
        return NavMeshQuery(navmesh, self.log.sink)

    def query_filter(self) -> QueryFilter:
        return QueryFilter()

    def save(self, navmesh: NavMesh, path: Union[str, Path]) -> None:
        NavMeshPersistence.save(navmesh, path)
        self.log.info(f"Saved navigation mesh with {navmesh.polygon_count()} polygons to {path}")

    def load(self, path: Union[str, Path]) -> NavMesh:
        navmesh = NavMeshPersistence.load(path)
        self.log.info(f"Loaded navigation mesh with {navmesh.polygon_count()} polygons from {path}")
        return navmesh
