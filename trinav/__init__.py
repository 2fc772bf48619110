"""
Navigation mesh from raw triangle geometry.

Pipeline:
1. MeshBuilder turns vertex and index buffers into triangle polygons
2. ConnectivityGraph links polygons whose centers are close on the XZ plane
3. PathFinder runs A* over the polygon links
4. NavMeshQuery finds the nearest polygon to a point and turns polygon
   corridors into waypoints
"""

from trinav.errors import (
    ConfigError,
    InputError,
    NavMeshError,
    NavMeshFrozenError,
    PersistenceError,
)
from trinav.log import CallbackLogSink, LoggingSink, LogLevel, NullLogSink
from trinav.types import NavMesh, NavMeshConfig, PathResult, PathStatus, Polygon, QueryFilter
from trinav.builder import MeshBuilder
from trinav.connectivity import ConnectivityGraph
from trinav.pathfinding import PathFinder
from trinav.query import NavMeshQuery
from trinav.persistence import NavMeshPersistence
from trinav.context import NavMeshContext

__all__ = [
    "ConfigError",
    "InputError",
    "NavMeshError",
    "NavMeshFrozenError",
    "PersistenceError",
    "CallbackLogSink",
    "LoggingSink",
    "LogLevel",
    "NullLogSink",
    "NavMesh",
    "NavMeshConfig",
    "PathResult",
    "PathStatus",
    "Polygon",
    "QueryFilter",
    "MeshBuilder",
    "ConnectivityGraph",
    "PathFinder",
    "NavMeshQuery",
    "NavMeshPersistence",
    "NavMeshContext",
]
