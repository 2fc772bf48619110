"""
Base data structures for the navigation mesh.

Polygons live in a flat arena (``NavMesh.polygons``) and refer to each other
by integer id, so the mesh holds no reference cycles and serialises as is.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Iterator, Optional

import numpy as np

from trinav.errors import ConfigError, NavMeshFrozenError
from trinav.geometry import path_length


@dataclass
class NavMeshConfig:
    """Configuration for building a NavMesh."""

    connection_threshold: float = 2.0
    """Planar centroid distance below which two polygons are connected."""

    spatial_index_min_polygons: int = 256
    """Polygon count from which connectivity uses a kd-tree. 0 disables it."""

    debug_polygon_logs: int = 3
    """How many of the first created polygons are logged at DEBUG."""

    recast: dict[str, Any] = field(default_factory=dict)
    """Recast-style build parameters (cs, ch, walkableSlopeAngle, ...). Reserved."""

    def validate(self) -> "NavMeshConfig":
        threshold = self.connection_threshold
        if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
            raise ConfigError(f"connection_threshold must be a number, got {threshold!r}")
        if not math.isfinite(threshold) or threshold <= 0:
            raise ConfigError(f"connection_threshold must be finite and positive, got {threshold}")
        for name in ("spatial_index_min_polygons", "debug_polygon_logs"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ConfigError(f"{name} must be a non-negative integer, got {value!r}")
        if not isinstance(self.recast, dict):
            raise ConfigError(f"recast must be a mapping, got {type(self.recast).__name__}")
        return self

    def to_dict(self) -> dict:
        return {
            "connection_threshold": self.connection_threshold,
            "spatial_index_min_polygons": self.spatial_index_min_polygons,
            "debug_polygon_logs": self.debug_polygon_logs,
            "recast": dict(self.recast),
        }

    @staticmethod
    def from_dict(data: dict) -> "NavMeshConfig":
        """
        Build a config from a mapping.

        Unknown keys are treated as Recast parameters, so the flat parameter
        dict of a Recast-style caller is accepted unchanged.
        """
        if not isinstance(data, dict):
            raise ConfigError(f"Config must be a mapping, got {type(data).__name__}")
        known = {f.name for f in fields(NavMeshConfig)}
        kwargs = {k: v for k, v in data.items() if k in known}
        extra = {k: v for k, v in data.items() if k not in known}
        recast = dict(kwargs.pop("recast", None) or {})
        recast.update(extra)
        return NavMeshConfig(recast=recast, **kwargs).validate()

    @staticmethod
    def coerce(config) -> "NavMeshConfig":
        """Accept None, a NavMeshConfig or a dict."""
        if config is None:
            return NavMeshConfig()
        if isinstance(config, NavMeshConfig):
            return config.validate()
        return NavMeshConfig.from_dict(config)


@dataclass
class Polygon:
    """
    Triangular cell of the navigation mesh.

    ``id`` is the creation index inside the owning mesh and never changes.
    ``connections`` holds ids of neighbouring polygons in ascending order.
    """

    id: int
    vertices: np.ndarray
    """Corners in world coordinates, shape (3, 3)."""

    center: np.ndarray
    """Arithmetic mean of the corners, shape (3,)."""

    connections: list[int] = field(default_factory=list)

    def __eq__(self, other):
        if not isinstance(other, Polygon):
            return NotImplemented
        return (
            self.id == other.id
            and np.array_equal(self.vertices, other.vertices)
            and self.connections == other.connections
        )


@dataclass(eq=False)
class NavMesh:
    """
    Navigation mesh.

    Polygons plus their adjacency. Built once, connected once, then frozen
    and only read.
    """

    polygons: list[Polygon] = field(default_factory=list)
    name: str = ""
    frozen: bool = False

    def polygon_count(self) -> int:
        return len(self.polygons)

    def connection_count(self) -> int:
        """Total length of all connection lists (each link counted twice)."""
        return sum(len(p.connections) for p in self.polygons)

    def __len__(self) -> int:
        return len(self.polygons)

    def __iter__(self) -> Iterator[Polygon]:
        return iter(self.polygons)

    def __getitem__(self, poly_id: int) -> Polygon:
        return self.polygons[poly_id]

    def centers(self) -> np.ndarray:
        """All polygon centers as a (N, 3) array."""
        if not self.polygons:
            return np.zeros((0, 3), dtype=np.float64)
        return np.stack([p.center for p in self.polygons])

    def neighbors(self, polygon: Polygon) -> list[Polygon]:
        return [self.polygons[i] for i in polygon.connections]

    def owns(self, polygon: Polygon) -> bool:
        return 0 <= polygon.id < len(self.polygons) and self.polygons[polygon.id] is polygon

    def add_polygon(self, vertices, center: Optional[np.ndarray] = None) -> Polygon:
        """Append a triangle. The id is the current polygon count."""
        if self.frozen:
            raise NavMeshFrozenError("Cannot add polygons to a frozen NavMesh")
        verts = np.array(vertices, dtype=np.float64).reshape(3, 3)
        if center is None:
            center = verts.sum(axis=0) / 3.0
        polygon = Polygon(
            id=len(self.polygons),
            vertices=verts,
            center=np.asarray(center, dtype=np.float64),
        )
        self.polygons.append(polygon)
        return polygon

    def freeze(self) -> None:
        self.frozen = True


@dataclass
class QueryFilter:
    """Polygon inclusion/exclusion flags. Reserved, consulted by nothing."""

    include_flags: int = 0xFFFF
    exclude_flags: int = 0


class PathStatus(str, Enum):
    SUCCESS = "SUCCESS"


@dataclass
class PathResult:
    """Waypoints of a found path."""

    path: np.ndarray
    """Waypoints, shape (K, 3): start point, polygon centers, end point."""

    status: PathStatus = PathStatus.SUCCESS

    polygons: list[int] = field(default_factory=list)
    """Ids of the traversed polygons, start first."""

    def length(self) -> float:
        return path_length(self.path)

    def to_dict(self) -> dict:
        return {
            "path": self.path.tolist(),
            "status": self.status.value,
        }
