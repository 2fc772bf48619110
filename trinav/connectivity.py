"""
Proximity based polygon connectivity.

Two polygons are neighbours when the planar (XZ) distance between their
centers is strictly below a threshold. This approximates adjacency, it does
not look at shared edges.

Small meshes are compared pairwise. From ``spatial_index_min_polygons``
polygons on, candidate pairs come from a kd-tree over the planar centers;
both paths yield the same connection lists.
"""

from __future__ import annotations

import math

import numpy as np
from scipy.spatial import cKDTree

from trinav.errors import InputError, NavMeshFrozenError
from trinav.log import Log, SinkLike
from trinav.types import NavMesh, NavMeshConfig


def _pair_distances(xz: np.ndarray, i: np.ndarray, j: np.ndarray) -> np.ndarray:
    dx = xz[i, 0] - xz[j, 0]
    dz = xz[i, 1] - xz[j, 1]
    return np.sqrt(dx * dx + dz * dz)


def close_pairs_bruteforce(xz: np.ndarray, threshold: float) -> np.ndarray:
    """All pairs i < j with planar distance < threshold, shape (K, 2)."""
    n = len(xz)
    if n < 2:
        return np.zeros((0, 2), dtype=np.int64)
    i, j = np.triu_indices(n, k=1)
    mask = _pair_distances(xz, i, j) < threshold
    return np.stack([i[mask], j[mask]], axis=1).astype(np.int64)


def close_pairs_kdtree(xz: np.ndarray, threshold: float) -> np.ndarray:
    """Same result as close_pairs_bruteforce, using a kd-tree for candidates."""
    if len(xz) < 2:
        return np.zeros((0, 2), dtype=np.int64)
    tree = cKDTree(xz)
    # query_pairs is inclusive; pad the radius and apply the strict test below
    candidates = tree.query_pairs(threshold * (1.0 + 1e-9), output_type="ndarray")
    if len(candidates) == 0:
        return np.zeros((0, 2), dtype=np.int64)
    i = candidates[:, 0]
    j = candidates[:, 1]
    mask = _pair_distances(xz, i, j) < threshold
    return candidates[mask].astype(np.int64)


class ConnectivityGraph:
    """Fills ``Polygon.connections`` and freezes the mesh."""

    def __init__(self, log_sink: SinkLike = None, config=None):
        self.log = Log(log_sink)
        self.config = NavMeshConfig.coerce(config)

    def connect(self, navmesh: NavMesh, threshold: float | None = None) -> None:
        """
        Connect every pair of polygons whose planar center distance is below
        ``threshold`` (default from config, 2.0).

        Links are recorded on both polygons from one unordered pair, so
        adjacency is symmetric. Connection lists end up sorted by id. The
        mesh is frozen afterwards.

        Raises:
            NavMeshFrozenError: The mesh was already connected.
            InputError: The threshold is not a finite positive number.
        """
        if navmesh.frozen:
            raise NavMeshFrozenError("NavMesh is frozen, connectivity was already built")

        if threshold is None:
            threshold = self.config.connection_threshold
        if isinstance(threshold, bool) or not isinstance(threshold, (int, float, np.floating)):
            raise InputError(f"Connection threshold must be a number, got {threshold!r}")
        threshold = float(threshold)
        if not math.isfinite(threshold) or threshold <= 0:
            raise InputError(f"Connection threshold must be finite and positive, got {threshold}")

        count = navmesh.polygon_count()
        self.log.info(f"Creating connections between {count} polygons")

        xz = navmesh.centers()[:, [0, 2]]
        min_indexed = self.config.spatial_index_min_polygons
        if min_indexed and count >= min_indexed:
            pairs = close_pairs_kdtree(xz, threshold)
        else:
            pairs = close_pairs_bruteforce(xz, threshold)

        adjacency: list[list[int]] = [[] for _ in range(count)]
        for a, b in pairs.tolist():
            adjacency[a].append(b)
            adjacency[b].append(a)

        for polygon, links in zip(navmesh.polygons, adjacency):
            polygon.connections = sorted(links)

        navmesh.freeze()
        self.log.info(f"Created {navmesh.connection_count()} total connections between polygons")
