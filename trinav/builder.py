"""
Polygon construction from raw triangle buffers.

Input is a flat vertex buffer (x, y, z per vertex) and a flat index buffer
(three indices per triangle). Every triangle becomes one polygon, shared
vertices are not deduplicated.
"""

from __future__ import annotations

import numpy as np

from trinav.errors import InputError
from trinav.geometry import compute_centers
from trinav.log import Log, SinkLike
from trinav.types import NavMesh, NavMeshConfig


def _flat_buffer(values, name: str) -> np.ndarray:
    try:
        buf = np.asarray(values)
    except (TypeError, ValueError) as exc:
        raise InputError(f"{name} buffer is not a numeric sequence: {exc}") from exc
    if buf.size == 0:
        return buf.reshape(0)
    if buf.ndim != 1:
        raise InputError(f"{name} buffer must be flat, got shape {buf.shape}")
    if buf.dtype == np.bool_ or not (
        np.issubdtype(buf.dtype, np.integer) or np.issubdtype(buf.dtype, np.floating)
    ):
        raise InputError(f"{name} buffer must be numeric, got dtype {buf.dtype}")
    return buf


def read_vertices(vertices) -> np.ndarray:
    """Flat vertex buffer -> (V, 3) float64 array."""
    buf = _flat_buffer(vertices, "Vertex")
    if len(buf) % 3 != 0:
        raise InputError(f"Vertex buffer length {len(buf)} is not a multiple of 3")
    return buf.astype(np.float64).reshape(-1, 3)


def read_triangles(indices, vertex_count: int) -> np.ndarray:
    """Flat index buffer -> (T, 3) int64 array, bounds checked."""
    buf = _flat_buffer(indices, "Index")
    if len(buf) % 3 != 0:
        raise InputError(f"Index buffer length {len(buf)} is not a multiple of 3")
    if np.issubdtype(buf.dtype, np.floating):
        if not np.all(np.isfinite(buf)) or not np.all(buf == np.floor(buf)):
            raise InputError("Index buffer contains non-integral values")
    triangles = buf.astype(np.int64).reshape(-1, 3)
    if triangles.size:
        bad = (triangles < 0) | (triangles >= vertex_count)
        if np.any(bad):
            flat = int(np.flatnonzero(bad.reshape(-1))[0])
            raise InputError(
                f"Index {int(buf[flat])} at position {flat} is out of range "
                f"for {vertex_count} vertices"
            )
    return triangles


class MeshBuilder:
    """Builds an unconnected NavMesh from vertex and index buffers."""

    def __init__(self, log_sink: SinkLike = None):
        self.log = Log(log_sink)

    def build(self, vertices, indices, config=None) -> NavMesh:
        """
        Build polygons from triangle buffers.

        Args:
            vertices: Flat sequence of floats, 3 per vertex.
            indices: Flat sequence of integers, 3 per triangle.
            config: NavMeshConfig, dict or None.

        Returns:
            NavMesh with one polygon per triangle, ``polygons[k].id == k``,
            and empty connection lists.

        Raises:
            InputError: Buffers are malformed or an index is out of range.
        """
        config = NavMeshConfig.coerce(config)

        verts = read_vertices(vertices)
        triangles = read_triangles(indices, len(verts))

        self.log.info(
            f"Building navigation mesh with {len(verts)} vertices and "
            f"{len(triangles) * 3} indices"
        )

        centers = compute_centers(verts, triangles)
        navmesh = NavMesh()

        for tri, center in zip(triangles, centers):
            polygon = navmesh.add_polygon(verts[tri], center)
            if polygon.id < config.debug_polygon_logs:
                self.log.debug(f"Created polygon {polygon.id} at center: {center.tolist()}")

        self.log.info(f"Created {navmesh.polygon_count()} polygons total")
        return navmesh
