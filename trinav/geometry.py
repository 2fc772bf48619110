"""
Geometric helpers on the horizontal (XZ) plane.

Y is the up axis: every distance used for connectivity, the A* heuristic
and nearest polygon lookup ignores height.
"""

from __future__ import annotations

import numpy as np


def planar_distance(a, b) -> float:
    """Euclidean distance between two 3D points projected onto XZ."""
    dx = float(a[0]) - float(b[0])
    dz = float(a[2]) - float(b[2])
    return float(np.sqrt(dx * dx + dz * dz))


def planar_distances(point, centers: np.ndarray) -> np.ndarray:
    """Distances from one point to each row of ``centers`` (K, 3) on XZ."""
    dx = float(point[0]) - centers[:, 0]
    dz = float(point[2]) - centers[:, 2]
    return np.sqrt(dx * dx + dz * dz)


def compute_centers(vertices: np.ndarray, triangles: np.ndarray) -> np.ndarray:
    """
    Centroids of indexed triangles.

    Args:
        vertices: (N, 3) vertex positions.
        triangles: (M, 3) vertex indices.

    Returns:
        (M, 3) arithmetic means of each triangle's corners.
    """
    if len(triangles) == 0:
        return np.zeros((0, 3), dtype=np.float64)
    v0 = vertices[triangles[:, 0]]
    v1 = vertices[triangles[:, 1]]
    v2 = vertices[triangles[:, 2]]
    return (v0 + v1 + v2) / 3.0


def path_length(points) -> float:
    """Total 3D length of a polyline."""
    pts = np.asarray(points, dtype=np.float64)
    if len(pts) < 2:
        return 0.0
    return float(np.linalg.norm(np.diff(pts, axis=0), axis=1).sum())
