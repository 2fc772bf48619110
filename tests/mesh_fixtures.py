"""Geometry helpers shared by the trinav tests."""

import numpy as np


def triangle_around(cx, cz, y=0.0):
    """Three corners whose mean is exactly (cx, y, cz)."""
    return [
        [cx - 1.0, y, cz - 1.0],
        [cx + 1.0, y, cz - 1.0],
        [cx, y, cz + 2.0],
    ]


def buffers_for_centers(centers, y=0.0):
    """Flat vertex and index buffers with one triangle per (cx, cz) center."""
    vertices = []
    indices = []
    for k, (cx, cz) in enumerate(centers):
        for corner in triangle_around(cx, cz, y):
            vertices.extend(corner)
        indices.extend([3 * k, 3 * k + 1, 3 * k + 2])
    return vertices, indices


def random_centers(count, extent, seed):
    rng = np.random.default_rng(seed)
    return [tuple(c) for c in np.round(rng.uniform(0.0, extent, size=(count, 2)), 3)]
