"""
Queries against a built NavMesh: nearest polygon lookup and point paths.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from trinav.errors import InputError
from trinav.geometry import planar_distances
from trinav.log import Log, SinkLike
from trinav.pathfinding import PathFinder
from trinav.types import NavMesh, PathResult, PathStatus, Polygon, QueryFilter


def _point(value, name: str) -> np.ndarray:
    try:
        point = np.asarray(value, dtype=np.float64).reshape(-1)
    except (TypeError, ValueError) as exc:
        raise InputError(f"{name} is not a 3D point: {value!r}") from exc
    if point.shape != (3,):
        raise InputError(f"{name} must have 3 coordinates, got {point.shape[0]}")
    return point


class NavMeshQuery:
    """Read-only query object bound to one NavMesh."""

    def __init__(self, navmesh: NavMesh, log_sink: SinkLike = None):
        self.navmesh = navmesh
        self.log = Log(log_sink)
        self.pathfinder = PathFinder(navmesh, self.log.sink)

    def find_nearest_poly(
        self,
        point,
        extents=None,
        filter: Optional[QueryFilter] = None,
    ) -> Optional[Polygon]:
        """
        Polygon whose center is closest to ``point`` on the XZ plane.

        ``extents`` and ``filter`` are accepted for interface compatibility
        and ignored. Among equally distant polygons the lowest id wins.
        Returns None for an empty mesh.
        """
        p = _point(point, "Point")
        if not self.navmesh.polygons:
            return None
        distances = planar_distances(p, self.navmesh.centers())
        return self.navmesh.polygons[int(np.argmin(distances))]

    def find_path(
        self,
        start_poly: Polygon,
        end_poly: Polygon,
        start_point,
        end_point,
        filter: Optional[QueryFilter] = None,
    ) -> Optional[PathResult]:
        """
        Waypoints from ``start_point`` to ``end_point``.

        The path is the start point, the center of every polygon of the A*
        corridor (both end polygons included), then the end point. Returns
        None when the polygons are not connected.
        """
        start = _point(start_point, "Start point")
        end = _point(end_point, "End point")
        self.pathfinder.require_polygon(start_poly, "Start")
        self.pathfinder.require_polygon(end_poly, "End")

        self.log.debug(f"Finding path from polygon {start_poly.id} to {end_poly.id}")
        self.log.debug(f"Start polygon connections: {len(start_poly.connections)}")
        self.log.debug(f"End polygon connections: {len(end_poly.connections)}")

        corridor = self.pathfinder.find_path(start_poly, end_poly)
        if corridor is None:
            self.log.warn("No path found between polygons")
            return None

        self.log.debug(f"Found path with {len(corridor)} polygons")

        waypoints = [start]
        waypoints.extend(polygon.center.copy() for polygon in corridor)
        waypoints.append(end)

        return PathResult(
            path=np.stack(waypoints),
            status=PathStatus.SUCCESS,
            polygons=[polygon.id for polygon in corridor],
        )
