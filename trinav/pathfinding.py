"""
A* search over the polygon graph.

Every edge costs 1 while the heuristic is the planar distance between
centers. With uneven polygon spacing the heuristic can overestimate, so the
returned path is not guaranteed to be the shortest one.

The open set is a binary heap keyed by ``(f_score, order)``, where ``order``
is the position at which a polygon first entered the open set. Among equal
f scores the polygon that has been waiting longest is expanded first, which
is the same choice a linear scan over an insertion-ordered open list makes.
"""

from __future__ import annotations

import heapq
from typing import Optional

import numpy as np

from trinav.errors import InputError
from trinav.log import Log, SinkLike
from trinav.types import NavMesh, Polygon

EDGE_COST = 1.0


def astar_polygons(
    start: int,
    goal: int,
    connections: list[list[int]],
    centers: np.ndarray,
) -> list[int] | None:
    """
    A* over polygon ids.

    Args:
        start: Start polygon id.
        goal: Goal polygon id.
        connections: Neighbour ids per polygon.
        centers: (N, 3) polygon centers.

    Returns:
        Polygon ids from start to goal inclusive, or None when goal is
        unreachable.
    """
    goal_x = float(centers[goal, 0])
    goal_z = float(centers[goal, 2])

    def h(node: int) -> float:
        dx = float(centers[node, 0]) - goal_x
        dz = float(centers[node, 2]) - goal_z
        return float(np.sqrt(dx * dx + dz * dz))

    g_score: dict[int, float] = {start: 0.0}
    f_score: dict[int, float] = {start: h(start)}
    came_from: dict[int, int] = {}
    order: dict[int, int] = {start: 0}
    closed: set[int] = set()

    # (f_score, order, polygon); stale entries are skipped on pop
    open_heap: list[tuple[float, int, int]] = [(f_score[start], 0, start)]

    while open_heap:
        f, _, current = heapq.heappop(open_heap)
        if current in closed or f != f_score[current]:
            continue

        if current == goal:
            path = [current]
            while current in came_from:
                current = came_from[current]
                path.append(current)
            return path[::-1]

        closed.add(current)

        for neighbor in connections[current]:
            if neighbor in closed:
                continue

            tentative_g = g_score[current] + EDGE_COST

            if neighbor not in order:
                order[neighbor] = len(order)
            elif tentative_g >= g_score[neighbor]:
                continue

            came_from[neighbor] = current
            g_score[neighbor] = tentative_g
            f_score[neighbor] = tentative_g + h(neighbor)
            heapq.heappush(open_heap, (f_score[neighbor], order[neighbor], neighbor))

    return None


class PathFinder:
    """A* between two polygons of one mesh."""

    def __init__(self, navmesh: NavMesh, log_sink: SinkLike = None):
        self.navmesh = navmesh
        self.log = Log(log_sink)

    def require_polygon(self, polygon: Polygon, role: str = "Query") -> None:
        if not isinstance(polygon, Polygon) or not self.navmesh.owns(polygon):
            raise InputError(f"{role} polygon does not belong to this NavMesh")

    def find_path(self, start: Polygon, goal: Polygon) -> Optional[list[Polygon]]:
        """
        Find a polygon corridor from ``start`` to ``goal``.

        Returns:
            Polygons from start to goal inclusive (``[start]`` when they are
            the same polygon), or None when goal is unreachable.

        Raises:
            InputError: A polygon is not part of this mesh.
        """
        self.require_polygon(start, "Start")
        self.require_polygon(goal, "Goal")

        if start is goal:
            return [start]

        polygons = self.navmesh.polygons
        ids = astar_polygons(
            start.id,
            goal.id,
            [p.connections for p in polygons],
            self.navmesh.centers(),
        )
        if ids is None:
            self.log.debug(f"A*: polygon {goal.id} unreachable from polygon {start.id}")
            return None
        self.log.debug(f"A*: {start.id} -> {goal.id} through {len(ids)} polygons")
        return [polygons[i] for i in ids]
