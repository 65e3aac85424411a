"""A* pathfinding and breadth-first reachability over the maze grid.

Provides a `Pathfinder` class shared by enemy pursuit (full paths) and the
adaptation safety check (boolean reachability with hypothetical walls).

Usage:
    pf = Pathfinder(grid)
    path = pf.find_path(start, goal)           # list[Vector2], [] if unreachable
    ok = pf.is_reachable(start, goal, {cell})  # treat *cell* as a wall
"""

from __future__ import annotations

import heapq
from collections import deque
from typing import TYPE_CHECKING, Collection

from maze_escape.core.models import DIRECTIONS, Vector2

if TYPE_CHECKING:
    from maze_escape.core.grid import Grid


def manhattan(a: Vector2, b: Vector2) -> int:
    """Manhattan heuristic, admissible and consistent for unit-cost 4-way moves."""
    return abs(a.x - b.x) + abs(a.y - b.y)


class Pathfinder:
    """Unit-cost A* and BFS over a Grid; walls are impassable.

    Reads the grid live, so it always reflects the current maze.
    """

    __slots__ = ("_grid",)

    def __init__(self, grid: Grid) -> None:
        self._grid = grid

    @property
    def grid(self) -> Grid:
        return self._grid

    def find_path(self, start: Vector2, goal: Vector2) -> list[Vector2]:
        """Compute an optimal A* path from *start* to *goal*.

        Returns positions excluding *start* and including *goal*, or an empty
        list when no path exists, when either end is a wall or out of bounds,
        or when start == goal.  Equal f-scores expand in insertion order.
        """
        grid = self._grid
        if start == goal or not grid.is_walkable(start) or not grid.is_walkable(goal):
            return []

        # open set entries: (f_score, counter, x, y); the counter keeps ties stable
        counter = 0
        open_heap: list[tuple[int, int, int, int]] = [(manhattan(start, goal), counter, start.x, start.y)]

        g_score: dict[tuple[int, int], int] = {(start.x, start.y): 0}
        came_from: dict[tuple[int, int], tuple[int, int]] = {}
        closed: set[tuple[int, int]] = set()
        gx, gy = goal.x, goal.y

        while open_heap:
            _, _, cx, cy = heapq.heappop(open_heap)
            ckey = (cx, cy)

            # stale entry left behind by a relaxation
            if ckey in closed:
                continue

            if cx == gx and cy == gy:
                return self._reconstruct(came_from, ckey)

            closed.add(ckey)
            current_g = g_score[ckey]

            for d in DIRECTIONS:
                nx, ny = cx + d.x, cy + d.y
                nkey = (nx, ny)
                if nkey in closed or not grid.is_walkable(Vector2(nx, ny)):
                    continue

                tentative_g = current_g + 1
                if tentative_g < g_score.get(nkey, 1 << 30):
                    g_score[nkey] = tentative_g
                    came_from[nkey] = ckey
                    counter += 1
                    f = tentative_g + abs(nx - gx) + abs(ny - gy)
                    heapq.heappush(open_heap, (f, counter, nx, ny))

        return []

    def next_step(self, start: Vector2, goal: Vector2) -> Vector2 | None:
        """Return the first step of the A* path, or None if no path exists."""
        path = self.find_path(start, goal)
        return path[0] if path else None

    def is_reachable(
        self,
        start: Vector2,
        goal: Vector2,
        blocked: Collection[Vector2] = (),
    ) -> bool:
        """Breadth-first connectivity check from *start* to *goal*.

        Cells in *blocked* are treated as walls, which lets callers test a
        hypothetical mutation without copying the grid.
        """
        return self.bfs_distance(start, goal, blocked) is not None

    def bfs_distance(
        self,
        start: Vector2,
        goal: Vector2,
        blocked: Collection[Vector2] = (),
    ) -> int | None:
        """Shortest step count from *start* to *goal*, or None if unreachable."""
        grid = self._grid
        blocked_keys = {(p.x, p.y) for p in blocked}

        def passable(pos: Vector2) -> bool:
            return grid.is_walkable(pos) and (pos.x, pos.y) not in blocked_keys

        if not passable(start) or not passable(goal):
            return None
        if start == goal:
            return 0

        seen: set[Vector2] = {start}
        frontier: deque[tuple[Vector2, int]] = deque([(start, 0)])
        while frontier:
            pos, dist = frontier.popleft()
            for d in DIRECTIONS:
                npos = pos + d
                if npos in seen or not passable(npos):
                    continue
                if npos == goal:
                    return dist + 1
                seen.add(npos)
                frontier.append((npos, dist + 1))
        return None

    @staticmethod
    def _reconstruct(
        came_from: dict[tuple[int, int], tuple[int, int]],
        current: tuple[int, int],
    ) -> list[Vector2]:
        """Walk back through came_from to build the path."""
        path: list[Vector2] = []
        while current in came_from:
            path.append(Vector2(current[0], current[1]))
            current = came_from[current]
        path.reverse()
        return path
