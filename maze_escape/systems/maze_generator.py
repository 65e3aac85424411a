"""Maze generation and connectivity repair."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from maze_escape.ai.pathfinding import Pathfinder
from maze_escape.core.enums import CellType, Domain
from maze_escape.core.grid import Grid
from maze_escape.core.models import Cell, Vector2

if TYPE_CHECKING:
    from maze_escape.config import GameConfig
    from maze_escape.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)


def _sign(v: int) -> int:
    return (v > 0) - (v < 0)


class MazeGenerator:
    """Builds random maze grids and guarantees a start-to-exit corridor."""

    __slots__ = ("_config", "_rng")

    def __init__(self, config: GameConfig, rng: DeterministicRNG) -> None:
        self._config = config
        self._rng = rng

    def generate(
        self,
        start: Vector2,
        exit_pos: Vector2,
        size: int | None = None,
        wall_chance: float | None = None,
    ) -> Grid:
        """Roll every interior cell independently; border cells are fixed walls.

        Each interior cell is a wall with probability *wall_chance* and gets a
        uniform adaptability in [0, 1).  *start* and *exit_pos* are forced empty.
        """
        size = self._config.grid_size if size is None else size
        wall_chance = self._config.wall_chance if wall_chance is None else wall_chance
        grid = Grid(size)
        for pos in grid.positions():
            if grid.is_border(pos):
                grid.put(pos, Cell(type=CellType.WALL, adaptability=0.0))
                continue
            idx = grid.index_of(pos)
            is_wall = self._rng.next_bool(Domain.MAP_GEN, idx, 0, wall_chance)
            adaptability = self._rng.next_float(Domain.MAP_GEN, idx, 0, salt=1)
            grid.put(pos, Cell(type=CellType.WALL if is_wall else CellType.EMPTY, adaptability=adaptability))

        grid.set_type(start, CellType.EMPTY)
        grid.set_type(exit_pos, CellType.EMPTY)
        return grid

    def ensure_connected(self, grid: Grid, start: Vector2, exit_pos: Vector2) -> bool:
        """Carve a corridor if *exit_pos* is unreachable from *start*.

        Returns True when carving was needed.  Calling it on an already
        connected grid changes nothing.
        """
        if Pathfinder(grid).is_reachable(start, exit_pos):
            return False
        path = self.carve_path(start, exit_pos)
        for pos in path:
            grid.set_type(pos, CellType.EMPTY)
        logger.debug("Carved %d-cell corridor from %s to %s", len(path), start, exit_pos)
        return True

    def carve_path(self, start: Vector2, exit_pos: Vector2) -> list[Vector2]:
        """Greedy walk from *start* to *exit_pos*, inclusive of both ends.

        While both axes still have a gap a fair coin picks which one to close;
        once one axis is aligned the other is walked out.
        """
        path = [start]
        x, y = start.x, start.y
        step = 0
        while x != exit_pos.x or y != exit_pos.y:
            dx = _sign(exit_pos.x - x)
            dy = _sign(exit_pos.y - y)
            if dx and dy:
                if self._rng.next_bool(Domain.CARVE, step, 0):
                    x += dx
                else:
                    y += dy
            elif dx:
                x += dx
            else:
                y += dy
            path.append(Vector2(x, y))
            step += 1
        return path
