"""Grid / maze cell system."""

from __future__ import annotations

from typing import Iterator

from maze_escape.core.enums import CellType
from maze_escape.core.models import DIRECTIONS, Cell, Vector2


class Grid:
    """Square N×N maze grid backed by a flat list for cache-friendly access.

    Out-of-bounds reads report WALL so movement and search code never has to
    special-case the edge.  Writes and direct cell access expect valid
    coordinates.
    """

    __slots__ = ("size", "_cells")

    def __init__(self, size: int, default: CellType = CellType.EMPTY) -> None:
        self.size = size
        self._cells: list[Cell] = [Cell(type=default) for _ in range(size * size)]

    # -- access --

    def _idx(self, x: int, y: int) -> int:
        if not (0 <= x < self.size and 0 <= y < self.size):
            raise IndexError(f"cell ({x}, {y}) outside {self.size}x{self.size} grid")
        return y * self.size + x

    def index_of(self, pos: Vector2) -> int:
        return self._idx(pos.x, pos.y)

    def in_bounds(self, pos: Vector2) -> bool:
        return 0 <= pos.x < self.size and 0 <= pos.y < self.size

    def cell(self, pos: Vector2) -> Cell:
        return self._cells[self._idx(pos.x, pos.y)]

    def get(self, pos: Vector2) -> CellType:
        if not self.in_bounds(pos):
            return CellType.WALL
        return self._cells[pos.y * self.size + pos.x].type

    def set_type(self, pos: Vector2, cell_type: CellType) -> None:
        self._cells[self._idx(pos.x, pos.y)].type = cell_type

    def put(self, pos: Vector2, cell: Cell) -> None:
        self._cells[self._idx(pos.x, pos.y)] = cell

    def is_walkable(self, pos: Vector2) -> bool:
        return self.get(pos) != CellType.WALL

    def is_border(self, pos: Vector2) -> bool:
        last = self.size - 1
        return pos.x == 0 or pos.y == 0 or pos.x == last or pos.y == last

    def is_interior(self, pos: Vector2) -> bool:
        return self.in_bounds(pos) and not self.is_border(pos)

    # -- iteration --

    def positions(self) -> Iterator[Vector2]:
        """Every position in row-major order."""
        for y in range(self.size):
            for x in range(self.size):
                yield Vector2(x, y)

    def interior(self) -> Iterator[Vector2]:
        """Interior positions (excluding the border ring) in row-major order."""
        for y in range(1, self.size - 1):
            for x in range(1, self.size - 1):
                yield Vector2(x, y)

    def walkable_neighbors(self, pos: Vector2) -> list[Vector2]:
        return [pos + d for d in DIRECTIONS if self.is_walkable(pos + d)]

    def count(self, cell_type: CellType) -> int:
        return sum(1 for c in self._cells if c.type == cell_type)

    def types(self) -> list[int]:
        """Row-major cell types as plain ints (for serialization)."""
        return [int(c.type) for c in self._cells]

    # -- copy --

    def copy(self) -> Grid:
        new = Grid.__new__(Grid)
        new.size = self.size
        new._cells = [c.copy() for c in self._cells]
        return new

    @classmethod
    def from_rows(cls, rows: list[str], adaptability: float = 0.0) -> Grid:
        """Build a grid from text rows where ``#`` is a wall and anything else is empty.

        Handy for tests and fixed layouts; every interior cell gets the same
        *adaptability*, border cells get 0.
        """
        size = len(rows)
        grid = cls(size)
        for y, row in enumerate(rows):
            if len(row) != size:
                raise ValueError(f"row {y} has length {len(row)}, expected {size}")
            for x, ch in enumerate(row):
                pos = Vector2(x, y)
                cell_type = CellType.WALL if ch == "#" else CellType.EMPTY
                adapt = 0.0 if grid.is_border(pos) else adaptability
                grid.put(pos, Cell(type=cell_type, adaptability=adapt))
        return grid
