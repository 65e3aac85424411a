"""Core data models: Vector2, Cell, Player, Enemy, Powerup."""

from __future__ import annotations

from dataclasses import dataclass, field

from maze_escape.core.enums import CellType, PowerupKind


@dataclass(frozen=True, slots=True)
class Vector2:
    """Immutable 2D integer coordinate (or displacement)."""

    x: int = 0
    y: int = 0

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def __neg__(self) -> Vector2:
        return Vector2(-self.x, -self.y)

    def manhattan(self, other: Vector2) -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def __repr__(self) -> str:
        return f"({self.x}, {self.y})"


ZERO = Vector2(0, 0)

# Cardinal directions in up, right, down, left order (no diagonals)
DIRECTIONS: tuple[Vector2, ...] = (
    Vector2(0, -1),
    Vector2(1, 0),
    Vector2(0, 1),
    Vector2(-1, 0),
)


@dataclass(slots=True)
class Cell:
    """One maze cell. Adaptability is fixed when the cell is created."""

    type: CellType = CellType.EMPTY
    adaptability: float = 0.0

    @property
    def is_wall(self) -> bool:
        return self.type == CellType.WALL

    def copy(self) -> Cell:
        return Cell(type=self.type, adaptability=self.adaptability)


@dataclass(slots=True)
class Player:
    """The player avatar. Health is kept within [0, max_health]."""

    pos: Vector2
    health: int = 100
    score: int = 0
    max_health: int = 100

    @property
    def alive(self) -> bool:
        return self.health > 0

    def take_damage(self, amount: int) -> int:
        """Apply *amount* damage and return the health actually lost."""
        before = self.health
        self.health = max(0, self.health - amount)
        return before - self.health

    def heal(self, amount: int) -> int:
        """Restore up to *amount* health and return the health actually gained."""
        before = self.health
        self.health = min(self.max_health, self.health + amount)
        return self.health - before

    def copy(self) -> Player:
        return Player(pos=self.pos, health=self.health, score=self.score, max_health=self.max_health)


class PathCursor:
    """A cached path consumed front-to-back through an index cursor."""

    __slots__ = ("_steps", "_index")

    def __init__(self, steps: list[Vector2] | None = None) -> None:
        self._steps: list[Vector2] = list(steps) if steps else []
        self._index = 0

    def __len__(self) -> int:
        return len(self._steps) - self._index

    @property
    def is_empty(self) -> bool:
        return self._index >= len(self._steps)

    def reset(self, steps: list[Vector2]) -> None:
        self._steps = list(steps)
        self._index = 0

    def clear(self) -> None:
        self._steps = []
        self._index = 0

    def peek(self) -> Vector2 | None:
        if self.is_empty:
            return None
        return self._steps[self._index]

    def pop_next(self) -> Vector2 | None:
        """Return the next step and advance the cursor, or None when exhausted."""
        step = self.peek()
        if step is not None:
            self._index += 1
        return step

    def remaining(self) -> list[Vector2]:
        return self._steps[self._index:]

    def copy(self) -> PathCursor:
        return PathCursor(self.remaining())


@dataclass(slots=True)
class Enemy:
    """A pursuing enemy.

    ``intelligence`` is the probability of a pathfinding-guided move; it only
    ever grows within a level.  ``last_move`` is the displacement of the most
    recent successful step and drives player knockback.
    """

    id: int
    pos: Vector2
    intelligence: float = 0.2
    last_move: Vector2 = ZERO
    path: PathCursor = field(default_factory=PathCursor)

    def step_to(self, target: Vector2) -> None:
        self.last_move = target - self.pos
        self.pos = target

    def copy(self) -> Enemy:
        return Enemy(
            id=self.id,
            pos=self.pos,
            intelligence=self.intelligence,
            last_move=self.last_move,
            path=self.path.copy(),
        )


@dataclass(frozen=True, slots=True)
class Powerup:
    """A collectible sitting on one cell."""

    pos: Vector2
    kind: PowerupKind
