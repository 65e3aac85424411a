"""Pursuit AI: per-enemy choice between guided and random movement.

Each tick an enemy rolls against its intelligence:
  - success → follow its cached A* path toward the player (refreshed when
    empty, every ``path_refresh_interval`` ticks, or when its next step has
    gone stale), falling back to a greedy axis step only when no path exists;
  - failure → step to a uniformly chosen open neighbour.

Afterwards intelligence creeps up by ``intelligence_gain * difficulty``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from maze_escape.ai.pathfinding import Pathfinder
from maze_escape.core.enums import Domain
from maze_escape.core.models import DIRECTIONS, Vector2

if TYPE_CHECKING:
    from maze_escape.config import GameConfig
    from maze_escape.core.models import Enemy
    from maze_escape.core.session_state import SessionState
    from maze_escape.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)


def _sign(v: int) -> int:
    return (v > 0) - (v < 0)


class PursuitAI:
    """Moves enemies. Holds no per-enemy state; caches live on the Enemy."""

    __slots__ = ("_config", "_rng")

    def __init__(self, config: GameConfig, rng: DeterministicRNG) -> None:
        self._config = config
        self._rng = rng

    def move_enemies(self, state: SessionState) -> None:
        pathfinder = Pathfinder(state.grid)
        for enemy in state.enemies:
            self.move_enemy(enemy, state, pathfinder)

    def move_enemy(self, enemy: Enemy, state: SessionState, pathfinder: Pathfinder | None = None) -> bool:
        """Advance one enemy by at most one cell. Returns True if it moved."""
        pathfinder = pathfinder or Pathfinder(state.grid)
        guided = self._rng.next_bool(Domain.AI_DECISION, enemy.id, state.tick, enemy.intelligence)
        if guided:
            moved = self._guided_move(enemy, state, pathfinder)
        else:
            moved = self._random_move(enemy, state)

        cfg = self._config
        enemy.intelligence = min(
            cfg.intelligence_cap,
            enemy.intelligence + cfg.intelligence_gain * state.difficulty,
        )
        return moved

    # -- guided --

    def _guided_move(self, enemy: Enemy, state: SessionState, pathfinder: Pathfinder) -> bool:
        target = state.player.pos
        if enemy.path.is_empty or state.tick % self._config.path_refresh_interval == 0:
            enemy.path.reset(pathfinder.find_path(enemy.pos, target))
            logger.debug("Enemy %d recomputed path (%d steps)", enemy.id, len(enemy.path))

        step = enemy.path.pop_next()
        if step is not None and not self._usable(enemy, state, step):
            # the maze or the enemy moved under the cached path
            enemy.path.reset(pathfinder.find_path(enemy.pos, target))
            step = enemy.path.pop_next()

        if step is None:
            return self._greedy_move(enemy, state)
        enemy.step_to(step)
        return True

    @staticmethod
    def _usable(enemy: Enemy, state: SessionState, step: Vector2) -> bool:
        return step.manhattan(enemy.pos) == 1 and state.grid.is_walkable(step)

    def _greedy_move(self, enemy: Enemy, state: SessionState) -> bool:
        """Step along the axis with the larger offset, with fallbacks.

        Order tried: primary axis toward the player, secondary axis toward the
        player, then the opposite step on the primary and secondary axes.
        """
        offset = state.player.pos - enemy.pos
        sx, sy = _sign(offset.x), _sign(offset.y)
        if sx == 0 and sy == 0:
            return False

        horizontal = Vector2(sx, 0)
        vertical = Vector2(0, sy)
        if abs(offset.x) > abs(offset.y):
            primary, secondary = horizontal, vertical
        elif abs(offset.x) < abs(offset.y):
            primary, secondary = vertical, horizontal
        elif self._rng.next_bool(Domain.AI_MOVE, enemy.id, state.tick, salt=1):
            primary, secondary = horizontal, vertical
        else:
            primary, secondary = vertical, horizontal

        candidates = [primary, secondary, -primary, -secondary]
        for delta in candidates:
            if delta.x == 0 and delta.y == 0:
                continue
            target = enemy.pos + delta
            if state.grid.is_walkable(target):
                enemy.step_to(target)
                return True
        return False

    # -- random --

    def _random_move(self, enemy: Enemy, state: SessionState) -> bool:
        options = [enemy.pos + d for d in DIRECTIONS if state.grid.is_walkable(enemy.pos + d)]
        if not options:
            return False
        choice = self._rng.next_int(Domain.AI_MOVE, enemy.id, state.tick, 0, len(options) - 1)
        enemy.step_to(options[choice])
        enemy.path.clear()
        return True
