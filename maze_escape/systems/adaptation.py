"""Adaptation engine: reshapes the maze around the player's habits.

Every ``adaptation_interval`` ticks (once enough moves are recorded) each
eligible cell may flip between wall and empty.  Cells on rows (or columns)
crossing the player's dominant axis of travel are biased toward becoming
walls.  A new wall is only accepted if the player can still reach the exit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from maze_escape.ai.pathfinding import Pathfinder
from maze_escape.core.enums import Axis, CellType, Domain, PowerupKind

if TYPE_CHECKING:
    from maze_escape.config import GameConfig
    from maze_escape.core.models import Powerup, Vector2
    from maze_escape.core.session_state import SessionState
    from maze_escape.systems.rng import DeterministicRNG
    from maze_escape.systems.spawner import EntitySpawner

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AdaptationReport:
    """Outcome of one adaptation cycle."""

    tick: int
    axis: Axis
    opened: int = 0
    walled: int = 0
    rejected: int = 0
    powerup: Powerup | None = None


def dominant_axis(moves: list[Vector2]) -> Axis:
    """Majority axis of *moves*; ties go to VERTICAL."""
    horizontal = sum(1 for m in moves if abs(m.x) > abs(m.y))
    vertical = len(moves) - horizontal
    return Axis.HORIZONTAL if horizontal > vertical else Axis.VERTICAL


class AdaptationEngine:
    """Mutates grid cells based on recent player movement, never breaking solvability."""

    __slots__ = ("_config", "_rng", "_spawner")

    def __init__(self, config: GameConfig, rng: DeterministicRNG, spawner: EntitySpawner) -> None:
        self._config = config
        self._rng = rng
        self._spawner = spawner

    def should_run(self, state: SessionState) -> bool:
        return (
            state.tick % self._config.adaptation_interval == 0
            and len(state.history) >= self._config.adaptation_min_history
        )

    def is_eligible(self, state: SessionState, pos: Vector2) -> bool:
        """Interior, away from the player, and free of the exit and any entity."""
        return (
            state.grid.is_interior(pos)
            and pos != state.player.pos
            and pos != state.exit
            and pos.manhattan(state.player.pos) >= self._config.adaptation_safe_radius
            and state.powerup_at(pos) is None
            and all(e.pos != pos for e in state.enemies)
        )

    def wall_probability(self, axis: Axis, pos: Vector2) -> float:
        cfg = self._config
        if axis == Axis.HORIZONTAL and pos.y % 2 == 0:
            return cfg.biased_wall_probability
        if axis == Axis.VERTICAL and pos.x % 2 == 0:
            return cfg.biased_wall_probability
        return cfg.base_wall_probability

    def try_transition(self, state: SessionState, pos: Vector2, to_wall: bool, pathfinder: Pathfinder | None = None) -> bool:
        """Apply a proposed cell change, gated by the safety check.

        Opening a cell is always accepted.  Walling it is accepted only if the
        player can still reach the exit with *pos* blocked.  Returns whether
        the proposal was accepted.
        """
        if not to_wall:
            state.grid.set_type(pos, CellType.EMPTY)
            return True
        pathfinder = pathfinder or Pathfinder(state.grid)
        if not pathfinder.is_reachable(state.player.pos, state.exit, blocked=(pos,)):
            return False
        state.grid.set_type(pos, CellType.WALL)
        return True

    def adapt(self, state: SessionState) -> AdaptationReport:
        """Run one sweep over the grid and maybe drop a powerup the player needs."""
        cfg = self._config
        tick = state.tick
        axis = dominant_axis(state.history.recent(cfg.adaptation_window))
        report = AdaptationReport(tick=tick, axis=axis)
        pathfinder = Pathfinder(state.grid)

        for pos in state.grid.interior():
            if not self.is_eligible(state, pos):
                continue
            cell = state.grid.cell(pos)
            idx = state.grid.index_of(pos)
            if not self._rng.next_bool(Domain.ADAPTATION, idx, tick, cell.adaptability * cfg.adaptation_rate):
                continue

            to_wall = self._rng.next_bool(Domain.ADAPTATION, idx, tick, self.wall_probability(axis, pos), salt=1)
            was_wall = cell.is_wall
            if was_wall == to_wall:
                continue
            if self.try_transition(state, pos, to_wall, pathfinder):
                if to_wall:
                    report.walled += 1
                else:
                    report.opened += 1
            else:
                report.rejected += 1

        if self._rng.next_bool(Domain.ADAPTATION, -1, tick, cfg.adaptive_powerup_chance):
            kind = PowerupKind.HEALTH if state.player.health < cfg.low_health_threshold else PowerupKind.SCORE_BOOST
            report.powerup = self._spawner.spawn_powerup(state, kind)

        logger.debug(
            "Tick %d adaptation (%s): +%d walls, -%d walls, %d rejected, powerup=%s",
            tick, axis.name.lower(), report.walled, report.opened, report.rejected, report.powerup,
        )
        return report
