"""Entity spawner: places enemies and powerups on free maze cells."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from maze_escape.core.enums import Domain, PowerupKind
from maze_escape.core.models import Enemy, Powerup, Vector2

if TYPE_CHECKING:
    from maze_escape.config import GameConfig
    from maze_escape.core.session_state import SessionState
    from maze_escape.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)

_KINDS = (PowerupKind.HEALTH, PowerupKind.SCORE_BOOST)


class EntitySpawner:
    """Random placement of enemies and powerups respecting grid constraints."""

    __slots__ = ("_config", "_rng")

    def __init__(self, config: GameConfig, rng: DeterministicRNG) -> None:
        self._config = config
        self._rng = rng

    def _random_interior(self, state: SessionState, domain: Domain, key: int, tick: int, attempt: int) -> Vector2:
        last = state.grid.size - 2
        x = self._rng.next_int(domain, key, tick, 1, last, salt=attempt * 2)
        y = self._rng.next_int(domain, key, tick, 1, last, salt=attempt * 2 + 1)
        return Vector2(x, y)

    def spawn_enemies(self, state: SessionState, count: int | None = None) -> list[Enemy]:
        """Place *count* enemies on empty interior cells other than start and exit.

        Initial intelligence is ``base + u * spread * difficulty`` (capped).
        An enemy that finds no free cell within the attempt budget is skipped.
        """
        cfg = self._config
        count = cfg.enemy_count if count is None else count
        enemies: list[Enemy] = []
        for i in range(count):
            pos = None
            for attempt in range(cfg.max_spawn_attempts):
                candidate = self._random_interior(state, Domain.SPAWN, i, 0, attempt)
                if (
                    state.grid.is_walkable(candidate)
                    and candidate != state.player.pos
                    and candidate != state.exit
                ):
                    pos = candidate
                    break
            if pos is None:
                logger.warning("No free cell for enemy %d after %d attempts", i, cfg.max_spawn_attempts)
                continue

            roll = self._rng.next_float(Domain.SPAWN, i, 0, salt=1 << 20)
            intelligence = min(
                cfg.intelligence_cap,
                cfg.intelligence_base + roll * cfg.intelligence_spread * state.difficulty,
            )
            enemies.append(Enemy(id=i + 1, pos=pos, intelligence=intelligence))
            logger.debug("Spawned enemy %d at %s (intelligence=%.3f)", i + 1, pos, intelligence)
        return enemies

    def spawn_powerups(self, state: SessionState) -> list[Powerup]:
        """Roll a powerup on every free interior cell with ``powerup_chance``."""
        placed: list[Powerup] = []
        for pos in state.grid.interior():
            if not state.grid.is_walkable(pos) or pos == state.player.pos or pos == state.exit:
                continue
            idx = state.grid.index_of(pos)
            if not self._rng.next_bool(Domain.POWERUP, idx, 0, self._config.powerup_chance):
                continue
            kind = _KINDS[self._rng.next_int(Domain.POWERUP, idx, 0, 0, 1, salt=1)]
            powerup = Powerup(pos=pos, kind=kind)
            if state.add_powerup(powerup):
                placed.append(powerup)
        return placed

    def spawn_powerup(self, state: SessionState, kind: PowerupKind) -> Powerup | None:
        """Try a few random free cells for one *kind* powerup; give up quietly."""
        for attempt in range(self._config.powerup_spawn_attempts):
            pos = self._random_interior(state, Domain.POWERUP, -1, state.tick, attempt)
            if (
                not state.grid.is_walkable(pos)
                or pos == state.player.pos
                or pos == state.exit
                or state.powerup_at(pos) is not None
            ):
                continue
            powerup = Powerup(pos=pos, kind=kind)
            state.add_powerup(powerup)
            return powerup
        return None
