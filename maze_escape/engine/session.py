"""GameSession: the authoritative tick engine for one game.

Tick phases:
  1. Pursuit: every enemy moves at most one cell
  2. Collisions: damage and knockback, loss at zero health
  3. Pickups: collect the powerup under the player
  4. Win check: player standing on the exit
  5. Adaptation: every ``adaptation_interval`` ticks, reshape the maze

Level changes are never immediate: a win or loss schedules a
``PendingTransition`` which later ticks count down before the level is rebuilt.
"""

from __future__ import annotations

import logging

from maze_escape.ai.pursuit import PursuitAI
from maze_escape.config import GameConfig
from maze_escape.core.enums import CellType, MessageReason, PowerupKind, TransitionKind
from maze_escape.core.grid import Grid
from maze_escape.core.models import Enemy, Player, Powerup, Vector2
from maze_escape.core.session_state import PendingTransition, SessionState
from maze_escape.core.snapshot import Snapshot
from maze_escape.systems.adaptation import AdaptationEngine
from maze_escape.systems.maze_generator import MazeGenerator
from maze_escape.systems.rng import DeterministicRNG
from maze_escape.systems.spawner import EntitySpawner
from maze_escape.utils.event_log import EventLog, GameMessage, MessageListener

logger = logging.getLogger(__name__)


class GameSession:
    """Owns one SessionState and the collaborators that mutate it.

    Not thread-safe on its own; the shell serializes calls to ``tick`` and
    ``move_player``.
    """

    __slots__ = (
        "_config",
        "_rng",
        "_state",
        "_event_log",
        "_spawner",
        "_pursuit",
        "_adaptation",
    )

    def __init__(
        self,
        config: GameConfig | None = None,
        rng: DeterministicRNG | None = None,
        state: SessionState | None = None,
        event_log: EventLog | None = None,
    ) -> None:
        self._config = config or GameConfig()
        self._rng = rng or DeterministicRNG(self._config.seed)
        self._event_log = event_log or EventLog()
        if state is None:
            self._state = self._build_level(None)
        else:
            self._state = state
            self._wire(state.generation)

    # -- read accessors --

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def grid(self) -> Grid:
        return self._state.grid

    @property
    def player(self) -> Player:
        return self._state.player

    @property
    def enemies(self) -> list[Enemy]:
        return self._state.enemies

    @property
    def powerups(self) -> list[Powerup]:
        return list(self._state.powerups.values())

    @property
    def tick_count(self) -> int:
        return self._state.tick

    @property
    def won(self) -> bool:
        return self._state.won

    @property
    def lost(self) -> bool:
        return self._state.lost

    @property
    def level(self) -> int:
        return self._state.level

    @property
    def difficulty(self) -> float:
        return self._state.difficulty

    @property
    def pending(self) -> PendingTransition | None:
        return self._state.pending

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    def snapshot(self) -> Snapshot:
        return Snapshot.from_state(self._state)

    def subscribe(self, listener: MessageListener) -> None:
        """Register a callback for transient messages."""
        self._event_log.subscribe(listener)

    # -- level lifecycle --

    def init_level(self) -> SessionState:
        """(Re)build the grid, entities and counters for the current level."""
        self._state = self._build_level(self._state)
        return self._state

    def restart(self) -> SessionState:
        """Start over from level 1 with a fresh score."""
        previous = self._state
        previous.won = False
        previous.lost = True
        self._state = self._build_level(previous)
        return self._state

    def _wire(self, generation: int) -> DeterministicRNG:
        level_rng = self._rng.fork(generation)
        self._spawner = EntitySpawner(self._config, level_rng)
        self._pursuit = PursuitAI(self._config, level_rng)
        self._adaptation = AdaptationEngine(self._config, level_rng, self._spawner)
        return level_rng

    def _build_level(self, previous: SessionState | None) -> SessionState:
        cfg = self._config
        level, difficulty, score = 1, 1.0, 0
        generation, frame = 0, 0
        if previous is not None:
            generation = previous.generation + 1
            frame = previous.frame
            if previous.won:
                level = previous.level + 1
                difficulty = previous.difficulty + cfg.difficulty_step
                score = previous.player.score
            elif not previous.lost:
                level = previous.level
                difficulty = previous.difficulty

        level_rng = self._wire(generation)
        start = Vector2(1, 1)
        exit_pos = Vector2(cfg.grid_size - 2, cfg.grid_size - 2)

        generator = MazeGenerator(cfg, level_rng)
        grid = generator.generate(start, exit_pos)
        generator.ensure_connected(grid, start, exit_pos)

        player = Player(pos=start, health=cfg.max_health, score=score, max_health=cfg.max_health)
        state = SessionState(grid, player, exit_pos, history_capacity=cfg.history_capacity)
        state.level = level
        state.difficulty = difficulty
        state.generation = generation
        state.frame = frame

        state.enemies = self._spawner.spawn_enemies(state)
        self._spawner.spawn_powerups(state)

        logger.info(
            "Level %d ready (difficulty=%.1f, enemies=%d, powerups=%d, walls=%d)",
            level, difficulty, len(state.enemies), len(state.powerups),
            grid.count(CellType.WALL),
        )
        self._state = state
        self._emit(MessageReason.LEVEL_START, f"Level {level}")
        return state

    # -- transitions --

    def schedule_transition(self, kind: TransitionKind) -> PendingTransition:
        """Queue a level rebuild, replacing any transition already pending."""
        state = self._state
        delay = (
            self._config.win_transition_ticks
            if kind == TransitionKind.NEXT_LEVEL
            else self._config.loss_transition_ticks
        )
        if state.pending is not None:
            logger.info("Cancelling pending %s transition", state.pending.kind.name)
        state.pending = PendingTransition(kind=kind, due_frame=state.frame + delay)
        return state.pending

    def cancel_transition(self) -> bool:
        """Drop the pending transition, if any. Returns whether one was pending."""
        had_pending = self._state.pending is not None
        self._state.pending = None
        return had_pending

    # -- tick --

    def tick(self) -> SessionState:
        """Advance one game step and return the (possibly new) state."""
        state = self._state
        state.frame += 1

        if state.pending is not None:
            if state.frame >= state.pending.due_frame:
                return self.init_level()
            return state
        if state.terminal:
            return state

        state.tick += 1
        self._pursuit.move_enemies(state)

        self.resolve_collisions()
        if state.lost:
            return state

        self.resolve_pickups()
        self.check_win()

        if not state.won and self._adaptation.should_run(state):
            self._adaptation.adapt(state)
        return state

    def resolve_collisions(self) -> None:
        """Damage the player for every enemy sharing its cell, knocking it back."""
        state = self._state
        player = state.player
        for enemy in state.enemies:
            if enemy.pos != player.pos:
                continue
            player.take_damage(self._config.enemy_damage)
            knockback = player.pos - enemy.last_move
            if state.grid.is_walkable(knockback):
                player.pos = knockback
            logger.debug("Enemy %d hit player, health=%d", enemy.id, player.health)

            if player.health <= 0:
                state.lost = True
                logger.info("Game over on level %d at tick %d", state.level, state.tick)
                self._emit(MessageReason.GAME_OVER, "Game Over! You were caught!")
                self.schedule_transition(TransitionKind.RESTART)
                return

    def resolve_pickups(self) -> None:
        """Collect the powerup under the player, if any."""
        state = self._state
        powerup = state.take_powerup(state.player.pos)
        if powerup is None:
            return
        if powerup.kind == PowerupKind.HEALTH:
            state.player.heal(self._config.health_bonus)
            self._emit(MessageReason.HEALTH_PICKUP, f"+{self._config.health_bonus} Health!")
        else:
            state.player.score += self._config.score_bonus
            self._emit(MessageReason.SCORE_PICKUP, f"+{self._config.score_bonus} Score!")

    def check_win(self) -> bool:
        state = self._state
        if state.won or state.player.pos != state.exit:
            return state.won
        state.won = True
        logger.info("Level %d complete at tick %d (score=%d)", state.level, state.tick, state.player.score)
        self._emit(MessageReason.LEVEL_COMPLETE, "Level Complete! Starting next level...")
        self.schedule_transition(TransitionKind.NEXT_LEVEL)
        return True

    # -- input --

    def move_player(self, dx: int, dy: int) -> bool:
        """Apply one input move. Returns False when blocked or the level is over."""
        if dx not in (-1, 0, 1) or dy not in (-1, 0, 1) or abs(dx) + abs(dy) != 1:
            raise ValueError(f"invalid move delta ({dx}, {dy})")
        state = self._state
        if state.terminal:
            return False

        target = state.player.pos + Vector2(dx, dy)
        if not state.grid.is_walkable(target):
            return False

        state.player.pos = target
        state.history.record(Vector2(dx, dy))
        state.player.score += self._config.move_score
        self.resolve_pickups()
        self.check_win()
        return True

    # -- messages --

    def _emit(self, reason: MessageReason, text: str) -> None:
        state = self._state
        self._event_log.append(GameMessage(frame=state.frame, level=state.level, reason=reason, text=text))
