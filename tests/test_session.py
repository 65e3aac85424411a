"""Tests for the session controller: input, collisions, pickups, transitions."""

import sys
import os

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from maze_escape.ai.pathfinding import Pathfinder
from maze_escape.config import GameConfig
from maze_escape.core.enums import MessageReason, PowerupKind, TransitionKind
from maze_escape.core.models import Enemy, Powerup, Vector2
from maze_escape.engine.session import GameSession
from tests.helpers.mazes import brute_force_distance, make_state

RIGHT = Vector2(1, 0)
UP = Vector2(0, -1)
DOWN = Vector2(0, 1)


def _session(state=None, **overrides) -> GameSession:
    """Session over a hand-built open 15x15 level with no enemies."""
    return GameSession(GameConfig(**overrides), state=state or make_state())


def _texts(session: GameSession) -> list[str]:
    return [m.text for m in session.event_log.latest(50)]


# ---------------------------------------------------------------------------
# Level setup
# ---------------------------------------------------------------------------

class TestInitLevel:
    def test_fresh_session_defaults(self):
        s = GameSession(GameConfig(seed=1))
        assert s.level == 1
        assert s.difficulty == 1.0
        assert s.player.health == 100
        assert s.player.score == 0
        assert s.player.pos == Vector2(1, 1)
        assert s.state.exit == Vector2(13, 13)
        assert s.tick_count == 0
        assert s.pending is None
        assert not s.won and not s.lost
        assert len(s.state.history) == 0

    def test_level_is_solvable_and_entities_are_placed(self):
        for seed in range(10):
            s = GameSession(GameConfig(seed=seed))
            assert brute_force_distance(s.grid, s.player.pos, s.state.exit) is not None
            for e in s.enemies:
                assert s.grid.is_walkable(e.pos)
                assert e.pos not in (s.player.pos, s.state.exit)
            for p in s.powerups:
                assert s.grid.is_walkable(p.pos)

    def test_start_message(self):
        s = GameSession(GameConfig(seed=1))
        first = s.event_log.latest(1)[0]
        assert first.reason == MessageReason.LEVEL_START
        assert first.text == "Level 1"

    def test_rebuild_keeps_level_and_resets_score(self):
        state = make_state()
        state.level, state.difficulty = 2, 1.5
        state.player.score = 40
        s = _session(state)
        s.init_level()
        assert s.level == 2
        assert s.difficulty == 1.5
        assert s.player.score == 0
        assert s.state.generation == 1

    def test_restart_goes_back_to_level_one(self):
        state = make_state()
        state.level, state.difficulty = 4, 2.5
        state.player.score = 300
        s = _session(state)
        s.restart()
        assert (s.level, s.difficulty, s.player.score) == (1, 1.0, 0)
        assert not s.lost


# ---------------------------------------------------------------------------
# Player input
# ---------------------------------------------------------------------------

class TestMovePlayer:
    def test_valid_move(self):
        s = _session()
        assert s.move_player(1, 0)
        assert s.player.pos == Vector2(2, 1)
        assert s.player.score == 1
        assert list(s.state.history) == [RIGHT]

    def test_blocked_move_changes_nothing(self):
        s = _session()
        assert not s.move_player(-1, 0)
        assert s.player.pos == Vector2(1, 1)
        assert s.player.score == 0
        assert len(s.state.history) == 0

    @pytest.mark.parametrize("delta", [(1, 1), (2, 0), (0, 0), (0, -3)])
    def test_invalid_delta(self, delta):
        with pytest.raises(ValueError):
            _session().move_player(*delta)

    def test_ignored_after_level_end(self):
        s = _session()
        s.state.won = True
        assert not s.move_player(1, 0)
        assert s.player.pos == Vector2(1, 1)

    def test_history_keeps_last_twenty(self):
        s = _session()
        for _ in range(5):
            s.move_player(1, 0)
        for i in range(20):
            s.move_player(0, 1 if i % 2 == 0 else -1)
        moves = list(s.state.history)
        assert len(moves) == 20
        assert RIGHT not in moves
        assert moves[0] == DOWN and moves[-1] == UP
        assert s.player.score == 25

    def test_health_pickup_clamps(self):
        state = make_state(health=90)
        state.add_powerup(Powerup(pos=Vector2(2, 1), kind=PowerupKind.HEALTH))
        s = _session(state)
        s.move_player(1, 0)
        assert s.player.health == 100
        assert s.state.powerups == {}
        assert "+20 Health!" in _texts(s)

    def test_score_pickup(self):
        state = make_state()
        state.add_powerup(Powerup(pos=Vector2(2, 1), kind=PowerupKind.SCORE_BOOST))
        s = _session(state)
        s.move_player(1, 0)
        assert s.player.score == 101
        assert "+100 Score!" in _texts(s)


# ---------------------------------------------------------------------------
# Collisions
# ---------------------------------------------------------------------------

class TestCollisions:
    def test_damage_and_knockback(self):
        state = make_state(player=Vector2(5, 5))
        state.enemies = [Enemy(id=1, pos=Vector2(5, 5), last_move=RIGHT)]
        s = _session(state)
        s.resolve_collisions()
        assert s.player.health == 90
        assert s.player.pos == Vector2(4, 5)
        assert not s.lost

    def test_knockback_into_wall_stays(self):
        state = make_state(player=Vector2(1, 1))
        state.enemies = [Enemy(id=1, pos=Vector2(1, 1), last_move=RIGHT)]
        s = _session(state)
        s.resolve_collisions()
        assert s.player.health == 90
        assert s.player.pos == Vector2(1, 1)

    def test_fatal_hit_schedules_restart(self):
        state = make_state(player=Vector2(5, 5), health=10)
        state.level, state.difficulty = 3, 2.0
        state.player.score = 55
        state.enemies = [Enemy(id=1, pos=Vector2(5, 5), last_move=DOWN)]
        s = _session(state)
        s.resolve_collisions()
        assert s.lost
        assert s.player.health == 0
        assert s.pending.kind == TransitionKind.RESTART
        assert "Game Over! You were caught!" in _texts(s)

        for _ in range(29):
            s.tick()
        assert s.level == 3 and s.lost
        s.tick()
        assert (s.level, s.difficulty, s.player.score) == (1, 1.0, 0)
        assert s.player.health == 100
        assert not s.lost and s.pending is None

    def test_no_contact_no_damage(self):
        state = make_state(player=Vector2(5, 5))
        state.enemies = [Enemy(id=1, pos=Vector2(6, 5))]
        s = _session(state)
        s.resolve_collisions()
        assert s.player.health == 100


# ---------------------------------------------------------------------------
# Winning and transitions
# ---------------------------------------------------------------------------

class TestTransitions:
    def test_reaching_exit_advances_after_delay(self):
        state = make_state(player=Vector2(12, 13))
        state.player.score = 10
        s = _session(state)
        assert s.move_player(1, 0)
        assert s.won
        assert s.pending.kind == TransitionKind.NEXT_LEVEL
        assert "Level Complete! Starting next level..." in _texts(s)

        for _ in range(19):
            s.tick()
        assert s.level == 1
        s.tick()
        assert s.level == 2
        assert s.difficulty == 1.5
        assert s.player.score == 11
        assert s.player.pos == Vector2(1, 1)
        assert not s.won

    def test_ticks_frozen_while_pending(self):
        s = _session(make_state(player=Vector2(12, 13)))
        s.move_player(1, 0)
        for _ in range(5):
            s.tick()
        assert s.tick_count == 0
        assert s.state.frame == 5

    def test_schedule_replaces_pending(self):
        s = _session()
        s.schedule_transition(TransitionKind.NEXT_LEVEL)
        s.schedule_transition(TransitionKind.RESTART)
        assert s.pending.kind == TransitionKind.RESTART
        assert s.pending.due_frame == 30

    def test_cancel(self):
        s = _session()
        s.schedule_transition(TransitionKind.NEXT_LEVEL)
        assert s.cancel_transition() is True
        assert s.pending is None
        assert s.cancel_transition() is False

    def test_frame_counter_survives_rebuild(self):
        s = _session(make_state(player=Vector2(12, 13)))
        s.move_player(1, 0)
        for _ in range(20):
            s.tick()
        assert s.state.frame == 20
        assert s.event_log.latest(1)[0].text == "Level 2"
        assert s.event_log.latest(1)[0].frame == 20


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------

class TestMessages:
    def test_listener_receives_messages(self):
        received = []
        state = make_state()
        state.add_powerup(Powerup(pos=Vector2(2, 1), kind=PowerupKind.SCORE_BOOST))
        s = _session(state)
        s.subscribe(received.append)
        s.move_player(1, 0)
        assert [m.reason for m in received] == [MessageReason.SCORE_PICKUP]

    def test_since_frame(self):
        s = _session(make_state(player=Vector2(12, 13)))
        s.move_player(1, 0)
        for _ in range(20):
            s.tick()
        assert [m.text for m in s.event_log.since_frame(1)] == ["Level 2"]


# ---------------------------------------------------------------------------
# Whole-game properties
# ---------------------------------------------------------------------------

def _drive(session: GameSession, frames: int) -> list[tuple]:
    """Play toward the exit every third frame and record a trace."""
    trace = []
    for frame in range(frames):
        if frame % 3 == 0 and not session.state.terminal:
            step = Pathfinder(session.grid).next_step(session.player.pos, session.state.exit)
            if step is not None:
                delta = step - session.player.pos
                session.move_player(delta.x, delta.y)
        session.tick()
        trace.append((
            session.tick_count,
            session.level,
            session.player.pos,
            session.player.health,
            session.player.score,
            tuple(e.pos for e in session.enemies),
            tuple(sorted((p.pos.x, p.pos.y) for p in session.powerups)),
            tuple(session.grid.types()),
        ))
    return trace


class TestDeterminism:
    def test_same_seed_same_game(self):
        a = _drive(GameSession(GameConfig(seed=21)), 300)
        b = _drive(GameSession(GameConfig(seed=21)), 300)
        assert a == b

    def test_different_seed_different_maze(self):
        a = GameSession(GameConfig(seed=1))
        b = GameSession(GameConfig(seed=2))
        assert a.grid.types() != b.grid.types()


class TestInvariants:
    def test_health_bounds_and_solvability(self):
        s = GameSession(GameConfig(seed=4, enemy_count=4))
        for frame in range(1500):
            if frame % 2 == 0 and not s.state.terminal:
                step = Pathfinder(s.grid).next_step(s.player.pos, s.state.exit)
                if step is not None:
                    delta = step - s.player.pos
                    s.move_player(delta.x, delta.y)
            s.tick()
            assert 0 <= s.player.health <= 100
            assert s.grid.is_walkable(s.player.pos)
            for e in s.enemies:
                assert s.grid.is_walkable(e.pos)
            assert brute_force_distance(s.grid, s.player.pos, s.state.exit) is not None
