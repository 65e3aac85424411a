"""Tests for enemy and powerup placement."""

import sys
import os
from unittest.mock import MagicMock

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from maze_escape.config import GameConfig
from maze_escape.core.enums import PowerupKind
from maze_escape.core.models import Vector2
from maze_escape.systems.maze_generator import MazeGenerator
from maze_escape.systems.rng import DeterministicRNG
from maze_escape.systems.spawner import EntitySpawner
from tests.helpers.mazes import make_state, open_rows


def _generated_state(seed: int, difficulty: float = 1.0):
    cfg = GameConfig(seed=seed)
    rng = DeterministicRNG(seed)
    gen = MazeGenerator(cfg, rng)
    state = make_state()
    state.grid = gen.generate(state.start, state.exit)
    gen.ensure_connected(state.grid, state.start, state.exit)
    state.difficulty = difficulty
    return cfg, rng, state


class TestSpawnEnemies:
    def test_enemies_on_free_cells(self):
        for seed in range(20):
            cfg, rng, state = _generated_state(seed)
            enemies = EntitySpawner(cfg, rng).spawn_enemies(state)
            assert len(enemies) == cfg.enemy_count
            for e in enemies:
                assert state.grid.is_interior(e.pos)
                assert state.grid.is_walkable(e.pos)
                assert e.pos != state.start
                assert e.pos != state.exit

    def test_initial_enemy_fields(self):
        cfg, rng, state = _generated_state(1)
        for e in EntitySpawner(cfg, rng).spawn_enemies(state):
            assert 0.2 <= e.intelligence <= 0.5
            assert e.last_move == Vector2(0, 0)
            assert e.path.is_empty

    def test_intelligence_scales_with_difficulty_and_is_capped(self):
        for seed in range(20):
            cfg, rng, state = _generated_state(seed, difficulty=5.0)
            for e in EntitySpawner(cfg, rng).spawn_enemies(state):
                assert 0.2 <= e.intelligence <= 0.9

    def test_unique_ids(self):
        cfg, rng, state = _generated_state(2)
        enemies = EntitySpawner(cfg, rng).spawn_enemies(state, count=5)
        assert len({e.id for e in enemies}) == 5

    def test_gives_up_when_no_free_cell(self):
        rows = ["#####", "#.###", "#####", "###.#", "#####"]
        state = make_state(rows, player=Vector2(1, 1), exit_pos=Vector2(3, 3))
        cfg = GameConfig(grid_size=5, max_spawn_attempts=20)
        assert EntitySpawner(cfg, DeterministicRNG(0)).spawn_enemies(state) == []


class TestSpawnPowerups:
    def test_powerups_on_free_cells_only(self):
        cfg, rng, state = _generated_state(4)
        placed = EntitySpawner(cfg, rng).spawn_powerups(state)
        for p in placed:
            assert state.grid.is_walkable(p.pos)
            assert p.pos not in (state.start, state.exit)
        assert len({p.pos for p in placed}) == len(placed)
        assert len(state.powerups) == len(placed)

    def test_chance_one_fills_every_free_cell(self):
        cfg = GameConfig(powerup_chance=1.0)
        state = make_state()
        placed = EntitySpawner(cfg, DeterministicRNG(0)).spawn_powerups(state)
        assert len(placed) == 13 * 13 - 2
        assert {p.kind for p in placed} == {PowerupKind.HEALTH, PowerupKind.SCORE_BOOST}

    def test_chance_zero_places_nothing(self):
        cfg = GameConfig(powerup_chance=0.0)
        assert EntitySpawner(cfg, DeterministicRNG(0)).spawn_powerups(make_state()) == []


class TestSpawnOnDemand:
    def test_places_requested_kind(self):
        rng = MagicMock()
        rng.next_int.return_value = 3
        state = make_state()
        powerup = EntitySpawner(GameConfig(), rng).spawn_powerup(state, PowerupKind.HEALTH)
        assert powerup is not None
        assert powerup.pos == Vector2(3, 3)
        assert powerup.kind == PowerupKind.HEALTH
        assert state.powerup_at(Vector2(3, 3)) == powerup

    def test_occupied_cell_is_never_doubled(self):
        rng = MagicMock()
        rng.next_int.return_value = 3
        state = make_state()
        spawner = EntitySpawner(GameConfig(), rng)
        spawner.spawn_powerup(state, PowerupKind.HEALTH)
        assert spawner.spawn_powerup(state, PowerupKind.SCORE_BOOST) is None
        assert len(state.powerups) == 1
        assert rng.next_int.call_count == 2 + 2 * 10

    def test_gives_up_on_closed_maze(self):
        rows = ["#" * 7] * 7
        rows = list(rows)
        rows[1] = "#.#####"
        rows[5] = "#####.#"
        state = make_state(rows, player=Vector2(1, 1), exit_pos=Vector2(5, 5))
        assert EntitySpawner(GameConfig(), DeterministicRNG(0)).spawn_powerup(state, PowerupKind.HEALTH) is None
        assert state.powerups == {}

    def test_never_under_player_or_exit(self):
        state = make_state(open_rows(5), player=Vector2(1, 1), exit_pos=Vector2(3, 3))
        spawner = EntitySpawner(GameConfig(grid_size=5), DeterministicRNG(9))
        for tick in range(30):
            state.tick = tick
            spawner.spawn_powerup(state, PowerupKind.SCORE_BOOST)
        assert Vector2(1, 1) not in state.powerups
        assert Vector2(3, 3) not in state.powerups
