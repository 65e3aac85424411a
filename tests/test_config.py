"""Tests for GameConfig validation and snapshot isolation."""

import sys
import os

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from maze_escape.config import GameConfig
from maze_escape.core.enums import CellType
from maze_escape.core.models import Vector2
from maze_escape.engine.session import GameSession


class TestGameConfig:
    def test_defaults(self):
        cfg = GameConfig()
        assert cfg.grid_size == 15
        assert cfg.enemy_count == 2
        assert cfg.adaptation_interval == 10
        assert cfg.win_transition_ticks == 20
        assert cfg.loss_transition_ticks == 30

    @pytest.mark.parametrize("overrides", [
        {"grid_size": 4},
        {"wall_chance": 1.5},
        {"adaptation_rate": -0.1},
        {"adaptation_interval": 0},
        {"history_capacity": 0},
        {"enemy_count": -1},
    ])
    def test_rejects_bad_values(self, overrides):
        with pytest.raises(ValueError):
            GameConfig(**overrides)

    def test_frozen(self):
        cfg = GameConfig()
        with pytest.raises(AttributeError):
            cfg.seed = 7


class TestSnapshot:
    def test_snapshot_is_detached(self):
        s = GameSession(GameConfig(seed=5))
        snap = s.snapshot()
        s.grid.set_type(Vector2(2, 2), CellType.WALL)
        s.player.health = 1
        if s.enemies:
            s.enemies[0].pos = Vector2(0, 0)
        assert snap.player.health == 100
        assert snap.grid is not s.grid
        if snap.enemies:
            assert snap.enemies[0].pos != Vector2(0, 0)

    def test_powerups_sorted_row_major(self):
        s = GameSession(GameConfig(seed=6, powerup_chance=0.3))
        keys = [(p.pos.y, p.pos.x) for p in s.snapshot().powerups]
        assert keys == sorted(keys)
