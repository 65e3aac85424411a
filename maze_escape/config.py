"""Game configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GameConfig:
    """Immutable configuration for a game session."""

    # World
    seed: int = 42
    grid_size: int = 15
    wall_chance: float = 0.3

    # Entities
    enemy_count: int = 2
    powerup_chance: float = 0.05
    max_spawn_attempts: int = 500
    powerup_spawn_attempts: int = 10

    # Pursuit
    path_refresh_interval: int = 5
    intelligence_base: float = 0.2
    intelligence_spread: float = 0.3      # scaled by difficulty
    intelligence_gain: float = 0.001      # per enemy move, scaled by difficulty
    intelligence_cap: float = 0.9

    # Adaptation
    adaptation_rate: float = 0.15
    adaptation_interval: int = 10
    adaptation_min_history: int = 5
    adaptation_window: int = 5            # recent moves inspected for bias
    adaptation_safe_radius: int = 3       # cells closer than this never change
    biased_wall_probability: float = 0.7
    base_wall_probability: float = 0.3
    adaptive_powerup_chance: float = 0.2
    low_health_threshold: int = 50

    # Player
    max_health: int = 100
    enemy_damage: int = 10
    health_bonus: int = 20
    score_bonus: int = 100
    move_score: int = 1
    history_capacity: int = 20

    # Progression
    difficulty_step: float = 0.5
    win_transition_ticks: int = 20        # 2 s at the default tick rate
    loss_transition_ticks: int = 30       # 3 s at the default tick rate

    # Scheduler
    tick_seconds: float = 0.1

    # Logging
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.grid_size < 5:
            raise ValueError(f"grid_size must be at least 5, got {self.grid_size}")
        for name in (
            "wall_chance", "powerup_chance", "adaptation_rate",
            "biased_wall_probability", "base_wall_probability",
            "adaptive_powerup_chance", "intelligence_cap",
        ):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")
        for name in ("adaptation_interval", "path_refresh_interval", "history_capacity"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.enemy_count < 0:
            raise ValueError(f"enemy_count must be non-negative, got {self.enemy_count}")
