"""Game systems: RNG, maze generation, spawning, adaptation."""

from maze_escape.systems.rng import DeterministicRNG
from maze_escape.systems.maze_generator import MazeGenerator
from maze_escape.systems.spawner import EntitySpawner
from maze_escape.systems.adaptation import AdaptationEngine

__all__ = ["AdaptationEngine", "DeterministicRNG", "EntitySpawner", "MazeGenerator"]
