"""Simulation core: entities, rules and the tick-driven engine."""

from dodger.game.collisions import CollisionReport, CollisionResolver, collides
from dodger.game.controls import ControlInput, ControlMode, ControlResolver, LaneGeometry
from dodger.game.difficulty import DifficultyProfile, EffectiveDifficulty, get_profile
from dodger.game.engine import GameEngine
from dodger.game.entities import Obstacle, Player, PowerUp
from dodger.game.session import GameSnapshot, SessionState
from dodger.game.spawner import Spawner

__all__ = [
    "CollisionReport",
    "CollisionResolver",
    "collides",
    "ControlInput",
    "ControlMode",
    "ControlResolver",
    "LaneGeometry",
    "DifficultyProfile",
    "EffectiveDifficulty",
    "get_profile",
    "GameEngine",
    "Obstacle",
    "Player",
    "PowerUp",
    "GameSnapshot",
    "SessionState",
    "Spawner",
]
