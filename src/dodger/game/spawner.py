"""Procedural spawning of obstacles and power-ups."""

from dataclasses import dataclass
import logging
import random

from dodger.game.controls import LaneGeometry
from dodger.game.difficulty import EffectiveDifficulty
from dodger.game.entities import Obstacle, PowerUp
from dodger.game.session import SessionState

logger = logging.getLogger(__name__)


@dataclass
class SpawnResult:
    """What the spawner created this tick."""

    obstacle: Obstacle | None = None
    power_up: PowerUp | None = None


class Spawner:
    """Rolls for new entities once per tick.

    Each roll is independent, so spawn timing follows a geometric
    distribution. Caps are hard: the live obstacle count never exceeds
    the effective maximum and at most one power-up is ever live.
    """

    def __init__(
        self,
        geometry: LaneGeometry,
        obstacle_radius: float,
        power_up_radius: float,
        power_up_chance: float = 0.01,
        rng: random.Random | None = None,
    ) -> None:
        self.geometry = geometry
        self.obstacle_radius = obstacle_radius
        self.power_up_radius = power_up_radius
        self.power_up_chance = power_up_chance
        self.rng = rng or random.Random()

    def _random_lane_x(self) -> float:
        return self.geometry.center_of(self.rng.randrange(self.geometry.lanes))

    def spawn(self, state: SessionState, difficulty: EffectiveDifficulty) -> SpawnResult:
        result = SpawnResult()

        if (
            len(state.obstacles) < difficulty.max_obstacles
            and self.rng.random() < difficulty.spawn_rate
        ):
            obstacle = Obstacle(
                x=self._random_lane_x(),
                y=-self.obstacle_radius,
                radius=self.obstacle_radius,
            )
            state.obstacles.append(obstacle)
            result.obstacle = obstacle
            logger.debug(f"Spawned obstacle at x={obstacle.x:.0f}")

        if not state.power_ups and self.rng.random() < self.power_up_chance:
            power_up = PowerUp(
                x=self._random_lane_x(),
                y=-self.power_up_radius,
                radius=self.power_up_radius,
            )
            state.power_ups.append(power_up)
            result.power_up = power_up
            logger.debug(f"Spawned power-up at x={power_up.x:.0f}")

        assert len(state.power_ups) <= 1, "more than one live power-up"
        return result
