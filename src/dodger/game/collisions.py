"""Collision detection and the scoring rules that hang off it."""

from dataclasses import dataclass, field
import logging
import math

from dodger.game.entities import Obstacle, Player, PowerUp
from dodger.game.session import SessionState

logger = logging.getLogger(__name__)

POWER_UP_HIT_CAP = 3


def collides(
    a: tuple[float, float],
    b: tuple[float, float],
    radius_a: float,
    radius_b: float,
) -> bool:
    """True when two circles overlap (touching edges do not count)."""
    return math.hypot(a[0] - b[0], a[1] - b[1]) < radius_a + radius_b


@dataclass
class CollisionReport:
    """What the resolver changed during one tick."""

    fatal: Obstacle | None = None
    passed: list[Obstacle] = field(default_factory=list)
    neutralized: list[Obstacle] = field(default_factory=list)
    collected: list[PowerUp] = field(default_factory=list)
    power_up_expired: bool = False

    @property
    def points(self) -> int:
        return len(self.passed) + len(self.neutralized)


class CollisionResolver:
    """Resolves the player against every live entity.

    For each obstacle the overlap test runs before the pass check, so an
    obstacle that is hit is never also scored for passing. A fatal hit
    ends resolution for the tick: later obstacles and power-ups are left
    untouched.
    """

    def __init__(self, hit_cap: int = POWER_UP_HIT_CAP) -> None:
        self.hit_cap = hit_cap

    def resolve(self, state: SessionState, player: Player) -> CollisionReport:
        report = CollisionReport()
        pos = (player.x, player.y)
        pass_line = player.y + player.radius

        remaining: list[Obstacle] = []
        for index, obstacle in enumerate(state.obstacles):
            if collides(pos, (obstacle.x, obstacle.y), player.radius, obstacle.radius):
                if state.power_up_active:
                    state.score += 1
                    state.power_up_hits += 1
                    report.neutralized.append(obstacle)
                    continue

                state.game_over = True
                report.fatal = obstacle
                # Nothing after the fatal hit scores or collects
                remaining.extend(state.obstacles[index + 1:])
                state.obstacles = remaining
                logger.debug(f"Fatal collision at ({obstacle.x:.0f}, {obstacle.y:.0f})")
                return report

            if not obstacle.passed and obstacle.y > pass_line:
                obstacle.passed = True
                state.score += 1
                report.passed.append(obstacle)

            remaining.append(obstacle)
        state.obstacles = remaining

        kept: list[PowerUp] = []
        for power_up in state.power_ups:
            if collides(pos, (power_up.x, power_up.y), player.radius, power_up.radius):
                state.power_up_active = True
                state.power_up_hits = 0
                report.collected.append(power_up)
                continue
            kept.append(power_up)
        state.power_ups = kept

        if state.power_up_active and state.power_up_hits >= self.hit_cap:
            state.power_up_active = False
            state.power_up_hits = 0
            report.power_up_expired = True

        return report
