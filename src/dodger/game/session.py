"""Session aggregate and the read-only snapshot handed to renderers."""

from dataclasses import dataclass, field

from dodger.core.state import Phase
from dodger.game.entities import Obstacle, PowerUp


@dataclass
class SessionState:
    """Everything a running session mutates.

    Owned by the engine. Components receive it by reference for the
    duration of a tick and must not keep it.
    """

    score: int = 0
    distance: int = 0
    game_over: bool = False
    paused: bool = False
    power_up_active: bool = False
    power_up_hits: int = 0
    background_offset: float = 0.0
    tick: int = 0
    obstacles: list[Obstacle] = field(default_factory=list)
    power_ups: list[PowerUp] = field(default_factory=list)


@dataclass(frozen=True)
class GameSnapshot:
    """Immutable view of a session after a tick."""

    phase: Phase
    tick: int
    player_x: float
    player_y: float
    player_lane: int
    player_radius: float
    obstacles: tuple[tuple[float, float], ...]
    power_ups: tuple[tuple[float, float], ...]
    obstacle_radius: float
    power_up_radius: float
    score: int
    distance: int
    power_up_active: bool
    power_up_hits_left: int
    paused: bool
    game_over: bool
    background_offset: float
    field_width: float
    field_height: float

    def to_dict(self) -> dict:
        """Plain dict form, for logging and event payloads."""
        return {
            "phase": self.phase.name,
            "tick": self.tick,
            "player": {"x": self.player_x, "y": self.player_y, "lane": self.player_lane},
            "obstacles": [list(p) for p in self.obstacles],
            "power_ups": [list(p) for p in self.power_ups],
            "score": self.score,
            "distance": self.distance,
            "power_up_active": self.power_up_active,
            "power_up_hits_left": self.power_up_hits_left,
            "paused": self.paused,
            "game_over": self.game_over,
        }
