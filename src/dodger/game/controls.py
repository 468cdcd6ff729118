"""
Lateral control: turns tilt or drag input into a lane and an x position.

Input sources write into a ControlInput slot whenever the device reports;
the engine reads that slot once at the start of every tick.
"""

from dataclasses import dataclass
from enum import Enum
import logging

from dodger.core.errors import ConfigurationError
from dodger.game.entities import Player

logger = logging.getLogger(__name__)


class ControlMode(Enum):
    """How the player steers."""

    TILT = "tilt"
    SWIPE = "swipe"

    @classmethod
    def parse(cls, value: "ControlMode | str") -> "ControlMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ConfigurationError(f"Unknown control mode: {value!r}") from None


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True)
class LaneGeometry:
    """Maps between lane indices and x coordinates."""

    width: float
    lanes: int

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ConfigurationError(f"Field width must be positive, got {self.width}")
        if self.lanes <= 0:
            raise ConfigurationError(f"Lane count must be positive, got {self.lanes}")

    @property
    def lane_width(self) -> float:
        return self.width / self.lanes

    @property
    def center_lane(self) -> int:
        return self.lanes // 2

    def center_of(self, lane: int) -> float:
        """X coordinate of a lane's center."""
        return self.lane_width * (lane + 0.5)

    def clamp_lane(self, lane: int) -> int:
        return int(clamp(lane, 0, self.lanes - 1))

    def clamp_x(self, x: float) -> float:
        return clamp(x, 0.0, self.width)

    def lane_for_x(self, x: float) -> int:
        """Nearest lane to ``x``; out-of-field values land in the edge lanes."""
        # Equivalent to round(x / lane_width - 0.5) with halves rounding up
        return self.clamp_lane(int(self.clamp_x(x) // self.lane_width))


class ControlInput:
    """Latest control reading, buffered between ticks.

    Only the most recent tilt value and drag position are kept. A drag
    release is held until the next tick consumes it.
    """

    def __init__(self) -> None:
        self.tilt: float = 0.0
        self.drag_x: float | None = None
        self.release_x: float | None = None

    @property
    def dragging(self) -> bool:
        return self.drag_x is not None

    def set_tilt(self, value: float) -> None:
        self.tilt = float(value)

    def begin_drag(self, x: float) -> None:
        self.drag_x = float(x)
        self.release_x = None

    def move_drag(self, x: float) -> None:
        if self.drag_x is not None:
            self.drag_x = float(x)

    def end_drag(self, x: float | None = None) -> None:
        if self.drag_x is None and x is None:
            return
        self.release_x = float(x) if x is not None else self.drag_x
        self.drag_x = None

    def clear(self) -> None:
        self.tilt = 0.0
        self.drag_x = None
        self.release_x = None


class ControlResolver:
    """Applies buffered control input to the player at tick start."""

    def __init__(
        self,
        mode: ControlMode,
        geometry: LaneGeometry,
        tilt_threshold: float = 0.2,
    ) -> None:
        self.mode = mode
        self.geometry = geometry
        self.tilt_threshold = tilt_threshold

    def lane_for_tilt(self, tilt: float) -> int:
        """Left of the dead zone is the first lane, right of it the last."""
        tilt = clamp(tilt, -1.0, 1.0)
        if tilt < -self.tilt_threshold:
            return 0
        if tilt > self.tilt_threshold:
            return self.geometry.lanes - 1
        return self.geometry.center_lane

    def apply(self, control: ControlInput, player: Player) -> None:
        if self.mode is ControlMode.TILT:
            player.lane = self.lane_for_tilt(control.tilt)
            player.x = self.geometry.center_of(player.lane)
        else:
            self._apply_swipe(control, player)

        assert 0 <= player.lane < self.geometry.lanes, f"lane out of range: {player.lane}"

    def _apply_swipe(self, control: ControlInput, player: Player) -> None:
        if control.release_x is not None:
            player.lane = self.geometry.lane_for_x(control.release_x)
            control.release_x = None
            logger.debug(f"Drag released, snapped to lane {player.lane}")

        if control.drag_x is not None:
            # Visual position follows the finger; the logical lane waits for release
            player.x = self.geometry.clamp_x(control.drag_x)
        else:
            player.x = self.geometry.center_of(player.lane)
