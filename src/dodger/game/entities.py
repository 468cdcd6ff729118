"""Round tokens that live on the play field."""

from dataclasses import dataclass


@dataclass
class Player:
    """The player token.

    ``y`` is fixed for the whole session; only the control resolver
    moves ``x`` and ``lane``.
    """

    x: float
    y: float
    lane: int
    radius: float


@dataclass
class Obstacle:
    """A falling obstacle pinned to a lane center."""

    x: float
    y: float
    radius: float
    passed: bool = False


@dataclass
class PowerUp:
    """A falling pickup that opens the power-up window."""

    x: float
    y: float
    radius: float
