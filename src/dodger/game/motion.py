"""Per-tick motion and off-field pruning."""

from dodger.game.session import SessionState


def advance(state: SessionState, speed: float, field_height: float) -> None:
    """Move every falling entity down by ``speed`` and scroll the background."""
    for obstacle in state.obstacles:
        obstacle.y += speed
    for power_up in state.power_ups:
        power_up.y += speed

    state.background_offset = (state.background_offset + speed) % field_height


def prune(state: SessionState, field_height: float) -> int:
    """Drop entities that have fallen past the bottom edge.

    Returns how many were removed. Removal never affects the score.
    """
    before = len(state.obstacles) + len(state.power_ups)
    state.obstacles = [o for o in state.obstacles if o.y <= field_height + o.radius]
    state.power_ups = [p for p in state.power_ups if p.y <= field_height + p.radius]
    return before - len(state.obstacles) - len(state.power_ups)
