"""Difficulty profiles and the score-driven difficulty ramp."""

from dataclasses import dataclass

from dodger.core.errors import ConfigurationError


@dataclass(frozen=True)
class DifficultyProfile:
    """Base pacing for a difficulty tier."""

    tag: str
    speed: int
    spawn_rate: float
    max_obstacles: int


@dataclass(frozen=True)
class EffectiveDifficulty:
    """Difficulty in force for a single tick."""

    speed: int
    spawn_rate: float
    max_obstacles: int


EASY = DifficultyProfile("easy", speed=4, spawn_rate=0.02, max_obstacles=3)
NORMAL = DifficultyProfile("normal", speed=6, spawn_rate=0.035, max_obstacles=5)
HARD = DifficultyProfile("hard", speed=8, spawn_rate=0.06, max_obstacles=7)

PROFILES: dict[str, DifficultyProfile] = {
    "easy": EASY,
    "normal": NORMAL,
    "hard": HARD,
    # Tier names used by the settings screen
    "casual": EASY,
    "standard": NORMAL,
    "challenging": HARD,
}

SPEED_STEP_POINTS = 10
SPAWN_RATE_PER_POINT = 0.001
SPAWN_RATE_BONUS_CAP = 0.03
CAPACITY_STEP_POINTS = 20


def get_profile(tag: str) -> DifficultyProfile:
    """Look up a profile by tag (case-insensitive)."""
    try:
        return PROFILES[tag.strip().lower()]
    except KeyError:
        known = ", ".join(sorted(PROFILES))
        raise ConfigurationError(
            f"Unknown difficulty: {tag!r} (expected one of: {known})"
        ) from None


def effective_speed(profile: DifficultyProfile, score: int) -> int:
    return profile.speed + score // SPEED_STEP_POINTS


def effective_spawn_rate(profile: DifficultyProfile, score: int) -> float:
    return profile.spawn_rate + min(SPAWN_RATE_BONUS_CAP, score * SPAWN_RATE_PER_POINT)


def effective_max_obstacles(profile: DifficultyProfile, score: int) -> int:
    return profile.max_obstacles + score // CAPACITY_STEP_POINTS


def scale(profile: DifficultyProfile, score: int) -> EffectiveDifficulty:
    """Derive this tick's speed, spawn rate and obstacle cap from the score."""
    return EffectiveDifficulty(
        speed=effective_speed(profile, score),
        spawn_rate=effective_spawn_rate(profile, score),
        max_obstacles=effective_max_obstacles(profile, score),
    )
