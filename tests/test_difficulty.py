"""Tests for difficulty profiles and the score-driven ramp."""

import unittest

from dodger.core.errors import ConfigurationError
from dodger.game.difficulty import (
    EASY,
    HARD,
    NORMAL,
    PROFILES,
    effective_max_obstacles,
    effective_spawn_rate,
    effective_speed,
    get_profile,
    scale,
)


class TestProfiles(unittest.TestCase):
    """Base tiers and lookup."""

    def test_tier_values(self):
        self.assertEqual((EASY.speed, EASY.spawn_rate, EASY.max_obstacles), (4, 0.02, 3))
        self.assertEqual((NORMAL.speed, NORMAL.spawn_rate, NORMAL.max_obstacles), (6, 0.035, 5))
        self.assertEqual((HARD.speed, HARD.spawn_rate, HARD.max_obstacles), (8, 0.06, 7))

    def test_lookup_is_case_insensitive(self):
        self.assertIs(get_profile("Normal"), NORMAL)
        self.assertIs(get_profile(" hard "), HARD)

    def test_aliases_map_to_tiers(self):
        self.assertIs(get_profile("casual"), EASY)
        self.assertIs(get_profile("standard"), NORMAL)
        self.assertIs(get_profile("challenging"), HARD)

    def test_unknown_tag_is_a_configuration_error(self):
        with self.assertRaises(ConfigurationError) as ctx:
            get_profile("nightmare")
        self.assertIn("nightmare", str(ctx.exception))

    def test_configuration_error_is_a_value_error(self):
        with self.assertRaises(ValueError):
            get_profile("")

    def test_profiles_are_immutable(self):
        with self.assertRaises(AttributeError):
            NORMAL.speed = 99


class TestScaling(unittest.TestCase):
    """Effective values derived from score."""

    def test_standard_profile_at_zero(self):
        """Score 0 leaves the base profile untouched."""
        eff = scale(NORMAL, 0)
        self.assertEqual(eff.speed, 6)
        self.assertAlmostEqual(eff.spawn_rate, 0.035)
        self.assertEqual(eff.max_obstacles, 5)

    def test_standard_profile_at_25(self):
        eff = scale(NORMAL, 25)
        self.assertEqual(eff.speed, 8)
        self.assertAlmostEqual(eff.spawn_rate, 0.06)
        self.assertEqual(eff.max_obstacles, 6)

    def test_speed_steps_every_ten_points(self):
        self.assertEqual(effective_speed(NORMAL, 9), 6)
        self.assertEqual(effective_speed(NORMAL, 10), 7)
        self.assertEqual(effective_speed(NORMAL, 19), 7)
        self.assertEqual(effective_speed(NORMAL, 20), 8)

    def test_spawn_rate_bonus_is_capped(self):
        self.assertAlmostEqual(effective_spawn_rate(EASY, 30), 0.05)
        self.assertAlmostEqual(effective_spawn_rate(EASY, 31), 0.05)
        self.assertAlmostEqual(effective_spawn_rate(EASY, 1000), 0.05)

    def test_capacity_steps_every_twenty_points(self):
        self.assertEqual(effective_max_obstacles(HARD, 19), 7)
        self.assertEqual(effective_max_obstacles(HARD, 20), 8)
        self.assertEqual(effective_max_obstacles(HARD, 45), 9)

    def test_monotonic_in_score(self):
        """No effective value ever drops as the score grows."""
        for profile in set(PROFILES.values()):
            previous = scale(profile, 0)
            for score in range(1, 250):
                current = scale(profile, score)
                self.assertLessEqual(previous.speed, current.speed)
                self.assertLessEqual(previous.spawn_rate, current.spawn_rate)
                self.assertLessEqual(previous.max_obstacles, current.max_obstacles)
                previous = current


if __name__ == "__main__":
    unittest.main()
