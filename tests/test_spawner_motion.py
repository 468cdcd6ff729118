"""Tests for spawning, motion and pruning."""

import random
import unittest

from dodger.game import motion
from dodger.game.controls import LaneGeometry
from dodger.game.difficulty import EffectiveDifficulty
from dodger.game.entities import Obstacle, PowerUp
from dodger.game.session import SessionState
from dodger.game.spawner import Spawner


class ScriptedRandom(random.Random):
    """Returns queued rolls, then 0.99 (never spawns)."""

    def __init__(self, rolls=(), lane=0):
        super().__init__(0)
        self.rolls = list(rolls)
        self.lane = lane

    def random(self):
        return self.rolls.pop(0) if self.rolls else 0.99

    def randrange(self, *args, **kwargs):
        return self.lane


DIFFICULTY = EffectiveDifficulty(speed=6, spawn_rate=0.035, max_obstacles=5)


def make_spawner(rng):
    return Spawner(
        LaneGeometry(375, 3),
        obstacle_radius=20,
        power_up_radius=18,
        power_up_chance=0.01,
        rng=rng,
    )


class TestSpawner(unittest.TestCase):
    """Obstacle and power-up spawning."""

    def test_obstacle_spawns_on_winning_roll(self):
        spawner = make_spawner(ScriptedRandom([0.01], lane=2))
        state = SessionState()
        result = spawner.spawn(state, DIFFICULTY)

        self.assertEqual(len(state.obstacles), 1)
        obstacle = state.obstacles[0]
        self.assertIs(result.obstacle, obstacle)
        self.assertEqual(obstacle.x, 312.5)
        self.assertEqual(obstacle.y, -20)
        self.assertFalse(obstacle.passed)
        self.assertEqual(state.power_ups, [])

    def test_obstacle_not_spawned_on_losing_roll(self):
        spawner = make_spawner(ScriptedRandom([0.035]))
        state = SessionState()
        result = spawner.spawn(state, DIFFICULTY)

        self.assertIsNone(result.obstacle)
        self.assertEqual(state.obstacles, [])

    def test_obstacle_cap_is_respected(self):
        spawner = make_spawner(ScriptedRandom([0.0, 0.99]))
        state = SessionState(obstacles=[Obstacle(62.5, 100, 20) for _ in range(5)])
        spawner.spawn(state, DIFFICULTY)

        self.assertEqual(len(state.obstacles), 5)

    def test_power_up_spawns_above_field(self):
        spawner = make_spawner(ScriptedRandom([0.99, 0.005], lane=0))
        state = SessionState()
        result = spawner.spawn(state, DIFFICULTY)

        self.assertEqual(len(state.power_ups), 1)
        self.assertIs(result.power_up, state.power_ups[0])
        self.assertEqual(state.power_ups[0].x, 62.5)
        self.assertEqual(state.power_ups[0].y, -18)

    def test_at_most_one_power_up(self):
        spawner = make_spawner(ScriptedRandom([0.99, 0.0, 0.99, 0.0]))
        state = SessionState(power_ups=[PowerUp(187.5, 50, 18)])
        spawner.spawn(state, DIFFICULTY)
        spawner.spawn(state, DIFFICULTY)

        self.assertEqual(len(state.power_ups), 1)

    def test_both_can_spawn_in_one_tick(self):
        spawner = make_spawner(ScriptedRandom([0.0, 0.0]))
        state = SessionState()
        result = spawner.spawn(state, DIFFICULTY)

        self.assertIsNotNone(result.obstacle)
        self.assertIsNotNone(result.power_up)

    def test_realized_rate_tracks_probability(self):
        """Independent per-tick rolls average out to the spawn rate."""
        spawner = make_spawner(random.Random(1234))
        spawned = 0
        trials = 20_000
        for _ in range(trials):
            state = SessionState()
            if spawner.spawn(state, DIFFICULTY).obstacle is not None:
                spawned += 1

        self.assertAlmostEqual(spawned / trials, 0.035, delta=0.01)

    def test_lanes_are_uniform(self):
        spawner = make_spawner(random.Random(99))
        always = EffectiveDifficulty(speed=6, spawn_rate=1.0, max_obstacles=1)
        counts = {62.5: 0, 187.5: 0, 312.5: 0}
        for _ in range(3000):
            state = SessionState()
            spawner.spawn(state, always)
            counts[state.obstacles[0].x] += 1

        for count in counts.values():
            self.assertGreater(count, 800)


class TestMotion(unittest.TestCase):
    """Advancing and pruning."""

    def test_all_entities_move_by_speed(self):
        state = SessionState(
            obstacles=[Obstacle(62.5, -20, 20), Obstacle(187.5, 300, 20)],
            power_ups=[PowerUp(312.5, 10, 18)],
        )
        motion.advance(state, 7, 667)

        self.assertEqual([o.y for o in state.obstacles], [-13, 307])
        self.assertEqual(state.power_ups[0].y, 17)

    def test_background_wraps(self):
        state = SessionState(background_offset=665)
        motion.advance(state, 6, 667)
        self.assertEqual(state.background_offset, 4)

    def test_prune_removes_only_fully_exited(self):
        inside = Obstacle(62.5, 687, 20)
        gone = Obstacle(62.5, 687.5, 20)
        power_up = PowerUp(62.5, 700, 18)
        state = SessionState(score=4, obstacles=[inside, gone], power_ups=[power_up])

        removed = motion.prune(state, 667)

        self.assertEqual(removed, 2)
        self.assertEqual(state.obstacles, [inside])
        self.assertEqual(state.power_ups, [])
        self.assertEqual(state.score, 4)


if __name__ == "__main__":
    unittest.main()
