"""Tests for the session state machine and the event bus."""

import unittest

from dodger.core.events import Event, EventBus, EventType
from dodger.core.state import Phase, StateMachine


class TestStateMachine(unittest.TestCase):
    """Phase transitions and listeners."""

    def setUp(self):
        self.machine = StateMachine()
        self.changes = []
        self.machine.add_listener(lambda old, new: self.changes.append((old, new)))

    def test_starts_running(self):
        self.assertIs(self.machine.phase, Phase.RUNNING)
        self.assertTrue(self.machine.is_running)

    def test_pause_resume(self):
        self.assertTrue(self.machine.transition(Phase.PAUSED))
        self.assertFalse(self.machine.is_running)
        self.assertTrue(self.machine.transition(Phase.RUNNING))
        self.assertEqual(
            self.changes,
            [(Phase.RUNNING, Phase.PAUSED), (Phase.PAUSED, Phase.RUNNING)],
        )

    def test_game_over_only_leaves_by_restart(self):
        self.machine.transition(Phase.GAME_OVER)

        self.assertFalse(self.machine.can_transition(Phase.PAUSED))
        self.assertFalse(self.machine.can_transition(Phase.GAME_OVER))
        self.assertTrue(self.machine.can_transition(Phase.RUNNING))

    def test_invalid_transition_is_rejected_and_logged(self):
        self.machine.transition(Phase.GAME_OVER)
        self.changes.clear()

        with self.assertLogs("dodger.core.state", level="WARNING"):
            self.assertFalse(self.machine.transition(Phase.PAUSED))

        self.assertIs(self.machine.phase, Phase.GAME_OVER)
        self.assertEqual(self.changes, [])

    def test_paused_cannot_end_game(self):
        self.machine.transition(Phase.PAUSED)
        self.assertFalse(self.machine.can_transition(Phase.GAME_OVER))

    def test_listener_errors_do_not_block_transition(self):
        def broken(old, new):
            raise RuntimeError("boom")

        self.machine.add_listener(broken)
        with self.assertLogs("dodger.core.state", level="ERROR") as logs:
            self.assertTrue(self.machine.transition(Phase.PAUSED))

        self.assertIn("boom", logs.output[0])
        self.assertIs(self.machine.phase, Phase.PAUSED)

    def test_remove_listener(self):
        self.machine = StateMachine()
        seen = []
        listener = lambda old, new: seen.append(new)
        self.machine.add_listener(listener)
        self.machine.remove_listener(listener)
        self.machine.remove_listener(listener)
        self.machine.transition(Phase.PAUSED)
        self.assertEqual(seen, [])

    def test_reset_is_silent(self):
        self.machine.transition(Phase.GAME_OVER)
        self.changes.clear()
        self.machine.reset()

        self.assertIs(self.machine.phase, Phase.RUNNING)
        self.assertEqual(self.changes, [])


class TestEventBus(unittest.TestCase):
    """Subscription and dispatch."""

    def setUp(self):
        self.bus = EventBus()

    def test_subscribe_and_unsubscribe(self):
        seen = []
        unsubscribe = self.bus.subscribe(EventType.GAME_OVER, seen.append)

        self.bus.emit(Event(EventType.GAME_OVER, {"score": 4}))
        self.bus.emit(Event(EventType.TICK))
        unsubscribe()
        unsubscribe()
        self.bus.emit(Event(EventType.GAME_OVER))

        self.assertEqual(len(seen), 1)
        self.assertEqual(seen[0].data["score"], 4)

    def test_emit_without_subscribers(self):
        self.bus.emit(Event(EventType.POWER_UP_EXPIRED))

    def test_handler_errors_are_logged(self):
        seen = []

        def broken(event):
            raise ValueError("bad handler")

        self.bus.subscribe(EventType.TICK, broken)
        self.bus.subscribe(EventType.TICK, seen.append)

        with self.assertLogs("dodger.core.events", level="ERROR") as logs:
            self.bus.emit(Event(EventType.TICK))
        self.assertIn("bad handler", logs.output[0])
        self.assertEqual(len(seen), 1)

    def test_handler_may_unsubscribe_during_emit(self):
        """Removing a handler mid-dispatch does not skip the next one."""
        seen = []
        unsubscribe = None

        def once(event):
            seen.append("once")
            unsubscribe()

        unsubscribe = self.bus.subscribe(EventType.GAME_OVER, once)
        self.bus.subscribe(EventType.GAME_OVER, lambda event: seen.append("always"))

        self.bus.emit(Event(EventType.GAME_OVER))
        self.bus.emit(Event(EventType.GAME_OVER))

        self.assertEqual(seen, ["once", "always", "always"])


if __name__ == "__main__":
    unittest.main()
