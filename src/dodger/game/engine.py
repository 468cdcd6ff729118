"""
Game engine: owns the session and drives it at a fixed tick rate.

Tick order:
    1. Control resolver moves the player from buffered input
    2. Difficulty scaler derives speed, spawn rate and obstacle cap
    3. Motion advances every falling entity
    4. Spawner rolls for new obstacles and power-ups
    5. Collision resolver applies scoring, power-up and game-over rules
    6. Off-field entities are pruned and distance grows

Hosts call advance() with wall-clock time from their frame callback; the
engine converts it into whole simulation ticks so results do not depend
on render frame rate.
"""

import logging
import random

from dodger.config.settings import FieldSettings, GameSettings
from dodger.core.errors import ConfigurationError
from dodger.core.events import Event, EventBus, EventType
from dodger.core.state import Phase, StateMachine
from dodger.game import difficulty as difficulty_scaler
from dodger.game import motion
from dodger.game.collisions import CollisionReport, CollisionResolver
from dodger.game.controls import (
    ControlInput,
    ControlMode,
    ControlResolver,
    LaneGeometry,
)
from dodger.game.difficulty import DifficultyProfile, EffectiveDifficulty, get_profile
from dodger.game.entities import Player
from dodger.game.session import GameSnapshot, SessionState
from dodger.game.spawner import SpawnResult, Spawner

logger = logging.getLogger(__name__)


class GameEngine:
    """Fixed-step simulation of a dodger session.

    The engine is the only writer of session state. Input sources write
    into ``controls``; everything else reads ``snapshot()`` or listens on
    the event bus.
    """

    def __init__(
        self,
        field: FieldSettings | None = None,
        game: GameSettings | None = None,
        event_bus: EventBus | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.field = field or FieldSettings()
        self.game = game or GameSettings()
        self.event_bus = event_bus or EventBus()
        self.rng = rng or random.Random()

        self.geometry = LaneGeometry(self.field.width, self.field.lanes)
        if self.field.height <= 0:
            raise ConfigurationError(f"Field height must be positive, got {self.field.height}")
        self.player_y = self.field.height - self.field.player_offset

        self.controls = ControlInput()
        self.state_machine = StateMachine()
        self.state_machine.add_listener(self._on_phase_change)

        self.collision_resolver = CollisionResolver(hit_cap=self.game.power_up_hit_cap)
        self.spawner = Spawner(
            self.geometry,
            obstacle_radius=self.field.obstacle_radius,
            power_up_radius=self.field.power_up_radius,
            power_up_chance=self.game.power_up_chance,
            rng=self.rng,
        )

        self.profile: DifficultyProfile | None = None
        self.control_mode: ControlMode | None = None
        self.resolver: ControlResolver | None = None
        self.player: Player | None = None
        self.state = SessionState()
        self.difficulty: EffectiveDifficulty | None = None

        self._accumulator = 0.0
        self._restarting = False

    # Session control

    @property
    def started(self) -> bool:
        return self.profile is not None

    @property
    def phase(self) -> Phase:
        return self.state_machine.phase

    @property
    def tick_interval(self) -> float:
        """Seconds of simulated time per tick."""
        return 1.0 / self.game.tick_rate

    def start(
        self,
        profile: DifficultyProfile | str | None = None,
        control_mode: ControlMode | str | None = None,
    ) -> None:
        """Begin a new session with the given difficulty and control scheme.

        Falls back to the configured difficulty and control mode. Raises
        ConfigurationError for unknown values.
        """
        if profile is None:
            profile = self.game.difficulty
        if isinstance(profile, str):
            profile = get_profile(profile)
        if control_mode is None:
            control_mode = self.game.control_mode
        control_mode = ControlMode.parse(control_mode)

        self.profile = profile
        self.control_mode = control_mode
        self.resolver = ControlResolver(
            self.control_mode,
            self.geometry,
            tilt_threshold=self.game.tilt_threshold,
        )
        self.state_machine.reset()
        self._new_session()

        logger.info(
            f"Session started: difficulty={profile.tag}, controls={self.control_mode.value}"
        )
        self._emit(EventType.SESSION_STARTED, {
            "difficulty": profile.tag,
            "control_mode": self.control_mode.value,
        })

    def pause(self) -> bool:
        """Suspend ticking. Returns False if nothing changed."""
        self._require_started()
        if self.phase is not Phase.RUNNING:
            return False
        return self.state_machine.transition(Phase.PAUSED)

    def resume(self) -> bool:
        """Resume a paused session. Returns False if nothing changed."""
        self._require_started()
        if self.phase is not Phase.PAUSED:
            return False
        return self.state_machine.transition(Phase.RUNNING)

    def restart(self) -> None:
        """Discard every entity and all session totals, then run again."""
        self._require_started()
        self._new_session()
        self._restarting = True
        try:
            self.state_machine.transition(Phase.RUNNING)
        finally:
            self._restarting = False

    def _new_session(self) -> None:
        center = self.geometry.center_lane
        self.player = Player(
            x=self.geometry.center_of(center),
            y=self.player_y,
            lane=center,
            radius=self.field.player_radius,
        )
        self.state = SessionState()
        self.controls.clear()
        self.difficulty = difficulty_scaler.scale(self.profile, 0)
        self._accumulator = 0.0

    def _require_started(self) -> None:
        if not self.started:
            raise RuntimeError("Session not started; call start() first")

    def _on_phase_change(self, old: Phase, new: Phase) -> None:
        self.state.paused = new is Phase.PAUSED
        self.state.game_over = new is Phase.GAME_OVER

        if self._restarting:
            logger.info(f"Session restarted from {old.name}")
            self._emit(EventType.SESSION_RESTARTED)
        elif new is Phase.PAUSED:
            logger.info("Session paused")
            self._emit(EventType.SESSION_PAUSED)
        elif new is Phase.RUNNING:
            logger.info("Session resumed")
            self._emit(EventType.SESSION_RESUMED)
        elif new is Phase.GAME_OVER:
            logger.info(
                f"Game over: score={self.state.score}, distance={self.state.distance}"
            )
            self._emit(EventType.GAME_OVER, {
                "score": self.state.score,
                "distance": self.state.distance,
                "difficulty": self.profile.tag,
            })

    # Clock

    def advance(self, elapsed: float) -> int:
        """Feed wall-clock seconds; run as many whole ticks as they cover.

        Returns the number of ticks run. Catch-up after a long stall is
        capped at ``max_ticks_per_advance``; the surplus is dropped.
        """
        if not self.started or not self.state_machine.is_running:
            return 0

        self._accumulator += max(0.0, elapsed)
        due = int(self._accumulator / self.tick_interval)
        self._accumulator -= due * self.tick_interval

        limit = self.game.max_ticks_per_advance
        if due > limit:
            logger.warning(f"Dropping {due - limit} ticks of catch-up")
            due = limit
            self._accumulator = 0.0

        ran = 0
        for _ in range(due):
            if not self.tick():
                self._accumulator = 0.0
                break
            ran += 1
        return ran

    def tick(self) -> bool:
        """Run exactly one simulation step.

        Returns False without touching state when the session is paused,
        over, or not started.
        """
        if not self.started or not self.state_machine.is_running:
            return False

        state = self.state
        player = self.player

        self.resolver.apply(self.controls, player)

        self.difficulty = difficulty_scaler.scale(self.profile, state.score)
        speed = self.difficulty.speed

        motion.advance(state, speed, self.field.height)

        spawned = self.spawner.spawn(state, self.difficulty)

        report = self.collision_resolver.resolve(state, player)

        motion.prune(state, self.field.height)

        state.distance += speed
        state.tick += 1

        self._check_invariants()
        self._publish(spawned, report)

        if report.fatal is not None:
            self.state_machine.transition(Phase.GAME_OVER)

        self._emit(EventType.TICK, {"snapshot": self.snapshot()})
        return True

    def _check_invariants(self) -> None:
        assert 0 <= self.player.lane < self.geometry.lanes, "player lane out of range"
        assert len(self.state.power_ups) <= 1, "more than one live power-up"
        assert 0 <= self.state.power_up_hits < self.game.power_up_hit_cap, "hit counter past cap"

    def _publish(self, spawned: SpawnResult, report: CollisionReport) -> None:
        if spawned.obstacle is not None:
            self._emit(EventType.OBSTACLE_SPAWNED, {"x": spawned.obstacle.x})
        if spawned.power_up is not None:
            self._emit(EventType.POWER_UP_SPAWNED, {"x": spawned.power_up.x})
        for obstacle in report.passed:
            logger.debug(f"Obstacle passed, score={self.state.score}")
            self._emit(EventType.OBSTACLE_PASSED, {"x": obstacle.x, "score": self.state.score})
        for obstacle in report.neutralized:
            self._emit(EventType.OBSTACLE_NEUTRALIZED, {"x": obstacle.x, "score": self.state.score})
        if report.collected:
            logger.debug("Power-up collected")
            self._emit(EventType.POWER_UP_COLLECTED)
        if report.power_up_expired:
            logger.debug("Power-up expired")
            self._emit(EventType.POWER_UP_EXPIRED)

    def _emit(self, event_type: EventType, data: dict | None = None) -> None:
        self.event_bus.emit(Event(type=event_type, data=data or {}))

    # Output

    def snapshot(self) -> GameSnapshot:
        """Read-only view of the current session for renderers."""
        self._require_started()
        state = self.state
        hits_left = (
            self.game.power_up_hit_cap - state.power_up_hits
            if state.power_up_active else 0
        )
        return GameSnapshot(
            phase=self.phase,
            tick=state.tick,
            player_x=self.player.x,
            player_y=self.player.y,
            player_lane=self.player.lane,
            player_radius=self.player.radius,
            obstacles=tuple((o.x, o.y) for o in state.obstacles),
            power_ups=tuple((p.x, p.y) for p in state.power_ups),
            obstacle_radius=self.field.obstacle_radius,
            power_up_radius=self.field.power_up_radius,
            score=state.score,
            distance=state.distance,
            power_up_active=state.power_up_active,
            power_up_hits_left=hits_left,
            paused=state.paused,
            game_over=state.game_over,
            background_offset=state.background_offset,
            field_width=self.field.width,
            field_height=self.field.height,
        )
