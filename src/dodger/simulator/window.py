"""
Desktop host for the dodger engine using pygame.

Feeds keyboard and mouse input into the engine's control slot, advances
the engine from the frame clock and draws whatever snapshot it exposes.
"""

import pygame
import asyncio
import logging
from dataclasses import dataclass

from ..core.state import Phase
from ..game.controls import ControlMode
from ..game.engine import GameEngine
from ..game.session import GameSnapshot
from ..input.tilt import TiltSmoother
from ..storage.high_score import HighScoreStore

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    """Simulator window configuration."""
    title: str = "Field Dodger"
    fps: int = 60
    scale: float = 1.0

    # Colors
    bg_color: tuple[int, int, int] = (51, 51, 51)
    stripe_color: tuple[int, int, int] = (60, 60, 60)
    player_color: tuple[int, int, int] = (231, 76, 60)
    obstacle_color: tuple[int, int, int] = (52, 152, 219)
    power_up_color: tuple[int, int, int] = (46, 204, 64)
    outline_color: tuple[int, int, int] = (255, 255, 255)
    text_color: tuple[int, int, int] = (255, 255, 255)
    accent_color: tuple[int, int, int] = (0, 255, 255)


class SimulatorWindow:
    """
    pygame window that plays one engine.

    Keyboard Mapping:
        LEFT/RIGHT: Tilt (tilt mode)
        Mouse drag: Swipe (swipe mode)
        P: Pause / resume
        R / SPACE: Restart (after game over or while paused)
        ESC / Q: Exit
    """

    STRIPE_SPACING = 50

    def __init__(
        self,
        engine: GameEngine,
        config: WindowConfig | None = None,
        tilt: TiltSmoother | None = None,
        high_scores: HighScoreStore | None = None,
    ) -> None:
        self.engine = engine
        self.config = config or WindowConfig()
        self.tilt = tilt or TiltSmoother()
        self.high_scores = high_scores

        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._font: pygame.font.Font | None = None
        self._big_font: pygame.font.Font | None = None
        self._running = False
        self._frame_count = 0

        logger.info("SimulatorWindow created")

    @property
    def size(self) -> tuple[int, int]:
        field = self.engine.field
        return (
            int(field.width * self.config.scale),
            int(field.height * self.config.scale),
        )

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)
        self._screen = pygame.display.set_mode(self.size, pygame.DOUBLEBUF)
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont(None, int(24 * self.config.scale))
        self._big_font = pygame.font.SysFont(None, int(40 * self.config.scale))

        logger.info(f"Pygame initialized: {self.size[0]}x{self.size[1]}")

    def _to_field_x(self, screen_x: float) -> float:
        return screen_x / self.config.scale

    # Input

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False
            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)
            elif self.engine.control_mode is ControlMode.SWIPE:
                self._handle_pointer(event)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        key = event.key

        if key in (pygame.K_ESCAPE, pygame.K_q):
            self._running = False
        elif key == pygame.K_p:
            if not self.engine.pause():
                self.engine.resume()
        elif key in (pygame.K_r, pygame.K_SPACE):
            if self.engine.state.game_over or self.engine.state.paused:
                self.tilt.reset()
                self.engine.restart()

    def _handle_pointer(self, event: pygame.event.Event) -> None:
        controls = self.engine.controls
        if self.engine.phase is not Phase.RUNNING:
            # Letting go while paused or over cancels the drag without a lane change
            if event.type == pygame.MOUSEBUTTONUP:
                controls.clear()
            return
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            controls.begin_drag(self._to_field_x(event.pos[0]))
        elif event.type == pygame.MOUSEMOTION and controls.dragging:
            controls.move_drag(self._to_field_x(event.pos[0]))
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            controls.end_drag(self._to_field_x(event.pos[0]))

    def _sample_tilt(self) -> None:
        """Arrow keys stand in for the accelerometer."""
        if self.engine.control_mode is not ControlMode.TILT:
            return
        keys = pygame.key.get_pressed()
        raw = 0.0
        if keys[pygame.K_LEFT]:
            raw -= 1.0
        if keys[pygame.K_RIGHT]:
            raw += 1.0
        self.engine.controls.set_tilt(self.tilt.push(raw))

    # Rendering

    def _render(self) -> None:
        if not self._screen:
            return

        snap = self.engine.snapshot()
        self._screen.fill(self.config.bg_color)

        self._render_field(snap)
        if not snap.game_over:
            self._render_entities(snap)
        self._render_hud(snap)

        if snap.game_over:
            self._render_banner(
                "GAME OVER",
                f"Score {snap.score}   Distance {snap.distance} yds",
                "R to retry",
            )
        elif snap.paused:
            self._render_banner("PAUSED", "P to resume", "R to restart")

        pygame.display.flip()

    def _render_field(self, snap: GameSnapshot) -> None:
        s = self.config.scale
        width = self.size[0]
        offset = snap.background_offset % self.STRIPE_SPACING
        y = offset - self.STRIPE_SPACING
        while y < snap.field_height:
            pygame.draw.line(
                self._screen, self.config.stripe_color,
                (0, int(y * s)), (width, int(y * s)), 2
            )
            y += self.STRIPE_SPACING

    def _draw_token(self, x: float, y: float, radius: float, color: tuple[int, int, int]) -> None:
        s = self.config.scale
        center = (int(x * s), int(y * s))
        pygame.draw.circle(self._screen, color, center, int(radius * s))
        pygame.draw.circle(self._screen, self.config.outline_color, center, int(radius * s), 2)

    def _render_entities(self, snap: GameSnapshot) -> None:
        for x, y in snap.obstacles:
            self._draw_token(x, y, snap.obstacle_radius, self.config.obstacle_color)
        for x, y in snap.power_ups:
            self._draw_token(x, y, snap.power_up_radius, self.config.power_up_color)
        self._draw_token(snap.player_x, snap.player_y, snap.player_radius, self.config.player_color)

    def _render_hud(self, snap: GameSnapshot) -> None:
        if not self._font:
            return
        parts = [f"Score: {snap.score}", f"Distance: {snap.distance} yds"]
        if snap.power_up_active:
            parts.append(f"Burst: {snap.power_up_hits_left}")
        if self.high_scores is not None:
            parts.append(f"Best: {self.high_scores.best_score}")

        text = self._font.render("   ".join(parts), True, self.config.text_color)
        self._screen.blit(text, (10, 10))

    def _render_banner(self, title: str, *lines: str) -> None:
        width, height = self.size
        overlay = pygame.Surface((width, height), pygame.SRCALPHA)
        overlay.fill((17, 17, 17, 200))
        self._screen.blit(overlay, (0, 0))

        title_surf = self._big_font.render(title, True, self.config.text_color)
        self._screen.blit(title_surf, title_surf.get_rect(center=(width // 2, height // 2 - 40)))

        y = height // 2
        for line in lines:
            surf = self._font.render(line, True, self.config.accent_color)
            self._screen.blit(surf, surf.get_rect(center=(width // 2, y)))
            y += 30

    # Loop

    async def run(self) -> None:
        """Main simulator loop."""
        self._init_pygame()
        self._running = True

        logger.info("Simulator started")

        while self._running:
            self._handle_events()
            self._sample_tilt()

            if self._clock:
                self.engine.advance(self._clock.get_time() / 1000.0)

            self._render()

            if self._clock:
                self._clock.tick(self.config.fps)

            self._frame_count += 1

            # Yield to other tasks
            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        pygame.quit()
        logger.info("Simulator stopped")

    def stop(self) -> None:
        """Stop the simulator."""
        self._running = False
