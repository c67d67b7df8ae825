"""
Desktop host window using pygame.

Drives a GameSession from the wall clock: key presses become bus events,
a fixed-step clock decides how many ticks to run each frame, and the
latest snapshot is drawn with the numpy renderer plus a text overlay.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

import pygame

from astrorun.core.clock import FixedStepClock
from astrorun.core.events import Event, EventBus, EventType, InputQueue, jump_event, restart_event
from astrorun.core.state import GamePhase
from astrorun.game.session import GameSession, Snapshot
from astrorun.graphics.renderer import GameRenderer

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    """Host window configuration."""
    title: str = "ASTRO RUN"
    fps: int = 60
    max_steps_per_frame: int = 5
    resizable: bool = True
    show_debug: bool = False

    # Colors
    text_color: tuple[int, int, int] = (230, 230, 240)
    alert_color: tuple[int, int, int] = (255, 70, 70)


# Keyboard mapping
JUMP_KEYS = (pygame.K_SPACE, pygame.K_UP, pygame.K_w)
RESTART_KEYS = (pygame.K_r,)
QUIT_KEYS = (pygame.K_ESCAPE, pygame.K_q)


def event_for_key(key: int) -> Optional[Event]:
    """Translate a pressed key into a game input event, if it is bound."""
    if key in JUMP_KEYS:
        return jump_event()
    if key in RESTART_KEYS:
        return restart_event()
    return None


class GameWindow:
    """
    Main game window.

    Keyboard Mapping:
        SPACE / UP / W: Jump (also starts the run)
        R: Restart after game over
        D: Toggle debug overlay
        ESC / Q: Quit
    """

    def __init__(
        self,
        session: GameSession,
        config: Optional[WindowConfig] = None,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self.config = config or WindowConfig()
        self.session = session
        self.event_bus = event_bus or session.event_bus or EventBus()

        self.inputs = InputQueue(self.event_bus)
        self.clock = FixedStepClock(self.config.fps, self.config.max_steps_per_frame)
        self.renderer = GameRenderer(int(session.field_width), int(session.field_height))
        self._snapshot: Snapshot = session.snapshot()

        # Pygame setup
        self._screen: Optional[pygame.Surface] = None
        self._frame_clock: Optional[pygame.time.Clock] = None
        self._running = False
        self._frame_count = 0
        self._show_debug = self.config.show_debug

        # Fonts
        self._title_font: Optional[pygame.font.Font] = None
        self._font: Optional[pygame.font.Font] = None
        self._small_font: Optional[pygame.font.Font] = None

        logger.info("GameWindow created")

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)

        flags = pygame.DOUBLEBUF
        if self.config.resizable:
            flags |= pygame.RESIZABLE

        self._screen = pygame.display.set_mode(
            (int(self.session.field_width), int(self.session.field_height)),
            flags
        )
        self._frame_clock = pygame.time.Clock()

        pygame.font.init()
        self._title_font = pygame.font.SysFont("monospace", 48, bold=True)
        self._font = pygame.font.SysFont("monospace", 24)
        self._small_font = pygame.font.SysFont("monospace", 16)

        logger.info(f"Pygame initialized: {self._screen.get_width()}x{self._screen.get_height()}")

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

            elif event.type == pygame.VIDEORESIZE:
                self._handle_resize(event.w, event.h)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press."""
        key = event.key

        if key in QUIT_KEYS:
            self._running = False
        elif key == pygame.K_d:
            self._show_debug = not self._show_debug
        else:
            game_event = event_for_key(key)
            if game_event is not None:
                self.event_bus.emit(game_event)

    def _handle_resize(self, width: int, height: int) -> None:
        self.session.resize(width, height)
        self.renderer.resize(int(self.session.field_width), int(self.session.field_height))
        self._snapshot = self.session.snapshot()

    def _update(self, elapsed: float) -> None:
        """Run as many fixed ticks as the elapsed time allows."""
        for _ in range(self.clock.advance(elapsed)):
            self._snapshot = self.session.step(self.inputs.drain())

    def _render(self) -> None:
        """Render the latest snapshot."""
        if not self._screen:
            return

        buffer = self.renderer.render(self._snapshot)
        surface = pygame.surfarray.make_surface(buffer.swapaxes(0, 1))
        self._screen.blit(surface, (0, 0))

        self._render_overlay(self._snapshot)
        if self._show_debug:
            self._render_debug_panel(self._snapshot)

        pygame.display.flip()

    def _blit_centered(self, font: Optional[pygame.font.Font], text: str, y: float, color, alpha: int = 255) -> None:
        if not font or not self._screen:
            return
        surface = font.render(text, True, color)
        if alpha < 255:
            surface.set_alpha(alpha)
        rect = surface.get_rect(center=(self._screen.get_width() // 2, int(y)))
        self._screen.blit(surface, rect)

    def _render_overlay(self, snap: Snapshot) -> None:
        """Score line and phase screens."""
        if not self._screen or not self._font:
            return
        h = self._screen.get_height()
        w = self._screen.get_width()
        text_color = self.config.text_color

        if snap.phase == GamePhase.START:
            self._blit_centered(self._title_font, "ASTRO RUN", h / 3, text_color)
            self._blit_centered(self._font, "Press SPACE to Jump (Twice for Double Jump)", h / 2, text_color)
            self._blit_centered(self._font, "Avoid the Obstacles!", h / 2 + 40, text_color)
            self._blit_centered(self._small_font, "Press SPACE to Start", h * 0.65, text_color)
            return

        score = self._font.render(f"Score: {snap.score}", True, text_color)
        self._screen.blit(score, (20, 20))
        high = self._font.render(f"High Score: {snap.high_score}", True, text_color)
        self._screen.blit(high, (w - 20 - high.get_width(), 20))

        if snap.phase == GamePhase.PLAYING and snap.hint_alpha > 0:
            self._blit_centered(
                self._small_font, "SPACE = Jump / Double Jump", 60, text_color,
                alpha=int(255 * snap.hint_alpha),
            )
        elif snap.phase == GamePhase.GAME_OVER:
            self._blit_centered(self._title_font, "GAME OVER", h / 3, self.config.alert_color)
            self._blit_centered(self._font, f"Score: {snap.score}", h / 2, text_color)
            self._blit_centered(self._font, f"High Score: {snap.high_score}", h / 2 + 45, text_color)
            self._blit_centered(self._small_font, "Press R to Restart", h * 0.65, text_color)

    def _render_debug_panel(self, snap: Snapshot) -> None:
        """Render the debug information panel."""
        if not self._small_font or not self._screen:
            return

        p = snap.player
        lines = [
            f"FPS: {self._frame_clock.get_fps():.1f}" if self._frame_clock else "FPS: --",
            f"Tick: {snap.tick}",
            f"Phase: {snap.phase.name}",
            f"Speed: {snap.obstacle_speed:.3f}",
            f"Obstacles: {len(snap.obstacles)}",
            f"Env: {snap.environment_index}",
            f"y={p.y:.1f} vy={p.vy:.2f} jumps={p.jumps_used}",
        ]
        for i, line in enumerate(lines):
            surface = self._small_font.render(line, True, (150, 255, 150))
            self._screen.blit(surface, (20, 60 + i * 18))

    async def run(self) -> None:
        """Main window loop."""
        self._init_pygame()
        self._running = True

        logger.info("Game window started")

        while self._running:
            self._handle_events()

            if self._frame_clock:
                self._update(self._frame_clock.get_time() / 1000.0)

            self._render()

            if self._frame_clock:
                self._frame_clock.tick(self.config.fps)

            self._frame_count += 1

            # Yield to other tasks
            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        self.inputs.close()
        self.event_bus.emit(Event(EventType.SHUTDOWN, source="window"))
        pygame.quit()
        logger.info("Game window stopped")

    def stop(self) -> None:
        """Stop the window loop."""
        self._running = False
