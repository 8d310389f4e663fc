"""
Desktop window for Dragon Runner using pygame.

Drives the game at a fixed frame rate, turns key and mouse input into
events on the bus, and shows the rendered playfield with a small HUD.
"""

import asyncio
import logging
from dataclasses import dataclass

import pygame

from ..core.events import (
    EventBus, Event, EventType, jump_event, restart_event, resize_event, tick_event,
)
from ..core.state import Phase
from ..game.runner import RunnerGame
from ..graphics.renderer import SnapshotRenderer, to_surface_array

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    """Simulator window configuration."""
    width: int = 800
    height: int = 400
    title: str = "Dragon Runner"
    fullscreen: bool = False
    fps: int = 60

    # Window pixels per field unit
    scale: int = 1

    # Colors
    text_color: tuple[int, int, int] = (45, 52, 54)
    accent_color: tuple[int, int, int] = (255, 107, 107)
    panel_color: tuple[int, int, int] = (20, 20, 30)


class SimulatorWindow:
    """
    Window hosting one RunnerGame.

    Keyboard Mapping:
        SPACE / UP / RETURN / mouse click: Jump (and start)
        R: Restart after game over
        D: Toggle debug overlay
        S: Capture screenshot
        ESC / Q: Exit
    """

    def __init__(
        self,
        game: RunnerGame,
        config: WindowConfig | None = None,
        event_bus: EventBus | None = None
    ) -> None:
        self.config = config or WindowConfig()
        self.event_bus = event_bus or EventBus()
        self.game = game
        self.game.attach(self.event_bus)

        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._running = False
        self._frame_count = 0
        self._show_debug = False

        self._font: pygame.font.Font | None = None
        self._small_font: pygame.font.Font | None = None

        self.renderer = SnapshotRenderer(self.config.width, self.config.height)

        self.event_bus.subscribe(EventType.NEW_HIGH_SCORE, self._on_new_high_score)

        logger.info("SimulatorWindow created")

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)

        flags = pygame.DOUBLEBUF | pygame.RESIZABLE
        if self.config.fullscreen:
            flags |= pygame.FULLSCREEN

        self._screen = pygame.display.set_mode(
            (self.config.width, self.config.height),
            flags
        )
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont(None, 32)
        self._small_font = pygame.font.SysFont(None, 20)

        logger.info(f"Pygame initialized: {self.config.width}x{self.config.height}")

    def _handle_events(self) -> None:
        """Translate pygame events into bus events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

            elif event.type == pygame.MOUSEBUTTONDOWN:
                self.event_bus.queue_event(jump_event(source="mouse"))

            elif event.type == pygame.VIDEORESIZE:
                self._handle_resize(event.w, event.h)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press."""
        key = event.key

        if key == pygame.K_ESCAPE or key == pygame.K_q:
            self._running = False
        elif key == pygame.K_d:
            self._show_debug = not self._show_debug
        elif key == pygame.K_s:
            self._capture_screenshot()
        elif key == pygame.K_r:
            self.event_bus.queue_event(restart_event(source="keyboard"))
        elif key in (pygame.K_SPACE, pygame.K_UP, pygame.K_RETURN):
            self.event_bus.queue_event(jump_event(source="keyboard"))

    def _handle_resize(self, width: int, height: int) -> None:
        self.config.width = width
        self.config.height = height
        if not self.config.fullscreen:
            self._screen = pygame.display.set_mode(
                (width, height), pygame.DOUBLEBUF | pygame.RESIZABLE
            )
        self.renderer.resize(width, height)
        self.event_bus.queue_event(resize_event(
            width // self.config.scale, height // self.config.scale
        ))

    def _on_new_high_score(self, event: Event) -> None:
        logger.info(f"New high score: {event.data.get('high_score')}")

    def _render(self) -> None:
        """Render the playfield and HUD."""
        if not self._screen:
            return

        buffer = self.renderer.render(self.game.snapshot())
        surface = pygame.surfarray.make_surface(to_surface_array(buffer))
        self._screen.blit(surface, (0, 0))

        self._render_hud()
        if self._show_debug:
            self._render_debug_panel()

        pygame.display.flip()

    def _blit_centered(self, font: pygame.font.Font, text: str, y: int,
                       color: tuple[int, int, int]) -> None:
        text_surface = font.render(text, True, color)
        text_rect = text_surface.get_rect(center=(self.config.width // 2, y))
        self._screen.blit(text_surface, text_rect)

    def _render_hud(self) -> None:
        if not self._font:
            return

        snap = self.game.snapshot()
        score = self._font.render(f"Score: {snap.score}", True, self.config.text_color)
        best = self._small_font.render(f"Best: {snap.high_score}", True, self.config.text_color)
        self._screen.blit(score, (20, 15))
        self._screen.blit(best, (20, 45))

        mid = self.config.height // 3
        if snap.phase == Phase.IDLE:
            self._blit_centered(self._font, "Press SPACE or click to start", mid,
                                self.config.text_color)
        elif snap.phase == Phase.GAME_OVER:
            self._blit_centered(self._font, "GAME OVER", mid, self.config.accent_color)
            if snap.is_new_high_score:
                self._blit_centered(self._small_font, "NEW HIGH SCORE!", mid + 30,
                                    self.config.accent_color)
            self._blit_centered(self._small_font, "Press R to play again", mid + 55,
                                self.config.text_color)

    def _render_debug_panel(self) -> None:
        """Render the debug information panel."""
        if not self._small_font:
            return

        snap = self.game.snapshot()
        lines = [
            f"FPS: {self._clock.get_fps():.1f}" if self._clock else "FPS: --",
            f"Frame: {self._frame_count}",
            f"Phase: {snap.phase.name}",
            f"Speed: {snap.game_speed:.1f}",
            f"Level: {snap.level}",
            f"Obstacles: {len(snap.obstacles)}",
            f"Player y: {snap.player[1]:.1f}",
        ]

        panel = pygame.Rect(self.config.width - 170, 10, 160, 18 * len(lines) + 12)
        pygame.draw.rect(self._screen, self.config.panel_color, panel, border_radius=5)

        y = panel.y + 6
        for line in lines:
            text_surface = self._small_font.render(line, True, (200, 200, 220))
            self._screen.blit(text_surface, (panel.x + 8, y))
            y += 18

    def _capture_screenshot(self) -> None:
        """Capture and save a screenshot."""
        if self._screen:
            filename = f"screenshot_{self._frame_count}.png"
            pygame.image.save(self._screen, filename)
            logger.info(f"Screenshot saved: {filename}")

    async def run(self) -> None:
        """Main loop: input, one game step, render, wait for the next frame."""
        self._init_pygame()
        self._running = True

        if not self.game.is_running:
            self.game.initialize(
                self.config.width // self.config.scale,
                self.config.height // self.config.scale,
            )

        logger.info("Simulator started")

        while self._running:
            self._handle_events()

            # Input is applied before the step it arrived for
            self.event_bus.process_queue()

            delta = self._clock.get_time() / 1000.0 if self._clock else 0.0
            self.event_bus.emit(tick_event(delta, self._frame_count))

            self._render()

            if self._clock:
                self._clock.tick(self.config.fps)

            self._frame_count += 1

            # Yield to other tasks
            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        """Stop the game and release pygame."""
        self.event_bus.emit(Event(EventType.SHUTDOWN, source="window"))
        self.game.detach()
        pygame.quit()
        logger.info("Simulator stopped")

    def stop(self) -> None:
        """Stop the simulator."""
        self._running = False
