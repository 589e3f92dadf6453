"""Main application class that ties everything together."""

import logging
import pygame
from pygame.locals import *
from OpenGL.GL import *

from config import steering as config
from .input_handler import InputHandler
from demos import Scene
from rendering import BoidRenderer, TextRenderer, TrailRenderer
from steering.flocking import warmup

logger = logging.getLogger(__name__)


class Application:
    """Main application managing the frame loop and rendering of one scene."""

    def __init__(self, scene: Scene):
        self.scene = scene
        self.screen_size = (scene.width, scene.height)

        pygame.init()
        pygame.display.set_mode(self.screen_size, DOUBLEBUF | OPENGL)
        pygame.display.set_caption(f"{config.WINDOW['title']} - {scene.title}")

        self.input_handler = InputHandler(scene)

        # Rendering components
        self.boid_renderer = BoidRenderer()
        self.trail_renderer = TrailRenderer()
        self.text_renderer = TextRenderer()

        # State
        self.clock = pygame.time.Clock()
        self.running = True
        self.fps = 0

        warmup()
        self._setup_gl()
        logger.info("[App] %s scene at %dx%d", scene.title, *self.screen_size)

    def _setup_gl(self):
        """2D projection in window pixels, y pointing down."""
        glClearColor(*config.COLORS["background"])
        glDisable(GL_DEPTH_TEST)

        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        glOrtho(0, self.screen_size[0], self.screen_size[1], 0, -1, 1)
        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()

    def _handle_events(self):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            if not self.input_handler.handle_event(event):
                self.running = False

    def _update(self, dt: float):
        dt = min(dt, config.SIMULATION["max_dt"])

        self.input_handler.handle_continuous_input(dt)
        if not self.input_handler.paused:
            self.scene.update(dt)

    def _render(self):
        glClear(GL_COLOR_BUFFER_BIT)
        glLoadIdentity()

        self.trail_renderer.draw(self.scene.trails)
        if self.scene.target is not None:
            self.boid_renderer.draw_marker(self.scene.target)
        self.boid_renderer.draw(self.scene.kinematics)

        lines = self.scene.hud_lines()
        lines[0] += f"  |  FPS: {self.fps:.0f}"
        if self.input_handler.paused:
            lines.append("Paused (space)")
        self.text_renderer.draw_lines(lines, 10, 10, self.screen_size)

        pygame.display.flip()

    def run(self):
        """Main application loop."""
        while self.running:
            dt = self.clock.tick(config.SIMULATION["fps_limit"]) / 1000.0
            self.fps = self.clock.get_fps()

            self._handle_events()
            self._update(dt)
            self._render()

        pygame.quit()
        logger.info("[App] Closed after %d ticks", self.scene.ticks)
