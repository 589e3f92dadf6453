"""Input handling for keyboard and mouse events."""

import pygame
from pygame.locals import *

from demos import Scene


class InputHandler:
    """Forwards pointer samples and clicks to the active scene."""

    def __init__(self, scene: Scene):
        self.scene = scene
        self.paused = False

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        Handle a single pygame event.
        Returns False if the application should quit, True otherwise.
        """
        if event.type == QUIT:
            return False
        elif event.type == KEYDOWN:
            if event.key == K_ESCAPE:
                return False
            if event.key == K_SPACE:
                self.paused = not self.paused
        elif event.type == MOUSEBUTTONDOWN:
            if event.button == 1:
                self.scene.on_click(event.pos)

        return True

    def handle_continuous_input(self, dt: float):
        """Sample the pointer once per frame."""
        self.scene.on_pointer(pygame.mouse.get_pos(), dt)
