"""Text rendering for HUD elements."""

import pygame
from OpenGL.GL import *
from typing import Sequence

from config import steering as config


class TextRenderer:
    """Renders HUD lines with pygame fonts, blitted through glDrawPixels."""

    def __init__(self, font_name: str = "monospace", font_size: int = 16, line_height: int = 20):
        pygame.font.init()
        self.font = pygame.font.SysFont(font_name, font_size)
        self.line_height = line_height
        self.color = config.COLORS["text"]

    def draw_text(self, text: str, x: int, y: int, screen_size: tuple):
        """
        Draw one line of text.

        Args:
            text: The string to render
            x: X position from left edge
            y: Y position from top edge
            screen_size: (width, height) of the screen
        """
        surface = self.font.render(text, True, self.color)
        data = pygame.image.tostring(surface, "RGBA", True)
        w, h = surface.get_size()

        # The scene projection is y-down; pixels are drawn in a y-up overlay
        glMatrixMode(GL_PROJECTION)
        glPushMatrix()
        glLoadIdentity()
        glOrtho(0, screen_size[0], 0, screen_size[1], -1, 1)
        glMatrixMode(GL_MODELVIEW)
        glPushMatrix()
        glLoadIdentity()

        glEnable(GL_BLEND)
        glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)
        glRasterPos2f(x, screen_size[1] - y - h)
        glDrawPixels(w, h, GL_RGBA, GL_UNSIGNED_BYTE, data)
        glDisable(GL_BLEND)

        glPopMatrix()
        glMatrixMode(GL_PROJECTION)
        glPopMatrix()
        glMatrixMode(GL_MODELVIEW)

    def draw_lines(self, lines: Sequence[str], x: int, y: int, screen_size: tuple):
        for i, line in enumerate(lines):
            self.draw_text(line, x, y + i * self.line_height, screen_size)
