"""Boid rendering - one oriented triangle per agent."""

import numpy as np
from OpenGL.GL import *
from typing import Sequence

from config import steering as config
from steering import Kinematic


def build_triangles(positions: np.ndarray, orientations: np.ndarray, size: float) -> np.ndarray:
    """
    Triangle vertices for each boid, nose along its orientation.

    Returns:
        (n * 3, 2) float32 array: nose, left wing, right wing per boid
    """
    forward = np.stack([np.cos(orientations), np.sin(orientations)], axis=1)
    right = np.stack([-forward[:, 1], forward[:, 0]], axis=1)

    nose = positions + forward * size
    tail = positions - forward * (size * 0.5)
    left_wing = tail - right * (size * 0.45)
    right_wing = tail + right * (size * 0.45)

    vertices = np.stack([nose, left_wing, right_wing], axis=1)
    return vertices.reshape(-1, 2).astype(np.float32)


class BoidRenderer:
    """Draws a list of kinematics as filled triangles using vertex arrays."""

    def __init__(self, size: float = None, color=None):
        self.size = size if size is not None else config.BOID["size"]
        self.color = color if color is not None else config.COLORS["boid"]

    def draw(self, kinematics: Sequence[Kinematic]):
        if not kinematics:
            return

        positions = np.array([k.position for k in kinematics], dtype=np.float64)
        orientations = np.array([k.orientation for k in kinematics], dtype=np.float64)
        vertices = build_triangles(positions, orientations, self.size)

        glColor3f(*self.color)
        glEnableClientState(GL_VERTEX_ARRAY)
        glVertexPointer(2, GL_FLOAT, 0, vertices)
        glDrawArrays(GL_TRIANGLES, 0, len(vertices))
        glDisableClientState(GL_VERTEX_ARRAY)

    def draw_marker(self, position: np.ndarray, radius: float = 6.0):
        """Small cross marking a target point."""
        x, y = float(position[0]), float(position[1])
        glColor3f(*config.COLORS["target"])
        glBegin(GL_LINES)
        glVertex2f(x - radius, y); glVertex2f(x + radius, y)
        glVertex2f(x, y - radius); glVertex2f(x, y + radius)
        glEnd()
