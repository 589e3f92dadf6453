"""Breadcrumb trail rendering."""

import numpy as np
from OpenGL.GL import *
from typing import Sequence

from config import steering as config
from demos.trail import BreadcrumbTrail


class TrailRenderer:
    """Draws every crumb of every trail as a square point."""

    def __init__(self, point_size: float = None, color=None):
        self.point_size = point_size if point_size is not None else config.TRAIL["crumb_size"]
        self.color = color if color is not None else config.COLORS["crumb"]

    def draw(self, trails: Sequence[BreadcrumbTrail]):
        chunks = [t.points for t in trails if len(t)]
        if not chunks:
            return
        points = np.concatenate(chunks).astype(np.float32)

        glPointSize(self.point_size)
        glColor3f(*self.color)
        glEnableClientState(GL_VERTEX_ARRAY)
        glVertexPointer(2, GL_FLOAT, 0, points)
        glDrawArrays(GL_POINTS, 0, len(points))
        glDisableClientState(GL_VERTEX_ARRAY)
