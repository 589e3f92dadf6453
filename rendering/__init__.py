"""Rendering components for the steering demos."""

from .boids import BoidRenderer
from .trails import TrailRenderer
from .text import TextRenderer

__all__ = ["BoidRenderer", "TrailRenderer", "TextRenderer"]
