"""Headless demo scenes built on the steering engine."""

from .trail import BreadcrumbTrail
from .scenes import (
    SCENES, ArriveAlignScene, FlockScene, Scene, VelocityMatchScene, WanderScene,
    create_scene, run_headless
)

__all__ = [
    "BreadcrumbTrail", "SCENES", "Scene", "VelocityMatchScene", "ArriveAlignScene",
    "WanderScene", "FlockScene", "create_scene", "run_headless",
]
