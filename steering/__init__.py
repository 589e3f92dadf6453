"""Kinematic steering behaviors for 2D boids."""

from .errors import DomainError
from .vector import clamp_magnitude, clamp_scalar, length, normalize, wrap_angle
from .kinematic import Kinematic, SteeringOutput, integrate
from .matching import (
    OrientationMatch, PositionMatch, RotationMatch, VelocityMatch,
    orientation_matching, position_matching, rotation_matching, velocity_matching
)
from .arrive import Align, Arrive, align, arrive
from .wander import Wander, WanderState, wander
from .flocking import Flock, flocking, flocking_pass
from .engine import AgentState, Behavior, SteeringEngine, get_steering

__all__ = [
    "DomainError",
    "clamp_magnitude", "clamp_scalar", "length", "normalize", "wrap_angle",
    "Kinematic", "SteeringOutput", "integrate",
    "PositionMatch", "OrientationMatch", "VelocityMatch", "RotationMatch",
    "position_matching", "orientation_matching", "velocity_matching", "rotation_matching",
    "Arrive", "Align", "arrive", "align",
    "Wander", "WanderState", "wander",
    "Flock", "flocking", "flocking_pass",
    "AgentState", "Behavior", "SteeringEngine", "get_steering",
]
