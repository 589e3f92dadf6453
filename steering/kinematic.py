"""Kinematic state records and the per-frame integration contract."""

import math
import numpy as np
from dataclasses import dataclass, field
from typing import Optional

from .errors import DomainError
from .vector import as_vec, clamp_magnitude, wrap_angle


@dataclass(eq=False)
class Kinematic:
    """
    Instantaneous state of an agent or of a target.

    Attributes:
        position: 2D position
        velocity: 2D velocity (units per second)
        orientation: heading in radians
        rotation: angular velocity in radians per second
    """
    position: np.ndarray = field(default_factory=lambda: np.zeros(2))
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(2))
    orientation: float = 0.0
    rotation: float = 0.0

    def __post_init__(self):
        self.position = as_vec(self.position)
        self.velocity = as_vec(self.velocity)
        self.orientation = float(self.orientation)
        self.rotation = float(self.rotation)

    def copy(self) -> "Kinematic":
        return Kinematic(self.position.copy(), self.velocity.copy(), self.orientation, self.rotation)

    @property
    def speed(self) -> float:
        return math.hypot(self.velocity[0], self.velocity[1])


@dataclass(frozen=True, eq=False)
class SteeringOutput:
    """Linear and angular acceleration requested for one frame."""
    linear: np.ndarray
    angular: float = 0.0

    def __post_init__(self):
        linear = as_vec(self.linear)
        linear.setflags(write=False)
        object.__setattr__(self, "linear", linear)
        object.__setattr__(self, "angular", float(self.angular))

    def __eq__(self, other):
        if not isinstance(other, SteeringOutput):
            return NotImplemented
        return np.array_equal(self.linear, other.linear) and self.angular == other.angular

    __hash__ = None

    @classmethod
    def zero(cls) -> "SteeringOutput":
        return cls(np.zeros(2), 0.0)

    @property
    def is_finite(self) -> bool:
        return bool(np.all(np.isfinite(self.linear))) and math.isfinite(self.angular)


def integrate(kinematic: Kinematic, steering: SteeringOutput, dt: float,
              max_speed: Optional[float] = None) -> Kinematic:
    """
    Apply a steering output to a kinematic in place with explicit Euler.

    Args:
        kinematic: State to update
        steering: Acceleration produced by a behavior this frame
        dt: Elapsed time in seconds
        max_speed: Optional cap applied to the velocity before moving

    Returns:
        The same kinematic, for chaining
    """
    if dt < 0:
        raise DomainError(f"cannot integrate a negative time step ({dt})")

    kinematic.velocity = kinematic.velocity + steering.linear * dt
    if max_speed is not None:
        kinematic.velocity = clamp_magnitude(kinematic.velocity, max_speed)
    kinematic.position = kinematic.position + kinematic.velocity * dt

    kinematic.rotation += steering.angular * dt
    kinematic.orientation = wrap_angle(kinematic.orientation + kinematic.rotation * dt)
    return kinematic
