"""One-step matching behaviors.

Each behavior computes the correction needed to reach a target quantity
within a single frame (or within a fixed time constant), with no
deceleration ramp. All are pure functions of their inputs.
"""

import numpy as np
from dataclasses import dataclass
from typing import Optional

from .errors import require_positive, require_positive_dt
from .kinematic import Kinematic, SteeringOutput
from .vector import clamp_magnitude, clamp_scalar, wrap_angle


@dataclass(frozen=True)
class PositionMatch:
    """Reach the target position in exactly one frame."""


@dataclass(frozen=True)
class OrientationMatch:
    """Reach the target orientation in exactly one frame."""


@dataclass(frozen=True)
class VelocityMatch:
    """
    Drive velocity toward the target velocity over a fixed time constant.

    Attributes:
        time_to_target: Seconds over which the velocity gap is closed
        max_acceleration: Magnitude cap, None leaves the output unclamped
    """
    time_to_target: float = 1.0
    max_acceleration: Optional[float] = None

    def __post_init__(self):
        require_positive(self.time_to_target, "time_to_target")
        require_positive(self.max_acceleration, "max_acceleration", allow_none=True)


@dataclass(frozen=True)
class RotationMatch:
    """
    Drive rotation toward the target rotation.

    A time_to_target of None closes the gap over the frame's own dt.
    """
    time_to_target: Optional[float] = None
    max_angular_acceleration: Optional[float] = None

    def __post_init__(self):
        require_positive(self.time_to_target, "time_to_target", allow_none=True)
        require_positive(self.max_angular_acceleration, "max_angular_acceleration", allow_none=True)


def position_matching(agent: Kinematic, target: Kinematic, dt: float) -> SteeringOutput:
    require_positive_dt(dt, "position matching")
    desired_velocity = (target.position - agent.position) / dt
    return SteeringOutput(desired_velocity - agent.velocity, 0.0)


def orientation_matching(agent: Kinematic, target: Kinematic, dt: float) -> SteeringOutput:
    require_positive_dt(dt, "orientation matching")
    diff = wrap_angle(target.orientation - agent.orientation)
    return SteeringOutput(np.zeros(2), diff / dt - agent.rotation)


def velocity_matching(config: VelocityMatch, agent: Kinematic, target: Kinematic) -> SteeringOutput:
    linear = (target.velocity - agent.velocity) / config.time_to_target
    if config.max_acceleration is not None:
        linear = clamp_magnitude(linear, config.max_acceleration)
    return SteeringOutput(linear, 0.0)


def rotation_matching(config: RotationMatch, agent: Kinematic, target: Kinematic,
                      dt: float) -> SteeringOutput:
    if config.time_to_target is None:
        require_positive_dt(dt, "rotation matching")
        time_to_target = dt
    else:
        time_to_target = config.time_to_target

    angular = (target.rotation - agent.rotation) / time_to_target
    if config.max_angular_acceleration is not None:
        angular = clamp_scalar(angular, config.max_angular_acceleration)
    return SteeringOutput(np.zeros(2), angular)
