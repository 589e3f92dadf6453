"""Decelerating approach behaviors: Arrive (position) and Align (orientation)."""

import math
import numpy as np
from dataclasses import dataclass

from .errors import require_positive
from .kinematic import Kinematic, SteeringOutput
from .vector import clamp_magnitude, clamp_scalar, length, normalize, wrap_angle


@dataclass(frozen=True)
class Arrive:
    """
    Tuning for Arrive.

    Attributes:
        max_acceleration: Cap on the linear acceleration magnitude
        max_speed: Cruise speed outside the slow radius
        target_radius: Inside this distance the agent counts as arrived
        slow_radius: Inside this distance the desired speed ramps down
        time_to_target: Seconds over which the velocity gap is closed
    """
    max_acceleration: float
    max_speed: float
    target_radius: float
    slow_radius: float
    time_to_target: float

    def __post_init__(self):
        require_positive(self.slow_radius, "slow_radius")
        require_positive(self.time_to_target, "time_to_target")


@dataclass(frozen=True)
class Align:
    """
    Tuning for Align, the rotational twin of Arrive.

    Attributes:
        max_angular_acceleration: Cap on |angular|
        max_rotation: Cruise rotation speed outside the deceleration radius
        satisfaction_radius: Angle gap below which no torque is produced
        deceleration_radius: Angle gap below which rotation ramps down
        time_to_target: Seconds over which the rotation gap is closed
    """
    max_angular_acceleration: float
    max_rotation: float
    satisfaction_radius: float
    deceleration_radius: float
    time_to_target: float

    def __post_init__(self):
        require_positive(self.deceleration_radius, "deceleration_radius")
        require_positive(self.time_to_target, "time_to_target")


def arrive_target_speed(distance: float, max_speed: float, slow_radius: float) -> float:
    """Desired speed at a given distance: full speed outside, linear ramp inside."""
    if distance > slow_radius:
        return max_speed
    return max_speed * distance / slow_radius


def arrive_toward(agent: Kinematic, point: np.ndarray, max_acceleration: float, max_speed: float,
                  target_radius: float, slow_radius: float, time_to_target: float) -> SteeringOutput:
    """Arrive at an explicit point rather than at a target kinematic."""
    direction = point - agent.position
    distance = length(direction)

    if distance < target_radius:
        return SteeringOutput.zero()

    target_speed = arrive_target_speed(distance, max_speed, slow_radius)
    desired_velocity = normalize(direction) * target_speed

    linear = (desired_velocity - agent.velocity) / time_to_target
    return SteeringOutput(clamp_magnitude(linear, max_acceleration), 0.0)


def arrive(config: Arrive, agent: Kinematic, target: Kinematic) -> SteeringOutput:
    return arrive_toward(
        agent, target.position,
        config.max_acceleration, config.max_speed,
        config.target_radius, config.slow_radius, config.time_to_target
    )


def align(config: Align, agent: Kinematic, target: Kinematic) -> SteeringOutput:
    rotation = wrap_angle(target.orientation - agent.orientation)
    rotation_size = abs(rotation)

    if rotation_size < config.satisfaction_radius:
        return SteeringOutput.zero()

    if rotation_size > config.deceleration_radius:
        desired_rotation = config.max_rotation
    else:
        desired_rotation = config.max_rotation * rotation_size / config.deceleration_radius
    desired_rotation = math.copysign(desired_rotation, rotation)

    angular = (desired_rotation - agent.rotation) / config.time_to_target
    return SteeringOutput(np.zeros(2), clamp_scalar(angular, config.max_angular_acceleration))
