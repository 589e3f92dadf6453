"""Wander: a bounded random walk of the heading, chased with Arrive.

The accumulated heading offset is the only steering state that persists
between frames. It is held in a WanderState owned by the caller (one per
agent) and returned updated from every call.
"""

import numpy as np
from dataclasses import dataclass
from typing import Tuple

from .arrive import arrive_toward
from .errors import require_positive
from .kinematic import Kinematic, SteeringOutput
from .vector import from_angle, normalize


@dataclass(frozen=True)
class Wander:
    """
    Tuning for Wander.

    Attributes:
        max_acceleration: Cap on the linear acceleration magnitude
        max_speed: Speed used when chasing the wander point
        wander_offset: Distance of the wander circle ahead of the agent
        wander_radius: Radius of the wander circle, also the slow radius
        wander_rate: Largest heading change per call, in radians
        time_to_target: Seconds over which the velocity gap is closed
        target_radius: Arrival radius around the wander point
    """
    max_acceleration: float
    max_speed: float
    wander_offset: float
    wander_radius: float
    wander_rate: float
    time_to_target: float
    target_radius: float = 5.0

    def __post_init__(self):
        require_positive(self.wander_radius, "wander_radius")
        require_positive(self.time_to_target, "time_to_target")


@dataclass(frozen=True)
class WanderState:
    """Accumulated heading offset of one wandering agent."""
    orientation: float = 0.0


def random_binomial(rng: np.random.Generator) -> float:
    """
    Draw from (-1, 1), denser around zero.

    Difference of two uniforms, not a true binomial.
    """
    return rng.random() - rng.random()


def wander_target(config: Wander, agent: Kinematic, wander_orientation: float) -> np.ndarray:
    """Point on the wander circle for the given accumulated offset."""
    target_orientation = agent.orientation + wander_orientation
    circle_center = agent.position + normalize(agent.velocity) * config.wander_offset
    return circle_center + from_angle(target_orientation, config.wander_radius)


def wander(config: Wander, agent: Kinematic, state: WanderState,
           rng: np.random.Generator) -> Tuple[SteeringOutput, WanderState]:
    """
    Perturb the heading offset and arrive toward the projected wander point.

    Returns:
        (steering, updated state)
    """
    orientation = state.orientation + random_binomial(rng) * config.wander_rate
    point = wander_target(config, agent, orientation)

    steering = arrive_toward(
        agent, point,
        config.max_acceleration, config.max_speed,
        config.target_radius, config.wander_radius, config.time_to_target
    )
    return steering, WanderState(orientation)
