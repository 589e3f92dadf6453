"""Steering engine - the single entry point callers use each frame.

Behaviors form a closed set of frozen config types. get_steering() dispatches
on the config type; SteeringEngine keeps per-agent state (kinematic, behavior,
wander accumulator) and runs whole ticks in two phases: every force is
computed against one snapshot before any agent is integrated.
"""

import logging
import numpy as np
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from .arrive import Align, Arrive, align, arrive
from .errors import DomainError
from .flocking import Flock, flocking, flocking_pass
from .kinematic import Kinematic, SteeringOutput, integrate
from .matching import (
    OrientationMatch, PositionMatch, RotationMatch, VelocityMatch,
    orientation_matching, position_matching, rotation_matching, velocity_matching
)
from .wander import Wander, WanderState, wander

logger = logging.getLogger(__name__)

Behavior = Union[
    PositionMatch, OrientationMatch, VelocityMatch, RotationMatch,
    Arrive, Align, Wander, Flock
]

StepResult = Tuple[SteeringOutput, Optional[WanderState]]


def _needs_target(behavior, target: Optional[Kinematic]) -> Kinematic:
    if target is None:
        raise ValueError(f"{type(behavior).__name__} needs a target kinematic")
    return target


def _position(behavior, agent, target, dt, state, flock, index, rng) -> StepResult:
    return position_matching(agent, _needs_target(behavior, target), dt), state


def _orientation(behavior, agent, target, dt, state, flock, index, rng) -> StepResult:
    return orientation_matching(agent, _needs_target(behavior, target), dt), state


def _velocity(behavior, agent, target, dt, state, flock, index, rng) -> StepResult:
    return velocity_matching(behavior, agent, _needs_target(behavior, target)), state


def _rotation(behavior, agent, target, dt, state, flock, index, rng) -> StepResult:
    return rotation_matching(behavior, agent, _needs_target(behavior, target), dt), state


def _arrive(behavior, agent, target, dt, state, flock, index, rng) -> StepResult:
    return arrive(behavior, agent, _needs_target(behavior, target)), state


def _align(behavior, agent, target, dt, state, flock, index, rng) -> StepResult:
    return align(behavior, agent, _needs_target(behavior, target)), state


def _wander(behavior, agent, target, dt, state, flock, index, rng) -> StepResult:
    return wander(behavior, agent, state or WanderState(), rng)


def _flock(behavior, agent, target, dt, state, flock, index, rng) -> StepResult:
    if flock is None or index is None:
        raise ValueError("Flock needs the neighbor list and the agent's index in it")
    if flock[index] is not agent:
        raise ValueError(f"flock[{index}] is not the steered agent")
    return flocking(behavior, index, flock, state or WanderState(), rng)


_DISPATCH: Dict[type, Callable[..., StepResult]] = {
    PositionMatch: _position,
    OrientationMatch: _orientation,
    VelocityMatch: _velocity,
    RotationMatch: _rotation,
    Arrive: _arrive,
    Align: _align,
    Wander: _wander,
    Flock: _flock,
}

STATEFUL = (Wander, Flock)


def get_steering(
    behavior: Behavior,
    agent: Kinematic,
    target: Optional[Kinematic] = None,
    dt: float = 0.0,
    *,
    state: Optional[WanderState] = None,
    flock: Optional[Sequence[Kinematic]] = None,
    index: Optional[int] = None,
    rng: Optional[np.random.Generator] = None
) -> StepResult:
    """
    Compute one frame of steering for any behavior.

    Args:
        behavior: Behavior config, which also selects the algorithm
        agent: The steered agent
        target: Target kinematic (unused by Wander and Flock)
        dt: Frame time in seconds, required > 0 by position/orientation
            matching and by per-frame rotation matching
        state: Wander accumulator for Wander and Flock
        flock: Neighbor list for Flock, agent must be flock[index]
        rng: Random generator for Wander and Flock

    Returns:
        (steering, wander state), the state being updated for stateful
        behaviors and passed through for the others
    """
    try:
        handler = _DISPATCH[type(behavior)]
    except KeyError:
        raise TypeError(f"unknown steering behavior {type(behavior).__name__}") from None

    if rng is None and isinstance(behavior, STATEFUL):
        rng = np.random.default_rng()

    steering, new_state = handler(behavior, agent, target, dt, state, flock, index, rng)

    if not steering.is_finite:
        raise DomainError(
            f"{type(behavior).__name__} produced a non-finite output "
            f"(linear={steering.linear}, angular={steering.angular})"
        )
    return steering, new_state


@dataclass
class AgentState:
    """Everything the engine keeps for one agent between frames."""
    kinematic: Kinematic
    behavior: Behavior
    wander: WanderState = field(default_factory=WanderState)
    max_speed: Optional[float] = None


class SteeringEngine:
    """
    Owns a set of agents and produces one steering output per agent per tick.

    Agent ids are their indices in insertion order; flocking agents treat
    every other agent of the engine as a potential neighbor.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None, seed: Optional[int] = None):
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self._agents: List[AgentState] = []

    def __len__(self):
        return len(self._agents)

    @property
    def agents(self) -> List[AgentState]:
        return list(self._agents)

    @property
    def kinematics(self) -> List[Kinematic]:
        return [a.kinematic for a in self._agents]

    def agent(self, agent_id: int) -> AgentState:
        return self._agents[agent_id]

    def add_agent(self, kinematic: Kinematic, behavior: Behavior,
                  max_speed: Optional[float] = None) -> int:
        if type(behavior) not in _DISPATCH:
            raise TypeError(f"unknown steering behavior {type(behavior).__name__}")
        self._agents.append(AgentState(kinematic, behavior, max_speed=max_speed))
        agent_id = len(self._agents) - 1
        logger.debug("[Engine] Agent %d added with %s", agent_id, type(behavior).__name__)
        return agent_id

    def set_behavior(self, agent_id: int, behavior: Behavior, reset_wander: bool = False):
        if type(behavior) not in _DISPATCH:
            raise TypeError(f"unknown steering behavior {type(behavior).__name__}")
        state = self._agents[agent_id]
        state.behavior = behavior
        if reset_wander:
            state.wander = WanderState()

    def steer(self, agent_id: int, target: Optional[Kinematic] = None, dt: float = 0.0) -> SteeringOutput:
        """Steering for one agent against the live state of the others."""
        state = self._agents[agent_id]
        steering, state.wander = get_steering(
            state.behavior, state.kinematic, target, dt,
            state=state.wander, flock=self.kinematics, index=agent_id, rng=self.rng
        )
        return steering

    def compute(self, dt: float,
                targets: Optional[Mapping[int, Kinematic]] = None) -> List[SteeringOutput]:
        """
        One force pass over every agent, without integrating.

        All agents read the same snapshot of the flock.
        """
        targets = targets or {}
        snapshot = [a.kinematic.copy() for a in self._agents]
        behaviors = {a.behavior for a in self._agents}

        if len(behaviors) == 1 and isinstance(self._agents[0].behavior, Flock):
            outputs, states = flocking_pass(
                self._agents[0].behavior, snapshot, [a.wander for a in self._agents], self.rng
            )
            for i, (agent, wander_state) in enumerate(zip(self._agents, states)):
                if not outputs[i].is_finite:
                    raise DomainError(f"flocking produced a non-finite output for agent {i}")
                agent.wander = wander_state
            return outputs

        outputs = []
        for i, agent in enumerate(self._agents):
            steering, agent.wander = get_steering(
                agent.behavior, snapshot[i], targets.get(i), dt,
                state=agent.wander, flock=snapshot, index=i, rng=self.rng
            )
            outputs.append(steering)
        return outputs

    def step(self, dt: float,
             targets: Optional[Mapping[int, Kinematic]] = None) -> List[SteeringOutput]:
        """Compute every agent's steering, then integrate every agent."""
        outputs = self.compute(dt, targets)
        for agent, steering in zip(self._agents, outputs):
            integrate(agent.kinematic, steering, dt, agent.max_speed)
        return outputs
