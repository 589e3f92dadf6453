"""Flocking - separation, alignment and cohesion blended over a neighbor list.

An agent with no neighbor in range falls back to Wander. The per-agent
function iterates the flock in Python; flocking_pass computes a whole tick
at once with the neighbor aggregation compiled by Numba.
"""

import logging
import math
import numpy as np
from dataclasses import dataclass
from numba import njit, prange
from typing import List, Sequence, Tuple

from .errors import require_positive
from .kinematic import Kinematic, SteeringOutput
from .vector import clamp_magnitude, length
from .wander import Wander, WanderState, wander

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Flock:
    """
    Tuning for flocking.

    Attributes:
        neighbor_radius: Neighbors closer than this are aligned with and cohered to
        separation_radius: Neighbors closer than this also repel
        separation_weight: Weight of the separation term
        alignment_weight: Weight of the alignment term
        cohesion_weight: Weight of the cohesion term
        max_acceleration: Cap on the blended force
        wander: Behavior used when no neighbor is in range
    """
    neighbor_radius: float
    separation_radius: float
    separation_weight: float
    alignment_weight: float
    cohesion_weight: float
    max_acceleration: float
    wander: Wander

    def __post_init__(self):
        require_positive(self.neighbor_radius, "neighbor_radius")


# ============================================================================
# NUMBA JIT-COMPILED NEIGHBOR AGGREGATION
# ============================================================================

@njit(parallel=True, cache=True)
def aggregate_neighbors(
    positions: np.ndarray,
    velocities: np.ndarray,
    neighbor_radius: float,
    separation_radius: float,
    alignment_sums: np.ndarray,
    cohesion_sums: np.ndarray,
    separation_sums: np.ndarray,
    counts: np.ndarray
):
    """Brute-force O(n^2) neighbor sums, one row per agent."""
    num_agents = positions.shape[0]

    for i in prange(num_agents):
        px = positions[i, 0]
        py = positions[i, 1]

        align_x, align_y = 0.0, 0.0
        coh_x, coh_y = 0.0, 0.0
        sep_x, sep_y = 0.0, 0.0
        count = 0

        for j in range(num_agents):
            if i == j:
                continue

            dx = px - positions[j, 0]
            dy = py - positions[j, 1]
            dist = math.hypot(dx, dy)

            if dist < neighbor_radius and dist > 0.0:
                align_x += velocities[j, 0]
                align_y += velocities[j, 1]
                coh_x += positions[j, 0]
                coh_y += positions[j, 1]
                count += 1

                if dist < separation_radius:
                    sep_x += dx / dist
                    sep_y += dy / dist

        alignment_sums[i, 0] = align_x
        alignment_sums[i, 1] = align_y
        cohesion_sums[i, 0] = coh_x
        cohesion_sums[i, 1] = coh_y
        separation_sums[i, 0] = sep_x
        separation_sums[i, 1] = sep_y
        counts[i] = count


def warmup():
    """Pre-compile the Numba kernel so the first frame does not stall."""
    n = 16
    pos = np.random.rand(n, 2) * 10
    vel = np.random.rand(n, 2)
    aggregate_neighbors(
        pos, vel, 5.0, 2.0,
        np.zeros((n, 2)), np.zeros((n, 2)), np.zeros((n, 2)),
        np.zeros(n, dtype=np.int64)
    )


# ============================================================================
# STEERING
# ============================================================================

def _blend(config: Flock, agent: Kinematic, alignment_sum: np.ndarray, cohesion_sum: np.ndarray,
           separation_sum: np.ndarray, count: int) -> SteeringOutput:
    alignment = alignment_sum / count
    cohesion = cohesion_sum / count - agent.position

    force = (
        separation_sum * config.separation_weight +
        alignment * config.alignment_weight +
        cohesion * config.cohesion_weight
    )
    return SteeringOutput(clamp_magnitude(force, config.max_acceleration), 0.0)


def flocking(config: Flock, index: int, flock: Sequence[Kinematic], state: WanderState,
             rng: np.random.Generator) -> Tuple[SteeringOutput, WanderState]:
    """
    Steering for flock[index] against the rest of the flock.

    The flock is only read. The wander state is returned unchanged unless
    the agent had no neighbor and wandered instead.
    """
    agent = flock[index]

    alignment_sum = np.zeros(2)
    cohesion_sum = np.zeros(2)
    separation_sum = np.zeros(2)
    count = 0

    for j, other in enumerate(flock):
        if j == index:
            continue

        offset = agent.position - other.position
        distance = length(offset)

        if 0.0 < distance < config.neighbor_radius:
            alignment_sum += other.velocity
            cohesion_sum += other.position
            count += 1

            if distance < config.separation_radius:
                separation_sum += offset / distance

    if count == 0:
        return wander(config.wander, agent, state, rng)

    return _blend(config, agent, alignment_sum, cohesion_sum, separation_sum, count), state


def flocking_pass(config: Flock, flock: Sequence[Kinematic], states: Sequence[WanderState],
                  rng: np.random.Generator) -> Tuple[List[SteeringOutput], List[WanderState]]:
    """
    Flocking for every agent of one tick, against the same snapshot.

    Agents that wander draw from rng in index order, so the result equals
    calling flocking() for each index in turn.
    """
    n = len(flock)
    if len(states) != n:
        raise ValueError(f"expected {n} wander states, got {len(states)}")
    if n == 0:
        return [], []

    positions = np.array([k.position for k in flock], dtype=np.float64)
    velocities = np.array([k.velocity for k in flock], dtype=np.float64)

    alignment_sums = np.zeros((n, 2), dtype=np.float64)
    cohesion_sums = np.zeros((n, 2), dtype=np.float64)
    separation_sums = np.zeros((n, 2), dtype=np.float64)
    counts = np.zeros(n, dtype=np.int64)

    aggregate_neighbors(
        positions, velocities,
        float(config.neighbor_radius), float(config.separation_radius),
        alignment_sums, cohesion_sums, separation_sums, counts
    )

    outputs = []
    new_states = []
    for i, agent in enumerate(flock):
        if counts[i] == 0:
            steering, state = wander(config.wander, agent, states[i], rng)
        else:
            steering = _blend(config, agent, alignment_sums[i], cohesion_sums[i],
                              separation_sums[i], int(counts[i]))
            state = states[i]
        outputs.append(steering)
        new_states.append(state)

    logger.debug("[Flock] %d agents, %d wandering", n, int(np.count_nonzero(counts == 0)))
    return outputs, new_states
