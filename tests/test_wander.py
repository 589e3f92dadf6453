"""Wander: heading random walk plus arrive toward the wander circle."""

import math

import numpy as np
import pytest

from steering import DomainError, Kinematic, Wander, WanderState, wander
from steering.vector import length
from steering.wander import random_binomial, wander_target


def make_wander(**overrides):
    params = dict(max_acceleration=50.0, max_speed=100.0, wander_offset=20.0,
                  wander_radius=100.0, wander_rate=2.0, time_to_target=0.1)
    params.update(overrides)
    return Wander(**params)


def test_random_binomial_range_and_centre():
    rng = np.random.default_rng(3)
    draws = np.array([random_binomial(rng) for _ in range(5000)])
    assert np.all(draws > -1.0) and np.all(draws < 1.0)
    assert abs(draws.mean()) < 0.05
    # triangular, so denser near zero than a uniform on (-1, 1)
    assert np.mean(np.abs(draws) < 0.5) > 0.6


def test_zero_rate_targets_stay_on_the_heading_line():
    config = make_wander(wander_rate=0.0)
    rng = np.random.default_rng(0)
    agent = Kinematic(position=(0.0, 0.0), velocity=(10.0, 0.0), orientation=0.0)

    _, state = wander(config, agent, WanderState(), rng)
    first = wander_target(config, agent, state.orientation)
    agent.position = np.array([5.0, 0.0])
    _, state = wander(config, agent, state, rng)
    second = wander_target(config, agent, state.orientation)

    assert state.orientation == 0.0
    assert first == pytest.approx([120.0, 0.0])
    assert second == pytest.approx([125.0, 0.0])


def test_wander_target_with_zero_velocity_is_centred_on_agent():
    config = make_wander()
    agent = Kinematic(position=(10.0, 10.0), orientation=math.pi / 2)
    point = wander_target(config, agent, 0.0)
    assert point == pytest.approx([10.0, 110.0])


def test_wander_accumulates_state_and_leaves_input_untouched():
    config = make_wander()
    rng = np.random.default_rng(11)
    agent = Kinematic(position=(300.0, 300.0), velocity=(50.0, 0.0))
    start = WanderState(0.25)

    _, after = wander(config, agent, start, rng)
    assert start.orientation == 0.25
    assert after.orientation != 0.25
    assert abs(after.orientation - 0.25) < config.wander_rate


def test_wander_is_reproducible_with_a_seeded_generator():
    config = make_wander()
    agent = Kinematic(position=(300.0, 300.0), velocity=(50.0, 0.0))
    a, sa = wander(config, agent, WanderState(), np.random.default_rng(42))
    b, sb = wander(config, agent, WanderState(), np.random.default_rng(42))
    assert np.array_equal(a.linear, b.linear)
    assert sa == sb


def test_wander_output_is_bounded_and_linear_only():
    config = make_wander()
    rng = np.random.default_rng(5)
    agent = Kinematic(position=(0.0, 0.0), velocity=(0.0, 80.0))
    state = WanderState()
    for _ in range(50):
        out, state = wander(config, agent, state, rng)
        assert length(out.linear) <= config.max_acceleration + 1e-9
        assert out.angular == 0.0


def test_wander_point_inside_target_radius_gives_zero():
    config = make_wander(wander_offset=0.0, wander_radius=1.0)
    out, _ = wander(config, Kinematic(), WanderState(), np.random.default_rng(1))
    assert np.array_equal(out.linear, [0.0, 0.0])


def test_wander_config_validation():
    with pytest.raises(DomainError):
        make_wander(time_to_target=0.0)
    with pytest.raises(DomainError):
        make_wander(wander_radius=0.0)
