"""Steering engine: dispatch over behavior types and two-phase ticks."""

import math

import numpy as np
import pytest

from steering import (
    Align, Arrive, DomainError, Flock, Kinematic, OrientationMatch, PositionMatch,
    RotationMatch, SteeringEngine, SteeringOutput, VelocityMatch, Wander, WanderState,
    get_steering, wander
)

ARRIVE = Arrive(max_acceleration=50.0, max_speed=50.0, target_radius=5.0,
                slow_radius=50.0, time_to_target=0.1)
ALIGN = Align(max_angular_acceleration=18.0, max_rotation=math.pi,
              satisfaction_radius=0.05, deceleration_radius=0.5, time_to_target=0.1)
WANDER = Wander(max_acceleration=50.0, max_speed=100.0, wander_offset=20.0,
                wander_radius=100.0, wander_rate=2.0, time_to_target=0.1)
FLOCK = Flock(neighbor_radius=20.0, separation_radius=20.0, separation_weight=5.0,
              alignment_weight=1.0, cohesion_weight=1.0, max_acceleration=250.0,
              wander=Wander(max_acceleration=5.0, max_speed=7.0, wander_offset=10.0,
                            wander_radius=15.0, wander_rate=1.0, time_to_target=0.1))


@pytest.mark.parametrize("behavior", [
    PositionMatch(), OrientationMatch(), VelocityMatch(), RotationMatch(), ARRIVE, ALIGN,
])
def test_dispatch_returns_finite_output_and_passes_state_through(behavior):
    agent = Kinematic(position=(0.0, 0.0), velocity=(1.0, 0.0))
    target = Kinematic(position=(100.0, 0.0), velocity=(0.0, 5.0), orientation=1.0, rotation=2.0)
    state = WanderState(0.3)
    out, new_state = get_steering(behavior, agent, target, 0.016, state=state)
    assert isinstance(out, SteeringOutput)
    assert out.is_finite
    assert new_state is state


def test_dispatch_arrive_scenario():
    out, _ = get_steering(ARRIVE, Kinematic(), Kinematic(position=(100.0, 0.0)))
    assert out.linear == pytest.approx([50.0, 0.0])


def test_dispatch_wander_uses_given_generator():
    agent = Kinematic(position=(0.0, 0.0), velocity=(5.0, 0.0))
    out, state = get_steering(WANDER, agent, state=WanderState(), rng=np.random.default_rng(8))
    expected, expected_state = wander(WANDER, agent, WanderState(), np.random.default_rng(8))
    assert np.array_equal(out.linear, expected.linear)
    assert state == expected_state


def test_dispatch_flock_requires_neighbor_list_and_index():
    agent = Kinematic()
    with pytest.raises(ValueError):
        get_steering(FLOCK, agent)
    with pytest.raises(ValueError):
        get_steering(FLOCK, agent, flock=[Kinematic(), agent], index=0)
    out, _ = get_steering(FLOCK, agent, flock=[agent], index=0, rng=np.random.default_rng(1))
    assert out.is_finite


def test_dispatch_requires_target():
    with pytest.raises(ValueError):
        get_steering(ARRIVE, Kinematic())


def test_unknown_behavior_is_a_type_error():
    with pytest.raises(TypeError):
        get_steering(object(), Kinematic(), Kinematic())
    with pytest.raises(TypeError):
        SteeringEngine().add_agent(Kinematic(), "arrive")


def test_timing_sensitive_behaviors_fail_fast_on_bad_dt():
    with pytest.raises(DomainError):
        get_steering(PositionMatch(), Kinematic(), Kinematic(position=(1.0, 0.0)), 0.0)
    with pytest.raises(DomainError):
        get_steering(OrientationMatch(), Kinematic(), Kinematic(), -1.0)


def test_non_finite_result_is_reported():
    agent = Kinematic(velocity=(math.inf, 0.0))
    with pytest.raises(DomainError):
        get_steering(VelocityMatch(), agent, Kinematic())


def test_engine_step_integrates_after_computing():
    engine = SteeringEngine(seed=0)
    agent_id = engine.add_agent(Kinematic(), ARRIVE)
    target = Kinematic(position=(100.0, 0.0))

    outputs = engine.step(0.1, {agent_id: target})

    assert outputs[0].linear == pytest.approx([50.0, 0.0])
    state = engine.agent(agent_id)
    assert state.kinematic.velocity == pytest.approx([5.0, 0.0])
    assert state.kinematic.position == pytest.approx([0.5, 0.0])


def test_engine_forces_use_pre_step_snapshot():
    engine = SteeringEngine(seed=0)
    a = engine.add_agent(Kinematic(position=(0.0, 0.0)), PositionMatch())
    b = engine.add_agent(Kinematic(position=(10.0, 0.0)), PositionMatch())
    # each chases the other
    targets = {a: engine.agent(b).kinematic, b: engine.agent(a).kinematic}

    outputs = engine.step(1.0, targets)

    assert outputs[a].linear == pytest.approx([10.0, 0.0])
    assert outputs[b].linear == pytest.approx([-10.0, 0.0])


def test_engine_flocking_pass_matches_per_agent_steering():
    def build(seed):
        engine = SteeringEngine(seed=seed)
        rng = np.random.default_rng(100)
        for _ in range(25):
            engine.add_agent(
                Kinematic(position=rng.random(2) * 80.0, velocity=(rng.random(2) - 0.5) * 20.0),
                FLOCK, max_speed=13.0
            )
        return engine

    batched = build(seed=5).compute(0.016)

    mixed = build(seed=5)
    # an out-of-range agent with another behavior forces the per-agent path
    mixed.add_agent(Kinematic(position=(1e6, 1e6)), ALIGN)
    per_agent = mixed.compute(0.016, {25: Kinematic()})

    for x, y in zip(batched, per_agent[:25]):
        assert x.linear == pytest.approx(y.linear, abs=1e-9)


def test_engine_keeps_wander_state_per_agent():
    engine = SteeringEngine(seed=3)
    first = engine.add_agent(Kinematic(velocity=(10.0, 0.0)), WANDER)
    second = engine.add_agent(Kinematic(position=(500.0, 0.0), velocity=(10.0, 0.0)), WANDER)
    engine.step(0.016)
    engine.step(0.016)
    assert engine.agent(first).wander != engine.agent(second).wander

    engine.set_behavior(first, ARRIVE, reset_wander=True)
    assert engine.agent(first).wander == WanderState()


def test_engine_max_speed_is_respected():
    engine = SteeringEngine(seed=1)
    agent_id = engine.add_agent(Kinematic(), VelocityMatch(time_to_target=0.01), max_speed=3.0)
    engine.step(1.0, {agent_id: Kinematic(velocity=(100.0, 0.0))})
    assert engine.agent(agent_id).kinematic.speed == pytest.approx(3.0)


def test_engine_steer_single_agent():
    engine = SteeringEngine(seed=0)
    agent_id = engine.add_agent(Kinematic(orientation=0.0), ALIGN)
    out = engine.steer(agent_id, Kinematic(orientation=-2.0), 0.016)
    assert out.angular == pytest.approx(-18.0)
    assert len(engine) == 1
