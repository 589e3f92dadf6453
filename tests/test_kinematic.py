"""Kinematic records and Euler integration."""

import math

import numpy as np
import pytest

from steering import DomainError, Kinematic, SteeringOutput, integrate


def test_kinematic_converts_sequences_to_vectors():
    k = Kinematic(position=(1, 2), velocity=[3, 4], orientation=1, rotation=0)
    assert isinstance(k.position, np.ndarray)
    assert k.position.dtype == np.float64
    assert k.speed == pytest.approx(5.0)


def test_kinematic_copy_is_independent():
    k = Kinematic(position=(1.0, 2.0))
    c = k.copy()
    c.position[0] = 50.0
    assert k.position[0] == 1.0


def test_steering_output_is_immutable():
    out = SteeringOutput((1.0, 2.0), 0.5)
    with pytest.raises(ValueError):
        out.linear[0] = 3.0
    with pytest.raises(AttributeError):
        out.angular = 1.0


def test_steering_output_zero_and_finite():
    assert SteeringOutput.zero().is_finite
    assert not SteeringOutput((math.inf, 0.0)).is_finite
    assert not SteeringOutput((0.0, 0.0), math.nan).is_finite


def test_steering_output_compares_by_value():
    assert SteeringOutput.zero() == SteeringOutput((0.0, 0.0), 0.0)
    assert SteeringOutput((1.0, 0.0)) != SteeringOutput((1.0, 0.0), 0.5)
    assert SteeringOutput((1.0, 0.0)) != SteeringOutput((0.0, 1.0))


def test_kinematic_equality_is_identity():
    k = Kinematic(position=(1.0, 2.0))
    assert k == k
    assert k != k.copy()
    assert k in [k.copy(), k]


def test_integrate_euler_order():
    k = Kinematic(position=(0.0, 0.0), velocity=(1.0, 0.0), orientation=0.0, rotation=1.0)
    integrate(k, SteeringOutput((10.0, 0.0), 2.0), 0.5)
    # velocity first, then position from the new velocity
    assert k.velocity == pytest.approx([6.0, 0.0])
    assert k.position == pytest.approx([3.0, 0.0])
    assert k.rotation == pytest.approx(2.0)
    assert k.orientation == pytest.approx(1.0)


def test_integrate_wraps_orientation():
    k = Kinematic(orientation=3.0, rotation=2.0)
    integrate(k, SteeringOutput.zero(), 1.0)
    assert -math.pi <= k.orientation <= math.pi
    assert k.orientation == pytest.approx(5.0 - 2 * math.pi)


def test_integrate_caps_speed():
    k = Kinematic(velocity=(3.0, 4.0))
    integrate(k, SteeringOutput((30.0, 40.0)), 1.0, max_speed=10.0)
    assert k.speed == pytest.approx(10.0)
    assert k.position == pytest.approx([6.0, 8.0])


def test_integrate_rejects_negative_dt():
    with pytest.raises(DomainError):
        integrate(Kinematic(), SteeringOutput.zero(), -0.1)
