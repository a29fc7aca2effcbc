"""
Tests for the pure acceleration estimator.
"""

import numpy as np
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from thruster_allocation.control import estimate_acceleration
from thruster_allocation.core import RigidBody2D
from thruster_allocation.core.geometry import ResolvedThruster


def thruster(position, direction, max_thrust=1.0, index=0):
    return ResolvedThruster(
        position=np.array(position, dtype=float),
        direction=np.array(direction, dtype=float),
        max_thrust=max_thrust,
        identity=(0, index),
    )


@pytest.mark.unit
class TestEstimateAcceleration:
    """Linear and angular prediction."""

    def test_single_thruster(self):
        linear, angular = estimate_acceleration(
            inverse_mass=0.5,
            inverse_sqrt_inertia=0.5,
            engine_scale=1.0,
            center_of_mass=(0.0, 0.0),
            thrusters=[thruster((1.0, 0.0), (0.0, 1.0), 2.0)],
            activations=[0.5],
        )

        np.testing.assert_allclose(linear, [0.0, 0.5])
        assert angular == pytest.approx(0.25)

    def test_center_of_mass_removes_arm(self):
        _, angular = estimate_acceleration(
            1.0, 1.0, 1.0, (1.0, 0.0), [thruster((1.0, 0.0), (0.0, 1.0))], [1.0]
        )

        assert angular == 0.0

    def test_clockwise_is_negative(self):
        _, angular = estimate_acceleration(
            1.0, 1.0, 1.0, (0.0, 0.0), [thruster((-1.0, 0.0), (0.0, 1.0))], [1.0]
        )

        assert angular == pytest.approx(-1.0)

    def test_inactive_thrusters_ignored(self):
        linear, angular = estimate_acceleration(
            1.0,
            1.0,
            1.0,
            (0.0, 0.0),
            [thruster((1.0, 0.0), (0.0, 1.0)), thruster((0.0, 1.0), (1.0, 0.0), index=1)],
            [0.0, -0.3],
        )

        np.testing.assert_array_equal(linear, [0.0, 0.0])
        assert angular == 0.0

    def test_engine_scale(self):
        linear, _ = estimate_acceleration(
            1.0, 1.0, 4.0, (0.0, 0.0), [thruster((0.0, 0.0), (1.0, 0.0))], [0.25]
        )

        np.testing.assert_allclose(linear, [1.0, 0.0])

    def test_empty(self):
        linear, angular = estimate_acceleration(1.0, 1.0, 1.0, (0.0, 0.0), [], [])

        np.testing.assert_array_equal(linear, [0.0, 0.0])
        assert angular == 0.0

    @given(
        activation=st.floats(0.01, 1.0),
        px=st.floats(-5.0, 5.0),
        py=st.floats(-5.0, 5.0),
        angle=st.floats(-np.pi, np.pi),
        cx=st.floats(-1.0, 1.0),
    )
    @settings(max_examples=50)
    def test_agrees_with_rigid_body(self, activation, px, py, angle, cx):
        """Prediction matches what an unrotated RigidBody2D accumulates."""
        direction = (np.cos(angle), np.sin(angle))
        t = thruster((px, py), direction, 1.5)
        body = RigidBody2D(0, mass=2.0, moment_of_inertia=3.0, local_center_of_mass=(cx, 0.0))

        linear, angular = estimate_acceleration(
            body.inverse_mass, body.inverse_sqrt_inertia, 1.0, body.local_center_of_mass, [t], [activation]
        )
        body.apply_force_at_point(t.thrust_vector() * activation, t.position)
        expected_linear, expected_angular = body.accelerations()

        np.testing.assert_allclose(linear, expected_linear, atol=1e-9)
        assert angular == pytest.approx(expected_angular, abs=1e-9)
