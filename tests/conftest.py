"""
Pytest configuration and shared fixtures.

This file provides common fixtures for all tests.
"""

import numpy as np
import pytest

from thruster_allocation.config import AllocationParams, ThrusterLayout, ThrusterMount
from thruster_allocation.config.layouts import asymmetric_tug, eight_thruster, symmetric_cross
from thruster_allocation.control import AllocationController, AllocationSolver
from thruster_allocation.core import RigidBody2D
from thruster_allocation.core.geometry import resolve_thrusters

# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def params():
    """Default allocation parameters."""
    return AllocationParams()


@pytest.fixture
def solver(params):
    """HiGHS-backed solver with default parameters."""
    return AllocationSolver(params)


@pytest.fixture
def controller(params):
    """Controller with default parameters."""
    return AllocationController(params)


# ============================================================================
# Layout Fixtures
# ============================================================================


@pytest.fixture
def cross_layout():
    """Two +y main engines beside the center, opposed lateral pair on the nose."""
    return symmetric_cross(body_id=1)


@pytest.fixture
def cross_thrusters(cross_layout):
    return resolve_thrusters(cross_layout)


@pytest.fixture
def eight_layout():
    return eight_thruster(body_id=1)


@pytest.fixture
def tug_layout():
    return asymmetric_tug(body_id=1)


@pytest.fixture
def single_layout():
    """One thruster at the origin pushing +y."""
    return ThrusterLayout(1, [ThrusterMount((0.0, 0.0), (0.0, 1.0), 1.0)])


# ============================================================================
# Host Body Fixtures
# ============================================================================


@pytest.fixture
def body():
    """Unit-mass body at the world origin, unrotated."""
    return RigidBody2D(1, mass=1.0, moment_of_inertia=4.0)


@pytest.fixture
def rotated_body():
    """Body rotated a quarter turn and offset from the origin."""
    return RigidBody2D(1, mass=2.0, moment_of_inertia=1.0, position=(5.0, -3.0), angle=np.pi / 2)


class RecordingBody(RigidBody2D):
    """RigidBody2D that also records every applied (force, point) pair."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls = []

    def apply_force_at_point(self, force, point) -> None:
        self.calls.append((np.array(force), np.array(point)))
        super().apply_force_at_point(force, point)


@pytest.fixture
def recording_body():
    return RecordingBody(1, mass=1.0, moment_of_inertia=1.0)
