"""
Thruster Allocation

Allocates a desired planar force and torque across a rigid body's
unidirectional thrusters with a cached linear program, and reports
edge-triggered firing transitions each tick.

Usage:
    from thruster_allocation import AllocationController, RigidBody2D
    from thruster_allocation.config import load_layout

    controller = AllocationController()
    layout = load_layout("eight_thruster", body_id=1)
    body = RigidBody2D(1, mass=10.0, moment_of_inertia=0.14)
    state = controller.create_state()

    state.set_desire((0.0, 1.0), 0.0)
    transitions = controller.update(state, layout, body)
"""

from thruster_allocation.config import AllocationParams, ThrusterLayout, ThrusterMount
from thruster_allocation.control import (
    AllocationController,
    AllocationSolver,
    ControlState,
    StartedFiring,
    StoppedFiring,
    estimate_acceleration,
)
from thruster_allocation.core import RigidBody2D
from thruster_allocation.core.geometry import ResolvedThruster, resolve_thrusters

__version__ = "0.1.0"

__all__ = [
    "AllocationController",
    "AllocationParams",
    "AllocationSolver",
    "ControlState",
    "ResolvedThruster",
    "RigidBody2D",
    "StartedFiring",
    "StoppedFiring",
    "ThrusterLayout",
    "ThrusterMount",
    "estimate_acceleration",
    "resolve_thrusters",
]
