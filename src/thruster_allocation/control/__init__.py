"""
Control Module

Thruster allocation: LP solver, firing cache, per-body control state,
acceleration estimation and the per-tick controller.

Public API:
- AllocationController: Per-tick orchestration over many bodies
- AllocationSolver: Linear-program allocator
- ControlState: Per-body desire, geometry and cache
- StartedFiring / StoppedFiring: Firing transition records
- estimate_acceleration: Pure acceleration prediction
"""

from thruster_allocation.control.acceleration import estimate_acceleration
from thruster_allocation.control.allocation_controller import AllocationController
from thruster_allocation.control.allocation_solver import AllocationSolver
from thruster_allocation.control.control_state import ControlState
from thruster_allocation.control.events import FiringTransition, StartedFiring, StoppedFiring
from thruster_allocation.control.firing_cache import FiringCache, QuantKey, quantize

__all__ = [
    "AllocationController",
    "AllocationSolver",
    "ControlState",
    "FiringCache",
    "FiringTransition",
    "QuantKey",
    "StartedFiring",
    "StoppedFiring",
    "estimate_acceleration",
    "quantize",
]
