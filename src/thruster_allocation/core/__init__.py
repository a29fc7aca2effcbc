"""
Core Module

Exceptions, error handling, the host physics interface and geometry.

Public API:
- PhysicsBody: Host body protocol
- RigidBody2D: In-process host body with force accumulators
- ThrusterAllocationException and subclasses

The geometry resolver lives in ``thruster_allocation.core.geometry`` and is
not imported here because it depends on the config package.
"""

from thruster_allocation.core.exceptions import (
    AllocationError,
    CacheConsistencyError,
    ConfigurationError,
    LayoutError,
    OptimizationError,
    ParameterValidationError,
    ThrusterAllocationException,
)
from thruster_allocation.core.interfaces import PhysicsBody
from thruster_allocation.core.rigid_body import RigidBody2D, make_body

__all__ = [
    "AllocationError",
    "CacheConsistencyError",
    "ConfigurationError",
    "LayoutError",
    "OptimizationError",
    "ParameterValidationError",
    "ThrusterAllocationException",
    "PhysicsBody",
    "RigidBody2D",
    "make_body",
]
