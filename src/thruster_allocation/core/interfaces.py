"""
Protocol Interfaces for Thruster Allocation

Defines the host physics interface the allocation controller depends on.
Uses Python's Protocol (structural subtyping) so any physics engine
binding can be plugged in.

Key protocols:
- PhysicsBody: read mass properties and pose, apply forces
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Hashable, Protocol, runtime_checkable

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import NDArray


@runtime_checkable
class PhysicsBody(Protocol):
    """
    Protocol for a host rigid body under thruster control.

    The controller reads mass properties and pose once per tick and writes
    only through ``apply_force_at_point``.
    """

    @property
    def body_id(self) -> Hashable:
        """Stable, comparable body identity."""
        ...

    @property
    def inverse_mass(self) -> float:
        """1 / mass (0 for static bodies)."""
        ...

    @property
    def inverse_sqrt_inertia(self) -> float:
        """1 / sqrt(moment of inertia)."""
        ...

    @property
    def local_center_of_mass(self) -> NDArray[np.floating]:
        """Center of mass in the body frame."""
        ...

    @property
    def position(self) -> NDArray[np.floating]:
        """World position of the body frame origin."""
        ...

    @property
    def angle(self) -> float:
        """World rotation of the body frame in radians (CCW positive)."""
        ...

    def apply_force_at_point(
        self,
        force: NDArray[np.floating],
        point: NDArray[np.floating],
    ) -> None:
        """
        Apply a world-space force at a world-space point.

        Args:
            force: Force vector in world frame
            point: Application point in world frame
        """
        ...
