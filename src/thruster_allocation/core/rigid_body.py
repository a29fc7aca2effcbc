"""
Planar Rigid Body

Minimal in-process host body implementing the PhysicsBody protocol.
Accumulates applied forces and the resulting torque about the world
center of mass. Integration is left to the host simulation.
"""

import logging
from typing import Hashable, Optional, Tuple

import numpy as np

from thruster_allocation.core.exceptions import ParameterValidationError
from thruster_allocation.utils.frame_utils import as_vector, cross_2d, rotate

logger = logging.getLogger(__name__)


class RigidBody2D:
    """
    Planar rigid body with force accumulators.

    Attributes:
        body_id: Stable body identity
        mass: Mass (> 0)
        moment_of_inertia: Rotational inertia about the center of mass (> 0)
        local_center_of_mass: Center of mass in the body frame
        position: World position of the body frame origin
        angle: World rotation in radians
        force: Accumulated world force since last clear
        torque: Accumulated torque about the world center of mass
    """

    def __init__(
        self,
        body_id: Hashable,
        mass: float,
        moment_of_inertia: float,
        local_center_of_mass: Tuple[float, float] = (0.0, 0.0),
        position: Tuple[float, float] = (0.0, 0.0),
        angle: float = 0.0,
    ):
        if mass <= 0:
            raise ParameterValidationError("mass", mass, "must be positive")
        if moment_of_inertia <= 0:
            raise ParameterValidationError("moment_of_inertia", moment_of_inertia, "must be positive")

        self.body_id = body_id
        self.mass = float(mass)
        self.moment_of_inertia = float(moment_of_inertia)
        self.local_center_of_mass = as_vector(local_center_of_mass)
        self.position = as_vector(position)
        self.angle = float(angle)

        self.force = np.zeros(2, dtype=np.float64)
        self.torque = 0.0
        self.applied_count = 0

    @property
    def inverse_mass(self) -> float:
        return 1.0 / self.mass

    @property
    def inverse_sqrt_inertia(self) -> float:
        return 1.0 / np.sqrt(self.moment_of_inertia)

    @property
    def world_center_of_mass(self) -> np.ndarray:
        return self.to_world(self.local_center_of_mass)

    def to_world(self, local_point) -> np.ndarray:
        """Map a body-frame point to world frame."""
        return self.position + rotate(local_point, self.angle)

    def set_center_of_mass(self, local_center_of_mass: Tuple[float, float]) -> None:
        """Move the center of mass, e.g. after fuel burn or cargo transfer."""
        self.local_center_of_mass = as_vector(local_center_of_mass)

    def apply_force_at_point(self, force, point) -> None:
        """Accumulate a world force applied at a world point."""
        force = as_vector(force)
        arm = as_vector(point) - self.world_center_of_mass
        self.force += force
        self.torque += cross_2d(arm, force)
        self.applied_count += 1

    def clear_forces(self) -> None:
        """Reset accumulators at the end of a physics step."""
        self.force[:] = 0.0
        self.torque = 0.0
        self.applied_count = 0

    def accelerations(self) -> Tuple[np.ndarray, float]:
        """
        Linear and angular acceleration from the accumulated load.

        Returns:
            (world linear acceleration, angular acceleration)
        """
        return self.force * self.inverse_mass, self.torque / self.moment_of_inertia

    def __repr__(self) -> str:
        return (
            f"RigidBody2D(body_id={self.body_id!r}, mass={self.mass}, "
            f"position={self.position.tolist()}, angle={self.angle:.3f})"
        )


def make_body(
    body_id: Hashable,
    mass: float = 10.0,
    size: float = 0.29,
    moment_of_inertia: Optional[float] = None,
    **kwargs,
) -> RigidBody2D:
    """
    Build a square-plate body.

    Uses I = m * s^2 / 6 unless an explicit moment of inertia is given.
    """
    if moment_of_inertia is None:
        moment_of_inertia = (1 / 6) * mass * size**2
    return RigidBody2D(body_id, mass, moment_of_inertia, **kwargs)
