"""
Geometry Resolver

Flattens a body's thruster layout into a body-local list of resolved
thrusters. The list index is the activation-vector index, so resolution
order is fixed: owners by id, then each owner's mounts in list order.

Mounts with a zero-length or non-finite direction are dropped here and
nowhere else.
"""

import logging
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from thruster_allocation.config.thruster_config import ThrusterId, ThrusterLayout
from thruster_allocation.utils.frame_utils import normalize_direction

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ResolvedThruster:
    """
    A thruster in the controlled body's frame.

    Attributes:
        position: Body-local position (host length units)
        direction: Body-local unit thrust direction
        max_thrust: Maximum thrust force
        identity: Stable (owner_id, mount_key) identity
    """

    position: np.ndarray
    direction: np.ndarray
    max_thrust: float
    identity: ThrusterId

    def thrust_vector(self) -> np.ndarray:
        """Full-thrust force vector in the body frame."""
        return self.direction * self.max_thrust


def resolve_thrusters(layout: ThrusterLayout, length_scale: float = 1.0) -> List[ResolvedThruster]:
    """
    Resolve a layout into body-local thrusters.

    Args:
        layout: Mount configuration of the controlled body
        length_scale: Mount length units per host length unit; positions
            are divided by it

    Returns:
        Ordered list of ResolvedThruster
    """
    resolved: List[ResolvedThruster] = []
    dropped = 0

    for owner in layout.owners():
        transform = owner.transform

        for key, mount in owner.items():
            direction = normalize_direction(mount.direction_array)
            if direction is None:
                dropped += 1
                continue

            position = mount.position_array
            if not transform.is_identity:
                position = transform.apply_point(position)
                # Re-normalize after rotation
                direction = normalize_direction(transform.apply_direction(direction))
                if direction is None:
                    dropped += 1
                    continue

            resolved.append(
                ResolvedThruster(
                    position=position / length_scale,
                    direction=direction,
                    max_thrust=float(mount.max_thrust),
                    identity=(owner.owner_id, key),
                )
            )

    if dropped:
        logger.debug(
            f"Dropped {dropped} mount(s) with degenerate thrust direction on body {layout.body_id!r}"
        )
    logger.debug(f"Resolved {len(resolved)} thruster(s) for body {layout.body_id!r}")
    return resolved


def total_thrust(thrusters: Sequence[ResolvedThruster]) -> float:
    """Sum of maximum thrust over all thrusters."""
    return float(sum(t.max_thrust for t in thrusters))
