"""
Thruster Layout Configuration

Type-safe representation of thruster mounts and the parts that carry them.

A controlled body owns one ThrusterLayout. The layout holds the body's own
mounts plus any rigidly attached sub-parts, each with a static transform
relative to the body. Every structural mutation bumps ``version`` so the
allocation controller can tell that resolved geometry is stale.

Mount identity:
- Each mount gets a key from its part's counter when it is added
- Keys are never reused on a part, even after removals or re-attachment
- ``(owner_id, key)`` therefore names the same physical mount for as long
  as it exists, whatever happens to its neighbours
"""

import math
from dataclasses import dataclass, field, replace
from typing import Dict, Hashable, Iterable, Iterator, List, Optional, Tuple

import numpy as np

from thruster_allocation.core.exceptions import LayoutError, ParameterValidationError
from thruster_allocation.utils.frame_utils import as_vector, rotate

# (owner_id, mount_key): stable identity of a mount across ticks
ThrusterId = Tuple[Hashable, int]


@dataclass(frozen=True)
class ThrusterMount:
    """
    Configuration for a single thruster.

    Attributes:
        local_position: (x, y) position in the owning part's frame
        thrust_direction: (dx, dy) thrust direction, normalized on resolution
        max_thrust: Maximum thrust force (>= 0)
    """

    local_position: Tuple[float, float]
    thrust_direction: Tuple[float, float] = (0.0, 1.0)
    max_thrust: float = 1.0

    def __post_init__(self):
        object.__setattr__(self, "local_position", tuple(float(c) for c in self.local_position))
        object.__setattr__(
            self, "thrust_direction", tuple(float(c) for c in self.thrust_direction)
        )
        if not math.isfinite(self.max_thrust) or self.max_thrust < 0:
            raise ParameterValidationError(
                "max_thrust", self.max_thrust, "must be finite and non-negative"
            )
        if len(self.local_position) != 2 or not all(
            math.isfinite(c) for c in self.local_position
        ):
            raise ParameterValidationError(
                "local_position", self.local_position, "must be a finite 2D point"
            )

    @property
    def position_array(self) -> np.ndarray:
        """Return position as numpy array."""
        return np.array(self.local_position, dtype=np.float64)

    @property
    def direction_array(self) -> np.ndarray:
        """Return direction as numpy array."""
        return np.array(self.thrust_direction, dtype=np.float64)


@dataclass(frozen=True)
class PartTransform:
    """Static pose of a sub-part relative to the controlled body."""

    translation: Tuple[float, float] = (0.0, 0.0)
    rotation: float = 0.0

    def apply_point(self, point) -> np.ndarray:
        """Map a point from the part frame to the body frame."""
        return as_vector(self.translation) + rotate(point, self.rotation)

    def apply_direction(self, direction) -> np.ndarray:
        """Map a direction from the part frame to the body frame."""
        return rotate(direction, self.rotation)

    @property
    def is_identity(self) -> bool:
        return self.rotation == 0.0 and tuple(self.translation) == (0.0, 0.0)


IDENTITY_TRANSFORM = PartTransform()


@dataclass(frozen=True)
class MountOwner:
    """
    A body part carrying thruster mounts.

    ``keys`` is index-aligned with ``mounts``; list order is resolution order.
    """

    owner_id: Hashable
    transform: PartTransform = IDENTITY_TRANSFORM
    mounts: Tuple[ThrusterMount, ...] = field(default_factory=tuple)
    keys: Tuple[int, ...] = field(default_factory=tuple)

    def items(self) -> Iterator[Tuple[int, ThrusterMount]]:
        """Iterate over (mount_key, mount) in list order."""
        return zip(self.keys, self.mounts)

    def position_of(self, key: int) -> int:
        """List position of the mount with the given key."""
        try:
            return self.keys.index(key)
        except ValueError:
            raise LayoutError(f"No mount {key} on part {self.owner_id!r}") from None


class ThrusterLayout:
    """
    Mount configuration of one controlled body.

    Owner ids must be mutually comparable (all ints or all strings) so
    owners can be flattened in a stable order.
    """

    def __init__(self, body_id: Hashable, mounts: Iterable[ThrusterMount] = ()):
        self.body_id = body_id
        self._owners: Dict[Hashable, MountOwner] = {}
        # Next unused mount key per owner id; survives remove_part
        self._next_key: Dict[Hashable, int] = {}
        self._owners[body_id] = self._new_owner(body_id, IDENTITY_TRANSFORM, mounts)
        self._version = 0

    @classmethod
    def from_dicts(
        cls,
        body_id: Hashable,
        positions: Dict[int, Tuple[float, float]],
        directions: Dict[int, Tuple[float, float]],
        forces: Dict[int, float],
    ) -> "ThrusterLayout":
        """
        Create a single-part layout from per-thruster dictionaries.

        Args:
            body_id: Identity of the controlled body
            positions: {thruster_id: (x, y)} dictionary
            directions: {thruster_id: (dx, dy)} dictionary
            forces: {thruster_id: force} dictionary

        Returns:
            ThrusterLayout with mounts ordered by thruster id
        """
        mounts = [
            ThrusterMount(
                local_position=positions[thruster_id],
                thrust_direction=tuple(directions[thruster_id]),
                max_thrust=forces[thruster_id],
            )
            for thruster_id in sorted(positions.keys())
        ]
        return cls(body_id, mounts)

    @property
    def version(self) -> int:
        """Monotonic counter bumped on every structural change."""
        return self._version

    def _bump(self) -> None:
        self._version += 1

    def _allocate_keys(self, owner_id: Hashable, count: int) -> Tuple[int, ...]:
        start = self._next_key.get(owner_id, 0)
        self._next_key[owner_id] = start + count
        return tuple(range(start, start + count))

    def _new_owner(
        self,
        owner_id: Hashable,
        transform: PartTransform,
        mounts: Iterable[ThrusterMount],
    ) -> MountOwner:
        mounts = tuple(mounts)
        return MountOwner(owner_id, transform, mounts, self._allocate_keys(owner_id, len(mounts)))

    def _owner(self, owner_id: Hashable) -> MountOwner:
        try:
            return self._owners[owner_id]
        except KeyError:
            raise LayoutError(f"Unknown part {owner_id!r} on body {self.body_id!r}") from None

    # ------------------------------------------------------------------
    # Parts
    # ------------------------------------------------------------------

    def add_part(
        self,
        part_id: Hashable,
        transform: PartTransform = IDENTITY_TRANSFORM,
        mounts: Iterable[ThrusterMount] = (),
    ) -> None:
        """Attach a rigid sub-part carrying mounts."""
        if part_id in self._owners:
            raise LayoutError(f"Part {part_id!r} already attached to body {self.body_id!r}")
        self._owners[part_id] = self._new_owner(part_id, transform, mounts)
        self._bump()

    def remove_part(self, part_id: Hashable) -> None:
        """Detach a sub-part and all of its mounts."""
        if part_id == self.body_id:
            raise LayoutError("The controlled body itself cannot be removed")
        self._owner(part_id)
        del self._owners[part_id]
        self._bump()

    def set_part_transform(self, part_id: Hashable, transform: PartTransform) -> None:
        """Move a sub-part relative to the body."""
        if part_id == self.body_id:
            raise LayoutError("The controlled body's own transform is always identity")
        owner = self._owner(part_id)
        self._owners[part_id] = replace(owner, transform=transform)
        self._bump()

    # ------------------------------------------------------------------
    # Mounts
    # ------------------------------------------------------------------

    def add_mount(self, mount: ThrusterMount, owner_id: Optional[Hashable] = None) -> ThrusterId:
        """Append a mount to a part (the body itself by default)."""
        owner_id = self.body_id if owner_id is None else owner_id
        owner = self._owner(owner_id)
        (key,) = self._allocate_keys(owner_id, 1)
        self._owners[owner_id] = replace(
            owner, mounts=owner.mounts + (mount,), keys=owner.keys + (key,)
        )
        self._bump()
        return (owner_id, key)

    def remove_mount(self, thruster_id: ThrusterId) -> ThrusterMount:
        """Remove a mount. Other mounts keep their identities."""
        owner_id, key = thruster_id
        owner = self._owner(owner_id)
        index = owner.position_of(key)
        removed = owner.mounts[index]
        self._owners[owner_id] = replace(
            owner,
            mounts=owner.mounts[:index] + owner.mounts[index + 1 :],
            keys=owner.keys[:index] + owner.keys[index + 1 :],
        )
        self._bump()
        return removed

    def replace_mount(self, thruster_id: ThrusterId, mount: ThrusterMount) -> None:
        """Swap the data of an existing mount, keeping its identity."""
        owner_id, key = thruster_id
        owner = self._owner(owner_id)
        index = owner.position_of(key)
        mounts = list(owner.mounts)
        mounts[index] = mount
        self._owners[owner_id] = replace(owner, mounts=tuple(mounts))
        self._bump()

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def owners(self) -> List[MountOwner]:
        """Owners in stable id order."""
        return [self._owners[key] for key in sorted(self._owners)]

    def __iter__(self) -> Iterator[Tuple[ThrusterId, ThrusterMount]]:
        """Iterate over (thruster_id, mount) in resolution order."""
        for owner in self.owners():
            for key, mount in owner.items():
                yield (owner.owner_id, key), mount

    def __len__(self) -> int:
        """Return number of mounts, valid or not."""
        return sum(len(owner.mounts) for owner in self._owners.values())

    def __repr__(self) -> str:
        return (
            f"ThrusterLayout(body_id={self.body_id!r}, parts={len(self._owners)}, "
            f"mounts={len(self)}, version={self._version})"
        )
