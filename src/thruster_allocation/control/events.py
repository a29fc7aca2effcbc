"""
Firing Transition Records

Edge-triggered thruster state changes returned by each controller tick.
The caller owns fan-out (sound, particles, telemetry).
"""

from dataclasses import dataclass
from typing import Union

from thruster_allocation.config.thruster_config import ThrusterId


@dataclass(frozen=True)
class StartedFiring:
    """Thruster became active this tick."""

    thruster: ThrusterId
    activation: float


@dataclass(frozen=True)
class StoppedFiring:
    """Thruster was active last tick and is idle now."""

    thruster: ThrusterId


FiringTransition = Union[StartedFiring, StoppedFiring]
