"""
Reference Thruster Layouts

Named layouts used by the CLI and the test suite.

Thruster layout (eight_thruster):
- Eight thrusters arranged around a square body, two per face
- Each pair pushes inward across its face, giving force on both axes
  and torque in both senses
"""

import math
from typing import Callable, Dict, Hashable

from .thruster_config import PartTransform, ThrusterLayout, ThrusterMount

# Eight-thruster satellite geometry [m], measured forces [N]
THRUSTER_POSITIONS = {
    1: (0.145, 0.06),  # Right-top
    2: (0.145, -0.06),  # Right-bottom
    3: (0.06, -0.145),  # Bottom-right
    4: (-0.06, -0.145),  # Bottom-left
    5: (-0.145, -0.06),  # Left-bottom
    6: (-0.145, 0.06),  # Left-top
    7: (-0.06, 0.145),  # Top-left
    8: (0.06, 0.145),  # Top-right
}

THRUSTER_DIRECTIONS = {
    1: (-1.0, 0.0),  # Left
    2: (-1.0, 0.0),  # Left
    3: (0.0, 1.0),  # Up
    4: (0.0, 1.0),  # Up
    5: (1.0, 0.0),  # Right
    6: (1.0, 0.0),  # Right
    7: (0.0, -1.0),  # Down
    8: (0.0, -1.0),  # Down
}

THRUSTER_FORCES = {
    1: 0.441450,
    2: 0.430659,
    3: 0.427716,
    4: 0.438017,
    5: 0.468918,
    6: 0.446846,
    7: 0.466956,
    8: 0.484124,
}


def symmetric_cross(body_id: Hashable = 0) -> ThrusterLayout:
    """
    Two main engines beside the center pushing +y and a pair of opposed
    lateral thrusters on the nose.
    """
    return ThrusterLayout(
        body_id,
        [
            ThrusterMount((-30.0, 0.0), (0.0, 1.0), 1.0),
            ThrusterMount((30.0, 0.0), (0.0, 1.0), 1.0),
            ThrusterMount((0.0, 60.0), (1.0, 0.0), 1.0),
            ThrusterMount((0.0, 60.0), (-1.0, 0.0), 1.0),
        ],
    )


def eight_thruster(body_id: Hashable = 0) -> ThrusterLayout:
    """Eight-thruster planar satellite."""
    return ThrusterLayout.from_dicts(
        body_id, THRUSTER_POSITIONS, THRUSTER_DIRECTIONS, THRUSTER_FORCES
    )


def asymmetric_tug(body_id: Hashable = 0) -> ThrusterLayout:
    """
    Tug with a heavy main engine offset to port, two bow thrusters and an
    attached side pod carrying a retro thruster.
    """
    layout = ThrusterLayout(
        body_id,
        [
            ThrusterMount((-10.0, -20.0), (0.0, 1.0), 2.0),
            ThrusterMount((15.0, 30.0), (-1.0, 0.0), 0.5),
            ThrusterMount((-15.0, 30.0), (1.0, 0.0), 0.5),
        ],
    )
    layout.add_part(
        "pod" if isinstance(body_id, str) else body_id + 1,
        PartTransform(translation=(25.0, 0.0), rotation=math.pi),
        [ThrusterMount((0.0, -5.0), (0.0, 1.0), 0.8)],
    )
    return layout


LAYOUTS: Dict[str, Callable[..., ThrusterLayout]] = {
    "symmetric_cross": symmetric_cross,
    "eight_thruster": eight_thruster,
    "asymmetric_tug": asymmetric_tug,
}


def load_layout(name: str, body_id: Hashable = 0) -> ThrusterLayout:
    """
    Build a reference layout by name.

    Raises:
        ValueError: If layout name is unknown
    """
    try:
        factory = LAYOUTS[name]
    except KeyError:
        raise ValueError(
            f"Unknown layout '{name}'. Available layouts: {', '.join(LAYOUTS)}"
        ) from None
    return factory(body_id)
