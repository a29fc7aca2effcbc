"""
Planar Frame Utilities

Small helpers for 2D rigid-body frames shared by the geometry resolver,
the allocation solver and the controller.

Conventions:
- Angles in radians, counter-clockwise positive
- Torque is the z component of r x F (counter-clockwise positive)
"""

from typing import Optional, Sequence, Union

import numpy as np

VectorLike = Union[Sequence[float], np.ndarray]

# Directions shorter than this are treated as zero-length
MIN_DIRECTION_NORM = 1e-9


def as_vector(value: VectorLike) -> np.ndarray:
    """Return a float64 copy of a 2-element vector."""
    vec = np.array(value, dtype=np.float64).reshape(-1)
    if vec.shape != (2,):
        raise ValueError(f"Expected a 2D vector, got shape {vec.shape}")
    return vec


def rotation_matrix(angle: float) -> np.ndarray:
    """2x2 rotation matrix for a counter-clockwise angle."""
    c, s = np.cos(angle), np.sin(angle)
    return np.array([[c, -s], [s, c]])


def rotate(vec: VectorLike, angle: float) -> np.ndarray:
    """Rotate a 2D vector counter-clockwise by angle."""
    if angle == 0.0:
        return as_vector(vec)
    return rotation_matrix(angle) @ as_vector(vec)


def cross_2d(r: VectorLike, f: VectorLike) -> float:
    """Scalar (z) component of the 2D cross product r x f."""
    return float(r[0] * f[1] - r[1] * f[0])


def normalize_direction(direction: VectorLike) -> Optional[np.ndarray]:
    """
    Normalize a thrust direction.

    Returns None for non-finite or zero-length input instead of raising,
    so callers can drop the offending mount.
    """
    vec = np.array(direction, dtype=np.float64).reshape(-1)
    if vec.shape != (2,) or not np.all(np.isfinite(vec)):
        return None
    norm = np.linalg.norm(vec)
    if not np.isfinite(norm) or norm < MIN_DIRECTION_NORM:
        return None
    return vec / norm
