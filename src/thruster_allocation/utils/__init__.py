"""
Utility Module

Planar frame helpers and logging configuration.
"""

from thruster_allocation.utils.frame_utils import (
    cross_2d,
    normalize_direction,
    rotate,
    rotation_matrix,
)
from thruster_allocation.utils.logging_config import setup_logging

__all__ = [
    "cross_2d",
    "normalize_direction",
    "rotate",
    "rotation_matrix",
    "setup_logging",
]
