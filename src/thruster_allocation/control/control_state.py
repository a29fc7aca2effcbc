"""
Per-Body Control State

Holds a body's current desire, its resolved thruster geometry, the firing
cache tied to that geometry, and the set of thrusters firing last tick.

Invalidation rules:
- Layout version differs from the resolved one: drop geometry and cache
- Center of mass moved more than the drift threshold (squared distance):
  drop the cache only, since moment arms changed but body-local geometry
  did not
"""

import logging
from typing import List, Optional, Set

import numpy as np

from thruster_allocation.config.thruster_config import ThrusterId, ThrusterLayout
from thruster_allocation.control.firing_cache import FiringCache, QuantKey, quantize
from thruster_allocation.core.exceptions import CacheConsistencyError, OptimizationError
from thruster_allocation.core.geometry import ResolvedThruster, resolve_thrusters
from thruster_allocation.utils.frame_utils import as_vector

logger = logging.getLogger(__name__)


class ControlState:
    """
    Control state of one controlled body.

    Created when a body becomes controllable and discarded with it.
    """

    def __init__(self, cache_max_entries: int = 4096):
        self.desired_force = np.zeros(2, dtype=np.float64)
        self.desired_torque = 0.0

        self.resolved_thrusters: Optional[List[ResolvedThruster]] = None
        self.resolved_version: Optional[int] = None
        self.last_seen_center_of_mass = np.zeros(2, dtype=np.float64)
        self.firing_cache = FiringCache(cache_max_entries)
        self.currently_firing: Set[ThrusterId] = set()
        self.last_activations = np.zeros(0, dtype=np.float64)

        # Diagnostics
        self.solver_failures = 0
        self.last_error: Optional[Exception] = None

    # ------------------------------------------------------------------
    # Desire
    # ------------------------------------------------------------------

    def set_desire(self, desired_force=None, desired_torque: Optional[float] = None) -> None:
        """
        Set desired force and/or torque.

        Args:
            desired_force: (fx, fy) as fractions of total thrust, ~[-1, 1]
            desired_torque: Fraction of achievable torque, ~[-1, 1] (CCW positive)
        """
        if desired_force is not None:
            self.desired_force = as_vector(desired_force)
        if desired_torque is not None:
            self.desired_torque = float(desired_torque)

    def clear_desire(self) -> None:
        self.desired_force = np.zeros(2, dtype=np.float64)
        self.desired_torque = 0.0

    @property
    def has_desire(self) -> bool:
        return bool(np.any(self.desired_force != 0.0) or self.desired_torque != 0.0)

    # ------------------------------------------------------------------
    # Geometry and cache invalidation
    # ------------------------------------------------------------------

    def invalidate_geometry(self) -> None:
        """Forget resolved thrusters and every cached vector."""
        self.resolved_thrusters = None
        self.resolved_version = None
        self.firing_cache.clear()

    def ensure_resolved(self, layout: ThrusterLayout, length_scale: float = 1.0) -> List[ResolvedThruster]:
        """Resolve geometry if absent or if the layout changed since last resolution."""
        if self.resolved_thrusters is not None and self.resolved_version != layout.version:
            logger.debug(
                f"Layout of body {layout.body_id!r} changed "
                f"(v{self.resolved_version} -> v{layout.version}), invalidating"
            )
            self.invalidate_geometry()

        if self.resolved_thrusters is None:
            self.resolved_thrusters = resolve_thrusters(layout, length_scale)
            self.resolved_version = layout.version
            self.firing_cache.clear()
        return self.resolved_thrusters

    def refresh_center_of_mass(self, center_of_mass, threshold: float) -> bool:
        """
        Record the current center of mass.

        Returns:
            True if the drift exceeded threshold and the cache was cleared
        """
        center_of_mass = as_vector(center_of_mass)
        drift_sq = float(np.sum((center_of_mass - self.last_seen_center_of_mass) ** 2))
        if drift_sq > threshold:
            logger.debug(f"Center of mass drifted {drift_sq:.4f} (sq), clearing firing cache")
            self.last_seen_center_of_mass = center_of_mass
            self.firing_cache.clear()
            return True
        return False

    # ------------------------------------------------------------------
    # Cache access
    # ------------------------------------------------------------------

    def quant_key(self, force_coarseness: float, torque_coarseness: float) -> QuantKey:
        """
        Quantized key of the current desire.

        Raises:
            OptimizationError: If the desire is NaN or infinite
        """
        if not (np.all(np.isfinite(self.desired_force)) and np.isfinite(self.desired_torque)):
            raise OptimizationError(
                "non_finite_input",
                f"force={self.desired_force}, torque={self.desired_torque}",
            )
        return quantize(self.desired_force, self.desired_torque, force_coarseness, torque_coarseness)

    def get_or_compute(self, key: QuantKey, solver, center_of_mass) -> np.ndarray:
        """
        Look up or solve the activation vector for key.

        Missing geometry counts as no thrusters and yields an empty vector.

        Raises:
            CacheConsistencyError: If the vector length differs from the
                resolved thruster count
        """
        thrusters = self.resolved_thrusters
        if thrusters is None:
            return np.zeros(0, dtype=np.float64)

        def compute() -> np.ndarray:
            logger.debug(f"Firing cache miss for {key}, solving for {len(thrusters)} thruster(s)")
            return solver.solve(thrusters, center_of_mass, self.desired_force, self.desired_torque)

        activations = self.firing_cache.get_or_compute(key, compute)
        if len(activations) != len(thrusters):
            raise CacheConsistencyError(expected=len(thrusters), actual=len(activations))
        return activations
