"""
Allocation Controller

Per-tick orchestration for thruster-controlled bodies:

1. Resolve geometry lazily (again after any layout change)
2. Refresh center of mass, clearing the firing cache on drift
3. Quantize the desire and look up or solve the activation vector
4. Apply each active thruster's force through the host body
5. Diff the active set against last tick and return transitions

Bodies without a desire skip 1-4 but still report thrusters that stopped.
A failed allocation applies no force for that body on that tick; the
failure is logged and counted on the body's ControlState.
"""

import logging
from typing import Any, Dict, Hashable, Iterable, List, Optional, Tuple, Union

import numpy as np

from thruster_allocation.config.models import AllocationParams
from thruster_allocation.config.thruster_config import ThrusterId, ThrusterLayout
from thruster_allocation.control.acceleration import estimate_acceleration
from thruster_allocation.control.allocation_solver import AllocationSolver
from thruster_allocation.control.control_state import ControlState
from thruster_allocation.control.events import FiringTransition, StartedFiring, StoppedFiring
from thruster_allocation.core.exceptions import ThrusterAllocationException
from thruster_allocation.core.interfaces import PhysicsBody
from thruster_allocation.utils.frame_utils import rotation_matrix

logger = logging.getLogger(__name__)


class AllocationController:
    """
    Drives thruster allocation for any number of bodies.

    Holds configuration and the shared solver only; all per-body data lives
    in each body's ControlState.
    """

    def __init__(
        self,
        params: Optional[Union[Dict[str, Any], AllocationParams]] = None,
        solver: Optional[AllocationSolver] = None,
    ):
        if params is None:
            params = AllocationParams()
        elif isinstance(params, dict):
            params = AllocationParams.from_dict(params)

        self.params = params
        self.solver = solver if solver is not None else AllocationSolver(params)

    def create_state(self) -> ControlState:
        """New ControlState sized for this controller's cache settings."""
        return ControlState(cache_max_entries=self.params.cache_max_entries)

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def update(
        self,
        state: ControlState,
        layout: ThrusterLayout,
        body: PhysicsBody,
    ) -> List[FiringTransition]:
        """
        Run one control tick for a body.

        Args:
            state: The body's control state (desire already set)
            layout: The body's thruster layout
            body: Host body to read from and apply forces to

        Returns:
            Firing transitions since the previous tick
        """
        firing: Dict[ThrusterId, float] = {}
        state.last_activations = np.zeros(len(state.resolved_thrusters or []), dtype=np.float64)
        if state.has_desire:
            try:
                firing = self._allocate_and_apply(state, layout, body)
            except ThrusterAllocationException as e:
                state.solver_failures += 1
                state.last_error = e
                logger.error(
                    f"Allocation for body {body.body_id!r} failed "
                    f"({state.solver_failures} failure(s) so far): {e}"
                )
                firing = {}
        return self._diff_firing(state, firing)

    def update_all(
        self,
        entries: Iterable[Tuple[ControlState, ThrusterLayout, PhysicsBody]],
    ) -> Dict[Hashable, List[FiringTransition]]:
        """Tick every (state, layout, body) entry; map body id to its transitions."""
        return {body.body_id: self.update(state, layout, body) for state, layout, body in entries}

    def _current_activations(
        self,
        state: ControlState,
        layout: ThrusterLayout,
        body: PhysicsBody,
    ) -> np.ndarray:
        """Resolve, refresh center of mass and fetch the activation vector."""
        thrusters = state.ensure_resolved(layout, self.params.length_scale)
        center_of_mass = np.asarray(body.local_center_of_mass, dtype=np.float64)
        state.refresh_center_of_mass(center_of_mass, self.params.com_drift_threshold)

        if not state.has_desire:
            return np.zeros(len(thrusters), dtype=np.float64)

        key = state.quant_key(self.params.force_coarseness, self.params.torque_coarseness)
        return state.get_or_compute(key, self.solver, center_of_mass)

    def _allocate_and_apply(
        self,
        state: ControlState,
        layout: ThrusterLayout,
        body: PhysicsBody,
    ) -> Dict[ThrusterId, float]:
        activations = self._current_activations(state, layout, body)
        thrusters = state.resolved_thrusters or []
        state.last_activations = activations

        R = rotation_matrix(body.angle)
        origin = np.asarray(body.position, dtype=np.float64)
        thrust_scale = self.params.thrust_scale

        firing: Dict[ThrusterId, float] = {}
        for thruster, activation in zip(thrusters, activations):
            if activation <= 0.0:
                continue
            point = origin + R @ thruster.position
            force = R @ thruster.thrust_vector() * activation * thrust_scale
            body.apply_force_at_point(force, point)
            firing[thruster.identity] = float(activation)
        return firing

    def _diff_firing(
        self,
        state: ControlState,
        firing: Dict[ThrusterId, float],
    ) -> List[FiringTransition]:
        transitions: List[FiringTransition] = []
        for identity, activation in firing.items():
            if identity not in state.currently_firing:
                transitions.append(StartedFiring(identity, activation))
        for identity in sorted(state.currently_firing.difference(firing)):
            transitions.append(StoppedFiring(identity))
        state.currently_firing = set(firing)
        return transitions

    # ------------------------------------------------------------------
    # Prediction
    # ------------------------------------------------------------------

    def estimate_acceleration(
        self,
        state: ControlState,
        layout: ThrusterLayout,
        body: PhysicsBody,
    ) -> Optional[Tuple[np.ndarray, float]]:
        """
        Predict the acceleration the current desire would produce.

        Shares the firing cache with update() but applies nothing.

        Returns:
            (body-frame linear acceleration, angular acceleration), or None
            if the layout has no usable thrusters
        """
        activations = self._current_activations(state, layout, body)
        thrusters = state.resolved_thrusters
        if not thrusters:
            return None
        return estimate_acceleration(
            body.inverse_mass,
            body.inverse_sqrt_inertia,
            self.params.thrust_scale,
            body.local_center_of_mass,
            thrusters,
            activations,
        )
