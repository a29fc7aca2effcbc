"""
Thruster Allocation Solver

Maps a desired body force/torque to per-thruster activation fractions by
solving a small linear program.

Decision variables z = [a_0, ..., a_{n-1}, e_tau, e_fx, e_fy]:
- a_i in [0, 1]: activation of thruster i, objective weight fuel_cost_weight
- e_* >= 0: absolute residuals, objective weight 1

Each signed residual r is bounded by its error variable with two rows
(r <= e and -r <= e), so the objective is a weighted L1 norm of the
torque and force errors plus fuel.

Normalization:
- Desired force is a fraction of total thrust (sum of max_thrust)
- Desired torque is a fraction of the achievable torque in the requested
  sense (sum of positive or of negative thruster torques), since most
  layouts are not rotationally symmetric
- Torques are weighted by torque_weight_factor * total thrust so torque and
  force residuals are commensurate

The LP is always feasible (a = 0, e = |target| satisfies every row), so a
failed solve is an invariant violation and raises OptimizationError.
"""

import logging
import time
from collections import deque
from typing import Any, Deque, Dict, Optional, Sequence, Tuple, Union

import numpy as np
import osqp
import scipy.sparse as sp
from scipy.optimize import linprog

from thruster_allocation.config.models import AllocationParams
from thruster_allocation.core.error_handling import with_error_context
from thruster_allocation.core.exceptions import AllocationError, OptimizationError
from thruster_allocation.core.geometry import ResolvedThruster, total_thrust

logger = logging.getLogger(__name__)

# Number of error variables (torque, force x, force y)
N_ERROR_VARS = 3

# Accepted OSQP terminal states
_OSQP_OK = ("solved", "solved inaccurate", "solved_inaccurate")


class AllocationSolver:
    """
    Linear-program thruster allocator.

    Stateless apart from solve statistics; one instance can serve every
    controlled body.
    """

    def __init__(self, params: Optional[Union[Dict[str, Any], AllocationParams]] = None):
        if params is None:
            params = AllocationParams()
        elif isinstance(params, dict):
            params = AllocationParams.from_dict(params)

        self.params = params
        self.solver_type = params.solver_type
        self.fuel_cost_weight = params.fuel_cost_weight
        self.torque_weight_factor = params.torque_weight_factor
        self.force_weight = params.force_weight
        self.rounding_decimals = params.rounding_decimals

        # Performance tracking
        self.solve_count = 0
        self.solve_times: Deque[float] = deque(maxlen=1000)
        self.last_info: Dict[str, Any] = {}

    def build_problem(
        self,
        thrusters: Sequence[ResolvedThruster],
        center_of_mass: np.ndarray,
        desired_force: np.ndarray,
        desired_torque: float,
    ) -> Tuple[np.ndarray, sp.csr_matrix, np.ndarray, np.ndarray, np.ndarray]:
        """
        Assemble the LP in inequality form.

        Returns:
            (c, A_ub, b_ub, lower_bounds, upper_bounds)
        """
        n = len(thrusters)
        positions = np.array([t.position for t in thrusters], dtype=np.float64).reshape(n, 2)
        directions = np.array([t.direction for t in thrusters], dtype=np.float64).reshape(n, 2)
        max_thrust = np.array([t.max_thrust for t in thrusters], dtype=np.float64)

        total = total_thrust(thrusters)
        torque_weight = total * self.torque_weight_factor

        thrust_vectors = directions * max_thrust[:, None]
        arms = positions - center_of_mass
        torques = (arms[:, 0] * thrust_vectors[:, 1] - arms[:, 1] * thrust_vectors[:, 0]) * torque_weight
        forces = thrust_vectors * self.force_weight

        total_positive_torque = float(torques[torques > 0].sum())
        total_negative_torque = float(-torques[torques <= 0].sum())
        if desired_torque > 0:
            torque_target = desired_torque * total_positive_torque
        else:
            torque_target = desired_torque * total_negative_torque
        force_target = desired_force * total * self.force_weight

        # Rows: +tau, -tau, +fx, -fx, +fy, -fy
        coefficients = np.vstack([torques, -torques, forces[:, 0], -forces[:, 0], forces[:, 1], -forces[:, 1]])
        error_columns = np.zeros((6, N_ERROR_VARS))
        for k in range(N_ERROR_VARS):
            error_columns[2 * k, k] = -1.0
            error_columns[2 * k + 1, k] = -1.0
        A_ub = sp.csr_matrix(np.hstack([coefficients, error_columns]))

        b_ub = np.array(
            [
                torque_target,
                -torque_target,
                force_target[0],
                -force_target[0],
                force_target[1],
                -force_target[1],
            ]
        )

        c = np.concatenate([np.full(n, self.fuel_cost_weight), np.ones(N_ERROR_VARS)])
        lower = np.zeros(n + N_ERROR_VARS)
        upper = np.concatenate([np.ones(n), np.full(N_ERROR_VARS, np.inf)])
        return c, A_ub, b_ub, lower, upper

    @with_error_context("Thruster allocation solve", wrap_with=AllocationError)
    def solve(
        self,
        thrusters: Sequence[ResolvedThruster],
        center_of_mass,
        desired_force,
        desired_torque: float,
    ) -> np.ndarray:
        """
        Compute activation fractions.

        Args:
            thrusters: Resolved thrusters (defines output order)
            center_of_mass: Body-local center of mass
            desired_force: Desired force as a fraction of total thrust, ~[-1, 1]^2
            desired_torque: Desired torque as a fraction of achievable torque, ~[-1, 1]

        Returns:
            Activation vector in [0, 1], rounded to rounding_decimals

        Raises:
            OptimizationError: If the solver does not report an optimum
        """
        n = len(thrusters)
        if n == 0:
            return np.zeros(0, dtype=np.float64)

        center_of_mass = np.asarray(center_of_mass, dtype=np.float64)
        desired_force = np.asarray(desired_force, dtype=np.float64)
        desired_torque = float(desired_torque)
        if not (
            np.all(np.isfinite(center_of_mass))
            and np.all(np.isfinite(desired_force))
            and np.isfinite(desired_torque)
        ):
            raise OptimizationError(
                "non_finite_input",
                f"com={center_of_mass}, force={desired_force}, torque={desired_torque}",
            )

        start_time = time.time()
        c, A_ub, b_ub, lower, upper = self.build_problem(
            thrusters, center_of_mass, desired_force, desired_torque
        )

        if self.solver_type == "OSQP":
            z, objective = self._solve_osqp(c, A_ub, b_ub, lower, upper)
        else:
            z, objective = self._solve_highs(c, A_ub, b_ub, lower, upper)

        solve_time = time.time() - start_time
        self.solve_times.append(solve_time)
        self.solve_count += 1
        self.last_info = {
            "status_name": "OPTIMAL",
            "solver_type": self.solver_type,
            "solve_time": solve_time,
            "objective_value": objective,
            "errors": z[n:].copy(),
        }

        return self.round_activations(z[:n])

    def round_activations(self, raw: np.ndarray) -> np.ndarray:
        """
        Round and clip raw solver output.

        Solver output is not bit-stable between near-identical solves;
        rounding keeps cached vectors and firing states steady.
        """
        activations = np.clip(np.round(raw, self.rounding_decimals), 0.0, 1.0)
        # Normalize -0.0 so equal vectors are byte-identical
        activations[activations == 0.0] = 0.0
        return activations

    def _solve_highs(self, c, A_ub, b_ub, lower, upper) -> Tuple[np.ndarray, float]:
        bounds = list(zip(lower, [None if np.isinf(u) else u for u in upper]))
        res = linprog(c, A_ub=A_ub, b_ub=b_ub, bounds=bounds, method="highs")
        if res.status != 0 or res.x is None:
            logger.error(f"HiGHS failed: status={res.status} ({res.message})")
            raise OptimizationError(str(res.status), res.message)
        return np.asarray(res.x, dtype=np.float64), float(res.fun)

    def _solve_osqp(self, c, A_ub, b_ub, lower, upper) -> Tuple[np.ndarray, float]:
        n_vars = c.size
        P = sp.csc_matrix((n_vars, n_vars))
        A = sp.vstack([A_ub, sp.identity(n_vars)], format="csc")
        l = np.concatenate([np.full(A_ub.shape[0], -np.inf), lower])
        u = np.concatenate([b_ub, upper])

        prob = osqp.OSQP()
        prob.setup(
            P,
            c,
            A,
            l,
            u,
            verbose=False,
            polish=True,
            eps_abs=1e-6,
            eps_rel=1e-6,
            max_iter=50000,
        )
        res = prob.solve()
        status = str(res.info.status)
        if status not in _OSQP_OK or res.x is None:
            logger.error(f"OSQP failed: {status}")
            raise OptimizationError(status)
        return np.asarray(res.x, dtype=np.float64), float(res.info.obj_val)

    def get_statistics(self) -> Dict[str, Any]:
        """Solve count and timing summary."""
        times = np.array(self.solve_times) if self.solve_times else np.zeros(1)
        return {
            "solve_count": self.solve_count,
            "mean_solve_time": float(times.mean()),
            "max_solve_time": float(times.max()),
        }
