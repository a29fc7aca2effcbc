"""
Acceleration Estimator

Predicts the body-frame linear and angular acceleration an activation
vector would produce. Pure: no caching, nothing applied to the host.
"""

from typing import Sequence, Tuple

import numpy as np

from thruster_allocation.core.geometry import ResolvedThruster


def estimate_acceleration(
    inverse_mass: float,
    inverse_sqrt_inertia: float,
    engine_scale: float,
    center_of_mass,
    thrusters: Sequence[ResolvedThruster],
    activations: Sequence[float],
) -> Tuple[np.ndarray, float]:
    """
    Estimate accelerations for a candidate activation.

    Args:
        inverse_mass: 1 / mass
        inverse_sqrt_inertia: 1 / sqrt(moment of inertia)
        engine_scale: Global thrust multiplier
        center_of_mass: Body-local center of mass
        thrusters: Resolved thrusters
        activations: Activation per thruster, index-aligned with thrusters

    Returns:
        (linear acceleration in body frame, angular acceleration CCW positive)
    """
    center_of_mass = np.asarray(center_of_mass, dtype=np.float64)
    acceleration = np.zeros(2, dtype=np.float64)
    angular_acceleration = 0.0

    for thruster, activation in zip(thrusters, activations):
        if activation <= 0.0:
            continue
        arm = thruster.position - center_of_mass
        thrust = thruster.thrust_vector() * activation * engine_scale
        torque = arm[0] * thrust[1] - arm[1] * thrust[0]

        # Inverse sqrt inertia applied twice: 1 / I
        angular_acceleration += inverse_sqrt_inertia * (inverse_sqrt_inertia * torque)
        acceleration += thrust * inverse_mass

    return acceleration, float(angular_acceleration)
