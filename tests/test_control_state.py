"""
Tests for per-body control state: desire, geometry and cache invalidation.
"""

import numpy as np
import pytest

from thruster_allocation.config import ThrusterMount
from thruster_allocation.control import ControlState
from thruster_allocation.core.exceptions import CacheConsistencyError, OptimizationError

ORIGIN = np.zeros(2)


class ShortSolver:
    """Solver stub that returns one activation too few."""

    def __init__(self):
        self.calls = 0

    def solve(self, thrusters, center_of_mass, desired_force, desired_torque):
        self.calls += 1
        return np.zeros(len(thrusters) - 1)


@pytest.mark.unit
class TestDesire:
    """Desire bookkeeping."""

    def test_starts_idle(self):
        state = ControlState()

        assert not state.has_desire
        np.testing.assert_array_equal(state.desired_force, [0.0, 0.0])
        assert state.desired_torque == 0.0
        assert state.currently_firing == set()

    def test_partial_updates(self):
        state = ControlState()

        state.set_desire((0.2, -0.1))
        state.set_desire(desired_torque=0.4)

        np.testing.assert_allclose(state.desired_force, [0.2, -0.1])
        assert state.desired_torque == pytest.approx(0.4)
        assert state.has_desire

    def test_torque_alone_is_a_desire(self):
        state = ControlState()
        state.set_desire(desired_torque=-0.01)

        assert state.has_desire

    def test_clear(self):
        state = ControlState()
        state.set_desire((1.0, 0.0), 1.0)

        state.clear_desire()

        assert not state.has_desire

    def test_rejects_non_planar_force(self):
        state = ControlState()

        with pytest.raises(ValueError):
            state.set_desire((1.0, 0.0, 0.0))


@pytest.mark.unit
class TestGeometryInvalidation:
    """Resolved geometry follows the layout version."""

    def test_resolves_lazily_once(self, cross_layout):
        state = ControlState()
        assert state.resolved_thrusters is None

        first = state.ensure_resolved(cross_layout)
        second = state.ensure_resolved(cross_layout)

        assert first is second
        assert state.resolved_version == cross_layout.version

    def test_layout_change_re_resolves_and_clears_cache(self, cross_layout, solver):
        state = ControlState()
        state.ensure_resolved(cross_layout)
        state.set_desire((0.0, 1.0))
        key = state.quant_key(0.01, 0.01)
        state.get_or_compute(key, solver, ORIGIN)
        assert key in state.firing_cache

        cross_layout.add_mount(ThrusterMount((0.0, -10.0), (0.0, 1.0)))
        thrusters = state.ensure_resolved(cross_layout)

        assert len(thrusters) == 5
        assert key not in state.firing_cache
        assert state.resolved_version == cross_layout.version

    def test_explicit_invalidation(self, cross_layout):
        state = ControlState()
        state.ensure_resolved(cross_layout)

        state.invalidate_geometry()

        assert state.resolved_thrusters is None
        assert state.resolved_version is None

    def test_length_scale_passed_through(self, cross_layout):
        state = ControlState()

        thrusters = state.ensure_resolved(cross_layout, length_scale=10.0)

        np.testing.assert_allclose(thrusters[0].position, [-3.0, 0.0])


@pytest.mark.unit
class TestCenterOfMassInvalidation:
    """Cache is cleared when the center of mass drifts far enough."""

    def test_small_drift_keeps_cache(self):
        state = ControlState()
        state.firing_cache.get_or_compute((0, 0, 1), lambda: np.array([1.0]))

        cleared = state.refresh_center_of_mass((0.5, 0.4), threshold=0.5)

        assert not cleared
        assert len(state.firing_cache) == 1
        np.testing.assert_array_equal(state.last_seen_center_of_mass, [0.0, 0.0])

    def test_large_drift_clears_cache(self):
        state = ControlState()
        state.firing_cache.get_or_compute((0, 0, 1), lambda: np.array([1.0]))

        cleared = state.refresh_center_of_mass((0.6, 0.5), threshold=0.5)

        assert cleared
        assert len(state.firing_cache) == 0
        np.testing.assert_allclose(state.last_seen_center_of_mass, [0.6, 0.5])

    def test_drift_measured_from_last_clear(self):
        state = ControlState()

        # Three small steps accumulate past the threshold on the third
        results = [state.refresh_center_of_mass((0.3 * i, 0.0), 0.5) for i in (1, 2, 3)]

        assert results == [False, False, True]

    def test_geometry_survives_drift(self, cross_layout):
        state = ControlState()
        thrusters = state.ensure_resolved(cross_layout)

        state.refresh_center_of_mass((5.0, 5.0), 0.5)

        assert state.resolved_thrusters is thrusters


@pytest.mark.unit
class TestCacheAccess:
    """Activation lookup through the state."""

    def test_unresolved_yields_empty(self, solver):
        state = ControlState()
        state.set_desire((0.0, 1.0))

        result = state.get_or_compute((0, 1, 0), solver, ORIGIN)

        assert result.shape == (0,)

    def test_same_bucket_reuses_solution(self, cross_layout, solver):
        state = ControlState()
        state.ensure_resolved(cross_layout)
        state.set_desire((0.0, 1.0))
        first = state.get_or_compute(state.quant_key(0.1, 0.1), solver, ORIGIN)

        state.set_desire((0.0, 1.05))
        second = state.get_or_compute(state.quant_key(0.1, 0.1), solver, ORIGIN)

        assert first is second
        assert solver.solve_count == 1

    def test_length_mismatch_detected(self, cross_layout):
        state = ControlState()
        state.ensure_resolved(cross_layout)
        state.set_desire((0.0, 1.0))

        with pytest.raises(CacheConsistencyError) as exc_info:
            state.get_or_compute((0, 1, 0), ShortSolver(), ORIGIN)

        assert exc_info.value.expected == 4
        assert exc_info.value.actual == 3

    @pytest.mark.parametrize(
        "force, torque",
        [((np.nan, 0.0), 0.0), ((0.0, -np.inf), 0.0), ((0.0, 0.0), np.nan)],
    )
    def test_non_finite_desire_rejected_before_quantizing(self, force, torque):
        state = ControlState()
        state.set_desire(force, torque)

        with pytest.raises(OptimizationError) as exc_info:
            state.quant_key(0.01, 0.01)

        assert exc_info.value.status == "non_finite_input"

    def test_cache_size_from_constructor(self):
        state = ControlState(cache_max_entries=2)

        assert state.firing_cache.max_entries == 2
