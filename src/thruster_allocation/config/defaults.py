"""
Default Allocation Parameters

Module-level defaults for the control-allocation core. These feed the
pydantic models in ``models.py`` and the named presets in ``presets.py``.

Configuration sections:
- Thrust: global multiplier applied to every allocated force
- Caching: quantization coarseness and cache capacity
- Invalidation: center-of-mass drift threshold
- Optimization: objective weights, output rounding and solver backend
- Geometry: host length-unit scale
"""

import math

# ============================================================================
# Thrust
# ============================================================================

THRUST_SCALE = 1.0

# ============================================================================
# Caching
# ============================================================================

# Bucket width for desired force (per axis) and desired torque
CACHE_COARSENESS = math.pi / 1000.0
FORCE_COARSENESS = CACHE_COARSENESS
TORQUE_COARSENESS = CACHE_COARSENESS

CACHE_MAX_ENTRIES = 4096

# ============================================================================
# Invalidation
# ============================================================================

# Squared distance in body-local units. Depends on the host length scale.
COM_DRIFT_THRESHOLD = 0.5

# ============================================================================
# Optimization
# ============================================================================

FUEL_COST_WEIGHT = 1e-4
TORQUE_WEIGHT_FACTOR = 10.0
FORCE_WEIGHT = 1.0
ROUNDING_DECIMALS = 2

SOLVER_TYPE = "HIGHS"
SUPPORTED_SOLVERS = ("HIGHS", "OSQP")

# ============================================================================
# Geometry
# ============================================================================

LENGTH_SCALE = 1.0
