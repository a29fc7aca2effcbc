"""
Pydantic Configuration Models for Thruster Allocation

Type-safe configuration models with validation, range checks,
and descriptive error messages.
"""

from typing import Any, Dict

from pydantic import BaseModel, Field, field_validator, model_validator

from . import defaults


class AllocationParams(BaseModel):
    """
    Control-allocation parameters with validation.

    Coarseness values trade allocation fidelity for cache hit rate: a
    hand-flown craft wants fine buckets, a large AI-driven swarm can
    tolerate wide ones.
    """

    thrust_scale: float = Field(
        defaults.THRUST_SCALE,
        ge=0,
        description="Global multiplier applied to every allocated thruster force",
    )
    force_coarseness: float = Field(
        defaults.FORCE_COARSENESS,
        gt=0,
        le=1.0,
        description="Quantization bucket width for each desired force axis",
    )
    torque_coarseness: float = Field(
        defaults.TORQUE_COARSENESS,
        gt=0,
        le=1.0,
        description="Quantization bucket width for desired torque",
    )
    com_drift_threshold: float = Field(
        defaults.COM_DRIFT_THRESHOLD,
        ge=0,
        description="Squared center-of-mass displacement that clears the firing cache",
    )
    fuel_cost_weight: float = Field(
        defaults.FUEL_COST_WEIGHT,
        ge=0,
        le=1.0,
        description="Objective weight per unit of thruster activation",
    )
    torque_weight_factor: float = Field(
        defaults.TORQUE_WEIGHT_FACTOR,
        gt=0,
        le=1e6,
        description="Torque weight as a multiple of total available thrust",
    )
    force_weight: float = Field(
        defaults.FORCE_WEIGHT,
        gt=0,
        le=1e6,
        description="Weight applied to force residuals",
    )
    rounding_decimals: int = Field(
        defaults.ROUNDING_DECIMALS,
        ge=0,
        le=8,
        description="Decimal digits kept in solver output before caching",
    )
    length_scale: float = Field(
        defaults.LENGTH_SCALE,
        gt=0,
        description="Host length units per mount length unit (positions are divided by it)",
    )
    cache_max_entries: int = Field(
        defaults.CACHE_MAX_ENTRIES,
        gt=0,
        description="Maximum number of cached activation vectors per body",
    )
    solver_type: str = Field(
        defaults.SOLVER_TYPE,
        description="Linear program backend: 'HIGHS' or 'OSQP'",
    )

    @field_validator("solver_type")
    @classmethod
    def validate_solver_type(cls, v: str) -> str:
        """Validate solver backend name."""
        v = v.upper()
        if v not in defaults.SUPPORTED_SOLVERS:
            raise ValueError(
                f"Solver type must be one of {', '.join(defaults.SUPPORTED_SOLVERS)}, got '{v}'"
            )
        return v

    @model_validator(mode="after")
    def validate_weight_balance(self) -> "AllocationParams":
        """Fuel cost must stay subordinate to the residual terms."""
        if self.fuel_cost_weight >= self.force_weight:
            raise ValueError(
                f"fuel_cost_weight ({self.fuel_cost_weight}) must be smaller than "
                f"force_weight ({self.force_weight}) or the solver will prefer idling"
            )
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AllocationParams":
        """Create configuration from dictionary."""
        return cls.model_validate(data)
