"""
Custom Exception Hierarchy for Thruster Allocation

Defines structured exception classes for error handling across the
package. Provides clear, informative error messages with context-specific
details.

Exception categories:
- Configuration errors: Invalid parameters and mount data
- Optimization errors: Solver failures (formulation bugs, never expected)
- Consistency errors: Cached state out of step with resolved geometry

See also: error_handling.py for error handling utilities and decorators.
"""

from typing import Any


class ThrusterAllocationException(Exception):
    """Base exception for all thruster allocation errors."""

    pass


# ============================================================================
# Configuration Errors
# ============================================================================


class ConfigurationError(ThrusterAllocationException):
    """Raised when configuration is invalid or inconsistent."""

    pass


class ParameterValidationError(ConfigurationError):
    """Raised when a parameter fails validation."""

    def __init__(self, parameter_name: str, value: Any, reason: str) -> None:
        message = f"Invalid parameter '{parameter_name}' = {value}: {reason}"
        super().__init__(message)
        self.parameter_name = parameter_name
        self.value = value
        self.reason = reason


class LayoutError(ConfigurationError):
    """Raised when a thruster layout mutation refers to an unknown part or mount."""

    pass


# ============================================================================
# Optimization Errors
# ============================================================================


class AllocationError(ThrusterAllocationException):
    """Base exception for allocation failures."""

    pass


class OptimizationError(AllocationError):
    """Raised when the linear program solver fails."""

    def __init__(self, status: str, message: str = ""):
        full_message = f"Optimization failed with status: {status}"
        if message:
            full_message += f" - {message}"
        super().__init__(full_message)
        self.status = status


class CacheConsistencyError(AllocationError):
    """Raised when a cached activation vector does not match resolved geometry."""

    def __init__(self, expected: int, actual: int):
        super().__init__(
            f"Activation vector has {actual} entries but {expected} thrusters are resolved"
        )
        self.expected = expected
        self.actual = actual


def is_invariant_violation(error: Exception) -> bool:
    """
    Check whether an error signals a broken internal invariant.

    Invariant violations indicate a formulation or wiring bug rather than
    bad input and must be surfaced, never retried.
    """
    return isinstance(error, AllocationError)
