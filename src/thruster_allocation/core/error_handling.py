"""
Error Handling Utilities for Thruster Allocation

Provides consistent error handling patterns across the codebase:
- Decorators for automatic error context
- Context managers for error handling

Usage:
    from thruster_allocation.core.error_handling import with_error_context

    @with_error_context("LP solve", wrap_with=AllocationError)
    def solve(self, thrusters, center_of_mass, desired_force, desired_torque):
        ...
"""

import functools
import logging
from contextlib import contextmanager
from typing import Any, Callable, Type, TypeVar

from thruster_allocation.core.exceptions import (
    ThrusterAllocationException,
    is_invariant_violation,
)

logger = logging.getLogger(__name__)

# Type variable for function return type
F = TypeVar("F", bound=Callable[..., Any])


def with_error_context(
    operation: str,
    reraise: bool = True,
    log_level: int = logging.ERROR,
    wrap_with: Type[ThrusterAllocationException] = ThrusterAllocationException,
) -> Callable[[F], F]:
    """
    Decorator to add error context to function calls.

    Foreign exceptions are logged with context and re-raised wrapped in
    ``wrap_with``. Package exceptions pass through untouched.

    Args:
        operation: Description of the operation (e.g., "LP solve")
        reraise: If True, re-raise exception (wrapped if needed). If False, log and return None.
        log_level: Logging level for errors (default: ERROR)
        wrap_with: Package exception class used to wrap foreign exceptions

    Returns:
        Decorated function
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except ThrusterAllocationException:
                raise
            except KeyboardInterrupt:
                raise
            except Exception as e:
                error_msg = f"{operation} failed: {e}"
                logger.log(log_level, error_msg, exc_info=True)
                if reraise:
                    raise wrap_with(error_msg) from e
                return None

        return wrapper  # type: ignore

    return decorator


@contextmanager
def error_context(
    operation: str,
    reraise: bool = True,
    log_level: int = logging.ERROR,
):
    """
    Context manager for error handling with context.

    Usage:
        with error_context("Loading preset"):
            params = load_preset(name)

    Args:
        operation: Description of the operation
        reraise: If True, re-raise exception. If False, log and suppress.
        log_level: Logging level for errors
    """
    try:
        yield
    except KeyboardInterrupt:
        raise
    except Exception as e:
        error_msg = f"{operation} failed: {e}"
        logger.log(log_level, error_msg, exc_info=True)

        if is_invariant_violation(e):
            logger.critical(f"INVARIANT VIOLATION: {error_msg}")

        if reraise:
            if not isinstance(e, ThrusterAllocationException):
                raise ThrusterAllocationException(error_msg) from e
            raise
