"""Input validation for optimization runs."""

from .input_validator import (
    PlanningInputError,
    validate_planning_inputs,
    validate_orders,
    validate_trucks,
)

__all__ = [
    'PlanningInputError',
    'validate_planning_inputs',
    'validate_orders',
    'validate_trucks',
]
