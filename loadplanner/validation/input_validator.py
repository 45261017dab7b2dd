"""Fail-fast checks on the inputs of one optimization run.

Record-level problems (negative sizes, unknown zones) are caught by the
pydantic models when orders and trucks are built. The checks here cover the
run as a whole: there must be something to plan and something to plan it on,
and identifiers must be unique so that results can be keyed by them.
"""

from collections import Counter
from typing import Dict, List, Optional
import logging

from ..models.order import Order
from ..models.truck import Truck

logger = logging.getLogger(__name__)


class PlanningInputError(Exception):
    """Infeasible planning input, with context."""

    def __init__(self, message: str, context: Optional[Dict] = None):
        self.message = message
        self.context = context or {}
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with context."""
        msg = f"Planning Input Error: {self.message}"
        if self.context:
            msg += "\n\nContext:"
            for key, value in self.context.items():
                msg += f"\n  {key}: {value}"
        return msg


def _duplicates(ids: List[str]) -> List[str]:
    return sorted(key for key, count in Counter(ids).items() if count > 1)


def validate_trucks(trucks: List[Truck]) -> None:
    """
    Check there is at least one truck and truck IDs are unique.

    Raises:
        PlanningInputError: If the fleet is empty or has duplicate IDs
    """
    if not trucks:
        raise PlanningInputError(
            "No trucks available for planning",
            {"trucks": 0, "hint": "Provide at least one truck"},
        )

    duplicates = _duplicates([truck.id for truck in trucks])
    if duplicates:
        raise PlanningInputError(
            "Duplicate truck IDs",
            {"duplicate_ids": ", ".join(duplicates), "trucks": len(trucks)},
        )


def validate_orders(orders: List[Order]) -> None:
    """
    Check there is at least one order and order IDs are unique.

    Raises:
        PlanningInputError: If there are no orders or duplicate IDs
    """
    if not orders:
        raise PlanningInputError(
            "No orders to plan",
            {"orders": 0, "hint": "Provide at least one order"},
        )

    duplicates = _duplicates([order.id for order in orders])
    if duplicates:
        raise PlanningInputError(
            "Duplicate order IDs",
            {"duplicate_ids": ", ".join(duplicates), "orders": len(orders)},
        )


def validate_planning_inputs(orders: List[Order], trucks: List[Truck]) -> None:
    """
    Validate a fleet optimization request.

    Trucks are checked first.

    Args:
        orders: Orders to plan
        trucks: Available trucks

    Raises:
        PlanningInputError: On the first failed check
    """
    validate_trucks(trucks)
    validate_orders(orders)

    empty = [order.id for order in orders if not order.items]
    if empty:
        logger.warning(f"{len(empty)} orders have no items: {', '.join(empty[:10])}")
