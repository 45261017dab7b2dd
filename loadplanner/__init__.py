"""
Fleet load and route planner.

Decides which orders go on which truck and trip, in what delivery sequence,
where each item sits in the cargo box, and how long the fleet needs.
"""

from .models import (
    DeliveryZone,
    Item,
    Order,
    HelperRequirement,
    Truck,
    PlanningConfig,
    AssignmentStrategy,
)
from .optimization import LoadRouteOptimizer, FleetOptimizationResult, PackingPreviewResult
from .validation import PlanningInputError

__version__ = "1.0.0"

__all__ = [
    "DeliveryZone",
    "Item",
    "Order",
    "HelperRequirement",
    "Truck",
    "PlanningConfig",
    "AssignmentStrategy",
    "LoadRouteOptimizer",
    "FleetOptimizationResult",
    "PackingPreviewResult",
    "PlanningInputError",
]
