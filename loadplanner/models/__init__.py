"""Data models for the fleet load and route planner."""

from .zone import DeliveryZone
from .item import Item, DEFAULT_DIMENSION_CM, DEFAULT_WEIGHT_KG
from .order import Order, HelperRequirement
from .truck import Truck
from .trip import Trip, TruckAssignment
from .placement import PlacedItem, LoadSection
from .route_stop import RouteStop
from .planning_config import (
    PlanningConfig,
    AssignmentStrategy,
    Depot,
    GeoPoint,
    ZoneLink,
)

__all__ = [
    # Geography
    "DeliveryZone",
    "Depot",
    "GeoPoint",
    "ZoneLink",
    # Orders and fleet
    "Item",
    "DEFAULT_DIMENSION_CM",
    "DEFAULT_WEIGHT_KG",
    "Order",
    "HelperRequirement",
    "Truck",
    "Trip",
    "TruckAssignment",
    # Plans
    "PlacedItem",
    "LoadSection",
    "RouteStop",
    # Configuration
    "PlanningConfig",
    "AssignmentStrategy",
]
