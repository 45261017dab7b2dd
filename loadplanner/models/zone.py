"""Delivery zone enumeration."""

from enum import Enum


class DeliveryZone(str, Enum):
    """Coarse geographic bucket used for demand aggregation and travel times."""
    NORTH = "North"
    SOUTH = "South"
    EAST = "East"
    WEST = "West"
    CENTRAL = "Central"

    def __str__(self) -> str:
        return self.value
