"""Truck data model."""

from typing import Tuple
from pydantic import BaseModel, ConfigDict, Field

from .order import Order


class Truck(BaseModel):
    """
    Represents one physical vehicle of the fleet.

    The cargo box is width (x, left to right) by depth (y, back to front) by
    height (z). A truck may run several trips in one planning run.

    Attributes:
        id: Unique truck identifier
        name: Truck name for display
        width: Cargo width in cm
        depth: Cargo depth in cm
        height: Cargo height in cm
        max_weight: Maximum payload in kg
    """
    id: str = Field(..., description="Unique truck identifier")
    name: str = Field(default="", description="Truck name")
    width: float = Field(..., description="Cargo width in cm", gt=0)
    depth: float = Field(..., description="Cargo depth in cm", gt=0)
    height: float = Field(..., description="Cargo height in cm", gt=0)
    max_weight: float = Field(..., description="Maximum payload in kg", gt=0)

    model_config = ConfigDict(frozen=True)

    @property
    def display_name(self) -> str:
        """Name used in reports, falling back to the ID."""
        return self.name or self.id

    @property
    def volume(self) -> float:
        """Cargo volume in cm³."""
        return self.width * self.depth * self.height

    @property
    def dimensions_desc(self) -> Tuple[float, float, float]:
        """Cargo dimensions sorted largest first."""
        return tuple(sorted((self.width, self.depth, self.height), reverse=True))

    def fits_dimensions(self, order: Order) -> bool:
        """
        Check the order's largest items against the cargo box.

        Sorted order dimensions must not exceed sorted truck dimensions
        element-wise. This is a necessary, not sufficient, geometric test.
        """
        return all(o <= t for o, t in zip(order.dimensions_desc, self.dimensions_desc))

    def can_hold(self, order: Order) -> bool:
        """Check if an empty trip of this truck could take the order."""
        return (
            order.total_volume <= self.volume
            and order.total_weight <= self.max_weight
            and self.fits_dimensions(order)
        )

    def __str__(self) -> str:
        """String representation."""
        return (
            f"Truck {self.display_name}: {self.width:.0f}x{self.depth:.0f}x{self.height:.0f}cm, "
            f"{self.max_weight:.0f}kg"
        )
