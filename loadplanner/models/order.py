"""Order data model for delivery planning."""

from enum import Enum
from typing import List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .item import Item
from .zone import DeliveryZone


class HelperRequirement(str, Enum):
    """Number of helpers needed at the delivery stop."""
    NONE = "none"
    ONE = "one"
    TWO = "two"

    @property
    def count(self) -> int:
        """Headcount represented by this requirement."""
        return {"none": 0, "one": 1, "two": 2}[self.value]

    def __str__(self) -> str:
        return self.value


class Order(BaseModel):
    """
    Represents a customer order to be delivered from the depot.

    Orders are immutable inputs to one optimization run. Derived totals are
    computed from the unit items.

    Attributes:
        id: Unique order identifier
        order_number: Human-readable order number
        zipcode: Postal code of the delivery address
        delivery_zone: Delivery zone (derived from zipcode when missing)
        latitude: Optional GPS latitude of the delivery address
        longitude: Optional GPS longitude of the delivery address
        helpers_required: Helper headcount needed at the stop
        items: Order lines
    """
    id: str = Field(..., description="Unique order identifier")
    order_number: str = Field(default="", description="Order number for display")
    zipcode: str = Field(default="", description="Delivery postal code")
    delivery_zone: Optional[DeliveryZone] = Field(None, description="Delivery zone")
    latitude: Optional[float] = Field(None, description="GPS latitude", ge=-90, le=90)
    longitude: Optional[float] = Field(None, description="GPS longitude", ge=-180, le=180)
    helpers_required: HelperRequirement = Field(
        default=HelperRequirement.NONE,
        description="Helpers needed at the stop"
    )
    items: List[Item] = Field(default_factory=list, description="Order lines")

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def fill_order_number(cls, data):
        """Default the order number to the order ID."""
        if isinstance(data, dict) and not data.get("order_number"):
            data = {**data, "order_number": str(data.get("id", ""))}
        return data

    @property
    def sector(self) -> str:
        """Two-digit postal sector of the zipcode."""
        return self.padded_zipcode[:2]

    @property
    def padded_zipcode(self) -> str:
        """Zipcode left-padded with zeros to six digits."""
        return str(self.zipcode).zfill(6)

    @property
    def total_weight(self) -> float:
        """Total weight of all units in kg."""
        return sum(item.total_weight for item in self.items)

    @property
    def total_volume(self) -> float:
        """Total volume of all units in cm³."""
        return sum(item.total_volume for item in self.items)

    @property
    def max_length(self) -> float:
        """Largest item length in the order."""
        return max((item.length for item in self.items), default=0.0)

    @property
    def max_width(self) -> float:
        """Largest item width in the order."""
        return max((item.width for item in self.items), default=0.0)

    @property
    def max_height(self) -> float:
        """Largest item height in the order."""
        return max((item.height for item in self.items), default=0.0)

    @property
    def dimensions_desc(self) -> Tuple[float, float, float]:
        """Per-axis maximum dimensions sorted largest first."""
        return tuple(sorted((self.max_length, self.max_width, self.max_height), reverse=True))

    @property
    def helper_count(self) -> int:
        """Helpers needed at the stop."""
        return self.helpers_required.count

    def needs_two_people(self, heavy_threshold_kg: float) -> bool:
        """
        Check if the stop needs a two-person delivery.

        Args:
            heavy_threshold_kg: Order weight above which two people are needed

        Returns:
            True if the order is heavy or explicitly asks for two helpers
        """
        return (
            self.total_weight > heavy_threshold_kg
            or self.helpers_required == HelperRequirement.TWO
        )

    def expand_units(self) -> List[Item]:
        """Expand all order lines into unit items tagged with this order's ID."""
        units = []
        for item in self.items:
            line = item if item.order_id == self.id else item.model_copy(update={"order_id": self.id})
            units.extend(line.expand_units())
        return units

    def __str__(self) -> str:
        """String representation."""
        zone = self.delivery_zone.value if self.delivery_zone else "unzoned"
        return (
            f"Order {self.order_number} ({zone}, {self.zipcode}): "
            f"{len(self.items)} lines, {self.total_weight:.1f}kg, {self.total_volume / 1e6:.3f}m³"
        )
