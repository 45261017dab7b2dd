"""Item data model for physical goods inside an order."""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


# Recovery values for SKUs with missing or zero measurements
DEFAULT_DIMENSION_CM = 30.0
DEFAULT_WEIGHT_KG = 5.0


class Item(BaseModel):
    """
    Represents a line of identical physical items within an order.

    Dimensions are centimetres, weight is kilograms. A line with quantity N
    expands into N unit items for packing.

    Attributes:
        id: Order line identifier
        order_id: ID of the order this line belongs to
        name: Display name (usually the SKU name)
        sku_id: Optional SKU identifier
        length: Length along the truck width axis (cm)
        width: Width along the truck depth axis (cm)
        height: Height (cm)
        weight: Weight of one unit (kg)
        quantity: Number of identical units on this line
        unit_index: Position of this unit within its line after expansion
    """
    id: str = Field(..., description="Order line identifier")
    order_id: Optional[str] = Field(None, description="Owning order ID")
    name: str = Field(default="", description="Item name")
    sku_id: Optional[str] = Field(None, description="SKU identifier")
    length: float = Field(default=DEFAULT_DIMENSION_CM, description="Length in cm", gt=0)
    width: float = Field(default=DEFAULT_DIMENSION_CM, description="Width in cm", gt=0)
    height: float = Field(default=DEFAULT_DIMENSION_CM, description="Height in cm", gt=0)
    weight: float = Field(default=DEFAULT_WEIGHT_KG, description="Unit weight in kg", gt=0)
    quantity: int = Field(default=1, description="Number of units", ge=1)
    unit_index: int = Field(default=0, description="Unit index after expansion", ge=0)

    model_config = ConfigDict(frozen=True)

    @field_validator("length", "width", "height", mode="before")
    @classmethod
    def default_missing_dimension(cls, v):
        """Replace a missing or zero dimension with the default."""
        if v is None or v == "" or v == 0:
            return DEFAULT_DIMENSION_CM
        return v

    @field_validator("weight", mode="before")
    @classmethod
    def default_missing_weight(cls, v):
        """Replace a missing or zero weight with the default."""
        if v is None or v == "" or v == 0:
            return DEFAULT_WEIGHT_KG
        return v

    @property
    def volume(self) -> float:
        """Volume of one unit in cm³."""
        return self.length * self.width * self.height

    @property
    def total_weight(self) -> float:
        """Weight of the whole line."""
        return self.weight * self.quantity

    @property
    def total_volume(self) -> float:
        """Volume of the whole line."""
        return self.volume * self.quantity

    @property
    def unit_key(self) -> str:
        """Identifier unique to one expanded unit."""
        return f"{self.id}#{self.unit_index}"

    def expand_units(self) -> List["Item"]:
        """
        Expand this line into one item per unit.

        Returns:
            List of `quantity` copies, each with quantity 1 and its own unit_index
        """
        return [
            self.model_copy(update={"quantity": 1, "unit_index": index})
            for index in range(self.quantity)
        ]

    def __str__(self) -> str:
        """String representation."""
        return (
            f"Item {self.id} x{self.quantity}: "
            f"{self.length:.0f}x{self.width:.0f}x{self.height:.0f}cm, {self.weight:.1f}kg"
        )
