"""Placed item data model for 3-D load plans."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from .item import Item


class LoadSection(str, Enum):
    """Depth band of the cargo box used for LIFO loading."""
    BACK = "back"
    MIDDLE = "middle"
    FRONT = "front"

    def __str__(self) -> str:
        return self.value


class PlacedItem(BaseModel):
    """
    An item unit with an assigned position inside a container.

    Position is the minimum corner of the item's box. Rotation is about the
    vertical axis only, so the rotated length runs along x and the rotated
    width along y.

    Attributes:
        item: The placed unit
        x: Position along the container width
        y: Position along the container depth
        z: Position above the floor
        rotation: 0 or 90 degrees
        rotated_length: Extent along x after rotation
        rotated_width: Extent along y after rotation
        placement: Depth band for section-based load plans
    """
    item: Item = Field(..., description="Placed unit")
    x: float = Field(..., ge=0)
    y: float = Field(..., ge=0)
    z: float = Field(..., ge=0)
    rotation: int = Field(default=0, description="Yaw rotation in degrees")
    rotated_length: float = Field(..., gt=0)
    rotated_width: float = Field(..., gt=0)
    placement: Optional[LoadSection] = Field(None, description="Front, middle or back")

    model_config = ConfigDict(frozen=True)

    @property
    def height(self) -> float:
        return self.item.height

    @property
    def weight(self) -> float:
        return self.item.weight

    @property
    def volume(self) -> float:
        return self.item.volume

    @property
    def center_x(self) -> float:
        return self.x + self.rotated_length / 2

    @property
    def center_y(self) -> float:
        return self.y + self.rotated_width / 2

    @property
    def center_z(self) -> float:
        return self.z + self.height / 2
