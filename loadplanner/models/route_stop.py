"""Route stop data model."""

from pydantic import BaseModel, ConfigDict, Field

from .zone import DeliveryZone


class RouteStop(BaseModel):
    """
    One order's position within a trip's delivery sequence.

    Attributes:
        order_id: Order delivered at this stop
        order_number: Order number for display
        sequence: 1-based stop number
        zone: Delivery zone
        zipcode: Delivery postal code
        sector: Two-digit postal sector
        latitude: Stop latitude (order, zone centre or depot)
        longitude: Stop longitude (order, zone centre or depot)
        weight_kg: Order weight, rounded to 0.01 kg
        volume_m3: Order volume, rounded to 0.001 m³
        needs_two_people: Whether the stop is a two-person delivery
        service_minutes: Time spent unloading at the stop
    """
    order_id: str
    order_number: str
    sequence: int = Field(..., ge=1)
    zone: DeliveryZone
    zipcode: str
    sector: str
    latitude: float
    longitude: float
    weight_kg: float = Field(..., ge=0)
    volume_m3: float = Field(..., ge=0)
    needs_two_people: bool = False
    service_minutes: float = Field(default=0.0, ge=0)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        """String representation."""
        return f"Stop {self.sequence}: order {self.order_number} ({self.zone.value}, {self.zipcode})"
