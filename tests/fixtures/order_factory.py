"""Builders for orders, items and trucks used across planner tests.

Zipcodes used in tests and the zones they resolve to:
    "018956" -> Central, "600000" -> West, "650000" -> West,
    "460000" -> East, "730000" -> North, "099000" -> South
"""

from typing import Optional

from loadplanner.models import DeliveryZone, HelperRequirement, Item, Order, Truck


def make_item(
    item_id: str,
    length: float = 50.0,
    width: float = 50.0,
    height: float = 50.0,
    weight: float = 10.0,
    quantity: int = 1,
    name: str = "",
) -> Item:
    """Create an order line."""
    return Item(
        id=item_id,
        name=name or item_id,
        length=length,
        width=width,
        height=height,
        weight=weight,
        quantity=quantity,
    )


def make_order(
    order_id: str,
    items=None,
    zipcode: str = "018956",
    zone: Optional[DeliveryZone] = None,
    helpers: HelperRequirement = HelperRequirement.NONE,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
) -> Order:
    """Create an order; one 50cm / 10kg cube by default."""
    if items is None:
        items = [make_item(f"{order_id}-L1")]
    return Order(
        id=order_id,
        zipcode=zipcode,
        delivery_zone=zone,
        helpers_required=helpers,
        latitude=latitude,
        longitude=longitude,
        items=items,
    )


def cube_order(order_id: str, size: float, weight: float = 10.0, zipcode: str = "018956", **kwargs) -> Order:
    """Order holding a single size x size x size item."""
    return make_order(
        order_id,
        items=[make_item(f"{order_id}-L1", size, size, size, weight)],
        zipcode=zipcode,
        **kwargs,
    )


def make_truck(
    truck_id: str,
    width: float = 200.0,
    depth: float = 400.0,
    height: float = 200.0,
    max_weight: float = 1000.0,
    name: str = "",
) -> Truck:
    """Create a truck; 200 x 400 x 200 cm, 1000 kg by default."""
    return Truck(
        id=truck_id,
        name=name or f"Truck {truck_id}",
        width=width,
        depth=depth,
        height=height,
        max_weight=max_weight,
    )
