"""Postal-code to zone lookup."""

from typing import List, Optional, Tuple
import logging

from ..models.order import Order
from ..models.planning_config import PlanningConfig
from ..models.zone import DeliveryZone

logger = logging.getLogger(__name__)


class ZoneLookup:
    """
    Resolves delivery zones and stop coordinates for orders.

    A zipcode is left-padded to six digits and its first two digits (the
    postal sector) are looked up in ``config.sector_zones``. Unknown sectors
    resolve to ``config.default_zone``.
    """

    def __init__(self, config: Optional[PlanningConfig] = None):
        self.config = config or PlanningConfig()

    def zone_for_zipcode(self, zipcode: str) -> DeliveryZone:
        sector = str(zipcode or "").zfill(6)[:2]
        zone = self.config.sector_zones.get(sector)
        if zone is None:
            logger.debug(f"Unknown postal sector '{sector}', using {self.config.default_zone.value}")
            return self.config.default_zone
        return zone

    def zone_for(self, order: Order) -> DeliveryZone:
        """Supplied zone of the order, or the zone derived from its zipcode."""
        if order.delivery_zone is not None:
            return order.delivery_zone
        return self.zone_for_zipcode(order.zipcode)

    def assign_zones(self, orders: List[Order]) -> List[Order]:
        """
        Return the orders with ``delivery_zone`` filled in.

        Orders that already carry a zone are returned unchanged; the others
        are copied with the derived zone. Input order is preserved.
        """
        zoned = []
        for order in orders:
            if order.delivery_zone is not None:
                zoned.append(order)
            else:
                zoned.append(order.model_copy(update={"delivery_zone": self.zone_for(order)}))
        return zoned

    def coordinates_for(self, order: Order) -> Tuple[float, float]:
        """
        Coordinate used for the stop of an order.

        Order coordinate if present, else the zone centre, else the depot.

        Returns:
            (latitude, longitude)
        """
        if order.latitude is not None and order.longitude is not None:
            return order.latitude, order.longitude

        center = self.config.zone_centers.get(self.zone_for(order))
        if center is not None:
            return center.latitude, center.longitude

        depot = self.config.depot
        return depot.latitude, depot.longitude
