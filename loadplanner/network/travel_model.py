"""Travel and service time model.

Answers depot-to-zone, zone-to-zone, per-stop service and reload times from
the zone graph. Lookups never fail: pairs missing from the tables fall back to
the configured unknown-pair time.
"""

from typing import Optional
import logging

from ..models.order import Order
from ..models.planning_config import PlanningConfig
from ..models.zone import DeliveryZone
from .zone_graph import DEPOT_NODE, ZoneGraphBuilder

logger = logging.getLogger(__name__)


class TravelTimeModel:
    """
    Travel-time lookups for one planning configuration.

    Attributes:
        config: Planning configuration
        graph_builder: Zone graph the lookups read from
    """

    def __init__(self, config: Optional[PlanningConfig] = None):
        self.config = config or PlanningConfig()
        self.graph_builder = ZoneGraphBuilder(self.config)
        self.graph_builder.build_graph()

    def depot_minutes(self, zone: Optional[DeliveryZone]) -> float:
        """Travel time from the depot to a zone (either direction)."""
        if zone is None:
            return self.config.unknown_travel_minutes
        minutes = self.graph_builder.edge_minutes(DEPOT_NODE, zone.value)
        if minutes is None:
            return self.config.unknown_travel_minutes
        return minutes

    def zone_minutes(self, zone_a: Optional[DeliveryZone], zone_b: Optional[DeliveryZone]) -> float:
        """
        Travel time between two zones.

        Args:
            zone_a: First zone
            zone_b: Second zone

        Returns:
            Same-zone time if equal, table time if linked, else the unknown-pair time
        """
        if zone_a is not None and zone_a == zone_b:
            return self.config.same_zone_minutes
        if zone_a is None or zone_b is None:
            return self.config.unknown_travel_minutes
        minutes = self.graph_builder.edge_minutes(zone_a.value, zone_b.value)
        if minutes is None:
            logger.debug(f"No link {zone_a.value}-{zone_b.value}, using unknown-pair time")
            return self.config.unknown_travel_minutes
        return minutes

    def is_heavy_stop(self, order: Order) -> bool:
        return order.needs_two_people(self.config.heavy_order_threshold_kg)

    def service_minutes(self, order: Order) -> float:
        """Time spent at the stop of an order."""
        if self.is_heavy_stop(order):
            return self.config.heavy_service_minutes
        return self.config.service_minutes

    @property
    def reload_minutes(self) -> float:
        """Depot reload time between two trips of the same truck."""
        return self.config.reload_minutes
