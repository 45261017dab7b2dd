"""Route sequencing and trip timing.

Stops of a trip are ordered zone by zone, cheapest-to-reach zone first, and by
postal sector within a zone. Timing follows the zone travel model: depot to the
first zone, zone to zone, service at each stop and the return to the depot.
Trucks running several trips add a depot reload between consecutive trips.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional
import logging

from ..models.order import Order
from ..models.planning_config import PlanningConfig
from ..models.route_stop import RouteStop
from ..models.trip import Trip, TruckAssignment
from ..models.zone import DeliveryZone
from ..network.travel_model import TravelTimeModel
from ..network.zone_lookup import ZoneLookup

logger = logging.getLogger(__name__)


@dataclass
class FleetTiming:
    """
    Parallel deployment timing of the fleet.

    All trucks leave the depot at the same time, so the fleet finishes when
    the slowest truck finishes.

    Attributes:
        total_minutes: Elapsed time of the slowest truck
        bottleneck_truck_id: Truck with the longest elapsed time (None if no trips)
        truck_minutes: Elapsed time per truck ID, for trucks with trips
    """
    total_minutes: float = 0.0
    bottleneck_truck_id: Optional[str] = None
    truck_minutes: Dict[str, float] = field(default_factory=dict)

    @property
    def total_hours(self) -> float:
        return self.total_minutes / 60


class RouteSequencer:
    """
    Orders stops within a trip and computes elapsed times.

    Example:
        sequencer = RouteSequencer(config)
        stops = sequencer.sequence(trip)
        minutes = sequencer.trip_elapsed_minutes(trip)
    """

    def __init__(self, config: Optional[PlanningConfig] = None):
        self.config = config or PlanningConfig()
        self.travel_model = TravelTimeModel(self.config)
        self.zone_lookup = ZoneLookup(self.config)

    def zone_visit_order(self, zones: List[DeliveryZone]) -> List[DeliveryZone]:
        """
        De-duplicate zones and sort them by depot travel time.

        Ties keep first-seen order.
        """
        unique = list(dict.fromkeys(zones))
        return sorted(unique, key=self.travel_model.depot_minutes)

    def sequence_orders(self, orders: List[Order]) -> List[RouteStop]:
        """
        Build the stop sequence for a set of orders.

        Args:
            orders: Orders loaded on one trip

        Returns:
            RouteStops numbered from 1 in delivery order
        """
        if not orders:
            return []

        zone_orders: Dict[DeliveryZone, List[Order]] = {}
        for order in orders:
            zone_orders.setdefault(self.zone_lookup.zone_for(order), []).append(order)

        stops = []
        for zone in self.zone_visit_order(list(zone_orders)):
            for order in sorted(zone_orders[zone], key=lambda o: (o.sector, o.padded_zipcode)):
                latitude, longitude = self.zone_lookup.coordinates_for(order)
                stops.append(RouteStop(
                    order_id=order.id,
                    order_number=order.order_number,
                    sequence=len(stops) + 1,
                    zone=zone,
                    zipcode=order.zipcode,
                    sector=order.sector,
                    latitude=latitude,
                    longitude=longitude,
                    weight_kg=round(order.total_weight, 2),
                    volume_m3=round(order.total_volume / 1_000_000, 3),
                    needs_two_people=self.travel_model.is_heavy_stop(order),
                    service_minutes=self.travel_model.service_minutes(order),
                ))

        return stops

    def sequence(self, trip: Trip) -> List[RouteStop]:
        """Stop sequence of a trip."""
        return self.sequence_orders(trip.loaded_orders)

    def orders_elapsed_minutes(self, orders: List[Order], include_return: bool = True) -> float:
        """
        Elapsed time to deliver a set of orders in one trip.

        Args:
            orders: Orders of the trip
            include_return: Add the drive from the last zone back to the depot

        Returns:
            Minutes; 0 for no orders
        """
        if not orders:
            return 0.0

        zones = self.zone_visit_order([self.zone_lookup.zone_for(o) for o in orders])

        minutes = self.travel_model.depot_minutes(zones[0])
        for zone_a, zone_b in zip(zones, zones[1:]):
            minutes += self.travel_model.zone_minutes(zone_a, zone_b)
        minutes += sum(self.travel_model.service_minutes(o) for o in orders)
        if include_return:
            minutes += self.travel_model.depot_minutes(zones[-1])

        return minutes

    def trip_elapsed_minutes(self, trip: Trip, include_return: bool = True) -> float:
        return self.orders_elapsed_minutes(trip.loaded_orders, include_return)

    def truck_elapsed_minutes(self, trips: List[Trip]) -> float:
        """
        Elapsed time of a truck running its trips back to back.

        Empty trips are ignored; a reload is added between each pair of
        consecutive trips.
        """
        active = [trip for trip in trips if not trip.is_empty]
        if not active:
            return 0.0
        minutes = sum(self.trip_elapsed_minutes(trip, include_return=True) for trip in active)
        return minutes + self.travel_model.reload_minutes * (len(active) - 1)

    def fleet_timing(self, assignments: List[TruckAssignment]) -> FleetTiming:
        """
        Parallel deployment timing across trucks.

        The first truck reaching the maximum is the bottleneck.
        """
        timing = FleetTiming()
        for assignment in assignments:
            if not assignment.active_trips:
                continue
            minutes = self.truck_elapsed_minutes(assignment.trips)
            timing.truck_minutes[assignment.truck.id] = minutes
            if timing.bottleneck_truck_id is None or minutes > timing.total_minutes:
                timing.total_minutes = minutes
                timing.bottleneck_truck_id = assignment.truck.id

        logger.info(
            f"Fleet elapsed time {timing.total_minutes:.0f} min "
            f"(bottleneck: {timing.bottleneck_truck_id or 'none'})"
        )
        return timing
