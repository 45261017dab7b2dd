"""Fleet assignment logic for distributing orders over trucks and trips.

This module assigns orders to trucks based on:
- Delivery zone grouping (orders of one zone travel together where possible)
- Capacity constraints (volume, weight and a dimension fit proxy)
- Multiple trips per truck when a zone's demand exceeds the fleet
- An optional helper headcount budget (zone-cluster strategy)
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional
import logging

from ..models.order import Order
from ..models.planning_config import AssignmentStrategy, PlanningConfig
from ..models.trip import TruckAssignment
from ..models.truck import Truck
from ..models.zone import DeliveryZone
from ..network.travel_model import TravelTimeModel
from ..network.zone_lookup import ZoneLookup

logger = logging.getLogger(__name__)

REASON_NO_CAPACITY = "No available truck with capacity"
REASON_NO_HELPERS = "Insufficient helpers available"


@dataclass
class UnassignedOrder:
    """
    An order the planner could not place on any truck.

    Attributes:
        order: The order
        reason: Human-readable reason
    """
    order: Order
    reason: str

    def __str__(self) -> str:
        return f"Order {self.order.order_number}: {self.reason}"


@dataclass
class ZoneDemand:
    """Aggregate demand of one delivery zone."""
    zone: DeliveryZone
    volume: float = 0.0
    weight: float = 0.0
    count: int = 0


@dataclass
class FleetAssignmentPlan:
    """
    Complete assignment of orders to trucks and trips.

    Attributes:
        assignments: One entry per truck, in input order
        unassigned: Orders that could not be assigned, with reasons
        strategy: Strategy that produced the plan
        total_orders: Number of orders planned (assigned + unassigned)
    """
    assignments: List[TruckAssignment]
    unassigned: List[UnassignedOrder] = field(default_factory=list)
    strategy: AssignmentStrategy = AssignmentStrategy.MULTI_TRIP
    total_orders: int = 0

    @property
    def active_assignments(self) -> List[TruckAssignment]:
        """Trucks with at least one loaded order."""
        return [a for a in self.assignments if a.active_trips]

    @property
    def total_trips(self) -> int:
        return sum(len(a.active_trips) for a in self.assignments)

    @property
    def assigned_count(self) -> int:
        return sum(a.total_orders for a in self.assignments)

    def is_feasible(self) -> bool:
        """Check if every order was assigned."""
        return len(self.unassigned) == 0

    def __str__(self) -> str:
        """String representation."""
        status = "FEASIBLE" if self.is_feasible() else f"INFEASIBLE ({len(self.unassigned)} unassigned)"
        return (
            f"FleetAssignmentPlan: {len(self.active_assignments)} trucks, "
            f"{self.total_trips} trips, {self.assigned_count}/{self.total_orders} orders - {status}"
        )


class FleetAssignmentPlanner:
    """
    Assigns orders to trucks using zone-aware greedy heuristics.

    Two strategies are available through ``PlanningConfig.assignment_strategy``:

    - ``multi_trip`` (default): trucks are allocated to zones in proportion to
      demand, orders are packed Best-Fit Decreasing by volume, and leftover
      orders open extra trips on the largest trucks.
    - ``zone_cluster``: one trip per truck. Zones are served nearest-first,
      each order joins a truck already serving its zone or the next unused
      truck, under a global helper budget.

    Example:
        planner = FleetAssignmentPlanner(PlanningConfig())
        plan = planner.plan(orders, trucks)

        if not plan.is_feasible():
            for entry in plan.unassigned:
                print(entry)
    """

    def __init__(self, config: Optional[PlanningConfig] = None):
        """
        Initialize fleet planner.

        Args:
            config: Planning configuration (defaults if omitted)
        """
        self.config = config or PlanningConfig()
        self.travel_model = TravelTimeModel(self.config)
        self.zone_lookup = ZoneLookup(self.config)

    def plan(self, orders: List[Order], trucks: List[Truck]) -> FleetAssignmentPlan:
        """
        Assign orders to trucks.

        Orders without a delivery zone get one from their zipcode first.

        Args:
            orders: Orders to deliver
            trucks: Available trucks

        Returns:
            FleetAssignmentPlan with per-truck trips and unassigned orders
        """
        zoned_orders = self.zone_lookup.assign_zones(orders)
        assignments = [TruckAssignment(truck=truck) for truck in trucks]
        strategy = self.config.assignment_strategy

        if strategy == AssignmentStrategy.ZONE_CLUSTER:
            unassigned = self._plan_zone_cluster(zoned_orders, assignments)
        else:
            unassigned = self._plan_multi_trip(zoned_orders, assignments)

        plan = FleetAssignmentPlan(
            assignments=assignments,
            unassigned=unassigned,
            strategy=strategy,
            total_orders=len(orders),
        )

        logger.info(
            f"Fleet assignment ({strategy.value}): {plan.assigned_count}/{len(orders)} orders "
            f"on {plan.total_trips} trips, {len(unassigned)} unassigned"
        )
        for entry in unassigned:
            logger.warning(f"Unassigned order {entry.order.id}: {entry.reason}")

        return plan

    # ------------------------------------------------------------------
    # Multi-trip, demand-proportional strategy
    # ------------------------------------------------------------------

    def _plan_multi_trip(
        self,
        orders: List[Order],
        assignments: List[TruckAssignment],
    ) -> List[UnassignedOrder]:
        zone_orders = self._group_by_zone(orders)
        for zone in zone_orders:
            zone_orders[zone].sort(key=lambda o: -o.total_volume)

        demands = self.compute_zone_demands(zone_orders)
        sorted_zones = [
            d.zone for d in sorted(demands.values(), key=lambda d: -d.volume)
        ]

        by_capacity = self._by_capacity(assignments)
        zone_trucks = self._allocate_trucks_to_zones(sorted_zones, demands, by_capacity)

        leftovers: List[Order] = []
        for zone in sorted_zones:
            for order in zone_orders[zone]:
                target = self._best_fit(order, zone_trucks.get(zone, []))
                if target is None:
                    target = self._first_fit(order, by_capacity)

                if target is None:
                    logger.debug(f"Order {order.id} does not fit any current trip")
                    leftovers.append(order)
                    continue

                target.current_trip.load(order)
                logger.debug(
                    f"Order {order.id} ({zone.value}) -> {target.truck.id} trip {target.current_trip.trip_id}"
                )

        return self._place_in_extra_trips(leftovers, by_capacity)

    def compute_zone_demands(self, zone_orders: Dict[DeliveryZone, List[Order]]) -> Dict[DeliveryZone, ZoneDemand]:
        """Total volume, weight and count of orders per zone."""
        demands = {}
        for zone, zone_list in zone_orders.items():
            demands[zone] = ZoneDemand(
                zone=zone,
                volume=sum(o.total_volume for o in zone_list),
                weight=sum(o.total_weight for o in zone_list),
                count=len(zone_list),
            )
        return demands

    def _allocate_trucks_to_zones(
        self,
        sorted_zones: List[DeliveryZone],
        demands: Dict[DeliveryZone, ZoneDemand],
        by_capacity: List[TruckAssignment],
    ) -> Dict[DeliveryZone, List[TruckAssignment]]:
        """
        Give each zone, highest demand first, trucks until its volume is covered.

        Trucks left over after every zone is covered all go to the highest
        demand zone.
        """
        zone_trucks: Dict[DeliveryZone, List[TruckAssignment]] = {}
        used = set()

        for zone in sorted_zones:
            zone_trucks[zone] = []
            needed = demands[zone].volume
            allocated = 0.0
            for assignment in by_capacity:
                if assignment.truck.id in used:
                    continue
                if allocated >= needed:
                    break
                zone_trucks[zone].append(assignment)
                allocated += assignment.truck.volume
                used.add(assignment.truck.id)

        if sorted_zones:
            best_zone = sorted_zones[0]
            for assignment in by_capacity:
                if assignment.truck.id not in used:
                    zone_trucks[best_zone].append(assignment)
                    used.add(assignment.truck.id)

        for zone, zone_list in zone_trucks.items():
            logger.debug(f"Zone {zone.value}: trucks {[a.truck.id for a in zone_list]}")

        return zone_trucks

    def _best_fit(self, order: Order, candidates: List[TruckAssignment]) -> Optional[TruckAssignment]:
        """Candidate whose current trip fits the order with the least volume left over."""
        best = None
        best_remaining = float("inf")
        for assignment in candidates:
            trip = assignment.current_trip
            if not trip.can_fit(order):
                continue
            remaining = trip.remaining_volume - order.total_volume
            if remaining < best_remaining:
                best_remaining = remaining
                best = assignment
        return best

    def _first_fit(self, order: Order, candidates: List[TruckAssignment]) -> Optional[TruckAssignment]:
        for assignment in candidates:
            if assignment.current_trip.can_fit(order):
                return assignment
        return None

    def _place_in_extra_trips(
        self,
        leftovers: List[Order],
        by_capacity: List[TruckAssignment],
    ) -> List[UnassignedOrder]:
        """
        Place leftover orders, largest first, opening new trips as needed.

        A new trip is opened on a truck only if an empty trip of that truck
        can hold the order.
        """
        unassigned = []
        for order in sorted(leftovers, key=lambda o: -o.total_volume):
            placed = False
            for assignment in by_capacity:
                trip = assignment.current_trip
                if not trip.can_fit(order):
                    if not assignment.truck.can_hold(order):
                        continue
                    trip = assignment.open_trip()
                    logger.debug(f"Opened trip {trip.trip_id} on truck {assignment.truck.id}")

                trip.load(order)
                placed = True
                break

            if not placed:
                unassigned.append(UnassignedOrder(order=order, reason=REASON_NO_CAPACITY))

        return unassigned

    # ------------------------------------------------------------------
    # Single-trip, cluster-then-pack strategy
    # ------------------------------------------------------------------

    def _plan_zone_cluster(
        self,
        orders: List[Order],
        assignments: List[TruckAssignment],
    ) -> List[UnassignedOrder]:
        zone_orders = self._group_by_zone(orders)
        zones = sorted(
            zone_orders,
            key=lambda z: (self.travel_model.depot_minutes(z), z.value),
        )

        by_capacity = self._by_capacity(assignments)
        used_trucks: List[TruckAssignment] = []
        helpers_left = self.config.available_helpers
        unassigned = []

        for zone in zones:
            for order in sorted(zone_orders[zone], key=lambda o: -o.total_weight):
                needed = order.helper_count
                if helpers_left is not None and needed > helpers_left:
                    logger.debug(
                        f"Order {order.id} needs {needed} helpers, {helpers_left} left"
                    )
                    unassigned.append(UnassignedOrder(order=order, reason=REASON_NO_HELPERS))
                    continue

                target = self._truck_serving_zone(order, zone, used_trucks)
                if target is None:
                    target = self._next_unused_truck(order, by_capacity, used_trucks)

                if target is None:
                    unassigned.append(UnassignedOrder(order=order, reason=REASON_NO_CAPACITY))
                    continue

                target.current_trip.load(order)
                if helpers_left is not None:
                    helpers_left -= needed

        return unassigned

    def _truck_serving_zone(
        self,
        order: Order,
        zone: DeliveryZone,
        used_trucks: List[TruckAssignment],
    ) -> Optional[TruckAssignment]:
        for assignment in used_trucks:
            trip = assignment.current_trip
            if zone in trip.zones and trip.can_fit(order):
                return assignment
        return None

    def _next_unused_truck(
        self,
        order: Order,
        by_capacity: List[TruckAssignment],
        used_trucks: List[TruckAssignment],
    ) -> Optional[TruckAssignment]:
        for assignment in by_capacity:
            if any(used is assignment for used in used_trucks):
                continue
            if assignment.current_trip.can_fit(order):
                used_trucks.append(assignment)
                return assignment
        return None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _group_by_zone(self, orders: List[Order]) -> Dict[DeliveryZone, List[Order]]:
        """Bucket orders by zone, zones in first-seen order."""
        zone_orders: Dict[DeliveryZone, List[Order]] = {}
        for order in orders:
            zone = self.zone_lookup.zone_for(order)
            zone_orders.setdefault(zone, []).append(order)
        return zone_orders

    def _by_capacity(self, assignments: List[TruckAssignment]) -> List[TruckAssignment]:
        """Assignments sorted by descending truck volume (stable)."""
        return sorted(assignments, key=lambda a: -a.truck.volume)

