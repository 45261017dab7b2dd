"""Trip accumulators used while assigning orders to trucks.

Trips are mutable working state owned by the fleet assignment planner during a
single run. Orders and trucks themselves stay immutable.
"""

from dataclasses import dataclass, field
from typing import List

from .order import Order
from .truck import Truck
from .zone import DeliveryZone


@dataclass
class Trip:
    """
    One loading and delivery cycle of a truck.

    Attributes:
        trip_id: 1-based trip number within the truck
        truck: Truck running this trip
        loaded_orders: Orders loaded, in loading order
        current_volume: Accumulated order volume in cm³
        current_weight: Accumulated order weight in kg
        zones: Zones touched by the loaded orders, in first-seen order
    """
    trip_id: int
    truck: Truck
    loaded_orders: List[Order] = field(default_factory=list)
    current_volume: float = 0.0
    current_weight: float = 0.0
    zones: List[DeliveryZone] = field(default_factory=list)

    @property
    def max_volume(self) -> float:
        return self.truck.volume

    @property
    def max_weight(self) -> float:
        return self.truck.max_weight

    @property
    def remaining_volume(self) -> float:
        return self.max_volume - self.current_volume

    @property
    def remaining_weight(self) -> float:
        return self.max_weight - self.current_weight

    @property
    def is_empty(self) -> bool:
        return len(self.loaded_orders) == 0

    @property
    def volume_utilization(self) -> float:
        """Volume used as a percentage of truck volume."""
        return (self.current_volume / self.max_volume) * 100 if self.max_volume > 0 else 0.0

    @property
    def weight_utilization(self) -> float:
        """Weight used as a percentage of truck payload."""
        return (self.current_weight / self.max_weight) * 100 if self.max_weight > 0 else 0.0

    def can_fit(self, order: Order) -> bool:
        """
        Check if the order can be added to this trip.

        Remaining volume and weight must cover the order totals and the
        order's largest dimensions must fit the truck. Already loaded items
        are not repacked.

        Args:
            order: Order to check

        Returns:
            True if loading the order keeps both capacity limits
        """
        if self.current_volume + order.total_volume > self.max_volume:
            return False
        if self.current_weight + order.total_weight > self.max_weight:
            return False
        return self.truck.fits_dimensions(order)

    def load(self, order: Order) -> None:
        """
        Load an order into the trip.

        Raises:
            ValueError: If the order would break a capacity limit
        """
        if not self.can_fit(order):
            raise ValueError(
                f"Order {order.id} does not fit trip {self.trip_id} of truck {self.truck.id} "
                f"({self.remaining_volume:.0f}cm³ / {self.remaining_weight:.1f}kg remaining)"
            )

        self.loaded_orders.append(order)
        self.current_volume += order.total_volume
        self.current_weight += order.total_weight
        if order.delivery_zone is not None and order.delivery_zone not in self.zones:
            self.zones.append(order.delivery_zone)

    def __str__(self) -> str:
        """String representation."""
        return (
            f"{self.truck.display_name} trip {self.trip_id}: {len(self.loaded_orders)} orders, "
            f"{self.volume_utilization:.1f}% volume, {self.weight_utilization:.1f}% weight"
        )


@dataclass
class TruckAssignment:
    """
    All trips planned for one truck.

    Attributes:
        truck: The truck
        trips: Trips in running order (the last one is the open trip)
    """
    truck: Truck
    trips: List[Trip] = field(default_factory=list)

    def __post_init__(self):
        if not self.trips:
            self.trips.append(Trip(trip_id=1, truck=self.truck))

    @property
    def current_trip(self) -> Trip:
        """The trip currently being loaded."""
        return self.trips[-1]

    @property
    def active_trips(self) -> List[Trip]:
        """Trips with at least one order."""
        return [trip for trip in self.trips if not trip.is_empty]

    @property
    def total_orders(self) -> int:
        return sum(len(trip.loaded_orders) for trip in self.trips)

    @property
    def total_volume_used(self) -> float:
        return sum(trip.current_volume for trip in self.trips)

    @property
    def total_weight_used(self) -> float:
        return sum(trip.current_weight for trip in self.trips)

    def open_trip(self) -> Trip:
        """Start a new trip on this truck and return it."""
        trip = Trip(trip_id=len(self.trips) + 1, truck=self.truck)
        self.trips.append(trip)
        return trip

    def __str__(self) -> str:
        """String representation."""
        return (
            f"{self.truck.display_name}: {len(self.active_trips)} trips, "
            f"{self.total_orders} orders"
        )
