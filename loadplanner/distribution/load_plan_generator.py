"""Section-based 3-D load plans.

Units for the last stops are loaded first, at the back of the cargo box, so
that each stop's items can be unloaded from the door side without moving the
items of later stops. The cargo depth is split into three equal bands (back,
middle, front) and each band is packed by the shelf packer.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple
import logging
import math

from ..models.item import Item
from ..models.placement import LoadSection, PlacedItem
from ..models.route_stop import RouteStop
from ..models.trip import Trip
from ..models.truck import Truck
from ..packing.balance import CenterOfGravity, calculate_center_of_gravity, is_load_balanced
from ..packing.base import ContainerBox
from ..packing.shelf_packer import ShelfPacker

logger = logging.getLogger(__name__)

SECTION_ORDER = (LoadSection.BACK, LoadSection.MIDDLE, LoadSection.FRONT)


@dataclass
class LoadPlan:
    """
    Physical placement of one trip's units.

    Attributes:
        truck: Truck being loaded
        trip_id: Trip number within the truck
        placed: Placed units, back section first
        unplaced: Units that did not fit their section
        stop_sequence: Stop number per order ID used for section assignment
        balance_tolerance: Tolerance used for the balance flag
    """
    truck: Truck
    trip_id: int
    placed: List[PlacedItem] = field(default_factory=list)
    unplaced: List[Item] = field(default_factory=list)
    stop_sequence: Dict[str, int] = field(default_factory=dict)
    balance_tolerance: float = 0.3

    @property
    def total_weight(self) -> float:
        return sum(p.weight for p in self.placed)

    @property
    def total_volume(self) -> float:
        return sum(p.volume for p in self.placed)

    @property
    def volume_utilization(self) -> float:
        """Placed volume as a percentage of truck volume."""
        return (self.total_volume / self.truck.volume) * 100 if self.truck.volume > 0 else 0.0

    @property
    def weight_utilization(self) -> float:
        return (self.total_weight / self.truck.max_weight) * 100 if self.truck.max_weight > 0 else 0.0

    @property
    def center_of_gravity(self) -> CenterOfGravity:
        return calculate_center_of_gravity(self.placed)

    @property
    def is_balanced(self) -> bool:
        return is_load_balanced(
            self.center_of_gravity,
            self.truck.width,
            self.truck.depth,
            self.balance_tolerance,
        )

    def items_in(self, section: LoadSection) -> List[PlacedItem]:
        """Placed units of one section."""
        return [p for p in self.placed if p.placement == section]

    def __str__(self) -> str:
        """String representation."""
        return (
            f"LoadPlan {self.truck.display_name} trip {self.trip_id}: "
            f"{len(self.placed)} placed, {len(self.unplaced)} unplaced, "
            f"{self.volume_utilization:.1f}% volume"
        )


class LoadPlanGenerator:
    """
    Converts a trip and its route into a LIFO load plan.

    Example:
        generator = LoadPlanGenerator()
        plan = generator.generate(trip, sequencer.sequence(trip))
    """

    def __init__(self, balance_tolerance: float = 0.3):
        self.balance_tolerance = balance_tolerance

    def generate(self, trip: Trip, route: List[RouteStop]) -> LoadPlan:
        """
        Build the load plan of a trip.

        Args:
            trip: Trip with its loaded orders
            route: Stop sequence of the trip

        Returns:
            LoadPlan with placed and unplaced units
        """
        truck = trip.truck
        stop_sequence = {stop.order_id: stop.sequence for stop in route}
        units = self._tagged_units(trip, stop_sequence)

        plan = LoadPlan(
            truck=truck,
            trip_id=trip.trip_id,
            stop_sequence=stop_sequence,
            balance_tolerance=self.balance_tolerance,
        )

        container = ContainerBox.from_truck(truck)
        section_depth = truck.depth / 3
        groups = self.split_into_sections([item for _, item in units])
        weight_left = truck.max_weight

        for index, section in enumerate(SECTION_ORDER):
            y_start = section_depth * index
            y_end = truck.depth if section == LoadSection.FRONT else section_depth * (index + 1)
            band = container.band(y_start, y_end, max_weight=weight_left)

            result = ShelfPacker(section=section).pack(groups[section], band)
            plan.placed.extend(result.placed)
            plan.unplaced.extend(result.unpacked)
            weight_left -= result.total_weight

            logger.debug(
                f"{truck.id} trip {trip.trip_id} {section.value}: "
                f"{len(result.placed)} placed, {len(result.unpacked)} unplaced"
            )

        if plan.unplaced:
            logger.warning(
                f"{truck.display_name} trip {trip.trip_id}: {len(plan.unplaced)} units "
                f"could not be placed in their section"
            )

        return plan

    def _tagged_units(self, trip: Trip, stop_sequence: Dict[str, int]) -> List[Tuple[int, Item]]:
        """
        Expand the trip's orders into units tagged with their stop number.

        Orders missing from the route are delivered last. Units are sorted by
        descending stop number, ties in loading order.
        """
        fallback = max(stop_sequence.values(), default=0) + 1
        units = []
        for order in trip.loaded_orders:
            sequence = stop_sequence.get(order.id, fallback)
            for unit in order.expand_units():
                units.append((sequence, unit))
        units.sort(key=lambda pair: -pair[0])
        return units

    @staticmethod
    def split_into_sections(units: List[Item]) -> Dict[LoadSection, List[Item]]:
        """
        Split sorted units into three contiguous groups.

        Each of the back and middle groups takes ceil(n / 3) units; the front
        takes the rest.
        """
        per_section = math.ceil(len(units) / 3)
        return {
            LoadSection.BACK: units[:per_section],
            LoadSection.MIDDLE: units[per_section:per_section * 2],
            LoadSection.FRONT: units[per_section * 2:],
        }
