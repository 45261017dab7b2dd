"""Base classes for packing strategies.

All packers place unit items into a rectangular container and return a
PackingResult. Callers choose the strategy: the free-space packer for
single-truck previews, the shelf packer for section-based load plans.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, List, Optional
import logging

from ..models.item import Item
from ..models.placement import PlacedItem
from ..models.truck import Truck
from .balance import CenterOfGravity, calculate_center_of_gravity, is_load_balanced

logger = logging.getLogger(__name__)

EPS = 1e-9


@dataclass(frozen=True)
class ContainerBox:
    """
    Packing target: a truck cargo box or a depth band of it.

    Attributes:
        width: Extent along x (cm)
        depth: Full extent along y (cm)
        height: Extent along z (cm)
        max_weight: Weight budget for this packing run (kg)
        y_start: Start of the usable depth band
        y_end: End of the usable depth band (None = full depth)
    """
    width: float
    depth: float
    height: float
    max_weight: float
    y_start: float = 0.0
    y_end: Optional[float] = None

    @property
    def band_end(self) -> float:
        return self.depth if self.y_end is None else self.y_end

    @property
    def band_depth(self) -> float:
        return self.band_end - self.y_start

    @property
    def volume(self) -> float:
        """Volume of the usable band."""
        return self.width * self.band_depth * self.height

    @classmethod
    def from_truck(cls, truck: Truck) -> "ContainerBox":
        return cls(
            width=truck.width,
            depth=truck.depth,
            height=truck.height,
            max_weight=truck.max_weight,
        )

    def band(self, y_start: float, y_end: float, max_weight: Optional[float] = None) -> "ContainerBox":
        """Return a depth band of this container."""
        return ContainerBox(
            width=self.width,
            depth=self.depth,
            height=self.height,
            max_weight=self.max_weight if max_weight is None else max_weight,
            y_start=y_start,
            y_end=y_end,
        )


@dataclass
class PackingResult:
    """
    Outcome of one packing run.

    Attributes:
        container: Container that was packed
        placed: Items with positions
        unpacked: Items that could not be placed (weight or geometry)
        total_weight: Weight of placed items (kg)
        total_volume: Volume of placed items (cm³)
    """
    container: ContainerBox
    placed: List[PlacedItem] = field(default_factory=list)
    unpacked: List[Item] = field(default_factory=list)
    total_weight: float = 0.0
    total_volume: float = 0.0

    @property
    def success(self) -> bool:
        """True when every item was placed."""
        return len(self.unpacked) == 0

    @property
    def volume_utilization(self) -> float:
        """Used volume as a percentage of container volume."""
        if self.container.volume <= 0:
            return 0.0
        return (self.total_volume / self.container.volume) * 100

    @property
    def weight_utilization(self) -> float:
        """Used weight as a percentage of the weight budget."""
        if self.container.max_weight <= 0:
            return 0.0
        return (self.total_weight / self.container.max_weight) * 100

    def center_of_gravity(self) -> CenterOfGravity:
        return calculate_center_of_gravity(self.placed)

    def is_balanced(self, tolerance: float = 0.3) -> bool:
        """Check the load centroid against the full container floor."""
        return is_load_balanced(
            self.center_of_gravity(),
            self.container.width,
            self.container.depth,
            tolerance,
        )

    def __str__(self) -> str:
        """String representation."""
        return (
            f"PackingResult: {len(self.placed)} placed, {len(self.unpacked)} unpacked, "
            f"{self.volume_utilization:.1f}% volume, {self.weight_utilization:.1f}% weight"
        )


class Packer(ABC):
    """
    Abstract base class for packing strategies.

    Subclasses decide the item order, create the per-run geometric state and
    place one item at a time; the base class enforces the weight budget and
    keeps the running totals. Packers hold no state between runs.

    Example:
        packer = FreeSpacePacker()
        result = packer.pack(units, ContainerBox.from_truck(truck))
    """

    @abstractmethod
    def order_items(self, items: List[Item]) -> List[Item]:
        """Return items in the order the strategy places them."""
        raise NotImplementedError("Subclass must implement order_items()")

    @abstractmethod
    def new_state(self, container: ContainerBox) -> Any:
        """Create the geometric state for a new packing run."""
        raise NotImplementedError("Subclass must implement new_state()")

    @abstractmethod
    def place(self, item: Item, state: Any) -> Optional[PlacedItem]:
        """Place one item, or return None if it does not fit."""
        raise NotImplementedError("Subclass must implement place()")

    def pack(self, items: List[Item], container: ContainerBox) -> PackingResult:
        """
        Pack unit items into the container.

        An item is rejected before any geometric attempt if it would push the
        running weight above the container's weight budget.

        Args:
            items: Unit items (quantity already expanded)
            container: Target container or band

        Returns:
            PackingResult with placed and unpacked items
        """
        result = PackingResult(container=container)
        state = self.new_state(container)

        for item in self.order_items(items):
            if result.total_weight + item.weight > container.max_weight + EPS:
                logger.debug(f"Item {item.unit_key} rejected: weight budget {container.max_weight:.1f}kg")
                result.unpacked.append(item)
                continue

            placed = self.place(item, state)
            if placed is None:
                result.unpacked.append(item)
                continue

            result.placed.append(placed)
            result.total_weight += item.weight
            result.total_volume += item.volume

        return result
