"""Shelf packer for section-based load plans.

Items are placed heaviest-first in rows along the container width, rows step
towards the front of the depth band, and a full band starts a new layer on top.
Items keep their stored orientation.
"""

from dataclasses import dataclass
from typing import List, Optional
import logging

from ..models.item import Item
from ..models.placement import LoadSection, PlacedItem
from .base import EPS, ContainerBox, Packer

logger = logging.getLogger(__name__)


@dataclass
class ShelfCursor:
    """Running position of the shelf packer inside one band."""
    container: ContainerBox
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    layer_height: float = 0.0
    row_depth: float = 0.0


class ShelfPacker(Packer):
    """
    Row/layer packer bounded to a depth band of the container.

    An item that would rise above the container roof is returned as unpacked
    rather than dropped, and so is an item whose footprint can never fit
    inside the band.

    Args:
        section: Optional load section label stamped on every placement
    """

    def __init__(self, section: Optional[LoadSection] = None):
        self.section = section

    def order_items(self, items: List[Item]) -> List[Item]:
        # Heavier items first so they end up on the floor
        return sorted(items, key=lambda item: -item.weight)

    def new_state(self, container: ContainerBox) -> ShelfCursor:
        return ShelfCursor(container=container, y=container.y_start)

    def place(self, item: Item, state: ShelfCursor) -> Optional[PlacedItem]:
        container = state.container
        length, width, height = item.length, item.width, item.height

        if (
            length > container.width + EPS
            or width > container.band_depth + EPS
            or height > container.height + EPS
        ):
            logger.warning(
                f"Item {item.unit_key} ({length:.0f}x{width:.0f}x{height:.0f}cm) "
                f"cannot fit the {self._label()} band"
            )
            return None

        # Row full: move towards the front
        if state.x + length > container.width + EPS:
            state.x = 0.0
            state.y += state.row_depth
            state.row_depth = 0.0

        # Band full: start a new layer
        if state.y + width > container.band_end + EPS:
            state.x = 0.0
            state.y = container.y_start
            state.z += state.layer_height
            state.layer_height = 0.0
            state.row_depth = 0.0

        if state.z + height > container.height + EPS:
            logger.warning(
                f"Item {item.unit_key} exceeds remaining height in the {self._label()} band "
                f"(z={state.z:.0f}, height={height:.0f}, roof={container.height:.0f})"
            )
            return None

        placed = PlacedItem(
            item=item,
            x=state.x,
            y=state.y,
            z=state.z,
            rotation=0,
            rotated_length=length,
            rotated_width=width,
            placement=self.section,
        )

        state.x += length
        state.layer_height = max(state.layer_height, height)
        state.row_depth = max(state.row_depth, width)
        return placed

    def _label(self) -> str:
        return self.section.value if self.section else "container"
