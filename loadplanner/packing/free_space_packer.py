"""Free-space (guillotine) packer.

First-Fit-Decreasing by volume with Bottom-Left-Back placement. The packer
keeps a list of axis-aligned free boxes, starting with the whole container.
Placing an item consumes one free box and splits the remainder into up to
three boxes: to the right (+x), in front (+y) and above (+z).
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple
import logging

from ..models.item import Item
from ..models.placement import PlacedItem
from .base import EPS, ContainerBox, Packer

logger = logging.getLogger(__name__)


@dataclass
class FreeSpace:
    """Axis-aligned empty box inside the container."""
    x: float
    y: float
    z: float
    w: float
    d: float
    h: float

    def fits(self, length: float, width: float, height: float) -> bool:
        return length <= self.w + EPS and width <= self.d + EPS and height <= self.h + EPS

    @property
    def rank(self) -> Tuple[float, float, float]:
        """Bottom-most, then back-most, then left-most."""
        return (self.z, self.y, self.x)


class FreeSpacePacker(Packer):
    """
    Packs items largest-first into free boxes using Bottom-Left-Back.

    Each item tries rotation 0° and then 90° about the vertical axis; the
    first rotation that fits any free box is used.
    """

    ROTATIONS = (0, 90)

    def order_items(self, items: List[Item]) -> List[Item]:
        return sorted(items, key=lambda item: -item.volume)

    def new_state(self, container: ContainerBox) -> List[FreeSpace]:
        return [
            FreeSpace(
                x=0.0,
                y=container.y_start,
                z=0.0,
                w=container.width,
                d=container.band_depth,
                h=container.height,
            )
        ]

    def place(self, item: Item, state: List[FreeSpace]) -> Optional[PlacedItem]:
        for rotation in self.ROTATIONS:
            length, width = (item.length, item.width) if rotation == 0 else (item.width, item.length)

            best_index = self._find_best_space(state, length, width, item.height)
            if best_index is None:
                continue

            space = state.pop(best_index)
            state.extend(self._split_space(space, length, width, item.height))

            return PlacedItem(
                item=item,
                x=space.x,
                y=space.y,
                z=space.z,
                rotation=rotation,
                rotated_length=length,
                rotated_width=width,
            )

        logger.debug(f"Item {item.unit_key} fits no free space in either rotation")
        return None

    def _find_best_space(
        self,
        spaces: List[FreeSpace],
        length: float,
        width: float,
        height: float,
    ) -> Optional[int]:
        """Index of the lowest-ranked free box that fits, or None."""
        best_index = None
        for index, space in enumerate(spaces):
            if not space.fits(length, width, height):
                continue
            if best_index is None or space.rank < spaces[best_index].rank:
                best_index = index
        return best_index

    def _split_space(
        self,
        space: FreeSpace,
        length: float,
        width: float,
        height: float,
    ) -> List[FreeSpace]:
        """Remainders of a free box after placing an item at its corner."""
        remainders = []

        if space.w - length > EPS:
            remainders.append(FreeSpace(
                x=space.x + length, y=space.y, z=space.z,
                w=space.w - length, d=space.d, h=space.h,
            ))

        if space.d - width > EPS:
            remainders.append(FreeSpace(
                x=space.x, y=space.y + width, z=space.z,
                w=length, d=space.d - width, h=space.h,
            ))

        if space.h - height > EPS:
            remainders.append(FreeSpace(
                x=space.x, y=space.y, z=space.z + height,
                w=length, d=width, h=space.h - height,
            ))

        return remainders
