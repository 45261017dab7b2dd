"""Simple layer packer.

Largest items first, filled left to right, then row by row, then layer by
layer across the whole container. It is cheaper than the free-space packer and
useful as a baseline when comparing strategies.
"""

from dataclasses import dataclass
from typing import List, Optional

from ..models.item import Item
from ..models.placement import PlacedItem
from .base import EPS, ContainerBox, Packer


@dataclass
class LayerCursor:
    """Running position of the layer packer."""
    container: ContainerBox
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    layer_height: float = 0.0
    row_depth: float = 0.0


class LayerPacker(Packer):
    """
    Row/layer packer that may turn an item 90° to finish a row.

    At the current cursor the item is tried as stored, then rotated. If
    neither fits, a new row is opened when the item's width still fits the
    depth, otherwise a new layer when its height still fits the roof.
    """

    def order_items(self, items: List[Item]) -> List[Item]:
        return sorted(items, key=lambda item: -item.volume)

    def new_state(self, container: ContainerBox) -> LayerCursor:
        return LayerCursor(container=container, y=container.y_start)

    def place(self, item: Item, state: LayerCursor) -> Optional[PlacedItem]:
        container = state.container

        if self._fits_at_cursor(state, item.length, item.width, item.height):
            return self._commit(state, item, 0, item.length, item.width)

        if self._fits_at_cursor(state, item.width, item.length, item.height):
            return self._commit(state, item, 90, item.width, item.length)

        if state.y + state.row_depth + item.width <= container.band_end + EPS:
            state.x = 0.0
            state.y += state.row_depth
            state.row_depth = 0.0
            if self._fits_at_cursor(state, item.length, item.width, item.height):
                return self._commit(state, item, 0, item.length, item.width)
            return None

        if state.z + state.layer_height + item.height <= container.height + EPS:
            state.x = 0.0
            state.y = container.y_start
            state.z += state.layer_height
            state.layer_height = 0.0
            state.row_depth = 0.0
            if self._fits_at_cursor(state, item.length, item.width, item.height):
                return self._commit(state, item, 0, item.length, item.width)

        return None

    def _fits_at_cursor(self, state: LayerCursor, length: float, width: float, height: float) -> bool:
        container = state.container
        return (
            state.x + length <= container.width + EPS
            and state.y + width <= container.band_end + EPS
            and state.z + height <= container.height + EPS
        )

    def _commit(
        self,
        state: LayerCursor,
        item: Item,
        rotation: int,
        length: float,
        width: float,
    ) -> PlacedItem:
        placed = PlacedItem(
            item=item,
            x=state.x,
            y=state.y,
            z=state.z,
            rotation=rotation,
            rotated_length=length,
            rotated_width=width,
        )
        state.x += length
        state.layer_height = max(state.layer_height, item.height)
        state.row_depth = max(state.row_depth, width)
        return placed
