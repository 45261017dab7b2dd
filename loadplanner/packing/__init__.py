"""
Geometry and packing kernel.

Interchangeable packers behind one interface plus the centre-of-gravity
and balance checks shared by all of them.
"""

from .base import Packer, PackingResult, ContainerBox
from .free_space_packer import FreeSpacePacker, FreeSpace
from .shelf_packer import ShelfPacker
from .layer_packer import LayerPacker
from .balance import CenterOfGravity, calculate_center_of_gravity, is_load_balanced

__all__ = [
    'Packer',
    'PackingResult',
    'ContainerBox',
    'FreeSpacePacker',
    'FreeSpace',
    'ShelfPacker',
    'LayerPacker',
    'CenterOfGravity',
    'calculate_center_of_gravity',
    'is_load_balanced',
]
