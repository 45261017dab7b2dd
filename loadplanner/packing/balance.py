"""Center of gravity and load balance checks for packed items."""

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class CenterOfGravity:
    """Weight-weighted centroid of a load (cm)."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


def calculate_center_of_gravity(placed_items: Iterable) -> CenterOfGravity:
    """
    Compute the weight-weighted centroid of the items' geometric centres.

    Args:
        placed_items: Items exposing center_x/center_y/center_z and weight

    Returns:
        CenterOfGravity, or the origin when there is no weight
    """
    total_weight = 0.0
    weighted_x = weighted_y = weighted_z = 0.0

    for placed in placed_items:
        weighted_x += placed.center_x * placed.weight
        weighted_y += placed.center_y * placed.weight
        weighted_z += placed.center_z * placed.weight
        total_weight += placed.weight

    if total_weight <= 0:
        return CenterOfGravity()

    return CenterOfGravity(
        x=weighted_x / total_weight,
        y=weighted_y / total_weight,
        z=weighted_z / total_weight,
    )


def is_load_balanced(
    center: CenterOfGravity,
    width: float,
    depth: float,
    tolerance: float = 0.3,
) -> bool:
    """
    Check the centroid lies in the middle band of the floor.

    Height is not checked.

    Args:
        center: Load centre of gravity
        width: Container width (x extent)
        depth: Container depth (y extent)
        tolerance: Allowed offset from the centre as a fraction of each extent

    Returns:
        True if both horizontal offsets are within tolerance
    """
    return (
        abs(center.x - width / 2) <= tolerance * width
        and abs(center.y - depth / 2) <= tolerance * depth
    )
