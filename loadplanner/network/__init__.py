"""Zone geography and travel-time model."""

from .zone_graph import ZoneGraphBuilder, DEPOT_NODE
from .travel_model import TravelTimeModel
from .zone_lookup import ZoneLookup

__all__ = [
    'ZoneGraphBuilder',
    'DEPOT_NODE',
    'TravelTimeModel',
    'ZoneLookup',
]
