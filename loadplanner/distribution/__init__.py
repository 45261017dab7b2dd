"""Fleet assignment, route sequencing and load planning."""

from .fleet_planner import (
    FleetAssignmentPlanner,
    FleetAssignmentPlan,
    UnassignedOrder,
    ZoneDemand,
    REASON_NO_CAPACITY,
    REASON_NO_HELPERS,
)
from .route_sequencer import RouteSequencer, FleetTiming
from .load_plan_generator import LoadPlanGenerator, LoadPlan

__all__ = [
    'FleetAssignmentPlanner',
    'FleetAssignmentPlan',
    'UnassignedOrder',
    'ZoneDemand',
    'REASON_NO_CAPACITY',
    'REASON_NO_HELPERS',
    'RouteSequencer',
    'FleetTiming',
    'LoadPlanGenerator',
    'LoadPlan',
]
