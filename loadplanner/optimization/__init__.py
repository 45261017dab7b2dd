"""Optimizer facade and result schemas."""

from .engine import LoadRouteOptimizer
from .result_schema import (
    CenterOfGravityResult,
    FleetOptimizationResult,
    FleetSummary,
    LoadPlanItemResult,
    PackingPreviewResult,
    ParallelDeployment,
    TripResult,
    TruckCompletionTime,
    TruckResult,
    UnassignedOrderResult,
    UnpackedItemResult,
    ZoneSummaryEntry,
)

__all__ = [
    'LoadRouteOptimizer',
    'CenterOfGravityResult',
    'FleetOptimizationResult',
    'FleetSummary',
    'LoadPlanItemResult',
    'PackingPreviewResult',
    'ParallelDeployment',
    'TripResult',
    'TruckCompletionTime',
    'TruckResult',
    'UnassignedOrderResult',
    'UnpackedItemResult',
    'ZoneSummaryEntry',
]
