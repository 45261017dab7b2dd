"""Load and route optimizer.

Entry points of the planning core:

- ``preview``: pack a set of orders into one truck with the free-space packer
- ``auto_optimize``: assign orders to the whole fleet, sequence every trip,
  build its load plan and time the fleet

Both return pydantic-validated results (see result_schema). A run is a pure,
synchronous computation over its inputs; the optimizer keeps no state between
runs, so one instance can serve concurrent requests.
"""

from typing import Dict, List, Optional
import logging
import time

from ..distribution.fleet_planner import FleetAssignmentPlan, FleetAssignmentPlanner
from ..distribution.load_plan_generator import LoadPlanGenerator
from ..distribution.route_sequencer import FleetTiming, RouteSequencer
from ..models.order import Order
from ..models.planning_config import PlanningConfig
from ..models.trip import Trip
from ..models.truck import Truck
from ..models.zone import DeliveryZone
from ..network.zone_lookup import ZoneLookup
from ..packing.base import ContainerBox, Packer
from ..packing.free_space_packer import FreeSpacePacker
from ..validation.input_validator import PlanningInputError, validate_orders, validate_planning_inputs
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

logger = logging.getLogger(__name__)


class LoadRouteOptimizer:
    """
    Facade over fleet assignment, route sequencing and load planning.

    Example:
        optimizer = LoadRouteOptimizer(PlanningConfig())
        result = optimizer.auto_optimize(orders, trucks)

        print(f"{result.summary.assignment_rate}% assigned")
        print(f"Fleet done in {result.summary.total_elapsed_hours}h")
    """

    def __init__(self, config: Optional[PlanningConfig] = None, preview_packer: Optional[Packer] = None):
        """
        Initialize the optimizer.

        Args:
            config: Planning configuration (defaults if omitted)
            preview_packer: Packer used by preview (free-space packer if omitted)
        """
        self.config = config or PlanningConfig()
        self.preview_packer = preview_packer or FreeSpacePacker()
        self.zone_lookup = ZoneLookup(self.config)
        self.planner = FleetAssignmentPlanner(self.config)
        self.sequencer = RouteSequencer(self.config)
        self.load_planner = LoadPlanGenerator(balance_tolerance=self.config.balance_tolerance)

    # ------------------------------------------------------------------
    # Single-truck preview
    # ------------------------------------------------------------------

    def preview(self, truck: Truck, orders: List[Order]) -> PackingPreviewResult:
        """
        Pack orders into a single truck.

        Args:
            truck: Truck to load
            orders: Orders to load (may be empty)

        Returns:
            PackingPreviewResult with packed and unpacked units

        Raises:
            PlanningInputError: If no truck is given or order IDs repeat
        """
        if truck is None:
            raise PlanningInputError("No truck selected for preview")
        if orders:
            validate_orders(orders)

        zoned = self.zone_lookup.assign_zones(orders)
        units = [unit for order in zoned for unit in order.expand_units()]

        result = self.preview_packer.pack(units, ContainerBox.from_truck(truck))

        logger.info(
            f"Preview {truck.display_name}: {len(result.placed)}/{len(units)} units packed, "
            f"{result.volume_utilization:.1f}% volume"
        )

        return PackingPreviewResult(
            truck_id=truck.id,
            truck_name=truck.display_name,
            packed_items=[LoadPlanItemResult.from_placed(p) for p in result.placed],
            unpacked_items=[UnpackedItemResult.from_item(i) for i in result.unpacked],
            total_weight=round(result.total_weight, 2),
            total_volume_m3=round(result.total_volume / 1_000_000, 3),
            volume_utilization=round(result.volume_utilization, 2),
            weight_utilization=round(result.weight_utilization, 2),
            center_of_gravity=CenterOfGravityResult.from_center(result.center_of_gravity()),
            is_balanced=result.is_balanced(self.config.balance_tolerance),
            route=self.sequencer.sequence_orders(zoned),
        )

    # ------------------------------------------------------------------
    # Fleet-wide optimization
    # ------------------------------------------------------------------

    def auto_optimize(self, orders: List[Order], trucks: List[Truck]) -> FleetOptimizationResult:
        """
        Plan the whole fleet.

        Args:
            orders: Orders to deliver
            trucks: Available trucks

        Returns:
            FleetOptimizationResult

        Raises:
            PlanningInputError: If there are no trucks, no orders or duplicate IDs
        """
        validate_planning_inputs(orders, trucks)
        start = time.time()

        plan = self.planner.plan(orders, trucks)
        timing = self.sequencer.fleet_timing(plan.assignments)

        truck_results = []
        for assignment in plan.active_assignments:
            trip_results = [self._build_trip_result(trip) for trip in assignment.active_trips]
            truck_results.append(TruckResult(
                truck_id=assignment.truck.id,
                truck_name=assignment.truck.display_name,
                trips=trip_results,
                total_orders=assignment.total_orders,
                total_volume_used_m3=round(assignment.total_volume_used / 1_000_000, 3),
                total_weight_used_kg=round(assignment.total_weight_used, 2),
                total_minutes=timing.truck_minutes.get(assignment.truck.id, 0.0),
            ))

        result = FleetOptimizationResult(
            trucks=truck_results,
            summary=self._build_summary(plan, trucks, timing),
            parallel_deployment=self._build_parallel_deployment(plan, timing),
            zone_summary=self._build_zone_summary(plan),
            unassigned_orders=[
                UnassignedOrderResult(
                    order_id=entry.order.id,
                    order_number=entry.order.order_number,
                    zone=entry.order.delivery_zone,
                    weight_kg=round(entry.order.total_weight, 2),
                    volume_m3=round(entry.order.total_volume / 1_000_000, 3),
                    reason=entry.reason,
                )
                for entry in plan.unassigned
            ],
        )

        logger.info(
            f"Optimization complete in {time.time() - start:.3f}s: "
            f"{result.summary.assigned_orders}/{result.summary.total_orders} orders, "
            f"{result.summary.total_trips} trips, {result.summary.total_elapsed_hours}h"
        )
        return result

    def _build_trip_result(self, trip: Trip) -> TripResult:
        route = self.sequencer.sequence(trip)
        load_plan = self.load_planner.generate(trip, route)
        visit_order = self.sequencer.zone_visit_order([stop.zone for stop in route])

        return TripResult(
            trip_id=trip.trip_id,
            order_ids=[order.id for order in trip.loaded_orders],
            zones=visit_order,
            route=route,
            load_plan=[LoadPlanItemResult.from_placed(p) for p in load_plan.placed],
            unplaced_items=[UnpackedItemResult.from_item(i) for i in load_plan.unplaced],
            volume_used_m3=round(trip.current_volume / 1_000_000, 3),
            weight_used_kg=round(trip.current_weight, 2),
            volume_utilization=round(trip.volume_utilization, 1),
            weight_utilization=round(trip.weight_utilization, 1),
            elapsed_minutes=self.sequencer.trip_elapsed_minutes(trip, include_return=True),
            center_of_gravity=CenterOfGravityResult.from_center(load_plan.center_of_gravity),
            is_balanced=load_plan.is_balanced,
        )

    def _build_summary(
        self,
        plan: FleetAssignmentPlan,
        trucks: List[Truck],
        timing: FleetTiming,
    ) -> FleetSummary:
        total = plan.total_orders
        assigned = plan.assigned_count
        fleet_volume = sum(truck.volume for truck in trucks)
        volume_used = sum(a.total_volume_used for a in plan.assignments)

        return FleetSummary(
            strategy=plan.strategy,
            total_orders=total,
            assigned_orders=assigned,
            unassigned_orders=len(plan.unassigned),
            assignment_rate=round(assigned / total * 100, 1) if total > 0 else 0.0,
            trucks_used=len(plan.active_assignments),
            total_trips=plan.total_trips,
            total_elapsed_minutes=timing.total_minutes,
            total_elapsed_hours=round(timing.total_hours, 2),
            fleet_volume_utilization=round(volume_used / fleet_volume * 100, 1) if fleet_volume > 0 else 0.0,
            depot_reload_minutes=self.config.reload_minutes,
        )

    def _build_parallel_deployment(self, plan: FleetAssignmentPlan, timing: FleetTiming) -> ParallelDeployment:
        names = {a.truck.id: a.truck.display_name for a in plan.assignments}
        completion = {}
        for assignment in plan.active_assignments:
            minutes = timing.truck_minutes.get(assignment.truck.id, 0.0)
            completion[assignment.truck.id] = TruckCompletionTime(
                truck_name=assignment.truck.display_name,
                total_minutes=minutes,
                total_hours=round(minutes / 60, 2),
                trips=len(assignment.active_trips),
            )

        bottleneck = timing.bottleneck_truck_id
        return ParallelDeployment(
            total_elapsed_minutes=timing.total_minutes,
            total_elapsed_hours=round(timing.total_hours, 2),
            bottleneck_truck_id=bottleneck,
            bottleneck_truck_name=names.get(bottleneck) if bottleneck else None,
            truck_completion_times=completion,
        )

    def _build_zone_summary(self, plan: FleetAssignmentPlan) -> Dict[DeliveryZone, ZoneSummaryEntry]:
        """Assigned orders, m³ and kg per zone, zones in first-seen order."""
        totals: Dict[DeliveryZone, Dict[str, float]] = {}
        for assignment in plan.assignments:
            for trip in assignment.active_trips:
                for order in trip.loaded_orders:
                    zone = self.zone_lookup.zone_for(order)
                    entry = totals.setdefault(zone, {"orders": 0, "volume": 0.0, "weight": 0.0})
                    entry["orders"] += 1
                    entry["volume"] += order.total_volume
                    entry["weight"] += order.total_weight

        return {
            zone: ZoneSummaryEntry(
                orders=int(entry["orders"]),
                volume_m3=round(entry["volume"] / 1_000_000, 2),
                weight_kg=round(entry["weight"], 2),
            )
            for zone, entry in totals.items()
        }
