"""Pydantic schemas for optimization results.

This module defines the contract between the optimizer and its callers
(services, exporters, report tables). Results are validated on construction,
so an inconsistent result fails at the boundary instead of in a report.

Units:
- Positions and dimensions in cm, weights in kg
- Volumes in m³ unless the field name says otherwise
- Utilizations in percent
- Times in minutes (hours where the field name says so)
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator

from ..models.item import Item
from ..models.placement import LoadSection, PlacedItem
from ..models.planning_config import AssignmentStrategy
from ..models.route_stop import RouteStop
from ..models.zone import DeliveryZone
from ..packing.balance import CenterOfGravity


# ============================================================================
# Item-level structures
# ============================================================================

class CenterOfGravityResult(BaseModel):
    """Weight-weighted centroid of a load (cm)."""
    x: float = Field(default=0.0, description="Centroid along the width")
    y: float = Field(default=0.0, description="Centroid along the depth")
    z: float = Field(default=0.0, description="Centroid height")

    @classmethod
    def from_center(cls, center: CenterOfGravity) -> "CenterOfGravityResult":
        return cls(x=round(center.x, 2), y=round(center.y, 2), z=round(center.z, 2))


class LoadPlanItemResult(BaseModel):
    """One placed unit of a load plan."""
    order_item_id: str = Field(..., description="Order line ID")
    unit_index: int = Field(default=0, ge=0, description="Unit index within the line")
    order_id: Optional[str] = Field(None, description="Owning order ID")
    name: str = Field(default="", description="Item name")
    x: float = Field(..., ge=0)
    y: float = Field(..., ge=0)
    z: float = Field(..., ge=0)
    rotated_length: float = Field(..., gt=0, description="Extent along the width after rotation")
    rotated_width: float = Field(..., gt=0, description="Extent along the depth after rotation")
    height: float = Field(..., gt=0)
    weight: float = Field(..., gt=0)
    rotation: int = Field(default=0, description="Yaw rotation in degrees")
    placement: Optional[LoadSection] = Field(None, description="Front, middle or back")

    @field_validator('rotation')
    @classmethod
    def rotation_is_quarter_turn(cls, v):
        if v not in (0, 90):
            raise ValueError(f"rotation must be 0 or 90, got {v}")
        return v

    @classmethod
    def from_placed(cls, placed: PlacedItem) -> "LoadPlanItemResult":
        item = placed.item
        return cls(
            order_item_id=item.id,
            unit_index=item.unit_index,
            order_id=item.order_id,
            name=item.name,
            x=placed.x,
            y=placed.y,
            z=placed.z,
            rotated_length=placed.rotated_length,
            rotated_width=placed.rotated_width,
            height=placed.height,
            weight=placed.weight,
            rotation=placed.rotation,
            placement=placed.placement,
        )


class UnpackedItemResult(BaseModel):
    """A unit that could not be placed."""
    order_item_id: str
    unit_index: int = Field(default=0, ge=0)
    order_id: Optional[str] = None
    name: str = ""
    length: float = Field(..., gt=0)
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    weight: float = Field(..., gt=0)

    @classmethod
    def from_item(cls, item: Item) -> "UnpackedItemResult":
        return cls(
            order_item_id=item.id,
            unit_index=item.unit_index,
            order_id=item.order_id,
            name=item.name,
            length=item.length,
            width=item.width,
            height=item.height,
            weight=item.weight,
        )


# ============================================================================
# Single-truck preview
# ============================================================================

class PackingPreviewResult(BaseModel):
    """Result of packing a set of orders into one truck."""
    truck_id: str
    truck_name: str = ""
    packed_items: List[LoadPlanItemResult] = Field(default_factory=list)
    unpacked_items: List[UnpackedItemResult] = Field(default_factory=list)
    total_weight: float = Field(default=0.0, ge=0, description="Packed weight (kg)")
    total_volume_m3: float = Field(default=0.0, ge=0, description="Packed volume (m³)")
    volume_utilization: float = Field(default=0.0, ge=0, le=100)
    weight_utilization: float = Field(default=0.0, ge=0, le=100)
    center_of_gravity: CenterOfGravityResult = Field(default_factory=CenterOfGravityResult)
    is_balanced: bool = True
    route: List[RouteStop] = Field(default_factory=list, description="Delivery sequence of the orders")

    model_config = ConfigDict(extra="allow")

    @property
    def success(self) -> bool:
        """True when every unit was packed."""
        return len(self.unpacked_items) == 0


# ============================================================================
# Fleet-wide optimization
# ============================================================================

class TripResult(BaseModel):
    """One trip of one truck."""
    trip_id: int = Field(..., ge=1)
    order_ids: List[str] = Field(default_factory=list)
    zones: List[DeliveryZone] = Field(default_factory=list, description="Zones in visiting order")
    route: List[RouteStop] = Field(default_factory=list)
    load_plan: List[LoadPlanItemResult] = Field(default_factory=list)
    unplaced_items: List[UnpackedItemResult] = Field(default_factory=list)
    volume_used_m3: float = Field(default=0.0, ge=0)
    weight_used_kg: float = Field(default=0.0, ge=0)
    volume_utilization: float = Field(default=0.0, ge=0, le=100)
    weight_utilization: float = Field(default=0.0, ge=0, le=100)
    elapsed_minutes: float = Field(default=0.0, ge=0, description="Trip time including return")
    center_of_gravity: CenterOfGravityResult = Field(default_factory=CenterOfGravityResult)
    is_balanced: bool = True

    @model_validator(mode='after')
    def route_covers_orders(self):
        """Every loaded order appears exactly once in the route."""
        routed = [stop.order_id for stop in self.route]
        if sorted(routed) != sorted(self.order_ids):
            raise ValueError(
                f"trip {self.trip_id}: route orders {routed} != loaded orders {self.order_ids}"
            )
        sequences = [stop.sequence for stop in self.route]
        if sequences != list(range(1, len(sequences) + 1)):
            raise ValueError(f"trip {self.trip_id}: stop sequence must be 1..n, got {sequences}")
        return self


class TruckResult(BaseModel):
    """All trips of one truck."""
    truck_id: str
    truck_name: str = ""
    trips: List[TripResult] = Field(default_factory=list)
    total_orders: int = Field(default=0, ge=0)
    total_volume_used_m3: float = Field(default=0.0, ge=0)
    total_weight_used_kg: float = Field(default=0.0, ge=0)
    total_minutes: float = Field(default=0.0, ge=0, description="Trips plus reloads")

    @property
    def total_hours(self) -> float:
        return round(self.total_minutes / 60, 2)

    @model_validator(mode='after')
    def validate_totals(self):
        """Order count matches the trips."""
        trip_orders = sum(len(trip.order_ids) for trip in self.trips)
        if trip_orders != self.total_orders:
            raise ValueError(
                f"truck {self.truck_id}: total_orders ({self.total_orders}) != orders on trips ({trip_orders})"
            )
        return self


class UnassignedOrderResult(BaseModel):
    """An order left out of the plan."""
    order_id: str
    order_number: str = ""
    zone: Optional[DeliveryZone] = None
    weight_kg: float = Field(default=0.0, ge=0)
    volume_m3: float = Field(default=0.0, ge=0)
    reason: str = Field(..., min_length=1)


class FleetSummary(BaseModel):
    """Fleet-wide figures of a plan."""
    strategy: AssignmentStrategy = AssignmentStrategy.MULTI_TRIP
    total_orders: int = Field(..., ge=0)
    assigned_orders: int = Field(..., ge=0)
    unassigned_orders: int = Field(..., ge=0)
    assignment_rate: float = Field(..., ge=0, le=100, description="Assigned orders (%)")
    trucks_used: int = Field(default=0, ge=0)
    total_trips: int = Field(default=0, ge=0)
    total_elapsed_minutes: float = Field(default=0.0, ge=0)
    total_elapsed_hours: float = Field(default=0.0, ge=0)
    fleet_volume_utilization: float = Field(
        default=0.0, ge=0,
        description="Volume carried over all trips as % of one fleet load (can exceed 100 with extra trips)",
    )
    depot_reload_minutes: float = Field(default=0.0, ge=0, description="Reload time between trips")

    @model_validator(mode='after')
    def validate_counts(self):
        """Assigned plus unassigned equals total."""
        if self.assigned_orders + self.unassigned_orders != self.total_orders:
            raise ValueError(
                f"assigned ({self.assigned_orders}) + unassigned ({self.unassigned_orders}) "
                f"!= total ({self.total_orders})"
            )
        return self


class TruckCompletionTime(BaseModel):
    """Completion time of one truck under parallel deployment."""
    truck_name: str = ""
    total_minutes: float = Field(default=0.0, ge=0)
    total_hours: float = Field(default=0.0, ge=0)
    trips: int = Field(default=0, ge=0)


class ParallelDeployment(BaseModel):
    """All trucks leave together; the fleet is done when the slowest truck is."""
    total_elapsed_minutes: float = Field(default=0.0, ge=0)
    total_elapsed_hours: float = Field(default=0.0, ge=0)
    bottleneck_truck_id: Optional[str] = None
    bottleneck_truck_name: Optional[str] = None
    truck_completion_times: Dict[str, TruckCompletionTime] = Field(
        default_factory=dict, description="Keyed by truck ID"
    )


class ZoneSummaryEntry(BaseModel):
    """Assigned demand of one zone."""
    orders: int = Field(default=0, ge=0)
    volume_m3: float = Field(default=0.0, ge=0)
    weight_kg: float = Field(default=0.0, ge=0)


class FleetOptimizationResult(BaseModel):
    """
    Complete result of a fleet-wide optimization run.

    Attributes:
        trucks: Per-truck trips, in input truck order (trucks with trips only)
        summary: Fleet summary
        parallel_deployment: Completion times and bottleneck
        zone_summary: Assigned orders, volume and weight per zone
        unassigned_orders: Orders left out, with reasons
    """
    trucks: List[TruckResult] = Field(default_factory=list)
    summary: FleetSummary
    parallel_deployment: ParallelDeployment = Field(default_factory=ParallelDeployment)
    zone_summary: Dict[DeliveryZone, ZoneSummaryEntry] = Field(default_factory=dict)
    unassigned_orders: List[UnassignedOrderResult] = Field(default_factory=list)

    model_config = ConfigDict(extra="allow")

    @model_validator(mode='after')
    def validate_consistency(self):
        """Cross-field consistency validation."""
        assigned = sum(truck.total_orders for truck in self.trucks)
        if assigned != self.summary.assigned_orders:
            raise ValueError(
                f"summary.assigned_orders ({self.summary.assigned_orders}) != orders on trucks ({assigned})"
            )

        if len(self.unassigned_orders) != self.summary.unassigned_orders:
            raise ValueError(
                f"summary.unassigned_orders ({self.summary.unassigned_orders}) "
                f"!= unassigned list ({len(self.unassigned_orders)})"
            )

        trips = sum(len(truck.trips) for truck in self.trucks)
        if trips != self.summary.total_trips:
            raise ValueError(f"summary.total_trips ({self.summary.total_trips}) != trips ({trips})")

        return self

    def all_trips(self) -> List[TripResult]:
        return [trip for truck in self.trucks for trip in truck.trips]

    def to_dict_json_safe(self) -> Dict:
        """Convert to a JSON-serializable dict."""
        return self.model_dump(mode='json')
