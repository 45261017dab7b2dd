"""
Tests for result schema validation.

Results are validated on construction, so inconsistent counts, out-of-range
utilizations and broken stop sequences are rejected at the boundary.
"""

import pytest
from pydantic import ValidationError

from loadplanner.models import DeliveryZone, RouteStop
from loadplanner.optimization import (
    FleetOptimizationResult,
    FleetSummary,
    LoadPlanItemResult,
    PackingPreviewResult,
    TripResult,
    TruckResult,
)


def stop(order_id, sequence):
    return RouteStop(
        order_id=order_id,
        order_number=order_id,
        sequence=sequence,
        zone=DeliveryZone.CENTRAL,
        zipcode="018956",
        sector="01",
        latitude=1.3,
        longitude=103.85,
        weight_kg=10,
        volume_m3=0.125,
    )


def summary(**overrides):
    values = dict(total_orders=2, assigned_orders=2, unassigned_orders=0, assignment_rate=100, total_trips=1)
    values.update(overrides)
    return FleetSummary(**values)


def truck_with_trip():
    trip = TripResult(trip_id=1, order_ids=["A", "B"], route=[stop("A", 1), stop("B", 2)])
    return TruckResult(truck_id="T1", trips=[trip], total_orders=2)


class TestTripResult:
    """Tests for TripResult validation."""

    def test_valid(self):
        trip = TripResult(trip_id=1, order_ids=["A", "B"], route=[stop("B", 1), stop("A", 2)])
        assert trip.trip_id == 1

    def test_route_must_cover_orders(self):
        with pytest.raises(ValidationError, match="route orders"):
            TripResult(trip_id=1, order_ids=["A", "B"], route=[stop("A", 1)])

    def test_sequence_must_start_at_one(self):
        with pytest.raises(ValidationError, match="stop sequence"):
            TripResult(trip_id=1, order_ids=["A", "B"], route=[stop("A", 2), stop("B", 3)])

    def test_utilization_capped(self):
        with pytest.raises(ValidationError):
            TripResult(trip_id=1, volume_utilization=120)


class TestLoadPlanItemResult:
    """Tests for LoadPlanItemResult validation."""

    def test_rotation_must_be_quarter_turn(self):
        with pytest.raises(ValidationError, match="rotation must be 0 or 90"):
            LoadPlanItemResult(
                order_item_id="L1", x=0, y=0, z=0,
                rotated_length=10, rotated_width=10, height=10, weight=1, rotation=45,
            )


class TestTruckResult:
    """Tests for TruckResult validation."""

    def test_total_orders_must_match_trips(self):
        trip = TripResult(trip_id=1, order_ids=["A"], route=[stop("A", 1)])
        with pytest.raises(ValidationError, match="total_orders"):
            TruckResult(truck_id="T1", trips=[trip], total_orders=3)

    def test_total_hours(self):
        assert TruckResult(truck_id="T1", total_minutes=270).total_hours == 4.5


class TestFleetSummary:
    """Tests for FleetSummary validation."""

    def test_counts_must_add_up(self):
        with pytest.raises(ValidationError, match="assigned"):
            summary(unassigned_orders=1)

    def test_assignment_rate_capped(self):
        with pytest.raises(ValidationError):
            summary(assignment_rate=101)

    def test_fleet_utilization_may_exceed_full_load(self):
        """Test extra trips can carry more than one fleet load."""
        assert summary(fleet_volume_utilization=180.0).fleet_volume_utilization == 180.0


class TestFleetOptimizationResult:
    """Tests for cross-field consistency of FleetOptimizationResult."""

    def test_consistent(self):
        result = FleetOptimizationResult(trucks=[truck_with_trip()], summary=summary())
        assert len(result.all_trips()) == 1

    def test_assigned_count_mismatch(self):
        with pytest.raises(ValidationError, match="assigned_orders"):
            FleetOptimizationResult(
                trucks=[truck_with_trip()],
                summary=summary(total_orders=3, assigned_orders=3),
            )

    def test_unassigned_list_mismatch(self):
        with pytest.raises(ValidationError, match="unassigned"):
            FleetOptimizationResult(
                trucks=[truck_with_trip()],
                summary=summary(total_orders=3, unassigned_orders=1),
            )

    def test_trip_count_mismatch(self):
        with pytest.raises(ValidationError, match="total_trips"):
            FleetOptimizationResult(trucks=[truck_with_trip()], summary=summary(total_trips=2))


class TestPackingPreviewResult:
    """Tests for PackingPreviewResult."""

    def test_success_when_nothing_unpacked(self):
        assert PackingPreviewResult(truck_id="T1").success is True

    def test_utilization_capped(self):
        with pytest.raises(ValidationError):
            PackingPreviewResult(truck_id="T1", weight_utilization=101)
