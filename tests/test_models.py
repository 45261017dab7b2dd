"""
Tests for planner data models.

This module tests:
- Item defaults, validation and unit expansion
- Order derived totals, sector and two-person rule
- Truck dimension fit
- Trip and TruckAssignment accumulators
- PlanningConfig validation and loading
"""

import json

import pytest
from pydantic import ValidationError

from loadplanner.models import (
    AssignmentStrategy,
    DeliveryZone,
    HelperRequirement,
    Item,
    PlanningConfig,
    Trip,
    Truck,
    TruckAssignment,
    ZoneLink,
    DEFAULT_DIMENSION_CM,
    DEFAULT_WEIGHT_KG,
)
from tests.fixtures import cube_order, make_item, make_order, make_truck


class TestItem:
    """Tests for Item model."""

    def test_missing_measurements_use_defaults(self):
        """Test zero or missing dimensions and weight fall back to 30 cm / 5 kg."""
        item = Item(id="I1", length=0, width=None, height=20, weight=0)

        assert item.length == DEFAULT_DIMENSION_CM
        assert item.width == DEFAULT_DIMENSION_CM
        assert item.height == 20
        assert item.weight == DEFAULT_WEIGHT_KG

    def test_defaults_when_omitted(self):
        item = Item(id="I1")
        assert item.volume == 30 * 30 * 30
        assert item.weight == 5.0

    def test_negative_dimension_rejected(self):
        with pytest.raises(ValidationError):
            Item(id="I1", length=-5)

    def test_zero_quantity_rejected(self):
        with pytest.raises(ValidationError):
            Item(id="I1", quantity=0)

    def test_expand_units(self):
        """Test a line with quantity 3 expands into three unit items."""
        item = make_item("L1", quantity=3)
        units = item.expand_units()

        assert len(units) == 3
        assert all(unit.quantity == 1 for unit in units)
        assert [unit.unit_index for unit in units] == [0, 1, 2]
        assert len({unit.unit_key for unit in units}) == 3

    def test_items_are_immutable(self):
        item = make_item("L1")
        with pytest.raises(ValidationError):
            item.weight = 99


class TestOrder:
    """Tests for Order model."""

    def test_totals(self):
        order = make_order("O1", items=[
            make_item("L1", 10, 10, 10, weight=2, quantity=3),
            make_item("L2", 20, 10, 5, weight=1),
        ])

        assert order.total_weight == pytest.approx(7.0)
        assert order.total_volume == pytest.approx(3000 + 1000)

    def test_sector_pads_zipcode(self):
        """Test a five-digit zipcode is zero-padded before taking the sector."""
        order = make_order("O1", zipcode="18956")
        assert order.padded_zipcode == "018956"
        assert order.sector == "01"

    def test_order_number_defaults_to_id(self):
        assert make_order("O-42").order_number == "O-42"

    def test_dimensions_desc_uses_per_axis_maximum(self):
        order = make_order("O1", items=[
            make_item("L1", 120, 10, 40),
            make_item("L2", 30, 80, 20),
        ])
        assert order.dimensions_desc == (120, 80, 40)

    def test_empty_order_dimensions(self):
        order = make_order("O1", items=[])
        assert order.dimensions_desc == (0.0, 0.0, 0.0)
        assert order.total_weight == 0

    def test_needs_two_people(self):
        """Test heavy orders and two-helper orders need two people."""
        heavy = make_order("H", items=[make_item("H-L1", weight=60)])
        borderline = make_order("B", items=[make_item("B-L1", weight=50)])
        two_helpers = make_order("T", helpers=HelperRequirement.TWO)

        assert heavy.needs_two_people(50) is True
        assert borderline.needs_two_people(50) is False
        assert two_helpers.needs_two_people(50) is True

    def test_helper_count(self):
        assert make_order("O1", helpers=HelperRequirement.ONE).helper_count == 1
        assert make_order("O2").helper_count == 0

    def test_expand_units_tags_order_id(self):
        order = make_order("O1", items=[make_item("L1", quantity=2)])
        units = order.expand_units()

        assert len(units) == 2
        assert all(unit.order_id == "O1" for unit in units)

    def test_unknown_zone_rejected(self):
        with pytest.raises(ValidationError):
            make_order("O1", zone="Downtown")


class TestTruck:
    """Tests for Truck model."""

    def test_volume(self):
        truck = make_truck("T1", width=100, depth=200, height=50)
        assert truck.volume == 1_000_000

    def test_fits_dimensions_sorted(self):
        """Test the sorted dimension proxy allows turning long items."""
        truck = make_truck("T1", width=100, depth=200, height=50)

        long_item = make_order("O1", items=[make_item("L1", 150, 40, 40)])
        wide_item = make_order("O2", items=[make_item("L2", 120, 120, 10)])

        assert truck.fits_dimensions(long_item) is True
        assert truck.fits_dimensions(wide_item) is False

    def test_can_hold(self):
        truck = make_truck("T1", width=100, depth=100, height=100, max_weight=50)

        assert truck.can_hold(cube_order("O1", 50, weight=40)) is True
        assert truck.can_hold(cube_order("O2", 50, weight=60)) is False

    def test_non_positive_capacity_rejected(self):
        with pytest.raises(ValidationError):
            make_truck("T1", max_weight=0)

    def test_display_name_falls_back_to_id(self):
        truck = Truck(id="T1", width=100, depth=100, height=100, max_weight=100)
        assert truck.display_name == "T1"


class TestTrip:
    """Tests for Trip accumulator."""

    def test_load_updates_totals_and_zones(self, large_truck):
        trip = Trip(trip_id=1, truck=large_truck)
        trip.load(make_order("O1", zone=DeliveryZone.WEST))
        trip.load(make_order("O2", zone=DeliveryZone.EAST))
        trip.load(make_order("O3", zone=DeliveryZone.WEST))

        assert len(trip.loaded_orders) == 3
        assert trip.current_weight == pytest.approx(30.0)
        assert trip.current_volume == pytest.approx(3 * 125_000)
        assert trip.zones == [DeliveryZone.WEST, DeliveryZone.EAST]

    def test_can_fit_weight_limit(self):
        truck = make_truck("T1", max_weight=25)
        trip = Trip(trip_id=1, truck=truck)
        trip.load(make_order("O1"))
        trip.load(make_order("O2"))

        assert trip.can_fit(make_order("O3")) is False
        assert trip.remaining_weight == pytest.approx(5.0)

    def test_can_fit_volume_limit(self, small_truck):
        trip = Trip(trip_id=1, truck=small_truck)
        trip.load(cube_order("O1", 90))

        assert trip.can_fit(cube_order("O2", 70)) is False

    def test_load_rejects_overflow(self, small_truck):
        """Test loading past capacity raises instead of breaking the invariant."""
        trip = Trip(trip_id=1, truck=small_truck)
        trip.load(cube_order("O1", 90))

        with pytest.raises(ValueError, match="does not fit"):
            trip.load(cube_order("O2", 90))

        assert len(trip.loaded_orders) == 1

    def test_utilization(self, small_truck):
        trip = Trip(trip_id=1, truck=small_truck)
        trip.load(cube_order("O1", 50, weight=100))

        assert trip.volume_utilization == pytest.approx(12.5)
        assert trip.weight_utilization == pytest.approx(10.0)


class TestTruckAssignment:
    """Tests for TruckAssignment."""

    def test_starts_with_one_empty_trip(self, large_truck):
        assignment = TruckAssignment(truck=large_truck)

        assert len(assignment.trips) == 1
        assert assignment.current_trip.trip_id == 1
        assert assignment.active_trips == []

    def test_open_trip_numbers_sequentially(self, large_truck):
        assignment = TruckAssignment(truck=large_truck)
        assignment.current_trip.load(make_order("O1"))
        second = assignment.open_trip()
        second.load(make_order("O2"))

        assert second.trip_id == 2
        assert assignment.current_trip is second
        assert assignment.total_orders == 2
        assert len(assignment.active_trips) == 2


class TestPlanningConfig:
    """Tests for PlanningConfig."""

    def test_defaults(self, config):
        assert config.depot_minutes[DeliveryZone.WEST] == 15
        assert config.depot_minutes[DeliveryZone.EAST] == 45
        assert config.same_zone_minutes == 5
        assert config.unknown_travel_minutes == 30
        assert config.reload_minutes == 30
        assert config.heavy_order_threshold_kg == 50
        assert config.available_helpers is None
        assert config.assignment_strategy == AssignmentStrategy.MULTI_TRIP
        assert len(config.zone_links) == 10

    def test_config_is_frozen(self, config):
        with pytest.raises(ValidationError):
            config.reload_minutes = 10

    def test_zone_link_needs_two_zones(self):
        with pytest.raises(ValidationError):
            ZoneLink(zone_a=DeliveryZone.WEST, zone_b=DeliveryZone.WEST, minutes=5)

    def test_duplicate_links_rejected(self):
        """Test the same zone pair cannot be linked twice, in either direction."""
        with pytest.raises(ValidationError, match="Duplicate zone link"):
            PlanningConfig(zone_links=[
                ZoneLink(zone_a=DeliveryZone.WEST, zone_b=DeliveryZone.EAST, minutes=40),
                ZoneLink(zone_a=DeliveryZone.EAST, zone_b=DeliveryZone.WEST, minutes=35),
            ])

    def test_negative_depot_minutes_rejected(self):
        with pytest.raises(ValidationError):
            PlanningConfig(depot_minutes={DeliveryZone.WEST: -1})

    def test_bad_sector_rejected(self):
        with pytest.raises(ValidationError):
            PlanningConfig(sector_zones={"1": DeliveryZone.WEST})

    def test_from_json_file(self, tmp_path):
        """Test loading an alternate configuration; missing keys keep defaults."""
        path = tmp_path / "planning.json"
        path.write_text(json.dumps({
            "reload_minutes": 45,
            "available_helpers": 4,
            "assignment_strategy": "zone_cluster",
            "depot_minutes": {"West": 10, "Central": 20},
        }))

        config = PlanningConfig.from_json_file(path)

        assert config.reload_minutes == 45
        assert config.available_helpers == 4
        assert config.assignment_strategy == AssignmentStrategy.ZONE_CLUSTER
        assert config.depot_minutes == {DeliveryZone.WEST: 10, DeliveryZone.CENTRAL: 20}
        assert config.service_minutes == 10
