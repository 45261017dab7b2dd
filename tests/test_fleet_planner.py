"""
Tests for fleet assignment.

This module tests:
- Capacity invariants on every trip
- Multi-trip strategy: zone demand, extra trips, unassigned orders
- Zone-cluster strategy: zone separation, helper budget, single trip
- Determinism
"""

import pytest

from loadplanner.distribution import (
    FleetAssignmentPlanner,
    REASON_NO_CAPACITY,
    REASON_NO_HELPERS,
)
from loadplanner.models import AssignmentStrategy, DeliveryZone, HelperRequirement, PlanningConfig
from tests.fixtures import cube_order, make_item, make_order, make_truck


def slab_order(order_id, zipcode="018956", weight=10.0):
    """Order holding one 100 x 100 x 60 cm item (60% of a 1 m³ truck)."""
    return make_order(order_id, items=[make_item(f"{order_id}-L1", 100, 100, 60, weight)], zipcode=zipcode)


def plan_shape(plan):
    """(truck, trip, order ids) for every non-empty trip."""
    return [
        (assignment.truck.id, trip.trip_id, [o.id for o in trip.loaded_orders])
        for assignment in plan.assignments
        for trip in assignment.active_trips
    ]


class TestCapacityInvariant:
    """Loaded weight and volume never exceed a trip's capacity."""

    @pytest.mark.parametrize("strategy", list(AssignmentStrategy))
    def test_trips_within_capacity(self, strategy):
        config = PlanningConfig(assignment_strategy=strategy)
        zipcodes = ["018956", "600000", "460000", "730000", "099000"]
        orders = [
            cube_order(f"O{i}", 40 + (i * 7) % 50, weight=5 + (i * 13) % 90, zipcode=zipcodes[i % 5])
            for i in range(40)
        ]
        trucks = [
            make_truck("T1", 150, 200, 150, max_weight=500),
            make_truck("T2", 100, 150, 100, max_weight=300),
        ]

        plan = FleetAssignmentPlanner(config).plan(orders, trucks)

        for assignment in plan.assignments:
            for trip in assignment.trips:
                assert sum(o.total_weight for o in trip.loaded_orders) <= trip.max_weight
                assert sum(o.total_volume for o in trip.loaded_orders) <= trip.max_volume
        assert plan.assigned_count + len(plan.unassigned) == len(orders)


class TestMultiTripStrategy:
    """Tests for the default demand-proportional strategy."""

    def test_all_orders_assigned(self, config, large_truck, small_truck, mixed_zone_orders):
        plan = FleetAssignmentPlanner(config).plan(mixed_zone_orders, [large_truck, small_truck])

        assert plan.is_feasible()
        assert plan.assigned_count == 3
        assert plan.total_orders == 3

    def test_extra_trips_opened(self, config, small_truck):
        """Test a truck that can hold one order at a time runs three trips."""
        orders = [slab_order("A"), slab_order("B"), slab_order("C")]

        plan = FleetAssignmentPlanner(config).plan(orders, [small_truck])

        assert plan.is_feasible()
        assert plan.total_trips == 3
        assert [trip.trip_id for trip in plan.assignments[0].trips] == [1, 2, 3]
        assert all(len(trip.loaded_orders) == 1 for trip in plan.assignments[0].trips)

    def test_no_empty_trips_for_impossible_order(self, config, small_truck):
        """Test an order no truck can hold leaves no empty trip behind."""
        orders = [slab_order("A"), cube_order("HUGE", 150)]

        plan = FleetAssignmentPlanner(config).plan(orders, [small_truck])

        assert len(plan.assignments[0].trips) == 1
        assert [entry.order.id for entry in plan.unassigned] == ["HUGE"]
        assert plan.unassigned[0].reason == REASON_NO_CAPACITY

    def test_overweight_order_unassigned(self, config):
        truck = make_truck("T1", max_weight=100)
        orders = [make_order("OK"), make_order("HEAVY", items=[make_item("H-L1", weight=150)])]

        plan = FleetAssignmentPlanner(config).plan(orders, [truck])

        assert not plan.is_feasible()
        assert [entry.order.id for entry in plan.unassigned] == ["HEAVY"]

    def test_orders_get_zones_from_zipcode(self, config, large_truck):
        plan = FleetAssignmentPlanner(config).plan([make_order("W", zipcode="600000")], [large_truck])

        trip = plan.assignments[0].trips[0]
        assert trip.zones == [DeliveryZone.WEST]
        assert trip.loaded_orders[0].delivery_zone == DeliveryZone.WEST

    def test_zone_demands(self, config):
        planner = FleetAssignmentPlanner(config)
        zone_orders = {
            DeliveryZone.WEST: [cube_order("W1", 100, weight=20), cube_order("W2", 50, weight=5)],
            DeliveryZone.EAST: [cube_order("E1", 10, weight=1)],
        }

        demands = planner.compute_zone_demands(zone_orders)

        assert demands[DeliveryZone.WEST].volume == pytest.approx(1_125_000)
        assert demands[DeliveryZone.WEST].weight == pytest.approx(25)
        assert demands[DeliveryZone.WEST].count == 2
        assert demands[DeliveryZone.EAST].count == 1

    def test_largest_truck_serves_largest_zone(self, config):
        """Test the biggest truck goes to the zone with the most demand."""
        big = make_truck("BIG", 200, 200, 200)
        small = make_truck("SMALL", 100, 100, 100)
        orders = [
            cube_order("W1", 90, zipcode="600000"),
            cube_order("W2", 90, zipcode="600000"),
            cube_order("E1", 20, zipcode="460000"),
        ]

        plan = FleetAssignmentPlanner(config).plan(orders, [small, big])

        big_trip = next(a for a in plan.assignments if a.truck.id == "BIG").trips[0]
        assert {o.id for o in big_trip.loaded_orders} >= {"W1", "W2"}
        assert plan.is_feasible()

    def test_assignments_keep_input_order(self, config, large_truck, small_truck):
        plan = FleetAssignmentPlanner(config).plan([make_order("O1")], [small_truck, large_truck])

        assert [a.truck.id for a in plan.assignments] == ["T-SMALL", "T-LARGE"]

    def test_deterministic(self, config, large_truck, small_truck):
        orders = [cube_order(f"O{i}", 30 + i * 5, zipcode=["600000", "460000"][i % 2]) for i in range(12)]
        planner = FleetAssignmentPlanner(config)

        first = planner.plan(orders, [large_truck, small_truck])
        second = planner.plan(orders, [large_truck, small_truck])

        assert plan_shape(first) == plan_shape(second)


class TestZoneClusterStrategy:
    """Tests for the single-trip zone-cluster strategy."""

    def test_one_zone_per_truck(self, zone_cluster_config):
        orders = [
            make_order("W1", zipcode="600000"),
            make_order("E1", zipcode="460000"),
            make_order("W2", zipcode="650000"),
        ]
        trucks = [make_truck("T1"), make_truck("T2")]

        plan = FleetAssignmentPlanner(zone_cluster_config).plan(orders, trucks)

        shape = {truck_id: set(order_ids) for truck_id, _, order_ids in plan_shape(plan)}
        assert shape == {"T1": {"W1", "W2"}, "T2": {"E1"}}
        assert plan.strategy == AssignmentStrategy.ZONE_CLUSTER

    def test_single_trip_only(self, zone_cluster_config, small_truck):
        orders = [slab_order("A"), slab_order("B"), slab_order("C")]

        plan = FleetAssignmentPlanner(zone_cluster_config).plan(orders, [small_truck])

        assert plan.total_trips == 1
        assert len(plan.unassigned) == 2
        assert all(entry.reason == REASON_NO_CAPACITY for entry in plan.unassigned)

    def test_helper_budget(self):
        """Test an order needing more helpers than remain is skipped."""
        config = PlanningConfig(assignment_strategy=AssignmentStrategy.ZONE_CLUSTER, available_helpers=2)
        orders = [
            make_order("TWO", items=[make_item("T-L1", weight=30)], helpers=HelperRequirement.TWO),
            make_order("ONE", items=[make_item("O-L1", weight=20)], helpers=HelperRequirement.ONE),
            make_order("NONE", items=[make_item("N-L1", weight=10)]),
        ]

        plan = FleetAssignmentPlanner(config).plan(orders, [make_truck("T1")])

        assigned = {o.id for trip in plan.assignments[0].active_trips for o in trip.loaded_orders}
        assert assigned == {"TWO", "NONE"}
        assert [(e.order.id, e.reason) for e in plan.unassigned] == [("ONE", REASON_NO_HELPERS)]

    def test_unlimited_helpers_by_default(self, zone_cluster_config):
        orders = [make_order(f"O{i}", helpers=HelperRequirement.TWO) for i in range(5)]

        plan = FleetAssignmentPlanner(zone_cluster_config).plan(orders, [make_truck("T1")])

        assert plan.is_feasible()

    def test_new_truck_when_zone_truck_full(self, zone_cluster_config):
        trucks = [make_truck("T1", 100, 100, 100), make_truck("T2", 100, 100, 100)]
        orders = [slab_order("A"), slab_order("B")]

        plan = FleetAssignmentPlanner(zone_cluster_config).plan(orders, trucks)

        assert plan_shape(plan) == [("T1", 1, ["A"]), ("T2", 1, ["B"])]
