"""Pytest configuration and shared fixtures."""

import pytest

from loadplanner.models import PlanningConfig, AssignmentStrategy
from loadplanner.optimization import LoadRouteOptimizer
from tests.fixtures import cube_order, make_item, make_order, make_truck


@pytest.fixture
def config():
    """Default planning configuration (Tuas depot tables)."""
    return PlanningConfig()


@pytest.fixture
def zone_cluster_config():
    """Configuration selecting the single-trip zone-cluster strategy."""
    return PlanningConfig(assignment_strategy=AssignmentStrategy.ZONE_CLUSTER)


@pytest.fixture
def large_truck():
    """200 x 400 x 200 cm truck with 1000 kg payload."""
    return make_truck("T-LARGE")


@pytest.fixture
def small_truck():
    """100 x 100 x 100 cm truck with 1000 kg payload."""
    return make_truck("T-SMALL", width=100, depth=100, height=100)


@pytest.fixture
def mixed_zone_orders():
    """One small order in each of West, Central and East."""
    return [
        make_order("W1", zipcode="600000"),
        make_order("C1", zipcode="018956"),
        make_order("E1", zipcode="460000"),
    ]


@pytest.fixture
def heavy_order():
    """Central order weighing 60 kg (two-person delivery)."""
    return make_order("HEAVY", items=[make_item("HEAVY-L1", weight=60.0)])


@pytest.fixture
def fleet_result(config, large_truck, mixed_zone_orders):
    """Optimization result with three assigned orders and one oversized order."""
    orders = mixed_zone_orders + [cube_order("HUGE", 500)]
    return LoadRouteOptimizer(config).auto_optimize(orders, [large_truck])
