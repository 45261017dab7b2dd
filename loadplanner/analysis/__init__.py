"""Analysis tables for optimization results."""

from .result_tables import (
    trip_schedule_table,
    route_stops_table,
    load_plan_table,
    truck_completion_table,
    zone_summary_table,
    unassigned_orders_table,
)

__all__ = [
    'trip_schedule_table',
    'route_stops_table',
    'load_plan_table',
    'truck_completion_table',
    'zone_summary_table',
    'unassigned_orders_table',
]
