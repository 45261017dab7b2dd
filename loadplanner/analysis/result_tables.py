"""Tabular views of fleet optimization results.

Each function flattens one part of a FleetOptimizationResult into a pandas
DataFrame with fixed column names. Empty results give empty frames with the
same columns, so callers can concatenate or export without special cases.
"""

from typing import List
import pandas as pd

from ..optimization.result_schema import FleetOptimizationResult


TRIP_SCHEDULE_COLUMNS = [
    'Truck ID', 'Truck Name', 'Trip', 'Stops', 'Zones', 'Volume (m³)', 'Weight (kg)',
    'Volume %', 'Weight %', 'Trip Minutes', 'Balanced', 'Unplaced Units',
]

ROUTE_STOP_COLUMNS = [
    'Truck ID', 'Trip', 'Sequence', 'Order ID', 'Order Number', 'Zone', 'Zipcode', 'Sector',
    'Latitude', 'Longitude', 'Weight (kg)', 'Volume (m³)', 'Two People', 'Service Minutes',
]

LOAD_PLAN_COLUMNS = [
    'Truck ID', 'Trip', 'Order ID', 'Order Item ID', 'Unit', 'Name', 'Section',
    'X', 'Y', 'Z', 'Length', 'Width', 'Height', 'Weight (kg)', 'Rotation',
]

TRUCK_COMPLETION_COLUMNS = ['Truck ID', 'Truck Name', 'Trips', 'Total Minutes', 'Total Hours', 'Bottleneck']

ZONE_SUMMARY_COLUMNS = ['Zone', 'Orders', 'Volume (m³)', 'Weight (kg)']

UNASSIGNED_COLUMNS = ['Order ID', 'Order Number', 'Zone', 'Weight (kg)', 'Volume (m³)', 'Reason']


def _frame(rows: List[dict], columns: List[str]) -> pd.DataFrame:
    return pd.DataFrame(rows, columns=columns)


def trip_schedule_table(result: FleetOptimizationResult) -> pd.DataFrame:
    """One row per trip."""
    rows = []
    for truck in result.trucks:
        for trip in truck.trips:
            rows.append({
                'Truck ID': truck.truck_id,
                'Truck Name': truck.truck_name,
                'Trip': trip.trip_id,
                'Stops': len(trip.route),
                'Zones': ' > '.join(zone.value for zone in trip.zones),
                'Volume (m³)': trip.volume_used_m3,
                'Weight (kg)': trip.weight_used_kg,
                'Volume %': trip.volume_utilization,
                'Weight %': trip.weight_utilization,
                'Trip Minutes': trip.elapsed_minutes,
                'Balanced': trip.is_balanced,
                'Unplaced Units': len(trip.unplaced_items),
            })
    return _frame(rows, TRIP_SCHEDULE_COLUMNS)


def route_stops_table(result: FleetOptimizationResult) -> pd.DataFrame:
    """One row per stop, in delivery order within each trip."""
    rows = []
    for truck in result.trucks:
        for trip in truck.trips:
            for stop in trip.route:
                rows.append({
                    'Truck ID': truck.truck_id,
                    'Trip': trip.trip_id,
                    'Sequence': stop.sequence,
                    'Order ID': stop.order_id,
                    'Order Number': stop.order_number,
                    'Zone': stop.zone.value,
                    'Zipcode': stop.zipcode,
                    'Sector': stop.sector,
                    'Latitude': stop.latitude,
                    'Longitude': stop.longitude,
                    'Weight (kg)': stop.weight_kg,
                    'Volume (m³)': stop.volume_m3,
                    'Two People': stop.needs_two_people,
                    'Service Minutes': stop.service_minutes,
                })
    return _frame(rows, ROUTE_STOP_COLUMNS)


def load_plan_table(result: FleetOptimizationResult) -> pd.DataFrame:
    """One row per placed unit."""
    rows = []
    for truck in result.trucks:
        for trip in truck.trips:
            for item in trip.load_plan:
                rows.append({
                    'Truck ID': truck.truck_id,
                    'Trip': trip.trip_id,
                    'Order ID': item.order_id,
                    'Order Item ID': item.order_item_id,
                    'Unit': item.unit_index + 1,
                    'Name': item.name,
                    'Section': item.placement.value if item.placement else '',
                    'X': item.x,
                    'Y': item.y,
                    'Z': item.z,
                    'Length': item.rotated_length,
                    'Width': item.rotated_width,
                    'Height': item.height,
                    'Weight (kg)': item.weight,
                    'Rotation': item.rotation,
                })
    return _frame(rows, LOAD_PLAN_COLUMNS)


def truck_completion_table(result: FleetOptimizationResult) -> pd.DataFrame:
    """Completion time per truck, slowest first."""
    deployment = result.parallel_deployment
    rows = [
        {
            'Truck ID': truck_id,
            'Truck Name': completion.truck_name,
            'Trips': completion.trips,
            'Total Minutes': completion.total_minutes,
            'Total Hours': completion.total_hours,
            'Bottleneck': truck_id == deployment.bottleneck_truck_id,
        }
        for truck_id, completion in deployment.truck_completion_times.items()
    ]
    df = _frame(rows, TRUCK_COMPLETION_COLUMNS)
    if len(df) > 0:
        df = df.sort_values('Total Minutes', ascending=False, kind='stable').reset_index(drop=True)
    return df


def zone_summary_table(result: FleetOptimizationResult) -> pd.DataFrame:
    """Assigned demand per zone."""
    rows = [
        {
            'Zone': zone.value,
            'Orders': entry.orders,
            'Volume (m³)': entry.volume_m3,
            'Weight (kg)': entry.weight_kg,
        }
        for zone, entry in result.zone_summary.items()
    ]
    return _frame(rows, ZONE_SUMMARY_COLUMNS)


def unassigned_orders_table(result: FleetOptimizationResult) -> pd.DataFrame:
    rows = [
        {
            'Order ID': order.order_id,
            'Order Number': order.order_number,
            'Zone': order.zone.value if order.zone else '',
            'Weight (kg)': order.weight_kg,
            'Volume (m³)': order.volume_m3,
            'Reason': order.reason,
        }
        for order in result.unassigned_orders
    ]
    return _frame(rows, UNASSIGNED_COLUMNS)
