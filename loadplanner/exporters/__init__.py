"""Export functionality for planning results."""

from .excel_export import export_fleet_plan

__all__ = [
    'export_fleet_plan',
]
