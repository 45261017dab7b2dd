"""
Excel export for fleet optimization results.

Creates a formatted workbook for dispatch and warehouse teams:
1. Trip Schedule - one row per trip with utilization and timing
2. Route Stops - delivery sequence of every trip
3. Load Plan - unit positions for loading crews
4. Zone Summary - assigned demand per zone
5. Unassigned Orders - orders left out, with reasons
"""

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Border, Side, Alignment
from openpyxl.utils import get_column_letter
import pandas as pd
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import logging

from ..analysis.result_tables import (
    load_plan_table,
    route_stops_table,
    trip_schedule_table,
    unassigned_orders_table,
    zone_summary_table,
)
from ..optimization.result_schema import FleetOptimizationResult

logger = logging.getLogger(__name__)

# Color constants
HEADER_COLOR = "1E88E5"
ALT_ROW_COLOR = "F5F5F5"
HIGH_UTIL_COLOR = "C8E6C9"  # Green
LOW_UTIL_COLOR = "FFF9C4"  # Yellow
WARNING_FILL_COLOR = "FFCDD2"  # Red

SECTION_COLORS = {
    'back': "D1C4E9",
    'middle': "BBDEFB",
    'front': "C8E6C9",
}

SHEET_NAMES = [
    "Trip Schedule",
    "Route Stops",
    "Load Plan",
    "Zone Summary",
    "Unassigned Orders",
]

THIN_BORDER = Border(
    left=Side(style='thin'),
    right=Side(style='thin'),
    top=Side(style='thin'),
    bottom=Side(style='thin')
)


def create_header_style() -> Dict[str, Any]:
    """Create header row style (blue background, white text, bold)."""
    return {
        'font': Font(name='Calibri', size=11, bold=True, color='FFFFFF'),
        'fill': PatternFill(start_color=HEADER_COLOR, end_color=HEADER_COLOR, fill_type='solid'),
        'alignment': Alignment(horizontal='center', vertical='center', wrap_text=True),
        'border': THIN_BORDER,
    }


def _fill(color: str) -> PatternFill:
    return PatternFill(start_color=color, end_color=color, fill_type='solid')


def write_headers(worksheet, headers: List[str], row: int = 1):
    """Write a styled header row."""
    style = create_header_style()
    for col_idx, header in enumerate(headers, 1):
        cell = worksheet.cell(row=row, column=col_idx)
        cell.value = header
        cell.font = style['font']
        cell.fill = style['fill']
        cell.alignment = style['alignment']
        cell.border = style['border']


def write_frame(worksheet, df: pd.DataFrame, number_formats: Optional[Dict[str, str]] = None) -> int:
    """
    Write a DataFrame below a styled header row.

    Args:
        worksheet: Target worksheet
        df: Data to write
        number_formats: Excel number format per column name

    Returns:
        Index of the last written row (1 when there is no data)
    """
    headers = list(df.columns)
    write_headers(worksheet, headers)
    formats = number_formats or {}

    for row_idx, row in enumerate(df.itertuples(index=False), 2):
        for col_idx, value in enumerate(row, 1):
            cell = worksheet.cell(row=row_idx, column=col_idx)
            cell.value = value.item() if hasattr(value, 'item') else value
            cell.border = THIN_BORDER
            fmt = formats.get(headers[col_idx - 1])
            if fmt:
                cell.number_format = fmt

    return len(df) + 1


def apply_alternating_rows(worksheet, start_row: int, end_row: int, start_col: int = 1, end_col: int = 10):
    """Apply alternating row colors (white / light gray)."""
    for row_idx in range(start_row, end_row + 1):
        if (row_idx - start_row) % 2 == 1:
            for col_idx in range(start_col, end_col + 1):
                worksheet.cell(row=row_idx, column=col_idx).fill = _fill(ALT_ROW_COLOR)


def add_filters(worksheet, end_column: int, header_row: int = 1):
    """Add Excel filters to header row."""
    end_col_letter = get_column_letter(end_column)
    worksheet.auto_filter.ref = f"A{header_row}:{end_col_letter}{header_row}"


def add_total_row(worksheet, row: int, columns_to_sum: List[int], label_col: int = 1, label: str = "TOTAL"):
    """Add totals row with SUM formulas over rows 2..row-1."""
    label_cell = worksheet.cell(row=row, column=label_col)
    label_cell.value = label
    label_cell.font = Font(name='Calibri', size=10, bold=True)
    label_cell.fill = _fill(ALT_ROW_COLOR)

    for col in columns_to_sum:
        cell = worksheet.cell(row=row, column=col)
        col_letter = get_column_letter(col)
        cell.value = f"=SUM({col_letter}2:{col_letter}{row - 1})"
        cell.font = Font(name='Calibri', size=10, bold=True)
        cell.fill = _fill(ALT_ROW_COLOR)


def auto_fit_columns(worksheet, max_width: int = 50):
    """Auto-fit column widths based on content."""
    for column in worksheet.columns:
        column_letter = get_column_letter(column[0].column)
        max_length = max((len(str(cell.value)) for cell in column if cell.value is not None), default=0)
        worksheet.column_dimensions[column_letter].width = min(max_length + 2, max_width)


def _finish_sheet(worksheet, column_count: int):
    add_filters(worksheet, column_count)
    worksheet.freeze_panes = 'A2'
    auto_fit_columns(worksheet)


def export_fleet_plan(result: FleetOptimizationResult, output_path: Union[str, Path]) -> str:
    """
    Export a fleet optimization result to a formatted Excel file.

    Args:
        result: Validated fleet optimization result
        output_path: Path to save the Excel file

    Returns:
        Path to created file
    """
    wb = Workbook()
    wb.remove(wb.active)

    # Sheet 1: Trip Schedule, colored by volume utilization
    ws1 = wb.create_sheet(SHEET_NAMES[0])
    df_trips = trip_schedule_table(result)
    last_row = write_frame(ws1, df_trips, {
        'Volume (m³)': '0.000',
        'Weight (kg)': '#,##0.00',
        'Volume %': '0.0',
        'Weight %': '0.0',
        'Trip Minutes': '#,##0',
    })
    volume_col = list(df_trips.columns).index('Volume %') + 1
    for row_idx in range(2, last_row + 1):
        utilization = ws1.cell(row=row_idx, column=volume_col).value or 0
        if utilization >= 80:
            row_color = HIGH_UTIL_COLOR
        elif utilization < 50:
            row_color = LOW_UTIL_COLOR
        else:
            row_color = None
        unplaced = ws1.cell(row=row_idx, column=len(df_trips.columns)).value or 0
        if unplaced > 0:
            row_color = WARNING_FILL_COLOR
        if row_color:
            for col_idx in range(1, len(df_trips.columns) + 1):
                ws1.cell(row=row_idx, column=col_idx).fill = _fill(row_color)
    _finish_sheet(ws1, len(df_trips.columns))

    # Sheet 2: Route Stops
    ws2 = wb.create_sheet(SHEET_NAMES[1])
    df_stops = route_stops_table(result)
    last_row = write_frame(ws2, df_stops, {
        'Latitude': '0.0000',
        'Longitude': '0.0000',
        'Weight (kg)': '#,##0.00',
        'Volume (m³)': '0.000',
    })
    apply_alternating_rows(ws2, 2, last_row, 1, len(df_stops.columns))
    _finish_sheet(ws2, len(df_stops.columns))

    # Sheet 3: Load Plan, colored by section
    ws3 = wb.create_sheet(SHEET_NAMES[2])
    df_load = load_plan_table(result)
    last_row = write_frame(ws3, df_load, {
        'X': '0.0', 'Y': '0.0', 'Z': '0.0',
        'Weight (kg)': '#,##0.00',
    })
    section_col = list(df_load.columns).index('Section') + 1
    for row_idx in range(2, last_row + 1):
        color = SECTION_COLORS.get(ws3.cell(row=row_idx, column=section_col).value)
        if color:
            ws3.cell(row=row_idx, column=section_col).fill = _fill(color)
    _finish_sheet(ws3, len(df_load.columns))

    # Sheet 4: Zone Summary with totals
    ws4 = wb.create_sheet(SHEET_NAMES[3])
    df_zones = zone_summary_table(result)
    last_row = write_frame(ws4, df_zones, {
        'Volume (m³)': '0.00',
        'Weight (kg)': '#,##0.00',
    })
    if len(df_zones) > 0:
        add_total_row(ws4, last_row + 1, columns_to_sum=[2, 3, 4])
    _finish_sheet(ws4, len(df_zones.columns))

    # Sheet 5: Unassigned Orders
    ws5 = wb.create_sheet(SHEET_NAMES[4])
    df_unassigned = unassigned_orders_table(result)
    if len(df_unassigned) > 0:
        last_row = write_frame(ws5, df_unassigned, {
            'Weight (kg)': '#,##0.00',
            'Volume (m³)': '0.000',
        })
        apply_alternating_rows(ws5, 2, last_row, 1, len(df_unassigned.columns))
        _finish_sheet(ws5, len(df_unassigned.columns))
    else:
        ws5.cell(row=1, column=1).value = "All orders assigned"
        ws5.cell(row=1, column=1).font = Font(name='Calibri', size=12, bold=True, color='008000')

    output_path = str(output_path)
    wb.save(output_path)
    logger.info(f"Fleet plan exported to {output_path}")
    return output_path
