"""Export-Modul: Wochenraster, Terminal-/TUI-Ausgabe und Excel (openpyxl)."""

from export.grid import WeeklyGrid, build_weekly_grid, grid_from_weekly_payload
from export.excel_export import ExcelExporter

__all__ = ["WeeklyGrid", "build_weekly_grid", "grid_from_weekly_payload", "ExcelExporter"]
