"""Gemeinsamer Renderer für Terminal-Stundenplan-Anzeige.

Wird von `timetable weekly` / `schedule show` (Rich) und `browse` (Textual)
verwendet.
"""

from typing import TYPE_CHECKING

from export.helpers import EMPTY_CELL, build_time_grid_rows, format_entries

if TYPE_CHECKING:
    from config.schema import TimeGridConfig
    from export.grid import WeeklyGrid


def render_grid_rows(
    grid: "WeeklyGrid",
    time_grid: "TimeGridConfig",
    mode: str = "class",
) -> list[list[str]]:
    """Gibt Tabellenzeilen für ein Wochenraster zurück.

    Jede Zeile: [Stunde, Zeit, Mo, Di, Mi, Do, Fr]
    Pausen werden als separate Zeilen eingefügt.
    """
    from config.schema import PauseSlot

    rows: list[list[str]] = []
    for row in build_time_grid_rows(time_grid):
        if isinstance(row, PauseSlot):
            rows.append(["—", row.label] + ["─" * 8] * len(grid.day_keys))
            continue
        cells = [row.name, f"{row.start_time}–{row.end_time}"]
        for day_key in grid.day_keys:
            entries = grid.cells.get(day_key, {}).get(row.order, [])
            cells.append(format_entries(entries, mode) or EMPTY_CELL)
        rows.append(cells)
    return rows


def grid_table(grid: "WeeklyGrid", time_grid: "TimeGridConfig",
               title: str, mode: str = "class"):
    """Baut eine rich.Table für das Wochenraster."""
    from rich import box
    from rich.table import Table

    table = Table(title=title, box=box.ROUNDED, show_lines=True)
    table.add_column("Std.", style="bold")
    table.add_column("Zeit", style="dim")
    for name in time_grid.day_names:
        table.add_column(name, min_width=14)
    for row in render_grid_rows(grid, time_grid, mode):
        table.add_row(*row)
    return table
