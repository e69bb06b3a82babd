"""Excel-Export für Wochenraster (openpyxl).

Aufbau der Datei:
    "Übersicht"   Schule, Datum, Kennzahlen je Raster, Farblegende
    je Raster     Kopfzeile (Std. | Zeit | Mo … Fr), darunter Stunden und Pausen
"""

from pathlib import Path

from config.schema import PauseSlot, TimeGridConfig
from export.grid import WeeklyGrid
from export.helpers import (
    COLORS, build_time_grid_rows, cell_color, format_entries, today_str,
)

_LEGEND = [
    ("lesson", "Unterricht"),
    ("changed", "Geändert (genehmigter Antrag)"),
    ("conflict", "Mehrfach belegt"),
    ("free", "Frei"),
]


class ExcelExporter:
    """Schreibt ein oder mehrere Wochenraster in eine .xlsx-Datei."""

    WIDTHS = {"period": 12, "time": 14, "day": 24}
    HEIGHTS = {"header": 22, "lesson": 50, "pause": 12}

    # Excel: max. 31 Zeichen, keine []:*?/\ im Blattnamen
    _SHEET_FORBIDDEN = '[]:*?/\\'

    def __init__(self, grids: dict[str, WeeklyGrid], time_grid: TimeGridConfig,
                 school_name: str = "", mode: str = "class"):
        self.grids = grids
        self.time_grid = time_grid
        self.school_name = school_name
        self.mode = mode

    def export(self, output_path: Path) -> Path:
        from openpyxl import Workbook

        wb = Workbook()
        self._write_overview(wb.active)
        for title in sorted(self.grids):
            ws = wb.create_sheet(title=self.sheet_title(title))
            self._write_week(ws, self.grids[title])

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(output_path)
        return output_path

    @classmethod
    def sheet_title(cls, title: str) -> str:
        clean = "".join("_" if ch in cls._SHEET_FORBIDDEN else ch for ch in title)
        return clean[:31] or "Raster"

    # ─── Formatierung ─────────────────────────────────────────────────────────

    @staticmethod
    def _style(cell, fill: str = None, bold: bool = False, size: int = 9,
               color: str = "000000", italic: bool = False, wrap: bool = True) -> None:
        from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

        side = Side(border_style="thin", color="BBBBBB")
        cell.border = Border(left=side, right=side, top=side, bottom=side)
        cell.font = Font(bold=bold, italic=italic, size=size, color=color)
        cell.alignment = Alignment(wrap_text=wrap, horizontal="center", vertical="center")
        if fill:
            cell.fill = PatternFill(start_color=fill, end_color=fill, fill_type="solid")

    # ─── Übersicht ────────────────────────────────────────────────────────────

    def _write_overview(self, ws) -> None:
        from openpyxl.styles import Font

        ws.title = "Übersicht"
        ws["A1"] = self.school_name or "Stundenplan"
        ws["A1"].font = Font(bold=True, size=14)
        ws["A2"] = f"Erstellt: {today_str()}"

        for col, text in enumerate(["Raster", "Einträge", "Mehrfach belegt", "Außerhalb"], 1):
            self._style(ws.cell(row=4, column=col, value=text),
                        fill=COLORS["header"], bold=True, color="FFFFFF", wrap=False)

        row = 5
        for title in sorted(self.grids):
            grid = self.grids[title]
            for col, value in enumerate(
                    [title, grid.entry_count, len(grid.conflicts()), len(grid.unplaced)], 1):
                self._style(ws.cell(row=row, column=col, value=value), wrap=False)
            row += 1

        row += 1
        ws.cell(row=row, column=1, value="Legende").font = Font(bold=True)
        for key, label in _LEGEND:
            row += 1
            self._style(ws.cell(row=row, column=1), fill=COLORS[key])
            ws.cell(row=row, column=2, value=label)

        ws.column_dimensions["A"].width = 24
        ws.column_dimensions["B"].width = 30
        for letter in ("C", "D"):
            ws.column_dimensions[letter].width = 16

    # ─── Wochenraster ─────────────────────────────────────────────────────────

    def _write_week(self, ws, grid: WeeklyGrid) -> None:
        from openpyxl.utils import get_column_letter

        day_names = self.time_grid.day_names
        last_col = 2 + len(grid.day_keys)

        for col, text in enumerate(["Std.", "Zeit", *day_names], 1):
            self._style(ws.cell(row=1, column=col, value=text),
                        fill=COLORS["header"], bold=True, size=10, color="FFFFFF", wrap=False)
        ws.row_dimensions[1].height = self.HEIGHTS["header"]

        row = 2
        for item in build_time_grid_rows(self.time_grid):
            if isinstance(item, PauseSlot):
                ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=last_col)
                cell = ws.cell(row=row, column=1,
                               value=f"{item.label} ({item.duration_minutes} Min.)")
                self._style(cell, fill=COLORS["pause"], size=8, color="666666",
                            italic=True, wrap=False)
                ws.row_dimensions[row].height = self.HEIGHTS["pause"]
            else:
                self._style(ws.cell(row=row, column=1, value=item.name), bold=True, wrap=False)
                self._style(ws.cell(row=row, column=2,
                                    value=f"{item.start_time}–{item.end_time}"),
                            size=8, wrap=False)
                for offset, day_key in enumerate(grid.day_keys):
                    entries = grid.cells.get(day_key, {}).get(item.order, [])
                    cell = ws.cell(row=row, column=3 + offset,
                                   value=format_entries(entries, self.mode))
                    self._style(cell, fill=cell_color(entries), size=8)
                ws.row_dimensions[row].height = self.HEIGHTS["lesson"]
            row += 1

        ws.column_dimensions["A"].width = self.WIDTHS["period"]
        ws.column_dimensions["B"].width = self.WIDTHS["time"]
        for col in range(3, last_col + 1):
            ws.column_dimensions[get_column_letter(col)].width = self.WIDTHS["day"]
        ws.freeze_panes = "C2"
