"""Gemeinsame Hilfsfunktionen für Terminal-, TUI- und Excel-Ausgabe."""

from datetime import date
from typing import Optional, Union

from config.schema import PauseSlot, PeriodDefinition, TimeGridConfig
from export.grid import GridEntry

# ─── Farbpalette (RRGGBB, ohne #) ─────────────────────────────────────────────

COLORS: dict[str, str] = {
    "lesson":   "B3D4FF",
    "changed":  "FFF2B3",
    "conflict": "FF9999",
    "free":     "F5F5F5",
    "pause":    "DDDDDD",
    "header":   "4472C4",
}

EMPTY_CELL = "—"


def today_str() -> str:
    """Gibt das heutige Datum als DD.MM.YYYY zurück."""
    return date.today().strftime("%d.%m.%Y")


def export_filename(kind: str, day: Optional[date] = None) -> str:
    """Dateiname für CSV-Exporte: {kind}_{YYYY-MM-DD}.csv."""
    return f"{kind}_{(day or date.today()).isoformat()}.csv"


# ─── Zeitraster-Hilfsfunktionen ───────────────────────────────────────────────

def build_time_grid_rows(
    time_grid: TimeGridConfig,
) -> list[Union[PeriodDefinition, PauseSlot]]:
    """Gibt geordnete Zeilen zurück: PeriodDefinition- und PauseSlot-Objekte.

    PauseSlot folgt jeweils nach der Stunde mit passendem after_order.
    """
    pause_map = {p.after_order: p for p in time_grid.pauses}
    rows: list[Union[PeriodDefinition, PauseSlot]] = []
    for period in sorted(time_grid.periods, key=lambda p: p.order):
        rows.append(period)
        if period.order in pause_map and period.order != time_grid.period_orders[-1]:
            rows.append(pause_map[period.order])
    return rows


# ─── Zelleninhalt-Formatierung ────────────────────────────────────────────────

def format_entry(entry: GridEntry, mode: str = "class") -> str:
    return "\n".join(entry.display_lines(mode))


def format_entries(entries: list[GridEntry], mode: str = "class") -> str:
    """Formatiert mehrere Einträge für eine Zelle (getrennt durch ──).

    Parallele Einträge derselben Stunde werden gestapelt dargestellt.
    """
    if not entries:
        return ""
    if len(entries) == 1:
        return format_entry(entries[0], mode)
    return "\n──\n".join(format_entry(e, mode) for e in entries)


def cell_color(entries: list[GridEntry]) -> str:
    """Hintergrundfarbe einer Zelle (frei / Unterricht / geändert / mehrfach)."""
    if not entries:
        return COLORS["free"]
    if len(entries) > 1:
        return COLORS["conflict"]
    if getattr(entries[0], "is_original", True) is False:
        return COLORS["changed"]
    return COLORS["lesson"]
