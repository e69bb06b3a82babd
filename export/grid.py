"""Weekly Grid Builder: flache Eintragsliste → vollständiges Wochenraster.

Jede Zelle (Tag × Stunde) existiert immer und ist eine Liste:
leere Liste = freie Stunde. Parallele Einträge derselben Zelle
(z.B. geteilte Gruppen) bleiben alle erhalten. Die Reihenfolge innerhalb
einer Zelle richtet sich nach der Eintrags-ID, nicht nach der Ankunftsreihenfolge.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Optional, Union

from config.schema import TimeGridConfig
from models.schedule import ScheduleSlot
from models.timetable import Timetable

logger = logging.getLogger(__name__)

GridEntry = Union[ScheduleSlot, Timetable]


@dataclass
class WeeklyGrid:
    """Abgeleitete, schreibgeschützte Wochenansicht einer Klasse."""

    day_keys: list[str]
    period_orders: list[int]
    cells: dict[str, dict[int, list[GridEntry]]]
    # Einträge außerhalb des Rasters (z.B. Samstag, unbekannte Stunde)
    unplaced: list[GridEntry] = field(default_factory=list)

    @classmethod
    def empty(cls, day_keys: Iterable[str], period_orders: Iterable[int]) -> "WeeklyGrid":
        days = list(day_keys)
        orders = sorted(period_orders)
        return cls(
            day_keys=days,
            period_orders=orders,
            cells={d: {p: [] for p in orders} for d in days},
        )

    def cell(self, day_key: str, period_order: int) -> list[GridEntry]:
        return self.cells[day_key][period_order]

    def is_free(self, day_key: str, period_order: int) -> bool:
        return not self.cells[day_key][period_order]

    def keys(self) -> set[tuple[str, int]]:
        return {(d, p) for d, row in self.cells.items() for p in row}

    def entries(self) -> Iterator[GridEntry]:
        for d in self.day_keys:
            for p in self.period_orders:
                yield from self.cells[d][p]

    @property
    def entry_count(self) -> int:
        return sum(len(es) for row in self.cells.values() for es in row.values())

    @property
    def is_empty(self) -> bool:
        return self.entry_count == 0

    def conflicts(self) -> list[tuple[str, int]]:
        """Zellen mit mehr als einem Eintrag."""
        return [
            (d, p) for d in self.day_keys for p in self.period_orders
            if len(self.cells[d][p]) > 1
        ]


def _default_time_grid() -> TimeGridConfig:
    from config.defaults import default_time_grid
    return default_time_grid()


def _place(grid: WeeklyGrid, entry: GridEntry, day_key: Optional[str],
           order: Optional[int]) -> None:
    if day_key in grid.cells and order in grid.cells[day_key]:
        grid.cells[day_key][order].append(entry)
    else:
        grid.unplaced.append(entry)


def build_weekly_grid(
    slots: Optional[Iterable[ScheduleSlot]],
    time_grid: Optional[TimeGridConfig] = None,
) -> WeeklyGrid:
    """Baut das Wochenraster aus ScheduleSlot-Datensätzen.

    slots=None (z.B. fehlgeschlagener Abruf) ergibt ein leeres Raster.
    Die Stunden-Ordinalzahl kommt aus dem eingebetteten period.order,
    sonst aus der Stammliste (period_id → order) des Zeitrasters.
    """
    tg = time_grid or _default_time_grid()
    grid = WeeklyGrid.empty(tg.day_keys, tg.period_orders)
    if slots is None:
        return grid

    for slot in sorted(slots, key=lambda s: s.id):
        idx = slot.day_of_week - 1
        day_key = tg.day_keys[idx] if 0 <= idx < len(tg.day_keys) else None
        order = slot.period.order if slot.period else tg.order_for_period_id(slot.period_id)
        _place(grid, slot, day_key, order)

    if grid.unplaced:
        logger.info(f"{len(grid.unplaced)} Einträge liegen außerhalb des Wochenrasters")
    return grid


def _coerce_order(key: Any) -> Optional[int]:
    try:
        return int(key)
    except (TypeError, ValueError):
        return None


def grid_from_weekly_payload(payload: Any,
                             time_grid: Optional[TimeGridConfig] = None) -> WeeklyGrid:
    """Normalisiert die Antwort von /timetables/weekly/{classId}.

    Erwartet {day: {period: Timetable}} (Perioden-Schlüssel kommen als
    JSON-Strings), optional in {"schedule": …} verpackt. Eine Zelle darf
    auch eine Liste von Einträgen enthalten. None → leeres Raster.
    """
    tg = time_grid or _default_time_grid()
    grid = WeeklyGrid.empty(tg.day_keys, tg.period_orders)
    if not payload:
        return grid
    if isinstance(payload, dict) and isinstance(payload.get("schedule"), dict):
        payload = payload["schedule"]
    if not isinstance(payload, dict):
        logger.warning(f"Unerwartetes Wochenplan-Format: {type(payload).__name__}")
        return grid

    collected: list[tuple[str, Optional[int], Timetable]] = []
    for day_key, periods in payload.items():
        if not isinstance(periods, dict):
            continue
        for period_key, raw in periods.items():
            if raw is None:
                continue
            items = raw if isinstance(raw, list) else [raw]
            for item in items:
                entry = Timetable.model_validate(item)
                collected.append((str(day_key).lower(), _coerce_order(period_key), entry))

    for day_key, order, entry in sorted(collected, key=lambda c: c[2].id):
        _place(grid, entry, day_key, order)
    return grid
