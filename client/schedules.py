"""Schedule Fetcher: Stundenplan-Einträge vom Backend abrufen.

Filter werden UND-verknüpft: jedes gesetzte Feld von ScheduleFilter wird
als Query-Parameter an GET /schedules gehängt.
"""

import logging
from typing import Optional

from client.api import ApiClient, path_id
from client.errors import server_data
from config.schema import TimeGridConfig
from export.grid import WeeklyGrid, grid_from_weekly_payload
from models.schedule import ScheduleFilter, ScheduleSlot
from models.subject import Term
from models.timetable import Timetable

logger = logging.getLogger(__name__)


class ScheduleFetcher:
    """Lädt ScheduleSlot- und Timetable-Datensätze."""

    def __init__(self, api: ApiClient, time_grid: TimeGridConfig):
        self.api = api
        self.time_grid = time_grid

    def fetch(self, flt: Optional[ScheduleFilter] = None) -> list[ScheduleSlot]:
        """GET /schedules mit optionalem Filter. Keine Daten → leere Liste."""
        params = flt.to_params() if flt is not None else None
        data = self.api.get("/schedules", params=params)
        with server_data("Stundenplan"):
            slots = [ScheduleSlot.model_validate(item) for item in (data or [])]
        logger.debug(f"{len(slots)} Stundenplan-Einträge geladen (Filter: {params or '-'})")
        return slots

    def by_class(self, class_id: int, term: Optional[Term] = None) -> list[ScheduleSlot]:
        return self.fetch(ScheduleFilter(class_id=class_id, term=term))

    def by_teacher(self, teacher_id: int, term: Optional[Term] = None) -> list[ScheduleSlot]:
        return self.fetch(ScheduleFilter(teacher_id=teacher_id, term=term))

    def by_room(self, room_id: int, term: Optional[Term] = None) -> list[ScheduleSlot]:
        return self.fetch(ScheduleFilter(room_id=room_id, term=term))

    def get(self, slot_id: int) -> ScheduleSlot:
        data = self.api.get(f"/schedules/{path_id(slot_id)}")
        with server_data("Stundenplan-Eintrag"):
            return ScheduleSlot.model_validate(data)

    # ─── Wochenplan (CSV-Variante) ───────────────────────────────────────────

    def weekly_timetable(self, class_id: int) -> WeeklyGrid:
        """GET /timetables/weekly/{classId} als vollständiges Wochenraster."""
        data = self.api.get(f"/timetables/weekly/{path_id(class_id)}")
        with server_data("Wochenplan"):
            return grid_from_weekly_payload(data, self.time_grid)

    def timetables(self, grade: Optional[int] = None, class_id: Optional[int] = None,
                   day: Optional[str] = None) -> list[Timetable]:
        """GET /timetables mit optionalen Filtern."""
        params = {"grade": grade, "class_id": class_id, "day": day}
        data = self.api.get("/timetables", params=params)
        with server_data("Wochenplan"):
            return [Timetable.model_validate(item) for item in (data or [])]
