"""Stammdaten: Klassen, Stunden, Räume, Fächer, Lehrkräfte."""

from client.api import ApiClient
from client.errors import server_data
from config.schema import PeriodDefinition, TimeGridConfig
from models.room import Room
from models.school_class import ClassGroup
from models.subject import Subject
from models.teacher import TeacherRef
from models.timeslot import Period


def _items(data) -> list:
    # /subjects und /teachers sind paginiert
    if isinstance(data, dict):
        return data.get("items") or []
    return data or []


class MasterDataService:
    """Lesender Zugriff auf die Stammdaten des Backends."""

    def __init__(self, api: ApiClient):
        self.api = api

    def classes(self) -> list[ClassGroup]:
        data = _items(self.api.get("/classes"))
        with server_data("Klassen"):
            return [ClassGroup.model_validate(c) for c in data]

    def periods(self) -> list[Period]:
        data = _items(self.api.get("/periods"))
        with server_data("Stunden"):
            periods = [Period.model_validate(p) for p in data]
        return sorted(periods, key=lambda p: p.order)

    def rooms(self) -> list[Room]:
        data = _items(self.api.get("/rooms"))
        with server_data("Räume"):
            return [Room.model_validate(r) for r in data]

    def subjects(self) -> list[Subject]:
        data = _items(self.api.get("/subjects"))
        with server_data("Fächer"):
            return [Subject.model_validate(s) for s in data]

    def teachers(self, page: int = 1, page_size: int = 50) -> list[TeacherRef]:
        """GET /teachers, z.B. für die Auswahl des Lehrkraft-Filters."""
        data = _items(self.api.get("/teachers", params={"page": page, "pageSize": page_size}))
        with server_data("Lehrkräfte"):
            return sorted((TeacherRef.model_validate(t) for t in data), key=lambda t: t.name)


def time_grid_with_periods(time_grid: TimeGridConfig, periods: list[Period]) -> TimeGridConfig:
    """Ersetzt die Stunden-Stammliste des Rasters durch die des Servers.

    Pausen, die auf nicht mehr vorhandene Stunden zeigen, entfallen.
    Ohne Server-Stunden bleibt das konfigurierte Raster unverändert.
    """
    if not periods:
        return time_grid
    with server_data("Stunden"):
        defs = [
            PeriodDefinition(id=p.id, order=p.order, name=p.name,
                             start_time=p.start_time, end_time=p.end_time)
            for p in periods
        ]
    orders = {d.order for d in defs}
    pauses = [pause for pause in time_grid.pauses if pause.after_order in orders]
    return time_grid.model_copy(update={"periods": defs, "pauses": pauses})
