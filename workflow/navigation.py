"""Rollenabhängige Navigation (deklarative Tabelle)."""

from dataclasses import dataclass

from client.session import Session
from models.user import Capability


@dataclass(frozen=True)
class NavItem:
    """Ein Menüpunkt mit erforderlicher Berechtigung."""

    label: str
    command: str
    capability: Capability


NAV_ITEMS: tuple[NavItem, ...] = (
    NavItem("Übersicht", "whoami", Capability.VIEW_DASHBOARD),
    NavItem("Stundenplan anzeigen", "schedule show", Capability.VIEW_SCHEDULES),
    NavItem("Wochenplan", "timetable weekly", Capability.VIEW_SCHEDULES),
    NavItem("Stammdaten", "master classes / periods / rooms / subjects / teachers",
            Capability.VIEW_SCHEDULES),
    NavItem("Änderungsanträge", "request list", Capability.VIEW_REQUESTS),
    NavItem("Antrag stellen", "request create", Capability.CREATE_REQUEST),
    NavItem("Anträge moderieren", "request approve / reject", Capability.MODERATE_REQUESTS),
    NavItem("CSV-Verwaltung", "csv import / export", Capability.MANAGE_CSV),
    NavItem("Profil", "profile password", Capability.VIEW_DASHBOARD),
)


def navigation_for(session: Session) -> list[NavItem]:
    """Menüpunkte, die der angemeldete Benutzer sehen darf."""
    return [item for item in NAV_ITEMS if session.can(item.capability)]
