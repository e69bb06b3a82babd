"""Datenmodell für Benutzer, Rollen und Berechtigungen."""

from enum import Enum
from typing import Optional

from models.base import ApiModel


class Role(str, Enum):
    ADMIN = "admin"
    TEACHER = "teacher"
    STUDENT = "student"


class Capability(str, Enum):
    """Einzelne Berechtigung, die eine Rolle besitzen kann."""

    VIEW_DASHBOARD = "view_dashboard"
    VIEW_SCHEDULES = "view_schedules"
    VIEW_REQUESTS = "view_requests"
    CREATE_REQUEST = "create_request"
    CANCEL_OWN_REQUEST = "cancel_own_request"
    MODERATE_REQUESTS = "moderate_requests"    # genehmigen / ablehnen
    MANAGE_CSV = "manage_csv"


# Berechtigungstabelle: wird einmal pro Sitzung ausgewertet
ROLE_CAPABILITIES: dict[Role, frozenset[Capability]] = {
    Role.ADMIN: frozenset(Capability),
    Role.TEACHER: frozenset({
        Capability.VIEW_DASHBOARD,
        Capability.VIEW_SCHEDULES,
        Capability.VIEW_REQUESTS,
        Capability.CREATE_REQUEST,
        Capability.CANCEL_OWN_REQUEST,
    }),
    Role.STUDENT: frozenset({
        Capability.VIEW_DASHBOARD,
        Capability.VIEW_SCHEDULES,
    }),
}


class User(ApiModel):
    """Angemeldeter Benutzer (Kopie der Daten des Auth-Dienstes)."""

    id: int
    name: str
    email: str = ""
    role: Role
    username: Optional[str] = None
    class_id: Optional[int] = None    # nur bei Schüler:innen

    @property
    def capabilities(self) -> frozenset[Capability]:
        return ROLE_CAPABILITIES.get(self.role, frozenset())

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def __str__(self) -> str:
        return f"{self.name} ({self.role.value})"
