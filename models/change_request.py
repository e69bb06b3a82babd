"""Datenmodell für Änderungsanträge (Pydantic v2).

Lebenszyklus:
    pending  → approved | rejected   (nur Admin, genau einmal, danach final)
    pending  → cancelled             (nur Antragsteller:in)

Die Zustandsübergänge erzwingt der Server. Der Client blendet lediglich
Aktionen aus, wenn der zwischengespeicherte Status bereits final ist.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import AliasChoices, Field, field_validator

from models.base import ApiModel
from models.room import Room
from models.schedule import ScheduleSlot
from models.timeslot import Period, day_name
from models.user import User


class RequestStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"

    @classmethod
    def _missing_(cls, value):
        # Backend schreibt "canceled"
        if isinstance(value, str) and value.lower() == "canceled":
            return cls.CANCELLED
        return None

    @property
    def is_terminal(self) -> bool:
        return self is not RequestStatus.PENDING

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


_STATUS_LABELS = {
    RequestStatus.PENDING: "offen",
    RequestStatus.APPROVED: "genehmigt",
    RequestStatus.REJECTED: "abgelehnt",
    RequestStatus.CANCELLED: "zurückgezogen",
}


class ChangeRequestCreate(ApiModel):
    """Request-Body für POST /requests."""

    original_schedule_id: int
    new_day_of_week: int
    new_period_id: int
    new_room_ids: list[int]
    reason: str


class ChangeRequest(ApiModel):
    """Antrag, einen Stundenplan-Eintrag auf Tag/Stunde/Räume zu verlegen."""

    id: int
    original_schedule_id: int
    original_schedule: Optional[ScheduleSlot] = None
    new_day_of_week: int
    new_period_id: int
    new_period: Optional[Period] = None
    new_room_ids: list[int] = []
    rooms: list[Room] = []
    reason: str = ""
    status: RequestStatus = RequestStatus.PENDING
    requested_by: int
    requested_by_user: Optional[User] = None
    approved_by: Optional[int] = None
    approved_by_user: Optional[User] = None
    comment: Optional[str] = None
    reject_reason: Optional[str] = Field(
        None, validation_alias=AliasChoices("rejectReason", "reject_reason"))
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    decided_at: Optional[datetime] = Field(
        None, validation_alias=AliasChoices("decidedAt", "approvedAt", "decided_at"))

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v):
        return RequestStatus(v.lower()) if isinstance(v, str) else v

    @field_validator("new_room_ids", "rooms", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return [] if v is None else v

    @property
    def is_pending(self) -> bool:
        return self.status == RequestStatus.PENDING

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    @property
    def room_ids(self) -> list[int]:
        """Beantragte Räume; fällt auf eingebettete Räume zurück."""
        return self.new_room_ids or [r.id for r in self.rooms]

    @property
    def target_label(self) -> str:
        period = self.new_period.name if self.new_period else f"Std. {self.new_period_id}"
        return f"{day_name(self.new_day_of_week)} {period}"

    def __str__(self) -> str:
        return (f"Antrag #{self.id} ({self.status.label}): "
                f"Eintrag {self.original_schedule_id} → {self.target_label}")
