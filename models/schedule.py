"""Datenmodell für Stundenplan-Einträge (ScheduleSlot) und Abfragefilter."""

from typing import Optional

from pydantic import Field, field_validator

from models.base import ApiModel
from models.room import Room
from models.school_class import ClassGroup
from models.subject import Subject, Term
from models.teacher import TeacherRef
from models.timeslot import Period, day_name


class ScheduleSlot(ApiModel):
    """Eine Klasse belegt an einem Wochentag eine Stunde.

    Eindeutigkeit (max. ein Original-Eintrag je Klasse × Tag × Stunde)
    stellt der Server sicher, nicht der Client.
    """

    id: int
    subject_id: int
    subject: Optional[Subject] = None
    class_id: int
    class_group: Optional[ClassGroup] = Field(None, alias="class")
    # 1=Mo … 5=Fr; Tage außerhalb des Rasters landen in WeeklyGrid.unplaced
    day_of_week: int
    period_id: int
    period: Optional[Period] = None
    is_original: bool = True
    teachers: list[TeacherRef] = []
    rooms: list[Room] = []

    @field_validator("teachers", "rooms", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        # Go serialisiert leere Slices als null
        return [] if v is None else v

    @property
    def day_name(self) -> str:
        return day_name(self.day_of_week)

    @property
    def subject_label(self) -> str:
        return self.subject.name if self.subject else f"Fach {self.subject_id}"

    @property
    def class_label(self) -> str:
        return self.class_group.label if self.class_group else f"Klasse {self.class_id}"

    def display_lines(self, mode: str = "class") -> list[str]:
        """Zelleninhalt für Rasteransichten.

        mode='class':   Fach / Lehrkräfte / Räume
        mode='teacher': Fach / Klasse / Räume
        mode='room':    Klasse / Fach
        """
        teachers = ", ".join(t.name for t in self.teachers)
        rooms = ", ".join(r.name for r in self.rooms)
        if mode == "teacher":
            lines = [self.subject_label, self.class_label, rooms]
        elif mode == "room":
            lines = [self.class_label, self.subject_label]
        else:
            lines = [self.subject_label, teachers, rooms]
        if not self.is_original:
            lines[0] = f"{lines[0]} (geändert)"
        return [l for l in lines if l]

    def __str__(self) -> str:
        period = self.period.name if self.period else f"Std. {self.period_id}"
        return f"#{self.id} {self.subject_label} {self.class_label} {self.day_name} {period}"


class ScheduleFilter(ApiModel):
    """Filter für GET /schedules.

    Alle gesetzten Felder werden UND-verknüpft als Query-Parameter gesendet.
    """

    class_id: Optional[int] = None
    teacher_id: Optional[int] = None
    room_id: Optional[int] = None
    day_of_week: Optional[int] = Field(None, ge=1, le=7)
    term: Optional[Term] = None

    def to_params(self) -> dict:
        return self.to_api()

    def is_empty(self) -> bool:
        return not self.to_params()
