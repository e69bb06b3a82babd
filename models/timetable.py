"""Datenmodell für Wochenplan-Einträge des CSV-basierten Stundenplans.

Diese Einträge liefert GET /timetables und /timetables/weekly/{classId}.
Sie verwenden snake_case und einen Tagesschlüssel ("monday") statt dayOfWeek.
Das Backend bettet Fach, Lehrkraft und Klasse entweder als Objekt ein oder
liefert nur deren Namen (subject_name, teacher_name, class_name).
"""

from typing import Optional

from pydantic import AliasChoices, Field, field_validator

from models.base import ApiModel
from models.school_class import ClassGroup
from models.subject import Subject
from models.user import User


class Timetable(ApiModel):
    """Ein Eintrag im Wochenplan einer Klasse."""

    id: int
    class_id: int
    subject_id: int
    teacher_id: Optional[int] = None
    # "monday" … "friday"
    day: str = Field("", validation_alias=AliasChoices("day", "day_of_week", "dayOfWeek"))
    period: int                   # Stunden-Ordinalzahl, 1-basiert
    room: str = ""
    grade: Optional[int] = None
    class_group: Optional[ClassGroup] = Field(None, alias="class")
    subject: Optional[Subject] = None
    teacher: Optional[User] = None
    class_name: Optional[str] = None
    subject_name: Optional[str] = None
    teacher_name: Optional[str] = None

    @field_validator("day")
    @classmethod
    def normalize_day(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("room", mode="before")
    @classmethod
    def none_as_blank(cls, v):
        return "" if v is None else v

    @property
    def subject_label(self) -> str:
        if self.subject:
            return self.subject.name
        return self.subject_name or f"Fach {self.subject_id}"

    @property
    def teacher_label(self) -> str:
        if self.teacher:
            return self.teacher.name
        return self.teacher_name or ""

    @property
    def class_label(self) -> str:
        if self.class_group:
            return self.class_group.label
        return self.class_name or f"Klasse {self.class_id}"

    def display_lines(self, mode: str = "class") -> list[str]:
        """Zelleninhalt für Rasteransichten (Fach / Lehrkraft / Raum)."""
        if mode == "teacher":
            lines = [self.subject_label, self.class_label, self.room]
        elif mode == "room":
            lines = [self.class_label, self.subject_label]
        else:
            lines = [self.subject_label, self.teacher_label, self.room]
        return [l for l in lines if l]
