"""Datenmodell für ein Unterrichtsfach (Pydantic v2)."""

from enum import Enum
from typing import Optional

from models.base import ApiModel


class Term(str, Enum):
    FIRST_SEMESTER = "first_semester"
    SECOND_SEMESTER = "second_semester"
    FULL_YEAR = "full_year"


class Subject(ApiModel):
    """Repräsentiert ein Unterrichtsfach."""

    id: int
    name: str
    code: str = ""
    term: Optional[Term] = None
    category: Optional[str] = None
    required_sessions: Optional[int] = None
