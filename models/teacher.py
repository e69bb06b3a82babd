"""Datenmodell für eine Lehrkraft (Pydantic v2)."""

from typing import Optional

from models.base import ApiModel


class TeacherRef(ApiModel):
    """Lehrkraft, wie sie in Stundenplan-Einträgen eingebettet ist."""

    id: int
    name: str
    user_id: Optional[int] = None
    department_id: Optional[int] = None
