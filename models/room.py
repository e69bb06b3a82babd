"""Datenmodell für einen Raum (Pydantic v2)."""

from typing import Optional

from models.base import ApiModel


class Room(ApiModel):
    """Repräsentiert einen Unterrichtsraum."""

    id: int
    name: str
    capacity: Optional[int] = None
    building: Optional[str] = None
    floor: Optional[int] = None
