"""Datenmodell für eine Klasse (Pydantic v2)."""

from pydantic import AliasChoices, Field

from models.base import ApiModel


class ClassGroup(ApiModel):
    """Eine Klasse mit gemeinsamem Stundenplan (z.B. "2-3")."""

    id: int
    grade: int = 0
    # Die API liefert je nach Endpunkt "name", "className" oder "class_name"
    name: str = Field("", validation_alias=AliasChoices("name", "className", "class_name"))

    @property
    def label(self) -> str:
        return self.name or f"Klasse {self.id}"
