"""Gemeinsame Basisklasse für alle API-Datenmodelle (Pydantic v2)."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Basis für Modelle, die als JSON über die REST-API kommen.

    Die API liefert camelCase (``dayOfWeek``), die CSV-Endpunkte snake_case
    (``class_id``). Beide Schreibweisen werden akzeptiert.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_api(self) -> dict:
        """Serialisiert in camelCase ohne None-Felder (für Request-Bodies)."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")
