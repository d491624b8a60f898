"""
Modelo de SavedRelation

Vincula un bookmark del usuario con un Listing del catálogo.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class SavedRelation(BaseModel):
    """Propiedad guardada por el usuario."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    id: Optional[str] = Field(None, description="ID asignado por el store")
    property_id: str = Field(..., description="FK al Listing")
    saved_date: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Fecha en que se guardó",
    )
    notes: str = Field(default="", description="Notas libres del usuario")

    @field_validator("id", "property_id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        # El SDK remoto guarda property_id como entero
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("notes", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return "" if value is None else value

    def to_db_dict(self) -> dict:
        """Convierte a diccionario para inserción en Supabase."""
        return self.model_dump(mode="json", exclude={"id"})
