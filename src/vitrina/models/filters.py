"""
Modelos de filtros

FilterState captura las restricciones estructuradas del usuario.
FilterPreset es su versión serializada y persistible con nombre.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class FilterState(BaseModel):
    """
    Restricciones actuales de búsqueda.

    Cualquier campo ausente, None o vacío significa "sin restricción",
    nunca "no matchear nada". Es inmutable: cada edición produce
    un estado nuevo (ver vitrina.search.state).
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="forbid",
    )

    # Bordes no negativos: "-" es el separador de rangos en los presets
    # Precio
    price_min: Optional[float] = Field(None, ge=0, description="Precio mínimo (inclusive)")
    price_max: Optional[float] = Field(None, ge=0, description="Precio máximo (inclusive)")

    # Tipo de propiedad (vacío = cualquiera)
    property_types: frozenset[str] = Field(default=frozenset())

    # Características físicas
    bedrooms_min: Optional[int] = Field(None, ge=0, description="Mínimo de dormitorios")
    bathrooms_min: Optional[int] = Field(None, ge=0, description="Mínimo de baños")
    square_feet_min: Optional[int] = Field(None, ge=0, description="Superficie mínima sqft")
    square_feet_max: Optional[int] = Field(None, ge=0, description="Superficie máxima sqft")

    # Ubicación (substring sobre la dirección)
    location: Optional[str] = Field(None, description="Ciudad, barrio o ZIP")

    # Amenities requeridas (todas deben estar presentes)
    amenities: frozenset[str] = Field(default=frozenset())

    # Texto libre
    search_query: str = Field(default="", description="Búsqueda en título/dirección/descripción")

    @field_validator("property_types", "amenities", mode="before")
    @classmethod
    def _none_as_empty_set(cls, value):
        return frozenset() if value is None else value

    @field_validator("location", mode="before")
    @classmethod
    def _blank_location_as_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("search_query", mode="before")
    @classmethod
    def _none_as_empty_query(cls, value):
        return "" if value is None else value


class FilterPreset(BaseModel):
    """
    Snapshot con nombre de un FilterState.

    Rangos serializados como "min-max" y conjuntos como strings
    separados por coma (ver vitrina.search.presets).
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    id: Optional[str] = Field(None, description="ID asignado por el store")
    name: str = Field(..., description="Nombre visible del preset")

    # Rangos "min-max"
    price_range: str = Field(default="", description="Ej: '300000-500000', '-500000'")
    square_feet_range: str = Field(default="", description="Ej: '1000-2500'")

    # Conjuntos "a,b,c"
    property_types: str = Field(default="", description="Ej: 'Condo,House'")
    amenities: str = Field(default="", description="Ej: 'Gym,Pool'")

    # Escalares
    bedrooms_min: Optional[int] = Field(None, ge=0)
    bathrooms_min: Optional[int] = Field(None, ge=0)
    location: str = ""
    search_query: str = ""

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Fecha de creación",
    )

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator(
        "price_range",
        "square_feet_range",
        "property_types",
        "amenities",
        "location",
        "search_query",
        mode="before",
    )
    @classmethod
    def _none_as_empty(cls, value):
        return "" if value is None else value

    def to_db_dict(self) -> dict:
        """Convierte a diccionario para inserción en Supabase."""
        return self.model_dump(mode="json", exclude={"id"})
