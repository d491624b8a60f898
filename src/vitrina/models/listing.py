"""
Modelo de Listing

Registro inmobiliario del catálogo. Para el motor de búsqueda es
de solo lectura: lo crean, actualizan y borran únicamente los stores.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Coordinates(BaseModel):
    """Par lat/lng para el mapa (el motor no lo usa para filtrar)."""

    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class Listing(BaseModel):
    """
    Propiedad publicada en el catálogo.

    Acepta tanto snake_case (columnas de Supabase) como camelCase
    (registros del mock JSON original: propertyType, squareFeet, listedDate).
    """

    model_config = ConfigDict(
        frozen=True,
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    # Identificación
    id: str = Field(..., description="ID único del listing")

    # Contenido textual
    title: str = Field(..., description="Título del anuncio")
    description: str = Field(default="", description="Descripción libre")
    address: str = Field(..., description="Dirección completa como texto")

    # Datos económicos y tipo
    price: float = Field(..., ge=0, description="Precio de lista")
    property_type: str = Field(..., description="House, Condo, Townhouse, ...")

    # Características físicas
    bedrooms: int = Field(default=0, ge=0, description="Dormitorios")
    bathrooms: float = Field(default=0, ge=0, description="Baños (puede ser fraccional)")
    square_feet: int = Field(default=0, ge=0, description="Superficie en sqft")
    year_built: Optional[int] = Field(None, description="Año de construcción")

    # Metadatos
    listed_date: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Fecha de publicación",
    )

    # Media y extras
    images: tuple[str, ...] = Field(default=(), description="URLs de imágenes en orden")
    features: frozenset[str] = Field(
        default=frozenset(), description="Amenities: Pool, Gym, Garage, ..."
    )
    coordinates: Optional[Coordinates] = Field(None, description="{'lat': float, 'lng': float}")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        # El SDK remoto devuelve IDs numéricos, el mock usa strings
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("images", "features", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return () if value is None else value

    def to_db_dict(self) -> dict:
        """Convierte a diccionario para inserción en Supabase."""
        data = self.model_dump(mode="json", exclude={"id"})
        # Orden estable para JSONB
        data["features"] = sorted(self.features)
        return data
