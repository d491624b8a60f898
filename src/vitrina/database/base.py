"""
Contratos de los stores colaboradores.

El motor consume listings, propiedades guardadas y presets solo a través
de esta interfaz CRUD; cualquier transporte (memoria, Supabase) la implementa.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel

from vitrina.models import FilterPreset, Listing, SavedRelation

T = TypeVar("T", bound=BaseModel)


class BaseStore(ABC, Generic[T]):
    """
    CRUD sobre una entidad identificada por su propio `id`.

    Errores:
    - get_all: StoreUnavailableError ante fallas de transporte
    - update/delete: NotFoundError si el ID no existe
    """

    # Nombre de la entidad para logs y errores (override en subclases)
    ENTITY: str = "record"

    @abstractmethod
    def get_all(self) -> list[T]:
        """Devuelve la colección completa en el orden del store."""

    @abstractmethod
    def get_by_id(self, record_id: str) -> Optional[T]:
        """Devuelve el registro o None si no existe."""

    @abstractmethod
    def create(self, partial: dict[str, Any]) -> T:
        """Crea un registro y lo devuelve con su ID asignado."""

    @abstractmethod
    def update(self, record_id: str, partial: dict[str, Any]) -> T:
        """Aplica un update parcial y devuelve el registro resultante."""

    @abstractmethod
    def delete(self, record_id: str) -> T:
        """Borra un registro y devuelve lo borrado."""


class ListingStore(BaseStore[Listing]):
    """Store de propiedades del catálogo."""

    ENTITY = "Listing"


class SavedRelationStore(BaseStore[SavedRelation]):
    """Store de propiedades guardadas; `property_id` referencia a Listing."""

    ENTITY = "SavedRelation"


class FilterPresetStore(BaseStore[FilterPreset]):
    """Store de presets de filtros."""

    ENTITY = "FilterPreset"


def normalize_keys(model: type[BaseModel], partial: dict[str, Any]) -> dict[str, Any]:
    """
    Traduce alias camelCase (propertyType, savedDate) a nombres de campo.

    Claves desconocidas se dejan como están para que la validación
    del modelo las reporte o las ignore según su configuración.
    """
    alias_to_name = {
        field.alias: name
        for name, field in model.model_fields.items()
        if field.alias and field.alias != name
    }
    return {alias_to_name.get(key, key): value for key, value in partial.items()}
