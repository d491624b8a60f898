"""
Stores en memoria.

Objetos explícitos con ciclo de vida propio: se construyen una vez por
sesión/proceso y se inyectan en el motor. Nada de arrays a nivel módulo.
"""

import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Optional

import pydantic
import structlog

from vitrina.database.base import (
    BaseStore,
    FilterPresetStore,
    ListingStore,
    SavedRelationStore,
    T,
    normalize_keys,
)
from vitrina.errors import NotFoundError, ValidationError
from vitrina.models import FilterPreset, Listing, SavedRelation

logger = structlog.get_logger()


class InMemoryStore(BaseStore[T]):
    """
    Implementación genérica del contrato CRUD sobre un dict ordenado.

    Devuelve copias para que los llamadores no muten el estado interno.
    """

    MODEL: type[pydantic.BaseModel]

    def __init__(self, records: Optional[Iterable[Any]] = None):
        self._records: dict[str, T] = {}
        for record in records or []:
            item = self._validate(record)
            if item.id is None:
                item = self._validate({**item.model_dump(), "id": self._new_id()})
            self._records[item.id] = item

    def _new_id(self) -> str:
        return uuid.uuid4().hex

    def _validate(self, data: Any) -> T:
        if isinstance(data, self.MODEL):
            return data.model_copy()
        try:
            return self.MODEL.model_validate(normalize_keys(self.MODEL, data))
        except pydantic.ValidationError as e:
            raise ValidationError(f"{self.ENTITY} inválido: {e}") from e

    def _prepare_create(self, data: dict[str, Any]) -> dict[str, Any]:
        """Hook para completar campos al crear (override en subclases)."""
        return data

    def get_all(self) -> list[T]:
        return [record.model_copy() for record in self._records.values()]

    def get_by_id(self, record_id: str) -> Optional[T]:
        record = self._records.get(str(record_id))
        return record.model_copy() if record is not None else None

    def create(self, partial: dict[str, Any]) -> T:
        data = normalize_keys(self.MODEL, dict(partial))
        # El store asigna el ID, igual que el backend remoto
        data["id"] = self._new_id()
        record = self._validate(self._prepare_create(data))
        self._records[record.id] = record
        logger.debug(f"{self.ENTITY} creado", id=record.id)
        return record.model_copy()

    def update(self, record_id: str, partial: dict[str, Any]) -> T:
        record_id = str(record_id)
        current = self._records.get(record_id)
        if current is None:
            raise NotFoundError(self.ENTITY, record_id)

        data = {**current.model_dump(), **normalize_keys(self.MODEL, dict(partial))}
        data["id"] = record_id
        record = self._validate(data)
        self._records[record_id] = record
        logger.debug(f"{self.ENTITY} actualizado", id=record_id)
        return record.model_copy()

    def delete(self, record_id: str) -> T:
        record_id = str(record_id)
        if record_id not in self._records:
            raise NotFoundError(self.ENTITY, record_id)

        deleted = self._records.pop(record_id)
        logger.debug(f"{self.ENTITY} borrado", id=record_id)
        return deleted

    def __len__(self) -> int:
        return len(self._records)


class InMemoryListingStore(InMemoryStore[Listing], ListingStore):
    """Catálogo en memoria, opcionalmente cargado desde un JSON de mock data."""

    MODEL = Listing

    def _prepare_create(self, data: dict[str, Any]) -> dict[str, Any]:
        data.setdefault("listed_date", datetime.now(timezone.utc))
        return data

    @classmethod
    def from_json_file(cls, path: str | Path) -> "InMemoryListingStore":
        """
        Carga listings desde un archivo JSON (lista de registros).

        Raises:
            ValidationError: Si el archivo no contiene una lista de listings válidos
        """
        path = Path(path)
        with path.open(encoding="utf-8") as fh:
            records = json.load(fh)

        if not isinstance(records, list):
            raise ValidationError(f"Se esperaba una lista de listings en {path}")

        store = cls(records)
        logger.info("Catálogo cargado desde archivo", path=str(path), total=len(store))
        return store


class InMemorySavedRelationStore(InMemoryStore[SavedRelation], SavedRelationStore):
    """Propiedades guardadas en memoria."""

    MODEL = SavedRelation


class InMemoryFilterPresetStore(InMemoryStore[FilterPreset], FilterPresetStore):
    """Presets de filtros en memoria."""

    MODEL = FilterPreset
