"""
Repositorios para operaciones CRUD en Supabase.

Cada repositorio maneja una tabla/entidad específica e implementa
el contrato de vitrina.database.base. Los reintentos ante fallas de
transporte son responsabilidad del repositorio, no del motor, y solo
aplican a lecturas: un insert o delete cuya respuesta se pierde no se
repite.
"""

from datetime import datetime, timezone
from typing import Any, Optional

import pydantic
import structlog
from pydantic import TypeAdapter
from supabase import PostgrestAPIError
from tenacity import (
    Retrying,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from vitrina.config import get_settings
from vitrina.database.base import (
    BaseStore,
    FilterPresetStore,
    ListingStore,
    SavedRelationStore,
    T,
    normalize_keys,
)
from vitrina.database.supabase_client import get_supabase_client, SupabaseClient
from vitrina.errors import NotFoundError, StoreUnavailableError, ValidationError
from vitrina.models import FilterPreset, Listing, SavedRelation

logger = structlog.get_logger()

# Serializa datetimes y sets a tipos JSON para el cliente de Supabase
_PAYLOAD_ADAPTER = TypeAdapter(dict[str, Any])


def _to_payload(data: dict[str, Any]) -> dict:
    return _PAYLOAD_ADAPTER.dump_python(data, mode="json")


class BaseRepository(BaseStore[T]):
    """Clase base para repositorios."""

    MODEL: type[pydantic.BaseModel]

    # Atributo de Settings con el nombre de la tabla (override en subclases)
    TABLE_SETTING: str = ""

    # Orden del catálogo devuelto por get_all
    ORDER_COLUMN: str = "id"
    ORDER_DESC: bool = False

    def __init__(
        self,
        client: Optional[SupabaseClient] = None,
        table: Optional[str] = None,
        retry_attempts: Optional[int] = None,
    ):
        settings = get_settings()
        self._client = client or get_supabase_client()
        self._table = table or getattr(settings, self.TABLE_SETTING)
        self._retry_attempts = retry_attempts or settings.store_retry_attempts

    @property
    def client(self) -> SupabaseClient:
        return self._client

    @property
    def table_name(self) -> str:
        return self._table

    def _execute(self, query, operation: str, idempotent: bool = True):
        """
        Ejecuta una query con reintentos exponenciales.

        Las escrituras (idempotent=False) se ejecutan una sola vez. Un
        error de PostgREST es una respuesta del servidor y no se reintenta.

        Raises:
            StoreUnavailableError: Si todos los intentos fallan
        """
        try:
            for attempt in Retrying(
                stop=stop_after_attempt(self._retry_attempts if idempotent else 1),
                wait=wait_exponential(multiplier=1, min=2, max=10),
                retry=retry_if_not_exception_type(PostgrestAPIError),
                reraise=True,
            ):
                with attempt:
                    return query.execute()
        except Exception as e:
            logger.error(
                "Error ejecutando query en Supabase",
                table=self._table,
                operation=operation,
                error=str(e),
            )
            raise StoreUnavailableError(
                f"Supabase no disponible ({operation} sobre {self._table}): {e}",
                operation=operation,
            ) from e

    def _to_model(self, row: dict) -> T:
        try:
            return self.MODEL.model_validate(row)
        except pydantic.ValidationError as e:
            raise ValidationError(f"{self.ENTITY} inválido en {self._table}: {e}") from e

    def _create_payload(self, data: dict[str, Any]) -> dict:
        """Valida contra el modelo y serializa para el insert."""
        try:
            return self.MODEL.model_validate(data).to_db_dict()
        except pydantic.ValidationError as e:
            raise ValidationError(f"{self.ENTITY} inválido: {e}") from e

    def get_all(self) -> list[T]:
        response = self._execute(
            self.client.table(self._table)
            .select("*")
            .order(self.ORDER_COLUMN, desc=self.ORDER_DESC),
            operation="get_all",
        )
        return [self._to_model(row) for row in response.data or []]

    def get_by_id(self, record_id: str) -> Optional[T]:
        response = self._execute(
            self.client.table(self._table)
            .select("*")
            .eq("id", record_id)
            .limit(1),
            operation="get_by_id",
        )
        return self._to_model(response.data[0]) if response.data else None

    def create(self, partial: dict[str, Any]) -> T:
        data = normalize_keys(self.MODEL, dict(partial))
        data.pop("id", None)
        payload = self._create_payload(data)
        response = self._execute(
            self.client.table(self._table).insert(payload),
            operation="create",
            idempotent=False,
        )
        if not response.data:
            raise StoreUnavailableError(
                f"Supabase no devolvió el {self.ENTITY} creado", operation="create"
            )
        record = self._to_model(response.data[0])
        logger.info(f"{self.ENTITY} creado", id=record.id, table=self._table)
        return record

    def update(self, record_id: str, partial: dict[str, Any]) -> T:
        data = normalize_keys(self.MODEL, dict(partial))
        data.pop("id", None)
        response = self._execute(
            self.client.table(self._table)
            .update(_to_payload(data))
            .eq("id", record_id),
            operation="update",
            idempotent=False,
        )
        if not response.data:
            raise NotFoundError(self.ENTITY, str(record_id))
        return self._to_model(response.data[0])

    def delete(self, record_id: str) -> T:
        response = self._execute(
            self.client.table(self._table).delete().eq("id", record_id),
            operation="delete",
            idempotent=False,
        )
        if not response.data:
            raise NotFoundError(self.ENTITY, str(record_id))
        logger.info(f"{self.ENTITY} borrado", id=record_id, table=self._table)
        return self._to_model(response.data[0])


class SupabaseListingRepository(BaseRepository[Listing], ListingStore):
    """Repositorio para el catálogo (listings)."""

    MODEL = Listing
    TABLE_SETTING = "listings_table"
    ORDER_COLUMN = "listed_date"
    ORDER_DESC = True

    def _create_payload(self, data: dict[str, Any]) -> dict:
        # El ID lo genera la base, así que no se puede validar contra Listing
        data.setdefault("listed_date", datetime.now(timezone.utc))
        if "features" in data and data["features"] is not None:
            data["features"] = sorted(data["features"])
        return _to_payload(data)


class SupabaseSavedRelationRepository(BaseRepository[SavedRelation], SavedRelationStore):
    """Repositorio para propiedades guardadas (saved_properties)."""

    MODEL = SavedRelation
    TABLE_SETTING = "saved_table"
    # La primera relación por listing es la canónica
    ORDER_COLUMN = "saved_date"


class SupabaseFilterPresetRepository(BaseRepository[FilterPreset], FilterPresetStore):
    """Repositorio para presets de filtros (filter_presets)."""

    MODEL = FilterPreset
    TABLE_SETTING = "presets_table"
    ORDER_COLUMN = "created_at"
    ORDER_DESC = True
