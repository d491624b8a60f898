"""
Presets de filtros.

Serializa un FilterState a un FilterPreset con nombre y lo reconstruye.
Formato (frontera bit-exacta con el store):
- Rangos numéricos: "min-max"; un borde sin definir queda vacío
  ("-500000", "300000-"); ambos sin definir = "".
- Conjuntos: elementos ordenados unidos por ",".
"""

from typing import Callable, Iterable, Optional, TypeVar

import structlog

from vitrina.config import PRESET_LIST_DELIMITER, PRESET_RANGE_SEPARATOR
from vitrina.database.base import FilterPresetStore
from vitrina.errors import NotFoundError, ValidationError
from vitrina.models import FilterPreset, FilterState

logger = structlog.get_logger()

N = TypeVar("N", int, float)


def _format_number(value: Optional[float]) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def encode_range(low: Optional[float], high: Optional[float]) -> str:
    """Serializa un rango opcional como "min-max"."""
    if low is None and high is None:
        return ""
    return f"{_format_number(low)}{PRESET_RANGE_SEPARATOR}{_format_number(high)}"


def decode_range(text: Optional[str], cast: Callable[[str], N]) -> tuple[Optional[N], Optional[N]]:
    """
    Inversa de encode_range.

    Un rango ausente o malformado vuelve a (None, None) en lugar de fallar.
    """
    if not text or not text.strip():
        return None, None

    low, separator, high = text.strip().partition(PRESET_RANGE_SEPARATOR)
    if not separator:
        logger.warning("Rango de preset sin separador, se ignora", value=text)
        return None, None

    try:
        return (
            cast(low.strip()) if low.strip() else None,
            cast(high.strip()) if high.strip() else None,
        )
    except ValueError:
        logger.warning("Rango de preset malformado, se ignora", value=text)
        return None, None


def encode_set(values: Iterable[str]) -> str:
    return PRESET_LIST_DELIMITER.join(sorted(values))


def decode_set(text: Optional[str]) -> frozenset[str]:
    if not text:
        return frozenset()
    return frozenset(
        part.strip() for part in text.split(PRESET_LIST_DELIMITER) if part.strip()
    )


def save_preset(name: str, state: FilterState) -> FilterPreset:
    """
    Arma un preset con nombre a partir del estado actual.

    Raises:
        ValidationError: Si el nombre queda vacío tras hacer trim, o si
            un tipo o amenity contiene el delimitador de listas
    """
    clean_name = (name or "").strip()
    if not clean_name:
        raise ValidationError("El nombre del preset es requerido")

    for value in state.property_types | state.amenities:
        if PRESET_LIST_DELIMITER in value:
            raise ValidationError(
                f"'{value}' contiene '{PRESET_LIST_DELIMITER}' y no se puede guardar en un preset"
            )

    return FilterPreset(
        name=clean_name,
        price_range=encode_range(state.price_min, state.price_max),
        square_feet_range=encode_range(state.square_feet_min, state.square_feet_max),
        property_types=encode_set(state.property_types),
        amenities=encode_set(state.amenities),
        bedrooms_min=state.bedrooms_min,
        bathrooms_min=state.bathrooms_min,
        location=state.location or "",
        search_query=state.search_query,
    )


def load_preset(preset: FilterPreset) -> FilterState:
    """Reconstruye el FilterState de un preset."""
    price_min, price_max = decode_range(preset.price_range, float)
    square_feet_min, square_feet_max = decode_range(preset.square_feet_range, int)

    return FilterState(
        price_min=price_min,
        price_max=price_max,
        property_types=decode_set(preset.property_types),
        bedrooms_min=preset.bedrooms_min,
        bathrooms_min=preset.bathrooms_min,
        square_feet_min=square_feet_min,
        square_feet_max=square_feet_max,
        location=preset.location or None,
        amenities=decode_set(preset.amenities),
        search_query=preset.search_query,
    )


class PresetService:
    """Guarda, carga y borra presets contra un FilterPresetStore."""

    def __init__(self, store: FilterPresetStore):
        self.store = store

    def save(self, name: str, state: FilterState) -> FilterPreset:
        preset = save_preset(name, state)
        stored = self.store.create(preset.to_db_dict())
        logger.info("Preset guardado", preset_id=stored.id, name=stored.name)
        return stored

    def load(self, preset_id: str) -> FilterState:
        """
        Raises:
            NotFoundError: Si el preset no existe
        """
        preset = self.store.get_by_id(preset_id)
        if preset is None:
            raise NotFoundError("FilterPreset", preset_id)
        return load_preset(preset)

    def delete(self, preset_id: str) -> FilterPreset:
        """
        Raises:
            NotFoundError: Si el preset no existe (el store queda intacto)
        """
        deleted = self.store.delete(preset_id)
        logger.info("Preset borrado", preset_id=preset_id, name=deleted.name)
        return deleted

    def list_all(self) -> list[FilterPreset]:
        return self.store.get_all()
