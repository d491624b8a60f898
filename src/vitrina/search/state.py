"""
Operaciones sobre FilterState.

Cada edición devuelve un estado nuevo; el estado de entrada nunca se muta.
"""

from typing import Any, Optional

import pydantic

from vitrina.errors import ValidationError
from vitrina.models import FilterState
from vitrina.search.compiler import clause_names

# Acepta tanto nombres de campo como alias camelCase (priceMin, bedroomsMin)
_FIELD_BY_KEY = {
    **{name: name for name in FilterState.model_fields},
    **{
        field.alias: name
        for name, field in FilterState.model_fields.items()
        if field.alias
    },
}


def set_field(state: FilterState, key: str, value: Any) -> FilterState:
    """
    Reemplaza un campo y devuelve el estado resultante.

    Solo valida la forma del valor; None en campos numéricos
    significa "sin restricción".

    Raises:
        ValidationError: Si el campo no existe o el valor no tiene la forma esperada
    """
    name = _FIELD_BY_KEY.get(key)
    if name is None:
        raise ValidationError(f"Campo de filtro desconocido: {key}")

    try:
        return FilterState.model_validate({**state.model_dump(), name: value})
    except pydantic.ValidationError as e:
        raise ValidationError(f"Valor inválido para {key}: {e}") from e


def clear_filters() -> FilterState:
    """Estado canónico sin restricciones."""
    return FilterState()


def is_active(state: FilterState) -> bool:
    """
    True si algún campo restringe el resultado.

    Incluye la búsqueda de texto libre. Texto en blanco (query o
    ubicación solo con espacios) no cuenta como restricción, aunque el
    estado difiera del default. Alimenta affordances como el botón
    "Clear filters".
    """
    return bool(clause_names(state))


def set_price_range(
    state: FilterState,
    price_min: Optional[float],
    price_max: Optional[float],
) -> FilterState:
    """Reemplaza ambos bordes de precio (botones de rango rápido)."""
    return set_field(set_field(state, "price_min", price_min), "price_max", price_max)


def _toggle_member(state: FilterState, key: str, value: str) -> FilterState:
    current: frozenset[str] = getattr(state, key)
    updated = current - {value} if value in current else current | {value}
    return set_field(state, key, updated)


def toggle_property_type(state: FilterState, property_type: str) -> FilterState:
    """Agrega el tipo si no está, lo quita si está (checkbox del sidebar)."""
    return _toggle_member(state, "property_types", property_type)


def toggle_amenity(state: FilterState, amenity: str) -> FilterState:
    """Agrega o quita una amenity requerida."""
    return _toggle_member(state, "amenities", amenity)
