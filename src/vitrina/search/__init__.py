"""
Motor de búsqueda y filtros.

Compone texto libre + filtros estructurados en un predicado y lo
aplica al catálogo preservando su orden.
"""

from vitrina.search.compiler import Predicate, build_clauses, clause_names, compile_filters
from vitrina.search.state import (
    set_field,
    clear_filters,
    is_active,
    set_price_range,
    toggle_property_type,
    toggle_amenity,
)
from vitrina.search.engine import SearchResult, search, run_search
from vitrina.search.facets import (
    PriceRange,
    QUICK_PRICE_RANGES,
    property_type_options,
    price_bounds,
    matching_quick_range,
)
from vitrina.search.presets import PresetService, save_preset, load_preset

__all__ = [
    # Compilador
    "Predicate",
    "build_clauses",
    "clause_names",
    "compile_filters",
    # Estado
    "set_field",
    "clear_filters",
    "is_active",
    "set_price_range",
    "toggle_property_type",
    "toggle_amenity",
    # Motor
    "SearchResult",
    "search",
    "run_search",
    # Facets
    "PriceRange",
    "QUICK_PRICE_RANGES",
    "property_type_options",
    "price_bounds",
    "matching_quick_range",
    # Presets
    "PresetService",
    "save_preset",
    "load_preset",
]
