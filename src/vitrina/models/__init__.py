"""
Modelos de datos del sistema.

- Listing: propiedad del catálogo (solo lectura para el motor)
- FilterState / FilterPreset: restricciones de búsqueda y su snapshot persistido
- SavedRelation: bookmark del usuario sobre un Listing
"""

from vitrina.models.listing import Listing, Coordinates
from vitrina.models.filters import FilterState, FilterPreset
from vitrina.models.saved import SavedRelation

__all__ = [
    # Catálogo
    "Listing",
    "Coordinates",
    # Filtros
    "FilterState",
    "FilterPreset",
    # Guardados
    "SavedRelation",
]
