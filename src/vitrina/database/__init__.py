"""
Módulo de base de datos.

Provee los contratos de stores, sus implementaciones (memoria y Supabase)
y una factory que arma el set de stores según la configuración.
"""

from dataclasses import dataclass
from typing import Optional

from vitrina.config import Settings, get_settings
from vitrina.database.base import (
    BaseStore,
    ListingStore,
    SavedRelationStore,
    FilterPresetStore,
)
from vitrina.database.memory import (
    InMemoryStore,
    InMemoryListingStore,
    InMemorySavedRelationStore,
    InMemoryFilterPresetStore,
)


@dataclass
class Stores:
    """Set de stores colaboradores que se inyecta en el catálogo."""

    listings: ListingStore
    saved: SavedRelationStore
    presets: FilterPresetStore


def get_stores(settings: Optional[Settings] = None) -> Stores:
    """
    Construye los stores según STORE_BACKEND.

    Se llama una vez por proceso/sesión; el resultado se pasa por
    referencia a quien compone el motor de búsqueda.
    """
    settings = settings or get_settings()

    if settings.store_backend == "supabase":
        # Import diferido: el backend en memoria no necesita el SDK
        from vitrina.database.repositories import (
            SupabaseListingRepository,
            SupabaseSavedRelationRepository,
            SupabaseFilterPresetRepository,
        )

        return Stores(
            listings=SupabaseListingRepository(),
            saved=SupabaseSavedRelationRepository(),
            presets=SupabaseFilterPresetRepository(),
        )

    if settings.listings_seed_file:
        listings = InMemoryListingStore.from_json_file(settings.listings_seed_file)
    else:
        listings = InMemoryListingStore()

    return Stores(
        listings=listings,
        saved=InMemorySavedRelationStore(),
        presets=InMemoryFilterPresetStore(),
    )


__all__ = [
    "Stores",
    "get_stores",
    "BaseStore",
    "ListingStore",
    "SavedRelationStore",
    "FilterPresetStore",
    "InMemoryStore",
    "InMemoryListingStore",
    "InMemorySavedRelationStore",
    "InMemoryFilterPresetStore",
]
