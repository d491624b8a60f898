"""
Sesión de navegación del catálogo.

Compone motor de búsqueda + sincronizador de guardados + presets
sobre stores inyectados:
- Búsqueda: recalcula el resultado sobre el catálogo completo
- Guardados: un índice por ciclo de render, toggles sin cache
- Consistencia: borrar un listing purga sus relaciones guardadas
"""

from dataclasses import dataclass
from typing import Any, Iterable, Optional

import structlog

from vitrina.database import Stores
from vitrina.errors import NotFoundError
from vitrina.models import FilterPreset, FilterState, Listing
from vitrina.saved import SavedListing, SavedRelationSynchronizer
from vitrina.search import (
    PresetService,
    SearchResult,
    clear_filters,
    price_bounds,
    property_type_options,
    run_search,
)

logger = structlog.get_logger()


@dataclass
class FilterOptions:
    """Opciones del sidebar derivadas del catálogo actual."""

    property_types: list[str]
    price_bounds: Optional[tuple[float, float]]


class BrowsingSession:
    """
    Punto de composición del motor.

    Los stores se construyen una vez por proceso/sesión (ver
    vitrina.database.get_stores) y se pasan por referencia.

    Flujo de una pantalla de resultados:
    1. browse(state) -> SearchResult
    2. saved_flags(result.listings) -> {listing_id: bool}
    3. toggle_saved(listing_id) ante la acción del usuario
    """

    def __init__(self, stores: Stores):
        self.listing_store = stores.listings
        self.synchronizer = SavedRelationSynchronizer(stores.saved)
        self.presets = PresetService(stores.presets)

    # Búsqueda

    def browse(self, state: Optional[FilterState] = None) -> SearchResult:
        """
        Filtra el catálogo completo con el estado dado.

        Raises:
            StoreUnavailableError: Si el store de listings no responde
        """
        state = state if state is not None else clear_filters()
        listings = self.listing_store.get_all()
        result = run_search(listings, state)

        logger.info(
            "Catálogo filtrado",
            total=len(listings),
            resultados=result.result_count,
            filtros_activos=result.has_active_constraint,
        )
        return result

    def filter_options(self) -> FilterOptions:
        listings = self.listing_store.get_all()
        return FilterOptions(
            property_types=property_type_options(listings),
            price_bounds=price_bounds(listings),
        )

    # Guardados

    def saved_flags(self, listings: Iterable[Listing]) -> dict[str, bool]:
        """Flag "guardado" por listing, con una sola lectura del store."""
        index = self.synchronizer.saved_index()
        return {listing.id: index.is_saved(listing.id) for listing in listings}

    def toggle_saved(self, listing_id: str) -> bool:
        """
        Guarda o quita de guardados un listing del catálogo.

        Raises:
            NotFoundError: Si el listing no existe en el catálogo
        """
        if self.listing_store.get_by_id(listing_id) is None:
            raise NotFoundError("Listing", str(listing_id))
        return self.synchronizer.toggle(listing_id)

    def saved_listings(self) -> list[SavedListing]:
        return self.synchronizer.saved_listings(self.listing_store.get_all())

    # Catálogo

    def create_listing(self, partial: dict[str, Any]) -> Listing:
        listing = self.listing_store.create(partial)
        logger.info("Listing creado", listing_id=listing.id, title=listing.title)
        return listing

    def update_listing(self, listing_id: str, partial: dict[str, Any]) -> Listing:
        return self.listing_store.update(listing_id, partial)

    def delete_listing(self, listing_id: str) -> Listing:
        """Borra el listing y las relaciones guardadas que apuntaban a él."""
        deleted = self.listing_store.delete(listing_id)
        purged = self.synchronizer.purge_listing(deleted.id)
        logger.info("Listing borrado", listing_id=deleted.id, guardados_purgados=purged)
        return deleted

    # Presets

    def save_preset(self, name: str, state: FilterState) -> FilterPreset:
        return self.presets.save(name, state)

    def load_preset(self, preset_id: str) -> FilterState:
        return self.presets.load(preset_id)

    def delete_preset(self, preset_id: str) -> FilterPreset:
        return self.presets.delete(preset_id)

    def list_presets(self) -> list[FilterPreset]:
        return self.presets.list_all()
