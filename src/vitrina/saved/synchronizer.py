"""
Sincronizador de propiedades guardadas.

Decide qué mutación pedirle al SavedRelationStore para un toggle y
deriva el flag "guardado" siempre desde el contenido actual del store.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, Optional, Union

import structlog

from vitrina.database.base import SavedRelationStore
from vitrina.models import Listing, SavedRelation

logger = structlog.get_logger()


@dataclass(frozen=True)
class CreateRelation:
    """Pedido de alta: el listing no estaba guardado."""

    property_id: str
    saved_date: datetime
    notes: str = ""

    def to_record(self) -> dict:
        return {
            "property_id": self.property_id,
            "saved_date": self.saved_date,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class DeleteRelation:
    """Pedido de baja de la relación canónica del listing."""

    relation_id: str
    property_id: str
    # Relaciones extra para el mismo listing (precondición corrupta)
    duplicate_ids: tuple[str, ...] = ()


SavedAction = Union[CreateRelation, DeleteRelation]


class SavedIndex:
    """
    Índice listing_id -> relación canónica, armado en una sola pasada.

    Reemplaza el re-fetch por tarjeta: se construye una vez por ciclo
    de render y responde cada lookup en O(1). Si hay más de una relación
    para el mismo listing, la primera es la canónica y el resto se
    reporta como anomalía sin tocarse.
    """

    def __init__(self, relations: Iterable[SavedRelation]):
        self._by_listing: dict[str, SavedRelation] = {}
        self._duplicates: dict[str, list[str]] = {}

        for relation in relations:
            if relation.property_id in self._by_listing:
                self._duplicates.setdefault(relation.property_id, []).append(relation.id)
            else:
                self._by_listing[relation.property_id] = relation

        if self._duplicates:
            logger.warning(
                "Relaciones guardadas duplicadas",
                listings=sorted(self._duplicates),
                total=sum(len(ids) for ids in self._duplicates.values()),
            )

    def is_saved(self, listing_id: str) -> bool:
        return str(listing_id) in self._by_listing

    def relation_for(self, listing_id: str) -> Optional[SavedRelation]:
        return self._by_listing.get(str(listing_id))

    def duplicates_for(self, listing_id: str) -> tuple[str, ...]:
        return tuple(self._duplicates.get(str(listing_id), ()))

    @property
    def duplicates(self) -> dict[str, tuple[str, ...]]:
        return {key: tuple(ids) for key, ids in self._duplicates.items()}

    def relations(self) -> list[SavedRelation]:
        """Relaciones canónicas en el orden del store."""
        return list(self._by_listing.values())

    def __contains__(self, listing_id: object) -> bool:
        return str(listing_id) in self._by_listing

    def __len__(self) -> int:
        return len(self._by_listing)


def is_saved(listing_id: str, relations: Iterable[SavedRelation]) -> bool:
    """True si alguna relación apunta al listing."""
    listing_id = str(listing_id)
    return any(relation.property_id == listing_id for relation in relations)


def toggle(
    listing_id: str,
    relations: Union[SavedIndex, Iterable[SavedRelation]],
    now: Optional[datetime] = None,
) -> SavedAction:
    """
    Decide la única mutación a pedir para invertir el estado guardado.

    No hace I/O: devuelve CreateRelation si no hay relación para el
    listing, o DeleteRelation con el ID de la relación canónica.
    """
    index = relations if isinstance(relations, SavedIndex) else SavedIndex(relations)
    listing_id = str(listing_id)

    relation = index.relation_for(listing_id)
    if relation is None:
        return CreateRelation(
            property_id=listing_id,
            saved_date=now or datetime.now(timezone.utc),
        )

    duplicate_ids = index.duplicates_for(listing_id)
    if duplicate_ids:
        logger.warning(
            "Toggle sobre listing con relaciones duplicadas; solo se borra la canónica",
            listing_id=listing_id,
            relation_id=relation.id,
            duplicate_ids=list(duplicate_ids),
        )

    return DeleteRelation(
        relation_id=relation.id,
        property_id=listing_id,
        duplicate_ids=duplicate_ids,
    )


@dataclass(frozen=True)
class SavedListing:
    """Listing del catálogo junto a su relación de guardado."""

    listing: Listing
    relation: SavedRelation

    @property
    def saved_date(self) -> datetime:
        return self.relation.saved_date


class SavedRelationSynchronizer:
    """
    Aplica toggles contra un SavedRelationStore.

    No cachea el flag entre llamadas: si el store rechaza la mutación
    el error se propaga y la vista del llamador queda como estaba.
    """

    def __init__(self, store: SavedRelationStore):
        self.store = store

    def saved_index(self) -> SavedIndex:
        """Una pasada sobre todas las relaciones del store."""
        return SavedIndex(self.store.get_all())

    def is_saved(self, listing_id: str) -> bool:
        return self.saved_index().is_saved(listing_id)

    def apply(self, action: SavedAction) -> SavedRelation:
        """Ejecuta la mutación decidida por toggle()."""
        try:
            if isinstance(action, CreateRelation):
                relation = self.store.create(action.to_record())
                logger.info(
                    "Propiedad guardada",
                    listing_id=action.property_id,
                    relation_id=relation.id,
                )
                return relation

            relation = self.store.delete(action.relation_id)
            logger.info(
                "Propiedad quitada de guardados",
                listing_id=action.property_id,
                relation_id=action.relation_id,
            )
            return relation
        except Exception as e:
            logger.error(
                "Error aplicando toggle de guardado",
                listing_id=action.property_id,
                action=type(action).__name__,
                error=str(e),
            )
            raise

    def toggle(self, listing_id: str, now: Optional[datetime] = None) -> bool:
        """
        Invierte el estado guardado del listing.

        Returns:
            El flag "guardado" re-derivado del store tras la mutación
        """
        action = toggle(listing_id, self.saved_index(), now=now)
        self.apply(action)
        return self.is_saved(listing_id)

    def remove(self, relation_id: str) -> SavedRelation:
        """Borra una relación puntual (página de guardados)."""
        relation = self.store.delete(relation_id)
        logger.info(
            "Propiedad quitada de guardados",
            listing_id=relation.property_id,
            relation_id=relation_id,
        )
        return relation

    def purge_listing(self, listing_id: str) -> int:
        """
        Borra todas las relaciones de un listing que salió del catálogo.

        Returns:
            Cantidad de relaciones borradas
        """
        listing_id = str(listing_id)
        stale = [
            relation
            for relation in self.store.get_all()
            if relation.property_id == listing_id
        ]
        for relation in stale:
            self.store.delete(relation.id)

        if stale:
            logger.info("Relaciones huérfanas borradas", listing_id=listing_id, total=len(stale))
        return len(stale)

    def saved_listings(self, listings: Iterable[Listing]) -> list[SavedListing]:
        """
        Cruza las relaciones con el catálogo.

        Las relaciones cuyo listing ya no existe se omiten. El orden es
        el de las relaciones en el store.
        """
        by_id = {listing.id: listing for listing in listings}
        index = self.saved_index()

        joined: list[SavedListing] = []
        orphans = 0
        for relation in index.relations():
            listing = by_id.get(relation.property_id)
            if listing is None:
                orphans += 1
                continue
            joined.append(SavedListing(listing=listing, relation=relation))

        if orphans:
            logger.debug("Relaciones sin listing en el catálogo", total=orphans)
        return joined
