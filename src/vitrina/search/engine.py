"""
Motor de búsqueda.

Aplica el predicado compilado a la colección completa del catálogo,
preservando el orden de entrada. Cada llamada recalcula todo desde
sus argumentos: no hay estado compartido entre búsquedas.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional

import structlog

from vitrina.models import FilterState, Listing
from vitrina.search.compiler import clause_names, compile_filters
from vitrina.search.state import is_active

logger = structlog.get_logger()


@dataclass(frozen=True)
class SearchResult:
    """Resultado de una búsqueda con los valores derivados para la UI."""

    listings: list[Listing] = field(default_factory=list)
    has_active_constraint: bool = False

    @property
    def result_count(self) -> int:
        return len(self.listings)


def search(listings: Iterable[Listing], state: Optional[FilterState] = None) -> list[Listing]:
    """
    Filtra los listings con el estado dado.

    Filtro estable: el resultado respeta el orden del catálogo y es
    una lista vacía (nunca un error) si nada matchea.
    """
    predicate = compile_filters(state if state is not None else FilterState())
    return [listing for listing in listings if predicate(listing)]


def run_search(listings: Iterable[Listing], state: Optional[FilterState] = None) -> SearchResult:
    """Ejecuta la búsqueda y arma el SearchResult con contadores."""
    state = state if state is not None else FilterState()
    catalog = list(listings)
    results = search(catalog, state)

    logger.debug(
        "Búsqueda ejecutada",
        total=len(catalog),
        resultados=len(results),
        clausulas=clause_names(state),
    )

    return SearchResult(listings=results, has_active_constraint=is_active(state))
