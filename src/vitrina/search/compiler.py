"""
Compilador de predicados.

Convierte un FilterState (incluida la búsqueda de texto libre) en un
único predicado sobre Listing: el AND de una cláusula por campo no vacío.
"""

from typing import Callable, Optional

from vitrina.models import FilterState, Listing

Predicate = Callable[[Listing], bool]


def _accept_all(listing: Listing) -> bool:
    return True


def _text(value: Optional[str]) -> str:
    """Normaliza texto para comparación case-insensitive."""
    return (value or "").strip().lower()


def _range_clause(
    getter: Callable[[Listing], float],
    low: Optional[float],
    high: Optional[float],
) -> Predicate:
    # Bordes inclusivos; un borde ausente no restringe ese lado
    def clause(listing: Listing) -> bool:
        value = getter(listing)
        if low is not None and value < low:
            return False
        if high is not None and value > high:
            return False
        return True

    return clause


def build_clauses(state: FilterState) -> list[tuple[str, Predicate]]:
    """
    Arma las cláusulas activas en orden de evaluación.

    Orden: texto libre, precio, tipo, dormitorios/baños, superficie,
    ubicación, amenities. El orden no cambia el resultado, solo fija
    qué cláusula corta primero.
    """
    clauses: list[tuple[str, Predicate]] = []

    # 1. Texto libre: título, dirección o descripción
    query = _text(state.search_query)
    if query:
        clauses.append((
            "search_query",
            lambda listing: (
                query in listing.title.lower()
                or query in listing.address.lower()
                or query in listing.description.lower()
            ),
        ))

    # 2. Precio
    if state.price_min is not None or state.price_max is not None:
        clauses.append((
            "price",
            _range_clause(lambda listing: listing.price, state.price_min, state.price_max),
        ))

    # 3. Tipo de propiedad (conjunto vacío = cualquiera)
    if state.property_types:
        property_types = state.property_types
        clauses.append((
            "property_types",
            lambda listing: listing.property_type in property_types,
        ))

    # 4. Dormitorios y baños mínimos
    if state.bedrooms_min is not None:
        bedrooms_min = state.bedrooms_min
        clauses.append(("bedrooms_min", lambda listing: listing.bedrooms >= bedrooms_min))
    if state.bathrooms_min is not None:
        bathrooms_min = state.bathrooms_min
        clauses.append(("bathrooms_min", lambda listing: listing.bathrooms >= bathrooms_min))

    # 5. Superficie
    if state.square_feet_min is not None or state.square_feet_max is not None:
        clauses.append((
            "square_feet",
            _range_clause(
                lambda listing: listing.square_feet,
                state.square_feet_min,
                state.square_feet_max,
            ),
        ))

    # 6. Ubicación: solo contra la dirección
    location = _text(state.location)
    if location:
        clauses.append(("location", lambda listing: location in listing.address.lower()))

    # 7. Amenities: todas las pedidas deben estar presentes
    if state.amenities:
        required = state.amenities
        clauses.append(("amenities", lambda listing: required <= listing.features))

    return clauses


def clause_names(state: FilterState) -> list[str]:
    """Nombres de las cláusulas activas, en orden de evaluación."""
    return [name for name, _ in build_clauses(state)]


def compile_filters(state: FilterState) -> Predicate:
    """
    Compila el estado de filtros a un predicado.

    Un estado sin restricciones compila a un predicado que acepta todo.
    """
    clauses = [clause for _, clause in build_clauses(state)]
    if not clauses:
        return _accept_all

    def predicate(listing: Listing) -> bool:
        return all(clause(listing) for clause in clauses)

    return predicate
