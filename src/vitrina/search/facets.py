"""
Opciones derivadas del catálogo para el sidebar de filtros.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from vitrina.models import FilterState, Listing


@dataclass(frozen=True)
class PriceRange:
    """Rango de precio predefinido (botones rápidos)."""

    label: str
    price_min: Optional[float] = None
    price_max: Optional[float] = None


QUICK_PRICE_RANGES = (
    PriceRange("Under $500K", price_max=500_000),
    PriceRange("$500K - $1M", price_min=500_000, price_max=1_000_000),
    PriceRange("$1M - $2M", price_min=1_000_000, price_max=2_000_000),
    PriceRange("Over $2M", price_min=2_000_000),
)


def property_type_options(listings: Iterable[Listing]) -> list[str]:
    """Tipos de propiedad únicos, en orden de primera aparición."""
    return list(dict.fromkeys(listing.property_type for listing in listings))


def price_bounds(listings: Iterable[Listing]) -> Optional[tuple[float, float]]:
    """Precio mínimo y máximo del catálogo; None si está vacío."""
    prices = [listing.price for listing in listings]
    if not prices:
        return None
    return min(prices), max(prices)


def matching_quick_range(state: FilterState) -> Optional[PriceRange]:
    """El rango rápido cuyo par de bordes coincide exactamente con el estado."""
    for price_range in QUICK_PRICE_RANGES:
        if (price_range.price_min, price_range.price_max) == (state.price_min, state.price_max):
            return price_range
    return None
