"""
Script para buscar en el catálogo desde la terminal.

Aplica texto libre + filtros estructurados y lista los resultados
en el orden del catálogo.

Uso:
    python -m vitrina.scripts.run_search --data listings.json --query lake --price-max 500000
    python -m vitrina.scripts.run_search --type House --type Condo --amenity Pool
    python -m vitrina.scripts.run_search --preset 42 --save-preset "Casas con pileta"
    python -m vitrina.scripts.run_search --toggle-saved 3 --saved
"""

import argparse
import logging
import sys
from typing import Optional

import structlog

from vitrina.browsing import BrowsingSession
from vitrina.config import get_settings
from vitrina.database import get_stores
from vitrina.errors import VitrinaError
from vitrina.models import FilterState
from vitrina.search import clear_filters, set_field

logger = structlog.get_logger()

# Flag de CLI -> campo de FilterState
_FILTER_ARGS = {
    "query": "search_query",
    "price_min": "price_min",
    "price_max": "price_max",
    "types": "property_types",
    "bedrooms_min": "bedrooms_min",
    "bathrooms_min": "bathrooms_min",
    "sqft_min": "square_feet_min",
    "sqft_max": "square_feet_max",
    "location": "location",
    "amenities": "amenities",
}


def configure_logging(level: str) -> None:
    """Configura logging stdlib + structlog para consola."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Buscar propiedades en el catálogo")
    parser.add_argument("--data", help="JSON con listings para el backend en memoria")

    filters = parser.add_argument_group("filtros")
    filters.add_argument("--query", help="Texto libre (título, dirección, descripción)")
    filters.add_argument("--price-min", type=float)
    filters.add_argument("--price-max", type=float)
    filters.add_argument("--type", dest="types", action="append", help="Tipo de propiedad (repetible)")
    filters.add_argument("--bedrooms-min", type=int)
    filters.add_argument("--bathrooms-min", type=int)
    filters.add_argument("--sqft-min", type=int)
    filters.add_argument("--sqft-max", type=int)
    filters.add_argument("--location", help="Ciudad, barrio o ZIP")
    filters.add_argument("--amenity", dest="amenities", action="append", help="Amenity requerida (repetible)")

    presets = parser.add_argument_group(
        "presets",
        "Con el backend en memoria los presets y guardados no persisten entre "
        "ejecuciones; usar STORE_BACKEND=supabase para reutilizarlos.",
    )
    presets.add_argument("--preset", help="ID de un preset guardado para usar como base")
    presets.add_argument("--save-preset", metavar="NAME", help="Guarda los filtros como preset")

    saved = parser.add_argument_group("guardados")
    saved.add_argument("--toggle-saved", metavar="LISTING_ID", help="Guarda/quita un listing")
    saved.add_argument("--saved", action="store_true", help="Lista las propiedades guardadas")

    return parser


def build_state(args: argparse.Namespace, base: Optional[FilterState] = None) -> FilterState:
    """Aplica los flags de filtro presentes sobre el estado base."""
    state = base if base is not None else clear_filters()
    for arg_name, field_name in _FILTER_ARGS.items():
        value = getattr(args, arg_name, None)
        if value is not None:
            state = set_field(state, field_name, value)
    return state


def run(args: argparse.Namespace) -> int:
    settings = get_settings()
    if args.data:
        settings = settings.model_copy(
            update={"store_backend": "memory", "listings_seed_file": args.data}
        )

    session = BrowsingSession(get_stores(settings))

    base = session.load_preset(args.preset) if args.preset else None
    state = build_state(args, base)

    if args.save_preset:
        preset = session.save_preset(args.save_preset, state)
        logger.info("Preset disponible", preset_id=preset.id, name=preset.name)

    if args.toggle_saved:
        now_saved = session.toggle_saved(args.toggle_saved)
        logger.info("Estado de guardado", listing_id=args.toggle_saved, guardado=now_saved)

    if args.saved:
        for item in session.saved_listings():
            logger.info(
                "Guardado",
                id=item.listing.id,
                title=item.listing.title,
                saved_date=item.saved_date.isoformat(),
            )
        return 0

    result = session.browse(state)
    flags = session.saved_flags(result.listings)
    for listing in result.listings:
        logger.info(
            "Resultado",
            id=listing.id,
            title=listing.title,
            price=listing.price,
            type=listing.property_type,
            address=listing.address,
            guardado=flags[listing.id],
        )

    logger.info(
        f"{result.result_count} properties found",
        filtros_activos=result.has_active_constraint,
    )
    return 0


def main():
    """Entry point del script."""
    args = build_parser().parse_args()
    configure_logging(get_settings().log_level)

    try:
        sys.exit(run(args))

    except KeyboardInterrupt:
        logger.info("Búsqueda interrumpida por usuario")
        sys.exit(130)
    except VitrinaError as e:
        logger.error("Error en búsqueda", error=str(e))
        sys.exit(1)
    except Exception as e:
        logger.error("Error fatal en búsqueda", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
