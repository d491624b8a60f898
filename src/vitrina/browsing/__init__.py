"""
Sesión de navegación.

Compone búsqueda, guardados y presets sobre stores inyectados.
"""

from vitrina.browsing.session import BrowsingSession, FilterOptions

__all__ = [
    "BrowsingSession",
    "FilterOptions",
]
