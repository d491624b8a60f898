"""
vitrina: búsqueda y filtros sobre catálogos inmobiliarios
con propiedades guardadas y presets de filtros.
"""

__version__ = "0.1.0"
