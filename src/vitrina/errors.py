"""
Errores de dominio.

Los stores y servicios los propagan sin tragarlos; el llamador
decide cómo mostrarlos al usuario.
"""

from typing import Optional


class VitrinaError(Exception):
    """Error base del sistema."""


class ValidationError(VitrinaError):
    """Entrada inválida (ej: nombre de preset vacío, campo de filtro desconocido)."""


class NotFoundError(VitrinaError):
    """Se operó sobre un ID que no existe en el store."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} no encontrado: {entity_id}")


class StoreUnavailableError(VitrinaError):
    """Falla de transporte del store colaborador."""

    def __init__(self, message: str, operation: Optional[str] = None):
        self.operation = operation
        super().__init__(message)
