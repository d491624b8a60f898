"""
Propiedades guardadas.

Mantiene la relación listing <-> bookmark consistente con el catálogo.
"""

from vitrina.saved.synchronizer import (
    CreateRelation,
    DeleteRelation,
    SavedAction,
    SavedIndex,
    SavedListing,
    SavedRelationSynchronizer,
    is_saved,
    toggle,
)

__all__ = [
    "CreateRelation",
    "DeleteRelation",
    "SavedAction",
    "SavedIndex",
    "SavedListing",
    "SavedRelationSynchronizer",
    "is_saved",
    "toggle",
]
