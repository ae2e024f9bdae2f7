"""Objets valeur immuables (filtres de liste, metadonnees de pagination)."""

from cinestore.core.value_objects.filters import (
    Filters,
    Metadata,
    calculate_metadata,
    validate_filters,
)

__all__ = [
    "Filters",
    "Metadata",
    "calculate_metadata",
    "validate_filters",
]
