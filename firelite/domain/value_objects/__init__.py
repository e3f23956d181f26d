"""Domain value objects (GeoPoint, Precondition)."""

from firelite.domain.value_objects.core import GeoPoint, Precondition

__all__ = [
    "GeoPoint",
    "Precondition",
]
