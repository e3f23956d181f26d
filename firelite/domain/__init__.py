"""Domain layer: value objects, enums, and exceptions.

No dependencies on infrastructure. Used by the infrastructure layer.
"""

from firelite.domain.enums import TransformKind, WriteKind
from firelite.domain.exceptions import (
    BatchAlreadyCommittedException,
    FieldValuePlacementException,
    FireliteException,
    MalformedWireValueException,
    UnsupportedTypeException,
    ValidationException,
)
from firelite.domain.value_objects import GeoPoint, Precondition

__all__ = [
    # Enums
    "TransformKind",
    "WriteKind",
    # Exceptions
    "BatchAlreadyCommittedException",
    "FieldValuePlacementException",
    "FireliteException",
    "MalformedWireValueException",
    "UnsupportedTypeException",
    "ValidationException",
    # Value objects
    "GeoPoint",
    "Precondition",
]
