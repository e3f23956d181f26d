"""firelite: async Firestore REST client."""

from firelite.domain import (
    BatchAlreadyCommittedException,
    FieldValuePlacementException,
    FireliteException,
    GeoPoint,
    MalformedWireValueException,
    Precondition,
    UnsupportedTypeException,
    ValidationException,
)
from firelite.infrastructure.firebase import (
    DELETE_FIELD,
    CollectionReference,
    DocumentReference,
    DocumentSnapshot,
    FieldValue,
    FirestoreRESTClient,
    WriteBatch,
    WriteResult,
)

__all__ = [
    "BatchAlreadyCommittedException",
    "CollectionReference",
    "DELETE_FIELD",
    "DocumentReference",
    "DocumentSnapshot",
    "FieldValue",
    "FieldValuePlacementException",
    "FireliteException",
    "FirestoreRESTClient",
    "GeoPoint",
    "MalformedWireValueException",
    "Precondition",
    "UnsupportedTypeException",
    "ValidationException",
    "WriteBatch",
    "WriteResult",
]
