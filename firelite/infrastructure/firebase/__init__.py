"""Firestore REST client: value codec, write planning, references and snapshots."""

from firelite.infrastructure.firebase._rest_client import FirestoreRESTClient
from firelite.infrastructure.firebase.client import (
    close_firestore,
    get_firestore_client,
    init_firestore,
)
from firelite.infrastructure.firebase.document import DocumentSnapshot
from firelite.infrastructure.firebase.field_value import DELETE_FIELD, FieldValue
from firelite.infrastructure.firebase.reference import (
    CollectionReference,
    DocumentReference,
)
from firelite.infrastructure.firebase.write_batch import (
    WriteBatch,
    WriteResult,
    plan_write,
)

__all__ = [
    "CollectionReference",
    "DELETE_FIELD",
    "DocumentReference",
    "DocumentSnapshot",
    "FieldValue",
    "FirestoreRESTClient",
    "WriteBatch",
    "WriteResult",
    "close_firestore",
    "get_firestore_client",
    "init_firestore",
    "plan_write",
]
