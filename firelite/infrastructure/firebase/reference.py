"""Document and collection references; matches firestore API style.

Paths are relative to the database root (e.g. 'users/alice/posts/p1').
The qualified path (projects/<p>/databases/<d>/documents/...) is what goes
on the wire.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from firelite.domain.exceptions import ValidationException
from firelite.shared.utils.generators import generate_auto_id

if TYPE_CHECKING:
    from datetime import datetime

    from firelite.domain.value_objects import Precondition
    from firelite.infrastructure.firebase._rest_client import FirestoreRESTClient
    from firelite.infrastructure.firebase.document import DocumentSnapshot
    from firelite.infrastructure.firebase.write_batch import WriteResult


def _split_path(path: str) -> list[str]:
    parts = path.strip("/").split("/") if path.strip("/") else []
    if any(not part for part in parts):
        raise ValidationException(f"Path must not contain empty segments: {path!r}", field="path")
    return parts


class DocumentReference:
    """Reference to a single document."""

    def __init__(self, client: FirestoreRESTClient, path: str) -> None:
        parts = _split_path(path)
        if not parts or len(parts) % 2 != 0:
            raise ValidationException(
                f"Document path must have an even number of segments: {path!r}",
                field="path",
            )
        self._client = client
        self._path = "/".join(parts)

    @property
    def client(self) -> FirestoreRESTClient:
        return self._client

    @property
    def id(self) -> str:
        return self._path.rsplit("/", 1)[-1]

    @property
    def path(self) -> str:
        return self._path

    @property
    def qualified_path(self) -> str:
        """Absolute resource name used on the wire."""
        return f"{self._client.base_path}/{self._path}"

    @property
    def parent(self) -> CollectionReference:
        return CollectionReference(self._client, self._path.rsplit("/", 1)[0])

    def collection(self, collection_id: str) -> CollectionReference:
        return CollectionReference(self._client, f"{self._path}/{collection_id}")

    async def get(
        self,
        field_paths: list[str] | None = None,
        read_time: datetime | None = None,
    ) -> DocumentSnapshot:
        """Fetch the document; the snapshot's exists is False if it is missing."""
        snapshots = await self._client.batch_get([self], field_paths, read_time)
        return snapshots[0]

    async def create(self, data: dict[str, Any]) -> WriteResult:
        """Create the document; the server rejects the write if it already exists."""
        batch = self._client.batch()
        batch.create(self, data)
        (result,) = await batch.commit()
        return result

    async def set(self, data: dict[str, Any], *, merge: bool = False) -> WriteResult | None:
        """Overwrite the document, or merge data into it when merge is True.

        Returns None when a merge has nothing to write.
        """
        batch = self._client.batch()
        batch.set(self, data, merge=merge)
        if not len(batch):
            return None
        (result,) = await batch.commit()
        return result

    async def update(
        self, data: dict[str, Any], precondition: Precondition | None = None
    ) -> WriteResult | None:
        """Update the given fields. Returns None when there is nothing to write."""
        batch = self._client.batch()
        batch.update(self, data, precondition)
        if not len(batch):
            return None
        (result,) = await batch.commit()
        return result

    async def delete(self, precondition: Precondition | None = None) -> WriteResult:
        batch = self._client.batch()
        batch.delete(self, precondition)
        (result,) = await batch.commit()
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DocumentReference):
            return NotImplemented
        return self._client is other._client and self._path == other._path

    def __hash__(self) -> int:
        return hash(self._path)

    def __repr__(self) -> str:
        return f"DocumentReference({self._path!r})"


class CollectionReference:
    """Reference to a collection."""

    def __init__(self, client: FirestoreRESTClient, path: str) -> None:
        parts = _split_path(path)
        if len(parts) % 2 != 1:
            raise ValidationException(
                f"Collection path must have an odd number of segments: {path!r}",
                field="path",
            )
        self._client = client
        self._path = "/".join(parts)

    @property
    def id(self) -> str:
        return self._path.rsplit("/", 1)[-1]

    @property
    def path(self) -> str:
        return self._path

    @property
    def parent(self) -> DocumentReference | None:
        """Owning document for a subcollection, None for a root collection."""
        if "/" not in self._path:
            return None
        return DocumentReference(self._client, self._path.rsplit("/", 1)[0])

    def document(self, document_id: str | None = None) -> DocumentReference:
        """Reference a document in this collection; a random id is used when omitted."""
        return DocumentReference(
            self._client, f"{self._path}/{document_id or generate_auto_id()}"
        )

    async def add(self, data: dict[str, Any]) -> DocumentReference:
        """Create a document with an auto id and return its reference."""
        ref = self.document()
        await ref.create(data)
        return ref

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CollectionReference):
            return NotImplemented
        return self._client is other._client and self._path == other._path

    def __hash__(self) -> int:
        return hash(self._path)

    def __repr__(self) -> str:
        return f"CollectionReference({self._path!r})"
