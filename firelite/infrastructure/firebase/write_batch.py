"""Write planning and atomic batch commit.

Each create/set/update/delete call turns its data into one protocol Write
(or none, for an update with nothing to change). commit() sends all of
them in one :batchWrite request and maps the results back in order.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any

from firelite.domain.enums import WriteKind
from firelite.domain.exceptions import (
    BatchAlreadyCommittedException,
    FieldValuePlacementException,
)
from firelite.domain.value_objects import Precondition
from firelite.infrastructure.firebase._rest_encoding import encode_fields
from firelite.infrastructure.firebase.update_collector import UpdateCollector
from firelite.shared.telemetry.tracing import add_span_attributes, traced
from firelite.shared.utils.datetime import parse_rfc3339

if TYPE_CHECKING:
    from firelite.infrastructure.firebase._rest_client import FirestoreRESTClient
    from firelite.infrastructure.firebase.reference import DocumentReference

logger = logging.getLogger(__name__)

# A create must not overwrite an existing document.
_MUST_NOT_EXIST = Precondition(exists=False)


@dataclass(frozen=True)
class WriteResult:
    """Outcome of one write in a committed batch.

    update_time is None for deletes and for writes that failed; status_code
    is the google.rpc.Code of the write (0 = OK).
    """

    update_time: datetime | None
    status_code: int = 0
    status_message: str = ""

    @property
    def ok(self) -> bool:
        return self.status_code == 0


def plan_write(
    name: str,
    data: dict[str, Any],
    kind: WriteKind,
    precondition: Precondition | None = None,
) -> dict | None:
    """Build the Write message for one document.

    Args:
        name: Qualified document name.
        data: Document data; may contain FieldValue sentinels and DELETE_FIELD.
        kind: create, set (full replace), merge or update.
        precondition: Optional currentDocument condition (ignored for create,
            which always requires the document to be absent).

    Returns:
        The Write dict, or None when a merge/update has no fields and no
        transforms (nothing to send).

    Raises:
        FieldValuePlacementException: If a create or full set contains
            DELETE_FIELD; only merge and update can remove fields.
    """
    collector = UpdateCollector()
    fields = encode_fields(data, collector)
    if collector.deleted_paths and kind in (WriteKind.CREATE, WriteKind.SET):
        raise FieldValuePlacementException("delete")

    if kind in (WriteKind.MERGE, WriteKind.UPDATE):
        if not collector.field_paths:
            if not collector.transforms:
                return None
            write: dict[str, Any] = {
                "transform": {"document": name, "fieldTransforms": collector.transforms}
            }
        else:
            write = {
                "update": {"name": name, "fields": fields},
                "updateMask": collector.mask(),
            }
    else:
        write = {"update": {"name": name, "fields": fields}}

    if collector.transforms and "update" in write:
        write["updateTransforms"] = collector.transforms
    if kind is WriteKind.CREATE:
        write["currentDocument"] = _MUST_NOT_EXIST.to_wire()
    elif precondition is not None:
        write["currentDocument"] = precondition.to_wire()
    return write


class WriteBatch:
    """Accumulates writes and commits them in a single request.

    A batch is single-use: after commit() every further call raises
    BatchAlreadyCommittedException.
    """

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._writes: list[dict] = []
        self._committed = False

    def __len__(self) -> int:
        return len(self._writes)

    @property
    def writes(self) -> tuple[dict, ...]:
        """Copies of the planned Write messages, in call order."""
        return tuple(copy.deepcopy(w) for w in self._writes)

    @property
    def committed(self) -> bool:
        return self._committed

    def create(self, ref: DocumentReference, data: dict[str, Any]) -> WriteBatch:
        """Write every field of data; fails on commit if the document exists."""
        return self._update(ref, data, WriteKind.CREATE)

    def set(
        self, ref: DocumentReference, data: dict[str, Any], *, merge: bool = False
    ) -> WriteBatch:
        """Replace the document with data, or merge the given fields into it."""
        return self._update(ref, data, WriteKind.MERGE if merge else WriteKind.SET)

    def update(
        self,
        ref: DocumentReference,
        data: dict[str, Any],
        precondition: Precondition | None = None,
    ) -> WriteBatch:
        """Write only the given fields; other fields of the document are kept."""
        return self._update(ref, data, WriteKind.UPDATE, precondition)

    def delete(
        self, ref: DocumentReference, precondition: Precondition | None = None
    ) -> WriteBatch:
        self._check_not_committed()
        write: dict[str, Any] = {"delete": ref.qualified_path}
        if precondition is not None:
            write["currentDocument"] = precondition.to_wire()
        self._writes.append(write)
        return self

    @traced("firestore.batch_write")
    async def commit(self) -> list[WriteResult]:
        """Send all writes in one request and return one result per write.

        Raises:
            BatchAlreadyCommittedException: If the batch was already committed.
            httpx.HTTPStatusError: If the request is rejected as a whole.
        """
        self._check_not_committed()
        self._committed = True
        writes = self._writes
        add_span_attributes(write_count=len(writes))
        if not writes:
            logger.debug("Skipping commit of empty write batch")
            return []

        logger.debug("Committing %d writes", len(writes))
        response = await self._client.request("POST", ":batchWrite", {"writes": list(writes)})
        write_results = response.get("writeResults") or []
        statuses = response.get("status") or []
        results: list[WriteResult] = []
        for index in range(len(writes)):
            result = write_results[index] if index < len(write_results) else {}
            status = statuses[index] if index < len(statuses) else {}
            update_time = result.get("updateTime")
            write_result = WriteResult(
                update_time=parse_rfc3339(update_time) if update_time else None,
                status_code=int(status.get("code", 0)),
                status_message=status.get("message", ""),
            )
            if not write_result.ok:
                logger.warning(
                    "Write %d failed with code %d: %s",
                    index,
                    write_result.status_code,
                    write_result.status_message,
                )
            results.append(write_result)
        return results

    def _update(
        self,
        ref: DocumentReference,
        data: dict[str, Any],
        kind: WriteKind,
        precondition: Precondition | None = None,
    ) -> WriteBatch:
        self._check_not_committed()
        write = plan_write(ref.qualified_path, data, kind, precondition)
        if write is None:
            logger.debug("Nothing to %s for %s, skipping", kind.value, ref.path)
        else:
            self._writes.append(write)
        return self

    def _check_not_committed(self) -> None:
        if self._committed:
            raise BatchAlreadyCommittedException()
