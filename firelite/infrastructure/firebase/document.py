"""Snapshot of a document read from Firestore."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from firelite.infrastructure.firebase._rest_encoding import decode_fields, decode_value
from firelite.infrastructure.firebase.reference import DocumentReference
from firelite.shared.utils.datetime import parse_rfc3339


class DocumentSnapshot:
    """Snapshot of a document (reference + wire document).

    Fields stay in wire form until asked for; get() decodes a single field.
    A snapshot of a missing document has exists False and no data.
    """

    def __init__(
        self,
        ref: DocumentReference,
        document: dict | None = None,
        read_time: str | None = None,
    ) -> None:
        self.ref = ref
        self._doc = document
        self._read_time = read_time

    @property
    def id(self) -> str:
        return self.ref.id

    @property
    def exists(self) -> bool:
        return self._doc is not None

    @property
    def create_time(self) -> datetime | None:
        return _parse_optional(self._doc.get("createTime")) if self._doc else None

    @property
    def update_time(self) -> datetime | None:
        return _parse_optional(self._doc.get("updateTime")) if self._doc else None

    @property
    def read_time(self) -> datetime | None:
        return _parse_optional(self._read_time)

    def to_dict(self) -> dict | None:
        """Decode all fields (keys sorted); None if the document does not exist."""
        if self._doc is None:
            return None
        return decode_fields(self.ref.client, self._doc.get("fields"))

    def get(self, field_path: str, default: Any = None) -> Any:
        """Return the value at a dotted field path without decoding the rest.

        Returns default when any segment of the path is missing or a
        non-final segment is not a map.
        """
        if self._doc is None:
            return default
        fields: dict | None = self._doc.get("fields")
        *parents, last = field_path.split(".")
        for segment in parents:
            value = (fields or {}).get(segment)
            if not value or "mapValue" not in value:
                return default
            fields = value["mapValue"].get("fields")
        value = (fields or {}).get(last)
        if value is None:
            return default
        return decode_value(self.ref.client, value)

    def __repr__(self) -> str:
        return f"DocumentSnapshot({self.ref.path!r}, exists={self.exists})"


def _parse_optional(value: str | None) -> datetime | None:
    return parse_rfc3339(value) if value else None
