"""FieldValue sentinels for create(), set() and update().

A sentinel stands in for a literal value inside document data. The write
collector consumes it: sentinels become field transforms, DELETE_FIELD
becomes an update-mask entry; neither is written as a literal field.
"""

from __future__ import annotations

from typing import Any

from firelite.domain.enums import TransformKind
from firelite.domain.exceptions import ValidationException


def _require_number(value: Any, kind: TransformKind) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationException(
            f"FieldValue.{kind.name.lower()}() requires a number, got {type(value).__name__}",
            field="value",
        )


class FieldValue:
    """Server-side transform directive used in place of a literal value."""

    __slots__ = ("kind", "operand")

    def __init__(self, kind: TransformKind, operand: Any = None) -> None:
        self.kind = kind
        self.operand = operand

    @classmethod
    def server_timestamp(cls) -> FieldValue:
        """Set the field to the time the server processed the request."""
        return cls(TransformKind.SERVER_TIMESTAMP)

    @classmethod
    def increment(cls, n: int | float) -> FieldValue:
        """Add n to the field's current value.

        Integer arithmetic is kept when both the stored value and n are
        integers (capped to the signed 64-bit range), otherwise IEEE 754
        doubles are used. A missing or non-numeric field is set to n.
        """
        _require_number(n, TransformKind.INCREMENT)
        return cls(TransformKind.INCREMENT, n)

    @classmethod
    def maximum(cls, n: int | float) -> FieldValue:
        """Set the field to the larger of its current value and n."""
        _require_number(n, TransformKind.MAXIMUM)
        return cls(TransformKind.MAXIMUM, n)

    @classmethod
    def minimum(cls, n: int | float) -> FieldValue:
        """Set the field to the smaller of its current value and n."""
        _require_number(n, TransformKind.MINIMUM)
        return cls(TransformKind.MINIMUM, n)

    @classmethod
    def array_union(cls, *elements: Any) -> FieldValue:
        """Append each element not already present in the stored array.

        A field that is not an array is overwritten with exactly the given
        elements.
        """
        return cls(TransformKind.ARRAY_UNION, list(elements))

    @classmethod
    def array_remove(cls, *elements: Any) -> FieldValue:
        """Remove every instance of each element from the stored array.

        A field that is not an array is overwritten with an empty array.
        """
        return cls(TransformKind.ARRAY_REMOVE, list(elements))

    @staticmethod
    def delete() -> DeleteField:
        """Return the marker that removes a field in set(merge=True) or update()."""
        return DELETE_FIELD

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldValue):
            return NotImplemented
        return self.kind is other.kind and self.operand == other.operand

    def __hash__(self) -> int:
        return hash(self.kind)

    def __repr__(self) -> str:
        if self.kind is TransformKind.SERVER_TIMESTAMP:
            return "FieldValue.server_timestamp()"
        return f"FieldValue({self.kind.name}, {self.operand!r})"


class DeleteField:
    """Marker for a field that is cleared rather than written."""

    _instance: DeleteField | None = None

    def __new__(cls) -> DeleteField:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "DELETE_FIELD"


DELETE_FIELD = DeleteField()
