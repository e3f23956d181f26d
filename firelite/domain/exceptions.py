"""Domain exceptions for the firelite client.

Defines the errors raised while encoding, decoding and planning writes.
Transport failures are not wrapped here; httpx errors propagate unchanged.
"""

from typing import Any


class FireliteException(Exception):
    """Base exception for all firelite errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field_path, type).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(FireliteException):
    """Raised when input validation fails (e.g. invalid path or operand)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or argument that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class UnsupportedTypeException(FireliteException):
    """Raised when a native value has no Firestore wire representation."""

    def __init__(self, type_name: str, field_path: str | None = None) -> None:
        """Initialize with the offending type name.

        Args:
            type_name: Name of the Python type that could not be encoded.
            field_path: Dotted path of the field being encoded, when known.
        """
        message = f"Unsupported value type: {type_name}"
        details: dict[str, Any] = {"type": type_name}
        if field_path:
            message = f"{message} (at '{field_path}')"
            details["field_path"] = field_path
        super().__init__(message, "UNSUPPORTED_TYPE", details)


class MalformedWireValueException(FireliteException):
    """Raised when a wire Value does not carry exactly one known kind key."""

    def __init__(self, reason: str, keys: list[str] | None = None) -> None:
        super().__init__(
            f"Malformed wire value: {reason}",
            "MALFORMED_WIRE_VALUE",
            {"keys": keys or []},
        )


class FieldValuePlacementException(FireliteException):
    """Raised when a sentinel is encoded outside a document field.

    Sentinels are only valid as the value of a map entry in data passed to
    create/set/update; not inside arrays, not as another sentinel's operand.
    """

    def __init__(self, kind: str) -> None:
        """Initialize with the sentinel kind.

        Args:
            kind: Wire name of the sentinel (e.g. 'increment', 'delete').
        """
        super().__init__(
            f"FieldValue '{kind}' can only be used as a field value in create(), set() or update()",
            "INVALID_FIELD_VALUE",
            {"kind": kind},
        )


class BatchAlreadyCommittedException(FireliteException):
    """Raised when a write batch is modified or committed after commit()."""

    def __init__(self) -> None:
        super().__init__(
            "Write batch has already been committed and can no longer be changed",
            "BATCH_ALREADY_COMMITTED",
        )
