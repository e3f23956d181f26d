"""Domain enumerations for the firelite client.

Enums represent fixed sets of protocol values (e.g. transform directives).
"""

from enum import Enum


class TransformKind(str, Enum):
    """Server-side field transform requested by a FieldValue sentinel.

    Values are the FieldTransform member names on the wire.
    """

    SERVER_TIMESTAMP = "setToServerValue"
    INCREMENT = "increment"
    MAXIMUM = "maximum"
    MINIMUM = "minimum"
    ARRAY_UNION = "appendMissingElements"
    ARRAY_REMOVE = "removeAllFromArray"

    @classmethod
    def values(cls) -> list[str]:
        """Return all wire names as strings.

        Returns:
            List of enum value strings.
        """
        return [kind.value for kind in cls]


class WriteKind(str, Enum):
    """How a batch write treats the fields it is given."""

    CREATE = "create"
    SET = "set"
    MERGE = "merge"
    UPDATE = "update"
