"""Encode/decode Python values to/from Firestore REST API Value format.

One key is populated per wire Value:
nullValue, booleanValue, integerValue, doubleValue, timestampValue,
stringValue, bytesValue, referenceValue, geoPointValue, arrayValue, mapValue.
"""

from __future__ import annotations

import base64
import math
from collections.abc import Mapping
from datetime import datetime
from typing import TYPE_CHECKING, Any

from firelite.core.constants import (
    INT64_MAX,
    INT64_MIN,
    RESOURCE_PATH_RE,
    SERVER_VALUE_REQUEST_TIME,
)
from firelite.domain.enums import TransformKind
from firelite.domain.exceptions import (
    FieldValuePlacementException,
    MalformedWireValueException,
    UnsupportedTypeException,
)
from firelite.domain.value_objects import GeoPoint
from firelite.infrastructure.firebase.field_value import (
    DELETE_FIELD,
    DeleteField,
    FieldValue,
)
from firelite.infrastructure.firebase.reference import DocumentReference
from firelite.shared.utils.datetime import format_rfc3339, parse_rfc3339

if TYPE_CHECKING:
    from firelite.infrastructure.firebase._rest_client import FirestoreRESTClient
    from firelite.infrastructure.firebase.update_collector import UpdateCollector

_VALUE_KINDS = frozenset(
    {
        "nullValue",
        "booleanValue",
        "integerValue",
        "doubleValue",
        "timestampValue",
        "stringValue",
        "bytesValue",
        "referenceValue",
        "geoPointValue",
        "arrayValue",
        "mapValue",
    }
)


def _encode_double(v: float) -> float | str:
    # JSON has no NaN/Infinity; the REST API takes these string forms.
    if math.isnan(v):
        return "NaN"
    if math.isinf(v):
        return "Infinity" if v > 0 else "-Infinity"
    return v


def encode_value(v: Any, collector: UpdateCollector | None = None) -> dict:
    """Convert a Python value to a wire Value.

    The collector is only threaded into nested maps; array elements are
    encoded without it, so arrays are replaced as a whole.

    Raises:
        FieldValuePlacementException: If v is a sentinel (those are consumed
            by encode_fields before they get here).
        UnsupportedTypeException: If v has no wire representation.
    """
    if v is None:
        return {"nullValue": None}
    if isinstance(v, bool):
        return {"booleanValue": v}
    if isinstance(v, int):
        if INT64_MIN <= v <= INT64_MAX:
            return {"integerValue": str(v)}
        try:
            return {"doubleValue": _encode_double(float(v))}
        except OverflowError:
            raise UnsupportedTypeException(
                type(v).__name__, collector.current_path if collector else None
            ) from None
    if isinstance(v, float):
        return {"doubleValue": _encode_double(v)}
    if isinstance(v, FieldValue):
        raise FieldValuePlacementException(v.kind.value)
    if isinstance(v, DeleteField):
        raise FieldValuePlacementException("delete")
    if isinstance(v, datetime):
        return {"timestampValue": format_rfc3339(v)}
    if isinstance(v, DocumentReference):
        return {"referenceValue": v.qualified_path}
    if isinstance(v, str):
        return {"stringValue": v}
    if isinstance(v, (bytes, bytearray, memoryview)):
        return {"bytesValue": base64.standard_b64encode(bytes(v)).decode("ascii")}
    if isinstance(v, GeoPoint):
        return {"geoPointValue": v.to_wire()}
    if isinstance(v, (list, tuple)):
        return {"arrayValue": {"values": [encode_value(x) for x in v]}}
    if isinstance(v, Mapping):
        return {"mapValue": {"fields": encode_fields(v, collector)}}
    raise UnsupportedTypeException(
        type(v).__name__, collector.current_path if collector else None
    )


def encode_fields(
    data: Mapping[str, Any], collector: UpdateCollector | None = None
) -> dict[str, dict]:
    """Convert a Python mapping to Firestore REST Document.fields format.

    With a collector, every entry is visited in insertion order: sentinels
    become transforms and are left out of the result, DELETE_FIELD is left
    out but masked, and every non-map value adds its path to the mask.
    """
    if not isinstance(data, Mapping):
        raise UnsupportedTypeException(
            type(data).__name__, collector.current_path if collector else None
        )
    fields: dict[str, dict] = {}
    for key, value in data.items():
        if not isinstance(key, str):
            raise UnsupportedTypeException(f"{type(key).__name__} key")
        if collector is None:
            if isinstance(value, FieldValue):
                raise FieldValuePlacementException(value.kind.value)
            if value is DELETE_FIELD:
                raise FieldValuePlacementException("delete")
            fields[key] = encode_value(value)
            continue

        collector.enter_field(key)
        if isinstance(value, FieldValue):
            collector.transform(value)
        elif value is DELETE_FIELD:
            collector.delete()
        else:
            fields[key] = encode_value(value, collector)
        encoded = fields.get(key)
        collector.leave_field(encoded is None or "mapValue" not in encoded)
    return fields


def encode_field_transform(field_value: FieldValue, field_path: str) -> dict:
    """Return the FieldTransform message applying field_value at field_path."""
    kind = field_value.kind
    if kind is TransformKind.SERVER_TIMESTAMP:
        value: Any = SERVER_VALUE_REQUEST_TIME
    elif kind in (TransformKind.ARRAY_UNION, TransformKind.ARRAY_REMOVE):
        value = {"values": [encode_value(x) for x in field_value.operand]}
    else:
        value = encode_value(field_value.operand)
    return {"fieldPath": field_path, kind.value: value}


def decode_value(client: FirestoreRESTClient, obj: dict) -> Any:
    """Convert a wire Value to a Python value.

    Raises:
        MalformedWireValueException: If obj does not have exactly one known
            kind key.
    """
    if not isinstance(obj, dict) or len(obj) != 1:
        keys = sorted(obj) if isinstance(obj, dict) else []
        raise MalformedWireValueException(
            "expected exactly one value kind", keys
        )
    key, value = next(iter(obj.items()))
    if key not in _VALUE_KINDS:
        raise MalformedWireValueException(f"unknown value kind {key!r}", [key])
    if key == "nullValue":
        return None
    if key == "booleanValue":
        return value
    if key == "integerValue":
        return int(value)
    if key == "doubleValue":
        return float(value)
    if key == "timestampValue":
        return parse_rfc3339(value)
    if key == "stringValue":
        return value
    if key == "bytesValue":
        return base64.standard_b64decode(value)
    if key == "referenceValue":
        return DocumentReference(client, decode_path(value))
    if key == "geoPointValue":
        # Zero coordinates are omitted from the JSON.
        return GeoPoint(
            float(value.get("latitude", 0.0)), float(value.get("longitude", 0.0))
        )
    if key == "arrayValue":
        vals = (value or {}).get("values") or []
        return [decode_value(client, x) for x in vals]
    return decode_fields(client, (value or {}).get("fields"))


def decode_fields(client: FirestoreRESTClient, fields: dict | None) -> dict:
    """Convert Firestore REST Document.fields to a Python dict (keys sorted)."""
    if not fields:
        return {}
    return {k: decode_value(client, fields[k]) for k in sorted(fields)}


def decode_path(name: str) -> str:
    """Strip the projects/<p>/databases/<d>/documents/ prefix from a resource name."""
    return RESOURCE_PATH_RE.sub("", name, count=1)
