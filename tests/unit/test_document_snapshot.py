"""Tests for DocumentSnapshot (existence, timestamps, dotted-path lookup)."""

from datetime import UTC, datetime

from firelite.domain.value_objects import GeoPoint
from firelite.infrastructure.firebase.document import DocumentSnapshot

from tests.fakes import BASE_PATH

DOC = {
    "name": f"{BASE_PATH}/users/alice",
    "fields": {
        "name": {"stringValue": "Alice"},
        "age": {"integerValue": "30"},
        "home": {"geoPointValue": {"latitude": 1.5, "longitude": -2.5}},
        "profile": {
            "mapValue": {
                "fields": {
                    "city": {"stringValue": "Oslo"},
                    "links": {"mapValue": {"fields": {"web": {"stringValue": "a.example"}}}},
                    "nothing": {"nullValue": None},
                }
            }
        },
    },
    "createTime": "2024-01-01T00:00:00.000000Z",
    "updateTime": "2024-01-02T00:00:00.123456789Z",
}


def _snapshot(offline_client, document=DOC, read_time=None) -> DocumentSnapshot:
    return DocumentSnapshot(offline_client.doc("users/alice"), document, read_time)


def test_existing_document(offline_client) -> None:
    snap = _snapshot(offline_client, read_time="2024-01-03T00:00:00Z")
    assert snap.exists
    assert snap.id == "alice"
    assert snap.create_time == datetime(2024, 1, 1, tzinfo=UTC)
    assert snap.update_time == datetime(2024, 1, 2, 0, 0, 0, 123456, tzinfo=UTC)
    assert snap.read_time == datetime(2024, 1, 3, tzinfo=UTC)


def test_to_dict_decodes_sorted(offline_client) -> None:
    data = _snapshot(offline_client).to_dict()
    assert list(data) == ["age", "home", "name", "profile"]
    assert data["home"] == GeoPoint(1.5, -2.5)
    assert data["profile"]["links"] == {"web": "a.example"}


def test_get_top_level_and_nested(offline_client) -> None:
    snap = _snapshot(offline_client)
    assert snap.get("age") == 30
    assert snap.get("profile.city") == "Oslo"
    assert snap.get("profile.links.web") == "a.example"
    assert snap.get("profile.links") == {"web": "a.example"}


def test_get_missing_returns_default(offline_client) -> None:
    snap = _snapshot(offline_client)
    assert snap.get("missing") is None
    assert snap.get("profile.missing") is None
    assert snap.get("profile.city.deeper", "fallback") == "fallback"
    assert snap.get("nope.deeper", 0) == 0


def test_get_null_field_is_none_not_default(offline_client) -> None:
    assert _snapshot(offline_client).get("profile.nothing", "fallback") is None


def test_missing_document(offline_client) -> None:
    snap = _snapshot(offline_client, document=None)
    assert not snap.exists
    assert snap.to_dict() is None
    assert snap.get("name") is None
    assert snap.create_time is None
    assert snap.update_time is None


def test_existing_document_without_fields(offline_client) -> None:
    snap = _snapshot(offline_client, document={"name": DOC["name"]})
    assert snap.exists
    assert snap.to_dict() == {}
    assert snap.get("a.b") is None
