"""Tests for FirestoreRESTClient request plumbing and batch_get."""

from datetime import UTC, datetime
from unittest.mock import MagicMock

import httpx
import pytest

from firelite.infrastructure.firebase._rest_client import (
    FirestoreRESTClient,
    _get_access_token,
)

from tests.fakes import BASE_PATH, PROJECT_ID, Responder


def _client(responder: Responder, **kwargs) -> FirestoreRESTClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(responder.handler))
    return FirestoreRESTClient(PROJECT_ID, http_client=http, **kwargs)


def test_base_path_uses_database_id() -> None:
    fs = FirestoreRESTClient("p", database_id="db2", http_client=MagicMock())
    assert fs.base_path == "projects/p/databases/db2/documents"
    assert fs.project_id == "p"
    assert fs.database_id == "db2"


async def test_request_paths(client, responder) -> None:
    responder.reply({})
    responder.reply({})
    await client.request("POST", ":batchWrite", {"writes": []})
    await client.request("GET", "users/a")
    assert responder.requests[0].url.path == f"/v1/{BASE_PATH}:batchWrite"
    assert responder.requests[1].url.path == f"/v1/{BASE_PATH}/users/a"
    assert "authorization" not in responder.requests[1].headers


async def test_request_adds_api_key_and_bearer_token() -> None:
    responder = Responder()
    responder.reply({"ok": True})

    async def token() -> str:
        return "tok-123"

    fs = _client(responder, api_key="k-1", token_getter=token)
    assert await fs.request("GET", "users/a") == {"ok": True}
    request = responder.requests[0]
    assert request.url.params["key"] == "k-1"
    assert request.headers["authorization"] == "Bearer tok-123"
    assert request.headers["content-type"] == "application/json"


async def test_request_empty_body_returns_empty_dict(client, responder) -> None:
    responder.responses.append(httpx.Response(200))
    assert await client.request("DELETE", "users/a") == {}


async def test_request_error_propagates_unchanged(client, responder) -> None:
    responder.reply({"error": {"status": "NOT_FOUND"}}, status_code=404)
    with pytest.raises(httpx.HTTPStatusError) as exc_info:
        await client.request("GET", "users/a")
    assert exc_info.value.response.status_code == 404


async def test_unsupported_method(client) -> None:
    with pytest.raises(ValueError, match="Unsupported method"):
        await client.request("PUT", "users/a")


async def test_batch_get_returns_request_order(client, responder) -> None:
    responder.reply(
        [
            {"missing": f"{BASE_PATH}/users/b", "readTime": "2024-01-01T00:00:00Z"},
            {
                "found": {"name": f"{BASE_PATH}/users/a", "fields": {"n": {"integerValue": "1"}}},
                "readTime": "2024-01-01T00:00:00Z",
            },
        ]
    )
    a, b = client.doc("users/a"), client.doc("users/b")

    snaps = await client.batch_get([a, b], field_paths=["n"])

    assert responder.last_json() == {
        "documents": [a.qualified_path, b.qualified_path],
        "mask": {"fieldPaths": ["n"]},
    }
    assert [s.ref for s in snaps] == [a, b]
    assert snaps[0].exists and snaps[0].get("n") == 1
    assert not snaps[1].exists
    assert snaps[1].read_time is not None


async def test_batch_get_reads_at_read_time(client, responder) -> None:
    responder.reply([{"missing": f"{BASE_PATH}/users/a", "readTime": "2024-01-01T00:00:00Z"}])

    snap = await client.doc("users/a").get(read_time=datetime(2024, 1, 1, tzinfo=UTC))

    assert responder.last_json() == {
        "documents": [f"{BASE_PATH}/users/a"],
        "readTime": "2024-01-01T00:00:00.000000Z",
    }
    assert not snap.exists


async def test_batch_get_empty_sends_nothing(offline_client) -> None:
    assert await offline_client.batch_get([]) == []


async def test_aclose_leaves_injected_client_open(client) -> None:
    await client.aclose()
    assert not client._http.is_closed


async def test_aclose_closes_owned_client() -> None:
    fs = FirestoreRESTClient(PROJECT_ID)
    await fs.aclose()
    assert fs._http.is_closed


def test_get_access_token_refreshes_invalid_credentials() -> None:
    credentials = MagicMock()
    credentials.valid = False
    credentials.token = b"signed.jwt.token"
    assert _get_access_token(credentials) == "signed.jwt.token"
    credentials.refresh.assert_called_once()


def test_get_access_token_reuses_valid_credentials() -> None:
    credentials = MagicMock()
    credentials.valid = True
    credentials.token = "cached"
    assert _get_access_token(credentials) == "cached"
    credentials.refresh.assert_not_called()


async def test_get_token_uses_credentials_off_loop() -> None:
    credentials = MagicMock()
    credentials.valid = True
    credentials.token = "from-creds"
    fs = FirestoreRESTClient(PROJECT_ID, credentials, http_client=MagicMock())
    assert await fs.get_token() == "from-creds"
