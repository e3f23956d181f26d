"""Thin Firestore REST API client (no firebase-admin, no grpc).

Uses google-auth for service account tokens and Firestore REST v1.
All HTTP calls use httpx.AsyncClient so they do not block the event loop.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Awaitable, Callable, Sequence
from datetime import datetime
from typing import Any

import httpx

from firelite.core.constants import DEFAULT_DATABASE_ID, FIRESTORE_BASE_URL, FIRESTORE_TOKEN_AUDIENCE
from firelite.infrastructure.firebase.document import DocumentSnapshot
from firelite.infrastructure.firebase.reference import CollectionReference, DocumentReference
from firelite.infrastructure.firebase.write_batch import WriteBatch
from firelite.shared.telemetry.tracing import add_span_attributes, traced
from firelite.shared.utils.datetime import format_rfc3339
from firelite.shared.utils.generators import generate_auto_id

TokenGetter = Callable[[], Awaitable[str]]


def _get_credentials(key_dict: dict, audience: str = FIRESTORE_TOKEN_AUDIENCE):
    """Return self-signing google.auth.jwt.Credentials for Firestore.

    Tokens are RS256 JWTs signed with the service account key; no OAuth
    token exchange takes place.
    """
    from google.auth import jwt

    return jwt.Credentials.from_service_account_info(key_dict, audience=audience)


def _get_access_token(credentials) -> str:
    from google.auth.transport.requests import Request

    if not credentials.valid:
        credentials.refresh(Request())
    token = credentials.token
    return token.decode("ascii") if isinstance(token, bytes) else token


async def _request_async(
    client: httpx.AsyncClient,
    url: str,
    method: str = "GET",
    body: dict | None = None,
    access_token: str | None = None,
    params: dict[str, str] | None = None,
) -> Any:
    """Perform async HTTP request to Firestore REST API. Non-2xx responses raise."""
    headers = {"Content-Type": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    if method not in ("GET", "POST", "PATCH", "DELETE"):
        raise ValueError(f"Unsupported method: {method!r}")
    resp = await client.request(
        method,
        url,
        headers=headers,
        params=params,
        json=body if method in ("POST", "PATCH") else None,
    )
    resp.raise_for_status()
    raw = resp.content
    return json.loads(raw.decode()) if raw else {}


class FirestoreRESTClient:
    """Lightweight Firestore client using the REST API."""

    def __init__(
        self,
        project_id: str,
        credentials=None,
        *,
        database_id: str = DEFAULT_DATABASE_ID,
        base_url: str = FIRESTORE_BASE_URL,
        api_key: str | None = None,
        token_getter: TokenGetter | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        """Create a client for one database.

        Args:
            project_id: Google Cloud project id.
            credentials: google-auth credentials used to mint bearer tokens.
            database_id: Firestore database id.
            base_url: REST endpoint (override for the emulator).
            api_key: Optional API key sent as the key query parameter.
            token_getter: Async callable returning a bearer token; takes
                precedence over credentials (e.g. a signed-in user's id token).
            http_client: Injected httpx client; not closed by aclose().
            timeout: Request timeout in seconds for an owned httpx client.
        """
        self._project_id = project_id
        self._database_id = database_id
        self._credentials = credentials
        self._token_getter = token_getter
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self.base_path = f"projects/{project_id}/databases/{database_id}/documents"
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)
        self._owns_http = http_client is None

    @property
    def project_id(self) -> str:
        return self._project_id

    @property
    def database_id(self) -> str:
        return self._database_id

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def get_token(self) -> str | None:
        """Return a bearer token, or None when no credentials are configured (emulator)."""
        if self._token_getter is not None:
            return await self._token_getter()
        if self._credentials is None:
            return None
        return await asyncio.to_thread(_get_access_token, self._credentials)

    @traced("firestore.request")
    async def request(self, method: str, path: str = "", body: dict | None = None) -> Any:
        """Send a request relative to the database documents path.

        Paths starting with ':' are custom methods on the documents root
        (e.g. ':batchWrite'); anything else is a document or collection path.
        """
        if path and path[0] not in (":", "/"):
            path = "/" + path
        add_span_attributes(http_method=method, firestore_path=path)
        params = {"key": self._api_key} if self._api_key else None
        return await _request_async(
            self._http,
            f"{self._base_url}/{self.base_path}{path}",
            method=method,
            body=body,
            access_token=await self.get_token(),
            params=params,
        )

    def collection(self, path: str) -> CollectionReference:
        return CollectionReference(self, path)

    def doc(self, path: str) -> DocumentReference:
        return DocumentReference(self, path)

    def batch(self) -> WriteBatch:
        return WriteBatch(self)

    def auto_id(self) -> str:
        return generate_auto_id()

    async def batch_get(
        self,
        refs: Sequence[DocumentReference],
        field_paths: list[str] | None = None,
        read_time: datetime | None = None,
    ) -> list[DocumentSnapshot]:
        """Fetch several documents in one request.

        Snapshots are returned in the order of refs; documents that do not
        exist yield snapshots with exists False. With read_time, documents
        are read as they were at that moment.
        """
        if not refs:
            return []
        body: dict[str, Any] = {"documents": [ref.qualified_path for ref in refs]}
        if field_paths is not None:
            body["mask"] = {"fieldPaths": list(field_paths)}
        if read_time is not None:
            body["readTime"] = format_rfc3339(read_time)
        resp = await self.request("POST", ":batchGet", body)
        items = resp if isinstance(resp, list) else ([resp] if resp else [])
        by_name: dict[str, dict] = {}
        for item in items:
            if "found" in item:
                by_name[item["found"]["name"]] = item
            elif "missing" in item:
                by_name[item["missing"]] = item
        snapshots: list[DocumentSnapshot] = []
        for ref in refs:
            item = by_name.get(ref.qualified_path, {})
            snapshots.append(
                DocumentSnapshot(ref, item.get("found"), item.get("readTime"))
            )
        return snapshots
