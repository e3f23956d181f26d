"""Pytest configuration and fixtures for firelite.

HTTP is never real: clients are wired to an httpx.MockTransport backed by
a Responder (see tests.fakes) that records requests and replays queued
JSON responses.
"""

import httpx
import pytest

from firelite.core.config import get_settings
from firelite.infrastructure.firebase._rest_client import FirestoreRESTClient
from tests.fakes import PROJECT_ID, Responder


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Each test sees settings built from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def responder() -> Responder:
    return Responder()


@pytest.fixture
async def client(responder: Responder):
    """Client with no credentials whose HTTP goes to the responder."""
    http = httpx.AsyncClient(transport=httpx.MockTransport(responder.handler))
    fs = FirestoreRESTClient(PROJECT_ID, http_client=http)
    yield fs
    await http.aclose()


@pytest.fixture
def offline_client() -> FirestoreRESTClient:
    """Client for pure encode/plan tests; any HTTP call fails the test."""

    def _fail(request: httpx.Request) -> httpx.Response:
        raise AssertionError(f"unexpected request: {request.method} {request.url}")

    return FirestoreRESTClient(
        PROJECT_ID, http_client=httpx.AsyncClient(transport=httpx.MockTransport(_fail))
    )
