"""
Shared pytest fixtures and configuration for Twitchantic tests.

This module provides a scripted page fetcher for paginator unit tests and a
fake Helix server (served through httpx.MockTransport) for integration tests
that drive the real ApiClient.
"""

from typing import Any

import httpx
import pytest

from twitchantic import ApiClient, StaticAuthProvider
from twitchantic.request import RequestDescriptor
from twitchantic.response import Page

BASE_URL = "https://api.twitch.tv/helix/"


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line("markers", "integration: Tests driving ApiClient over a fake server")


class ScriptedFetcher:
    """
    PageFetcher returning pre-built pages keyed by the requested cursor.

    Every descriptor it receives is recorded in 'calls'. Errors queued with
    fail_next() are raised (in order) before any page is served.
    """

    def __init__(self, pages: dict[str | None, Page]):
        self.pages = pages
        self.calls: list[RequestDescriptor] = []
        self._failures: list[Exception] = []

    def fail_next(self, error: Exception) -> None:
        self._failures.append(error)

    def fetch_page(self, descriptor: RequestDescriptor) -> Page:
        self.calls.append(descriptor)
        if self._failures:
            raise self._failures.pop(0)
        return self.pages[descriptor.cursor]

    @property
    def requested_cursors(self) -> list[str | None]:
        return [call.cursor for call in self.calls]


class FakeHelixServer:
    """
    In-memory stand-in for the Helix API.

    Pages are registered per path and per incoming 'after' cursor. Requests
    to anything unregistered get a 404. Queued failures are answered first.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str | None], dict[str, Any]] = {}
        self._failures: list[httpx.Response | Exception] = []

    def add_page(
        self,
        path: str,
        rows: list[dict[str, Any]],
        cursor: str | None = None,
        after: str | None = None,
        total: int | None = None,
        **extra: Any,
    ) -> None:
        """Serves 'rows' for 'path' when requested with ?after=<after>."""
        payload: dict[str, Any] = {"data": rows, "pagination": {}}
        if cursor is not None:
            payload["pagination"]["cursor"] = cursor
        if total is not None:
            payload["total"] = total
        payload.update(extra)
        self._routes[(path, after)] = payload

    def add_payload(self, path: str, payload: dict[str, Any]) -> None:
        """Serves a raw payload for 'path' regardless of cursor."""
        self._routes[(path, None)] = payload

    def fail_next(
        self, status_code: int = 500, body: str = "error", headers: dict[str, str] | None = None
    ) -> None:
        self._failures.append(httpx.Response(status_code, text=body, headers=headers))

    def raise_next(self, error: Exception) -> None:
        self._failures.append(error)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if self._failures:
            failure = self._failures.pop(0)
            if isinstance(failure, Exception):
                raise failure
            return failure

        path = request.url.path.removeprefix("/helix/")
        after = request.url.params.get("after")
        payload = self._routes.get((path, after))
        if payload is None:
            return httpx.Response(404, json={"error": "Not Found", "status": 404})
        return httpx.Response(200, json=payload)

    def requests_to(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == f"/helix/{path}"]


@pytest.fixture
def make_fetcher():
    """Factory fixture building a ScriptedFetcher from a cursor -> Page mapping."""

    def _make(pages: dict[str | None, Page]) -> ScriptedFetcher:
        return ScriptedFetcher(pages)

    return _make


@pytest.fixture
def id_mapper():
    """Maps a raw row to its 'id' value."""
    return lambda row: row["id"]


@pytest.fixture
def auth_provider() -> StaticAuthProvider:
    return StaticAuthProvider("test-client-id", "test-token", scopes=["bits:read"])


@pytest.fixture
def fake_server() -> FakeHelixServer:
    return FakeHelixServer()


@pytest.fixture
def api_client(fake_server, auth_provider):
    """
    An ApiClient whose HTTP traffic is answered by the fake server.
    """
    http = httpx.Client(base_url=BASE_URL, transport=httpx.MockTransport(fake_server.handler))
    client = ApiClient(auth_provider, http_client=http)
    yield client
    client.close()
    http.close()


@pytest.fixture
def sample_game_rows() -> list[dict[str, Any]]:
    return [
        {"id": "1", "name": "Hearthstone", "box_art_url": "https://cdn/hs-{width}x{height}.jpg"},
        {"id": "2", "name": "Chess", "box_art_url": "https://cdn/chess-{width}x{height}.jpg"},
        {"id": "3", "name": "Just Chatting", "box_art_url": "https://cdn/jc-{width}x{height}.jpg"},
    ]


@pytest.fixture
def sample_transaction_row() -> dict[str, Any]:
    return {
        "id": "74c52265-e214-48a6-91b9-23b6014e8041",
        "timestamp": "2019-01-28T04:15:17.065398Z",
        "broadcaster_id": "439964613",
        "broadcaster_name": "chikuseuma",
        "user_id": "424596340",
        "user_name": "quotrok",
        "product_type": "BITS_IN_EXTENSION",
        "product_data": {
            "sku": "testSku100",
            "cost": {"amount": 100, "type": "bits"},
            "displayName": "Test Sku",
            "inDevelopment": False,
        },
    }


@pytest.fixture
def sample_leaderboard_payload() -> dict[str, Any]:
    return {
        "data": [
            {"user_id": "158010205", "user_login": "tundracowboy", "user_name": "TundraCowboy",
             "rank": 1, "score": 12543},
            {"user_id": "7168163", "user_login": "topramens", "user_name": "Topramens",
             "rank": 2, "score": 6900},
        ],
        "date_range": {"started_at": "2018-02-05T08:00:00Z", "ended_at": "2018-02-12T08:00:00Z"},
        "total": 2,
    }
