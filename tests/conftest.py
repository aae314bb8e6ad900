"""Shared pytest fixtures for rck tests.

Every test talks to an in-process backend through ``httpx.MockTransport``;
nothing leaves the process.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from rck import AsyncClient, Client

BASE_URL = "https://rck.test"
API_KEY = "test-key"

# ============================================================================
# Fake backend
# ============================================================================


class RecordingBackend:
    """MockTransport handler that records requests and replays one response.

    Args:
        json_body: JSON body to return
        status_code: HTTP status to return
        content: Raw body to return instead of json_body
        exc: Exception to raise instead of responding
    """

    def __init__(
        self,
        json_body: Any = None,
        *,
        status_code: int = 200,
        content: bytes | None = None,
        exc: Exception | None = None,
    ) -> None:
        self.json_body = json_body
        self.status_code = status_code
        self.content = content
        self.exc = exc
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.json_body)

    @property
    def calls(self) -> int:
        return len(self.requests)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> dict[str, Any]:
        return json.loads(self.last_request.content)


# ============================================================================
# Backend / client fixtures
# ============================================================================


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def make_backend() -> type[RecordingBackend]:
    """The RecordingBackend class, for tests that need a custom response."""
    return RecordingBackend


@pytest.fixture
def analysis_end_point() -> dict[str, Any]:
    return {"emotion": "neutral", "theme": "none", "analysis": "ok"}


@pytest.fixture
def backend(analysis_end_point: dict[str, Any]) -> RecordingBackend:
    """Backend answering every call with a basic_analysis end_point."""
    return RecordingBackend({"end_point": analysis_end_point})


@pytest.fixture
def make_client() -> Callable[[RecordingBackend], Client]:
    """Factory for a Client wired to a given backend."""
    clients: list[Client] = []

    def _make(backend: RecordingBackend, **kwargs: Any) -> Client:
        client = Client(
            API_KEY, base_url=BASE_URL, transport=httpx.MockTransport(backend), **kwargs
        )
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()


@pytest.fixture
def client(backend: RecordingBackend, make_client: Callable[..., Client]) -> Client:
    return make_client(backend)


@pytest.fixture
def make_async_client() -> Callable[[RecordingBackend], AsyncClient]:
    """Factory for an AsyncClient wired to a given backend."""

    def _make(backend: RecordingBackend, **kwargs: Any) -> AsyncClient:
        return AsyncClient(
            API_KEY, base_url=BASE_URL, transport=httpx.MockTransport(backend), **kwargs
        )

    return _make
