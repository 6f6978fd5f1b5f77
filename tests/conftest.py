"""Shared test fixtures."""

import json
from typing import Any

import httpx
import pytest

from nanocreatures.client import NanoCreaturesClient

BASE_URL = "https://creatures.test"


class FakeServer:
    """Queue of canned responses served through ``httpx.MockTransport``.

    Every outbound request is recorded in ``requests``. A request with nothing
    queued gets a 599 so a missing response fails loudly.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responses: list[httpx.Response] = []

    def respond(
        self,
        status_code: int = 200,
        *,
        json: Any = None,
        text: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        if text is not None:
            self._responses.append(httpx.Response(status_code, text=text, headers=headers))
        elif json is not None:
            self._responses.append(httpx.Response(status_code, json=json, headers=headers))
        else:
            self._responses.append(httpx.Response(status_code, headers=headers))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._responses:
            return self._responses.pop(0)
        return httpx.Response(599, text="no response queued")

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def server() -> FakeServer:
    return FakeServer()


@pytest.fixture
async def http_client(server):
    async with httpx.AsyncClient(transport=httpx.MockTransport(server.handler)) as client:
        yield client


@pytest.fixture
def client(http_client) -> NanoCreaturesClient:
    """Client wired to the fake server, with no configured API key."""
    return NanoCreaturesClient(base_url=BASE_URL, api_key="", http_client=http_client)


def creature_json(**overrides: Any) -> dict[str, Any]:
    data = {
        "id": "cr_1",
        "name": "Archivist",
        "description": None,
        "apiKey": None,
        "createdAt": "2025-01-01T00:00:00.000Z",
        "updatedAt": "2025-01-02T00:00:00.000Z",
    }
    data.update(overrides)
    return data


def memory_source_json(**overrides: Any) -> dict[str, Any]:
    data = {
        "id": "ms_1",
        "name": "FAQ",
        "type": "STATIC_TEXT",
        "content": "Opening hours are 9-5.",
        "fileUrl": None,
        "fileName": None,
        "fileSize": None,
        "createdAt": "2025-01-01T00:00:00.000Z",
        "updatedAt": "2025-01-01T00:00:00.000Z",
    }
    data.update(overrides)
    return data


def chat_response_json(**overrides: Any) -> dict[str, Any]:
    data = {
        "message": "We open at nine.",
        "session_id": "sess_1",
        "timestamp": "2025-01-01T09:00:00.000Z",
    }
    data.update(overrides)
    return data
