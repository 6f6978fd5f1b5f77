"""Async client for the NanoCreatures API.

One method per remote capability. Every call is a single HTTP request;
nothing is cached or retained between calls, so tokens and session ids
are always supplied by the caller.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from nanocreatures.config import Settings, settings as default_settings
from nanocreatures.errors import APIError, InvalidResponseError
from nanocreatures.models import (
    ChatParams,
    ChatResponse,
    CreateCreatureParams,
    CreateMemorySourceParams,
    Creature,
    ErrorResponse,
    GetCreaturesResponse,
    MemorySource,
    RequestPayload,
    SignInOptions,
    SignInResponse,
    SignUpOptions,
    UpdateCreatureParams,
    UpdateMemorySourceParams,
)

API_KEY_PREFIX = "sk-"

_MEMORY_SOURCE_LIST = TypeAdapter(list[MemorySource])

P = TypeVar("P", bound=RequestPayload)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def credential_kind(credential: str) -> str:
    """Label a credential for logs. Both kinds are sent the same way."""
    return "api key" if credential.startswith(API_KEY_PREFIX) else "session token"


def _segment(value: str) -> str:
    return quote(str(value), safe="")


def _coerce(model: type[P], params: P | dict[str, Any]) -> P:
    """Accept either a payload model or a plain dict validated into one."""
    if isinstance(params, model):
        return params
    return model.model_validate(params)


def _encode(body: dict[str, Any]) -> bytes:
    return json.dumps(body, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


@dataclass
class EndpointProbe:
    """Raw outcome of a diagnostic request against an auth endpoint."""

    path: str
    status_code: int
    allow: str | None
    body: str


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class NanoCreaturesClient:
    """Facade over the NanoCreatures HTTP API.

    Pass ``http_client`` to route every call through a caller-owned
    ``httpx.AsyncClient`` (custom transport, proxies, shared pool). The
    client never closes it. Without one, each call opens its own.
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        *,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        cfg = settings or default_settings
        if base_url is not None:
            self._base_url = base_url.rstrip("/")
        else:
            self._base_url = cfg.normalized_base_url()
        self._api_key = api_key if api_key is not None else cfg.api_key
        self._timeout = cfg.timeout
        self._http_client = http_client
        self._logger = logger or logging.getLogger(__name__)

    @property
    def base_url(self) -> str:
        return self._base_url

    # -- Transport -------------------------------------------------------------

    async def _send(
        self,
        method: str,
        path: str,
        *,
        token: str | None = None,
        body: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Issue one request. Uses the configured API key when no token is given."""
        url = f"{self._base_url}{path}"
        headers = {"Accept": "application/json"}

        credential = token if token is not None else (self._api_key or None)
        if credential is not None:
            headers["Authorization"] = f"Bearer {credential}"

        content = None
        if body is not None:
            headers["Content-Type"] = "application/json"
            content = _encode(body)

        self._logger.debug(
            "%s %s (%s)",
            method,
            url,
            credential_kind(credential) if credential is not None else "anonymous",
        )

        try:
            if self._http_client is not None:
                resp = await self._http_client.request(
                    method, url, headers=headers, content=content
                )
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    resp = await client.request(method, url, headers=headers, content=content)
        except httpx.TransportError:
            self._logger.debug("%s %s failed at the transport level", method, url, exc_info=True)
            raise

        self._logger.debug("%s %s -> %d", method, url, resp.status_code)
        return resp

    def _raise_for_status(self, resp: httpx.Response, default_message: str) -> None:
        """Map a non-2xx response onto ``APIError``."""
        if resp.is_success:
            return

        text = resp.text
        try:
            data = resp.json()
        except ValueError:
            self._logger.warning("Non-JSON error body (status %d)", resp.status_code)
            msg = f"Server returned {resp.status_code}: {text}"
            raise APIError(msg, status_code=resp.status_code, body=text) from None

        error = ErrorResponse.from_body(data)
        message = error.message or default_message
        code = error.code

        self._logger.warning("Request failed (status %d): %s", resp.status_code, message)
        raise APIError(message, status_code=resp.status_code, code=code, body=text)

    def _decode_json(self, resp: httpx.Response) -> Any:
        try:
            return resp.json()
        except ValueError:
            msg = f"Invalid JSON response: {resp.text}"
            raise InvalidResponseError(msg, body=resp.text) from None

    def _decode(self, resp: httpx.Response, model: type[BaseModel] | TypeAdapter) -> Any:
        """Parse a 2xx body into ``model``."""
        data = self._decode_json(resp)
        try:
            if isinstance(model, TypeAdapter):
                return model.validate_python(data)
            return model.model_validate(data)
        except ValidationError as exc:
            msg = f"Unexpected response shape: {resp.text}"
            raise InvalidResponseError(msg, body=resp.text) from exc

    async def _call(
        self,
        method: str,
        path: str,
        default_message: str,
        *,
        token: str | None = None,
        body: dict[str, Any] | None = None,
    ) -> httpx.Response:
        resp = await self._send(method, path, token=token, body=body)
        self._raise_for_status(resp, default_message)
        return resp

    # -- Auth ------------------------------------------------------------------

    async def sign_up(self, options: SignUpOptions | dict[str, Any]) -> SignInResponse:
        """Register a new user and return the issued token with the user record."""
        payload = _coerce(SignUpOptions, options).to_payload()
        resp = await self._call("POST", "/api/auth/signup", "Failed to sign up", body=payload)
        return self._decode(resp, SignInResponse)

    async def sign_in(self, options: SignInOptions | dict[str, Any]) -> SignInResponse:
        """Sign in with email (and password). The server-issued token is used as-is."""
        payload = _coerce(SignInOptions, options).to_payload()
        resp = await self._call("POST", "/api/auth/signin", "Failed to sign in", body=payload)
        return self._decode(resp, SignInResponse)

    async def probe_auth_endpoints(self) -> list[EndpointProbe]:
        """Hit the sign-in endpoints with GET and report what came back.

        Diagnostic only: HTTP errors are returned, not raised.
        """
        probes = []
        for path in ("/api/auth/signin", "/api/auth/signin/google"):
            resp = await self._send("GET", path)
            probes.append(
                EndpointProbe(
                    path=path,
                    status_code=resp.status_code,
                    allow=resp.headers.get("allow"),
                    body=resp.text,
                )
            )
        return probes

    # -- Creatures -------------------------------------------------------------

    async def get_creatures(self, token: str) -> GetCreaturesResponse:
        resp = await self._call(
            "GET", "/api/creatures", "Failed to fetch creatures", token=token
        )
        return self._decode(resp, GetCreaturesResponse)

    async def create_creature(
        self, token: str, params: CreateCreatureParams | dict[str, Any]
    ) -> Creature:
        payload = _coerce(CreateCreatureParams, params).to_payload()
        resp = await self._call(
            "POST", "/api/creatures", "Failed to create creature", token=token, body=payload
        )
        return self._decode(resp, Creature)

    async def edit_creature(
        self, token: str, creature_id: str, params: UpdateCreatureParams | dict[str, Any]
    ) -> Creature:
        """Update a creature. Only fields explicitly set on ``params`` are sent."""
        payload = _coerce(UpdateCreatureParams, params).to_payload()
        resp = await self._call(
            "PUT",
            f"/api/creatures/{_segment(creature_id)}",
            "Failed to update creature",
            token=token,
            body=payload,
        )
        return self._decode(resp, Creature)

    async def delete_creature(self, token: str, creature_id: str) -> None:
        await self._call(
            "DELETE",
            f"/api/creatures/{_segment(creature_id)}",
            "Failed to delete creature",
            token=token,
        )

    # -- Memory sources --------------------------------------------------------

    def _memory_sources_path(self, creature_id: str, source_id: str | None = None) -> str:
        path = f"/api/creatures/{_segment(creature_id)}/memory-sources"
        if source_id is not None:
            path = f"{path}/{_segment(source_id)}"
        return path

    async def create_memory_source(
        self,
        token: str,
        creature_id: str,
        params: CreateMemorySourceParams | dict[str, Any],
    ) -> MemorySource:
        """Attach a memory source to a creature.

        STATIC_TEXT sources send ``content``; DOCUMENT sources send the file
        fields, or an inline base64 data URL when ``params.file`` is given.
        """
        payload = _coerce(CreateMemorySourceParams, params).to_payload()
        resp = await self._call(
            "POST",
            self._memory_sources_path(creature_id),
            "Failed to create memory source",
            token=token,
            body=payload,
        )
        return self._decode(resp, MemorySource)

    async def get_memory_sources(self, token: str, creature_id: str) -> list[MemorySource]:
        resp = await self._call(
            "GET",
            self._memory_sources_path(creature_id),
            "Failed to fetch memory sources",
            token=token,
        )
        return self._decode(resp, _MEMORY_SOURCE_LIST)

    async def edit_memory_source(
        self,
        token: str,
        creature_id: str,
        source_id: str,
        params: UpdateMemorySourceParams | dict[str, Any],
    ) -> MemorySource:
        payload = _coerce(UpdateMemorySourceParams, params).to_payload()
        resp = await self._call(
            "PUT",
            self._memory_sources_path(creature_id, source_id),
            "Failed to update memory source",
            token=token,
            body=payload,
        )
        return self._decode(resp, MemorySource)

    async def delete_memory_source(self, token: str, creature_id: str, source_id: str) -> None:
        await self._call(
            "DELETE",
            self._memory_sources_path(creature_id, source_id),
            "Failed to delete memory source",
            token=token,
        )

    # -- Chat ------------------------------------------------------------------

    async def chat(
        self,
        token: str,
        creature_id: str,
        params: ChatParams | dict[str, Any] | str,
    ) -> ChatResponse:
        """Send a message to a creature.

        A bare string is shorthand for ``{"message": <string>}``. To continue a
        conversation pass the previous response's ``session_id`` back in.
        """
        if isinstance(params, str):
            params = ChatParams(message=params)
        payload = _coerce(ChatParams, params).to_payload()
        resp = await self._call(
            "POST",
            f"/api/creatures/{_segment(creature_id)}/chat",
            "Failed to send chat message",
            token=token,
            body=payload,
        )
        return self._decode(resp, ChatResponse)
