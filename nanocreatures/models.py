"""Wire models for the NanoCreatures API.

Attribute names are snake_case; the JSON on the wire is camelCase (except for
``ChatResponse``, which the server emits in snake_case). Every model accepts
either spelling on input.
"""

from __future__ import annotations

import base64
import mimetypes
from enum import StrEnum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base for camelCase records exchanged with the service."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """Serialize every field, keeping ``None`` as ``null``."""
        return self.model_dump(mode="json", by_alias=True)


class RequestPayload(WireModel):
    """Base for request bodies.

    Only fields the caller actually set are sent, so an explicit ``""`` or
    ``0`` reaches the server while an untouched optional field does not.
    """

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


# -- Auth ---------------------------------------------------------------------


class User(WireModel):
    id: str
    email: str
    name: str | None = None
    avatar_url: str | None = None
    image: str | None = None


class SignInResponse(WireModel):
    """Token plus user, returned by both sign-up and sign-in."""

    token: str
    user: User


class SignUpOptions(RequestPayload):
    email: str
    name: str | None = None
    password: str | None = None


class SignInOptions(RequestPayload):
    email: str
    password: str | None = None


# -- Creatures ----------------------------------------------------------------


class Creature(WireModel):
    id: str
    name: str
    description: str | None = None
    api_key: str | None = None
    created_at: str
    updated_at: str


class GetCreaturesResponse(WireModel):
    creatures: list[Creature]


class CreateCreatureParams(RequestPayload):
    name: str
    description: str


class UpdateCreatureParams(RequestPayload):
    name: str | None = None
    description: str | None = None


# -- Memory sources -----------------------------------------------------------


class MemorySourceType(StrEnum):
    STATIC_TEXT = "STATIC_TEXT"
    DOCUMENT = "DOCUMENT"


class MemorySource(WireModel):
    """A knowledge source attached to a creature.

    ``content`` is populated for STATIC_TEXT sources, the ``file_*`` fields for
    DOCUMENT sources.
    """

    id: str
    name: str
    type: MemorySourceType
    content: str | None = None
    file_url: str | None = None
    file_name: str | None = None
    file_size: int | None = None
    created_at: str
    updated_at: str


class MemorySourceFile(BaseModel):
    """Raw file handed to the client for inline upload."""

    name: str
    content: bytes

    @classmethod
    def from_path(cls, path: str | Path) -> MemorySourceFile:
        path = Path(path)
        return cls(name=path.name, content=path.read_bytes())

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def mime_type(self) -> str:
        guessed, _ = mimetypes.guess_type(self.name)
        return guessed or "application/octet-stream"

    def to_data_url(self) -> str:
        """Encode the file as a ``data:`` URL with base64 content."""
        encoded = base64.b64encode(self.content).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


_DOCUMENT_FIELDS = ("fileUrl", "fileName", "fileSize")


class CreateMemorySourceParams(RequestPayload):
    name: str
    type: MemorySourceType
    content: str | None = None
    file_url: str | None = None
    file_name: str | None = None
    file_size: int | None = None
    file: MemorySourceFile | None = Field(default=None, exclude=True)

    def to_payload(self) -> dict[str, Any]:
        """Build the body with only the fields relevant to ``type``.

        A directly supplied ``file`` takes precedence over ``file_url`` and is
        sent inline as a base64 data URL. ``None`` values are left out since a
        new source has nothing to clear.
        """
        data = {k: v for k, v in super().to_payload().items() if v is not None}
        payload: dict[str, Any] = {"name": self.name, "type": self.type.value}

        if self.type is MemorySourceType.STATIC_TEXT:
            if "content" in data:
                payload["content"] = data["content"]
            return payload

        if self.file is not None:
            payload["fileUrl"] = self.file.to_data_url()
            payload["fileName"] = self.file.name
            payload["fileSize"] = self.file.size
            return payload

        for key in _DOCUMENT_FIELDS:
            if key in data:
                payload[key] = data[key]
        return payload


class UpdateMemorySourceParams(RequestPayload):
    name: str | None = None
    type: MemorySourceType | None = None
    content: str | None = None
    file_url: str | None = None
    file_name: str | None = None
    file_size: int | None = None


# -- Chat ---------------------------------------------------------------------


class ChatParams(RequestPayload):
    """Chat request. Keys beyond the known ones are forwarded untouched."""

    model_config = ConfigDict(extra="allow")

    message: str
    max_results: int | None = None
    session_id: str | None = None
    template_id: str | None = None


class QueryType(WireModel):
    is_time_based_query: bool
    is_content_based_query: bool


class ChatResponse(BaseModel):
    """Reply from a creature.

    Pass ``session_id`` back as ``ChatParams.session_id`` to continue the
    conversation. Provider-specific filter blocks are kept as raw JSON, and
    any keys the server adds later are preserved as extras.
    """

    model_config = ConfigDict(extra="allow")

    message: str
    results: dict[str, Any] | None = None
    session_id: str
    timestamp: str
    query_type: QueryType | None = None
    slack_filters: Any = None
    github_filters: Any = None
    google_filters: Any = None


# -- Errors -------------------------------------------------------------------


class ErrorResponse(BaseModel):
    """Error payload returned by the service on non-2xx responses."""

    message: str | None = None
    code: str | None = None
    status: int | None = None

    @classmethod
    def from_body(cls, data: Any) -> ErrorResponse:
        """Pick the known keys out of a decoded error body.

        Servers disagree on types here (numeric ``code``, string ``status``),
        so each key is taken on its own and a bad one never hides the others.
        """
        if not isinstance(data, dict):
            return cls()
        message = data.get("message")
        code = data.get("code")
        status = data.get("status")
        if isinstance(status, str) and status.isdigit():
            status = int(status)
        return cls(
            message=message if isinstance(message, str) and message else None,
            code=str(code) if isinstance(code, (str, int)) and not isinstance(code, bool) else None,
            status=status if isinstance(status, int) and not isinstance(status, bool) else None,
        )
