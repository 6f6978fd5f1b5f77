"""Python client for the NanoCreatures creature management and chat API."""

from nanocreatures.client import EndpointProbe, NanoCreaturesClient
from nanocreatures.config import Settings
from nanocreatures.errors import APIError, InvalidResponseError, NanoCreaturesError
from nanocreatures.models import (
    ChatParams,
    ChatResponse,
    CreateCreatureParams,
    CreateMemorySourceParams,
    Creature,
    GetCreaturesResponse,
    MemorySource,
    MemorySourceFile,
    MemorySourceType,
    SignInOptions,
    SignInResponse,
    SignUpOptions,
    UpdateCreatureParams,
    UpdateMemorySourceParams,
    User,
)

__all__ = [
    "APIError",
    "ChatParams",
    "ChatResponse",
    "CreateCreatureParams",
    "CreateMemorySourceParams",
    "Creature",
    "EndpointProbe",
    "GetCreaturesResponse",
    "InvalidResponseError",
    "MemorySource",
    "MemorySourceFile",
    "MemorySourceType",
    "NanoCreaturesClient",
    "NanoCreaturesError",
    "Settings",
    "SignInOptions",
    "SignInResponse",
    "SignUpOptions",
    "UpdateCreatureParams",
    "UpdateMemorySourceParams",
    "User",
]
