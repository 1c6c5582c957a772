"""Discogs Python SDK: sync and async clients for the Discogs v2 API."""

from __future__ import annotations

from discogs_api.sdk.client import AsyncDiscogsClient, DiscogsClient
from discogs_api.sdk.exceptions import (
    AuthenticationError,
    DiscogsError,
    NotFoundError,
    RateLimitError,
    ResponseParseError,
    TransportError,
    ValidationError,
)
from discogs_api.sdk.models import (
    ClientConfig,
    RateLimitSnapshot,
    RequestResult,
    build_auth_string,
)

__all__ = [
    "AsyncDiscogsClient",
    "DiscogsClient",
    "DiscogsError",
    "AuthenticationError",
    "NotFoundError",
    "RateLimitError",
    "ResponseParseError",
    "TransportError",
    "ValidationError",
    "ClientConfig",
    "RateLimitSnapshot",
    "RequestResult",
    "build_auth_string",
]
