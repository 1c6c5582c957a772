"""Exception hierarchy for the Discogs SDK.

The request executor never raises these; it stores them on
``RequestResult.error``. Call ``RequestResult.raise_for_error()`` to opt in.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from discogs_api.sdk.models import RateLimitSnapshot


class DiscogsError(Exception):
    """Base exception for all Discogs API errors."""

    def __init__(self, status_code: int, detail: str) -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"{status_code}: {detail}")


class AuthenticationError(DiscogsError):
    """Raised on 401 or 403 responses."""


class NotFoundError(DiscogsError):
    """Raised on 404 responses."""


class ValidationError(DiscogsError):
    """Raised on 400 or 422 responses."""


class RateLimitError(DiscogsError):
    """Raised on 429 responses."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        rate_limit: RateLimitSnapshot | None = None,
    ) -> None:
        super().__init__(status_code, detail)
        self.rate_limit = rate_limit


class TransportError(DiscogsError):
    """The request never produced an HTTP response (DNS, connect, timeout)."""

    def __init__(self, detail: str) -> None:
        super().__init__(0, detail)


class ResponseParseError(DiscogsError):
    """The response body was not valid JSON."""
