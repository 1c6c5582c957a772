"""Connection config, rate-limit snapshots and request results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Mapping, TypeVar

from pydantic import BaseModel

from discogs_api.sdk.exceptions import DiscogsError

if TYPE_CHECKING:
    from discogs_api.config import Settings

ModelT = TypeVar("ModelT", bound=BaseModel)

DEFAULT_PORT = 443

RATELIMIT_HEADER = "x-discogs-ratelimit"
RATELIMIT_REMAINING_HEADER = "x-discogs-ratelimit-remaining"
RATELIMIT_USED_HEADER = "x-discogs-ratelimit-used"


def build_auth_string(
    token: str | None = None,
    key: str | None = None,
    secret: str | None = None,
) -> str | None:
    """Return the credential part of the ``Authorization: Discogs ...`` header.

    A personal access token wins over a consumer key/secret pair. The pair is
    only used when both halves are present. With neither, requests are sent
    anonymously and ``None`` is returned.
    """
    if token:
        return f"token={token}"
    if key and secret:
        return f"key={key}, secret={secret}"
    return None


@dataclass(frozen=True)
class ClientConfig:
    """Everything needed to address and authenticate against the API."""

    host: str
    port: int
    user_agent: str
    auth: str | None
    user_name: str
    per_page: int
    protocol: str = field(default="https", init=False)

    @classmethod
    def resolve(
        cls,
        settings: Settings,
        *,
        host: str | None = None,
        port: int | None = None,
        user_agent: str | None = None,
        token: str | None = None,
        key: str | None = None,
        secret: str | None = None,
        user_name: str | None = None,
    ) -> ClientConfig:
        """Explicit arguments win; anything omitted comes from *settings*."""
        return cls(
            host=host or settings.host,
            port=port or settings.port,
            user_agent=user_agent or settings.user_agent,
            auth=build_auth_string(
                token or settings.api_token,
                key or settings.api_key,
                secret or settings.api_secret,
            ),
            user_name=user_name if user_name is not None else settings.user_name,
            per_page=settings.per_page,
        )

    @property
    def base_url(self) -> str:
        if self.port == DEFAULT_PORT:
            return f"{self.protocol}://{self.host}"
        return f"{self.protocol}://{self.host}:{self.port}"

    def headers(self) -> dict[str, str]:
        headers = {"User-Agent": self.user_agent}
        if self.auth:
            headers["Authorization"] = f"Discogs {self.auth}"
        return headers


def _parse_count(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


@dataclass(frozen=True)
class RateLimitSnapshot:
    """Rate-limit counters from the most recent ``X-Discogs-Ratelimit*`` headers.

    A field is ``None`` when its header was missing or not an integer. The
    snapshot describes the server's view at the time of that response only;
    it is never refreshed between calls.
    """

    limit: int | None
    remaining: int | None
    used: int | None

    @classmethod
    def initial(cls) -> RateLimitSnapshot:
        """Placeholder used before the first response arrives."""
        return cls(limit=25, remaining=25, used=0)

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> RateLimitSnapshot:
        return cls(
            limit=_parse_count(headers.get(RATELIMIT_HEADER)),
            remaining=_parse_count(headers.get(RATELIMIT_REMAINING_HEADER)),
            used=_parse_count(headers.get(RATELIMIT_USED_HEADER)),
        )

    def is_exhausted(self, threshold: int) -> bool:
        return self.remaining is not None and self.remaining <= threshold


@dataclass
class RequestResult:
    """Outcome of one GET against the API.

    ``data`` holds the provider's JSON body verbatim (also for HTTP errors,
    when the body was JSON). ``error`` is set for transport failures,
    unparseable bodies and 4xx/5xx responses.
    """

    path: str
    data: Any = None
    headers: Mapping[str, str] = field(default_factory=dict)
    status_code: int = 0
    rate_limit: RateLimitSnapshot | None = None
    error: DiscogsError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> RequestResult:
        if self.error is not None:
            raise self.error
        return self

    def parse(self, model: type[ModelT]) -> ModelT:
        """Validate ``data`` into *model*, raising the stored error first."""
        self.raise_for_error()
        return model.model_validate(self.data)
