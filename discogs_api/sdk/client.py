"""Async and sync HTTP clients for the Discogs API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from discogs_api import config
from discogs_api.config import Settings
from discogs_api.sdk import paths
from discogs_api.sdk.exceptions import (
    AuthenticationError,
    DiscogsError,
    NotFoundError,
    RateLimitError,
    ResponseParseError,
    TransportError,
    ValidationError,
)
from discogs_api.sdk.models import ClientConfig, RateLimitSnapshot, RequestResult
from discogs_api.sdk.throttle import RateLimitThrottle
from discogs_api.services.request_context import request_scope

logger = logging.getLogger(__name__)

# Maps HTTP status codes to exception classes.
_STATUS_MAP: dict[int, type[DiscogsError]] = {
    400: ValidationError,
    401: AuthenticationError,
    403: AuthenticationError,
    404: NotFoundError,
    422: ValidationError,
    429: RateLimitError,
}

# Raised by httpx before or while sending. InvalidURL (bad identifiers) and
# UnicodeEncodeError (non-ASCII header values) are not HTTPError subclasses.
_REQUEST_ERRORS = (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError)


def _build_exception(
    status_code: int,
    detail: str,
    rate_limit: RateLimitSnapshot | None,
) -> DiscogsError:
    """Construct the appropriate exception for *status_code*."""
    exc_cls = _STATUS_MAP.get(status_code, DiscogsError)
    if exc_cls is RateLimitError:
        return RateLimitError(status_code, detail, rate_limit)
    return exc_cls(status_code, detail)


def _parse_detail(data: Any, response: httpx.Response) -> str:
    """Discogs error bodies look like ``{"message": "Release not found."}``."""
    if isinstance(data, dict) and "message" in data:
        return str(data["message"])
    return response.text or response.reason_phrase


def _build_result(
    path: str,
    response: httpx.Response,
    throttle: RateLimitThrottle,
) -> RequestResult:
    """Turn a received response into a result, updating the shared snapshot."""
    rate_limit = RateLimitSnapshot.from_headers(response.headers)
    throttle.update(rate_limit)

    result = RequestResult(
        path=path,
        headers=response.headers,
        status_code=response.status_code,
        rate_limit=rate_limit,
    )
    try:
        result.data = response.json()
    except ValueError as exc:
        logger.error(
            "Discogs returned a non-JSON body: %s",
            exc,
            extra={"discogs_path": path, "status_code": response.status_code},
        )
        if response.status_code < 400:
            result.error = ResponseParseError(response.status_code, str(exc))
            return result

    if response.status_code >= 400:
        detail = _parse_detail(result.data, response)
        logger.warning(
            "Discogs request failed: %s",
            detail,
            extra={
                "discogs_path": path,
                "status_code": response.status_code,
                "rate_remaining": rate_limit.remaining,
            },
        )
        result.error = _build_exception(response.status_code, detail, rate_limit)
    return result


def _transport_failure(path: str, exc: Exception) -> RequestResult:
    logger.error("Discogs request not completed: %r", exc, extra={"discogs_path": path})
    return RequestResult(path=path, error=TransportError(str(exc) or type(exc).__name__))


def _client_kwargs(
    client_config: ClientConfig,
    timeout: float,
    transport: httpx.BaseTransport | httpx.AsyncBaseTransport | None,
) -> dict[str, Any]:
    kwargs: dict[str, Any] = {
        "base_url": client_config.base_url,
        "timeout": timeout,
    }
    if transport is not None:
        kwargs["transport"] = transport
    return kwargs


def _resolve(
    settings: Settings | None,
    **overrides: Any,
) -> tuple[Settings, ClientConfig, RateLimitThrottle]:
    settings = settings or config.settings
    client_config = ClientConfig.resolve(settings, **overrides)
    throttle = RateLimitThrottle(
        threshold=settings.throttle_threshold,
        cooldown=settings.throttle_cooldown,
        grace=settings.throttle_grace,
    )
    return settings, client_config, throttle


# ---------------------------------------------------------------------------
# Async client
# ---------------------------------------------------------------------------


class AsyncDiscogsClient:
    """Async client for the Discogs API (backed by ``httpx.AsyncClient``).

    Every ``get_*`` call returns a :class:`RequestResult`; failures are logged
    and reported on ``result.error`` instead of being raised. All calls except
    :meth:`get_user` and :meth:`get_request` first run the rate-limit
    cooldown check.
    """

    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        user_agent: str | None = None,
        token: str | None = None,
        key: str | None = None,
        secret: str | None = None,
        user_name: str | None = None,
        timeout: float | None = None,
        settings: Settings | None = None,
        *,
        _transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings, self.config, self.throttle = _resolve(
            settings,
            host=host,
            port=port,
            user_agent=user_agent,
            token=token,
            key=key,
            secret=secret,
            user_name=user_name,
        )
        self._client = httpx.AsyncClient(
            **_client_kwargs(
                self.config,
                timeout if timeout is not None else settings.timeout,
                _transport,
            )
        )

    # -- context manager -----------------------------------------------------

    async def __aenter__(self) -> AsyncDiscogsClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    # -- internal ------------------------------------------------------------

    async def request(self, path: str) -> RequestResult:
        """GET ``{base_url}/{path}`` and wrap the outcome."""
        path = path.lstrip("/")
        with request_scope():
            logger.debug("GET %s", self.config.base_url, extra={"discogs_path": path})
            try:
                response = await self._client.get(f"/{path}", headers=self.config.headers())
            except _REQUEST_ERRORS as exc:
                return _transport_failure(path, exc)
            return _build_result(path, response, self.throttle)

    async def _throttled(self, path: str) -> RequestResult:
        await self.throttle.acheck()
        return await self.request(path)

    # -- rate limit ----------------------------------------------------------

    def get_rate_limit(self) -> RateLimitSnapshot:
        return self.throttle.snapshot

    async def calculate_rate_limit_remaining(self) -> float:
        return await self.throttle.acheck()

    async def get_request(self, path: str) -> RequestResult:
        """Raw passthrough: no cooldown check, no parameter normalization."""
        return await self.request(path)

    # -- user ----------------------------------------------------------------

    async def get_user(self) -> RequestResult:
        return await self.request(paths.user_path(self.config.user_name))

    async def get_user_collection(
        self,
        page: int | str | None = None,
        sort: str | None = None,
        sort_order: str | None = None,
    ) -> RequestResult:
        return await self._throttled(
            paths.collection_path(
                self.config.user_name, self.config.per_page, page, sort, sort_order,
            )
        )

    async def get_user_wantlist(
        self,
        page: int | str | None = None,
        sort: str | None = None,
        sort_order: str | None = None,
    ) -> RequestResult:
        return await self._throttled(
            paths.wantlist_path(
                self.config.user_name, self.config.per_page, page, sort, sort_order,
            )
        )

    async def get_user_folders(self) -> RequestResult:
        return await self._throttled(paths.folders_path(self.config.user_name))

    async def get_user_folder_contents(
        self,
        folder: int | str,
        page: int | str | None = None,
        sort: str | None = None,
        sort_order: str | None = None,
    ) -> RequestResult:
        return await self._throttled(
            paths.folder_contents_path(
                self.config.user_name,
                folder,
                self.config.per_page,
                page,
                sort,
                sort_order,
            )
        )

    async def get_user_collection_value(self) -> RequestResult:
        return await self._throttled(paths.collection_value_path(self.config.user_name))

    # -- releases ------------------------------------------------------------

    async def get_release(self, release_id: int | str) -> RequestResult:
        return await self._throttled(paths.release_path(release_id))

    async def get_release_user_rating(self, release_id: int | str) -> RequestResult:
        return await self._throttled(
            paths.release_user_rating_path(release_id, self.config.user_name)
        )

    async def get_release_community_rating(self, release_id: int | str) -> RequestResult:
        return await self._throttled(paths.release_community_rating_path(release_id))

    async def get_release_stats(self, release_id: int | str) -> RequestResult:
        return await self._throttled(paths.release_stats_path(release_id))

    async def get_master_release(self, master_id: int | str) -> RequestResult:
        return await self._throttled(paths.master_path(master_id))

    async def get_master_release_versions(self, master_id: int | str) -> RequestResult:
        return await self._throttled(paths.master_versions_path(master_id))

    # -- artists -------------------------------------------------------------

    async def get_artist_details(self, artist_id: int | str) -> RequestResult:
        return await self._throttled(paths.artist_path(artist_id))

    async def get_artist_releases(
        self,
        artist_id: int | str,
        page: int | str | None = None,
        sort: str | None = None,
        sort_order: str | None = None,
    ) -> RequestResult:
        return await self._throttled(
            paths.artist_releases_path(
                artist_id, self.config.per_page, page, sort, sort_order,
            )
        )

    # -- labels --------------------------------------------------------------

    async def get_label_details(self, label_id: int | str) -> RequestResult:
        return await self._throttled(paths.label_path(label_id))

    async def get_label_releases(
        self,
        label_id: int | str,
        page: int | str | None = None,
        sort: str | None = None,
        sort_order: str | None = None,
    ) -> RequestResult:
        return await self._throttled(
            paths.label_releases_path(
                label_id, self.config.per_page, page, sort, sort_order,
            )
        )


# ---------------------------------------------------------------------------
# Sync client
# ---------------------------------------------------------------------------


class DiscogsClient:
    """Synchronous client for the Discogs API (backed by ``httpx.Client``).

    Same surface as :class:`AsyncDiscogsClient`. The cooldown check blocks
    the calling thread with ``time.sleep``.
    """

    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        user_agent: str | None = None,
        token: str | None = None,
        key: str | None = None,
        secret: str | None = None,
        user_name: str | None = None,
        timeout: float | None = None,
        settings: Settings | None = None,
        *,
        _transport: httpx.BaseTransport | None = None,
    ) -> None:
        settings, self.config, self.throttle = _resolve(
            settings,
            host=host,
            port=port,
            user_agent=user_agent,
            token=token,
            key=key,
            secret=secret,
            user_name=user_name,
        )
        self._client = httpx.Client(
            **_client_kwargs(
                self.config,
                timeout if timeout is not None else settings.timeout,
                _transport,
            )
        )

    # -- context manager -----------------------------------------------------

    def __enter__(self) -> DiscogsClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    # -- internal ------------------------------------------------------------

    def request(self, path: str) -> RequestResult:
        """GET ``{base_url}/{path}`` and wrap the outcome."""
        path = path.lstrip("/")
        with request_scope():
            logger.debug("GET %s", self.config.base_url, extra={"discogs_path": path})
            try:
                response = self._client.get(f"/{path}", headers=self.config.headers())
            except _REQUEST_ERRORS as exc:
                return _transport_failure(path, exc)
            return _build_result(path, response, self.throttle)

    def _throttled(self, path: str) -> RequestResult:
        self.throttle.check()
        return self.request(path)

    # -- rate limit ----------------------------------------------------------

    def get_rate_limit(self) -> RateLimitSnapshot:
        return self.throttle.snapshot

    def calculate_rate_limit_remaining(self) -> float:
        return self.throttle.check()

    def get_request(self, path: str) -> RequestResult:
        """Raw passthrough: no cooldown check, no parameter normalization."""
        return self.request(path)

    # -- user ----------------------------------------------------------------

    def get_user(self) -> RequestResult:
        return self.request(paths.user_path(self.config.user_name))

    def get_user_collection(
        self,
        page: int | str | None = None,
        sort: str | None = None,
        sort_order: str | None = None,
    ) -> RequestResult:
        return self._throttled(
            paths.collection_path(
                self.config.user_name, self.config.per_page, page, sort, sort_order,
            )
        )

    def get_user_wantlist(
        self,
        page: int | str | None = None,
        sort: str | None = None,
        sort_order: str | None = None,
    ) -> RequestResult:
        return self._throttled(
            paths.wantlist_path(
                self.config.user_name, self.config.per_page, page, sort, sort_order,
            )
        )

    def get_user_folders(self) -> RequestResult:
        return self._throttled(paths.folders_path(self.config.user_name))

    def get_user_folder_contents(
        self,
        folder: int | str,
        page: int | str | None = None,
        sort: str | None = None,
        sort_order: str | None = None,
    ) -> RequestResult:
        return self._throttled(
            paths.folder_contents_path(
                self.config.user_name,
                folder,
                self.config.per_page,
                page,
                sort,
                sort_order,
            )
        )

    def get_user_collection_value(self) -> RequestResult:
        return self._throttled(paths.collection_value_path(self.config.user_name))

    # -- releases ------------------------------------------------------------

    def get_release(self, release_id: int | str) -> RequestResult:
        return self._throttled(paths.release_path(release_id))

    def get_release_user_rating(self, release_id: int | str) -> RequestResult:
        return self._throttled(
            paths.release_user_rating_path(release_id, self.config.user_name)
        )

    def get_release_community_rating(self, release_id: int | str) -> RequestResult:
        return self._throttled(paths.release_community_rating_path(release_id))

    def get_release_stats(self, release_id: int | str) -> RequestResult:
        return self._throttled(paths.release_stats_path(release_id))

    def get_master_release(self, master_id: int | str) -> RequestResult:
        return self._throttled(paths.master_path(master_id))

    def get_master_release_versions(self, master_id: int | str) -> RequestResult:
        return self._throttled(paths.master_versions_path(master_id))

    # -- artists -------------------------------------------------------------

    def get_artist_details(self, artist_id: int | str) -> RequestResult:
        return self._throttled(paths.artist_path(artist_id))

    def get_artist_releases(
        self,
        artist_id: int | str,
        page: int | str | None = None,
        sort: str | None = None,
        sort_order: str | None = None,
    ) -> RequestResult:
        return self._throttled(
            paths.artist_releases_path(
                artist_id, self.config.per_page, page, sort, sort_order,
            )
        )

    # -- labels --------------------------------------------------------------

    def get_label_details(self, label_id: int | str) -> RequestResult:
        return self._throttled(paths.label_path(label_id))

    def get_label_releases(
        self,
        label_id: int | str,
        page: int | str | None = None,
        sort: str | None = None,
        sort_order: str | None = None,
    ) -> RequestResult:
        return self._throttled(
            paths.label_releases_path(
                label_id, self.config.per_page, page, sort, sort_order,
            )
        )
