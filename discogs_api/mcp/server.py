"""FastMCP server wrapping the Discogs client as read-only tools."""

from __future__ import annotations

import dataclasses
import logging
from contextlib import asynccontextmanager
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import BaseModel, ValidationError

from discogs_api.sdk.client import AsyncDiscogsClient
from discogs_api.sdk.models import RequestResult
from discogs_api.sdk.schemas import (
    Artist,
    ArtistReleasesPage,
    CollectionPage,
    Label,
    LabelReleasesPage,
    MasterRelease,
    Release,
    WantlistPage,
)

logger = logging.getLogger(__name__)

_client: AsyncDiscogsClient | None = None


@asynccontextmanager
async def _lifespan(server: FastMCP):
    """Create and tear down the shared API client (configured from DISCOGS_* env)."""
    global _client  # noqa: PLW0603
    _client = AsyncDiscogsClient()
    yield
    await _client.close()
    _client = None


mcp = FastMCP(
    name="Discogs",
    instructions=(
        "Discogs is a crowd-sourced music catalog. These tools look up "
        "releases (a specific pressing), master releases (the group of all "
        "pressings of one album), artists and labels by numeric ID, and page "
        "through the configured user's collection and wantlist. The API is "
        "rate limited; call get_rate_limit to see how many requests remain. "
        "When the quota is nearly used up, calls pause for about a minute."
    ),
    lifespan=_lifespan,
)


def _get_client() -> AsyncDiscogsClient:
    assert _client is not None, "MCP server not started, client unavailable"
    return _client


def _payload(result: RequestResult, model: type[BaseModel]) -> dict[str, Any]:
    """Validated body on success, a small error dict otherwise."""
    if result.error is not None:
        return {
            "error": True,
            "status_code": result.error.status_code,
            "detail": result.error.detail,
        }
    try:
        parsed = result.parse(model)
    except ValidationError as exc:
        logger.warning(
            "Discogs response did not match %s: %s",
            model.__name__,
            exc,
            extra={"discogs_path": result.path, "status_code": result.status_code},
        )
        return {
            "error": True,
            "status_code": result.status_code,
            "detail": f"Unexpected response shape: {exc.error_count()} validation error(s)",
        }
    return parsed.model_dump(mode="json")


@mcp.tool()
async def lookup_release(release_id: int) -> dict[str, Any]:
    """Get full details of one Discogs release (a specific pressing).

    Args:
        release_id: Numeric Discogs release ID, e.g. 249504.

    Returns:
        Dict with title, year, country, artists, labels (with catalog
        numbers), formats, genres, styles, tracklist and images.
    """
    result = await _get_client().get_release(release_id)
    return _payload(result, Release)


@mcp.tool()
async def lookup_master_release(master_id: int) -> dict[str, Any]:
    """Get a master release: the album that groups all of its pressings.

    Args:
        master_id: Numeric Discogs master ID.

    Returns:
        Dict with title, year, main_release (the canonical release ID),
        artists, genres, styles and tracklist.
    """
    result = await _get_client().get_master_release(master_id)
    return _payload(result, MasterRelease)


@mcp.tool()
async def lookup_artist(artist_id: int) -> dict[str, Any]:
    """Get an artist's profile.

    Args:
        artist_id: Numeric Discogs artist ID.

    Returns:
        Dict with name, profile text, external urls and images.
    """
    result = await _get_client().get_artist_details(artist_id)
    return _payload(result, Artist)


@mcp.tool()
async def list_artist_releases(
    artist_id: int,
    page: int = 1,
    sort: str | None = None,
    sort_order: str | None = None,
) -> dict[str, Any]:
    """List an artist's releases and masters, one page at a time.

    Args:
        artist_id: Numeric Discogs artist ID.
        page: 1-based page number.
        sort: "title" (default), "year" or "format".
        sort_order: "asc" or "desc" (default).

    Returns:
        Dict with pagination and a releases array.
    """
    result = await _get_client().get_artist_releases(
        artist_id, page=page, sort=sort, sort_order=sort_order,
    )
    return _payload(result, ArtistReleasesPage)


@mcp.tool()
async def lookup_label(label_id: int) -> dict[str, Any]:
    """Get a record label's profile.

    Args:
        label_id: Numeric Discogs label ID.

    Returns:
        Dict with name, profile, contact_info, sublabels and urls.
    """
    result = await _get_client().get_label_details(label_id)
    return _payload(result, Label)


@mcp.tool()
async def list_label_releases(
    label_id: int,
    page: int = 1,
    sort: str | None = None,
    sort_order: str | None = None,
) -> dict[str, Any]:
    """List releases published on a label, one page at a time.

    Args:
        label_id: Numeric Discogs label ID.
        page: 1-based page number.
        sort: "title" (default), "year", "artist", "catno" or "format".
        sort_order: "asc" or "desc" (default).

    Returns:
        Dict with pagination and a releases array including catalog numbers.
    """
    result = await _get_client().get_label_releases(
        label_id, page=page, sort=sort, sort_order=sort_order,
    )
    return _payload(result, LabelReleasesPage)


@mcp.tool()
async def get_user_collection(
    page: int = 1,
    sort: str | None = None,
    sort_order: str | None = None,
) -> dict[str, Any]:
    """Page through the configured user's record collection.

    Args:
        page: 1-based page number.
        sort: "added" (default), "year", "artist", "title", "catno",
              "format" or "rating".
        sort_order: "asc" or "desc" (default).

    Returns:
        Dict with pagination and a releases array; each entry has the user's
        rating, date_added and basic_information about the release.
    """
    result = await _get_client().get_user_collection(
        page=page, sort=sort, sort_order=sort_order,
    )
    return _payload(result, CollectionPage)


@mcp.tool()
async def get_user_wantlist(
    page: int = 1,
    sort: str | None = None,
    sort_order: str | None = None,
) -> dict[str, Any]:
    """Page through the configured user's wantlist.

    Args:
        page: 1-based page number.
        sort: same keys as get_user_collection.
        sort_order: "asc" or "desc" (default).

    Returns:
        Dict with pagination and a wants array.
    """
    result = await _get_client().get_user_wantlist(
        page=page, sort=sort, sort_order=sort_order,
    )
    return _payload(result, WantlistPage)


@mcp.tool()
async def get_rate_limit() -> dict[str, Any]:
    """Report the rate-limit counters from the most recent API response.

    Does not call the API. Before the first call the values are a 25/25/0
    placeholder.

    Returns:
        Dict with limit, remaining and used for the current one-minute window.
    """
    return dataclasses.asdict(_get_client().get_rate_limit())
