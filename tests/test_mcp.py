"""Tests for the Discogs MCP server tools."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

mcp_sdk = pytest.importorskip("mcp", reason="mcp package not installed")

from discogs_api.sdk import NotFoundError, RateLimitSnapshot, RequestResult  # noqa: E402
from discogs_api.mcp.server import (  # noqa: E402
    get_rate_limit,
    get_user_collection,
    get_user_wantlist,
    list_artist_releases,
    list_label_releases,
    lookup_artist,
    lookup_label,
    lookup_master_release,
    lookup_release,
)

_PATCH_CLIENT = "discogs_api.mcp.server._client"

_PAGINATION = {"page": 1, "pages": 1, "per_page": 50, "items": 1, "urls": {}}


def _ok(data: dict) -> RequestResult:
    return RequestResult(path="x", data=data, status_code=200)


@pytest.mark.asyncio
async def test_lookup_release():
    mc = AsyncMock()
    mc.get_release.return_value = _ok(
        {"id": 249504, "title": "Never Gonna Give You Up", "year": 1987, "notes": "UK"}
    )
    with patch(_PATCH_CLIENT, mc):
        result = await lookup_release(release_id=249504)
    mc.get_release.assert_called_once_with(249504)
    assert result["title"] == "Never Gonna Give You Up"
    assert result["notes"] == "UK"


@pytest.mark.asyncio
async def test_lookup_release_error():
    mc = AsyncMock()
    mc.get_release.return_value = RequestResult(
        path="releases/0",
        data={"message": "Release not found."},
        status_code=404,
        error=NotFoundError(404, "Release not found."),
    )
    with patch(_PATCH_CLIENT, mc):
        result = await lookup_release(release_id=0)
    assert result == {"error": True, "status_code": 404, "detail": "Release not found."}


@pytest.mark.asyncio
async def test_lookup_master_release():
    mc = AsyncMock()
    mc.get_master_release.return_value = _ok({"id": 96559, "title": "Blue Lines", "main_release": 3})
    with patch(_PATCH_CLIENT, mc):
        result = await lookup_master_release(master_id=96559)
    mc.get_master_release.assert_called_once_with(96559)
    assert result["main_release"] == 3


@pytest.mark.asyncio
async def test_lookup_artist_and_label():
    mc = AsyncMock()
    mc.get_artist_details.return_value = _ok({"id": 1, "name": "The Persuader"})
    mc.get_label_details.return_value = _ok({"id": 1, "name": "Planet E"})
    with patch(_PATCH_CLIENT, mc):
        artist = await lookup_artist(artist_id=1)
        label = await lookup_label(label_id=1)
    assert artist["name"] == "The Persuader"
    assert label["name"] == "Planet E"
    assert label["sublabels"] == []


@pytest.mark.asyncio
async def test_list_artist_releases():
    mc = AsyncMock()
    mc.get_artist_releases.return_value = _ok(
        {"pagination": _PAGINATION, "releases": [{"id": 20209, "title": "Frequent Flyer"}]}
    )
    with patch(_PATCH_CLIENT, mc):
        result = await list_artist_releases(artist_id=1, page=2, sort="year")
    mc.get_artist_releases.assert_called_once_with(1, page=2, sort="year", sort_order=None)
    assert result["releases"][0]["title"] == "Frequent Flyer"


@pytest.mark.asyncio
async def test_list_label_releases():
    mc = AsyncMock()
    mc.get_label_releases.return_value = _ok(
        {"pagination": _PAGINATION, "releases": [{"id": 2, "title": "Stockholm", "catno": "SK032"}]}
    )
    with patch(_PATCH_CLIENT, mc):
        result = await list_label_releases(label_id=1, sort_order="asc")
    mc.get_label_releases.assert_called_once_with(1, page=1, sort=None, sort_order="asc")
    assert result["releases"][0]["catno"] == "SK032"


@pytest.mark.asyncio
async def test_user_collection_and_wantlist():
    item = {"id": 5, "basic_information": {"id": 5, "title": "Test"}}
    mc = AsyncMock()
    mc.get_user_collection.return_value = _ok({"pagination": _PAGINATION, "releases": [item]})
    mc.get_user_wantlist.return_value = _ok({"pagination": _PAGINATION, "wants": [item]})
    with patch(_PATCH_CLIENT, mc):
        collection = await get_user_collection(sort="rating")
        wants = await get_user_wantlist()
    mc.get_user_collection.assert_called_once_with(page=1, sort="rating", sort_order=None)
    assert collection["releases"][0]["basic_information"]["title"] == "Test"
    assert wants["wants"][0]["id"] == 5


@pytest.mark.asyncio
async def test_get_rate_limit():
    mc = MagicMock()
    mc.get_rate_limit.return_value = RateLimitSnapshot(limit=60, remaining=12, used=48)
    with patch(_PATCH_CLIENT, mc):
        result = await get_rate_limit()
    assert result == {"limit": 60, "remaining": 12, "used": 48}


@pytest.mark.asyncio
async def test_lookup_release_unexpected_shape():
    mc = AsyncMock()
    # Track entries always carry a title; this one does not.
    mc.get_release.return_value = _ok({"id": 1, "title": "X", "tracklist": [{"position": "A"}]})
    with patch(_PATCH_CLIENT, mc):
        result = await lookup_release(release_id=1)
    assert result["error"] is True
    assert result["status_code"] == 200
    assert "1 validation error" in result["detail"]
