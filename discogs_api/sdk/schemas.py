"""Pydantic models for Discogs response bodies.

The API returns far more fields than are modelled here. Every model allows
extra fields, so ``model_dump()`` round-trips the provider's document and new
fields flow through without schema changes. Use them with
``RequestResult.parse(Release)`` and friends.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class DiscogsModel(BaseModel):
    model_config = ConfigDict(extra="allow")


# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------


class PaginationUrls(DiscogsModel):
    first: str | None = None
    prev: str | None = None
    next: str | None = None
    last: str | None = None


class Pagination(DiscogsModel):
    """Paging block attached to every list endpoint."""

    page: int = Field(..., description="Current page, 1-based")
    pages: int = Field(..., description="Total number of pages")
    per_page: int = Field(..., description="Items per page")
    items: int = Field(..., description="Total number of items")
    urls: PaginationUrls = Field(default_factory=PaginationUrls)


class EntityRef(DiscogsModel):
    """Short artist/label reference embedded in releases."""

    id: int
    name: str
    resource_url: str | None = None


class LabelRef(EntityRef):
    catno: str | None = None


class Format(DiscogsModel):
    name: str
    qty: str | None = None
    descriptions: list[str] = Field(default_factory=list)


class Image(DiscogsModel):
    type: str | None = None
    uri: str | None = None
    width: int | None = None
    height: int | None = None


class Track(DiscogsModel):
    position: str = ""
    title: str
    duration: str | None = None


# ---------------------------------------------------------------------------
# Users / collection
# ---------------------------------------------------------------------------


class User(DiscogsModel):
    id: int
    username: str
    resource_url: str | None = None
    name: str | None = None
    num_collection: int | None = None
    num_wantlist: int | None = None


class BasicInformation(DiscogsModel):
    """Release summary used inside collection and wantlist entries."""

    id: int
    title: str
    year: int | None = None
    resource_url: str | None = None
    thumb: str | None = None
    artists: list[EntityRef] = Field(default_factory=list)
    labels: list[LabelRef] = Field(default_factory=list)
    formats: list[Format] = Field(default_factory=list)


class CollectionItem(DiscogsModel):
    id: int
    instance_id: int | None = None
    folder_id: int | None = None
    rating: int = 0
    date_added: str | None = None
    basic_information: BasicInformation


class CollectionPage(DiscogsModel):
    """Body of collection and folder-contents listings."""

    pagination: Pagination
    releases: list[CollectionItem] = Field(default_factory=list)


class Want(DiscogsModel):
    id: int
    rating: int = 0
    notes: str | None = None
    date_added: str | None = None
    basic_information: BasicInformation


class WantlistPage(DiscogsModel):
    pagination: Pagination
    wants: list[Want] = Field(default_factory=list)


class Folder(DiscogsModel):
    id: int
    name: str
    count: int = 0
    resource_url: str | None = None


class FolderList(DiscogsModel):
    folders: list[Folder] = Field(default_factory=list)


class CollectionValue(DiscogsModel):
    """Estimated collection value; amounts are preformatted strings like "$12.34"."""

    minimum: str
    median: str
    maximum: str


# ---------------------------------------------------------------------------
# Releases / masters
# ---------------------------------------------------------------------------


class Release(DiscogsModel):
    id: int
    title: str
    year: int | None = None
    country: str | None = None
    released: str | None = None
    master_id: int | None = None
    resource_url: str | None = None
    uri: str | None = None
    artists: list[EntityRef] = Field(default_factory=list)
    labels: list[LabelRef] = Field(default_factory=list)
    formats: list[Format] = Field(default_factory=list)
    genres: list[str] = Field(default_factory=list)
    styles: list[str] = Field(default_factory=list)
    tracklist: list[Track] = Field(default_factory=list)
    images: list[Image] = Field(default_factory=list)


class UserRating(DiscogsModel):
    username: str
    release_id: int
    rating: int


class RatingSummary(DiscogsModel):
    count: int
    average: float


class CommunityRating(DiscogsModel):
    release_id: int
    rating: RatingSummary


class ReleaseStats(DiscogsModel):
    """Community have/want counts. Some responses only carry ``is_offensive``."""

    num_have: int | None = None
    num_want: int | None = None
    is_offensive: bool | None = None


class MasterRelease(DiscogsModel):
    id: int
    title: str
    year: int | None = None
    main_release: int | None = None
    resource_url: str | None = None
    artists: list[EntityRef] = Field(default_factory=list)
    genres: list[str] = Field(default_factory=list)
    styles: list[str] = Field(default_factory=list)
    tracklist: list[Track] = Field(default_factory=list)


class MasterVersion(DiscogsModel):
    id: int
    title: str
    format: str | None = None
    label: str | None = None
    country: str | None = None
    released: str | None = None
    catno: str | None = None
    resource_url: str | None = None


class MasterVersionsPage(DiscogsModel):
    pagination: Pagination
    versions: list[MasterVersion] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Artists / labels
# ---------------------------------------------------------------------------


class Artist(DiscogsModel):
    id: int
    name: str
    profile: str | None = None
    resource_url: str | None = None
    uri: str | None = None
    urls: list[str] = Field(default_factory=list)
    images: list[Image] = Field(default_factory=list)


class ArtistRelease(DiscogsModel):
    id: int
    title: str
    type: str | None = None
    year: int | None = None
    role: str | None = None
    artist: str | None = None
    format: str | None = None
    resource_url: str | None = None


class ArtistReleasesPage(DiscogsModel):
    pagination: Pagination
    releases: list[ArtistRelease] = Field(default_factory=list)


class Label(DiscogsModel):
    id: int
    name: str
    profile: str | None = None
    contact_info: str | None = None
    resource_url: str | None = None
    uri: str | None = None
    sublabels: list[EntityRef] = Field(default_factory=list)
    urls: list[str] = Field(default_factory=list)


class LabelRelease(DiscogsModel):
    id: int
    title: str
    artist: str | None = None
    catno: str | None = None
    format: str | None = None
    year: int | None = None
    status: str | None = None
    resource_url: str | None = None


class LabelReleasesPage(DiscogsModel):
    pagination: Pagination
    releases: list[LabelRelease] = Field(default_factory=list)
