"""Resource paths and paging/sort normalization shared by both clients.

Paths are relative to the API host and may carry a query string, e.g.
``users/rodneyfool/collection?sort=added&sort_order=desc&per_page=50&page=1``.
Resource identifiers are passed through untouched; a malformed ID only
surfaces as whatever error the API returns.
"""

from __future__ import annotations

from urllib.parse import urlencode

DEFAULT_PAGE = "1"
DEFAULT_SORT_ORDER = "desc"

COLLECTION_SORTS: frozenset[str] = frozenset(
    {"added", "year", "artist", "title", "catno", "format", "rating"}
)
COLLECTION_DEFAULT_SORT = "added"

ARTIST_RELEASE_SORTS: frozenset[str] = frozenset({"title", "year", "format"})
ARTIST_RELEASE_DEFAULT_SORT = "title"

LABEL_RELEASE_SORTS: frozenset[str] = frozenset(
    {"title", "year", "artist", "catno", "format"}
)
LABEL_RELEASE_DEFAULT_SORT = "title"


def normalize_page(page: int | str | None) -> str:
    if page is None or page == "":
        return DEFAULT_PAGE
    return str(page)


def normalize_sort_order(sort_order: str | None) -> str:
    return sort_order or DEFAULT_SORT_ORDER


def normalize_sort(sort: str | None, allowed: frozenset[str], default: str) -> str:
    """Keep *sort* only if the resource recognises it."""
    if sort in allowed:
        return sort
    return default


def paged_query(
    *,
    sort: str,
    sort_order: str | None,
    per_page: int,
    page: int | str | None,
) -> str:
    return urlencode(
        {
            "sort": sort,
            "sort_order": normalize_sort_order(sort_order),
            "per_page": per_page,
            "page": normalize_page(page),
        }
    )


def _collection_sort(sort: str | None) -> str:
    return normalize_sort(sort, COLLECTION_SORTS, COLLECTION_DEFAULT_SORT)


# -- user ---------------------------------------------------------------------


def user_path(user_name: str) -> str:
    return f"users/{user_name}"


def collection_path(
    user_name: str,
    per_page: int,
    page: int | str | None = None,
    sort: str | None = None,
    sort_order: str | None = None,
) -> str:
    query = paged_query(
        sort=_collection_sort(sort), sort_order=sort_order, per_page=per_page, page=page,
    )
    return f"users/{user_name}/collection?{query}"


def wantlist_path(
    user_name: str,
    per_page: int,
    page: int | str | None = None,
    sort: str | None = None,
    sort_order: str | None = None,
) -> str:
    query = paged_query(
        sort=_collection_sort(sort), sort_order=sort_order, per_page=per_page, page=page,
    )
    return f"users/{user_name}/wants?{query}"


def folders_path(user_name: str) -> str:
    return f"users/{user_name}/collection/folders"


def folder_contents_path(
    user_name: str,
    folder: int | str,
    per_page: int,
    page: int | str | None = None,
    sort: str | None = None,
    sort_order: str | None = None,
) -> str:
    query = paged_query(
        sort=_collection_sort(sort), sort_order=sort_order, per_page=per_page, page=page,
    )
    return f"users/{user_name}/collection/folders/{folder}/releases?{query}"


def collection_value_path(user_name: str) -> str:
    return f"users/{user_name}/collection/value"


# -- releases / masters -------------------------------------------------------


def release_path(release_id: int | str) -> str:
    return f"releases/{release_id}"


def release_user_rating_path(release_id: int | str, user_name: str) -> str:
    return f"releases/{release_id}/rating/{user_name}"


def release_community_rating_path(release_id: int | str) -> str:
    return f"releases/{release_id}/rating"


def release_stats_path(release_id: int | str) -> str:
    return f"releases/{release_id}/stats"


def master_path(master_id: int | str) -> str:
    return f"masters/{master_id}"


def master_versions_path(master_id: int | str) -> str:
    return f"masters/{master_id}/versions"


# -- artists / labels ---------------------------------------------------------


def artist_path(artist_id: int | str) -> str:
    return f"artists/{artist_id}"


def artist_releases_path(
    artist_id: int | str,
    per_page: int,
    page: int | str | None = None,
    sort: str | None = None,
    sort_order: str | None = None,
) -> str:
    query = paged_query(
        sort=normalize_sort(sort, ARTIST_RELEASE_SORTS, ARTIST_RELEASE_DEFAULT_SORT),
        sort_order=sort_order,
        per_page=per_page,
        page=page,
    )
    return f"artists/{artist_id}/releases?{query}"


def label_path(label_id: int | str) -> str:
    return f"labels/{label_id}"


def label_releases_path(
    label_id: int | str,
    per_page: int,
    page: int | str | None = None,
    sort: str | None = None,
    sort_order: str | None = None,
) -> str:
    query = paged_query(
        sort=normalize_sort(sort, LABEL_RELEASE_SORTS, LABEL_RELEASE_DEFAULT_SORT),
        sort_order=sort_order,
        per_page=per_page,
        page=page,
    )
    return f"labels/{label_id}/releases?{query}"
