"""Correlation IDs for outbound Discogs calls, carried in a contextvar."""

from __future__ import annotations

import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

request_id_var: ContextVar[str] = ContextVar("discogs_request_id", default="")


def get_request_id() -> str:
    return request_id_var.get()


@contextmanager
def request_scope(request_id: str | None = None) -> Iterator[str]:
    """Tag every log line emitted inside the block with one request ID.

    A fresh 32-character hex ID is generated unless *request_id* is given.
    The previous value is restored on exit, so scopes nest cleanly.
    """
    rid = request_id or uuid.uuid4().hex
    token = request_id_var.set(rid)
    try:
        yield rid
    finally:
        request_id_var.reset(token)
