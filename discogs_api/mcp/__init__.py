"""Discogs MCP server: exposes catalog lookups as tools for LLM agents.

Requires the ``mcp`` optional dependency: ``pip install discogs-api[mcp]``
"""

from __future__ import annotations


def __getattr__(name: str):  # noqa: N807
    if name == "mcp":
        from discogs_api.mcp.server import mcp

        return mcp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["mcp"]
