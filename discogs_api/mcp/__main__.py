"""Entry point for ``python -m discogs_api.mcp``."""

from __future__ import annotations

import argparse

from discogs_api.config import settings
from discogs_api.logging_config import setup_logging
from discogs_api.mcp.server import mcp


def main() -> None:
    parser = argparse.ArgumentParser(description="Discogs MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "streamable-http"],
        default="stdio",
        help="MCP transport (default: stdio)",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help=f"Logging level (default: {settings.log_level})",
    )
    parser.add_argument(
        "--log-format",
        choices=["text", "json"],
        default=settings.log_format,
        help=f"Log line format (default: {settings.log_format})",
    )
    args = parser.parse_args()
    # stdio carries the protocol on stdout, so logs always go to stderr.
    setup_logging(args.log_level, args.log_format)
    mcp.run(transport=args.transport)


if __name__ == "__main__":
    main()
