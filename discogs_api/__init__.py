"""Client library for the Discogs v2 REST API."""

__version__ = "0.1.0"
