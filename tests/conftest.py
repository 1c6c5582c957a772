import os

import pytest

from discogs_api.config import Settings


@pytest.fixture(autouse=True)
def _clean_discogs_env(monkeypatch):
    """Keep a developer's DISCOGS_* variables out of every test."""
    for name in list(os.environ):
        if name.startswith("DISCOGS_"):
            monkeypatch.delenv(name)


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, user_name="rodneyfool")
