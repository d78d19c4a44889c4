"""Fixtures compartidas / Shared fixtures."""

import pytest

from autostock.config import Settings
from autostock.store.client import build_client


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        DEBUG=False,
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'autostock.db'}",
        STORAGE_DIR=str(tmp_path / "storage"),
        PUBLIC_STORAGE_URL="http://test/storage",
    )


@pytest.fixture
async def store(test_settings):
    """Cliente sobre una base SQLite temporal / Client on a temporary SQLite file."""
    client = await build_client(test_settings)
    yield client
    await client.aclose()

