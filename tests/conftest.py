"""Shared fixtures: in-memory catalog database and a mocked Lidarr client."""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from spectrum.config import DatabaseSettings, LidarrSettings
from spectrum.domain.ports import ICatalogSourceClient
from spectrum.infrastructure.persistence import Database

# Hey future me - the reconciler tests run against a REAL SQLite database (in memory,
# StaticPool so every session sees the same one). Only Lidarr is mocked. That way the
# unique constraints and per-row commits are exercised for real.


@pytest.fixture
async def database() -> AsyncGenerator[Database, None]:
    """Fresh in-memory database with the catalog schema."""
    db = Database(DatabaseSettings(url="sqlite+aiosqlite:///:memory:"))
    await db.create_tables()
    yield db
    await db.drop_tables()
    await db.close()


@pytest.fixture
async def session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """Session on the in-memory database."""
    async with database.session_scope() as session:
        yield session


@pytest.fixture
def lidarr_settings(tmp_path) -> LidarrSettings:
    """Lidarr settings pointing the media root at a temp dir."""
    return LidarrSettings(
        base_url="http://lidarr.test/api/v1",
        api_key="test-api-key",
        timeout=5.0,
        media_root=str(tmp_path / "media"),
        root_folder_path="/music",
        quality_profile_id=2,
        metadata_profile_id=3,
    )


@pytest.fixture
def mock_client() -> AsyncMock:
    """Catalog source mock returning empty results by default."""
    client = AsyncMock(spec=ICatalogSourceClient)
    client.list_artists.return_value = []
    client.list_albums.return_value = []
    client.list_tracks.return_value = []
    return client
