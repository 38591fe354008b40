"""Tests for CatalogSyncService."""

import logging
from unittest.mock import AsyncMock

import pytest

from spectrum.application.services.catalog_sync_service import (
    CatalogSyncResult,
    CatalogSyncService,
)
from spectrum.application.services.file_locator import FileLocator
from spectrum.domain.dtos import LidarrAlbum, LidarrArtist, LidarrTrack
from spectrum.infrastructure.persistence.repositories import (
    AlbumRepository,
    ArtistRepository,
    TrackRepository,
)


@pytest.fixture
def catalog(mock_client: AsyncMock) -> AsyncMock:
    """Two artists: Alpha has one complete and one empty album, Beta has none."""
    mock_client.list_artists.return_value = [
        LidarrArtist.from_dict({"id": 1, "artistName": "Alpha"}),
        LidarrArtist.from_dict({"id": 2, "artistName": "Beta"}),
    ]

    async def list_albums(artist_id: int) -> list[LidarrAlbum]:
        if artist_id != 1:
            return []
        return [
            LidarrAlbum.from_dict(
                {
                    "id": 10,
                    "title": "On Disk",
                    "releases": [{"id": 77, "monitored": True}],
                    "statistics": {"trackFileCount": 2, "trackCount": 2},
                }
            ),
            LidarrAlbum.from_dict(
                {
                    "id": 11,
                    "title": "Wanted",
                    "statistics": {"trackFileCount": 0, "trackCount": 9},
                }
            ),
        ]

    mock_client.list_albums.side_effect = list_albums
    mock_client.list_tracks.return_value = [
        LidarrTrack.from_dict({"id": 100, "title": "One", "absoluteTrackNumber": 1}),
        LidarrTrack.from_dict({"id": 101, "title": "Two", "absoluteTrackNumber": 2}),
    ]
    return mock_client


class TestCatalogSyncService:
    """Test a whole sync pass."""

    async def test_full_pass(self, session, catalog, tmp_path) -> None:
        """Artists, albums and tracks of downloaded albums are mirrored."""
        service = CatalogSyncService(session, catalog, FileLocator(str(tmp_path)))

        result = await service.run_full_sync()

        assert result.artists_created == 2
        assert result.albums_created == 2
        assert result.tracks_created == 2
        assert result.artists_failed == 0
        assert result.albums_failed == 0
        # only the downloaded album was asked for tracks, scoped to its release
        catalog.list_tracks.assert_awaited_once_with(1, 10, 77)
        assert await ArtistRepository(session).count_all() == 2
        assert await AlbumRepository(session).count_all() == 2
        assert await TrackRepository(session).count_all() == 2

    async def test_second_pass_is_a_no_op(self, session, catalog, tmp_path) -> None:
        """A repeated pass creates nothing new."""
        service = CatalogSyncService(session, catalog, FileLocator(str(tmp_path)))
        await service.run_full_sync()

        result = await service.run_incremental_sync()

        assert result.to_dict() == {
            "artists_created": 0,
            "albums_created": 0,
            "tracks_created": 0,
            "artists_failed": 0,
            "albums_failed": 0,
            "duration_ms": result.duration_ms,
        }
        assert await TrackRepository(session).count_all() == 2

    async def test_album_stage_failure_is_counted(
        self, session, catalog, tmp_path
    ) -> None:
        """One artist's album fetch blowing up does not stop the others."""

        async def list_albums(artist_id: int) -> list[LidarrAlbum]:
            if artist_id == 1:
                raise RuntimeError("unexpected")
            return [LidarrAlbum.from_dict({"id": 20, "title": "Beta Album"})]

        catalog.list_albums.side_effect = list_albums
        service = CatalogSyncService(session, catalog, FileLocator(str(tmp_path)))

        result = await service.run_full_sync()

        assert result.artists_created == 2
        assert result.artists_failed == 1
        assert result.albums_created == 1

    async def test_track_stage_failure_is_counted(
        self, session, catalog, tmp_path
    ) -> None:
        """A failing track fetch is counted per album."""
        catalog.list_tracks.side_effect = RuntimeError("unexpected")
        service = CatalogSyncService(session, catalog, FileLocator(str(tmp_path)))

        result = await service.run_full_sync()

        assert result.albums_created == 2
        assert result.albums_failed == 1
        assert result.tracks_created == 0

    async def test_empty_source(self, session, mock_client, tmp_path) -> None:
        """Lidarr unreachable (client returns []) gives an empty result."""
        service = CatalogSyncService(session, mock_client, FileLocator(str(tmp_path)))

        result = await service.run_full_sync()

        assert isinstance(result, CatalogSyncResult)
        assert result.artists_created == result.albums_created == result.tracks_created == 0

    async def test_full_pass_with_debug_logging(
        self, session, catalog, tmp_path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Every stage logs its summary line and the pass still completes."""
        caplog.set_level(logging.DEBUG)
        service = CatalogSyncService(session, catalog, FileLocator(str(tmp_path)))

        result = await service.run_full_sync()

        assert (result.artists_created, result.albums_created, result.tracks_created) == (
            2,
            2,
            2,
        )
        for message in (
            "artist_sync.finished",
            "album_sync.artist_finished",
            "track_sync.album_finished",
            "catalog_sync.pass.completed",
        ):
            assert message in caplog.messages
        finished = next(r for r in caplog.records if r.getMessage() == "artist_sync.finished")
        assert finished.artists_created == 2
