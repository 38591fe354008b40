"""Tests for ArtistOnboardingService."""

import pytest

from spectrum.application.services.artist_onboarding_service import (
    ArtistOnboardingService,
)
from spectrum.domain.dtos import AddArtistOptions, LidarrArtist
from spectrum.domain.entities import Artist
from spectrum.infrastructure.persistence.repositories import (
    ArtistRepository,
    GenreRepository,
)


def _record(lidarr_id: int | None = 42) -> LidarrArtist:
    return LidarrArtist.from_dict(
        {
            "id": lidarr_id,
            "artistName": "Delta",
            "foreignArtistId": "mb-delta",
            "overview": "Bio",
            "genres": ["Electronic", "electronic", "Ambient"],
            "images": [{"remoteUrl": "http://img/delta.jpg"}],
        }
    )


class TestArtistOnboardingService:
    """Test loading an artist by MusicBrainz id."""

    async def test_unknown_artist_added_and_stored(
        self, session, mock_client, lidarr_settings
    ) -> None:
        """First load adds the artist to Lidarr and mirrors it with genres."""
        mock_client.add_artist.return_value = _record()
        service = ArtistOnboardingService(session, mock_client, lidarr_settings)

        record = await service.load_artist("Delta", "mb-delta")

        assert record is not None
        assert record.id == 42
        mock_client.add_artist.assert_awaited_once_with(
            name="Delta",
            foreign_id="mb-delta",
            quality_profile_id=2,
            metadata_profile_id=3,
            root_folder_path="/music",
            add_options=AddArtistOptions(),
        )
        stored = await ArtistRepository(session).get_by_lidarr_id(42)
        assert stored is not None
        assert stored.foreign_artist_id == "mb-delta"
        assert stored.image_url == "http://img/delta.jpg"
        assert sorted(g.name for g in stored.genres) == ["Ambient", "Electronic"]
        assert len(await GenreRepository(session).list_all()) == 2

    async def test_known_artist_fetched_not_added(
        self, session, mock_client, lidarr_settings
    ) -> None:
        """A local artist with that foreign id is looked up in Lidarr instead."""
        await ArtistRepository(session).add(
            Artist(name="Delta", lidarr_id=42, foreign_artist_id="mb-delta")
        )
        await session.commit()
        mock_client.get_artist.return_value = _record()
        service = ArtistOnboardingService(session, mock_client, lidarr_settings)

        record = await service.load_artist("Delta", "mb-delta")

        assert record is not None
        mock_client.get_artist.assert_awaited_once_with(42)
        mock_client.add_artist.assert_not_awaited()

    async def test_known_artist_without_lidarr_id(
        self, session, mock_client, lidarr_settings
    ) -> None:
        """A local artist Lidarr doesn't know yields None."""
        await ArtistRepository(session).add(
            Artist(name="Delta", foreign_artist_id="mb-delta")
        )
        await session.commit()
        service = ArtistOnboardingService(session, mock_client, lidarr_settings)

        assert await service.load_artist("Delta", "mb-delta") is None
        mock_client.get_artist.assert_not_awaited()
        mock_client.add_artist.assert_not_awaited()

    async def test_add_failure_returns_none(
        self, session, mock_client, lidarr_settings
    ) -> None:
        """Lidarr refusing the add stores nothing."""
        mock_client.add_artist.return_value = None
        service = ArtistOnboardingService(session, mock_client, lidarr_settings)

        assert await service.load_artist("Delta", "mb-delta") is None
        assert await ArtistRepository(session).count_all() == 0

    async def test_already_synced_lidarr_id_not_duplicated(
        self, session, mock_client, lidarr_settings
    ) -> None:
        """If the sync already has the Lidarr id, no second row is created."""
        await ArtistRepository(session).add(Artist(name="Delta", lidarr_id=42))
        await session.commit()
        mock_client.add_artist.return_value = _record()
        service = ArtistOnboardingService(session, mock_client, lidarr_settings)

        record = await service.load_artist("Delta", "mb-delta")

        assert record is not None
        assert await ArtistRepository(session).count_all() == 1

    @pytest.mark.parametrize("artist_name", ["", "Lidarr Name"])
    async def test_name_fallback(
        self, session, mock_client, lidarr_settings, artist_name: str
    ) -> None:
        """The requested name is used when Lidarr sends none."""
        mock_client.add_artist.return_value = LidarrArtist.from_dict(
            {"id": 42, "artistName": artist_name}
        )
        service = ArtistOnboardingService(session, mock_client, lidarr_settings)

        await service.load_artist("Requested", "mb-x")

        stored = await ArtistRepository(session).get_by_lidarr_id(42)
        assert stored is not None
        assert stored.name == (artist_name or "Requested")
        assert stored.foreign_artist_id == "mb-x"
