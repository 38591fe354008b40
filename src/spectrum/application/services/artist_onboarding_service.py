"""Add an artist to Lidarr and mirror it locally in one step."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from spectrum.application.services.genre_resolver import GenreResolver
from spectrum.config import LidarrSettings
from spectrum.domain.dtos import AddArtistOptions, LidarrArtist
from spectrum.domain.entities import Artist
from spectrum.domain.ports import ICatalogSourceClient
from spectrum.infrastructure.observability.logger_template import log_operation
from spectrum.infrastructure.persistence.repositories import ArtistRepository

logger = logging.getLogger(__name__)


class ArtistOnboardingService:
    """Load an artist page by MusicBrainz id, adding the artist to Lidarr on first use."""

    def __init__(
        self,
        session: AsyncSession,
        client: ICatalogSourceClient,
        settings: LidarrSettings,
    ) -> None:
        self._session = session
        self._client = client
        self._settings = settings
        self._artist_repo = ArtistRepository(session)
        self._genre_resolver = GenreResolver(session)

    # Hey future me - unlike the sync stage, onboarding DOES attach Genre rows to the new
    # artist (the sync only keeps the raw names). The artist is added to Lidarr with
    # monitor="none", so nothing gets downloaded until an album is requested explicitly.
    async def load_artist(self, name: str, foreign_id: str) -> LidarrArtist | None:
        """Return Lidarr's record for the artist, adding it to Lidarr if unknown.

        Args:
            name: Artist name to add with
            foreign_id: MusicBrainz artist id

        Returns:
            Lidarr's artist record, or None when Lidarr could not provide one
        """
        existing = await self._artist_repo.get_by_foreign_id(foreign_id)
        if existing:
            if existing.lidarr_id is None:
                logger.warning(
                    "artist_onboarding.not_linked",
                    extra={"artist_id": existing.id, "foreign_id": foreign_id},
                )
                return None
            return await self._client.get_artist(existing.lidarr_id)

        async with log_operation(logger, "artist_onboarding", foreign_id=foreign_id):
            record = await self._client.add_artist(
                name=name,
                foreign_id=foreign_id,
                quality_profile_id=self._settings.quality_profile_id,
                metadata_profile_id=self._settings.metadata_profile_id,
                root_folder_path=self._settings.root_folder_path,
                add_options=AddArtistOptions(),
            )
            if record is None:
                logger.warning(
                    "artist_onboarding.add_failed",
                    extra={"artist": name, "foreign_id": foreign_id},
                )
                return None

            # the sync may have picked it up already (added in Lidarr's UI earlier)
            if record.id is not None and await self._artist_repo.get_by_lidarr_id(
                record.id
            ):
                return record

            try:
                await self._store(record, name, foreign_id)
                await self._session.commit()
            except Exception:
                await self._session.rollback()
                raise

        return record

    async def _store(self, record: LidarrArtist, name: str, foreign_id: str) -> Artist:
        genres = await self._genre_resolver.resolve_all(record.genres)
        return await self._artist_repo.add(
            Artist(
                name=record.artist_name or name,
                biography=record.overview,
                image_url=record.first_image_url(),
                lidarr_id=record.id,
                foreign_artist_id=record.foreign_artist_id or foreign_id,
                genre_names=list(record.genres),
                genres=genres,
            )
        )
