"""Artist stage of the catalog sync: Lidarr artists into local rows."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from spectrum.domain.dtos import LidarrArtist
from spectrum.domain.entities import Artist
from spectrum.domain.exceptions import ValidationError
from spectrum.domain.ports import ICatalogSourceClient
from spectrum.infrastructure.persistence.repositories import ArtistRepository

logger = logging.getLogger(__name__)


class ArtistSyncService:
    """Create local artists for every Lidarr artist we don't know yet."""

    def __init__(self, session: AsyncSession, client: ICatalogSourceClient) -> None:
        """Initialize artist sync service.

        Args:
            session: Database session, committed once per artist
            client: Catalog source (fail-soft, returns [] when Lidarr is down)
        """
        self._session = session
        self._client = client
        self._artist_repo = ArtistRepository(session)

    # Hey future me - one commit PER ARTIST, one rollback per failed artist. A broken
    # record (no id, DB constraint, ...) costs exactly that artist, never the whole list.
    # Existing artists are left alone on purpose, only new lidarr ids create rows.
    async def reconcile_all(self) -> int:
        """Mirror all Lidarr artists.

        Returns:
            Number of newly created local artists
        """
        records = await self._client.list_artists()
        logger.info("artist_sync.fetched", extra={"count": len(records)})

        created = 0
        for record in records:
            try:
                was_created = await self._reconcile_one(record)
                await self._session.commit()
            except Exception as e:
                await self._session.rollback()
                logger.error(
                    "artist_sync.artist_failed",
                    exc_info=True,
                    extra={
                        "lidarr_id": record.id,
                        "artist": record.artist_name,
                        "error_type": type(e).__name__,
                    },
                )
                continue
            if was_created:
                created += 1

        logger.info(
            "artist_sync.finished",
            extra={"fetched": len(records), "artists_created": created},
        )
        return created

    async def _reconcile_one(self, record: LidarrArtist) -> bool:
        if record.id is None:
            raise ValidationError(f"Artist record '{record.artist_name}' has no id")

        existing = await self._artist_repo.get_by_lidarr_id(record.id)
        if existing:
            logger.debug(
                "artist_sync.artist_unchanged",
                extra={"lidarr_id": record.id, "artist_id": existing.id},
            )
            return False

        image_url = record.first_image_url()
        if image_url is None:
            logger.debug("artist_sync.no_image", extra={"lidarr_id": record.id})

        artist = await self._artist_repo.add(
            Artist(
                name=record.artist_name,
                biography=record.overview,
                image_url=image_url,
                lidarr_id=record.id,
                foreign_artist_id=record.foreign_artist_id,
                genre_names=list(record.genres),
            )
        )
        logger.info(
            "artist_sync.artist_created",
            extra={"lidarr_id": record.id, "artist_id": artist.id, "artist": artist.name},
        )
        return True
