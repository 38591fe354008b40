"""Track stage of the catalog sync."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from spectrum.application.services.file_locator import FileLocator
from spectrum.domain.dtos import LidarrTrack
from spectrum.domain.entities import Album, Artist, Track
from spectrum.domain.exceptions import ValidationError
from spectrum.domain.ports import ICatalogSourceClient
from spectrum.infrastructure.persistence.repositories import (
    ArtistRepository,
    TrackRepository,
)

logger = logging.getLogger(__name__)


class TrackSyncService:
    """Create local tracks for downloaded albums."""

    def __init__(
        self,
        session: AsyncSession,
        client: ICatalogSourceClient,
        file_locator: FileLocator,
    ) -> None:
        self._session = session
        self._client = client
        self._file_locator = file_locator
        self._artist_repo = ArtistRepository(session)
        self._track_repo = TrackRepository(session)

    # Listen up, tracks only exist for albums that are actually on disk (downloaded=True).
    # The track query is scoped to the album's monitored release when we know it, else
    # Lidarr would hand us the tracklists of every edition mixed together.
    async def reconcile_for_album(self, album: Album) -> int:
        """Mirror the Lidarr tracks of one downloaded album.

        Skips albums that are not downloaded, have no Lidarr id, or whose artist has
        no Lidarr id. Existing tracks are never touched.

        Returns:
            Number of newly created local tracks
        """
        if not album.downloaded:
            logger.debug(
                "track_sync.album_skipped",
                extra={"album_id": album.id, "reason": "not_downloaded"},
            )
            return 0
        if album.lidarr_album_id is None or album.id is None:
            logger.debug(
                "track_sync.album_skipped",
                extra={"album_id": album.id, "reason": "no_lidarr_album_id"},
            )
            return 0

        artist = await self._artist_repo.get_by_id(album.artist_id)
        if artist is None or artist.lidarr_id is None:
            logger.debug(
                "track_sync.album_skipped",
                extra={"album_id": album.id, "reason": "no_lidarr_artist"},
            )
            return 0

        records = await self._client.list_tracks(
            artist.lidarr_id, album.lidarr_album_id, album.monitored_release_id
        )

        created = 0
        for record in records:
            try:
                was_created = await self._reconcile_one(artist, album, record)
                await self._session.commit()
            except Exception as e:
                await self._session.rollback()
                logger.error(
                    "track_sync.track_failed",
                    exc_info=True,
                    extra={
                        "album_id": album.id,
                        "lidarr_track_id": record.id,
                        "track": record.title,
                        "error_type": type(e).__name__,
                    },
                )
                continue
            if was_created:
                created += 1

        logger.info(
            "track_sync.album_finished",
            extra={
                "album_id": album.id,
                "album": album.title,
                "fetched": len(records),
                "tracks_created": created,
            },
        )
        return created

    async def _reconcile_one(
        self, artist: Artist, album: Album, record: LidarrTrack
    ) -> bool:
        if record.id is None:
            raise ValidationError(f"Track record '{record.title}' has no id")

        if await self._track_repo.get_by_lidarr_id(record.id):
            return False

        track_number = record.absolute_track_number or 0
        # duration is taken as Lidarr reports it, no unit conversion
        track = Track(
            title=record.title,
            album_id=album.id,  # type: ignore[arg-type]
            duration_seconds=int(record.duration or 0),
            track_number=track_number,
            disc_number=record.medium_number or 1,
            explicit=bool(record.explicit),
            lidarr_track_id=record.id,
            audio_path=self._file_locator.locate(
                artist.name, album.title, record.title, track_number
            ),
        )
        track = await self._track_repo.add(track)
        logger.debug(
            "track_sync.track_created",
            extra={"track_id": track.id, "lidarr_track_id": record.id},
        )
        return True
