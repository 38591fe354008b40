"""Album stage of the catalog sync."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from spectrum.application.services.genre_resolver import GenreResolver
from spectrum.domain.dtos import LidarrAlbum
from spectrum.domain.entities import Album, Artist
from spectrum.domain.exceptions import ValidationError
from spectrum.domain.ports import ICatalogSourceClient
from spectrum.infrastructure.persistence.repositories import AlbumRepository

logger = logging.getLogger(__name__)


class AlbumSyncService:
    """Mirror the albums of one local artist from Lidarr.

    New albums get the full metadata, the monitored release and their genres.
    Albums we already have only ever get their ``downloaded`` flag raised (once
    Lidarr reports every track file on disk); title, date and cover stay as first
    seen.
    """

    def __init__(
        self,
        session: AsyncSession,
        client: ICatalogSourceClient,
        genre_resolver: GenreResolver | None = None,
    ) -> None:
        self._session = session
        self._client = client
        self._album_repo = AlbumRepository(session)
        self._genre_resolver = genre_resolver or GenreResolver(session)

    async def reconcile_for_artist(self, artist: Artist) -> int:
        """Mirror all Lidarr albums of ``artist``.

        Artists without a Lidarr id are skipped. Each album is committed on its own;
        a failing album is rolled back and logged, the rest carry on.

        Returns:
            Number of newly created local albums
        """
        if artist.lidarr_id is None or artist.id is None:
            logger.debug(
                "album_sync.artist_skipped",
                extra={"artist_id": artist.id, "reason": "no_lidarr_id"},
            )
            return 0

        records = await self._client.list_albums(artist.lidarr_id)
        logger.debug(
            "album_sync.fetched",
            extra={"artist_id": artist.id, "count": len(records)},
        )

        created = 0
        for record in records:
            try:
                was_created = await self._reconcile_one(artist, record)
                await self._session.commit()
            except Exception as e:
                await self._session.rollback()
                logger.error(
                    "album_sync.album_failed",
                    exc_info=True,
                    extra={
                        "artist_id": artist.id,
                        "lidarr_album_id": record.id,
                        "album": record.title,
                        "error_type": type(e).__name__,
                    },
                )
                continue
            if was_created:
                created += 1

        logger.info(
            "album_sync.artist_finished",
            extra={
                "artist_id": artist.id,
                "artist": artist.name,
                "fetched": len(records),
                "albums_created": created,
            },
        )
        return created

    async def _reconcile_one(self, artist: Artist, record: LidarrAlbum) -> bool:
        if record.id is None:
            raise ValidationError(f"Album record '{record.title}' has no id")

        existing = await self._album_repo.get_by_lidarr_id(record.id)
        if existing:
            await self._refresh_existing(existing, record)
            return False

        await self._create(artist, record)
        return True

    async def _refresh_existing(self, album: Album, record: LidarrAlbum) -> None:
        if record.statistics is None:
            raise ValidationError(f"Album {record.id} has no statistics")
        if record.statistics.is_complete and not album.downloaded:
            album.mark_downloaded()
            await self._album_repo.update(album)
            logger.info(
                "album_sync.album_downloaded",
                extra={"album_id": album.id, "lidarr_album_id": record.id},
            )

    # Yo, the order here matters: insert first (we need the local id), then pick the
    # monitored release, then genres, then ONE update carrying both. Everything is still
    # in the same per-album transaction, so a genre failure rolls the album back too.
    async def _create(self, artist: Artist, record: LidarrAlbum) -> Album:
        stats = record.statistics
        album = await self._album_repo.add(
            Album(
                title=record.title,
                artist_id=artist.id,  # type: ignore[arg-type]
                album_type=record.album_type,
                release_date=record.release_date_as_date(),
                cover_image_url=record.cover_art_url(),
                lidarr_album_id=record.id,
                foreign_album_id=record.foreign_album_id,
                legacy_album_id=record.legacy_album_id(),
                downloaded=stats.has_files if stats is not None else False,
            )
        )

        release = record.monitored_release()
        if release is not None:
            album.monitored_release_id = release.id

        for genre in await self._genre_resolver.resolve_all(record.genres):
            album.add_genre(genre)

        album = await self._album_repo.update(album)
        logger.info(
            "album_sync.album_created",
            extra={
                "album_id": album.id,
                "lidarr_album_id": record.id,
                "album": album.title,
                "downloaded": album.downloaded,
                "monitored_release_id": album.monitored_release_id,
            },
        )
        return album
