"""Catalog sync pass: artists, then albums, then tracks."""

import logging
import time
from dataclasses import asdict, dataclass
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from spectrum.application.services.album_sync_service import AlbumSyncService
from spectrum.application.services.artist_sync_service import ArtistSyncService
from spectrum.application.services.file_locator import FileLocator
from spectrum.application.services.genre_resolver import GenreResolver
from spectrum.application.services.track_sync_service import TrackSyncService
from spectrum.domain.ports import ICatalogSourceClient
from spectrum.infrastructure.observability.logger_template import (
    end_operation,
    start_operation,
)
from spectrum.infrastructure.persistence.repositories import (
    AlbumRepository,
    ArtistRepository,
)

logger = logging.getLogger(__name__)


@dataclass
class CatalogSyncResult:
    """Counters of one sync pass."""

    artists_created: int = 0
    albums_created: int = 0
    tracks_created: int = 0
    # artists/albums whose whole stage failed (per-row failures are logged only)
    artists_failed: int = 0
    albums_failed: int = 0
    duration_ms: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class CatalogSyncService:
    """Run the three reconcile stages against one session.

    Hey future me - there's NO transaction spanning the pass. Each stage commits row by
    row, and the next stage reads what the previous one committed (albums need their
    artist row, tracks need their album row). A failure costs one row or one artist's
    album list, never the pass. Only store-level trouble (DB gone) escapes from here.
    """

    def __init__(
        self,
        session: AsyncSession,
        client: ICatalogSourceClient,
        file_locator: FileLocator,
    ) -> None:
        self._session = session
        self._artist_repo = ArtistRepository(session)
        self._album_repo = AlbumRepository(session)
        genre_resolver = GenreResolver(session)
        self._artist_sync = ArtistSyncService(session, client)
        self._album_sync = AlbumSyncService(session, client, genre_resolver)
        self._track_sync = TrackSyncService(session, client, file_locator)

    async def run_full_sync(self) -> CatalogSyncResult:
        """Run artists -> albums -> tracks once. Safe to call repeatedly."""
        result = CatalogSyncResult()
        start_time, op_id = start_operation(logger, "catalog_sync.pass")

        result.artists_created = await self._artist_sync.reconcile_all()

        for artist in await self._artist_repo.list_all():
            try:
                result.albums_created += await self._album_sync.reconcile_for_artist(
                    artist
                )
            except Exception as e:
                await self._session.rollback()
                result.artists_failed += 1
                logger.error(
                    "catalog_sync.artist_albums_failed",
                    exc_info=True,
                    extra={"artist_id": artist.id, "error_type": type(e).__name__},
                )

        for album in await self._album_repo.list_all():
            if not album.downloaded:
                continue
            try:
                result.tracks_created += await self._track_sync.reconcile_for_album(
                    album
                )
            except Exception as e:
                await self._session.rollback()
                result.albums_failed += 1
                logger.error(
                    "catalog_sync.album_tracks_failed",
                    exc_info=True,
                    extra={"album_id": album.id, "error_type": type(e).__name__},
                )

        result.duration_ms = int((time.time() - start_time) * 1000)
        end_operation(
            logger,
            "catalog_sync.pass",
            start_time,
            op_id,
            artists_created=result.artists_created,
            albums_created=result.albums_created,
            tracks_created=result.tracks_created,
            artists_failed=result.artists_failed,
            albums_failed=result.albums_failed,
        )
        return result

    async def run_incremental_sync(self) -> CatalogSyncResult:
        """Same pass as run_full_sync.

        Lidarr offers no change feed we could filter on, and a full pass is
        idempotent, so "incremental" re-runs it.
        """
        return await self.run_full_sync()
