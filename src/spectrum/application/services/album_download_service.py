"""Album download requests, queue status and manual imports through Lidarr."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from spectrum.domain.dtos import AlbumDownloadStatus, ImportResult
from spectrum.domain.ports import ICatalogSourceClient
from spectrum.infrastructure.persistence.repositories import AlbumRepository

logger = logging.getLogger(__name__)


class AlbumDownloadService:
    """Ask Lidarr to fetch albums and feed finished downloads back into it.

    All album ids here are LIDARR album ids, not local ones.
    """

    def __init__(self, session: AsyncSession, client: ICatalogSourceClient) -> None:
        self._client = client
        self._album_repo = AlbumRepository(session)

    async def request_download(self, album_id: int) -> bool:
        """Monitor the album in Lidarr and start a search for it.

        Returns:
            True once the album is monitored, even if the search command failed
            (Lidarr's own RSS sync will still pick a monitored album up)
        """
        logger.info("album_download.requested", extra={"lidarr_album_id": album_id})

        if not await self._client.set_album_monitored(album_id, True):
            logger.error(
                "album_download.monitor_failed", extra={"lidarr_album_id": album_id}
            )
            return False

        if not await self._client.trigger_album_search(album_id):
            logger.warning(
                "album_download.search_failed",
                extra={"lidarr_album_id": album_id, "monitored": True},
            )
        return True

    async def get_download_status(self, album_id: int) -> AlbumDownloadStatus:
        """Queue state of the album (``not_in_queue`` / ``error`` / Lidarr's status)."""
        return await self._client.get_album_download_status(album_id)

    # Yo, Lidarr's manual import happily offers files of OTHER albums that sit in the same
    # folder, so we keep only files whose first track belongs to this album and pin them to
    # the release we monitor. Albums we never synced (or without a monitored release) are
    # refused - without the release id Lidarr would guess the edition.
    async def import_files(
        self,
        album_id: int,
        folder: str,
        import_mode: str = "Move",
        filter_existing_files: bool = True,
        replace_existing: bool = False,
    ) -> ImportResult:
        """Import the album's files from ``folder`` into Lidarr."""
        album = await self._album_repo.get_by_lidarr_id(album_id)
        if album is None or album.monitored_release_id is None:
            logger.warning(
                "album_import.unknown_album",
                extra={"lidarr_album_id": album_id, "folder": folder},
            )
            return ImportResult(
                success=False, message=f"Album {album_id} has no monitored release"
            )

        files = await self._client.get_manual_import_files(
            folder,
            filter_existing_files=filter_existing_files,
            replace_existing=replace_existing,
        )
        matching = [f for f in files if f.album_id == album_id]
        for file in matching:
            file.album_release_id = album.monitored_release_id

        if not matching:
            return ImportResult(success=False, message="No files to import")

        command = await self._client.import_album_folder(
            album_id, matching[0].folder, import_mode
        )
        if command is None:
            return ImportResult(
                success=False, message="Import command failed", files=matching
            )

        logger.info(
            "album_import.command_sent",
            extra={
                "lidarr_album_id": album_id,
                "files": len(matching),
                "import_mode": import_mode,
            },
        )
        return ImportResult(
            success=True,
            message=f"Import command sent for album {album_id}",
            results=[command],
            files=matching,
        )
