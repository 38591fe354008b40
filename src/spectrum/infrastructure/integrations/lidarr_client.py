"""Lidarr HTTP client implementation."""

import logging
from collections.abc import Callable
from typing import Any, TypeVar

import httpx

from spectrum.config import LidarrSettings
from spectrum.domain.dtos import (
    AddArtistOptions,
    AlbumDownloadStatus,
    LidarrAlbum,
    LidarrArtist,
    LidarrTrack,
    ManualImportFile,
)
from spectrum.domain.exceptions import ExternalServiceError
from spectrum.domain.ports import ICatalogSourceClient

logger = logging.getLogger(__name__)

# connect/timeout/status errors, bad JSON, and JSON of the wrong shape
_SOFT_ERRORS = (httpx.HTTPError, ValueError, ExternalServiceError)
# what a from_dict may raise on a record with fields of the wrong type
_RECORD_ERRORS = (AttributeError, TypeError, ValueError, KeyError)

T = TypeVar("T")


class LidarrClient(ICatalogSourceClient):
    """HTTP client for the Lidarr v1 API."""

    # Hey future me, EVERY public method here is fail-soft: an unreachable Lidarr, a 500 or
    # garbage JSON gets logged and turned into [] / None / False. The sync passes depend on
    # that - a Lidarr outage must make a pass a logged no-op, never a crashed worker. Don't
    # let httpx exceptions leak out of this class.
    def __init__(self, settings: LidarrSettings) -> None:
        """
        Initialize Lidarr client.

        Args:
            settings: Lidarr connection settings (base URL incl. /api/v1, API key, timeout)
        """
        self.settings = settings
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.settings.base_url.rstrip("/"),
                headers={
                    "X-Api-Key": self.settings.api_key,
                    "Accept": "application/json",
                },
                timeout=self.settings.timeout,
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "LidarrClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Send a request and decode the JSON body.

        Raises:
            httpx.HTTPError: On transport errors and non-2xx responses
            ValueError: If the body is not valid JSON
        """
        client = await self._get_client()
        if params:
            # httpx sends None as an empty string, Lidarr reads that as 0
            params = {k: v for k, v in params.items() if v is not None}
        response = await client.request(method, path, params=params, json=json)
        response.raise_for_status()
        if not response.content:
            return None
        return response.json()

    async def _get_list(
        self, path: str, params: dict[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        data = await self._request("GET", path, params=params)
        if not isinstance(data, list):
            raise ExternalServiceError(
                f"Expected a list from {path}, got {type(data).__name__}"
            )
        return [item for item in data if isinstance(item, dict)]

    # Yo, records are mapped one by one so a single malformed entry costs only that
    # entry. The rest of the list still reaches the reconcilers.
    def _parse_each(
        self,
        items: list[dict[str, Any]],
        parse: Callable[[dict[str, Any]], T],
        kind: str,
    ) -> list[T]:
        parsed: list[T] = []
        for item in items:
            record = self._parse_one(item, parse, kind)
            if record is not None:
                parsed.append(record)
        return parsed

    def _parse_one(
        self, data: Any, parse: Callable[[dict[str, Any]], T], kind: str
    ) -> T | None:
        if not isinstance(data, dict):
            return None
        try:
            return parse(data)
        except _RECORD_ERRORS as e:
            logger.warning(
                f"Skipping malformed {kind} record {data.get('id')} from Lidarr: {e}"
            )
            return None

    # =========================================================================
    # ARTISTS
    # =========================================================================

    async def list_artists(self) -> list[LidarrArtist]:
        """Get all artists from Lidarr."""
        try:
            items = await self._get_list("/artist")
        except _SOFT_ERRORS as e:
            logger.error(f"Error fetching artists from Lidarr: {e}")
            return []
        return self._parse_each(items, LidarrArtist.from_dict, "artist")

    async def get_artist(self, artist_id: int) -> LidarrArtist | None:
        """Get a specific artist by Lidarr ID."""
        try:
            data = await self._request("GET", f"/artist/{artist_id}")
        except _SOFT_ERRORS as e:
            logger.error(f"Error fetching artist {artist_id} from Lidarr: {e}")
            return None
        return self._parse_one(data, LidarrArtist.from_dict, "artist")

    async def get_artists_by_foreign_id(self, foreign_id: str) -> list[LidarrArtist]:
        """Get artists already in Lidarr matching a MusicBrainz artist ID."""
        try:
            items = await self._get_list("/artist", params={"mbId": foreign_id})
        except _SOFT_ERRORS as e:
            logger.error(f"Error fetching artist with foreign ID {foreign_id}: {e}")
            return []
        return self._parse_each(items, LidarrArtist.from_dict, "artist")

    # Yo, /artist/lookup goes through Lidarr's metadata provider, so results may be
    # artists Lidarr does NOT have yet (id is None for those).
    async def search_artists(self, term: str) -> list[LidarrArtist]:
        """Search for artists by name."""
        try:
            items = await self._get_list("/artist/lookup", params={"term": term})
        except _SOFT_ERRORS as e:
            logger.error(f"Error searching artists for '{term}' in Lidarr: {e}")
            return []
        return self._parse_each(items, LidarrArtist.from_dict, "artist")

    async def add_artist(
        self,
        name: str,
        foreign_id: str,
        quality_profile_id: int,
        metadata_profile_id: int,
        root_folder_path: str,
        add_options: AddArtistOptions,
    ) -> LidarrArtist | None:
        """Add a new artist to Lidarr."""
        payload = {
            "artistName": name,
            "foreignArtistId": foreign_id,
            "qualityProfileId": quality_profile_id,
            "metadataProfileId": metadata_profile_id,
            "rootFolderPath": root_folder_path,
            "monitored": add_options.monitored,
            "addOptions": add_options.to_payload(),
        }
        try:
            data = await self._request("POST", "/artist", json=payload)
        except _SOFT_ERRORS as e:
            logger.error(f"Error adding artist '{name}' to Lidarr: {e}")
            return None
        return self._parse_one(data, LidarrArtist.from_dict, "artist")

    # =========================================================================
    # ALBUMS & TRACKS
    # =========================================================================

    async def list_albums(self, artist_id: int) -> list[LidarrAlbum]:
        """Get all albums of an artist."""
        try:
            items = await self._get_list("/album", params={"artistId": artist_id})
        except _SOFT_ERRORS as e:
            logger.error(f"Error fetching albums for artist {artist_id}: {e}")
            return []
        return self._parse_each(items, LidarrAlbum.from_dict, "album")

    async def get_album(self, album_id: int) -> LidarrAlbum | None:
        """Get a specific album by Lidarr ID."""
        try:
            data = await self._request("GET", f"/album/{album_id}")
        except _SOFT_ERRORS as e:
            logger.error(f"Error fetching album {album_id} from Lidarr: {e}")
            return None
        return self._parse_one(data, LidarrAlbum.from_dict, "album")

    # Hey future me - albumId is the only required filter. Without albumReleaseId Lidarr
    # mixes tracks of ALL releases (deluxe + standard...), so callers pass the monitored one.
    async def list_tracks(
        self,
        artist_id: int | None,
        album_id: int,
        release_id: int | None = None,
    ) -> list[LidarrTrack]:
        """Get tracks of an album, optionally scoped to one release."""
        params = {
            "artistId": artist_id,
            "albumId": album_id,
            "albumReleaseId": release_id,
        }
        try:
            items = await self._get_list("/track", params=params)
        except _SOFT_ERRORS as e:
            logger.error(f"Error fetching tracks for album {album_id}: {e}")
            return []
        return self._parse_each(items, LidarrTrack.from_dict, "track")

    # Listen up, Lidarr has no PATCH - we GET the full album, flip monitored and PUT it back.
    # The embedded "artist" object is dropped first; Lidarr chokes on some of its datetime
    # fields when they come back, and it doesn't need it for the update.
    async def set_album_monitored(self, album_id: int, monitored: bool) -> bool:
        """Set the monitored flag of an album."""
        try:
            album = await self._request("GET", f"/album/{album_id}")
            if not isinstance(album, dict):
                logger.error(f"Lidarr returned no album for ID {album_id}")
                return False
            album["monitored"] = monitored
            album.pop("artist", None)
            await self._request("PUT", f"/album/{album_id}", json=album)
        except _SOFT_ERRORS as e:
            logger.error(f"Error updating monitored flag of album {album_id}: {e}")
            return False
        return True

    async def trigger_album_search(self, album_id: int) -> bool:
        """Send an AlbumSearch command for one album."""
        command = {"name": "AlbumSearch", "albumIds": [album_id]}
        try:
            await self._request("POST", "/command", json=command)
        except _SOFT_ERRORS as e:
            logger.error(f"Error triggering search for album {album_id}: {e}")
            return False
        return True

    # =========================================================================
    # QUEUE & IMPORT
    # =========================================================================

    async def get_album_download_status(self, album_id: int) -> AlbumDownloadStatus:
        """Get the queue state of an album download.

        Returns:
            First queue entry for the album, ``not_in_queue`` when the queue has none,
            ``error`` (with the reason) when Lidarr could not be asked.
        """
        params = {
            "albumIds": album_id,
            "includeArtist": False,
            "includeAlbum": True,
        }
        try:
            items = await self._get_list("/queue/details", params=params)
        except _SOFT_ERRORS as e:
            logger.error(f"Error checking download status of album {album_id}: {e}")
            return AlbumDownloadStatus(
                status=AlbumDownloadStatus.ERROR, error_message=str(e)
            )

        if not items:
            return AlbumDownloadStatus(status=AlbumDownloadStatus.NOT_IN_QUEUE)
        status = self._parse_one(items[0], AlbumDownloadStatus.from_queue_item, "queue")
        if status is None:
            return AlbumDownloadStatus(
                status=AlbumDownloadStatus.ERROR,
                error_message="Malformed queue entry",
            )
        return status

    async def get_manual_import_files(
        self,
        folder: str,
        filter_existing_files: bool = True,
        replace_existing: bool = False,
    ) -> list[ManualImportFile]:
        """List files in a folder that Lidarr can import."""
        params = {
            "folder": folder,
            "filterExistingFiles": filter_existing_files,
            "replaceExisting": replace_existing,
        }
        try:
            items = await self._get_list("/manualimport", params=params)
        except _SOFT_ERRORS as e:
            logger.error(f"Error getting files for manual import from {folder}: {e}")
            return []
        return self._parse_each(items, ManualImportFile.from_dict, "manual import")

    async def import_album_folder(
        self, album_id: int, folder: str, import_mode: str = "Move"
    ) -> dict[str, Any] | None:
        """Send an ImportAlbum command for a folder."""
        command = {
            "name": "ImportAlbum",
            "albumId": album_id,
            "path": folder,
            "importMode": import_mode,
            "folderImport": True,
        }
        try:
            data = await self._request("POST", "/command", json=command)
        except _SOFT_ERRORS as e:
            logger.error(f"Import command for album {album_id} failed: {e}")
            return None
        return data if isinstance(data, dict) else None
