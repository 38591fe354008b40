"""Domain ports (interfaces) for dependency inversion."""

from abc import ABC, abstractmethod
from typing import Any

from spectrum.domain.dtos import (
    AddArtistOptions,
    AlbumDownloadStatus,
    ImportResult,
    LidarrAlbum,
    LidarrArtist,
    LidarrTrack,
    ManualImportFile,
)
from spectrum.domain.entities import Album, Artist, Genre, Track


# Hey future me, ICatalogSourceClient is the contract the sync engine consumes. Every
# method is FAIL-SOFT: network error, timeout, 4xx/5xx or bad JSON gives [] / None / False
# instead of an exception. The reconcilers rely on that - a dead Lidarr must turn a pass
# into a logged no-op, not a crash. Implementations log the failure themselves.
class ICatalogSourceClient(ABC):
    """Interface for the external catalog manager (Lidarr)."""

    @abstractmethod
    async def list_artists(self) -> list[LidarrArtist]:
        """Get all artists known to the catalog source."""
        pass

    @abstractmethod
    async def get_artist(self, artist_id: int) -> LidarrArtist | None:
        """Get one artist by catalog ID."""
        pass

    @abstractmethod
    async def get_artists_by_foreign_id(self, foreign_id: str) -> list[LidarrArtist]:
        """Get artists matching a foreign (MusicBrainz) identifier."""
        pass

    @abstractmethod
    async def search_artists(self, term: str) -> list[LidarrArtist]:
        """Search the source's metadata provider for artists."""
        pass

    @abstractmethod
    async def list_albums(self, artist_id: int) -> list[LidarrAlbum]:
        """Get all albums of an artist."""
        pass

    @abstractmethod
    async def get_album(self, album_id: int) -> LidarrAlbum | None:
        """Get one album by catalog ID."""
        pass

    @abstractmethod
    async def list_tracks(
        self,
        artist_id: int | None,
        album_id: int,
        release_id: int | None = None,
    ) -> list[LidarrTrack]:
        """Get tracks of an album, optionally scoped to one release."""
        pass

    @abstractmethod
    async def set_album_monitored(self, album_id: int, monitored: bool) -> bool:
        """Set the monitored flag of an album."""
        pass

    @abstractmethod
    async def trigger_album_search(self, album_id: int) -> bool:
        """Ask the source to search for (and download) an album."""
        pass

    @abstractmethod
    async def add_artist(
        self,
        name: str,
        foreign_id: str,
        quality_profile_id: int,
        metadata_profile_id: int,
        root_folder_path: str,
        add_options: AddArtistOptions,
    ) -> LidarrArtist | None:
        """Add a new artist to the catalog source."""
        pass

    @abstractmethod
    async def get_album_download_status(self, album_id: int) -> AlbumDownloadStatus:
        """Get the queue state of an album download."""
        pass

    @abstractmethod
    async def get_manual_import_files(
        self,
        folder: str,
        filter_existing_files: bool = True,
        replace_existing: bool = False,
    ) -> list[ManualImportFile]:
        """List files in a folder that can be imported manually."""
        pass

    @abstractmethod
    async def import_album_folder(
        self, album_id: int, folder: str, import_mode: str = "Move"
    ) -> dict[str, Any] | None:
        """Send an ImportAlbum command for a folder. Returns the command or None."""
        pass


class IArtistRepository(ABC):
    """Repository interface for Artist entities."""

    @abstractmethod
    async def add(self, artist: Artist) -> Artist:
        """Insert an artist and return it with its local ID."""
        pass

    @abstractmethod
    async def update(self, artist: Artist) -> Artist:
        """Update an existing artist."""
        pass

    @abstractmethod
    async def get_by_id(self, artist_id: int) -> Artist | None:
        """Get an artist by local ID."""
        pass

    @abstractmethod
    async def get_by_lidarr_id(self, lidarr_id: int) -> Artist | None:
        """Get an artist by catalog source ID."""
        pass

    @abstractmethod
    async def get_by_foreign_id(self, foreign_artist_id: str) -> Artist | None:
        """Get an artist by foreign (MusicBrainz) ID."""
        pass

    @abstractmethod
    async def list_all(self) -> list[Artist]:
        """List all artists."""
        pass

    @abstractmethod
    async def count_all(self) -> int:
        """Count all artists."""
        pass


class IAlbumRepository(ABC):
    """Repository interface for Album entities."""

    @abstractmethod
    async def add(self, album: Album) -> Album:
        """Insert an album and return it with its local ID."""
        pass

    @abstractmethod
    async def update(self, album: Album) -> Album:
        """Update an existing album (including its genre set)."""
        pass

    @abstractmethod
    async def get_by_id(self, album_id: int) -> Album | None:
        """Get an album by local ID."""
        pass

    @abstractmethod
    async def get_by_lidarr_id(self, lidarr_album_id: int) -> Album | None:
        """Get an album by catalog source ID."""
        pass

    @abstractmethod
    async def list_all(self) -> list[Album]:
        """List all albums."""
        pass

    @abstractmethod
    async def list_by_artist(self, artist_id: int) -> list[Album]:
        """List albums of one artist."""
        pass

    @abstractmethod
    async def count_all(self) -> int:
        """Count all albums."""
        pass


class ITrackRepository(ABC):
    """Repository interface for Track entities."""

    @abstractmethod
    async def add(self, track: Track) -> Track:
        """Insert a track and return it with its local ID."""
        pass

    @abstractmethod
    async def get_by_lidarr_id(self, lidarr_track_id: int) -> Track | None:
        """Get a track by catalog source ID."""
        pass

    @abstractmethod
    async def list_by_album(self, album_id: int) -> list[Track]:
        """List tracks of one album ordered by disc and track number."""
        pass

    @abstractmethod
    async def count_all(self) -> int:
        """Count all tracks."""
        pass


class IGenreRepository(ABC):
    """Repository interface for Genre entities."""

    @abstractmethod
    async def add(self, genre: Genre) -> Genre:
        """Insert a genre and return it with its local ID."""
        pass

    @abstractmethod
    async def get_by_name(self, name: str) -> Genre | None:
        """Get a genre by case-insensitive exact name."""
        pass

    @abstractmethod
    async def list_all(self) -> list[Genre]:
        """List all genres ordered by name."""
        pass


__all__ = [
    "IAlbumRepository",
    "IArtistRepository",
    "ICatalogSourceClient",
    "IGenreRepository",
    "ITrackRepository",
]
