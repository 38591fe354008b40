"""Application services."""

from spectrum.application.services.album_download_service import AlbumDownloadService
from spectrum.application.services.album_sync_service import AlbumSyncService
from spectrum.application.services.artist_onboarding_service import (
    ArtistOnboardingService,
)
from spectrum.application.services.artist_sync_service import ArtistSyncService
from spectrum.application.services.catalog_sync_service import (
    CatalogSyncResult,
    CatalogSyncService,
)
from spectrum.application.services.file_locator import FileLocator
from spectrum.application.services.genre_resolver import GenreResolver
from spectrum.application.services.track_sync_service import TrackSyncService

__all__ = [
    "AlbumDownloadService",
    "AlbumSyncService",
    "ArtistOnboardingService",
    "ArtistSyncService",
    "CatalogSyncResult",
    "CatalogSyncService",
    "FileLocator",
    "GenreResolver",
    "TrackSyncService",
]
