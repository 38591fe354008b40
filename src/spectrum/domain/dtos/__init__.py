"""
Records returned by the catalog source (Lidarr).

Hey future me - these are DUMB DATA CARRIERS for what Lidarr sends us. They are NOT
entities: they have Lidarr ids instead of local ids, they may be partial (Lidarr omits
fields freely), and they never touch the database. The reconcilers turn them into
Artist/Album/Track entities.

Every ``from_dict`` ignores unknown keys and tolerates missing ones, the same way the
Lidarr API is consumed everywhere else (lenient in, strict out).
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any


def _list(data: dict[str, Any], key: str) -> list[Any]:
    value = data.get(key)
    return value if isinstance(value, list) else []


# nested entries Lidarr sends as null (or anything not an object) are dropped
def _dicts(data: dict[str, Any], key: str) -> list[dict[str, Any]]:
    return [item for item in _list(data, key) if isinstance(item, dict)]


@dataclass
class LidarrImage:
    """Artwork entry attached to an artist or album."""

    url: str | None = None
    cover_type: str | None = None
    extension: str | None = None
    remote_url: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LidarrImage":
        return cls(
            url=data.get("url"),
            cover_type=data.get("coverType"),
            extension=data.get("extension"),
            remote_url=data.get("remoteUrl"),
        )


@dataclass
class LidarrArtist:
    """Artist as reported by Lidarr."""

    id: int | None
    artist_name: str
    foreign_artist_id: str | None = None
    overview: str | None = None
    artist_type: str | None = None
    disambiguation: str | None = None
    genres: list[str] = field(default_factory=list)
    images: list[LidarrImage] = field(default_factory=list)
    path: str | None = None
    monitored: bool = False
    status: str | None = None
    quality_profile_id: int | None = None
    metadata_profile_id: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LidarrArtist":
        return cls(
            id=data.get("id"),
            artist_name=data.get("artistName") or "",
            foreign_artist_id=data.get("foreignArtistId"),
            overview=data.get("overview"),
            artist_type=data.get("artistType"),
            disambiguation=data.get("disambiguation"),
            genres=[g for g in _list(data, "genres") if isinstance(g, str)],
            images=[LidarrImage.from_dict(i) for i in _dicts(data, "images")],
            path=data.get("path"),
            monitored=bool(data.get("monitored", False)),
            status=data.get("status"),
            quality_profile_id=data.get("qualityProfileId"),
            metadata_profile_id=data.get("metadataProfileId"),
        )

    def first_image_url(self) -> str | None:
        """Remote URL of the first image, or None when there are no images."""
        if not self.images:
            return None
        return self.images[0].remote_url


@dataclass
class LidarrRelease:
    """One release (edition/pressing) of an album."""

    id: int | None = None
    album_id: int | None = None
    foreign_release_id: str | None = None
    title: str | None = None
    status: str | None = None
    track_count: int | None = None
    format: str | None = None
    monitored: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LidarrRelease":
        return cls(
            id=data.get("id"),
            album_id=data.get("albumId"),
            foreign_release_id=data.get("foreignReleaseId"),
            title=data.get("title"),
            status=data.get("status"),
            track_count=data.get("trackCount"),
            format=data.get("format"),
            monitored=bool(data.get("monitored") or False),
        )


@dataclass
class LidarrAlbumStatistics:
    """File-count statistics Lidarr keeps per album."""

    track_file_count: int | None = None
    track_count: int | None = None
    total_track_count: int | None = None
    size_on_disk: int | None = None
    percent_of_tracks: float | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LidarrAlbumStatistics":
        return cls(
            track_file_count=data.get("trackFileCount"),
            track_count=data.get("trackCount"),
            total_track_count=data.get("totalTrackCount"),
            size_on_disk=data.get("sizeOnDisk"),
            percent_of_tracks=data.get("percentOfTracks"),
        )

    @property
    def is_complete(self) -> bool:
        """All tracks of the album have a file on disk."""
        return (
            self.track_file_count is not None
            and self.track_count is not None
            and self.track_file_count == self.track_count
        )

    @property
    def has_files(self) -> bool:
        """At least one track of the album has a file on disk."""
        return (
            self.track_file_count is not None
            and self.track_count is not None
            and self.track_file_count > 0
        )


@dataclass
class LidarrAlbum:
    """Album as reported by Lidarr."""

    id: int | None
    title: str
    artist_id: int | None = None
    foreign_album_id: str | None = None
    monitored: bool = False
    album_type: str | None = None
    release_date: str | None = None
    releases: list[LidarrRelease] = field(default_factory=list)
    genres: list[str] = field(default_factory=list)
    images: list[LidarrImage] = field(default_factory=list)
    statistics: LidarrAlbumStatistics | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LidarrAlbum":
        stats = data.get("statistics")
        return cls(
            id=data.get("id"),
            title=data.get("title") or "",
            artist_id=data.get("artistId"),
            foreign_album_id=data.get("foreignAlbumId"),
            monitored=bool(data.get("monitored", False)),
            album_type=data.get("albumType"),
            release_date=data.get("releaseDate"),
            releases=[LidarrRelease.from_dict(r) for r in _dicts(data, "releases")],
            genres=[g for g in _list(data, "genres") if isinstance(g, str)],
            images=[LidarrImage.from_dict(i) for i in _dicts(data, "images")],
            statistics=(
                LidarrAlbumStatistics.from_dict(stats)
                if isinstance(stats, dict)
                else None
            ),
        )

    # Hey future me, Lidarr sends either "2018-10-26" or "2018-10-26T00:00:00Z". We only
    # care about the date, so anything with a T gets cut to its first 10 chars. Garbage
    # (or no date at all) gives None - a bad date must never fail the whole album.
    def release_date_as_date(self) -> date | None:
        """Parse the release date, returning None when absent or unparsable."""
        if not self.release_date:
            return None
        raw = self.release_date
        if "T" in raw:
            raw = raw[:10]
        try:
            return date.fromisoformat(raw)
        except ValueError:
            return None

    def cover_art_url(self) -> str | None:
        """Prefer the image flagged as cover, else the first image, else None."""
        for image in self.images:
            if image.cover_type == "cover" and image.remote_url:
                return image.remote_url
        if self.images and self.images[0].remote_url:
            return self.images[0].remote_url
        return None

    def monitored_release(self) -> LidarrRelease | None:
        """First release flagged as monitored, if any."""
        for release in self.releases:
            if release.monitored:
                return release
        return None

    def legacy_album_id(self) -> int | None:
        """albumId exposed by the first release, if it has one."""
        if self.releases and self.releases[0].album_id is not None:
            return self.releases[0].album_id
        return None


@dataclass
class LidarrTrack:
    """Track as reported by Lidarr."""

    id: int | None
    title: str
    duration: int | None = None
    absolute_track_number: int | None = None
    medium_number: int | None = None
    track_number: str | None = None
    explicit: bool | None = None
    has_file: bool = False
    track_file_id: int | None = None
    album_id: int | None = None
    artist_id: int | None = None
    foreign_track_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LidarrTrack":
        return cls(
            id=data.get("id"),
            title=data.get("title") or "",
            duration=data.get("duration"),
            absolute_track_number=data.get("absoluteTrackNumber"),
            medium_number=data.get("mediumNumber"),
            track_number=data.get("trackNumber"),
            explicit=data.get("explicit"),
            has_file=bool(data.get("hasFile", False)),
            track_file_id=data.get("trackFileId"),
            album_id=data.get("albumId"),
            artist_id=data.get("artistId"),
            foreign_track_id=data.get("foreignTrackId"),
        )


@dataclass
class AddArtistOptions:
    """Options Lidarr applies when a new artist is added."""

    monitor: str = "none"
    search_for_missing_albums: bool = False
    monitored: bool = True

    def to_payload(self) -> dict[str, Any]:
        return {
            "monitor": self.monitor,
            "searchForMissingAlbums": self.search_for_missing_albums,
            "monitored": self.monitored,
        }


@dataclass
class AlbumDownloadStatus:
    """Queue state of an album download."""

    status: str
    progress: float = 0.0
    error_message: str | None = None
    estimated_completion_time: str | None = None

    NOT_IN_QUEUE = "not_in_queue"
    ERROR = "error"

    @classmethod
    def from_queue_item(cls, item: dict[str, Any]) -> "AlbumDownloadStatus":
        """Build a status from one entry of Lidarr's queue/details response."""
        size = item.get("size")
        size_left = item.get("sizeleft")
        progress = 0.0
        if isinstance(size, int | float) and isinstance(size_left, int | float):
            if size > 0:
                progress = 100 * (size - size_left) / size

        titles = [
            str(msg["title"])
            for msg in item.get("statusMessages") or []
            if isinstance(msg, dict) and msg.get("title") is not None
        ]
        eta = item.get("estimatedCompletionTime")
        return cls(
            status=str(item["status"]) if item.get("status") is not None else "unknown",
            progress=progress,
            error_message="; ".join(titles) if titles else None,
            estimated_completion_time=str(eta) if eta is not None else None,
        )


@dataclass
class ManualImportFile:
    """A file Lidarr offers for manual import."""

    path: str
    album_id: int | None = None
    album_release_id: int | None = None
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ManualImportFile":
        tracks = _list(data, "tracks")
        first_track = tracks[0] if tracks and isinstance(tracks[0], dict) else {}
        return cls(
            path=data.get("path") or "",
            album_id=first_track.get("albumId"),
            album_release_id=data.get("albumReleaseId"),
            raw=data,
        )

    @property
    def folder(self) -> str:
        """Directory part of the path (handles both / and \\ separators)."""
        cut = max(self.path.rfind("/"), self.path.rfind("\\"))
        return self.path[:cut] if cut > 0 else self.path


@dataclass
class ImportResult:
    """Outcome of a manual import request."""

    success: bool
    message: str
    results: list[dict[str, Any]] = field(default_factory=list)
    # the files sent, stamped with the release they were imported for
    files: list[ManualImportFile] = field(default_factory=list)


__all__ = [
    "AddArtistOptions",
    "AlbumDownloadStatus",
    "ImportResult",
    "LidarrAlbum",
    "LidarrAlbumStatistics",
    "LidarrArtist",
    "LidarrImage",
    "LidarrRelease",
    "LidarrTrack",
    "ManualImportFile",
]
