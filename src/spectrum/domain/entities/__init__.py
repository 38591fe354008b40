"""Domain entities for the local catalog mirror."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime


def utc_now() -> datetime:
    """Get current UTC time."""
    return datetime.now(UTC)


# Hey future me, Genre is SHARED - many artists/albums point at one row and nothing owns
# it. The name keeps the casing it was first seen with ("Hip Hop"), lookups compare
# lowercase so "hip hop" and "HIP HOP" land on the same row. The sync never deletes genres.
@dataclass
class Genre:
    """Genre entity, unique by case-insensitive name."""

    name: str
    id: int | None = None
    description: str | None = None
    image_url: str | None = None

    @staticmethod
    def key_for(name: str) -> str:
        """Canonical lookup key for a genre name."""
        return name.strip().casefold()

    def matches(self, name: str) -> bool:
        """Check if a name refers to this genre (case-insensitive)."""
        return self.key_for(self.name) == self.key_for(name)


# Yo, id is the LOCAL id (None until the repository inserts the row). lidarr_id is the
# catalog source's integer id and the natural key the sync matches on - at most one local
# artist per lidarr_id. foreign_artist_id is the MusicBrainz id Lidarr reports; onboarding
# looks artists up by it before they have a lidarr_id locally.
@dataclass
class Artist:
    """Artist entity representing a music artist."""

    name: str
    id: int | None = None
    biography: str | None = None
    image_url: str | None = None
    lidarr_id: int | None = None
    foreign_artist_id: str | None = None
    # Raw genre names as reported by the source.
    genre_names: list[str] = field(default_factory=list)
    genres: list[Genre] = field(default_factory=list)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @property
    def is_linked(self) -> bool:
        """Check if the artist is linked to a catalog source record."""
        return self.lidarr_id is not None

    def add_genre(self, genre: Genre) -> None:
        """Attach a genre once."""
        if not any(g.id == genre.id for g in self.genres):
            self.genres.append(genre)


# Hey future me - Album stores artist_id, NOT an Artist object. Need the artist? Ask the
# artist repository. monitored_release_id is the id of the release (edition) Lidarr tracks
# for this album; track queries are scoped by it so we get the right tracklist.
# legacy_album_id is the albumId the first release reports (older Lidarr payloads).
@dataclass
class Album:
    """Album entity belonging to exactly one artist."""

    title: str
    artist_id: int
    id: int | None = None
    album_type: str | None = None
    release_date: date | None = None
    cover_image_url: str | None = None
    lidarr_album_id: int | None = None
    foreign_album_id: str | None = None
    legacy_album_id: int | None = None
    downloaded: bool = False
    monitored_release_id: int | None = None
    genres: list[Genre] = field(default_factory=list)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def mark_downloaded(self) -> None:
        """Flag the album as present on disk."""
        self.downloaded = True
        self.updated_at = utc_now()

    def add_genre(self, genre: Genre) -> None:
        """Attach a genre once."""
        if not any(g.id == genre.id for g in self.genres):
            self.genres.append(genre)


@dataclass
class Track:
    """Track entity belonging to exactly one album."""

    title: str
    album_id: int
    id: int | None = None
    duration_seconds: int = 0
    track_number: int = 0
    disc_number: int = 1
    explicit: bool = False
    lidarr_track_id: int | None = None
    # Best-effort path from the FileLocator, may point at a file that doesn't exist.
    audio_path: str | None = None
    created_at: datetime = field(default_factory=utc_now)


__all__ = ["Album", "Artist", "Genre", "Track", "utc_now"]
