"""SQLAlchemy ORM models for the local catalog."""

from datetime import UTC, date, datetime

import sqlalchemy as sa
from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def utc_now() -> datetime:
    """Get current UTC time."""
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


# Hey future me, these two association tables are the artist-genre and album-genre
# many-to-many links. ondelete=CASCADE cleans the link rows when an artist/album goes away;
# genres themselves are never deleted by the sync.
artist_genres = Table(
    "artist_genres",
    Base.metadata,
    Column(
        "artist_id",
        Integer,
        ForeignKey("artists.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "genre_id",
        Integer,
        ForeignKey("genres.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)

album_genres = Table(
    "album_genres",
    Base.metadata,
    Column(
        "album_id",
        Integer,
        ForeignKey("albums.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "genre_id",
        Integer,
        ForeignKey("genres.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


# Yo, name_key is name.strip().casefold() computed in Python and UNIQUE - that is what makes
# "Rock"/"rock"/"ROCK" ONE row at the database level. Computing it in Python (not SQL lower())
# keeps non-ASCII names like "Électro" consistent on SQLite too.
class GenreModel(Base):
    """SQLAlchemy model for Genre entity."""

    __tablename__ = "genres"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    name_key: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(512), nullable=True)


# Listen up, lidarr_id is UNIQUE but nullable - artists onboarded before Lidarr answered
# can exist without one, and NULLs never collide in a unique index. genre_names is the raw
# list from Lidarr stored as JSON text (SQLite friendly); the genres relationship holds the
# resolved Genre rows.
class ArtistModel(Base):
    """SQLAlchemy model for Artist entity."""

    __tablename__ = "artists"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    biography: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(512), nullable=True)
    lidarr_id: Mapped[int | None] = mapped_column(
        Integer, nullable=True, unique=True, index=True
    )
    foreign_artist_id: Mapped[str | None] = mapped_column(
        String(64), nullable=True, index=True
    )
    genre_names: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=utc_now, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False
    )

    albums: Mapped[list["AlbumModel"]] = relationship(
        "AlbumModel", back_populates="artist", cascade="all, delete-orphan"
    )
    genres: Mapped[list[GenreModel]] = relationship(
        GenreModel, secondary=artist_genres, lazy="selectin"
    )


# Hey future me - downloaded only ever flips false -> true from Lidarr's file-count stats.
# monitored_release_id scopes track queries to the edition Lidarr actually monitors.
class AlbumModel(Base):
    """SQLAlchemy model for Album entity."""

    __tablename__ = "albums"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    artist_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("artists.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(512), nullable=False)
    album_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    release_date: Mapped[date | None] = mapped_column(sa.Date, nullable=True)
    cover_image_url: Mapped[str | None] = mapped_column(String(512), nullable=True)
    lidarr_album_id: Mapped[int | None] = mapped_column(
        Integer, nullable=True, unique=True, index=True
    )
    foreign_album_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    legacy_album_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    downloaded: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    monitored_release_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=utc_now, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False
    )

    artist: Mapped[ArtistModel] = relationship("ArtistModel", back_populates="albums")
    tracks: Mapped[list["TrackModel"]] = relationship(
        "TrackModel", back_populates="album", cascade="all, delete-orphan"
    )
    genres: Mapped[list[GenreModel]] = relationship(
        GenreModel, secondary=album_genres, lazy="selectin"
    )


class TrackModel(Base):
    """SQLAlchemy model for Track entity."""

    __tablename__ = "tracks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    album_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("albums.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(512), nullable=False)
    duration_seconds: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    track_number: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    disc_number: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    explicit: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    lidarr_track_id: Mapped[int | None] = mapped_column(
        Integer, nullable=True, unique=True, index=True
    )
    audio_path: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=utc_now, nullable=False
    )

    album: Mapped[AlbumModel] = relationship("AlbumModel", back_populates="tracks")
