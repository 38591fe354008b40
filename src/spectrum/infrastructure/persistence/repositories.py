"""Repository implementations for domain entities."""

from __future__ import annotations

import json

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from spectrum.domain.entities import Album, Artist, Genre, Track
from spectrum.domain.exceptions import EntityNotFoundException
from spectrum.domain.ports import (
    IAlbumRepository,
    IArtistRepository,
    IGenreRepository,
    ITrackRepository,
)

from .models import AlbumModel, ArtistModel, GenreModel, TrackModel


def _genre_to_entity(model: GenreModel) -> Genre:
    return Genre(
        id=model.id,
        name=model.name,
        description=model.description,
        image_url=model.image_url,
    )


async def _load_genre_models(
    session: AsyncSession, genres: list[Genre]
) -> list[GenreModel]:
    """Fetch the ORM rows for already persisted genres (unsaved ones are ignored)."""
    ids = [g.id for g in genres if g.id is not None]
    if not ids:
        return []
    result = await session.execute(select(GenreModel).where(GenreModel.id.in_(ids)))
    return list(result.scalars().all())


class GenreRepository(IGenreRepository):
    """SQLAlchemy implementation of Genre repository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with session."""
        self.session = session

    # Hey future me - add() FLUSHES so the caller gets the generated id back right away.
    # The unique name_key makes a concurrent duplicate blow up with IntegrityError here,
    # not silently create a second "Rock".
    async def add(self, genre: Genre) -> Genre:
        """Add a new genre."""
        model = GenreModel(
            name=genre.name.strip(),
            name_key=Genre.key_for(genre.name),
            description=genre.description,
            image_url=genre.image_url,
        )
        self.session.add(model)
        await self.session.flush()
        return _genre_to_entity(model)

    async def get_by_name(self, name: str) -> Genre | None:
        """Get a genre by case-insensitive exact name."""
        stmt = select(GenreModel).where(GenreModel.name_key == Genre.key_for(name))
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return _genre_to_entity(model) if model else None

    async def list_all(self) -> list[Genre]:
        """List all genres ordered by name."""
        stmt = select(GenreModel).order_by(GenreModel.name_key)
        result = await self.session.execute(stmt)
        return [_genre_to_entity(m) for m in result.scalars().all()]


class ArtistRepository(IArtistRepository):
    """SQLAlchemy implementation of Artist repository."""

    # Hey future me, the repo never commits - the service decides where a unit of work ends.
    # Everything handed out is a plain dataclass, so a rollback in the service can't turn
    # objects it still holds into expired ORM zombies.
    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with session."""
        self.session = session

    async def add(self, artist: Artist) -> Artist:
        """Add a new artist and return it with its local ID."""
        model = ArtistModel(
            name=artist.name,
            biography=artist.biography,
            image_url=artist.image_url,
            lidarr_id=artist.lidarr_id,
            foreign_artist_id=artist.foreign_artist_id,
            # genre_names are serialized as JSON strings for SQLite compatibility
            genre_names=json.dumps(artist.genre_names) if artist.genre_names else None,
            genres=await _load_genre_models(self.session, artist.genres),
            created_at=artist.created_at,
            updated_at=artist.updated_at,
        )
        self.session.add(model)
        await self.session.flush()
        return self._model_to_entity(model)

    async def update(self, artist: Artist) -> Artist:
        """Update an existing artist."""
        if artist.id is None:
            raise EntityNotFoundException("Artist", None)
        model = await self._get_model(artist.id)
        if not model:
            raise EntityNotFoundException("Artist", artist.id)

        model.name = artist.name
        model.biography = artist.biography
        model.image_url = artist.image_url
        model.lidarr_id = artist.lidarr_id
        model.foreign_artist_id = artist.foreign_artist_id
        model.genre_names = (
            json.dumps(artist.genre_names) if artist.genre_names else None
        )
        model.genres = await _load_genre_models(self.session, artist.genres)
        model.updated_at = artist.updated_at
        await self.session.flush()
        return self._model_to_entity(model)

    async def get_by_id(self, artist_id: int) -> Artist | None:
        """Get an artist by local ID."""
        model = await self._get_model(artist_id)
        return self._model_to_entity(model) if model else None

    async def get_by_lidarr_id(self, lidarr_id: int) -> Artist | None:
        """Get an artist by Lidarr ID."""
        stmt = select(ArtistModel).where(ArtistModel.lidarr_id == lidarr_id)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._model_to_entity(model) if model else None

    async def get_by_foreign_id(self, foreign_artist_id: str) -> Artist | None:
        """Get an artist by foreign (MusicBrainz) ID."""
        # foreign_artist_id is not unique, first match wins
        stmt = (
            select(ArtistModel)
            .where(ArtistModel.foreign_artist_id == foreign_artist_id)
            .order_by(ArtistModel.id)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._model_to_entity(model) if model else None

    async def list_all(self) -> list[Artist]:
        """List all artists ordered by local ID."""
        stmt = select(ArtistModel).order_by(ArtistModel.id)
        result = await self.session.execute(stmt)
        return [self._model_to_entity(m) for m in result.scalars().all()]

    async def count_all(self) -> int:
        """Count total number of artists in the database."""
        stmt = select(func.count(ArtistModel.id))
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def _get_model(self, artist_id: int) -> ArtistModel | None:
        stmt = select(ArtistModel).where(ArtistModel.id == artist_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    def _model_to_entity(self, model: ArtistModel) -> Artist:
        return Artist(
            id=model.id,
            name=model.name,
            biography=model.biography,
            image_url=model.image_url,
            lidarr_id=model.lidarr_id,
            foreign_artist_id=model.foreign_artist_id,
            genre_names=json.loads(model.genre_names) if model.genre_names else [],
            genres=[_genre_to_entity(g) for g in model.genres],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


class AlbumRepository(IAlbumRepository):
    """SQLAlchemy implementation of Album repository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with session."""
        self.session = session

    async def add(self, album: Album) -> Album:
        """Add a new album and return it with its local ID."""
        model = AlbumModel(
            artist_id=album.artist_id,
            title=album.title,
            album_type=album.album_type,
            release_date=album.release_date,
            cover_image_url=album.cover_image_url,
            lidarr_album_id=album.lidarr_album_id,
            foreign_album_id=album.foreign_album_id,
            legacy_album_id=album.legacy_album_id,
            downloaded=album.downloaded,
            monitored_release_id=album.monitored_release_id,
            genres=await _load_genre_models(self.session, album.genres),
            created_at=album.created_at,
            updated_at=album.updated_at,
        )
        self.session.add(model)
        await self.session.flush()
        return self._model_to_entity(model)

    # Yo, update() REPLACES the genre set with whatever the entity carries. The album stage
    # relies on that: add the album, resolve genres, then update once with the full list.
    async def update(self, album: Album) -> Album:
        """Update an existing album (including its genre set)."""
        if album.id is None:
            raise EntityNotFoundException("Album", None)
        model = await self._get_model(album.id)
        if not model:
            raise EntityNotFoundException("Album", album.id)

        model.title = album.title
        model.album_type = album.album_type
        model.release_date = album.release_date
        model.cover_image_url = album.cover_image_url
        model.lidarr_album_id = album.lidarr_album_id
        model.foreign_album_id = album.foreign_album_id
        model.legacy_album_id = album.legacy_album_id
        model.downloaded = album.downloaded
        model.monitored_release_id = album.monitored_release_id
        model.genres = await _load_genre_models(self.session, album.genres)
        model.updated_at = album.updated_at
        await self.session.flush()
        return self._model_to_entity(model)

    async def get_by_id(self, album_id: int) -> Album | None:
        """Get an album by local ID."""
        model = await self._get_model(album_id)
        return self._model_to_entity(model) if model else None

    async def get_by_lidarr_id(self, lidarr_album_id: int) -> Album | None:
        """Get an album by Lidarr ID."""
        stmt = select(AlbumModel).where(AlbumModel.lidarr_album_id == lidarr_album_id)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._model_to_entity(model) if model else None

    async def list_all(self) -> list[Album]:
        """List all albums ordered by local ID."""
        stmt = select(AlbumModel).order_by(AlbumModel.id)
        result = await self.session.execute(stmt)
        return [self._model_to_entity(m) for m in result.scalars().all()]

    async def list_by_artist(self, artist_id: int) -> list[Album]:
        """List albums of one artist."""
        stmt = (
            select(AlbumModel)
            .where(AlbumModel.artist_id == artist_id)
            .order_by(AlbumModel.id)
        )
        result = await self.session.execute(stmt)
        return [self._model_to_entity(m) for m in result.scalars().all()]

    async def count_all(self) -> int:
        """Count total number of albums."""
        stmt = select(func.count(AlbumModel.id))
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def _get_model(self, album_id: int) -> AlbumModel | None:
        stmt = select(AlbumModel).where(AlbumModel.id == album_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    def _model_to_entity(self, model: AlbumModel) -> Album:
        """Convert AlbumModel to Album entity.

        Hey future me - this is the ONE place that maps DB -> Entity!
        When you add fields to Album, UPDATE THIS FUNCTION!
        """
        return Album(
            id=model.id,
            title=model.title,
            artist_id=model.artist_id,
            album_type=model.album_type,
            release_date=model.release_date,
            cover_image_url=model.cover_image_url,
            lidarr_album_id=model.lidarr_album_id,
            foreign_album_id=model.foreign_album_id,
            legacy_album_id=model.legacy_album_id,
            downloaded=model.downloaded,
            monitored_release_id=model.monitored_release_id,
            genres=[_genre_to_entity(g) for g in model.genres],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


class TrackRepository(ITrackRepository):
    """SQLAlchemy implementation of Track repository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with session."""
        self.session = session

    async def add(self, track: Track) -> Track:
        """Add a new track and return it with its local ID."""
        model = TrackModel(
            album_id=track.album_id,
            title=track.title,
            duration_seconds=track.duration_seconds,
            track_number=track.track_number,
            disc_number=track.disc_number,
            explicit=track.explicit,
            lidarr_track_id=track.lidarr_track_id,
            audio_path=track.audio_path,
            created_at=track.created_at,
        )
        self.session.add(model)
        await self.session.flush()
        return self._model_to_entity(model)

    async def get_by_lidarr_id(self, lidarr_track_id: int) -> Track | None:
        """Get a track by Lidarr ID."""
        stmt = select(TrackModel).where(TrackModel.lidarr_track_id == lidarr_track_id)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._model_to_entity(model) if model else None

    async def list_by_album(self, album_id: int) -> list[Track]:
        """List tracks of one album ordered by disc and track number."""
        stmt = (
            select(TrackModel)
            .where(TrackModel.album_id == album_id)
            .order_by(TrackModel.disc_number, TrackModel.track_number, TrackModel.id)
        )
        result = await self.session.execute(stmt)
        return [self._model_to_entity(m) for m in result.scalars().all()]

    async def count_all(self) -> int:
        """Count total number of tracks."""
        stmt = select(func.count(TrackModel.id))
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    def _model_to_entity(self, model: TrackModel) -> Track:
        return Track(
            id=model.id,
            title=model.title,
            album_id=model.album_id,
            duration_seconds=model.duration_seconds,
            track_number=model.track_number,
            disc_number=model.disc_number,
            explicit=model.explicit,
            lidarr_track_id=model.lidarr_track_id,
            audio_path=model.audio_path,
            created_at=model.created_at,
        )


__all__ = [
    "AlbumRepository",
    "ArtistRepository",
    "GenreRepository",
    "TrackRepository",
]
