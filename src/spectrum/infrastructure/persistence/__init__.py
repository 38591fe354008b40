"""Persistence layer (local catalog store)."""

from .database import Database
from .repositories import (
    AlbumRepository,
    ArtistRepository,
    GenreRepository,
    TrackRepository,
)

__all__ = [
    "AlbumRepository",
    "ArtistRepository",
    "Database",
    "GenreRepository",
    "TrackRepository",
]
