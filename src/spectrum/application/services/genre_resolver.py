"""Find-or-create lookup for shared genre rows."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from spectrum.domain.entities import Genre
from spectrum.domain.exceptions import ValidationError
from spectrum.infrastructure.persistence.repositories import GenreRepository

logger = logging.getLogger(__name__)


class GenreResolver:
    """Resolve genre names to a single canonical Genre row.

    Hey future me - lookups are case-insensitive, the FIRST spelling wins: resolving
    "Hip Hop" then "hip hop" gives back the "Hip Hop" row both times. The new row is
    flushed (not committed) so it's visible to the next resolve in the same session; the
    calling reconciler commits it together with the album/artist it belongs to.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._genre_repo = GenreRepository(session)

    async def resolve(self, name: str) -> Genre:
        """Return the genre called ``name`` (any casing), creating it if needed.

        Raises:
            ValidationError: If name is blank. Callers filter those out first.
        """
        if not name or not name.strip():
            raise ValidationError("Genre name must not be blank")

        existing = await self._genre_repo.get_by_name(name)
        if existing:
            return existing

        genre = await self._genre_repo.add(Genre(name=name.strip()))
        logger.debug("genre.created", extra={"genre": genre.name, "genre_id": genre.id})
        return genre

    async def resolve_all(self, names: list[str]) -> list[Genre]:
        """Resolve many names, skipping blanks and collapsing case duplicates."""
        genres: list[Genre] = []
        for name in names:
            if not name or not name.strip():
                logger.warning("genre.blank_name_skipped")
                continue
            genre = await self.resolve(name)
            if not any(g.id == genre.id for g in genres):
                genres.append(genre)
        return genres
