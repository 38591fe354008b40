"""Tests for GenreResolver."""

import logging

import pytest

from spectrum.application.services.genre_resolver import GenreResolver
from spectrum.domain.exceptions import ValidationError
from spectrum.infrastructure.persistence.repositories import GenreRepository


class TestGenreResolver:
    """Test find-or-create of genres."""

    async def test_resolve_creates_genre(self, session) -> None:
        """An unknown name creates a row with a local id."""
        genre = await GenreResolver(session).resolve("Shoegaze")

        assert genre.id is not None
        assert genre.name == "Shoegaze"

    async def test_resolve_is_case_insensitive(self, session) -> None:
        """Rock, rock and ROCK all land on the first-seen row."""
        resolver = GenreResolver(session)

        first = await resolver.resolve("Rock")
        second = await resolver.resolve("rock")
        third = await resolver.resolve("ROCK ")

        assert first.id == second.id == third.id
        assert third.name == "Rock"
        assert len(await GenreRepository(session).list_all()) == 1

    @pytest.mark.parametrize("name", ["", "   "])
    async def test_resolve_blank_raises(self, session, name: str) -> None:
        """Blank names are rejected."""
        with pytest.raises(ValidationError):
            await GenreResolver(session).resolve(name)

    async def test_resolve_all_dedupes_and_skips_blanks(
        self, session, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Case duplicates collapse, blanks are skipped with a warning."""
        resolver = GenreResolver(session)

        with caplog.at_level(logging.WARNING):
            genres = await resolver.resolve_all(["Jazz", "", "jazz", "Blues"])

        assert [g.name for g in genres] == ["Jazz", "Blues"]
        assert "genre.blank_name_skipped" in caplog.messages
