"""Tests for FileLocator."""

import os

import pytest

from spectrum.application.services.file_locator import FileLocator


@pytest.fixture
def album_dir(tmp_path):
    """Album folder for 'The Band' / 'First Light' below tmp_path."""
    path = tmp_path / "The+Band" / "First Light"
    path.mkdir(parents=True)
    return path


class TestFileLocator:
    """Test audio path resolution."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("The Band", "The+Band"),
            ("A  Tribe\tCalled Quest", "A+Tribe+Called+Quest"),
            ("Björk", "Björk"),
        ],
    )
    def test_normalize_artist(self, name: str, expected: str) -> None:
        """Whitespace runs become a single +."""
        assert FileLocator.normalize_artist(name) == expected

    def test_exact_flac_match(self, tmp_path, album_dir) -> None:
        """An existing <NN> - <title>.flac is returned."""
        (album_dir / "03 - Dawn.flac").write_bytes(b"")

        path = FileLocator(str(tmp_path)).locate("The Band", "First Light", "Dawn", 3)

        assert path == str(album_dir / "03 - Dawn.flac")

    def test_exact_match_other_extension(self, tmp_path, album_dir) -> None:
        """Non-FLAC files are found when the FLAC is missing."""
        (album_dir / "01 - Intro.mp3").write_bytes(b"")

        path = FileLocator(str(tmp_path)).locate("The Band", "First Light", "Intro", 1)

        assert path == str(album_dir / "01 - Intro.mp3")

    def test_flac_preferred_over_mp3(self, tmp_path, album_dir) -> None:
        """FLAC wins when both exist."""
        (album_dir / "01 - Intro.mp3").write_bytes(b"")
        (album_dir / "01 - Intro.flac").write_bytes(b"")

        path = FileLocator(str(tmp_path)).locate("The Band", "First Light", "Intro", 1)

        assert path.endswith(".flac")

    def test_scan_matches_number_prefix_case_insensitive(
        self, tmp_path, album_dir
    ) -> None:
        """A differently titled file with the right number and .FLAC is found."""
        (album_dir / "01 - song (Remastered).FLAC").write_bytes(b"")

        path = FileLocator(str(tmp_path)).locate("The Band", "First Light", "Song", 1)

        assert path == str(album_dir / "01 - song (Remastered).FLAC")

    def test_scan_ignores_other_track_numbers(self, tmp_path, album_dir) -> None:
        """Files of other tracks are not picked up."""
        (album_dir / "02 - Other.flac").write_bytes(b"")

        path = FileLocator(str(tmp_path)).locate("The Band", "First Light", "Song", 1)

        assert path == os.path.join(str(album_dir), "01 - Song.flac")

    def test_missing_directory_returns_guess(self, tmp_path) -> None:
        """Nothing on disk still gives the .flac guess."""
        path = FileLocator(str(tmp_path)).locate("Nobody", "Nothing", "Silence", 7)

        assert path == os.path.join(str(tmp_path), "Nobody", "Nothing", "07 - Silence.flac")
