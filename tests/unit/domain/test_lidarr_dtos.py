"""Tests for the Lidarr record parsing helpers."""

from datetime import date

import pytest

from spectrum.domain.dtos import (
    AddArtistOptions,
    AlbumDownloadStatus,
    LidarrAlbum,
    LidarrArtist,
    LidarrTrack,
    ManualImportFile,
)


class TestLidarrArtist:
    """Test artist parsing."""

    def test_from_dict_reads_camel_case(self) -> None:
        """Lidarr's camelCase keys map onto the dataclass fields."""
        artist = LidarrArtist.from_dict(
            {
                "id": 7,
                "artistName": "Boards of Canada",
                "foreignArtistId": "mbid-1",
                "overview": "Scottish duo",
                "genres": ["Electronic", "IDM"],
                "images": [{"coverType": "poster", "remoteUrl": "http://img/1.jpg"}],
                "unknownField": "ignored",
            }
        )

        assert artist.id == 7
        assert artist.artist_name == "Boards of Canada"
        assert artist.foreign_artist_id == "mbid-1"
        assert artist.genres == ["Electronic", "IDM"]
        assert artist.first_image_url() == "http://img/1.jpg"

    def test_first_image_url_without_images(self) -> None:
        """No images gives None instead of an IndexError."""
        artist = LidarrArtist.from_dict({"id": 1, "artistName": "X", "images": []})
        assert artist.first_image_url() is None

    def test_missing_lists_default_to_empty(self) -> None:
        """Absent or null lists come back as []."""
        artist = LidarrArtist.from_dict({"id": 1, "artistName": "X", "genres": None})
        assert artist.genres == []
        assert artist.images == []


class TestLidarrAlbum:
    """Test album parsing helpers."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("2018-10-26", date(2018, 10, 26)),
            ("2018-10-26T00:00:00Z", date(2018, 10, 26)),
            ("not a date", None),
            ("", None),
            (None, None),
        ],
    )
    def test_release_date_as_date(self, raw: str | None, expected: date | None) -> None:
        """Dates and date-times parse, garbage gives None."""
        album = LidarrAlbum.from_dict({"id": 1, "title": "A", "releaseDate": raw})
        assert album.release_date_as_date() == expected

    def test_cover_art_prefers_cover_type(self) -> None:
        """The image flagged as cover wins over the first image."""
        album = LidarrAlbum.from_dict(
            {
                "id": 1,
                "title": "A",
                "images": [
                    {"coverType": "disc", "remoteUrl": "http://img/disc.jpg"},
                    {"coverType": "cover", "remoteUrl": "http://img/cover.jpg"},
                ],
            }
        )
        assert album.cover_art_url() == "http://img/cover.jpg"

    def test_cover_art_falls_back_to_first_image(self) -> None:
        """Without a cover image the first image is used."""
        album = LidarrAlbum.from_dict(
            {
                "id": 1,
                "title": "A",
                "images": [{"coverType": "disc", "remoteUrl": "http://img/disc.jpg"}],
            }
        )
        assert album.cover_art_url() == "http://img/disc.jpg"

    def test_cover_art_none_without_images(self) -> None:
        """No images, no cover."""
        album = LidarrAlbum.from_dict({"id": 1, "title": "A"})
        assert album.cover_art_url() is None

    def test_monitored_release_is_first_monitored(self) -> None:
        """Only the first release flagged monitored is picked."""
        album = LidarrAlbum.from_dict(
            {
                "id": 1,
                "title": "A",
                "releases": [
                    {"id": 10, "monitored": False},
                    {"id": 11, "monitored": True},
                    {"id": 12, "monitored": True},
                ],
            }
        )
        release = album.monitored_release()
        assert release is not None
        assert release.id == 11

    def test_monitored_release_none_when_unflagged(self) -> None:
        """No monitored release gives None."""
        album = LidarrAlbum.from_dict(
            {"id": 1, "title": "A", "releases": [{"id": 10, "monitored": False}]}
        )
        assert album.monitored_release() is None

    def test_legacy_album_id_from_first_release(self) -> None:
        """The legacy id comes from the FIRST release only."""
        album = LidarrAlbum.from_dict(
            {
                "id": 1,
                "title": "A",
                "releases": [{"id": 10}, {"id": 11, "albumId": 99}],
            }
        )
        assert album.legacy_album_id() is None

        album = LidarrAlbum.from_dict(
            {"id": 1, "title": "A", "releases": [{"id": 10, "albumId": 42}]}
        )
        assert album.legacy_album_id() == 42

    def test_statistics_flags(self) -> None:
        """has_files means any file, is_complete means all files."""
        partial = LidarrAlbum.from_dict(
            {"id": 1, "title": "A", "statistics": {"trackFileCount": 3, "trackCount": 10}}
        )
        assert partial.statistics is not None
        assert partial.statistics.has_files
        assert not partial.statistics.is_complete

        complete = LidarrAlbum.from_dict(
            {"id": 1, "title": "A", "statistics": {"trackFileCount": 10, "trackCount": 10}}
        )
        assert complete.statistics is not None
        assert complete.statistics.is_complete

    def test_missing_statistics_is_none(self) -> None:
        """Albums without statistics keep None."""
        album = LidarrAlbum.from_dict({"id": 1, "title": "A", "statistics": None})
        assert album.statistics is None

    def test_null_nested_entries_dropped(self) -> None:
        """Null releases and images are ignored, not dereferenced."""
        album = LidarrAlbum.from_dict(
            {
                "id": 1,
                "title": "A",
                "images": [None, "x", {"coverType": "cover", "remoteUrl": "http://img/a.jpg"}],
                "releases": [None, {"id": 2, "albumId": 7, "monitored": True}],
            }
        )
        assert album.cover_art_url() == "http://img/a.jpg"
        assert album.monitored_release() is not None
        assert album.legacy_album_id() == 7


class TestLidarrTrack:
    """Test track parsing."""

    def test_from_dict(self) -> None:
        """Numbers and flags are read as sent."""
        track = LidarrTrack.from_dict(
            {
                "id": 5,
                "title": "Roygbiv",
                "duration": 151,
                "absoluteTrackNumber": 4,
                "mediumNumber": 1,
                "trackNumber": "A4",
                "explicit": False,
            }
        )
        assert track.id == 5
        assert track.duration == 151
        assert track.absolute_track_number == 4
        assert track.track_number == "A4"


class TestAddArtistOptions:
    """Test add options payload."""

    def test_defaults_payload(self) -> None:
        """Defaults add the artist monitored but without searching."""
        assert AddArtistOptions().to_payload() == {
            "monitor": "none",
            "searchForMissingAlbums": False,
            "monitored": True,
        }


class TestAlbumDownloadStatus:
    """Test queue item conversion."""

    def test_progress_from_size(self) -> None:
        """Progress is the downloaded share of size in percent."""
        status = AlbumDownloadStatus.from_queue_item(
            {
                "status": "downloading",
                "size": 200,
                "sizeleft": 50,
                "estimatedCompletionTime": "2026-10-18T12:00:00Z",
            }
        )
        assert status.status == "downloading"
        assert status.progress == pytest.approx(75.0)
        assert status.estimated_completion_time == "2026-10-18T12:00:00Z"
        assert status.error_message is None

    def test_zero_size_gives_zero_progress(self) -> None:
        """A zero size must not divide by zero."""
        status = AlbumDownloadStatus.from_queue_item(
            {"status": "queued", "size": 0, "sizeleft": 0}
        )
        assert status.progress == 0.0

    def test_status_messages_are_joined(self) -> None:
        """Status message titles become the error message."""
        status = AlbumDownloadStatus.from_queue_item(
            {
                "status": "warning",
                "statusMessages": [
                    {"title": "Track 1 missing"},
                    {"messages": []},
                    {"title": "Track 2 missing"},
                ],
            }
        )
        assert status.error_message == "Track 1 missing; Track 2 missing"

    def test_missing_status_is_unknown(self) -> None:
        """No status field gives 'unknown'."""
        assert AlbumDownloadStatus.from_queue_item({}).status == "unknown"


class TestManualImportFile:
    """Test manual import file parsing."""

    def test_album_id_from_first_track(self) -> None:
        """The album id comes from the first track entry."""
        file = ManualImportFile.from_dict(
            {
                "path": "/downloads/Album/01 - Song.flac",
                "tracks": [{"albumId": 12}, {"albumId": 13}],
            }
        )
        assert file.album_id == 12
        assert file.folder == "/downloads/Album"

    def test_windows_path_folder(self) -> None:
        """Backslash paths are split too."""
        file = ManualImportFile.from_dict({"path": "C:\\dl\\Album\\01.flac"})
        assert file.folder == "C:\\dl\\Album"
        assert file.album_id is None
