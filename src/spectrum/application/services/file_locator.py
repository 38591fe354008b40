"""Best-effort lookup of a track's audio file below the media root."""

import logging
import os
import re

logger = logging.getLogger(__name__)


class FileLocator:
    """Compute the on-disk path of a track's audio file.

    Library layout expected on disk::

        <media_root>/<Artist+Name>/<Album Title>/<NN> - <Track Title>.<ext>

    Spaces in the artist folder are ``+`` (runs of whitespace collapse to one).
    ``locate`` never fails: when nothing matches it returns the ``.flac`` guess,
    which may not exist.
    """

    # Order matters, lossless first.
    EXTENSIONS = (".flac", ".mp3", ".wav", ".m4a", ".ogg")
    DEFAULT_EXTENSION = ".flac"

    def __init__(self, media_root: str) -> None:
        self.media_root = media_root

    @staticmethod
    def normalize_artist(artist_name: str) -> str:
        """Artist folder name: whitespace runs replaced by ``+``."""
        return re.sub(r"\s+", "+", artist_name)

    def album_dir(self, artist_name: str, album_title: str) -> str:
        return os.path.join(
            self.media_root, self.normalize_artist(artist_name), album_title
        )

    def locate(
        self,
        artist_name: str,
        album_title: str,
        track_title: str,
        track_number: int,
    ) -> str:
        """Resolve the audio path for a track.

        Steps, first hit wins:
        1. ``<base>`` + each of EXTENSIONS, if the file exists
        2. a file in the album dir whose lowercased name starts with ``"NN - "``
           and ends with ``.flac`` (the real filename is returned)
        3. ``<base>.flac`` as a guess
        """
        prefix = f"{track_number:02d} - "
        directory = self.album_dir(artist_name, album_title)
        base_path = os.path.join(directory, f"{prefix}{track_title}")

        for ext in self.EXTENSIONS:
            candidate = base_path + ext
            if os.path.isfile(candidate):
                logger.debug("file_locator.exact_match", extra={"path": candidate})
                return candidate

        match = self._scan_directory(directory, prefix)
        if match:
            logger.debug("file_locator.scan_match", extra={"path": match})
            return match

        guess = base_path + self.DEFAULT_EXTENSION
        logger.warning(
            "file_locator.not_found",
            extra={
                "track": track_title,
                "album": album_title,
                "artist": artist_name,
                "path": guess,
            },
        )
        return guess

    def _scan_directory(self, directory: str, prefix: str) -> str | None:
        if not os.path.isdir(directory):
            return None
        try:
            names = sorted(os.listdir(directory))
        except OSError as e:
            logger.warning(
                "file_locator.list_failed",
                extra={"directory": directory, "error": str(e)},
            )
            return None

        lowered_prefix = prefix.lower()
        for name in names:
            lowered = name.lower()
            if lowered.startswith(lowered_prefix) and lowered.endswith(
                self.DEFAULT_EXTENSION
            ):
                return os.path.join(directory, name)
        return None
