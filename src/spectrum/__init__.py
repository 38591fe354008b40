"""Spectrum - local music catalog kept in sync with Lidarr."""

__version__ = "0.1.0"
