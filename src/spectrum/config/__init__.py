"""Configuration module for Spectrum."""

from .settings import (
    DatabaseSettings,
    LidarrSettings,
    Settings,
    SyncSettings,
    get_settings,
)

__all__ = [
    "DatabaseSettings",
    "LidarrSettings",
    "Settings",
    "SyncSettings",
    "get_settings",
]
