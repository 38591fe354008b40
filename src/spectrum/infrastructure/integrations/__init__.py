"""External integration client implementations."""

from spectrum.infrastructure.integrations.lidarr_client import LidarrClient

__all__ = ["LidarrClient"]
