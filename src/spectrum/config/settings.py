"""Application settings loaded from environment variables and .env files."""

from functools import lru_cache

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseModel):
    """Database connection settings."""

    url: str = "sqlite+aiosqlite:///./spectrum.db"
    echo: bool = False
    pool_pre_ping: bool = True
    pool_size: int = 5
    max_overflow: int = 10
    pool_timeout: int = 30
    pool_recycle: int = 3600
    # Hey future me - create_tables runs Base.metadata.create_all on startup. Turn it
    # off when the schema is managed with `alembic upgrade head` instead.
    create_tables: bool = True


class LidarrSettings(BaseModel):
    """Lidarr connection and library layout settings."""

    base_url: str = "http://localhost:8686/api/v1"
    api_key: str = ""
    timeout: float = Field(default=30.0, gt=0)
    # Root of the music library as seen by THIS process (File Locator looks here).
    media_root: str = "/media"
    # Root folder as seen by Lidarr (sent when adding artists).
    root_folder_path: str = "/media"
    quality_profile_id: int = 1
    metadata_profile_id: int = 1

    @property
    def is_configured(self) -> bool:
        """Check if an API key has been provided."""
        return bool(self.api_key.strip())


class SyncSettings(BaseModel):
    """Catalog synchronization schedule."""

    enabled: bool = True
    run_on_startup: bool = True
    interval_seconds: int = Field(default=30, ge=1)
    startup_delay_seconds: float = Field(default=0.0, ge=0)
    health_log_every: int = Field(default=10, ge=1)


class Settings(BaseSettings):
    """Root settings object.

    Nested groups are populated from prefixed env vars, for example
    ``LIDARR__API_KEY`` or ``SYNC__INTERVAL_SECONDS``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    app_name: str = "spectrum"
    log_level: str = "INFO"
    log_json_format: bool = False

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    lidarr: LidarrSettings = Field(default_factory=LidarrSettings)
    sync: SyncSettings = Field(default_factory=SyncSettings)


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
