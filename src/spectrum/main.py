"""Process entry point: wire settings, logging, database, Lidarr client and worker."""

import asyncio
import contextlib
import logging
import signal
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from sqlalchemy.engine import make_url

from spectrum.application.workers import CatalogSyncWorker
from spectrum.config import Settings, get_settings
from spectrum.domain.exceptions import ConfigurationError
from spectrum.infrastructure.integrations import LidarrClient
from spectrum.infrastructure.observability import configure_logging
from spectrum.infrastructure.persistence import Database

logger = logging.getLogger(__name__)


# Hey future me, SQLite won't create missing parent directories for the .db file and the
# error it gives ("unable to open database file") says nothing about why. Fail early with
# a ConfigurationError instead. No-op for in-memory and non-SQLite URLs.
def _ensure_sqlite_directory(url: str) -> None:
    parsed = make_url(url)
    if not parsed.drivername.startswith("sqlite"):
        return
    database = parsed.database
    if not database or database == ":memory:":
        return

    parent = Path(database).parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigurationError(
            f"Unable to create SQLite database directory '{parent}': {exc}. "
            "Update DATABASE__URL or adjust directory permissions."
        ) from exc


@asynccontextmanager
async def lifespan(settings: Settings) -> AsyncGenerator[CatalogSyncWorker, None]:
    """Start everything the sync needs and tear it down again.

    Everything before ``yield`` is startup, everything after is shutdown. The
    finally block runs even when startup fails halfway.
    """
    if not settings.lidarr.is_configured:
        logger.warning("lidarr.api_key_missing")

    _ensure_sqlite_directory(settings.database.url)
    db = Database(settings.database)
    client = LidarrClient(settings.lidarr)
    worker = CatalogSyncWorker(db, client, settings)

    try:
        if settings.database.create_tables:
            await db.create_tables()
        logger.info("Database initialized", extra={"url": settings.database.url})

        if settings.sync.enabled:
            await worker.start()
        else:
            logger.info("catalog_sync.disabled")

        yield worker
    finally:
        await worker.stop()
        await client.close()
        await db.close()
        logger.info("Shutdown complete")


async def main(settings: Settings | None = None) -> None:
    """Run until SIGINT/SIGTERM."""
    settings = settings or get_settings()
    configure_logging(
        log_level=settings.log_level,
        json_format=settings.log_json_format,
        app_name=settings.app_name,
    )
    logger.info("Starting application", extra={"app_name": settings.app_name})

    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        # add_signal_handler is not available on Windows event loops
        with contextlib.suppress(NotImplementedError):
            loop.add_signal_handler(sig, stop_event.set)

    async with lifespan(settings):
        await stop_event.wait()


def run() -> None:
    """Console script entry point."""
    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(main())


if __name__ == "__main__":
    run()
