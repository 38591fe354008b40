"""Background workers."""

from spectrum.application.workers.catalog_sync_worker import CatalogSyncWorker

__all__ = ["CatalogSyncWorker"]
