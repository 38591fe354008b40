"""Background worker that keeps the local catalog in sync with Lidarr."""

import asyncio
import contextlib
import time
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from spectrum.application.services.catalog_sync_service import (
    CatalogSyncResult,
    CatalogSyncService,
)
from spectrum.application.services.file_locator import FileLocator
from spectrum.infrastructure.observability.logger_template import (
    get_module_logger,
    log_worker_health,
)
from spectrum.infrastructure.observability.logging import set_correlation_id

if TYPE_CHECKING:
    from spectrum.config import Settings
    from spectrum.domain.ports import ICatalogSourceClient
    from spectrum.infrastructure.persistence import Database

logger = get_module_logger(__name__)


class CatalogSyncWorker:
    """Run a catalog sync pass at startup and then every ``interval_seconds``.

    States are simply idle and running. ``trigger_now()`` runs an extra pass through
    the same path as the timer.

    Hey future me - the asyncio.Lock is the run-lock. A trigger (timer OR manual) that
    finds a pass in flight is SKIPPED and logged, not queued; the next tick catches up
    anyway since every pass is a full idempotent pass. Without it a manual trigger could
    interleave writes with the timer pass on the same rows.
    """

    def __init__(
        self,
        db: "Database",
        client: "ICatalogSourceClient",
        settings: "Settings",
        file_locator: FileLocator | None = None,
    ) -> None:
        """Initialize catalog sync worker.

        Args:
            db: Database instance for creating sessions (one session per pass)
            client: Catalog source client shared by all passes
            settings: Application settings (sync schedule + media root)
            file_locator: Override for the audio file locator (tests)
        """
        self.db = db
        self.client = client
        self.settings = settings
        self.interval_seconds = settings.sync.interval_seconds
        self._file_locator = file_locator or FileLocator(settings.lidarr.media_root)

        self._running = False
        self._task: asyncio.Task[None] | None = None
        self._run_lock = asyncio.Lock()

        # Lifecycle tracking for health monitoring
        self._cycles_completed = 0
        self._errors_total = 0
        self._passes_skipped = 0
        self._start_time = time.time()
        self._last_pass_started: datetime | None = None
        self._last_pass_finished: datetime | None = None
        self._last_result: CatalogSyncResult | None = None
        self._last_error: str | None = None

    async def start(self) -> None:
        """Start the worker loop. Safe to call multiple times."""
        if self._running:
            logger.warning("catalog_sync.already_running")
            return

        self._running = True
        self._start_time = time.time()
        self._task = asyncio.create_task(self._run_loop())

        logger.info(
            "worker.started",
            extra={
                "worker": "catalog_sync",
                "interval_seconds": self.interval_seconds,
                "run_on_startup": self.settings.sync.run_on_startup,
            },
        )

    async def stop(self) -> None:
        """Stop the worker loop and wait for it. Safe to call multiple times.

        A pass in flight is cancelled with the task; rows it already committed stay.
        """
        self._running = False
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None

        logger.info(
            "worker.stopped",
            extra={
                "worker": "catalog_sync",
                "cycles_completed": self._cycles_completed,
                "errors_total": self._errors_total,
                "uptime_seconds": round(time.time() - self._start_time, 2),
            },
        )

    async def _run_loop(self) -> None:
        """Startup pass, then one pass per interval until stopped."""
        if self.settings.sync.startup_delay_seconds > 0:
            await asyncio.sleep(self.settings.sync.startup_delay_seconds)

        logger.info("catalog_sync.loop_started")

        if self.settings.sync.run_on_startup:
            await self._run_cycle(trigger="startup")

        while self._running:
            try:
                await asyncio.sleep(self.interval_seconds)
            except asyncio.CancelledError:
                break
            await self._run_cycle(trigger="interval")

    async def trigger_now(self) -> CatalogSyncResult | None:
        """Run a pass right away.

        Returns:
            The pass result, or None if a pass was already running or this one failed
            (see get_status() for the error)
        """
        return await self._run_cycle(trigger="manual")

    async def _run_cycle(self, trigger: str) -> CatalogSyncResult | None:
        """Run one guarded pass. Never raises (except cancellation)."""
        if self._run_lock.locked():
            self._passes_skipped += 1
            logger.info(
                "catalog_sync.pass.skipped",
                extra={"trigger": trigger, "reason": "pass_in_progress"},
            )
            return None

        async with self._run_lock:
            correlation_id = set_correlation_id()
            self._last_pass_started = datetime.now(UTC)
            logger.info(
                "catalog_sync.pass.triggered",
                extra={"trigger": trigger, "pass_id": correlation_id},
            )
            try:
                async with self.db.session_scope() as session:
                    service = CatalogSyncService(
                        session, self.client, self._file_locator
                    )
                    result = await service.run_full_sync()
            except Exception as e:
                self._errors_total += 1
                self._last_error = f"{type(e).__name__}: {e}"
                # Don't crash the loop on errors - log and wait for the next trigger
                logger.error(
                    "catalog_sync.loop_error",
                    exc_info=True,
                    extra={
                        "error_type": type(e).__name__,
                        "trigger": trigger,
                        "cycle": self._cycles_completed,
                    },
                )
                return None
            finally:
                self._last_pass_finished = datetime.now(UTC)

        self._last_result = result
        self._last_error = None
        self._cycles_completed += 1

        if self._cycles_completed % self.settings.sync.health_log_every == 0:
            log_worker_health(
                logger=logger,
                worker_name="catalog_sync",
                cycles_completed=self._cycles_completed,
                errors_total=self._errors_total,
                uptime_seconds=time.time() - self._start_time,
                extra_stats={"passes_skipped": self._passes_skipped},
            )
        return result

    @property
    def is_pass_running(self) -> bool:
        return self._run_lock.locked()

    def get_status(self) -> dict[str, Any]:
        """Get worker status and last pass statistics."""
        return {
            "running": self._running,
            "pass_in_progress": self.is_pass_running,
            "interval_seconds": self.interval_seconds,
            "cycles_completed": self._cycles_completed,
            "errors_total": self._errors_total,
            "passes_skipped": self._passes_skipped,
            "last_pass_started": (
                self._last_pass_started.isoformat() if self._last_pass_started else None
            ),
            "last_pass_finished": (
                self._last_pass_finished.isoformat()
                if self._last_pass_finished
                else None
            ),
            "last_result": self._last_result.to_dict() if self._last_result else None,
            "last_error": self._last_error,
        }
