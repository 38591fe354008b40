"""Shared logger helpers.

Hey future me - these keep log event names consistent across services and workers:
``<operation>.started`` / ``<operation>.completed`` / ``<operation>.failed`` and
``worker.health``. Use them instead of free-form messages.

USAGE:
    logger = get_module_logger(__name__)

    async with log_operation(logger, "catalog_sync.full"):
        await service.run_full_sync()

    log_worker_health(logger, "catalog_sync", cycles_completed=10, errors_total=0,
                      uptime_seconds=300)
"""

import logging
import time
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any


def get_module_logger(name: str) -> logging.Logger:
    """Get logger for module (pass __name__)."""
    return logging.getLogger(name)


@asynccontextmanager
async def log_operation(
    logger: logging.Logger,
    operation: str,
    **context: Any,
) -> AsyncIterator[None]:
    """Log start/end of an async block with duration_ms.

    On exception logs ``{operation}.failed`` with traceback and re-raises.

    Example:
        >>> async with log_operation(logger, "artist_onboarding", foreign_id="abc"):
        ...     await onboard()
    """
    start = time.time()
    logger.info(f"{operation}.started", extra=context)

    try:
        yield
    except Exception as e:
        duration_ms = int((time.time() - start) * 1000)
        logger.error(
            f"{operation}.failed",
            extra={
                **context,
                "duration_ms": duration_ms,
                "error": str(e),
                "error_type": type(e).__name__,
            },
            exc_info=True,
        )
        raise

    duration_ms = int((time.time() - start) * 1000)
    logger.info(
        f"{operation}.completed",
        extra={**context, "duration_ms": duration_ms},
    )


def log_worker_health(
    logger: logging.Logger,
    worker_name: str,
    cycles_completed: int,
    errors_total: int,
    uptime_seconds: float,
    extra_stats: dict[str, Any] | None = None,
) -> None:
    """Log worker health status in consistent format.

    Args:
        logger: Logger instance
        worker_name: Worker identifier (e.g. "catalog_sync")
        cycles_completed: Total cycles completed since start
        errors_total: Total errors encountered since start
        uptime_seconds: Seconds since worker started
        extra_stats: Optional dict of additional stats to include in log
    """
    log_data = {
        "worker": worker_name,
        "cycles_completed": cycles_completed,
        "errors_total": errors_total,
        "uptime_seconds": int(uptime_seconds),
    }
    if extra_stats:
        log_data.update(extra_stats)

    logger.info("worker.health", extra=log_data)


# Yo, start_operation/end_operation are the manual twin of log_operation, for loops where a
# context manager gets in the way. Per-entity steps inside a pass log at DEBUG so a
# thousand-album library doesn't flood INFO; pass log_level=logging.DEBUG for those.
def start_operation(
    logger: logging.Logger,
    operation: str,
    operation_id: str | None = None,
    log_level: int = logging.INFO,
    **context: Any,
) -> tuple[float, str]:
    """Log operation start and return ``(start_time, operation_id)``."""
    if operation_id is None:
        operation_id = str(uuid.uuid4())

    start_time = time.time()
    logger.log(
        log_level,
        f"{operation}.started",
        extra={**context, "operation_id": operation_id},
    )
    return start_time, operation_id


def end_operation(
    logger: logging.Logger,
    operation: str,
    start_time: float,
    operation_id: str,
    success: bool = True,
    error: Exception | None = None,
    log_level: int = logging.INFO,
    **context: Any,
) -> None:
    """Log operation end with duration.

    Failures always log at ERROR, with traceback when ``error`` is given.
    """
    duration_ms = int((time.time() - start_time) * 1000)

    if success:
        logger.log(
            log_level,
            f"{operation}.completed",
            extra={
                **context,
                "operation_id": operation_id,
                "duration_ms": duration_ms,
            },
        )
    else:
        logger.error(
            f"{operation}.failed",
            extra={
                **context,
                "operation_id": operation_id,
                "duration_ms": duration_ms,
                "error": str(error) if error else "Unknown error",
                "error_type": type(error).__name__ if error else "Unknown",
            },
            exc_info=error is not None,
        )
