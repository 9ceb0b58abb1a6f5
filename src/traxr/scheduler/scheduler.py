"""Process-wide refresh scheduler for TRAXR.

One AsyncIOScheduler per process hosts every periodic refresh. It is bound
to the asyncio loop that first asks for scheduling; sync jobs such as the
pool cache refresh are handed to that loop's default thread pool by
APScheduler's AsyncIOExecutor, so snapshot reads never block the loop.

Usage:
    from traxr.scheduler.scheduler import ensure_scheduler_running

    # Inside a running event loop
    scheduler = ensure_scheduler_running()

    # On shutdown
    await shutdown_scheduler()
"""

import asyncio

import structlog
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from traxr.core.exceptions import SchedulerUnavailableError

log = structlog.get_logger(__name__)

# A late refresh is still worth running once; stacked runs are not
_JOB_DEFAULTS = {"coalesce": True, "max_instances": 1, "misfire_grace_time": None}

_scheduler: AsyncIOScheduler | None = None


def get_scheduler() -> AsyncIOScheduler:
    """Return the scheduler singleton, created on first use but not started."""
    global _scheduler
    if _scheduler is None:
        _scheduler = AsyncIOScheduler(timezone="UTC", job_defaults=_JOB_DEFAULTS)
        log.debug("refresh_scheduler_created")
    return _scheduler


def ensure_scheduler_running() -> AsyncIOScheduler:
    """Start the scheduler on the current event loop unless already running.

    Returns:
        The running scheduler.

    Raises:
        SchedulerUnavailableError: If no asyncio loop is running in this thread.
    """
    scheduler = get_scheduler()
    if scheduler.running:
        return scheduler

    try:
        asyncio.get_running_loop()
    except RuntimeError as e:
        raise SchedulerUnavailableError(
            "Background refresh needs a running asyncio event loop"
        ) from e

    scheduler.start()
    log.info("refresh_scheduler_started", jobs=len(scheduler.get_jobs()))
    return scheduler


async def shutdown_scheduler() -> None:
    """Stop the scheduler and drop the singleton.

    Safe to call when the scheduler was never started.
    """
    global _scheduler
    scheduler, _scheduler = _scheduler, None
    if scheduler is None or not scheduler.running:
        return

    # AsyncIOScheduler defers the actual shutdown to the loop
    scheduler.shutdown(wait=False)
    await asyncio.sleep(0)
    log.info("refresh_scheduler_stopped")
