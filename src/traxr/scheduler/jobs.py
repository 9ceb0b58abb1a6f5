"""Scheduled jobs for TRAXR.

This module defines the jobs that run on a schedule:
- Pool cache refresh: re-reads the canonical pool file and rescores it

Usage:
    from traxr.scheduler.jobs import schedule_pool_refresh_job

    schedule_pool_refresh_job(cache, interval_minutes=5)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from apscheduler.triggers.interval import IntervalTrigger

from traxr.scheduler.scheduler import ensure_scheduler_running, get_scheduler

if TYPE_CHECKING:
    from traxr.services.pools.cache import PoolCache

log = structlog.get_logger(__name__)

JOB_ID_POOL_REFRESH = "pool_cache_refresh"


def refresh_pool_cache_job(cache: PoolCache) -> None:
    """Scheduled job to refresh the pool cache.

    Note:
        Handles all errors internally to prevent job crashes.
        A failed refresh keeps the previous cache in place.
    """
    try:
        refreshed = cache.refresh()
        log.info(
            "pool_refresh_job_completed",
            refreshed=refreshed,
            generation=cache.generation,
            pools=len(cache.list_pools()),
        )
    except Exception as e:
        log.error("pool_refresh_job_failed", error=str(e))


def schedule_pool_refresh_job(cache: PoolCache, interval_minutes: int) -> bool:
    """Schedule the periodic pool cache refresh and make sure it will fire.

    Args:
        cache: Pool cache to refresh.
        interval_minutes: Minutes between runs.

    Returns:
        True if the job was added, False if it was already scheduled.

    Raises:
        ValueError: If interval_minutes is not positive.
        SchedulerUnavailableError: If called outside a running event loop.
    """
    if interval_minutes < 1:
        raise ValueError(f"Invalid interval: {interval_minutes}. Must be >= 1 minute")

    scheduler = ensure_scheduler_running()

    if scheduler.get_job(JOB_ID_POOL_REFRESH):
        log.debug("pool_refresh_job_already_scheduled", job_id=JOB_ID_POOL_REFRESH)
        return False

    scheduler.add_job(
        refresh_pool_cache_job,
        trigger=IntervalTrigger(minutes=interval_minutes),
        args=[cache],
        id=JOB_ID_POOL_REFRESH,
        name="Pool Cache Refresh",
    )

    log.info(
        "pool_refresh_job_scheduled",
        job_id=JOB_ID_POOL_REFRESH,
        interval_minutes=interval_minutes,
        source=str(cache.settings.local_pools_path),
    )
    return True


def unschedule_pool_refresh_job() -> None:
    """Remove the pool refresh job from scheduler.

    Safe to call when job is not scheduled.
    """
    scheduler = get_scheduler()
    if scheduler.get_job(JOB_ID_POOL_REFRESH):
        scheduler.remove_job(JOB_ID_POOL_REFRESH)
        log.info("pool_refresh_job_unscheduled", job_id=JOB_ID_POOL_REFRESH)
