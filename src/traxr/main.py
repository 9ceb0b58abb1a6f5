"""TRAXR - process entry point.

Wires settings, logging, the scoring collaborator, the pool cache and the
trend indexer, then keeps the background refresh running. The scorer is
resolved before anything else so a missing package fails at startup, not
at the first request.
"""

import asyncio
import contextlib

import structlog

from traxr.config import Settings, get_settings
from traxr.config.logging import configure_logging
from traxr.scheduler.jobs import unschedule_pool_refresh_job
from traxr.scheduler.scheduler import shutdown_scheduler
from traxr.services.pools.cache import PoolCache
from traxr.services.query import PoolQueryService
from traxr.services.scoring.scorer import Scorer, load_scorer
from traxr.services.trend.indexer import TrendIndexer

log = structlog.get_logger()


def create_query_service(
    settings: Settings | None = None,
    scorer: Scorer | None = None,
) -> PoolQueryService:
    """Build the query service and its collaborators.

    Args:
        settings: Settings to use (default: cached environment settings).
        scorer: Scorer to inject; loaded from ``settings.scorer`` if omitted.

    Raises:
        ScorerUnavailableError: If the configured scorer cannot be loaded.
    """
    settings = settings or get_settings()
    scorer = scorer or load_scorer(settings.scorer)

    cache = PoolCache(settings, scorer=scorer)
    indexer = TrendIndexer(
        settings.snapshot_dir,
        settings.snapshot_prefix,
        scorer=scorer,
    )
    log.info(
        "query_service_created",
        local_pools_path=str(settings.local_pools_path),
        snapshot_dir=str(settings.snapshot_dir),
        refresh_interval_minutes=settings.refresh_interval_minutes,
        fallback_sample=settings.fallback_sample,
    )
    return PoolQueryService(cache, indexer)


async def run(service: PoolQueryService) -> None:
    """Keep the pool cache refreshed until cancelled."""
    service.cache.refresh()
    service.cache.start_background_refresh()
    log.info("startup_complete", pools=len(service.cache.list_pools()))

    try:
        await asyncio.Event().wait()
    finally:
        unschedule_pool_refresh_job()
        await shutdown_scheduler()
        log.info("shutdown_complete")


def main() -> None:
    """Run TRAXR as a long-lived refresh process."""
    settings = get_settings()
    configure_logging(settings)
    service = create_query_service(settings)

    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(run(service))


if __name__ == "__main__":
    main()
