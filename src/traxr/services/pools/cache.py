"""In-memory cache of the current scored pool set.

The cache is refreshed from the canonical pool-list file, either on a
schedule or inline when a read finds it cold or stale. A refresh builds a
complete new snapshot privately and publishes it with a single reference
assignment, so readers see either the old or the new generation in full.
"""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from pathlib import Path
from threading import Lock
from typing import Any

import structlog

from traxr.config.settings import Settings
from traxr.constants.sample_pools import SAMPLE_POOLS
from traxr.models.pool import PoolMetrics, ScoredPool
from traxr.scheduler.jobs import schedule_pool_refresh_job
from traxr.services.pools.loader import load_records
from traxr.services.pools.matching import matches_pool_tokens, pair_key
from traxr.services.pools.normalizer import normalize_pool
from traxr.services.scoring.scorer import Scorer, require_scorer, score_pool

log = structlog.get_logger(__name__)

Clock = Callable[[], datetime]
RecordLoader = Callable[[Path], list[Any]]


def utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class _CacheSnapshot:
    """One published generation of the cache."""

    generation: int = 0
    by_pair: dict[str, ScoredPool] = field(default_factory=dict)
    by_pool_id: dict[str, ScoredPool] = field(default_factory=dict)
    pools: tuple[ScoredPool, ...] = ()
    refreshed_at: datetime | None = None


def _parse_updated_at(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


def build_scored_pool(
    metrics: PoolMetrics, scorer: Scorer, refreshed_at: datetime
) -> ScoredPool:
    """Score normalized metrics into the cached pool shape."""
    result, warnings = score_pool(scorer, metrics)
    return ScoredPool(
        pool_id=metrics.pool_id,
        score=result.score,
        tier_count=result.tier_count,
        dimensions=result.dimensions,
        warnings=warnings,
        updated_at=_parse_updated_at(metrics.updated_at) or refreshed_at,
        metrics=metrics,
    )


class PoolCache:
    """Current scored view of every pool in the canonical snapshot.

    Single writer (refresh, serialized by a lock), many lock-free readers.

    Example:
        cache = PoolCache(settings, scorer=load_scorer(settings.scorer))
        cache.ensure_fresh()
        pool = cache.get_exact("XRP", "SOLO.rsoLo2S1kiGeCcn6hCUXVrCpGMWLrRrLZz")
    """

    def __init__(
        self,
        settings: Settings,
        scorer: Scorer,
        loader: RecordLoader = load_records,
        clock: Clock = utc_now,
    ) -> None:
        """Initialize pool cache.

        Args:
            settings: Source paths, refresh interval and fallback flag.
            scorer: Scoring collaborator (required).
            loader: Reads a snapshot file into raw records.
            clock: Returns the current aware datetime.

        Raises:
            ScorerUnavailableError: If no usable scorer is supplied.
        """
        self.settings = settings
        self.scorer = require_scorer(scorer)
        self._loader = loader
        self._clock = clock
        self._snapshot = _CacheSnapshot()
        self._refresh_lock = Lock()
        self._last_attempt_at: datetime | None = None
        self._background_started = False

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def last_refresh_at(self) -> datetime | None:
        """Time of the last successful refresh, None if never refreshed."""
        return self._snapshot.refreshed_at

    @property
    def last_attempt_at(self) -> datetime | None:
        """Time of the last refresh attempt, successful or not."""
        return self._last_attempt_at

    @property
    def generation(self) -> int:
        """Number of successful refreshes published so far."""
        return self._snapshot.generation

    @property
    def staleness_threshold(self) -> timedelta:
        return self.settings.staleness_threshold

    def is_stale(self) -> bool:
        """True if never refreshed or older than the staleness threshold."""
        refreshed_at = self._snapshot.refreshed_at
        if refreshed_at is None:
            return True
        return self._clock() - refreshed_at > self.staleness_threshold

    # ------------------------------------------------------------------
    # Refresh
    # ------------------------------------------------------------------

    def ensure_fresh(self) -> None:
        """Refresh inline if the cache is cold or stale.

        Refresh failures are logged by refresh() and never raised here;
        the previous snapshot stays in place.
        """
        if self.is_stale():
            self._refresh(only_if_stale=True)

    def refresh(self) -> bool:
        """Rebuild the cache from the canonical pool file.

        Returns:
            True if a new snapshot was published, False if the refresh
            failed and the previous snapshot was kept.
        """
        return self._refresh(only_if_stale=False)

    def _refresh(self, only_if_stale: bool) -> bool:
        with self._refresh_lock:
            # A refresh that held the lock while we waited may have covered us
            if only_if_stale and not self.is_stale():
                log.debug("pool_cache_refresh_skipped", generation=self.generation)
                return False

            started_at = self._clock()
            self._last_attempt_at = started_at
            try:
                records = self._load_source_records()
                snapshot = self._build_snapshot(records, started_at)
            except Exception as e:
                log.error(
                    "pool_cache_refresh_failed",
                    path=str(self.settings.local_pools_path),
                    error=str(e),
                    generation=self._snapshot.generation,
                )
                return False

            self._snapshot = snapshot
            log.info(
                "pool_cache_refreshed",
                pools=len(snapshot.pools),
                generation=snapshot.generation,
            )
            return True

    def _load_source_records(self) -> list[Any]:
        path = self.settings.local_pools_path
        records = self._loader(path)
        if records:
            log.debug("pool_records_loaded", path=str(path), records=len(records))
            return records

        if self.settings.fallback_sample:
            log.warning("pool_cache_using_sample_fallback", samples=len(SAMPLE_POOLS))
            return list(SAMPLE_POOLS)

        log.info("pool_cache_no_source_data", path=str(path))
        return []

    def _build_snapshot(
        self, records: Iterable[Any], refreshed_at: datetime
    ) -> _CacheSnapshot:
        by_pair: dict[str, ScoredPool] = {}
        by_pool_id: dict[str, ScoredPool] = {}
        pools: list[ScoredPool] = []

        for raw in records:
            if not isinstance(raw, Mapping):
                log.debug("pool_record_skipped", record_type=type(raw).__name__)
                continue
            metrics = normalize_pool(raw)
            item = build_scored_pool(metrics, self.scorer, refreshed_at)
            by_pair[pair_key(metrics.mint_a, metrics.mint_b)] = item
            by_pool_id[metrics.pool_id] = item
            pools.append(item)

        # Stable sort: equal scores keep file order
        pools.sort(key=lambda p: p.score, reverse=True)
        if self.settings.max_pools is not None:
            pools = pools[: self.settings.max_pools]
            kept = {id(p) for p in pools}
            by_pair = {k: v for k, v in by_pair.items() if id(v) in kept}
            by_pool_id = {k: v for k, v in by_pool_id.items() if id(v) in kept}

        return _CacheSnapshot(
            generation=self._snapshot.generation + 1,
            by_pair=by_pair,
            by_pool_id=by_pool_id,
            pools=tuple(pools),
            refreshed_at=refreshed_at,
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_exact(self, asset_a: str, asset_b: str) -> ScoredPool | None:
        """Look up a pool by its order-independent pair key."""
        return self._snapshot.by_pair.get(pair_key(asset_a, asset_b))

    def get_fuzzy(self, token_a: str, token_b: str) -> ScoredPool | None:
        """First pool, in score order, that both tokens name.

        Tokens match full asset identifiers, bare currency codes, or the
        token code/name metadata, case-insensitively.
        """
        for pool in self._snapshot.pools:
            if matches_pool_tokens(pool.metrics, token_a, token_b):
                return pool
        return None

    def get_by_pool_id(self, pool_id: str) -> ScoredPool | None:
        return self._snapshot.by_pool_id.get(pool_id)

    def list_pools(self) -> list[ScoredPool]:
        """All cached pools, score-descending."""
        return list(self._snapshot.pools)

    # ------------------------------------------------------------------
    # Background refresh
    # ------------------------------------------------------------------

    def start_background_refresh(self, interval_minutes: int | None = None) -> bool:
        """Refresh periodically on the process scheduler, starting it if needed.

        Must be called from the host's running asyncio loop, which then
        drives the refresh job.

        Args:
            interval_minutes: Override of the configured refresh interval.

        Returns:
            True if scheduled by this call, False if already running.

        Raises:
            SchedulerUnavailableError: If no asyncio loop is running.
        """
        if self._background_started:
            log.debug("pool_background_refresh_already_started")
            return False

        interval = interval_minutes or self.settings.refresh_interval_minutes
        scheduled = schedule_pool_refresh_job(self, interval_minutes=interval)
        self._background_started = True
        return scheduled
