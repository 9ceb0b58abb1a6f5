"""Read-only query surface over the pool cache and trend index.

This is what an HTTP layer wraps. Every method returns data or an
empty/absent result; "not found" is never an exception.
"""

import structlog

from traxr.models.pool import IssuerSummary, PoolAlert, ScoredPool
from traxr.models.trend import TrendPoint
from traxr.services.pools.cache import PoolCache
from traxr.services.trend.indexer import TrendIndexer
from traxr.services.trend.metrics import TrendMetric, metric_series, rebase_series

log = structlog.get_logger(__name__)


class PoolQueryService:
    """Pair lookup, listings, issuer and alert views, and trends."""

    def __init__(self, cache: PoolCache, indexer: TrendIndexer) -> None:
        self.cache = cache
        self.indexer = indexer

    def get_by_pair(self, asset_a: str, asset_b: str) -> ScoredPool | None:
        """Exact pair-key lookup, then fuzzy token match."""
        self.cache.ensure_fresh()

        exact = self.cache.get_exact(asset_a, asset_b)
        if exact is not None:
            return exact

        fuzzy = self.cache.get_fuzzy(asset_a, asset_b)
        if fuzzy is None:
            log.debug("pool_pair_not_found", asset_a=asset_a, asset_b=asset_b)
        return fuzzy

    def list_all(self) -> list[ScoredPool]:
        self.cache.ensure_fresh()
        return self.cache.list_pools()

    def get_pool(self, pool_id: str) -> ScoredPool | None:
        self.cache.ensure_fresh()
        return self.cache.get_by_pool_id(pool_id)

    def get_trend(self, pool_id: str) -> list[TrendPoint]:
        return self.indexer.get_trend(pool_id)

    def trend_series(
        self,
        pool_id: str,
        metric: TrendMetric | str,
        rebase: bool = False,
    ) -> list[float | None]:
        """One metric over a pool's trend, optionally rebased to 100.

        Raises:
            ValueError: If metric is not a known TrendMetric.
        """
        values = metric_series(self.get_trend(pool_id), metric)
        return rebase_series(values) if rebase else values

    def issuer_summary(self, issuer: str) -> IssuerSummary | None:
        """Aggregate every cached pool of a token issuer.

        Args:
            issuer: Issuer account, matched case-insensitively.

        Returns:
            IssuerSummary, or None when the issuer has no cached pools.
        """
        wanted = issuer.strip().lower()
        if not wanted:
            return None

        pools = [
            pool
            for pool in self.list_all()
            if (pool.token_issuer or "").lower() == wanted
        ]
        if not pools:
            return None

        return IssuerSummary(
            issuer=wanted,
            pool_count=len(pools),
            average_score=sum(p.score for p in pools) / len(pools),
            total_liquidity=sum(p.metrics.liquidity for p in pools),
            total_volume_24h=sum(p.metrics.volume_24h for p in pools),
            total_volume_7d=sum(p.metrics.volume_7d or 0.0 for p in pools),
            pools=tuple(pools),
        )

    def alerts(self) -> list[PoolAlert]:
        """Pools carrying at least one warning, in score order."""
        return [
            PoolAlert(
                pool_id=pool.pool_id,
                score=pool.score,
                tier_count=pool.tier_count,
                warnings=pool.warnings,
                token_name=pool.token_name,
                token_code=pool.token_code,
                token_issuer=pool.token_issuer,
                updated_at=pool.updated_at,
            )
            for pool in self.list_all()
            if pool.warnings
        ]
