"""Metric series extracted from trend points."""

from collections.abc import Callable, Sequence
from enum import Enum

from traxr.models.trend import TrendPoint


class TrendMetric(str, Enum):
    """Metrics that can be charted over a pool's trend."""

    SCORE = "score"
    TIER_COUNT = "tier_count"
    DEPTH = "depth"
    ACTIVITY = "activity"
    IMPACT = "impact"
    STABILITY = "stability"
    TRUST = "trust"
    FEE = "fee"
    LIQUIDITY = "liquidity"
    VOLUME_24H = "volume_24h"
    FEE_FRACTION = "fee_fraction"
    TRUSTLINES = "trustlines"
    WARNINGS = "warnings"


def _liquidity(point: TrendPoint) -> float | None:
    # Reserve-derived TVL is preferred when the producer computed it
    tvl = point.metrics.total_value_locked
    return tvl if tvl is not None else point.metrics.liquidity


_EXTRACTORS: dict[TrendMetric, Callable[[TrendPoint], float | None]] = {
    TrendMetric.SCORE: lambda p: p.score,
    TrendMetric.TIER_COUNT: lambda p: float(p.tier_count),
    TrendMetric.DEPTH: lambda p: p.dimensions.depth,
    TrendMetric.ACTIVITY: lambda p: p.dimensions.activity,
    TrendMetric.IMPACT: lambda p: p.dimensions.impact,
    TrendMetric.STABILITY: lambda p: p.dimensions.stability,
    TrendMetric.TRUST: lambda p: p.dimensions.trust,
    TrendMetric.FEE: lambda p: p.dimensions.fee,
    TrendMetric.LIQUIDITY: _liquidity,
    TrendMetric.VOLUME_24H: lambda p: p.metrics.volume_24h,
    TrendMetric.FEE_FRACTION: lambda p: p.metrics.fee_fraction,
    TrendMetric.TRUSTLINES: lambda p: float(p.metrics.trustline_count),
    TrendMetric.WARNINGS: lambda p: float(len(p.warnings)),
}


def metric_series(
    points: Sequence[TrendPoint], metric: TrendMetric | str
) -> list[float | None]:
    """Values of one metric across trend points, None where unknown.

    Raises:
        ValueError: If metric is not a known TrendMetric.
    """
    extractor = _EXTRACTORS[TrendMetric(metric)]
    return [extractor(point) for point in points]


def rebase_series(values: Sequence[float | None]) -> list[float | None]:
    """Rescale so the first non-zero value reads 100."""
    base = next((v for v in values if v is not None and v != 0), None) or 1.0
    return [v / base * 100 if v is not None else None for v in values]
