"""TRAXR data models."""

from traxr.models.pool import (
    DimensionBreakdown,
    IssuerSummary,
    PoolAlert,
    PoolMetrics,
    RawRecord,
    ScoredPool,
    ScoreResult,
    ValuationConfidence,
)
from traxr.models.trend import SnapshotFile, TrendIndex, TrendPoint

__all__ = [
    "DimensionBreakdown",
    "IssuerSummary",
    "PoolAlert",
    "PoolMetrics",
    "RawRecord",
    "ScoreResult",
    "ScoredPool",
    "SnapshotFile",
    "TrendIndex",
    "TrendPoint",
    "ValuationConfidence",
]
