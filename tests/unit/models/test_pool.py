"""Unit tests for pool and trend models."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from tests.factories import PoolMetricsFactory
from traxr.models.pool import (
    DimensionBreakdown,
    PoolMetrics,
    ScoredPool,
    ScoreResult,
    ValuationConfidence,
)

DIMENSIONS = DimensionBreakdown(
    depth=10.0, activity=20.0, impact=30.0, stability=40.0, trust=50.0, fee=60.0
)


@pytest.mark.unit
class TestPoolMetrics:
    """Normalized metrics model."""

    def test_frozen(self):
        metrics = PoolMetricsFactory()
        with pytest.raises(ValidationError):
            metrics.liquidity = 1.0

    def test_negative_trustlines_rejected(self):
        with pytest.raises(ValidationError):
            PoolMetrics(pool_id="p", trustline_count=-1)

    def test_defaults(self):
        metrics = PoolMetrics(pool_id="p")

        assert metrics.liquidity == 0.0
        assert metrics.valuation_confidence_level is ValuationConfidence.UNKNOWN
        assert metrics.total_value_locked is None


@pytest.mark.unit
class TestScoreResult:
    """Scorer output bounds."""

    @pytest.mark.parametrize("score", [-0.1, 100.1])
    def test_score_bounds(self, score):
        with pytest.raises(ValidationError):
            ScoreResult(score=score, dimensions=DIMENSIONS, tier_count=1)

    @pytest.mark.parametrize("tier_count", [0, 7])
    def test_tier_bounds(self, tier_count):
        with pytest.raises(ValidationError):
            ScoreResult(score=50.0, dimensions=DIMENSIONS, tier_count=tier_count)


@pytest.mark.unit
class TestScoredPool:
    """Served pool view."""

    def test_token_fields_come_from_metrics(self):
        metrics = PoolMetricsFactory(token_code="SOLO", token_name="Sologenic")
        pool = ScoredPool(
            pool_id=metrics.pool_id,
            score=42.0,
            tier_count=3,
            dimensions=DIMENSIONS,
            updated_at=datetime(2025, 1, 1, tzinfo=UTC),
            metrics=metrics,
        )

        assert pool.token_code == "SOLO"
        assert pool.token_name == "Sologenic"
        assert pool.token_issuer == metrics.token_issuer
        assert pool.warnings == ()

    def test_json_dump(self):
        metrics = PoolMetricsFactory(valuation_confidence_level=ValuationConfidence.REALISTIC)
        pool = ScoredPool(
            pool_id=metrics.pool_id,
            score=42.0,
            tier_count=3,
            dimensions=DIMENSIONS,
            warnings=("Very low liquidity",),
            updated_at=datetime(2025, 1, 1, tzinfo=UTC),
            metrics=metrics,
        )

        dumped = pool.model_dump(mode="json")

        assert dumped["updated_at"] == "2025-01-01T00:00:00Z"
        assert dumped["warnings"] == ["Very low liquidity"]
        assert dumped["metrics"]["valuation_confidence_level"] == "realistic"
