"""Pool-related Pydantic models.

This module defines the strict internal schema for XRPL AMM pools:
normalized metrics, the scorer's output, and the scored pool served by
the cache. All models are frozen; a refresh builds new instances rather
than mutating published ones.
"""

from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Un-normalized producer record. Only the normalizer reads this shape.
RawRecord = Mapping[str, Any]


class ValuationConfidence(str, Enum):
    """Confidence of the pool TVL calculation.

    realistic = XRP side and IOU side both priced
    partial = XRP side only
    unknown = no reliable data
    """

    REALISTIC = "realistic"
    PARTIAL = "partial"
    UNKNOWN = "unknown"


class PoolMetrics(BaseModel):
    """Normalized metrics for one XRPL AMM pool.

    Liquidity and volume figures are XRPL-native (XRP units).

    Attributes:
        pool_id: Stable key, identical across snapshots for the same pool.
        mint_a: First asset identifier ("XRP" or "CODE.ISSUER").
        mint_b: Second asset identifier.
        amm_account: AMM ledger account (pool identity, not the issuer).
        token_name: Display name of the non-XRP token.
        token_code: Currency code of the non-XRP token.
        token_issuer: Issuer account of the non-XRP token.
        updated_at: Producer-reported update time, as received.
        liquidity: Pool liquidity.
        volume_24h: 24h volume.
        volume_7d: 7d volume, None when unknown.
        tx_count_24h: 24h transaction count.
        tx_count_7d: 7d transaction count, None when unknown.
        fee_fraction: Trading fee as a 0-1 fraction.
        volatility: Volatility percentage.
        price_impact: Price impact percentage.
        data_age_hours: Age of the producer data in hours.
        trustline_count: Issuer trustline count.
        is_blacklisted: Token is blacklisted.
        is_blackholed: Issuer is blackholed.
        freeze_enabled: Issuer can freeze trustlines.
        total_value_locked: Pool TVL computed from reserves.
        valuation_confidence_level: Confidence of the TVL calculation.
        price_confident: Token price is considered reliable.
    """

    model_config = ConfigDict(frozen=True)

    # Identity
    pool_id: str
    mint_a: str = ""
    mint_b: str = ""
    amm_account: str | None = None

    # Token metadata
    token_name: str | None = None
    token_code: str | None = None
    token_issuer: str | None = None
    updated_at: str | None = None

    # Economics
    liquidity: float = 0.0
    volume_24h: float = 0.0
    volume_7d: float | None = None
    tx_count_24h: int = 0
    tx_count_7d: int | None = None
    fee_fraction: float | None = None
    volatility: float | None = None
    price_impact: float | None = None
    data_age_hours: float = 0.0

    # Trust
    trustline_count: int = Field(default=0, ge=0)
    is_blacklisted: bool = False
    is_blackholed: bool = False
    freeze_enabled: bool = False

    # XRPL-native truth
    total_value_locked: float | None = None
    valuation_confidence_level: ValuationConfidence = ValuationConfidence.UNKNOWN
    price_confident: bool = False


class DimensionBreakdown(BaseModel):
    """Six-dimension 0-100 decomposition of a pool score."""

    model_config = ConfigDict(frozen=True)

    depth: float = Field(ge=0.0, le=100.0)
    activity: float = Field(ge=0.0, le=100.0)
    impact: float = Field(ge=0.0, le=100.0)
    stability: float = Field(ge=0.0, le=100.0)
    trust: float = Field(ge=0.0, le=100.0)
    fee: float = Field(ge=0.0, le=100.0)


class ScoreResult(BaseModel):
    """Output of the scoring collaborator for one pool."""

    model_config = ConfigDict(frozen=True)

    score: float = Field(ge=0.0, le=100.0)
    dimensions: DimensionBreakdown
    tier_count: int = Field(ge=1, le=6)


class ScoredPool(BaseModel):
    """A pool as served by the cache: normalized metrics plus score."""

    model_config = ConfigDict(frozen=True)

    pool_id: str
    score: float = Field(ge=0.0, le=100.0)
    tier_count: int = Field(ge=1, le=6)
    dimensions: DimensionBreakdown
    warnings: tuple[str, ...] = ()
    updated_at: datetime
    metrics: PoolMetrics

    @property
    def token_name(self) -> str | None:
        return self.metrics.token_name

    @property
    def token_code(self) -> str | None:
        return self.metrics.token_code

    @property
    def token_issuer(self) -> str | None:
        return self.metrics.token_issuer


class IssuerSummary(BaseModel):
    """Aggregate view of every cached pool of one token issuer.

    Attributes:
        issuer: Issuer account, lower-cased as queried.
        pool_count: Number of pools for this issuer.
        average_score: Mean pool score.
        total_liquidity: Sum of pool liquidity.
        total_volume_24h: Sum of 24h volume.
        total_volume_7d: Sum of 7d volume (unknown counts as 0).
        pools: The issuer's pools, score-descending.
    """

    model_config = ConfigDict(frozen=True)

    issuer: str
    pool_count: int = Field(ge=0)
    average_score: float = 0.0
    total_liquidity: float = 0.0
    total_volume_24h: float = 0.0
    total_volume_7d: float = 0.0
    pools: tuple[ScoredPool, ...] = ()


class PoolAlert(BaseModel):
    """Warning digest for a pool with at least one warning."""

    model_config = ConfigDict(frozen=True)

    pool_id: str
    score: float
    tier_count: int
    warnings: tuple[str, ...]
    token_name: str | None = None
    token_code: str | None = None
    token_issuer: str | None = None
    updated_at: datetime
