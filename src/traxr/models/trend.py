"""Trend-related Pydantic models.

A trend is the ordered sequence of scored observations of one pool
across every discovered snapshot file.
"""

from collections.abc import Mapping
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from traxr.models.pool import DimensionBreakdown, PoolMetrics


class SnapshotFile(BaseModel):
    """A discovered snapshot file.

    Attributes:
        name: File name.
        path: Full path to the file.
        modified_at_ms: Modification time in epoch milliseconds.
        timestamp: Observation time, parsed from the name or taken from mtime.
        from_name: True when the timestamp was parsed from the name.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    path: Path
    modified_at_ms: float
    timestamp: datetime
    from_name: bool = True


class TrendPoint(BaseModel):
    """One historical observation of a pool."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    score: float = Field(ge=0.0, le=100.0)
    tier_count: int = Field(ge=1, le=6)
    dimensions: DimensionBreakdown
    warnings: tuple[str, ...] = ()
    metrics: PoolMetrics


class TrendIndex(BaseModel):
    """Per-pool series built from one generation of snapshot files.

    Attributes:
        signature: Fingerprint of the file set the index was built from.
        series: Pool id to points, ascending by timestamp.
        files_read: Number of snapshot files parsed for this index.
    """

    model_config = ConfigDict(frozen=True)

    signature: str
    series: Mapping[str, tuple[TrendPoint, ...]] = Field(default_factory=dict)
    files_read: int = 0
