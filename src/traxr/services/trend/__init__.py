"""Trend reconstruction over historical snapshots."""

from traxr.services.trend.indexer import TrendIndexer
from traxr.services.trend.metrics import TrendMetric, metric_series, rebase_series
from traxr.services.trend.snapshots import list_snapshot_files, snapshot_signature

__all__ = [
    "TrendIndexer",
    "TrendMetric",
    "list_snapshot_files",
    "metric_series",
    "rebase_series",
    "snapshot_signature",
]
