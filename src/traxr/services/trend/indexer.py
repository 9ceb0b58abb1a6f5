"""Per-pool trend index over historical snapshot files.

The index is rebuilt only when the snapshot directory's signature (file
names plus modification times) changes; otherwise the published index is
returned without touching any file contents.
"""

from collections.abc import Callable, Mapping
from pathlib import Path
from threading import Lock
from typing import Any

import structlog

from traxr.models.trend import SnapshotFile, TrendIndex, TrendPoint
from traxr.services.pools.loader import load_records
from traxr.services.pools.normalizer import normalize_pool
from traxr.services.scoring.scorer import Scorer, require_scorer, score_pool
from traxr.services.trend.snapshots import list_snapshot_files, snapshot_signature

log = structlog.get_logger(__name__)

RecordLoader = Callable[[Path], list[Any]]


class TrendIndexer:
    """Builds and memoizes per-pool trend series.

    Example:
        indexer = TrendIndexer(Path("data"), "xrplPools", scorer)
        points = indexer.get_trend("XRP_SOLO.rsoLo2S1kiGeCcn6hCUXVrCpGMWLrRrLZz")
    """

    def __init__(
        self,
        snapshot_dir: Path,
        prefix: str,
        scorer: Scorer,
        loader: RecordLoader = load_records,
    ) -> None:
        self.snapshot_dir = snapshot_dir
        self.prefix = prefix
        self.scorer = require_scorer(scorer)
        self._loader = loader
        self._index: TrendIndex | None = None
        self._build_lock = Lock()

    def list_snapshot_files(self) -> list[SnapshotFile]:
        return list_snapshot_files(self.snapshot_dir, self.prefix)

    def build_index(self) -> TrendIndex:
        """Return the trend index for the current file set.

        Returns:
            The published index if the file signature is unchanged,
            otherwise a freshly built one.
        """
        files = self.list_snapshot_files()
        signature = snapshot_signature(files)

        current = self._index
        if current is not None and current.signature == signature:
            return current

        with self._build_lock:
            # Another caller may have built this signature while we waited
            current = self._index
            if current is not None and current.signature == signature:
                return current

            index = self._build(files, signature)
            self._index = index

        log.info(
            "trend_index_built",
            files=len(files),
            files_read=index.files_read,
            pools=len(index.series),
        )
        return index

    def _build(self, files: list[SnapshotFile], signature: str) -> TrendIndex:
        series: dict[str, list[TrendPoint]] = {}
        files_read = 0

        for snapshot in files:
            try:
                records = self._loader(snapshot.path)
                points = [
                    self._point(raw, snapshot)
                    for raw in records
                    if isinstance(raw, Mapping)
                ]
            except Exception as e:
                log.warning(
                    "trend_snapshot_parse_failed", file=snapshot.name, error=str(e)
                )
                continue
            files_read += 1
            if len(points) < len(records):
                log.debug(
                    "trend_records_skipped",
                    file=snapshot.name,
                    skipped=len(records) - len(points),
                )

            for pool_id, point in points:
                series.setdefault(pool_id, []).append(point)

        # Stable: equal timestamps keep discovery (name) order
        return TrendIndex(
            signature=signature,
            series={
                pool_id: tuple(sorted(points, key=lambda p: p.timestamp))
                for pool_id, points in series.items()
            },
            files_read=files_read,
        )

    def _point(self, raw: Any, snapshot: SnapshotFile) -> tuple[str, TrendPoint]:
        metrics = normalize_pool(raw)
        result, warnings = score_pool(self.scorer, metrics)
        return metrics.pool_id, TrendPoint(
            timestamp=snapshot.timestamp,
            score=result.score,
            tier_count=result.tier_count,
            dimensions=result.dimensions,
            warnings=warnings,
            metrics=metrics,
        )

    def get_trend(self, pool_id: str) -> list[TrendPoint]:
        """Trend points of a pool, oldest first. Empty for unknown ids."""
        if not pool_id:
            return []
        return list(self.build_index().series.get(pool_id, ()))

    def pool_ids(self) -> list[str]:
        """Ids of every pool with at least one trend point."""
        return sorted(self.build_index().series)
