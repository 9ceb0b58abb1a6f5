"""Snapshot file discovery for trend reconstruction.

Snapshot files are named ``<prefix>_YYYYMMDD_HHMMSSZ.json``. Files that
carry the prefix but not the timestamp are still used, dated by their
modification time, which orders less reliably against named files.
"""

import re
from datetime import UTC, datetime
from pathlib import Path

import structlog

from traxr.constants.snapshots import (
    SIGNATURE_SEPARATOR,
    SNAPSHOT_EXTENSION,
    SNAPSHOT_TIMESTAMP_FORMAT,
    SNAPSHOT_TIMESTAMP_PATTERN,
)
from traxr.models.trend import SnapshotFile

log = structlog.get_logger(__name__)


def parse_snapshot_timestamp(name: str, prefix: str) -> datetime | None:
    """Parse the UTC timestamp embedded in a snapshot file name.

    Example:
        parse_snapshot_timestamp("xrplPools_20250101_000000Z.json", "xrplPools")
        # datetime(2025, 1, 1, tzinfo=UTC)
    """
    pattern = re.compile(
        rf"^{re.escape(prefix)}{SNAPSHOT_TIMESTAMP_PATTERN}", re.IGNORECASE
    )
    match = pattern.match(name)
    if not match:
        return None
    try:
        parsed = datetime.strptime(
            match.group(1) + match.group(2), SNAPSHOT_TIMESTAMP_FORMAT
        )
    except ValueError:
        # e.g. 20251399_250000Z
        return None
    return parsed.replace(tzinfo=UTC)


def is_snapshot_name(name: str, prefix: str) -> bool:
    """True for ``<prefix>_*.json`` (case-insensitive)."""
    lowered = name.lower()
    return lowered.startswith(f"{prefix.lower()}_") and lowered.endswith(
        SNAPSHOT_EXTENSION
    )


def list_snapshot_files(directory: Path, prefix: str) -> list[SnapshotFile]:
    """Discover snapshot files, oldest first.

    Args:
        directory: Snapshot directory.
        prefix: Snapshot filename prefix.

    Returns:
        Snapshot files sorted by (timestamp, name). Empty when the
        directory is missing or unreadable.
    """
    try:
        entries = [
            entry
            for entry in directory.iterdir()
            if entry.is_file() and is_snapshot_name(entry.name, prefix)
        ]
    except OSError as e:
        log.info("snapshot_dir_unavailable", directory=str(directory), error=str(e))
        return []

    files: list[SnapshotFile] = []
    for entry in entries:
        try:
            modified_at_ms = entry.stat().st_mtime_ns / 1_000_000
        except OSError as e:
            # Removed between listing and stat
            log.warning("snapshot_stat_failed", path=str(entry), error=str(e))
            continue

        timestamp = parse_snapshot_timestamp(entry.name, prefix)
        files.append(
            SnapshotFile(
                name=entry.name,
                path=entry,
                modified_at_ms=modified_at_ms,
                timestamp=timestamp
                or datetime.fromtimestamp(modified_at_ms / 1000, tz=UTC),
                from_name=timestamp is not None,
            )
        )

    files.sort(key=lambda f: (f.timestamp, f.name))
    return files


def snapshot_signature(files: list[SnapshotFile]) -> str:
    """Fingerprint of a file set: name and mtime of every file."""
    return SIGNATURE_SEPARATOR.join(f"{f.name}:{f.modified_at_ms}" for f in files)
