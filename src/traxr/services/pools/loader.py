"""Snapshot file loading."""

import json
from pathlib import Path
from typing import Any

import structlog

from traxr.core.exceptions import SnapshotReadError

log = structlog.get_logger(__name__)


def load_records(path: Path) -> list[Any]:
    """Read the JSON record list of a snapshot file.

    Args:
        path: Snapshot file path.

    Returns:
        The records, or an empty list when the file does not exist.

    Raises:
        SnapshotReadError: If the file cannot be read, is not valid JSON,
            or does not hold a JSON array.
    """
    if not path.exists():
        log.debug("snapshot_file_missing", path=str(path))
        return []

    try:
        with path.open(encoding="utf-8") as handle:
            data = json.load(handle)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise SnapshotReadError(path, f"unreadable snapshot: {e}") from e

    if not isinstance(data, list):
        raise SnapshotReadError(
            path, f"expected a JSON array, got {type(data).__name__}"
        )

    log.debug("snapshot_file_loaded", path=str(path), records=len(data))
    return data
