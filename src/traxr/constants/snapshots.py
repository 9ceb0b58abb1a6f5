"""Snapshot file discovery constants."""

from typing import Final

DEFAULT_SNAPSHOT_PREFIX: Final[str] = "xrplPools"
SNAPSHOT_EXTENSION: Final[str] = ".json"

# <prefix>_YYYYMMDD_HHMMSSZ.json
SNAPSHOT_TIMESTAMP_PATTERN: Final[str] = r"_(\d{8})_(\d{6})Z\.json$"
SNAPSHOT_TIMESTAMP_FORMAT: Final[str] = "%Y%m%d%H%M%S"

# Joins "<name>:<mtime_ms>" entries in a directory signature
SIGNATURE_SEPARATOR: Final[str] = "|"
