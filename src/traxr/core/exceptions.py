"""TRAXR exception hierarchy.

This module defines the base exception class and the specialized
exceptions raised by the pool core. Only configuration errors are fatal;
snapshot read errors are caught by the cache and the trend indexer and
degrade to "no data".
"""

from pathlib import Path


class TraxrError(Exception):
    """Base exception for all TRAXR errors.

    All custom exceptions in TRAXR should inherit from this class
    to enable consistent error handling and logging.
    """

    pass


class ConfigurationError(TraxrError):
    """Raised when configuration is invalid or missing.

    Example:
        raise ConfigurationError("Invalid snapshot directory: /nope")
    """

    pass


class ScorerUnavailableError(ConfigurationError):
    """Raised when the scoring collaborator cannot be located or initialized.

    There is no built-in fallback scoring, so this halts startup.

    Attributes:
        scorer_path: The configured import path that failed.

    Example:
        raise ScorerUnavailableError("traxr_cts_xrpl", "module not installed")
    """

    def __init__(self, scorer_path: str, reason: str) -> None:
        self.scorer_path = scorer_path
        super().__init__(f"Scorer '{scorer_path}' unavailable: {reason}")


class SnapshotReadError(TraxrError):
    """Raised when a snapshot file exists but cannot be read or parsed.

    Attributes:
        path: Path of the offending snapshot file.

    Example:
        raise SnapshotReadError(Path("data/xrplPools.json"), "invalid JSON")
    """

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"{path}: {message}")


class SchedulerUnavailableError(ConfigurationError):
    """Raised when background refresh is requested outside an event loop.

    The refresh scheduler runs on the host's asyncio loop; synchronous hosts
    must call ``PoolCache.ensure_fresh()`` or ``refresh()`` themselves.
    """

    pass
