"""Application settings using pydantic-settings."""

from datetime import timedelta
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from traxr.constants.pools import (
    DEFAULT_REFRESH_INTERVAL_MINUTES,
    STALENESS_MULTIPLIER,
)
from traxr.constants.snapshots import DEFAULT_SNAPSHOT_PREFIX


class Settings(BaseSettings):
    """TRAXR configuration from environment variables (``TRAXR_`` prefix)."""

    model_config = SettingsConfigDict(
        env_prefix="TRAXR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
    )

    # Application
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Minimum log level"
    )

    # Snapshot sources
    local_pools_path: Path = Field(
        default=Path("data") / "xrplPools.json",
        description="Canonical pool-list file read by the pool cache",
    )
    snapshot_dir: Path = Field(
        default=Path("data"),
        description="Directory holding timestamped snapshot files",
    )
    snapshot_prefix: str = Field(
        default=DEFAULT_SNAPSHOT_PREFIX,
        min_length=1,
        description="Filename prefix of timestamped snapshots",
    )
    fallback_sample: bool = Field(
        default=False,
        description="Serve the bundled sample pools when no snapshot exists",
    )
    max_pools: int | None = Field(
        default=None, ge=1, description="Optional cap on cached pools"
    )

    # Refresh
    refresh_interval_minutes: int = Field(
        default=DEFAULT_REFRESH_INTERVAL_MINUTES,
        ge=1,
        le=1440,
        description="Minutes between cache refreshes",
    )

    # Scoring collaborator
    scorer: str = Field(
        default="traxr_cts_xrpl",
        description="Import path of the scorer ('module' or 'module:attribute')",
    )

    @field_validator("snapshot_prefix")
    @classmethod
    def validate_snapshot_prefix(cls, v: str) -> str:
        """Snapshot prefix is a bare filename stem."""
        if "/" in v or "\\" in v:
            raise ValueError("Snapshot prefix must not contain path separators")
        return v

    @field_validator("scorer")
    @classmethod
    def validate_scorer(cls, v: str) -> str:
        """Validate scorer import path format."""
        module, _, attribute = v.strip().partition(":")
        if not module or (":" in v and not attribute):
            raise ValueError("Scorer must be 'module' or 'module:attribute'")
        return v.strip()

    @property
    def refresh_interval(self) -> timedelta:
        """Refresh period as a timedelta."""
        return timedelta(minutes=self.refresh_interval_minutes)

    @property
    def staleness_threshold(self) -> timedelta:
        """Maximum cache age tolerated before a read forces a refresh."""
        return self.refresh_interval * STALENESS_MULTIPLIER


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
