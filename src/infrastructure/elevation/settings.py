"""Configuration for wiring an ElevationEngine to real infrastructure."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .catalog import DEFAULT_BASE_URL, DEFAULT_MAX_DEPTH, DEFAULT_TIERS
from .http_transport import DEFAULT_TIMEOUT_S

DEFAULT_CACHE_DIR = Path.home() / ".hgt_elevation" / "cache"


class ElevationSettings(BaseModel):
    """Engine configuration (Value Object), validated at construction."""

    base_url: str = DEFAULT_BASE_URL  # Catalog host
    tiers: tuple[str, ...] = DEFAULT_TIERS  # Finest resolution first
    cache_dir: Path = DEFAULT_CACHE_DIR  # Where downloaded archives are kept
    timeout_s: float = Field(default=DEFAULT_TIMEOUT_S, gt=0)
    max_crawl_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1)

    model_config = ConfigDict(frozen=True)

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got {value!r}")
        return value.rstrip("/")

    @field_validator("tiers")
    @classmethod
    def validate_tiers(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("At least one resolution tier is required")
        return value
