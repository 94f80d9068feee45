"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from guaranteed_analysis.adapters.openpetfoodfacts_client import (
    DEFAULT_BASE_URL,
    DEFAULT_USER_AGENT,
)
from guaranteed_analysis.domain.validation import ValidationRanges

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    openpetfoodfacts_base_url: str = DEFAULT_BASE_URL
    openpetfoodfacts_user_agent: str = DEFAULT_USER_AGENT
    product_cache_ttl_seconds: int = 3600
    validation_ranges_path: str | None = None
    debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def load_validation_ranges(path: str | Path | None) -> ValidationRanges:
    """Load plausibility ranges from a JSON file, or the built-in defaults."""
    if path is None:
        return ValidationRanges()
    return ValidationRanges.model_validate_json(Path(path).read_text(encoding="utf-8"))
