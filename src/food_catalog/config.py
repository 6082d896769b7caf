"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from food_catalog.domain.errors import ValidationError
from food_catalog.domain.foods import ImportPolicy

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    fdc_api_key: str
    fdc_base_url: str = "https://api.nal.usda.gov/fdc/v1"
    fdc_page_size: int = 50
    fdc_timeout_seconds: float = 15
    local_first_n: int = 20
    search_cache_ttl_seconds: int = 3600
    import_policy: str = ImportPolicy.ALLOW_DUPLICATES.value
    debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_import_policy(raw: str | None) -> ImportPolicy:
    """Parse the import duplicate policy from env."""
    if raw is None:
        return ImportPolicy.ALLOW_DUPLICATES
    cleaned = raw.strip().lower().replace("-", "_")
    if not cleaned:
        return ImportPolicy.ALLOW_DUPLICATES
    try:
        return ImportPolicy(cleaned)
    except ValueError as exc:
        raise ValidationError(f"Unknown import policy: {raw!r}") from exc
