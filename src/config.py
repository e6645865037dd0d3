"""
Chat Lambda Configuration
-------------------------
Process-wide settings resolved from the environment once per container and
passed into the request handler.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from errors import ConfigurationError


GEMINI_API_BASE_URL = "https://generativelanguage.googleapis.com"
GEMINI_API_VERSION = "v1"
GEMINI_MODEL = "gemini-2.5-flash"


def _env_float(name: str) -> Optional[float]:
    value = os.environ.get(name)
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number of seconds, got {value!r}")


@dataclass
class Settings:
    """Chat handler settings."""

    # Gemini
    gemini_api_key: Optional[str] = field(default_factory=lambda: os.environ.get("GEMINI_API_KEY"))
    gemini_model: str = field(default_factory=lambda: os.environ.get("GEMINI_MODEL", GEMINI_MODEL))
    gemini_api_version: str = field(
        default_factory=lambda: os.environ.get("GEMINI_API_VERSION", GEMINI_API_VERSION)
    )
    gemini_api_base_url: str = field(
        default_factory=lambda: os.environ.get("GEMINI_API_BASE_URL", GEMINI_API_BASE_URL)
    )
    # None means no explicit timeout
    gemini_timeout_seconds: Optional[float] = field(
        default_factory=lambda: _env_float("GEMINI_TIMEOUT_SECONDS")
    )

    # Datastore
    datastore_backend: str = field(
        default_factory=lambda: os.environ.get("DATASTORE_BACKEND", "supabase").lower()
    )
    supabase_url: str = field(default_factory=lambda: os.environ.get("SUPABASE_URL", ""))
    supabase_service_role_key: str = field(
        default_factory=lambda: os.environ.get("SUPABASE_SERVICE_ROLE_KEY", "")
    )
    parcels_table: str = field(default_factory=lambda: os.environ.get("PARCELS_TABLE", "parcels"))
    parcels_owner_column: str = field(
        default_factory=lambda: os.environ.get("PARCELS_OWNER_COLUMN", "user_id")
    )
    parcels_index: Optional[str] = field(default_factory=lambda: os.environ.get("PARCELS_INDEX") or None)
    aws_region: str = field(default_factory=lambda: os.environ.get("AWS_REGION", "ap-south-1"))

    @property
    def gemini_api_url(self) -> str:
        """generateContent URL for the configured model, without the key."""
        base = self.gemini_api_base_url.rstrip("/")
        return f"{base}/{self.gemini_api_version}/models/{self.gemini_model}:generateContent"


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the process-wide settings, reading the environment on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Forget cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
