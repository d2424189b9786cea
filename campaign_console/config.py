"""Configuration for the campaign console."""

from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings


class ConsoleSettings(BaseSettings):
    """Settings for the campaign console.

    Values are read from ``CAMPAIGN_CONSOLE_*`` environment variables
    or a local ``.env`` file.
    """

    # Remote API
    api_base_url: str = "http://localhost:3000"
    campaigns_endpoint: str = "/api/campaigns"
    request_timeout: float = 10.0

    # Cache
    cache_max_entries: Optional[int] = 50

    # Presentation
    locale: str = "en"
    viewport_width: int = 1280
    mobile_breakpoint: str = "sm"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    model_config = {
        "env_prefix": "CAMPAIGN_CONSOLE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @field_validator("campaigns_endpoint")
    @classmethod
    def normalize_endpoint(cls, value: str) -> str:
        """Endpoint is always absolute and has no trailing slash."""
        value = "/" + value.strip("/")
        return value

    @field_validator("log_level")
    @classmethod
    def normalize_level(cls, value: str) -> str:
        return value.upper()


@lru_cache
def get_settings() -> ConsoleSettings:
    """Get cached console settings instance."""
    return ConsoleSettings()
