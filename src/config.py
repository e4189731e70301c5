from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings validated via Pydantic.

    Values are loaded from environment variables and/or a .env file.
    """

    # Upstream lifelog API
    limitless_api_key: str = ""  # Optional default; requests normally send their own key
    limitless_base_url: str = "https://api.limitless.ai/v1"
    page_limit: int = 10
    max_entries: int = 1000
    page_delay_seconds: float = 1.0
    request_timeout_seconds: float = 30.0
    default_timezone: str = "UTC"

    # App config
    api_host: str = "0.0.0.0"
    api_port: int = 3002
    log_level: str = "INFO"

    # Token budgeting
    tokenizer_model: str = "gpt-4"  # Empty string selects the ~4 chars/token estimate
    default_max_tokens: int = 8000
    consolidated_max_tokens: int = 120000

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Gracefully handles missing .env files (e.g. in CI/testing) by falling
    back to environment variables and defaults.
    """
    try:
        return Settings()
    except Exception:
        # If .env is missing or unreadable, build settings from env vars only.
        return Settings(_env_file=None)  # type: ignore[call-arg]


settings = get_settings()
