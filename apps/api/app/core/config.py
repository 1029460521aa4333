"""Application configuration."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    api_prefix: str = "/api"

    api_key: str = "ei_demo_8x92m3c7-4j5k-2h1g-9s8d-7f6g5h4j3k2l"
    basic_username: str = "einvoice_demo"
    basic_password: str = "Gst@Demo2024"
    bearer_token: str = "ei_bearer_5f1c9e2a-7d4b-4a3c-9e8f-1b2c3d4e5f60"
    read_only_token: str = "read-only-token"
    expired_token: str = "expired-token"
    default_scopes: list[str] = ["read", "write"]

    rate_limit_max_requests: int = 100
    rate_limit_window_seconds: float = 60.0
    rate_limit_stale_windows: int = 5
    burst_rate_limit_max_requests: int = 5

    model_config = SettingsConfigDict(env_prefix="EINVOICE_", extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
