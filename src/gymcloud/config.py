"""Application settings via pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables with GYM_ prefix."""

    model_config = SettingsConfigDict(
        env_prefix="GYM_",
        env_file=".env",
        case_sensitive=False,
    )

    # --- Core ---
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    redis_url: str = "redis://localhost:6379/0"
    redis_max_connections: int = 20
    cors_origins: list[str] = ["http://localhost:3000"]
    rate_limit_requests: int = 100
    rate_limit_window_seconds: int = 60
    log_level: str = "INFO"
    log_format: str = "json"

    # --- Gamification ---
    level_status_ttl_days: int = 0  # 0 = acknowledgements never expire


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
