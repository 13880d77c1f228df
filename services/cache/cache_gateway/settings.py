"""Application settings via Pydantic Settings."""

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Gateway configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "Cache Gateway"
    app_version: str = "0.1.0"
    debug: bool = False

    # Server (listener binds to all interfaces)
    host: str = "0.0.0.0"
    port: int = 8081

    # Logging
    log_level: str = Field(
        default="info",
        validation_alias=AliasChoices("LOG_LEVEL", "RUST_LOG"),
        description="Level name (e.g. 'debug') or a 'target=level,...' filter expression",
    )

    # Redis
    redis_url: str = "redis://redis:6379"
    redis_socket_timeout: float | None = Field(
        default=None,
        validation_alias=AliasChoices("REDIS_SOCKET_TIMEOUT"),
        gt=0,
    )
    redis_socket_connect_timeout: float | None = Field(
        default=None,
        validation_alias=AliasChoices("REDIS_SOCKET_CONNECT_TIMEOUT"),
        gt=0,
    )
    redis_max_connections: int | None = Field(
        default=None,
        validation_alias=AliasChoices("REDIS_MAX_CONNECTIONS"),
        ge=1,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
