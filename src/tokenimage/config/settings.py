"""Application settings using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """TokenImage configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
        populate_by_name=True,
    )

    # Application
    app_name: str = Field(default="TokenImage", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Log level"
    )

    # Server
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8080, ge=1, le=65535, description="Server port")

    # Cache - Redis (REDISHOST/REDISPORT kept for existing deployments)
    cache_backend: Literal["redis", "memory"] = Field(
        default="redis", description="Cache backend: redis or in-process memory"
    )
    redis_host: str = Field(
        default="localhost",
        validation_alias=AliasChoices("redis_host", "REDIS_HOST", "REDISHOST"),
        description="Redis host",
    )
    redis_port: int = Field(
        default=6379,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("redis_port", "REDIS_PORT", "REDISPORT"),
        description="Redis port",
    )
    redis_db: int = Field(default=0, ge=0, description="Redis logical database")

    # External APIs
    coingecko_base_url: str = Field(
        default="https://api.coingecko.com/api/v3",
        description="CoinGecko REST API base URL",
    )
    coingecko_api_key: SecretStr = Field(
        default=SecretStr(""), description="CoinGecko demo API key"
    )
    upstream_timeout_seconds: float = Field(
        default=30.0, gt=0, description="Timeout for upstream HTTP calls"
    )

    @field_validator("coingecko_base_url")
    @classmethod
    def validate_coingecko_base_url(cls, v: str) -> str:
        """Validate CoinGecko base URL format."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("CoinGecko base URL must start with http:// or https://")
        return v.rstrip("/")

    @property
    def redis_url(self) -> str:
        """Redis connection URL built from host, port and db."""
        return f"redis://{self.redis_host}:{self.redis_port}/{self.redis_db}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
