from typing import Any
from urllib.parse import quote_plus

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration loaded from environment variables and .env.
    """

    # API Configuration
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Order Lifecycle API"
    PROJECT_DESCRIPTION: str = "Status transitions, stock synchronization and audit for sell and buy orders"
    VERSION: str = "0.1.0"

    # Environment
    ENVIRONMENT: str = Field("development", description="Deployment environment name")
    DEBUG: bool = Field(False, description="Enable debug mode")
    LOG_LEVEL: str = Field("INFO", description="Root log level")
    LOG_FORMAT: str = Field("colored", description="colored, json or plain")

    # PostgreSQL Database Settings
    DB_HOST: str = Field("localhost", description="PostgreSQL host")
    DB_PORT: int = Field(5432, description="PostgreSQL port")
    DB_NAME: str = Field("orders", description="Database name")
    DB_USER: str = Field("postgres", description="Database user")
    DB_PASSWORD: str | None = Field(None, description="Database password")
    DB_ECHO: bool = Field(False, description="Log SQL queries (debug only)")
    DATABASE_URL: str | None = Field(
        None, description="Full SQLAlchemy async URL; overrides the DB_* parts when set"
    )

    # Database connection pool settings
    DB_POOL_SIZE: int = Field(20, description="Connection pool size")
    DB_MAX_OVERFLOW: int = Field(30, description="Maximum pool overflow")
    DB_POOL_RECYCLE: int = Field(3600, description="Recycle connections after N seconds")
    DB_POOL_TIMEOUT: int = Field(30, description="Seconds to wait for a pooled connection")

    # Redis Settings
    REDIS_HOST: str = Field("localhost", description="Redis host")
    REDIS_PORT: int = Field(6379, description="Redis port")
    REDIS_DB: int = Field(0, description="Redis database")
    REDIS_PASSWORD: str | None = Field(None, description="Redis password")
    VIEW_CACHE_PREFIX: str = Field("views", description="Key prefix for cached read views")

    # Order lifecycle
    ORDER_TRANSITION_MAX_ATTEMPTS: int = Field(
        3, description="Attempts per status transition, first try included"
    )
    ORDER_TRANSITION_RETRY_DELAY: float = Field(
        1.0, description="Fixed delay in seconds between transition attempts"
    )
    STOCK_UPDATE_MAX_ATTEMPTS: int = Field(
        3, description="Conditional stock write attempts before reporting a conflict"
    )

    # Sentry
    SENTRY_DSN: str | None = Field(None, description="Sentry DSN; error reporting is off when unset")

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def __init__(self, **data: Any):
        super().__init__(**data)

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid LOG_LEVEL: {v}")
        return level

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v):
        if v not in {"colored", "json", "plain"}:
            raise ValueError("LOG_FORMAT must be one of: colored, json, plain")
        return v

    @field_validator("DB_POOL_SIZE")
    @classmethod
    def validate_pool_size(cls, v):
        if v < 1:
            raise ValueError("DB_POOL_SIZE must be at least 1")
        if v > 100:
            raise ValueError("DB_POOL_SIZE should not exceed 100")
        return v

    @field_validator("DB_MAX_OVERFLOW")
    @classmethod
    def validate_max_overflow(cls, v):
        if v < 0:
            raise ValueError("DB_MAX_OVERFLOW must be 0 or greater")
        if v > 200:
            raise ValueError("DB_MAX_OVERFLOW should not exceed 200")
        return v

    @field_validator("ORDER_TRANSITION_MAX_ATTEMPTS", "STOCK_UPDATE_MAX_ATTEMPTS")
    @classmethod
    def validate_attempts(cls, v):
        if v < 1:
            raise ValueError("Attempt counts must be at least 1")
        return v

    @field_validator("ORDER_TRANSITION_RETRY_DELAY")
    @classmethod
    def validate_retry_delay(cls, v):
        if v < 0:
            raise ValueError("ORDER_TRANSITION_RETRY_DELAY cannot be negative")
        return v

    @computed_field
    @property
    def database_url(self) -> str:
        """Async SQLAlchemy URL (asyncpg driver unless DATABASE_URL says otherwise)"""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        user = quote_plus(self.DB_USER)
        if self.DB_PASSWORD:
            password = quote_plus(self.DB_PASSWORD)
            return f"postgresql+asyncpg://{user}:{password}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        return f"postgresql+asyncpg://{user}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    @computed_field
    @property
    def redis_url(self) -> str:
        """Redis connection URL"""
        if self.REDIS_PASSWORD:
            return f"redis://:{self.REDIS_PASSWORD}@{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"

    @computed_field
    @property
    def is_development(self) -> bool:
        """True for local and development environments"""
        return self.DEBUG or self.ENVIRONMENT.lower() in ["development", "dev", "local"]


# Singleton para configuración
_settings_instance = None


def get_settings() -> Settings:
    """
    Return the cached settings instance.
    Environment variables are read once per process.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def reset_settings() -> None:
    """Drop the cached instance so the next call re-reads the environment."""
    global _settings_instance
    _settings_instance = None
