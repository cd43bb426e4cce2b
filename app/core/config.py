"""Configuration management for the data item query service.

Configuration is loaded from environment variables.
"""

from __future__ import annotations

from enum import StrEnum
from functools import lru_cache
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

POSTGRESQL_PREFIX = "postgresql://"
ASYNCPG_DRIVER = "+asyncpg"
PSYCPG_DRIVER = "+psycopg"
ENGINE_OPTION_QUERY_KEYS = frozenset({"pool_size", "max_overflow", "pool_timeout", "pool_recycle"})


def _strip_engine_query_params(url: str) -> str:
    """Strip SQLAlchemy engine options accidentally passed in DATABASE_URL query args."""
    if "?" not in url:
        return url

    parsed = urlsplit(url)
    if not parsed.query:
        return url

    filtered_query = [
        (key, value)
        for key, value in parse_qsl(parsed.query, keep_blank_values=True)
        if key.lower() not in ENGINE_OPTION_QUERY_KEYS
    ]
    return urlunsplit(
        (
            parsed.scheme,
            parsed.netloc,
            parsed.path,
            urlencode(filtered_query, doseq=True),
            parsed.fragment,
        )
    )


def normalize_database_url(url: str) -> str:
    """Normalize a DB URL by stripping SQLAlchemy engine-only query params."""
    return _strip_engine_query_params(url.strip())


def to_asyncpg_url(url: str) -> str:
    """Return a SQLAlchemy URL compatible with the asyncpg dialect."""
    normalized = normalize_database_url(url)
    if normalized.startswith(f"postgresql{PSYCPG_DRIVER}://"):
        return normalized.replace(PSYCPG_DRIVER, ASYNCPG_DRIVER, 1)
    if normalized.startswith(POSTGRESQL_PREFIX) and ASYNCPG_DRIVER not in normalized:
        new_prefix = POSTGRESQL_PREFIX.removesuffix("://") + ASYNCPG_DRIVER + "://"
        return normalized.replace(POSTGRESQL_PREFIX, new_prefix, 1)
    return normalized


class AppEnvironment(StrEnum):
    LOCAL = "local"
    TEST = "test"
    PROD = "prod"


class LogLevel(StrEnum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class AccessControlMode(StrEnum):
    PUBLIC_READ = "public_read"
    UNRESTRICTED = "unrestricted"


class AppConfig(BaseSettings):
    name: str = Field(default="data-item-query-service")
    env: AppEnvironment = Field(default=AppEnvironment.LOCAL)
    version: str = Field(default="0.1.0")
    debug: bool = Field(default=False)
    log_level: LogLevel = Field(default=LogLevel.INFO)

    model_config = SettingsConfigDict(env_prefix="APP_")

    @field_validator("env", mode="before")
    @classmethod
    def validate_env(cls, v: str | AppEnvironment) -> AppEnvironment:
        if isinstance(v, AppEnvironment):
            return v
        return AppEnvironment(v)

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | LogLevel) -> LogLevel:
        if isinstance(v, LogLevel):
            return v
        return LogLevel(v)


class DatabaseConfig(BaseSettings):
    url_app: str = Field(default="", alias="database_url_app")
    url_read_only: str = Field(default="", alias="database_url_read_only")

    host: str = Field(default="localhost")
    port: int = Field(default=5432)
    name: str = Field(default="dhis2")
    user: str = Field(default="dhis")
    password: SecretStr = Field(default=SecretStr(""))
    pool_size: int = Field(default=10)
    max_overflow: int = Field(default=10)
    pool_timeout: int = Field(default=30)
    pool_recycle: int = Field(default=1800)
    echo: bool = Field(default=False)

    model_config = SettingsConfigDict(
        env_prefix="DATABASE_",
        populate_by_name=True,
    )

    @property
    def async_url(self) -> str:
        if self.url_app:
            return to_asyncpg_url(self.url_app)
        password = self.password.get_secret_value()
        return f"postgresql{ASYNCPG_DRIVER}://{self.user}:{password}@{self.host}:{self.port}/{self.name}"

    @property
    def read_only_async_url(self) -> str:
        """URL for the read-only replica, falling back to the primary."""
        if self.url_read_only:
            return to_asyncpg_url(self.url_read_only)
        return self.async_url


class ObservabilityConfig(BaseSettings):
    service_name: str = Field(default="data-item-query-service")
    log_record_format: str = Field(default="json")

    model_config = SettingsConfigDict(env_prefix="OTEL_")


class QueryConfig(BaseSettings):
    """Data item search defaults."""

    default_page_size: int = Field(default=50, ge=1)
    max_page_size: int = Field(default=1000, ge=1)
    access_control: AccessControlMode = Field(default=AccessControlMode.PUBLIC_READ)

    model_config = SettingsConfigDict(env_prefix="QUERY_")

    @model_validator(mode="after")
    def validate_page_sizes(self) -> QueryConfig:
        if self.default_page_size > self.max_page_size:
            raise ValueError("QUERY_DEFAULT_PAGE_SIZE must not exceed QUERY_MAX_PAGE_SIZE")
        return self


class Settings(BaseSettings):
    app: AppConfig = Field(default_factory=AppConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)
    query: QueryConfig = Field(default_factory=QueryConfig)

    @model_validator(mode="after")
    def validate_access_control(self) -> Settings:
        if (
            self.app.env == AppEnvironment.PROD
            and self.query.access_control == AccessControlMode.UNRESTRICTED
        ):
            raise ValueError("Unrestricted access control is not allowed in production")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()


def reload_settings() -> Settings:
    get_settings.cache_clear()
    return get_settings()
