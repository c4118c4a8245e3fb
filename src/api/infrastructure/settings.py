"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL, make_url


class DatabaseSettings(BaseSettings):
    """Relational store settings.

    Environment variables:
        FAVORITES_DB_URL: Full SQLAlchemy URL, overrides the individual fields
        FAVORITES_DB_HOST: Database host (default: localhost)
        FAVORITES_DB_PORT: Database port (default: 5432)
        FAVORITES_DB_DATABASE: Database name (default: favorites)
        FAVORITES_DB_USERNAME: Database user (default: favorites)
        FAVORITES_DB_PASSWORD: Database password (required in production)
        FAVORITES_DB_POOL_SIZE: Connections kept in the pool (default: 5)
        FAVORITES_DB_ECHO: Log emitted SQL (default: false)
        FAVORITES_DB_SAVE_IMMEDIATELY: Commit every unit of work as soon as it
            completes instead of waiting for the enclosing batch (default: true)
    """

    model_config = SettingsConfigDict(
        env_prefix="FAVORITES_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    url: str | None = Field(
        default=None,
        description="Full SQLAlchemy URL; when set, the other connection fields are ignored",
    )
    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="favorites", description="Database name")
    username: str = Field(default="favorites", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_size: int = Field(
        default=5,
        description="Connections kept in the pool",
        ge=1,
        le=100,
    )
    echo: bool = Field(default=False, description="Log emitted SQL statements")
    save_immediately: bool = Field(
        default=True,
        description="Commit each unit of work immediately instead of deferring to a batch",
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, value: str | None) -> str | None:
        """Treat an empty URL as unset."""
        if value is not None and not value.strip():
            return None
        return value

    @property
    def sqlalchemy_url(self) -> str:
        """Build the URL handed to SQLAlchemy.

        Credentials are percent-encoded by SQLAlchemy's URL builder.
        """
        if self.url is not None:
            return self.url
        url = URL.create(
            drivername="postgresql+psycopg2",
            username=self.username,
            password=self.password.get_secret_value(),
            host=self.host,
            port=self.port,
            database=self.database,
        )
        return url.render_as_string(hide_password=False)

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        if self.url is not None:
            return make_url(self.url).render_as_string(hide_password=True)
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class Settings(BaseSettings):
    """Main application settings.

    Environment variables:
        FAVORITES_LOG_LEVEL: Minimum log level (default: INFO)
        FAVORITES_LOG_FORMAT: auto, console or json (default: auto)
    """

    model_config = SettingsConfigDict(
        env_prefix="FAVORITES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(
        default="INFO",
        description="Minimum level emitted by structlog (DEBUG, INFO, WARNING, ERROR)",
    )
    log_format: Literal["auto", "console", "json"] = Field(
        default="auto",
        description="Log renderer; auto picks console on a TTY and JSON otherwise",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalise and validate the log level name."""
        normalized = value.upper()
        if normalized not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return normalized


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()
