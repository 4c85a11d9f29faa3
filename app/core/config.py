"""Application configuration from environment variables."""

from functools import lru_cache
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment (and .env file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "InBody Challenge API"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # API
    api_v1_prefix: str = "/api/v1"

    # Database (PostgreSQL)
    database_host: str = "localhost"
    database_port: int = 5432
    database_user: str = "postgres"
    database_password: str = ""  # Set in .env - never commit
    database_name: str = "inbody"
    database_ssl_mode: str = "disable"
    # Full async URL, e.g. sqlite+aiosqlite:///./data/inbody.db for local runs
    database_url_override: str = ""

    # Pool (production tuning)
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # Competition window length, set on a user's first confirmed report
    competition_days: int = 60

    # CORS: comma-separated list of allowed origins in production
    cors_origins: str = ""

    def _build_db_url(self, scheme: str = "postgresql", ssl_query: str = "sslmode=require") -> str:
        user = quote_plus(self.database_user)
        password = quote_plus(self.database_password)
        return (
            f"{scheme}://{user}:{password}@{self.database_host}:{self.database_port}"
            f"/{self.database_name}?{ssl_query}"
        )

    @property
    def database_url(self) -> str:
        """Synchronous URL for Alembic and tooling."""
        if self.database_url_override:
            return self.database_url_override.replace("+aiosqlite", "").replace("+asyncpg", "")
        return self._build_db_url(scheme="postgresql", ssl_query=f"sslmode={self.database_ssl_mode}")

    @property
    def async_database_url(self) -> str:
        """Async URL for FastAPI (asyncpg driver)."""
        if self.database_url_override:
            return self.database_url_override
        ssl = "require" if self.database_ssl_mode == "require" else "disable"
        return self._build_db_url(scheme="postgresql+asyncpg", ssl_query=f"ssl={ssl}")

    @property
    def is_sqlite(self) -> bool:
        return self.async_database_url.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
