"""Configuration management for the todo service."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL, make_url


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "Todo API"
    debug: bool = False
    log_level: str = "INFO"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Database connection parts (POSTGRES_USER, POSTGRES_PASSWORD, ...)
    postgres_user: str = "postgres"
    postgres_password: str = "postgres"
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "todos"

    # Full SQLAlchemy URL; overrides the POSTGRES_* parts when set
    database_url: str | None = None

    # Create missing tables on startup (migrations handle production schemas)
    create_tables: bool = True

    # CORS (Cross-Origin Resource Sharing)
    cors_allow_origins: list[str] = ["*"]
    cors_allow_methods: list[str] = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    cors_allow_headers: list[str] = ["Accept", "Authorization", "Content-Type", "X-CSRF-Token"]
    cors_expose_headers: list[str] = ["Link"]
    cors_allow_credentials: bool = True
    cors_max_age: int = 300  # Preflight cache duration in seconds

    @property
    def postgres_dsn(self) -> str:
        """Plain libpq-style DSN assembled from the POSTGRES_* variables."""
        return (
            f"postgres://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def sqlalchemy_url(self) -> str:
        """URL handed to the async engine."""
        if self.database_url:
            return self.database_url
        return URL.create(
            "postgresql+asyncpg",
            username=self.postgres_user,
            password=self.postgres_password,
            host=self.postgres_host,
            port=self.postgres_port,
            database=self.postgres_db,
        ).render_as_string(hide_password=False)

    @property
    def masked_url(self) -> str:
        """Database URL safe for logging."""
        return make_url(self.sqlalchemy_url).render_as_string(hide_password=True)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
