"""Tests for settings."""

import pytest

from todoapi.config import Settings

POSTGRES_VARS = [
    "POSTGRES_USER",
    "POSTGRES_PASSWORD",
    "POSTGRES_HOST",
    "POSTGRES_PORT",
    "POSTGRES_DB",
    "DATABASE_URL",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in POSTGRES_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:
    """Tests for the Settings model."""

    def test_defaults(self, clean_env):
        """Test the service listens on 8080 with the documented CORS policy."""
        settings = Settings(_env_file=None)

        assert settings.api_port == 8080
        assert settings.cors_allow_origins == ["*"]
        assert settings.cors_allow_methods == ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
        assert settings.cors_allow_headers == [
            "Accept",
            "Authorization",
            "Content-Type",
            "X-CSRF-Token",
        ]
        assert settings.cors_expose_headers == ["Link"]
        assert settings.cors_allow_credentials is True
        assert settings.cors_max_age == 300

    def test_postgres_variables(self, clean_env):
        """Test the connection string is assembled from POSTGRES_* variables."""
        clean_env.setenv("POSTGRES_USER", "app")
        clean_env.setenv("POSTGRES_PASSWORD", "secret")
        clean_env.setenv("POSTGRES_HOST", "db")
        clean_env.setenv("POSTGRES_PORT", "6543")
        clean_env.setenv("POSTGRES_DB", "tasks")

        settings = Settings(_env_file=None)

        assert settings.postgres_dsn == "postgres://app:secret@db:6543/tasks"
        assert settings.sqlalchemy_url == "postgresql+asyncpg://app:secret@db:6543/tasks"

    def test_masked_url_hides_password(self, clean_env):
        """Test the loggable URL does not leak the password."""
        clean_env.setenv("POSTGRES_PASSWORD", "secret")

        settings = Settings(_env_file=None)

        assert "secret" not in settings.masked_url
        assert "***" in settings.masked_url

    def test_database_url_override(self, clean_env):
        """Test DATABASE_URL takes precedence over the parts."""
        clean_env.setenv("POSTGRES_HOST", "ignored")
        clean_env.setenv("DATABASE_URL", "sqlite+aiosqlite:///./todos.db")

        settings = Settings(_env_file=None)

        assert settings.sqlalchemy_url == "sqlite+aiosqlite:///./todos.db"

    def test_env_file(self, clean_env, tmp_path):
        """Test variables may come from a .env file."""
        env_file = tmp_path / ".env"
        env_file.write_text("POSTGRES_DB=fromfile\nPOSTGRES_PORT=5433\n")

        settings = Settings(_env_file=env_file)

        assert settings.postgres_db == "fromfile"
        assert settings.postgres_port == 5433
