"""Unit tests for Settings validators and env-var loading in config.py."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from predmarket.config import Settings


class TestParseAllowedOrigins:
    """Tests for parse_allowed_origins validator."""

    def test_none_returns_empty_list(self) -> None:
        assert Settings.parse_allowed_origins(None) == []

    def test_csv_string(self) -> None:
        result = Settings.parse_allowed_origins("https://a.io, https://b.io")
        assert result == ["https://a.io", "https://b.io"]

    def test_json_array_string(self) -> None:
        result = Settings.parse_allowed_origins('["https://a.io", "https://b.io"]')
        assert result == ["https://a.io", "https://b.io"]

    def test_strips_trailing_slash(self) -> None:
        assert Settings.parse_allowed_origins("https://a.io/") == ["https://a.io"]

    def test_skips_empty_entries(self) -> None:
        assert Settings.parse_allowed_origins("https://a.io,, ,") == ["https://a.io"]


class TestEnvLoading:
    """Settings picked up from the process environment."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.delenv("ALLOWED_ORIGINS", raising=False)
        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.env == "development"
        assert settings.database_url is None
        assert settings.use_database is False
        assert settings.allowed_origins == []
        assert settings.default_page_size == 9
        assert settings.max_page_size == 100
        assert settings.market_create_rate_limit == "30/minute"

    def test_allowed_origins_csv_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ALLOWED_ORIGINS", "https://app.example.com,https://example.com")
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.allowed_origins == ["https://app.example.com", "https://example.com"]

    def test_database_url_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@localhost/markets")
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.use_database is True

    def test_blank_database_url_means_memory(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DATABASE_URL", "  ")
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.database_url is None

    def test_env_alias(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PREDMARKET_ENV", "production")
        monkeypatch.setenv("PREDMARKET_LOG_LEVEL", "WARNING")
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.is_production
        assert settings.log_level == "WARNING"


class TestDatabaseSsl:
    def test_ssl_follows_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PREDMARKET_ENV", "production")
        assert Settings(_env_file=None).database_ssl is True  # type: ignore[call-arg]

        monkeypatch.setenv("PREDMARKET_ENV", "development")
        assert Settings(_env_file=None).database_ssl is False  # type: ignore[call-arg]

    def test_explicit_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PREDMARKET_ENV", "production")
        monkeypatch.setenv("DB_SSL", "false")
        assert Settings(_env_file=None).database_ssl is False  # type: ignore[call-arg]


class TestPageSizeLimits:
    def test_max_below_default_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEFAULT_PAGE_SIZE", "20")
        monkeypatch.setenv("MAX_PAGE_SIZE", "10")
        with pytest.raises(ValidationError, match="max_page_size"):
            Settings(_env_file=None)  # type: ignore[call-arg]

    def test_max_above_hard_cap_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAX_PAGE_SIZE", "500")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)  # type: ignore[call-arg]
